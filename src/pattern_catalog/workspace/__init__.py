"""Workspace bootstrap commands (``patterns init`` and ``patterns config``)."""
