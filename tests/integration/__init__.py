"""Integration tests.

These exercise several stacks at once through a real ParserService and
LocalSession. Run only the unit tests with ``pytest tests/unit/``.
"""
from __future__ import annotations
