"""Disarm executor interfaces."""

from __future__ import annotations

from typing import Any, Protocol

from protect_automate.core.model import DisarmResult


class DisarmExecutor(Protocol):
    async def execute(self, target: Any) -> DisarmResult:
        """Send the disarm command to a resolved target."""
