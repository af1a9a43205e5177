"""Host interfaces consumed by the platform."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol


class AccessoryCatalog(Protocol):
    def platform_accessories(self) -> Sequence[Any]:
        """Return the accessories published through the host registry."""

    def bridge_accessories(self) -> Sequence[Any]:
        """Return every accessory on the host bridge.

        Hosts that do not grant bridge access raise ``DiscoveryError``.
        """


class AccessoryHost(AccessoryCatalog, Protocol):
    def create_accessory(self, display_name: str, uuid: str) -> Any:
        """Create an accessory object owned by this platform."""

    def register_accessories(self, accessories: Sequence[Any]) -> None:
        """Publish accessories created by this platform."""

    def unregister_accessories(self, accessories: Sequence[Any]) -> None:
        """Remove accessories previously published by this platform."""

    def on_ready(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once the host has finished launching."""
