"""HAP-python backed accessory host."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

from pyhap.accessory import Accessory, Bridge
from pyhap.accessory_driver import AccessoryDriver
from pyhap.const import CATEGORY_SWITCH

from protect_automate.core.errors import DiscoveryError

LOGGER = logging.getLogger(__name__)


class PlatformAccessory(Accessory):
    """Bridged accessory carrying the stable UUID it was created under."""

    category = CATEGORY_SWITCH

    def __init__(self, driver: AccessoryDriver, display_name: str, uuid: str, aid: int | None = None) -> None:
        super().__init__(driver, display_name, aid=aid)
        self.uuid = uuid


class HapHost:
    """Expose platform accessories on a HAP-python bridge.

    Accessories added to ``bridge`` by other code (for example an alarm
    integration running in the same process) are visible through
    ``bridge_accessories`` when bridge access is granted, and through
    ``platform_accessories`` once registered with ``register_accessories``.
    """

    def __init__(
        self,
        driver: AccessoryDriver,
        bridge_name: str = "Protect Automate",
        *,
        grant_bridge_access: bool = True,
    ) -> None:
        self.driver = driver
        self.bridge = Bridge(driver, bridge_name)
        self.grant_bridge_access = grant_bridge_access
        self._registered: list[Accessory] = []
        self._ready_callbacks: list[Callable[[], None]] = []
        self._started = False

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return getattr(self.driver, "loop", None)

    def platform_accessories(self) -> list[Accessory]:
        return list(self._registered)

    def bridge_accessories(self) -> list[Accessory]:
        if not self.grant_bridge_access:
            raise DiscoveryError("Host did not grant access to the bridge accessory list")
        return list(self.bridge.accessories.values())

    def create_accessory(self, display_name: str, uuid: str) -> PlatformAccessory:
        return PlatformAccessory(self.driver, display_name, uuid)

    def register_accessories(self, accessories: Sequence[Accessory]) -> None:
        for accessory in accessories:
            if accessory not in self.bridge.accessories.values():
                self.bridge.add_accessory(accessory)
            if accessory not in self._registered:
                self._registered.append(accessory)
            LOGGER.debug("Registered accessory %s (aid=%s)", accessory.display_name, accessory.aid)
        self._config_changed()

    def unregister_accessories(self, accessories: Sequence[Accessory]) -> None:
        for accessory in accessories:
            self.bridge.accessories.pop(accessory.aid, None)
            if accessory in self._registered:
                self._registered.remove(accessory)
            LOGGER.debug("Unregistered accessory %s", accessory.display_name)
        self._config_changed()

    def on_ready(self, callback: Callable[[], None]) -> None:
        self._ready_callbacks.append(callback)

    def announce_ready(self) -> None:
        for callback in self._ready_callbacks:
            callback()

    def start(self) -> None:
        """Fire ready callbacks, publish the bridge and block until stopped."""
        self.announce_ready()
        self.driver.add_accessory(self.bridge)
        self._started = True
        self.driver.start()

    def stop(self) -> None:
        if self._started:
            self.driver.stop()

    def _config_changed(self) -> None:
        if self._started:
            self.driver.config_changed()
