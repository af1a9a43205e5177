"""Reconcile cached accessories with the canonical trigger accessory."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from protect_automate.core.identity import generate_uuid
from protect_automate.core.model import DisarmOutcome
from protect_automate.core.switch import RESET_DELAY_S, TriggerSwitch
from protect_automate.host.base import AccessoryHost

BUTTON_LABEL = "Disarm Somfy Protect"
LOGGER = logging.getLogger(__name__)


class DiscoveryCoordinator:
    def __init__(
        self,
        host: AccessoryHost,
        disarm: Callable[[], Awaitable[DisarmOutcome]],
        *,
        label: str = BUTTON_LABEL,
        reset_delay_s: float = RESET_DELAY_S,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.host = host
        self.label = label
        self.uuid = generate_uuid(label)
        self.accessories: list[Any] = []
        self.switch: TriggerSwitch | None = None
        self._disarm = disarm
        self._reset_delay_s = reset_delay_s
        self._loop = loop

    def configure_accessory(self, accessory: Any) -> None:
        LOGGER.info("Loading accessory from cache: %s", accessory.display_name)
        self.accessories.append(accessory)

    def discover(self) -> TriggerSwitch:
        existing: Any | None = None
        stale: list[Any] = []
        for accessory in self.accessories:
            if existing is None and accessory.uuid == self.uuid:
                existing = accessory
            else:
                stale.append(accessory)

        if stale:
            LOGGER.info(
                "Removing %d stale accessories from cache: %s",
                len(stale),
                ", ".join(acc.display_name for acc in stale),
            )
            self.host.unregister_accessories(stale)
            self.accessories = [acc for acc in self.accessories if acc is existing]

        if existing is not None:
            if self.switch is not None and self.switch.accessory is existing:
                return self.switch
            LOGGER.info("Restoring existing accessory from cache: %s", existing.display_name)
            self.switch = self._attach(existing)
            return self.switch

        LOGGER.info("Adding new accessory: %s", self.label)
        accessory = self.host.create_accessory(self.label, self.uuid)
        self.switch = self._attach(accessory)
        self.host.register_accessories([accessory])
        self.accessories.append(accessory)
        return self.switch

    def _attach(self, accessory: Any) -> TriggerSwitch:
        return TriggerSwitch(accessory, self._disarm, reset_delay_s=self._reset_delay_s, loop=self._loop)
