"""Stateless trigger switch exposed to HomeKit."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from protect_automate.core.model import DisarmOutcome

RESET_DELAY_S = 1.0
MANUFACTURER = "Jay Tyler"
MODEL = "Somfy Disarm Switch"
SERIAL_NUMBER = "SDS-001"

LOGGER = logging.getLogger(__name__)


class TriggerSwitch:
    """Momentary switch on top of a HomeKit ``On`` characteristic.

    Turning the switch on starts the disarm pipeline without waiting for it
    and schedules a reset to off after ``reset_delay_s``, whatever the
    pipeline outcome. Each activation owns its reset; a second activation
    does not cancel the first one's pending reset.
    """

    def __init__(
        self,
        accessory: Any,
        disarm: Callable[[], Awaitable[DisarmOutcome]],
        *,
        reset_delay_s: float = RESET_DELAY_S,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.accessory = accessory
        self._disarm = disarm
        self.reset_delay_s = reset_delay_s
        self._loop = loop
        self.state = False
        self.last_outcome: DisarmOutcome | None = None
        self._reset_tasks: set[asyncio.Task[None]] = set()
        self._disarm_tasks: set[asyncio.Task[None]] = set()

        accessory.set_info_service(manufacturer=MANUFACTURER, model=MODEL, serial_number=SERIAL_NUMBER)

        self.service = accessory.get_service("Switch") or accessory.add_preload_service("Switch", chars=["Name"])
        try:
            self.service.configure_char("Name", value=accessory.display_name)
        except ValueError:
            LOGGER.debug("Switch service of %s has no Name characteristic", accessory.display_name)

        self.char_on = self.service.configure_char(
            "On",
            value=False,
            setter_callback=self.set_on,
            getter_callback=self.get_on,
        )

    @property
    def pending_resets(self) -> int:
        return len(self._reset_tasks)

    def get_on(self) -> bool:
        return self.state

    def set_on(self, value: Any) -> None:
        is_on = bool(value)
        LOGGER.info("Switch triggered: %s", "ON" if is_on else "OFF")
        self.state = is_on
        if not is_on:
            return

        loop = self._loop or asyncio.get_running_loop()
        LOGGER.info("Activating disarm sequence...")
        self._track(loop.create_task(self._run_disarm(), name="protect_automate_disarm"), self._disarm_tasks)
        self._track(loop.create_task(self._reset_after_delay(), name="protect_automate_reset"), self._reset_tasks)

    async def _run_disarm(self) -> None:
        try:
            self.last_outcome = await self._disarm()
        except Exception:
            LOGGER.exception("Disarm pipeline failed")
            return
        LOGGER.info("Disarm attempt finished: %s", self.last_outcome.status)

    async def _reset_after_delay(self) -> None:
        await asyncio.sleep(self.reset_delay_s)
        self.state = False
        self.char_on.set_value(False)
        LOGGER.info("Switch reset to OFF (stateless)")

    def close(self) -> None:
        """Cancel pending resets and in-flight disarm attempts."""
        for task in (*self._reset_tasks, *self._disarm_tasks):
            if not task.done():
                task.cancel()

    @staticmethod
    def _track(task: asyncio.Task[None], tasks: set[asyncio.Task[None]]) -> None:
        tasks.add(task)
        task.add_done_callback(tasks.discard)
