"""Disarm through a live security-system characteristic."""

from __future__ import annotations

import inspect
import logging
from typing import Any

from protect_automate.core.errors import DisarmCommandError
from protect_automate.core.model import CharacteristicTarget, DisarmResult

# SecuritySystemTargetState value for "disarm".
DISARM = 3

LOGGER = logging.getLogger(__name__)


async def _call(callback: Any, value: Any) -> None:
    result = callback(value)
    if inspect.isawaitable(result):
        await result


class CharacteristicExecutor:
    """Write DISARM the way a controller write reaches the owning plugin.

    The characteristic setter runs first, then the accessory-level batched
    callback and the service-level batched callback, in the order
    ``AccessoryDriver.set_characteristics`` uses. A plugin listening on any
    of the three receives the command.
    """

    async def execute(self, target: CharacteristicTarget) -> DisarmResult:
        LOGGER.debug("Setting %s target state to DISARM (%d)", target.accessory_name, DISARM)
        characteristic = target.characteristic
        try:
            await _call(characteristic.client_update_value, DISARM)

            accessory_setter = getattr(target.accessory, "setter_callback", None)
            if accessory_setter is not None:
                await _call(accessory_setter, {target.service: {characteristic: DISARM}})

            service_setter = getattr(target.service, "setter_callback", None)
            if service_setter is not None:
                await _call(service_setter, {characteristic.display_name: DISARM})
        except Exception as exc:
            raise DisarmCommandError(
                f"Setting DISARM on '{target.accessory_name}' failed: {exc}"
            ) from exc
        return DisarmResult(target=target.accessory_name)
