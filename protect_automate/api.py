"""Stable public API for embedding protect-automate in an accessory host.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from protect_automate.core.config_loader import LoadedConfig, build_config, load_config
from protect_automate.core.discovery import BUTTON_LABEL, DiscoveryCoordinator
from protect_automate.core.errors import (
    AlarmNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    ConfigValidationError,
    DisarmCommandError,
    DisarmError,
    DiscoveryError,
    HttpStatusError,
    ProtectAutomateError,
    ProtocolError,
    TargetConnectionError,
)
from protect_automate.core.identity import generate_uuid
from protect_automate.core.model import (
    CharacteristicTarget,
    DisarmOutcome,
    DisarmResult,
    HttpTarget,
    PlatformConfig,
    ResolutionConfig,
)
from protect_automate.core.service import DisarmService
from protect_automate.core.switch import TriggerSwitch
from protect_automate.executors.base import DisarmExecutor
from protect_automate.host.base import AccessoryHost

__all__ = [
    "AlarmNotFoundError",
    "ConfigLoadError",
    "ConfigurationError",
    "ConfigValidationError",
    "DisarmCommandError",
    "DisarmError",
    "DiscoveryError",
    "HttpStatusError",
    "ProtectAutomateError",
    "ProtocolError",
    "TargetConnectionError",
    "CharacteristicTarget",
    "DisarmOutcome",
    "DisarmResult",
    "HttpTarget",
    "LoadedConfig",
    "PlatformConfig",
    "ResolutionConfig",
    "TriggerSwitch",
    "BUTTON_LABEL",
    "build_config",
    "generate_uuid",
    "load_config",
    "Platform",
]

LOGGER = logging.getLogger(__name__)


class Platform:
    """Dynamic platform wiring a host to the trigger switch.

    The host calls ``configure_accessory`` for every accessory it restores
    from its cache, then fires its ready callbacks; discovery runs at that
    point and leaves exactly one trigger accessory registered.
    """

    def __init__(
        self,
        host: AccessoryHost,
        config: PlatformConfig,
        *,
        http_executor: DisarmExecutor | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.host = host
        self.config = config
        self.service = DisarmService(host, config.resolution, http_executor=http_executor)
        self.coordinator = DiscoveryCoordinator(
            host,
            self.service.disarm,
            loop=loop or getattr(host, "loop", None),
        )
        LOGGER.debug("Finished initializing platform: %s", config.name)
        host.on_ready(self._did_finish_launching)

    @property
    def switch(self) -> TriggerSwitch | None:
        return self.coordinator.switch

    def configure_accessory(self, accessory: Any) -> None:
        self.coordinator.configure_accessory(accessory)

    def _did_finish_launching(self) -> None:
        LOGGER.debug("Executed ready callback")
        self.coordinator.discover()

    def close(self) -> None:
        if self.switch is not None:
            self.switch.close()
