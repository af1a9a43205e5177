"""Alarm resolution strategies."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from protect_automate.core.alarm_match import (
    SECURITY_SYSTEM,
    TARGET_STATE,
    display_names,
    exact_name_match,
    first_alarm_candidate,
    scan_target_state,
    target_state_characteristic,
)
from protect_automate.core.errors import AlarmNotFoundError, ConfigurationError, DiscoveryError
from protect_automate.core.model import (
    STRATEGY_BRIDGE,
    STRATEGY_HEURISTIC,
    STRATEGY_HTTP,
    STRATEGY_NAME,
    STRATEGIES,
    CharacteristicTarget,
    HttpTarget,
    ResolutionConfig,
    ResolvedTarget,
)
from protect_automate.host.base import AccessoryCatalog

LOGGER = logging.getLogger(__name__)


class AlarmResolver:
    """Locate the alarm target for a resolution strategy.

    Nothing is cached: every call re-reads the host catalog because the alarm
    accessory may be added, removed or restarted by its own plugin at any time.
    """

    def __init__(self, catalog: AccessoryCatalog | None = None) -> None:
        self.catalog = catalog

    def resolve(self, config: ResolutionConfig) -> ResolvedTarget:
        if config.strategy == STRATEGY_NAME:
            return self._resolve_by_name(config)
        if config.strategy == STRATEGY_HEURISTIC:
            return self._resolve_by_heuristic()
        if config.strategy == STRATEGY_BRIDGE:
            return self._resolve_by_bridge(config)
        if config.strategy == STRATEGY_HTTP:
            return HttpTarget(
                host=config.http_host,
                port=config.http_port,
                token=config.http_token,
                timeout_s=config.timeout_s,
            )
        supported = ", ".join(STRATEGIES)
        raise ConfigurationError(f"Unsupported resolution strategy '{config.strategy}'. Supported: {supported}")

    def _require_catalog(self) -> AccessoryCatalog:
        if self.catalog is None:
            raise DiscoveryError("No accessory host is available to search for the alarm")
        return self.catalog

    def _registry(self) -> Sequence[Any]:
        accessories = list(self._require_catalog().platform_accessories())
        LOGGER.info("Searching through %d accessories in the host registry", len(accessories))
        return accessories

    def _resolve_by_name(self, config: ResolutionConfig) -> CharacteristicTarget:
        alarm_name = _require_alarm_name(config)
        accessories = self._registry()
        accessory = _find_exact(accessories, alarm_name)

        service = accessory.get_service(SECURITY_SYSTEM)
        if service is None:
            raise DiscoveryError(
                f"Accessory '{accessory.display_name}' does not have a {SECURITY_SYSTEM} service",
                candidates=display_names(accessories),
            )
        characteristic = target_state_characteristic(accessory)
        if characteristic is None:
            raise DiscoveryError(
                f"{SECURITY_SYSTEM} service of '{accessory.display_name}' has no {TARGET_STATE} characteristic",
                candidates=display_names(accessories),
            )
        return _target(accessory, service, characteristic)

    def _resolve_by_heuristic(self) -> CharacteristicTarget:
        accessories = self._registry()
        found = first_alarm_candidate(accessories)
        if found is None:
            names = display_names(accessories)
            raise AlarmNotFoundError(
                f"No Somfy Protect alarm with a {SECURITY_SYSTEM} service found. Considered: {_joined(names)}",
                candidates=names,
            )
        accessory, characteristic = found
        LOGGER.info("Heuristic scan picked '%s'", accessory.display_name)
        return _target(accessory, accessory.get_service(SECURITY_SYSTEM), characteristic)

    def _resolve_by_bridge(self, config: ResolutionConfig) -> CharacteristicTarget:
        alarm_name = _require_alarm_name(config)
        accessories = list(self._require_catalog().bridge_accessories())
        LOGGER.info("Searching through %d accessories on the bridge", len(accessories))
        accessory = _find_exact(accessories, alarm_name)

        service, characteristic = scan_target_state(accessory)
        if service is None:
            raise DiscoveryError(
                f"Accessory '{accessory.display_name}' does not have a {SECURITY_SYSTEM} service",
                candidates=display_names(accessories),
            )
        if characteristic is None:
            raise DiscoveryError(
                f"{SECURITY_SYSTEM} service of '{accessory.display_name}' has no {TARGET_STATE} characteristic",
                candidates=display_names(accessories),
            )
        return _target(accessory, service, characteristic)


def _target(accessory: Any, service: Any, characteristic: Any) -> CharacteristicTarget:
    return CharacteristicTarget(
        accessory_name=accessory.display_name,
        characteristic=characteristic,
        service=service,
        accessory=accessory,
    )


def _require_alarm_name(config: ResolutionConfig) -> str:
    if not config.alarm_name:
        raise ConfigurationError(
            "missing alarmName: set 'alarmName' in the plugin configuration to the exact alarm accessory name"
        )
    return config.alarm_name


def _find_exact(accessories: Sequence[Any], alarm_name: str) -> Any:
    names = display_names(accessories)
    if not accessories:
        raise AlarmNotFoundError(
            "No accessories found. The host does not expose other plugins' accessories to this platform.",
            candidates=names,
        )
    accessory = exact_name_match(accessories, alarm_name)
    if accessory is None:
        raise AlarmNotFoundError(
            f"Could not find alarm with name '{alarm_name}'. Available: {_joined(names)}",
            candidates=names,
        )
    return accessory


def _joined(names: Sequence[str]) -> str:
    return ", ".join(f'"{name}"' for name in names) or "<none>"
