"""Accessory-to-alarm matching logic."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

SECURITY_SYSTEM = "SecuritySystem"
TARGET_STATE = "SecuritySystemTargetState"
ACCESSORY_INFORMATION = "AccessoryInformation"

NAME_TOKENS = ("somfy", "protect")
KNOWN_MANUFACTURERS = ("somfy",)


def display_names(accessories: Iterable[Any]) -> tuple[str, ...]:
    return tuple(str(getattr(acc, "display_name", "<unnamed>")) for acc in accessories)


def _get_characteristic(service: Any, name: str) -> Any | None:
    try:
        return service.get_characteristic(name)
    except (KeyError, ValueError):
        return None


def _name_contains_match(accessory: Any) -> bool:
    lower_name = str(getattr(accessory, "display_name", "")).lower()
    return any(token in lower_name for token in NAME_TOKENS)


def manufacturer(accessory: Any) -> str | None:
    info = accessory.get_service(ACCESSORY_INFORMATION)
    if info is None:
        return None
    char = _get_characteristic(info, "Manufacturer")
    if char is None or char.value is None:
        return None
    return str(char.value)


def _manufacturer_match(accessory: Any) -> bool:
    value = manufacturer(accessory)
    if not value:
        return False
    lower_value = value.lower()
    return any(known in lower_value for known in KNOWN_MANUFACTURERS)


def is_candidate(accessory: Any) -> bool:
    return _name_contains_match(accessory) or _manufacturer_match(accessory)


def exact_name_match(accessories: Sequence[Any], alarm_name: str) -> Any | None:
    for accessory in accessories:
        if accessory.display_name == alarm_name:
            return accessory
    return None


def target_state_characteristic(accessory: Any) -> Any | None:
    """Return the security-system target state characteristic via accessor methods."""
    service = accessory.get_service(SECURITY_SYSTEM)
    if service is None:
        return None
    return _get_characteristic(service, TARGET_STATE)


def scan_target_state(accessory: Any) -> tuple[Any | None, Any | None]:
    """Walk the raw service and characteristic collections of an accessory.

    Returns ``(service, characteristic)``; either may be ``None``.
    """
    service = next(
        (s for s in getattr(accessory, "services", ()) if s.display_name == SECURITY_SYSTEM),
        None,
    )
    if service is None:
        return None, None
    characteristic = next(
        (c for c in getattr(service, "characteristics", ()) if c.display_name == TARGET_STATE),
        None,
    )
    return service, characteristic


def first_alarm_candidate(accessories: Sequence[Any]) -> tuple[Any, Any] | None:
    """Return the first heuristic candidate, in order, exposing a target state."""
    for accessory in accessories:
        if not is_candidate(accessory):
            continue
        characteristic = target_state_characteristic(accessory)
        if characteristic is not None:
            return accessory, characteristic
    return None
