from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
from pyhap.loader import get_loader

from protect_automate.core.errors import DiscoveryError


class FakeCharacteristic:
    def __init__(self, display_name: str, value: Any = None, setter=None) -> None:
        self.display_name = display_name
        self.value = value
        self.setter = setter
        self.updates: list[Any] = []

    def client_update_value(self, value: Any) -> Any:
        self.updates.append(value)
        self.value = value
        if self.setter is not None:
            return self.setter(value)
        return None


class FakeService:
    def __init__(self, display_name: str, characteristics: tuple[FakeCharacteristic, ...] = ()) -> None:
        self.display_name = display_name
        self.characteristics = list(characteristics)

    def get_characteristic(self, name: str) -> FakeCharacteristic:
        for char in self.characteristics:
            if char.display_name == name:
                return char
        raise ValueError("Characteristic not found")


class FakeAccessory:
    def __init__(self, display_name: str, services: tuple[FakeService, ...] = (), uuid: str | None = None) -> None:
        self.display_name = display_name
        self.services = list(services)
        self.uuid = uuid

    def get_service(self, name: str) -> FakeService | None:
        return next((s for s in self.services if s.display_name == name), None)


class FakeHost:
    def __init__(self, registry=(), bridge=None, driver=None) -> None:
        self.registry = list(registry)
        self.bridge = None if bridge is None else list(bridge)
        self.driver = driver
        self.register_calls: list[list[Any]] = []
        self.unregister_calls: list[list[Any]] = []
        self.ready_callbacks: list[Any] = []

    def platform_accessories(self):
        return list(self.registry)

    def bridge_accessories(self):
        if self.bridge is None:
            raise DiscoveryError("Host did not grant access to the bridge accessory list")
        return list(self.bridge)

    def create_accessory(self, display_name: str, uuid: str):
        from protect_automate.host.hap import PlatformAccessory

        return PlatformAccessory(self.driver, display_name, uuid)

    def register_accessories(self, accessories) -> None:
        self.register_calls.append(list(accessories))

    def unregister_accessories(self, accessories) -> None:
        self.unregister_calls.append(list(accessories))

    def on_ready(self, callback) -> None:
        self.ready_callbacks.append(callback)


def alarm_accessory(name: str, *, setter=None, manufacturer: str | None = None) -> FakeAccessory:
    services = [
        FakeService(
            "SecuritySystem",
            (
                FakeCharacteristic("SecuritySystemCurrentState", 1),
                FakeCharacteristic("SecuritySystemTargetState", 1, setter=setter),
            ),
        )
    ]
    if manufacturer is not None:
        services.insert(0, FakeService("AccessoryInformation", (FakeCharacteristic("Manufacturer", manufacturer),)))
    return FakeAccessory(name, tuple(services))


def plain_accessory(name: str, *, manufacturer: str | None = None) -> FakeAccessory:
    services = [FakeService("Lightbulb", (FakeCharacteristic("On", False),))]
    if manufacturer is not None:
        services.insert(0, FakeService("AccessoryInformation", (FakeCharacteristic("Manufacturer", manufacturer),)))
    return FakeAccessory(name, tuple(services))


@pytest.fixture
def fakes():
    """Expose the fake host model builders to test modules."""

    class _Fakes:
        Characteristic = FakeCharacteristic
        Service = FakeService
        Accessory = FakeAccessory
        Host = FakeHost
        alarm = staticmethod(alarm_accessory)
        plain = staticmethod(plain_accessory)

    return _Fakes


@pytest.fixture
def hap_driver() -> MagicMock:
    driver = MagicMock()
    driver.loader = get_loader()
    return driver
