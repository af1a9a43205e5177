from __future__ import annotations

import asyncio

import pytest
from pyhap.accessory import Accessory

from protect_automate.core.model import DisarmOutcome
from protect_automate.core.switch import RESET_DELAY_S, TriggerSwitch


def _ok() -> DisarmOutcome:
    return DisarmOutcome(status="disarmed", message="ok")


def test_default_reset_delay_is_one_second() -> None:
    assert RESET_DELAY_S == 1.0


def test_switch_service_and_information(hap_driver) -> None:
    accessory = Accessory(hap_driver, "Disarm Somfy Protect")

    async def disarm() -> DisarmOutcome:
        return _ok()

    switch = TriggerSwitch(accessory, disarm)

    assert accessory.get_service("Switch") is switch.service
    info = accessory.get_service("AccessoryInformation")
    assert info.get_characteristic("Model").value == "Somfy Disarm Switch"
    assert info.get_characteristic("SerialNumber").value == "SDS-001"
    assert switch.service.get_characteristic("Name").value == "Disarm Somfy Protect"
    assert switch.char_on.get_value() is False


def test_existing_switch_service_is_reused(hap_driver) -> None:
    accessory = Accessory(hap_driver, "Disarm Somfy Protect")
    existing = accessory.add_preload_service("Switch")

    async def disarm() -> DisarmOutcome:
        return _ok()

    switch = TriggerSwitch(accessory, disarm)

    assert switch.service is existing
    assert len([s for s in accessory.services if s.display_name == "Switch"]) == 1


def test_turning_off_has_no_side_effect(hap_driver) -> None:
    calls: list[int] = []

    async def disarm() -> DisarmOutcome:
        calls.append(1)
        return _ok()

    switch = TriggerSwitch(Accessory(hap_driver, "Disarm"), disarm)
    switch.set_on(False)

    assert switch.get_on() is False
    assert switch.pending_resets == 0
    assert calls == []


@pytest.mark.asyncio
async def test_activation_disarms_and_resets(hap_driver) -> None:
    calls: list[int] = []

    async def disarm() -> DisarmOutcome:
        calls.append(1)
        return _ok()

    switch = TriggerSwitch(Accessory(hap_driver, "Disarm"), disarm, reset_delay_s=0.05)
    switch.char_on.client_update_value(True)

    assert switch.get_on() is True
    await asyncio.sleep(0.2)

    assert calls == [1]
    assert switch.get_on() is False
    assert switch.char_on.value is False
    assert switch.last_outcome is not None and switch.last_outcome.disarmed


@pytest.mark.asyncio
async def test_reset_happens_when_pipeline_fails(hap_driver) -> None:
    async def disarm() -> DisarmOutcome:
        raise RuntimeError("unexpected")

    switch = TriggerSwitch(Accessory(hap_driver, "Disarm"), disarm, reset_delay_s=0.05)
    switch.set_on(True)
    await asyncio.sleep(0.2)

    assert switch.get_on() is False
    assert switch.char_on.value is False


@pytest.mark.asyncio
async def test_reset_does_not_wait_for_pipeline(hap_driver) -> None:
    release = asyncio.Event()

    async def disarm() -> DisarmOutcome:
        await release.wait()
        return _ok()

    switch = TriggerSwitch(Accessory(hap_driver, "Disarm"), disarm, reset_delay_s=0.05)
    switch.set_on(True)
    await asyncio.sleep(0.2)

    assert switch.get_on() is False
    assert switch.last_outcome is None

    release.set()
    await asyncio.sleep(0.05)
    assert switch.last_outcome is not None


@pytest.mark.asyncio
async def test_overlapping_activation_keeps_earlier_reset(hap_driver) -> None:
    async def disarm() -> DisarmOutcome:
        return _ok()

    switch = TriggerSwitch(Accessory(hap_driver, "Disarm"), disarm, reset_delay_s=0.2)
    switch.set_on(True)
    await asyncio.sleep(0.1)
    switch.set_on(True)
    assert switch.pending_resets == 2

    await asyncio.sleep(0.15)
    # The first activation's reset has fired even though the second is younger than the delay.
    assert switch.get_on() is False
    assert switch.pending_resets == 1

    await asyncio.sleep(0.15)
    assert switch.pending_resets == 0
    assert switch.get_on() is False


@pytest.mark.asyncio
async def test_close_cancels_pending_reset(hap_driver) -> None:
    async def disarm() -> DisarmOutcome:
        return _ok()

    switch = TriggerSwitch(Accessory(hap_driver, "Disarm"), disarm, reset_delay_s=0.1)
    switch.set_on(True)
    switch.close()
    await asyncio.sleep(0.2)

    assert switch.pending_resets == 0
    assert switch.get_on() is True
