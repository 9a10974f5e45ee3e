from datetime import date

import pytest
from conftest import DAY, add_booking

from app.core.config import settings
from app.models.booking import TIME_SLOTS, TimeSlot
from app.models.demand import DemandLevel
from app.services.demand_service import (
    HIGH_DEMAND_MESSAGE,
    MEDIUM_DEMAND_MESSAGE,
    UNKNOWN_DEMAND_MESSAGE,
    classify_demand,
)


@pytest.mark.parametrize("slot", TIME_SLOTS)
async def test_no_bookings_is_low(session, screens, slot):
    info = await classify_demand(session, screens[0].id, DAY, slot)
    assert info.level == DemandLevel.LOW
    assert info.message is None


@pytest.mark.parametrize("slot", TIME_SLOTS)
async def test_booked_slot_is_high(session, screens, slot):
    await add_booking(session, screens[0].id, DAY, slot)
    info = await classify_demand(session, screens[0].id, DAY, slot)
    assert info.level == DemandLevel.HIGH
    assert info.message == HIGH_DEMAND_MESSAGE


async def test_two_other_bookings_same_day_is_medium(session, screens):
    a = screens[0]
    await add_booking(session, a.id, DAY, TimeSlot.FOURTH_PERIOD)
    await add_booking(session, a.id, DAY, TimeSlot.FIFTH_PERIOD)
    info = await classify_demand(session, a.id, DAY, TimeSlot.SEVENTH_PERIOD)
    assert info.level == DemandLevel.MEDIUM
    assert info.message == MEDIUM_DEMAND_MESSAGE


async def test_one_other_booking_is_low(session, screens):
    a = screens[0]
    await add_booking(session, a.id, DAY, TimeSlot.FOURTH_PERIOD)
    info = await classify_demand(session, a.id, DAY, TimeSlot.FIFTH_PERIOD)
    assert info.level == DemandLevel.LOW


async def test_other_screens_and_days_do_not_count(session, screens):
    a, b = screens[0], screens[1]
    await add_booking(session, b.id, DAY, TimeSlot.FOURTH_PERIOD)
    await add_booking(session, b.id, DAY, TimeSlot.FIFTH_PERIOD)
    await add_booking(session, a.id, date(2025, 3, 9), TimeSlot.SEVENTH_PERIOD)
    await add_booking(session, a.id, date(2025, 3, 11), TimeSlot.SEVENTH_PERIOD)
    info = await classify_demand(session, a.id, DAY, TimeSlot.SEVENTH_PERIOD)
    assert info.level == DemandLevel.LOW


async def test_time_of_day_in_request_is_ignored(session, screens):
    from conftest import at

    await add_booking(session, screens[0].id, DAY, TimeSlot.FIFTH_PERIOD)
    info = await classify_demand(session, screens[0].id, at(DAY, 23, 59), TimeSlot.FIFTH_PERIOD)
    assert info.level == DemandLevel.HIGH


class _BrokenSession:
    async def execute(self, *args, **kwargs):
        raise ConnectionError("database is down")


async def test_storage_failure_fails_open():
    info = await classify_demand(_BrokenSession(), 1, DAY, TimeSlot.FOURTH_PERIOD)
    assert info.level == DemandLevel.LOW
    assert info.message == UNKNOWN_DEMAND_MESSAGE


async def test_medium_threshold_is_configurable(session, screens, monkeypatch):
    a = screens[0]
    await add_booking(session, a.id, DAY, TimeSlot.FOURTH_PERIOD)
    monkeypatch.setattr(settings, "medium_demand_threshold", 1)
    info = await classify_demand(session, a.id, DAY, TimeSlot.FIFTH_PERIOD)
    assert info.level == DemandLevel.MEDIUM

    await add_booking(session, a.id, DAY, TimeSlot.FIFTH_PERIOD)
    monkeypatch.setattr(settings, "medium_demand_threshold", 3)
    info = await classify_demand(session, a.id, DAY, TimeSlot.SEVENTH_PERIOD)
    assert info.level == DemandLevel.LOW
