"""Tests for the availability ledger."""

from datetime import date

import pytest

from shoot_coordinator.domain.changes import ChangeAction
from shoot_coordinator.domain.models import Role
from shoot_coordinator.errors import AuthorizationError, ValidationError
from shoot_coordinator.services.availability import AvailabilityLedger
from shoot_coordinator.services.changes import ChangeFeed
from tests.conftest import (
    SHOOT_DAY,
    TODAY,
    InMemoryAvailabilityRepository,
    InMemoryProfileRepository,
    make_profile,
    session_for,
)


def test_set_available_is_idempotent(
    availability_ledger: AvailabilityLedger,
    availability_repository: InMemoryAvailabilityRepository,
    profile_repository: InMemoryProfileRepository,
    change_feed: ChangeFeed,
) -> None:
    photographer = profile_repository.add(make_profile("Ana Lopez"))
    subscription = change_feed.subscribe(["availability"])

    availability_ledger.set_available(photographer.id, SHOOT_DAY)
    availability_ledger.set_available(photographer.id, SHOOT_DAY)

    assert availability_ledger.is_available(photographer.id, SHOOT_DAY)
    assert len(availability_repository.entries) == 1
    assert [event.action for event in subscription.poll()] == [ChangeAction.INSERT]


def test_set_unavailable_clears_and_ignores_missing(
    availability_ledger: AvailabilityLedger,
    profile_repository: InMemoryProfileRepository,
    change_feed: ChangeFeed,
) -> None:
    photographer = profile_repository.add(make_profile("Ana Lopez"))
    availability_ledger.set_available(photographer.id, SHOOT_DAY)
    subscription = change_feed.subscribe(["availability"])

    availability_ledger.set_unavailable(photographer.id, SHOOT_DAY)
    availability_ledger.set_unavailable(photographer.id, SHOOT_DAY)

    assert not availability_ledger.is_available(photographer.id, SHOOT_DAY)
    assert [event.action for event in subscription.poll()] == [ChangeAction.DELETE]


def test_toggle_flips_state(
    availability_ledger: AvailabilityLedger,
    profile_repository: InMemoryProfileRepository,
) -> None:
    photographer = profile_repository.add(make_profile("Ana Lopez"))

    assert availability_ledger.toggle(photographer.id, SHOOT_DAY) is True
    assert availability_ledger.toggle(photographer.id, SHOOT_DAY) is False
    assert not availability_ledger.is_available(photographer.id, SHOOT_DAY)


def test_past_dates_are_read_only(
    availability_ledger: AvailabilityLedger,
    profile_repository: InMemoryProfileRepository,
) -> None:
    photographer = profile_repository.add(make_profile("Ana Lopez"))

    with pytest.raises(ValidationError, match="Past dates"):
        availability_ledger.set_available(photographer.id, date(2024, 5, 31))

    availability_ledger.set_available(photographer.id, TODAY)
    assert availability_ledger.is_available(photographer.id, TODAY)


def test_list_month_returns_only_that_month(
    availability_ledger: AvailabilityLedger,
    profile_repository: InMemoryProfileRepository,
) -> None:
    photographer = profile_repository.add(make_profile("Ana Lopez"))
    for day in (date(2024, 6, 3), date(2024, 6, 30), date(2024, 7, 1)):
        availability_ledger.set_available(photographer.id, day)

    assert availability_ledger.list_month(photographer.id, 2024, 6) == {
        date(2024, 6, 3),
        date(2024, 6, 30),
    }


def test_eligible_photographers_sorted_and_filtered(
    availability_ledger: AvailabilityLedger,
    profile_repository: InMemoryProfileRepository,
) -> None:
    zoe = profile_repository.add(make_profile("Zoe Park"))
    ana = profile_repository.add(make_profile("ana Lopez"))
    profile_repository.add(make_profile("Ben Ito"))
    admin = profile_repository.add(make_profile("Maya Admin", Role.ADMIN))
    for profile in (zoe, ana, admin):
        availability_ledger.set_available(profile.id, SHOOT_DAY)

    eligible = availability_ledger.eligible_photographers(SHOOT_DAY)

    assert [profile.name for profile in eligible] == ["ana Lopez", "Zoe Park"]
    assert availability_ledger.eligible_photographers(date(2024, 6, 11)) == []


def test_session_wrappers_require_photographer(
    availability_ledger: AvailabilityLedger,
    profile_repository: InMemoryProfileRepository,
) -> None:
    photographer = profile_repository.add(make_profile("Ana Lopez"))
    admin = profile_repository.add(make_profile("Maya Admin", Role.ADMIN))

    availability_ledger.set_own_availability(
        session_for(photographer), SHOOT_DAY, available=True
    )
    assert availability_ledger.own_month(session_for(photographer), 2024, 6) == {
        SHOOT_DAY
    }
    assert availability_ledger.toggle_own(session_for(photographer), SHOOT_DAY) is False

    with pytest.raises(AuthorizationError):
        availability_ledger.toggle_own(session_for(admin), SHOOT_DAY)
