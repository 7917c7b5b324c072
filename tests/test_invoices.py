"""Tests for payout aggregation."""

from datetime import date
from uuid import uuid4

import pytest

from shoot_coordinator.domain.shoots import ShootStatus
from shoot_coordinator.errors import ValidationError
from shoot_coordinator.services.invoices import (
    PayoutAggregator,
    month_label,
    parse_month,
    recent_months,
)
from shoot_coordinator.services.profiles import ProfileService
from tests.conftest import (
    InMemoryProfileRepository,
    InMemoryShootRepository,
    make_profile,
    make_shoot,
)


def _aggregator(
    shoot_repository: InMemoryShootRepository, profile_service: ProfileService
) -> PayoutAggregator:
    return PayoutAggregator(
        shoot_repository=shoot_repository,
        profile_service=profile_service,
        rate_per_shoot=500,
    )


def test_flat_rate_ignores_admin_payout(
    shoot_repository: InMemoryShootRepository,
    profile_repository: InMemoryProfileRepository,
    profile_service: ProfileService,
) -> None:
    photographer = profile_repository.add(make_profile("Ana Lopez"))
    shoot_repository.add(
        make_shoot(
            photographer.id,
            ShootStatus.APPROVED,
            shoot_date=date(2024, 6, 10),
            payout=750.0,
        )
    )

    summary = _aggregator(shoot_repository, profile_service).monthly_invoice(2024, 6)

    assert summary.total_payout == 500
    assert summary.approved_payout_total == 750.0
    assert summary.lines[0].shoot_count == 1
    assert summary.photographer_count == 1


def test_compute_invoice_counts_delivered_shoots_in_period(
    shoot_repository: InMemoryShootRepository,
    profile_repository: InMemoryProfileRepository,
    profile_service: ProfileService,
) -> None:
    ana = profile_repository.add(make_profile("Ana Lopez"))
    ben = profile_repository.add(make_profile("Ben Ito"))
    for status in (
        ShootStatus.COMPLETED,
        ShootStatus.QC_UPLOADED,
        ShootStatus.APPROVED,
        ShootStatus.STARTED,
    ):
        shoot_repository.add(make_shoot(ana.id, status, shoot_date=date(2024, 6, 5)))
    shoot_repository.add(
        make_shoot(ben.id, ShootStatus.COMPLETED, shoot_date=date(2024, 7, 1))
    )
    shoot_repository.add(
        make_shoot(None, ShootStatus.COMPLETED, shoot_date=date(2024, 6, 5))
    )
    shoot_repository.add(
        make_shoot(uuid4(), ShootStatus.COMPLETED, shoot_date=date(2024, 6, 5))
    )

    lines = _aggregator(shoot_repository, profile_service).compute_invoice(
        date(2024, 6, 1), date(2024, 6, 30)
    )

    assert list(lines) == [ana.id]
    assert lines[ana.id].shoot_count == 3
    assert lines[ana.id].total_payout == 1500


def test_monthly_invoice_totals_and_order(
    shoot_repository: InMemoryShootRepository,
    profile_repository: InMemoryProfileRepository,
    profile_service: ProfileService,
) -> None:
    zoe = profile_repository.add(make_profile("Zoe Park"))
    ana = profile_repository.add(make_profile("Ana Lopez"))
    shoot_repository.add(make_shoot(zoe.id, ShootStatus.COMPLETED))
    shoot_repository.add(make_shoot(ana.id, ShootStatus.COMPLETED))
    shoot_repository.add(make_shoot(ana.id, ShootStatus.QC_UPLOADED))

    summary = _aggregator(shoot_repository, profile_service).monthly_invoice(2024, 6)

    assert [line.photographer.name for line in summary.lines] == [
        "Ana Lopez",
        "Zoe Park",
    ]
    assert summary.total_shoots == 3
    assert summary.total_payout == 1500
    assert summary.approved_payout_total == 0
    assert summary.period_end == date(2024, 6, 30)


def test_empty_month_has_zero_totals(
    shoot_repository: InMemoryShootRepository, profile_service: ProfileService
) -> None:
    summary = _aggregator(shoot_repository, profile_service).monthly_invoice(2024, 2)

    assert summary.lines == []
    assert summary.total_payout == 0
    assert summary.period_end == date(2024, 2, 29)


def test_inverted_period_is_rejected(
    shoot_repository: InMemoryShootRepository, profile_service: ProfileService
) -> None:
    with pytest.raises(ValidationError):
        _aggregator(shoot_repository, profile_service).compute_invoice(
            date(2024, 6, 30), date(2024, 6, 1)
        )


def test_month_helpers() -> None:
    months = recent_months(date(2024, 2, 15), count=3)

    assert months == [(2024, 2), (2024, 1), (2023, 12)]
    assert month_label(2024, 6) == "June 2024"
    assert parse_month("2024-06") == (2024, 6)
    with pytest.raises(ValidationError):
        parse_month("2024-13")
    with pytest.raises(ValidationError):
        parse_month("June")
