"""Payout aggregation for photographer invoices."""

import calendar
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from shoot_coordinator.domain.invoices import InvoiceLine, InvoiceSummary
from shoot_coordinator.domain.shoots import DELIVERED_STATUSES, ShootStatus
from shoot_coordinator.errors import ValidationError
from shoot_coordinator.services.profiles import ProfileService
from shoot_coordinator.services.workflow import ShootRepository

DECEMBER = 12


@dataclass
class PayoutAggregator:
    """Derive flat-rate invoice totals from delivered shoots."""

    shoot_repository: ShootRepository
    profile_service: ProfileService
    rate_per_shoot: int

    def compute_invoice(
        self, period_start: date, period_end: date
    ) -> dict[UUID, InvoiceLine]:
        """Return flat-rate totals per photographer for [start, end]."""
        lines, _ = self._aggregate(period_start, period_end)
        return lines

    def monthly_invoice(self, year: int, month: int) -> InvoiceSummary:
        """Return the invoice for a calendar month with grand totals."""
        start = date(year, month, 1)
        end = date(year, month, calendar.monthrange(year, month)[1])
        lines, approved_total = self._aggregate(start, end)
        ordered = sorted(
            lines.values(), key=lambda line: line.photographer.name.lower()
        )
        return InvoiceSummary(
            period_start=start,
            period_end=end,
            rate_per_shoot=self.rate_per_shoot,
            lines=ordered,
            total_shoots=sum(line.shoot_count for line in ordered),
            total_payout=sum(line.total_payout for line in ordered),
            approved_payout_total=approved_total,
        )

    def _aggregate(
        self, period_start: date, period_end: date
    ) -> tuple[dict[UUID, InvoiceLine], float]:
        if period_start > period_end:
            raise ValidationError("Invoice period start must not be after its end.")
        shoots = [
            shoot
            for shoot in self.shoot_repository.list_in_period(
                period_start, period_end, DELIVERED_STATUSES
            )
            if shoot.photographer_id is not None
            and shoot.status in DELIVERED_STATUSES
            and period_start <= shoot.shoot_date <= period_end
        ]
        profiles = self.profile_service.by_ids(
            shoot.photographer_id for shoot in shoots if shoot.photographer_id
        )
        counts: dict[UUID, int] = {}
        approved_total = 0.0
        for shoot in shoots:
            if shoot.photographer_id not in profiles:
                continue
            counts[shoot.photographer_id] = counts.get(shoot.photographer_id, 0) + 1
            if shoot.status is ShootStatus.APPROVED and shoot.payout is not None:
                approved_total += shoot.payout
        lines = {
            photographer_id: InvoiceLine(
                photographer=profiles[photographer_id],
                shoot_count=count,
                total_payout=count * self.rate_per_shoot,
            )
            for photographer_id, count in counts.items()
        }
        return lines, approved_total


def recent_months(today: date, count: int = 12) -> list[tuple[int, int]]:
    """Return (year, month) pairs for the last ``count`` months, newest first."""
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append((year, month))
        if month == 1:
            year, month = year - 1, DECEMBER
        else:
            month -= 1
    return months


def month_label(year: int, month: int) -> str:
    """Render a month selector label like ``June 2024``."""
    return f"{calendar.month_name[month]} {year}"


def parse_month(raw: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` month selector into (year, month)."""
    year_part, sep, month_part = raw.strip().partition("-")
    if not sep or not year_part.isdigit() or not month_part.isdigit():
        raise ValidationError(f"Invalid month: {raw!r}")
    year, month = int(year_part), int(month_part)
    if not 1 <= month <= DECEMBER:
        raise ValidationError(f"Invalid month: {raw!r}")
    return year, month
