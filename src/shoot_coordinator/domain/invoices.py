"""Domain models for payout invoices."""

from dataclasses import dataclass
from datetime import date

from shoot_coordinator.domain.models import Profile


@dataclass(frozen=True)
class InvoiceLine:
    """Flat-rate totals for one photographer in a period."""

    photographer: Profile
    shoot_count: int
    total_payout: int


@dataclass(frozen=True)
class InvoiceSummary:
    """Invoice for a period with grand totals."""

    period_start: date
    period_end: date
    rate_per_shoot: int
    lines: list[InvoiceLine]
    total_shoots: int
    total_payout: int
    approved_payout_total: float

    @property
    def photographer_count(self) -> int:
        """Return the number of photographers on the invoice."""
        return len(self.lines)
