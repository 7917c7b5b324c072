"""SMS notification categories, results and message templates."""

from dataclasses import dataclass
from enum import StrEnum


class SmsCategory(StrEnum):
    """Workflow event an SMS is sent for."""

    SHOOT_ASSIGNED = "shoot_assigned"
    PHOTOGRAPHER_REACHED = "photographer_reached"
    QC_UPLOADED = "qc_uploaded"


@dataclass(frozen=True)
class SmsResult:
    """Outcome of a single SMS dispatch."""

    success: bool
    message_id: str | None = None
    error: str | None = None
    note: str | None = None


def shoot_assigned_message(location: str, shoot_date: str) -> str:
    """Message sent to a photographer when a shoot is assigned."""
    return f"New Shoot assigned at {location} on {shoot_date}. Log in to accept."


def photographer_reached_message(merchant_name: str, photographer_name: str) -> str:
    """Message sent to the admin when a photographer reaches the venue."""
    return f"{photographer_name} has reached {merchant_name} location."


def qc_uploaded_message(merchant_name: str, link: str) -> str:
    """Message sent to the admin when QC deliverables are uploaded."""
    return f"QC Uploaded for {merchant_name}. Review here: {link}"
