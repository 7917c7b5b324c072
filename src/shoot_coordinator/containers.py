"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from shoot_coordinator.adapters.supabase_availability_repository import (
    SupabaseAvailabilityRepository,
)
from shoot_coordinator.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from shoot_coordinator.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from shoot_coordinator.adapters.supabase_shoot_repository import (
    SupabaseShootRepository,
)
from shoot_coordinator.adapters.twilio_sms_client import HttpxTwilioSmsClient
from shoot_coordinator.config import Settings
from shoot_coordinator.services.auth import SessionService
from shoot_coordinator.services.availability import AvailabilityLedger
from shoot_coordinator.services.changes import ChangeFeed
from shoot_coordinator.services.invoices import PayoutAggregator
from shoot_coordinator.services.notifications import NotificationService
from shoot_coordinator.services.profiles import ProfileService
from shoot_coordinator.services.workflow import ShootWorkflowService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    change_feed: ChangeFeed
    profile_service: ProfileService
    session_service: SessionService
    availability_ledger: AvailabilityLedger
    notification_service: NotificationService
    workflow_service: ShootWorkflowService
    payout_aggregator: PayoutAggregator
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    # Sign-in stores the user session on its client; keep that off the data client.
    auth_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    availability_repository = SupabaseAvailabilityRepository(supabase_client)
    shoot_repository = SupabaseShootRepository(supabase_client)

    sms_client = None
    if resolved_settings.twilio_configured:
        sms_client = HttpxTwilioSmsClient.create(
            account_sid=resolved_settings.twilio_account_sid or "",
            auth_token=resolved_settings.twilio_auth_token or "",
            from_number=resolved_settings.twilio_phone_number or "",
        )

    change_feed = ChangeFeed()
    profile_service = ProfileService(profile_repository)
    session_service = SessionService(
        identity_provider=SupabaseIdentityProvider(auth_client),
        profile_repository=profile_repository,
        password_reset_redirect_url=resolved_settings.password_reset_redirect_url,
    )
    availability_ledger = AvailabilityLedger(
        repository=availability_repository,
        profile_service=profile_service,
        change_feed=change_feed,
    )
    notification_service = NotificationService(sms_client=sms_client)
    workflow_service = ShootWorkflowService(
        repository=shoot_repository,
        profile_service=profile_service,
        availability_ledger=availability_ledger,
        notification_service=notification_service,
        change_feed=change_feed,
        admin_phone=resolved_settings.admin_phone,
    )
    payout_aggregator = PayoutAggregator(
        shoot_repository=shoot_repository,
        profile_service=profile_service,
        rate_per_shoot=resolved_settings.flat_rate_per_shoot,
    )

    async def close_resources() -> None:
        if sms_client is not None:
            await sms_client.close()

    return AppContainer(
        settings=resolved_settings,
        change_feed=change_feed,
        profile_service=profile_service,
        session_service=session_service,
        availability_ledger=availability_ledger,
        notification_service=notification_service,
        workflow_service=workflow_service,
        payout_aggregator=payout_aggregator,
        close_resources=close_resources,
    )
