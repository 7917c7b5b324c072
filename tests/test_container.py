"""Tests for container wiring."""

import asyncio

from shoot_coordinator.adapters.twilio_sms_client import HttpxTwilioSmsClient
from shoot_coordinator.config import Settings
from shoot_coordinator.containers import build_container
from tests.conftest import SERVICE_KEY


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.session_service is not None
    assert container.workflow_service.admin_phone == settings.admin_phone
    assert container.payout_aggregator.rate_per_shoot == 500
    assert container.notification_service.sms_client is None
    asyncio.run(container.close_resources())


def test_build_container_enables_twilio_when_configured() -> None:
    settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=SERVICE_KEY,
        twilio_account_sid="AC123",
        twilio_auth_token="secret",
        twilio_phone_number="+15550001111",
        flat_rate_per_shoot=650,
    )

    container = build_container(settings)

    assert settings.twilio_configured
    assert isinstance(container.notification_service.sms_client, HttpxTwilioSmsClient)
    assert container.payout_aggregator.rate_per_shoot == 650
    asyncio.run(container.close_resources())
