"""Twilio SMS client adapter."""

from dataclasses import dataclass

import httpx

from shoot_coordinator.errors import BackendError

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


@dataclass
class HttpxTwilioSmsClient:
    """Twilio Messages API client implemented with httpx."""

    account_sid: str
    auth_token: str
    from_number: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, account_sid: str, auth_token: str, from_number: str
    ) -> "HttpxTwilioSmsClient":
        """Create a Twilio client with a managed httpx session."""
        return cls(
            account_sid=account_sid,
            auth_token=auth_token,
            from_number=from_number,
            http_client=httpx.AsyncClient(),
        )

    async def send_sms(self, to: str, body: str) -> str:
        """Send a message and return Twilio's message sid."""
        url = f"{TWILIO_API_BASE}/Accounts/{self.account_sid}/Messages.json"
        response = await self.http_client.post(
            url,
            data={"To": to, "From": self.from_number, "Body": body},
            auth=(self.account_sid, self.auth_token),
            timeout=10,
        )
        payload = _json_or_empty(response)
        if response.is_error:
            message = payload.get("message") or f"HTTP {response.status_code}"
            raise BackendError(f"Twilio error: {message}")
        sid = payload.get("sid")
        if not isinstance(sid, str) or not sid:
            raise BackendError("Twilio response did not include a message sid")
        return sid

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()


def _json_or_empty(response: httpx.Response) -> dict[str, object]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}
