"""Change-feed subscriptions for refreshing open views."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from shoot_coordinator.api.dependencies import get_container, require_session
from shoot_coordinator.api.schemas import SubscribeRequest
from shoot_coordinator.containers import AppContainer
from shoot_coordinator.domain.sessions import UserSession

router = APIRouter(prefix="/changes", tags=["changes"])


@router.post("/subscriptions", status_code=status.HTTP_201_CREATED)
async def subscribe(
    request: SubscribeRequest,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Open a subscription for the requested tables."""
    try:
        subscription = container.change_feed.subscribe(
            request.tables, owner_id=session.user_id
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {
        "subscription_id": str(subscription.id),
        "tables": sorted(subscription.tables),
    }


@router.get("/subscriptions/{subscription_id}")
async def poll(
    subscription_id: UUID,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Drain pending change events."""
    try:
        subscription = container.change_feed.get(
            subscription_id, owner_id=session.user_id
        )
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return {
        "events": [
            {
                "sequence": event.sequence,
                "table": event.table,
                "action": str(event.action),
                "record_id": str(event.record_id),
                "occurred_at": event.occurred_at.isoformat(),
            }
            for event in subscription.poll()
        ]
    }


@router.delete("/subscriptions/{subscription_id}")
async def unsubscribe(
    subscription_id: UUID,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Close a subscription."""
    try:
        container.change_feed.unsubscribe(subscription_id, owner_id=session.user_id)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return {"status": "unsubscribed"}
