"""Notification API endpoints."""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, joinedload

from src.api.dependencies import get_notification_scheduler, get_now
from src.database import get_db
from src.exceptions import ConflictError, NotFoundError
from src.models.enums import NotificationStatus
from src.models.notification import Notification
from src.models.pantry import PantryItem
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.notification import (
    AutoScheduleRequest,
    NotificationCreate,
    NotificationResponse,
    NotificationUpdate,
)
from src.services.notification_scheduler import NotificationScheduler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])

UserIdQuery = Annotated[int, Query(alias="userId", gt=0)]


def build_notification_response(notification: Notification) -> NotificationResponse:
    """Serialize a notification with its pantry item's name and expiration date."""
    response = NotificationResponse.model_validate(notification)
    if notification.pantry_item is not None:
        response.pantry_item_name = notification.pantry_item.name
        response.expiration_date = notification.pantry_item.expiration_date
    return response


def get_notification_or_404(db: Session, notification_id: int) -> Notification:
    """Load a notification or raise ``NotFoundError``."""
    notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if not notification:
        raise NotFoundError("Notification not found")
    return notification


def _user_notifications(db: Session, user_id: int):
    return (
        db.query(Notification)
        .join(PantryItem, Notification.pantry_item_id == PantryItem.id)
        .options(joinedload(Notification.pantry_item))
        .filter(PantryItem.user_id == user_id)
    )


@router.get("", response_model=ApiResponse[list[NotificationResponse]])
def list_notifications(
    user_id: UserIdQuery,
    db: Annotated[Session, Depends(get_db)],
    notification_status: NotificationStatus | None = Query(default=None, alias="status"),
):
    """List a user's notifications, earliest first."""
    query = _user_notifications(db, user_id)
    if notification_status:
        query = query.filter(Notification.status == notification_status.value)
    notifications = query.order_by(Notification.scheduled_for.asc()).all()
    return ApiResponse(data=[build_notification_response(n) for n in notifications])


@router.get("/pending", response_model=ApiResponse[list[NotificationResponse]])
def list_due_notifications(
    user_id: UserIdQuery,
    db: Annotated[Session, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Pending notifications whose scheduled time has arrived."""
    notifications = (
        _user_notifications(db, user_id)
        .filter(
            Notification.status == NotificationStatus.PENDING.value,
            Notification.scheduled_for <= now,
        )
        .order_by(Notification.scheduled_for.asc())
        .all()
    )
    return ApiResponse(data=[build_notification_response(n) for n in notifications])


@router.post("/auto-schedule", response_model=MessageResponse)
def auto_schedule_notifications(
    request: AutoScheduleRequest,
    scheduler: Annotated[NotificationScheduler, Depends(get_notification_scheduler)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Schedule reminders for every eligible pantry item of a user."""
    created = scheduler.auto_schedule(request.user_id, now)
    return MessageResponse(message=f"Scheduled {created} new notifications")


@router.get("/{notification_id}", response_model=ApiResponse[NotificationResponse])
def get_notification(notification_id: int, db: Annotated[Session, Depends(get_db)]):
    """Get a single notification."""
    notification = get_notification_or_404(db, notification_id)
    return ApiResponse(data=build_notification_response(notification))


@router.post(
    "", response_model=ApiResponse[NotificationResponse], status_code=status.HTTP_201_CREATED
)
def create_notification(
    notification_data: NotificationCreate,
    db: Annotated[Session, Depends(get_db)],
    scheduler: Annotated[NotificationScheduler, Depends(get_notification_scheduler)],
):
    """Schedule a notification explicitly."""
    pantry_item = (
        db.query(PantryItem).filter(PantryItem.id == notification_data.pantry_item_id).first()
    )
    if not pantry_item:
        raise NotFoundError("Pantry item not found")

    if notification_data.status == NotificationStatus.PENDING and scheduler.has_pending(
        pantry_item.id
    ):
        raise ConflictError("A pending notification already exists for this pantry item")

    notification = Notification(
        pantry_item_id=pantry_item.id,
        scheduled_for=notification_data.scheduled_for,
        status=notification_data.status.value,
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)

    logger.info(f"Created notification {notification.id} for pantry item {pantry_item.id}")
    return ApiResponse(data=build_notification_response(notification))


@router.put("/{notification_id}", response_model=ApiResponse[NotificationResponse])
def update_notification(
    notification_id: int,
    notification_data: NotificationUpdate,
    db: Annotated[Session, Depends(get_db)],
    scheduler: Annotated[NotificationScheduler, Depends(get_notification_scheduler)],
):
    """Reschedule a notification or change its status."""
    notification = get_notification_or_404(db, notification_id)

    if notification_data.scheduled_for is not None:
        notification.scheduled_for = notification_data.scheduled_for
    if notification_data.status is not None:
        reopening = (
            notification_data.status == NotificationStatus.PENDING
            and notification.status != NotificationStatus.PENDING.value
        )
        if reopening and scheduler.has_pending(notification.pantry_item_id):
            raise ConflictError("A pending notification already exists for this pantry item")
        notification.status = notification_data.status.value

    db.commit()
    db.refresh(notification)
    return ApiResponse(data=build_notification_response(notification))


@router.put("/{notification_id}/mark-sent", response_model=ApiResponse[NotificationResponse])
def mark_notification_sent(
    notification_id: int,
    scheduler: Annotated[NotificationScheduler, Depends(get_notification_scheduler)],
    now: Annotated[datetime, Depends(get_now)],
):
    """Mark a notification as sent."""
    notification = scheduler.mark_sent(notification_id, now)
    return ApiResponse(data=build_notification_response(notification))


@router.put("/{notification_id}/cancel", response_model=ApiResponse[NotificationResponse])
def cancel_notification(
    notification_id: int,
    scheduler: Annotated[NotificationScheduler, Depends(get_notification_scheduler)],
):
    """Cancel a notification."""
    notification = scheduler.cancel(notification_id)
    return ApiResponse(data=build_notification_response(notification))


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(notification_id: int, db: Annotated[Session, Depends(get_db)]):
    """Delete a notification."""
    notification = get_notification_or_404(db, notification_id)
    db.delete(notification)
    db.commit()
    return MessageResponse(message="Notification deleted successfully")
