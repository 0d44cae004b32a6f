"""
Notification Endpoints.
"""

from typing import Annotated, List

from fastapi import APIRouter, Query

from legal_aid.core.models.io import ApiResponse, ok
from legal_aid.core.models.io.notifications import NotificationRead, UnreadCount
from legal_aid.server.services.deps import CurrentUserDep, NotificationServiceDep

router = APIRouter()


@router.get("/", response_model=ApiResponse[List[NotificationRead]], summary="List Notifications")
async def list_notifications(
    user: CurrentUserDep,
    notifications: NotificationServiceDep,
    unread_only: bool = False,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    items = await notifications.list_for_user(user.id, unread_only=unread_only, limit=limit, offset=offset)
    return ok([NotificationRead.model_validate(n) for n in items])


@router.get("/unread-count", response_model=ApiResponse[UnreadCount], summary="Unread Count")
async def unread_count(user: CurrentUserDep, notifications: NotificationServiceDep):
    return ok(UnreadCount(unread=await notifications.unread_count(user.id)))


@router.patch(
    "/{notification_id}/read",
    response_model=ApiResponse[NotificationRead],
    summary="Mark As Read",
    responses={404: {"description": "Notification not found"}},
)
async def mark_read(notification_id: int, user: CurrentUserDep, notifications: NotificationServiceDep):
    return ok(NotificationRead.model_validate(await notifications.mark_read(user.id, notification_id)))


@router.post("/read-all", response_model=ApiResponse[UnreadCount], summary="Mark All As Read")
async def mark_all_read(user: CurrentUserDep, notifications: NotificationServiceDep):
    updated = await notifications.mark_all_read(user.id)
    return ok(UnreadCount(unread=0), f"{updated} notifications marked as read")
