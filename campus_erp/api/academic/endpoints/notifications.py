"""
Notification API Endpoints - not implemented yet
"""

from fastapi import APIRouter

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("")
async def list_notifications():
    return {"message": "Get notifications - to be implemented"}


@router.get("/unread-count")
async def get_unread_count():
    return {"message": "Get unread count - to be implemented"}


@router.put("/{notification_id}/read")
async def mark_notification_read(notification_id: str):
    return {"message": "Mark notification as read - to be implemented"}
