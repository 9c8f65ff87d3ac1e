# notifications router - the frontend polls this to render toasts

from fastapi import APIRouter, Depends

from neuromate.dependencies import get_notifier
from neuromate.models.notification import Notification
from neuromate.services.notifier import Notifier

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[Notification])
async def drain_notifications(notifier: Notifier = Depends(get_notifier)):
    """return pending notifications and clear the queue"""
    return notifier.drain()
