"""
Access rules shared by the event-scoped services
"""
from typing import Dict, Any

from app.models.enums import UserRole
from atams.exceptions import ForbiddenException


def is_admin(actor: Dict[str, Any]) -> bool:
    return actor.get("role") == UserRole.ADMIN.value


def can_manage_event(event, actor: Dict[str, Any]) -> bool:
    """ADMIN manages every event, ORGANIZER only the events they own"""
    if is_admin(actor):
        return True
    return actor.get("role") == UserRole.ORGANIZER.value and event.ev_organizer_id == actor.get("user_id")


def ensure_can_manage_event(event, actor: Dict[str, Any], message: str = "Not authorized for this event") -> None:
    if not can_manage_event(event, actor):
        raise ForbiddenException(message)
