from .user import User
from .event import Event
from .registration import Registration
from .attendance import Attendance
from .certificate import Certificate
from .feedback import Feedback
from .announcement import Announcement

__all__ = [
    "User",
    "Event",
    "Registration",
    "Attendance",
    "Certificate",
    "Feedback",
    "Announcement"
]
