"""
Enumerations shared by models, schemas and services
"""
from enum import Enum


class UserRole(str, Enum):
    STUDENT = "STUDENT"
    ORGANIZER = "ORGANIZER"
    ADMIN = "ADMIN"


# Role levels used by require_min_role_level
ROLE_LEVELS = {
    UserRole.STUDENT: 1,
    UserRole.ORGANIZER: 50,
    UserRole.ADMIN: 100,
}


class EventType(str, Enum):
    WORKSHOP = "WORKSHOP"
    HACKATHON = "HACKATHON"
    SEMINAR = "SEMINAR"
    WEBINAR = "WEBINAR"
    CULTURAL_EVENT = "CULTURAL_EVENT"
    SPORTS_EVENT = "SPORTS_EVENT"
    CLUB_ACTIVITY = "CLUB_ACTIVITY"
    COMPETITION = "COMPETITION"
    CONFERENCE = "CONFERENCE"
    GUEST_LECTURE = "GUEST_LECTURE"
    OTHER = "OTHER"


class EventCategory(str, Enum):
    TECHNICAL = "TECHNICAL"
    CULTURAL = "CULTURAL"
    SPORTS = "SPORTS"
    SOCIAL = "SOCIAL"
    ACADEMIC = "ACADEMIC"
    PROFESSIONAL = "PROFESSIONAL"
    ENTERTAINMENT = "ENTERTAINMENT"


class EventState(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    LIVE = "LIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


PUBLIC_EVENT_STATES = (EventState.PUBLISHED, EventState.LIVE, EventState.COMPLETED)
ACTIVE_EVENT_STATES = (EventState.PUBLISHED, EventState.LIVE)


class AttendanceMethod(str, Enum):
    MANUAL = "MANUAL"
    QR_CODE = "QR_CODE"
    SELF_CHECKIN = "SELF_CHECKIN"
    GEOFENCE = "GEOFENCE"
    HYBRID = "HYBRID"


class RegistrationStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"
    WAITLISTED = "WAITLISTED"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"


# Statuses that qualify for a certificate or feedback
ATTENDED_STATUSES = (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


class CertificateStatus(str, Enum):
    ISSUED = "ISSUED"
    REVOKED = "REVOKED"


class AnnouncementPriority(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


def enum_values(data: dict) -> dict:
    """Replace enum members by their values before writing to String columns"""
    return {k: v.value if isinstance(v, Enum) else v for k, v in data.items()}
