from .user_repository import UserRepository
from .event_repository import EventRepository
from .registration_repository import RegistrationRepository
from .attendance_repository import AttendanceRepository
from .certificate_repository import CertificateRepository
from .feedback_repository import FeedbackRepository
from .announcement_repository import AnnouncementRepository

__all__ = [
    "UserRepository",
    "EventRepository",
    "RegistrationRepository",
    "AttendanceRepository",
    "CertificateRepository",
    "FeedbackRepository",
    "AnnouncementRepository"
]
