from .auth_service import AuthService
from .event_service import EventService
from .registration_service import RegistrationService
from .attendance_service import AttendanceService
from .certificate_service import CertificateService
from .feedback_service import FeedbackService
from .announcement_service import AnnouncementService
from .analytics_service import AnalyticsService
from .notification_service import EmailNotifier

__all__ = [
    "AuthService",
    "EventService",
    "RegistrationService",
    "AttendanceService",
    "CertificateService",
    "FeedbackService",
    "AnnouncementService",
    "AnalyticsService",
    "EmailNotifier"
]
