from .user import User, UserRegister, UserSummary, LoginRequest, RefreshRequest, TokenPair, AuthResponse
from .event import Event, EventCreate, EventUpdate, EventBrief
from .registration import (
    Registration,
    RegistrationCreate,
    RegistrationStatusUpdate,
    MyRegistration,
    EventRegistration
)
from .attendance import (
    Attendance,
    EventAttendance,
    MyAttendance,
    CheckInRequest,
    MarkAttendanceRequest
)
from .certificate import (
    Certificate,
    MyCertificate,
    EventCertificate,
    IssueCertificateRequest,
    BulkIssueResult,
    BulkIssueError,
    CertificateVerification
)
from .feedback import Feedback, FeedbackCreate, EventFeedbackSummary
from .announcement import Announcement, AnnouncementCreate
from .analytics import OrganizerStats, EventStats, AdminStats
from .common import DataResponse, PaginationResponse

__all__ = [
    # User / auth schemas
    "User",
    "UserRegister",
    "UserSummary",
    "LoginRequest",
    "RefreshRequest",
    "TokenPair",
    "AuthResponse",
    # Event schemas
    "Event",
    "EventCreate",
    "EventUpdate",
    "EventBrief",
    # Registration schemas
    "Registration",
    "RegistrationCreate",
    "RegistrationStatusUpdate",
    "MyRegistration",
    "EventRegistration",
    # Attendance schemas
    "Attendance",
    "EventAttendance",
    "MyAttendance",
    "CheckInRequest",
    "MarkAttendanceRequest",
    # Certificate schemas
    "Certificate",
    "MyCertificate",
    "EventCertificate",
    "IssueCertificateRequest",
    "BulkIssueResult",
    "BulkIssueError",
    "CertificateVerification",
    # Feedback / announcement / analytics schemas
    "Feedback",
    "FeedbackCreate",
    "EventFeedbackSummary",
    "Announcement",
    "AnnouncementCreate",
    "OrganizerStats",
    "EventStats",
    "AdminStats",
    # Common schemas
    "DataResponse",
    "PaginationResponse"
]
