"""
Certificate Schemas
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import CertificateStatus
from app.schemas.common import fix_pg_timezone
from app.schemas.event import EventBrief
from app.schemas.user import UserSummary


class CertificateInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ce_id: str
    ce_event_id: str
    ce_user_id: str
    ce_certificate_number: str
    ce_verification_hash: str
    ce_title: str
    ce_status: CertificateStatus
    ce_issued_at: datetime

    @field_validator('ce_issued_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        """Fix datetime timezone format from PostgreSQL"""
        return fix_pg_timezone(v)


class Certificate(CertificateInDB):
    pass


class MyCertificate(CertificateInDB):
    event: EventBrief


class EventCertificate(CertificateInDB):
    user: UserSummary


class IssueCertificateRequest(BaseModel):
    event_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)


class BulkIssueError(BaseModel):
    user_id: str
    message: str


class BulkIssueResult(BaseModel):
    """Outcome of a bulk issuance; per attendee failures are reported, not raised"""
    event_id: str
    total_eligible: int = 0
    issued: int = 0
    already_issued: int = 0
    failed: int = 0
    errors: List[BulkIssueError] = Field(default_factory=list)


class CertificateVerification(BaseModel):
    valid: bool
    certificate_number: str
    recipient_name: Optional[str] = None
    event_title: Optional[str] = None
    status: Optional[CertificateStatus] = None
    issued_at: Optional[datetime] = None
