"""
Analytics Schemas
"""
from typing import List
from pydantic import BaseModel


class OrganizerStats(BaseModel):
    total_events: int
    active_events: int
    total_registrations: int
    total_certificates: int


class AttendanceBucket(BaseModel):
    name: str
    value: int


class EventStats(BaseModel):
    event_id: str
    event_name: str
    total_registrations: int
    total_certificates: int
    attendance_data: List[AttendanceBucket]


class AdminStats(BaseModel):
    total_users: int
    total_events: int
    total_registrations: int
    total_certificates: int
