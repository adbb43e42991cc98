"""
Pydantic schemas for the registration API responses.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel


class PingResponse(BaseModel):
    status: Literal["ok"]
    message: str


class HealthResponse(BaseModel):
    status: Literal["ok"]
    message: str
    environment: str
    timestamp: str
    backend: str
    location: str
    cors_origins: list[str]


class RegisterResponse(BaseModel):
    success: bool
    message: str
    timestamp: str


class Registration(BaseModel):
    firstName: str
    lastName: str
    email: str
    affiliationType: str
    netId: str = ""
    graduationYear: str = ""
    program: str = ""
    attendance: str
    questions: str = ""
    timestamp: str


class RegistrationListResponse(BaseModel):
    registrations: list[Registration]
    total: int


class ResetResponse(BaseModel):
    success: bool
    message: str
    location: str


class CheckResponse(BaseModel):
    success: bool
    exists: bool
    location: str
    headers: str
    registrations_count: int
    message: Optional[str] = None
