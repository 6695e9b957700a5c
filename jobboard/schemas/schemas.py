"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Any
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserType(str, Enum):
    admin = "Admin"
    applicant = "Applicant"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class SignUpRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    user_type: UserType
    profile_headline: Optional[str] = None
    address: Optional[str] = None

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    user_type: str

class UserResponse(BaseModel):
    user_id: int
    name: str
    email: str
    user_type: str
    address: Optional[str] = None
    profile_headline: Optional[str] = None
    is_active: bool
    created_at: datetime


# ============================================================
# RESUME / PROFILE SCHEMAS
# ============================================================

class ParsedFields(BaseModel):
    """
    Structured fields the language model extracts from resume text.

    Every field is a plain string; absent values are "". Models sometimes
    answer with lists (e.g. skills) or null, those are flattened here.
    """
    name: str = ""
    email: str = ""
    phone: str = ""
    education: str = ""
    experience: str = ""
    skills: str = ""

    @field_validator("name", "email", "phone", "education", "experience", "skills", mode="before")
    @classmethod
    def flatten_value(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, list):
            return ", ".join(str(item).strip() for item in value if item is not None and str(item).strip())
        if isinstance(value, (dict, bool)):
            raise ValueError("expected a string")
        return str(value).strip()

class ProfileResponse(BaseModel):
    profile_id: int
    user_id: int
    resume_file_path: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class ResumeUploadResponse(BaseModel):
    success: bool
    message: str
    file_path: Optional[str] = None
    parsed_data: Optional[ParsedFields] = None


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1, max_length=200)

class JobCreatedResponse(BaseModel):
    message: str
    job_id: int
    success: bool = True

class JobResponse(BaseModel):
    job_id: int
    title: str
    description: str
    company_name: str
    posted_by_id: int
    total_applications: int
    posted_on: datetime

class JobListResponse(BaseModel):
    jobs: List[JobResponse]
    total: int

class ApplicantSummary(BaseModel):
    user_id: int
    name: str
    email: str
    profile_headline: Optional[str] = None
    address: Optional[str] = None

class JobDetailResponse(BaseModel):
    job: JobResponse
    applicants: List[ApplicantSummary] = []


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
