"""
Schemas module - Request/Response schemas for API endpoints.

Everything lives in schemas.py; ParsedFields is also the internal record
passed between the resume parser client and the profile store.
"""

from jobboard.schemas.schemas import ParsedFields, UserType

__all__ = ["ParsedFields", "UserType"]
