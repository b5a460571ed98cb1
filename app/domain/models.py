"""Core domain models for aggregated applications.

This module defines the data structures used throughout the application:
- NormalizedApplication: canonical application record shared by both sources
- ActorContext: who is asking for the collection (drives source selection)
- PositionType, SourceKind, ActorRole: enums tagging records and actors
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .status import CanonicalStatus


class PositionType(str, Enum):
    """Kind of posting an application targets."""

    JOB = "job"
    INTERNSHIP = "internship"


class SourceKind(str, Enum):
    """Ownership tag: which backend originated a record and handles its writes."""

    DIRECT_APPLICATION = "direct_application"
    INTERNSHIP_ENTITY = "internship_entity"


class ActorRole(str, Enum):
    """Roles that change how the collection is assembled."""

    RECRUITER = "recruiter"
    APPLICANT = "applicant"


class ActorContext(BaseModel):
    """Caller identity supplied once per aggregation request.

    The core never reads session or role state from anywhere else.
    """

    role: ActorRole = Field(..., description="Actor role (recruiter or applicant)")
    identity: str = Field(..., description="Actor identifier, usually an email address")

    @field_validator("identity")
    @classmethod
    def strip_identity(cls, v: str) -> str:
        """Strip whitespace from identity."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("identity cannot be empty or whitespace-only")
        return stripped

    @property
    def is_recruiter(self) -> bool:
        return self.role == ActorRole.RECRUITER

    model_config = {"frozen": True}


class NormalizedApplication(BaseModel):
    """Canonical application record built from either source.

    Instances are created fresh on every aggregation pass. The only field
    mutated afterwards is ``status``, by the mutation coordinator once a
    backend write has been acknowledged. ``source_kind`` never changes.

    Source-specific fields that the canonical shape does not cover are not
    stored here; they live in the ``raw_payloads`` side table of the
    aggregation result, keyed by ``id``.
    """

    id: str = Field(..., min_length=1, description="Identifier derived from the source record")
    display_name: Optional[str] = Field(None, description="Applicant (or poster) name")
    position_title: str = Field("", description="Title of the job or internship")
    company_name: str = Field("", description="Company offering the position")
    location: str = Field("", description="Position location")
    position_type: PositionType = Field(..., description="job or internship")
    status: str = Field(CanonicalStatus.PENDING.value, description="Display status")
    created_at: Optional[datetime] = Field(None, description="Creation time (UTC), None if unparseable")
    contact_email: Optional[str] = Field(None, description="Applicant email")
    contact_phone: Optional[str] = Field(None, description="Applicant phone number")
    resume_url: Optional[str] = Field(None, description="Link to the applicant's resume")
    cover_letter: Optional[str] = Field(None, description="Cover letter text")
    source_kind: SourceKind = Field(..., frozen=True, description="Backend that owns this record")

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v) -> str:
        """Store enum members as their plain string value."""
        if isinstance(v, CanonicalStatus):
            return v.value
        return v

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Ensure datetime is timezone-aware and in UTC."""
        if v is None:
            return None
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    model_config = {
        "json_schema_extra": {"example": {
            "id": "665f1c2ab1e4",
            "display_name": "Priya Sharma",
            "position_title": "Backend Intern",
            "company_name": "Example Corp",
            "location": "Remote",
            "position_type": "internship",
            "status": "reviewing",
            "created_at": "2024-01-01T00:00:00Z",
            "contact_email": "priya@example.com",
            "contact_phone": None,
            "resume_url": "https://cdn.example.com/resumes/priya.pdf",
            "cover_letter": None,
            "source_kind": "direct_application",
        }},
    }
