"""
Database Schemas

Pydantic models for the two MongoDB collections and the request bodies that
feed them. Field names are snake_case in the database and camelCase on the
wire (projectType, titleEn, createdAt, ...); both spellings are accepted on
input.

Collections:
- Submission -> "submission"
- Project -> "project"
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    CONTACTED = "contacted"
    QUOTED = "quoted"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# -----------------------------
# Submissions
# -----------------------------
class AttachmentRef(CamelModel):
    url: str = Field(..., description="Reference produced by the upload step")
    type: Optional[str] = Field(None, description="Declared media type, e.g. image/png")


class SubmissionCreate(CamelModel):
    """Contact form payload. Required fields are checked by the intake step
    so a missing one can be reported by name."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    project_type: Optional[str] = None
    description: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    language: Optional[str] = None
    images: Optional[List[str]] = None
    files: Optional[List[str]] = None
    attachments: Optional[List[Union[str, AttachmentRef]]] = None


class SubmissionRecord(CamelModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., description="Customer name")
    email: str = Field(..., description="Contact email")
    phone: str = Field(..., description="Contact phone")
    project_type: str = Field(..., description="Category label chosen on the form")
    description: str = Field(..., description="Free-text project description")
    budget: str = Field("", description="Free-text budget range")
    timeline: str = Field("", description="Free-text timeline")
    language: str = Field("en", description="Locale the form was filled in")
    images: List[str] = Field(default_factory=list, description="Image attachment references")
    files: List[str] = Field(default_factory=list, description="Document attachment references")
    status: SubmissionStatus = Field(SubmissionStatus.PENDING, description="Follow-up state")


class Submission(SubmissionRecord):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SubmissionCreated(CamelModel):
    success: bool = True
    message: str = "Submission received successfully"
    id: str
    images_count: int = 0
    files_count: int = 0


class StatusUpdate(CamelModel):
    status: SubmissionStatus


# -----------------------------
# Projects
# -----------------------------
_MEASURES = ("length", "width", "height")


class Dimensions(CamelModel):
    """Stored as one sub-document. Keys beyond the usual four are kept."""

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="allow")

    length: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    unit: str = "cm"

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler):
        data = handler(self)
        return {k: v for k, v in data.items() if v is not None or k not in _MEASURES}


def _coerce_featured(value):
    return value is True


class ProjectCreate(CamelModel):
    title_en: Optional[str] = None
    title_am: Optional[str] = None
    description_en: Optional[str] = None
    description_am: Optional[str] = None
    category: Optional[str] = None
    materials: Optional[List[str]] = None
    dimensions: Optional[Dimensions] = None
    images: Optional[List[str]] = None
    featured: bool = False

    @field_validator("featured", mode="before")
    @classmethod
    def featured_is_strict_true(cls, v):
        return _coerce_featured(v)


class ProjectUpdate(CamelModel):
    title_en: Optional[str] = None
    title_am: Optional[str] = None
    description_en: Optional[str] = None
    description_am: Optional[str] = None
    category: Optional[str] = None
    materials: Optional[List[str]] = None
    dimensions: Optional[Dimensions] = None
    images: Optional[List[str]] = None
    featured: Optional[bool] = None

    @field_validator("featured", mode="before")
    @classmethod
    def featured_is_strict_true(cls, v):
        return _coerce_featured(v)


class ProjectRecord(CamelModel):
    title_en: str = Field(..., description="English title")
    title_am: str = Field(..., description="Amharic title")
    description_en: str = Field(..., description="English description")
    description_am: str = Field(..., description="Amharic description")
    category: str = Field(..., description="Catalog category, e.g. living, bedroom")
    materials: List[str] = Field(default_factory=list, description="Material labels")
    dimensions: Optional[Dimensions] = Field(None, description="Stored as one sub-document")
    images: List[str] = Field(default_factory=list, description="Image references")
    featured: bool = Field(False, description="Shown on the home page")


class Project(ProjectRecord):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# -----------------------------
# Admin
# -----------------------------
class DashboardStats(CamelModel):
    total_projects: int
    featured_projects: int
    total_submissions: int
    submissions_by_status: Dict[str, int]
