"""
Request normalization for submissions and projects.

Turns raw request bodies into the records that get persisted. Nothing here
touches the database, so a validation failure always means zero writes.
"""

import os
from typing import Any, Dict, Optional, Sequence, Tuple

from attachments import classify_attachments
from schemas import (
    ProjectCreate,
    ProjectRecord,
    ProjectUpdate,
    SubmissionCreate,
    SubmissionRecord,
    SubmissionStatus,
)

def default_language() -> str:
    return os.getenv("DEFAULT_LANGUAGE", "").strip() or "en"

# (attribute, wire name)
SUBMISSION_REQUIRED: Sequence[Tuple[str, str]] = (
    ("name", "name"),
    ("email", "email"),
    ("phone", "phone"),
    ("project_type", "projectType"),
    ("description", "description"),
)

PROJECT_REQUIRED: Sequence[Tuple[str, str]] = (
    ("title_en", "titleEn"),
    ("title_am", "titleAm"),
    ("description_en", "descriptionEn"),
    ("description_am", "descriptionAm"),
    ("category", "category"),
    ("materials", "materials"),
    ("images", "images"),
)


class MissingFieldError(ValueError):
    def __init__(self, field: str, required: Sequence[str]):
        self.field = field
        self.required = list(required)
        super().__init__(f"Missing required field: {field}")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0 or any(_is_blank(item) for item in value)
    return False


def first_missing_field(payload, required: Sequence[Tuple[str, str]]) -> Optional[str]:
    for attr, wire in required:
        if _is_blank(getattr(payload, attr, None)):
            return wire
    return None


def check_required(payload, required: Sequence[Tuple[str, str]]) -> None:
    missing = first_missing_field(payload, required)
    if missing is not None:
        raise MissingFieldError(missing, [wire for _, wire in required])


def build_submission(payload: SubmissionCreate) -> SubmissionRecord:
    """Validate and normalize a contact form payload.

    Attachments are classified here, before anything is written. Any status
    the client sent is ignored: new submissions always start as pending.
    """
    check_required(payload, SUBMISSION_REQUIRED)

    images = list(payload.images or [])
    files = list(payload.files or [])
    if payload.attachments:
        classified_images, classified_files = classify_attachments(payload.attachments)
        images.extend(classified_images)
        files.extend(classified_files)

    language = (payload.language or "").strip() or default_language()

    return SubmissionRecord(
        name=payload.name.strip(),
        email=payload.email.strip(),
        phone=payload.phone.strip(),
        project_type=payload.project_type,
        description=payload.description,
        budget=payload.budget or "",
        timeline=payload.timeline or "",
        language=language,
        images=images,
        files=files,
        status=SubmissionStatus.PENDING,
    )


def build_project(payload: ProjectCreate) -> ProjectRecord:
    check_required(payload, PROJECT_REQUIRED)
    return ProjectRecord(**payload.model_dump())


def build_project_patch(payload: ProjectUpdate) -> Dict[str, Any]:
    """Changes to $set for a partial project update.

    Only fields present in the request are included; a required field that
    is present must still be non-empty.
    """
    changes = payload.model_dump(exclude_unset=True)
    for attr, wire in PROJECT_REQUIRED:
        if attr in changes and _is_blank(changes[attr]):
            raise MissingFieldError(wire, [wire])
    return changes
