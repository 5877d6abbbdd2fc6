import logging
import os
from typing import List, Optional

from bson import ObjectId
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

import database
from attachments import UnsupportedAttachment
from auth import admin_token_required
from database import (
    count_documents,
    create_document,
    delete_document,
    get_document,
    get_documents,
    update_document,
)
from intake import MissingFieldError, build_project, build_project_patch, build_submission
from schemas import (
    DashboardStats,
    Project,
    ProjectCreate,
    ProjectUpdate,
    StatusUpdate,
    Submission,
    SubmissionCreate,
    SubmissionCreated,
    SubmissionStatus,
)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Custom Furniture Studio API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

SUBMISSIONS = "submission"
PROJECTS = "project"


# -----------------------------
# Error handling
# -----------------------------
@app.exception_handler(PyMongoError)
def database_error_handler(request, exc):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Database operation failed"})


def _field_name(loc) -> str:
    # loc is ("body", "images", 0) and the like
    return ".".join(str(p) for p in loc[1:]) or ".".join(str(p) for p in loc)


@app.exception_handler(RequestValidationError)
def request_validation_handler(request, exc):
    fields = [_field_name(err.get("loc", ())) for err in exc.errors()]
    logger.info("Rejected %s %s: invalid %s", request.method, request.url.path, fields)
    return JSONResponse(
        status_code=400,
        content={"detail": {"error": "invalid_request", "fields": fields}},
    )


def missing_field(e: MissingFieldError) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"error": "missing_field", "field": e.field, "required": e.required},
    )


# -----------------------------
# Utilities
# -----------------------------
def parse_object_id(value: str) -> ObjectId:
    if not ObjectId.is_valid(value):
        raise HTTPException(status_code=400, detail="Invalid id")
    return ObjectId(value)


def lookup_id(value: str) -> Optional[ObjectId]:
    # fetch-by-id treats a malformed id as one that cannot match
    return ObjectId(value) if ObjectId.is_valid(value) else None


def require_id(value: Optional[str]) -> ObjectId:
    if not value or not value.strip():
        raise HTTPException(status_code=400, detail="id is required")
    return parse_object_id(value.strip())


def to_submission(doc) -> Submission:
    doc["id"] = str(doc.pop("_id"))
    return Submission(**doc)


def to_project(doc) -> Project:
    doc["id"] = str(doc.pop("_id"))
    return Project(**doc)


# -----------------------------
# Root & health
# -----------------------------
@app.get("/")
def read_root():
    return {"message": "Custom Furniture Studio API running"}


@app.get("/test")
def test_database():
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_url": None,
        "database_name": None,
        "connection_status": "Not Connected",
        "collections": []
    }
    if database.db is None:
        return response
    response["database"] = "✅ Available"
    response["database_url"] = "✅ Set" if os.getenv("DATABASE_URL") else "❌ Not Set"
    response["database_name"] = os.getenv("DATABASE_NAME") or ""
    try:
        response["collections"] = database.db.list_collection_names()
        response["database"] = "✅ Connected & Working"
        response["connection_status"] = "Connected"
    except PyMongoError:
        logger.exception("Database health check failed")
        response["database"] = "⚠️ Connected but Error"
    return response


# -----------------------------
# Contact submissions
# -----------------------------
@app.post("/contact", status_code=201, response_model=SubmissionCreated)
def create_submission(payload: SubmissionCreate):
    try:
        record = build_submission(payload)
    except MissingFieldError as e:
        logger.info("Submission rejected: missing %s", e.field)
        raise missing_field(e)
    except UnsupportedAttachment as e:
        logger.info("Submission rejected: attachment %d has type %r", e.index, e.declared)
        raise HTTPException(
            status_code=400,
            detail={"error": "unsupported_attachment", "index": e.index, "type": e.declared},
        )

    inserted_id = create_document(SUBMISSIONS, record)
    logger.info(
        "Submission %s created for %s (%d images, %d files)",
        inserted_id, record.name, len(record.images), len(record.files),
    )
    return SubmissionCreated(
        id=inserted_id,
        images_count=len(record.images),
        files_count=len(record.files),
    )


@app.get("/contact", response_model=List[Submission], dependencies=[Depends(admin_token_required)])
def list_submissions(
    status: Optional[SubmissionStatus] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
):
    filter_dict = {"status": status.value} if status else None
    return [to_submission(d) for d in get_documents(SUBMISSIONS, filter_dict, limit=limit)]


@app.get("/contact/{submission_id}", response_model=Submission, dependencies=[Depends(admin_token_required)])
def get_submission(submission_id: str):
    oid = lookup_id(submission_id)
    doc = get_document(SUBMISSIONS, oid) if oid is not None else None
    if doc is None:
        raise HTTPException(status_code=404, detail="Submission not found")
    return to_submission(doc)


@app.patch("/contact/{submission_id}", response_model=Submission, dependencies=[Depends(admin_token_required)])
def update_submission_status(submission_id: str, payload: StatusUpdate):
    oid = parse_object_id(submission_id)
    updated = update_document(SUBMISSIONS, oid, {"status": payload.status.value})
    if updated is None:
        raise HTTPException(status_code=404, detail="Submission not found")
    logger.info("Submission %s moved to %s", submission_id, payload.status.value)
    return to_submission(updated)


@app.delete("/contact", dependencies=[Depends(admin_token_required)])
def delete_submission(id: Optional[str] = None):
    oid = require_id(id)
    if not delete_document(SUBMISSIONS, oid):
        raise HTTPException(status_code=404, detail="Submission not found")
    logger.info("Submission %s deleted", oid)
    return {"success": True}


# -----------------------------
# Project catalog
# -----------------------------
@app.get("/projects", response_model=List[Project])
def list_projects(
    category: Optional[str] = None,
    featured: Optional[bool] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
):
    filter_dict = {}
    if category:
        filter_dict["category"] = category
    if featured is not None:
        filter_dict["featured"] = featured
    return [to_project(d) for d in get_documents(PROJECTS, filter_dict, limit=limit)]


@app.get("/projects/featured", response_model=List[Project])
def list_featured_projects(limit: Optional[int] = Query(default=None, ge=1, le=500)):
    return [to_project(d) for d in get_documents(PROJECTS, {"featured": True}, limit=limit)]


@app.get("/projects/{project_id}", response_model=Project)
def get_project(project_id: str):
    oid = lookup_id(project_id)
    doc = get_document(PROJECTS, oid) if oid is not None else None
    if doc is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return to_project(doc)


@app.post("/projects", status_code=201, response_model=Project, dependencies=[Depends(admin_token_required)])
def create_project(payload: ProjectCreate):
    try:
        record = build_project(payload)
    except MissingFieldError as e:
        raise missing_field(e)
    inserted_id = create_document(PROJECTS, record)
    logger.info("Project %s created (%s)", inserted_id, record.title_en)
    return to_project(get_document(PROJECTS, ObjectId(inserted_id)))


@app.patch("/projects/{project_id}", response_model=Project, dependencies=[Depends(admin_token_required)])
def update_project(project_id: str, payload: ProjectUpdate):
    oid = parse_object_id(project_id)
    try:
        changes = build_project_patch(payload)
    except MissingFieldError as e:
        raise missing_field(e)
    if changes:
        updated = update_document(PROJECTS, oid, changes)
    else:
        updated = get_document(PROJECTS, oid)
    if updated is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return to_project(updated)


@app.delete("/projects", dependencies=[Depends(admin_token_required)])
def delete_project(id: Optional[str] = None):
    oid = require_id(id)
    if not delete_document(PROJECTS, oid):
        raise HTTPException(status_code=404, detail="Project not found")
    logger.info("Project %s deleted", oid)
    return {"success": True}


# -----------------------------
# Admin dashboard
# -----------------------------
@app.get("/admin/verify", dependencies=[Depends(admin_token_required)])
def verify_admin():
    return {"valid": True}


@app.get("/admin/stats", response_model=DashboardStats, dependencies=[Depends(admin_token_required)])
def dashboard_stats():
    by_status = {s.value: count_documents(SUBMISSIONS, {"status": s.value}) for s in SubmissionStatus}
    return DashboardStats(
        total_projects=count_documents(PROJECTS),
        featured_projects=count_documents(PROJECTS, {"featured": True}),
        total_submissions=count_documents(SUBMISSIONS),
        submissions_by_status=by_status,
    )


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
