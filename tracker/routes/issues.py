import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from tracker.database.store import IssueStore, get_store
from tracker.exceptions import TrackerError
from tracker.filters import parse_filters
from tracker.schemas import (
    REQUIRED_FIELDS,
    UPDATABLE_FIELDS,
    IssueCreate,
    IssueResponse,
    IssueUpdate,
)

logger = logging.getLogger(__name__)

# Business errors are reported in the body; every response is 200
router = APIRouter(prefix="/api/issues", tags=["issues"])

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def utcnow() -> datetime:
    # Millisecond precision, the same as serialized timestamps
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


async def _read_body(request: Request) -> dict[str, Any]:
    """Parse a JSON or form body; anything else counts as an empty body."""
    content_type = request.headers.get("content-type", "")

    try:
        if content_type.startswith("application/json"):
            body = await request.json()
        elif content_type.startswith(_FORM_TYPES):
            body = dict(await request.form())
        else:
            return {}
    except (ValueError, UnicodeDecodeError, MultiPartException, HTTPException):
        return {}

    return body if isinstance(body, dict) else {}


def _dump(issue: IssueResponse) -> dict[str, Any]:
    return issue.model_dump(mode="json", by_alias=True)


@router.get("/{project}")
async def list_issues(project: str, request: Request, store: IssueStore = Depends(get_store)):
    """List a project's issues, narrowed by exact-match query filters."""
    try:
        owner = await store.find_project_by_name(project)
        if not owner:
            return [{"error": "project not found"}]

        issue_filter = parse_filters(request.query_params.multi_items())
        if issue_filter.unmatchable:
            issues = []
        else:
            issues = await store.find_issues(owner.id, issue_filter.criteria)

        if issues is None:
            return {"error": "no issues found"}

        return [_dump(issue) for issue in issues]

    except TrackerError:
        logger.exception("Failed fetching issues", extra={"project": project})
        return {"error": "fail fetching issues"}


@router.post("/{project}")
async def create_issue(project: str, request: Request, store: IssueStore = Depends(get_store)):
    """Create an issue, creating the project on first use."""
    body = await _read_body(request)

    if not all(body.get(field) for field in REQUIRED_FIELDS):
        return {"error": "required field(s) missing"}

    try:
        payload = IssueCreate(
            issue_title=body["issue_title"],
            issue_text=body["issue_text"],
            created_by=body["created_by"],
            assigned_to=body.get("assigned_to") or "",
            status_text=body.get("status_text") or "",
        )

        # Find-or-create is not atomic; concurrent first posts may create two projects
        owner = await store.find_project_by_name(project)
        if not owner:
            owner = await store.create_project(project)
            logger.info("Project created", extra={"project": project, "project_id": owner.id})

        now = utcnow()
        issue = await store.create_issue(
            {
                **payload.model_dump(),
                "project_id": owner.id,
                "open": True,
                "created_on": now,
                "updated_on": now,
            }
        )

    except (TrackerError, ValidationError):
        logger.exception("Could not save issue", extra={"project": project})
        return {"error": "could not save issue"}

    logger.info("Issue created", extra={"project": project, "issue_id": issue.id})
    return _dump(issue)


@router.put("/{project}")
async def update_issue(project: str, request: Request, store: IssueStore = Depends(get_store)):
    """Merge the sent fields into an existing issue."""
    body = await _read_body(request)
    issue_id = body.get("_id")

    if not issue_id:
        return {"error": "missing _id"}

    # open=false alone is treated as nothing sent
    if not any(body.get(field) for field in UPDATABLE_FIELDS):
        return {"error": "no update field(s) sent", "_id": issue_id}

    updated = None
    try:
        changes = IssueUpdate.model_validate(body).model_dump(exclude_unset=True, exclude_none=True)

        owner = await store.find_project_by_name(project)
        if not owner:
            logger.warning("Update for unknown project", extra={"project": project, "issue_id": issue_id})
        else:
            changes["updated_on"] = utcnow()
            updated = await store.update_issue(str(issue_id), changes)

    except (TrackerError, ValidationError):
        logger.exception("Could not update issue", extra={"project": project, "issue_id": issue_id})

    if not updated:
        return {"error": "could not update", "_id": issue_id}

    return {"result": "successfully updated", "_id": issue_id}


@router.delete("/{project}")
async def delete_issue(project: str, request: Request, store: IssueStore = Depends(get_store)):
    """Delete an issue by id."""
    body = await _read_body(request)
    issue_id = body.get("_id")

    if not issue_id:
        return {"error": "missing _id"}

    deleted = None
    try:
        deleted = await store.delete_issue(str(issue_id))
    except TrackerError:
        logger.exception("Could not delete issue", extra={"project": project, "issue_id": issue_id})

    if not deleted:
        return {"error": "could not delete", "_id": issue_id}

    return {"result": "successfully deleted", "_id": issue_id}
