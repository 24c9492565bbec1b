from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

UTC = timezone.utc

# Fields a client may change through PUT
UPDATABLE_FIELDS = (
    "issue_title",
    "issue_text",
    "created_by",
    "assigned_to",
    "status_text",
    "open",
)

REQUIRED_FIELDS = ("issue_title", "issue_text", "created_by")

TEXT_FIELDS = ("issue_title", "issue_text", "created_by", "assigned_to", "status_text")


def _bool_to_text(value):
    # JSON true/false in a text field is stored as "true"/"false"
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class IssueCreate(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    issue_title: str = Field(min_length=1)
    issue_text: str = Field(min_length=1)
    created_by: str = Field(min_length=1)
    assigned_to: str = ""
    status_text: str = ""

    text_from_bool = field_validator(*TEXT_FIELDS, mode="before")(_bool_to_text)


class IssueUpdate(BaseModel):
    """Partial update; only the fields a client actually sent are applied."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    issue_title: Optional[str] = None
    issue_text: Optional[str] = None
    created_by: Optional[str] = None
    assigned_to: Optional[str] = None
    status_text: Optional[str] = None
    open: Optional[bool] = None

    text_from_bool = field_validator(*TEXT_FIELDS, mode="before")(_bool_to_text)


class IssueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(serialization_alias="_id")
    project_id: str = Field(serialization_alias="projectId")
    issue_title: str
    issue_text: str
    created_by: str
    assigned_to: str = ""
    status_text: str = ""
    open: bool = True
    created_on: datetime
    updated_on: datetime

    @field_serializer("created_on", "updated_on", when_used="json")
    def _format_datetime(self, dt: datetime, _info):
        """
        UTC with millisecond precision, 'YYYY-MM-DDTHH:MM:SS.mmmZ'
        """
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
