from datetime import datetime
from typing import Any

from pydantic import BaseModel

# --- Request models ---
# Every field is optional at the parsing layer so that missing required fields
# are reported with the route's own message instead of a generic validation error.
# title, state, labels and assignees are not shape-checked here; GitHub is the
# judge of those values.


class IssueCreateRequest(BaseModel):
    owner: str | None = None
    repo: str | None = None
    title: Any = None
    body: str | None = None
    labels: Any = None
    assignees: Any = None

    def has_required_fields(self) -> bool:
        return bool(self.owner and self.repo and self.title)


class IssueUpdateRequest(BaseModel):
    """Partial update. A field counts as provided when it is present and not null."""

    title: Any = None
    body: str | None = None
    state: Any = None
    labels: Any = None
    assignees: Any = None

    def provided_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class CommentCreateRequest(BaseModel):
    body: str | None = None


# --- Response envelopes ---
# Upstream payloads are passed through untouched, hence the plain dict types.


class IssueResponse(BaseModel):
    success: bool = True
    issue: dict[str, Any]
    message: str


class IssueDetailResponse(BaseModel):
    success: bool = True
    issue: dict[str, Any]


class IssueListResponse(BaseModel):
    success: bool = True
    issues: list[dict[str, Any]]
    total_count: int


class CommentResponse(BaseModel):
    success: bool = True
    comment: dict[str, Any]
    message: str


class CommentListResponse(BaseModel):
    success: bool = True
    comments: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    status: str
    message: str
    version: str
    timestamp: datetime
