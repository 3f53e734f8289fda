"""Pydantic models for the payloads sent to the GitHub issues API."""

from typing import Any

from pydantic import BaseModel, Field


class NewIssue(BaseModel):
    # title, labels and assignees go upstream as received; GitHub validates them.
    title: Any
    body: str = ""
    labels: Any = Field(default_factory=list)
    assignees: Any = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()


class IssueUpdate(BaseModel):
    """Partial issue update. Fields never assigned stay out of the payload."""

    title: Any = None
    body: str | None = None
    state: Any = None
    labels: Any = None
    assignees: Any = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)

    @classmethod
    def close(cls) -> "IssueUpdate":
        return cls(state="closed")
