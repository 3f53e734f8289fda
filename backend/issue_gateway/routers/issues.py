"""REST API router that forwards issue and comment operations to GitHub."""

import json
from typing import Annotated, Any, TypeVar

import structlog
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError

from issue_gateway.adapters.github_client import GitHubClient, GitHubClientError
from issue_gateway.adapters.github_models import IssueUpdate, NewIssue
from issue_gateway.errors import InvalidRequestError, UpstreamRequestError
from issue_gateway.schemas.issues import (
    CommentCreateRequest,
    CommentListResponse,
    CommentResponse,
    IssueCreateRequest,
    IssueDetailResponse,
    IssueListResponse,
    IssueResponse,
    IssueUpdateRequest,
)
from issue_gateway.services.markdown_renderer import MarkdownRenderer

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/issues", tags=["issues"])

_M = TypeVar("_M", bound=BaseModel)

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
_LIST_FIELDS = frozenset({"labels", "assignees"})


def get_github_client(request: Request) -> GitHubClient:
    """FastAPI dependency, reads from app.state.github_client."""
    return request.app.state.github_client


def get_markdown_renderer(request: Request) -> MarkdownRenderer:
    """FastAPI dependency, reads from app.state.markdown_renderer."""
    return request.app.state.markdown_renderer


async def _read_body(request: Request) -> dict[str, Any]:
    """Decode a JSON or form-encoded request body into a plain dict.

    Form keys may use the ``labels[]`` convention for repeated values.
    An empty body decodes to ``{}``.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        data: dict[str, Any] = {}
        for key in form.keys():
            name = key.removesuffix("[]")
            values = form.getlist(key)
            data[name] = list(values) if name in _LIST_FIELDS or key != name else values[-1]
        return data

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise InvalidRequestError("Invalid request", details=f"Malformed JSON body: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidRequestError("Invalid request", details="Request body must be a JSON object")
    return data


def _parse(model: type[_M], data: dict[str, Any]) -> _M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise InvalidRequestError("Invalid request", details=str(exc)) from exc


def _upstream_failure(event: str, error: str, exc: GitHubClientError, **context: Any) -> UpstreamRequestError:
    logger.error(event, status_code=exc.status_code, error=str(exc), **context)
    return UpstreamRequestError(error, details=str(exc))


@router.post("", response_model=IssueResponse)
async def create_issue(
    request: Request,
    github: Annotated[GitHubClient, Depends(get_github_client)],
    renderer: Annotated[MarkdownRenderer, Depends(get_markdown_renderer)],
) -> IssueResponse:
    body = _parse(IssueCreateRequest, await _read_body(request))
    if not body.has_required_fields():
        raise InvalidRequestError("Missing required fields: owner, repo, and title are required")

    new_issue = NewIssue(
        title=body.title,
        body=renderer.render(body.body or ""),
        labels=body.labels if body.labels is not None else [],
        assignees=body.assignees if body.assignees is not None else [],
    )
    try:
        issue = await github.create_issue(body.owner, body.repo, new_issue.to_payload())
    except GitHubClientError as exc:
        raise _upstream_failure(
            "issue_create_failed", "Failed to create issue", exc, owner=body.owner, repo=body.repo
        ) from exc

    logger.info("issue_created", owner=body.owner, repo=body.repo)
    return IssueResponse(issue=issue, message="Issue created successfully")


@router.get("/{owner}/{repo}", response_model=IssueListResponse)
async def list_issues(
    owner: str,
    repo: str,
    github: Annotated[GitHubClient, Depends(get_github_client)],
    state: str = "open",
    per_page: int = 30,
    page: int = 1,
) -> IssueListResponse:
    try:
        issues = await github.list_issues(owner, repo, state=state, per_page=per_page, page=page)
    except GitHubClientError as exc:
        raise _upstream_failure("issues_fetch_failed", "Failed to fetch issues", exc, owner=owner, repo=repo) from exc
    return IssueListResponse(issues=issues, total_count=len(issues))


@router.get("/{owner}/{repo}/{issue_number}", response_model=IssueDetailResponse)
async def get_issue(
    owner: str,
    repo: str,
    issue_number: int,
    github: Annotated[GitHubClient, Depends(get_github_client)],
) -> IssueDetailResponse:
    try:
        issue = await github.get_issue(owner, repo, issue_number)
    except GitHubClientError as exc:
        raise _upstream_failure(
            "issue_fetch_failed", "Failed to fetch issue", exc, owner=owner, repo=repo, number=issue_number
        ) from exc
    return IssueDetailResponse(issue=issue)


@router.patch("/{owner}/{repo}/{issue_number}", response_model=IssueResponse)
async def update_issue(
    owner: str,
    repo: str,
    issue_number: int,
    request: Request,
    github: Annotated[GitHubClient, Depends(get_github_client)],
    renderer: Annotated[MarkdownRenderer, Depends(get_markdown_renderer)],
) -> IssueResponse:
    fields = _parse(IssueUpdateRequest, await _read_body(request)).provided_fields()
    if "body" in fields:
        fields["body"] = renderer.render(fields["body"])
    update = IssueUpdate(**fields)

    try:
        issue = await github.update_issue(owner, repo, issue_number, update.to_payload())
    except GitHubClientError as exc:
        raise _upstream_failure(
            "issue_update_failed", "Failed to update issue", exc, owner=owner, repo=repo, number=issue_number
        ) from exc

    logger.info("issue_updated", owner=owner, repo=repo, number=issue_number, fields=sorted(fields))
    return IssueResponse(issue=issue, message="Issue updated successfully")


@router.patch("/{owner}/{repo}/{issue_number}/close", response_model=IssueResponse)
async def close_issue(
    owner: str,
    repo: str,
    issue_number: int,
    github: Annotated[GitHubClient, Depends(get_github_client)],
) -> IssueResponse:
    try:
        issue = await github.update_issue(owner, repo, issue_number, IssueUpdate.close().to_payload())
    except GitHubClientError as exc:
        raise _upstream_failure(
            "issue_close_failed", "Failed to close issue", exc, owner=owner, repo=repo, number=issue_number
        ) from exc

    logger.info("issue_closed", owner=owner, repo=repo, number=issue_number)
    return IssueResponse(issue=issue, message="Issue closed successfully")


@router.post("/{owner}/{repo}/{issue_number}/comments", response_model=CommentResponse)
async def create_comment(
    owner: str,
    repo: str,
    issue_number: int,
    request: Request,
    github: Annotated[GitHubClient, Depends(get_github_client)],
    renderer: Annotated[MarkdownRenderer, Depends(get_markdown_renderer)],
) -> CommentResponse:
    body = _parse(CommentCreateRequest, await _read_body(request)).body
    if not body:
        raise InvalidRequestError("Comment body is required")

    try:
        comment = await github.create_comment(owner, repo, issue_number, renderer.render(body))
    except GitHubClientError as exc:
        raise _upstream_failure(
            "comment_create_failed", "Failed to add comment", exc, owner=owner, repo=repo, number=issue_number
        ) from exc

    logger.info("comment_created", owner=owner, repo=repo, number=issue_number)
    return CommentResponse(comment=comment, message="Comment added successfully")


@router.get("/{owner}/{repo}/{issue_number}/comments", response_model=CommentListResponse)
async def list_comments(
    owner: str,
    repo: str,
    issue_number: int,
    github: Annotated[GitHubClient, Depends(get_github_client)],
) -> CommentListResponse:
    try:
        comments = await github.list_comments(owner, repo, issue_number)
    except GitHubClientError as exc:
        raise _upstream_failure(
            "comments_fetch_failed", "Failed to fetch comments", exc, owner=owner, repo=repo, number=issue_number
        ) from exc
    return CommentListResponse(comments=comments)
