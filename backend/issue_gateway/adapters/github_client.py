"""HTTP adapter for the issues endpoints of the GitHub REST API v3."""

from typing import Any

import httpx

JsonObject = dict[str, Any]


class GitHubClientError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubClient:
    _BASE_URL = "https://api.github.com"

    def __init__(self, token: str | None = None, base_url: str | None = None) -> None:
        headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "issue-gateway",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(base_url=(base_url or self._BASE_URL).rstrip("/"), headers=headers)

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._http.is_closed:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    async def create_issue(self, owner: str, repo: str, fields: JsonObject) -> JsonObject:
        """Create an issue.

        Args:
            owner: Repository owner (user or organisation).
            repo: Repository name.
            fields: Issue attributes sent as the request body (``title``, ``body``,
                ``labels``, ``assignees``).

        Returns:
            The issue object exactly as GitHub returned it.

        Raises:
            GitHubClientError: On any non-2xx response or transport failure.
        """
        return _expect_object(await self._request("POST", f"/repos/{owner}/{repo}/issues", json=fields))

    async def list_issues(
        self,
        owner: str,
        repo: str,
        state: str = "open",
        per_page: int = 30,
        page: int = 1,
    ) -> list[JsonObject]:
        params = {"state": state, "per_page": per_page, "page": page}
        return _expect_list(await self._request("GET", f"/repos/{owner}/{repo}/issues", params=params))

    async def get_issue(self, owner: str, repo: str, number: int) -> JsonObject:
        return _expect_object(await self._request("GET", f"/repos/{owner}/{repo}/issues/{number}"))

    async def update_issue(self, owner: str, repo: str, number: int, fields: JsonObject) -> JsonObject:
        """Apply a partial update; only the keys present in ``fields`` are changed upstream."""
        return _expect_object(await self._request("PATCH", f"/repos/{owner}/{repo}/issues/{number}", json=fields))

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def create_comment(self, owner: str, repo: str, number: int, body: str) -> JsonObject:
        resp = await self._request("POST", f"/repos/{owner}/{repo}/issues/{number}/comments", json={"body": body})
        return _expect_object(resp)

    async def list_comments(self, owner: str, repo: str, number: int) -> list[JsonObject]:
        return _expect_list(await self._request("GET", f"/repos/{owner}/{repo}/issues/{number}/comments"))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise GitHubClientError(f"GitHub API request failed: {exc}") from exc
        self._raise_for_status(resp)
        try:
            return resp.json()
        except ValueError as exc:
            raise GitHubClientError(
                f"GitHub API returned invalid JSON: {exc}",
                status_code=resp.status_code,
            ) from exc

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_error:
            raise GitHubClientError(
                f"GitHub API error {resp.status_code}: {_error_message(resp)}",
                status_code=resp.status_code,
            )


def _error_message(resp: httpx.Response) -> str:
    """Prefer the ``message`` field GitHub puts in error bodies; fall back to the raw text."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return resp.text


def _expect_object(data: Any) -> JsonObject:
    if not isinstance(data, dict):
        raise GitHubClientError(f"GitHub API returned {type(data).__name__}, expected a JSON object")
    return data


def _expect_list(data: Any) -> list[JsonObject]:
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise GitHubClientError("GitHub API returned an unexpected payload, expected a JSON array of objects")
    return data
