"""
GitHub Client
=============
Thin synchronous wrapper around the four Actions REST endpoints the
canceller needs: list runs, get run, cancel run and delete run.

list/get raise GitHubAPIError on any non-2xx answer. cancel/delete never
raise on HTTP status: the caller branches on the returned code.
Transport failures are always wrapped in GitHubAPIError.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import httpx

from run_canceller.core import config
from run_canceller.core.constants import ACCEPT_HEADER, API_VERSION, MAX_PER_PAGE, USER_AGENT

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when a GitHub API call fails or cannot be sent."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


@dataclass
class ApiResponse:
    status_code: int
    body: str = ""


class GitHubClient:
    """
    Client bound to a single repository.

    Usable as a context manager; the underlying httpx.Client is closed on exit.
    """

    def __init__(
        self,
        token: str,
        repo: str,
        base_url: str = config.GITHUB_API_URL,
        timeout: float = config.HTTP_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.repo = repo
        self.headers = {
            "Accept": ACCEPT_HEADER,
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": USER_AGENT,
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.Client(
            base_url=base_url,
            headers=self.headers,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _runs_path(self, run_id: Optional[int] = None) -> str:
        path = f"/repos/{self.repo}/actions/runs"
        if run_id is not None:
            path += f"/{run_id}"
        return path

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.debug("%s %s %s", method, path, kwargs.get("params") or "")
        try:
            return self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise GitHubAPIError(f"{method} {path} failed: {e}") from e

    def _get_json(self, path: str, **kwargs) -> Dict[str, Any]:
        response = self._request("GET", path, **kwargs)
        if not response.is_success:
            raise GitHubAPIError(
                f"GET {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"GET {path} returned invalid JSON: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    def list_runs(self, per_page: int = MAX_PER_PAGE, page: int = 1) -> Tuple[int, List[Dict[str, Any]]]:
        """Fetch one page of workflow runs. Returns (total_count, runs)."""
        data = self._get_json(self._runs_path(), params={"per_page": per_page, "page": page})
        return int(data.get("total_count") or 0), list(data.get("workflow_runs") or [])

    def list_all_runs(self, per_page: int = MAX_PER_PAGE) -> Tuple[int, List[Dict[str, Any]]]:
        """Fetch every page of workflow runs, stopping at an empty or short page."""
        total_count, first = self.list_runs(per_page=per_page, page=1)
        items: List[Dict[str, Any]] = []
        seen = set()
        page = 1
        batch = first

        # Runs created mid-listing shift later pages; keep the first copy of each id
        while True:
            for item in batch:
                run_id = item.get("id") if isinstance(item, dict) else None
                if run_id is not None and run_id in seen:
                    logger.debug("Dropping duplicate run %s from page %d", run_id, page)
                    continue
                seen.add(run_id)
                items.append(item)

            if len(batch) < per_page or page * per_page >= total_count:
                break
            page += 1
            _, batch = self.list_runs(per_page=per_page, page=page)
            if not batch:
                break

        logger.debug("Fetched %d runs over %d page(s)", len(items), page)
        return total_count, items

    def get_run(self, run_id: int) -> Dict[str, Any]:
        return self._get_json(self._runs_path(run_id))

    def get_run_status(self, run_id: int) -> Optional[str]:
        """Current status of a run, or None when it cannot be fetched."""
        try:
            return self.get_run(run_id).get("status")
        except GitHubAPIError as e:
            logger.warning("Could not fetch status of run %s: %s", run_id, e)
            return None

    def cancel_run(self, run_id: int) -> ApiResponse:
        response = self._request("POST", f"{self._runs_path(run_id)}/cancel")
        return ApiResponse(response.status_code, response.text.strip())

    def delete_run(self, run_id: int) -> ApiResponse:
        response = self._request("DELETE", self._runs_path(run_id))
        return ApiResponse(response.status_code, response.text.strip())
