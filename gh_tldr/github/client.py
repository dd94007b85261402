"""GitHub API client with search pagination and rate limit logging."""

from typing import Any

import aiohttp

from gh_tldr.core.logging import get_logger
from gh_tldr.shared.exceptions import GitHubAPIError

logger = get_logger(__name__)


class GitHubClient:
    """Async GitHub REST API client.

    Every call is a single attempt: failures raise ``GitHubAPIError`` and the
    caller decides whether the failure is fatal.

    Attributes:
        BASE_URL: Default GitHub API base URL
        PER_PAGE: Page size for search requests
        MAX_PAGES: Default cap on pages fetched per search
    """

    BASE_URL = "https://api.github.com"
    PER_PAGE = 100
    MAX_PAGES = 10

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        timeout_seconds: float = 30,
        max_pages: int | None = None,
    ) -> None:
        """Initialize GitHub client with authentication token.

        Args:
            token: GitHub personal access token
            base_url: API base URL override (GitHub Enterprise)
            timeout_seconds: Total timeout applied to each request
            max_pages: Cap on pages fetched per search
        """
        self.token = token
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_pages = max_pages or self.MAX_PAGES
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "GitHubClient":
        """Context manager entry: create aiohttp session.

        Returns:
            Self for use in async with statement
        """
        self.session = aiohttp.ClientSession(
            headers={
                "Authorization": f"token {self.token}",
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": "gh-tldr",
            },
            timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Context manager exit: close aiohttp session."""
        if self.session:
            await self.session.close()

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """Issue one GET request and decode the JSON body.

        Args:
            path: API path relative to the base URL (e.g. "search/issues")
            params: Query string parameters

        Returns:
            Decoded JSON response

        Raises:
            GitHubAPIError: On non-200 status, network error, timeout or
                undecodable body
        """
        if not self.session:
            raise GitHubAPIError("Session not initialized")

        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            async with self.session.get(url, params=params) as response:
                if response.status == 200:
                    return await response.json()
                if response.status in (403, 429):
                    remaining = response.headers.get("x-ratelimit-remaining")
                    reset = response.headers.get("x-ratelimit-reset")
                    logger.warning(
                        "github.ratelimit",
                        path=path,
                        remaining=remaining,
                        reset=reset,
                        status=response.status,
                    )
                    if remaining == "0" or response.status == 429:
                        raise GitHubAPIError(f"Rate limited: {response.status} ({path})")
                    raise GitHubAPIError(f"Forbidden: {response.status} ({path})")
                if response.status == 401:
                    raise GitHubAPIError(f"Invalid token: {response.status}")
                raise GitHubAPIError(f"API error: {response.status} ({path})")
        except aiohttp.ClientError as e:
            raise GitHubAPIError(f"Network error: {e}") from e
        except TimeoutError as e:
            raise GitHubAPIError(f"Request timed out: {path}") from e
        except ValueError as e:
            raise GitHubAPIError(f"Malformed response from {path}: {e}") from e

    async def search(self, endpoint: str, params: dict[str, str]) -> list[dict[str, Any]]:
        """Run a search and collect every page up to the page cap.

        Pages are requested one after another; fetching stops at the first
        page holding fewer than ``PER_PAGE`` items or after ``max_pages``.

        Args:
            endpoint: Search endpoint ("search/issues" or "search/commits")
            params: Query parameters, typically ``{"q": ...}``

        Returns:
            Items of all fetched pages, in page order

        Raises:
            GitHubAPIError: If any page request fails or lacks an items list
        """
        items: list[dict[str, Any]] = []

        for page in range(1, self.max_pages + 1):
            data = await self._get_json(
                endpoint,
                {**params, "page": str(page), "per_page": str(self.PER_PAGE)},
            )
            if not isinstance(data, dict) or not isinstance(data.get("items"), list):
                raise GitHubAPIError(f"Malformed search response from {endpoint}")

            page_items: list[dict[str, Any]] = data["items"]
            items.extend(page_items)

            logger.debug(
                "github.search.page",
                endpoint=endpoint,
                page=page,
                count=len(page_items),
            )

            if len(page_items) < self.PER_PAGE:
                break

        return items

    async def get_authenticated_user(self) -> str:
        """Get authenticated user's username.

        Returns:
            GitHub username of the authenticated user

        Raises:
            GitHubAPIError: If authentication fails or network error occurs
        """
        data = await self._get_json("user")
        username: str = data["login"]
        return username

    async def list_authenticated_user_orgs(self) -> list[str]:
        """List organizations of the authenticated user, private memberships included."""
        data: list[dict[str, Any]] = await self._get_json("user/orgs")
        return [org["login"] for org in data]

    async def list_public_orgs(self, username: str) -> list[str]:
        """List public organization memberships of any user."""
        data: list[dict[str, Any]] = await self._get_json(f"users/{username}/orgs")
        return [org["login"] for org in data]

    async def list_repositories(
        self, owner: str, is_user: bool, public_only: bool
    ) -> list[dict[str, Any]]:
        """List an owner's repositories, newest first (single page of 100).

        Args:
            owner: User login or organization name
            is_user: Whether ``owner`` is a user account rather than an org
            public_only: Restrict to public repositories

        Returns:
            Raw repository dictionaries
        """
        prefix = "users" if is_user else "orgs"
        params = {
            "type": "public" if public_only else "all",
            "sort": "created",
            "direction": "desc",
            "per_page": str(self.PER_PAGE),
        }
        data: list[dict[str, Any]] = await self._get_json(f"{prefix}/{owner}/repos", params)
        return data

    async def get_pull_request_detail(self, org: str, repo: str, number: int) -> dict[str, int]:
        """Fetch change statistics for one pull request.

        Returns:
            Dictionary with ``additions``, ``deletions`` and ``changed_files``
        """
        data: dict[str, Any] = await self._get_json(f"repos/{org}/{repo}/pulls/{number}")
        return {
            "additions": data["additions"],
            "deletions": data["deletions"],
            "changed_files": data["changed_files"],
        }
