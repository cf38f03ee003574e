"""GitHub REST API client implementation built on aiohttp."""
import asyncio
import logging
from typing import Any, List, Optional

import aiohttp

from branchstats.domain.errors import DecodeError, RemoteError, TransportError
from branchstats.domain.github_interface import IGitHubClient
from branchstats.domain.models import BranchDescriptor, RepositoryDescriptor


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"

# Marks the start of the optional segment in GitHub's URI templates
TEMPLATE_PLACEHOLDER = "{"


def normalize_branches_url(branches_url: str) -> str:
    """Turn a templated ``branches_url`` into a concrete URL.

    Everything from the first ``{`` onward is dropped, so
    ``.../branches{/branch}`` becomes ``.../branches``. A URL without a
    placeholder is returned unchanged.
    """
    index = branches_url.find(TEMPLATE_PLACEHOLDER)
    if index == -1:
        return branches_url
    return branches_url[:index]


def _require_string(item: Any, key: str, what: str) -> str:
    if not isinstance(item, dict):
        raise DecodeError(f"Expected a JSON object for {what}, got {type(item).__name__}")
    value = item.get(key)
    if not isinstance(value, str):
        raise DecodeError(f"Missing or invalid '{key}' field in {what}")
    return value


def _require_list(payload: Any, what: str) -> list:
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a JSON array of {what}, got {type(payload).__name__}")
    return payload


class GitHubRestClient(IGitHubClient):
    """GitHub REST API client.

    Implements the IGitHubClient port. One aiohttp session is shared by all
    calls, so concurrent branch fetches reuse the same connection pool.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        request_timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """Initialize GitHub client.

        Args:
            base_url: API root, e.g. https://api.github.com
            request_timeout: Deadline in seconds for each request; None or 0 waits forever
            session: Existing session to use instead of creating one lazily
        """
        self._base_url = base_url.rstrip("/")
        self._request_timeout = request_timeout or None
        self._timeout = aiohttp.ClientTimeout(total=self._request_timeout)
        self._session = session
        self._owns_session = session is None

    async def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                headers={"Accept": "application/vnd.github.v3+json"}
            )
        return self._session

    async def _get_json(self, url: str) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            TransportError: When no response was received
            RemoteError: When GitHub answered with a non-success status
            DecodeError: When the body (or the error payload) is not usable JSON
        """
        session = await self._init_session()
        logger.debug(f"GET {url}")

        try:
            async with session.get(url, timeout=self._timeout) as response:
                if not 200 <= response.status < 300:
                    raise RemoteError(await self._read_error_message(response), response.status)
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise DecodeError(f"Invalid JSON from {url}: {e}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Request to {url} failed: {str(e) or type(e).__name__}")

    @staticmethod
    async def _read_error_message(response: aiohttp.ClientResponse) -> str:
        try:
            payload = await response.json(content_type=None)
        except ValueError as e:
            raise DecodeError(f"Invalid error payload (status {response.status}): {e}")
        return _require_string(payload, "message", "error payload")

    async def list_repositories(self, account: str) -> List[RepositoryDescriptor]:
        """List the repositories of an account.

        Args:
            account: GitHub user name

        Returns:
            Repository descriptors, possibly empty
        """
        if not account:
            raise ValueError("account must be a non-empty string")

        payload = await self._get_json(f"{self._base_url}/users/{account}/repos")
        repositories = [
            RepositoryDescriptor(
                name=_require_string(item, "name", "repository"),
                branches_url=_require_string(item, "branches_url", "repository")
            )
            for item in _require_list(payload, "repositories")
        ]

        logger.info(f"Found {len(repositories)} repositories for {account}")
        return repositories

    async def list_branches(self, branches_url: str) -> List[BranchDescriptor]:
        """List the branches of one repository.

        Args:
            branches_url: Templated branches URL of the repository

        Returns:
            Branch descriptors in API order
        """
        payload = await self._get_json(normalize_branches_url(branches_url))
        return [
            BranchDescriptor(name=_require_string(item, "name", "branch"))
            for item in _require_list(payload, "branches")
        ]

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None
