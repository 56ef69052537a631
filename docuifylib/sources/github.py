"""GitHub repository source.

Lists a branch's tree through the Git Trees API and gives every file a
lazy loader that downloads its raw text. There is no retry logic: any
failed request raises SourceFetchFailure.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..core import NodeKind, SourceItem, extract_file_extension
from ..errors import InvalidConfiguration, SourceFetchFailure
from .base import BaseSource

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
RAW_URL = "https://raw.githubusercontent.com"
DEFAULT_API_VERSION = "2022-11-28"


class GitHubSource(BaseSource):
    """Reads documents from a path inside a GitHub repository."""

    name = "github"

    def __init__(
        self,
        token: str,
        branch: str,
        repo_full_name: str,
        path: str,
        api_version: str = DEFAULT_API_VERSION,
        metadata_fields: Sequence[str] = ('sha',),
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0
    ):
        """Initialize source.

        Args:
            token: Personal access token
            branch: Branch to read
            repo_full_name: Repository as "owner/repo"
            path: Path prefix inside the repository
            api_version: Value of the X-GitHub-Api-Version header
            metadata_fields: Tree entry fields copied into item metadata
            client: Optional shared HTTP client (not closed by this source)
            timeout: Request timeout in seconds for an owned client

        Raises:
            InvalidConfiguration: If a required value is missing
        """
        missing = [
            label for label, value in (
                ('token', token),
                ('branch', branch),
                ('repo_full_name', repo_full_name),
                ('path', path),
            ) if not value
        ]
        if missing:
            raise InvalidConfiguration(
                f"Invalid config passed to GitHub source, missing: {', '.join(missing)}"
            )

        self.token = token
        self.branch = branch
        self.repo_full_name = repo_full_name
        self.path = path
        self.api_version = api_version
        self.metadata_fields = tuple(metadata_fields)
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def headers(self) -> Dict[str, str]:
        return {
            'Authorization': f"Bearer {self.token}",
            'X-GitHub-Api-Version': self.api_version,
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def _get(self, url: str, **params: Any) -> httpx.Response:
        try:
            response = await self._get_client().get(url, headers=self.headers, params=params or None)
        except httpx.HTTPError as e:
            raise SourceFetchFailure(self.name, f"Request to {url} failed: {e}") from e
        if response.is_error:
            raise SourceFetchFailure(
                self.name,
                f"GitHub responded {response.status_code} {response.reason_phrase} for {url}"
            )
        return response

    async def fetch(self) -> List[SourceItem]:
        url = f"{API_URL}/repos/{self.repo_full_name}/git/trees/{self.branch}"
        response = await self._get(url, recursive=1)
        try:
            entries = response.json().get('tree', [])
        except ValueError as e:
            raise SourceFetchFailure(self.name, f"Invalid JSON from {url}") from e

        items = [
            self._make_item(entry)
            for entry in entries
            if entry.get('path', '').startswith(self.path)
        ]
        logger.info("%s listed %d items under %s:%s/%s",
                    self.name, len(items), self.repo_full_name, self.branch, self.path)
        return items

    def _make_item(self, entry: Dict[str, Any]) -> SourceItem:
        entry_path = entry['path']
        metadata = {field: entry[field] for field in self.metadata_fields if field in entry}

        if entry.get('type') == 'tree':
            return SourceItem(path=entry_path, kind=NodeKind.FOLDER, metadata=metadata)

        async def load_content() -> str:
            return await self.fetch_file_content(entry_path)

        return SourceItem(
            path=entry_path,
            kind=NodeKind.FILE,
            extension=extract_file_extension(entry_path),
            metadata=metadata,
            load_content=load_content,
        )

    async def fetch_file_content(self, path: str) -> str:
        """Download the raw text of one file on the configured branch."""
        url = f"{RAW_URL}/{self.repo_full_name}/{self.branch}/{path}"
        response = await self._get(url)
        return response.text

    async def close(self):
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
