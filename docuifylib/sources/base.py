"""Source abstraction.

A source produces the flat item list a build starts from. Any error it
raises aborts the whole build; sources handle their own retries, if any.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core import SourceItem


class BaseSource(ABC):
    """Abstract base class for content sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable name recorded in build footers."""
        pass

    @abstractmethod
    async def fetch(self) -> List[SourceItem]:
        """Fetch every item of the source.

        Returns:
            Items in the order they should be assembled
        """
        pass

    async def close(self):
        """Clean up source resources.

        Override if the source holds connections.
        """
        pass

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
