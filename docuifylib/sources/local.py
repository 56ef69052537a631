"""Local filesystem source.

Walks a directory with os.scandir in a worker thread and produces one file
item per regular file, with a lazy loader that reads UTF-8 text.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import List, Tuple, Union

from ..core import NodeKind, SourceItem, extract_file_extension
from ..errors import InvalidConfiguration
from .base import BaseSource

logger = logging.getLogger(__name__)


class LocalFileSource(BaseSource):
    """Reads documents from a directory tree.

    Directory entries are sorted by name so builds are reproducible.
    Symbolic links are skipped unless ``follow_symlinks`` is set.
    """

    name = "local-file-source"

    def __init__(
        self,
        root_dir: Union[str, Path],
        follow_symlinks: bool = False,
        encoding: str = 'utf-8'
    ):
        """Initialize source.

        Args:
            root_dir: Directory to read
            follow_symlinks: Whether to follow symbolic links
            encoding: Text encoding of the files

        Raises:
            InvalidConfiguration: If root_dir is not a directory
        """
        if not root_dir:
            raise InvalidConfiguration("LocalFileSource requires a root directory")
        self.root_dir = Path(root_dir).resolve()
        if not self.root_dir.is_dir():
            raise InvalidConfiguration(f"Not a directory: {self.root_dir}")
        self.follow_symlinks = follow_symlinks
        self.encoding = encoding

    async def fetch(self) -> List[SourceItem]:
        files = await asyncio.to_thread(self._scan, self.root_dir)
        items = [self._make_item(path, relative) for path, relative in files]
        logger.info("%s found %d files under %s", self.name, len(items), self.root_dir)
        return items

    def _scan(self, root: Path) -> List[Tuple[Path, str]]:
        """Synchronous recursive scan, run in a worker thread."""
        found: List[Tuple[Path, str]] = []

        def scan_directory(directory: Path, prefix: str) -> None:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)

            for entry in entries:
                if entry.is_symlink() and not self.follow_symlinks:
                    continue
                relative = f"{prefix}/{entry.name}" if prefix else entry.name
                if entry.is_dir(follow_symlinks=self.follow_symlinks):
                    scan_directory(Path(entry.path), relative)
                elif entry.is_file(follow_symlinks=self.follow_symlinks):
                    found.append((Path(entry.path), relative))

        scan_directory(root, "")
        return found

    def _make_item(self, path: Path, relative: str) -> SourceItem:
        encoding = self.encoding

        async def load_content() -> str:
            return await asyncio.to_thread(path.read_text, encoding=encoding)

        return SourceItem(
            path=relative,
            kind=NodeKind.FILE,
            extension=extract_file_extension(path.name),
            load_content=load_content,
        )
