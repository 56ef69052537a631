"""Exception hierarchy for DocuifyLib.

Assembly and traversal are fail-fast: the first error raised aborts the
operation. Preloading is fail-soft: per-file failures are recorded as
PreloadItemFailure objects instead of being raised.
"""

from typing import Any, Optional


class DocuifyError(Exception):
    """Base class for every error raised by DocuifyLib."""


class InvalidConfiguration(DocuifyError, ValueError):
    """A required parameter is missing or invalid."""


class SourceFetchFailure(DocuifyError):
    """A source could not produce its items.

    Fatal to the whole build. The core never retries.
    """

    def __init__(self, source_name: str, message: str):
        super().__init__(f"[{source_name}] {message}")
        self.source_name = source_name


class MalformedTreeError(DocuifyError, ValueError):
    """An item path cannot be placed in the tree."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path!r}")
        self.path = path


class ContentError(DocuifyError):
    """Base class for content retrieval errors on a single node."""

    def __init__(self, path: Optional[str], message: str):
        super().__init__(message)
        self.path = path


class NoContentLoader(ContentError):
    """The node has no content loader."""

    def __init__(self, path: Optional[str]):
        super().__init__(path, f"Node at {path!r} has no content loader")


class NotAFile(ContentError):
    """Content was requested from a folder node."""

    def __init__(self, path: Optional[str]):
        super().__init__(path, f"Node at {path!r} is not a file")


class TransformFailure(ContentError):
    """A registered content transform raised.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, path: Optional[str], position: int, error: BaseException):
        super().__init__(
            path,
            f"Transform #{position} failed for {path!r}: {error}"
        )
        self.position = position


class PreloadItemFailure(ContentError):
    """Record of one file that could not be preloaded.

    Never raised by the preloader; collected in PreloadReport.failures.
    """

    def __init__(self, node: Any, cause: BaseException):
        path = getattr(node, 'full_path', None)
        super().__init__(path, f"Failed to preload {path!r}: {cause}")
        self.node = node
        self.cause = cause
