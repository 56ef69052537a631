"""Content sources that produce the items a build starts from."""

from .base import BaseSource
from .local import LocalFileSource
from .github import GitHubSource

__all__ = [
    'BaseSource',
    'LocalFileSource',
    'GitHubSource',
]
