"""In-memory queries over a flattened node list."""

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from .core import DocNode
from .errors import NoContentLoader, NotAFile

_MISSING = object()


def _lookup(node: DocNode, key: str) -> Any:
    if hasattr(node, key):
        return getattr(node, key)
    return node.data.get(key, _MISSING)


def _value_matches(value: Any, expected: Any) -> bool:
    if isinstance(expected, Mapping):
        if not isinstance(value, Mapping):
            return False
        return all(
            key in value and _value_matches(value[key], sub)
            for key, sub in expected.items()
        )
    return value == expected


def matches(node: DocNode, where: Optional[Mapping[str, Any]]) -> bool:
    """Check whether a node is a structural superset of ``where``.

    Top-level keys name node attributes, falling back to ``node.data``.
    Nested mappings match as partial subsets; everything else compares
    with ``==``. Lists are not subset-matched: ``{"tags": ["a"]}`` does not
    match a node whose tags are ``["a", "b"]``, and order matters. An empty
    or missing pattern matches every node.
    """
    if not where:
        return True
    for key, expected in where.items():
        value = _lookup(node, key)
        if value is _MISSING or not _value_matches(value, expected):
            return False
    return True


class QueryContext:
    """Read-only query surface over a flattened list of nodes."""

    def __init__(self, nodes: Sequence[DocNode]):
        self._nodes = tuple(nodes)

    @property
    def nodes(self) -> Sequence[DocNode]:
        return self._nodes

    def find_many(self, where: Optional[Dict[str, Any]] = None) -> List[DocNode]:
        """Get every node matching ``where``, in stored order."""
        return [node for node in self._nodes if matches(node, where)]

    def find_first(self, where: Optional[Dict[str, Any]] = None) -> Optional[DocNode]:
        """Get the first node matching ``where``, or None."""
        return next((node for node in self._nodes if matches(node, where)), None)

    async def load_content(self, node: DocNode) -> str:
        """Load a file node's transformed content.

        Raises:
            NotAFile: If the node is a folder
            NoContentLoader: If the node has no loader
        """
        if not node.is_file:
            raise NotAFile(node.full_path)
        if node.actions is None or not node.actions.has_loader:
            raise NoContentLoader(node.full_path)
        return await node.actions.load()

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[DocNode]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"QueryContext({len(self._nodes)} nodes)"
