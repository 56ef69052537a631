"""Test fixtures for DocuifyLib consumers.

These helpers give test suites an in-memory source and a plugin that
records every hook call, without touching the filesystem or network.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..core import DocNode, NodeKind, SourceItem, extract_file_extension
from ..plugins import BasePlugin, TraversalContext
from ..sources import BaseSource


class StaticSource(BaseSource):
    """Source that returns a fixed list of items.

    Example:
        source = StaticSource(make_items(["docs/a.md", "docs/b.md"]))
        engine = DocuifyEngine(source)
    """

    def __init__(self, items: Iterable[SourceItem], name: str = "static", error: Optional[Exception] = None):
        """Initialize with items.

        Args:
            items: Items returned by every fetch()
            name: Source name recorded in build footers
            error: If given, fetch() raises it instead
        """
        self._items = list(items)
        self._name = name
        self.error = error
        self.fetch_count = 0

    @property
    def name(self) -> str:
        return self._name

    async def fetch(self) -> List[SourceItem]:
        self.fetch_count += 1
        if self.error is not None:
            raise self.error
        return list(self._items)


def make_items(
    paths: Iterable[str],
    content: Optional[Callable[[str], str]] = None,
    kind: NodeKind = NodeKind.FILE
) -> List[SourceItem]:
    """Create items for paths, each with a loader returning fixed text.

    Args:
        paths: Item paths
        content: Callable mapping a path to its text (defaults to the path)
        kind: Kind of every item

    Returns:
        Items in the given order
    """
    content = content or (lambda path: path)
    items = []
    for path in paths:
        text = content(path)
        items.append(SourceItem(
            path=path,
            kind=kind,
            extension=extract_file_extension(path) if kind is NodeKind.FILE else None,
            load_content=(lambda text=text: text) if kind is NodeKind.FILE else None,
        ))
    return items


class RecordingPlugin(BasePlugin):
    """Plugin that appends every hook call to a shared log.

    Each entry is ``(plugin name, hook name, node full_path)``.
    """

    def __init__(self, label: str, log: Optional[List[Tuple[str, str, str]]] = None):
        self.label = label
        self.log: List[Tuple[str, str, str]] = log if log is not None else []
        self.contexts: List[TraversalContext] = []
        self.states: List[Dict[str, Any]] = []

    @property
    def name(self) -> str:
        return self.label

    async def before(self, root: DocNode, state: Dict[str, Any]) -> Optional[DocNode]:
        self.log.append((self.label, 'before', root.full_path))
        self.states.append(state)
        return None

    async def visit(self, node: DocNode, context: TraversalContext) -> None:
        self.log.append((self.label, 'visit', node.full_path))
        self.contexts.append(context)

    async def after(self, root: DocNode, state: Dict[str, Any]) -> Optional[DocNode]:
        self.log.append((self.label, 'after', root.full_path))
        self.states.append(state)
        return None
