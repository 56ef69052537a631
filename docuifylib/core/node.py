"""Document tree node model.

Defines the input unit (SourceItem), the tree unit (DocNode) and the
per-file content state machine (ContentActions) that loads raw text lazily
and runs it through an ordered transform queue.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union

from .._common import maybe_await
from ..errors import NoContentLoader, TransformFailure

logger = logging.getLogger(__name__)

ContentLoader = Callable[[], Union[str, Awaitable[str]]]
Transform = Callable[[str], Union[str, Awaitable[str]]]


class NodeKind(str, Enum):
    """Kind of a tree node. Compares equal to its string value."""
    FILE = "file"
    FOLDER = "folder"


@dataclass
class SourceItem:
    """A single content-bearing unit produced by a source.

    Attributes:
        path: Slash-delimited path, unique within a build
        kind: File or folder
        extension: Optional file extension without the dot
        metadata: Optional open key-value map
        load_content: Optional zero-argument callable producing raw text
    """
    path: str
    kind: NodeKind = NodeKind.FILE
    extension: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    load_content: Optional[ContentLoader] = None

    def __post_init__(self):
        self.kind = NodeKind(self.kind)


class ContentActions:
    """Lazy content access for a single file node.

    Holds the raw loader, the ordered transform queue and the load
    operation. Nothing is cached: every load() invokes the loader once and
    runs the queue as it stands at call time.
    """

    def __init__(self, path: str, loader: Optional[ContentLoader] = None):
        self.path = path
        self._loader = loader
        self._transforms: List[Transform] = []

    @property
    def has_loader(self) -> bool:
        return self._loader is not None

    @property
    def transforms(self) -> Tuple[Transform, ...]:
        """Registered transforms in application order."""
        return tuple(self._transforms)

    def register_transform(self, transform: Transform) -> None:
        """Append a transform to the end of the queue."""
        self._transforms.append(transform)
        logger.debug("Registered transform #%d on %s", len(self._transforms) - 1, self.path)

    async def apply_transforms(self, raw: str) -> str:
        """Fold the transform queue over ``raw``, left to right.

        Each transform receives the previous transform's output.

        Raises:
            TransformFailure: If a transform raises
        """
        result = raw
        for position, transform in enumerate(tuple(self._transforms)):
            try:
                result = await maybe_await(transform(result))
            except Exception as e:
                raise TransformFailure(self.path, position, e) from e
        return result

    async def load(self) -> str:
        """Invoke the loader once and return the transformed text.

        Raises:
            NoContentLoader: If the item supplied no loader
            TransformFailure: If a transform raises
        """
        if self._loader is None:
            raise NoContentLoader(self.path)
        raw = await maybe_await(self._loader())
        return await self.apply_transforms(raw)

    def __repr__(self) -> str:
        return (f"ContentActions({self.path!r}, loader={self.has_loader}, "
                f"transforms={len(self._transforms)})")


class DocNode:
    """A file or folder in the assembled document tree.

    Structural fields (id, parent_id, children) are owned by the tree
    builder. Plugins stash their own values in ``data``.
    """

    def __init__(
        self,
        id: str,
        name: str,
        full_path: str,
        kind: NodeKind,
        parent_id: Optional[str] = None,
        extension: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        actions: Optional[ContentActions] = None,
    ):
        self.id = id
        self.name = name
        self.full_path = full_path
        self.kind = NodeKind(kind)
        self.parent_id = parent_id
        self.extension = extension
        self.metadata: Dict[str, Any] = metadata if metadata is not None else {}
        self.actions = actions
        self.children: Optional[List["DocNode"]] = [] if self.kind is NodeKind.FOLDER else None
        self.data: Dict[str, Any] = {}
        self.content: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE

    @property
    def is_folder(self) -> bool:
        return self.kind is NodeKind.FOLDER

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def is_leaf(self) -> bool:
        """Check if this node has no children.

        Files are always leaves; folders are leaves when empty.
        """
        return not self.children

    def to_dict(self, include_children: bool = True) -> Dict[str, Any]:
        """Plain-data view of the node, without content actions.

        Children are expanded with an explicit stack, so arbitrarily deep
        trees convert without recursion.
        """
        result = self._fields()
        if not include_children:
            return result

        stack = [(self, result)]
        while stack:
            node, entry = stack.pop()
            if node.children is None:
                continue
            entry['children'] = []
            for child in node.children:
                child_entry = child._fields()
                entry['children'].append(child_entry)
                stack.append((child, child_entry))
        return result

    def _fields(self) -> Dict[str, Any]:
        fields = {
            'id': self.id,
            'name': self.name,
            'full_path': self.full_path,
            'kind': self.kind.value,
            'parent_id': self.parent_id,
            'extension': self.extension,
            'metadata': dict(self.metadata),
            'data': dict(self.data),
        }
        if self.content is not None:
            fields['content'] = self.content
        return fields

    def __repr__(self) -> str:
        return f"DocNode({self.id!r}, {self.full_path!r}, kind={self.kind.value})"
