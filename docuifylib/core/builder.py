"""Tree assembly from a flat list of source items.

The builder walks each item's path one segment at a time from the root,
reusing nodes that already exist at each level and creating missing ones.
Intermediate segments always become folders; the terminal segment takes the
item's own kind. A terminal segment that already exists with a different
kind is rejected; a repeated file path keeps the first file.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..errors import MalformedTreeError
from .ids import IdGenerator, default_id_generator
from .node import ContentActions, DocNode, NodeKind, SourceItem

logger = logging.getLogger(__name__)

ROOT_NAME = "root"
ROOT_PATH = "."


def split_path(path: str) -> List[str]:
    """Split a slash-delimited path into its non-empty segments."""
    return [segment for segment in path.split('/') if segment]


class TreeBuilder:
    """Converts source items into a rooted DocNode tree.

    Sibling lookup goes through a builder-private index keyed by
    (parent id, segment name), so each segment costs O(1). Children lists
    keep first-seen order.
    """

    def __init__(self, id_generator: Optional[IdGenerator] = None):
        """Initialize builder.

        Args:
            id_generator: Identifier source (defaults to the process-wide one)
        """
        self.id_generator = id_generator or default_id_generator
        self._index: Dict[Tuple[str, str], DocNode] = {}
        self.node_count = 0

    def build(self, items: Iterable[SourceItem]) -> DocNode:
        """Build a tree from items in input order.

        Args:
            items: Source items; paths should be unique

        Returns:
            Root folder node

        Raises:
            MalformedTreeError: If a path is empty, descends through a file or
                collides with a node of the other kind
        """
        self._index = {}
        self.node_count = 0
        root = self._new_node(ROOT_NAME, ROOT_PATH, NodeKind.FOLDER, None)

        item_count = 0
        for item in items:
            self._insert(root, item)
            item_count += 1

        logger.debug("Built tree with %d nodes from %d items", self.node_count, item_count)
        return root

    def _insert(self, root: DocNode, item: SourceItem) -> None:
        segments = split_path(item.path)
        if not segments:
            raise MalformedTreeError(item.path, "Item path has no segments")

        current = root
        for depth, segment in enumerate(segments):
            is_last = depth == len(segments) - 1

            if current.kind is NodeKind.FILE:
                raise MalformedTreeError(
                    item.path,
                    f"Path descends through file node {current.full_path!r}"
                )

            found = self._index.get((current.id, segment))
            if found is None:
                kind = item.kind if is_last else NodeKind.FOLDER
                full_path = '/'.join(segments[:depth + 1])
                found = self._new_node(segment, full_path, kind, current.id)
                current.children.append(found)
                self._index[(current.id, segment)] = found
                if is_last and kind is NodeKind.FILE:
                    self._populate_file(found, item)
            elif is_last and found.kind is not item.kind:
                raise MalformedTreeError(
                    item.path,
                    f"Item of kind {item.kind.value!r} collides with existing {found.kind.value} node"
                )
            elif is_last and item.kind is NodeKind.FILE:
                logger.warning("Duplicate item path %r; keeping the first file node", item.path)

            current = found

    def _new_node(
        self,
        name: str,
        full_path: str,
        kind: NodeKind,
        parent_id: Optional[str]
    ) -> DocNode:
        self.node_count += 1
        return DocNode(
            id=self.id_generator.next_id(),
            name=name,
            full_path=full_path,
            kind=kind,
            parent_id=parent_id,
        )

    @staticmethod
    def _populate_file(node: DocNode, item: SourceItem) -> None:
        node.extension = item.extension
        node.metadata = dict(item.metadata) if item.metadata else {}
        node.actions = ContentActions(node.full_path, item.load_content)


def build_tree(
    items: Iterable[SourceItem],
    id_generator: Optional[IdGenerator] = None
) -> DocNode:
    """Build a document tree from a flat list of items.

    Args:
        items: Source items in input order
        id_generator: Optional identifier source

    Returns:
        Root folder node
    """
    return TreeBuilder(id_generator).build(items)
