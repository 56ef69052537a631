"""Core abstractions for document tree assembly.

This package defines the node model, identifier generation, the tree
builder and the synchronous traversal helpers.
"""

from .ids import IdGenerator, default_id_generator
from .node import (
    NodeKind,
    SourceItem,
    ContentActions,
    DocNode,
)
from .builder import TreeBuilder, build_tree, split_path
from .traverser import (
    walk_tree,
    walk_tree_with_depth,
    flatten_tree,
    flatten_files,
    find_by_path,
)
from .paths import extract_file_extension

__all__ = [
    # Identifiers
    'IdGenerator',
    'default_id_generator',
    # Node model
    'NodeKind',
    'SourceItem',
    'ContentActions',
    'DocNode',
    # Assembly
    'TreeBuilder',
    'build_tree',
    'split_path',
    # Traversal
    'walk_tree',
    'walk_tree_with_depth',
    'flatten_tree',
    'flatten_files',
    'find_by_path',
    # Paths
    'extract_file_extension',
]
