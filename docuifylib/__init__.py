"""DocuifyLib - Document Tree Assembly and Plugin Pipeline.

DocuifyLib turns a flat list of documents from any source into a
hierarchical tree, runs an ordered pipeline of plugins over it, and exposes
the result as a tree or as a flat, queryable list.

Typical use:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from docuifylib import DocuifyEngine
    from docuifylib.sources import LocalFileSource
    from docuifylib.plugins import FrontMatterPlugin

    engine = DocuifyEngine(LocalFileSource("docs"), plugins=[FrontMatterPlugin()])
    result = await engine.build()
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

import logging

__version__ = "0.1.0"

from .core import (
    NodeKind,
    SourceItem,
    ContentActions,
    DocNode,
    IdGenerator,
    TreeBuilder,
    build_tree,
    walk_tree,
    flatten_tree,
    flatten_files,
)
from .plugins import BasePlugin, TraversalContext, PluginRunner, run_plugins
from .preload import PreloadReport, preload_nodes, preload_tree
from .query import QueryContext
from .config import EngineConfig, PreloadConfig
from .engine import DocuifyEngine, BuildResult, FlatBuildResult, BuildFooter
from .errors import (
    DocuifyError,
    InvalidConfiguration,
    SourceFetchFailure,
    MalformedTreeError,
    ContentError,
    NoContentLoader,
    NotAFile,
    TransformFailure,
    PreloadItemFailure,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Node model
    "NodeKind",
    "SourceItem",
    "ContentActions",
    "DocNode",
    "IdGenerator",
    # Assembly and traversal
    "TreeBuilder",
    "build_tree",
    "walk_tree",
    "flatten_tree",
    "flatten_files",
    # Plugins
    "BasePlugin",
    "TraversalContext",
    "PluginRunner",
    "run_plugins",
    # Preloading and queries
    "PreloadReport",
    "preload_nodes",
    "preload_tree",
    "QueryContext",
    # Engine
    "EngineConfig",
    "PreloadConfig",
    "DocuifyEngine",
    "BuildResult",
    "FlatBuildResult",
    "BuildFooter",
    # Errors
    "DocuifyError",
    "InvalidConfiguration",
    "SourceFetchFailure",
    "MalformedTreeError",
    "ContentError",
    "NoContentLoader",
    "NotAFile",
    "TransformFailure",
    "PreloadItemFailure",
]
