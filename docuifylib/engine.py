"""Build orchestration.

DocuifyEngine ties the stages together: fetch items from a source, build
the tree, run plugins, then optionally flatten and preload. Results are
wrapped in envelopes that record where the tree came from and which
plugins ran on it.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from .config import EngineConfig
from .core import DocNode, IdGenerator, SourceItem, build_tree, flatten_tree
from .errors import DocuifyError, InvalidConfiguration, SourceFetchFailure
from .plugins import PluginRunner
from .preload import PreloadReport, preload_nodes
from .query import QueryContext
from .sources import BaseSource

logger = logging.getLogger(__name__)

ItemFilter = Callable[[SourceItem, int], bool]


@dataclass
class BuildFooter:
    """Provenance of a build."""
    source: str
    plugin_names: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {'source': self.source, 'plugin_names': list(self.plugin_names)}


@dataclass
class BuildResult:
    """Envelope around a built tree."""
    tree: DocNode
    foot: BuildFooter
    head: Dict[str, Any] = field(default_factory=dict)
    preload: Optional[PreloadReport] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'head': dict(self.head),
            'tree': self.tree.to_dict(),
            'foot': self.foot.to_dict(),
        }


@dataclass
class FlatBuildResult:
    """Envelope around a flattened node list."""
    nodes: List[DocNode]
    foot: BuildFooter
    head: Dict[str, Any] = field(default_factory=dict)
    preload: Optional[PreloadReport] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'head': dict(self.head),
            'nodes': [node.to_dict(include_children=False) for node in self.nodes],
            'foot': self.foot.to_dict(),
        }


class DocuifyEngine:
    """Builds a document tree from a source and runs plugins over it.

    The engine owns its source: close() (or leaving an ``async with``
    block) closes the source and any connections it opened. File loaders
    may still need the source, so close only after content is loaded.

    Example:
        async with DocuifyEngine(GitHubSource(...)) as engine:
            query = await engine.query()
    """

    def __init__(
        self,
        source: BaseSource,
        plugins: Optional[Iterable[Any]] = None,
        item_filter: Optional[ItemFilter] = None,
        config: Optional[EngineConfig] = None,
        id_generator: Optional[IdGenerator] = None
    ):
        """Initialize engine.

        Args:
            source: Where items come from
            plugins: Plugins in registration order
            item_filter: Optional callable(item, index) -> bool to keep items
            config: Engine configuration
            id_generator: Optional identifier source for built nodes

        Raises:
            InvalidConfiguration: If no source is given or config is invalid
        """
        if source is None:
            raise InvalidConfiguration("DocuifyEngine requires a source")

        self.config = config or EngineConfig()
        errors = self.config.validate()
        if errors:
            raise InvalidConfiguration(f"Invalid configuration: {', '.join(errors)}")

        self.source = source
        self.runner = PluginRunner(plugins or [])
        self.item_filter = item_filter
        self.id_generator = id_generator
        self._tree: Optional[DocNode] = None
        self._plugins_applied = False
        self._preload_report: Optional[PreloadReport] = None

    @property
    def plugin_names(self) -> List[str]:
        return self.runner.plugin_names

    def _footer(self) -> BuildFooter:
        return BuildFooter(source=self.source.name, plugin_names=self.plugin_names)

    async def fetch_items(self) -> List[SourceItem]:
        """Fetch and filter items from the source.

        Raises:
            SourceFetchFailure: If the source fails for any reason
        """
        try:
            items = list(await self.source.fetch())
        except DocuifyError:
            raise
        except Exception as e:
            raise SourceFetchFailure(self.source.name, f"fetch failed: {e}") from e

        if self.item_filter is not None:
            items = [item for index, item in enumerate(items) if self.item_filter(item, index)]
        return items

    async def build_tree(self) -> DocNode:
        """Fetch items and assemble a fresh tree."""
        items = await self.fetch_items()
        self._tree = build_tree(items, self.id_generator)
        self._plugins_applied = False
        self._preload_report = None
        logger.debug("Built tree from %d items of %s", len(items), self.source.name)
        return self._tree

    async def apply_plugins(self) -> DocNode:
        """Run plugins over the current tree, building it first if needed."""
        if self._tree is None:
            await self.build_tree()
        self._tree = await self.runner.run(self._tree)
        self._plugins_applied = True
        self._preload_report = None
        return self._tree

    def get_tree(self) -> Optional[DocNode]:
        return self._tree

    async def _maybe_preload(self, nodes: Iterable[DocNode]) -> Optional[PreloadReport]:
        preload = self.config.preload
        if not preload.enabled:
            return None
        # Every file of the current tree was already loaded once
        if self._preload_report is not None:
            logger.debug("Tree already preloaded; skipping second pass")
            return self._preload_report
        self._preload_report = await preload_nodes(nodes, preload.concurrency, preload.keep_content)
        return self._preload_report

    async def build(self) -> BuildResult:
        """Build the tree, apply plugins and wrap the result."""
        await self.build_tree()
        tree = await self.apply_plugins()
        report = await self._maybe_preload(flatten_tree(tree))
        return BuildResult(tree=tree, foot=self._footer(), preload=report)

    async def flat_build(self) -> FlatBuildResult:
        """Return a flat node list, building and applying plugins if needed.

        Plugins run at most once per built tree. Flattening leaves the tree
        intact, so get_tree() still works.
        """
        if self._tree is None or not self._plugins_applied:
            await self.apply_plugins()
        tree = self._tree
        nodes = flatten_tree(tree)
        if self.config.files_only:
            nodes = [node for node in nodes if node.is_file]
        report = await self._maybe_preload(nodes)
        return FlatBuildResult(nodes=nodes, foot=self._footer(), preload=report)

    async def query(self) -> QueryContext:
        """Run a flat build and return a query context over its nodes."""
        result = await self.flat_build()
        return QueryContext(result.nodes)

    async def close(self):
        """Close the source and release its resources."""
        await self.source.close()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
