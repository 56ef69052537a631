"""Plugin interface and traversal context.

A plugin exposes up to three hooks:

- ``before(root, state)`` runs once before the walk and may return a
  replacement root
- ``visit(node, context)`` runs on every node during the walk
- ``after(root, state)`` runs once after the walk and may return a
  replacement root

Any hook may be a plain method or a coroutine. BasePlugin supplies no-op
defaults, but any object exposing some of these attributes is accepted.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from ..core import DocNode

# walk(node, ancestors, index) as provided by the plugin runner
WalkFunction = Callable[[DocNode, Tuple[DocNode, ...], Optional[int]], Awaitable[None]]


@dataclass
class TraversalContext:
    """Per-node context handed to ``visit`` hooks.

    Attributes:
        node: Node being visited
        parent: Immediate parent (None at the root)
        ancestors: Chain from the root down to, excluding, ``node``
        index: Position among siblings (None at the root)
        state: Mutable map shared by every hook in one run
    """
    node: DocNode
    parent: Optional[DocNode]
    ancestors: Tuple[DocNode, ...]
    index: Optional[int]
    state: Dict[str, Any]
    _walk: WalkFunction = field(repr=False, compare=False)

    @property
    def depth(self) -> int:
        return len(self.ancestors)

    async def visit(self, child: DocNode, ctx: Optional["TraversalContext"] = None) -> None:
        """Re-enter the walk at ``child`` and its subtree.

        Args:
            child: Node to walk
            ctx: Context whose ancestors and index to use; derived from
                 this context's node when omitted
        """
        if ctx is not None:
            await self._walk(child, ctx.ancestors, ctx.index)
            return

        siblings = self.node.children or []
        index = next((i for i, c in enumerate(siblings) if c is child), None)
        await self._walk(child, self.ancestors + (self.node,), index)


class BasePlugin:
    """Base class for plugins with no-op hooks.

    Override any subset of ``before``, ``visit`` and ``after``. Returning a
    node from ``before`` or ``after`` replaces the root; returning None
    keeps it.
    """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    async def before(self, root: DocNode, state: Dict[str, Any]) -> Optional[DocNode]:
        return None

    async def visit(self, node: DocNode, context: TraversalContext) -> None:
        pass

    async def after(self, root: DocNode, state: Dict[str, Any]) -> Optional[DocNode]:
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def plugin_name(plugin: Any) -> str:
    """Get a plugin's declared name, falling back to its class name."""
    name = getattr(plugin, 'name', None)
    if isinstance(name, str) and name:
        return name
    return plugin.__class__.__name__
