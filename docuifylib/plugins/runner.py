"""Three-phase plugin traversal.

Phases run in order: every plugin's ``before`` hook, a depth-first walk
calling every plugin's ``visit`` hook on each node, then every plugin's
``after`` hook. Plugins run in registration order and each hook is awaited
before the next one starts. Hook errors are not caught.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .._common import maybe_await
from ..core import DocNode
from .base import TraversalContext, plugin_name

logger = logging.getLogger(__name__)


class PluginRunner:
    """Runs an ordered list of plugins over a document tree."""

    def __init__(self, plugins: Iterable[Any]):
        self.plugins: List[Any] = list(plugins)

    @property
    def plugin_names(self) -> List[str]:
        return [plugin_name(plugin) for plugin in self.plugins]

    async def run(self, root: DocNode) -> DocNode:
        """Run all three phases and return the final root.

        A fresh state map is created for every call, so repeated or
        concurrent runs never share state.
        """
        state: Dict[str, Any] = {}

        current = await self._apply_root_hooks('before', root, state)

        visits = 0

        async def walk(
            start: DocNode,
            ancestors: Tuple[DocNode, ...] = (),
            index: Optional[int] = None
        ) -> None:
            nonlocal visits
            # Explicit stack so deep trees do not hit the recursion limit
            stack: List[Tuple[DocNode, Tuple[DocNode, ...], Optional[int]]] = [(start, ancestors, index)]
            while stack:
                node, node_ancestors, node_index = stack.pop()
                context = TraversalContext(
                    node=node,
                    parent=node_ancestors[-1] if node_ancestors else None,
                    ancestors=node_ancestors,
                    index=node_index,
                    state=state,
                    _walk=walk,
                )

                for plugin in self.plugins:
                    hook = getattr(plugin, 'visit', None)
                    if hook is not None:
                        await maybe_await(hook(node, context))
                visits += 1

                if node.children:
                    child_ancestors = node_ancestors + (node,)
                    # Snapshot taken after the node's hooks; reversed so the
                    # leftmost child is popped first
                    children = list(node.children)
                    for child_index in range(len(children) - 1, -1, -1):
                        stack.append((children[child_index], child_ancestors, child_index))

        await walk(current)
        logger.debug("Visit phase walked %d nodes with %d plugins", visits, len(self.plugins))

        current = await self._apply_root_hooks('after', current, state)
        return current

    async def _apply_root_hooks(self, hook_name: str, root: DocNode, state: Dict[str, Any]) -> DocNode:
        current = root
        for plugin in self.plugins:
            hook = getattr(plugin, hook_name, None)
            if hook is None:
                continue
            replacement = await maybe_await(hook(current, state))
            if replacement is not None:
                logger.debug("%s.%s replaced the root", plugin_name(plugin), hook_name)
                current = replacement
        return current


async def run_plugins(root: DocNode, plugins: Iterable[Any]) -> DocNode:
    """Run plugins over a tree.

    Args:
        root: Tree root
        plugins: Plugins in registration order

    Returns:
        The final root (possibly replaced by a before/after hook)
    """
    return await PluginRunner(plugins).run(root)
