"""Plugin protocol, traversal engine and bundled plugins."""

from .base import BasePlugin, TraversalContext, plugin_name
from .runner import PluginRunner, run_plugins
from .frontmatter import FrontMatterPlugin, split_front_matter

__all__ = [
    'BasePlugin',
    'TraversalContext',
    'plugin_name',
    'PluginRunner',
    'run_plugins',
    'FrontMatterPlugin',
    'split_front_matter',
]
