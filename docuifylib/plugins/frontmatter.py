"""YAML front matter extraction.

Registers a content transform on every file node that strips a leading
``---`` delimited YAML block from the text and stores the parsed mapping
in ``node.data['frontmatter']``.
"""

import logging
import re
from typing import Any, Dict, Tuple

import yaml

from ..core import DocNode
from .base import BasePlugin, TraversalContext

logger = logging.getLogger(__name__)

_FRONT_MATTER_RE = re.compile(
    r'\A---[ \t]*\r?\n(?P<block>.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)',
    re.DOTALL | re.MULTILINE,
)


def split_front_matter(text: str) -> Tuple[Dict[str, Any], str]:
    """Split text into (front matter mapping, body).

    Text without a front matter block yields ({}, text).

    Raises:
        yaml.YAMLError: If the block is not valid YAML
    """
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        return {}, text

    data = yaml.safe_load(match.group('block'))
    if data is None:
        data = {}
    elif not isinstance(data, dict):
        raise yaml.YAMLError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return data, text[match.end():]


class FrontMatterPlugin(BasePlugin):
    """Parses YAML front matter out of file content on load."""

    name = "FrontMatterPlugin"

    def __init__(self, key: str = 'frontmatter'):
        """Initialize plugin.

        Args:
            key: Key under which the mapping is stored in ``node.data``
        """
        self.key = key

    async def visit(self, node: DocNode, context: TraversalContext) -> None:
        if not node.is_file or node.actions is None:
            return

        def extract(content: str) -> str:
            try:
                data, body = split_front_matter(content)
            except yaml.YAMLError as e:
                logger.warning("[%s] Failed to parse front matter in %r: %s",
                               self.name, node.full_path, e)
                return content
            node.data[self.key] = data
            return body

        node.actions.register_transform(extract)
