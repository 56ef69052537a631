#!/usr/bin/env python3
"""
Basic build example showing a document tree assembled from a local folder.

This example demonstrates:
- Reading documents with LocalFileSource
- Parsing YAML front matter with FrontMatterPlugin
- Preloading content and querying the flat node list
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from docuifylib import DocuifyEngine, EngineConfig, PreloadConfig, walk_tree
from docuifylib.plugins import FrontMatterPlugin
from docuifylib.sources import LocalFileSource


async def main():
    """Build a tree from a folder and print what was found."""
    root_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()

    print(f"Building: {root_path}")
    print("-" * 50)

    config = EngineConfig(preload=PreloadConfig(enabled=True, concurrency=8))
    engine = DocuifyEngine(
        LocalFileSource(root_path),
        plugins=[FrontMatterPlugin()],
        item_filter=lambda item, index: item.extension in ("md", "markdown"),
        config=config,
    )

    async with engine:
        await report_build(engine)


async def report_build(engine):
    """Print the tree, the preload summary and titled pages."""
    result = await engine.build()
    for node in walk_tree(result.tree):
        depth = node.full_path.count("/") + (0 if node.is_root else 1)
        marker = "/" if node.is_folder else ""
        print(f"{'  ' * depth}{node.name}{marker}")

    report = result.preload
    print(f"\nPreload Summary:")
    print(f"  Loaded: {report.loaded:,} of {report.total:,}")
    for failure in report.failures[:5]:
        print(f"  Failed: {failure.path}")

    query = await engine.query()
    titled = [node for node in query if node.data.get("frontmatter", {}).get("title")]
    if titled:
        print(f"\nPages with a title:")
        for node in titled:
            print(f"  {node.data['frontmatter']['title']}: {node.full_path}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    print("DocuifyLib - Local Build Example")
    print("=" * 50)
    asyncio.run(main())
