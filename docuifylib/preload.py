"""Bounded-concurrency content preloading.

Preloading is a best-effort warm-up: a fixed number of worker coroutines
share one cursor over the candidate files and call each file's ``load()``.
A failure on one file is recorded and handed to an error policy; it never
stops the other workers.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .core import DocNode, walk_tree
from .error_policies import ContinueOnErrorsPolicy, ErrorPolicy
from .errors import InvalidConfiguration, PreloadItemFailure

logger = logging.getLogger(__name__)


@dataclass
class PreloadReport:
    """Outcome of a preload pass."""
    total: int = 0
    loaded: int = 0
    failures: List[PreloadItemFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures


def _is_candidate(node: DocNode) -> bool:
    return node.is_file and node.actions is not None and node.actions.has_loader


async def preload_nodes(
    nodes: Iterable[DocNode],
    concurrency: int = 10,
    keep_content: bool = False,
    policy: Optional[ErrorPolicy] = None
) -> PreloadReport:
    """Force ``load()`` on every file node that has a loader.

    Args:
        nodes: Nodes to consider; folders and loader-less files are skipped
        concurrency: Number of concurrent workers
        keep_content: If True, store each loaded text on ``node.content``
        policy: Error policy for per-file failures (logs and continues
                by default). Errors raised by the policy itself are logged
                and never stop the pass

    Returns:
        PreloadReport with counts and the recorded failures

    Raises:
        InvalidConfiguration: If concurrency is not a positive integer
    """
    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
        raise InvalidConfiguration(f"concurrency must be a positive integer, got {concurrency!r}")

    policy = policy or ContinueOnErrorsPolicy()
    candidates = [node for node in nodes if _is_candidate(node)]
    report = PreloadReport(total=len(candidates))

    # One shared iterator is the cursor; next() runs between awaits, so no
    # node is claimed twice
    cursor = iter(candidates)

    async def worker() -> None:
        for node in cursor:
            try:
                content = await node.actions.load()
            except Exception as e:
                report.failures.append(PreloadItemFailure(node, e))
                try:
                    await policy.handle(e, 'load', node)
                except Exception as policy_error:
                    logger.error("Error policy %s failed on %r: %s",
                                 type(policy).__name__, node.full_path, policy_error)
                continue
            report.loaded += 1
            if keep_content:
                node.content = content

    worker_count = min(concurrency, len(candidates))
    await asyncio.gather(*(worker() for _ in range(worker_count)))

    logger.info("Preloaded %d/%d files (%d failed)", report.loaded, report.total, report.failed)
    return report


async def preload_tree(
    root: DocNode,
    concurrency: int = 10,
    keep_content: bool = False,
    policy: Optional[ErrorPolicy] = None
) -> PreloadReport:
    """Preload every file in a tree. See preload_nodes."""
    return await preload_nodes(walk_tree(root), concurrency, keep_content, policy)
