"""Tests for bounded-concurrency preloading."""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from docuifylib.core import IdGenerator, SourceItem, build_tree, flatten_tree
from docuifylib.error_policies import CollectErrorsPolicy, ErrorPolicy
from docuifylib.errors import InvalidConfiguration, PreloadItemFailure
from docuifylib.preload import PreloadReport, preload_nodes, preload_tree


def _counting_items(count, failing=()):
    calls = {}

    def make_loader(path, fail):
        async def loader():
            calls[path] = calls.get(path, 0) + 1
            await asyncio.sleep(0)
            if fail:
                raise OSError(f"cannot read {path}")
            return f"content of {path}"
        return loader

    items = []
    for i in range(count):
        path = f"docs/file{i:03d}.md"
        items.append(SourceItem(path, extension="md", load_content=make_loader(path, i in failing)))
    return items, calls


class StrictPolicy(ErrorPolicy):
    """Re-raises every error it is handed."""

    async def handle(self, error, method_name, node):
        self._record(error, method_name, node)
        raise error


class TestPreloadNodes:

    @pytest.mark.asyncio
    async def test_failures_are_isolated(self):
        items, calls = _counting_items(100, failing={7, 42, 99})
        root = build_tree(items, IdGenerator())
        policy = CollectErrorsPolicy()

        report = await preload_nodes(flatten_tree(root), concurrency=10, policy=policy)

        assert report.total == 100
        assert report.loaded == 97
        assert report.failed == 3
        assert not report.ok
        assert sorted(f.path for f in report.failures) == [
            "docs/file007.md", "docs/file042.md", "docs/file099.md"
        ]
        assert all(isinstance(f.cause, OSError) for f in report.failures)
        # Every loader, failing or not, ran exactly once
        assert len(calls) == 100
        assert set(calls.values()) == {1}
        assert policy.get_statistics()['total_errors'] == 3

    @pytest.mark.asyncio
    async def test_concurrency_bound(self):
        in_flight = 0
        peak = 0

        async def loader():
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.001)
            in_flight -= 1
            return "x"

        items = [SourceItem(f"f{i}.md", load_content=loader) for i in range(50)]
        root = build_tree(items, IdGenerator())

        report = await preload_tree(root, concurrency=5)

        assert report.loaded == 50
        assert peak == 5

    @pytest.mark.asyncio
    async def test_skips_folders_and_loaderless_files(self, doc_tree):
        report = await preload_tree(doc_tree, concurrency=2)
        # docs/intro.md, docs/guide/setup.md, README.md have loaders; logo.svg does not
        assert report.total == 3
        assert report.loaded == 3

    @pytest.mark.asyncio
    async def test_transforms_run_during_preload(self, doc_tree):
        for node in flatten_tree(doc_tree):
            if node.is_file:
                node.actions.register_transform(str.upper)

        report = await preload_tree(doc_tree, keep_content=True)

        contents = {n.full_path: n.content for n in flatten_tree(doc_tree) if n.is_file}
        assert report.ok
        assert contents["docs/intro.md"] == "# INTRO"
        assert contents["assets/logo.svg"] is None

    @pytest.mark.asyncio
    async def test_content_discarded_by_default(self, doc_tree):
        await preload_tree(doc_tree)
        assert all(node.content is None for node in flatten_tree(doc_tree))

    @pytest.mark.asyncio
    async def test_default_policy_logs_warnings(self, caplog):
        items, _ = _counting_items(3, failing={1})
        root = build_tree(items, IdGenerator())

        with caplog.at_level(logging.WARNING, logger="docuifylib"):
            report = await preload_tree(root)

        assert report.failed == 1
        assert "docs/file001.md" in caplog.text

    @pytest.mark.asyncio
    async def test_policy_receives_each_failure(self):
        items, _ = _counting_items(4, failing={0, 3})
        root = build_tree(items, IdGenerator())
        policy = AsyncMock()

        await preload_tree(root, concurrency=2, policy=policy)

        assert policy.handle.await_count == 2
        paths = sorted(call.args[2].full_path for call in policy.handle.await_args_list)
        assert paths == ["docs/file000.md", "docs/file003.md"]
        assert all(call.args[1] == "load" for call in policy.handle.await_args_list)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("concurrency", [1, 3])
    async def test_raising_policy_does_not_abort(self, concurrency, caplog):
        items, calls = _counting_items(4, failing={0})
        root = build_tree(items, IdGenerator())
        policy = StrictPolicy()

        with caplog.at_level(logging.ERROR, logger="docuifylib.preload"):
            report = await preload_tree(root, concurrency=concurrency, policy=policy)

        assert report.failed == 1
        assert report.loaded == 3
        assert set(calls.values()) == {1}
        assert len(policy.errors) == 1
        assert "StrictPolicy" in caplog.text

    @pytest.mark.asyncio
    async def test_empty_input(self):
        report = await preload_nodes([], concurrency=3)
        assert report == PreloadReport(total=0, loaded=0, failures=[])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("concurrency", [0, -1, 2.5, True, "4"])
    async def test_invalid_concurrency(self, doc_tree, concurrency):
        with pytest.raises(InvalidConfiguration):
            await preload_tree(doc_tree, concurrency=concurrency)

    @pytest.mark.asyncio
    async def test_failure_records(self):
        async def broken():
            raise RuntimeError("gone")

        root = build_tree([SourceItem("bad.md", load_content=broken)], IdGenerator())
        report = await preload_tree(root, policy=CollectErrorsPolicy())

        failure = report.failures[0]
        assert isinstance(failure, PreloadItemFailure)
        assert failure.node.full_path == "bad.md"
        assert "gone" in str(failure)


class TestPreloadScale:

    @pytest.mark.slow
    @pytest.mark.asyncio
    async def test_large_tree_preload(self):
        async def loader():
            await asyncio.sleep(0.0005)
            return "text"

        items = [SourceItem(f"d{i % 50}/f{i}.md", load_content=loader) for i in range(5000)]
        root = build_tree(items, IdGenerator())

        report = await preload_tree(root, concurrency=64)

        assert report.total == 5000
        assert report.loaded == 5000
