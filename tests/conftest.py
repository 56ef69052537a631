"""Shared fixtures for DocuifyLib tests."""

import pytest

from docuifylib.core import IdGenerator, SourceItem, NodeKind, build_tree


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: tests that take several seconds")


@pytest.fixture
def id_generator():
    """Fresh generator so ids are deterministic within a test."""
    return IdGenerator()


@pytest.fixture
def doc_items():
    """Items for a small documentation tree.

    Structure:
        root
        ├── docs
        │   ├── intro.md
        │   └── guide
        │       └── setup.md
        ├── README.md
        └── assets
            └── logo.svg
    """
    return [
        SourceItem("docs/intro.md", extension="md", metadata={"sha": "a1"},
                   load_content=lambda: "# Intro"),
        SourceItem("docs/guide/setup.md", extension="md", metadata={"sha": "b2"},
                   load_content=lambda: "# Setup"),
        SourceItem("README.md", extension="md", load_content=lambda: "readme"),
        SourceItem("assets/logo.svg", extension="svg"),
        SourceItem("assets", kind=NodeKind.FOLDER, metadata={"sha": "dir"}),
    ]


@pytest.fixture
def doc_tree(doc_items, id_generator):
    """Built tree for doc_items."""
    return build_tree(doc_items, id_generator)
