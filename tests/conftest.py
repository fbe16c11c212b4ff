"""
Shared test fixtures for registry-builder tests.
Redirects the build log into each test's temporary directory.
"""

import json

import pytest

from registry_builder.utils import logging as build_logging


@pytest.fixture(autouse=True)
def _isolate_logging(tmp_path):
    """Every test gets a fresh build log and empty warning/error counters."""
    build_logging.close_logging()
    build_logging.init_logging(tmp_path / "build.log")
    yield
    build_logging.close_logging()


@pytest.fixture
def make_tree(tmp_path):
    """Create a generated data tree from {relative path: content} pairs.

    Dict/list contents are written as JSON, strings verbatim.
    """
    def _make(files, root_name="data"):
        root = tmp_path / root_name
        root.mkdir(parents=True, exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, (dict, list)):
                path.write_text(json.dumps(content), encoding="utf-8")
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def damage_tree(make_tree):
    """The fall/fire damage type tree with one tag."""
    return make_tree({
        "damage_type/fall.json": {},
        "damage_type/fire.json": {},
        "tags/damage_type/bypasses_armor.json": {"values": ["minecraft:fall"]},
    })
