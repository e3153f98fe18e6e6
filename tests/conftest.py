import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

from mdrender.domain.tree import NodeKind, TreeNode

requires_posix_shell = pytest.mark.skipif(
    sys.platform == "win32", reason="fake binaries are /bin/sh scripts"
)


def para(*children: TreeNode) -> TreeNode:
    return TreeNode.of(NodeKind.PARAGRAPH, *children)


def item(*children: TreeNode) -> TreeNode:
    return TreeNode.of(NodeKind.ITEM, *children)


def doc(*children: TreeNode) -> TreeNode:
    return TreeNode.of(NodeKind.DOCUMENT, *children)


def text(literal: str) -> TreeNode:
    return TreeNode.text(literal)


@pytest.fixture
def fake_binary(tmp_path):
    """Write an executable /bin/sh script standing in for an external converter."""

    def _make(name: str, body: str):
        path = tmp_path / name
        path.write_text("#!/bin/sh\n" + body)
        path.chmod(0o755)
        return path

    return _make


@pytest.fixture
def fake_process():
    """A stand-in for asyncio.subprocess.Process that is running until terminated."""
    process = MagicMock()
    process.pid = 4242
    process.returncode = None

    def _terminate():
        process.returncode = -15

    process.terminate = MagicMock(side_effect=_terminate)
    process.kill = MagicMock()
    process.wait = AsyncMock(return_value=-15)
    return process


SAMPLE_MARKDOWN = """# Trip Notes

Packing list for the weekend.

- passport
- charger

> Remember the tickets.
"""
