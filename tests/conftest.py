"""Test configuration helpers for ensuring local imports resolve."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_project_root_on_path() -> None:
    project_root = Path(__file__).resolve().parents[1]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


_ensure_project_root_on_path()

from aptag.config import Config  # noqa: E402


class NoShuffle:
    """A random source that leaves the sentence order untouched."""

    def shuffle(self, items):
        return None


@pytest.fixture
def no_shuffle() -> NoShuffle:
    return NoShuffle()


@pytest.fixture
def quiet_cfg() -> Config:
    return Config(show_progress=False)


@pytest.fixture
def small_corpus() -> list:
    return [
        [("The", "DT"), ("dog", "NN"), ("barks", "VBZ"), (".", ".")],
        [("A", "DT"), ("cat", "NN"), ("sleeps", "VBZ"), (".", ".")],
        [("The", "DT"), ("cat", "NN"), ("saw", "VBD"), ("the", "DT"), ("dog", "NN"), (".", ".")],
        [("Dogs", "NNS"), ("bark", "VBP"), ("in", "IN"), ("1999", "CD"), (".", ".")],
        [("A", "DT"), ("well-known", "JJ"), ("dog", "NN"), ("ran", "VBD"), (".", ".")],
    ]
