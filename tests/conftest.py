"""Test fixtures for notedex."""

from pathlib import Path

import pytest

from notedex.document import SequenceIdGenerator

SAMPLE_NOTE = """---
title: Vim tips
subtitle: Movement
date: 2021-01-02 03:04:05
tags:
  - vim
  - editors
authors: Alice
---
Use w and b to move by word.
"""


@pytest.fixture
def id_generator() -> SequenceIdGenerator:
    """Deterministic identity tokens: doc-0001, doc-0002, ..."""
    return SequenceIdGenerator()


@pytest.fixture
def sample_note() -> str:
    return SAMPLE_NOTE


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    """A directory with two valid notes and one without metadata."""
    notes = tmp_path / "notes"
    (notes / "nested").mkdir(parents=True)
    (notes / "a.md").write_text(SAMPLE_NOTE, encoding="utf-8")
    (notes / "nested" / "b.md").write_text(
        "title: Bash\ntags: shell\n---\nset -euo pipefail\n", encoding="utf-8"
    )
    (notes / "broken.md").write_text("just some text\n", encoding="utf-8")
    return notes
