from pathlib import Path

import pytest

from post_linter.services.post_index import load_post

REPO_ROOT = Path(__file__).resolve().parent.parent

GOOD_POST = """\
---
title: "Part 1: Exploring the data"
tags: [machine-learning, regression]
---

A first look at the dataset.

<!-- READMORE -->

```python
import pandas as pd
```
"""


@pytest.fixture
def series(tmp_path):
    """Return a helper that writes posts under a temporary series root."""
    root = tmp_path / "posts"
    root.mkdir()

    def write(name: str, content: str = GOOD_POST) -> Path:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    write.root = root
    return write


@pytest.fixture
def make_post(tmp_path):
    """Write a single post and load it."""
    def make(content: str, name: str = "post.md"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return load_post(path)

    return make
