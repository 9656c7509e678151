"""
Front-matter handling — splits the YAML metadata block off the top of a
post and parses it into a mapping.

A block opens with `---` on the very first line and closes at the next
line that is exactly `---` (or `...`).
"""

import logging
from dataclasses import dataclass, field

import yaml

from post_linter.errors import FrontMatterError

logger = logging.getLogger(__name__)

OPEN_FENCE = "---"
CLOSE_FENCES = ("---", "...")


@dataclass
class FrontMatter:
    """The metadata block of a post and the body that follows it."""
    raw: str = ""
    data: dict = field(default_factory=dict)
    body: str = ""
    body_line: int = 1
    present: bool = False


def split_front_matter(text: str) -> FrontMatter:
    """Separate the raw front-matter block from the body without parsing it."""
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != OPEN_FENCE:
        return FrontMatter(body=text)

    for i, line in enumerate(lines[1:], start=1):
        if line.rstrip() in CLOSE_FENCES:
            return FrontMatter(
                raw="".join(lines[1:i]),
                body="".join(lines[i + 1:]),
                body_line=i + 2,
                present=True,
            )
    raise FrontMatterError("front-matter block is never closed", line=1)


def parse_front_matter(text: str) -> FrontMatter:
    """
    Split and parse the front-matter with `yaml.safe_load`.

    Raises FrontMatterError when the block is unterminated, is not valid
    YAML, or does not hold a mapping.
    """
    fm = split_front_matter(text)
    if not fm.present or not fm.raw.strip():
        return fm

    try:
        data = yaml.safe_load(fm.raw)
    except yaml.YAMLError as exc:
        line = 1
        mark = getattr(exc, "problem_mark", None)
        if mark is not None:
            # +2: the opening fence, and YAML marks are 0-based
            line = mark.line + 2
        raise FrontMatterError(f"invalid YAML in front-matter: {exc}", line=line) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"front-matter must be a mapping, got {type(data).__name__}", line=2
        )
    fm.data = data
    return fm


def normalise_tags(value) -> list[str]:
    """
    Turn a `tags` value into a clean list.

    Accepts a YAML list or a comma-separated string.  Strips whitespace and
    a leading '#', drops empty entries and duplicates, keeps order.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]

    tags: list[str] = []
    for item in items:
        if item is None or isinstance(item, (dict, list)):
            continue
        tag = str(item).strip().lstrip("#").strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags
