"""
Post Index — handles all interactions with the posts directory:

  - Scanning the series for markdown posts
  - Parsing each post's front-matter into title and tags
  - Resolving relative links and wikilinks against the indexed series
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote

from post_linter import config
from post_linter.errors import FrontMatterError
from post_linter.services.front_matter import (
    FrontMatter,
    normalise_tags,
    parse_front_matter,
    split_front_matter,
)

logger = logging.getLogger(__name__)


@dataclass
class Post:
    """One markdown document of the series."""
    path: Path
    title: str = ""
    tags: list[str] = field(default_factory=list)
    front_matter: FrontMatter = field(default_factory=FrontMatter)
    text: str = ""
    error: str = ""
    error_line: int = 0

    @property
    def body_lines(self) -> list[tuple[int, str]]:
        """Body lines paired with their 1-based line number in the file."""
        start = self.front_matter.body_line
        return [
            (start + i, line)
            for i, line in enumerate(self.front_matter.body.splitlines())
        ]


def load_post(path: Path) -> Post:
    """Read a post from disk.  Front-matter problems are recorded, not raised."""
    text = path.read_text(encoding="utf-8", errors="replace")
    post = Post(path=path, text=text)
    try:
        post.front_matter = parse_front_matter(text)
    except FrontMatterError as exc:
        post.error = str(exc)
        post.error_line = exc.line
        try:
            post.front_matter = split_front_matter(text)
        except FrontMatterError:
            post.front_matter = FrontMatter(body=text.lstrip("\ufeff"))
        return post

    data = post.front_matter.data
    title = data.get("title")
    post.title = title.strip() if isinstance(title, str) else ""
    post.tags = normalise_tags(data.get("tags"))
    return post


class PostIndex:
    """Reads and indexes the posts of one series."""

    def __init__(self, root: Path | None = None, exclude: list[str] | None = None):
        self.root = Path(root or config.POSTS_DIR)
        self.exclude = set(config.EXCLUDE_DIRS if exclude is None else exclude)
        self._index: list[Post] = []
        self._built = False

    # ── Scanning ──────────────────────────────────────────────────────

    def build_index(self) -> list[Post]:
        """Scan every .md file under the root and build the index."""
        self._index = []
        if not self.root.is_dir():
            logger.warning("Posts directory %s does not exist.", self.root)
        for md_file in sorted(self.root.rglob("*.md")):
            rel_parts = md_file.relative_to(self.root).parts[:-1]
            if self.exclude.intersection(rel_parts):
                continue
            try:
                post = load_post(md_file)
            except OSError:
                logger.exception("Could not read %s, skipping", md_file)
                continue
            self._index.append(post)
        self._built = True
        logger.info("Series index built: %d posts.", len(self._index))
        return self._index

    @property
    def index(self) -> list[Post]:
        if not self._built:
            self.build_index()
        return self._index

    def get(self, path: Path) -> Post | None:
        target = Path(path).resolve()
        for post in self.index:
            if post.path.resolve() == target:
                return post
        return None

    def all_tags(self) -> set[str]:
        return {tag for post in self.index for tag in post.tags}

    def all_titles(self) -> set[str]:
        return {post.title for post in self.index if post.title}

    def summary(self) -> list[dict]:
        return [
            {
                "path": str(post.path),
                "title": post.title,
                "tags": post.tags,
            }
            for post in self.index
        ]

    # ── Link resolution ───────────────────────────────────────────────

    def resolve(self, target: str, source: Path) -> Path | None:
        """
        Resolve a relative link target written in `source`.

        Query strings and fragments are dropped and percent-escapes decoded.
        A leading '/' or a `{filename}`-style placeholder anchors the path at
        the posts root instead of the source's directory.  Returns the path
        if it names an existing file, else None.
        """
        path_part = target.split("#", 1)[0].split("?", 1)[0]
        path_part = unquote(path_part).strip()
        if not path_part:
            return None

        base = Path(source).parent
        if path_part.startswith("{") and "}" in path_part:
            path_part = path_part.split("}", 1)[1]
            base = self.root
        if path_part.startswith("/"):
            path_part = path_part.lstrip("/")
            base = self.root

        candidate = base / path_part
        if candidate.is_file():
            return candidate
        return None

    def has_note(self, name: str) -> bool:
        """True if a wikilink `[[name]]` matches a post title or file stem."""
        wanted = name.strip().casefold()
        if wanted.endswith(".md"):
            wanted = wanted[:-3]
        for post in self.index:
            if post.path.stem.casefold() == wanted:
                return True
            if post.title and post.title.casefold() == wanted:
                return True
        return False
