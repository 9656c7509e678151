"""
Document checks — each check takes a Post and the series PostIndex and
returns a list of LintIssue records:

  1. **front-matter** — metadata parses, with a non-empty title and tag list
  2. **readmore**     — the preview marker appears at most once
  3. **links**        — relative links and wikilinks resolve inside the series
  4. **fences**       — fenced code blocks are opened and closed properly
"""

import logging
import re
from dataclasses import dataclass

from post_linter import config
from post_linter.services.front_matter import normalise_tags
from post_linter.services.post_index import Post, PostIndex

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"

FENCE_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
INDENTED_RE = re.compile(r"^(?: {4}|\t)")
INLINE_CODE_RE = re.compile(r"(`+)(?:.+?)\1")
# [text](target "title") and ![alt](target); text may hold one level of
# [brackets], target may be wrapped in <> or hold balanced (parentheses)
LINK_RE = re.compile(
    r"!?\[(?:[^\[\]\\]|\\.|\[(?:[^\[\]\\]|\\.)*\])*\]"
    r"\(\s*(<[^>]*>|(?:[^\s()]|\([^\s()]*\))+)(?:\s+[\"'(][^)]*)?\s*\)"
)
# [label]: target, but not footnote definitions [^1]: text
REFERENCE_RE = re.compile(r"^ {0,3}\[(?!\^)[^\]]+\]:\s*(<[^>]*>|\S+)")
WIKILINK_RE = re.compile(r"\[\[([^\]|#]+)(?:#[^\]|]*)?(?:\|[^\]]+)?\]\]")
SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


@dataclass(order=True)
class LintIssue:
    """A single finding against a post."""
    path: str
    line: int
    rule: str
    severity: str
    message: str


def _issue(post: Post, line: int, rule: str, severity: str, message: str) -> LintIssue:
    return LintIssue(str(post.path), line, rule, severity, message)


def iter_prose_lines(post: Post):
    """
    Yield (line_no, line) for body lines outside fenced and indented code.

    An unclosed fence swallows the rest of the document, as it does for the
    renderer.  Indented code starts after a blank line (it cannot interrupt
    a paragraph) and runs until the next non-blank, non-indented line.
    """
    fence = None
    indented = False
    after_blank = True
    for line_no, line in post.body_lines:
        match = FENCE_RE.match(line)
        if fence is not None:
            if match and _closes(fence, match):
                fence = None
                after_blank = True
            continue

        if not line.strip():
            after_blank = True
            yield line_no, line
            continue
        if INDENTED_RE.match(line) and (indented or after_blank):
            indented = True
            continue
        indented = False
        after_blank = False

        if match and not (match.group(2)[0] == "`" and "`" in match.group(3)):
            fence = match.group(2)
            continue
        yield line_no, line


def _closes(fence: str, match: re.Match) -> bool:
    marker = match.group(2)
    return (
        marker[0] == fence[0]
        and len(marker) >= len(fence)
        and not match.group(3).strip()
    )


# ── 1. Front-matter ───────────────────────────────────────────────────

def check_front_matter(post: Post, index: PostIndex) -> list[LintIssue]:
    rule = "front-matter"
    if post.error:
        return [_issue(post, post.error_line, rule, ERROR, post.error)]
    fm = post.front_matter
    if not fm.present:
        return [_issue(post, 1, rule, ERROR, "missing front-matter block")]

    issues = []
    title = fm.data.get("title")
    if title is None:
        issues.append(_issue(post, 1, rule, ERROR, "front-matter has no 'title'"))
    elif not isinstance(title, str):
        issues.append(_issue(
            post, 1, rule, ERROR,
            f"'title' must be a string, got {type(title).__name__}",
        ))
    elif not title.strip():
        issues.append(_issue(post, 1, rule, ERROR, "'title' is empty"))

    tags = fm.data.get("tags")
    if tags is None:
        issues.append(_issue(post, 1, rule, ERROR, "front-matter has no 'tags'"))
    elif not isinstance(tags, (str, list)):
        issues.append(_issue(
            post, 1, rule, ERROR,
            f"'tags' must be a list, got {type(tags).__name__}",
        ))
    elif not normalise_tags(tags):
        issues.append(_issue(post, 1, rule, ERROR, "'tags' is empty"))
    elif isinstance(tags, list) and len(normalise_tags(tags)) != len(tags):
        issues.append(_issue(
            post, 1, rule, WARNING, "'tags' contains empty or duplicate entries",
        ))
    return issues


# ── 2. READMORE marker ────────────────────────────────────────────────

def _is_marker(line: str, marker: str) -> bool:
    stripped = line.strip()
    if stripped.startswith("<!--") and stripped.endswith("-->"):
        stripped = stripped[4:-3].strip()
    return stripped == marker


def check_readmore(post: Post, index: PostIndex) -> list[LintIssue]:
    rule = "readmore"
    marker = config.READMORE_MARKER
    issues = []
    seen_prose = False
    first_line = 0
    for line_no, line in iter_prose_lines(post):
        if _is_marker(line, marker):
            if not first_line:
                first_line = line_no
                if not seen_prose:
                    issues.append(_issue(
                        post, line_no, rule, WARNING,
                        f"{marker} marker has no preview text before it",
                    ))
            else:
                issues.append(_issue(
                    post, line_no, rule, ERROR,
                    f"duplicate {marker} marker (first at line {first_line})",
                ))
        elif line.strip():
            seen_prose = True
    return issues


# ── 3. Links ──────────────────────────────────────────────────────────

def _is_external(target: str) -> bool:
    """Anchors, URLs with a scheme and protocol-relative URLs are not checked."""
    return (
        not target
        or target.startswith("#")
        or target.startswith("//")
        or bool(SCHEME_RE.match(target))
    )


def iter_link_targets(post: Post):
    """Yield (line_no, target) for every relative link in the prose."""
    for line_no, line in iter_prose_lines(post):
        line = INLINE_CODE_RE.sub("", line)
        targets = [m.group(1) for m in LINK_RE.finditer(line)]
        targets += [m.group(1) for m in REFERENCE_RE.finditer(line)]
        for target in targets:
            target = target.strip("<>").strip()
            if not _is_external(target):
                yield line_no, target


def check_links(post: Post, index: PostIndex) -> list[LintIssue]:
    rule = "links"
    issues = []
    for line_no, target in iter_link_targets(post):
        if index.resolve(target, post.path) is None:
            issues.append(_issue(
                post, line_no, rule, ERROR,
                f"broken relative link '{target}'",
            ))
    for line_no, line in iter_prose_lines(post):
        line = INLINE_CODE_RE.sub("", line)
        for match in WIKILINK_RE.finditer(line):
            name = match.group(1).strip()
            if not index.has_note(name):
                issues.append(_issue(
                    post, line_no, rule, ERROR,
                    f"wikilink [[{name}]] matches no post in the series",
                ))
    return issues


# ── 4. Fenced blocks ──────────────────────────────────────────────────

def check_fences(post: Post, index: PostIndex) -> list[LintIssue]:
    rule = "fences"
    issues = []
    fence = None
    opened_at = 0
    for line_no, line in post.body_lines:
        match = FENCE_RE.match(line)
        if not match:
            continue
        if fence is None:
            info = match.group(3).strip()
            if match.group(2)[0] == "`" and "`" in info:
                # inline code run, not a fence
                continue
            fence = match.group(2)
            opened_at = line_no
            if not info and config.REQUIRE_FENCE_LANGUAGE:
                issues.append(_issue(
                    post, line_no, rule, WARNING,
                    "fenced block has no language label",
                ))
        elif _closes(fence, match):
            fence = None

    if fence is not None:
        issues.append(_issue(
            post, opened_at, rule, ERROR,
            f"fenced block opened with {fence} is never closed",
        ))
    return issues


CHECKS = {
    "front-matter": check_front_matter,
    "readmore": check_readmore,
    "links": check_links,
    "fences": check_fences,
}
