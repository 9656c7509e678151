"""
Report rendering — turns a LintResult into either terse terminal lines or a
markdown report note (with its own front-matter) for the reports folder.
"""

import logging
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def render_text(result) -> str:
    """One `path:line: severity [rule] message` line per issue."""
    lines = [
        f"{i.path}:{i.line}: {i.severity} [{i.rule}] {i.message}"
        for i in result.issues
    ]
    lines.append(
        f"{result.files_checked} file(s) checked: "
        f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)"
    )
    return "\n".join(lines)


def _display_path(path: str, root: Path) -> str:
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return path


def render_report(result, root: Path) -> str:
    """Produce a markdown report grouped by post."""
    today = datetime.now().strftime("%Y-%m-%d")

    sections = [
        "---",
        f'title: "Series Lint Report — {today}"',
        "tags: [lint-report]",
        f"date: {today}",
        "---",
        "",
        f"# Series Lint Report — {today}",
        "",
        "| Files checked | Errors | Warnings |",
        "|---|---|---|",
        f"| {result.files_checked} | {len(result.errors)} | {len(result.warnings)} |",
        "",
    ]

    if not result.issues:
        sections.append("No issues found.")
        sections.append("")
        return "\n".join(sections)

    by_path: dict[str, list] = {}
    for issue in result.issues:
        by_path.setdefault(issue.path, []).append(issue)

    for path, issues in by_path.items():
        sections.append(f"## {_display_path(path, root)}")
        sections.append("")
        for issue in issues:
            sections.append(
                f"- **{issue.severity}** line {issue.line} "
                f"`{issue.rule}`: {issue.message}"
            )
        sections.append("")

    return "\n".join(sections)
