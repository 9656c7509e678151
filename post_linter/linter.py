"""
Linter — ties the post index and the document checks together.

Entry points:
  1. lint_post    — run every enabled check over one indexed post
  2. lint_file    — lint a single file, inside or outside the series root
  3. lint_all     — lint the whole series
  4. write_report — render a LintResult into the reports folder
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from post_linter import config
from post_linter.errors import ConfigError
from post_linter.services.checks import CHECKS, ERROR, WARNING, LintIssue
from post_linter.services.post_index import Post, PostIndex, load_post
from post_linter.services import report

logger = logging.getLogger(__name__)


@dataclass
class LintResult:
    """All findings of one run."""
    issues: list[LintIssue] = field(default_factory=list)
    files_checked: int = 0

    @property
    def errors(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == ERROR]

    @property
    def warnings(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == WARNING]

    def ok(self, strict: bool = False) -> bool:
        if strict:
            return not self.issues
        return not self.errors


class PostLinter:
    """Top-level linter for one series of posts."""

    def __init__(
        self,
        root: Path | None = None,
        rules: list[str] | None = None,
        reports_dir: Path | None = None,
    ):
        self.index = PostIndex(root)
        self.reports_dir = Path(reports_dir or config.REPORTS_DIR)
        self.rules = list(config.LINT_RULES if rules is None else rules)
        unknown = [r for r in self.rules if r not in CHECKS]
        if unknown:
            raise ConfigError(
                f"unknown lint rule(s): {', '.join(unknown)} "
                f"(known: {', '.join(CHECKS)})"
            )
        self._setup_logging()

    def _setup_logging(self) -> None:
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if config.LOG_FILE:
            handlers.append(logging.FileHandler(config.LOG_FILE))
        logging.basicConfig(
            level=getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING),
            format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
            handlers=handlers,
        )

    @property
    def root(self) -> Path:
        return self.index.root

    # ── Linting ───────────────────────────────────────────────────────

    def lint_post(self, post: Post) -> list[LintIssue]:
        issues = []
        for rule in self.rules:
            issues.extend(CHECKS[rule](post, self.index))
        logger.debug("%s: %d issue(s)", post.path, len(issues))
        return sorted(issues)

    def lint_file(self, path: Path) -> LintResult:
        """
        Lint a single file.  Posts already in the index are reused; other
        files are loaded directly and resolve links from their own directory.
        """
        post = self.index.get(path) or load_post(Path(path))
        return LintResult(issues=self.lint_post(post), files_checked=1)

    def lint_all(self) -> LintResult:
        """Lint every post in the series."""
        logger.info("Linting series under %s", self.root)
        self.index.build_index()
        result = LintResult()
        for post in self.index.index:
            result.issues.extend(self.lint_post(post))
            result.files_checked += 1
        logger.info(
            "Lint finished: %d file(s), %d error(s), %d warning(s)",
            result.files_checked, len(result.errors), len(result.warnings),
        )
        return result

    # ── Reports ───────────────────────────────────────────────────────

    def write_report(self, result: LintResult) -> Path:
        """Write a markdown report into the reports folder."""
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        today = datetime.now().strftime("%Y-%m-%d")
        dest = self.reports_dir / f"lint-report-{today}.md"
        dest.write_text(report.render_report(result, self.root), encoding="utf-8")
        logger.info("Lint report written → %s", dest)
        return dest
