"""
Central configuration for the post linter.

Paths, enabled rules and logging knobs live here.  Values are read from
environment variables (or a .env file) with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# ── Series layout ─────────────────────────────────────────────────────
# Directory holding the markdown posts of the series
POSTS_DIR = Path(os.getenv("POSTS_DIR", "posts"))
# Where `post-lint report` writes its markdown report
REPORTS_DIR = Path(os.getenv("REPORTS_DIR", "reports"))
# Directory names never descended into while indexing
EXCLUDE_DIRS = _split(
    os.getenv("EXCLUDE_DIRS", ".git,node_modules,output,reports")
)

# ── Rules ─────────────────────────────────────────────────────────────
ALL_RULES = ["front-matter", "readmore", "links", "fences"]
LINT_RULES = _split(os.getenv("LINT_RULES", ",".join(ALL_RULES)))
# Token separating the preview from the full article
READMORE_MARKER = os.getenv("READMORE_MARKER", "READMORE")
# Warn about fenced blocks without a language label
REQUIRE_FENCE_LANGUAGE = _flag(os.getenv("REQUIRE_FENCE_LANGUAGE", "true"))

# ── Logging ───────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
# Empty means log to stderr only
LOG_FILE = os.getenv("LOG_FILE", "")
