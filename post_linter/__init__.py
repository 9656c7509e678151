"""
Post Linter — content checks for a markdown blog series.

Scans a directory of posts written for a static-site generator and verifies
the document-level conventions the generator relies on: YAML front-matter
with a title and tags, at most one READMORE marker, relative links that
resolve to sibling posts, and well-formed fenced code blocks.
"""
