"""Tests for scanning the series and resolving links."""
from post_linter.services.post_index import PostIndex

BROKEN_FRONT_MATTER = "---\ntitle: [oops\n---\nBody\n"


class TestBuildIndex:

    def test_indexes_every_markdown_file_sorted(self, series):
        """All .md files are indexed in path order."""
        series("b.md")
        series("a.md")
        series("notes.txt", "not markdown")
        index = PostIndex(series.root)
        names = [p.path.name for p in index.build_index()]
        assert names == ["a.md", "b.md"]

    def test_excluded_directories_are_skipped(self, series):
        """Posts under excluded directory names are ignored."""
        series("a.md")
        series("drafts/wip.md")
        index = PostIndex(series.root, exclude=["drafts"])
        assert [p.path.name for p in index.index] == ["a.md"]

    def test_title_and_tags_are_read(self, series):
        series("a.md")
        post = PostIndex(series.root).index[0]
        assert post.title == "Part 1: Exploring the data"
        assert post.tags == ["machine-learning", "regression"]
        assert post.error == ""

    def test_bad_front_matter_is_recorded_not_raised(self, series):
        """A post whose YAML fails to parse is still indexed."""
        series("bad.md", BROKEN_FRONT_MATTER)
        post = PostIndex(series.root).index[0]
        assert post.error.startswith("invalid YAML")
        assert post.title == ""

    def test_bad_front_matter_keeps_the_split_body(self, series):
        """Only the YAML failed, so the body still starts after the block."""
        series("bad.md", BROKEN_FRONT_MATTER)
        post = PostIndex(series.root).index[0]
        assert post.front_matter.present is True
        assert post.front_matter.body == "Body\n"
        assert post.front_matter.body_line == 4

    def test_unclosed_front_matter_keeps_whole_text_as_body(self, series):
        series("open.md", "---\ntitle: T\nBody\n")
        post = PostIndex(series.root).index[0]
        assert post.error.endswith("never closed")
        assert post.front_matter.body_line == 1

    def test_missing_root_gives_empty_index(self, tmp_path):
        index = PostIndex(tmp_path / "nowhere")
        assert index.index == []

    def test_summary_and_lookups(self, series):
        path = series("a.md")
        index = PostIndex(series.root)
        assert index.all_titles() == {"Part 1: Exploring the data"}
        assert index.all_tags() == {"machine-learning", "regression"}
        assert index.get(path).path == path
        assert index.summary() == [{
            "path": str(path),
            "title": "Part 1: Exploring the data",
            "tags": ["machine-learning", "regression"],
        }]


class TestResolve:

    def test_relative_to_source_directory(self, series):
        target = series("part-1.md")
        source = series("sub/part-2.md")
        index = PostIndex(series.root)
        assert index.resolve("../part-1.md", source) == source.parent / "../part-1.md"
        assert index.resolve("../part-1.md", source).resolve() == target.resolve()

    def test_fragment_query_and_escapes(self, series):
        series("my post.md")
        source = series("b.md")
        index = PostIndex(series.root)
        assert index.resolve("my%20post.md#intro", source) is not None
        assert index.resolve("my%20post.md?x=1", source) is not None

    def test_root_anchored_and_placeholder_links(self, series):
        series("part-1.md")
        source = series("sub/part-2.md")
        index = PostIndex(series.root)
        assert index.resolve("/part-1.md", source) is not None
        assert index.resolve("{filename}/part-1.md", source) is not None

    def test_missing_target(self, series):
        source = series("a.md")
        assert PostIndex(series.root).resolve("nope.md", source) is None

    def test_directory_is_not_a_document(self, series):
        source = series("a.md")
        (series.root / "images").mkdir()
        assert PostIndex(series.root).resolve("images", source) is None

    def test_wikilinks_match_title_or_stem(self, series):
        series("part-1.md")
        index = PostIndex(series.root)
        assert index.has_note("part-1")
        assert index.has_note("Part-1.md")
        assert index.has_note("part 1: exploring the data")
        assert not index.has_note("Part 9")
