"""Tests for the markdown content store and front-matter parsing."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from devblog.content.frontmatter import split_front_matter
from devblog.content.markdown_store import MarkdownContentStore, entry_id_for, slugify
from devblog.errors import CollectionNotFoundError, DuplicateEntryError, InvalidEntryError


def _write_post(root: Path, relative: str, front_matter: str, body: str = "Body text.\n") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\n{front_matter}---\n{body}", encoding="utf-8")
    return path


def test_loads_markdown_and_mdx_entries(tmp_path: Path):
    blog = tmp_path / "blog"
    _write_post(
        blog,
        "first-post.md",
        "title: First post\ndescription: Hello\npubDate: Jul 08 2022\nheroImage: ../../assets/one.jpg\n",
    )
    _write_post(blog, "Using MDX.mdx", "title: Using MDX\npubDate: 2022-07-10\ntags: [mdx, astro]\n")
    (blog / "notes.txt").write_text("not a post", encoding="utf-8")

    entries = MarkdownContentStore(tmp_path).get_collection("blog")

    by_id = {entry.id: entry for entry in entries}
    assert set(by_id) == {"first-post", "using-mdx"}
    first = by_id["first-post"]
    assert first.data.title == "First post"
    assert first.data.description == "Hello"
    assert first.data.pub_date == datetime(2022, 7, 8, tzinfo=timezone.utc)
    assert first.data.hero_image == "../../assets/one.jpg"
    assert first.body == "Body text.\n"
    assert first.source_path == blog / "first-post.md"
    assert by_id["using-mdx"].data.tags == ["mdx", "astro"]
    assert by_id["using-mdx"].data.hero_image is None


def test_nested_index_files_take_directory_id(tmp_path: Path):
    blog = tmp_path / "blog"
    _write_post(blog, "guides/setup/index.md", "title: Setup\npubDate: 2024-01-01\n")
    _write_post(blog, "guides/Deploying.md", "title: Deploying\npubDate: 2024-01-02\n")

    ids = {entry.id for entry in MarkdownContentStore(tmp_path).get_collection("blog")}

    assert ids == {"guides/setup", "guides/deploying"}


def test_slug_front_matter_overrides_path_id(tmp_path: Path):
    _write_post(tmp_path / "blog", "2024-01-01-hello.md", "title: Hello\nslug: hello\npubDate: 2024-01-01\n")

    entries = MarkdownContentStore(tmp_path).get_collection("blog")

    assert [entry.id for entry in entries] == ["hello"]


def test_underscore_files_are_ignored(tmp_path: Path):
    blog = tmp_path / "blog"
    _write_post(blog, "post.md", "title: Post\npubDate: 2024-01-01\n")
    _write_post(blog, "_partial.md", "title: Partial\n")

    entries = MarkdownContentStore(tmp_path).get_collection("blog")

    assert [entry.id for entry in entries] == ["post"]


def test_files_under_hidden_or_underscore_dirs_are_ignored(tmp_path: Path):
    blog = tmp_path / "blog"
    _write_post(blog, "post.md", "title: Post\npubDate: 2024-01-01\n")
    _write_post(blog, "_drafts/unfinished.md", "title: Unfinished\npubDate: 2024-01-02\n")
    _write_post(blog, ".hidden/secret.md", "title: Secret\npubDate: 2024-01-03\n")
    _write_post(blog, "series/_notes/idea.md", "title: Idea\npubDate: 2024-01-04\n")

    entries = MarkdownContentStore(tmp_path).get_collection("blog")

    assert [entry.id for entry in entries] == ["post"]


def test_drafts_are_excluded_unless_requested(tmp_path: Path):
    blog = tmp_path / "blog"
    _write_post(blog, "published.md", "title: Published\npubDate: 2024-01-01\n")
    _write_post(blog, "wip.md", "title: WIP\npubDate: 2024-02-01\ndraft: true\n")

    default_ids = {entry.id for entry in MarkdownContentStore(tmp_path).get_collection("blog")}
    all_ids = {
        entry.id
        for entry in MarkdownContentStore(tmp_path, include_drafts=True).get_collection("blog")
    }

    assert default_ids == {"published"}
    assert all_ids == {"published", "wip"}


def test_missing_title_is_allowed(tmp_path: Path):
    _write_post(tmp_path / "blog", "untitled.md", "pubDate: 2024-01-01\n")

    entries = MarkdownContentStore(tmp_path).get_collection("blog")

    assert entries[0].data.title is None


def test_missing_pub_date_is_invalid(tmp_path: Path):
    path = _write_post(tmp_path / "blog", "no-date.md", "title: No date\n")

    with pytest.raises(InvalidEntryError, match="pubDate") as excinfo:
        MarkdownContentStore(tmp_path).get_collection("blog")

    assert excinfo.value.path == path


def test_unparseable_pub_date_is_invalid(tmp_path: Path):
    _write_post(tmp_path / "blog", "bad-date.md", "title: Bad\npubDate: someday soon\n")

    with pytest.raises(InvalidEntryError, match="Invalid pubDate"):
        MarkdownContentStore(tmp_path).get_collection("blog")


def test_malformed_front_matter_is_invalid(tmp_path: Path):
    _write_post(tmp_path / "blog", "broken.md", "title: [unclosed\npubDate: 2024-01-01\n")

    with pytest.raises(InvalidEntryError, match="Invalid front matter"):
        MarkdownContentStore(tmp_path).get_collection("blog")


def test_duplicate_ids_are_rejected(tmp_path: Path):
    blog = tmp_path / "blog"
    _write_post(blog, "post.md", "title: One\npubDate: 2024-01-01\n")
    _write_post(blog, "post/index.md", "title: Two\npubDate: 2024-01-02\n")

    with pytest.raises(DuplicateEntryError, match="post"):
        MarkdownContentStore(tmp_path).get_collection("blog")


def test_missing_collection_raises(tmp_path: Path):
    with pytest.raises(CollectionNotFoundError, match="blog"):
        MarkdownContentStore(tmp_path).get_collection("blog")


def test_empty_collection_returns_no_entries(tmp_path: Path):
    (tmp_path / "blog").mkdir()

    assert MarkdownContentStore(tmp_path).get_collection("blog") == []


def test_split_front_matter_without_header_returns_full_text():
    meta, body = split_front_matter("# Just markdown\n")

    assert meta == {}
    assert body == "# Just markdown\n"


def test_split_front_matter_rejects_non_mapping():
    with pytest.raises(ValueError, match="mapping"):
        split_front_matter("---\n- a\n- b\n---\nbody")


def test_slugify_and_entry_id_helpers(tmp_path: Path):
    assert slugify("My First Post!") == "my-first-post"
    assert entry_id_for(tmp_path / "blog" / "Nested Dir" / "A Post.md", tmp_path / "blog") == (
        "nested-dir/a-post"
    )
