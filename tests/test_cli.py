"""Tests for the mdbook-private command-line interface."""

import json

import pytest
from click.testing import CliRunner

from mdbook_private.cli import cli
from mdbook_private.services import RenderService


@pytest.fixture
def runner():
    """Create a click test runner."""
    return CliRunner()


def preprocessor_input(private_cfg):
    """Build the [context, book] pair mdBook writes to stdin."""
    context = {
        "root": "/path/to/book",
        "config": {"book": {"title": "TITLE"}, "preprocessor": {"private": private_cfg}},
        "renderer": "html",
        "mdbook_version": "0.4.21",
    }
    book = {
        "sections": [
            {
                "Chapter": {
                    "name": "Chapter 1",
                    "content": "# Chapter 1\n<!--private\n## Plans\nsecret\n-->\nThe End",
                    "number": [1],
                    "sub_items": [],
                    "path": "chapter_1.md",
                    "source_path": "chapter_1.md",
                    "parent_names": [],
                }
            },
            {
                "Chapter": {
                    "name": "Hidden",
                    "content": "hidden",
                    "number": [2],
                    "sub_items": [],
                    "path": "_hidden.md",
                    "source_path": "_hidden.md",
                    "parent_names": [],
                }
            },
        ],
        "__non_exhaustive": None,
    }
    return json.dumps([context, book])


class TestSupports:
    """Tests for the renderer support check."""

    def test_supported_renderer(self, runner):
        """Test that html is supported."""
        result = runner.invoke(cli, ["supports", "html"])
        assert result.exit_code == 0

    def test_unsupported_renderer(self, runner):
        """Test the one renderer that is refused."""
        result = runner.invoke(cli, ["supports", "not-supported"])
        assert result.exit_code == 1


class TestPreprocess:
    """Tests for running as an mdBook preprocessor."""

    def test_remove(self, runner):
        """Test that the processed book is written to stdout."""
        result = runner.invoke(cli, [], input=preprocessor_input({"remove": True}))

        assert result.exit_code == 0
        book = json.loads(result.output)
        assert len(book["sections"]) == 1
        assert book["sections"][0]["Chapter"]["content"] == "# Chapter 1\n## Plans\nThe End"
        assert book["__non_exhaustive"] is None

    def test_keep(self, runner):
        """Test the default configuration."""
        result = runner.invoke(cli, [], input=preprocessor_input({}))

        assert result.exit_code == 0
        book = json.loads(result.output)
        assert len(book["sections"]) == 2
        assert "CONFIDENTIAL" in book["sections"][0]["Chapter"]["content"]

    def test_invalid_json(self, runner):
        """Test that unreadable input exits with an error."""
        result = runner.invoke(cli, [], input="not json")

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_wrong_shape(self, runner):
        """Test that JSON of the wrong shape exits with an error."""
        result = runner.invoke(cli, [], input="{}")
        assert result.exit_code == 1


class TestRender:
    """Tests for previewing a single file."""

    @pytest.fixture
    def chapter_file(self, tmp_path):
        """Create a markdown file with a private section."""
        path = tmp_path / "chapter.md"
        path.write_text("# Public\n\n<!--private\n## Plans\nSecret line\n-->\n\nEnd\n")
        return path

    def test_render_markdown(self, runner, chapter_file):
        """Test the default styled preview."""
        result = runner.invoke(cli, ["render", str(chapter_file)])

        assert result.exit_code == 0
        assert "> ## Plans" in result.output
        assert "CONFIDENTIAL" in result.output

    def test_render_remove(self, runner, chapter_file):
        """Test overriding the configuration from the command line."""
        result = runner.invoke(cli, ["render", str(chapter_file), "--remove"])

        assert result.exit_code == 0
        assert result.output == "# Public\n\n## Plans\n\nEnd\n"

    def test_render_with_book_toml(self, runner, chapter_file, tmp_path):
        """Test reading the configuration from book.toml."""
        config = tmp_path / "book.toml"
        config.write_text('[preprocessor.private]\nnotice = "INTERNAL"\n')
        result = runner.invoke(cli, ["render", str(chapter_file), "-c", str(config)])

        assert result.exit_code == 0
        assert "INTERNAL" in result.output

    def test_render_missing_config(self, runner, chapter_file, tmp_path):
        """Test that a missing book.toml is reported."""
        result = runner.invoke(
            cli, ["render", str(chapter_file), "-c", str(tmp_path / "missing.toml")]
        )
        assert result.exit_code == 1

    def test_render_html(self, runner, chapter_file, tmp_path):
        """Test writing an HTML preview to a file."""
        output = tmp_path / "out.html"
        result = runner.invoke(
            cli, ["render", str(chapter_file), "--html", "-o", str(output)]
        )

        assert result.exit_code == 0
        html = output.read_text()
        assert html.startswith("<!DOCTYPE html>")
        assert "CONFIDENTIAL" in html
        assert "Secret line" in html

    def test_render_html_removed(self, runner, chapter_file):
        """Test that removed sections do not reach the HTML."""
        result = runner.invoke(cli, ["render", str(chapter_file), "--html", "--remove"])

        assert result.exit_code == 0
        assert "Secret line" not in result.output
        assert "Plans" in result.output


class TestRenderService:
    """Tests for the HTML preview page."""

    def test_page_title_is_escaped(self):
        """Test that the page title cannot inject markup."""
        page = RenderService().render_page("text\n", title="<b>notes</b>")

        assert "<title>&lt;b&gt;notes&lt;/b&gt;</title>" in page
        assert "<title><b>" not in page
