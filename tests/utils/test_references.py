"""Tests for `file=` annotation parsing."""

import pytest
from code_import_cli.errors import MalformedReferenceError
from code_import_cli.utils.references import LineRange
from code_import_cli.utils.references import SingleLine
from code_import_cli.utils.references import WholeFile
from code_import_cli.utils.references import find_file_meta
from code_import_cli.utils.references import parse_reference
from code_import_cli.utils.references import split_meta
from code_import_cli.utils.references import unescape_path


class TestParseReference:
    """Grammar accepted by parse_reference."""

    def test_whole_file(self):
        ref = parse_reference("file=./a.js")
        assert ref.target_path == "./a.js"
        assert ref.selection == WholeFile()
        assert ref.from_line is None
        assert ref.to_line is None
        assert ref.is_range is True
        assert ref.is_whole_file

    def test_single_line(self):
        ref = parse_reference("file=./a.js#L1")
        assert ref.selection == SingleLine(1)
        assert ref.from_line == 1
        assert ref.to_line is None
        assert ref.is_range is False

    def test_open_ended_range(self):
        ref = parse_reference("file=./a.js#L2-")
        assert ref.selection == LineRange(2, None)
        assert ref.from_line == 2
        assert ref.to_line is None
        assert ref.is_range is True

    def test_closed_range(self):
        ref = parse_reference("file=./a.js#L2-L10")
        assert ref.selection == LineRange(2, 10)
        assert (ref.from_line, ref.to_line, ref.is_range) == (2, 10, True)

    def test_hash_inside_path(self):
        """A "#" that does not start a line spec belongs to the path."""
        ref = parse_reference("file=./__fixtures__/say-#-hi.js#L2-L3")
        assert ref.target_path == "./__fixtures__/say-#-hi.js"
        assert ref.selection == LineRange(2, 3)

        ref = parse_reference("file=./__fixtures__/say-#-hi.js")
        assert ref.target_path == "./__fixtures__/say-#-hi.js"
        assert ref.is_whole_file

    def test_hash_followed_by_word_starting_with_l(self):
        ref = parse_reference("file=./notes#Links.md")
        assert ref.target_path == "./notes#Links.md"
        assert ref.is_whole_file

    def test_directory_name_resembling_line_spec(self):
        ref = parse_reference("file=./dir#L1/b.js")
        assert ref.target_path == "./dir#L1/b.js"
        assert ref.is_whole_file

        ref = parse_reference("file=./dir#L1/b.js#L2")
        assert ref.target_path == "./dir#L1/b.js"
        assert ref.selection == SingleLine(2)

    def test_second_line_spec_rejected(self):
        with pytest.raises(MalformedReferenceError) as exc_info:
            parse_reference("file=./a.js#L2-L3#L4")
        assert "only one line specification" in str(exc_info.value)

    def test_root_dir_token_kept_raw(self):
        ref = parse_reference("file=<rootDir>/src/a.js#L3")
        assert ref.target_path == "<rootDir>/src/a.js"

    def test_escaped_space_kept_raw(self):
        ref = parse_reference("file=./my\\ file.js#L1")
        assert ref.target_path == "./my\\ file.js"
        assert unescape_path(ref.target_path) == "./my file.js"

    def test_annotation_is_recorded(self):
        assert parse_reference("file=a.js#L4").annotation == "file=a.js#L4"

    def test_only_following_lines_rejected(self):
        """A range must always state its start line."""
        with pytest.raises(MalformedReferenceError) as exc_info:
            parse_reference("file=./__fixtures__/say-#-hi.js#-L2")
        assert exc_info.value.annotation == "file=./__fixtures__/say-#-hi.js#-L2"
        assert "start" in str(exc_info.value)

    @pytest.mark.parametrize(
        "annotation",
        [
            "file=./a.js#L0",
            "file=./a.js#L2-L0",
            "file=./a.js#L2x",
            "file=./a.js#L2-L",
            "file=./a.js#L2-x",
            "file=./a.js#L",
            "file=./a.js#L2L3",
            "file=./a.js#-L",
        ],
    )
    def test_malformed_tail_rejected(self, annotation):
        with pytest.raises(MalformedReferenceError):
            parse_reference(annotation)

    @pytest.mark.parametrize("annotation", ["file=", "file=#L2", "title=a.js", "./a.js#L2"])
    def test_missing_prefix_or_path_rejected(self, annotation):
        with pytest.raises(MalformedReferenceError):
            parse_reference(annotation)


class TestMetaTokens:
    """Isolating the annotation from sibling metadata."""

    def test_split_meta_keeps_escaped_spaces(self):
        assert split_meta("title=demo file=./my\\ dir/x.js#L1") == ["title=demo", "file=./my\\ dir/x.js#L1"]

    def test_split_meta_drops_empty_tokens(self):
        assert split_meta("a  b") == ["a", "b"]

    def test_find_file_meta(self):
        assert find_file_meta("title=demo file=./a.js#L2 showLineNumbers") == "file=./a.js#L2"

    def test_find_file_meta_first_wins(self):
        assert find_file_meta("file=a.js file=b.js") == "file=a.js"

    @pytest.mark.parametrize("meta", [None, "", "title=demo", "profile=x"])
    def test_find_file_meta_absent(self, meta):
        assert find_file_meta(meta) is None

    def test_unescape_path(self):
        assert unescape_path("a\\ b\\ c.js") == "a b c.js"
        assert unescape_path("plain.js") == "plain.js"
