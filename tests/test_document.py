from pathlib import Path

import pytest

from quill_engine.buffer import (
    RUST,
    Document,
    DocumentIOError,
    FileType,
    HighlightType,
    Position,
    SearchDirection,
    split_lines,
)


def make_document(*lines: str, file_name: str | None = None) -> Document:
    return Document.from_text("\n".join(lines), file_name=file_name)


def contents(document: Document) -> list[str]:
    return [row.string for row in document]


def test_new_document_is_empty_and_clean() -> None:
    document = Document()

    assert len(document) == 0
    assert document.is_empty()
    assert not document.is_dirty()
    assert document.file_name is None
    assert document.file_type == FileType.default()


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", []),
        ("a", ["a"]),
        ("a\n", ["a"]),
        ("a\n\n", ["a", ""]),
        ("a\r\nb\r\n", ["a", "b"]),
        ("\n", [""]),
    ],
)
def test_split_lines(text: str, expected: list[str]) -> None:
    assert split_lines(text) == expected


def test_open_reads_rows_and_highlights(tmp_path: Path) -> None:
    path = tmp_path / "main.rs"
    path.write_text("fn main() {\n    let x = 5;\n}\n", encoding="utf-8")

    document = Document.open(str(path))

    assert contents(document) == ["fn main() {", "    let x = 5;", "}"]
    assert document.file_type is RUST
    assert not document.is_dirty()
    row = document.row(1)
    assert row is not None
    assert row.highlighting[4:7] == [HighlightType.PRIMARY_KEYWORDS] * 3
    assert row.highlighting[12] is HighlightType.NUMBER


def test_open_empty_file_has_no_rows(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")

    document = Document.open(str(path))

    assert len(document) == 0


def test_open_missing_file_raises(tmp_path: Path) -> None:
    missing = tmp_path / "missing.txt"

    with pytest.raises(DocumentIOError) as excinfo:
        Document.open(str(missing))

    assert excinfo.value.path == str(missing)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_save_writes_newline_terminated_rows(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"
    document = make_document("one", "", "three", file_name=str(path))
    document.insert(Position(3, 0), "!")

    document.save()

    assert path.read_text(encoding="utf-8") == "one!\n\nthree\n"
    assert not document.is_dirty()


def test_save_without_destination_is_noop() -> None:
    document = make_document("a")
    document.insert(Position(0, 0), "b")

    document.save()

    assert document.is_dirty()


def test_save_failure_keeps_dirty(tmp_path: Path) -> None:
    target = tmp_path / "no-such-dir" / "out.txt"
    document = make_document("a", file_name=str(target))
    document.insert(Position(1, 0), "b")

    with pytest.raises(DocumentIOError):
        document.save()

    assert document.is_dirty()


def test_open_save_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("alpha\n\tbeta\n\ngamma\n", encoding="utf-8")

    Document.open(str(path)).save()

    assert path.read_text(encoding="utf-8") == "alpha\n\tbeta\n\ngamma\n"


def test_insert_into_row() -> None:
    document = make_document("hllo")

    document.insert(Position(1, 0), "e")

    assert contents(document) == ["hello"]
    assert document.is_dirty()


def test_insert_at_append_point_adds_row() -> None:
    document = make_document("a")

    document.insert(Position(0, 1), "b")

    assert contents(document) == ["a", "b"]


def test_insert_into_empty_document() -> None:
    document = Document()

    document.insert(Position(0, 0), "x")

    assert contents(document) == ["x"]


def test_insert_beyond_append_point_is_noop() -> None:
    document = make_document("a")

    document.insert(Position(0, 5), "b")

    assert contents(document) == ["a"]
    assert not document.is_dirty()


def test_insert_rehighlights_touched_row() -> None:
    document = make_document("x = ", file_name="lib.rs")

    document.insert(Position(4, 0), "7")

    row = document.row(0)
    assert row is not None
    assert row.highlighting[-1] is HighlightType.NUMBER
    assert len(row.highlighting) == len(row)


def test_newline_splits_row() -> None:
    document = make_document("foobar", "baz")

    document.insert(Position(3, 0), "\n")

    assert contents(document) == ["foo", "bar", "baz"]
    assert document.is_dirty()


def test_newline_at_end_of_last_row_appends_empty_row() -> None:
    document = make_document("a", "bc")

    document.insert(Position(2, 1), "\n")

    assert contents(document) == ["a", "bc", ""]
    assert len(document) == 3


def test_newline_at_append_point() -> None:
    document = make_document("a")

    document.insert_newline(Position(0, 1))

    assert contents(document) == ["a", ""]


def test_newline_highlights_both_halves() -> None:
    document = make_document("let 42", file_name="x.rs")

    document.insert_newline(Position(4, 0))

    first, second = document.row(0), document.row(1)
    assert first is not None and second is not None
    assert first.highlighting == [HighlightType.PRIMARY_KEYWORDS] * 3 + [
        HighlightType.NONE
    ]
    assert second.highlighting == [HighlightType.NUMBER] * 2


def test_delete_at_end_of_row_joins_next() -> None:
    document = make_document("foo", "bar")

    document.delete(Position(3, 0))

    assert contents(document) == ["foobar"]
    assert document.is_dirty()


def test_delete_at_end_of_last_row_keeps_content() -> None:
    document = make_document("foo")

    document.delete(Position(3, 0))

    assert contents(document) == ["foo"]


def test_delete_character() -> None:
    document = make_document("abc", "def")

    document.delete(Position(1, 1))

    assert contents(document) == ["abc", "df"]


def test_delete_out_of_range_is_noop() -> None:
    document = make_document("abc")

    document.delete(Position(0, 1))
    document.delete(Position(0, -1))

    assert contents(document) == ["abc"]
    assert not document.is_dirty()


def test_row_accessor_bounds() -> None:
    document = make_document("a", "b")

    assert document.row(1) is not None
    assert document.row(2) is None
    assert document.row(-1) is None


def test_assigning_file_name_reselects_profile() -> None:
    document = make_document("let x = 1;")
    row = document.row(0)
    assert row is not None
    assert set(row.highlighting) == {HighlightType.NONE}

    document.file_name = "main.rs"

    assert document.file_type is RUST
    assert row.highlighting[0] is HighlightType.PRIMARY_KEYWORDS


def test_highlight_paints_and_clears_search_word() -> None:
    document = make_document("foo", "boo")

    document.highlight("oo")
    painted = [row.highlighting for row in document]
    document.highlight(None)

    assert painted == [[HighlightType.NONE] + [HighlightType.MATCH] * 2] * 2
    assert all(set(row.highlighting) == {HighlightType.NONE} for row in document)


def test_find_forward_crosses_rows() -> None:
    document = make_document("foo", "boo")

    assert document.find("o", Position(0, 0), SearchDirection.FORWARD) == Position(1, 0)
    assert document.find("o", Position(2, 0), SearchDirection.FORWARD) == Position(2, 0)
    assert document.find("o", Position(3, 0), SearchDirection.FORWARD) == Position(1, 1)


def test_find_forward_does_not_wrap() -> None:
    document = make_document("foo", "boo")

    assert document.find("f", Position(1, 0), SearchDirection.FORWARD) is None
    assert document.find("o", Position(3, 1), SearchDirection.FORWARD) is None


def test_find_backward_scans_towards_start() -> None:
    document = make_document("foo", "bar", "baz")

    assert document.find("o", Position(2, 2), SearchDirection.BACKWARD) == Position(2, 0)
    assert document.find("ba", Position(3, 2), SearchDirection.BACKWARD) == Position(0, 2)
    assert document.find("ba", Position(0, 2), SearchDirection.BACKWARD) == Position(0, 1)
    assert document.find("z", Position(0, 2), SearchDirection.BACKWARD) is None


def test_find_empty_query_returns_none() -> None:
    document = make_document("foo")

    for direction in SearchDirection:
        assert document.find("", Position(0, 0), direction) is None


def test_find_outside_document_returns_none() -> None:
    document = make_document("foo")

    assert document.find("f", Position(0, 1), SearchDirection.FORWARD) is None
    assert document.find("f", Position(9, 0), SearchDirection.FORWARD) is None
    assert Document().find("f", Position(0, 0), SearchDirection.BACKWARD) is None


def test_find_from_column_past_row_end_is_noop() -> None:
    document = make_document("foo", "bar")

    assert document.find("b", Position(9, 0), SearchDirection.FORWARD) is None
    assert document.find("f", Position(9, 1), SearchDirection.BACKWARD) is None
    assert document.find("f", Position(-1, 1), SearchDirection.BACKWARD) is None
    assert document.find("b", Position(3, 0), SearchDirection.FORWARD) == Position(0, 1)
