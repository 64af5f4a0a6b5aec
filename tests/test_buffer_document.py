import pytest

from modal_editor.buffer import Buffer, BufferDocument, BufferValidationError


def make_document(*lines: str) -> BufferDocument:
    return BufferDocument.from_lines(lines)


def test_empty_text_is_one_empty_line() -> None:
    assert BufferDocument.from_text("").snapshot() == ("",)
    assert BufferDocument.from_lines([]).snapshot() == ("",)


def test_from_text_round_trips_trailing_newline() -> None:
    document = BufferDocument.from_text("one\ntwo\n")

    assert document.snapshot() == ("one", "two", "")
    assert document.to_text("\n") == "one\ntwo\n"


def test_from_text_accepts_crlf() -> None:
    assert BufferDocument.from_text("a\r\nb").snapshot() == ("a", "b")


def test_insert_and_delete_char() -> None:
    document = make_document("helo")

    document.insert_text(0, 3, "l")
    removed = document.delete_char(0, 0)

    assert removed == "h"
    assert document.snapshot() == ("ello",)
    assert document.version == 2


def test_insert_text_rejects_line_breaks() -> None:
    document = make_document("abc")

    with pytest.raises(BufferValidationError):
        document.insert_text(0, 1, "x\ny")


def test_split_and_join_lines() -> None:
    document = make_document("hello world")

    document.split_line(0, 5)
    assert document.snapshot() == ("hello", " world")

    join_col = document.join_lines(0)
    assert join_col == 5
    assert document.snapshot() == ("hello world",)


def test_split_at_line_end_adds_empty_line() -> None:
    document = make_document("hello")

    document.split_line(0, 5)

    assert document.snapshot() == ("hello", "")


def test_delete_last_remaining_line_collapses_it() -> None:
    document = make_document("only")

    removed = document.delete_line(0)

    assert removed == "only"
    assert document.snapshot() == ("",)
    assert document.line_count == 1


def test_insert_line_bounds() -> None:
    document = make_document("a", "b")

    document.insert_line(2, "c")
    document.insert_line(0)

    assert document.snapshot() == ("", "a", "b", "c")
    with pytest.raises(BufferValidationError):
        document.insert_line(5)


@pytest.mark.parametrize(
    "call",
    [
        lambda d: d.get_line(3),
        lambda d: d.get_line(-1),
        lambda d: d.insert_text(0, 4, "x"),
        lambda d: d.delete_char(0, 3),
        lambda d: d.join_lines(1),
        lambda d: d.delete_line(2),
    ],
)
def test_out_of_bounds_calls_raise(call) -> None:
    document = make_document("abc", "de")

    with pytest.raises(BufferValidationError):
        call(document)


def test_snapshot_is_immutable_copy() -> None:
    document = make_document("a")
    snapshot = document.snapshot()

    document.insert_text(0, 1, "b")

    assert snapshot == ("a",)


def test_buffer_transaction_marks_modified() -> None:
    buffer = Buffer.from_lines(["abc"], filename="notes.txt")
    buffer.state.set_cursor(0, 3)

    buffer.insert_text("d")

    assert buffer.modified is True
    assert buffer.state.cursor == (0, 4)
    assert buffer.state.last_change_tick == buffer.document.version

    buffer.mark_saved("other.txt")
    assert buffer.modified is False
    assert buffer.display_name == "other.txt"


def test_buffer_display_name_without_file() -> None:
    assert Buffer().display_name == "[No Name]"
    assert Buffer(filename="/tmp/dir/file.txt").display_name == "file.txt"


def test_from_text_keeps_other_separators_inside_lines() -> None:
    text = "int a;\x0c\nint b; x\x0bend\rmid\n"

    document = BufferDocument.from_text(text)

    assert document.snapshot() == ("int a;\x0c", "int b; x\x0bend\rmid", "")
    assert document.to_text("\n") == text


def _apply_step(document: BufferDocument, step: str) -> None:
    last = document.line_count - 1
    if step == "delete_first":
        document.delete_line(0)
    elif step == "delete_last":
        document.delete_line(last)
    elif step == "join" and last > 0:
        document.join_lines(0)
    elif step == "split":
        document.split_line(last, len(document.get_line(last)))


@pytest.mark.parametrize(
    "steps",
    [
        ("delete_first", "delete_first", "delete_first", "split", "join"),
        ("split", "split", "delete_last", "join", "join", "delete_first"),
        ("join", "delete_last", "delete_last", "delete_last", "split"),
        ("split", "join", "join", "delete_first", "delete_first", "join"),
    ],
)
def test_line_count_never_drops_below_one(steps) -> None:
    document = make_document("alpha", "beta")

    for step in steps:
        _apply_step(document, step)
        assert document.line_count >= 1
