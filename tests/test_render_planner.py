from __future__ import annotations

from typing import Sequence

import pytest

from modal_editor.config import CursorShape, EditorSettings
from modal_editor.modes import EditorMode
from modal_editor.render import (
    ClearLine,
    ClearScreen,
    Frame,
    MoveCursor,
    PlaceCursor,
    RenderPlanner,
    ScreenGrid,
    Viewport,
    WriteText,
)


def make_frame(
    lines: Sequence[str] = ("hello", "world"),
    cursor: tuple[int, int] = (0, 0),
    **kwargs,
) -> Frame:
    return Frame(lines=tuple(lines), cursor=cursor, **kwargs)


def draw(planner: RenderPlanner, grid: ScreenGrid, frame: Frame) -> list[str]:
    grid.apply(planner.plan(frame))
    return grid.lines()


def test_first_frame_clears_and_draws_every_row() -> None:
    planner = RenderPlanner(4, 20)

    plan = planner.plan(make_frame())

    assert plan.full_redraw is True
    assert plan.instructions[0] == ClearScreen()
    assert MoveCursor(2, 0) in plan.instructions
    assert WriteText("~") in plan.instructions
    assert plan.cursor == PlaceCursor(0, 0, CursorShape.BLOCK)


def test_screen_grid_shows_text_tildes_and_ruler() -> None:
    planner = RenderPlanner(4, 20)
    grid = ScreenGrid(4, 20)

    lines = draw(planner, grid, make_frame(cursor=(1, 2)))

    assert lines == ["hello", "world", "~", " " * 17 + "2,3"]
    assert grid.cursor == (1, 2)


def test_unchanged_frame_emits_no_row_instructions() -> None:
    planner = RenderPlanner(4, 20)
    planner.plan(make_frame())

    plan = planner.plan(make_frame())

    assert plan.instructions == ()
    assert plan.is_empty


def test_diff_only_touches_changed_rows() -> None:
    planner = RenderPlanner(4, 20, settings=EditorSettings(show_ruler=False))
    planner.plan(make_frame())

    plan = planner.plan(make_frame(["hello", "there"]))

    assert plan.instructions == (MoveCursor(1, 0), ClearLine(), WriteText("there"))


def test_diffing_disabled_always_redraws() -> None:
    planner = RenderPlanner(4, 20, settings=EditorSettings(diff_rendering=False))
    planner.plan(make_frame())

    plan = planner.plan(make_frame())

    assert plan.full_redraw is True
    assert plan.instructions[0] == ClearScreen()


def test_force_and_resize_trigger_full_redraw() -> None:
    planner = RenderPlanner(4, 20)
    planner.plan(make_frame())

    assert planner.plan(make_frame(), force=True).full_redraw is True

    planner.resize(6, 30)
    plan = planner.plan(make_frame())
    assert plan.full_redraw is True
    assert planner.viewport.text_rows == 5


def test_diffed_frames_match_full_redraw() -> None:
    frames = [
        make_frame(["a", "b", "c"]),
        make_frame(["a", "bb", "c"], cursor=(1, 1)),
        make_frame(["a"], mode=EditorMode.INSERT, cursor=(0, 1)),
        make_frame(["a"], mode=EditorMode.COMMAND, command_text="wq"),
    ]
    diffed = RenderPlanner(4, 12)
    diffed_grid = ScreenGrid(4, 12)

    for frame in frames:
        diffed_grid.apply(diffed.plan(frame))
        full_grid = ScreenGrid(4, 12)
        full_grid.apply(RenderPlanner(4, 12).plan(frame))
        assert diffed_grid.lines() == full_grid.lines()
        assert diffed_grid.cursor == full_grid.cursor


def test_vertical_scroll_is_sticky() -> None:
    lines = [f"line {n}" for n in range(10)]
    planner = RenderPlanner(4, 20)
    grid = ScreenGrid(4, 20)

    draw(planner, grid, make_frame(lines, cursor=(0, 0)))
    assert planner.viewport.top == 0

    rows = draw(planner, grid, make_frame(lines, cursor=(4, 0)))
    assert planner.viewport.top == 2
    assert rows[:3] == ["line 2", "line 3", "line 4"]
    assert grid.cursor == (2, 0)

    draw(planner, grid, make_frame(lines, cursor=(3, 0)))
    assert planner.viewport.top == 2

    draw(planner, grid, make_frame(lines, cursor=(1, 0)))
    assert planner.viewport.top == 1


def test_horizontal_scroll_follows_cursor() -> None:
    planner = RenderPlanner(3, 5, settings=EditorSettings(show_ruler=False))
    grid = ScreenGrid(3, 5)

    rows = draw(planner, grid, make_frame(["abcdefghij"], cursor=(0, 7)))

    assert planner.viewport.left == 3
    assert rows[0] == "defgh"
    assert grid.cursor == (0, 4)


def test_tabs_draw_as_single_space() -> None:
    planner = RenderPlanner(3, 20, settings=EditorSettings(show_ruler=False))
    grid = ScreenGrid(3, 20)

    rows = draw(planner, grid, make_frame(["\tx"], cursor=(0, 1)))

    assert rows[0] == " x"
    assert grid.cursor == (0, 1)


def test_insert_mode_label_and_bar_cursor() -> None:
    planner = RenderPlanner(3, 30)
    grid = ScreenGrid(3, 30)

    rows = draw(planner, grid, make_frame(mode=EditorMode.INSERT, cursor=(0, 5)))

    assert rows[2].startswith("-- INSERT --")
    assert rows[2].endswith("1,6")
    assert grid.cursor_shape is CursorShape.BAR


def test_status_message_and_modified_marker() -> None:
    planner = RenderPlanner(3, 30)
    grid = ScreenGrid(3, 30)

    rows = draw(
        planner,
        grid,
        make_frame(message="E32: No file name", message_error=True, modified=True),
    )

    assert rows[2].startswith("E32: No file name")
    assert rows[2].endswith("[+] 1,1")


def test_command_line_keeps_tail_visible() -> None:
    planner = RenderPlanner(3, 6)
    grid = ScreenGrid(3, 6)

    rows = draw(
        planner,
        grid,
        make_frame(mode=EditorMode.COMMAND, command_text="w longname"),
    )

    assert rows[2] == "gname"
    assert grid.cursor == (2, 5)
    assert grid.cursor_shape is CursorShape.BAR


def test_command_line_cursor_after_text() -> None:
    planner = RenderPlanner(3, 20)
    grid = ScreenGrid(3, 20)

    rows = draw(planner, grid, make_frame(mode=EditorMode.COMMAND, command_text="q"))

    assert rows[2] == ":q"
    assert grid.cursor == (2, 2)


def test_viewport_rejects_empty_size() -> None:
    with pytest.raises(ValueError):
        Viewport(0, 10)


def test_screen_grid_clips_long_writes() -> None:
    grid = ScreenGrid(2, 3)

    grid.apply([MoveCursor(0, 1), WriteText("abcd"), MoveCursor(5, 0), WriteText("x")])

    assert grid.lines() == [" ab", ""]


def test_wide_characters_fit_in_terminal_cells() -> None:
    planner = RenderPlanner(3, 6, settings=EditorSettings(show_ruler=False))
    grid = ScreenGrid(3, 6)

    rows = draw(planner, grid, make_frame(["日本語テキスト"], cursor=(0, 0)))
    assert rows[0] == "日本語"

    rows = draw(planner, grid, make_frame(["日本語テキスト"], cursor=(0, 4)))

    assert planner.viewport.left == 2
    assert rows[0] == "語テキ"
    assert grid.cursor == (0, 2)
    assert grid.row_text(0)[grid.cursor[1]] == "キ"


def test_status_message_with_wide_characters_keeps_ruler() -> None:
    planner = RenderPlanner(3, 12)
    grid = ScreenGrid(3, 12)

    rows = draw(planner, grid, make_frame(message="保存しました完了"))

    assert rows[2] == "保存しま 1,1"
