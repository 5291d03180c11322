"""Tests for writing boards back into markdown."""

import re

from markban.model.column import add_board, add_column, rename_column
from markban.model.formatting import FormattingCache
from markban.model.loader import extract
from markban.model.task import add_task, find_task, move_task, rename_task, toggle_task
from markban.model.writer import column_heading, serialize, task_line
from markban.models import Column, Task, TaskFormat
from tests.conftest import SAMPLE_DOC

from .conftest import _flat, _make_board, _make_column, _make_task

ID_COMMENT_RE = re.compile(r" <!-- task-id: \w+ -->")


def _roundtrip(text):
    doc, cache = extract(text)
    return serialize(text, doc.boards, cache)


def _shape(text):
    doc, _ = extract(text)
    return [
        (b.title, [(c.title, [(t.indent, t.text, t.checked, t.id) for t in c.iter_tasks()]) for c in b.columns])
        for b in doc.boards
    ]


# --- round trips ---


def test_roundtrip_identity_without_boards():
    text = "---\ntitle: Notes\n---\n# Notes\n\n- [ ] plain\n\n```\n#### code\n```\n##### h5 text\n"
    assert _roundtrip(text) == text


def test_roundtrip_identity_empty():
    assert _roundtrip("") == ""


def test_roundtrip_sample():
    expected = SAMPLE_DOC.replace("\nFooter text.", "\n\nFooter text.")
    first = _roundtrip(SAMPLE_DOC)
    assert first == expected
    assert _roundtrip(first) == first


def test_structural_roundtrip():
    text = (
        "#### Alpha\n##### A\n* [x] one\n    + [ ] two\n- [ ] three\n"
        "#### Beta\n\n##### B\n##### C\n- [ ] four <!-- task-id: t4 -->\nafter\n"
    )
    assert _shape(_roundtrip(text)) == _shape(text)


def test_crlf_preserved():
    result = _roundtrip("#### B\r\n##### C\r\n- [ ] a\r\n")
    assert result == "#### B\r\n\r\n##### C\r\n- [ ] a\r\n\r\n"
    assert "\n" not in result.replace("\r\n", "")


# --- board matching ---


def test_removed_board_is_dropped():
    text = "#### A\n##### C\n- [ ] a\n\n#### B\n##### D\n- [ ] b\n\ntail\n"
    doc, cache = extract(text)
    del doc.boards[0]
    assert serialize(text, doc.boards, cache) == "#### B\n\n##### D\n- [ ] b\n\n\ntail\n"


def test_new_board_is_appended():
    doc, cache = extract("Intro\n")
    board = add_board(doc, "New")
    task = add_task(add_column(board, "Todo"), "First")
    result = serialize("Intro\n", doc.boards, cache)
    assert result == f"Intro\n\n#### New\n\n##### Todo\n- [ ] First <!-- task-id: {task.id} -->\n\n"


def test_new_board_between_existing_boards_is_kept():
    text = "#### A\n##### C\n#### B\n##### D\n"
    doc, cache = extract(text)
    new = add_board(doc, "Middle")
    doc.boards.remove(new)
    doc.boards.insert(1, new)
    result = serialize(text, doc.boards, cache)
    assert [b.title for b in extract(result)[0].boards] == ["A", "B", "Middle"]


def test_boards_with_same_title_match_in_order():
    text = "#### Work\n##### One\n#### Work\n##### Two\n"
    doc, cache = extract(text)
    rename_column(doc.boards[1], doc.boards[1].columns[0], "Second")
    result = serialize(text, doc.boards, cache)
    assert re.findall(r"^##### (.+)$", result, re.M) == ["One", "Second"]


def test_each_board_written_once():
    text = "#### Work\n##### One\n#### Work\n##### Two\n"
    doc, cache = extract(text)
    del doc.boards[1]
    result = serialize(text, doc.boards, cache)
    assert result.count("#### Work") == 1
    assert "##### Two" not in result


# --- columns ---


def test_duplicate_titles_are_numbered():
    board = _make_board("B", [_make_column("Todo"), _make_column("Todo"), _make_column("Doing")])
    result = serialize("", [board], FormattingCache())
    assert re.findall(r"^##### (.+)$", result, re.M) == ["Todo", "Todo (2)", "Doing"]

    doc, _ = extract(result)
    columns = doc.boards[0].columns
    assert [c.title for c in columns] == ["Todo", "Todo (2)", "Doing"]
    assert len({id(c) for c in columns}) == 3


def test_duplicate_numbering_ignores_case():
    board = _make_board("B", [_make_column("Todo"), _make_column("TODO")])
    result = serialize("", [board], FormattingCache())
    assert re.findall(r"^##### (.+)$", result, re.M) == ["Todo", "TODO (2)"]


def test_rename_with_duplicate_scenario():
    doc, cache = extract(SAMPLE_DOC)
    board = doc.boards[0]
    rename_column(board, board.columns[1], "Todo")
    result = serialize(SAMPLE_DOC, doc.boards, cache)
    assert "##### Todo\n" in result
    assert "##### Todo (2)\n- [x] Plan" in result


def test_column_heading_uses_cache_until_renamed():
    cache = FormattingCache()
    cache.add_column("Todo", "Todo")
    column = Column(title="TODO")
    assert column_heading(column, 1, cache) == "Todo"
    column.original_title = "Todo"
    assert column_heading(column, 1, cache) == "TODO"


def test_headings_written_back_without_status():
    original = "#### C++\n##### Todo (Saved)\n- [ ] a\n"
    doc, cache = extract(original)
    result = serialize(original, doc.boards, cache)
    assert result.startswith("#### C++\n\n##### Todo\n- [ ] a\n")


def test_task_before_first_column_is_dropped():
    original = "#### B\n- [ ] stray\n##### Col\n- [ ] a\n"
    doc, cache = extract(original)
    result = serialize(original, doc.boards, cache)
    assert result == "#### B\n\n##### Col\n- [ ] a\n\n"


# --- tasks ---


def test_task_line_plain():
    task = _make_task("x", checked=True, indent=2, id="t")
    assert task_line(task, FormattingCache()) == "    - [x] x <!-- task-id: t -->"


def test_task_line_keeps_original_marker():
    task = Task("a", formatting=TaskFormat(marker="+", content="a"))
    assert task_line(task, FormattingCache()) == "+ [ ] a"


def test_task_line_restores_formatting_from_cache():
    _, cache = extract("#### B\n##### C\n* [ ] **Bold** move\n")
    task = _make_task("Bold move")
    assert task_line(task, cache) == "* [ ] **Bold** move"


def test_task_line_edited_wins():
    _, cache = extract("#### B\n##### C\n* [ ] same\n")
    task = Task("same", edited="same")
    assert task_line(task, cache) == "- [ ] same"


def test_task_line_does_not_repeat_id_marker():
    task = Task("a", id="t1", edited="a <!-- task-id: t1 -->")
    assert task_line(task, FormattingCache()) == "- [ ] a <!-- task-id: t1 -->"


def test_toggle_scenario():
    doc, cache = extract(SAMPLE_DOC)
    toggle_task(find_task(doc, "task_3"))
    result = serialize(SAMPLE_DOC, doc.boards, cache)
    assert "- [x] Ship it <!-- task-id: task_3 -->" in result


def test_rename_task_writes_new_text():
    doc, cache = extract(SAMPLE_DOC)
    rename_task(find_task(doc, "task_2"), "Outline *all* sections")
    result = serialize(SAMPLE_DOC, doc.boards, cache)
    assert "  - [ ] Outline *all* sections <!-- task-id: task_2 -->" in result


def test_move_to_child_scenario():
    text = "#### Board\n##### Todo\n- [ ] A\n- [ ] B\n"
    doc, cache = extract(text)
    column = doc.boards[0].columns[0]
    a, b = column.tasks
    move_task(doc, b, column, onto=a)

    assert _flat(column) == [(0, "A"), (1, "B")]
    result = ID_COMMENT_RE.sub("", serialize(text, doc.boards, cache))
    assert "##### Todo\n- [ ] A\n  - [ ] B\n" in result


def test_move_keeps_subtree_adjacent():
    doc, cache = extract(SAMPLE_DOC)
    todo, done = doc.boards[0].columns
    move_task(doc, find_task(doc, "task_1"), done)
    result = serialize(SAMPLE_DOC, doc.boards, cache)
    assert (
        "##### Done\n"
        "- [x] Plan <!-- task-id: task_4 -->\n"
        "- [ ] Write docs <!-- task-id: task_1 -->\n"
        "  - [ ] Outline <!-- task-id: task_2 -->\n"
    ) in result
    assert "##### Todo\n- [ ] Ship it <!-- task-id: task_3 -->\n" in result
