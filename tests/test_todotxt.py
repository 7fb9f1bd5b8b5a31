# tests/test_todotxt.py

from __future__ import annotations

from datetime import date

import pytest

from simpletasklist import todotxt
from simpletasklist.exceptions import TaskFileError
from simpletasklist.models import Task


def test_parse_full_line() -> None:
    task = todotxt.parse_line("(A) 2024-05-01 Call mom @home @phone +family due:2024-05-03")
    assert task == Task(
        priority="A",
        creation=date(2024, 5, 1),
        due=date(2024, 5, 3),
        description="Call mom",
        context=["home", "phone"],
        project=["family"],
    )


def test_parse_plain_description() -> None:
    task = todotxt.parse_line("Read a book")
    assert task == Task(description="Read a book")


def test_parse_done_task_skips_completion_date() -> None:
    task = todotxt.parse_line("x 2024-05-02 2024-04-20 Buy seeds +garden")
    assert task.done
    assert task.priority == "x"
    assert task.creation == date(2024, 4, 20)
    assert task.description == "Buy seeds"


def test_parse_done_task_with_single_date() -> None:
    task = todotxt.parse_line("x 2024-05-02 Buy seeds")
    assert task.done
    assert task.creation == date(2024, 5, 2)


def test_second_date_of_open_task_is_text() -> None:
    task = todotxt.parse_line("2024-05-01 2024-06-01 deadline")
    assert task.creation == date(2024, 5, 1)
    assert task.description == "2024-06-01 deadline"


def test_tag_markers_inside_words_are_text() -> None:
    task = todotxt.parse_line("mail a@b.c and 1+1 @ +")
    assert task.context == []
    assert task.project == []
    assert task.description == "mail a@b.c and 1+1 @ +"


def test_lowercase_priority_is_text() -> None:
    task = todotxt.parse_line("(a) lower")
    assert task.priority is None
    assert task.description == "(a) lower"


def test_invalid_due_date_is_text() -> None:
    task = todotxt.parse_line("Pay due:tomorrow @bank")
    assert task.due is None
    assert task.description == "Pay due:tomorrow"
    assert task.context == ["bank"]


@pytest.mark.parametrize("value", ["2024-13-01", "2024-02-30", "24-01-01", "", "today"])
def test_parse_date_rejects_invalid(value: str) -> None:
    assert todotxt.parse_date(value) is None


def test_format_line_field_order() -> None:
    task = Task(
        priority="B",
        creation=date(2024, 5, 1),
        due=date(2024, 5, 10),
        description="Write report",
        context=["work"],
        project=["q2"],
    )
    assert todotxt.format_line(task) == "(B) 2024-05-01 Write report @work +q2 due:2024-05-10"


def test_format_done_task() -> None:
    assert todotxt.format_line(Task(priority="x", description="Buy seeds")) == "x Buy seeds"


def test_format_empty_task() -> None:
    assert todotxt.format_line(Task()) == ""


def test_parse_lines_skips_blank_lines() -> None:
    lines = ["first\n", "\n", "   \n", "second due:x\n"]
    assert [t.description for t in todotxt.parse_lines(lines)] == ["first", "second due:x"]


def test_write_then_read(tmp_path, sample_tasks) -> None:
    path = tmp_path / "todo.txt"
    todotxt.write_tasks(path, sample_tasks)

    assert path.read_text(encoding="utf-8").splitlines()[0] == "(A) Call mom @home @phone"
    assert todotxt.read_tasks(path) == sample_tasks


def reload(tmp_path, *tasks: Task) -> list[Task]:
    path = tmp_path / "todo.txt"
    todotxt.write_tasks(path, tasks)
    return todotxt.read_tasks(path)


def test_description_with_invalid_due_survives_reload(tmp_path) -> None:
    task = Task(description="ask due:soon", context=["work"])
    assert reload(tmp_path, task) == [task]


def test_multiline_description_stays_one_task(tmp_path) -> None:
    (task,) = reload(tmp_path, Task(description="line one\nline two\n", project=["notes"]))
    assert task == Task(description="line one line two", project=["notes"])


@pytest.mark.parametrize("description", ["x marks the spot", "(B) is part of the text", "2024-06-01 kickoff", "x"])
def test_header_like_description_survives_reload(tmp_path, description: str) -> None:
    task = Task(description=description, context=["home"])
    assert reload(tmp_path, task) == [task]


def test_header_like_description_is_written_with_leading_blank() -> None:
    assert todotxt.format_line(Task(description="x marks the spot")) == " x marks the spot"
    assert todotxt.format_line(Task(priority="A", description="x marks the spot")) == "(A) x marks the spot"


def test_leading_blank_disables_header() -> None:
    task = todotxt.parse_line(" x (A) 2024-05-01 text")
    assert not task.done
    assert task.priority is None
    assert task.creation is None
    assert task.description == "x (A) 2024-05-01 text"


def test_done_task_with_date_led_description_survives_reload(tmp_path) -> None:
    task = Task(priority="x", creation=date(2024, 4, 20), description="2024-06-01 deadline met")
    assert todotxt.format_line(task) == "x 2024-04-20 2024-04-20 2024-06-01 deadline met"
    assert reload(tmp_path, task) == [task]


def test_tags_with_blanks_are_written_as_one_word(tmp_path) -> None:
    (task,) = reload(tmp_path, Task(description="tidy", context=[" my  home "], project=["big plan", "  "]))
    assert task.context == ["my-home"]
    assert task.project == ["big-plan"]
    assert task.description == "tidy"


def test_read_missing_file_raises(tmp_path) -> None:
    with pytest.raises(TaskFileError):
        todotxt.read_tasks(tmp_path / "missing.txt")


def test_read_undecodable_file_raises(tmp_path) -> None:
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\xfa task\n")
    with pytest.raises(TaskFileError):
        todotxt.read_tasks(path)


def test_write_to_directory_raises(tmp_path) -> None:
    with pytest.raises(TaskFileError):
        todotxt.write_tasks(tmp_path, [Task(description="t")])
