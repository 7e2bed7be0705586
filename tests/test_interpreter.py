"""Tests for the command interpreter."""

from datetime import date

import pytest

from fake_collaborators import FakeStorage, RecordingDisplay
from taskpal.interpreter import CommandInterpreter, CommandResult
from taskpal.task import Deadline, Event, Todo
from taskpal.task_list import TaskList


def render_all(task_list):
    return [task.render() for task in task_list]


class InterpreterTestCase:
    """Shared setup: three tasks, an in-memory store and a recording display."""

    def setup_method(self):
        self.task_list = TaskList([Todo("read book"), Todo("return book"), Todo("buy milk")])
        self.storage = FakeStorage()
        self.display = RecordingDisplay()
        self.interpreter = CommandInterpreter(self.task_list, self.storage, self.display)

    def assert_rejected(self, line, before=None):
        """Run a command and check it changed nothing and rendered an error."""
        before = render_all(self.task_list) if before is None else before
        result = self.interpreter.handle(line)

        assert result is CommandResult.CONTINUE
        assert render_all(self.task_list) == before
        assert self.storage.save_count == 0
        assert self.display.names == ["show_error"]
        return self.display.errors[0]


class TestList(InterpreterTestCase):
    def test_list_renders_without_saving(self):
        result = self.interpreter.handle("list")

        assert result is CommandResult.CONTINUE
        assert self.display.calls == [("show_task_list", list(self.task_list.get_tasks()))]
        assert self.storage.save_count == 0

    def test_keyword_is_case_insensitive(self):
        self.interpreter.handle("LiSt")

        assert self.display.names == ["show_task_list"]


class TestBye(InterpreterTestCase):
    def test_bye_saves_and_terminates(self):
        result = self.interpreter.handle("bye")

        assert result is CommandResult.TERMINATE
        assert self.storage.save_count == 1
        assert self.display.names == ["show_farewell"]

    def test_bye_terminates_even_if_save_fails(self):
        self.storage.fail = True

        result = self.interpreter.handle("bye")

        assert result is CommandResult.TERMINATE
        assert self.display.names == ["show_error", "show_farewell"]


class TestMarking(InterpreterTestCase):
    def test_mark_then_list_shows_done(self):
        """``mark i`` followed by ``list`` shows task i as done."""
        self.interpreter.handle("mark 2")
        self.interpreter.handle("list")

        listed = self.display.calls[-1][1]
        assert listed[1].render() == "[T][X] return book"
        assert self.display.calls[0] == ("show_marked_done", self.task_list.get_task(1))
        assert self.storage.save_count == 1

    def test_unmark_reverses_mark(self):
        self.interpreter.handle("mark 1")
        self.interpreter.handle("unmark 1")

        assert self.task_list.get_task(0).is_done is False
        assert self.display.names == ["show_marked_done", "show_unmarked"]
        assert self.storage.save_count == 2

    def test_mark_twice_stays_done(self):
        self.interpreter.handle("mark 1")
        self.interpreter.handle("mark 1")

        assert self.task_list.get_task(0).is_done is True

    def test_saved_snapshot_has_done_flag(self):
        self.interpreter.handle("mark 3")

        assert self.storage.last_saved[2].is_done is True

    @pytest.mark.parametrize("line", ["mark 99", "mark 0", "mark -1", "mark abc", "unmark 4"])
    def test_invalid_task_number(self, line):
        message = self.assert_rejected(line)

        assert message == "Invalid task number. Please refer to your to-do list again."

    def test_missing_task_number(self):
        message = self.assert_rejected("mark")

        assert message == "Please specify the task number!"


class TestTodo(InterpreterTestCase):
    def test_adds_todo(self):
        self.interpreter.handle("todo buy eggs")

        added = self.task_list.get_task(3)
        assert added.render() == "[T][ ] buy eggs"
        assert self.display.calls == [("show_task_added", added, 4)]
        assert self.storage.last_saved[-1] == added

    @pytest.mark.parametrize("line", ["todo", "todo    ", "TODO"])
    def test_empty_description(self, line):
        message = self.assert_rejected(line)

        assert message == "Please complete your request by specifying the details of the task!"


class TestDeadline(InterpreterTestCase):
    def test_parsed_iso_date(self):
        self.interpreter.handle("deadline submit report /by 2019-12-02")

        added = self.task_list.get_task(3)
        assert isinstance(added, Deadline)
        assert added.due == date(2019, 12, 2)
        assert "2019-12-02" not in added.render()
        assert added.render() == "[D][ ] submit report (by: Dec 02 2019)"

    def test_parsed_us_date_with_time(self):
        self.interpreter.handle("deadline return book /by 12/2/2019 1800")

        assert self.task_list.get_task(3).due == date(2019, 12, 2)

    def test_unparseable_date_falls_back_to_text(self):
        """An unparseable date is kept as text and the task is still added."""
        self.interpreter.handle("deadline submit report /by not-a-date")

        added = self.task_list.get_task(3)
        assert added.due == "not-a-date"
        assert "not-a-date" in added.render()
        assert self.display.names == ["show_task_added"]
        assert self.storage.save_count == 1

    def test_short_iso_date_is_kept_as_text(self):
        self.interpreter.handle("deadline submit report /by 2019-1-2")

        assert self.task_list.get_task(3).due == "2019-1-2"

    def test_missing_by(self):
        message = self.assert_rejected("deadline submit report 2019-12-02")

        assert "deadline" in message

    def test_empty_description(self):
        self.assert_rejected("deadline /by 2019-12-02")

    def test_keyword_only(self):
        self.assert_rejected("deadline")

    def test_uses_injected_date_parser(self):
        interpreter = CommandInterpreter(self.task_list, self.storage, self.display,
                                         date_parser=lambda text: date(2000, 1, 1))
        interpreter.handle("deadline anything /by whenever")

        assert self.task_list.get_task(3).due == date(2000, 1, 1)


class TestEvent(InterpreterTestCase):
    def test_adds_event(self):
        self.interpreter.handle("event trip /from 2019-12-02 /to 2019-12-05")

        added = self.task_list.get_task(3)
        assert isinstance(added, Event)
        assert (added.start, added.end) == (date(2019, 12, 2), date(2019, 12, 5))
        assert self.display.calls == [("show_task_added", added, 4)]

    @pytest.mark.parametrize("line", [
        "event trip /from bogus /to 2019-12-05",
        "event trip /from 2019-12-02 /to bogus",
        "event trip /from 2019-1-2 /to 2019-1-5",
    ])
    def test_unparseable_date_rejects_event(self, line):
        message = self.assert_rejected(line)

        assert message == "Invalid input format for event. Please provide valid dates."
        assert self.task_list.size() == 3

    @pytest.mark.parametrize("line", [
        "event trip 2019-12-02 /to 2019-12-05",
        "event trip /from 2019-12-02",
        "event /from 2019-12-02 /to 2019-12-05",
        "event",
    ])
    def test_malformed_event(self, line):
        self.assert_rejected(line)


class TestDelete(InterpreterTestCase):
    def test_delete_shifts_and_reports_count(self):
        self.interpreter.handle("delete 1")

        assert render_all(self.task_list) == ["[T][ ] return book", "[T][ ] buy milk"]
        assert self.display.calls == [("show_task_removed", Todo("read book"), 2)]
        assert len(self.storage.last_saved) == 2

    @pytest.mark.parametrize("line", ["delete 4", "delete 0", "delete abc"])
    def test_invalid_task_number(self, line):
        self.assert_rejected(line)

    def test_missing_task_number(self):
        message = self.assert_rejected("delete")

        assert message == "Please specify which task number you want to remove!"


class TestUnknownCommand(InterpreterTestCase):
    def test_unknown_keyword(self):
        message = self.assert_rejected("blah blah")

        assert message == "I'm sorry, I don't understand! Please type your request again."

    def test_empty_line(self):
        self.assert_rejected("")

    def test_suggests_close_keyword(self):
        message = self.assert_rejected("dedline submit /by 2019-12-02")

        assert "Did you mean 'deadline'?" in message

    def test_suggestions_are_closest_keywords(self):
        error = self.interpreter._unknown_command("lst")

        assert error.suggestions[0] == "list"

    def test_no_suggestion_for_empty_keyword(self):
        assert self.interpreter._unknown_command("").suggestions == []

    def test_help(self):
        result = self.interpreter.handle("help")

        assert result is CommandResult.CONTINUE
        assert self.display.names == ["show_help"]


class TestSaveFailure(InterpreterTestCase):
    """A failed save reports the error and undoes the in-memory change."""

    def setup_method(self):
        super().setup_method()
        self.storage.fail = True

    def test_add_is_undone(self):
        message = self.assert_rejected("todo buy eggs")

        assert "Unable to save" in message

    def test_delete_is_undone(self):
        self.assert_rejected("delete 2")

    def test_mark_is_undone(self):
        self.assert_rejected("mark 1")
        assert self.task_list.get_task(0).is_done is False

    def test_unmark_is_undone(self):
        self.task_list.get_task(0).mark_done()
        before = render_all(self.task_list)

        self.assert_rejected("unmark 1", before=before)
        assert self.task_list.get_task(0).is_done is True
