"""Grammar gate, selection lookup and format-on-save."""

from __future__ import annotations

from mixfmt.lib.buffer import BufferDocument
from mixfmt.lib.config import ELIXIR_SCOPE, FormatterConfig
from mixfmt.lib.domain import FormatResult, Notification, NotificationType, Range
from mixfmt.lib.formatter import ElixirFormatter


class _UnreadableDocument(BufferDocument):
    def get_text(self) -> str:
        raise AssertionError("document text must not be read")

    def get_text_in_range(self, text_range: Range) -> str:
        raise AssertionError("document text must not be read")


def test_info_notification_when_grammar_is_not_elixir(make_formatter) -> None:
    document = _UnreadableDocument("hello", scope_name="text.plain")
    harness = make_formatter(active=document)

    harness.formatter.format_active_document()

    assert harness.runner.calls == []
    assert harness.notifier.notifications == [
        Notification(
            title="Elixir Formatter only formats Elixir source code",
            type=NotificationType.INFO,
        )
    ]


def test_formats_whole_active_document(make_formatter) -> None:
    document = BufferDocument("a\nb", scope_name=ELIXIR_SCOPE)
    document.set_selected_range(Range.from_tuples((0, 0), (0, 1)))
    harness = make_formatter(active=document)
    harness.runner.result = FormatResult(exit_status=0, stdout="A\nB\n", stderr="")

    harness.formatter.format_active_document()

    assert harness.runner.calls[0].options["input"] == "a\nb"
    assert document.get_text() == "A\nB\n"


def test_no_active_document_is_a_noop(make_formatter) -> None:
    harness = make_formatter(active=None)

    harness.formatter.format_active_document()
    harness.formatter.format_active_selection()

    assert harness.runner.calls == []
    assert harness.notifier.notifications == []


def test_custom_scopes_are_accepted(make_formatter) -> None:
    document = BufferDocument("x", scope_name="source.elixir.heex")
    harness = make_formatter(
        active=document,
        config=FormatterConfig(elixir_scopes=("source.elixir", "source.elixir.heex")),
    )
    harness.runner.result = FormatResult(exit_status=0, stdout="y", stderr="")

    harness.formatter.format_active_document()

    assert document.get_text() == "y"


def test_active_selection_formats_only_selected_rows(make_formatter) -> None:
    document = BufferDocument("one\ntwo\nthree\n", scope_name=ELIXIR_SCOPE)
    document.set_selected_range(Range.from_tuples((1, 0), (2, 0)))
    harness = make_formatter(active=document)
    harness.runner.result = FormatResult(exit_status=0, stdout="TWO\n", stderr="")

    harness.formatter.format_active_selection()

    assert harness.runner.calls[0].options["input"] == "two\n"
    assert document.get_text() == "one\nTWO\nthree\n"


def test_active_selection_falls_back_to_whole_document(make_formatter) -> None:
    document = BufferDocument("one\ntwo", scope_name=ELIXIR_SCOPE)
    document.set_selected_range(Range.from_tuples((1, 1), (1, 1)))
    harness = make_formatter(active=document)
    harness.runner.result = FormatResult(exit_status=0, stdout="ONE\nTWO\n", stderr="")

    harness.formatter.format_active_selection()

    assert harness.runner.calls[0].options["input"] == "one\ntwo"
    assert document.get_text() == "ONE\nTWO\n"


def test_get_selected_range_returns_none_for_empty_selection() -> None:
    document = BufferDocument("some text", scope_name=ELIXIR_SCOPE)
    document.set_selected_range(Range.from_tuples((0, 2), (0, 2)))

    assert ElixirFormatter.get_selected_range(document) is None


def test_get_selected_range_returns_selection() -> None:
    document = BufferDocument("some text", scope_name=ELIXIR_SCOPE)
    document.set_selected_range(Range.from_tuples((0, 0), (0, 4)))

    assert ElixirFormatter.get_selected_range(document) == document.get_selected_range()
    assert ElixirFormatter.get_selected_range(document) == Range.from_tuples((0, 0), (0, 4))


def test_will_save_does_nothing_when_disabled(make_formatter) -> None:
    harness = make_formatter()
    document = BufferDocument("x", scope_name=ELIXIR_SCOPE)

    harness.formatter.handle_will_save(document)

    assert harness.runner.calls == []
    assert document.get_text() == "x"


def test_will_save_formats_elixir_when_enabled(make_formatter) -> None:
    harness = make_formatter(config=FormatterConfig(format_on_save=True))
    harness.runner.result = FormatResult(exit_status=0, stdout="X\n", stderr="")
    document = BufferDocument("x", scope_name=ELIXIR_SCOPE)

    harness.formatter.handle_will_save(document)

    assert document.get_text() == "X\n"


def test_will_save_skips_other_grammars_silently(make_formatter) -> None:
    harness = make_formatter(config=FormatterConfig(format_on_save=True))
    document = BufferDocument("x", scope_name="text.plain")

    harness.formatter.handle_will_save(document)

    assert harness.runner.calls == []
    assert harness.notifier.notifications == []
