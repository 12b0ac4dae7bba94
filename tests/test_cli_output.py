"""Text and JSON rendering of command results."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mixfmt.cli.doctor_cmd import DoctorOutput
from mixfmt.cli.output import OutputConfig, emit
from mixfmt.cli.save_cmd import SaveOutput
from mixfmt.lib.domain import Notification, NotificationType
from mixfmt.lib.formatting import TextFormattable
from mixfmt.lib.serialization import to_jsonable


def test_results_render_as_text(capsys: pytest.CaptureFixture[str]) -> None:
    output = SaveOutput(path="/p/lib/app.ex", formatted=True, errors=0)
    assert isinstance(output, TextFormattable)

    emit(output, OutputConfig(format="text"))

    assert capsys.readouterr().out == "path: /p/lib/app.ex\nformatted: true\n"


def test_doctor_json_flattens_tuples(capsys: pytest.CaptureFixture[str]) -> None:
    output = DoctorOutput(
        ok=True,
        command="/usr/bin/elixir",
        args=("/usr/bin/mix", "format", "-"),
        resolved_executable="/usr/bin/elixir",
        project_path=None,
        config_file=None,
        shell=False,
    )

    emit(output, OutputConfig(format="json"))

    payload = json.loads(capsys.readouterr().out)
    assert payload["args"] == ["/usr/bin/mix", "format", "-"]
    assert payload["warnings"] == []


def test_to_jsonable_handles_notifications_and_paths() -> None:
    notification = Notification(title="Elixir Formatter Error", type=NotificationType.ERROR)

    assert to_jsonable({"note": notification, "root": Path("/work/app")}) == {
        "note": {"title": "Elixir Formatter Error", "type": "error", "detail": None},
        "root": "/work/app",
    }
