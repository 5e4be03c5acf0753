import io
import json
import logging
from pathlib import Path

import pytest

from tracequery import cli

EXPECTED_LINES = ["9", "5", "13", "22", "NO SUCH TRACE", "2", "3", "9", "9", "7"]


def test_run_prints_default_answers(sample_input_file: Path, capsys) -> None:
    cli.main(["run", str(sample_input_file)])
    assert capsys.readouterr().out.splitlines() == EXPECTED_LINES


def test_run_reads_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr(
        "sys.stdin", io.StringIO("AB5, BC4, CD8, DC8, DE6,\nAD5, CE2, EB3, AE7\n")
    )
    cli.main(["run"])
    assert capsys.readouterr().out.splitlines() == EXPECTED_LINES


def test_run_json_output(sample_input_file: Path, capsys) -> None:
    cli.main(["run", str(sample_input_file), "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert [item["result"] for item in payload] == [
        9, 5, 13, 22, None, 2, 3, 9, 9, 7
    ]
    assert payload[0] == {
        "name": "cost of route A-B-C",
        "query": "path_cost",
        "description": "cost of route A-B-C",
        "result": 9,
    }


def test_run_with_plan(sample_input_file: Path, tmp_path: Path, capsys) -> None:
    plan = tmp_path / "plan.yaml"
    plan.write_text(
        "queries:\n"
        "  - type: cheapest_path\n    source: C\n    target: C\n"
        "  - type: path_cost\n    route: A-C\n",
        encoding="utf-8",
    )
    cli.main(["run", str(sample_input_file), "--plan", str(plan)])
    assert capsys.readouterr().out.splitlines() == ["9", "NO SUCH TRACE"]


def test_run_missing_input_file(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(tmp_path / "missing.txt")])
    assert exc_info.value.code == 1
    assert "ERROR: Input file not found" in capsys.readouterr().out


def test_run_duplicate_trace_fails(tmp_path: Path, capsys) -> None:
    path = tmp_path / "dup.txt"
    path.write_text("AB5, AB9", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(path)])
    assert exc_info.value.code == 1
    assert "DuplicateEdgeError" in capsys.readouterr().out


def test_run_empty_input_fails(tmp_path: Path, capsys) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("nothing here\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(path)])
    assert exc_info.value.code == 1
    assert "No traces found" in capsys.readouterr().out


def test_run_unknown_node_in_plan_fails(
    sample_input_file: Path, tmp_path: Path, capsys
) -> None:
    plan = tmp_path / "plan.yaml"
    plan.write_text(
        "queries:\n  - type: count_returning\n    start: Z\n    max_depth: 3\n",
        encoding="utf-8",
    )
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(sample_input_file), "--plan", str(plan)])
    assert exc_info.value.code == 1
    assert "UnknownNodeError" in capsys.readouterr().out


def test_run_malformed_plan_fails(
    sample_input_file: Path, tmp_path: Path, capsys
) -> None:
    plan = tmp_path / "plan.yaml"
    plan.write_text("queries:\n  - type: nope\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(sample_input_file), "--plan", str(plan)])
    assert exc_info.value.code == 1
    assert "Invalid query type" in capsys.readouterr().out


def test_inspect_summary(sample_input_file: Path, capsys) -> None:
    cli.main(["inspect", str(sample_input_file)])
    out = capsys.readouterr().out
    assert "Nodes: 5" in out
    assert "Traces: 9" in out
    assert "Source" in out and "Cost" in out
    assert "without outgoing" not in out


def test_inspect_lists_sinks(tmp_path: Path, capsys) -> None:
    path = tmp_path / "line.txt"
    path.write_text("AB1, BC2", encoding="utf-8")
    cli.main(["inspect", str(path)])
    assert "Nodes without outgoing traces: C" in capsys.readouterr().out


def test_inspect_json(sample_input_file: Path, capsys) -> None:
    cli.main(["inspect", str(sample_input_file), "--json"])
    data = json.loads(capsys.readouterr().out)
    assert len(data["nodes"]) == 5
    assert len(data["links"]) == 9


def test_no_arguments_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "usage: tracequery" in capsys.readouterr().out


def test_verbose_and_quiet_set_log_level(sample_input_file: Path, capsys) -> None:
    cli.main(["--verbose", "run", str(sample_input_file)])
    assert logging.getLogger("tracequery").level == logging.DEBUG

    cli.main(["--quiet", "run", str(sample_input_file)])
    assert logging.getLogger("tracequery").level == logging.WARNING

    cli.main(["run", str(sample_input_file)])
    assert logging.getLogger("tracequery").level == logging.INFO
    capsys.readouterr()


def test_run_plan_with_broken_yaml_fails(
    sample_input_file: Path, tmp_path: Path, capsys
) -> None:
    plan = tmp_path / "plan.yaml"
    plan.write_text("queries: [\n  - type: path_cost\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(sample_input_file), "--plan", str(plan)])
    assert exc_info.value.code == 1
    assert "Invalid YAML in query plan" in capsys.readouterr().out


def test_run_missing_plan_file_names_the_plan(
    sample_input_file: Path, tmp_path: Path, capsys
) -> None:
    plan = tmp_path / "nope.yaml"
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(sample_input_file), "--plan", str(plan)])
    assert exc_info.value.code == 1
    out = capsys.readouterr().out
    assert f"ERROR: Query plan file not found: {plan}" in out
    assert "Input file not found" not in out


def test_run_plan_directory_fails(
    sample_input_file: Path, tmp_path: Path, capsys
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["run", str(sample_input_file), "--plan", str(tmp_path)])
    assert exc_info.value.code == 1
    assert "ERROR: Cannot read query plan" in capsys.readouterr().out


@pytest.mark.parametrize("command", ["run", "inspect"])
def test_unreadable_input_fails(command: str, tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([command, str(tmp_path)])
    assert exc_info.value.code == 1
    assert f"ERROR: Cannot read input {tmp_path}" in capsys.readouterr().out
