from __future__ import annotations

import json
from pathlib import Path

from stats_primer.cli.main import build_parser, main


def test_parse_summarize_command() -> None:
    parser = build_parser()
    args = parser.parse_args(
        [
            "summarize",
            "sample.csv",
            "--value",
            "weight",
            "--group",
            "group",
            "--singleton-std",
            "error",
        ]
    )

    assert args.command == "summarize"
    assert args.input == "sample.csv"
    assert args.value == "weight"
    assert args.group == "group"
    assert args.singleton_std == "error"


def test_parse_explain_flag() -> None:
    parser = build_parser()
    args = parser.parse_args(["describe", "sample.csv", "--value", "weight", "--explain"])

    assert args.command == "describe"
    assert args.explain is True


def test_parser_defaults_for_run_all() -> None:
    parser = build_parser()
    args = parser.parse_args(["run-all", "example:plant_growth", "--value", "weight"])

    assert args.group is None
    assert args.x is None
    assert args.output_dir == "output/stats_primer"
    assert args.format is None
    assert args.dpi is None
    assert args.bins is None
    assert args.singleton_std is None
    assert args.no_tables is False
    assert args.no_plots is False
    assert args.log_level == "WARNING"


def test_summarize_command_prints_groups_in_first_appearance_order(capsys) -> None:
    exit_code = main(["summarize", "example:plant_growth", "--value", "weight", "--group", "group"])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert [row["group"] for row in payload["groups"]] == ["ctrl", "trt1", "trt2"]
    assert [row["count"] for row in payload["groups"]] == [10, 10, 10]
    assert abs(payload["groups"][0]["mean"] - 5.032) < 1e-9


def test_summarize_command_reports_missing_field_with_exit_code_two(capsys) -> None:
    exit_code = main(["summarize", "example:plant_growth", "--value", "height", "--group", "group"])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 2
    assert payload["error"] == "InvalidField"


def test_describe_command_reads_csv(tmp_path, capsys) -> None:
    csv_path = tmp_path / "input.csv"
    csv_path.write_text("g,v\nA,1\nA,2\nA,3\nB,10\n", encoding="utf-8")

    exit_code = main(["describe", str(csv_path), "--value", "v"])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["summary"]["group"] == "ALL"
    assert payload["summary"]["count"] == 4
    assert payload["summary"]["median"] == 2.5


def test_unknown_example_returns_error_code(capsys) -> None:
    assert main(["ingest", "example:does_not_exist"]) == 1


def test_datasets_command_lists_examples(capsys) -> None:
    exit_code = main(["datasets"])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert "plant_growth" in payload["datasets"]
    assert "orange_trees" in payload["datasets"]


def test_check_health_command_fails_on_non_numeric_values(tmp_path, capsys) -> None:
    csv_path = tmp_path / "input.csv"
    csv_path.write_text("g,v\nA,1\nA,oops\nB,3\n", encoding="utf-8")

    exit_code = main(["check-health", str(csv_path), "--value", "v", "--group", "g"])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 1
    assert payload["passed"] is False
    assert "non_numeric_values" in [flag["code"] for flag in payload["flags"]]


def test_run_all_writes_pdf_figures_and_tables(tmp_path, capsys) -> None:
    output_dir = tmp_path / "out"
    exit_code = main(
        [
            "run-all",
            "example:orange_trees",
            "--value",
            "circumference",
            "--group",
            "tree",
            "--x",
            "age",
            "--format",
            "pdf",
            "--dpi",
            "40",
            "--output-dir",
            str(output_dir),
        ]
    )
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["health_passed"] is True
    assert [row["group"] for row in payload["groups"]] == ["1", "2", "3", "4", "5"]
    assert len(payload["figures"]) == 5
    for figure_path in payload["figures"]:
        assert figure_path.endswith(".pdf")
        assert Path(figure_path).exists()
    assert payload["tables"]
    for table_path in payload["tables"]:
        assert Path(table_path).exists()


def test_plot_command_writes_figures_without_tables(tmp_path, capsys) -> None:
    exit_code = main(
        [
            "plot",
            "example:plant_growth",
            "--value",
            "weight",
            "--group",
            "group",
            "--bins",
            "5",
            "--output-dir",
            str(tmp_path),
        ]
    )
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["tables"] == []
    assert sorted(Path(path).name for path in payload["figures"]) == [
        "bar_mean_weight.png",
        "boxplot_weight_by_group.png",
        "histogram_weight.png",
    ]


def test_invalid_settings_file_returns_error_code(tmp_path, capsys) -> None:
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text("singleton_std: raise\n", encoding="utf-8")

    exit_code = main(
        ["describe", "example:plant_growth", "--value", "weight", "--settings", str(settings_path)]
    )
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 1
    assert payload["error"] == "ValueError"


def test_missing_settings_file_returns_error_code(tmp_path, capsys) -> None:
    missing = tmp_path / "missing.yaml"

    exit_code = main(["describe", "example:plant_growth", "--value", "weight", "--settings", str(missing)])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 1
    assert payload["error"] == "FileNotFoundError"
