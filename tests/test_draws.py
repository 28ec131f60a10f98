"""Draw-harness tests covering reports, ordering, uniformity and the scripts."""

import csv
import json
import subprocess
import sys
from pathlib import Path

import pytest

from caucus_rng import DrawConfig, DualLatticePRNG, chi_square, random_order, run_draws
from scripts import aggregate_summaries, run_draws as run_draws_script


def test_run_draws_is_deterministic():
    cfg = DrawConfig(seed_a=0xDEADBEEF, seed_b=7, limit=10, count=50)
    assert run_draws(cfg) == run_draws(cfg)


def test_run_draws_report_shape():
    result = run_draws(DrawConfig(seed_a=12345, seed_b=67890, limit=6, count=5))

    assert result["draws"] == [4, 1, 2, 0, 2]
    assert result["summary"] == {"6": {"0": 1, "1": 1, "2": 2, "4": 1}}
    assert result["final"] == {"state1": 3051540874, "state2": 1217144452, "count": 5}
    assert result["config"]["limit"] == 6
    json.dumps(result)


def test_run_draws_without_recording_has_empty_summary():
    result = run_draws(DrawConfig(seed_a=12345, seed_b=67890, count=5, record=False))

    assert result["draws"] == [4, 1, 2, 0, 2]
    assert result["summary"] == {}


def test_run_draws_rejects_negative_count():
    with pytest.raises(ValueError):
        run_draws(DrawConfig(seed_a=1, count=-1))


def test_random_order_is_a_reproducible_permutation():
    items = list("abcdefghij")

    first = random_order(items, DualLatticePRNG(2019, 11))
    second = random_order(items, DualLatticePRNG(2019, 11))

    assert first == second
    assert sorted(first) == items
    assert items == list("abcdefghij")


def test_random_order_consumes_coin_flips():
    rng = DualLatticePRNG(2019, 11, record=True)
    random_order(range(8), rng)

    assert set(rng.summarize()) == {2}
    assert len(rng.records) >= 7


def test_chi_square_statistic():
    assert chi_square({0: 5, 1: 5}, 2) == 0.0
    assert chi_square({0: 10}, 2) == pytest.approx(10.0)
    assert chi_square({"0": 2, "1": 2, "2": 4, "4": 2}, 6) == pytest.approx(6.8)
    assert chi_square({}, 6) == 0.0


def test_chi_square_rejects_results_outside_range():
    with pytest.raises(ValueError):
        chi_square({6: 1}, 6)


def test_cli_prints_report(monkeypatch, capsys):
    monkeypatch.setattr(
        sys,
        "argv",
        ["run_draws.py", "--seed-a", "12345", "--seed-b", "67890", "--count", "5"],
    )

    run_draws_script.main()
    payload = json.loads(capsys.readouterr().out)

    assert payload["draws"] == [4, 1, 2, 0, 2]


def test_cli_accepts_hex_seed(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["run_draws.py", "--seed-a", "0x3039", "--count", "5"])

    run_draws_script.main()
    payload = json.loads(capsys.readouterr().out)

    assert payload["draws"] == [0, 5, 0, 0, 3]
    assert payload["config"]["seed_a"] == 12345


@pytest.mark.parametrize(
    "argv",
    [
        ["--seed-a", "nonsense"],
        ["--limit", "0"],
        ["--limit", "6.0"],
        ["--count", "-3"],
        ["--count", "2.5"],
    ],
)
def test_cli_rejects_bad_arguments(monkeypatch, capsys, argv):
    monkeypatch.setattr(sys, "argv", ["run_draws.py", *argv])

    with pytest.raises(SystemExit):
        run_draws_script.main()
    capsys.readouterr()


def test_cli_log_flag_writes_json(tmp_path, monkeypatch, capsys):
    log_path = tmp_path / "reports" / "out.json"
    monkeypatch.setattr(
        sys,
        "argv",
        ["run_draws.py", "--seed-a", "12345", "--count", "3", "--log", str(log_path)],
    )

    run_draws_script.main()
    captured = capsys.readouterr()

    assert log_path.exists()
    payload = json.loads(log_path.read_text())
    assert payload == json.loads(captured.out)


def test_cli_log_flag_without_value_uses_default(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    default_log = run_draws_script.DEFAULT_LOG_PATH
    monkeypatch.setattr(sys, "argv", ["run_draws.py", "--seed-a", "1", "--count", "2", "--log"])

    try:
        run_draws_script.main()
        captured = capsys.readouterr()

        assert default_log.exists()
        assert json.loads(default_log.read_text()) == json.loads(captured.out)
    finally:
        if default_log.exists():
            default_log.unlink()


def test_script_executes_without_pythonpath_requirement():
    repo_root = Path(__file__).resolve().parents[1]
    script_path = repo_root / "scripts" / "run_draws.py"
    result = subprocess.run(
        [sys.executable, str(script_path), "--seed-a", "12345", "--seed-b", "67890", "--count", "5"],
        cwd=repo_root,
        check=False,
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout)["draws"] == [4, 1, 2, 0, 2]


def test_aggregate_merges_reports_into_csv(tmp_path, monkeypatch, capsys):
    report = run_draws(DrawConfig(seed_a=12345, seed_b=67890, limit=6, count=5))
    paths = []
    for name in ("first.json", "second.json"):
        path = tmp_path / name
        path.write_text(json.dumps(report))
        paths.append(str(path))
    out_path = tmp_path / "tally" / "summary.csv"
    monkeypatch.setattr(sys, "argv", ["aggregate_summaries.py", *paths, "--out", str(out_path)])

    aggregate_summaries.main()
    capsys.readouterr()

    with out_path.open(newline="") as handle:
        rows = list(csv.reader(handle))

    assert rows[0] == aggregate_summaries.HEADER
    assert rows[1:] == [
        ["6", "0", "2", "1.6667", "6.8000"],
        ["6", "1", "2", "1.6667", "6.8000"],
        ["6", "2", "4", "1.6667", "6.8000"],
        ["6", "4", "2", "1.6667", "6.8000"],
    ]


def test_aggregate_reports_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["aggregate_summaries.py", str(tmp_path / "absent.json")])

    with pytest.raises(FileNotFoundError):
        aggregate_summaries.main()
