import csv
from pathlib import Path

import pytest

from squadledger.cli import main
from squadledger.config_loader import SeedProfile


SAMPLE_SEED = Path(__file__).resolve().parents[1] / "seed.sample.json"


def test_summary_prints_team_balances(capsys: pytest.CaptureFixture[str]):
    main(["summary", "--seed", str(SAMPLE_SEED)])

    out = capsys.readouterr().out
    assert "Overall Financial Summary" in out
    assert "Balance:   -$55" in out
    assert "Lightning FC (t1) - 3 players, 4-4-2" in out
    assert "surplus $50" in out


def test_export_writes_roster(tmp_path: Path):
    output = tmp_path / "roster.csv"

    main(["export", "t1", "--seed", str(SAMPLE_SEED), "--output", str(output)])

    rows = list(csv.reader(output.open(encoding="utf-8")))
    assert rows[0][:2] == ["team", "Lightning FC"]
    assert len(rows) == 5


def test_export_unknown_team_exits():
    with pytest.raises(SystemExit):
        main(["export", "zzz", "--seed", str(SAMPLE_SEED)])


def test_missing_seed_exits(tmp_path: Path):
    with pytest.raises(SystemExit, match="Seed file not found"):
        main(["summary", "--seed", str(tmp_path / "absent.json")])


def test_init_seed(tmp_path: Path):
    target = tmp_path / "seed.json"

    main(["init-seed", str(target)])

    profile = SeedProfile.load(target)
    assert profile.players == []
    assert [m.name for m in profile.payment_methods][:3] == ["Cash", "Card", "Transfer"]


def test_invalid_log_level_flag_exits(capsys: pytest.CaptureFixture[str]):
    with pytest.raises(SystemExit):
        main(["--log-level", "loud", "summary", "--seed", str(SAMPLE_SEED)])

    assert "invalid choice" in capsys.readouterr().err


def test_log_level_flag_is_case_insensitive(capsys: pytest.CaptureFixture[str]):
    main(["--log-level", "debug", "summary", "--seed", str(SAMPLE_SEED)])

    assert "Overall Financial Summary" in capsys.readouterr().out


def test_duplicate_payment_methods_in_seed_exit(tmp_path: Path):
    target = tmp_path / "seed.json"
    target.write_text(
        '{"payment_methods": [{"id": "1", "name": "Cash"}, {"id": "2", "name": "CASH"}]}',
        encoding="utf-8",
    )

    with pytest.raises(SystemExit, match="Invalid seed data: Duplicate payment method name"):
        main(["summary", "--seed", str(target)])
