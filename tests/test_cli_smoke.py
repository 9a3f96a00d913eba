from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path

import numpy as np
import pytest

from lazycomb.__main__ import main


def test_cli_run_smoke(tmp_path: Path):
    env = os.environ.copy()
    proc = subprocess.run(
        [
            "python",
            "-m",
            "lazycomb",
            "combinations",
            "1",
            "2",
            "3",
            "-k",
            "2",
            "--out",
            str(tmp_path / "out.npy"),
        ],
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )
    if proc.returncode != 0:
        pytest.fail(f"CLI failed: {proc.returncode}\n{proc.stdout}\n{proc.stderr}")
    assert np.load(tmp_path / "out.npy").tolist() == [[1, 2], [1, 3], [2, 3]]


def test_cli_prints_rows(capsys):
    main(["product", "0,1", "a,b"])
    lines = capsys.readouterr().out.splitlines()
    assert [json.loads(line) for line in lines] == [[0, "a"], [0, "b"], [1, "a"], [1, "b"]]


def test_cli_limit_and_count(capsys):
    main(["powerset", "1", "2", "3", "--limit", "3"])
    lines = capsys.readouterr().out.splitlines()
    assert [json.loads(line) for line in lines] == [[], [1], [2]]

    main(["cwr", "x", "y", "-k", "2", "--count"])
    assert json.loads(capsys.readouterr().out) == {"lower": 3, "upper": 3}


def test_cli_writes_jsonl(tmp_path: Path):
    out = tmp_path / "subsets.jsonl"
    main(["powerset", "1", "2", "--out", str(out)])
    rows = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert rows == [[], [1], [2], [1, 2]]


def test_cli_rejects_ragged_npy(tmp_path: Path):
    with pytest.raises(SystemExit):
        main(["powerset", "1", "2", "--out", str(tmp_path / "ragged.npy")])


def test_cli_reports_invalid_size():
    with pytest.raises(SystemExit):
        main(["combinations", "1", "-k", "-1"])
