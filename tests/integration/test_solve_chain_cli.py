"""
End-to-end tests for the `affinity-chain` command-line tool.

The CLI is exercised in-process through `main(argv)` and once as a
subprocess through `python -m affinity_chain`.
"""
from __future__ import annotations

import io
import json
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from affinity_chain.scripts.solve_chain import main, solve_collapse
from affinity_chain.structures import make_chain

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The CLI installs handlers on the package logger; drop them after each test."""
    yield
    logger = logging.getLogger("affinity_chain")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def chain_file(tmp_path):
    def _write(text: str) -> str:
        path = tmp_path / "chain.txt"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


# ----------------------------- Library pipeline ---------------------------

def test_solve_collapse_pna_example():
    assert solve_collapse(make_chain([2, 1, 3], "PNA")) == (20, [2, 1, 3])


def test_solve_collapse_empty_chain():
    assert solve_collapse(make_chain([], [])) == (0, [])


# ----------------------------- Text output --------------------------------

def test_cli_text_output_from_file(chain_file, capsys):
    rc = main(["--input", chain_file("3\n2 1 3\nPNA\n")])

    assert rc == 0
    assert capsys.readouterr().out == "20\n2 1 3\n"


def test_cli_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("1\n5\nP\n"))

    assert main([]) == 0
    assert capsys.readouterr().out == "10\n1\n"


def test_cli_zero_elements_prints_blank_order_line(chain_file, capsys):
    assert main(["--input", chain_file("0\n")]) == 0
    assert capsys.readouterr().out == "0\n\n"


def test_cli_empty_input_prints_nothing(chain_file, capsys):
    assert main(["--input", chain_file("")]) == 0
    assert capsys.readouterr().out == ""


def test_cli_numba_backend_same_output(chain_file, capsys):
    assert main(["--input", chain_file("3\n2 1 3\nPNA\n"), "--backend", "numba"]) == 0
    assert capsys.readouterr().out == "20\n2 1 3\n"


# ----------------------------- JSON output --------------------------------

def test_cli_json_output(chain_file, capsys):
    assert main(["--input", chain_file("2\n1 1\nTT\n"), "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload == {"n": 2, "max_energy": 4, "order": [1, 2], "backend": "python"}


def test_cli_config_file_selects_json(chain_file, tmp_path, capsys):
    config = tmp_path / "run.yaml"
    config.write_text("output_format: json\n", encoding="utf-8")

    assert main(["--input", chain_file("1\n5\nP\n"), "--config", str(config)]) == 0
    assert json.loads(capsys.readouterr().out)["max_energy"] == 10


# ----------------------------- Errors -------------------------------------

def test_cli_invalid_input_exit_code(chain_file, capsys):
    rc = main(["--input", chain_file("2\n1 1\nPQ\n")])

    captured = capsys.readouterr()
    assert rc == 2
    assert captured.out == ""
    assert "Invalid category 'Q'" in captured.err


def test_cli_missing_input_file(tmp_path, capsys):
    assert main(["--input", str(tmp_path / "nope.txt")]) == 2
    assert "Error" in capsys.readouterr().err


def test_cli_bad_config_exit_code(tmp_path, capsys):
    config = tmp_path / "run.yaml"
    config.write_text("backend: quantum\n", encoding="utf-8")

    assert main(["--config", str(config)]) == 2
    assert "failed to load configuration" in capsys.readouterr().err


# ----------------------------- Logging ------------------------------------

def test_cli_verbose_writes_log_file(chain_file, tmp_path, capsys):
    log_file = tmp_path / "logs" / "run.log"

    rc = main(["--input", chain_file("3\n2 1 3\nPNA\n"), "-v", "--log-file", str(log_file)])

    assert rc == 0
    assert capsys.readouterr().out == "20\n2 1 3\n"
    for handler in logging.getLogger("affinity_chain").handlers:
        handler.flush()
    content = log_file.read_text(encoding="utf-8")
    assert "Collapse DP for chain length n=3" in content
    assert "Max energy: 20" in content


def test_cli_prune_logs(chain_file, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    old_log = tmp_path / "var" / "log" / "old.log"
    old_log.parent.mkdir(parents=True)
    old_log.write_text("x", encoding="utf-8")
    os.utime(old_log, (0, 0))

    assert main(["--input", chain_file("1\n5\nP\n"), "--prune-logs", "1"]) == 0
    assert not old_log.exists()


# ----------------------------- Subprocess ---------------------------------

def test_python_dash_m_entry_point():
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))

    result = subprocess.run(
        [sys.executable, "-m", "affinity_chain"],
        input="3\n2 1 3\nPNA\n",
        capture_output=True,
        text=True,
        env=env,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout == "20\n2 1 3\n"
