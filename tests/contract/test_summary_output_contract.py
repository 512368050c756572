from __future__ import annotations

import re
from pathlib import Path

from sheet2doc.cli import main as cli_main

"""Exactly one SUMMARY line per run, always last."""

SUMMARY_RE = re.compile(
    r"^SUMMARY status=(success|failed|cancelled) stage=\S+ error=\S+ "
    r"blocks=[0-9]+ elapsed_sec=[0-9]+(\.[0-9]+)? url=\S+$"
)


def _summary_lines(out: str) -> list[str]:
    return [line for line in out.splitlines() if line.startswith("SUMMARY")]


def test_summary_on_success(temp_workdir: Path, make_xlsx, capsys):
    book = make_xlsx(temp_workdir / "data" / "b.xlsx", {"S": [["h"], ["v"]]})
    cli_main([str(book), "--row", "2", "--name", "Doc"])
    out = capsys.readouterr().out
    lines = _summary_lines(out)
    assert len(lines) == 1 and SUMMARY_RE.match(lines[0])
    assert out.strip().splitlines()[-1] == lines[0]


def test_summary_on_failure(temp_workdir: Path, make_xlsx, capsys):
    book = make_xlsx(temp_workdir / "data" / "b.xlsx", {"S": [["h"], ["v"]]})
    cli_main([str(book), "--select", "A1:A2", "--name", "Doc"])
    lines = _summary_lines(capsys.readouterr().out)
    assert len(lines) == 1 and SUMMARY_RE.match(lines[0])
    assert "status=failed stage=selection" in lines[0]
