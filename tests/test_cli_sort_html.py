"""Tests for the sort_html CLI."""

from __future__ import annotations

import io
import json

from cli import sort_html

HTML = "<ul id='l'><li data-n='2'>two</li><li data-n='1'>one</li><li>none</li></ul>"


def test_cli_outputs_sorted_html(tmp_path, capsys):
    src = tmp_path / "page.html"
    src.write_text(HTML, encoding="utf-8")
    code = sort_html.main([str(src), "--container", "#l", "--by", "data-n"])
    out = capsys.readouterr().out
    assert code == 0
    assert out.index("one") < out.index("two") < out.index("none")


def test_cli_json_summary_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(HTML))
    code = sort_html.main(["--container", "#l", "--by", ">data-n", "--json"])
    summary = json.loads(capsys.readouterr().out)
    assert code == 0
    assert summary["rules"] == ">data-n"
    assert summary["containers"] == 1
    assert summary["moved"] == 0


def test_cli_strict_rule_error_exit_code(tmp_path, capsys):
    src = tmp_path / "page.html"
    src.write_text(HTML, encoding="utf-8")
    code = sort_html.main([str(src), "--container", "#l", "--by", "{li", "--strict"])
    assert code == 2
    assert "unmatched" in capsys.readouterr().err


def test_cli_missing_container_exit_code(tmp_path, capsys):
    src = tmp_path / "page.html"
    src.write_text(HTML, encoding="utf-8")
    assert sort_html.main([str(src), "--container", "table"]) == 2
    assert "matched 0 nodes" in capsys.readouterr().err
