# =============================================
# File: tests/test_cli.py
# Purpose: Command-line recommender
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import json

from hummbl_api.cli.recommend import main


def test_text_output(capsys):
    assert main(["I need to break down this complex problem into smaller parts", "--limit", "3"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("1. [")
    assert sum(1 for line in out if line[:2] in ("1.", "2.", "3.")) == 3
    assert any(line.startswith("Patterns:") and "Decomposition" in line for line in out)


def test_json_output_with_workflows(capsys):
    assert main(["our system is a tangled mess", "--json", "--workflows"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert set(data) >= {"models", "matched_patterns", "keywords_used", "fallback", "workflows"}
    assert any(w["id"] == "system-design" for w in data["workflows"])


def test_fallback_notice(capsys):
    assert main(["xyzzy plugh", "--limit", "2"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "No specific matches - showing high-priority models"
    assert out[1].startswith("1. [P1]")
    assert out[2].startswith("2. [P2]")


def test_bad_catalog_path(capsys, tmp_path):
    assert main(["anything", "--catalog", str(tmp_path / "missing.json")]) == 2
    assert "[ERROR]" in capsys.readouterr().err
