"""
Command Line Tests
"""

import json

import pytest

from cncbuilder.cli import main


@pytest.fixture
def job_file(tmp_path):
    path = tmp_path / "job.json"
    path.write_text(json.dumps({
        "pecas": [
            {"id": "1", "largura": 300, "altura": 200},
            {"id": "2", "largura": 120, "altura": 80, "tipoCorte": "interno"},
        ],
        "configChapa": {"largura": 1000, "altura": 800},
        "configFerramenta": {"diametro": 6, "numeroFerramenta": 1}
    }), encoding="utf-8")
    return path


def test_generate_writes_program(job_file, tmp_path, capsys):
    output = tmp_path / "out.nc"

    assert main(["generate", str(job_file), "-o", str(output)]) == 0

    program = output.read_text(encoding="utf-8")
    assert "G21" in program and "M30" in program
    assert "T1 M6" in program
    assert "Written" in capsys.readouterr().out


def test_generate_default_output_name(job_file):
    assert main(["generate", str(job_file), "--method", "shelf", "--minify"]) == 0

    program = job_file.with_suffix(".nc").read_text(encoding="utf-8")
    assert ";" not in program


def test_generate_without_comments(job_file, tmp_path):
    output = tmp_path / "plain.nc"

    assert main(["generate", str(job_file), "-o", str(output), "--no-comments"]) == 0
    assert "(" not in output.read_text(encoding="utf-8")


def test_generate_fails_when_pieces_do_not_fit(tmp_path, capsys):
    path = tmp_path / "big.json"
    path.write_text(json.dumps({"pecas": [{"id": "x", "largura": 9000, "altura": 10}]}), encoding="utf-8")

    assert main(["generate", str(path)]) == 1
    assert "nao_couberam" in capsys.readouterr().err
    assert not path.with_suffix(".nc").exists()


def test_validate_prints_report(job_file, capsys):
    assert main(["validate", str(job_file)]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["valid"] is True
    assert report["preview"]["pecasPosicionadas"] == 2


def test_estimate_prints_time(job_file, capsys):
    assert main(["estimate", str(job_file)]) == 0
    assert "Estimated time:" in capsys.readouterr().out


def test_missing_job_file(tmp_path):
    assert main(["generate", str(tmp_path / "missing.json")]) == 1


def test_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{", encoding="utf-8")

    assert main(["validate", str(path)]) == 1


def test_malformed_tool_config_fails_cleanly(tmp_path):
    path = tmp_path / "tool.json"
    path.write_text(json.dumps({
        "pecas": [{"id": "1", "largura": 100, "altura": 100}],
        "configFerramenta": {"diametro": "x"}
    }), encoding="utf-8")

    assert main(["generate", str(path)]) == 1


def test_usage_error_exits_with_2():
    with pytest.raises(SystemExit) as info:
        main(["generate"])
    assert info.value.code == 2
