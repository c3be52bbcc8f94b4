import uuid

import pytest
from typer.testing import CliRunner

import transaction_import.cli as cli_mod
from tests.helpers.db import count_transactions
from transaction_import.config import ImportSettings


def test_cmd_import_prints_one_line_per_transaction(db_url, write_csv, capsys):
    name = write_csv("Salary,income,5000,Work", "Gift,income,50,")

    code = cli_mod.cmd_import_transactions(name, database_url=db_url)

    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    first = lines[0].split("\t")
    uuid.UUID(first[0])
    assert first[1:] == ["income", "5000", "Salary", "Work"]
    assert lines[1].split("\t")[1:] == ["income", "50", "Gift", ""]


def test_cmd_import_reports_missing_file(db_url, capsys):
    code = cli_mod.cmd_import_transactions("missing.csv", database_url=db_url)

    assert code == 1
    assert "File not found" in capsys.readouterr().err


def test_cmd_import_reports_missing_database_url(write_csv, capsys):
    code = cli_mod.cmd_import_transactions(write_csv("Salary,income,5000,Work"))

    assert code == 1
    assert "DATABASE_URL is not set" in capsys.readouterr().err


def test_cmd_delete_rejects_invalid_id(capsys):
    assert cli_mod.cmd_delete_transaction("not-a-uuid") == 1
    assert "invalid transaction id" in capsys.readouterr().err


def test_cmd_delete_unknown_id_succeeds(db_url, capsys):
    assert cli_mod.cmd_delete_transaction(str(uuid.uuid4()), database_url=db_url) == 0
    assert capsys.readouterr().out.strip() == "not found"


def test_typer_app_imports_with_two_phase_flag(db_url, write_csv, monkeypatch, tmp_path):
    # Keep pytest's log capture intact; the root callback would otherwise
    # detach the package logger from the root handler.
    monkeypatch.setattr(cli_mod, "configure_logging", lambda *a, **kw: None)
    monkeypatch.chdir(tmp_path)
    name = write_csv("Salary,income,5000,Work")

    result = CliRunner().invoke(
        cli_mod.app,
        ["import-transactions", "--csv-path", name, "--database-url", db_url, "--two-phase"],
    )

    assert result.exit_code == 0, result.output
    assert "Salary" in result.output
    assert count_transactions(database_url=db_url) == 1


def test_settings_prefer_explicit_values(monkeypatch, tmp_path):
    monkeypatch.setenv("TRANSACTION_IMPORT_CSV_DELIMITER", ";")
    settings = ImportSettings.from_env(upload_dir=tmp_path, delimiter="|")
    assert settings.upload_dir == tmp_path
    assert settings.delimiter == "|"

    from_env = ImportSettings.from_env()
    assert from_env.delimiter == ";"


def test_settings_reject_multi_character_delimiter():
    with pytest.raises(ValueError, match="single character"):
        ImportSettings(delimiter=";;")
