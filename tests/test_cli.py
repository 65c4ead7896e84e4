"""
Tests for the Typer command line application.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from carebook import __version__
from carebook.cli.app import app

runner = CliRunner()

TODAY = "2026-01-10"


@pytest.fixture
def invoke(config_path: Path):
    def _invoke(*args: str):
        return runner.invoke(app, [*args, "--config", str(config_path)])

    return _invoke


class TestAvailabilityCommand:
    def test_single_provider(self, invoke):
        result = invoke("availability", "marie", "--today", TODAY)

        assert result.exit_code == 0
        assert "Complet (CDI)" in result.output
        assert "2 mars 2026" in result.output

    def test_provider_by_name(self, invoke):
        result = invoke("availability", "sophie martin", "--today", TODAY)

        assert result.exit_code == 0
        assert "Disponible dès maintenant" in result.output

    def test_provider_without_schedule(self, invoke):
        result = invoke("availability", "lea", "--today", TODAY)

        assert result.exit_code == 0
        assert "Aucun horaire configuré" in result.output

    def test_unknown_provider(self, invoke):
        result = invoke("availability", "nobody", "--today", TODAY)

        assert result.exit_code == 1
        assert "Unknown provider" in result.output

    def test_bad_reference_date(self, invoke):
        result = invoke("availability", "marie", "--today", "10/01/2026")

        assert result.exit_code == 1
        assert "Erreur" in result.output


class TestSearchCommand:
    def test_by_weekday(self, invoke):
        result = invoke("search", "--day", "lundi", "--today", TODAY)

        assert result.exit_code == 0
        assert "Marie Dupont" in result.output
        assert "Sophie Martin" not in result.output

    def test_fully_available_now(self, invoke):
        result = invoke("search", "--now", "--today", TODAY)

        assert result.exit_code == 0
        assert "Sophie Martin" in result.output
        assert "Marie Dupont" not in result.output

    def test_available_at_start_date(self, invoke):
        result = invoke("search", "--available", "--start", "2026-03-02", "--today", TODAY)

        assert result.exit_code == 0
        assert "Marie Dupont" in result.output
        assert "Sophie Martin" in result.output

    def test_no_match(self, invoke):
        result = invoke("search", "--day", "dimanche", "--today", TODAY)

        assert result.exit_code == 0
        assert "Aucune assistante trouvée" in result.output

    def test_unknown_weekday(self, invoke):
        result = invoke("search", "--day", "funday", "--today", TODAY)

        assert result.exit_code == 1
        assert "Unknown weekday" in result.output


class TestScheduleCommand:
    def test_summary(self, invoke):
        result = invoke("schedule", "marie")

        assert result.exit_code == 0
        assert "Non travaillé" in result.output
        assert "20,0h" in result.output


class TestOccupancyCommand:
    def test_monday_grid(self, invoke):
        result = invoke("occupancy", "marie", "--date", "2026-01-12")

        assert result.exit_code == 0
        assert "2/2" in result.output
        assert "r1" in result.output
        assert "r2" in result.output

    def test_pending_requests_take_places(self, invoke):
        result = invoke("occupancy", "marie", "--date", "2026-01-13")

        assert result.exit_code == 0
        assert "2/2" in result.output
        assert "en attente" in result.output

    def test_day_off(self, invoke):
        result = invoke("occupancy", "marie", "--date", "2026-01-14")

        assert result.exit_code == 0
        assert "n'est pas travaillé" in result.output


class TestCheckCommand:
    def test_accepted(self, invoke):
        result = invoke(
            "check", "marie",
            "--day", "mardi", "--from", "08:00", "--to", "12:00",
            "--start", "2026-03-02", "--today", TODAY,
        )

        assert result.exit_code == 0
        assert "accepté" in result.output
        assert "Première séance: 3 mars 2026" in result.output

    def test_saturated_weekday(self, invoke):
        result = invoke(
            "check", "marie",
            "--day", "lundi", "--from", "08:00", "--to", "12:00",
            "--start", "2026-03-02", "--today", TODAY,
        )

        assert result.exit_code == 1
        assert "Demande refusée" in result.output

    def test_outside_working_hours(self, invoke):
        result = invoke(
            "check", "sophie",
            "--day", "mercredi", "--from", "06:00", "--to", "12:00",
            "--start", "2026-01-14", "--today", TODAY,
        )

        assert result.exit_code == 1
        assert "outside working hours" in result.output


class TestMiscCommands:
    def test_list_providers(self, invoke):
        result = invoke("list-providers")

        assert result.exit_code == 0
        assert "marie" in result.output
        assert "lun, mar 8h00 - 18h00" in result.output

    def test_missing_config(self, tmp_path: Path):
        result = runner.invoke(app, ["list-providers", "--config", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output
