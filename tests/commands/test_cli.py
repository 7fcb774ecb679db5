"""Tests for the cashio command line."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from cashio.cli import app
from cashio.store.records import RecordStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_db(db_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at the test database."""
    monkeypatch.setenv("CASHIO_DB_PATH", str(db_path))
    return db_path


def init() -> None:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self, db_path: Path, tmp_path: Path) -> None:
        """Should create the schema and a config file."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0, result.output
        assert "Initialization complete" in result.output
        assert (tmp_path / "config" / "cashio" / "config.toml").exists()
        with RecordStore.connect(db_path) as store:
            assert store.count() == 0

    def test_twice_keeps_records(self, db_path: Path) -> None:
        """Should be safe to run again."""
        init()
        runner.invoke(app, ["add", "Coffee", "4.50", "2024-02-10"])

        init()

        with RecordStore.connect(db_path) as store:
            assert store.count() == 1


class TestAdd:
    """Tests for the add command."""

    def test_add_record(self, db_path: Path) -> None:
        """Should store a parsed record."""
        init()

        result = runner.invoke(
            app, ["add", "--category", "food", "--description", "flat white", "--", "Coffee", "-4.5", "2024-02-10"]
        )

        assert result.exit_code == 0, result.output
        assert "Record added" in result.output
        with RecordStore.connect(db_path) as store:
            [record] = store.list()
        assert record.name == "Coffee"
        assert record.cents == -450
        assert record.date.isoformat() == "2024-02-10"
        assert record.category == "food"
        assert record.description == "flat white"

    def test_bad_amount(self, db_path: Path) -> None:
        """Should abort without writing on a malformed amount."""
        init()

        result = runner.invoke(app, ["add", "Coffee", "4.505", "2024-02-10"])

        assert result.exit_code == 1
        assert "Error" in result.output
        with RecordStore.connect(db_path) as store:
            assert store.count() == 0

    def test_bad_date(self) -> None:
        """Should report the offending date."""
        init()

        result = runner.invoke(app, ["add", "Coffee", "4.50", "13/06/88"])

        assert result.exit_code == 1
        assert "13/06/88" in result.output

    def test_huge_day(self, db_path: Path) -> None:
        """Should report an oversized bare day as an error."""
        init()

        result = runner.invoke(app, ["add", "Coffee", "4.50", "99999999999999999999"])

        assert result.exit_code == 1
        assert "Error" in result.output
        with RecordStore.connect(db_path) as store:
            assert store.count() == 0

    def test_requires_init(self) -> None:
        """Should tell the user to run init first."""
        result = runner.invoke(app, ["add", "Coffee", "4.50", "2024-02-10"])

        assert result.exit_code == 1
        assert "cashio init" in result.output


class TestList:
    """Tests for the ls command."""

    def test_lists_matching_records(self) -> None:
        """Should show records matching the query and total them."""
        init()
        runner.invoke(app, ["add", "Coffee", "4.50", "2024-02-10", "-c", "food"])
        runner.invoke(app, ["add", "Rent", "900", "2024-02-01", "-c", "housing"])

        result = runner.invoke(app, ["ls", "coffee", "--all"])

        assert result.exit_code == 0, result.output
        assert "Coffee" in result.output
        assert "Rent" not in result.output
        assert "Total: 4.50" in result.output

    def test_date_range(self) -> None:
        """Should filter with --from and --to."""
        init()
        runner.invoke(app, ["add", "Coffee", "4.50", "2024-02-10"])
        runner.invoke(app, ["add", "Tea", "3", "2024-03-10"])

        result = runner.invoke(app, ["ls", "--from", "2024-03-01", "--to", "2024-03-31"])

        assert result.exit_code == 0, result.output
        assert "Tea" in result.output
        assert "Coffee" not in result.output

    def test_no_records(self) -> None:
        """Should say so when nothing matches."""
        init()

        result = runner.invoke(app, ["ls", "--all"])

        assert result.exit_code == 0
        assert "No records found" in result.output

    def test_to_requires_from(self) -> None:
        """Should reject --to without --from."""
        init()

        result = runner.invoke(app, ["ls", "--to", "2024-03-31"])

        assert result.exit_code == 1
        assert "--from" in result.output

    def test_month_conflicts_with_range(self) -> None:
        """Should reject --month together with --from."""
        init()

        result = runner.invoke(app, ["ls", "--month", "3", "--from", "2024-03-01"])

        assert result.exit_code == 1

    def test_year_zero(self) -> None:
        """Should report year 0000 as an error."""
        init()

        result = runner.invoke(app, ["ls", "--year", "0000"])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestConfigErrors:
    """Tests for a config file that is not valid TOML."""

    @pytest.fixture
    def bad_config(self, tmp_path: Path) -> Path:
        path = tmp_path / "config" / "cashio" / "config.toml"
        path.parent.mkdir(parents=True)
        path.write_text("log_level = [\n")
        return path

    def test_command_reports_invalid_config(self, bad_config: Path) -> None:
        """Should print an error and exit 1 instead of a traceback."""
        result = runner.invoke(app, ["ls", "--all"])

        assert result.exit_code == 1
        assert "Invalid config" in result.output
        assert "Traceback" not in result.output

    def test_init_reports_invalid_config(self, bad_config: Path) -> None:
        """Should leave a broken config file untouched."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "Invalid config" in result.output
        assert bad_config.read_text() == "log_level = [\n"


class TestModify:
    """Tests for the mod command."""

    def test_force_applies_changes(self, db_path: Path) -> None:
        """Should update only the given fields without asking."""
        init()
        runner.invoke(app, ["add", "Coffee", "4.50", "2024-02-10", "-c", "food"])

        result = runner.invoke(app, ["mod", "1", "--amount", "5", "--force"])

        assert result.exit_code == 0, result.output
        with RecordStore.connect(db_path) as store:
            record = store.get(1)
        assert record.cents == 500
        assert record.category == "food"

    def test_declined_confirmation(self, db_path: Path) -> None:
        """Should leave the record alone when the user declines."""
        init()
        runner.invoke(app, ["add", "Coffee", "4.50", "2024-02-10"])

        result = runner.invoke(app, ["mod", "1", "--name", "Tea"], input="n\n")

        assert result.exit_code == 0, result.output
        assert "No changes made" in result.output
        with RecordStore.connect(db_path) as store:
            assert store.get(1).name == "Coffee"

    def test_confirmed(self, db_path: Path) -> None:
        """Should apply the changes when the user confirms."""
        init()
        runner.invoke(app, ["add", "Coffee", "4.50", "2024-02-10"])

        result = runner.invoke(app, ["mod", "1", "--name", "Tea"], input="y\n")

        assert result.exit_code == 0, result.output
        with RecordStore.connect(db_path) as store:
            assert store.get(1).name == "Tea"

    def test_missing_record(self) -> None:
        """Should fail for an unknown id."""
        init()

        result = runner.invoke(app, ["mod", "42", "--name", "Tea", "--force"])

        assert result.exit_code == 1
        assert "Record 42 not found" in result.output


class TestRemove:
    """Tests for the rm command."""

    def test_removes_record(self, db_path: Path) -> None:
        """Should delete the record."""
        init()
        runner.invoke(app, ["add", "Coffee", "4.50", "2024-02-10"])

        result = runner.invoke(app, ["rm", "1"])

        assert result.exit_code == 0, result.output
        assert "Record removed" in result.output
        with RecordStore.connect(db_path) as store:
            assert store.count() == 0

    def test_missing_record(self) -> None:
        """Should fail for an unknown id."""
        init()

        result = runner.invoke(app, ["rm", "7"])

        assert result.exit_code == 1
        assert "not found" in result.output
