"""CLI command tests against a temporary SQLite database."""

from loguru import logger
import pytest
import typer
from typer.testing import CliRunner

from src.config import settings
from src.infrastructure.cli.app import app
from src.infrastructure.cli.macro_commands import parse_property


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_db(tmp_path, monkeypatch):
    """Point the CLI at a throwaway database and log file."""
    monkeypatch.setattr(
        settings.database, "url", f"sqlite+aiosqlite:///{tmp_path / 'macros.db'}"
    )
    monkeypatch.setattr(settings.logging, "log_file", tmp_path / "macros.log")
    monkeypatch.setattr(settings.logging, "real_time_debug", True)
    yield tmp_path
    logger.remove()


@pytest.fixture
def initialized(runner, cli_db):
    result = runner.invoke(app, ["init-db"])
    assert result.exit_code == 0, result.output
    return cli_db


def create_news_list(runner):
    return runner.invoke(
        app,
        [
            "create",
            "newsList",
            "News list",
            "--type",
            "partial_view",
            "--source",
            "~/Views/MacroPartials/NewsList.cshtml",
            "--property",
            "startNode:Start node:contentPicker",
            "--property",
            "count:Items",
        ],
    )


class TestParseProperty:
    def test_full_form(self):
        prop = parse_property("startNode:Start node:contentPicker", 2)

        assert prop.alias == "startNode"
        assert prop.name == "Start node"
        assert prop.property_type_alias == "contentPicker"
        assert prop.sort_order == 2

    def test_type_defaults_to_text(self):
        assert parse_property("title:Title", 0).property_type_alias == "text"

    @pytest.mark.parametrize("value", ["title", ":Title", "a:b:c:d"])
    def test_invalid_values(self, value):
        with pytest.raises(typer.BadParameter):
            parse_property(value, 0)


class TestMacroCommands:
    def test_init_db(self, runner, cli_db):
        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Database ready" in result.stdout
        assert (cli_db / "macros.db").exists()

    def test_list_empty(self, runner, initialized):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No macros found" in result.stdout

    def test_create_list_show_delete(self, runner, initialized):
        result = create_news_list(runner)
        assert result.exit_code == 0, result.output
        assert "Saved macro" in result.stdout

        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "newsList" in result.stdout

        result = runner.invoke(app, ["show", "newsList"])
        assert result.exit_code == 0
        assert "startNode" in result.stdout
        assert "Content picker" in result.stdout
        assert "Textbox" in result.stdout

        result = runner.invoke(app, ["delete", "newsList"])
        assert result.exit_code == 0
        assert "Deleted macro" in result.stdout

        result = runner.invoke(app, ["show", "newsList"])
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_create_again_updates(self, runner, initialized):
        create_news_list(runner)
        result = runner.invoke(app, ["create", "newsList", "Latest news"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["show", "newsList"])
        assert "Latest news" in result.stdout
        assert "startNode" not in result.stdout

    def test_list_filtered_by_alias(self, runner, initialized):
        create_news_list(runner)
        runner.invoke(app, ["create", "footer", "Footer"])

        result = runner.invoke(app, ["list", "footer"])

        assert result.exit_code == 0
        assert "footer" in result.stdout
        assert "newsList" not in result.stdout

    def test_delete_missing_exits_1(self, runner, initialized):
        result = runner.invoke(app, ["delete", "missing"])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_show_missing_exits_1(self, runner, initialized):
        assert runner.invoke(app, ["show", "missing"]).exit_code == 1

    def test_unknown_property_type_is_rejected(self, runner, initialized):
        result = runner.invoke(
            app, ["create", "footer", "Footer", "--property", "c:Color:colorPicker"]
        )

        assert result.exit_code == 2
        assert runner.invoke(app, ["show", "footer"]).exit_code == 1

    def test_malformed_property_is_rejected(self, runner, initialized):
        result = runner.invoke(app, ["create", "footer", "Footer", "--property", "oops"])
        assert result.exit_code == 2

    def test_without_warm_up(self, runner, initialized, monkeypatch):
        monkeypatch.setattr(settings.macros, "warm_cache_on_start", False)

        create_news_list(runner)
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "newsList" in result.stdout

    def test_database_errors_exit_1(self, runner, cli_db):
        """Without init-db the tables are missing."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "Error during list macros" in result.stdout

    def test_property_types(self, runner, cli_db):
        result = runner.invoke(app, ["property-types"])

        assert result.exit_code == 0
        assert "contentPicker" in result.stdout
        assert "int32" in result.stdout

    def test_markup_characters_in_macro_text(self, runner, initialized):
        """Brackets in stored text are shown literally."""
        result = runner.invoke(
            app,
            ["create", "x[/]", "Footer [/] [bold]", "--property", "c[/]:Count [/]:number"],
        )
        assert result.exit_code == 0, result.output
        assert "x[/]" in result.stdout

        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0, result.output
        assert "x[/]" in result.stdout
        assert "Footer [/] [bold]" in result.stdout

        result = runner.invoke(app, ["show", "x[/]"])
        assert result.exit_code == 0, result.output
        assert "Footer [/] [bold]" in result.stdout
        assert "Count [/]" in result.stdout

        result = runner.invoke(app, ["delete", "x[/]"])
        assert result.exit_code == 0, result.output
        assert "x[/]" in result.stdout

        result = runner.invoke(app, ["show", "x[/]"])
        assert result.exit_code == 1
        assert "Macro 'x[/]' not found" in result.stdout

    def test_duplicate_property_aliases_fail_without_saving(self, runner, initialized):
        result = runner.invoke(
            app,
            ["create", "footer", "Footer", "-p", "year:Year", "-p", "year:Again"],
        )

        assert result.exit_code == 1
        assert "Duplicate property aliases" in result.stdout
        assert runner.invoke(app, ["show", "footer"]).exit_code == 1
