"""Tests for the command-line interface."""
import httpx
import pytest
from typer.testing import CliRunner

from bubblechat.cli.app import _close_quietly, app, console_logger
from bubblechat.cli.providers import get_llm, get_store, resolve_log_level
from bubblechat.llm import GroqProvider, OpenAIProvider
from bubblechat.memory.in_memory import InMemoryChatStore
from bubblechat.memory.sqlite import SQLiteChatStore

runner = CliRunner()


class TestProviders:
    """Tests for environment-driven construction."""

    def test_groq_is_default(self, monkeypatch):
        monkeypatch.delenv("LLM_PROVIDER", raising=False)
        monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
        monkeypatch.setenv("GROQ_MODEL", "llama-3.3-70b-versatile")

        llm = get_llm()
        assert isinstance(llm, GroqProvider)
        assert llm.model == "llama-3.3-70b-versatile"

    def test_openai_provider(self, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "openai")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.delenv("OPENAI_CHAT_MODEL", raising=False)

        llm = get_llm()
        assert isinstance(llm, OpenAIProvider)
        assert llm.model == "gpt-4o-mini"

    def test_missing_key_returns_none(self, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "groq")
        monkeypatch.delenv("GROQ_API_KEY", raising=False)
        assert get_llm() is None

    def test_store_backends(self, monkeypatch, tmp_path):
        monkeypatch.delenv("BUBBLECHAT_STORE", raising=False)
        monkeypatch.setenv("BUBBLECHAT_DB_PATH", str(tmp_path / "env.db"))

        sqlite_store = get_store()
        assert isinstance(sqlite_store, SQLiteChatStore)
        assert sqlite_store.db_path == tmp_path / "env.db"
        assert isinstance(get_store("memory"), InMemoryChatStore)

    @pytest.mark.parametrize(
        ("flag", "debug_env", "expected"),
        [("warning", None, "warning"), (None, "1", "debug"), (None, None, None)],
    )
    def test_resolve_log_level(self, monkeypatch, flag, debug_env, expected):
        if debug_env is None:
            monkeypatch.delenv("DEBUG", raising=False)
        else:
            monkeypatch.setenv("DEBUG", debug_env)
        assert resolve_log_level(flag) == expected


class TestCommands:
    """Tests for CLI commands that need no network."""

    def test_ask_without_api_key(self, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "groq")
        monkeypatch.delenv("GROQ_API_KEY", raising=False)

        result = runner.invoke(app, ["ask", "hello"])
        assert result.exit_code == 1
        assert "not configured" in result.output

    def test_feed_with_bad_handle(self):
        result = runner.invoke(app, ["feed", "nobody"])
        assert result.exit_code == 1
        assert "invalid handle" in result.output

    def test_feed_network_failure_is_reported(self, monkeypatch):
        async def unreachable(handle, limit=10, client=None):
            raise httpx.ConnectError("dns failure")

        monkeypatch.setattr("bubblechat.feed.get_mastodon_feed", unreachable)

        result = runner.invoke(app, ["feed", "ada@example.invalid"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "dns failure" in result.output

    def test_memories_on_empty_database(self, tmp_path):
        result = runner.invoke(app, ["memories", "--db-path", str(tmp_path / "m.db")])
        assert result.exit_code == 0
        assert "No memories stored." in result.output

    def test_search_on_empty_database(self, tmp_path):
        result = runner.invoke(app, ["search", "anything", "--db-path", str(tmp_path / "m.db")])
        assert result.exit_code == 0
        assert "No results." in result.output


class TestConsoleLogger:
    """Tests for the stderr log callback."""

    def test_disabled_without_level(self):
        assert console_logger(None) is None

    def test_filters_below_threshold(self, capsys):
        log = console_logger("warning")
        log("debug", "Chat", "hidden detail")
        log("error", "LLM", "request failed")

        err = capsys.readouterr().err
        assert "hidden detail" not in err
        assert "request failed" in err


class TestCloseQuietly:
    """Tests for the chat teardown steps."""

    @pytest.mark.asyncio
    async def test_failure_does_not_skip_next_step(self, capsys):
        closed = []

        async def broken_store():
            raise RuntimeError("database is locked")

        async def llm_close():
            closed.append("llm")

        await _close_quietly("store", broken_store)
        await _close_quietly("LLM client", llm_close)

        assert closed == ["llm"]
        err = capsys.readouterr().err
        assert "closing store failed" in err
        assert "database is locked" in err
