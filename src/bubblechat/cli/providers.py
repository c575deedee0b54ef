"""Provider factory functions for CLI.

Centralizes creation of the LLM provider, chat store and classifier from
environment variables. Hides configuration details from command implementations.
"""

import os
from typing import Any

import typer
from rich.console import Console

from ..llm import create_llm_provider
from ..memory import create_chat_store

# Default console for output
_console = Console()

DEFAULT_DB_PATH = "memory.db"
DEFAULT_CLASSIFIER_DIR = "models/distilbert-base-uncased"


def get_llm(console: Console | None = None) -> Any | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        LLM_PROVIDER: Provider type (groq, openai; default: groq)
        GROQ_API_KEY: Groq API key (for groq provider)
        GROQ_MODEL: Groq model (default: llama-3.1-8b-instant)
        OPENAI_API_KEY: OpenAI API key (for openai provider)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o-mini)
    """
    con = console or _console
    llm_provider = os.getenv("LLM_PROVIDER", "groq").lower()

    if llm_provider == "groq":
        api_key = os.getenv("GROQ_API_KEY")
        if not api_key:
            con.print("[yellow]Warning: GROQ_API_KEY not set in environment[/yellow]")
            return None
        model = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")
        return create_llm_provider("groq", api_key=api_key, model=model)

    elif llm_provider == "openai":
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            con.print("[yellow]Warning: OPENAI_API_KEY not set in environment[/yellow]")
            return None
        model = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")
        return create_llm_provider("openai", api_key=api_key, model=model)

    else:
        con.print(f"[red]Error: Unknown LLM provider: {llm_provider}[/red]")
        return None


def require_llm(console: Console | None = None) -> Any:
    """Get LLM provider, raising error if not configured.

    Raises:
        typer.Exit: If LLM provider is not configured
    """
    con = console or _console
    llm = get_llm(con)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm


def get_store(backend: str | None = None, db_path: str | None = None) -> Any:
    """Create the chat store.

    Args:
        backend: "sqlite" or "memory" (default: BUBBLECHAT_STORE or sqlite)
        db_path: SQLite file (default: BUBBLECHAT_DB_PATH or memory.db)

    Environment variables:
        BUBBLECHAT_STORE: Store backend
        BUBBLECHAT_DB_PATH: SQLite database path
    """
    backend = backend or os.getenv("BUBBLECHAT_STORE", "sqlite")
    if backend == "sqlite":
        path = db_path or os.getenv("BUBBLECHAT_DB_PATH", DEFAULT_DB_PATH)
        return create_chat_store("sqlite", path=path)
    return create_chat_store(backend)


def get_classifier(console: Console | None = None, model_dir: str | None = None) -> Any:
    """Create the dialog-act classifier.

    Raises:
        typer.Exit: If the model directory is missing or the extra is not installed

    Environment variables:
        BUBBLECHAT_CLASSIFIER_DIR: Local model directory
    """
    from pathlib import Path

    from ..classifier import DialogActClassifier

    con = console or _console
    directory = Path(model_dir or os.getenv("BUBBLECHAT_CLASSIFIER_DIR", DEFAULT_CLASSIFIER_DIR))
    if not (directory / "label_map.txt").exists():
        con.print(f"[red]Error: no classifier model found in {directory}[/red]")
        raise typer.Exit(code=1)

    try:
        return DialogActClassifier(directory)
    except ImportError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def resolve_log_level(log_level: str | None) -> str | None:
    """Explicit --log-level wins; DEBUG=1 in the environment means debug."""
    if log_level:
        return log_level
    if os.getenv("DEBUG") == "1":
        return "debug"
    return None
