"""Conversation orchestration.

Hides how a submitted line becomes a reply: optional dialog-act gating, the
rolling context sent to the model, persistence of each turn, and the slash
commands that read the chat store or a Mastodon feed. Results reach the
screen only through the session's append() and set_typing().
"""

import asyncio
from collections.abc import Callable

from .classifier import DialogActClassifier
from .feed import FeedError, get_mastodon_feed
from .llm import ChatMessage, LLMProvider
from .memory import ChatStore
from .ui.models import Sender
from .ui.session import ChatSession

DebugCallback = Callable[[str, str, str], None]

SYSTEM_PROMPT = "You are a friendly chat partner in a terminal messaging app. Keep replies short."

# Most recent user/assistant messages sent along with each request
MAX_CONTEXT_MESSAGES = 20

HELP_TEXT = "\n".join([
    "/help                    show this list",
    "/remember <key> <value>  store a note",
    "/recall <key>            show a note",
    "/memories                list notes",
    "/search <query>          search past messages",
    "/context <id>            show a message and its neighbours",
    "/feed <user@instance> [n]  recent Mastodon posts",
    "/tokens                  tokens used this session",
    "/quit                    leave",
])


class ConversationAgent:
    """Turns user lines into model replies and command output.

    Example:
        agent = ConversationAgent(llm, session=session, store=store)
        await agent.handle_user_message("hello")
    """

    def __init__(
        self,
        llm: LLMProvider,
        session: ChatSession | None = None,
        store: ChatStore | None = None,
        classifier: DialogActClassifier | None = None,
        system_prompt: str = SYSTEM_PROMPT,
        max_context_messages: int = MAX_CONTEXT_MESSAGES,
    ) -> None:
        self._llm = llm
        self._session = session
        self._store = store
        self._classifier = classifier
        self._system_prompt = system_prompt
        self._max_context_messages = max_context_messages
        self._context: list[ChatMessage] = []
        self._debug_callback: DebugCallback | None = None
        self.total_tokens = 0

        self._commands = {
            "/help": self._cmd_help,
            "/remember": self._cmd_remember,
            "/recall": self._cmd_recall,
            "/memories": self._cmd_memories,
            "/search": self._cmd_search,
            "/context": self._cmd_context,
            "/feed": self._cmd_feed,
            "/tokens": self._cmd_tokens,
        }

    @property
    def context(self) -> list[ChatMessage]:
        """Copy of the rolling user/assistant context."""
        return list(self._context)

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the callback receiving (level, component, message) traces.

        The provider gets the same callback when it supports one.
        """
        self._debug_callback = callback
        if hasattr(self._llm, "set_debug_callback"):
            self._llm.set_debug_callback(callback)

    def _log(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, "Chat", message)

    async def reply(self, text: str) -> str | None:
        """Get the counterparty's answer to a user line.

        Returns:
            The reply text, or None when the classifier decides the line
            does not call for an answer
        """
        if self._store is not None:
            await self._store.add_history("user", text)

        if self._classifier is not None:
            act = await asyncio.to_thread(self._classifier.classify, text)
            self._log("debug", f"Dialog act: {act.tag} ({act.confidence:.2f})")
            if not act.should_reply:
                self._log("info", f"No reply needed for '{act.tag}'")
                return None

        # A user turn enters the context only together with its answer
        user_turn = ChatMessage(role="user", content=text)
        messages = [ChatMessage(role="system", content=self._system_prompt)]
        messages.extend([*self._context, user_turn][-self._max_context_messages:])

        response = await self._llm.chat_completion(messages, temperature=0)
        self.total_tokens += response.total_tokens

        answer = response.content.strip()
        self._context.append(user_turn)
        self._context.append(ChatMessage(role="assistant", content=answer))
        if self._store is not None:
            await self._store.add_history("assistant", answer)

        self._log("info", f"Reply received ({response.total_tokens} tokens)")
        return answer

    async def handle_user_message(self, text: str) -> None:
        """Callback for a submitted line whose bubble is already on screen."""
        if self._session is None:
            raise RuntimeError("handle_user_message needs a ChatSession")

        if text.startswith("/"):
            self._session.append(Sender.SYSTEM, await self.run_command(text))
            return

        self._session.set_typing(True)
        try:
            answer = await self.reply(text)
        except Exception as e:
            self._log("error", f"Reply failed: {e}")
            self._session.set_typing(False)
            self._session.append(Sender.SYSTEM, f"Error: {e}")
            return

        self._session.set_typing(False)
        if answer is not None:
            self._session.append(Sender.COUNTERPARTY, answer or "(no reply)")

    async def run_command(self, line: str) -> str:
        """Execute a slash command and return its output text.

        Failures come back as `Error: ...` text rather than exceptions.
        """
        name, _, argument = line.partition(" ")
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command '{name}'. Try /help."

        try:
            return await handler(argument.strip())
        except FeedError as e:
            self._log("warning", f"{name}: {e}")
            return f"Error: {e}"
        except Exception as e:
            self._log("error", f"{name} failed: {e}")
            return f"Error: {e}"

    def _require_store(self) -> ChatStore:
        if self._store is None:
            raise RuntimeError("no chat store configured")
        return self._store

    async def _cmd_help(self, argument: str) -> str:
        return HELP_TEXT

    async def _cmd_remember(self, argument: str) -> str:
        key, _, value = argument.partition(" ")
        if not key or not value.strip():
            return "Usage: /remember <key> <value>"
        await self._require_store().set_memory(key, value.strip())
        return f"Remembered '{key}'."

    async def _cmd_recall(self, argument: str) -> str:
        if not argument:
            return "Usage: /recall <key>"
        value = await self._require_store().get_memory(argument)
        return value or f"Nothing stored under '{argument}'."

    async def _cmd_memories(self, argument: str) -> str:
        entries = await self._require_store().list_memories()
        if not entries:
            return "No memories stored."
        return "\n".join(f"{entry.name}: {entry.value}" for entry in entries)

    async def _cmd_search(self, argument: str) -> str:
        if not argument:
            return "Usage: /search <query>"
        records = await self._require_store().search_history(argument)
        if not records:
            return "No results."
        return "\n".join(record.to_line() for record in records)

    async def _cmd_context(self, argument: str) -> str:
        if not argument.isdigit():
            return "Usage: /context <id>"
        records = await self._require_store().get_history_context(int(argument))
        if not records:
            return "No history found."
        return "\n".join(record.to_line() for record in records)

    async def _cmd_feed(self, argument: str) -> str:
        parts = argument.split()
        if not parts:
            return "Usage: /feed <user@instance> [limit]"
        limit = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else 10
        self._log("debug", f"Fetching feed for {parts[0]}")
        if self._session is None:
            return await get_mastodon_feed(parts[0], limit=limit)

        self._session.set_typing(True)
        try:
            return await get_mastodon_feed(parts[0], limit=limit)
        finally:
            self._session.set_typing(False)

    async def _cmd_tokens(self, argument: str) -> str:
        return f"{self.total_tokens} tokens used this session."

    async def close(self) -> None:
        """Release the provider and the store."""
        await self._llm.close()
        if self._store is not None:
            await self._store.disconnect()
