"""
Sucoi - Companion Chat
=======================
Single-turn companion replies from Google Gemini, plus the per-user chat
history built from those exchanges.

Architecture
------------
``GeminiCompletionClient``
    Stateless wrapper around the ``google-genai`` async API.  Sends one
    prompt with fixed generation parameters and returns the first
    candidate's text, or ``None`` when the response carries no usable
    text.  Transport and API errors propagate to the caller.

``CompanionChat``
    Pipeline for one exchange:
        1. Empty message → canned retry prompt (no LLM call, no save).
        2. Wrap the message in the persona template.
        3. Call Gemini.
        4. Missing / blank reply → canned fallback.
        5. Username supplied → persist the exchange.
        6. Return the reply.

``ChatHistory``
    Listing and deletion of persisted exchanges.

Usage:
    from sucoi.src.core.companion import CompanionChat, GeminiCompletionClient
    chat = CompanionChat(GeminiCompletionClient.from_settings(settings), ChatStore(database))
    reply = await chat.reply("I feel anxious today", username="maya")
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from sucoi.config.prompt_templates import COMPANION_PROMPT_TEMPLATE, EMPTY_MESSAGE_REPLY, NO_REPLY_FALLBACK
from sucoi.config.settings import Settings
from sucoi.src.core.errors import NotFoundError
from sucoi.src.database.stores import ChatStore
from sucoi.src.utils.logger import get_logger

logger = get_logger(__name__)

ChatDocument = dict[str, Any]


# ══════════════════════════════════════════════════════════════════════
#  COMPLETION CLIENT
# ══════════════════════════════════════════════════════════════════════


@runtime_checkable
class CompletionClient(Protocol):
    """Anything that can turn a prompt into reply text."""

    async def complete(self, prompt: str) -> str | None: ...


class GeminiCompletionClient:
    """
    Gemini ``generateContent`` caller.

    Parameters
    ----------
    api_key
        Google AI Studio key.
    model
        Model identifier, e.g. ``gemini-2.0-flash``.
    temperature, max_output_tokens
        Generation parameters sent with every request.
    """

    __slots__ = ("_client", "_model", "_config")

    def __init__(self, api_key: str, model: str, temperature: float = 0.8, max_output_tokens: int = 500) -> None:
        from google import genai
        from google.genai import types

        self._client = genai.Client(api_key=api_key)
        self._model = model
        self._config = types.GenerateContentConfig(temperature=temperature, max_output_tokens=max_output_tokens)


    @classmethod
    def from_settings(cls, settings: Settings) -> GeminiCompletionClient:
        logger.info("[CHAT] LLM configured: %s (temperature=%.1f, max_output_tokens=%d)", settings.LLM_MODEL, settings.LLM_TEMPERATURE, settings.LLM_MAX_OUTPUT_TOKENS)
        return cls(api_key=settings.GOOGLE_API_KEY.get_secret_value(), model=settings.LLM_MODEL, temperature=settings.LLM_TEMPERATURE, max_output_tokens=settings.LLM_MAX_OUTPUT_TOKENS)


    async def complete(self, prompt: str) -> str | None:
        response = await self._client.aio.models.generate_content(model=self._model, contents=prompt, config=self._config)
        return extract_reply_text(response)


def extract_reply_text(response: object) -> str | None:
    """
    Return the trimmed text of the first part of the first candidate.

    Any missing link in ``candidates[0].content.parts[0].text`` yields
    ``None``, as does text that is blank after trimming.
    """
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None)
    if not parts:
        return None
    text = getattr(parts[0], "text", None)
    if not isinstance(text, str):
        return None
    return text.strip() or None


# ══════════════════════════════════════════════════════════════════════
#  COMPANION CHAT
# ══════════════════════════════════════════════════════════════════════


class CompanionChat:
    """One user message in, one companion reply out."""

    __slots__ = ("_completion", "_chats")

    def __init__(self, completion: CompletionClient, chats: ChatStore) -> None:
        self._completion = completion
        self._chats = chats


    @staticmethod
    def build_prompt(message: str) -> str:
        return COMPANION_PROMPT_TEMPLATE.format(message=message)


    async def reply(self, message: str | None, username: str | None = None) -> str:
        """
        Produce the companion's reply and persist the exchange.

        Raises whatever the completion client or the store raises; the
        route turns that into the generic server-error reply.
        """
        if not message:
            return EMPTY_MESSAGE_REPLY

        logger.info("[CHAT] Received message (%d chars, user=%s)", len(message), username or "anonymous")
        reply = await self._completion.complete(self.build_prompt(message))
        if not reply:
            logger.warning("[CHAT] Completion returned no usable text; using fallback.")
            reply = NO_REPLY_FALLBACK

        if username:
            await self._chats.add(username, message, reply)

        return reply


# ══════════════════════════════════════════════════════════════════════
#  CHAT HISTORY
# ══════════════════════════════════════════════════════════════════════


class ChatHistory:
    __slots__ = ("_chats",)

    def __init__(self, chats: ChatStore) -> None:
        self._chats = chats


    async def list_chats(self, username: str) -> list[ChatDocument]:
        chats = await self._chats.list_for(username)
        logger.debug("[HISTORY] %d chat(s) for '%s'", len(chats), username)
        return chats


    async def delete_chat(self, chat_id: str) -> None:
        if not await self._chats.delete(chat_id):
            raise NotFoundError("Chat not found")
        logger.info("[HISTORY] Chat %s deleted.", chat_id)
