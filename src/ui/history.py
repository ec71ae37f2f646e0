"""Chat transcript persistence helpers.

The transcript is one flat list of ``{"id", "role", "content"}`` dicts kept
in NiceGUI user storage (per browser). These functions are pure so the
storage wiring in the page stays trivial.
"""

from typing import Any

HISTORY_KEY = "chat_history"
MAX_HISTORY_MESSAGES = 50
MAX_LISTED_CONVERSATIONS = 10
PREVIEW_LENGTH = 100

Message = dict[str, Any]


def append_exchange(
    history: list[Message],
    user_message: Message,
    assistant_message: Message,
) -> list[Message]:
    """Return ``history`` plus one exchange, keeping the newest 50 messages."""
    updated = [*history, user_message, assistant_message]
    return updated[-MAX_HISTORY_MESSAGES:]


def group_conversations(history: list[Message]) -> list[list[Message]]:
    """Pair each user message with the assistant message that follows it.

    User messages without an immediate assistant reply are skipped, which
    also drops a dangling assistant message left at the front after capping.
    """
    conversations: list[list[Message]] = []
    for index, message in enumerate(history):
        if message.get("role") != "user":
            continue
        if index + 1 < len(history) and history[index + 1].get("role") == "assistant":
            conversations.append([message, history[index + 1]])
    return conversations


def recent_conversations(
    history: list[Message], limit: int = MAX_LISTED_CONVERSATIONS
) -> list[list[Message]]:
    """Newest ``limit`` conversations, newest first."""
    return list(reversed(group_conversations(history)[-limit:]))


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    return f"{text[:length]}..."
