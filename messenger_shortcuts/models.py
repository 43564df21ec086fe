from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class LogicalKey(str, Enum):
    """What is being looked for, independent of how it is located."""

    SEARCH_INPUT = "searchInput"
    MESSAGE_INPUT = "messageInput"
    CONVERSATION_LIST = "conversationList"
    ACTIVE_CONVERSATION = "activeConversation"


class ShortcutAction(str, Enum):
    FOCUS_SEARCH = "focus-search"
    FOCUS_MESSAGE_INPUT = "focus-message-input"
    SWITCH_CONVERSATION = "switch-conversation"
    PREVIOUS_CONVERSATION = "previous-conversation"
    NEXT_CONVERSATION = "next-conversation"
    ESCAPE = "escape"


@dataclass
class ActionEvent:
    """A named action from the control channel.

    ``action`` is kept as the raw string so unknown names can reach the
    dispatcher and be logged there.
    """

    action: str
    args: list[Any] = field(default_factory=list)
