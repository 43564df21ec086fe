from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence

from ..models import ActionEvent, ShortcutAction
from .handlers import ShortcutHandlers


def _conversation_index(args: Sequence[Any]) -> int | None:
    """Convert the 1-based shortcut argument to a 0-based index."""

    if not args or isinstance(args[0], bool):
        return None
    try:
        return int(args[0]) - 1
    except (TypeError, ValueError):
        return None


class ShortcutDispatcher:
    """Route named actions from the control channel to their handlers.

    Events submitted with ``submit`` are processed by ``run`` strictly in
    arrival order; the next one is not taken off the queue until the current
    handler has returned. Nothing raised by a handler leaves ``dispatch``.
    """

    def __init__(self, handlers: ShortcutHandlers) -> None:
        self.handlers = handlers
        self.queue: asyncio.Queue[ActionEvent] = asyncio.Queue()
        self._routes: dict[ShortcutAction, Callable[[Sequence[Any]], Awaitable[bool]]] = {
            ShortcutAction.FOCUS_SEARCH: lambda _args: handlers.focus_search(),
            ShortcutAction.FOCUS_MESSAGE_INPUT: lambda _args: handlers.focus_message_input(),
            ShortcutAction.SWITCH_CONVERSATION: self._switch_conversation,
            ShortcutAction.PREVIOUS_CONVERSATION: lambda _args: handlers.previous_conversation(),
            ShortcutAction.NEXT_CONVERSATION: lambda _args: handlers.next_conversation(),
            ShortcutAction.ESCAPE: lambda _args: handlers.handle_escape(),
        }

    async def _switch_conversation(self, args: Sequence[Any]) -> bool:
        index = _conversation_index(args)
        if index is None:
            logging.warning("shortcut_bad_args action=%s args=%s", ShortcutAction.SWITCH_CONVERSATION.value, list(args))
            return False
        return await self.handlers.switch_to_conversation(index)

    async def dispatch(self, action: str, args: Sequence[Any] = ()) -> bool:
        logging.info("shortcut_received action=%s args=%s", action, list(args))
        try:
            parsed = ShortcutAction(action)
        except ValueError:
            logging.warning("shortcut_unknown action=%s", action)
            return False

        try:
            success = await self._routes[parsed](args)
        except Exception:  # noqa: BLE001
            logging.exception("shortcut_handler_error action=%s", action)
            success = False

        logging.info("shortcut_handled action=%s success=%s", action, success)
        return success

    def submit(self, event: ActionEvent) -> None:
        self.queue.put_nowait(event)

    async def run(self) -> None:
        while True:
            event = await self.queue.get()
            try:
                await self.dispatch(event.action, event.args)
            finally:
                self.queue.task_done()
