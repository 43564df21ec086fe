from __future__ import annotations

import logging

from ..config import Settings, settings as default_settings
from ..models import LogicalKey
from .document import DocumentNode
from .navigation import active_index, next_index, previous_index
from .resolver import ElementResolver
from .validator import filter_genuine_entries


class ShortcutHandlers:
    """One coroutine per shortcut; each returns True when it touched the page.

    Every handler performs at most one focus/click/blur sequence on a single
    resolved node. Absence and mid-mutation errors are reported as False.
    """

    def __init__(self, resolver: ElementResolver, settings: Settings | None = None) -> None:
        self.resolver = resolver
        self.settings = settings or default_settings

    async def _activate(self, node: DocumentNode, label: str) -> bool:
        try:
            await node.focus()
            await node.click()
        except Exception as exc:  # noqa: BLE001
            logging.warning("shortcut_activate_failed target=%s error=%r", label, exc)
            return False
        return True

    async def focus_search(self) -> bool:
        search_input = await self.resolver.resolve_one(LogicalKey.SEARCH_INPUT)
        if search_input is None:
            return False
        if not await self._activate(search_input, "search_input"):
            return False
        logging.info("shortcut_focused target=search_input")
        return True

    async def focus_message_input(self) -> bool:
        message_input = await self.resolver.resolve_one(LogicalKey.MESSAGE_INPUT)
        if message_input is None:
            return False
        if not await self._activate(message_input, "message_input"):
            return False
        logging.info("shortcut_focused target=message_input")
        return True

    async def conversations(self) -> list[DocumentNode]:
        raw = await self.resolver.resolve_many(LogicalKey.CONVERSATION_LIST)
        validated = await filter_genuine_entries(
            raw, self.settings.min_entry_width, self.settings.min_entry_height
        )
        logging.info("conversation_scan raw=%s valid=%s", len(raw), len(validated))
        if raw and not validated:
            for idx, node in enumerate(raw[:3]):
                try:
                    description = await node.describe()
                except Exception as exc:  # noqa: BLE001
                    description = f"<unavailable {exc!r}>"
                logging.warning("conversation_rejected idx=%s node=%s", idx, description)
        return validated

    async def switch_to_conversation(self, index: int) -> bool:
        conversations = await self.conversations()
        if not conversations:
            logging.warning("conversation_switch_failed reason=no_conversations")
            return False
        if index < 0 or index >= len(conversations):
            logging.warning(
                "conversation_switch_failed reason=out_of_range index=%s available=%s", index, len(conversations)
            )
            return False

        try:
            await conversations[index].click()
        except Exception as exc:  # noqa: BLE001
            logging.warning("conversation_switch_failed reason=click_error index=%s error=%r", index, exc)
            return False
        logging.info("conversation_switched number=%s", index + 1)
        return True

    async def previous_conversation(self) -> bool:
        conversations = await self.conversations()
        active = await self.resolver.resolve_one(LogicalKey.ACTIVE_CONVERSATION)
        target = previous_index(conversations, await active_index(conversations, active))
        if target is None:
            return False
        return await self.switch_to_conversation(target)

    async def next_conversation(self) -> bool:
        conversations = await self.conversations()
        active = await self.resolver.resolve_one(LogicalKey.ACTIVE_CONVERSATION)
        target = next_index(conversations, await active_index(conversations, active))
        if target is None:
            return False
        return await self.switch_to_conversation(target)

    async def handle_escape(self) -> bool:
        """Leave the search box for the composer, or just focus the composer."""

        search_input = await self.resolver.resolve_one(LogicalKey.SEARCH_INPUT)
        if search_input is not None and await self._is_focused(search_input):
            try:
                await search_input.blur()
            except Exception as exc:  # noqa: BLE001
                logging.warning("shortcut_blur_failed target=search_input error=%r", exc)
            focused = await self.focus_message_input()
            logging.info("shortcut_escaped_search message_input_focused=%s", focused)
            return True

        return await self.focus_message_input()

    async def _is_focused(self, node: DocumentNode) -> bool:
        try:
            active = await self.resolver.document.active_element()
            return active is not None and await active.is_same_node(node)
        except Exception as exc:  # noqa: BLE001
            logging.debug("focus_check_failed error=%r", exc)
            return False
