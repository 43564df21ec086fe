from __future__ import annotations
"""Lookup strategies for messenger.com, ordered from most to least stable.

ARIA attributes first, then data attributes, then document structure. The
page ships no stable identifiers, so every key carries fallbacks.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, Sequence, Union

from ..models import LogicalKey
from .document import Document, DocumentNode, Selector, attr, select, without


class Strategy(Protocol):
    name: str

    async def query(self, document: Document) -> Union[Optional[DocumentNode], Sequence[DocumentNode]]: ...


StrategySet = Mapping[LogicalKey, Sequence[Strategy]]


@dataclass(frozen=True)
class FirstMatch:
    """Singular lookup; with ``outside`` set, skips matches inside that region."""

    name: str
    selector: Selector
    outside: Optional[Selector] = None

    async def query(self, document: Document) -> Optional[DocumentNode]:
        if self.outside is None:
            return await document.query_one(self.selector)
        for node in await document.query_all(self.selector):
            if await node.closest(self.outside) is None:
                return node
        return None


@dataclass(frozen=True)
class AllMatches:
    """List lookup; with ``containers`` set, searches the first container found."""

    name: str
    selector: Selector
    containers: tuple[Selector, ...] = ()

    async def query(self, document: Document) -> list[DocumentNode]:
        if not self.containers:
            return list(await document.query_all(self.selector))
        for container_selector in self.containers:
            container = await document.query_one(container_selector)
            if container is not None:
                return list(await container.query_all(self.selector))
        return []


BANNER = select(None, attr("role", "banner"))

SEARCH_INPUT_STRATEGIES: tuple[FirstMatch, ...] = (
    FirstMatch("search_messenger_label", select(None, attr("aria-label", "Search Messenger", ignore_case=True))),
    FirstMatch(
        "search_label_outside_banner",
        select(None, attr("aria-label", "Search", contains=True, ignore_case=True)),
        outside=BANNER,
    ),
    FirstMatch(
        "search_placeholder_outside_banner",
        select("input", attr("placeholder", "Search", contains=True, ignore_case=True)),
        outside=BANNER,
    ),
    FirstMatch("search_role_input", select("input", within=select(None, attr("role", "search")))),
    FirstMatch("search_type_input", select("input", attr("type", "search")), outside=BANNER),
)

MESSAGE_INPUT_STRATEGIES: tuple[FirstMatch, ...] = (
    FirstMatch(
        "message_label_textbox",
        select(None, attr("aria-label", "Message", contains=True, ignore_case=True), attr("role", "textbox")),
    ),
    FirstMatch("editable_textbox", select(None, attr("role", "textbox"), attr("contenteditable", "true"))),
    FirstMatch("type_a_message_label", select(None, attr("aria-label", "Type a message", contains=True, ignore_case=True))),
    FirstMatch(
        "lexical_editor",
        select(None, attr("contenteditable", "true"), attr("data-lexical-editor", "true")),
    ),
    FirstMatch("any_contenteditable", select(None, attr("contenteditable", "true"))),
)

CONVERSATION_LIST_STRATEGIES: tuple[AllMatches, ...] = (
    # Sidebar nav links carry aria-label; conversation rows do not.
    AllMatches("current_links_without_label", select("a", attr("aria-current"), without("aria-label"))),
    AllMatches("thread_links", select("a", attr("href", "/t/", contains=True))),
    AllMatches(
        "chat_container_current_links",
        select("a", attr("aria-current")),
        containers=(
            select(None, attr("aria-label", "Chats", contains=True, ignore_case=True)),
            select(None, attr("aria-label", "Chat list", contains=True, ignore_case=True)),
            select(None, attr("aria-label", "conversations", contains=True, ignore_case=True)),
        ),
    ),
    AllMatches("list_role_links", select("a"), containers=(select(None, attr("role", "list")),)),
)

ACTIVE_CONVERSATION_STRATEGIES: tuple[FirstMatch, ...] = (
    FirstMatch("current_page_link", select("a", attr("aria-current", "page"))),
    FirstMatch("current_page_role_link", select("a", attr("role", "link"), attr("aria-current", "page"))),
)

MESSENGER_STRATEGIES: dict[LogicalKey, Sequence[Strategy]] = {
    LogicalKey.SEARCH_INPUT: SEARCH_INPUT_STRATEGIES,
    LogicalKey.MESSAGE_INPUT: MESSAGE_INPUT_STRATEGIES,
    LogicalKey.CONVERSATION_LIST: CONVERSATION_LIST_STRATEGIES,
    LogicalKey.ACTIVE_CONVERSATION: ACTIVE_CONVERSATION_STRATEGIES,
}


def strategy_names(strategy_set: StrategySet) -> dict[str, list[str]]:
    return {key.value: [strategy.name for strategy in strategies] for key, strategies in strategy_set.items()}
