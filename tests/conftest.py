from dataclasses import dataclass

import pytest

from messenger_shortcuts.shortcuts.memory_document import MemoryDocument, MemoryNode


@dataclass
class MessengerPage:
    document: MemoryDocument
    search: MemoryNode
    composer: MemoryNode
    nav_link: MemoryNode
    rows: list


def build_messenger_page(names=("Alice", "Bob", "Carol"), active=None) -> MessengerPage:
    """Rough shape of messenger.com: nav rail, chat list, composer."""

    nav_link = MemoryNode("a", {"aria-label": "Chats", "aria-current": "page", "href": "/"}, text="Chats", width=40, height=40)
    nav = MemoryNode("div", {"role": "navigation"}, children=[nav_link])

    rows = []
    for idx, name in enumerate(names):
        current = "page" if name == active else "false"
        row = MemoryNode("a", {"aria-current": current, "href": f"/t/{1000 + idx}", "role": "link"}, width=320, height=64)
        row.append(MemoryNode("span", text=name))
        row.append(MemoryNode("div", {"aria-label": f"More options for {name}", "role": "button"}, width=24, height=24))
        rows.append(row)
    chat_list = MemoryNode("div", {"aria-label": "Chats", "role": "grid"}, children=rows)

    search = MemoryNode("input", {"aria-label": "Search Messenger", "type": "search"}, width=280, height=36)
    composer = MemoryNode(
        "div",
        {"aria-label": "Message", "role": "textbox", "contenteditable": "true", "data-lexical-editor": "true"},
        width=600,
        height=40,
    )

    document = MemoryDocument(nav, MemoryNode("div", children=[search, chat_list]), composer)
    return MessengerPage(document=document, search=search, composer=composer, nav_link=nav_link, rows=rows)


@pytest.fixture
def messenger_page():
    return build_messenger_page
