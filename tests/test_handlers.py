import asyncio

from messenger_shortcuts.models import LogicalKey
from messenger_shortcuts.shortcuts.handlers import ShortcutHandlers
from messenger_shortcuts.shortcuts.memory_document import MemoryNode
from messenger_shortcuts.shortcuts.resolver import ElementResolver
from messenger_shortcuts.shortcuts.strategies import MESSENGER_STRATEGIES


def _handlers(page, strategies=MESSENGER_STRATEGIES):
    return ShortcutHandlers(ElementResolver(page.document, strategies))


def test_focus_search_focuses_and_clicks(messenger_page):
    page = messenger_page()

    assert asyncio.run(_handlers(page).focus_search()) is True
    assert page.document.events == [("focus", page.search), ("click", page.search)]
    assert page.document.focused is page.search


def test_focus_message_input(messenger_page):
    page = messenger_page()

    assert asyncio.run(_handlers(page).focus_message_input()) is True
    assert page.document.focused is page.composer


def test_switch_to_conversation_clicks_the_nth_row(messenger_page):
    page = messenger_page()

    assert asyncio.run(_handlers(page).switch_to_conversation(1)) is True
    assert page.document.events == [("click", page.rows[1])]


def test_switch_out_of_range_does_not_touch_the_page(messenger_page):
    page = messenger_page()
    handlers = _handlers(page)

    assert asyncio.run(handlers.switch_to_conversation(4)) is False
    assert asyncio.run(handlers.switch_to_conversation(-1)) is False
    assert page.document.events == []


def test_switch_with_no_conversations_fails(messenger_page, caplog):
    page = messenger_page(names=())

    assert asyncio.run(_handlers(page).switch_to_conversation(0)) is False
    assert page.document.events == []
    assert any("no_conversations" in record.message for record in caplog.records)


def test_rejected_rows_are_described_in_the_log(messenger_page, caplog):
    page = messenger_page()
    for row in page.rows:
        row.width = 20

    assert asyncio.run(_handlers(page).switch_to_conversation(0)) is False
    rejected = [record.message for record in caplog.records if "conversation_rejected" in record.message]
    assert len(rejected) == 3
    assert "A no label" in rejected[0]


def test_next_and_previous_from_active_row(messenger_page):
    page = messenger_page(active="Bob")
    handlers = _handlers(page)

    assert asyncio.run(handlers.next_conversation()) is True
    assert asyncio.run(handlers.previous_conversation()) is True
    assert page.document.events == [("click", page.rows[2]), ("click", page.rows[0])]


def test_navigation_wraps_around(messenger_page):
    page = messenger_page(active="Carol")
    handlers = _handlers(page)

    asyncio.run(handlers.next_conversation())
    page.rows[2].attributes["aria-current"] = "false"
    page.rows[0].attributes["aria-current"] = "page"
    asyncio.run(handlers.previous_conversation())

    assert page.document.events == [("click", page.rows[0]), ("click", page.rows[2])]


def test_navigation_without_active_row(messenger_page):
    page = messenger_page(active=None)
    handlers = _handlers(page)

    asyncio.run(handlers.next_conversation())
    asyncio.run(handlers.previous_conversation())

    assert page.document.events == [("click", page.rows[0]), ("click", page.rows[-1])]


def test_navigation_on_empty_list_fails(messenger_page):
    page = messenger_page(names=())
    handlers = _handlers(page)

    assert asyncio.run(handlers.next_conversation()) is False
    assert asyncio.run(handlers.previous_conversation()) is False
    assert page.document.events == []


def test_escape_from_search_moves_to_composer(messenger_page):
    page = messenger_page()
    page.document.focused = page.search

    assert asyncio.run(_handlers(page).handle_escape()) is True
    assert page.document.events == [
        ("blur", page.search),
        ("focus", page.composer),
        ("click", page.composer),
    ]
    assert page.document.focused is page.composer


def test_escape_elsewhere_just_focuses_composer(messenger_page):
    page = messenger_page()

    assert asyncio.run(_handlers(page).handle_escape()) is True
    assert page.document.events == [("focus", page.composer), ("click", page.composer)]


class ExplodingStrategy:
    def __init__(self, name):
        self.name = name

    async def query(self, _document):
        raise RuntimeError("document mid-mutation")


def test_focus_message_input_fails_when_every_strategy_throws(messenger_page):
    page = messenger_page()
    strategies = dict(MESSENGER_STRATEGIES)
    strategies[LogicalKey.MESSAGE_INPUT] = [ExplodingStrategy(f"broken_{i}") for i in range(3)]

    assert asyncio.run(_handlers(page, strategies).focus_message_input()) is False
    assert page.document.events == []


class DetachingNode(MemoryNode):
    async def click(self):
        raise RuntimeError("Element is not attached to the DOM")


def test_side_effect_errors_become_failures(messenger_page):
    page = messenger_page()
    ghost = DetachingNode("input", {"aria-label": "Search Messenger"})
    page.search.detach()
    page.document.body.append(ghost)

    assert asyncio.run(_handlers(page).focus_search()) is False
