import asyncio
import logging

import pytest

from messenger_shortcuts.models import ActionEvent, LogicalKey
from messenger_shortcuts.shortcuts.dispatcher import ShortcutDispatcher
from messenger_shortcuts.shortcuts.handlers import ShortcutHandlers
from messenger_shortcuts.shortcuts.resolver import ElementResolver
from messenger_shortcuts.shortcuts.strategies import MESSENGER_STRATEGIES


class RecordingHandlers:
    def __init__(self, results=None, should_raise=False):
        self.calls = []
        self.results = results or {}
        self.should_raise = should_raise

    async def _record(self, name, *args):
        self.calls.append((name, *args))
        if self.should_raise:
            raise RuntimeError("handler blew up")
        return self.results.get(name, True)

    async def focus_search(self):
        return await self._record("focus_search")

    async def focus_message_input(self):
        return await self._record("focus_message_input")

    async def switch_to_conversation(self, index):
        return await self._record("switch_to_conversation", index)

    async def previous_conversation(self):
        return await self._record("previous_conversation")

    async def next_conversation(self):
        return await self._record("next_conversation")

    async def handle_escape(self):
        return await self._record("handle_escape")


@pytest.mark.parametrize(
    "action,args,expected",
    [
        ("focus-search", [], ("focus_search",)),
        ("focus-message-input", [], ("focus_message_input",)),
        ("switch-conversation", [3], ("switch_to_conversation", 2)),
        ("switch-conversation", ["1"], ("switch_to_conversation", 0)),
        ("previous-conversation", [], ("previous_conversation",)),
        ("next-conversation", [], ("next_conversation",)),
        ("escape", [], ("handle_escape",)),
    ],
)
def test_actions_map_to_handlers(action, args, expected):
    handlers = RecordingHandlers()
    dispatcher = ShortcutDispatcher(handlers)

    assert asyncio.run(dispatcher.dispatch(action, args)) is True
    assert handlers.calls == [expected]


def test_unknown_action_is_logged_and_ignored(caplog):
    handlers = RecordingHandlers()
    dispatcher = ShortcutDispatcher(handlers)

    assert asyncio.run(dispatcher.dispatch("toggle-dark-mode", [])) is False
    assert handlers.calls == []
    assert any("shortcut_unknown action=toggle-dark-mode" in record.message for record in caplog.records)


@pytest.mark.parametrize("args", [[], ["three"], [None], [True], [False]])
def test_malformed_switch_arguments_fail(args):
    handlers = RecordingHandlers()
    dispatcher = ShortcutDispatcher(handlers)

    assert asyncio.run(dispatcher.dispatch("switch-conversation", args)) is False
    assert handlers.calls == []


def test_handler_exceptions_do_not_escape(caplog):
    dispatcher = ShortcutDispatcher(RecordingHandlers(should_raise=True))

    assert asyncio.run(dispatcher.dispatch("focus-search")) is False
    assert any("shortcut_handler_error" in record.message for record in caplog.records)


def test_queue_is_processed_in_arrival_order():
    handlers = RecordingHandlers()

    async def scenario():
        dispatcher = ShortcutDispatcher(handlers)
        worker = asyncio.create_task(dispatcher.run())
        for event in [
            ActionEvent("focus-search"),
            ActionEvent("switch-conversation", [2]),
            ActionEvent("unknown"),
            ActionEvent("escape"),
        ]:
            dispatcher.submit(event)
        await dispatcher.queue.join()
        worker.cancel()
        with pytest.raises(asyncio.CancelledError):
            await worker

    asyncio.run(scenario())

    assert handlers.calls == [("focus_search",), ("switch_to_conversation", 1), ("handle_escape",)]


def test_switch_past_the_end_leaves_the_page_alone(messenger_page, caplog):
    caplog.set_level(logging.INFO)
    page = messenger_page()
    dispatcher = ShortcutDispatcher(ShortcutHandlers(ElementResolver(page.document)))

    assert asyncio.run(dispatcher.dispatch("switch-conversation", [5])) is False
    assert page.document.events == []
    assert any("out_of_range index=4 available=3" in record.message for record in caplog.records)


def test_first_conversation_shortcut_clicks_first_row(messenger_page):
    page = messenger_page()
    dispatcher = ShortcutDispatcher(ShortcutHandlers(ElementResolver(page.document)))

    assert asyncio.run(dispatcher.dispatch("switch-conversation", [1])) is True
    assert page.document.events == [("click", page.rows[0])]


class ThrowingStrategy:
    name = "throwing"

    async def query(self, _document):
        raise RuntimeError("boom")


def test_message_input_failure_is_reported_not_raised(messenger_page):
    page = messenger_page()
    strategies = dict(MESSENGER_STRATEGIES)
    strategies[LogicalKey.MESSAGE_INPUT] = [ThrowingStrategy(), ThrowingStrategy()]
    dispatcher = ShortcutDispatcher(ShortcutHandlers(ElementResolver(page.document, strategies)))

    assert asyncio.run(dispatcher.dispatch("focus-message-input")) is False
    assert page.document.events == []
