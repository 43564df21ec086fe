from __future__ import annotations

from typing import Optional

from playwright.async_api import ElementHandle, Page

from .document import BoundingBox, Selector


class PlaywrightNode:
    def __init__(self, handle: ElementHandle) -> None:
        self.handle = handle

    async def text_content(self) -> str:
        return (await self.handle.text_content()) or ""

    async def bounding_box(self) -> Optional[BoundingBox]:
        box = await self.handle.bounding_box()
        if not box:
            return None
        return BoundingBox(x=box["x"], y=box["y"], width=box["width"], height=box["height"])

    async def get_attribute(self, name: str) -> Optional[str]:
        return await self.handle.get_attribute(name)

    async def is_visible(self) -> bool:
        # Layout participation, not Playwright's is_visible(): a node inside a
        # display:none ancestor or detached from the tree has no offsetParent.
        return bool(await self.handle.evaluate("(el) => el.offsetParent !== null"))

    async def contains(self, other: "PlaywrightNode") -> bool:
        return bool(await self.handle.evaluate("(el, other) => el.contains(other)", other.handle))

    async def is_same_node(self, other: "PlaywrightNode") -> bool:
        return bool(await self.handle.evaluate("(el, other) => el === other", other.handle))

    async def closest(self, selector: Selector) -> Optional["PlaywrightNode"]:
        found = await self.handle.evaluate_handle("(el, sel) => el.closest(sel)", selector.css())
        element = found.as_element()
        return PlaywrightNode(element) if element else None

    async def query_one(self, selector: Selector) -> Optional["PlaywrightNode"]:
        handle = await self.handle.query_selector(selector.css())
        return PlaywrightNode(handle) if handle else None

    async def query_all(self, selector: Selector) -> list["PlaywrightNode"]:
        return [PlaywrightNode(handle) for handle in await self.handle.query_selector_all(selector.css())]

    async def focus(self) -> None:
        await self.handle.focus()

    async def click(self) -> None:
        # DOM click: no actionability wait, no synthetic pointer movement.
        await self.handle.evaluate("(el) => el.click()")

    async def blur(self) -> None:
        await self.handle.evaluate("(el) => el.blur()")

    async def describe(self) -> str:
        return await self.handle.evaluate(
            "(el) => `${el.tagName} ${el.getAttribute('aria-label') || 'no label'}`"
        )

    def __repr__(self) -> str:
        return f"PlaywrightNode({self.handle!r})"


class PlaywrightDocument:
    """Document capability bound to a live Playwright page."""

    def __init__(self, page: Page) -> None:
        self.page = page

    async def query_one(self, selector: Selector) -> Optional[PlaywrightNode]:
        handle = await self.page.query_selector(selector.css())
        return PlaywrightNode(handle) if handle else None

    async def query_all(self, selector: Selector) -> list[PlaywrightNode]:
        return [PlaywrightNode(handle) for handle in await self.page.query_selector_all(selector.css())]

    async def active_element(self) -> Optional[PlaywrightNode]:
        found = await self.page.evaluate_handle(
            "() => { const el = document.activeElement; return el && el !== document.body ? el : null; }"
        )
        element = found.as_element()
        return PlaywrightNode(element) if element else None
