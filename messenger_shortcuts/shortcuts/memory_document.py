from __future__ import annotations
"""In-memory document tree with the same async surface as the browser binding."""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from .document import BoundingBox, Selector


@dataclass(eq=False)
class MemoryNode:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""
    width: float = 200.0
    height: float = 48.0
    rendered: bool = True
    children: list["MemoryNode"] = field(default_factory=list)
    parent: Optional["MemoryNode"] = field(default=None, repr=False)
    document: Optional["MemoryDocument"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    def append(self, *children: "MemoryNode") -> "MemoryNode":
        for child in children:
            child.parent = self
            self.children.append(child)
        return self

    def detach(self) -> None:
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def ancestors(self) -> Iterator["MemoryNode"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def descendants(self) -> Iterator["MemoryNode"]:
        for child in self.children:
            yield child
            yield from child.descendants()

    def matches(self, selector: Selector) -> bool:
        if not selector.matches_element(self.tag, self.attributes):
            return False
        if selector.ancestor is None:
            return True
        return any(node.matches(selector.ancestor) for node in self.ancestors())

    def _owner(self) -> Optional["MemoryDocument"]:
        root = self
        for root in self.ancestors():
            pass
        return root.document

    async def text_content(self) -> str:
        return self.text + "".join([await child.text_content() for child in self.children])

    async def bounding_box(self) -> Optional[BoundingBox]:
        if not await self.is_visible():
            return None
        return BoundingBox(x=0.0, y=0.0, width=self.width, height=self.height)

    async def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    async def is_visible(self) -> bool:
        if self._owner() is None:
            return False
        return self.rendered and all(node.rendered for node in self.ancestors())

    async def contains(self, other: "MemoryNode") -> bool:
        return other is self or any(node is self for node in other.ancestors())

    async def is_same_node(self, other: "MemoryNode") -> bool:
        return other is self

    async def closest(self, selector: Selector) -> Optional["MemoryNode"]:
        if self.matches(selector):
            return self
        for node in self.ancestors():
            if node.matches(selector):
                return node
        return None

    async def query_one(self, selector: Selector) -> Optional["MemoryNode"]:
        return next((node for node in self.descendants() if node.matches(selector)), None)

    async def query_all(self, selector: Selector) -> list["MemoryNode"]:
        return [node for node in self.descendants() if node.matches(selector)]

    async def focus(self) -> None:
        owner = self._owner()
        if owner is not None:
            owner.focused = self
            owner.events.append(("focus", self))

    async def click(self) -> None:
        owner = self._owner()
        if owner is not None:
            owner.events.append(("click", self))

    async def blur(self) -> None:
        owner = self._owner()
        if owner is not None:
            if owner.focused is self:
                owner.focused = None
            owner.events.append(("blur", self))

    async def describe(self) -> str:
        return f"{self.tag.upper()} {self.attributes.get('aria-label') or 'no label'}"


class MemoryDocument:
    """Fixture tree; records focus, click and blur in ``events``."""

    def __init__(self, *children: MemoryNode) -> None:
        self.root = MemoryNode("html", document=self)
        self.body = MemoryNode("body")
        self.root.append(self.body)
        self.body.append(*children)
        self.focused: Optional[MemoryNode] = None
        self.events: list[tuple[str, MemoryNode]] = []

    async def query_one(self, selector: Selector) -> Optional[MemoryNode]:
        return await self.root.query_one(selector)

    async def query_all(self, selector: Selector) -> list[MemoryNode]:
        return await self.root.query_all(selector)

    async def active_element(self) -> Optional[MemoryNode]:
        return self.focused
