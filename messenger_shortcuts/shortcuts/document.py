from __future__ import annotations
"""Document query capability consumed by the resolver, validator and handlers.

Strategies describe what they look for with ``Selector`` values instead of raw
CSS strings. The browser binding renders them with ``Selector.css()``; the
in-memory binding evaluates them against its own nodes with
``Selector.matches_element``. Both bindings expose the same async surface.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, Sequence


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class AttributeCondition:
    name: str
    value: Optional[str] = None
    contains: bool = False
    ignore_case: bool = False
    negated: bool = False

    def css(self) -> str:
        if self.value is None:
            inner = f"[{self.name}]"
        else:
            operator = "*=" if self.contains else "="
            flag = " i" if self.ignore_case else ""
            inner = f"[{self.name}{operator}{_quote(self.value)}{flag}]"
        return f":not({inner})" if self.negated else inner

    def test(self, attributes: Mapping[str, str]) -> bool:
        actual = attributes.get(self.name)
        if actual is None:
            matched = False
        elif self.value is None:
            matched = True
        else:
            expected = self.value
            if self.ignore_case:
                actual, expected = actual.lower(), expected.lower()
            matched = expected in actual if self.contains else actual == expected
        return not matched if self.negated else matched


@dataclass(frozen=True)
class Selector:
    tag: Optional[str] = None
    conditions: tuple[AttributeCondition, ...] = ()
    ancestor: Optional["Selector"] = None

    def css(self) -> str:
        own = (self.tag or "") + "".join(cond.css() for cond in self.conditions)
        if not own:
            own = "*"
        if self.ancestor is not None:
            return f"{self.ancestor.css()} {own}"
        return own

    def matches_element(self, tag: str, attributes: Mapping[str, str]) -> bool:
        """Match the element itself, ignoring any ancestor constraint."""
        if self.tag and self.tag.lower() != tag.lower():
            return False
        return all(cond.test(attributes) for cond in self.conditions)

    def __str__(self) -> str:
        return self.css()


def select(tag: Optional[str] = None, *conditions: AttributeCondition, within: Optional[Selector] = None) -> Selector:
    return Selector(tag=tag, conditions=tuple(conditions), ancestor=within)


def attr(name: str, value: Optional[str] = None, *, contains: bool = False, ignore_case: bool = False) -> AttributeCondition:
    return AttributeCondition(name=name, value=value, contains=contains, ignore_case=ignore_case)


def without(name: str) -> AttributeCondition:
    return AttributeCondition(name=name, negated=True)


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float


class DocumentNode(Protocol):
    async def text_content(self) -> str: ...

    async def bounding_box(self) -> Optional[BoundingBox]: ...

    async def get_attribute(self, name: str) -> Optional[str]: ...

    async def is_visible(self) -> bool: ...

    async def contains(self, other: "DocumentNode") -> bool: ...

    async def is_same_node(self, other: "DocumentNode") -> bool: ...

    async def closest(self, selector: Selector) -> Optional["DocumentNode"]: ...

    async def query_one(self, selector: Selector) -> Optional["DocumentNode"]: ...

    async def query_all(self, selector: Selector) -> Sequence["DocumentNode"]: ...

    async def focus(self) -> None: ...

    async def click(self) -> None: ...

    async def blur(self) -> None: ...

    async def describe(self) -> str: ...


class Document(Protocol):
    async def query_one(self, selector: Selector) -> Optional[DocumentNode]: ...

    async def query_all(self, selector: Selector) -> Sequence[DocumentNode]: ...

    async def active_element(self) -> Optional[DocumentNode]: ...
