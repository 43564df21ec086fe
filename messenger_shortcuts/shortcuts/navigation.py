from __future__ import annotations

import logging
from typing import Optional, Sequence

from .document import DocumentNode


async def _same_entry(entry: DocumentNode, active: DocumentNode) -> bool:
    # The clickable row and the node flagged as selected may be a wrapper
    # and its inner link, in either direction.
    if await entry.is_same_node(active):
        return True
    if await entry.contains(active):
        return True
    return await active.contains(entry)


async def active_index(validated: Sequence[DocumentNode], active_node: Optional[DocumentNode]) -> int:
    """Position of the active conversation among ``validated``, or -1."""

    if active_node is None or not validated:
        return -1

    try:
        for index, entry in enumerate(validated):
            if await _same_entry(entry, active_node):
                return index

        for index, entry in enumerate(validated):
            if await entry.get_attribute("aria-current") == "page":
                return index
    except Exception as exc:  # noqa: BLE001
        logging.debug("active_index_failed error=%r", exc)

    return -1


def previous_index(validated: Sequence[DocumentNode], current_index: int) -> Optional[int]:
    if not validated:
        return None
    if current_index <= 0:
        return len(validated) - 1
    return current_index - 1


def next_index(validated: Sequence[DocumentNode], current_index: int) -> Optional[int]:
    if not validated:
        return None
    if current_index < 0 or current_index >= len(validated) - 1:
        return 0
    return current_index + 1
