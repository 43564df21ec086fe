from __future__ import annotations

import logging
from typing import Sequence

from ..config import settings
from .document import DocumentNode

MORE_OPTIONS_LABEL = "More options"


def is_more_options_label(label: str | None) -> bool:
    return label is not None and MORE_OPTIONS_LABEL in label


async def is_genuine_entry(
    node: DocumentNode,
    min_width: float | None = None,
    min_height: float | None = None,
) -> bool:
    """Tell a conversation row apart from nav links and icon buttons.

    Rows have a visible name, a real size and no aria-label; the left nav
    rail labels every link. The "More options" check is case-sensitive.
    """

    min_width = settings.min_entry_width if min_width is None else min_width
    min_height = settings.min_entry_height if min_height is None else min_height

    try:
        text = await node.text_content()
        box = await node.bounding_box()
        label = await node.get_attribute("aria-label")
    except Exception as exc:  # noqa: BLE001
        logging.debug("entry_validation_failed error=%r", exc)
        return False

    has_text = bool(text.strip())
    has_size = box is not None and box.width > min_width and box.height > min_height
    has_label = label is not None
    is_more_button = is_more_options_label(label)

    return has_text and has_size and not has_label and not is_more_button


async def filter_genuine_entries(
    candidates: Sequence[DocumentNode],
    min_width: float | None = None,
    min_height: float | None = None,
) -> list[DocumentNode]:
    return [node for node in candidates if await is_genuine_entry(node, min_width, min_height)]
