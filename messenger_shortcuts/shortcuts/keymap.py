from __future__ import annotations
"""Host shortcut table and the in-page listener that forwards it.

Accelerators are written Electron style (``Mod+Alt+ArrowUp``). ``Mod`` is
Command on macOS and Control elsewhere. The listener canonicalises each
keydown the same way ``normalize_accelerator`` does and calls the exposed
binding with ``(action, ...args)``.
"""

import json
import sys
from dataclasses import dataclass, field
from typing import Any, Sequence

from ..models import ShortcutAction

MODIFIER_ORDER = ("ctrl", "meta", "alt", "shift")

MODIFIER_ALIASES = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "cmd": "meta",
    "command": "meta",
    "meta": "meta",
    "super": "meta",
    "alt": "alt",
    "option": "alt",
    "shift": "shift",
}

BINDING_NAME = "__messengerShortcut"


def default_mod_key() -> str:
    return "meta" if sys.platform == "darwin" else "ctrl"


def normalize_accelerator(accelerator: str, mod_key: str | None = None) -> str:
    mod_key = mod_key or default_mod_key()
    parts = [part.strip() for part in accelerator.split("+")]
    # "Mod++" style: a trailing empty part means the key itself is "+".
    if len(parts) > 1 and parts[-1] == "" and parts[-2] == "":
        parts = parts[:-2] + ["+"]
    if not parts or not parts[-1]:
        raise ValueError(f"accelerator has no key: {accelerator!r}")

    *modifier_names, key = parts
    modifiers: set[str] = set()
    for name in modifier_names:
        lowered = name.lower()
        if lowered in {"mod", "cmdorctrl", "commandorcontrol"}:
            modifiers.add(mod_key)
        elif lowered in MODIFIER_ALIASES:
            modifiers.add(MODIFIER_ALIASES[lowered])
        else:
            raise ValueError(f"unknown modifier {name!r} in {accelerator!r}")

    ordered = [name for name in MODIFIER_ORDER if name in modifiers]
    return "+".join(ordered + [key.lower()])


@dataclass(frozen=True)
class Keybinding:
    accelerator: str
    action: ShortcutAction
    args: tuple[Any, ...] = field(default_factory=tuple)


DEFAULT_KEYMAP: tuple[Keybinding, ...] = (
    Keybinding("Mod+K", ShortcutAction.FOCUS_SEARCH),
    Keybinding("Mod+F", ShortcutAction.FOCUS_SEARCH),
    Keybinding("Mod+L", ShortcutAction.FOCUS_MESSAGE_INPUT),
    *(Keybinding(f"Mod+{n}", ShortcutAction.SWITCH_CONVERSATION, (n,)) for n in range(1, 10)),
    Keybinding("Mod+Alt+ArrowUp", ShortcutAction.PREVIOUS_CONVERSATION),
    Keybinding("Ctrl+Shift+Tab", ShortcutAction.PREVIOUS_CONVERSATION),
    Keybinding("Mod+Alt+ArrowDown", ShortcutAction.NEXT_CONVERSATION),
    Keybinding("Ctrl+Tab", ShortcutAction.NEXT_CONVERSATION),
    Keybinding("Escape", ShortcutAction.ESCAPE),
)


def build_binding_table(bindings: Sequence[Keybinding], mod_key: str | None = None) -> dict[str, list[Any]]:
    """Canonical accelerator -> ``[action, *args]``; later bindings win."""

    table: dict[str, list[Any]] = {}
    for binding in bindings:
        table[normalize_accelerator(binding.accelerator, mod_key)] = [binding.action.value, *binding.args]
    return table


_LISTENER_TEMPLATE = """
(() => {
  const table = %(table)s;
  const order = [["ctrlKey", "ctrl"], ["metaKey", "meta"], ["altKey", "alt"], ["shiftKey", "shift"]];
  window.addEventListener("keydown", (event) => {
    if (!event.key) return;
    const parts = order.filter(([flag]) => event[flag]).map(([, name]) => name);
    const key = event.code && event.code.startsWith("Digit") ? event.code.slice(5) : event.key.toLowerCase();
    parts.push(key.toLowerCase());
    const entry = table[parts.join("+")];
    if (!entry) return;
    event.preventDefault();
    event.stopPropagation();
    const binding = window[%(binding)s];
    if (typeof binding === "function") {
      binding(...entry);
    }
  }, true);
})();
"""


def build_listener_script(
    bindings: Sequence[Keybinding] = DEFAULT_KEYMAP,
    binding_name: str = BINDING_NAME,
    mod_key: str | None = None,
) -> str:
    return _LISTENER_TEMPLATE % {
        "table": json.dumps(build_binding_table(bindings, mod_key), sort_keys=True),
        "binding": json.dumps(binding_name),
    }
