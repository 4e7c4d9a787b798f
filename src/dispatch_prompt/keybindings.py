"""Prompt keybindings manager."""

from __future__ import annotations

from typing import Literal

from dispatch_prompt.keys import Key, KeyId, matches_key

PromptAction = Literal[
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorWordLeft",
    "cursorWordRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
    "deleteCharForward",
    "deleteWordBackward",
    "deleteToLineStart",
    "deleteToLineEnd",
    # Line
    "submit",
    "interrupt",
    # Suggestions
    "acceptSuggestion",
    "previousSuggestion",
    "nextSuggestion",
]

PromptKeybindingsConfig = dict[PromptAction, KeyId | list[KeyId]]

DEFAULT_PROMPT_KEYBINDINGS: dict[PromptAction, KeyId | list[KeyId]] = {
    # Cursor movement
    "cursorLeft": [Key.left, Key.ctrl("b")],
    "cursorRight": [Key.right, Key.ctrl("f")],
    "cursorWordLeft": [Key.alt(Key.left), Key.ctrl(Key.left)],
    "cursorWordRight": [Key.alt(Key.right), Key.ctrl(Key.right)],
    "cursorLineStart": [Key.home, Key.ctrl("a")],
    "cursorLineEnd": [Key.end, Key.ctrl("e")],
    # Deletion
    "deleteCharBackward": Key.backspace,
    "deleteCharForward": [Key.delete, Key.ctrl("d")],
    "deleteWordBackward": [Key.ctrl("w"), Key.alt(Key.backspace)],
    "deleteToLineStart": Key.ctrl("u"),
    "deleteToLineEnd": Key.ctrl("k"),
    # Line
    "submit": Key.enter,
    "interrupt": Key.ctrl("c"),
    # Suggestions: Left/Right also move the cursor
    "acceptSuggestion": Key.tab,
    "previousSuggestion": Key.left,
    "nextSuggestion": Key.right,
}


class PromptKeybindingsManager:
    """Maps prompt actions to the keys that trigger them."""

    def __init__(self, config: PromptKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[PromptAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: PromptKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for source in (DEFAULT_PROMPT_KEYBINDINGS, config):
            for action, keys in source.items():
                key_array = keys if isinstance(keys, list) else [keys]
                self._action_to_keys[action] = list(key_array)

    def matches(self, data: str, action: PromptAction) -> bool:
        """Check if input matches a specific action."""
        return any(matches_key(data, key) for key in self._action_to_keys.get(action, []))


_global_prompt_keybindings: PromptKeybindingsManager | None = None


def get_prompt_keybindings() -> PromptKeybindingsManager:
    global _global_prompt_keybindings
    if _global_prompt_keybindings is None:
        _global_prompt_keybindings = PromptKeybindingsManager()
    return _global_prompt_keybindings


def set_prompt_keybindings(manager: PromptKeybindingsManager) -> None:
    global _global_prompt_keybindings
    _global_prompt_keybindings = manager
