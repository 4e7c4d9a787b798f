"""dispatch-prompt: command-line overlay for inline parse errors and suggestions."""

import logging

# Engine bridge
from dispatch_prompt.bridge import (
    CommandDispatcher,
    ParseErrorOutcome,
    ParseOutcome,
    SuggestBridge,
    Suggestion,
    SuggestionsOutcome,
)

# Keybindings
from dispatch_prompt.keybindings import (
    DEFAULT_PROMPT_KEYBINDINGS,
    PromptAction,
    PromptKeybindingsManager,
    get_prompt_keybindings,
    set_prompt_keybindings,
)

# Keyboard input handling
from dispatch_prompt.keys import Key, KeyId, matches_key, parse_key

# Line editing
from dispatch_prompt.line_editor import LineEditor

# Reference engine
from dispatch_prompt.literal import CommandSyntaxError, LiteralDispatcher

# Overlay state
from dispatch_prompt.navigator import SuggestionNavigator
from dispatch_prompt.overlay import OverlayTracker
from dispatch_prompt.panel import ERROR_PANEL_HEIGHT, render_panel

# Session
from dispatch_prompt.prompt import Prompt, PromptHandle, PromptOptions, init_prompt
from dispatch_prompt.renderer import PromptRenderer, RenderState
from dispatch_prompt.router import InputRouter

# Input buffering
from dispatch_prompt.stdin_buffer import StdinBuffer

# Terminal
from dispatch_prompt.terminal import StreamTerminal, Terminal
from dispatch_prompt.theme import (
    DEFAULT_PROMPT,
    DEFAULT_PROMPT_TEXT,
    DEFAULT_THEME,
    PLAIN_THEME,
    PromptTheme,
)

# Utilities
from dispatch_prompt.utils import strip_ansi, truncate_to_width, visible_width

__all__ = [
    # Bridge
    "CommandDispatcher",
    "ParseErrorOutcome",
    "ParseOutcome",
    "SuggestBridge",
    "Suggestion",
    "SuggestionsOutcome",
    # Keybindings
    "DEFAULT_PROMPT_KEYBINDINGS",
    "PromptAction",
    "PromptKeybindingsManager",
    "get_prompt_keybindings",
    "set_prompt_keybindings",
    # Keys
    "Key",
    "KeyId",
    "matches_key",
    "parse_key",
    # Line editing
    "LineEditor",
    # Reference engine
    "CommandSyntaxError",
    "LiteralDispatcher",
    # Overlay state
    "ERROR_PANEL_HEIGHT",
    "OverlayTracker",
    "SuggestionNavigator",
    "render_panel",
    # Session
    "InputRouter",
    "Prompt",
    "PromptHandle",
    "PromptOptions",
    "PromptRenderer",
    "RenderState",
    "init_prompt",
    # Stdin buffer
    "StdinBuffer",
    # Terminal
    "StreamTerminal",
    "Terminal",
    # Theme
    "DEFAULT_PROMPT",
    "DEFAULT_PROMPT_TEXT",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "PromptTheme",
    # Utilities
    "strip_ansi",
    "truncate_to_width",
    "visible_width",
]

# Records stay off the screen the prompt draws on unless the host configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
