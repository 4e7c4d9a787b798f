"""Keyboard input parsing for raw terminal sequences.

Maps the legacy escape sequences and control bytes a terminal sends in raw
mode to key identifiers such as ``"tab"``, ``"ctrl+c"`` or ``"alt+left"``.
"""

from __future__ import annotations

KeyId = str


class Key:
    """Key ids the prompt binds, plus ``ctrl``/``alt`` combinators.

    ``Key.ctrl("c")`` gives ``"ctrl+c"``, the id :func:`parse_key` returns
    for byte 0x03.
    """

    tab = "tab"
    enter = "enter"
    backspace = "backspace"
    delete = "delete"
    home = "home"
    end = "end"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# ---------------------------------------------------------------------------
# Legacy escape sequences
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
}

LEGACY_CTRL_SEQUENCES: dict[str, str] = {
    "\x1b[1;5A": "up",
    "\x1b[1;5B": "down",
    "\x1b[1;5C": "right",
    "\x1b[1;5D": "left",
    "\x1b[1;5H": "home",
    "\x1b[1;5F": "end",
    "\x1b[3;5~": "delete",
}

LEGACY_ALT_SEQUENCES: dict[str, str] = {
    "\x1b[1;3A": "up",
    "\x1b[1;3B": "down",
    "\x1b[1;3C": "right",
    "\x1b[1;3D": "left",
    "\x1b[3;3~": "delete",
    # Option+arrow on macOS terminals
    "\x1bb": "left",
    "\x1bf": "right",
}

LEGACY_SHIFT_SEQUENCES: dict[str, str] = {
    "\x1b[1;2A": "up",
    "\x1b[1;2B": "down",
    "\x1b[1;2C": "right",
    "\x1b[1;2D": "left",
    "\x1b[Z": "tab",
}


# ---------------------------------------------------------------------------
# parse_key / matches_key
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:  # noqa: C901
    """Parse raw terminal input and return the key identifier, or ``None``.

    Printable text (a single character or a pasted run) is not a key and
    yields ``None`` unless it is one character long.
    """
    if not data:
        return None

    for seq_dict, mod_prefix in (
        (LEGACY_CTRL_SEQUENCES, "ctrl+"),
        (LEGACY_ALT_SEQUENCES, "alt+"),
        (LEGACY_SHIFT_SEQUENCES, "shift+"),
        (LEGACY_KEY_SEQUENCES, ""),
    ):
        if data in seq_dict:
            return mod_prefix + seq_dict[data]

    if data == "\x1b":
        return "escape"
    if data in ("\r", "\n", "\r\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data in ("\x7f", "\x08"):
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # Ctrl + letter (0x01 - 0x1a)
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # Alt + key (ESC prefix)
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch in ("\x7f", "\x08"):
            return "alt+backspace"
        if ch in ("\r", "\n"):
            return "alt+enter"
        if 1 <= ord(ch) <= 26:
            return "ctrl+alt+" + chr(ord(ch) + ord("a") - 1)
        if ch.isprintable():
            return "alt+" + ch.lower()

    if len(data) == 1 and data.isprintable():
        return data

    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if *data* (raw terminal input) is the key *key_id*."""
    parsed = parse_key(data)
    return parsed is not None and parsed == key_id
