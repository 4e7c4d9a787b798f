"""LiteralDispatcher - a word-tree command engine for demos and embedding.

Commands are registered as space-separated literal words (``"git push"``).
A line parses cleanly while every finished word names a registered child of
the word before it; the word under the cursor is completed against those
children.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

CommandAction = Callable[[list[str]], Any]


class CommandSyntaxError(Exception):
    """A line that does not name a registered command."""

    def __init__(self, message: str, cursor: int) -> None:
        super().__init__(f"{message} at position {cursor}")
        self.message = message
        self.cursor = cursor


@dataclass(frozen=True)
class StringRange:
    start: int
    end: int


@dataclass(frozen=True)
class LiteralSuggestion:
    text: str
    range: StringRange


@dataclass
class _Node:
    children: dict[str, _Node] = field(default_factory=dict)
    action: CommandAction | None = None
    executable: bool = False


@dataclass
class LiteralParse:
    line: str
    path: list[str]
    node: _Node
    partial: str
    partial_start: int
    exceptions: dict[int, CommandSyntaxError] = field(default_factory=dict)


class LiteralDispatcher:
    """Registers literal word paths and parses, completes and runs lines."""

    def __init__(self) -> None:
        self._root = _Node()

    def register(self, command: str, action: CommandAction | None = None) -> None:
        words = command.split()
        if not words:
            raise ValueError("command must contain at least one word")
        node = self._root
        for word in words:
            node = node.children.setdefault(word, _Node())
        node.executable = True
        node.action = action

    def parse(self, line: str, source: Any = None) -> LiteralParse:
        node = self._root
        path: list[str] = []
        pos = 0

        while True:
            space = line.find(" ", pos)
            if space == -1:
                break
            word = line[pos:space]
            child = node.children.get(word)
            if child is None:
                message = "Unknown command" if not path else "Incorrect argument"
                error = CommandSyntaxError(message, pos)
                return LiteralParse(line, path, node, line[pos:], pos, {pos: error})
            path.append(word)
            node = child
            pos = space + 1

        return LiteralParse(line, path, node, line[pos:], pos)

    def get_completion_suggestions(self, parse: LiteralParse) -> list[LiteralSuggestion]:
        if parse.exceptions:
            return []
        prefix = parse.partial.lower()
        end = len(parse.line)
        return [
            LiteralSuggestion(name, StringRange(parse.partial_start, end))
            for name in sorted(parse.node.children)
            if name.lower().startswith(prefix)
        ]

    def execute(self, parse: LiteralParse) -> Any:
        if parse.exceptions:
            raise next(iter(parse.exceptions.values()))

        node, path = parse.node, list(parse.path)
        if parse.partial:
            child = node.children.get(parse.partial)
            if child is None:
                message = "Unknown command" if not path else "Incorrect argument"
                raise CommandSyntaxError(message, parse.partial_start)
            node = child
            path.append(parse.partial)

        if not node.executable:
            raise CommandSyntaxError("Unknown or incomplete command", len(parse.line))
        if node.action is not None:
            return node.action(path)
        return None
