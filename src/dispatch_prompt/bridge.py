"""Bridge between the prompt and an external command-dispatch engine.

The engine owns the grammar: it parses a line into a parse result that
carries syntax exceptions, offers completion suggestions for that result and
executes it. :class:`SuggestBridge` turns one line into a
:data:`ParseOutcome` that the renderer can draw without knowing anything
about the engine.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Awaitable, Protocol, Sequence, Union

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Engine protocols
# ---------------------------------------------------------------------------


class SyntaxProblem(Protocol):
    """An exception reported by the engine for a line it could not parse."""

    message: str
    cursor: int


class StringRange(Protocol):
    """Span of the line a suggestion replaces; engines may also expose ``end``."""

    start: int


class EngineSuggestion(Protocol):
    text: str
    range: StringRange


class ParseResults(Protocol):
    """Parse result; ``exceptions`` maps nodes to problems, or lists them."""

    exceptions: Mapping[Any, SyntaxProblem] | Iterable[SyntaxProblem]


class CommandDispatcher(Protocol):
    def parse(self, line: str, source: Any) -> ParseResults: ...

    def get_completion_suggestions(
        self, parse: ParseResults
    ) -> Sequence[EngineSuggestion] | Awaitable[Sequence[EngineSuggestion]]: ...

    def execute(self, parse: ParseResults) -> Any: ...


# ---------------------------------------------------------------------------
# ParseOutcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Suggestion:
    """Text to splice over ``line[range_start:range_end]``.

    ``range_end`` is ``None`` when the engine reports no end; the splice then
    runs to the end of the line.
    """

    text: str
    range_start: int
    range_end: int | None = None


@dataclass(frozen=True)
class ParseErrorOutcome:
    message: str
    cursor: int


@dataclass(frozen=True)
class SuggestionsOutcome:
    suggestions: list[Suggestion] = field(default_factory=list)


ParseOutcome = Union[ParseErrorOutcome, SuggestionsOutcome]


def first_problem(exceptions: Mapping[Any, SyntaxProblem] | Iterable[SyntaxProblem]) -> SyntaxProblem | None:
    """Pick the problem to show: lowest cursor offset, ties in engine order."""
    problems = list(exceptions.values() if isinstance(exceptions, Mapping) else exceptions)
    if not problems:
        return None
    return min(problems, key=lambda problem: problem.cursor)


# ---------------------------------------------------------------------------
# SuggestBridge
# ---------------------------------------------------------------------------


class SuggestBridge:
    """Evaluates a line against the dispatcher."""

    def __init__(self, dispatcher: CommandDispatcher, source: Any = None) -> None:
        self.dispatcher = dispatcher
        self.source = {} if source is None else source

    def parse(self, line: str) -> ParseResults:
        return self.dispatcher.parse(line, self.source)

    async def evaluate(self, line: str) -> ParseOutcome:
        parse = self.parse(line)

        problem = first_problem(parse.exceptions)
        if problem is not None:
            return ParseErrorOutcome(message=str(problem.message), cursor=problem.cursor)

        try:
            result = self.dispatcher.get_completion_suggestions(parse)
            if inspect.isawaitable(result):
                result = await result
        except Exception:
            logger.exception("fetching completion suggestions for %r failed", line)
            return SuggestionsOutcome()

        return SuggestionsOutcome(
            [
                Suggestion(
                    text=s.text,
                    range_start=s.range.start,
                    range_end=getattr(s.range, "end", None),
                )
                for s in result
            ]
        )
