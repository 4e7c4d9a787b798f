"""Tests for SuggestBridge evaluation and problem selection."""

from __future__ import annotations

import logging

import pytest

from dispatch_prompt.bridge import (
    ParseErrorOutcome,
    Suggestion,
    SuggestBridge,
    SuggestionsOutcome,
    first_problem,
)

from .fakes import FakeDispatcher, FakeProblem, GatedDispatcher, suggestion


class TestFirstProblem:
    def test_empty(self) -> None:
        assert first_problem([]) is None
        assert first_problem({}) is None

    def test_lowest_cursor_wins(self) -> None:
        late = FakeProblem("late", 7)
        early = FakeProblem("early", 2)
        assert first_problem([late, early]) is early

    def test_ties_keep_engine_order(self) -> None:
        first = FakeProblem("first", 3)
        second = FakeProblem("second", 3)
        assert first_problem([first, second]) is first

    def test_mapping_of_problems(self) -> None:
        problems = {"node-a": FakeProblem("a", 5), "node-b": FakeProblem("b", 1)}
        assert first_problem(problems).message == "b"


class TestSuggestBridge:
    def test_parse_passes_source(self) -> None:
        dispatcher = FakeDispatcher()
        source = object()
        SuggestBridge(dispatcher, source).parse("x")
        assert dispatcher.sources == [source]

    def test_source_defaults_to_empty_dict(self) -> None:
        dispatcher = FakeDispatcher()
        SuggestBridge(dispatcher).parse("x")
        assert dispatcher.sources == [{}]

    @pytest.mark.asyncio
    async def test_error_outcome(self) -> None:
        dispatcher = FakeDispatcher(problems={"foo": [FakeProblem("Unknown command", 0)]})
        outcome = await SuggestBridge(dispatcher).evaluate("foo")
        assert outcome == ParseErrorOutcome("Unknown command", 0)

    @pytest.mark.asyncio
    async def test_error_suppresses_suggestions(self) -> None:
        dispatcher = FakeDispatcher(
            problems={"foo": [FakeProblem("bad", 1)]},
            suggestions={"foo": [suggestion("food", 0)]},
        )
        outcome = await SuggestBridge(dispatcher).evaluate("foo")
        assert isinstance(outcome, ParseErrorOutcome)

    @pytest.mark.asyncio
    async def test_error_picks_lowest_cursor(self) -> None:
        dispatcher = FakeDispatcher(
            problems={"a b": [FakeProblem("second", 2), FakeProblem("first", 0)]}
        )
        outcome = await SuggestBridge(dispatcher).evaluate("a b")
        assert outcome == ParseErrorOutcome("first", 0)

    @pytest.mark.asyncio
    async def test_suggestions_keep_engine_order(self) -> None:
        dispatcher = FakeDispatcher(
            suggestions={"git ": [suggestion("push", 4), suggestion("commit", 4)]}
        )
        outcome = await SuggestBridge(dispatcher).evaluate("git ")
        assert outcome == SuggestionsOutcome([Suggestion("push", 4), Suggestion("commit", 4)])

    @pytest.mark.asyncio
    async def test_no_suggestions(self) -> None:
        outcome = await SuggestBridge(FakeDispatcher()).evaluate("anything")
        assert outcome == SuggestionsOutcome([])

    @pytest.mark.asyncio
    async def test_awaitable_suggestions(self) -> None:
        dispatcher = GatedDispatcher(suggestions={"": [suggestion("help", 0)]})
        dispatcher.gate.set()
        outcome = await SuggestBridge(dispatcher).evaluate("")
        assert outcome == SuggestionsOutcome([Suggestion("help", 0)])

    @pytest.mark.asyncio
    async def test_failed_fetch_yields_empty_list(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        class Broken(FakeDispatcher):
            def get_completion_suggestions(self, parse):
                raise RuntimeError("engine down")

        with caplog.at_level(logging.ERROR, logger="dispatch_prompt.bridge"):
            outcome = await SuggestBridge(Broken()).evaluate("x")

        assert outcome == SuggestionsOutcome([])
        assert "engine down" in caplog.text

    @pytest.mark.asyncio
    async def test_range_end_carried_when_engine_reports_it(self) -> None:
        dispatcher = FakeDispatcher(suggestions={"git pu x": [suggestion("push", 4, 6)]})
        outcome = await SuggestBridge(dispatcher).evaluate("git pu x")
        assert outcome == SuggestionsOutcome([Suggestion("push", 4, 6)])
