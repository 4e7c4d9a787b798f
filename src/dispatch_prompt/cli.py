"""CLI entry point for dispatch-prompt. Uses Click for argument parsing."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from dispatch_prompt.literal import LiteralDispatcher
from dispatch_prompt.prompt import Prompt, PromptOptions
from dispatch_prompt.terminal import StreamTerminal
from dispatch_prompt.theme import DEFAULT_THEME

DEFAULT_COMMANDS = (
    "help",
    "status",
    "git status",
    "git commit",
    "git push",
    "git pull",
)


def _run(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


async def _session(commands: tuple[str, ...], prompt_text: str | None) -> None:
    dispatcher = LiteralDispatcher()
    options = PromptOptions(
        prompt=DEFAULT_THEME.prompt(prompt_text) if prompt_text else None,
    )
    session = Prompt(StreamTerminal(sys.stdout, sys.stdin), dispatcher, options)

    def ran(path: list[str]) -> None:
        session.echo(f"ran: {' '.join(path)}")

    def show_help(path: list[str]) -> None:
        session.echo("commands:", ", ".join(commands))

    for command in commands:
        dispatcher.register(command, show_help if command == "help" else ran)
    dispatcher.register("exit", lambda path: session.end())

    session.start()
    await session.wait_closed()


@click.command()
@click.option(
    "--command",
    "commands",
    multiple=True,
    help="Register a command as space-separated words (repeatable).",
)
@click.option("--prompt", "prompt_text", default=None, help="Prompt text shown before the line.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write debug logs to this file.",
)
def main(commands, prompt_text, log_file):
    """Interactive prompt with inline errors and tab-completed suggestions."""
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    _run(_session(tuple(commands) or DEFAULT_COMMANDS, prompt_text))


if __name__ == "__main__":
    main()
