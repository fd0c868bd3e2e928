"""
Memory Keeper CLI - chat with the interviewer in the terminal.

Commands inside the chat:
    /story       Create the story from the memories shared so far
    /transcript  Show the conversation
    /quit        Leave (Ctrl-D works too)
"""

import argparse
import asyncio
import sys
from typing import Callable, Optional, TextIO

from dotenv import find_dotenv, load_dotenv

from .errors import GenerationInProgressError, ScriptLoadError
from .generator import GenerationState
from .prompt_formatter import format_conversation
from .script import load_script
from .session import MemorySession

STORY_COMMAND = "/story"
TRANSCRIPT_COMMAND = "/transcript"
QUIT_COMMAND = "/quit"


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Memory Keeper CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    chat_parser = subparsers.add_parser("chat", help="Share memories and create a story")
    chat_parser.add_argument(
        "--script",
        type=str,
        default=None,
        help="JSON conversation script (default: MEMORY_KEEPER_SCRIPT_PATH or built-in)"
    )
    chat_parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)"
    )

    args = parser.parse_args(argv)

    # memory-keeper console script does not go through __main__
    load_dotenv(find_dotenv(usecwd=True))

    if args.command == "chat":
        from src.infra.logging_config import setup_logging
        setup_logging(args.log_level)

        try:
            script = load_script(args.script)
        except ScriptLoadError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        run_chat(MemorySession(script=script))
        return 0

    parser.print_help()
    return 1


def _print_story(session: MemorySession, output: TextIO) -> None:
    if not session.transcript.has_responses:
        print("Share a memory first, then type /story.", file=output)
        return

    print("Generating...", file=output)
    try:
        result = asyncio.run(session.generate())
    except GenerationInProgressError as e:
        print(f"Error: {e}", file=output)
        return
    except KeyboardInterrupt:
        print("Error: Generation cancelled", file=output)
        return

    if result.state is GenerationState.SUCCESS:
        print("\n" + "=" * 60, file=output)
        print("Your Generated Story", file=output)
        print("=" * 60, file=output)
        print(result.story, file=output)
        print("=" * 60 + "\n", file=output)
    else:
        print(f"Error: {result.error}", file=output)


def run_chat(
    session: MemorySession,
    read_line: Callable[[str], str] = input,
    output: TextIO = sys.stdout
) -> None:
    """
    Run the interactive loop until /quit or end of input.

    Args:
        session: Session to record into
        read_line: Prompt-and-read function (input() by default)
        output: Where to print the interviewer's lines and the story
    """
    print(session.get_transcript()[0].text, file=output)

    while True:
        try:
            line = read_line("> ")
        except EOFError:
            print("", file=output)
            break

        command = line.strip()
        if command == QUIT_COMMAND:
            break
        if command == STORY_COMMAND:
            _print_story(session, output)
            continue
        if command == TRANSCRIPT_COMMAND:
            print(format_conversation(session.get_transcript(), session.script), file=output)
            continue

        session.update_input(line)
        if session.submit():
            print(session.get_transcript()[-1].text, file=output)


if __name__ == "__main__":
    sys.exit(main())
