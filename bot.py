"""
Judge entrypoint: read turn messages on stdin, answer on stdout.

Run with ``python bot.py``. By default the process asks the judge to keep it
alive between turns; ``--once`` answers a single full-history message and
exits. Logs go to stderr so they never mix with protocol output.
"""

from __future__ import annotations

import argparse
import sys
from typing import IO, List, Optional

from agents import registered_agents
from infra.logger import configure_logging, get_logger
from infra.settings import load_settings
from judge import KEEP_RUNNING_MARKER, BotSession, JudgeProtocolError, parse_message

logger = get_logger("bot")


def read_message(stream: IO[str]) -> Optional[str]:
    """
    Read one JSON document, skipping blank lines.

    Messages are normally a single line. For hand-typed local input, a first
    line that does not end in ``}`` or ``]`` starts a multi-line document that
    runs until a line holding only ``}`` or ``]``.

    Returns:
        The raw document, or None at end of input
    """
    line = ""
    while not line.strip():
        line = stream.readline()
        if not line:
            return None
    text = line.rstrip("\r\n")

    if text.rstrip()[-1] not in "}]":
        while True:
            extra = stream.readline()
            if not extra:
                break
            extra = extra.rstrip("\r\n")
            text += extra
            if extra in ("}", "]"):
                break
    return text


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tank field bot for the judge protocol.")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Answer one message and exit instead of asking to keep running",
    )
    parser.add_argument("--agent", default=None, help="Agent type (default: from settings)")
    parser.add_argument("--log-level", default=None, help="Log level (default: from settings)")
    parser.add_argument("--debug", action="store_true", help="Attach agent metadata as response debug text")
    return parser.parse_args(argv)


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[IO[str]] = None,
    stdout: Optional[IO[str]] = None,
) -> int:
    args = parse_args(argv)
    settings = load_settings()
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    configure_logging(level=args.log_level or settings.log_level, json=settings.log_json)

    agent_type = args.agent or settings.agent
    if agent_type not in registered_agents():
        logger.error("Unknown agent type %r (known: %s)", agent_type, ", ".join(registered_agents()))
        return 2

    keep_running = settings.keep_running and not args.once
    session = BotSession(agent_type=agent_type, debug=args.debug)

    while True:
        raw = read_message(stdin)
        if raw is None:
            logger.debug("End of input")
            return 0

        try:
            response = session.handle(parse_message(raw))
        except JudgeProtocolError as exc:
            logger.error("Bad judge message: %s", exc)
            return 1

        stdout.write(response.to_json() + "\n")
        if not keep_running:
            stdout.flush()
            return 0
        stdout.write(KEEP_RUNNING_MARKER + "\n")
        stdout.flush()


if __name__ == "__main__":
    sys.exit(main())
