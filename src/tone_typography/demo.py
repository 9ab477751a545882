# src/tone_typography/demo.py
import argparse
import asyncio
import json
import logging
import sys
import time

from tone_typography import config
from tone_typography.utils.log import debug


def _one_shot(text: str, heuristic_only: bool) -> dict:
    from .text import load_style_pools, make_style_token_factory, reconcile
    from .tone import CircuitBreaker
    from .tone.llm import get_llm_client

    client = None if heuristic_only else get_llm_client(debug=True)
    tone = CircuitBreaker(client).attempt(text, time.monotonic())
    records = reconcile((), text, make_style_token_factory(tone, load_style_pools()))
    return {"text": text, "tone": tone, "records": [r.to_dict() for r in records]}


async def _interactive(heuristic_only: bool) -> None:
    from .session import TypingSession, build_orchestrator

    session = TypingSession(build_orchestrator(heuristic_only=heuristic_only), initial_text="")
    session.add_tone_listener(lambda tone: print(f"tone: {tone}", flush=True))
    session.add_records_listener(
        lambda records: debug(" ".join(r.id for r in records), topic="records")
    )

    while True:
        line = await asyncio.to_thread(sys.stdin.readline)
        if not line:
            break
        session.on_text_changed(line.rstrip("\n"))

    if session.orchestrator.debouncer.pending:
        await asyncio.sleep(session.orchestrator.debouncer.delay)
    await session.orchestrator.drain()
    session.orchestrator.close()


def main(argv=None):
    """CLI demo: classify text tone and print its per-character records."""
    parser = argparse.ArgumentParser(
        prog="tone-demo",
        description="Classify text tone and decompose it into per-character records.",
    )
    parser.add_argument(
        "text",
        nargs="*",
        help="Text to classify (e.g. quiet peace now)",
    )
    parser.add_argument(
        "--heuristic-only",
        action="store_true",
        dest="heuristic_only",
        help="Never call the remote classifier",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Read edits line by line from stdin and print each published tone",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose debug logs")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.interactive:
        asyncio.run(_interactive(args.heuristic_only))
        return

    text = " ".join(args.text) or config.INITIAL_TEXT
    try:
        result = _one_shot(text, args.heuristic_only)
        print(json.dumps(result, indent=2, ensure_ascii=False))
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
