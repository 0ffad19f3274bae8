"""
KinoGuessr CLI - Command-line interface.

Usage:
    kinoguessr serve                Run the REST API
    kinoguessr play                 Play rounds in the terminal

Catalog location, selection mode and the rest come from the
environment (see kinoguessr.config); flags override them.
"""

import argparse
import asyncio
import logging
import random
import sys

from .config import Settings, get_settings
from .errors import FetchFailure, PoolExhausted
from .session import SelectionMode

logger = logging.getLogger("kinoguessr")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="KinoGuessr - Guess the film from its cast",
        prog="kinoguessr",
    )
    parser.add_argument("--catalog-url", help="Film catalog base URL")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in SelectionMode],
        help="pool: each film once per process; unbounded: random every game",
    )
    parser.add_argument("--seed", type=int, help="Random seed for shuffles and draws")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Bind port")

    subparsers.add_parser("play", help="Play in the terminal")

    args = parser.parse_args()
    settings = _apply_overrides(get_settings(), args)
    setup_logging(settings.log_level)

    if args.command == "serve":
        cmd_serve(settings)
    elif args.command == "play":
        cmd_play(settings)
    else:
        parser.print_help()
        sys.exit(1)


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides = {
        "catalog_url": args.catalog_url,
        "selection_mode": args.mode,
        "random_seed": args.seed,
        "log_level": args.log_level,
        "host": getattr(args, "host", None),
        "port": getattr(args, "port", None),
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return settings.model_copy(update=overrides) if overrides else settings


def cmd_serve(settings: Settings):
    """Run the REST API under uvicorn."""
    import uvicorn
    from .api import create_app

    app = create_app(settings=settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def cmd_play(settings: Settings):
    """Play rounds in the terminal until the player quits or films run out."""
    try:
        asyncio.run(_play(settings))
    except KeyboardInterrupt:
        print()


async def _play(settings: Settings):
    from .catalog import HttpFilmCatalog
    from .engine_core.reveal import reveal_state
    from .session import SessionController

    async with HttpFilmCatalog(
        settings.catalog_url,
        media_url=settings.media_url,
        timeout=settings.request_timeout,
    ) as catalog:
        controller = SessionController(
            catalog,
            mode=SelectionMode(settings.selection_mode),
            rng=random.Random(settings.random_seed),
        )

        while True:
            try:
                session = await controller.start()
            except PoolExhausted:
                print("No more new games.")
                return
            except FetchFailure as exc:
                print(f"Error: could not fetch a film ({exc})")
                sys.exit(1)

            print("\nGuess the film. Press enter to pass.")
            shown = 0
            while not session.is_terminal:
                reveal = reveal_state(session)
                for slot in range(shown, reveal.revealed_count):
                    print(f"  Actor {slot + 1}: {session.target_film.actor_images[slot]}")
                shown = reveal.revealed_count

                raw = input(f"Guess ({session.attempts_remaining} left): ")
                result = controller.guess(raw[:settings.guess_max_length])
                for line in result.state_changes:
                    print(line)
                session = controller.session

            film = session.target_film
            if session.is_correct:
                print(f"Correct! {film.title}")
            else:
                print(f"Out of guesses. It was {film.title}.")
            print(f"  Poster: {film.poster_image}")

            controller.reset()
            if not controller.can_start_new_game:
                print("No more new games.")
                return
            if input("Play again? [Y/n] ").strip().lower() in {"n", "no"}:
                return


if __name__ == "__main__":
    main()
