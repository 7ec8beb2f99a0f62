from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from chunkdeck.app import (
    build_sentence_deck,
    build_vocab_deck,
    list_decks,
    resolve_sentences_path,
)
from chunkdeck.config import (
    ConfigurationError,
    configure_logging,
    get_sentence_deck_config,
    get_vocab_deck_config,
)
from chunkdeck.domain.errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from chunkdeck.config import SentenceDeckConfig, VocabDeckConfig

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build Mochi decks from class chunk files")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output, including HTTP requests",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    vocab = subparsers.add_parser("vocab", help="Create vocabulary cards for a class file")
    vocab.add_argument(
        "class_file",
        type=Path,
        help="Class chunk file, e.g. chunks_000.json",
    )
    vocab.add_argument(
        "--library",
        type=Path,
        help="Chunk library file (defaults to CHUNK_LIBRARY_FILE or chunk_library.json)",
    )
    vocab.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Log the cards that would be created without calling Mochi or saving files",
    )

    sentences = subparsers.add_parser("sentences", help="Create sentence cards for a class")
    sentences.add_argument(
        "target",
        type=str,
        help="Three-digit class id (e.g. 000) or path to a sentences JSON file",
    )
    sentences.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Log the cards that would be created without calling Mochi",
    )

    subparsers.add_parser("decks", help="List Mochi decks")

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    vocab_config: VocabDeckConfig | None = None
    sentence_config: SentenceDeckConfig | None = None
    try:
        if parsed_args.command == "vocab":
            vocab_config = get_vocab_deck_config(dry_run=parsed_args.dry_run)
        elif parsed_args.command == "sentences":
            sentence_config = get_sentence_deck_config(dry_run=parsed_args.dry_run)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    try:
        if parsed_args.command == "vocab":
            build_vocab_deck(
                parsed_args.class_file,
                library_path=parsed_args.library.resolve() if parsed_args.library else None,
                config=vocab_config,
            )
        elif parsed_args.command == "sentences":
            build_sentence_deck(
                resolve_sentences_path(parsed_args.target),
                config=sentence_config,
            )
        elif parsed_args.command == "decks":
            for deck in list_decks():
                log.info("%s  %s", deck.id, deck.name)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except (ConfigurationError, ValidationError):
        log.exception("Invalid input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during deck build")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
