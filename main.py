"""CLI entrypoint for the word box generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from wordbox.core.constants import LexiconKind, SearchStatus, SearchStrategy
from wordbox.core.exceptions import DictionaryLoadError, SearchCancelled, SearchTimeout
from wordbox.core.models import WordBox
from wordbox.engine.generator import GeneratorConfig, WordBoxGenerator, WordBoxResult
from wordbox.utils.logger import configure_logging, get_logger
from wordbox.utils.pretty import UNSOLVED_MESSAGES, TerminalRenderer, format_box, print_result

LOGGER = get_logger("wordbox.cli")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build word boxes: grids whose rows and columns are all dictionary words",
    )
    parser.add_argument("--size", type=int, help="Side length of a square box")
    parser.add_argument("--rows", type=int, help="Box height in cells")
    parser.add_argument("--cols", type=int, help="Box width in cells")
    parser.add_argument(
        "--symmetric",
        action="store_true",
        help="Require the box to equal its transpose (rows double as columns)",
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        default=Path("words.txt"),
        help="Newline-delimited word list",
    )
    parser.add_argument(
        "--strategy",
        type=str.upper,
        choices=[s.value for s in SearchStrategy],
        default=SearchStrategy.DEPTH_FIRST.value,
        help="Search procedure",
    )
    parser.add_argument(
        "--lexicon",
        type=str.upper,
        choices=[k.value for k in LexiconKind],
        default=LexiconKind.HASHED.value,
        help="Prefix oracle implementation",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Give up after this many seconds")
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker threads for the per-starting-word breadth-first search",
    )
    parser.add_argument(
        "--animate",
        action="store_true",
        help="Redraw the box after every search step (interactive terminals only)",
    )
    parser.add_argument(
        "--all",
        type=int,
        metavar="N",
        default=None,
        help="Print up to N distinct boxes in depth-first order instead of the first one",
    )
    parser.add_argument("--json", action="store_true", help="Emit the result as JSON")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def result_payload(result: WordBoxResult) -> Dict[str, Any]:
    return {
        "status": result.status.value,
        "rows": list(result.box.rows) if result.box else None,
        "nodes_visited": result.stats.nodes_visited,
        "elapsed_seconds": round(result.elapsed_seconds, 4),
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    if args.size is not None and (args.rows is not None or args.cols is not None):
        parser.error("--size cannot be combined with --rows/--cols")
    row_dim = args.size if args.size is not None else args.rows
    col_dim = args.size if args.size is not None else args.cols
    if row_dim is None or col_dim is None:
        parser.error("provide --size, or both --rows and --cols")
    if args.all is not None and (
        args.strategy != SearchStrategy.DEPTH_FIRST.value or args.workers != 1
    ):
        parser.error("--all always searches depth-first; drop --strategy and --workers")

    try:
        config = GeneratorConfig(
            row_dim=row_dim,
            col_dim=col_dim,
            dictionary_path=args.dictionary,
            symmetric=args.symmetric,
            strategy=SearchStrategy(args.strategy),
            lexicon=LexiconKind(args.lexicon),
            timeout_seconds=args.timeout,
            max_workers=args.workers,
        )
    except ValueError as exc:
        parser.error(str(exc))

    renderer = TerminalRenderer() if args.animate and sys.stdout.isatty() else None

    try:
        generator = WordBoxGenerator(config, renderer=renderer)
    except DictionaryLoadError as exc:
        LOGGER.error("%s", exc)
        return EXIT_CONFIG_ERROR

    if args.all is not None:
        boxes: List[WordBox] = []
        status = SearchStatus.EXHAUSTED
        try:
            for box in generator.iter_boxes(limit=args.all):
                boxes.append(box)
        except SearchTimeout as exc:
            LOGGER.warning("Enumeration stopped early: %s", exc)
            status = SearchStatus.TIMED_OUT
        except SearchCancelled as exc:
            LOGGER.warning("Enumeration stopped early: %s", exc)
            status = SearchStatus.CANCELLED
        else:
            if boxes:
                status = SearchStatus.SOLVED
        if args.json:
            payload = {"status": status.value, "boxes": [list(box.rows) for box in boxes]}
            print(json.dumps(payload, ensure_ascii=False, indent=2))
            return EXIT_OK
        if boxes:
            print("\n\n".join(format_box(box) for box in boxes))
        if status in (SearchStatus.TIMED_OUT, SearchStatus.CANCELLED):
            print(f"Enumeration stopped early after {len(boxes)} word box(es).")
        elif not boxes:
            print(UNSOLVED_MESSAGES[SearchStatus.EXHAUSTED])
        return EXIT_OK

    result = generator.generate()
    if args.json:
        print(json.dumps(result_payload(result), ensure_ascii=False, indent=2))
    else:
        print_result(result)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
