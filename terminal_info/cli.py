from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import Optional

from .discovery import SearchConfig, TerminalCatalog, current_terminal, find_terminal, read_store
from .dump import to_dict, to_json
from .errors import FormatError


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="terminal-info",
        description="Decode compiled terminfo entries and print their capabilities as JSON.",
    )
    which = ap.add_mutually_exclusive_group()
    which.add_argument("--term", help="Terminal name to look up (default: $TERM).")
    which.add_argument("--file", help="Decode this compiled terminfo file.")
    which.add_argument("--all", action="store_true", help="Dump every terminal found on the search path.")

    ap.add_argument("--terminfo", help="Search this directory first (overrides $TERMINFO).")
    ap.add_argument("--no-pseudo", action="store_true", help="Do not add derived pseudo-capabilities.")
    ap.add_argument("--indent", type=int, default=2)
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    log = logging.getLogger("terminal_info")

    config = SearchConfig.from_env()
    if args.terminfo:
        config = dataclasses.replace(config, terminfo=args.terminfo)
    with_pseudo = not args.no_pseudo

    if args.file:
        try:
            store = read_store(args.file, with_pseudo=with_pseudo, max_size=config.max_entry_size)
        except (OSError, FormatError) as e:
            log.error("cannot decode %s: %s", args.file, e)
            return 2
        print(to_json(store, indent=args.indent))
        return 0

    if args.all:
        entries = [to_dict(info.store) for info in TerminalCatalog(config, with_pseudo=with_pseudo)]
        print(json.dumps(entries, indent=args.indent))
        return 0

    if args.term:
        info = find_terminal(args.term, config, with_pseudo=with_pseudo)
    else:
        info = current_terminal(config, with_pseudo=with_pseudo)
    if info is None:
        log.error("no terminfo entry found for %s", args.term or config.term or "$TERM (unset)")
        return 1
    print(to_json(info.store, indent=args.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
