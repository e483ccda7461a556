#!/usr/bin/env python3
"""
Command line entry point: rewrite specifiers as seen from one importing file.

    specresolve ./bar lodash/fp --from src/index.mjs --ext .mjs,.js:.js
"""

import os
import sys
import json
import logging
import argparse
from pathlib import Path

from .config import setup_logging, get_config
from .config_loader import ConfigLoader
from .exceptions import ResolverError
from .resolvers.extensions import normalize_rules
from .rewriter import DeclarationRewriter

logger = logging.getLogger(__name__)


def parse_ext_rule(text: str):
    """Parse ``SRC[,SRC...][:DEST]`` into a raw extension rule."""
    sources, _, destination = text.partition(':')
    source_list = sources.split(',')
    source = source_list[0] if len(source_list) == 1 else source_list
    return [source, destination] if destination else [source]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='specresolve',
        description="Rewrite import specifiers to extension-qualified paths"
    )
    parser.add_argument("specifiers", nargs='+', help="Specifiers to rewrite")
    parser.add_argument("--from", dest="filename", required=True, help="Importing file")
    parser.add_argument("--config", help="Options file (JSON or YAML)")
    parser.add_argument("--ext", action="append", default=None, metavar="SRC[,SRC][:DEST]",
                        help="Extension rule, repeatable; replaces configured extensions")
    parser.add_argument("--ignore-unresolved", action="store_true", help="Leave unresolved specifiers unchanged")
    parser.add_argument("--ignore-exports", action="store_true", help="Skip packages that declare an exports map")
    parser.add_argument("--json", action="store_true", help="Print a JSON list instead of one line per specifier")
    parser.add_argument("--log-level", help="Logging level (default: $LOG_LEVEL or WARNING)")
    return parser


def main(argv=None) -> int:
    """Main CLI function."""
    args = build_parser().parse_args(argv)

    config = get_config()
    setup_logging(args.log_level or config['LOG_LEVEL'], config['LOG_FILE'])

    try:
        config_file = args.config or config['RESOLVER_CONFIG']
        if config_file:
            options = ConfigLoader.load_file(config_file)
        else:
            options = ConfigLoader.load(Path.cwd())

        if args.ext:
            options.extensions = normalize_rules([parse_ext_rule(e) for e in args.ext])
        if args.ignore_unresolved:
            options.ignore_unresolved = True
        if args.ignore_exports:
            options.ignore_exports = True

        rewriter = DeclarationRewriter(options)
        filename = os.path.abspath(args.filename)
        results = [(s, rewriter.rewrite(s, filename)) for s in args.specifiers]
    except ResolverError as e:
        logger.debug(f"Resolution failed: {e.to_dict()}")
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([{'specifier': s, 'resolved': r} for s, r in results], indent=2))
    else:
        for _, resolved in results:
            print(resolved)
    return 0


if __name__ == "__main__":
    sys.exit(main())
