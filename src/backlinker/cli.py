"""Command-line entry point.

Usage::

    backlinker --content content/posts                   # rewrite in place
    backlinker --content notes --dest site/content/posts
    backlinker --config backlinker.toml --graph links.json --stats
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from backlinker.config import BacklinkerConfig, load_config
from backlinker.errors import BacklinkerError
from backlinker.graph import build_link_graph, export_graph, graph_stats
from backlinker.index import process_backlinks

log = logging.getLogger("backlinker")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="backlinker",
        description="Resolve [[wikilinks]] between markdown notes and add backlinks sections.",
    )
    parser.add_argument("--content", type=Path, default=None, help="Directory of markdown notes to read")
    parser.add_argument("--dest", type=Path, default=None, help="Output directory (default: --content)")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [backlinker] table")
    parser.add_argument("--graph", type=Path, default=None, metavar="FILE", help="Also export the link graph as JSON")
    parser.add_argument("--stats", action="store_true", help="Print link statistics after the run")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log every link and file")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only log warnings and errors")
    return parser


def _print_stats(stats: dict) -> None:
    print(f"Notes: {stats['notes']} ({stats['stubs']} new)")
    print(f"Link occurrences: {stats['links']} ({stats['linked_pairs']} distinct pairs)")
    print(f"Isolated notes: {stats['orphans']}")
    if stats["most_linked"]:
        print("Most linked:")
        for key, count in stats["most_linked"]:
            print(f"  {count:3d} <- {key}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else BacklinkerConfig()
    except (BacklinkerError, OSError) as exc:
        logging.basicConfig(format="%(levelname)s: %(message)s")
        log.error("%s", exc)
        return 1
    level = "DEBUG" if args.verbose else "WARNING" if args.quiet else None
    config = config.merge(content_dir=args.content, dest_dir=args.dest, graph_path=args.graph, log_level=level)

    logging.basicConfig(level=config.log_level, format="%(levelname)s: %(message)s")

    if config.content_dir is None:
        log.error("No content directory given (use --content or a config file)")
        return 2

    try:
        index = process_backlinks(config.content_dir, config.output_dir)
    except (BacklinkerError, OSError) as exc:
        log.error("%s", exc)
        return 1

    if config.graph_path or args.stats:
        G = build_link_graph(index.resolver)
        if config.graph_path:
            export_graph(G, config.graph_path)
            log.info("Graph exported: %d nodes, %d edges -> %s", G.number_of_nodes(), G.number_of_edges(), config.graph_path)
        if args.stats:
            _print_stats(graph_stats(G))
    return 0


if __name__ == "__main__":
    sys.exit(main())
