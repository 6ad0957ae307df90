"""Command-line interface for the marker-driven overlay sync.

WHY: Editors run the sync from a terminal or from Resolve's script menu
after adjusting captions or markers. The CLI wires host selection,
settings, logging verbosity, and the run report behind one command.

HOW: Uses argparse for the prefix, debug and hidden-input flags and for
an optional timeline snapshot. Without --snapshot it binds to the
current timeline of a running DaVinci Resolve. Runs the SyncController
and prints the report. With --snapshot and --output the mutated snapshot
is written to disk; without --output a snapshot run is a dry run.

RULES:
- Status and report output goes to stderr (not stdout)
- --debug (or OVERLAY_SYNC_DEBUG=true) switches logging to DEBUG
- A missing project/timeline or an invalid snapshot exits with code 1
- Skipped markers never change the exit code
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from overlay_sync.config import SyncSettings, load_settings
from overlay_sync.core.controller import SyncController
from overlay_sync.core.models import RunSummary
from overlay_sync.errors import HostUnavailableError, SnapshotError
from overlay_sync.hosts.base import TimelineHost
from overlay_sync.messages import format_closing, format_header


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _configure_logging(debug: bool) -> None:
    """Route engine log records to stderr as the live per-marker report.

    RULES:
    - INFO shows marker, skip and result lines; DEBUG adds diagnostics
    - basicConfig is a no-op once the root logger has handlers, so a host
      application's own handlers win; the package level is set regardless
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.getLogger("overlay_sync").setLevel(level)
    logging.basicConfig(
        level=level,
        format="%(message)s" if not debug else "  [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run(host: TimelineHost, settings: Optional[SyncSettings] = None) -> RunSummary:
    """Run one sync against a host and print the report.

    WHY: Resolve's built-in console already holds a ``resolve`` handle;
    scripts there call ``run(ResolveHost.from_resolve(resolve))`` instead
    of going through argument parsing, so logging is configured here too.
    """
    settings = settings or load_settings()
    _configure_logging(settings.debug)
    _status(format_header(host.timeline_name()))
    summary = SyncController(host, settings).run()
    for line in format_closing(summary, settings.prefix):
        _status(line)
    return summary


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="overlay_sync",
        description="Place one Text+ overlay per caption inside every "
                    "'<prefix>Track-Template' marker of the current timeline.",
    )

    parser.add_argument(
        "--prefix",
        default=None,
        help="Marker and track name prefix (default: OVERLAY_SYNC_PREFIX or '::').",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Show detailed diagnostics (tracks, markers, captions, deletions).",
    )

    parser.add_argument(
        "--include-hidden",
        action="store_true",
        help="Also consider text inputs marked as not visible when searching "
             "an overlay for its text attribute.",
    )

    parser.add_argument(
        "--snapshot",
        default=None,
        help="Run against a JSON timeline snapshot instead of DaVinci Resolve.",
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Write the updated snapshot to this path (requires --snapshot).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m overlay_sync`` and ``overlay-sync``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.output and not args.snapshot:
        parser.error("--output requires --snapshot")

    try:
        settings = load_settings(
            prefix=args.prefix,
            debug=args.debug,
            skip_hidden=False if args.include_hidden else None,
        )
    except ValueError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    try:
        if args.snapshot:
            from overlay_sync.hosts.snapshot import SnapshotHost
            host = SnapshotHost.load(args.snapshot)
        else:
            from overlay_sync.hosts.resolve import ResolveHost
            host = ResolveHost.from_resolve()
    except (HostUnavailableError, SnapshotError, OSError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    run(host, settings)

    if args.output:
        saved = host.save(args.output)
        _status("Saved: {}".format(saved))


if __name__ == "__main__":
    main()
