#!/usr/bin/env python3
"""
Command-line interface for the Setup Manager.

Usage:
    python -m setup_manager                          # task 'all'
    python -m setup_manager -t ref
    python -m setup_manager -t tools_install -u ANNOVAR_LINK
    python -m setup_manager -t db_setup -m h.all.v7.2.entrez.gmt
"""

import argparse
import subprocess
import sys
from typing import List, Optional

from .config import VALID_TASKS, DEFAULT_TASK, ROOT_DIR, ANNOVAR_URL_ENV
from .fetcher import require_downloader
from .tasks import run_task


class SetupArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on any usage error."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"{self.prog}: error: {message}", file=sys.stderr)
        sys.exit(1)


def build_parser() -> SetupArgumentParser:
    parser = SetupArgumentParser(
        prog="setup",
        description="Download and install tools, databases and reference data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument('-t', dest='task', metavar='task', choices=VALID_TASKS,
                        default=DEFAULT_TASK,
                        help=f"specify task: {' '.join(VALID_TASKS)} (default: {DEFAULT_TASK})")
    parser.add_argument('-m', dest='hallmarks', metavar='file',
                        help='Path to including filename of MSigDB hallmarks gene-set '
                             'h.all.vX.X.entrez.gmt file')
    parser.add_argument('-u', dest='annovar_url', metavar='url',
                        help=f'ANNOVAR download link (default: ${ANNOVAR_URL_ENV})')
    # accepted for compatibility; no task reads it
    parser.add_argument('-d', dest='patient_dir', metavar='dir', help=argparse.SUPPRESS)
    parser.add_argument('-h', dest='help', action='store_true',
                        help='show this help screen')
    return parser


def print_step(name: str, current: int, total: int):
    """Print a banner before each step."""
    print("=" * 60)
    print(f"STEP {current}/{total}: {name}")
    print("=" * 60)


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help:
        parser.print_help()
        sys.exit(1)

    try:
        require_downloader("wget")
        run_task(
            task=args.task,
            root=ROOT_DIR,
            hallmarks=args.hallmarks,
            annovar_url=args.annovar_url,
            progress_callback=print_step,
        )
    except (RuntimeError, ValueError, OSError, subprocess.CalledProcessError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
