#!/usr/bin/env python3
import sys
import argparse
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from . import __version__
from .config import DEFAULT_FORMAT, DEFAULT_SORT, DRY_RUN, EVENT_LOG, OUTPUT_FORMATS, STATS_TOP
from .eventlog import open_event_log
from .models import ListOptions, SearchCriteria
from .render import print_files, print_organize_plan, print_organize_result, print_stats
from .sorting import SORT_KEYS
from .tools import list_files, organize, search_files, stats
from .utils_fs import parse_date, parse_size


def _size_arg(value: str) -> int:
    try:
        return parse_size(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _date_arg(value: str):
    try:
        return parse_date(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _limit_arg(value: str) -> int:
    try:
        n = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid limit {value!r}: expected a whole number") from exc
    if n < 0:
        raise argparse.ArgumentTypeError(f"invalid limit {value!r}: must not be negative")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="filer",
        description="List, search, organize and analyze files and directories.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="verbose output")
    p.add_argument("-f", "--format", default=DEFAULT_FORMAT, choices=OUTPUT_FORMATS,
                   help="output format (default: %(default)s)")
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    ls = sub.add_parser("list", aliases=["ls", "l"], help="list files and directories")
    ls.add_argument("directory", nargs="?", default=".")
    ls.add_argument("-r", "--recursive", action="store_true", help="list files recursively")
    ls.add_argument("-a", "--all", dest="show_hidden", action="store_true", help="include hidden files")
    ls.add_argument("-s", "--sort", default=DEFAULT_SORT, help=f"sort by: {', '.join(SORT_KEYS)}")
    ls.add_argument("-R", "--reverse", action="store_true", help="reverse sort order")
    kind = ls.add_mutually_exclusive_group()
    kind.add_argument("-d", "--dirs-only", action="store_true", help="list directories only")
    kind.add_argument("-F", "--files-only", action="store_true", help="list files only")
    ls.add_argument("-e", "--extension", default="", help="filter by file extension")
    ls.add_argument("-m", "--min-size", type=_size_arg, default=0, help="minimum file size in bytes")
    ls.add_argument("-M", "--max-size", type=_size_arg, default=0, help="maximum file size in bytes")
    ls.set_defaults(func=cmd_list)

    se = sub.add_parser("search", aliases=["find", "f"], help="search for files matching criteria")
    se.add_argument("pattern", help="glob pattern or substring")
    se.add_argument("directory", nargs="?", default=".")
    se.add_argument("-e", "--extension", default="", help="filter by file extension")
    se.add_argument("-m", "--min-size", type=_size_arg, default=0, help="minimum file size in bytes")
    se.add_argument("-M", "--max-size", type=_size_arg, default=0, help="maximum file size in bytes")
    se.add_argument("-s", "--modified-since", type=_date_arg, default=None, help="modified since date (YYYY-MM-DD)")
    se.add_argument("-b", "--modified-before", type=_date_arg, default=None, help="modified before date (YYYY-MM-DD)")
    se.add_argument("-H", "--hidden", action="store_true", help="include hidden files")
    se.add_argument("-S", "--sort", default=DEFAULT_SORT, help=f"sort by: {', '.join(SORT_KEYS)}")
    se.add_argument("-r", "--reverse", action="store_true", help="reverse sort order")
    se.add_argument("-l", "--limit", type=_limit_arg, default=0, help="limit number of results (0 = no limit)")
    se.set_defaults(func=cmd_search)

    og = sub.add_parser("organize", aliases=["org", "o"], help="organize files into subdirectories by type")
    og.add_argument("directory", nargs="?", default=".")
    og.add_argument("-n", "--dry-run", action="store_true", default=DRY_RUN,
                    help="show what would be organized without making changes")
    og.add_argument("-y", "--confirm", action="store_true", help="skip confirmation prompt")
    og.set_defaults(func=cmd_organize)

    st = sub.add_parser("stats", aliases=["stat", "info", "analyze"], help="show directory statistics")
    st.add_argument("directory", nargs="?", default=".")
    st.add_argument("--no-extensions", dest="extensions", action="store_false",
                    help="hide the file extensions breakdown")
    st.add_argument("-t", "--top", type=int, default=STATS_TOP, help="show top N extensions (0 = all)")
    st.set_defaults(func=cmd_stats)
    return p


# ——— commands ———

def cmd_list(args, out: Console, err: Console, log) -> int:
    opts = ListOptions(
        recursive=args.recursive,
        show_hidden=args.show_hidden,
        sort_key=args.sort,
        reverse=args.reverse,
        dirs_only=args.dirs_only,
        files_only=args.files_only,
        extension=args.extension,
        min_size=args.min_size,
        max_size=args.max_size,
    )
    files = list_files(args.directory, opts, log_fn=log)
    print_files(files, args.format, out)
    return 0


def cmd_search(args, out: Console, err: Console, log) -> int:
    criteria = SearchCriteria(
        pattern=args.pattern,
        extension=args.extension,
        min_size=args.min_size,
        max_size=args.max_size,
        modified_since=args.modified_since,
        modified_before=args.modified_before,
        include_hidden=args.hidden,
        recursive=True,
    )
    if args.verbose:
        err.print(f"Searching for '{escape(args.pattern)}' in '{escape(args.directory)}'...")
    files = search_files(args.directory, criteria, sort_key=args.sort, reverse=args.reverse,
                         limit=args.limit, log_fn=log)
    if not files and args.format == "table":
        out.print("No files found matching the criteria")
        return 0
    print_files(files, args.format, out)
    if args.verbose:
        err.print(f"Search completed. Found {len(files)} files.")
    return 0


def cmd_organize(args, out: Console, err: Console, log) -> int:
    if args.verbose:
        verb = "Dry run: Analyzing organization for" if args.dry_run else "Organizing files in"
        err.print(f"{verb} '{escape(args.directory)}'...")

    preview = organize(args.directory, dry_run=True, log_fn=log)
    if not preview.categories:
        out.print("No files to organize")
        return 0
    print_organize_plan(preview.categories, out)

    if args.dry_run:
        out.print("\n(This was a dry run - no files were moved)")
        return 0
    if not args.confirm and not Confirm.ask("\nProceed with organization?", default=False, console=out):
        out.print("Organization cancelled")
        return 0

    out.print("\nOrganizing files...")
    result = organize(args.directory, dry_run=False, log_fn=log)
    print_organize_result(result, out)
    return 0 if result.complete else 1


def cmd_stats(args, out: Console, err: Console, log) -> int:
    if args.verbose:
        err.print(f"Analyzing directory: {escape(args.directory)}")
    result = stats(args.directory, log_fn=log)
    print_stats(result, args.format, show_extensions=args.extensions, top_n=args.top, console=out)
    return 0


def main(argv: Optional[List[str]] = None, out: Optional[Console] = None, err: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    out = out or Console()
    err = err or Console(stderr=True)

    with open_event_log(EVENT_LOG) as log:
        log({"event": "start", "command": args.command, "path": args.directory})
        try:
            code = args.func(args, out, err, log)
        except OSError as exc:
            log({"event": "error", "error": str(exc)})
            err.print(f"Error: {escape(str(exc))}")
            return 1
        except KeyboardInterrupt:
            err.print("Interrupted.")
            # POSIX: exit code 128+SIGINT
            return 130
        log({"event": "done", "exit_code": code})
        return code


if __name__ == "__main__":
    sys.exit(main())
