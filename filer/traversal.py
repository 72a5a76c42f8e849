from __future__ import annotations

import os
from collections import deque
from typing import Callable, Deque, Iterator, List, Optional, Tuple

from .models import ErrorPolicy, FileRecord
from .utils_fs import file_record, root_name

LogFn = Callable[[dict], None]


def _no_log(ev: dict) -> None:
    return None


def default_policy(recursive: bool) -> ErrorPolicy:
    """Recursive walks abort on a bad entry; flat listings skip it."""
    return ErrorPolicy.ABORT if recursive else ErrorPolicy.SKIP


def read_dir(path: str) -> List[os.DirEntry]:
    """Return the entries of a directory sorted by name."""
    with os.scandir(path) as it:
        entries = list(it)
    entries.sort(key=lambda e: e.name)
    return entries


def walk(
    root: str,
    recursive: bool = False,
    show_hidden: bool = False,
    on_error: Optional[ErrorPolicy] = None,
    include_root: bool = False,
    log_fn: Optional[LogFn] = None,
) -> Iterator[FileRecord]:
    """Yield a FileRecord for each entry under root, depth first in name order.

    The root itself is only yielded when include_root is set and is never
    subject to the hidden check. With show_hidden off, hidden entries are
    skipped and hidden directories are not descended into. Errors reading
    root always propagate; errors on nested entries follow on_error, which
    defaults to ABORT for recursive walks and SKIP otherwise.
    """
    policy = on_error or default_policy(recursive)
    log = log_fn or _no_log

    if include_root:
        yield file_record(root, os.lstat(root), root_name(root))

    entries = read_dir(root)
    log({"event": "list_dir", "path": root, "result_count": len(entries)})

    # depth-first: children of a directory go to the front of the queue
    queue: Deque[Tuple[str, os.DirEntry]] = deque((os.path.join(root, e.name), e) for e in entries)
    while queue:
        path, entry = queue.popleft()
        if not show_hidden and entry.name.startswith("."):
            continue

        try:
            st = entry.stat(follow_symlinks=False)
        except OSError as exc:
            if policy is ErrorPolicy.ABORT:
                raise
            log({"event": "skip_entry", "path": path, "error": str(exc)})
            continue

        record = file_record(path, st, entry.name)
        yield record

        if not (recursive and record.is_directory):
            continue
        try:
            kids = read_dir(path)
        except OSError as exc:
            if policy is ErrorPolicy.ABORT:
                raise
            log({"event": "skip_entry", "path": path, "error": str(exc)})
            continue
        log({"event": "list_dir", "path": path, "result_count": len(kids)})
        for kid in reversed(kids):
            queue.appendleft((os.path.join(path, kid.name), kid))
