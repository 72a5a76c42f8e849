from __future__ import annotations

from typing import Callable, Optional

from .categories import category_of
from .models import DirectoryStatistics, ErrorPolicy, FileRecord
from .traversal import walk


class StatsAggregator:
    """Fold records into DirectoryStatistics in a single pass.

    Extrema use strict comparisons, so the first record seen keeps the
    title on ties. Which one that is depends on walk order.
    """

    def __init__(self, path: str):
        self.stats = DirectoryStatistics(path=path)

    def add(self, record: FileRecord) -> None:
        s = self.stats
        if record.is_directory:
            s.total_dirs += 1
            return

        s.total_files += 1
        s.total_size += record.size

        if s.largest_file is None or record.size > s.largest_file.size:
            s.largest_file = record
        if s.oldest_file is None or record.modified_at < s.oldest_file.modified_at:
            s.oldest_file = record
        if s.newest_file is None or record.modified_at > s.newest_file.modified_at:
            s.newest_file = record

        if record.extension:
            s.extensions[record.extension] = s.extensions.get(record.extension, 0) + 1
        cat = category_of(record)
        s.file_types[cat] = s.file_types.get(cat, 0) + 1

    def result(self) -> DirectoryStatistics:
        return self.stats


def directory_stats(root: str, log_fn: Optional[Callable[[dict], None]] = None) -> DirectoryStatistics:
    """Walk the whole tree under root (hidden entries included) and aggregate it."""
    agg = StatsAggregator(root)
    for record in walk(root, recursive=True, show_hidden=True, on_error=ErrorPolicy.ABORT, log_fn=log_fn):
        agg.add(record)
    out = agg.result()
    if log_fn is not None:
        log_fn({"event": "stats_done", "path": root, "files": out.total_files,
                "dirs": out.total_dirs, "size": out.total_size})
    return out
