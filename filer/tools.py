from __future__ import annotations

from typing import Callable, List, Optional

from .categories import organize_files
from .filters import criteria_predicate, listing_predicate
from .models import DirectoryStatistics, FileRecord, ListOptions, OrganizeResult, SearchCriteria
from .sorting import sort_files
from .stats import directory_stats
from .traversal import walk

LogFn = Callable[[dict], None]


def list_files(root: str, options: Optional[ListOptions] = None, log_fn: Optional[LogFn] = None) -> List[FileRecord]:
    """Return the entries under root that pass the listing filters, sorted when a key is given."""
    opts = options or ListOptions()
    keep = listing_predicate(
        extension=opts.extension,
        min_size=opts.min_size,
        max_size=opts.max_size,
        dirs_only=opts.dirs_only,
        files_only=opts.files_only,
    )
    items = [r for r in walk(root, recursive=opts.recursive, show_hidden=opts.show_hidden, log_fn=log_fn) if keep(r)]
    if opts.sort_key:
        items = sort_files(items, opts.sort_key, opts.reverse)
    return items


def search_files(
    root: str,
    criteria: SearchCriteria,
    sort_key: Optional[str] = None,
    reverse: bool = False,
    limit: int = 0,
    log_fn: Optional[LogFn] = None,
) -> List[FileRecord]:
    """Return the entries under root (root included) that satisfy criteria."""
    keep = criteria_predicate(criteria)
    matches = [
        r for r in walk(
            root,
            recursive=criteria.recursive,
            show_hidden=criteria.include_hidden,
            include_root=True,
            log_fn=log_fn,
        )
        if keep(r)
    ]
    if sort_key:
        matches = sort_files(matches, sort_key, reverse)
    if limit > 0:
        matches = matches[:limit]
    return matches


def organize(root: str, dry_run: bool = True, log_fn: Optional[LogFn] = None) -> OrganizeResult:
    return organize_files(root, dry_run=dry_run, log_fn=log_fn)


def stats(root: str, log_fn: Optional[LogFn] = None) -> DirectoryStatistics:
    return directory_stats(root, log_fn=log_fn)
