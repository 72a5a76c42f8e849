"""Composable record predicates shared by listing and search.

Each builder returns a plain ``Predicate`` (record -> bool). ``all_of``
chains them with short-circuit AND, so both entry points configure the same
pieces instead of carrying their own inclusion logic.
"""
from __future__ import annotations

import fnmatch
from datetime import datetime
from typing import Callable, List, Optional

from .models import FileRecord, SearchCriteria

Predicate = Callable[[FileRecord], bool]


def _always(record: FileRecord) -> bool:
    return True


def pattern_matches(pattern: str) -> Predicate:
    """Glob match on the name, falling back to substring containment, both case-insensitive."""
    if not pattern:
        return _always
    pat = pattern.lower()

    def pred(record: FileRecord) -> bool:
        name = record.name.lower()
        return fnmatch.fnmatchcase(name, pat) or pat in name

    return pred


def extension_is(extension: str) -> Predicate:
    if not extension:
        return _always
    want = extension.lower().lstrip(".")

    def pred(record: FileRecord) -> bool:
        return record.extension.lower() == want

    return pred


def size_between(min_size: int = 0, max_size: int = 0, exempt_directories: bool = False) -> Predicate:
    """Inclusive size bounds; a bound of 0 is ignored."""
    if min_size <= 0 and max_size <= 0:
        return _always

    def pred(record: FileRecord) -> bool:
        if exempt_directories and record.is_directory:
            return True
        if min_size > 0 and record.size < min_size:
            return False
        if max_size > 0 and record.size > max_size:
            return False
        return True

    return pred


def modified_between(since: Optional[datetime] = None, before: Optional[datetime] = None) -> Predicate:
    if since is None and before is None:
        return _always

    def pred(record: FileRecord) -> bool:
        if since is not None and record.modified_at < since:
            return False
        if before is not None and record.modified_at > before:
            return False
        return True

    return pred


def kind_is(dirs_only: bool = False, files_only: bool = False) -> Predicate:
    if not dirs_only and not files_only:
        return _always

    def pred(record: FileRecord) -> bool:
        if dirs_only and not record.is_directory:
            return False
        if files_only and record.is_directory:
            return False
        return True

    return pred


def all_of(*predicates: Predicate) -> Predicate:
    active: List[Predicate] = [p for p in predicates if p is not _always]

    def pred(record: FileRecord) -> bool:
        for p in active:
            if not p(record):
                return False
        return True

    return pred


def criteria_predicate(criteria: SearchCriteria, *, size_exempts_directories: bool = False) -> Predicate:
    """Predicate for a SearchCriteria: pattern, extension, size, then modified time."""
    return all_of(
        pattern_matches(criteria.pattern),
        extension_is(criteria.extension),
        size_between(criteria.min_size, criteria.max_size, exempt_directories=size_exempts_directories),
        modified_between(criteria.modified_since, criteria.modified_before),
    )


def listing_predicate(
    extension: str = "",
    min_size: int = 0,
    max_size: int = 0,
    dirs_only: bool = False,
    files_only: bool = False,
) -> Predicate:
    """Predicate used by list: kind toggles first, and directories pass the size bounds."""
    return all_of(
        kind_is(dirs_only, files_only),
        extension_is(extension),
        size_between(min_size, max_size, exempt_directories=True),
    )


def matches(record: FileRecord, criteria: SearchCriteria) -> bool:
    return criteria_predicate(criteria)(record)
