from __future__ import annotations

import pathlib
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Union

from .config import category_overrides
from .models import FileRecord, OrganizeResult
from .traversal import walk
from .utils_fs import move_into, safe_ascii

OTHER = "other"

# Generic grouping by extension
_DEFAULT_TABLE: Dict[str, str] = {}
for _cat, _exts in (
    ("images",    ("jpg", "jpeg", "png", "gif", "bmp")),
    ("videos",    ("mp4", "avi", "mov", "mkv", "wmv")),
    ("audio",     ("mp3", "wav", "flac", "aac", "ogg")),
    ("documents", ("pdf", "doc", "docx", "txt", "xls", "xlsx", "ppt", "pptx")),
    ("archives",  ("zip", "rar", "tar", "gz", "7z")),
):
    for _ext in _exts:
        _DEFAULT_TABLE[_ext] = _cat


def build_table(raw: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    """Return a read-only extension -> category table.

    User-supplied category names become directory names, so they are
    reduced to safe ASCII; extensions are matched lowercase without a dot.
    """
    if raw is None:
        return MappingProxyType(dict(_DEFAULT_TABLE))
    table = {str(ext).lower().lstrip("."): safe_ascii(cat) for ext, cat in raw.items()}
    return MappingProxyType(table)


CATEGORY_TABLE: Mapping[str, str] = build_table(category_overrides())


def category_of(item: Union[FileRecord, str], table: Optional[Mapping[str, str]] = None) -> str:
    """Return the category for a record or an extension, 'other' when unmapped."""
    ext = item.extension if isinstance(item, FileRecord) else item
    ext = (ext or "").lower().lstrip(".")
    return (table if table is not None else CATEGORY_TABLE).get(ext, OTHER)


def organize_files(
    root: str,
    dry_run: bool = True,
    table: Optional[Mapping[str, str]] = None,
    log_fn: Optional[Callable[[dict], None]] = None,
) -> OrganizeResult:
    """Group the files directly under root by category and, unless dry_run, move them.

    Directories and hidden files are left alone. The first failed move stops
    processing; the mapping built so far is returned with the error.
    """
    log = log_fn or (lambda ev: None)
    result = OrganizeResult(dry_run=dry_run)
    base = pathlib.Path(root)

    # materialize first: moves below must not disturb the listing
    files: List[FileRecord] = [r for r in walk(root, recursive=False, show_hidden=False, log_fn=log_fn)]
    for record in files:
        if record.is_directory:
            continue
        category = category_of(record, table)
        result.categories.setdefault(category, []).append(record.name)
        log({"event": "organize_plan", "name": record.name, "category": category, "dry_run": dry_run})

        if dry_run:
            continue
        try:
            target = move_into(pathlib.Path(record.path), base / category)
        except OSError as exc:
            log({"event": "move_error", "src": record.path, "category": category, "error": str(exc)})
            result.error = exc
            return result
        result.moved += 1
        log({"event": "move", "src": record.path, "moved_to": str(target)})

    return result
