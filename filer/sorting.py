from typing import Any, Callable, Dict, Iterable, List

from .models import FileRecord

_SORT_KEYS: Dict[str, Callable[[FileRecord], Any]] = {
    "name": lambda r: r.name,
    "size": lambda r: r.size,
    "modified": lambda r: r.modified_at,
    "extension": lambda r: r.extension,
}
SORT_KEYS = tuple(_SORT_KEYS)


def sort_files(records: Iterable[FileRecord], key: str, reverse: bool = False) -> List[FileRecord]:
    """Return records ordered by key; equal keys keep their input order either way.

    An unknown key returns the records in their original order.
    """
    items = list(records)
    keyfn = _SORT_KEYS.get(key or "")
    if keyfn is None:
        return items
    return sorted(items, key=keyfn, reverse=reverse)
