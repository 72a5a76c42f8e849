from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

DATE_FMT = "%Y-%m-%d %H:%M:%S"


def extension_of(name: str) -> str:
    """Lowercase suffix after the last '.', or '' when nothing follows it."""
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def is_hidden(name: str) -> bool:
    return name[:1] == "."


_UNITS = "KMGTPE"


def human_size(size: int) -> str:
    """Render a byte count as '512 B', '2.0 KB', '1.5 MB', ..."""
    unit = 1024
    if size < unit:
        return f"{size} B"
    div, exp = unit, 0
    n = size // unit
    while n >= unit and exp < len(_UNITS) - 1:
        div *= unit
        exp += 1
        n //= unit
    return f"{size / div:.1f} {_UNITS[exp]}B"


@dataclass(frozen=True)
class FileRecord:
    name: str
    path: str
    size: int
    modified_at: datetime
    permission_string: str
    is_directory: bool
    # derived from name/size
    extension: str = field(init=False)
    hidden: bool = field(init=False)
    size_human: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "extension", extension_of(self.name))
        object.__setattr__(self, "hidden", is_hidden(self.name))
        object.__setattr__(self, "size_human", human_size(self.size))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "size": self.size,
            "size_human": self.size_human,
            "modified_at": self.modified_at.strftime(DATE_FMT),
            "permission_string": self.permission_string,
            "is_directory": self.is_directory,
            "extension": self.extension,
            "hidden": self.hidden,
        }


@dataclass
class SearchCriteria:
    """Filter specification; every field is optional and they combine with AND."""
    pattern: str = ""
    extension: str = ""
    min_size: int = 0
    max_size: int = 0
    modified_since: Optional[datetime] = None
    modified_before: Optional[datetime] = None
    include_hidden: bool = False
    recursive: bool = True


@dataclass
class ListOptions:
    recursive: bool = False
    show_hidden: bool = False
    sort_key: Optional[str] = None
    reverse: bool = False
    dirs_only: bool = False
    files_only: bool = False
    extension: str = ""
    min_size: int = 0
    max_size: int = 0


class ErrorPolicy(enum.Enum):
    """What the walk does when a nested entry cannot be read."""
    ABORT = "abort-on-error"
    SKIP = "skip-on-error"


@dataclass
class DirectoryStatistics:
    path: str
    total_files: int = 0
    total_dirs: int = 0
    total_size: int = 0
    extensions: Dict[str, int] = field(default_factory=dict)
    file_types: Dict[str, int] = field(default_factory=dict)
    largest_file: Optional[FileRecord] = None
    oldest_file: Optional[FileRecord] = None
    newest_file: Optional[FileRecord] = None

    @property
    def total_size_human(self) -> str:
        return human_size(self.total_size)

    @property
    def average_size(self) -> int:
        if self.total_files == 0:
            return 0
        return self.total_size // self.total_files

    @property
    def average_size_human(self) -> str:
        return human_size(self.average_size)

    def top_extensions(self, n: int = 0) -> List[Tuple[str, int]]:
        """Extensions by descending count, ties by name; n <= 0 returns all."""
        ranked = sorted(self.extensions.items(), key=lambda kv: (-kv[1], kv[0]))
        return ranked[:n] if n > 0 else ranked

    def to_dict(self) -> Dict[str, Any]:
        def rec(r: Optional[FileRecord]) -> Optional[Dict[str, Any]]:
            return r.to_dict() if r is not None else None

        return {
            "path": self.path,
            "total_files": self.total_files,
            "total_dirs": self.total_dirs,
            "total_size": self.total_size,
            "total_size_human": self.total_size_human,
            "average_size": self.average_size,
            "average_size_human": self.average_size_human,
            "file_types": dict(self.file_types),
            "extensions": dict(self.extensions),
            "largest_file": rec(self.largest_file),
            "oldest_file": rec(self.oldest_file),
            "newest_file": rec(self.newest_file),
        }


@dataclass
class OrganizeResult:
    """Category -> file names, plus the error that stopped execution, if any.

    A non-None ``error`` means partial completion: files listed before the
    failing one may already have been moved.
    """
    categories: Dict[str, List[str]] = field(default_factory=dict)
    moved: int = 0
    dry_run: bool = True
    error: Optional[OSError] = None

    @property
    def complete(self) -> bool:
        return self.error is None

    @property
    def total_files(self) -> int:
        return sum(len(v) for v in self.categories.values())
