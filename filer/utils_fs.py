import os, re, shutil, stat, pathlib
from datetime import datetime
from typing import Optional
from unidecode import unidecode

from .models import FileRecord

DATE_INPUT_FMT = "%Y-%m-%d"


def safe_ascii(s: str) -> str:
    s = unidecode(s)
    s = re.sub(r"[^\w.\-() ]+", "_", s).strip()
    s = re.sub(r"\s+", " ", s).strip()
    return s or "unnamed"


def root_name(path: str) -> str:
    """Base name of a traversal root; '.' and trailing separators resolve to the real name."""
    name = os.path.basename(os.path.normpath(path))
    if name in ("", ".", ".."):
        name = os.path.basename(os.path.abspath(path)) or path
    return name


def file_record(path: str, st: os.stat_result, name: Optional[str] = None) -> FileRecord:
    """Normalize one stat result into a FileRecord."""
    is_dir = stat.S_ISDIR(st.st_mode)
    return FileRecord(
        name=name if name is not None else os.path.basename(path),
        path=path,
        size=0 if is_dir else st.st_size,
        modified_at=datetime.fromtimestamp(st.st_mtime),
        permission_string=stat.filemode(st.st_mode),
        is_directory=is_dir,
    )


def parse_size(value: str) -> int:
    """Parse a byte count given on the command line."""
    try:
        n = int(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"invalid size {value!r}: expected a whole number of bytes") from exc
    if n < 0:
        raise ValueError(f"invalid size {value!r}: must not be negative")
    return n


def parse_date(value: str) -> datetime:
    """Parse a YYYY-MM-DD date into a naive local datetime at midnight."""
    try:
        return datetime.strptime(str(value).strip(), DATE_INPUT_FMT)
    except ValueError as exc:
        raise ValueError(f"invalid date {value!r}: expected YYYY-MM-DD") from exc


def move_into(src: pathlib.Path, dst_dir: pathlib.Path) -> pathlib.Path:
    """Create dst_dir if needed and move src into it under the same name."""
    dst_dir.mkdir(parents=True, exist_ok=True)
    target = dst_dir / src.name
    shutil.move(str(src), str(target))
    return target
