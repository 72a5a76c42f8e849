import os
import pathlib
from datetime import datetime

import pytest

# filer.config reads the environment at import time
os.environ["FILER_CONFIG_DIR"] = str(pathlib.Path(__file__).parent / "_unused_config")
for _var in ("FILER_LOG_DIR", "FILER_EVENT_LOG", "FILER_DRY_RUN", "FILER_DEFAULT_FORMAT",
             "FILER_DEFAULT_SORT", "FILER_STATS_TOP"):
    os.environ.pop(_var, None)

from filer.models import FileRecord  # noqa: E402

BASE_TS = 1_700_000_000


def write_file(path: pathlib.Path, size: int = 0, mtime: float = BASE_TS) -> pathlib.Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    os.utime(path, (mtime, mtime))
    return path


def rec(name: str, size: int = 0, is_dir: bool = False, modified: datetime = datetime(2024, 1, 1)) -> FileRecord:
    return FileRecord(
        name=name,
        path=f"root/{name}",
        size=size,
        modified_at=modified,
        permission_string="drwxr-xr-x" if is_dir else "-rw-r--r--",
        is_directory=is_dir,
    )


@pytest.fixture
def sample_dir(tmp_path):
    """a.txt (10 B), b.TXT (20 B), .hidden (5 B)."""
    write_file(tmp_path / "a.txt", 10)
    write_file(tmp_path / "b.TXT", 20)
    write_file(tmp_path / ".hidden", 5)
    return tmp_path


@pytest.fixture
def nested_dir(tmp_path):
    """
    root/
      .cache/deep/secret.txt
      .env
      docs/
        guide.md
        .draft.md
        sub/notes.txt
      photo.jpg
    """
    write_file(tmp_path / ".cache" / "deep" / "secret.txt", 3)
    write_file(tmp_path / ".env", 1)
    write_file(tmp_path / "docs" / "guide.md", 100)
    write_file(tmp_path / "docs" / ".draft.md", 7)
    write_file(tmp_path / "docs" / "sub" / "notes.txt", 40)
    write_file(tmp_path / "photo.jpg", 2048)
    return tmp_path
