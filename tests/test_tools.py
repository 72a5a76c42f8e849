import os
from datetime import datetime

from filer.models import ListOptions, SearchCriteria
from filer.tools import list_files, organize, search_files, stats

from .conftest import BASE_TS, write_file


def test_list_flat_without_hidden(sample_dir):
    files = list_files(str(sample_dir), ListOptions(recursive=False, show_hidden=False))
    assert [f.name for f in files] == ["a.txt", "b.TXT"]


def test_search_glob_matches_case_insensitively(sample_dir):
    files = search_files(str(sample_dir), SearchCriteria(pattern="*.txt", extension=""))
    assert [f.name for f in files] == ["a.txt", "b.TXT"]


def test_stats_single_file(tmp_path):
    write_file(tmp_path / "only.bin", 2048)
    s = stats(str(tmp_path))
    assert (s.total_size, s.total_files, s.total_dirs) == (2048, 1, 0)
    assert s.total_size_human == "2.0 KB"
    assert s.average_size_human == "2.0 KB"


def test_organize_preview(tmp_path):
    write_file(tmp_path / "photo.jpg", 1)
    write_file(tmp_path / "notes.unknownext", 1)
    result = organize(str(tmp_path), dry_run=True)
    assert result.categories == {"images": ["photo.jpg"], "other": ["notes.unknownext"]}
    assert sorted(os.listdir(tmp_path)) == ["notes.unknownext", "photo.jpg"]


def test_list_sorts_only_when_asked(sample_dir):
    by_size = list_files(str(sample_dir), ListOptions(sort_key="size", reverse=True))
    assert [f.name for f in by_size] == ["b.TXT", "a.txt"]


def test_list_size_filter_keeps_directories(nested_dir):
    files = list_files(str(nested_dir), ListOptions(min_size=1000))
    assert [f.name for f in files] == ["docs", "photo.jpg"]


def test_list_dirs_and_files_only(nested_dir):
    dirs = list_files(str(nested_dir), ListOptions(recursive=True, dirs_only=True))
    assert [f.name for f in dirs] == ["docs", "sub"]
    files = list_files(str(nested_dir), ListOptions(recursive=True, files_only=True, extension="TXT"))
    assert [f.name for f in files] == ["notes.txt"]


def test_search_applies_size_to_directories(nested_dir):
    files = search_files(str(nested_dir), SearchCriteria(min_size=1))
    assert all(not f.is_directory for f in files)
    assert {f.name for f in files} == {"guide.md", "notes.txt", "photo.jpg"}


def test_search_hidden_inclusion(nested_dir):
    plain = search_files(str(nested_dir), SearchCriteria(pattern="secret"))
    assert plain == []
    found = search_files(str(nested_dir), SearchCriteria(pattern="secret", include_hidden=True))
    assert [f.name for f in found] == ["secret.txt"]


def test_search_root_is_a_candidate(nested_dir):
    found = search_files(str(nested_dir), SearchCriteria(pattern=nested_dir.name))
    assert found[0].path == str(nested_dir)


def test_search_sort_and_limit(nested_dir):
    files = search_files(str(nested_dir), SearchCriteria(pattern="*.*"), sort_key="size", reverse=True, limit=2)
    assert [f.name for f in files] == ["photo.jpg", "guide.md"]


def test_search_non_recursive(nested_dir):
    files = search_files(str(nested_dir), SearchCriteria(pattern="*.txt", recursive=False))
    assert files == []


def test_search_modified_window(tmp_path):
    write_file(tmp_path / "old.log", 1, mtime=BASE_TS - 86400 * 10)
    write_file(tmp_path / "new.log", 1, mtime=BASE_TS)
    since = datetime.fromtimestamp(BASE_TS - 86400)
    files = search_files(str(tmp_path), SearchCriteria(pattern="log", modified_since=since))
    assert [f.name for f in files] == ["new.log"]
    files = search_files(str(tmp_path), SearchCriteria(pattern="log", modified_before=since))
    assert [f.name for f in files] == ["old.log"]


def test_operations_emit_events(sample_dir):
    events = []
    list_files(str(sample_dir), log_fn=events.append)
    assert events[0]["event"] == "list_dir"
    assert events[0]["result_count"] == 3
