from datetime import datetime

from filer.sorting import SORT_KEYS, sort_files

from .conftest import rec


def names(records):
    return [r.path for r in records]


def test_sort_keys():
    assert SORT_KEYS == ("name", "size", "modified", "extension")


def test_name_sort_is_bytewise():
    records = [rec("b"), rec("B"), rec("a"), rec("_")]
    assert [r.name for r in sort_files(records, "name")] == ["B", "_", "a", "b"]


def test_size_sort_is_numeric():
    records = [rec("x", 100), rec("y", 9), rec("z", 10)]
    assert [r.size for r in sort_files(records, "size")] == [9, 10, 100]


def test_modified_sort_is_chronological():
    records = [rec("new", modified=datetime(2025, 1, 1)), rec("old", modified=datetime(2020, 1, 1))]
    assert [r.name for r in sort_files(records, "modified")] == ["old", "new"]


def test_extension_sort():
    records = [rec("a.zip"), rec("b.TXT"), rec("c")]
    assert [r.name for r in sort_files(records, "extension")] == ["c", "b.TXT", "a.zip"]


def test_ties_keep_input_order_in_both_directions():
    records = [rec("a", 5), rec("b", 1), rec("c", 5), rec("d", 1), rec("e", 5)]
    assert [r.name for r in sort_files(records, "size")] == ["b", "d", "a", "c", "e"]
    assert [r.name for r in sort_files(records, "size", reverse=True)] == ["a", "c", "e", "b", "d"]


def test_sorting_twice_is_stable():
    records = [rec("a", 2), rec("b", 1), rec("c", 2)]
    once = sort_files(records, "size", reverse=True)
    assert names(sort_files(once, "size", reverse=True)) == names(once)


def test_unknown_key_leaves_order_and_copies():
    records = [rec("b"), rec("a")]
    out = sort_files(records, "colour")
    assert names(out) == names(records)
    assert out is not records
    assert names(sort_files(records, "")) == names(records)
