import pytest

from c4kit.nillist import NilList, diff, from_slash, to_slash


def test_from_slash_replaces_separators():
    assert from_slash("/a/b") == b"\x00a\x00b"
    assert from_slash("") == b""


@pytest.mark.parametrize("path", ["", "/", "/foo/bar", "plain", "/ünï/cödé/"])
def test_slash_round_trip(path):
    assert to_slash(from_slash(path)) == path


def test_sorted_and_unique():
    nlist = NilList(["/b", "/a", "/a", "/a/x"])
    assert nlist.strings() == ["/a", "/a/x", "/b"]
    assert len(nlist) == 3


def test_directory_contents_follow_directory():
    paths = ["/a-c", "/a/b", "/a", "/a/b/c", "/a.d"]
    result = NilList(paths).strings()
    index = result.index("/a")
    assert result[index:index + 3] == ["/a", "/a/b", "/a/b/c"]
    assert sorted(result) == sorted(paths)
    keys = NilList(paths).keys
    assert keys == sorted(keys)


def test_getitem_and_slice():
    nlist = NilList(["/x", "/y", "/z"])
    assert nlist[0] == "/x"
    assert nlist[-1] == "/z"
    assert nlist[1:] == NilList(["/y", "/z"])


def test_reverse():
    nlist = NilList(["/x", "/y", "/z"])
    forward = nlist.strings()
    nlist.reverse()
    assert nlist.strings() == list(reversed(forward))


def test_find_existing_and_missing():
    nlist = NilList(["/a", "/c", "/e"])
    assert nlist.find("/c") == 1
    assert nlist[nlist.find("/c")] == "/c"
    position = nlist.find("/d")
    assert nlist[position - 1] < "/d" < nlist[position]
    assert nlist.find("/z") == len(nlist)


def test_end_after_prefix_run():
    nlist = NilList(["/a/1", "/a/2", "/b"])
    assert nlist.end("/a") == 2
    assert nlist.end(b"\x00a\x00") == 2
    assert nlist.end("/b") == 0


def test_sublist_contains_only_descendants():
    nlist = NilList(["/a", "/a/x", "/a/y/z", "/b", "/b/q"])
    sub = nlist.sublist("/a")
    assert sub.strings() == ["/a", "/a/x", "/a/y/z"]
    assert all(path.startswith("/a") for path in sub)
    assert len(nlist.sublist("/zz")) == 0


def test_children_lists_direct_children():
    nlist = NilList(["a/x", "a/y/z", "a/y/w", "b"])
    assert nlist.children("a").strings() == ["a/x", "a/y"]


def test_children_ignores_prefix_siblings():
    nlist = NilList(["a/x", "a-b", "a-b/c"])
    assert nlist.children("a").strings() == ["a/x"]


def test_diff_removes_entries_of_second():
    a = NilList(["/a", "/b", "/c"])
    b = NilList(["/b", "/d"])
    result = diff(a, b)
    assert result.strings() == ["/a", "/c"]
    assert diff(a, NilList()) == a
    assert len(diff(a, a)) == 0