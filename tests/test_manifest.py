import io
import os
import stat
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from c4kit.filemode import GROUP_R, GROUP_X, MODE_DIR, OTHER_R, OTHER_X, USER_RW, USER_RWX, format_file_mode
from c4kit.ids import ID, identify
from c4kit.manifest import FileInfo, Manifest, make_file_info, parse_file_info

DS_STORE_ID = "c458Yt9m2xPHH8jxfyipfqD9qsXpZh2fGD9HpbfwSFfAFgX9nWHQp1LG94SsEron2GteyvxfYmQcsUjvJCbxPuRTj6"
STAMP = datetime(2019, 11, 6, 20, 1, 22, tzinfo=timezone.utc)
FILE_MODE = USER_RW | GROUP_R | OTHER_R
DIR_MODE = MODE_DIR | USER_RWX | GROUP_R | GROUP_X | OTHER_R | OTHER_X


def _build_tree(root: Path) -> None:
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"alpha")
    (root / "sub" / "b.txt").write_bytes(b"bravo")
    (root / "sub" / "c.txt").write_bytes(b"alpha")
    (root / "sub" / "deeper" / "d.bin").write_bytes(b"\x00\x01\x02")


def _walk_manifest(root: Path) -> Manifest:
    manifest = Manifest()
    for path in [root, *sorted(root.rglob("*"))]:
        rel = "" if path == root else "/" + path.relative_to(root).as_posix()
        file_id = ID() if path.is_dir() else identify(path.read_bytes())
        manifest.set_file_info(rel, FileInfo.from_path(path, file_id))
    return manifest


def test_parse_file_info():
    line = (
        "\t-rw-r--r--    6148 2019-11-06T20:01:22Z .DS_Store"
        "                                         " + DS_STORE_ID + "\n"
    )
    info = parse_file_info(line)
    assert format_file_mode(info.mode) == "-rw-r--r--"
    assert info.size == 6148
    assert info.mtime == STAMP
    assert info.name == ".DS_Store"
    assert str(info.id) == DS_STORE_ID
    assert info.metadata.is_nil()


def test_manifest_round_trip(tmp_path):
    _build_tree(tmp_path)
    manifest = _walk_manifest(tmp_path)
    data = manifest.marshal()

    again = Manifest()
    again.unmarshal(io.BytesIO(data))
    assert again.marshal() == data
    assert len(again) == len(manifest)


def test_marshal_ends_with_sorted_unique_ids(tmp_path):
    _build_tree(tmp_path)
    data = _walk_manifest(tmp_path).marshal().decode()
    expected = sorted({identify(b"alpha"), identify(b"bravo"), identify(b"\x00\x01\x02")})
    assert data.splitlines()[-3:] == [str(i) for i in expected]


def test_marshal_indents_by_depth(tmp_path):
    _build_tree(tmp_path)
    lines = _walk_manifest(tmp_path).marshal().decode().splitlines()
    d_line = next(line for line in lines if " d.bin " in line)
    assert d_line.startswith("\t\t\t-")
    assert lines[0].startswith("d")


def test_unmarshal_stops_at_id_line(tmp_path):
    _build_tree(tmp_path)
    manifest = _walk_manifest(tmp_path)
    data = manifest.marshal() + b"this is not a manifest line\n"
    again = Manifest()
    again.unmarshal(data)
    assert len(again) == len(manifest)


def test_format_and_parse_round_trip_with_metadata():
    info = make_file_info(FILE_MODE, 6148, STAMP, ".DS_Store", identify(b"x"), identify(b"y"))
    line = info.format(4, 9)
    assert line.startswith("-rw-r--r-- 6148 2019-11-06T20:01:22Z .DS_Store ")
    assert parse_file_info("\t" + line + "\n") == info


def test_format_directory():
    info = make_file_info(DIR_MODE, 0, STAMP, "docs", ID(), ID())
    line = info.format(1, 4)
    assert line == "drwxr-xr-x 0 2019-11-06T20:01:22Z docs/"
    parsed = parse_file_info(line)
    assert parsed.name == "docs"
    assert parsed.is_dir()


def test_make_file_info_stores_utc():
    local = datetime(2020, 1, 2, 5, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    info = make_file_info(FILE_MODE, 1, local, "f", ID(), ID())
    assert info.mtime.utcoffset() == timedelta(0)
    assert info.mtime == local
    assert info.mtime.hour == 3


def test_json_round_trip():
    info = make_file_info(FILE_MODE, 6148, STAMP, "dir/.DS_Store", identify(b"x"), ID())
    text = info.to_json()
    assert '"mode":"-rw-r--r--"' in text
    assert '"mod_time":"2019-11-06T20:01:22Z"' in text
    assert "metadata" not in text
    restored = FileInfo.from_json(text)
    assert restored == info
    assert restored.name == ".DS_Store"


def test_from_json_requires_mode():
    with pytest.raises(ValueError):
        FileInfo.from_json("{}")


@pytest.mark.parametrize(
    "line",
    [
        "short",
        "-rw-r--r-- abc 2019-11-06T20:01:22Z name",
        "-rw-r--r-- 12 yesterday name",
        "-rw-r-- 12 2019-11-06T20:01:22Z name",
    ],
)
def test_parse_file_info_errors(line):
    with pytest.raises(ValueError):
        parse_file_info(line)


def test_from_path_file_and_directory(tmp_path):
    target = tmp_path / "data.bin"
    target.write_bytes(b"12345")
    file_id = identify(b"12345")
    info = FileInfo.from_path(target, file_id)
    assert info.name == "data.bin"
    assert info.size == 5
    assert info.id == file_id
    assert not info.is_dir()
    assert info.mode & 0o777 == stat.S_IMODE(os.lstat(target).st_mode) & 0o777

    folder = FileInfo.from_path(tmp_path)
    assert folder.is_dir()
    assert folder.id.is_nil()


def test_set_id_and_metadata():
    manifest = Manifest()
    manifest.set_file_info("/f", make_file_info(FILE_MODE, 1, STAMP, "f", ID(), ID()))
    manifest.set_id("/f", identify(b"a"))
    manifest.set_metadata("/f", identify(b"b"))
    assert manifest.get("/f").id == identify(b"a")
    assert manifest.get("/f").metadata == identify(b"b")
    assert manifest.get("/missing") is None


def test_set_id_missing_path_raises():
    manifest = Manifest()
    with pytest.raises(KeyError):
        manifest.set_id("/nope", identify(b"a"))
    with pytest.raises(KeyError):
        manifest.set_metadata("/nope", identify(b"a"))


def test_paths_place_contents_after_directory():
    manifest = Manifest()
    for path in ["/a-c", "/a/b", "/a"]:
        manifest.set_file_info(path, make_file_info(FILE_MODE, 0, STAMP, path, ID(), ID()))
    assert manifest.paths() == ["/a", "/a/b", "/a-c"]
    assert len(manifest) == 3


def test_unmarshal_rejects_orphan_indentation():
    manifest = Manifest()
    with pytest.raises(ValueError):
        manifest.unmarshal("\t\t-rw-r--r-- 1 2019-11-06T20:01:22Z f\n")