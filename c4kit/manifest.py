"""Manifests: listings of files with their modes, sizes, times and C4 IDs."""

from __future__ import annotations

import json
import os
import posixpath
import re
import stat
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import BinaryIO, Dict, Iterator, List, Optional, TextIO, Tuple, Union

from .filemode import (
    MODE_CHAR_DEVICE,
    MODE_DEVICE,
    MODE_DIR,
    MODE_NAMED_PIPE,
    MODE_SETGID,
    MODE_SETUID,
    MODE_SOCKET,
    MODE_STICKY,
    MODE_SYMLINK,
    format_file_mode,
    is_dir,
    parse_file_mode,
)
from .ids import ID, ID_LENGTH, IDParseError, parse
from .nillist import NilList

_RFC3339 = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]+))?(Z|[+-][0-9]{2}:[0-9]{2})\Z"
)
_INTEGER = re.compile(r"[+-]?[0-9]+\Z")

_STAT_TYPES = {
    stat.S_IFBLK: MODE_DEVICE,
    stat.S_IFCHR: MODE_DEVICE | MODE_CHAR_DEVICE,
    stat.S_IFDIR: MODE_DIR,
    stat.S_IFIFO: MODE_NAMED_PIPE,
    stat.S_IFLNK: MODE_SYMLINK,
    stat.S_IFSOCK: MODE_SOCKET,
}


def _parse_time(text: str) -> datetime:
    match = _RFC3339.match(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as an RFC 3339 time")
    year, month, day, hour, minute, second = (int(match[i]) for i in range(1, 7))
    micro = int((match[7] or "")[:6].ljust(6, "0"))
    zone = match[8]
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    return datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    base = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    offset = moment.utcoffset()
    if not offset:
        return base + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{base}{sign}{hours:02d}:{minutes:02d}"


def _to_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _base_name(name: str) -> str:
    if not name:
        return "."
    stripped = name.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8", "surrogateescape"))


def _pad(width: int) -> str:
    return " " * max(abs(width), 1)


def _mode_from_stat(st_mode: int) -> int:
    mode = st_mode & 0o777
    mode |= _STAT_TYPES.get(stat.S_IFMT(st_mode), 0)
    if st_mode & stat.S_ISGID:
        mode |= MODE_SETGID
    if st_mode & stat.S_ISUID:
        mode |= MODE_SETUID
    if st_mode & stat.S_ISVTX:
        mode |= MODE_STICKY
    return mode


def _parse_int(text: str) -> int:
    if not _INTEGER.match(text):
        raise ValueError(f"invalid size {text!r}")
    return int(text)


@dataclass
class FileInfo:
    """One manifest entry. `raw_name` is the name as stored; `name` is its last element."""

    mode: int
    size: int
    mtime: datetime
    raw_name: str
    id: ID = field(default_factory=ID)
    metadata: ID = field(default_factory=ID)

    @property
    def name(self) -> str:
        """The last element of the stored name."""
        return _base_name(self.raw_name)

    def is_dir(self) -> bool:
        """True when the entry is a directory."""
        return is_dir(self.mode)

    def format(self, size_padding: int, name_padding: int) -> str:
        """The manifest line for this entry, aligned to the given column widths."""
        size_text = str(self.size)
        name = self.name
        parts = [
            format_file_mode(self.mode),
            _pad(size_padding + 1 - len(size_text)),
            size_text,
            " ",
            _format_time(self.mtime),
            " ",
            name,
        ]
        if self.is_dir():
            parts.append("/")
        if not self.id.is_nil():
            parts += [_pad(name_padding - _byte_len(name)), str(self.id), " "]
            if not self.metadata.is_nil():
                parts += [" ", str(self.metadata)]
        return "".join(parts)

    def to_json(self) -> str:
        """The entry as a compact JSON object."""
        info = {
            "mode": format_file_mode(self.mode),
            "mod_time": _format_time(self.mtime),
            "size": self.size,
            "name": self.raw_name,
        }
        if not self.id.is_nil():
            info["id"] = str(self.id)
        if not self.metadata.is_nil():
            info["metadata"] = str(self.metadata)
        return json.dumps(info, separators=(",", ":"))

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "FileInfo":
        """Build an entry from the JSON form written by `to_json`."""
        info = json.loads(data)
        if not isinstance(info, dict):
            raise ValueError("file info JSON must be an object")
        size = info.get("size", 0)
        if isinstance(size, bool) or not isinstance(size, int):
            raise ValueError(f"invalid size {size!r}")
        entry = cls(
            mode=parse_file_mode(str(info.get("mode", ""))),
            size=size,
            mtime=_parse_time(str(info.get("mod_time", ""))),
            raw_name=str(info.get("name", "")),
        )
        id_text = str(info.get("id", ""))
        if len(id_text) == ID_LENGTH:
            entry.id = parse(id_text)
        metadata_text = str(info.get("metadata", ""))
        if len(metadata_text) == ID_LENGTH:
            entry.metadata = parse(metadata_text)
        return entry

    @classmethod
    def from_path(cls, path: Union[str, "os.PathLike[str]"], *args: ID) -> "FileInfo":
        """Describe a file system entry; optional IDs give its ID and metadata ID."""
        text = os.fspath(path)
        st = os.lstat(text)
        entry = cls(
            mode=_mode_from_stat(st.st_mode),
            size=st.st_size,
            mtime=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            raw_name=_base_name(text.replace(os.sep, "/")),
        )
        if args:
            entry.id = args[0]
            if len(args) > 1:
                entry.metadata = args[1]
        return entry


def make_file_info(
    mode: int, size: int, mtime: datetime, name: str, id: ID, metadata: ID
) -> FileInfo:
    """Build an entry, storing its time in UTC."""
    return FileInfo(mode, size, _to_utc(mtime), name, id, metadata)


def _split_field(text: str) -> Tuple[str, str]:
    text = text.strip()
    cut = text.find(" ")
    if cut < 0:
        raise ValueError(f"missing field in manifest line {text!r}")
    return text[:cut], text[cut:]


def parse_file_info(line: str) -> FileInfo:
    """Parse one manifest line: mode, size, time, name and optional IDs."""
    mode_text, rest = _split_field(line)
    mode = parse_file_mode(mode_text)
    size_text, rest = _split_field(rest)
    size = _parse_int(size_text)
    time_text, rest = _split_field(rest)
    mtime = _parse_time(time_text)

    rest = rest.strip()
    cut = rest.find(" ")
    if cut < 0:
        cut = len(rest)
    info = FileInfo(mode, size, mtime, rest[:cut].rstrip("/"))

    rest = rest[cut:].strip()
    if len(rest) < ID_LENGTH:
        return info
    info.id = parse(rest[:ID_LENGTH])
    rest = rest[ID_LENGTH:].strip()
    if len(rest) < ID_LENGTH:
        return info
    info.metadata = parse(rest[:ID_LENGTH])
    return info


def _join(directories: List[str], name: str) -> str:
    joined = "/".join(part for part in ("/".join(directories), name) if part)
    if not joined:
        return ""
    cleaned = posixpath.normpath(joined)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _lines(text: str) -> Iterator[str]:
    parts = text.split("\n")
    for part in parts[:-1]:
        yield part + "\n"
    if parts[-1]:
        yield parts[-1]


class Manifest:
    """A mapping of paths to file entries with a text form."""

    def __init__(self) -> None:
        self._entries: Dict[str, FileInfo] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())

    def set_file_info(self, path: str, info: Union[FileInfo, str, "os.PathLike[str]"]) -> None:
        """Store an entry for `path`; a file system path is described first."""
        if not isinstance(info, FileInfo):
            info = FileInfo.from_path(info)
        self._entries[path] = info

    def set_id(self, path: str, id: ID) -> None:
        """Set the ID of an existing entry."""
        if path not in self._entries:
            raise KeyError(f"cannot set id, no such path in manifest {path}")
        self._entries[path].id = id

    def set_metadata(self, path: str, id: ID) -> None:
        """Set the metadata ID of an existing entry."""
        if path not in self._entries:
            raise KeyError(f"cannot set metadata id, no such path in manifest {path}")
        self._entries[path].metadata = id

    def get(self, path: str) -> Optional[FileInfo]:
        """The entry for `path`, or None."""
        return self._entries.get(path)

    def paths(self) -> List[str]:
        """All paths, each directory followed by its contents."""
        return NilList(self._entries).strings()

    def marshal(self) -> bytes:
        """The text form: one indented line per entry, then the sorted unique IDs."""
        infos = self._entries.values()
        max_size = max((len(str(info.size)) for info in infos), default=0)
        max_name = max((_byte_len(info.name) for info in infos), default=0)

        lines: List[str] = []
        ids = set()
        for path in self.paths():
            info = self._entries[path]
            if not info.id.is_nil():
                ids.add(info.id)
                if not info.metadata.is_nil():
                    ids.add(info.metadata)
            depth = path.count("/")
            lines.append("\t" * depth + info.format(max_size, max_name) + "\n")
        lines.extend(f"{id}\n" for id in sorted(ids))
        return "".join(lines).encode("utf-8", "surrogateescape")

    def unmarshal(self, stream: Union[BinaryIO, TextIO, str, bytes]) -> None:
        """Read entries from the text form, stopping at the first ID line."""
        content = stream.read() if hasattr(stream, "read") else stream
        if isinstance(content, (bytes, bytearray)):
            content = bytes(content).decode("utf-8", "surrogateescape")

        current: List[str] = []
        for line in _lines(content):
            depth = len(line) - len(line.lstrip("\t"))
            if depth > len(current):
                raise ValueError(f"line is indented deeper than its directory: {line!r}")
            del current[depth:]

            if len(line) == ID_LENGTH + 1:
                try:
                    parse(line[:-1])
                except IDParseError:
                    pass
                else:
                    break

            info = parse_file_info(line)
            self._entries[_join(current, info.name)] = info
            if info.is_dir():
                current.append(info.name)