# c4kit

A library for C4 identifiers: 90-character, SHA-512 based content identifiers
that always start with `c4`.

## What is in it

- `c4kit.ids`: the `ID` type (ordered by digest, `is_nil()`, `sum()`),
  `identify()` for bytes or a binary stream, and `parse()` to read an ID from
  text. `parse()` raises `IDParseError` on malformed input.
- `c4kit.tree`: `Tree`, a sorted Merkle tree that gives one ID to a set of
  IDs (`id()`, `rows()`, `to_bytes()`, `len()`), `read_tree()` to load a tree
  from its binary form (raises `InvalidTreeError`), and the helpers
  `tree_size()` and `list_size()`.
- `c4kit.manifest`: `Manifest` and `FileInfo`, a text listing of files with
  modes, sizes, modification times and IDs. `Manifest.marshal()` writes it,
  `Manifest.unmarshal()` reads it back. Also `parse_file_info()`,
  `make_file_info()`, `FileInfo.to_json()` / `FileInfo.from_json()` and
  `FileInfo.from_path()`.
- `c4kit.filemode`: `parse_file_mode()`, `format_file_mode()` and `is_dir()`
  for `ls`-style mode strings such as `drwxr-xr-x`.
- `c4kit.nillist`: `NilList`, a sorted unique path list in which every
  directory is followed by its contents, with `find()`, `end()`, `sublist()`,
  `children()`, plus `from_slash()`, `to_slash()` and `diff()`.
- `c4kit.naturalsort`: `natural_less()` and `natural_sorted()`, which order
  runs of digits by value (`file2` before `file10`).
- Stores that keep data under its ID, all with `open()`, `create()` and
  `remove()` (base class `Store` in `c4kit.store`):
  - `c4kit.folder.FolderStore`: one file per ID in a folder.
  - `c4kit.ram.RAMStore`: data in memory.
  - `c4kit.mapstore.MapStore`: a mapping from IDs to file paths, with
    `load()`, `load_or_store()`, `delete()` and `items()`.
  - `c4kit.validating.ValidatingStore`: wraps a store and checks data against
    its ID, raising `InvalidIDError`.
  - `c4kit.logger.LoggerStore`: wraps a store and writes a line per call to a
    text stream, selected by `LoggerFlags`.
- `c4kit.charset`: `check_character_set()`, `old_charset_id_to_new()` and
  `new_charset_id_to_old()` for IDs written in the old, pre-standard character
  order.

## Install

```
pip install c4kit
```

## Identify data

```python
from c4kit.ids import identify, parse

id_ = identify(b"alfa")
text = str(id_)            # "c4..." 90 characters
assert parse(text) == id_
```

## One ID for many

```python
from c4kit.ids import identify
from c4kit.tree import Tree

tree = Tree(identify(word.encode()) for word in ["alfa", "bravo", "charlie"])
print(tree.id())
print(len(tree))           # 3
```

The IDs are sorted and duplicates dropped, so the same set always gives the
same tree ID.

## Manifests

```python
from datetime import datetime, timezone

from c4kit.filemode import parse_file_mode
from c4kit.ids import ID, identify
from c4kit.manifest import Manifest, make_file_info

when = datetime(2019, 11, 6, 20, 1, 22, tzinfo=timezone.utc)
m = Manifest()
m.set_file_info("docs", make_file_info(parse_file_mode("drwxr-xr-x"), 64, when, "docs", ID(), ID()))
m.set_file_info("docs/a.txt", make_file_info(parse_file_mode("-rw-r--r--"), 5, when, "a.txt", identify(b"hello"), ID()))

text = m.marshal()
m2 = Manifest()
m2.unmarshal(text)
print(m2.paths())          # ['docs', 'docs/a.txt']
```

`set_file_info()` also accepts a file system path, which it describes with
`FileInfo.from_path()`.

## Content-addressed storage

```python
from c4kit.ids import identify
from c4kit.ram import RAMStore
from c4kit.validating import ValidatingStore

store = ValidatingStore(RAMStore())
data = b"some bytes"
id_ = identify(data)

with store.create(id_) as w:
    w.write(data)

with store.open(id_) as r:
    assert r.read() == data
```

Writing data that does not match its ID raises `InvalidIDError` (from
`c4kit.store`) when the writer is closed, and the entry is removed again.

To log store calls:

```python
import io

from c4kit.logger import LoggerStore
from c4kit.ram import RAMStore

log = io.StringIO()
store = LoggerStore(RAMStore(), log)
```

## What it does not do

c4kit is a library only: it has no command-line tool. Manifests live in
memory and as text; there is no database or other persistent index of them.

## Tests

```
pip install -e ".[test]"
pytest
```