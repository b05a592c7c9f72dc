import io

import pytest

from c4kit.folder import FolderStore
from c4kit.ids import identify
from c4kit.logger import LoggerFlags, LoggerStore
from c4kit.ram import RAMStore
from c4kit.store import InvalidIDError
from c4kit.validating import ValidatingStore


def drain(buffer):
    text = buffer.getvalue()
    buffer.seek(0)
    buffer.truncate(0)
    return text


def test_logger_store(tmp_path):
    buff = io.StringIO()
    store = LoggerStore(FolderStore(tmp_path), buff, 0)
    testdata = "foo"
    id = identify(testdata.encode())

    w = store.create(id)
    assert drain(buff) == f"{id} Create\n"

    w.write(testdata.encode())
    assert drain(buff) == f"{id} Write {len(testdata)}\n"

    w.close()
    assert drain(buff) == f"{id} Close\n"

    f = store.open(id)
    assert drain(buff) == f"{id} Open\n"

    assert f.read(512) == testdata.encode()
    assert drain(buff) == f"{id} Read {len(testdata)}\n"

    assert f.read(512) == b""
    assert drain(buff) == f"{id} Read 0\n{id} Read error EOF\n"

    f.close()
    assert drain(buff) == f"{id} Close\n"


def test_open_error_logged(tmp_path):
    buff = io.StringIO()
    store = LoggerStore(FolderStore(tmp_path), buff, 0)
    id = identify(b"missing")
    with pytest.raises(FileNotFoundError):
        store.open(id)
    assert drain(buff).startswith(f"{id} Open\n{id} Open error ")


def test_flags_select_calls():
    buff = io.StringIO()
    store = LoggerStore(RAMStore(), buff, LoggerFlags.CREATE)
    id = identify(b"foo")
    with store.create(id) as w:
        w.write(b"foo")
    assert drain(buff) == f"{id} Create\n"
    with store.open(id) as f:
        assert f.read() == b"foo"
    assert drain(buff) == ""


def test_default_flags_skip_remove():
    ram = RAMStore()
    buff = io.StringIO()
    store = LoggerStore(ram, buff, 0)
    id = identify(b"foo")
    with store.create(id) as w:
        w.write(b"foo")
    drain(buff)
    store.remove(id)
    assert drain(buff) == ""
    assert id not in ram


def test_remove_error_logged():
    buff = io.StringIO()
    store = LoggerStore(RAMStore(), buff, LoggerFlags.REMOVE | LoggerFlags.ERROR)
    id = identify(b"foo")
    with pytest.raises(FileNotFoundError):
        store.remove(id)
    assert drain(buff).startswith(f"{id} Remove\n{id} Remove error ")


def test_invalid_id_logged_on_close():
    buff = io.StringIO()
    store = LoggerStore(ValidatingStore(RAMStore()), buff, 0)
    id = identify(b"foo")
    w = store.create(id)
    w.write(b"bad")
    drain(buff)
    with pytest.raises(InvalidIDError):
        w.close()
    assert drain(buff) == f"{id} Close\n{id} Close error c4 id does not match data\n"


def test_invalid_id_not_logged_without_flag():
    buff = io.StringIO()
    store = LoggerStore(ValidatingStore(RAMStore()), buff, LoggerFlags.CLOSE | LoggerFlags.ERROR)
    id = identify(b"foo")
    w = store.create(id)
    w.write(b"bad")
    with pytest.raises(InvalidIDError):
        w.close()
    assert drain(buff) == f"{id} Close\n"