import logging
import os
import shutil
from pathlib import Path

import pytest

from terminal_info import discovery
from terminal_info.discovery import (
    DEFAULT_TERMINFO_DIR,
    SYSTEM_DIRS,
    SearchConfig,
    TerminalCatalog,
    current_terminal,
    find_terminal,
    read_store,
    relative_paths,
)
from terminal_info.errors import FormatError
from terminal_info.pseudo import WINDOWS_CONSOLE_NAME

DATA = Path(__file__).parent / "data"


def _install(directory: Path, rel: str, fixture: str) -> Path:
    target = directory / rel
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(DATA / fixture, target)
    return target


def _config(*dirs, **kw):
    params = dict(terminfo_dirs=tuple(str(d) for d in dirs), system_dirs=())
    params.update(kw)
    return SearchConfig(**params)


def test_relative_paths():
    assert relative_paths("xterm") == [
        "xterm",
        os.path.join("x", "xterm"),
        os.path.join("78", "xterm"),
        os.path.join("xt", "xterm"),
    ]
    assert relative_paths("x") == ["x", os.path.join("x", "x"), os.path.join("78", "x")]
    assert relative_paths("") == []


def test_from_env():
    env = {
        "TERMINFO": "/opt/terminfo",
        "HOME": "/home/someone",
        "TERMINFO_DIRS": os.pathsep.join(["/a", "", "/b"]),
        "TERM": "xterm",
    }
    config = SearchConfig.from_env(env, platform="linux")

    assert config.terminfo == "/opt/terminfo"
    assert config.home == "/home/someone"
    assert config.terminfo_dirs == ("/a", DEFAULT_TERMINFO_DIR, "/b")
    assert config.system_dirs == SYSTEM_DIRS
    assert config.term == "xterm"
    assert config.windows_console is False


def test_from_env_on_windows():
    config = SearchConfig.from_env({}, platform="win32")

    assert config.windows_console is True
    assert config.system_dirs == ()
    assert config.terminfo is None
    assert config.term is None


def test_search_dirs_skip_missing_and_duplicates(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    home = tmp_path / "home"
    for d in (a, b, home / ".terminfo"):
        d.mkdir(parents=True)
    config = _config(a, tmp_path / "missing", b, terminfo=str(a), home=str(home))

    assert config.search_dirs() == [str(a), str(home / ".terminfo"), str(b)]


@pytest.mark.parametrize("rel", ["xterm-256color", "x/xterm-256color", "78/xterm-256color", "xt/xterm-256color"])
def test_find_terminal_in_every_layout(tmp_path, rel):
    _install(tmp_path, rel, "xterm-256color")

    info = find_terminal("xterm-256color", _config(tmp_path))

    assert info is not None
    assert info.name == "xterm-256color"
    assert info.source_path == os.path.abspath(str(tmp_path / rel))
    assert info.set_title("t") == "\x1b]0;t\x07"


def test_earlier_directory_wins(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    _install(first, "l/linux", "linux")
    _install(second, "l/linux", "vt100")

    info = find_terminal("linux", _config(second, terminfo=str(first)))

    assert info.terminal_names == ("linux", "Linux console")


def test_malformed_candidate_is_skipped(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    (first / "l").mkdir(parents=True)
    (first / "l" / "linux").write_bytes(b"not a terminfo entry")
    _install(second, "l/linux", "linux")

    info = find_terminal("linux", _config(first, second))

    assert info.source_path.startswith(str(second))


def test_not_found(tmp_path):
    config = _config(tmp_path)

    assert find_terminal("nosuchterm", config) is None
    assert find_terminal("../etc/passwd", config) is None
    assert find_terminal("", config) is None


def test_read_store_puts_file_name_first(tmp_path):
    path = _install(tmp_path, "myterm", "xterm-256color")

    store = read_store(str(path))
    raw = read_store(str(path), with_pseudo=False)

    assert store.terminal_names == ("myterm", "xterm-256color", "xterm with 256 colors")
    assert raw.terminal_names == ("xterm-256color", "xterm with 256 colors")
    assert raw.string("__set_title") is None


def test_oversized_entry_is_rejected(tmp_path):
    path = _install(tmp_path, "l/linux", "linux")

    with pytest.raises(FormatError):
        read_store(str(path), max_size=64)
    assert find_terminal("linux", _config(tmp_path, max_entry_size=64)) is None


def test_current_terminal(tmp_path):
    _install(tmp_path, "v/vt100", "vt100")

    assert current_terminal(_config(tmp_path, term="vt100")).name == "vt100"
    assert current_terminal(_config(tmp_path, term="unknown")) is None
    assert current_terminal(_config(tmp_path)) is None


def test_current_terminal_falls_back_to_windows_console(tmp_path):
    info = current_terminal(_config(tmp_path, term="unknown", windows_console=True))

    assert info.name == WINDOWS_CONSOLE_NAME
    assert current_terminal(_config(tmp_path, windows_console=True)).name == WINDOWS_CONSOLE_NAME


def test_each_call_builds_a_new_instance(tmp_path):
    _install(tmp_path, "v/vt100", "vt100")
    config = _config(tmp_path, term="vt100")

    assert current_terminal(config) is not current_terminal(config)


def test_catalog_lists_entries_and_skips_bad_files(tmp_path, caplog):
    _install(tmp_path, "l/linux", "linux")
    _install(tmp_path, "v/vt100", "vt100")
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "broken").write_bytes(b"\x1a\x01\x05")

    caplog.set_level(logging.WARNING, logger="terminal_info")
    names = [info.name for info in TerminalCatalog(_config(tmp_path))]

    assert names == ["linux", "vt100"]
    assert any("broken" in r.getMessage() for r in caplog.records if r.levelno == logging.WARNING)


def test_catalog_ends_with_windows_console(tmp_path):
    _install(tmp_path, "s/screen", "screen")

    infos = list(TerminalCatalog(_config(tmp_path, windows_console=True)))

    assert [i.name for i in infos] == ["screen", WINDOWS_CONSOLE_NAME]


def test_catalog_can_be_iterated_twice(tmp_path):
    _install(tmp_path, "s/screen", "screen")
    catalog = TerminalCatalog(_config(tmp_path), with_pseudo=False)

    assert [i.name for i in catalog] == [i.name for i in catalog] == ["screen"]


def test_defaults_come_from_the_environment(tmp_path, monkeypatch):
    _install(tmp_path, "v/vt100", "vt100")
    monkeypatch.setenv("TERMINFO", str(tmp_path))
    monkeypatch.setenv("TERM", "vt100")
    monkeypatch.delenv("TERMINFO_DIRS", raising=False)

    assert discovery.current_terminal().name == "vt100"
