from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Iterator, List, Mapping, Optional, Tuple

from . import pseudo
from .builtin import windows_console
from .decoder import decode
from .errors import FormatError
from .store import CapabilityStore
from .terminal import TerminalInfo

log = logging.getLogger(__name__)

DEFAULT_TERMINFO_DIR = "/usr/share/terminfo"

SYSTEM_DIRS: Tuple[str, ...] = (
    "/usr/share/misc/terminfo",
    "/usr/share/terminfo",
    "/usr/share/lib/terminfo",
    "/usr/lib/terminfo",
    "/usr/local/share/terminfo",
    "/usr/local/share/lib/terminfo",
    "/usr/local/lib/terminfo",
    "/usr/local/ncurses/lib/terminfo",
    "/lib/terminfo",
    "/etc/terminfo",
)

# ncurses refuses larger compiled entries.
MAX_ENTRY_SIZE = 32768


@dataclass(frozen=True)
class SearchConfig:
    terminfo: Optional[str] = None
    home: Optional[str] = None
    user_home: Optional[str] = None
    terminfo_dirs: Tuple[str, ...] = ()
    system_dirs: Tuple[str, ...] = SYSTEM_DIRS
    term: Optional[str] = None
    windows_console: bool = False
    max_entry_size: int = MAX_ENTRY_SIZE

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        platform: Optional[str] = None,
    ) -> "SearchConfig":
        env = os.environ if environ is None else environ
        platform = sys.platform if platform is None else platform
        on_windows = platform.startswith("win")

        dirs: Tuple[str, ...] = ()
        raw_dirs = env.get("TERMINFO_DIRS")
        if raw_dirs is not None:
            # An empty element stands for the compiled-in default.
            dirs = tuple(d or DEFAULT_TERMINFO_DIR for d in raw_dirs.split(os.pathsep))

        user_home = os.path.expanduser("~")
        return cls(
            terminfo=env.get("TERMINFO") or None,
            home=env.get("HOME") or None,
            user_home=None if user_home == "~" else user_home,
            terminfo_dirs=dirs,
            system_dirs=() if on_windows else SYSTEM_DIRS,
            term=env.get("TERM") or None,
            windows_console=on_windows,
        )

    def search_dirs(self) -> List[str]:
        """Existing directories to search, in priority order, without duplicates."""
        candidates: List[str] = []
        if self.terminfo:
            candidates.append(self.terminfo)
        if self.home:
            candidates.append(os.path.join(self.home, ".terminfo"))
        if self.user_home:
            candidates.append(os.path.join(self.user_home, ".terminfo"))
        candidates.extend(self.terminfo_dirs)
        candidates.extend(self.system_dirs)

        seen = set()
        out: List[str] = []
        for d in candidates:
            if d in seen:
                continue
            seen.add(d)
            if os.path.isdir(d):
                out.append(d)
        return out


def relative_paths(name: str) -> List[str]:
    """
    Places a compiled entry for `name` may live under one search directory:
    flat, first-letter subdirectory, hex-coded first letter (case-insensitive
    filesystems) and two-letter subdirectory.
    """
    if not name:
        return []
    paths = [name, os.path.join(name[0], name), os.path.join(f"{ord(name[0]):02x}", name)]
    if len(name) >= 2:
        paths.append(os.path.join(name[:2], name))
    return paths


def candidate_paths(name: str, config: SearchConfig) -> Iterator[str]:
    if not name or "/" in name or name in (".", ".."):
        return
    for directory in config.search_dirs():
        for rel in relative_paths(name):
            path = os.path.join(directory, rel)
            if os.path.isfile(path):
                yield path


def _read_entry(path: str, max_size: int) -> bytes:
    with open(path, "rb") as f:
        data = f.read(max_size + 1)
    if len(data) > max_size:
        raise FormatError(f"{path}: larger than {max_size} bytes")
    return data


def read_store(path: str, with_pseudo: bool = True, max_size: int = MAX_ENTRY_SIZE) -> CapabilityStore:
    """
    Decode the compiled entry at `path`. With `with_pseudo` the file name is
    put first among the aliases and pseudo-capabilities are added.
    Raises FormatError or OSError.
    """
    store = decode(_read_entry(path, max_size), source_path=os.path.abspath(path))
    if not with_pseudo:
        return store
    file_name = os.path.basename(path)
    names = (file_name,) + tuple(n for n in store.terminal_names if n != file_name)
    store, _ = pseudo.augment(store.derive(terminal_names=names))
    return store


def read_terminal(path: str, with_pseudo: bool = True) -> TerminalInfo:
    return TerminalInfo(read_store(path, with_pseudo=with_pseudo))


def windows_terminal(with_pseudo: bool = True) -> TerminalInfo:
    store = windows_console()
    if with_pseudo:
        store, _ = pseudo.augment(store)
    return TerminalInfo(store)


def find_terminal(
    name: str, config: Optional[SearchConfig] = None, with_pseudo: bool = True
) -> Optional[TerminalInfo]:
    """
    First entry for `name` along the search path that decodes, or None.
    Unreadable or malformed candidates are logged and skipped.
    """
    config = SearchConfig.from_env() if config is None else config
    for path in candidate_paths(name, config):
        try:
            store = read_store(path, with_pseudo=with_pseudo, max_size=config.max_entry_size)
        except (OSError, FormatError) as e:
            log.debug("skipping %s: %s", path, e)
            continue
        log.debug("terminal %s resolved to %s", name, path)
        return TerminalInfo(store)
    return None


def current_terminal(config: Optional[SearchConfig] = None, with_pseudo: bool = True) -> Optional[TerminalInfo]:
    """
    The terminal named by TERM, or the Windows console definition on Windows
    when TERM does not resolve. Each call builds a new, independent instance.
    """
    config = SearchConfig.from_env() if config is None else config
    if config.term:
        found = find_terminal(config.term, config, with_pseudo=with_pseudo)
        if found is not None:
            return found
        log.info("no terminfo entry found for TERM=%s", config.term)
    if config.windows_console:
        return windows_terminal(with_pseudo=with_pseudo)
    return None


class TerminalCatalog:
    """
    Every installed terminal description, decoded lazily.

    Iterating walks the search directories again each time. Files that do
    not decode are logged and skipped; on Windows the console definition
    comes last.
    """

    def __init__(self, config: Optional[SearchConfig] = None, with_pseudo: bool = True):
        self.config = SearchConfig.from_env() if config is None else config
        self.with_pseudo = with_pseudo

    def paths(self) -> Iterator[str]:
        for directory in self.config.search_dirs():
            for root, dirs, files in os.walk(directory):
                dirs.sort()
                for file_name in sorted(files):
                    yield os.path.join(root, file_name)

    def __iter__(self) -> Iterator[TerminalInfo]:
        for path in self.paths():
            if not os.path.isfile(path):
                continue
            try:
                store = read_store(path, with_pseudo=self.with_pseudo, max_size=self.config.max_entry_size)
            except (OSError, FormatError) as e:
                log.warning("skipping %s: %s", path, e)
                continue
            yield TerminalInfo(store)
        if self.config.windows_console:
            yield windows_terminal(with_pseudo=self.with_pseudo)
