from __future__ import annotations

import os
import stat as statmod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol


@dataclass(slots=True, frozen=True)
class StatResult:
    size: int
    is_dir: bool
    is_file: bool


@dataclass(slots=True, frozen=True)
class DirEntry:
    path: str
    name: str
    stat: StatResult | None = None


class FileSystem(Protocol):
    def home(self) -> str: ...

    def expanduser(self, path: str) -> str: ...

    def exists(self, path: str) -> bool: ...

    def canonical(self, path: str) -> str: ...

    def stat(self, path: str) -> StatResult: ...

    def scandir(self, path: str) -> Iterable[DirEntry]: ...

    def read_bytes(self, path: str) -> bytes: ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...


def _to_stat(st: os.stat_result) -> StatResult:
    return StatResult(
        size=st.st_size,
        is_dir=statmod.S_ISDIR(st.st_mode),
        is_file=statmod.S_ISREG(st.st_mode),
    )


class OsFileSystem:
    def home(self) -> str:
        return str(Path.home())

    def expanduser(self, path: str) -> str:
        return str(Path(path).expanduser())

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def canonical(self, path: str) -> str:
        return os.path.realpath(path)

    def stat(self, path: str) -> StatResult:
        return _to_stat(os.stat(path, follow_symlinks=False))

    def scandir(self, path: str) -> Iterable[DirEntry]:
        with os.scandir(path) as entries:
            for e in entries:
                try:
                    sr: StatResult | None = _to_stat(e.stat(follow_symlinks=False))
                except OSError:
                    sr = None
                yield DirEntry(path=e.path, name=e.name, stat=sr)

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)


DEFAULT_FS: FileSystem = OsFileSystem()
