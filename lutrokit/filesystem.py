"""Game-relative file access."""

from __future__ import annotations

import os


def user_directory() -> str:
    """The user's home directory, always ending with a slash."""
    home = os.environ.get("HOME") or os.environ.get("HOMEDRIVE") or "."
    if not home.endswith("/"):
        home += "/"
    return home


class GameFilesystem:
    """File operations with paths taken relative to a game directory."""

    def __init__(self, gamedir: str | os.PathLike[str]) -> None:
        self.gamedir = os.fspath(gamedir)
        self.identity = ""

    def resolve(self, path: str) -> str:
        """Full path of ``path``: the game directory with ``path`` appended."""
        return self.gamedir + path

    def read(self, path: str) -> tuple[str, int]:
        """Return the file's contents and the number of bytes read."""
        with open(self.resolve(path), "rb") as handle:
            raw = handle.read()
        return raw.decode("utf-8", "surrogateescape"), len(raw)

    def write(self, path: str, data: str) -> bool:
        """Replace the file's contents with ``data``."""
        with open(self.resolve(path), "w", encoding="utf-8", newline="") as handle:
            handle.write(data)
        return True

    def exists(self, path: str) -> bool:
        return os.path.exists(self.resolve(path))

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(self.resolve(path))

    def is_file(self, path: str) -> bool:
        full = self.resolve(path)
        return os.path.exists(full) and not os.path.isdir(full)

    def create_directory(self, path: str) -> bool:
        """Create the directory and any missing parents; return success."""
        try:
            os.makedirs(self.resolve(path), exist_ok=True)
        except OSError:
            return False
        return True

    def get_directory_items(self, path: str) -> list[str]:
        """Names of the entries in a directory, hidden ones included."""
        full = self.resolve(path)
        if not os.path.isdir(full):
            raise NotADirectoryError(
                f"The given directory of '{path}' is not a directory."
            )
        return sorted(name for name in os.listdir(full) if name not in (".", ".."))