"""Lifecycle of generated project files: remove the old one, write the new one."""

import os
import tempfile
from pathlib import Path

from dvops.core.exceptions import WriteFailedError


def ensure_clean(path: Path) -> bool:
    """Delete any existing file at ``path``.

    Returns:
        True if a file was removed, False if there was nothing to remove

    Raises:
        WriteFailedError: If the file exists but cannot be removed
    """
    if not path.is_file():
        return False
    try:
        path.unlink()
    except OSError as e:
        raise WriteFailedError(f"Failed to remove project file: {path}", str(path), {"error": str(e)})
    return True


def write(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` through a temporary file and a rename.

    A reader never sees a half-written file at ``path``.

    Raises:
        WriteFailedError: If the directory cannot be created or the write fails
    """
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise WriteFailedError(f"Failed to write project file: {path}", str(path), {"error": str(e)})
