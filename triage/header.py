# triage/header.py

from __future__ import annotations
import errno
import os
from pathlib import Path

HEADER_SIZE = 64


def read_header(path: Path | str, size: int = HEADER_SIZE) -> bytes:
    """Read the leading bytes of a file.

    At most ``size`` bytes are returned; fewer only when the file itself is
    shorter (an empty file gives ``b""``). The file handle is closed before
    returning.

    Args:
        path (Path | str): File to read.
        size (int): Upper bound on the number of bytes read.

    Returns:
        bytes: The header bytes.

    Raises:
        FileNotFoundError: The path does not exist.
        IsADirectoryError: The path is a directory.
        PermissionError: The file is not readable.
        OSError: Any other I/O failure.
    """
    p = Path(path)
    if p.is_dir():
        raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), str(p))

    with p.open("rb") as f:
        head = f.read(size)
    return head


def is_printable_header(head: bytes) -> bool:
    """Return True when a non-empty header holds no control bytes (< 32 or DEL)."""
    if not head:
        return False
    return all(b >= 32 and b != 127 for b in head)
