# triage/walk.py

from __future__ import annotations
import errno
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Set

from .header import is_printable_header, read_header
from .model import ScanDecision

logger = logging.getLogger(__name__)


def normalize_extensions(extensions: Iterable[str]) -> Set[str]:
    """Strip a leading dot from each extension; ``""`` stays for extensionless files."""
    return {ext[1:] if ext.startswith(".") else ext for ext in extensions}


def _extension_of(path: Path) -> str:
    return path.suffix[1:] if path.suffix else ""


def _check_root(root: Path) -> None:
    """Raise before walking when the root is missing or not a directory."""
    if not root.exists():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(root))
    if not root.is_dir():
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(root))


def _decide(path: Path, extensions: Set[str], include_text: bool) -> ScanDecision:
    """Apply the extension rule, then the text heuristic, to one regular file."""
    if _extension_of(path) in extensions:
        return ScanDecision(path, "extension")

    if not include_text:
        return ScanDecision(path, "", "extension-mismatch")

    try:
        head = read_header(path)
    except OSError as exc:
        return ScanDecision(path, "", f"{type(exc).__name__}: {exc}")

    if not head:
        return ScanDecision(path, "", "empty")
    if not is_printable_header(head):
        return ScanDecision(path, "", "control-bytes")
    return ScanDecision(path, "text")


def iter_decisions(
    root: Path | str,
    extensions: Iterable[str] = (),
    include_text: bool = False,
) -> Iterator[ScanDecision]:
    """Walk a directory tree lazily, yielding a decision for every regular file.

    The root is validated eagerly: the error is raised by this call, not on
    the first ``next()``. Unreadable directories and broken entries are
    skipped; symlinked directories are not followed.

    Args:
        root (Path | str): Directory to walk.
        extensions (Iterable[str]): Target extensions without the dot;
            ``""`` selects extensionless files.
        include_text (bool): Also select files whose header looks like text.

    Returns:
        Iterator[ScanDecision]: One decision per regular file, depth-first.

    Raises:
        FileNotFoundError: The root does not exist.
        NotADirectoryError: The root is not a directory.
    """
    root_path = Path(root)
    _check_root(root_path)
    return _walk(root_path, normalize_extensions(extensions), include_text)


def _walk(root: Path, extensions: Set[str], include_text: bool) -> Iterator[ScanDecision]:
    def _on_error(exc: OSError) -> None:
        logger.debug("Skipping unreadable directory %s: %s", exc.filename, exc)

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_on_error):
        for filename in filenames:
            path = Path(dirpath) / filename
            try:
                if not path.is_file():
                    continue
            except OSError as exc:
                logger.debug("Skipping %s: %s", path, exc)
                continue

            decision = _decide(path, extensions, include_text)
            if not decision.included:
                logger.debug("Skipped %s (%s)", path, decision.skip_reason)
            yield decision


def iter_files(
    root: Path | str,
    extensions: Iterable[str] = (),
    include_text: bool = False,
) -> Iterator[Path]:
    """Yield only the selected paths of ``iter_decisions``, in walk order."""
    decisions = iter_decisions(root, extensions, include_text)
    return (d.path for d in decisions if d.included)


def scan(
    root: Path | str,
    extensions: Iterable[str] = (),
    include_text: bool = False,
) -> Set[Path]:
    """Collect the set of candidate files under ``root``.

    A file is selected when its extension is in ``extensions`` or, with
    ``include_text``, when its header is non-empty and free of control bytes.

    Args:
        root (Path | str): Directory to scan recursively.
        extensions (Iterable[str]): Target extensions.
        include_text (bool): Enable the text heuristic.

    Returns:
        Set[Path]: Unique selected paths, joined onto ``root`` as given.
    """
    return set(iter_files(root, extensions, include_text))
