import os

import pytest


@pytest.fixture
def search_root(tmp_path):
    """Tree with five .txt, five .bin, five .doc and five extensionless files.

    Text heuristic outcome: 4.txt has a newline, every .bin holds NUL bytes and
    0.doc is empty, so 13 files look like text.
    """
    root = tmp_path / "sweep"
    for sub in ("txt", "bin", "doc", "noext"):
        (root / sub).mkdir(parents=True)

    for i in range(5):
        body = f"plain text number {i}" if i < 4 else "first line\nsecond line"
        (root / "txt" / f"{i}.txt").write_text(body)
        (root / "bin" / f"{i}.bin").write_bytes(bytes([0, i, 255, 7]) * 8)
        (root / "doc" / f"{i}.doc").write_text("" if i == 0 else f"document {i}")
        (root / "noext" / f"{i}").write_text(f"readme {i}")
    return root


def paths_under(root, sub, names):
    return {root / sub / n for n in names}


running_as_root = hasattr(os, "geteuid") and os.geteuid() == 0
