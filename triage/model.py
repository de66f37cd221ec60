# triage/model.py

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class FileKind(Enum):
    """Sensitive file kinds recognised from header bytes."""
    UNKNOWN = "unknown"
    MULTIBIT_WALLET = "multibit-wallet"
    ARMORED_PGP_PUBLIC_KEY = "armored-pgp-public-key"
    SQLITE_DATABASE = "sqlite-database"
    TELEGRAM_DESKTOP_FILE = "telegram-desktop-file"
    TELEGRAM_DESKTOP_ENCRYPTED_FILE = "telegram-desktop-encrypted-file"
    JAVA_KEY_STORE = "java-key-store"
    PUTTY_PRIVATE_KEY_V2 = "putty-private-key-v2"
    PUTTY_PRIVATE_KEY_V3 = "putty-private-key-v3"
    OPENSSH_PRIVATE_KEY = "openssh-private-key"
    WINDOWS_REGISTRY_HIVE = "windows-registry-hive"


@dataclass(frozen=True)
class Signature:
    """One row of the signature catalog."""
    kind: FileKind
    magic: bytes       # exact prefix the header must start with
    min_length: int    # minimum header length for a match
    description: str


@dataclass(frozen=True)
class ScanDecision:
    """Outcome of the directory walk for a single file."""
    path: Path
    selected_by: str   # one of: extension | text | "" (skipped)
    skip_reason: str = ""

    @property
    def included(self) -> bool:
        return bool(self.selected_by)


@dataclass
class TriageRow:
    """Represents a row in the triage report CSV."""
    path: str
    size_bytes: int
    selected_by: str
    kind: str
    header_bytes: int
    header_entropy: float
    error: str
