"""
Module: compiler.writer

Purpose:
    Writes the public and answers banks to disk as JSON, holding an
    exclusive lock on each file while it is written so a concurrent
    reader (e.g. the serving layer reloading banks) never sees a
    half-written document.

Key Functions:
    - locked_file: Context manager for locked file access
    - write_banks: Write both banks, return their paths
    - load_bank: Read a bank file back into a Bank

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - qbank_toolkit.cli
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Generator

import portalocker

from ..core.models.bank import Bank

logger = logging.getLogger(__name__)

PUBLIC_BANK_FILENAME = "bank.public.v1.json"
ANSWERS_BANK_FILENAME = "bank.answers.v1.json"


@contextmanager
def locked_file(
    path: Path,
    mode: str = 'r',
    lock_type: int = portalocker.LOCK_EX,
) -> Generator:
    """
    Context manager for cross-platform locked file access.

    Args:
        path: Path to file.
        mode: File open mode ('r', 'w', 'a', etc.).
        lock_type: Lock type (LOCK_EX for exclusive, LOCK_SH for shared).

    Yields:
        Open file handle with lock held.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, mode, encoding='utf-8') as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


@dataclass(frozen=True)
class WrittenBanks:
    """Paths of the two bank files written by one build."""
    public_path: Path
    answers_path: Path


def _write_json(path: Path, data: dict) -> None:
    # 'a+' creates without truncating; the old content goes only once the lock is held
    with locked_file(path, 'a+', portalocker.LOCK_EX) as f:
        f.seek(0)
        f.truncate()
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write('\n')


def write_banks(public_bank: Bank, answers_bank: Bank, out_dir: Path) -> WrittenBanks:
    """
    Write both banks under ``out_dir``.

    Args:
        public_bank: Public bank (no grading data)
        answers_bank: Answers bank
        out_dir: Output directory (created if needed)

    Returns:
        WrittenBanks with both file paths

    Raises:
        ValueError: If the banks do not share subject, timestamp and order
    """
    if public_bank.uids != answers_bank.uids:
        raise ValueError("Public and answers banks must list the same uids in the same order")
    if (public_bank.subject, public_bank.generated_at) != (answers_bank.subject, answers_bank.generated_at):
        raise ValueError("Public and answers banks must share subject and generatedAt")

    written = WrittenBanks(
        public_path=out_dir / PUBLIC_BANK_FILENAME,
        answers_path=out_dir / ANSWERS_BANK_FILENAME,
    )
    _write_json(written.public_path, public_bank.to_dict())
    _write_json(written.answers_path, answers_bank.to_dict())
    logger.info(f"Wrote {len(public_bank)} questions to {out_dir}")
    return written


def load_bank(path: Path) -> Bank:
    """Read a bank file written by ``write_banks``."""
    with locked_file(path, 'r', portalocker.LOCK_SH) as f:
        return Bank.from_dict(json.load(f))
