"""Ledger attachments: one ledger per subject, plus persistence."""

import logging
import re
import threading
from pathlib import Path

from eternalcurrencies.core.journal import TransactionJournal
from eternalcurrencies.core.ledger import Ledger

logger = logging.getLogger(__name__)

SNAPSHOT_SUFFIX = ".json"

_SUBJECT_RE = re.compile(r"[A-Za-z0-9_.-]+")


def validate_subject(subject: str) -> str:
    """Subject ids must be non-empty and safe to use as file names."""
    if not _SUBJECT_RE.fullmatch(subject) or subject in (".", ".."):
        raise ValueError(f"Invalid subject id: {subject!r}")
    return subject


class LedgerAttachments:
    """Owns the ledger of every live subject.

    The internal lock guards the subject map only; ledger operations run
    outside it, so unrelated subjects never contend.
    """

    def __init__(self, journal: TransactionJournal | None = None) -> None:
        self.journal = journal
        self._ledgers: dict[str, Ledger] = {}
        self._lock = threading.Lock()

    def attach(self, subject: str) -> Ledger:
        """Create the subject's ledger, or return the existing one."""
        validate_subject(subject)
        with self._lock:
            ledger = self._ledgers.get(subject)
            if ledger is None:
                ledger = Ledger(subject, journal=self.journal)
                self._ledgers[subject] = ledger
                logger.debug("Attached ledger for %s", subject)
            return ledger

    def get(self, subject: str) -> Ledger | None:
        """The subject's ledger, or None if it has none."""
        with self._lock:
            return self._ledgers.get(subject)

    def detach(self, subject: str) -> Ledger | None:
        """Remove the subject's ledger; returns it, or None if absent."""
        with self._lock:
            ledger = self._ledgers.pop(subject, None)
        if ledger is not None:
            logger.debug("Detached ledger for %s", subject)
        return ledger

    def subjects(self) -> list[str]:
        """Ids of all subjects with an attached ledger, sorted."""
        with self._lock:
            return sorted(self._ledgers)

    def __contains__(self, subject: object) -> bool:
        with self._lock:
            return subject in self._ledgers

    def __len__(self) -> int:
        with self._lock:
            return len(self._ledgers)

    def save(self, subject: str) -> bytes | None:
        """Serialized ledger for subject, or None if it has none."""
        ledger = self.get(subject)
        return ledger.serialize() if ledger is not None else None

    def restore(self, subject: str, data: bytes) -> Ledger:
        """Load the subject's ledger from data, attaching it if needed.

        A subject without a ledger only gains one once data decodes, so a
        failed restore leaves the attachments as they were.
        """
        validate_subject(subject)
        existing = self.get(subject)
        if existing is not None:
            existing.deserialize(data)
            return existing
        ledger = Ledger(subject, journal=self.journal)
        ledger.deserialize(data)
        with self._lock:
            current = self._ledgers.setdefault(subject, ledger)
        if current is not ledger:
            current.deserialize(data)
        else:
            logger.debug("Attached restored ledger for %s", subject)
        return current

    def save_to(self, directory: str | Path) -> int:
        """Write every ledger to ``<directory>/<subject>.json``.

        Returns:
            Number of ledgers written
        """
        target = Path(directory)
        target.mkdir(parents=True, exist_ok=True)
        with self._lock:
            ledgers = list(self._ledgers.values())
        for ledger in ledgers:
            path = target / f"{ledger.subject}{SNAPSHOT_SUFFIX}"
            tmp = path.with_name(path.name + ".tmp")
            tmp.write_bytes(ledger.serialize())
            tmp.replace(path)
        logger.info("Saved %d ledgers to %s", len(ledgers), target)
        return len(ledgers)

    def load_from(self, directory: str | Path) -> int:
        """Restore every ``*.json`` snapshot found in directory.

        Every file is decoded before any ledger is touched; one bad file
        raises SnapshotError and nothing is loaded.

        Returns:
            Number of ledgers restored
        """
        source = Path(directory)
        staged: list[tuple[str, bytes]] = []
        for path in sorted(source.glob(f"*{SNAPSHOT_SUFFIX}")):
            subject = validate_subject(path.name[: -len(SNAPSHOT_SUFFIX)])
            data = path.read_bytes()
            Ledger(subject).deserialize(data)
            staged.append((subject, data))
        for subject, data in staged:
            self.restore(subject, data)
        logger.info("Loaded %d ledgers from %s", len(staged), source)
        return len(staged)
