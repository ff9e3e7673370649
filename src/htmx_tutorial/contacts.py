from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from threading import Lock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Contact:
    name: str
    email: str

    def as_record(self) -> dict[str, str]:
        return asdict(self)


DEFAULT_CONTACT = Contact(name="Jane Doe", email="jane.doe@example.com")


class ContactStore:
    """Owns the one contact the click-to-edit exercise manipulates.

    Snapshots are immutable and swapped under a lock, so a reader sees either
    the whole old record or the whole new one.
    """

    def __init__(self, initial: Contact = DEFAULT_CONTACT) -> None:
        self._default = initial
        self._current = initial
        self._lock = Lock()

    def snapshot(self) -> Contact:
        with self._lock:
            return self._current

    def update(self, *, name: str, email: str) -> Contact:
        """Replace both fields at once and return the snapshot that was written."""
        written = Contact(name=name, email=email)
        with self._lock:
            self._current = written
        logger.info("Contact updated")
        return written

    def reset(self) -> Contact:
        with self._lock:
            self._current = self._default
        return self._default
