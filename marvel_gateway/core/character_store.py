"""Local Character Store — ordered, in-memory CRUD over character records.

Invariants:
    - ids are str(counter), counter starts at 1 and only ever increases
    - A deleted id is never handed out again
    - Insertion order of _records is the listing order; update keeps position
    - A rejected create does not advance the counter
    - Caller payloads never overwrite id, createdAt or updatedAt

Design Decisions:
    - Explicit store object owned by the app (app.state), no module-level list
    - threading.Lock around read-modify-write so the counter stays monotonic
      even when called from a worker thread
    - Clock injected for deterministic timestamps in tests
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from pydantic import ValidationError

from marvel_gateway.core.errors import (
    OBJECT_BODY_MESSAGE,
    CharacterNotFoundError,
    CharacterValidationError,
)
from marvel_gateway.schemas.character import CharacterRecord, strip_server_owned

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class CharacterPage:
    """One slice of the store plus the unsliced size."""
    results: list[CharacterRecord]
    total: int

    def to_dict(self) -> dict:
        return {
            "results": [r.to_dict() for r in self.results],
            "total": self.total,
        }


class CharacterStore:
    """In-memory character collection with monotonic string ids."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        self._records: list[CharacterRecord] = []
        self._next_id = 1
        self._clock = clock
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    @property
    def next_id(self) -> int:
        return self._next_id

    def list_page(self, skip: int, limit: int) -> CharacterPage:
        """Slice [skip, skip + limit); negative values count as 0."""
        skip = max(skip, 0)
        limit = max(limit, 0)
        with self._lock:
            return CharacterPage(
                results=self._records[skip:skip + limit],
                total=len(self._records),
            )

    def create(self, payload: Any) -> CharacterRecord:
        """Append a new record built from `payload`; requires a truthy name."""
        if not isinstance(payload, dict) or not payload.get("name"):
            raise CharacterValidationError()

        with self._lock:
            try:
                record = CharacterRecord.model_validate({
                    **strip_server_owned(payload),
                    "id": str(self._next_id),
                    "createdAt": format_timestamp(self._clock()),
                })
            except ValidationError as e:
                logger.info(f"Rejected character payload: {e.error_count()} error(s)")
                raise CharacterValidationError()
            self._next_id += 1
            self._records.append(record)

        logger.info(
            f"Created local character {record.id}",
            extra={"character_id": record.id},
        )
        return record

    def update(self, character_id: str, payload: Any) -> CharacterRecord:
        """Shallow-merge `payload` over the record and stamp updatedAt."""
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise CharacterValidationError(OBJECT_BODY_MESSAGE)

        with self._lock:
            idx = self._index_of(character_id)
            current = self._records[idx]
            try:
                merged = CharacterRecord.model_validate({
                    **current.to_dict(),
                    **strip_server_owned(payload),
                    "updatedAt": format_timestamp(self._clock()),
                })
            except ValidationError:
                raise CharacterValidationError()
            self._records[idx] = merged

        logger.info(
            f"Updated local character {character_id}",
            extra={"character_id": character_id},
        )
        return merged

    def delete(self, character_id: str) -> CharacterRecord:
        """Remove exactly one record and return it."""
        with self._lock:
            idx = self._index_of(character_id)
            removed = self._records.pop(idx)

        logger.info(
            f"Deleted local character {character_id}",
            extra={"character_id": character_id},
        )
        return removed

    def _index_of(self, character_id: str) -> int:
        for idx, record in enumerate(self._records):
            if record.id == character_id:
                return idx
        raise CharacterNotFoundError(character_id)
