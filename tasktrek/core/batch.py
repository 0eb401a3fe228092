"""Bounded write batches for Firestore."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import current_app

from .constants import FIRESTORE_BATCH_CEILING, FIRESTORE_BATCH_LIMIT

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


class BoundedBatchWriter:
    """Accumulate writes and commit whenever the pending batch reaches ``limit``.

    Usage:
    with BoundedBatchWriter(db) as writer:
        for doc in docs:
            writer.delete(doc.reference)

    Leaving the block normally commits whatever is still pending. Leaving it
    with an exception commits nothing further.
    """

    def __init__(self, db: Client, limit: int = FIRESTORE_BATCH_LIMIT) -> None:
        """Initialize the writer."""
        if not 1 <= limit <= FIRESTORE_BATCH_CEILING:
            raise ValueError(
                f"Batch limit must be between 1 and {FIRESTORE_BATCH_CEILING}."
            )
        self.db = db
        self.limit = limit
        self.pending = 0
        self.written = 0
        self.commits = 0
        self._batch = db.batch()

    def delete(self, ref: Any) -> None:
        """Queue a document deletion."""
        self._batch.delete(ref)
        self._added()

    def update(self, ref: Any, data: dict[str, Any]) -> None:
        """Queue a partial document update."""
        self._batch.update(ref, data)
        self._added()

    def set(self, ref: Any, data: dict[str, Any], merge: bool = False) -> None:
        """Queue a document write."""
        self._batch.set(ref, data, merge=merge)
        self._added()

    def _added(self) -> None:
        self.pending += 1
        if self.pending >= self.limit:
            current_app.logger.warning(
                f"Batch limit ({self.limit}) reached, committing and starting new batch."
            )
            self.flush()

    def flush(self) -> None:
        """Commit the pending batch, if any, and start a fresh one."""
        if self.pending == 0:
            return
        self._batch.commit()
        self.commits += 1
        self.written += self.pending
        self.pending = 0
        self._batch = self.db.batch()

    def close(self) -> int:
        """Commit the remainder and return the total number of writes."""
        if self.pending:
            current_app.logger.info(
                f"Committing final batch with {self.pending} operations."
            )
        self.flush()
        return self.written

    def __enter__(self) -> BoundedBatchWriter:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if exc_type is None:
            self.close()
