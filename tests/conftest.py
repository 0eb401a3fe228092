"""Common utilities for tests."""

import unittest.mock
from typing import Any, Optional

from mockfirestore import CollectionReference, Query


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore to support FieldFilter."""

    def collection_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:  # noqa: E501
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(CollectionReference, "_where"):
        CollectionReference._where = CollectionReference.where
        CollectionReference.where = collection_where

    def query_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(Query, "_where"):
        Query._where = Query.where
        Query.where = query_where


class MockBatch:
    def __init__(self, db: Any) -> None:
        self.db = db
        self.updates: list[tuple[Any, Any]] = []
        self.commit = unittest.mock.MagicMock(side_effect=self._real_commit)

    def update(self, ref: Any, data: Any) -> None:
        self.updates.append((ref, data))

    def set(self, ref: Any, data: Any, merge: bool = False) -> None:
        # For set with merge=True, it's like update.
        # For simplicity in tests, we just update.
        self.updates.append((ref, data))

    def delete(self, ref: Any) -> None:
        self.updates.append((ref, "DELETE"))

    def _real_commit(self) -> None:
        for ref, data in self.updates:
            if data == "DELETE":
                ref.delete()
            else:
                ref.update(data)


def make_snapshot(
    doc_id: str, data: Optional[dict[str, Any]] = None, exists: bool = True
) -> unittest.mock.MagicMock:
    """Build a MagicMock standing in for a Firestore DocumentSnapshot."""
    snapshot = unittest.mock.MagicMock()
    snapshot.id = doc_id
    snapshot.exists = exists
    snapshot.to_dict.return_value = dict(data) if exists and data is not None else None
    return snapshot


def make_db(*names: str) -> tuple[unittest.mock.MagicMock, dict[str, Any]]:
    """Build a MagicMock client whose collection() returns one mock per name."""
    collections = {name: unittest.mock.MagicMock(name=name) for name in names}
    db = unittest.mock.MagicMock()
    db.collection.side_effect = lambda name: collections[name]
    return db, collections
