"""Tests for the bounded batch writer."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

from tasktrek import create_app
from tasktrek.core.batch import BoundedBatchWriter


class BoundedBatchWriterTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.app = create_app({"TESTING": True})
        self.app_context = self.app.app_context()
        self.app_context.push()

        self.batches: list[MagicMock] = []

        def new_batch() -> MagicMock:
            batch = MagicMock()
            self.batches.append(batch)
            return batch

        self.db = MagicMock()
        self.db.batch.side_effect = new_batch

    def tearDown(self) -> None:
        self.app_context.pop()

    def _committed_sizes(self) -> list[int]:
        sizes = []
        for batch in self.batches:
            if batch.commit.called:
                sizes.append(
                    len(batch.delete.call_args_list)
                    + len(batch.update.call_args_list)
                    + len(batch.set.call_args_list)
                )
        return sizes

    def test_flushes_at_limit_and_on_close(self) -> None:
        writer = BoundedBatchWriter(self.db, limit=3)
        for i in range(7):
            writer.delete(f"ref{i}")
        self.assertEqual(self._committed_sizes(), [3, 3])

        total = writer.close()

        self.assertEqual(total, 7)
        self.assertEqual(self._committed_sizes(), [3, 3, 1])
        self.assertEqual(writer.commits, 3)

    def test_default_limit_never_exceeds_499(self) -> None:
        writer = BoundedBatchWriter(self.db)
        for i in range(1200):
            if i % 2:
                writer.update(f"ref{i}", {"activeGroupId": None})
            else:
                writer.delete(f"ref{i}")
        writer.close()

        sizes = self._committed_sizes()
        self.assertEqual(sum(sizes), 1200)
        self.assertTrue(all(size <= 499 for size in sizes))
        self.assertEqual(sizes, [499, 499, 202])

    def test_set_passes_merge_flag_and_close_skips_empty_batch(self) -> None:
        writer = BoundedBatchWriter(self.db, limit=2)
        writer.set("a", {"x": 1})
        writer.set("b", {"x": 2}, merge=True)

        self.assertEqual(writer.close(), 2)
        self.assertEqual(self._committed_sizes(), [2])
        self.batches[0].set.assert_called_with("b", {"x": 2}, merge=True)

    def test_context_manager_flushes_on_success(self) -> None:
        with BoundedBatchWriter(self.db, limit=10) as writer:
            writer.delete("a")
        self.batches[0].commit.assert_called_once()

    def test_context_manager_skips_flush_on_error(self) -> None:
        with self.assertRaises(RuntimeError):
            with BoundedBatchWriter(self.db, limit=10) as writer:
                writer.delete("a")
                raise RuntimeError("boom")
        self.batches[0].commit.assert_not_called()

    def test_rejects_limit_above_ceiling(self) -> None:
        with self.assertRaises(ValueError):
            BoundedBatchWriter(self.db, limit=501)
        with self.assertRaises(ValueError):
            BoundedBatchWriter(self.db, limit=0)


if __name__ == "__main__":
    unittest.main()
