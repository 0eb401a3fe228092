"""Core module for the TaskTrek backend."""

from .batch import BoundedBatchWriter
from .types import ChartData, ChartDataset

__all__ = ["BoundedBatchWriter", "ChartData", "ChartDataset"]
