"""Core data types for the TaskTrek backend."""

from typing import List, TypedDict, Union  # noqa: UP035


class _ChartDatasetBase(TypedDict):
    data: List[Union[int, float]]  # noqa: UP006


class ChartDataset(_ChartDatasetBase, total=False):
    """A Chart.js dataset."""

    label: str
    backgroundColor: Union[str, List[str]]  # noqa: UP006, UP007
    borderColor: str
    borderWidth: int
    fill: bool
    tension: float


class ChartData(TypedDict):
    """A Chart.js ``data`` object: labels plus datasets."""

    labels: List[str]  # noqa: UP006
    datasets: List[ChartDataset]  # noqa: UP006
