"""Session-scoped list of uploaded FeatureCollections."""

from typing import Any, Iterator

from geoupload.models import FeatureCollection

__all__ = ["DatasetList"]


class DatasetList:
    """
    Ordered list of uploaded datasets.

    Insertion order is upload order. Nothing is persisted; the list lives as
    long as the session that owns it.
    """

    def __init__(self) -> None:
        self._collections: list[FeatureCollection] = []

    def append(self, collection: FeatureCollection) -> int:
        """Add a dataset and return its index."""
        self._collections.append(collection)
        return len(self._collections) - 1

    def remove(self, index: int) -> FeatureCollection:
        """
        Remove and return the dataset at ``index``.

        Raises:
            IndexError: If ``index`` is out of range (negative indexes included)
        """
        if not 0 <= index < len(self._collections):
            raise IndexError(f"No dataset at index {index} ({len(self)} uploaded)")
        return self._collections.pop(index)

    def clear(self) -> None:
        self._collections.clear()

    def labels(self) -> list[str]:
        """Display labels: "Dataset 1", "Dataset 2", ..."""
        return [f"Dataset {i + 1}" for i in range(len(self._collections))]

    def to_geojson(self) -> list[dict[str, Any]]:
        return [collection.to_geojson() for collection in self._collections]

    def __len__(self) -> int:
        return len(self._collections)

    def __iter__(self) -> Iterator[FeatureCollection]:
        return iter(self._collections)

    def __getitem__(self, index: int) -> FeatureCollection:
        return self._collections[index]
