"""
Unit tests for the session dataset list.
"""

import pytest

from geoupload.datasets import DatasetList
from geoupload.models import FeatureCollection


@pytest.fixture
def datasets(sample_collection):
    dataset_list = DatasetList()
    dataset_list.append(sample_collection)
    dataset_list.append(FeatureCollection())
    return dataset_list


def test_append_returns_index(sample_collection):
    dataset_list = DatasetList()

    assert dataset_list.append(sample_collection) == 0
    assert dataset_list.append(sample_collection) == 1
    assert len(dataset_list) == 2


def test_labels_follow_upload_order(datasets):
    assert datasets.labels() == ["Dataset 1", "Dataset 2"]


def test_remove_shifts_later_datasets(datasets, sample_collection):
    removed = datasets.remove(0)

    assert removed is sample_collection
    assert len(datasets) == 1
    assert datasets[0].features == []
    assert datasets.labels() == ["Dataset 1"]


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_remove_out_of_range(datasets, index):
    with pytest.raises(IndexError):
        datasets.remove(index)
    assert len(datasets) == 2


def test_clear(datasets):
    datasets.clear()

    assert len(datasets) == 0
    assert list(datasets) == []


def test_to_geojson(datasets):
    documents = datasets.to_geojson()

    assert [doc["type"] for doc in documents] == ["FeatureCollection", "FeatureCollection"]
    assert len(documents[0]["features"]) == 2
