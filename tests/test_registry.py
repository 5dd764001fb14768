"""Unit tests for the write-once result registry."""

import json
import threading

import pytest

pytestmark = pytest.mark.fast

from stereocode.registry import ResultRegistry


def test_record_and_get():
    registry = ResultRegistry()
    assert registry.record(1, "/src:unit/src:class[1]", "data-class")
    assert registry.get(1, "/src:unit/src:class[1]") == "data-class"
    assert registry.get(1, "/src:unit/src:class[2]") is None
    assert registry.get(7, "/src:unit/src:class[1]") is None
    assert (1, "/src:unit/src:class[1]") in registry
    assert (2, "/src:unit/src:class[1]") not in registry


def test_first_write_wins():
    registry = ResultRegistry()
    assert registry.record(1, "loc", "entity")
    assert not registry.record(1, "loc", "boundary")
    assert registry.get(1, "loc") == "entity"
    assert len(registry) == 1


def test_same_location_in_different_units():
    registry = ResultRegistry()
    registry.record(1, "loc", "get")
    registry.record(2, "loc", "set")
    assert registry.unit(1) == {"loc": "get"}
    assert registry.unit(2) == {"loc": "set"}
    assert registry.unit_ids() == [1, 2]


def test_unit_returns_a_copy():
    registry = ResultRegistry()
    registry.record(1, "loc", "get")
    registry.unit(1)["loc"] = "tampered"
    assert registry.get(1, "loc") == "get"


def test_items_are_ordered_by_unit():
    registry = ResultRegistry()
    registry.record(3, "a", "empty")
    registry.record(1, "b", "get")
    registry.record(1, "c", "set")
    assert list(registry.items()) == [(1, "b", "get"), (1, "c", "set"), (3, "a", "empty")]


def test_json_export(tmp_path):
    registry = ResultRegistry()
    registry.record(2, "loc", "factory")
    registry.record(1, "loc", "get")

    assert json.loads(registry.to_json()) == {"1": {"loc": "get"}, "2": {"loc": "factory"}}

    path = tmp_path / "stereotypes.json"
    registry.write_json(path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"1": {"loc": "get"}, "2": {"loc": "factory"}}


def test_concurrent_writers_keep_one_result_per_location():
    registry = ResultRegistry()
    stored = []
    barrier = threading.Barrier(8)

    def writer(worker: int):
        barrier.wait()
        for i in range(200):
            if registry.record(i % 5, f"loc{i}", f"worker{worker}"):
                stored.append((i % 5, f"loc{i}"))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(registry) == 200
    assert len(stored) == 200
    assert len(set(stored)) == 200
