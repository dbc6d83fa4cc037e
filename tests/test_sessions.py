# tests/test_sessions.py
# ------------------------------------------------------------
# Session store: snapshots, lookup errors, thread safety, library files.
#
from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

import pytest

from causeway.errors import InvalidInputError, SessionNotFoundError
from causeway.models import ConstructionMethod, DesignInput, TraceStep
from causeway.sessions import LIBRARY_VERSION, SessionStore
from causeway.structural import calculate


def test_save_and_load_round_trip(store, road_input, road_result):
    sid = store.save("Option A", road_input, road_result)
    session = store.load(sid)
    assert session.id == sid
    assert session.name == "Option A"
    assert session.inputs == road_input
    assert session.result == road_result
    assert session.timestamp.endswith("+00:00")


def test_default_name(store, road_input, road_result):
    sid = store.save(None, road_input, road_result)
    assert store.load(sid).name == f"Design_{sid[:8]}"


def test_loaded_snapshot_is_isolated(store, road_input, road_result):
    sid = store.save("A", road_input, road_result)
    loaded = store.load(sid)
    loaded.result.trace.append(TraceStep("x", "x", "x", "x", 0.0))
    assert len(store.load(sid).result.trace) == len(road_result.trace)


def test_unknown_id_raises(store):
    with pytest.raises(SessionNotFoundError) as exc:
        store.load("nope")
    assert isinstance(exc.value, LookupError)
    assert "nope" in str(exc.value)
    with pytest.raises(SessionNotFoundError):
        store.delete("nope")


def test_list_and_delete(store, road_input, road_result):
    a = store.save("A", road_input, road_result)
    b = store.save("B", road_input, road_result)
    assert [s.name for s in store.list()] == ["A", "B"]
    store.delete(a)
    assert a not in store
    assert b in store
    assert len(store) == 1


def test_concurrent_saves(store, road_input, road_result):
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda i: store.save(f"D{i}", road_input, road_result), range(50)))
    assert len(set(ids)) == 50
    assert len(store) == 50


def test_library_export_import(tmp_path, store, road_input, road_result):
    store.save("A", road_input, road_result)
    b_input = replace(road_input, soil_type="hard")
    store.save("B", b_input, calculate(b_input))

    path = tmp_path / "library.json"
    assert store.export_library(path) == 2

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["version"] == LIBRARY_VERSION
    assert "exportDate" in document
    assert document["metadata"]["totalDesigns"] == 2
    assert document["designs"][1]["inputs"]["soil_type"] == "hard"

    fresh = SessionStore()
    ids = fresh.import_library(path)
    assert len(ids) == 2
    imported = fresh.load(ids[1])
    assert imported.name == "B"
    assert imported.result.structural.soil_bearing_capacity == 300.0


def test_import_rejects_bad_format(tmp_path, store):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"foo": 1}), encoding="utf-8")
    with pytest.raises(ValueError):
        store.import_library(path)
    assert len(store) == 0


def test_save_rejects_inputs_not_matching_result(store, road_input, road_result):
    """A snapshot must pair a result with the inputs it was computed from."""
    with pytest.raises(InvalidInputError) as exc:
        store.save("A", replace(road_input, width=6.0), road_result)
    assert exc.value.field == "inputs"
    assert len(store) == 0


def _write_library(path, designs):
    path.write_text(json.dumps({"version": 1, "designs": designs}), encoding="utf-8")


def test_import_accepts_camel_case_inputs(tmp_path, store):
    """Libraries written with camelCase keys keep depth, soil and factor."""
    path = tmp_path / "legacy.json"
    _write_library(path, [{
        "name": "Flood-prone",
        "inputs": {"length": 120, "width": 8, "height": 4, "waterDepth": 3.5,
                   "soilType": "soft", "safetyFactor": 3.0},
    }])
    (sid,) = store.import_library(path)
    session = store.load(sid)
    assert session.inputs.water_depth == 3.5
    assert session.inputs.soil_type == "soft"
    assert session.inputs.safety_factor == 3.0
    assert session.result.recommendation.construction_method == ConstructionMethod.COFFERDAM


@pytest.mark.parametrize(
    "record, field",
    [
        ({"name": "x"}, "inputs"),
        ("not a record", "inputs"),
        ({"inputs": {"length": 120, "width": 8, "height": 4, "soil_type": "soft", "safety_factor": 3.0}},
         "water_depth"),
        ({"inputs": {"length": "long", "width": 8, "height": 4, "water_depth": 1.0,
                     "soil_type": "soft", "safety_factor": 3.0}}, "length"),
    ],
)
def test_import_rejects_incomplete_records(tmp_path, store, road_input, record, field):
    """Nothing is appended when any record is malformed."""
    good = {"name": "ok", "inputs": road_input.to_dict()}
    path = tmp_path / "broken.json"
    _write_library(path, [good, record])
    with pytest.raises(InvalidInputError) as exc:
        store.import_library(path)
    assert exc.value.field == field
    assert len(store) == 0


def test_from_dict_requires_all_but_load_type():
    data = {"length": 30, "width": 3, "height": 1.5, "water_depth": 1.0,
            "soil_type": "medium", "safety_factor": 2.5}
    assert DesignInput.from_dict(data).load_type == "light"
    with pytest.raises(InvalidInputError, match="safety_factor"):
        DesignInput.from_dict({k: v for k, v in data.items() if k != "safety_factor"})
