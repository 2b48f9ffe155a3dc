"""Tests for the record store and record normalization."""

import threading

import pytest
import requests

from core import data
from core.data import RecordStore, StoreUnavailableError, frame_to_records, normalize_records
from tests.fakes import SAMPLE_RECORDS, make_records


class _Response:
    def __init__(self, payload, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")

    def json(self):
        return self._payload


def test_normalize_records_coerces_types() -> None:
    df = normalize_records(
        [
            {"id": "7", "title": None, "price": "12.5", "sold": "true", "dateOfSale": "2021-10-27T20:29:54.000Z", "extra": 1},
        ]
    )

    assert list(df.columns) == data.RECORD_COLUMNS
    row = frame_to_records(df)[0]
    assert row["id"] == 7
    assert row["title"] == ""
    assert row["price"] == 12.5
    assert row["sold"] is True
    assert row["dateOfSale"].startswith("2021-10-27T20:29:54")


def test_normalize_records_handles_empty_input() -> None:
    df = normalize_records([])

    assert df.empty
    assert list(df.columns) == data.RECORD_COLUMNS


def test_month_mask_ignores_year(records) -> None:
    march = records[data.month_mask(records, 3)]

    assert sorted(march["id"].tolist()) == [1, 2]


def test_month_mask_uses_utc_month(records) -> None:
    # 2021-03-27T20:29:54+05:30 is still March in UTC.
    assert 1 in records[data.month_mask(records, 3)]["id"].tolist()


def test_month_mask_without_month_matches_nothing(records) -> None:
    assert not data.month_mask(records, None).any()


def test_replace_swaps_whole_set(store) -> None:
    store.replace(make_records(3, month=7))

    snapshot = store.snapshot()
    assert len(snapshot) == 3
    assert set(snapshot["title"]) == {"Item 1", "Item 2", "Item 3"}
    assert "Fjallraven Backpack" not in set(snapshot["title"])


def test_replace_does_not_touch_previous_snapshot(store) -> None:
    before = store.snapshot()
    store.replace(make_records(2))

    assert len(before) == len(SAMPLE_RECORDS)
    assert len(store.snapshot()) == 2


def test_initialize_from_source_replaces_records(monkeypatch, store) -> None:
    calls = []

    def _fake_get(url, timeout):
        calls.append((url, timeout))
        return _Response(make_records(4, month=5))

    monkeypatch.setattr(data.requests, "get", _fake_get)

    count = store.initialize_from_source("https://example.com/tx.json", timeout=3)

    assert count == 4
    assert calls == [("https://example.com/tx.json", 3)]
    assert len(store.snapshot()) == 4
    assert store.snapshot()["dateOfSale"].dt.month.eq(5).all()


def test_initialize_failure_keeps_old_records(monkeypatch, store) -> None:
    monkeypatch.setattr(data.requests, "get", lambda url, timeout: _Response([], status_code=503))

    with pytest.raises(StoreUnavailableError):
        store.initialize_from_source("https://example.com/tx.json", timeout=1)

    assert len(store.snapshot()) == len(SAMPLE_RECORDS)


def test_initialize_rejects_non_list_payload(monkeypatch, store) -> None:
    monkeypatch.setattr(data.requests, "get", lambda url, timeout: _Response({"items": []}))

    with pytest.raises(StoreUnavailableError):
        store.initialize_from_source("https://example.com/tx.json", timeout=1)


def test_initialize_wraps_network_errors(monkeypatch, store) -> None:
    def _boom(url, timeout):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(data.requests, "get", _boom)

    with pytest.raises(StoreUnavailableError):
        store.initialize_from_source("https://example.com/tx.json", timeout=1)


def test_readers_never_see_mixed_sets() -> None:
    old = make_records(50, month=1)
    new = make_records(80, month=2)
    store = RecordStore()
    store.replace(old)
    seen = []

    def _reader() -> None:
        for _ in range(200):
            months = set(store.snapshot()["dateOfSale"].dt.month)
            seen.append((len(store.snapshot()), frozenset(months)))

    reader = threading.Thread(target=_reader)
    reader.start()
    for _ in range(20):
        store.replace(new)
        store.replace(old)
    reader.join()

    for _, months in seen:
        assert months in {frozenset({1}), frozenset({2})}


def test_snapshot_round_trips_through_file(tmp_path) -> None:
    path = tmp_path / "snapshot" / "transactions.json"
    store = RecordStore(snapshot_path=path)
    store.replace(SAMPLE_RECORDS)

    restored = RecordStore(snapshot_path=path)
    assert restored.load_snapshot() == len(SAMPLE_RECORDS)
    assert frame_to_records(restored.snapshot()) == frame_to_records(store.snapshot())


def test_load_snapshot_without_file_is_noop(tmp_path) -> None:
    store = RecordStore(snapshot_path=tmp_path / "missing.json")

    assert store.load_snapshot() == 0
    assert store.snapshot().empty


def test_unreadable_snapshot_raises(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreUnavailableError):
        RecordStore(snapshot_path=path).load_snapshot()
