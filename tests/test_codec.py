"""Tests for the record codec."""
import json

import pytest

from winechain.core.codec import (
    decode_device,
    decode_wine,
    encode_audit_record,
    encode_device,
    encode_wine,
)
from winechain.core.errors import MalformedRecord
from winechain.models import AuditRecord, Device, DeviceStatus, Wine, WineHistory

WINE = Wine(
    owner="alice",
    model="M1",
    produce_date="2020-01-01",
    produce_place="PlaceA",
    out_date="2020-06-01",
    out_place="PlaceB",
    device_id="D1",
)


@pytest.mark.parametrize("status", [DeviceStatus.ENROLLED, DeviceStatus.BOUND])
def test_device_round_trip(status):
    device = Device(id="D1", model="X1", brand="Acme", status=status)
    assert decode_device(encode_device(device)) == device


def test_wine_round_trip_keeps_unicode_and_empty_fields():
    wine = Wine("Zoë", "", "2020", "Château Margaux", "", "Bordeaux", "D-ü")
    assert decode_wine(encode_wine(wine)) == wine


def test_wine_wire_field_names():
    data = json.loads(encode_wine(WINE))
    assert data == {
        "owner": "alice",
        "model": "M1",
        "produce_date": "2020-01-01",
        "produce_place": "PlaceA",
        "out_date": "2020-06-01",
        "out_place": "PlaceB",
        "device_uid": "D1",
    }


def test_legacy_bind_status_decodes_as_bound():
    raw = b'{"uid":"D1","model":"X1","brand":"Acme","status":"bind"}'
    assert decode_device(raw).status is DeviceStatus.BOUND


def test_unenrolled_device_cannot_be_encoded():
    with pytest.raises(ValueError):
        encode_device(Device("D1", "X1", "Acme", DeviceStatus.UNENROLLED))


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"not json",
        b"\xff\xfe",
        b"[]",
        b'{"uid":"D1","model":"X1","brand":"Acme"}',
        b'{"uid":"D1","model":"X1","brand":"Acme","status":"lost"}',
        b'{"uid":"D1","model":"X1","brand":"Acme","status":"unenrolled"}',
        b'{"uid":1,"model":"X1","brand":"Acme","status":"enrolled"}',
    ],
)
def test_bad_device_bytes_raise_malformed_record(raw):
    with pytest.raises(MalformedRecord):
        decode_device(raw)


def test_wine_missing_field_raises_malformed_record():
    data = json.loads(encode_wine(WINE))
    del data["owner"]
    with pytest.raises(MalformedRecord, match="owner"):
        decode_wine(json.dumps(data).encode())


def test_audit_record_keeps_history_order():
    record = AuditRecord(
        device=Device("D1", "X1", "Acme", DeviceStatus.BOUND),
        history=[
            WineHistory("t2", WINE.with_owner("bob")),
            WineHistory("t1", WINE),
        ],
    )
    data = json.loads(encode_audit_record(record))
    assert data["device"] == {"uid": "D1", "model": "X1", "brand": "Acme", "status": "bound"}
    assert [h["timestamp"] for h in data["wine_histories"]] == ["t2", "t1"]
    decoded = [decode_wine(json.dumps(h["wine"]).encode()) for h in data["wine_histories"]]
    assert decoded == [WINE.with_owner("bob"), WINE]


def test_legacy_wine_without_produce_fields_decodes_empty():
    raw = b'{"owner":"alice","model":"M1","out_date":"d","out_place":"p","device_uid":"D1"}'
    wine = decode_wine(raw)
    assert (wine.produce_date, wine.produce_place) == ("", "")
    assert (wine.owner, wine.out_date, wine.out_place, wine.device_id) == ("alice", "d", "p", "D1")


def test_wine_missing_only_one_produce_field_is_malformed():
    data = json.loads(encode_wine(WINE))
    del data["produce_place"]
    with pytest.raises(MalformedRecord, match="produce_place"):
        decode_wine(json.dumps(data).encode())
