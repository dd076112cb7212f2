"""Tests for device enrollment and binding."""
import pytest

from winechain.core.codec import decode_wine
from winechain.core.errors import AlreadyEnrolled, DeviceAlreadyBound, DeviceNotEnrolled, MalformedRecord
from winechain.core.keys import device_key, wine_key
from winechain.core.lifecycle import bind_good, enroll_device, read_device
from winechain.models import DeviceStatus
from winechain.models.args import BindGoodArgs, EnrollDeviceArgs

from conftest import WINE_ARGS


def _bind_args(device_id="D1"):
    return BindGoodArgs.from_positional([device_id, *WINE_ARGS])


def test_unknown_device_is_unenrolled(store):
    assert read_device(store, "nope") is None
    assert store.snapshot() == {}


def test_device_record_under_wrong_key_is_malformed(store):
    store.put(device_key("D1"), b'{"uid":"D7","model":"X1","brand":"Acme","status":"enrolled"}')
    with pytest.raises(MalformedRecord, match="D7"):
        read_device(store, "D1")
    with pytest.raises(MalformedRecord):
        bind_good(store, _bind_args())
    assert store.get(wine_key("D1")) is None


def test_enroll_creates_enrolled_device(store):
    device = enroll_device(store, EnrollDeviceArgs(id="D1", model="X1", brand="Acme"))
    assert device.status is DeviceStatus.ENROLLED
    assert read_device(store, "D1") == device
    assert store.get(wine_key("D1")) is None


def test_second_enroll_fails_without_writing(store):
    enroll_device(store, EnrollDeviceArgs(id="D1", model="X1", brand="Acme"))
    before = store.snapshot()
    with pytest.raises(AlreadyEnrolled):
        enroll_device(store, EnrollDeviceArgs(id="D1", model="Other", brand="Other"))
    assert store.snapshot() == before


def test_bound_device_cannot_be_re_enrolled(store):
    enroll_device(store, EnrollDeviceArgs(id="D1", model="X1", brand="Acme"))
    bind_good(store, _bind_args())
    with pytest.raises(AlreadyEnrolled):
        enroll_device(store, EnrollDeviceArgs(id="D1", model="X1", brand="Acme"))
    assert read_device(store, "D1").status is DeviceStatus.BOUND


def test_bind_moves_device_to_bound_and_writes_wine(store):
    enroll_device(store, EnrollDeviceArgs(id="D1", model="X1", brand="Acme"))
    wine = bind_good(store, _bind_args())

    assert read_device(store, "D1").status is DeviceStatus.BOUND
    stored = decode_wine(store.get(wine_key("D1")))
    assert stored == wine
    assert stored.device_id == "D1"
    assert stored.owner == "alice"


def test_bind_on_unenrolled_device_writes_nothing(store):
    with pytest.raises(DeviceNotEnrolled):
        bind_good(store, _bind_args("D2"))
    assert store.snapshot() == {}


def test_bind_twice_fails_without_writing(store):
    enroll_device(store, EnrollDeviceArgs(id="D1", model="X1", brand="Acme"))
    bind_good(store, _bind_args())
    before = store.snapshot()
    with pytest.raises(DeviceAlreadyBound):
        bind_good(store, _bind_args())
    assert store.snapshot() == before


def test_corrupt_device_record_is_reported(store):
    store.put(device_key("D1"), b"{broken")
    with pytest.raises(MalformedRecord):
        bind_good(store, _bind_args())
    assert store.get(wine_key("D1")) is None
