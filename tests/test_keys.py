import pytest

from winechain.core.errors import InvalidArguments
from winechain.core.keys import device_key, wine_key


def test_keys_are_deterministic():
    assert device_key("D1") == device_key("D1") == "deviceD1"
    assert wine_key("D1") == wine_key("D1") == "wineD1"


@pytest.mark.parametrize("a", ["D1", "wine", "device", "x", "wineD1", "deviceD1"])
@pytest.mark.parametrize("b", ["D1", "wine", "device", "x", "wineD1", "deviceD1"])
def test_device_and_wine_keys_never_collide(a, b):
    assert device_key(a) != wine_key(b)


def test_distinct_ids_give_distinct_keys():
    ids = ["D1", "D10", "d1", "D1 ", " D1"]
    assert len({device_key(i) for i in ids}) == len(ids)
    assert len({wine_key(i) for i in ids}) == len(ids)


def test_empty_id_is_rejected():
    with pytest.raises(InvalidArguments):
        device_key("")
    with pytest.raises(InvalidArguments):
        wine_key("")
