import pytest

from port_sweep.errors import InvalidAddressFormat
from port_sweep.targets import AddressRange, build_range, format_address, parse_address


@pytest.mark.parametrize("text,value", [
    ("0.0.0.0", 0),
    ("10.0.0.1", 0x0A000001),
    ("127.0.0.1", 0x7F000001),
    ("192.168.1.254", 0xC0A801FE),
    ("255.255.255.255", 0xFFFFFFFF),
])
def test_parse_address_is_big_endian(text, value):
    assert parse_address(text) == value
    assert format_address(value) == text


def test_format_normalizes_leading_zeros():
    assert format_address(parse_address("010.000.0.07")) == "10.0.0.7"


def test_parse_tolerates_surrounding_whitespace():
    assert parse_address(" 127.0.0.1\n") == 0x7F000001


@pytest.mark.parametrize("text", [
    "999.1.1.1",
    "256.0.0.1",
    "1.2.3",
    "1.2.3.4.5",
    "",
    "a.b.c.d",
    "1..2.3",
    "-1.2.3.4",
    "+1.2.3.4",
    "1.2.3.4/24",
    "localhost",
])
def test_parse_rejects_malformed(text):
    with pytest.raises(InvalidAddressFormat) as exc:
        parse_address(text)
    assert isinstance(exc.value, ValueError)
    assert text.strip() in str(exc.value) or text == ""


def test_build_range_swaps_reversed_input():
    r = build_range("10.0.0.5", "10.0.0.1")
    assert r == build_range("10.0.0.1", "10.0.0.5")
    assert list(r) == ["10.0.0.1", "10.0.0.2", "10.0.0.3", "10.0.0.4", "10.0.0.5"]


def test_build_range_single_address():
    r = build_range("127.0.0.1", "127.0.0.1")
    assert len(r) == 1
    assert list(r) == ["127.0.0.1"]
    assert str(r) == "127.0.0.1"


def test_build_range_fails_on_either_end():
    with pytest.raises(InvalidAddressFormat):
        build_range("10.0.0.1", "10.0.0.300")
    with pytest.raises(InvalidAddressFormat):
        build_range("10.0.0", "10.0.0.3")


def test_range_crosses_octet_boundaries():
    r = build_range("10.0.0.254", "10.0.1.1")
    assert list(r) == ["10.0.0.254", "10.0.0.255", "10.0.1.0", "10.0.1.1"]
    assert str(r) == "10.0.0.254 - 10.0.1.1"


def test_range_is_restartable_and_increasing():
    r = AddressRange(parse_address("192.168.0.10"), parse_address("192.168.0.20"))
    first = list(r)
    assert first == list(r)
    values = [parse_address(a) for a in first]
    assert len(values) == len(r) == 11
    assert values[0] == r.low and values[-1] == r.high
    assert all(b == a + 1 for a, b in zip(values, values[1:]))


def test_range_iteration_is_lazy():
    r = build_range("0.0.0.0", "255.255.255.255")
    assert len(r) == 2 ** 32
    it = iter(r)
    assert next(it) == "0.0.0.0"
    assert next(it) == "0.0.0.1"


def test_address_range_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        AddressRange(5, 1)
