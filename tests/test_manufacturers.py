import pytest

from pymidicodec.errors import MalformedMessageError, ValueOutOfRangeError
from pymidicodec.manufacturers import (
    OneByteManufacturer,
    ThreeByteManufacturer,
    manufacturer_from_sysex8_id,
    parse_manufacturer,
)


@pytest.mark.parametrize(
    "manufacturer,valid",
    [
        pytest.param(OneByteManufacturer(0x01), True, id="one-byte-min"),
        pytest.param(OneByteManufacturer(0x7D), True, id="one-byte-max"),
        pytest.param(OneByteManufacturer(0x00), False, id="three-byte-prefix"),
        pytest.param(OneByteManufacturer(0x7E), False, id="universal-non-realtime"),
        pytest.param(OneByteManufacturer(0x7F), False, id="universal-realtime"),
        pytest.param(ThreeByteManufacturer(0x00, 0x00), False, id="three-byte-zero"),
        pytest.param(ThreeByteManufacturer(0x01, 0x00), True, id="three-byte-10"),
        pytest.param(ThreeByteManufacturer(0x00, 0x01), True, id="three-byte-01"),
        pytest.param(ThreeByteManufacturer(0x7F, 0x7F), True, id="three-byte-max"),
    ],
)
def test_validity(manufacturer, valid):
    assert manufacturer.is_valid is valid


@pytest.mark.parametrize(
    "manufacturer,name",
    [
        pytest.param(OneByteManufacturer(0x01), "Sequential Circuits", id="01"),
        pytest.param(OneByteManufacturer(0x3F), "Quasimidi", id="3f"),
        pytest.param(
            OneByteManufacturer(0x40),
            "Kawai Musical Instruments MFG. CO. Ltd",
            id="40",
        ),
        pytest.param(OneByteManufacturer(0x5F), "SD Card Association", id="5f"),
        pytest.param(
            ThreeByteManufacturer(0x00, 0x58), "Atari Corporation", id="000058"
        ),
        pytest.param(ThreeByteManufacturer(0x02, 0x3B), "Sonoclast, LLC", id="00023b"),
        pytest.param(ThreeByteManufacturer(0x20, 0x00), "Dream SAS", id="002000"),
        pytest.param(
            ThreeByteManufacturer(0x21, 0x59),
            "Robkoo Information & Technologies Co., Ltd.",
            id="002159",
        ),
        pytest.param(
            ThreeByteManufacturer(0x40, 0x00), "Crimson Technology Inc.", id="004000"
        ),
        pytest.param(
            ThreeByteManufacturer(0x40, 0x07), "Slik Corporation", id="004007"
        ),
    ],
)
def test_name(manufacturer, name):
    assert manufacturer.name == name


def test_unknown_name():
    assert OneByteManufacturer(0x7E).name is None
    assert ThreeByteManufacturer(0x7F, 0x7F).name is None


def test_midi1_bytes():
    assert OneByteManufacturer(0x41).midi1_bytes == b"\x41"
    assert ThreeByteManufacturer(0x21, 0x09).midi1_bytes == b"\x00\x21\x09"


def test_from_id():
    assert ThreeByteManufacturer.from_id(0x002109) == ThreeByteManufacturer(0x21, 0x09)
    with pytest.raises(MalformedMessageError):
        ThreeByteManufacturer.from_id(0x012109)


def test_out_of_range_byte():
    with pytest.raises(ValueOutOfRangeError):
        OneByteManufacturer(0x80)
    with pytest.raises(ValueOutOfRangeError):
        ThreeByteManufacturer(0x00, 0x80)


@pytest.mark.parametrize(
    "payload,manufacturer,rest",
    [
        pytest.param(b"\x41\x01\x34", OneByteManufacturer(0x41), b"\x01\x34", id="one"),
        pytest.param(b"\x7e", OneByteManufacturer(0x7E), b"", id="universal"),
        pytest.param(
            b"\x00\x21\x09\x10",
            ThreeByteManufacturer(0x21, 0x09),
            b"\x10",
            id="three",
        ),
    ],
)
def test_parse_manufacturer(payload, manufacturer, rest):
    assert parse_manufacturer(payload) == (manufacturer, rest)


@pytest.mark.parametrize("payload", [b"", b"\x00", b"\x00\x21"])
def test_parse_manufacturer_malformed(payload):
    with pytest.raises(MalformedMessageError):
        parse_manufacturer(payload)


def test_sysex8_id():
    assert OneByteManufacturer(0x41).sysex8_id == 0x0041
    assert ThreeByteManufacturer(0x21, 0x09).sysex8_id == 0xA109
    assert manufacturer_from_sysex8_id(0x0041) == OneByteManufacturer(0x41)
    assert manufacturer_from_sysex8_id(0xA109) == ThreeByteManufacturer(0x21, 0x09)
    with pytest.raises(MalformedMessageError):
        manufacturer_from_sysex8_id(0x0141)
