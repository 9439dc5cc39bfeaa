import pytest

from pymidicodec.errors import ValueOutOfRangeError
from pymidicodec.packet import PacketData, UniversalPacketData
from pymidicodec.ump import ProtocolVersion


def test_packet_data_bytes():
    packet = PacketData(bytearray(b"\x90\x3c\x64"), timestamp=10)
    assert packet.bytes == b"\x90\x3c\x64"
    assert packet == PacketData(b"\x90\x3c\x64", timestamp=10)


def test_universal_packet_bytes_are_big_endian():
    packet = UniversalPacketData([0x40903C00, 0xFFFF0000])
    assert packet.bytes == bytes.fromhex("40903c00ffff0000")


def test_universal_packet_from_bytes():
    packet = UniversalPacketData.from_bytes(
        bytes.fromhex("20903c64"), timestamp=5, protocol=ProtocolVersion.MIDI_1_0
    )
    assert packet.words == (0x20903C64,)
    assert packet.timestamp == 5
    assert packet.protocol is ProtocolVersion.MIDI_1_0


def test_universal_packet_from_unaligned_bytes():
    with pytest.raises(ValueError):
        UniversalPacketData.from_bytes(b"\x20\x90\x3c")


def test_universal_packet_word_range():
    with pytest.raises(ValueOutOfRangeError):
        UniversalPacketData([1 << 32])


def test_universal_packet_protocol():
    assert UniversalPacketData([], protocol=1).protocol is ProtocolVersion.MIDI_1_0
    with pytest.raises(ValueError):
        UniversalPacketData([], protocol=3)
