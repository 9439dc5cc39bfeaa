import logging

import pytest

from pymidicodec.events import (
    ControlChange,
    NoteOff,
    NoteOn,
    ProgramChange,
    SongSelect,
    SysEx7,
    TimingClock,
    TuneRequest,
)
from pymidicodec.manufacturers import OneByteManufacturer
from pymidicodec.midi1 import CollectingSysEx, Idle, MIDI1Parser
from pymidicodec.packet import PacketData

ROLAND = OneByteManufacturer(0x41)


def test_packet_data():
    parser = MIDI1Parser()
    packet = PacketData(b"\x90\x3c\x64", timestamp=1234)
    assert parser.parsed_events(packet) == [NoteOn(60, 100, 0)]


def test_several_messages_in_one_packet():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\x90\x3c\x64\xb1\x07\x40\xc2\x05") == [
        NoteOn(60, 100, 0),
        ControlChange(7, 64, 1),
        ProgramChange(5, 2),
    ]


def test_note_on_zero_velocity_translated():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\x90\x3c\x00") == [NoteOff(60, 0, 0)]


def test_note_on_zero_velocity_kept():
    parser = MIDI1Parser(translate_note_on_zero_velocity_to_note_off=False)
    assert parser.parsed_events(b"\x90\x3c\x00") == [NoteOn(60, 0, 0)]


def test_running_status():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\x90\x3c\x64\x3e\x64\x3c\x00") == [
        NoteOn(60, 100, 0),
        NoteOn(62, 100, 0),
        NoteOff(60, 0, 0),
    ]


def test_running_status_across_packets():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\x91\x3c\x64") == [NoteOn(60, 100, 1)]
    assert parser.parsed_events(b"\x40\x64") == [NoteOn(64, 100, 1)]


def test_system_common_cancels_running_status():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\x90\x3c\x64\xf3\x01\x3e\x64") == [
        NoteOn(60, 100, 0),
        SongSelect(1),
    ]


def test_real_time_keeps_running_status():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\x90\x3c\x64\xf8\x3e\x64") == [
        NoteOn(60, 100, 0),
        TimingClock(),
        NoteOn(62, 100, 0),
    ]


def test_message_split_across_packets():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\x90\x3c") == []
    assert parser.parsed_events(b"\x64") == [NoteOn(60, 100, 0)]


def test_real_time_inside_message():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\x90\xf8\x3c\xf8\x64") == [
        TimingClock(),
        TimingClock(),
        NoteOn(60, 100, 0),
    ]


def test_sysex():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\xf0\x41\x01\x34\xf7") == [
        SysEx7(ROLAND, b"\x01\x34")
    ]
    assert isinstance(parser.state, Idle)


def test_sysex_across_packets():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\xf0\x41\x01") == []
    assert isinstance(parser.state, CollectingSysEx)
    assert parser.parsed_events(b"\x02\x03") == []
    assert parser.parsed_events(b"\x04\xf7") == [SysEx7(ROLAND, b"\x01\x02\x03\x04")]
    assert isinstance(parser.state, Idle)


def test_real_time_inside_sysex():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\xf0\x41\x01\xf8\x02\xf7") == [
        TimingClock(),
        SysEx7(ROLAND, b"\x01\x02"),
    ]


@pytest.mark.parametrize(
    "byte",
    [
        pytest.param(b"\xf9", id="undefined-f9"),
        pytest.param(b"\xfd", id="undefined-fd"),
    ],
)
def test_undefined_real_time_inside_sysex(byte):
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\xf0\x41\x01" + byte + b"\x02\xf7") == [
        SysEx7(ROLAND, b"\x01\x02"),
    ]
    assert isinstance(parser.state, Idle)


def test_long_sysex_across_packets():
    data = bytes(i % 0x80 for i in range(256))
    raw = b"\xf0\x41" + data + b"\xf7"
    parser = MIDI1Parser()
    assert parser.parsed_events(PacketData(raw[:130])) == []
    assert parser.parsed_events(PacketData(raw[130:])) == [SysEx7(ROLAND, data)]


def test_sysex_ended_by_status_byte():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\xf0\x41\x01\x90\x3c\x64") == [
        SysEx7(ROLAND, b"\x01"),
        NoteOn(60, 100, 0),
    ]


def test_sysex_ended_by_new_sysex():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\xf0\x41\x01\xf0\x43\x02\xf7") == [
        SysEx7(ROLAND, b"\x01"),
        SysEx7(OneByteManufacturer(0x43), b"\x02"),
    ]


def test_malformed_sysex_dropped(caplog):
    parser = MIDI1Parser()
    with caplog.at_level(logging.DEBUG, logger="pymidicodec.midi1"):
        assert parser.parsed_events(b"\xf0\xf7\x90\x3c\x64") == [NoteOn(60, 100, 0)]
    assert "Dropping malformed SysEx" in caplog.text


def test_sysex_cancels_running_status():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\x90\x3c\x64\xf0\x41\xf7\x3e\x64") == [
        NoteOn(60, 100, 0),
        SysEx7(ROLAND),
    ]


def test_orphan_data_bytes_skipped():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\x3c\x64\xf6") == [TuneRequest()]


def test_undefined_status_bytes_skipped():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\xf4\xf5\xf9\xfd\x90\x3c\x64") == [
        NoteOn(60, 100, 0)
    ]


def test_stray_sysex_end_ignored():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\xf7\x90\x3c\x64") == [NoteOn(60, 100, 0)]


def test_interrupted_message_dropped():
    parser = MIDI1Parser()
    assert parser.parsed_events(b"\x90\x3c\xb0\x07\x40") == [ControlChange(7, 64, 0)]


def test_reset():
    parser = MIDI1Parser()
    parser.parsed_events(b"\x90\x3c\x64\xf0\x41\x01")
    parser.reset()
    assert isinstance(parser.state, Idle)
    # Neither the SysEx in flight nor running status survive a reset
    assert parser.parsed_events(b"\x02\xf7\x3c\x64") == []


def test_empty_packet():
    assert MIDI1Parser().parsed_events(b"") == []
