import pytest

from pymidicodec import events as ev
from pymidicodec.manufacturers import OneByteManufacturer
from pymidicodec.translate import to_midi1, to_midi2

TRANSLATIONS = [
    pytest.param(
        ev.NoteOn(60, 127, 1, group=3),
        ev.MIDI2NoteOn(60, 0xFFFF, 1, group=3),
        id="note-on",
    ),
    pytest.param(
        ev.NoteOn(60, 64, 1),
        ev.MIDI2NoteOn(60, 0x8000, 1),
        id="note-on-center",
    ),
    pytest.param(
        ev.NoteOff(60, 0, 1),
        ev.MIDI2NoteOff(60, 0, 1),
        id="note-off",
    ),
    pytest.param(
        ev.NotePressure(60, 127, 1),
        ev.MIDI2NotePressure(60, 0xFFFFFFFF, 1),
        id="poly-pressure",
    ),
    pytest.param(
        ev.ControlChange(7, 64, 1),
        ev.MIDI2ControlChange(7, 0x80000000, 1),
        id="control-change",
    ),
    pytest.param(
        ev.ProgramChange(5, 1),
        ev.MIDI2ProgramChange(5, 1),
        id="program-change",
    ),
    pytest.param(
        ev.ChannelPressure(0, 1),
        ev.MIDI2ChannelPressure(0, 1),
        id="channel-pressure",
    ),
    pytest.param(
        ev.PitchBend(0x3FFF, 1),
        ev.MIDI2PitchBend(0xFFFFFFFF, 1),
        id="pitch-bend",
    ),
]


@pytest.mark.parametrize("midi1,midi2", TRANSLATIONS)
def test_translation(midi1, midi2):
    assert to_midi2(midi1) == midi2
    assert to_midi1(midi2) == [midi1]


def test_note_on_zero_velocity_to_midi2():
    assert to_midi2(ev.NoteOn(60, 0, 1)) == ev.MIDI2NoteOff(60, 0, 1)


def test_midi2_note_on_never_zero_in_midi1():
    assert to_midi1(ev.MIDI2NoteOn(60, 0x01FF, 1)) == [ev.NoteOn(60, 1, 1)]


def test_attributes_dropped():
    note = ev.MIDI2NoteOn(60, 0xFFFF, 1, attribute_type=3, attribute_data=0x1234)
    assert to_midi1(note) == [ev.NoteOn(60, 127, 1)]


def test_program_change_with_bank():
    pc = ev.MIDI2ProgramChange(5, 1, bank=(3 << 7) | 9, group=2)
    assert to_midi1(pc) == [
        ev.ControlChange(0, 3, 1, group=2),
        ev.ControlChange(32, 9, 1, group=2),
        ev.ProgramChange(5, 1, group=2),
    ]


@pytest.mark.parametrize(
    "registered,msb,lsb",
    [
        pytest.param(True, 101, 100, id="rpn"),
        pytest.param(False, 99, 98, id="nrpn"),
    ],
)
def test_parameter_number(registered, msb, lsb):
    pn = ev.ParameterNumber(
        bank=0, index=2, value=0x80000000 | (5 << 18), channel=1, registered=registered
    )
    assert to_midi1(pn) == [
        ev.ControlChange(msb, 0, 1),
        ev.ControlChange(lsb, 2, 1),
        ev.ControlChange(6, 0x40, 1),
        ev.ControlChange(38, 5, 1),
    ]


@pytest.mark.parametrize(
    "event",
    [
        pytest.param(ev.NotePitchBend(60, 0, 1), id="per-note-pitch-bend"),
        pytest.param(ev.NoteController(60, 1, 0, 1), id="per-note-controller"),
        pytest.param(ev.NoteManagement(60, 1), id="per-note-management"),
        pytest.param(ev.ParameterNumber(0, 1, 5, 1, relative=True), id="relative"),
        pytest.param(ev.SysEx8(OneByteManufacturer(0x41)), id="sysex8"),
    ],
)
def test_no_midi1_equivalent(event):
    assert to_midi1(event) == []


@pytest.mark.parametrize(
    "event",
    [
        pytest.param(ev.TimingClock(), id="timing-clock"),
        pytest.param(ev.SongSelect(3), id="song-select"),
        pytest.param(ev.SysEx7(OneByteManufacturer(0x41), b"\x01"), id="sysex7"),
    ],
)
def test_passthrough(event):
    assert to_midi2(event) == event
    assert to_midi1(event) == [event]


def test_midi2_events_unchanged_by_to_midi2():
    note = ev.MIDI2NoteOn(60, 1234, 1)
    assert to_midi2(note) is note
