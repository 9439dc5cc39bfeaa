from enum import IntEnum

from .events import (
    ActiveSensing,
    Continue,
    SongPositionPointer,
    SongSelect,
    Start,
    Stop,
    SystemReset,
    TimecodeQuarterFrame,
    TimingClock,
    TuneRequest,
)


class ProtocolVersion(IntEnum):
    """MIDI protocol negotiated for a UMP stream"""

    MIDI_1_0 = 1
    MIDI_2_0 = 2


class MessageType(IntEnum):
    """UMP Message Type definitions"""

    UTILITY = 0x0
    SYSTEM = 0x1
    MIDI_1_CHANNEL_VOICE = 0x2
    DATA_64 = 0x3
    MIDI_2_CHANNEL_VOICE = 0x4
    DATA_128 = 0x5
    FLEX_DATA = 0xD
    UMP_STREAM = 0xF

    @property
    def num_words(self) -> int:
        return UMP_NUM_WORDS[self]


# Indexed by the message type nibble, reserved types included
UMP_NUM_WORDS = (1, 1, 1, 2, 2, 4, 1, 1, 2, 2, 2, 3, 3, 4, 4, 4)


class StreamFormat(IntEnum):
    """Segmentation status of Data 64 (SysEx7) and Data 128 (SysEx8) messages"""

    COMPLETE = 0
    START = 1
    CONTINUE = 2
    END = 3


class SystemStatus(IntEnum):
    """System Common and System Real Time status bytes"""

    SYSEX_START = 0xF0
    TIMECODE_QUARTER_FRAME = 0xF1
    SONG_POSITION_POINTER = 0xF2
    SONG_SELECT = 0xF3
    TUNE_REQUEST = 0xF6
    SYSEX_END = 0xF7
    TIMING_CLOCK = 0xF8
    START = 0xFA
    CONTINUE = 0xFB
    STOP = 0xFC
    ACTIVE_SENSING = 0xFE
    RESET = 0xFF


class MIDI1Status(IntEnum):
    """MIDI 1.0 Channel Voice Message Status values"""

    NOTE_OFF = 0x8
    NOTE_ON = 0x9
    POLY_PRESSURE = 0xA
    CONTROL_CHANGE = 0xB
    PROGRAM_CHANGE = 0xC
    CHANNEL_PRESSURE = 0xD
    PITCH_BEND = 0xE


class MIDI2Status(IntEnum):
    """MIDI 2.0 Channel Voice Message Status values"""

    REGISTERED_PER_NOTE_CONTROLLER = 0x0
    ASSIGNABLE_PER_NOTE_CONTROLLER = 0x1
    REGISTERED_CONTROLLER = 0x2
    ASSIGNABLE_CONTROLLER = 0x3
    RELATIVE_REGISTERED_CONTROLLER = 0x4
    RELATIVE_ASSIGNABLE_CONTROLLER = 0x5
    PER_NOTE_PITCH_BEND = 0x6
    NOTE_OFF = 0x8
    NOTE_ON = 0x9
    POLY_PRESSURE = 0xA
    CONTROL_CHANGE = 0xB
    PROGRAM_CHANGE = 0xC
    CHANNEL_PRESSURE = 0xD
    PITCH_BEND = 0xE
    PER_NOTE_MANAGEMENT = 0xF


# Number of bytes (status byte included) of each MIDI 1.0 message
MIDI1_MESSAGE_LENGTH = {
    MIDI1Status.NOTE_OFF: 3,
    MIDI1Status.NOTE_ON: 3,
    MIDI1Status.POLY_PRESSURE: 3,
    MIDI1Status.CONTROL_CHANGE: 3,
    MIDI1Status.PROGRAM_CHANGE: 2,
    MIDI1Status.CHANNEL_PRESSURE: 2,
    MIDI1Status.PITCH_BEND: 3,
    SystemStatus.TIMECODE_QUARTER_FRAME: 2,
    SystemStatus.SONG_POSITION_POINTER: 3,
    SystemStatus.SONG_SELECT: 2,
    SystemStatus.TUNE_REQUEST: 1,
}

# System messages without data
SYSTEM_EVENT_BY_STATUS = {
    SystemStatus.TUNE_REQUEST: TuneRequest,
    SystemStatus.TIMING_CLOCK: TimingClock,
    SystemStatus.START: Start,
    SystemStatus.CONTINUE: Continue,
    SystemStatus.STOP: Stop,
    SystemStatus.ACTIVE_SENSING: ActiveSensing,
    SystemStatus.RESET: SystemReset,
}

SYSTEM_STATUS_BY_EVENT = {
    TimecodeQuarterFrame: SystemStatus.TIMECODE_QUARTER_FRAME,
    SongPositionPointer: SystemStatus.SONG_POSITION_POINTER,
    SongSelect: SystemStatus.SONG_SELECT,
    **{ev: status for status, ev in SYSTEM_EVENT_BY_STATUS.items()},
}

REAL_TIME_STATUSES = frozenset(
    {
        SystemStatus.TIMING_CLOCK,
        SystemStatus.START,
        SystemStatus.CONTINUE,
        SystemStatus.STOP,
        SystemStatus.ACTIVE_SENSING,
        SystemStatus.RESET,
    }
)


def pack_word(b0: int, b1: int = 0, b2: int = 0, b3: int = 0) -> int:
    return (b0 << 24) | (b1 << 16) | (b2 << 8) | b3


def word_bytes(words: list[int]) -> bytes:
    return b"".join(w.to_bytes(length=4, byteorder="big") for w in words)


def bytes_to_words(buf: bytes) -> list[int]:
    if len(buf) % 4:
        raise ValueError(
            "Expected a multiple of 4 bytes for UMP words, "
            f"but got {len(buf)} bytes instead",
        )
    return [
        int.from_bytes(buf[4 * i : 4 * (i + 1)], byteorder="big")
        for i in range(len(buf) // 4)
    ]
