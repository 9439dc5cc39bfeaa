"""
Stateful decoder for MIDI 1.0 byte streams

A parser is bound to a single connection: running status, an incomplete
message and an incomplete System Exclusive message all carry over from one
packet to the next.
"""

import logging
from dataclasses import dataclass, field

from .errors import MalformedMessageError, MIDIError
from .events import (
    ChannelPressure,
    ControlChange,
    Event,
    NoteOff,
    NoteOn,
    NotePressure,
    PitchBend,
    ProgramChange,
    SongPositionPointer,
    SongSelect,
    SysEx7,
    TimecodeQuarterFrame,
)
from .packet import PacketData
from .ump import (
    MIDI1_MESSAGE_LENGTH,
    REAL_TIME_STATUSES,
    SYSTEM_EVENT_BY_STATUS,
    MIDI1Status,
    SystemStatus,
)

logger = logging.getLogger(__name__)


def decode_message(
    message: list[int],
    group: int = 0,
    translate_note_on_zero_velocity_to_note_off: bool = False,
) -> Event:
    """
    Decode one complete channel voice or system message, status byte first.

    System Exclusive is not handled here; a status byte that is not a known
    channel voice or system message raises ``MalformedMessageError``.
    """
    status, *data = message
    if status < 0xF0:
        channel = status & 0x0F
        match status >> 4:
            case MIDI1Status.NOTE_OFF:
                return NoteOff(data[0], data[1], channel, group)
            case MIDI1Status.NOTE_ON:
                if data[1] == 0 and translate_note_on_zero_velocity_to_note_off:
                    return NoteOff(data[0], 0, channel, group)
                return NoteOn(data[0], data[1], channel, group)
            case MIDI1Status.POLY_PRESSURE:
                return NotePressure(data[0], data[1], channel, group)
            case MIDI1Status.CONTROL_CHANGE:
                return ControlChange(data[0], data[1], channel, group)
            case MIDI1Status.PROGRAM_CHANGE:
                return ProgramChange(data[0], channel, group)
            case MIDI1Status.CHANNEL_PRESSURE:
                return ChannelPressure(data[0], channel, group)
            case MIDI1Status.PITCH_BEND:
                return PitchBend(data[0] | (data[1] << 7), channel, group)

    match status:
        case SystemStatus.TIMECODE_QUARTER_FRAME:
            return TimecodeQuarterFrame(data[0], group)
        case SystemStatus.SONG_POSITION_POINTER:
            return SongPositionPointer(data[0] | (data[1] << 7), group)
        case SystemStatus.SONG_SELECT:
            return SongSelect(data[0], group)
    if status in SYSTEM_EVENT_BY_STATUS:
        return SYSTEM_EVENT_BY_STATUS[status](group)
    raise MalformedMessageError(f"Unknown status byte {status:#04x}")


def message_length(status: int) -> int | None:
    """Number of bytes of the message starting with ``status``, if defined"""
    return MIDI1_MESSAGE_LENGTH.get(status >> 4 if status < 0xF0 else status)


# Parser states
@dataclass
class Idle:
    pass


@dataclass
class CollectingSysEx:
    """Bytes of an unterminated SysEx message, 0xF0 included"""

    partial: bytearray = field(default_factory=lambda: bytearray([0xF0]))


class MIDI1Parser:
    def __init__(self, translate_note_on_zero_velocity_to_note_off: bool = True):
        self.translate_note_on_zero_velocity_to_note_off = (
            translate_note_on_zero_velocity_to_note_off
        )
        self.reset()

    def reset(self) -> None:
        """Forget running status and any message in flight"""
        self.state: Idle | CollectingSysEx = Idle()
        self.running_status: int | None = None
        self.pending: list[int] = []

    def parsed_events(self, packet: PacketData | bytes) -> list[Event]:
        if isinstance(packet, PacketData):
            packet = packet.bytes

        events = []
        for byte in packet:
            self._feed(byte, events)
        return events

    def _feed(self, byte: int, events: list[Event]) -> None:
        # The whole F8-FF range is transparent, undefined F9 and FD included
        if byte >= 0xF8:
            if byte in REAL_TIME_STATUSES:
                events.append(SYSTEM_EVENT_BY_STATUS[byte]())
            else:
                logger.debug(f"Skipping undefined real-time byte {byte:#04x}")
            return

        match self.state:
            case CollectingSysEx(partial=partial):
                if byte < 0x80:
                    partial.append(byte)
                    return
                self.state = Idle()
                self._emit_sysex(partial, events)
                if byte == SystemStatus.SYSEX_END:
                    return
                logger.debug(f"SysEx ended by status byte {byte:#04x}")

        if byte & 0x80:
            self._status_byte(byte, events)
        else:
            self._data_byte(byte, events)

    def _status_byte(self, status: int, events: list[Event]) -> None:
        if status == SystemStatus.SYSEX_START:
            self._drop_pending(status)
            self.running_status = None
            self.state = CollectingSysEx()
            return

        if status == SystemStatus.SYSEX_END:
            logger.debug("Ignoring SysEx end without start")
            return

        if message_length(status) is None:
            logger.debug(f"Skipping undefined status byte {status:#04x}")
            return

        self._drop_pending(status)
        # System common messages cancel running status
        self.running_status = status if status < 0xF0 else None
        self.pending = [status]
        self._complete(events)

    def _data_byte(self, byte: int, events: list[Event]) -> None:
        if not self.pending:
            if self.running_status is None:
                logger.debug(f"Skipping orphan data byte {byte:#04x}")
                return
            self.pending = [self.running_status]
        self.pending.append(byte)
        self._complete(events)

    def _complete(self, events: list[Event]) -> None:
        if len(self.pending) < message_length(self.pending[0]):
            return

        message, self.pending = self.pending, []
        events.append(
            decode_message(
                message,
                translate_note_on_zero_velocity_to_note_off=(
                    self.translate_note_on_zero_velocity_to_note_off
                ),
            )
        )

    def _drop_pending(self, status: int) -> None:
        if self.pending:
            logger.debug(
                f"Dropping incomplete message {bytes(self.pending).hex(' ')} "
                f"interrupted by {status:#04x}"
            )
            self.pending = []

    def _emit_sysex(self, partial: bytearray, events: list[Event]) -> None:
        try:
            events.append(SysEx7.from_midi1_bytes(partial))
        except MIDIError as e:
            logger.debug(f"Dropping malformed SysEx {partial.hex(' ')}: {e}")
