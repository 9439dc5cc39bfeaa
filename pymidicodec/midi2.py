"""
Decoder for Universal MIDI Packet words

Decoding is stateless: segmented System Exclusive messages are only
reassembled within the words given to a single call.
"""

import logging
from collections.abc import Sequence

from .errors import MalformedMessageError, MIDIError
from .events import (
    Event,
    MIDI2ChannelPressure,
    MIDI2ControlChange,
    MIDI2NoteOff,
    MIDI2NoteOn,
    MIDI2NotePressure,
    MIDI2PitchBend,
    MIDI2ProgramChange,
    NoteController,
    NoteManagement,
    NotePitchBend,
    ParameterNumber,
    SysEx7,
    SysEx8,
)
from .manufacturers import manufacturer_from_sysex8_id
from .midi1 import decode_message
from .packet import UniversalPacketData
from .ump import UMP_NUM_WORDS, MessageType, MIDI2Status, StreamFormat

logger = logging.getLogger(__name__)


def _header(word: int) -> tuple[int, int, int]:
    """Group, status nibble and channel (or byte count) nibble of a first word"""
    return (word >> 24) & 0xF, (word >> 20) & 0xF, (word >> 16) & 0xF


def _decode_midi1(words: Sequence[int]) -> Event:
    # System (MT 0x1) and MIDI 1.0 channel voice (MT 0x2) carry MIDI 1.0 bytes
    mt, group = words[0] >> 28, (words[0] >> 24) & 0xF
    message = list(words[0].to_bytes(length=4, byteorder="big")[1:])
    is_system = message[0] >= 0xF0
    if is_system != (mt == MessageType.SYSTEM):
        raise MalformedMessageError(
            f"Status byte {message[0]:#04x} is invalid for message type {mt:#x}"
        )
    return decode_message(message, group=group)


def _decode_midi2(words: Sequence[int]) -> Event:
    group, status, channel = _header(words[0])
    byte2 = (words[0] >> 8) & 0xFF
    byte3 = words[0] & 0xFF
    data = words[1]

    match status:
        case MIDI2Status.NOTE_OFF | MIDI2Status.NOTE_ON:
            cls = MIDI2NoteOn if status == MIDI2Status.NOTE_ON else MIDI2NoteOff
            return cls(
                note=byte2,
                velocity=data >> 16,
                channel=channel,
                attribute_type=byte3,
                attribute_data=data & 0xFFFF,
                group=group,
            )
        case MIDI2Status.POLY_PRESSURE:
            return MIDI2NotePressure(byte2, data, channel, group)
        case MIDI2Status.CONTROL_CHANGE:
            return MIDI2ControlChange(byte2, data, channel, group)
        case MIDI2Status.PROGRAM_CHANGE:
            bank = None
            if byte3 & 0x01:
                bank = (((data >> 8) & 0x7F) << 7) | (data & 0x7F)
            return MIDI2ProgramChange(data >> 24, channel, bank=bank, group=group)
        case MIDI2Status.CHANNEL_PRESSURE:
            return MIDI2ChannelPressure(data, channel, group)
        case MIDI2Status.PITCH_BEND:
            return MIDI2PitchBend(data, channel, group)
        case MIDI2Status.PER_NOTE_PITCH_BEND:
            return NotePitchBend(byte2, data, channel, group)
        case (
            MIDI2Status.REGISTERED_PER_NOTE_CONTROLLER
            | MIDI2Status.ASSIGNABLE_PER_NOTE_CONTROLLER
        ):
            return NoteController(
                note=byte2,
                index=byte3,
                value=data,
                channel=channel,
                registered=status == MIDI2Status.REGISTERED_PER_NOTE_CONTROLLER,
                group=group,
            )
        case (
            MIDI2Status.REGISTERED_CONTROLLER
            | MIDI2Status.ASSIGNABLE_CONTROLLER
            | MIDI2Status.RELATIVE_REGISTERED_CONTROLLER
            | MIDI2Status.RELATIVE_ASSIGNABLE_CONTROLLER
        ):
            return ParameterNumber(
                bank=byte2,
                index=byte3,
                value=data,
                channel=channel,
                registered=status
                in (
                    MIDI2Status.REGISTERED_CONTROLLER,
                    MIDI2Status.RELATIVE_REGISTERED_CONTROLLER,
                ),
                relative=status
                in (
                    MIDI2Status.RELATIVE_REGISTERED_CONTROLLER,
                    MIDI2Status.RELATIVE_ASSIGNABLE_CONTROLLER,
                ),
                group=group,
            )
        case MIDI2Status.PER_NOTE_MANAGEMENT:
            return NoteManagement(
                note=byte2,
                channel=channel,
                detach=bool(byte3 & 0x02),
                reset=bool(byte3 & 0x01),
                group=group,
            )
    raise MalformedMessageError(f"Unknown MIDI 2.0 channel voice status {status:#x}")


def _stream_format(status: int) -> StreamFormat:
    try:
        return StreamFormat(status)
    except ValueError:
        raise MalformedMessageError(
            f"Unknown SysEx stream format {status:#x}"
        ) from None


def _sysex7_segment(words: Sequence[int]) -> tuple[int, StreamFormat, bytes]:
    group, status, count = _header(words[0])
    if count > 6:
        raise MalformedMessageError(f"Invalid 7-bit SysEx byte count {count}")
    data = (words[0] & 0xFFFF).to_bytes(length=2, byteorder="big")
    data += words[1].to_bytes(length=4, byteorder="big")
    return group, _stream_format(status), data[:count]


def _sysex8_segment(
    words: Sequence[int],
) -> tuple[tuple[int, int], StreamFormat, bytes]:
    group, status, count = _header(words[0])
    # The byte count includes the stream ID
    if not 1 <= count <= 14:
        raise MalformedMessageError(f"Invalid 8-bit SysEx byte count {count}")
    stream_id = (words[0] >> 8) & 0xFF
    data = bytes([words[0] & 0xFF])
    data += b"".join(w.to_bytes(length=4, byteorder="big") for w in words[1:4])
    return (group, stream_id), _stream_format(status), data[: count - 1]


class SysExAssembler:
    """Joins SysEx segments, keyed by group (and stream ID for 8-bit SysEx)"""

    def __init__(self):
        self.partial: dict = {}

    def push(self, key, status: StreamFormat, chunk: bytes) -> bytes | None:
        """Returns the whole payload once its last segment has been pushed"""
        if status in (StreamFormat.COMPLETE, StreamFormat.START):
            if key in self.partial:
                logger.debug(f"Dropping unterminated SysEx on {key}")
                del self.partial[key]
            if status == StreamFormat.COMPLETE:
                return chunk
            self.partial[key] = bytearray(chunk)
            return None

        if key not in self.partial:
            logger.debug(f"Skipping SysEx {status.name} segment without start on {key}")
            return None
        self.partial[key] += chunk
        if status == StreamFormat.END:
            return bytes(self.partial.pop(key))
        return None

    def flush(self) -> None:
        for key in self.partial:
            logger.debug(f"Dropping unterminated SysEx on {key}")
        self.partial.clear()


def events_from_words(words: Sequence[int]) -> list[Event]:
    """Decode every complete message in ``words``, skipping what can't be decoded"""
    events = []
    sysex7 = SysExAssembler()
    sysex8 = SysExAssembler()

    i = 0
    while i < len(words):
        mt = (words[i] >> 28) & 0xF
        message = words[i : i + UMP_NUM_WORDS[mt]]
        i += UMP_NUM_WORDS[mt]
        if len(message) < UMP_NUM_WORDS[mt]:
            logger.debug(f"Skipping truncated UMP message {message}")
            break
        if any(not 0 <= word <= 0xFFFFFFFF for word in message):
            logger.debug(f"Skipping UMP message with out-of-range words {message}")
            continue

        try:
            match mt:
                case MessageType.SYSTEM | MessageType.MIDI_1_CHANNEL_VOICE:
                    events.append(_decode_midi1(message))
                case MessageType.MIDI_2_CHANNEL_VOICE:
                    events.append(_decode_midi2(message))
                case MessageType.DATA_64:
                    group, status, chunk = _sysex7_segment(message)
                    payload = sysex7.push(group, status, chunk)
                    if payload is not None:
                        events.append(SysEx7.from_payload(payload, group=group))
                case MessageType.DATA_128:
                    key, status, chunk = _sysex8_segment(message)
                    payload = sysex8.push(key, status, chunk)
                    if payload is not None:
                        events.append(_sysex8_event(payload, *key))
                case _:
                    logger.debug(f"Skipping UMP message type {mt:#x}")
        except MIDIError as e:
            hexwords = " ".join(f"{w:08x}" for w in message)
            logger.debug(f"Skipping malformed UMP message {hexwords}: {e}")

    sysex7.flush()
    sysex8.flush()
    return events


def _sysex8_event(payload: bytes, group: int, stream_id: int) -> SysEx8:
    if len(payload) < 2:
        raise MalformedMessageError("Missing 8-bit SysEx manufacturer ID")
    manufacturer_id = int.from_bytes(payload[:2], byteorder="big")
    manufacturer = manufacturer_from_sysex8_id(manufacturer_id)
    return SysEx8(manufacturer, payload[2:], stream_id=stream_id, group=group)


class MIDI2Parser:
    """Decodes Universal MIDI Packets into events; keeps no state between calls"""

    def parsed_events(self, packet: UniversalPacketData | Sequence[int]) -> list[Event]:
        if isinstance(packet, UniversalPacketData):
            packet = packet.words
        return events_from_words(packet)
