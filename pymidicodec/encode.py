"""
Serialisation of events to MIDI 1.0 bytes and to Universal MIDI Packet words
"""

from .events import (
    MIDI1_CHANNEL_VOICE,
    MIDI2_CHANNEL_VOICE,
    ChannelPressure,
    ControlChange,
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
    NoteOff,
    NoteOn,
    NotePitchBend,
    NotePressure,
    ParameterNumber,
    PitchBend,
    ProgramChange,
    SongPositionPointer,
    SongSelect,
    SysEx7,
    SysEx8,
    TimecodeQuarterFrame,
)
from .translate import to_midi1, to_midi2
from .ump import (
    SYSTEM_STATUS_BY_EVENT,
    MessageType,
    MIDI1Status,
    MIDI2Status,
    ProtocolVersion,
    StreamFormat,
    SystemStatus,
    pack_word,
)

SYSEX7_BYTES_PER_SEGMENT = 6
SYSEX8_BYTES_PER_SEGMENT = 13

PARAMETER_NUMBER_STATUS = {
    # (registered, relative)
    (True, False): MIDI2Status.REGISTERED_CONTROLLER,
    (False, False): MIDI2Status.ASSIGNABLE_CONTROLLER,
    (True, True): MIDI2Status.RELATIVE_REGISTERED_CONTROLLER,
    (False, True): MIDI2Status.RELATIVE_ASSIGNABLE_CONTROLLER,
}


def _status(status: MIDI1Status, channel: int) -> int:
    return (status << 4) | channel


def _midi1_message(event: Event) -> list[int]:
    match event:
        case NoteOff(note=note, velocity=velocity, channel=channel):
            return [_status(MIDI1Status.NOTE_OFF, channel), note, velocity]
        case NoteOn(note=note, velocity=velocity, channel=channel):
            return [_status(MIDI1Status.NOTE_ON, channel), note, velocity]
        case NotePressure(note=note, amount=amount, channel=channel):
            return [_status(MIDI1Status.POLY_PRESSURE, channel), note, amount]
        case ControlChange(controller=controller, value=value, channel=channel):
            return [_status(MIDI1Status.CONTROL_CHANGE, channel), controller, value]
        case ProgramChange(program=program, channel=channel):
            return [_status(MIDI1Status.PROGRAM_CHANGE, channel), program]
        case ChannelPressure(amount=amount, channel=channel):
            return [_status(MIDI1Status.CHANNEL_PRESSURE, channel), amount]
        case PitchBend(value=value, channel=channel):
            return [_status(MIDI1Status.PITCH_BEND, channel), value & 0x7F, value >> 7]
        case TimecodeQuarterFrame(data=data):
            return [SystemStatus.TIMECODE_QUARTER_FRAME, data]
        case SongPositionPointer(position=position):
            return [SystemStatus.SONG_POSITION_POINTER, position & 0x7F, position >> 7]
        case SongSelect(number=number):
            return [SystemStatus.SONG_SELECT, number]
        case SysEx7(manufacturer=manufacturer, data=data):
            return [
                SystemStatus.SYSEX_START,
                *manufacturer.midi1_bytes,
                *data,
                SystemStatus.SYSEX_END,
            ]
        case SysEx8():
            return []
    return [SYSTEM_STATUS_BY_EVENT[type(event)]]


def midi1_bytes(event: Event) -> bytes:
    """
    Encode an event as a MIDI 1.0 byte stream.

    MIDI 2.0 channel voice events are translated down first; events without
    any MIDI 1.0 form encode to empty bytes.
    """
    if isinstance(event, MIDI2_CHANNEL_VOICE):
        return b"".join(midi1_bytes(ev) for ev in to_midi1(event))
    return bytes(_midi1_message(event))


def _midi1_ump(event: Event, mt: MessageType) -> list[int]:
    return [pack_word((mt << 4) | event.group, *_midi1_message(event))]


def _midi2_ump(
    event: Event,
    status: MIDI2Status,
    byte2: int = 0,
    byte3: int = 0,
    data: int = 0,
) -> list[int]:
    byte0 = (MessageType.MIDI_2_CHANNEL_VOICE << 4) | event.group
    byte1 = (status << 4) | event.channel
    return [pack_word(byte0, byte1, byte2, byte3), data]


def _midi2_channel_voice(event: Event) -> list[int]:
    match event:
        case MIDI2NoteOff() | MIDI2NoteOn():
            status = (
                MIDI2Status.NOTE_ON
                if isinstance(event, MIDI2NoteOn)
                else MIDI2Status.NOTE_OFF
            )
            return _midi2_ump(
                event,
                status,
                event.note,
                event.attribute_type,
                (event.velocity << 16) | event.attribute_data,
            )
        case MIDI2NotePressure(note=note, amount=amount):
            return _midi2_ump(event, MIDI2Status.POLY_PRESSURE, note, data=amount)
        case MIDI2ControlChange(controller=controller, value=value):
            return _midi2_ump(event, MIDI2Status.CONTROL_CHANGE, controller, data=value)
        case MIDI2ProgramChange(program=program, bank=bank):
            if bank is None:
                return _midi2_ump(event, MIDI2Status.PROGRAM_CHANGE, data=program << 24)
            return _midi2_ump(
                event,
                MIDI2Status.PROGRAM_CHANGE,
                byte3=1,
                data=(program << 24) | ((bank >> 7) << 8) | (bank & 0x7F),
            )
        case MIDI2ChannelPressure(amount=amount):
            return _midi2_ump(event, MIDI2Status.CHANNEL_PRESSURE, data=amount)
        case MIDI2PitchBend(value=value):
            return _midi2_ump(event, MIDI2Status.PITCH_BEND, data=value)
        case NotePitchBend(note=note, value=value):
            return _midi2_ump(event, MIDI2Status.PER_NOTE_PITCH_BEND, note, data=value)
        case NoteController(note=note, index=index, value=value, registered=registered):
            status = (
                MIDI2Status.REGISTERED_PER_NOTE_CONTROLLER
                if registered
                else MIDI2Status.ASSIGNABLE_PER_NOTE_CONTROLLER
            )
            return _midi2_ump(event, status, note, index, value)
        case NoteManagement(note=note, detach=detach, reset=reset):
            flags = (int(detach) << 1) | int(reset)
            return _midi2_ump(event, MIDI2Status.PER_NOTE_MANAGEMENT, note, flags)
        case ParameterNumber(bank=bank, index=index, value=value):
            status = PARAMETER_NUMBER_STATUS[event.registered, event.relative]
            return _midi2_ump(event, status, bank, index, value)
    raise TypeError(f"Not a MIDI 2.0 channel voice event: {event!r}")


def _stream_format(index: int, count: int) -> StreamFormat:
    if count == 1:
        return StreamFormat.COMPLETE
    if index == 0:
        return StreamFormat.START
    if index == count - 1:
        return StreamFormat.END
    return StreamFormat.CONTINUE


def _segments(payload: bytes, size: int) -> list[tuple[StreamFormat, bytes]]:
    chunks = [payload[i : i + size] for i in range(0, len(payload), size)] or [b""]
    return [(_stream_format(i, len(chunks)), chunk) for i, chunk in enumerate(chunks)]


def _sysex7_ump(event: SysEx7) -> list[list[int]]:
    res = []
    byte0 = (MessageType.DATA_64 << 4) | event.group
    payload = event.manufacturer.midi1_bytes + event.data
    for status, chunk in _segments(payload, SYSEX7_BYTES_PER_SEGMENT):
        data = chunk.ljust(SYSEX7_BYTES_PER_SEGMENT, b"\x00")
        res.append(
            [
                pack_word(byte0, (status << 4) | len(chunk), data[0], data[1]),
                int.from_bytes(data[2:], byteorder="big"),
            ]
        )
    return res


def _sysex8_ump(event: SysEx8) -> list[list[int]]:
    res = []
    byte0 = (MessageType.DATA_128 << 4) | event.group
    payload = event.manufacturer.sysex8_id.to_bytes(length=2, byteorder="big")
    payload += event.data
    for status, chunk in _segments(payload, SYSEX8_BYTES_PER_SEGMENT):
        data = chunk.ljust(SYSEX8_BYTES_PER_SEGMENT, b"\x00")
        # The byte count includes the stream ID
        byte1 = (status << 4) | (len(chunk) + 1)
        res.append(
            [
                pack_word(byte0, byte1, event.stream_id, data[0]),
                int.from_bytes(data[1:5], byteorder="big"),
                int.from_bytes(data[5:9], byteorder="big"),
                int.from_bytes(data[9:13], byteorder="big"),
            ]
        )
    return res


def ump_words(
    event: Event, protocol: ProtocolVersion = ProtocolVersion.MIDI_2_0
) -> list[list[int]]:
    """
    Encode an event as Universal MIDI Packets, one list of words per message.

    Channel voice events are translated to the resolution of ``protocol``;
    a MIDI 2.0 event may yield several MIDI 1.0 messages, or none at all.
    """
    if isinstance(event, MIDI1_CHANNEL_VOICE):
        if protocol == ProtocolVersion.MIDI_2_0:
            return [_midi2_channel_voice(to_midi2(event))]
        return [_midi1_ump(event, MessageType.MIDI_1_CHANNEL_VOICE)]

    if isinstance(event, MIDI2_CHANNEL_VOICE):
        if protocol == ProtocolVersion.MIDI_1_0:
            return [
                _midi1_ump(ev, MessageType.MIDI_1_CHANNEL_VOICE)
                for ev in to_midi1(event)
            ]
        return [_midi2_channel_voice(event)]

    match event:
        case SysEx7():
            return _sysex7_ump(event)
        case SysEx8():
            return _sysex8_ump(event)
    return [_midi1_ump(event, MessageType.SYSTEM)]
