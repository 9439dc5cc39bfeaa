"""
MIDI events

Each message kind is an independent frozen dataclass; ``Event`` is the closed
union of all of them. Field values are validated when the event is built, so
an existing event can always be encoded.
"""

from dataclasses import dataclass

from typing_extensions import Self

from .errors import MalformedMessageError, ValueOutOfRangeError
from .manufacturers import (
    OneByteManufacturer,
    SysExManufacturer,
    ThreeByteManufacturer,
    parse_manufacturer,
)
from .values import (
    Bipolar14,
    Bipolar32,
    UInt4,
    UInt7,
    UInt8,
    UInt14,
    UInt16,
    UInt32,
    validate_fields,
)


# MIDI 1.0 Channel Voice Messages
@dataclass(frozen=True)
class NoteOff:
    note: int
    velocity: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, note=UInt7, velocity=UInt7, channel=UInt4, group=UInt4)


@dataclass(frozen=True)
class NoteOn:
    note: int
    velocity: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, note=UInt7, velocity=UInt7, channel=UInt4, group=UInt4)


@dataclass(frozen=True)
class NotePressure:
    """Polyphonic key pressure (aftertouch)"""

    note: int
    amount: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, note=UInt7, amount=UInt7, channel=UInt4, group=UInt4)


@dataclass(frozen=True)
class ControlChange:
    controller: int
    value: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(
            self, controller=UInt7, value=UInt7, channel=UInt4, group=UInt4
        )


@dataclass(frozen=True)
class ProgramChange:
    program: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, program=UInt7, channel=UInt4, group=UInt4)


@dataclass(frozen=True)
class ChannelPressure:
    amount: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, amount=UInt7, channel=UInt4, group=UInt4)


@dataclass(frozen=True)
class PitchBend:
    """14-bit pitch bend, centered on 0x2000"""

    value: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, value=Bipolar14, channel=UInt4, group=UInt4)


# MIDI 2.0 Channel Voice Messages
@dataclass(frozen=True)
class MIDI2NoteOff:
    note: int
    velocity: int
    channel: int
    attribute_type: int = 0
    attribute_data: int = 0
    group: int = 0

    def __post_init__(self):
        validate_fields(
            self,
            note=UInt7,
            velocity=UInt16,
            channel=UInt4,
            attribute_type=UInt8,
            attribute_data=UInt16,
            group=UInt4,
        )


@dataclass(frozen=True)
class MIDI2NoteOn:
    note: int
    velocity: int
    channel: int
    attribute_type: int = 0
    attribute_data: int = 0
    group: int = 0

    def __post_init__(self):
        validate_fields(
            self,
            note=UInt7,
            velocity=UInt16,
            channel=UInt4,
            attribute_type=UInt8,
            attribute_data=UInt16,
            group=UInt4,
        )


@dataclass(frozen=True)
class MIDI2NotePressure:
    note: int
    amount: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, note=UInt7, amount=UInt32, channel=UInt4, group=UInt4)


@dataclass(frozen=True)
class MIDI2ControlChange:
    controller: int
    value: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(
            self, controller=UInt7, value=UInt32, channel=UInt4, group=UInt4
        )


@dataclass(frozen=True)
class MIDI2ProgramChange:
    """Program change, with an optional 14-bit bank (``None`` when not selected)"""

    program: int
    channel: int
    bank: int | None = None
    group: int = 0

    def __post_init__(self):
        validate_fields(self, program=UInt7, channel=UInt4, group=UInt4)
        if self.bank is not None:
            validate_fields(self, bank=UInt14)


@dataclass(frozen=True)
class MIDI2ChannelPressure:
    amount: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, amount=UInt32, channel=UInt4, group=UInt4)


@dataclass(frozen=True)
class MIDI2PitchBend:
    value: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, value=Bipolar32, channel=UInt4, group=UInt4)


@dataclass(frozen=True)
class NotePitchBend:
    """Per-note pitch bend; 32-bit value centered on 0x80000000"""

    note: int
    value: int
    channel: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, note=UInt7, value=Bipolar32, channel=UInt4, group=UInt4)


@dataclass(frozen=True)
class NoteController:
    """Registered (``registered=True``) or assignable per-note controller"""

    note: int
    index: int
    value: int
    channel: int
    registered: bool = True
    group: int = 0

    def __post_init__(self):
        validate_fields(
            self, note=UInt7, index=UInt8, value=UInt32, channel=UInt4, group=UInt4
        )


@dataclass(frozen=True)
class NoteManagement:
    note: int
    channel: int
    detach: bool = False
    reset: bool = False
    group: int = 0

    def __post_init__(self):
        validate_fields(self, note=UInt7, channel=UInt4, group=UInt4)


@dataclass(frozen=True)
class ParameterNumber:
    """
    Registered (RPN) or assignable (NRPN) controller.

    When ``relative`` is set, ``value`` holds a two's complement 32-bit delta.
    """

    bank: int
    index: int
    value: int
    channel: int
    registered: bool = True
    relative: bool = False
    group: int = 0

    def __post_init__(self):
        validate_fields(
            self, bank=UInt7, index=UInt7, value=UInt32, channel=UInt4, group=UInt4
        )


# System Common Messages
@dataclass(frozen=True)
class TimecodeQuarterFrame:
    data: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, data=UInt7, group=UInt4)


@dataclass(frozen=True)
class SongPositionPointer:
    position: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, position=UInt14, group=UInt4)


@dataclass(frozen=True)
class SongSelect:
    number: int
    group: int = 0

    def __post_init__(self):
        validate_fields(self, number=UInt7, group=UInt4)


@dataclass(frozen=True)
class TuneRequest:
    group: int = 0

    def __post_init__(self):
        validate_fields(self, group=UInt4)


# System Real Time Messages
@dataclass(frozen=True)
class TimingClock:
    group: int = 0

    def __post_init__(self):
        validate_fields(self, group=UInt4)


@dataclass(frozen=True)
class Start:
    group: int = 0

    def __post_init__(self):
        validate_fields(self, group=UInt4)


@dataclass(frozen=True)
class Continue:
    group: int = 0

    def __post_init__(self):
        validate_fields(self, group=UInt4)


@dataclass(frozen=True)
class Stop:
    group: int = 0

    def __post_init__(self):
        validate_fields(self, group=UInt4)


@dataclass(frozen=True)
class ActiveSensing:
    group: int = 0

    def __post_init__(self):
        validate_fields(self, group=UInt4)


@dataclass(frozen=True)
class SystemReset:
    group: int = 0

    def __post_init__(self):
        validate_fields(self, group=UInt4)


# System Exclusive Messages
def _check_manufacturer(manufacturer) -> None:
    if not isinstance(manufacturer, (OneByteManufacturer, ThreeByteManufacturer)):
        raise TypeError(f"Expected a SysEx manufacturer, got {manufacturer!r}")


def _check_data(data, kind: type[UInt7] | type[UInt8]) -> bytes:
    for i, byte in enumerate(data):
        kind(byte, name=f"data[{i}]")
    return bytes(data)


@dataclass(frozen=True)
class SysEx7:
    """
    7-bit System Exclusive message.

    ``data`` excludes the 0xF0 start byte, the manufacturer ID and the 0xF7
    end byte. There is no limit on its length.
    """

    manufacturer: SysExManufacturer
    data: bytes = b""
    group: int = 0

    def __post_init__(self):
        _check_manufacturer(self.manufacturer)
        # 0x00 announces a three-byte ID on the wire
        if self.manufacturer == OneByteManufacturer(0x00):
            raise MalformedMessageError(
                "One-byte manufacturer ID 0x00 cannot be sent in a 7-bit SysEx"
            )
        object.__setattr__(self, "data", _check_data(self.data, UInt7))
        validate_fields(self, group=UInt4)

    @classmethod
    def from_payload(cls, payload: bytes, group: int = 0) -> Self:
        """Build from the bytes between 0xF0 and 0xF7 (manufacturer ID + data)"""
        group = UInt4(group, name="group")
        manufacturer, data = parse_manufacturer(bytes(payload))
        try:
            return cls(manufacturer=manufacturer, data=data, group=group)
        except ValueOutOfRangeError as e:
            raise MalformedMessageError(f"Invalid SysEx data: {e}") from e

    @classmethod
    def from_midi1_bytes(cls, raw: bytes | list[int], group: int = 0) -> Self:
        """
        Build from a raw MIDI 1.0 SysEx message.

        The message must start with 0xF0 and carry a manufacturer ID;
        the trailing 0xF7 is optional.
        """
        raw = bytes(raw)
        if not raw:
            raise MalformedMessageError("Empty SysEx message")
        if raw[0] != 0xF0:
            raise MalformedMessageError(
                f"SysEx message must start with 0xF0, got {raw[0]:#04x}"
            )

        payload = raw[1:]
        if payload and payload[-1] == 0xF7:
            payload = payload[:-1]

        for byte in payload:
            if byte & 0x80:
                raise MalformedMessageError(
                    f"Unexpected status byte {byte:#04x} in SysEx message"
                )

        return cls.from_payload(payload, group=group)


@dataclass(frozen=True)
class SysEx8:
    """8-bit System Exclusive message (UMP only)"""

    manufacturer: SysExManufacturer
    data: bytes = b""
    stream_id: int = 0
    group: int = 0

    def __post_init__(self):
        _check_manufacturer(self.manufacturer)
        object.__setattr__(self, "data", _check_data(self.data, UInt8))
        validate_fields(self, stream_id=UInt8, group=UInt4)


Event = (
    NoteOff
    | NoteOn
    | NotePressure
    | ControlChange
    | ProgramChange
    | ChannelPressure
    | PitchBend
    | MIDI2NoteOff
    | MIDI2NoteOn
    | MIDI2NotePressure
    | MIDI2ControlChange
    | MIDI2ProgramChange
    | MIDI2ChannelPressure
    | MIDI2PitchBend
    | NotePitchBend
    | NoteController
    | NoteManagement
    | ParameterNumber
    | TimecodeQuarterFrame
    | SongPositionPointer
    | SongSelect
    | TuneRequest
    | TimingClock
    | Start
    | Continue
    | Stop
    | ActiveSensing
    | SystemReset
    | SysEx7
    | SysEx8
)

MIDI1_CHANNEL_VOICE = (
    NoteOff,
    NoteOn,
    NotePressure,
    ControlChange,
    ProgramChange,
    ChannelPressure,
    PitchBend,
)

MIDI2_CHANNEL_VOICE = (
    MIDI2NoteOff,
    MIDI2NoteOn,
    MIDI2NotePressure,
    MIDI2ControlChange,
    MIDI2ProgramChange,
    MIDI2ChannelPressure,
    MIDI2PitchBend,
    NotePitchBend,
    NoteController,
    NoteManagement,
    ParameterNumber,
)
