"""
Range constrained integers and unit interval scaling shared by every event field.

Every ``UInt*`` constructor fails with ``ValueOutOfRangeError`` when given a
value outside of its range. Clamping only happens through the explicit
``clamped()`` and ``from_unit_interval()`` constructors.
"""

import math
import operator
import re
from dataclasses import dataclass
from typing import ClassVar, SupportsIndex

from typing_extensions import Self

from .errors import ValueOutOfRangeError


class UInt(int):
    BITS: ClassVar[int]
    MAX: ClassVar[int]

    def __init_subclass__(cls, bits: int | None = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if bits is not None:
            cls.BITS = bits
            cls.MAX = (1 << bits) - 1

    def __new__(cls, value: SupportsIndex = 0, *, name: str = "value") -> Self:
        value = operator.index(value)
        if not 0 <= value <= cls.MAX:
            raise ValueOutOfRangeError(name, value, 0, cls.MAX)
        return super().__new__(cls, value)

    @classmethod
    def clamped(cls, value: float) -> Self:
        """Round ``value`` to the nearest integer and clamp it into range"""
        if math.isnan(value):
            raise ValueOutOfRangeError("value", value, 0, cls.MAX)
        return cls(round(min(max(value, 0), cls.MAX)))


class UInt4(UInt, bits=4):
    pass


class UInt7(UInt, bits=7):
    pass


class UInt8(UInt, bits=8):
    pass


class UInt14(UInt, bits=14):
    pass


class UInt16(UInt, bits=16):
    pass


class UInt32(UInt, bits=32):
    pass


def validate_fields(obj, **kinds: type[UInt]) -> None:
    """Replace each named attribute of a frozen dataclass by its validated value"""
    for name, kind in kinds.items():
        object.__setattr__(obj, name, kind(getattr(obj, name), name=name))


def bipolar_encode(value: float, midpoint: int, upper: int) -> int:
    if math.isnan(value):
        raise ValueOutOfRangeError("unit interval", value, -1, 1)
    value = min(max(value, -1.0), 1.0)
    # The upper half has one step less than the lower half
    if value > 0.0:
        return midpoint + round(value * upper)
    return midpoint - round(-value * midpoint)


def bipolar_decode(raw: int, midpoint: int, upper: int) -> float:
    if raw > midpoint:
        return (raw - midpoint) / upper
    return (raw - midpoint) / midpoint


class Bipolar14(UInt14):
    """
    14-bit value (MIDI 1.0 pitch bend) with its neutral point at 0x2000

    -1.0 -> 0x0000, 0.0 -> 0x2000, 1.0 -> 0x3FFF
    """

    MIDPOINT: ClassVar[int] = 0x2000

    @classmethod
    def from_unit_interval(cls, value: float) -> Self:
        return cls(bipolar_encode(value, cls.MIDPOINT, cls.MAX - cls.MIDPOINT))

    @property
    def unit_interval(self) -> float:
        return bipolar_decode(self, self.MIDPOINT, self.MAX - self.MIDPOINT)


class Bipolar32(UInt32):
    """
    32-bit value (MIDI 2.0 pitch bend) with its neutral point at 0x80000000

    -1.0 -> 0x00000000, 0.0 -> 0x80000000, 1.0 -> 0xFFFFFFFF
    """

    MIDPOINT: ClassVar[int] = 0x80000000

    @classmethod
    def from_unit_interval(cls, value: float) -> Self:
        return cls(bipolar_encode(value, cls.MIDPOINT, cls.MAX - cls.MIDPOINT))

    @property
    def unit_interval(self) -> float:
        return bipolar_decode(self, self.MIDPOINT, self.MAX - self.MIDPOINT)


def scale_up(value: int, src_bits: int, dst_bits: int) -> int:
    """
    Min-Center-Max upscaling from the MIDI 2.0 translation rules:
    zero, center and maximum values map to zero, center and maximum.
    """
    scale_bits = dst_bits - src_bits
    shifted = value << scale_bits
    if value <= 1 << (src_bits - 1):
        return shifted

    repeat_bits = src_bits - 1
    repeat_value = value & ((1 << repeat_bits) - 1)
    if scale_bits > repeat_bits:
        repeat_value <<= scale_bits - repeat_bits
    else:
        repeat_value >>= repeat_bits - scale_bits

    while repeat_value:
        shifted |= repeat_value
        repeat_value >>= repeat_bits
    return shifted


def scale_down(value: int, src_bits: int, dst_bits: int) -> int:
    return value >> (src_bits - dst_bits)


NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
NOTE_NAME_RE = re.compile(r"([A-G])([#b]?)(-?\d+)", re.IGNORECASE)


@dataclass(frozen=True)
class Note:
    """
    MIDI note number, named with middle C (60) as C3.
    Usable anywhere a note number is expected.
    """

    number: int

    def __post_init__(self):
        validate_fields(self, number=UInt7)

    def __index__(self) -> int:
        return self.number

    @classmethod
    def from_name(cls, name: str) -> Self:
        match = NOTE_NAME_RE.fullmatch(name.strip())
        if match is None:
            raise ValueError(f"Invalid note name {name!r}")
        letter, accidental, octave = match.groups()
        semitone = NOTE_NAMES.index(letter.upper())
        if accidental == "#":
            semitone += 1
        elif accidental.lower() == "b":
            semitone -= 1
        return cls((int(octave) + 2) * 12 + semitone)

    @property
    def name(self) -> str:
        return f"{NOTE_NAMES[self.number % 12]}{self.number // 12 - 2}"

    @property
    def frequency(self) -> float:
        """Equal temperament frequency in Hz, with A3 (69) at 440 Hz"""
        return 440.0 * 2 ** ((self.number - 69) / 12)
