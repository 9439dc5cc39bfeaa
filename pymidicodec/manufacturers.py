"""
System Exclusive manufacturer IDs

A manufacturer is either a one-byte ID (0x01..0x7D), or a three-byte ID
starting with 0x00 and followed by two 7-bit bytes. Validity is a property of
the decoded value: an ID outside of the allocated ranges still decodes.
"""

from dataclasses import dataclass

from typing_extensions import Self

from .errors import MalformedMessageError
from .values import UInt7, UInt16, validate_fields


@dataclass(frozen=True)
class OneByteManufacturer:
    id: int

    def __post_init__(self):
        validate_fields(self, id=UInt7)

    @property
    def is_valid(self) -> bool:
        # 0x00 prefixes three-byte IDs, 0x7E and 0x7F are universal SysEx
        return 0x01 <= self.id <= 0x7D

    @property
    def name(self) -> str | None:
        return ONE_BYTE_MANUFACTURERS.get(self.id)

    @property
    def midi1_bytes(self) -> bytes:
        return bytes([self.id])

    @property
    def sysex8_id(self) -> int:
        return self.id


@dataclass(frozen=True)
class ThreeByteManufacturer:
    byte2: int
    byte3: int

    def __post_init__(self):
        validate_fields(self, byte2=UInt7, byte3=UInt7)

    @property
    def is_valid(self) -> bool:
        return (self.byte2, self.byte3) != (0x00, 0x00)

    @property
    def name(self) -> str | None:
        return THREE_BYTE_MANUFACTURERS.get((self.byte2, self.byte3))

    @property
    def midi1_bytes(self) -> bytes:
        return bytes([0x00, self.byte2, self.byte3])

    @property
    def sysex8_id(self) -> int:
        return 0x8000 | (self.byte2 << 8) | self.byte3

    @classmethod
    def from_id(cls, value: int) -> Self:
        """Build from the ``0x00XXYY`` notation used by the MMA ID list"""
        if value >> 16:
            raise MalformedMessageError(
                f"Not a three-byte manufacturer ID: {value:#08x}"
            )
        return cls(byte2=(value >> 8) & 0xFF, byte3=value & 0xFF)


SysExManufacturer = OneByteManufacturer | ThreeByteManufacturer


def parse_manufacturer(payload: bytes) -> tuple[SysExManufacturer, bytes]:
    """Split the manufacturer ID from the front of a SysEx7 payload"""
    if not payload:
        raise MalformedMessageError("Missing SysEx manufacturer ID")
    if payload[0] != 0x00:
        return OneByteManufacturer(payload[0]), payload[1:]
    if len(payload) < 3:
        raise MalformedMessageError(
            f"Truncated three-byte SysEx manufacturer ID {payload.hex(' ')}"
        )
    return ThreeByteManufacturer(payload[1], payload[2]), payload[3:]


def manufacturer_from_sysex8_id(value: int) -> SysExManufacturer:
    """Decode the 16-bit manufacturer ID carried by 8-bit SysEx"""
    value = UInt16(value, name="manufacturer")
    if value & 0x8000:
        return ThreeByteManufacturer((value >> 8) & 0x7F, value & 0x7F)
    if value >> 8:
        raise MalformedMessageError(f"Invalid SysEx8 manufacturer ID {value:#06x}")
    return OneByteManufacturer(value)


ONE_BYTE_MANUFACTURERS = {
    # American group
    0x01: "Sequential Circuits",
    0x02: "IDP",
    0x03: "Voyetra Turtle Beach, Inc.",
    0x04: "Moog Music",
    0x05: "Passport Designs",
    0x06: "Lexicon Inc.",
    0x07: "Kurzweil / Young Chang",
    0x08: "Fender",
    0x09: "MIDI9",
    0x0A: "AKG Acoustics",
    0x0B: "Voyce Music",
    0x0C: "WaveFrame",
    0x0D: "ADA Signal Processors, Inc.",
    0x0E: "Garfield Electronics",
    0x0F: "Ensoniq",
    0x10: "Oberheim / Gibson Labs",
    0x11: "Apple",
    0x12: "Grey Matter Response",
    0x13: "Digidesign Inc.",
    0x14: "Palmtree Instruments",
    0x15: "JLCooper Electronics",
    0x16: "Lowrey Organ Company",
    0x17: "Adams-Smith",
    0x18: "E-mu",
    0x19: "Harmony Systems",
    0x1A: "ART",
    0x1B: "Baldwin",
    0x1C: "Eventide",
    0x1D: "Inventronics",
    0x1E: "Key Concepts",
    0x1F: "Clarity",
    # European group
    0x20: "Passac",
    0x21: "Proel Labs (SIEL)",
    0x22: "Synthaxe (UK)",
    0x23: "Stepp",
    0x24: "Hohner",
    0x25: "Twister",
    0x26: "Ketron s.r.l.",
    0x27: "Jellinghaus MS",
    0x28: "Southworth Music Systems",
    0x29: "PPG (Germany)",
    0x2A: "JEN",
    0x2B: "Solid State Logic Organ Systems",
    0x2C: "Audio Veritrieb-P. Struven",
    0x2D: "Neve",
    0x2E: "Soundtracs Ltd.",
    0x2F: "Elka",
    0x30: "Dynacord",
    0x31: "Viscount International Spa (Intercontinental Electronics)",
    0x32: "Drawmer",
    0x33: "Clavia Digital Instruments",
    0x34: "Audio Architecture",
    0x35: "Generalmusic Corp SpA",
    0x36: "Cheetah Marketing",
    0x37: "C.T.M.",
    0x38: "Simmons UK",
    0x39: "Soundcraft Electronics",
    0x3A: "Steinberg Media Technologies GmbH",
    0x3B: "Wersi Gmbh",
    0x3C: "AVAB Niethammer AB",
    0x3D: "Digigram",
    0x3E: "Waldorf Electronics GmbH",
    0x3F: "Quasimidi",
    # Japanese group
    0x40: "Kawai Musical Instruments MFG. CO. Ltd",
    0x41: "Roland Corporation",
    0x42: "Korg Inc.",
    0x43: "Yamaha",
    0x44: "Casio Computer Co. Ltd",
    0x46: "Kamiya Studio Co. Ltd",
    0x47: "Akai Electric Co. Ltd.",
    0x48: "Victor Company of Japan, Ltd.",
    0x4B: "Fujitsu Limited",
    0x4C: "Sony Corporation",
    0x4E: "Teac Corporation",
    0x50: "Matsushita Electric Industrial Co. , Ltd",
    0x51: "Fostex Corporation",
    0x52: "Zoom Corporation",
    0x54: "Matsushita Communication Industrial Co., Ltd.",
    0x55: "Suzuki Musical Instruments MFG. Co., Ltd.",
    0x56: "Fuji Sound Corporation Ltd.",
    0x57: "Acoustic Technical Laboratory, Inc.",
    0x59: "Faith, Inc.",
    0x5A: "Internet Corporation",
    0x5C: "Seekers Co. Ltd.",
    0x5F: "SD Card Association",
}

THREE_BYTE_MANUFACTURERS = {
    # American group
    (0x00, 0x01): "Time/Warner Interactive",
    (0x00, 0x07): "Digital Music Corp.",
    (0x00, 0x0E): "Alesis Studio Electronics",
    (0x00, 0x15): "KAT Inc.",
    (0x00, 0x3B): "Mark Of The Unicorn (MOTU)",
    (0x00, 0x41): "Microsoft",
    (0x00, 0x58): "Atari Corporation",
    (0x02, 0x3B): "Sonoclast, LLC",
    # European group
    (0x20, 0x00): "Dream SAS",
    (0x20, 0x1F): "TC Electronics",
    (0x20, 0x29): "Focusrite/Novation",
    (0x20, 0x32): "Behringer GmbH",
    (0x20, 0x33): "Access Music Electronics",
    (0x20, 0x3C): "Elektron",
    (0x20, 0x6B): "Arturia",
    (0x21, 0x09): "Native Instruments",
    (0x21, 0x59): "Robkoo Information & Technologies Co., Ltd.",
    # Japanese group
    (0x40, 0x00): "Crimson Technology Inc.",
    (0x40, 0x07): "Slik Corporation",
}
