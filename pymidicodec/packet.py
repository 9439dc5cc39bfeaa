from dataclasses import dataclass

from typing_extensions import Self

from .ump import ProtocolVersion, bytes_to_words, word_bytes
from .values import UInt32


@dataclass(frozen=True)
class PacketData:
    """MIDI 1.0 bytes delivered as one unit, with the host timestamp"""

    bytes: bytes
    timestamp: int = 0

    def __post_init__(self):
        object.__setattr__(self, "bytes", bytes(self.bytes))


@dataclass(frozen=True)
class UniversalPacketData:
    """UMP words delivered as one unit, with the host timestamp"""

    words: tuple[int, ...]
    timestamp: int = 0
    protocol: ProtocolVersion = ProtocolVersion.MIDI_2_0

    def __post_init__(self):
        words = tuple(UInt32(w, name=f"words[{i}]") for i, w in enumerate(self.words))
        object.__setattr__(self, "words", words)
        object.__setattr__(self, "protocol", ProtocolVersion(self.protocol))

    @classmethod
    def from_bytes(
        cls,
        buf: bytes,
        timestamp: int = 0,
        protocol: ProtocolVersion = ProtocolVersion.MIDI_2_0,
    ) -> Self:
        """Build from big-endian serialised words"""
        return cls(
            words=tuple(bytes_to_words(buf)),
            timestamp=timestamp,
            protocol=protocol,
        )

    @property
    def bytes(self) -> bytes:
        return word_bytes(self.words)


Packet = PacketData | UniversalPacketData
