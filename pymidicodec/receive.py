import logging
from collections.abc import Callable, Iterable

from .events import Event
from .midi1 import MIDI1Parser
from .midi2 import MIDI2Parser
from .packet import PacketData, UniversalPacketData
from .ump import ProtocolVersion

logger = logging.getLogger(__name__)


class EventsHandler:
    """
    Receives packets from a single connection and calls ``handler`` with the
    events decoded from each packet. Packets that decode to nothing are not
    forwarded.
    """

    def __init__(
        self,
        handler: Callable[[list[Event]], None],
        translate_midi1_note_on_zero_velocity_to_note_off: bool = True,
    ):
        self.handler = handler
        self.midi1_parser = MIDI1Parser(
            translate_note_on_zero_velocity_to_note_off=(
                translate_midi1_note_on_zero_velocity_to_note_off
            )
        )
        self.midi2_parser = MIDI2Parser()

    def packet_list_received(self, packets: Iterable[PacketData]) -> None:
        for packet in packets:
            events = self.midi1_parser.parsed_events(packet)
            if events:
                self.handler(events)

    def event_list_received(
        self,
        packets: Iterable[UniversalPacketData],
        protocol: ProtocolVersion,
    ) -> None:
        # UMP messages carry their own message type, whatever the protocol
        logger.debug(f"Event list received for {ProtocolVersion(protocol).name}")
        for packet in packets:
            events = self.midi2_parser.parsed_events(packet)
            if events:
                self.handler(events)
