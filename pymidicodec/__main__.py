import argparse
import logging
from binascii import hexlify, unhexlify

from pymidicodec.encode import midi1_bytes, ump_words
from pymidicodec.errors import MalformedMessageError
from pymidicodec.manufacturers import parse_manufacturer
from pymidicodec.midi1 import MIDI1Parser
from pymidicodec.midi2 import MIDI2Parser
from pymidicodec.packet import PacketData, UniversalPacketData
from pymidicodec.translate import to_midi1, to_midi2
from pymidicodec.ump import ProtocolVersion


def parse_words(arg: str) -> list[int]:
    """Comma-separated hex words, as in ``40903c00,c0000000``"""
    return [int(w, 16) for w in arg.split(",")]


def midi1_events(args):
    parser = MIDI1Parser(
        translate_note_on_zero_velocity_to_note_off=not args.keep_note_on_zero
    )
    for packet in args.packet:
        yield from parser.parsed_events(PacketData(packet))


def midi2_events(args):
    parser = MIDI2Parser()
    for words in args.words:
        yield from parser.parsed_events(UniversalPacketData(words))


def decode_midi1(args) -> None:
    for ev in midi1_events(args):
        print(ev)


def decode_midi2(args) -> None:
    for ev in midi2_events(args):
        if args.protocol == ProtocolVersion.MIDI_1_0:
            for translated in to_midi1(ev):
                print(translated)
        elif args.protocol == ProtocolVersion.MIDI_2_0:
            print(to_midi2(ev))
        else:
            print(ev)


def midi1_to_ump(args) -> None:
    for ev in midi1_events(args):
        for words in ump_words(ev, args.protocol):
            print(" ".join(f"{w:08X}" for w in words))


def ump_to_midi1(args) -> None:
    for ev in midi2_events(args):
        buf = midi1_bytes(ev)
        if buf:
            print(hexlify(buf).decode().upper())


def show_manufacturer(args) -> None:
    try:
        manufacturer, rest = parse_manufacturer(args.id)
    except MalformedMessageError as e:
        parser.error(str(e))
    if rest:
        parser.error(f"Trailing bytes after manufacturer ID: {rest.hex()}")

    print(manufacturer.name or "<unknown manufacturer>")
    print("valid" if manufacturer.is_valid else "invalid")


def main(argv: list[str] | None = None):
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    elif args.info:
        logging.basicConfig(level=logging.INFO)

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_usage()


parser = argparse.ArgumentParser(
    "pymidicodec",
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)

parser.add_argument("-I", "--info", action="store_true", help="Enable info logging")
parser.add_argument("-D", "--debug", action="store_true", help="Enable debug logging")
subparsers = parser.add_subparsers()


parser_decode1 = subparsers.add_parser("decode1", help="Decode MIDI 1.0 packets")
parser_decode1.set_defaults(func=decode_midi1)
parser_decode1.add_argument(
    "packet",
    nargs="+",
    type=unhexlify,
    help="MIDI 1.0 bytes in hex, one argument per packet",
)
parser_decode1.add_argument(
    "--keep-note-on-zero",
    action="store_true",
    help="Do not translate Note On with velocity 0 to Note Off",
)

parser_decode2 = subparsers.add_parser("decode2", help="Decode UMP packets")
parser_decode2.set_defaults(func=decode_midi2)
parser_decode2.add_argument(
    "words",
    nargs="+",
    type=parse_words,
    help="Comma-separated UMP words in hex, one argument per packet",
)
parser_decode2.add_argument(
    "-p",
    "--protocol",
    type=int,
    choices=[1, 2],
    help="Translate channel voice events to this MIDI protocol version",
)

parser_to_ump = subparsers.add_parser("to-ump", help="Convert MIDI 1.0 to UMP")
parser_to_ump.set_defaults(func=midi1_to_ump)
parser_to_ump.add_argument(
    "packet",
    nargs="+",
    type=unhexlify,
    help="MIDI 1.0 bytes in hex, one argument per packet",
)
parser_to_ump.add_argument(
    "-p",
    "--protocol",
    type=int,
    choices=[1, 2],
    default=2,
    help="MIDI protocol version of the UMP stream",
)
parser_to_ump.set_defaults(keep_note_on_zero=False)

parser_to_midi1 = subparsers.add_parser("to-midi1", help="Convert UMP to MIDI 1.0")
parser_to_midi1.set_defaults(func=ump_to_midi1)
parser_to_midi1.add_argument(
    "words",
    nargs="+",
    type=parse_words,
    help="Comma-separated UMP words in hex, one argument per packet",
)

parser_manufacturer = subparsers.add_parser(
    "manufacturer", help="Look up a SysEx manufacturer ID"
)
parser_manufacturer.set_defaults(func=show_manufacturer)
parser_manufacturer.add_argument(
    "id",
    type=unhexlify,
    help="One-byte (41) or three-byte (002109) manufacturer ID in hex",
)

if __name__ == "__main__":
    main()
