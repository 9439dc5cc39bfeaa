"""
Translation of channel voice messages between MIDI 1.0 and MIDI 2.0 resolutions
"""

from .events import (
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
    SysEx8,
)
from .values import scale_down, scale_up

# Controller numbers used to carry MIDI 2.0 only data on MIDI 1.0
CC_BANK_SELECT_MSB = 0
CC_BANK_SELECT_LSB = 32
CC_DATA_ENTRY_MSB = 6
CC_DATA_ENTRY_LSB = 38
CC_NRPN_LSB = 98
CC_NRPN_MSB = 99
CC_RPN_LSB = 100
CC_RPN_MSB = 101


def to_midi2(event: Event) -> Event:
    """Upscale a MIDI 1.0 channel voice event; other events are returned as is"""
    match event:
        case NoteOn(note=note, velocity=0, channel=channel, group=group):
            return MIDI2NoteOff(note=note, velocity=0, channel=channel, group=group)
        case NoteOn(note=note, velocity=velocity, channel=channel, group=group):
            return MIDI2NoteOn(
                note=note,
                velocity=scale_up(velocity, 7, 16),
                channel=channel,
                group=group,
            )
        case NoteOff(note=note, velocity=velocity, channel=channel, group=group):
            return MIDI2NoteOff(
                note=note,
                velocity=scale_up(velocity, 7, 16),
                channel=channel,
                group=group,
            )
        case NotePressure(note=note, amount=amount, channel=channel, group=group):
            return MIDI2NotePressure(
                note=note,
                amount=scale_up(amount, 7, 32),
                channel=channel,
                group=group,
            )
        case ControlChange(controller=cc, value=value, channel=channel, group=group):
            return MIDI2ControlChange(
                controller=cc,
                value=scale_up(value, 7, 32),
                channel=channel,
                group=group,
            )
        case ProgramChange(program=program, channel=channel, group=group):
            return MIDI2ProgramChange(program=program, channel=channel, group=group)
        case ChannelPressure(amount=amount, channel=channel, group=group):
            return MIDI2ChannelPressure(
                amount=scale_up(amount, 7, 32),
                channel=channel,
                group=group,
            )
        case PitchBend(value=value, channel=channel, group=group):
            return MIDI2PitchBend(
                value=scale_up(value, 14, 32),
                channel=channel,
                group=group,
            )
    return event


def to_midi1(event: Event) -> list[Event]:
    """
    Downscale a MIDI 2.0 channel voice event into MIDI 1.0 events.

    Messages without MIDI 1.0 equivalent (per-note messages, relative
    controllers, 8-bit SysEx) translate to an empty list; other events are
    returned as is.
    """
    match event:
        case MIDI2NoteOn(note=note, velocity=velocity, channel=channel, group=group):
            # A MIDI 1.0 Note On with velocity 0 would be a Note Off
            velocity = scale_down(velocity, 16, 7) or 1
            return [NoteOn(note=note, velocity=velocity, channel=channel, group=group)]
        case MIDI2NoteOff(note=note, velocity=velocity, channel=channel, group=group):
            return [
                NoteOff(
                    note=note,
                    velocity=scale_down(velocity, 16, 7),
                    channel=channel,
                    group=group,
                )
            ]
        case MIDI2NotePressure(note=note, amount=amount, channel=channel, group=group):
            return [
                NotePressure(
                    note=note,
                    amount=scale_down(amount, 32, 7),
                    channel=channel,
                    group=group,
                )
            ]
        case MIDI2ControlChange(
            controller=cc, value=value, channel=channel, group=group
        ):
            return [
                ControlChange(
                    controller=cc,
                    value=scale_down(value, 32, 7),
                    channel=channel,
                    group=group,
                )
            ]
        case MIDI2ProgramChange(
            program=program, channel=channel, bank=bank, group=group
        ):
            res: list[Event] = []
            if bank is not None:
                res += [
                    ControlChange(CC_BANK_SELECT_MSB, bank >> 7, channel, group),
                    ControlChange(CC_BANK_SELECT_LSB, bank & 0x7F, channel, group),
                ]
            res.append(ProgramChange(program=program, channel=channel, group=group))
            return res
        case MIDI2ChannelPressure(amount=amount, channel=channel, group=group):
            return [
                ChannelPressure(
                    amount=scale_down(amount, 32, 7),
                    channel=channel,
                    group=group,
                )
            ]
        case MIDI2PitchBend(value=value, channel=channel, group=group):
            return [
                PitchBend(
                    value=scale_down(value, 32, 14),
                    channel=channel,
                    group=group,
                )
            ]
        case ParameterNumber(relative=False) as pn:
            if pn.registered:
                msb, lsb = CC_RPN_MSB, CC_RPN_LSB
            else:
                msb, lsb = CC_NRPN_MSB, CC_NRPN_LSB
            return [
                ControlChange(msb, pn.bank, pn.channel, pn.group),
                ControlChange(lsb, pn.index, pn.channel, pn.group),
                ControlChange(CC_DATA_ENTRY_MSB, pn.value >> 25, pn.channel, pn.group),
                ControlChange(
                    CC_DATA_ENTRY_LSB,
                    (pn.value >> 18) & 0x7F,
                    pn.channel,
                    pn.group,
                ),
            ]
        case ParameterNumber() | NotePitchBend() | NoteController() | NoteManagement():
            return []
        case SysEx8():
            return []
    return [event]
