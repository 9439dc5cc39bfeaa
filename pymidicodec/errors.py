class MIDIError(ValueError):
    """Base class for errors raised when building MIDI events"""


class MalformedMessageError(MIDIError):
    """A raw buffer does not frame a valid MIDI message"""


class ValueOutOfRangeError(MIDIError):
    def __init__(self, name: str, value, minimum: int, maximum: int):
        super().__init__(
            f"{name} must be within {minimum}..{maximum}, got {value!r}"
        )
        self.name = name
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
