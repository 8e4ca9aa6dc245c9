class MachineError(ValueError):
    """Base class for malformed machine descriptions."""


class FormatError(MachineError):
    """Encoded machine text is not in the expected format."""


class InvalidMachineError(MachineError):
    """Transition table bytes are malformed (bad length or field values)."""


class InvalidStateError(MachineError):
    """A state index falls outside the transition table."""
