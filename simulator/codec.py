# simulator/codec.py

import base64
import binascii

from simulator.errors import FormatError, InvalidMachineError

MARKER = "m"
TRANSITION_SIZE = 3
STATE_SIZE = 2 * TRANSITION_SIZE


def _raw(machine):
    code = getattr(machine, "code", machine)
    return bytes(code)


def encode(machine):
    """Encode a transition table as 'm' + unpadded URL-safe base64."""
    raw = _raw(machine)
    if len(raw) % STATE_SIZE != 0:
        raise InvalidMachineError(f"Machine length {len(raw)} is not a multiple of {STATE_SIZE}.")
    return MARKER + base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode(text):
    """Decode an 'm'-prefixed URL-safe base64 string back to raw table bytes."""
    if not text or text[0] != MARKER:
        raise FormatError(f"Invalid TM base64 description {text!r}: must start with '{MARKER}'.")

    body = text[1:].strip()
    if "+" in body or "/" in body:
        raise FormatError(f"Invalid TM base64 description {text!r}: only the URL-safe alphabet is accepted.")
    body += "=" * (-len(body) % 4)
    try:
        raw = base64.b64decode(body, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise FormatError(f"Invalid TM base64 description {text!r}: {e}") from e

    if len(raw) % STATE_SIZE != 0:
        raise InvalidMachineError(f"Decoded machine length {len(raw)} is not a multiple of {STATE_SIZE}.")
    return raw
