"""
Legacy framing of a single string value.

Files written by older producers of the credentials format wrap the
plaintext in Ruby's Marshal 4.8 encoding of a String, usually with an
instance variable marking it as UTF-8:

    04 08              version
    49                 'I', object with instance variables
    22 <len> <bytes>   '"', raw string
    06 3a 06 45 54     one ivar, symbol :E, true

Only string values are produced or accepted.
"""

import io

from rubymarshal.classes import RubyString
from rubymarshal.reader import load
from rubymarshal.writer import writes

from .utils import FramingError

VERSION = b'\x04\x08'


def wrap(text: str) -> bytes:
    return writes(text)


def unwrap(data: bytes) -> bytes:
    if data[:2] != VERSION:
        raise FramingError(f"Unsupported framing version {data[:2]!r}")

    fd = io.BytesIO(data)
    try:
        value = load(fd)
    except Exception as error:
        raise FramingError(f"Payload is not a framed string: {error}") from error

    if fd.tell() != len(data):
        raise FramingError(
            f"{len(data) - fd.tell()} unexpected bytes after framed string")

    if isinstance(value, RubyString):
        value = value.text
    if isinstance(value, str):
        return value.encode('utf-8')
    if isinstance(value, bytes):
        return value

    raise FramingError(f"Framed value is a {type(value).__name__}, not a string")
