import base64
import binascii
import logging
import typing

import attr
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from . import envelope
from .generation import KEY_LENGTH, random_iv
from .utils import (
    CryptoError,
    DecodingError,
    InvalidFormatError,
    KeyFormatError,
    Utf8Error,
)

log = logging.getLogger(__name__)

DELIMITER = '--'
TAG_LENGTH = 16


def decode_key(key: str) -> bytes:
    try:
        raw = bytes.fromhex(key)
    except ValueError as error:
        raise KeyFormatError("Master key is not valid hex") from error

    if len(raw) != KEY_LENGTH:
        raise KeyFormatError(
            f"Master key must be {KEY_LENGTH} bytes ({KEY_LENGTH * 2} hex "
            f"characters), got {len(raw)} bytes")
    return raw


def b64decode(value: typing.Union[str, bytes], name: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as error:
        raise DecodingError(f"Could not base64 decode the {name}") from error


def to_bytes(value: typing.Union[str, bytes]) -> bytes:
    return value.encode('utf-8') if isinstance(value, str) else bytes(value)


@attr.s(frozen=True)
class MessageCipher:
    """
    AES-128-GCM over a single framed string.

    The message is plaintext when encrypting and the base64 ciphertext
    field when decrypting. The associated data is authenticated but not
    encrypted, and the empty string is a valid value of its own.
    """

    message: bytes = attr.ib(converter=to_bytes)
    key: str = attr.ib(repr=False)
    aad: str = attr.ib(default='')

    @property
    def associated_data(self) -> bytes:
        return self.aad.encode('utf-8')

    def encrypt(self) -> str:
        key = decode_key(self.key)

        try:
            text = self.message.decode('utf-8')
        except UnicodeDecodeError as error:
            raise Utf8Error("Message is not valid UTF-8") from error

        iv = random_iv()
        try:
            sealed = AESGCM(key).encrypt(iv, envelope.wrap(text), self.associated_data)
        except (ValueError, OverflowError) as error:
            raise CryptoError(f"Encryption failed: {error}") from error

        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        log.debug(f"Encrypted {len(self.message)} bytes")
        return DELIMITER.join(
            base64.b64encode(part).decode('ascii') for part in (ciphertext, iv, tag))

    def decrypt(self, iv: str, tag: str) -> str:
        key = decode_key(self.key)
        ciphertext = b64decode(self.message, 'message')
        nonce = b64decode(iv, 'initialization vector')
        auth_tag = b64decode(tag, 'authentication tag')

        try:
            framed = AESGCM(key).decrypt(nonce, ciphertext + auth_tag, self.associated_data)
        except InvalidTag as error:
            raise CryptoError("Decryption failed, the message could not be authenticated") from error
        except ValueError as error:
            raise CryptoError(f"Decryption failed: {error}") from error

        content = envelope.unwrap(framed)

        try:
            return content.decode('utf-8')
        except UnicodeDecodeError as error:
            raise Utf8Error("Decrypted message is not valid UTF-8") from error

    @staticmethod
    def split_encrypted_contents(contents: str) -> typing.List[str]:
        """Split 'message--iv--tag' into its three fields."""
        fields = contents.split(DELIMITER)
        if len(fields) != 3:
            raise InvalidFormatError(
                f"Invalid encrypted contents: expected 3 '{DELIMITER}' separated "
                f"fields, found {len(fields)}")
        return fields
