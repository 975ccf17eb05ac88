import logging
import pathlib
import typing

from .utils import CredentialsIOError, KeyNotFoundError

log = logging.getLogger(__name__)

KEY_FILE_NAME = 'master.key'
KEY_ENVIRONMENT_VARIABLE = 'MASTER_KEY'


def find_key(
        key: typing.Optional[str] = None,
        key_file: pathlib.Path = pathlib.Path(KEY_FILE_NAME)) -> str:
    """
    Find the master key.

    An explicit key (usually from $MASTER_KEY) is used before the key file.
    """
    if key:
        log.debug("Using master key given on the command line or environment")
        return key.strip()

    if key_file.is_file():
        log.debug(f"Reading master key from {key_file}")
        try:
            return key_file.read_text(encoding='utf-8').strip()
        except OSError as error:
            raise CredentialsIOError(f"Could not read {key_file}: {error}") from error

    raise KeyNotFoundError(
        f"Could not find master key in ${KEY_ENVIRONMENT_VARIABLE} or {key_file}")
