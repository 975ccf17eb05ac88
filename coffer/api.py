import pathlib
import typing

from .keys import KEY_FILE_NAME, find_key
from .secrets import SecretFile


def credentials(
        path: typing.Union[str, pathlib.Path],
        key: typing.Optional[str] = None,
        key_file: pathlib.Path = pathlib.Path(KEY_FILE_NAME)) -> str:
    """Decrypt a credentials file, finding the key the same way the CLI does."""
    return SecretFile(path=path, key=find_key(key, key_file)).decrypt()
