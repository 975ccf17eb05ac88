import pathlib
import typing

import click
import git


def find_git_repo(path: pathlib.Path) -> typing.Optional[git.Repo]:
    try:
        return git.Repo(path, search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
        return None


def is_ignored_by_git(path: pathlib.Path) -> typing.Optional[bool]:
    """
    Check if git would ignore a path.

    Returns None when the path is not inside a git working tree.
    """
    repo = find_git_repo(path.parent)
    if repo is None:
        return None

    return bool(repo.ignored(path.resolve().as_posix()))


class CofferException(click.ClickException):
    pass


class InvalidFormatError(CofferException):
    """Encrypted contents are not three '--' separated fields."""


class DecodingError(CofferException):
    """A base64 field could not be decoded."""


class KeyFormatError(CofferException):
    """The master key is not 16 bytes of hex."""


class CryptoError(CofferException):
    """Authenticated encryption or decryption failed."""


class FramingError(CofferException):
    """Bytes are not a framed string value."""


class Utf8Error(CofferException):
    pass


class CredentialsIOError(CofferException):
    pass


class AlreadyInitializedError(CofferException):
    pass


class PathError(CofferException):
    pass


class KeyNotFoundError(CofferException):
    pass


class DecryptionError(CofferException):
    pass


class EditAbortedError(DecryptionError):
    """The file could not be decrypted, so it was not opened for editing."""
