import logging
import os
import pathlib
import tempfile
import typing

import attr

from .cipher import MessageCipher
from .editor import Editor
from .generation import random_key
from .keys import KEY_FILE_NAME
from .utils import (
    AlreadyInitializedError,
    CofferException,
    CredentialsIOError,
    DecryptionError,
    EditAbortedError,
    PathError,
    is_ignored_by_git,
)

log = logging.getLogger(__name__)

CREDENTIALS_FILE_NAME = 'credentials.yml.enc'
PLACEHOLDER = 'CHANGE ME'
ENCRYPTED_SUFFIX = '.enc'


def expand(path: typing.Union[str, pathlib.Path]) -> pathlib.Path:
    return pathlib.Path(path).expanduser()


def write_private(path: pathlib.Path, contents: bytes, exclusive: bool = False) -> None:
    """Write a file readable only by the current user."""
    flags = os.O_WRONLY | os.O_CREAT | getattr(os, 'O_NOFOLLOW', 0)
    flags |= os.O_EXCL if exclusive else os.O_TRUNC
    try:
        fd = os.open(path, flags, 0o600)
        with open(fd, 'wb') as f:
            f.write(contents)
    except FileExistsError as error:
        raise AlreadyInitializedError(f"{path} already exists") from error
    except OSError as error:
        raise CredentialsIOError(f"Could not write {path}: {error}") from error


def remove_stale(path: pathlib.Path) -> None:
    """Remove whatever is at a path, without following symlinks."""
    try:
        os.unlink(path)
    except FileNotFoundError:
        return
    except OSError as error:
        raise CredentialsIOError(f"Could not remove {path}: {error}") from error
    log.warning(f"Removed stale file at {path}")


@attr.s(frozen=True)
class SecretFile:
    """
    An encrypted credentials file and the key that opens it.

    All state lives on disk: the file at `path`, and a temporary plaintext
    copy while an edit is in progress.
    """

    path: pathlib.Path = attr.ib(converter=expand)
    key: str = attr.ib(repr=False)

    @classmethod
    def create(cls, target: typing.Union[str, pathlib.Path]) -> 'SecretFile':
        """
        Create a new master key and an encrypted file holding a placeholder.

        A directory gets 'master.key' and 'credentials.yml.enc'; a file path
        gets a 'master.key' beside it. Existing files are never overwritten.
        """
        target = expand(target)
        resolved = target.resolve()
        if resolved == resolved.parent:
            raise PathError(f"Could not determine a file name from {target}")

        if target.is_dir():
            key_path = target / KEY_FILE_NAME
            encrypted_path = target / CREDENTIALS_FILE_NAME
        else:
            if not target.name:
                raise PathError(f"Could not determine a file name from {target}")
            if not target.parent.is_dir():
                raise PathError(f"Directory {target.parent} does not exist")
            key_path = target.parent / KEY_FILE_NAME
            encrypted_path = target

        for path in (key_path, encrypted_path):
            if path.exists():
                raise AlreadyInitializedError(
                    f"{path} already exists, refusing to overwrite it")

        secret_file = cls(path=encrypted_path, key=random_key())
        contents = secret_file.encrypt(PLACEHOLDER.encode('utf-8'))

        log.info(f"Writing new master key to {key_path}")
        write_private(key_path, secret_file.key.encode('ascii'), exclusive=True)

        log.info(f"Writing new encrypted file to {encrypted_path}")
        try:
            write_private(encrypted_path, contents.encode('ascii'), exclusive=True)
        except CofferException:
            key_path.unlink()
            raise

        if is_ignored_by_git(key_path) is False:
            log.warning(f"{key_path} is not ignored by git, add it to .gitignore")

        return secret_file

    def read(self) -> str:
        log.debug(f"Reading {self.path}")
        try:
            return self.path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as error:
            raise CredentialsIOError(f"Could not read {self.path}: {error}") from error

    def decrypt(self) -> str:
        contents = self.read()
        try:
            message, iv, tag = MessageCipher.split_encrypted_contents(contents.strip())
            return MessageCipher(message=message, key=self.key).decrypt(iv, tag)
        except CofferException as error:
            raise DecryptionError(
                f"Invalid encrypted contents in {self.path}: {error.message}") from error

    def encrypt(self, plaintext: bytes) -> str:
        return MessageCipher(message=plaintext, key=self.key).encrypt()

    def temp_file_location(self) -> pathlib.Path:
        """
        Where the plaintext is staged during an edit.

        The name combines the process id with the file name, minus a
        trailing '.enc', so the editor still sees e.g. a '.yml' suffix.
        """
        name = self.path.name
        if not name:
            raise PathError(f"Could not determine a file name from {self.path}")

        name = f"{os.getpid()}.{name}"
        if name.endswith(ENCRYPTED_SUFFIX):
            name = name[:-len(ENCRYPTED_SUFFIX)]

        return pathlib.Path(tempfile.gettempdir()) / name

    def edit(self, editor: typing.Optional[Editor] = None) -> bool:
        """
        Decrypt to a temporary file, run an editor, and save any changes.

        Returns True if the file was re-encrypted. If the file can't be
        decrypted an EditAbortedError is raised before anything is written.
        The permanent file is only ever changed by the final rename.
        """
        editor = editor or Editor()

        try:
            plaintext = self.decrypt()
        except CofferException as error:
            raise EditAbortedError(
                f"Decryption failed, not editing {self.path}: {error.message}") from error

        original = plaintext.encode('utf-8')
        temp_path = self.temp_file_location()
        log.debug(f"Staging plaintext of {self.path} at {temp_path}")
        remove_stale(temp_path)
        write_private(temp_path, original, exclusive=True)

        status = editor.run(temp_path)
        if status != 0:
            log.warning(f"Editor exited with status {status}, checking for changes anyway")

        try:
            edited = temp_path.read_bytes()
        except OSError as error:
            raise CredentialsIOError(f"Could not read {temp_path}: {error}") from error

        if edited == original:
            log.info(f"No changes made to {self.path}")
            temp_path.unlink()
            return False

        contents = self.encrypt(edited)

        write_private(temp_path, contents.encode('ascii'))
        self.replace(temp_path)
        log.info(f"Re-encrypted {self.path}")
        return True

    def replace(self, temp_path: pathlib.Path) -> None:
        try:
            os.replace(temp_path, self.path)
        except OSError as error:
            raise CredentialsIOError(
                f"Could not move {temp_path} to {self.path}: {error}. "
                f"The new encrypted contents are still in {temp_path}") from error
