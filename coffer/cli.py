import functools
import logging
import os.path
import pathlib
import typing

import click

from . import __doc__, __version__
from .api import credentials
from .editor import Editor
from .keys import KEY_ENVIRONMENT_VARIABLE, KEY_FILE_NAME, find_key
from .secrets import SecretFile

log = logging.getLogger(__name__)


@functools.lru_cache()
def rel(path: pathlib.Path) -> str:
    """
    Convert a path to a relative Path.

    Returns a string as these should only be used for presentation.
    """
    return os.path.relpath(path.absolute().as_posix(), pathlib.Path.cwd().as_posix())


def enc(path: pathlib.Path) -> str:
    """Style a path to an encrypted file."""
    return click.style(rel(path), fg='green')


def keyfile(path: pathlib.Path) -> str:
    """Style a path to a key file."""
    return click.style(rel(path), fg='red')


class PathType(click.Path):
    def convert(self, value, param, ctx):
        return pathlib.Path(super().convert(value, param, ctx))


key_option = click.option(
    '-k', '--key', 'key',
    metavar='HEX',
    envvar=KEY_ENVIRONMENT_VARIABLE,
    default=None,
    type=click.STRING,
    help=f"Master key, defaults to ${KEY_ENVIRONMENT_VARIABLE}.")

key_file_option = click.option(
    '-f', '--key-file', 'key_file',
    type=PathType(dir_okay=False),
    default=KEY_FILE_NAME,
    show_default=True,
    help="File to read the master key from when no key is given.")

encrypted_argument = click.argument(
    'path',
    type=PathType(exists=True, dir_okay=False),
    required=True)


@click.group(help=__doc__)
@click.option(
    '-d', '--debug', 'debug',
    default=False,
    is_flag=True,
    help="Enable debug logging.")
def main(debug: bool):
    logging.basicConfig(level=(logging.DEBUG if debug else logging.WARNING))


@main.command()
def version():
    """Show the application version."""
    click.echo(f"coffer {__version__}")


@main.command()
@click.argument(
    'path',
    type=PathType(),
    default='.',
    required=False)
def init(path: pathlib.Path):
    """
    Create a new master key and encrypted credentials file.

    PATH may be a directory (default: the current directory), which will
    contain 'master.key' and 'credentials.yml.enc', or the name of the
    encrypted file to create, which gets a 'master.key' beside it.
    """
    secret_file = SecretFile.create(path)
    click.echo(f"Created {keyfile(secret_file.path.parent / KEY_FILE_NAME)}")
    click.echo(f"Created {enc(secret_file.path)}")


@main.command()
@key_option
@key_file_option
@click.option(
    '-e', '--editor', 'editor',
    metavar='COMMAND',
    default=None,
    type=click.STRING,
    help="Editor command, defaults to $VISUAL, $EDITOR or vim.")
@encrypted_argument
def edit(
        path: pathlib.Path,
        key: typing.Optional[str],
        key_file: pathlib.Path,
        editor: typing.Optional[str]):
    """
    Edit an encrypted file without leaving decrypted plaintext behind.

    The contents are re-encrypted with a fresh nonce only if they changed.
    """
    secret_file = SecretFile(path=path, key=find_key(key, key_file))

    if secret_file.edit(Editor(command=editor)):
        click.echo(f"Encrypted new contents to {enc(path)}")
    else:
        click.echo(f"No changes were made to {enc(path)}")


@main.command()
@key_option
@key_file_option
@encrypted_argument
def show(path: pathlib.Path, key: typing.Optional[str], key_file: pathlib.Path):
    """Print the decrypted contents of an encrypted file."""
    click.echo(credentials(path, key=key, key_file=key_file), nl=False)
