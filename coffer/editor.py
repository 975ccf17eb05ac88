import logging
import os
import pathlib
import shlex
import subprocess
import typing

import attr

log = logging.getLogger(__name__)

DEFAULT_EDITOR = 'vim'


@attr.s(frozen=True)
class Editor:
    """
    Runs the user's editor on a file and waits for it to exit.

    The command is used as a shell fragment, so '$EDITOR' values with
    arguments (e.g. 'code --wait') work.
    """

    command: typing.Optional[str] = attr.ib(default=None)

    def resolve(self) -> str:
        return (self.command
                or os.environ.get('VISUAL')
                or os.environ.get('EDITOR')
                or DEFAULT_EDITOR)

    def run(self, path: pathlib.Path) -> int:
        command = f"{self.resolve()} {shlex.quote(path.as_posix())}"
        log.debug(f"Running editor: {command}")
        result = subprocess.run(command, shell=True)
        log.debug(f"Editor exited with status {result.returncode}")
        return result.returncode
