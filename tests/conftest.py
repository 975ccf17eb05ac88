import pathlib
import typing

import attr
import click.testing
import pytest

import coffer.cli
from coffer.secrets import SecretFile

KEY = '8872ebc11db3ea2ed08cc629d199b164'
MESSAGE = 'banana: true\napple: false\norange: false'


@pytest.fixture(autouse=True)
def environment(monkeypatch):
    for name in ('MASTER_KEY', 'VISUAL', 'EDITOR'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def invoke(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    def invoke_func(
            arguments: typing.Sequence[str],
            env: typing.Optional[typing.Dict[str, str]] = None,
            exit_code: int = 0):
        assert all(isinstance(arg, str) for arg in arguments)
        runner = click.testing.CliRunner()
        result = runner.invoke(coffer.cli.main, arguments, env=env)
        if result.exit_code != exit_code:
            message = f"Command coffer {' '.join(arguments)} exited with {result.exit_code}"
            raise Exception(message) from result.exception
        return result.output.splitlines()

    return invoke_func


@attr.s()
class ScriptedEditor:
    """Stands in for a real editor, optionally replacing the file contents."""

    contents: typing.Optional[bytes] = attr.ib(default=None)
    status: int = attr.ib(default=0)
    seen: typing.List[bytes] = attr.ib(factory=list)
    paths: typing.List[pathlib.Path] = attr.ib(factory=list)

    def run(self, path: pathlib.Path) -> int:
        self.paths.append(path)
        self.seen.append(path.read_bytes())
        if self.contents is not None:
            path.write_bytes(self.contents)
        return self.status


@pytest.fixture()
def secret_file(tmp_path) -> SecretFile:
    secret_file = SecretFile(path=tmp_path / 'credentials.yml.enc', key=KEY)
    secret_file.path.write_text(secret_file.encrypt(MESSAGE.encode('utf-8')))
    return secret_file
