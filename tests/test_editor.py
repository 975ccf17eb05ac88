import pytest

from coffer.editor import Editor


@pytest.fixture()
def path(tmp_path):
    path = tmp_path / 'file with spaces.yml'
    path.write_text('contents\n')
    return path


def test_run(path):
    assert Editor(command='true').run(path) == 0
    assert path.read_text() == 'contents\n'


def test_run_returns_status(path):
    assert Editor(command='false').run(path) == 1


def test_run_quotes_path(path):
    Editor(command='echo more >>').run(path)
    assert path.read_text() == 'contents\nmore\n'


def test_resolve_order(monkeypatch):
    assert Editor().resolve() == 'vim'

    monkeypatch.setenv('EDITOR', 'nano')
    assert Editor().resolve() == 'nano'

    monkeypatch.setenv('VISUAL', 'code --wait')
    assert Editor().resolve() == 'code --wait'

    assert Editor(command='ed').resolve() == 'ed'
