import pytest

from coffer.envelope import unwrap, wrap
from coffer.utils import FramingError

FRAMED = b'\x04\x08I"\x1dPeanut Butter Jelly Time\x06:\x06ET'


def test_wrap():
    assert wrap('Peanut Butter Jelly Time') == FRAMED


def test_unwrap():
    assert unwrap(FRAMED) == b'Peanut Butter Jelly Time'


def test_unwrap_empty_string():
    assert unwrap(wrap('')) == b''


def test_wrap_long_string():
    text = 'x' * 300
    assert wrap(text)[:7] == b'\x04\x08I"\x02\x2c\x01'
    assert unwrap(wrap(text)) == text.encode('utf-8')


def test_unwrap_unicode():
    assert unwrap(wrap('café ☃')).decode('utf-8') == 'café ☃'


def test_unwrap_bare_string():
    assert unwrap(b'\x04\x08"\x08abc') == b'abc'


def test_unwrap_string_with_encoding():
    assert unwrap(b'\x04\x08I"\x08abc\x06:\x0dencoding"\x0dUS-ASCII') == b'abc'


@pytest.mark.parametrize('framed', [
    b'\x04\x08I"\x1dPeanut Butter Jelly TimeET',
    b'\x04\x08I"\x1dPeanut Butter',
    b'\x04\x09I"\x08abc\x06:\x06ET',
    b'\x04\x08i\x06',
    b'\x04\x08[\x00',
    b'\x04\x08"\x08abcdef',
    b'\x04',
    b'',
], ids=[
    'missing-ivar-header',
    'truncated',
    'wrong-version',
    'integer',
    'array',
    'trailing-bytes',
    'short-version',
    'empty',
])
def test_unwrap_invalid(framed):
    with pytest.raises(FramingError):
        unwrap(framed)
