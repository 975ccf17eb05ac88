import string

from coffer.generation import random_bytes, random_iv, random_key


def test_random_iv():
    assert len(random_iv()) == 12
    assert random_iv() != random_iv()


def test_random_key():
    key = random_key()
    assert len(key) == 32
    assert set(key) <= set(string.hexdigits)
    assert random_key() != key


def test_random_bytes():
    assert len(random_bytes(10)) == 10
    assert random_bytes(10) != random_bytes(10)
