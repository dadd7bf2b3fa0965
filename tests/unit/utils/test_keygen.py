"""Unit tests for KeyGenerator in keygen.py.

Test coverage includes:

1. Output format
   - Keys have the configured length and only use alphabet characters.

2. Randomness source
   - A seeded source gives reproducible keys.
   - Consecutive draws are independent.

3. Forbidden keys
   - Forbidden candidates are skipped.

4. Configuration validation
   - Empty alphabets and non-positive/non-integer lengths raise BadConfigurationError.
"""

import random
import re
from unittest.mock import MagicMock

import pytest

from shortlinks.constants import Keys
from shortlinks.exceptions import BadConfigurationError
from shortlinks.utils import KeyGenerator, ShortenerSettings


# -------------------------------
# 1. Output format
# -------------------------------


def test_draw_matches_alphabet_and_length():
    generator = KeyGenerator('abc123', 6, rng=random.Random(1))
    for _ in range(200):
        assert re.fullmatch(r'[abc123]{6}', generator.draw())


def test_defaults():
    """Ensure defaults are lowercase alphanumeric keys of 5 characters."""
    generator = KeyGenerator()
    key = generator.draw()

    assert len(key) == Keys.DEFAULT_LENGTH == 5
    assert set(key) <= set(Keys.DEFAULT_CHARS)
    assert isinstance(generator.rng, random.SystemRandom)


def test_alphabet_as_sequence():
    """Ensure any sequence of characters is accepted as alphabet."""
    generator = KeyGenerator(['x', 'y'], 4, rng=random.Random(3))
    assert re.fullmatch(r'[xy]{4}', generator.draw())


# -------------------------------
# 2. Randomness source
# -------------------------------


def test_seeded_source_is_reproducible():
    first = KeyGenerator('abcdef0123', 8, rng=random.Random(42))
    second = KeyGenerator('abcdef0123', 8, rng=random.Random(42))
    assert [first.draw() for _ in range(5)] == [second.draw() for _ in range(5)]


def test_consecutive_draws_differ():
    """A retry must not reproduce the previous candidate (besides by chance)."""
    generator = KeyGenerator(Keys.DEFAULT_CHARS, 8, rng=random.Random(7))
    keys = {generator.draw() for _ in range(1000)}
    assert len(keys) == 1000


def test_each_position_is_drawn_from_source():
    rng = MagicMock()
    rng.choice.side_effect = list('abcd')

    assert KeyGenerator('abcd', 4, rng=rng).draw() == 'abcd'
    assert rng.choice.call_count == 4


# -------------------------------
# 3. Forbidden keys
# -------------------------------


def test_forbidden_keys_are_skipped():
    rng = MagicMock()
    rng.choice.side_effect = list('aa' 'ab' 'aa' 'ba')
    generator = KeyGenerator('ab', 2, forbidden_keys={'aa', 'ab'}, rng=rng)

    assert generator.draw() == 'ba'
    assert rng.choice.call_count == 8


def test_only_one_key_allowed():
    """With all but one key forbidden, draw() always lands on that key."""
    forbidden = {'aa', 'ab', 'ba'}
    generator = KeyGenerator('ab', 2, forbidden_keys=forbidden, rng=random.Random(0))
    assert {generator.draw() for _ in range(20)} == {'bb'}


def test_from_settings():
    settings = ShortenerSettings(key_chars='xyz', unique_key_length=3, forbidden_keys=frozenset({'xxx'}))
    generator = KeyGenerator.from_settings(settings, rng=random.Random(0))

    assert generator.alphabet == 'xyz'
    assert generator.length == 3
    assert generator.forbidden_keys == {'xxx'}


# -------------------------------
# 4. Configuration validation
# -------------------------------


@pytest.mark.parametrize(
    'alphabet, length',
    [
        ('', 5),
        ([], 5),
        ('abc', 0),
        ('abc', -1),
        ('abc', 2.5),
        ('abc', '5'),
        ('abc', True),
    ],
)
def test_invalid_configuration(alphabet, length):
    with pytest.raises(BadConfigurationError):
        KeyGenerator(alphabet, length)
