"""Short key generation utility

This module provides the random candidate source used when a new shortened
link needs a key. Uniqueness is not checked here: the data store's
uniqueness constraint decides whether a candidate is accepted (see
`shortlinks.registry.key_assignment`).

Classes:
    KeyGenerator:
        Draw fixed-length random keys from an alphabet, skipping forbidden keys.

Example:
    >>> import random
    >>> from shortlinks.utils import KeyGenerator
    >>> generator = KeyGenerator('abc123', 6, rng=random.Random(7))
    >>> len(generator.draw())
    6
"""

import random
from collections.abc import Iterable, Sequence
from typing import Optional

from shortlinks.constants import Keys
from shortlinks.exceptions import BadConfigurationError
from shortlinks.types import RandomSource
from shortlinks.utils.config import ShortenerSettings


class KeyGenerator:
    """Random short key candidate source.

    Every character position is an independent uniform draw from `alphabet`,
    so a retry does not reproduce the previous candidate except by chance.

    NOTE:
        - `draw()` keeps drawing until it finds a key outside `forbidden_keys`.
          The forbidden set must not cover every key of the alphabet/length
          keyspace, otherwise `draw()` never returns. This is a configuration
          precondition and is not checked.

    Attributes:
        alphabet (str):
            Characters keys are made of.
        length (int):
            Number of characters per key.
        forbidden_keys (frozenset[str]):
            Keys that must never be issued.
        rng (RandomSource):
            Injected randomness capability. Defaults to random.SystemRandom().
    """

    def __init__(
        self,
        alphabet: Sequence[str] = Keys.DEFAULT_CHARS,
        length: int = Keys.DEFAULT_LENGTH,
        forbidden_keys: Iterable[str] = (),
        rng: Optional[RandomSource] = None,
    ):
        if isinstance(length, bool) or not isinstance(length, int):
            raise BadConfigurationError(f'Key length must be of type integer (given type: {type(length)}).')
        if length <= 0:
            raise BadConfigurationError(f'Key length must be a positive integer (given value: {length}).')
        if not alphabet:
            raise BadConfigurationError(f'Key alphabet must be a non-empty sequence (given value: {alphabet!r}).')

        self.alphabet = ''.join(alphabet)
        self.length = length
        self.forbidden_keys = frozenset(forbidden_keys)
        self.rng = rng if rng is not None else random.SystemRandom()

    @classmethod
    def from_settings(cls, settings: ShortenerSettings, rng: Optional[RandomSource] = None) -> 'KeyGenerator':
        """Build a generator from ShortenerSettings."""
        return cls(
            alphabet=settings.key_chars,
            length=settings.unique_key_length,
            forbidden_keys=settings.forbidden_keys,
            rng=rng,
        )

    def candidate(self) -> str:
        """Draw one key, forbidden or not."""
        return ''.join(self.rng.choice(self.alphabet) for _ in range(self.length))

    def draw(self) -> str:
        """Draw a key that is not in the forbidden set.

        Returns:
            str: A `length`-character key made of `alphabet` characters.

        Example:
            >>> KeyGenerator('ab', 3, forbidden_keys={'aaa'}).draw() != 'aaa'
            True
        """
        key = self.candidate()
        while key in self.forbidden_keys:
            key = self.candidate()
        return key
