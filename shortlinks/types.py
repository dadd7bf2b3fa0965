from collections.abc import Callable
from datetime import datetime
from typing import Any, Protocol, TypeAlias


# Type aliases for Python dictionaries
AppConfig: TypeAlias = dict[str, Any]
AppConfigSection: TypeAlias = dict[str, Any]

# Zero-argument callable returning the current (timezone-aware) time
Clock: TypeAlias = Callable[[], datetime]


class RandomSource(Protocol):
    """Anything able to pick a uniformly random element, e.g. random.Random."""

    def choice(self, seq): ...
