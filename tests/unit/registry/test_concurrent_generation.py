"""Concurrency tests for LinkRegistry.

Many callers generate links at the same time against one store. The store's
uniqueness constraint plus the retry loop must hand out distinct keys without
any DuplicateKeyError reaching a caller.
"""

import random
import threading
from concurrent.futures import ThreadPoolExecutor

from shortlinks.registry import LinkRegistry
from shortlinks.utils import KeyGenerator


class LockedRandom(random.Random):
    """Seeded random source safe to share between threads."""

    def __init__(self, seed):
        super().__init__(seed)
        self._lock = threading.Lock()

    def choice(self, seq):
        with self._lock:
            return super().choice(seq)


def test_concurrent_generation_yields_distinct_keys(dao, clock):
    # Small keyspace (4096 keys) so candidates do collide
    registry = LinkRegistry(dao, KeyGenerator('ab', 12, rng=LockedRandom(2026)), clock=clock)
    urls = [f'example.com/page/{i}' for i in range(100)]

    with ThreadPoolExecutor(max_workers=16) as pool:
        links = list(pool.map(registry.generate, urls))

    keys = [link.key for link in links]
    assert len(set(keys)) == len(urls)
    assert sorted(dao.links) == sorted(keys)
    assert {link.url for link in links} == {f'http://example.com/page/{i}' for i in range(100)}


def test_concurrent_generation_same_owner_url(dao, clock):
    """Racing first requests may create extra links, but every link has its own key."""
    registry = LinkRegistry(dao, KeyGenerator(rng=LockedRandom(7)), clock=clock)

    with ThreadPoolExecutor(max_workers=8) as pool:
        links = list(pool.map(lambda _: registry.generate('example.com/shared'), range(32)))

    assert len(dao.links) == len({link.key for link in links}) >= 1
    # Once the race settles, lookups consistently return the first indexed link
    settled = registry.generate('example.com/shared')
    assert all(registry.generate('example.com/shared').key == settled.key for _ in range(5))
