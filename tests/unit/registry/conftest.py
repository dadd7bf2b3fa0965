import random
import threading
from dataclasses import replace
from datetime import datetime, UTC

import pytest

from shortlinks.dao.base import ShortenedLinkBaseDAO
from shortlinks.dao.exceptions import DuplicateKeyError, LinkNotFoundError
from shortlinks.registry import LinkRegistry
from shortlinks.utils import KeyGenerator


class InMemoryDAO(ShortenedLinkBaseDAO):
    """Thread-safe in-memory store with a uniqueness constraint on keys."""

    def __init__(self):
        self.links = {}
        self.index = {}
        self.inserts = 0
        self.lock = threading.Lock()

    def insert(self, link):
        with self.lock:
            self.inserts += 1
            if link.key in self.links:
                raise DuplicateKeyError(f"Shortened link with key '{link.key}' already exists.")
            self.links[link.key] = link
            self.index.setdefault((link.owner, link.url), link.key)
        return link

    def find(self, url, owner=None):
        with self.lock:
            key = self.index.get((owner, url))
            return None if key is None else self.links.get(key)

    def get(self, key):
        with self.lock:
            if key not in self.links:
                raise LinkNotFoundError(key)
            return self.links[key]

    def update_expiration(self, link, expires_at, updated_at):
        with self.lock:
            if link.key not in self.links:
                raise LinkNotFoundError(link.key)
            updated = replace(self.links[link.key], expires_at=expires_at, updated_at=updated_at)
            self.links[link.key] = updated
            return updated

    def all(self):
        with self.lock:
            return list(self.links.values())


class FrozenClock:
    """Settable clock for registry tests."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def now():
    return datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def clock(now):
    return FrozenClock(now)


@pytest.fixture
def dao():
    return InMemoryDAO()


@pytest.fixture
def generator():
    return KeyGenerator('abc123', 6, rng=random.Random(1234))


@pytest.fixture
def registry(dao, generator, clock):
    return LinkRegistry(dao, generator, clock=clock)
