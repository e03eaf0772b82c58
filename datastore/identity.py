"""
Unique identity service for schema fields.

Every field receives an opaque identity at construction time. The identity
correlates a field across store instances, processes and serialized
patches, so it must never collide.

The generator is process-wide state injected through this module:
- uuid4_identity: Default generator backed by uuid.uuid4()
- SequentialIdentity: Deterministic counter, intended for tests
- set_identity_generator / use_identity_generator: Substitute the generator

Invariants:
    - Generators are zero-argument callables returning a non-empty string
    - Swapping the generator never affects identities already assigned
    - All access to the global generator is guarded by a lock

Example:
    >>> with use_identity_generator(SequentialIdentity("test")):
    ...     new_identity()
    'test-1'
"""

from __future__ import annotations

import itertools
import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Callable, Iterator

logger = logging.getLogger(__name__)

IdentityGenerator = Callable[[], str]


def uuid4_identity() -> str:
    """Generate a random identity from uuid4."""
    return uuid.uuid4().hex


class SequentialIdentity:
    """Deterministic identity generator.

    Produces ``<prefix>-1``, ``<prefix>-2``, ... Identities are only unique
    within one generator instance, so this is meant for tests and local
    tooling, not for schemas shared between processes.

    Thread-safety:
        - Each call takes the internal lock, so concurrent callers never
          receive the same identity
    """

    def __init__(self, prefix: str = "field", start: int = 1) -> None:
        if not prefix:
            raise ValueError("Identity prefix cannot be empty")
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            return f"{self.prefix}-{next(self._counter)}"

    def __repr__(self) -> str:
        return f"SequentialIdentity(prefix={self.prefix!r})"


_generator: IdentityGenerator = uuid4_identity
_generator_lock = threading.Lock()


def get_identity_generator() -> IdentityGenerator:
    """Get the currently installed identity generator."""
    with _generator_lock:
        return _generator


def set_identity_generator(generator: IdentityGenerator) -> IdentityGenerator:
    """Install a new identity generator.

    Args:
        generator: Zero-argument callable returning a unique string

    Returns:
        The previously installed generator
    """
    global _generator
    if not callable(generator):
        raise TypeError(f"Identity generator must be callable, got {type(generator).__name__}")
    with _generator_lock:
        previous = _generator
        _generator = generator
    logger.info(f"Installed identity generator {generator!r}")
    return previous


@contextmanager
def use_identity_generator(generator: IdentityGenerator) -> Iterator[IdentityGenerator]:
    """Temporarily install an identity generator.

    The previous generator is restored on exit, even if the block raises.
    """
    previous = set_identity_generator(generator)
    try:
        yield generator
    finally:
        set_identity_generator(previous)


def new_identity() -> str:
    """Request one identity from the installed generator.

    Raises:
        ValueError: If the generator returns an empty or non-string identity
    """
    identity = get_identity_generator()()
    if not isinstance(identity, str) or not identity:
        raise ValueError(f"Identity generator returned an invalid identity: {identity!r}")
    return identity
