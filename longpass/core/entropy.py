"""
longpass Entropy - Secure random source for word selection and shuffling.

Passphrases are secrets: every random draw goes through the operating
system CSPRNG (``secrets``). There is no fallback to a seeded generator.
"""

import secrets
import threading
from typing import List, Protocol, Sequence, TypeVar, runtime_checkable

from longpass.core.errors import EntropySourceError
from longpass.core.log import get_logger

logger = get_logger('entropy')

T = TypeVar('T')


@runtime_checkable
class SecureRandomSource(Protocol):
    """
    Capability interface used by the generator and batch driver.

    Implementations must draw from a cryptographically secure source and
    back both operations with the same instance.
    """

    def uniform_index(self, n: int) -> int:
        """Return an unbiased integer in [0, n)."""
        ...

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a uniformly random permutation of items."""
        ...


class SystemRandomSource:
    """
    SecureRandomSource backed by the system CSPRNG.

    A single lock serializes draws, so one instance can be shared by
    worker threads.
    """

    def __init__(self):
        self._lock = threading.Lock()

    def uniform_index(self, n: int) -> int:
        """
        Return a uniformly distributed integer in [0, n).

        Args:
            n: Size of the range, must be >= 1

        Returns:
            Random index

        Raises:
            ValueError: If n < 1
            EntropySourceError: If the OS cannot supply randomness
        """
        if n < 1:
            raise ValueError(f"uniform_index requires n >= 1, got {n}")
        with self._lock:
            try:
                # randbelow uses rejection sampling over getrandbits, no modulo bias
                return secrets.randbelow(n)
            except OSError as e:
                logger.error("System random source failed: %s", e)
                raise EntropySourceError(f"System random source failed: {e}") from e

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """
        Fisher-Yates shuffle driven by uniform_index.

        Args:
            items: Sequence to permute (left untouched)

        Returns:
            New list with the same elements in random order
        """
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.uniform_index(i + 1)
            result[i], result[j] = result[j], result[i]
        return result
