"""
Account number allocation.

Numbers are drawn at random from 00000-99999 and checked against the set of
numbers already issued by the same allocator.
"""

import logging
import random
from typing import Optional

from .exceptions import ExhaustedError


class AccountNumberAllocator:
    """Issues unique 5-digit account numbers."""

    capacity = 100000
    width = 5

    def __init__(self, seed: Optional[int] = None, max_attempts: int = 1000):
        """Initialize allocator with an optional seed for reproducible numbers."""
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.max_attempts = max_attempts
        self.logger = logging.getLogger(__name__)
        self._random = random.Random(seed)
        self._issued = set()

    def allocate(self) -> str:
        """Allocate a number that this allocator has never issued before."""
        for _ in range(self.max_attempts):
            candidate = str(self._random.randrange(self.capacity)).zfill(self.width)
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

        self.logger.error(
            f"No unique account number after {self.max_attempts} attempts "
            f"({len(self._issued)} of {self.capacity} issued)"
        )
        raise ExhaustedError(
            "Unable to generate unique account number. All numbers may be in use."
        )

    def reserve(self, account_number: str) -> None:
        """Mark a number chosen elsewhere as issued so it is never drawn."""
        self._issued.add(account_number)

    def is_issued(self, account_number: str) -> bool:
        """Check whether a number has already been handed out."""
        return account_number in self._issued

    @property
    def issued_count(self) -> int:
        return len(self._issued)

    def __len__(self) -> int:
        return len(self._issued)
