"""
Short code generation for the link registry.

Codes are drawn at random from a Base62 alphabet using the `secrets`
CSPRNG, so the next code cannot be guessed from previous ones.
Uniqueness is enforced against the set of outstanding codes: every code
handed out stays reserved until it is explicitly released (when its link
is deleted or swept).
"""

import secrets
import string
import threading
from typing import Set

from shortlinks.exceptions import GenerationExhaustedError


class ShortCodeGenerator:
    """
    Random short code generator with collision checking.

    The outstanding-code set is shared by every caller of one generator
    instance, so all access goes through a private lock. The lock is a leaf:
    nothing else is acquired while it is held.

    Pros: unpredictable, codes reusable after release
    Cons: retries grow as the keyspace for a length fills up
    """

    BASE62_CHARS = string.ascii_uppercase + string.ascii_lowercase + string.digits

    def __init__(self, alphabet: str = BASE62_CHARS, max_attempts: int = 100):
        """
        Args:
            alphabet: Characters codes are drawn from
            max_attempts: Collision retries before giving up on a length
        """
        if not alphabet:
            raise ValueError("Alphabet must not be empty")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.alphabet = alphabet
        self.max_attempts = max_attempts
        self._outstanding: Set[str] = set()
        self._lock = threading.Lock()

    def generate(self, length: int) -> str:
        """
        Generate and reserve a code that is not currently outstanding.

        Raises:
            GenerationExhaustedError: if every attempt collided, which means
                the keyspace for this length is (nearly) saturated
        """
        if length < 1:
            raise ValueError(f"Code length must be positive, got {length}")

        for _ in range(self.max_attempts):
            code = self._random_code(length)
            with self._lock:
                if code not in self._outstanding:
                    self._outstanding.add(code)
                    return code

        raise GenerationExhaustedError(length, self.max_attempts)

    def release(self, code: str) -> None:
        """Return a code to the pool. Unknown codes are ignored."""
        with self._lock:
            self._outstanding.discard(code)

    def is_in_use(self, code: str) -> bool:
        with self._lock:
            return code in self._outstanding

    @property
    def outstanding_count(self) -> int:
        with self._lock:
            return len(self._outstanding)

    def _random_code(self, length: int) -> str:
        return ''.join(secrets.choice(self.alphabet) for _ in range(length))
