"""
Short Code Generator

Produces random short codes and validates caller-supplied custom codes.

Design Decisions:
- Codes are drawn from an alphabet without visually ambiguous symbols
  (0/O, I/l), so they can be read back and typed by hand
- Each symbol is an independent uniform draw from the `secrets` CSPRNG;
  `secrets.choice` samples by rejection, so there is no modulo bias
- The generator keeps no state between draws; uniqueness is enforced by
  the datastore, which re-draws on collision
- Pathological settings (tiny alphabet or length) are rejected when the
  generator is built, not when a code is requested
"""

import logging
import secrets
from typing import Iterator, Optional

from shortener.core.exceptions import ConfigurationError
from shortener.core.setting import settings

logger = logging.getLogger(__name__)


class CodeGenerator:
    """
    Generates and validates fixed-length short codes.

    Attributes:
        alphabet: Symbols a code may contain
        length: Number of symbols in every code
    """

    def __init__(
        self,
        alphabet: Optional[str] = None,
        length: Optional[int] = None,
        min_code_space: Optional[int] = None,
    ):
        """
        Initialize the generator and check its code space.

        Args:
            alphabet: Symbols to draw from (default: settings.CODE_ALPHABET)
            length: Code length (default: settings.CODE_LENGTH)
            min_code_space: Smallest acceptable number of distinct codes
                (default: settings.MIN_CODE_SPACE)

        Raises:
            ConfigurationError: If the alphabet is empty or repeats symbols,
                the length is not positive, or the code space is too small
        """
        self.alphabet = alphabet if alphabet is not None else settings.CODE_ALPHABET
        self.length = length if length is not None else settings.CODE_LENGTH
        if min_code_space is None:
            min_code_space = settings.MIN_CODE_SPACE

        if not self.alphabet:
            raise ConfigurationError("code alphabet is empty")
        if len(set(self.alphabet)) != len(self.alphabet):
            raise ConfigurationError("code alphabet contains duplicate symbols")
        if self.length < 1:
            raise ConfigurationError(f"code length must be positive, got {self.length}")

        self.code_space = len(self.alphabet) ** self.length
        if self.code_space < min_code_space:
            raise ConfigurationError(
                f"{len(self.alphabet)} symbols of length {self.length} give "
                f"{self.code_space} codes, fewer than the required {min_code_space}"
            )

        self._symbols = frozenset(self.alphabet)
        logger.debug(
            f"Code generator ready: alphabet_size={len(self.alphabet)}, "
            f"length={self.length}, code_space={self.code_space}"
        )

    def generate_random_code(self) -> str:
        """
        Draw a random code.

        Returns:
            A string of `length` symbols, each chosen independently and
            uniformly from the alphabet
        """
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))

    def iter_random_codes(self) -> Iterator[str]:
        """
        Yield independent random codes forever.

        The iterator cannot be rewound; every value is a fresh draw.
        """
        while True:
            yield self.generate_random_code()

    def validate_custom_code(self, code: Optional[str]) -> bool:
        """
        Check a caller-supplied code.

        Returns:
            True if the code has exactly `length` symbols, all from the alphabet
        """
        if not isinstance(code, str) or len(code) != self.length:
            return False
        return all(ch in self._symbols for ch in code)
