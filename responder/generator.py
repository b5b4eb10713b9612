"""
Response Generator - Keyword lookup with random default fallback
================================================================

The generator owns two read-only tables built once from the text
resources: keyword -> response, and a list of default responses. A
lookup returns the response for a word of the input that is a known
keyword, or a random default when none is.
"""

import random
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from core.config import ResponderConfig
from core.exceptions import NoDefaultResponsesError, ResourceError
from core.logging import get_logger

from .loaders import load_default_responses, load_response_table

logger = get_logger(__name__)


class ResponseGenerator:
    """
    Generates a response from a set of input words.

    Keywords are stored lowercased and every input word is lowercased
    before lookup, so callers may pass words in any case. When several
    input words are keywords, which one wins depends on the iteration
    order of the word collection and is not defined.

    The tables never change after construction. The random source is
    guarded by a lock, so a constructed generator can be shared between
    threads.

    Example:
        generator = ResponseGenerator()
        print(generator.generate_response({"my", "program", "crashes"}))
    """

    def __init__(
        self,
        config: Optional[ResponderConfig] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Build the generator from the configured resource files.

        Missing or unreadable resources are logged and recorded in
        ``load_errors``; they never make construction fail.

        Args:
            config: Responder configuration (defaults if omitted)
            rng: Random source for default picks (seeded from config if omitted)

        Raises:
            ConfigError: The configuration itself is invalid
        """
        self.config = config or ResponderConfig()
        self.config.validate()

        table, table_result = load_response_table(
            Path(self.config.responses_file), self.config.responses_encoding
        )
        defaults, defaults_result = load_default_responses(
            Path(self.config.defaults_file), self.config.defaults_encoding
        )

        errors = [r.error for r in (table_result, defaults_result) if r.error is not None]
        self._init_state(table, defaults, errors, rng)

        logger.info(
            "Responder ready: %d keywords, %d default responses",
            len(self._responses), len(self._defaults),
        )

    @classmethod
    def from_tables(
        cls,
        responses: Mapping[str, str],
        defaults: Iterable[str],
        config: Optional[ResponderConfig] = None,
        rng: Optional[random.Random] = None
    ) -> "ResponseGenerator":
        """
        Build a generator from in-memory tables instead of files.

        Keys and responses are normalized the way the parsers normalize
        them: keys stripped and lowercased, texts stripped, and empty keys,
        responses or defaults dropped. Defaults keep their order.

        Raises:
            ConfigError: The configuration is invalid
        """
        generator = cls.__new__(cls)
        generator.config = config or ResponderConfig()
        generator.config.validate()

        table = {}
        for key, value in responses.items():
            key, value = key.strip().lower(), value.strip()
            if key and value:
                table[key] = value

        generator._init_state(
            table,
            [text.strip() for text in defaults if text.strip()],
            [],
            rng,
        )
        return generator

    def _init_state(
        self,
        table: Dict[str, str],
        defaults: List[str],
        errors: List[ResourceError],
        rng: Optional[random.Random]
    ) -> None:
        self._responses: Mapping[str, str] = MappingProxyType(dict(table))
        self._defaults: Tuple[str, ...] = tuple(defaults)
        self._load_errors: Tuple[ResourceError, ...] = tuple(errors)
        self._random = rng if rng is not None else random.Random(self.config.seed)
        self._lock = threading.Lock()

        if not self._defaults:
            logger.warning(
                "No default responses available; unmatched input will use the '%s' policy",
                self.config.on_empty_defaults,
            )

    @property
    def responses(self) -> Mapping[str, str]:
        """Read-only view of the keyword table."""
        return self._responses

    @property
    def default_responses(self) -> Tuple[str, ...]:
        """Default responses in file order."""
        return self._defaults

    @property
    def load_errors(self) -> Tuple[ResourceError, ...]:
        """Resource errors recovered during construction."""
        return self._load_errors

    def lookup(self, words: Iterable[str]) -> Optional[str]:
        """
        Return the keyword response for the input, or None if no word matches.

        Args:
            words: Tokenized input words

        Returns:
            Matched response or None
        """
        for word in words:
            response = self._responses.get(word.lower())
            if response is not None:
                return response
        return None

    def generate_response(self, words: Iterable[str]) -> str:
        """
        Generate a response from a given set of input words.

        Args:
            words: A set of words entered by the user

        Returns:
            The keyword response for a recognized word, otherwise a
            randomly chosen default response

        Raises:
            NoDefaultResponsesError: Nothing matched, no defaults are
                loaded and the policy is ``raise``
        """
        response = self.lookup(words)
        if response is not None:
            return response
        return self.pick_default_response()

    def pick_default_response(self) -> str:
        """Pick one of the default responses uniformly at random."""
        if not self._defaults:
            if self.config.on_empty_defaults == "raise":
                raise NoDefaultResponsesError(
                    "No keyword matched and no default responses are loaded",
                    {"defaults_file": self.config.defaults_file},
                )
            return self.config.fallback_response

        with self._lock:
            return self._random.choice(self._defaults)
