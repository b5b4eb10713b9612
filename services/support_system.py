"""
Support System - Console conversation loop
==========================================

Reads the user's input line by line, hands each word set to the
response generator and prints the answer, until an exit word is typed
or input ends.
"""

import sys
from typing import Optional, TextIO

from core.config import ConsoleConfig
from core.logging import get_logger
from responder.generator import ResponseGenerator

from .input_reader import InputReader

logger = get_logger(__name__)


class SupportSystem:
    """
    Console front end for a ResponseGenerator.

    Example:
        system = SupportSystem(ResponseGenerator())
        system.start()
    """

    def __init__(
        self,
        generator: ResponseGenerator,
        config: Optional[ConsoleConfig] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None
    ):
        self.generator = generator
        self.config = config or ConsoleConfig()
        self.output = stdout or sys.stdout
        self.reader = InputReader(stdin, self.output, self.config.prompt)
        self._exit_words = {word.strip().lower() for word in self.config.exit_words}

    def start(self) -> int:
        """
        Run the conversation until an exit word or end of input.

        Returns:
            Number of responses given
        """
        self._print(self.config.welcome)
        replies = 0

        while True:
            words = self.reader.get_input()
            if words is None:
                # EOF: terminate the prompt line
                self._print("")
                break
            if words & self._exit_words:
                break

            self._print(self.generator.generate_response(words))
            replies += 1

        self._print(self.config.goodbye)
        logger.debug("Conversation ended after %d responses", replies)
        return replies

    def _print(self, text: str) -> None:
        self.output.write(text + "\n")
        self.output.flush()
