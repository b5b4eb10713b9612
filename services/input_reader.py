"""
Input Reader - Turns a line of user input into a word set
=========================================================
"""

import sys
from typing import Optional, Set, TextIO


def tokenize(text: str) -> Set[str]:
    """
    Split a line of text into a set of lowercase words.

    Words are separated by whitespace; duplicates collapse.
    """
    return set(text.strip().lower().split())


class InputReader:
    """
    Reads lines from a text stream and tokenizes them.

    Args:
        stream: Input stream (defaults to stdin)
        output: Stream the prompt is written to (defaults to stdout)
        prompt: Text printed before each read
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        output: Optional[TextIO] = None,
        prompt: str = "> "
    ):
        self.stream = stream or sys.stdin
        self.output = output or sys.stdout
        self.prompt = prompt

    def get_input(self) -> Optional[Set[str]]:
        """
        Read one line and return its words.

        Returns:
            Set of words, or None at end of input
        """
        if self.prompt:
            self.output.write(self.prompt)
            self.output.flush()

        line = self.stream.readline()
        if not line:
            return None
        return tokenize(line)
