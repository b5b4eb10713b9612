"""
Services Module - Console services for the Tech Support Responder
=================================================================

This module provides the pieces around the response generator:
- Input Reader: tokenizes a line of user input into a word set
- Support System: the console conversation loop
"""

from .input_reader import InputReader, tokenize
from .support_system import SupportSystem

__all__ = [
    "InputReader",
    "tokenize",
    "SupportSystem",
]
