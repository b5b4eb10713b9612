"""
Responder Module - Keyword-triggered canned responses
=====================================================

This module provides the response generator and the parsers for its
two text resources:
- Keyword blocks mapping one or more words to a response
- A list of default responses picked at random when nothing matches
"""

from .generator import ResponseGenerator
from .loaders import (
    LoadResult,
    ParseState,
    ResponseTableParser,
    DefaultResponseParser,
    load_response_table,
    load_default_responses,
    parse_response_table,
    parse_default_responses,
)

__all__ = [
    "ResponseGenerator",
    "LoadResult",
    "ParseState",
    "ResponseTableParser",
    "DefaultResponseParser",
    "load_response_table",
    "load_default_responses",
    "parse_response_table",
    "parse_default_responses",
]
