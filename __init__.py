"""
Tech Support Responder - Keyword-triggered canned responses
==========================================================

A small console support agent: it matches the words of each input line
against a table of keywords loaded from a text file and answers with
the associated response, or with a random default response when no
keyword matches.

License: MIT
Version: 1.0.0
"""

__version__ = "1.0.0"
__license__ = "MIT"
