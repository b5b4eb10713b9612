"""
Resource Loaders - Text parsers for keyword and default responses
=================================================================

This module reads the two plain-text resources the response generator
is built from:

- The keyword resource, made of blank-line-delimited blocks. Each block
  starts with a line of comma-separated keywords followed by one or more
  lines of response text::

      crash, crashes

      Well, it never crashes on our system. It must have something
      to do with your system. Tell me more about your configuration.

- The default resource, a plain list of paragraphs separated by blank
  lines. Every paragraph becomes one default response.

Both parsers are incremental: lines are fed one at a time and only
completed entries are published. If reading fails halfway, everything
committed before the failure is kept.
"""

import codecs
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from core.exceptions import ResourceError, ResourceNotFoundError, ResourceUnreadableError
from core.logging import get_logger

logger = get_logger(__name__)

LINE_SEPARATOR = "\n"


class ParseState(Enum):
    """States of the keyword resource parser."""
    AWAITING_KEYS = "awaiting_keys"
    ACCUMULATING_RESPONSE = "accumulating_response"


def _is_blank(line: str) -> bool:
    return not line.strip()


def split_keys(line: str) -> List[str]:
    """
    Split a key line into normalized keywords.

    Keys are separated by commas; surrounding whitespace is ignored and
    every key is lowercased. Empty keys are dropped.
    """
    keys = (key.strip().lower() for key in line.split(","))
    return [key for key in keys if key]


class ResponseTableParser:
    """
    Incremental parser for the keyword resource.

    A blank line commits the current block only once both keys and a
    body have been read. A blank line between the key line and the body
    is therefore allowed, and a key line with no body is dropped.

    Example:
        parser = ResponseTableParser()
        for line in text.splitlines():
            parser.feed(line)
        table = parser.close()
    """

    def __init__(self):
        self.state = ParseState.AWAITING_KEYS
        self._table: Dict[str, str] = {}
        self._keys: List[str] = []
        self._body: List[str] = []

    @property
    def table(self) -> Dict[str, str]:
        """Entries committed so far."""
        return dict(self._table)

    def feed(self, line: str) -> None:
        """Consume one line of input (trailing newline optional)."""
        line = line.rstrip("\r\n")

        if _is_blank(line):
            if self.state is ParseState.ACCUMULATING_RESPONSE and self._body:
                self._commit()
        elif self.state is ParseState.AWAITING_KEYS:
            self._keys = split_keys(line)
            self._body = []
            self.state = ParseState.ACCUMULATING_RESPONSE
        else:
            self._body.append(line)

    def close(self) -> Dict[str, str]:
        """Commit a trailing block and return the finished table."""
        if self.state is ParseState.ACCUMULATING_RESPONSE and self._body:
            self._commit()
        return self.table

    def _commit(self) -> None:
        response = LINE_SEPARATOR.join(self._body).strip()
        if self._keys and response:
            for key in self._keys:
                self._table[key] = response
        self._keys = []
        self._body = []
        self.state = ParseState.AWAITING_KEYS


class DefaultResponseParser:
    """
    Incremental parser for the default response resource.

    Paragraphs are separated by one or more blank lines. Lines inside a
    paragraph are kept as written and joined with a newline.
    """

    def __init__(self):
        self._responses: List[str] = []
        self._paragraph: List[str] = []

    @property
    def responses(self) -> List[str]:
        """Paragraphs completed so far."""
        return list(self._responses)

    def feed(self, line: str) -> None:
        line = line.rstrip("\r\n")

        if _is_blank(line):
            self._flush()
        else:
            self._paragraph.append(line)

    def close(self) -> List[str]:
        self._flush()
        return self.responses

    def _flush(self) -> None:
        if self._paragraph:
            text = LINE_SEPARATOR.join(self._paragraph).strip()
            if text:
                self._responses.append(text)
            self._paragraph = []


@dataclass
class LoadResult:
    """
    Outcome of loading one resource.

    Attributes:
        path (Path): Resource that was read
        entries (int): Number of entries parsed
        error (ResourceError): Failure, if reading did not complete
    """
    path: Path
    entries: int = 0
    error: Optional[ResourceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _feed_file(parser, path: Path, encoding: str) -> Optional[ResourceError]:
    """
    Feed a file into a parser line by line.

    Bytes are decoded incrementally, so a decoding error surfaces at the
    offending line and every line before it has already been fed.

    Returns the resource error that stopped reading, or None when the
    whole file was consumed and the parser closed.
    """
    try:
        decoder = codecs.getincrementaldecoder(encoding)()
    except LookupError:
        return ResourceUnreadableError(
            "Error reading file", path, {"reason": f"unknown encoding: {encoding}"}
        )

    try:
        with open(path, "rb") as f:
            pending = ""
            for raw in f:
                pending += decoder.decode(raw)
                *lines, pending = pending.split("\n")
                for line in lines:
                    parser.feed(line)
            pending += decoder.decode(b"", final=True)
            if pending:
                parser.feed(pending)
    except FileNotFoundError:
        return ResourceNotFoundError("File not found", path)
    except UnicodeDecodeError as e:
        return ResourceUnreadableError(
            "Error reading file", path, {"reason": f"not valid {encoding}: {e.reason}"}
        )
    except OSError as e:
        return ResourceUnreadableError(
            "Error reading file", path, {"reason": e.strerror or str(e)}
        )

    parser.close()
    return None


def _report(kind: str, result: LoadResult) -> None:
    if result.error is not None:
        logger.warning(
            "Could not load %s from %s: %s (%d entries kept)",
            kind, result.path, result.error, result.entries,
            extra={"resource": str(result.path)},
        )
    else:
        logger.debug(
            "Loaded %d %s from %s", result.entries, kind, result.path,
            extra={"resource": str(result.path)},
        )


def load_response_table(
    path: Union[str, Path],
    encoding: str = "utf-8"
) -> Tuple[Dict[str, str], LoadResult]:
    """
    Load the keyword -> response table from a resource file.

    Never raises for a missing or unreadable file: the problem is logged
    as a warning and reported in the returned LoadResult.

    Args:
        path: Keyword resource file
        encoding: Text encoding of the file

    Returns:
        Tuple of (table, LoadResult)
    """
    path = Path(path)
    parser = ResponseTableParser()
    error = _feed_file(parser, path, encoding)

    table = parser.table
    result = LoadResult(path=path, entries=len(table), error=error)
    _report("keyword responses", result)
    return table, result


def load_default_responses(
    path: Union[str, Path],
    encoding: str = "ascii"
) -> Tuple[List[str], LoadResult]:
    """
    Load the default responses from a resource file.

    Args:
        path: Default resource file
        encoding: Text encoding of the file

    Returns:
        Tuple of (responses, LoadResult)
    """
    path = Path(path)
    parser = DefaultResponseParser()
    error = _feed_file(parser, path, encoding)

    responses = parser.responses
    result = LoadResult(path=path, entries=len(responses), error=error)
    _report("default responses", result)
    return responses, result


def parse_response_table(lines: Union[str, Iterable[str]]) -> Dict[str, str]:
    """Parse keyword resource text (or an iterable of lines) into a table."""
    if isinstance(lines, str):
        lines = lines.splitlines()
    parser = ResponseTableParser()
    for line in lines:
        parser.feed(line)
    return parser.close()


def parse_default_responses(lines: Union[str, Iterable[str]]) -> List[str]:
    """Parse default resource text (or an iterable of lines) into a list."""
    if isinstance(lines, str):
        lines = lines.splitlines()
    parser = DefaultResponseParser()
    for line in lines:
        parser.feed(line)
    return parser.close()
