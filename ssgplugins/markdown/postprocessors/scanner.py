# ssgplugins/markdown/postprocessors/scanner.py
"""
Token scanner shared by the token postprocessors.

Finds non-overlapping matches of a bracketed token pattern, left to right.
A zero-width match moves the cursor on by one character so a scan over a
finite string always terminates, whatever the pattern.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Pattern, Tuple, Union


@dataclass(frozen=True)
class TokenMatch:
    """A single token occurrence."""

    text: str
    groups: Tuple[Optional[str], ...]
    start: int
    end: int

    def group(self, index: int) -> Optional[str]:
        """Return the full match for 0, otherwise the captured group."""
        if index == 0:
            return self.text
        return self.groups[index - 1]


class TokenScanner:
    """
    Reusable scanner for one token grammar.

    ``scan`` returns a fresh lazy iterator on every call, so the same
    scanner can be run over any number of strings.
    """

    def __init__(self, pattern: Union[str, Pattern[str]]):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def scan(self, text: str) -> Iterator[TokenMatch]:
        position = 0
        length = len(text)
        while position <= length:
            match = self.pattern.search(text, position)
            if match is None:
                return
            yield TokenMatch(
                text=match.group(0),
                groups=match.groups(),
                start=match.start(),
                end=match.end(),
            )
            if match.end() == match.start():
                position = match.end() + 1
            else:
                position = match.end()

    def first(self, text: str) -> Optional[TokenMatch]:
        return next(self.scan(text), None)

    def __repr__(self) -> str:
        return f"TokenScanner({self.pattern.pattern!r})"


def scan(pattern: Union[str, Pattern[str]], text: str) -> Iterator[TokenMatch]:
    """Shortcut for ``TokenScanner(pattern).scan(text)``."""
    return TokenScanner(pattern).scan(text)
