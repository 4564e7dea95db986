"""Glob matching for git refs and names.

A pattern is a whitespace-separated list of alternatives. Alternatives
starting with "!" exclude. A candidate matches when it matches at least one
inclusion and no exclusion; a pattern made only of exclusions matches
everything not excluded.

Wildcards:
    *     any run of characters except "/"
    **    any run of characters, "/" included
    **/   zero or more leading directories
    ?     one character except "/"
    [...] character class, [!...] or [^...] negated; "]" right after the
          opening bracket is a member, an unterminated "[" matches itself
"""

import re
from typing import List

from tollgate.primitives.errors import GlobError


def _translate(part: str, raw: str) -> re.Pattern:
    """Translate a single glob alternative into a regex, matched whole by Glob."""
    if not part:
        raise GlobError(f"Empty glob alternative in {raw!r}", pattern=raw)

    out = []
    i, n = 0, len(part)
    while i < n:
        c = part[i]
        if c == "*":
            if part.startswith("**/", i):
                out.append("(?:.*/)?")
                i += 3
            elif part.startswith("**", i):
                out.append(".*")
                i += 2
            else:
                out.append("[^/]*")
                i += 1
        elif c == "?":
            out.append("[^/]")
            i += 1
        elif c == "[":
            j = i + 1
            if j < n and part[j] in "!^":
                j += 1
            if j < n and part[j] == "]":
                j += 1
            j = part.find("]", j)
            if j == -1:
                # An unterminated "[" is a literal
                out.append(re.escape(c))
                i += 1
                continue
            body = part[i + 1 : j]
            negate = body[:1] in ("!", "^")
            if negate:
                body = body[1:]
            body = body.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
            out.append(f"[^/{body}]" if negate else f"[{body}]")
            i = j + 1
        else:
            out.append(re.escape(c))
            i += 1

    try:
        return re.compile("".join(out))
    except re.error as e:
        raise GlobError(f"Invalid glob {raw!r}: {e}", pattern=raw) from e


class Glob:
    """Compiled glob pattern."""

    def __init__(self, pattern: str):
        """Compile a pattern.

        Raises:
            GlobError: If any alternative is malformed.
        """
        self.pattern = pattern
        self._include: List[re.Pattern] = []
        self._exclude: List[re.Pattern] = []
        for part in pattern.split():
            if part.startswith("!"):
                self._exclude.append(_translate(part[1:], pattern))
            else:
                self._include.append(_translate(part, pattern))

    def match(self, candidate: str) -> bool:
        if any(r.fullmatch(candidate) for r in self._exclude):
            return False
        if not self._include:
            return bool(self._exclude)
        return any(r.fullmatch(candidate) for r in self._include)

    def __repr__(self) -> str:
        return f"Glob({self.pattern!r})"


def match(pattern: str, candidate: str) -> bool:
    """Compile pattern and match candidate against it.

    Raises:
        GlobError: If the pattern is malformed.
    """
    return Glob(pattern).match(candidate)
