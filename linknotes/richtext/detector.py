"""Detection of URLs and e-mail addresses in plain text."""

import re
from dataclasses import dataclass
from typing import Final, Protocol
from urllib.parse import urlsplit


@dataclass(frozen=True)
class LinkMatch:
    """A detected link covering ``text[start:end]``."""

    #: Offset of the first character.
    start: int
    #: Offset one past the last character.
    end: int
    #: The link target.
    url: str


class LinkDetector(Protocol):
    """Anything that can find links in text."""

    def detect_links(self, text: str) -> list[LinkMatch]: ...


class RegexLinkDetector:
    """
    Finds ``scheme://`` URLs, ``www.`` web addresses and e-mail addresses.

    Web addresses without a scheme get an ``http://`` target, e-mail addresses
    a ``mailto:`` target.  Trailing sentence punctuation and unbalanced closing
    brackets are left out of the match.
    """

    #: The pattern for candidate links.
    LINK_RE: Final[re.Pattern[str]] = re.compile(
        r"""
        (?P<email>
            (?<![\w.+-])
            [\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[a-z]{2,}\b
        )
        |
        (?P<url>
            (?<![\w@])
            (?:[a-z][a-z0-9+.-]*://|www\.)
            [^\s<>"]+
        )
        """,
        re.IGNORECASE | re.VERBOSE,
    )

    #: Characters never allowed to end a link.
    TRAILING_PUNCTUATION: Final[str] = ".,;:!?'\"*"

    #: Closing brackets and their opening counterparts.
    BRACKETS: Final[dict[str, str]] = {")": "(", "]": "[", "}": "{"}

    def detect_links(self, text: str) -> list[LinkMatch]:
        """
        Find every link in ``text``.

        Args:
            text: The text to scan

        Returns:
            Non-overlapping matches in text order

        """
        matches: list[LinkMatch] = []
        for match in self.LINK_RE.finditer(text):
            if match.group("email"):
                address = match.group("email")
                matches.append(
                    LinkMatch(match.start(), match.end(), f"mailto:{address}")
                )
                continue
            candidate = self._trim(match.group("url"))
            url = self._target(candidate)
            if url is None:
                continue
            matches.append(
                LinkMatch(match.start(), match.start() + len(candidate), url)
            )
        return matches

    def _trim(self, candidate: str) -> str:
        """
        Strip trailing punctuation and unbalanced closing brackets.
        """
        while candidate:
            last = candidate[-1]
            if last in self.TRAILING_PUNCTUATION:
                candidate = candidate[:-1]
            elif last in self.BRACKETS and candidate.count(
                self.BRACKETS[last]
            ) < candidate.count(last):
                candidate = candidate[:-1]
            else:
                break
        return candidate

    def _target(self, candidate: str) -> str | None:
        """
        Turn a candidate into a link target, or None if it has no host.
        """
        if candidate.lower().startswith("www."):
            if "." not in candidate[4:]:
                return None
            candidate = f"http://{candidate}"
        try:
            parts = urlsplit(candidate)
        except ValueError:
            return None
        if not parts.scheme or not parts.netloc:
            return None
        return candidate
