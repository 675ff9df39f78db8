"""Shortening of generated class-name prefixes.

Deeply nested projections get names like
``Movies_Actors_Agent_Clients_Movies_ReviewsProjection``. With short names
enabled, every segment but the last collapses to its capitals:

    Movies_Actors_Agent  ->  MA_Agent

Distinct prefixes that collapse to the same text are told apart by a suffix
derived from a hash of the original prefix.
"""

import hashlib
import logging

logger = logging.getLogger(__name__)

HASH_LENGTH = 8


def abbreviate(segment: str) -> str:
    """Collapse a PascalCase / camelCase segment to its capitals."""
    if not segment:
        return segment
    head = segment[0].upper()
    return head + "".join(c for c in segment[1:] if c.isupper())


class ClassnameShortener:
    """Deterministic, collision-free prefix shortening for one run."""

    def __init__(self):
        self._by_prefix: dict[str, str] = {}
        self._by_result: dict[str, str] = {}

    def shorten(self, prefix: str) -> str:
        if prefix in self._by_prefix:
            return self._by_prefix[prefix]

        segments = prefix.split("_")
        if len(segments) == 1:
            candidate = prefix
        else:
            candidate = "".join(abbreviate(s) for s in segments[:-1]) + "_" + segments[-1]

        result = candidate
        owner = self._by_result.get(result)
        if owner is not None and owner != prefix:
            digest = hashlib.sha1(prefix.encode()).hexdigest()
            length = HASH_LENGTH
            result = f"{candidate}_{digest[:length]}"
            while result in self._by_result and length < len(digest):
                length += 4
                result = f"{candidate}_{digest[:length]}"
            logger.debug("Shortened name %s collides, using %s for %s", candidate, result, prefix)

        self._by_prefix[prefix] = result
        self._by_result[result] = prefix
        return result
