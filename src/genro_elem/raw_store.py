# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""RawStore - literal HTML kept outside the tree, keyed by marker id.

Raw HTML is never parsed into the tree. A RawMarkerNode carrying only an
integer id is attached instead, and the serializer replaces the marker
token with the content stored here. Ids come from one process-wide counter
so they are unique even across documents, which lets a marker be imported
into another document without renumbering.
"""

from __future__ import annotations

import itertools
import logging
import re
from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Process-wide, never reset: ids stay unique for the life of the process.
_marker_ids = itertools.count(1)

MARKER_PREFIX = 'elem-raw:'
MARKER_PATTERN = re.compile(r'<!--elem-raw:(\d+)-->')


def next_marker_id() -> int:
    """Mint a new marker id."""
    return next(_marker_ids)


def marker_token(marker_id: int) -> str:
    """Return the serialized placeholder for a marker id."""
    return f'<!--{MARKER_PREFIX}{marker_id}-->'


class RawStore:
    """Mapping of marker id -> literal HTML content.

    One store belongs to one ElemDocument, so its entries live as long as
    the document does. Long-running processes can prune it explicitly with
    discard() or clear().
    """

    __slots__ = ('_content',)

    def __init__(self) -> None:
        self._content: dict[int, str] = {}

    def __len__(self) -> int:
        return len(self._content)

    def __contains__(self, marker_id: int) -> bool:
        return marker_id in self._content

    def register(self, content: str, marker_id: int | None = None) -> int:
        """Store content and return its marker id.

        Args:
            content: Literal HTML.
            marker_id: Reuse this id (import from another document).
                If None a new id is minted.
        """
        if marker_id is None:
            marker_id = next_marker_id()
        self._content[marker_id] = content
        return marker_id

    def get(self, marker_id: int, default: str | None = None) -> str | None:
        return self._content.get(marker_id, default)

    def discard(self, marker_ids: Iterable[int]) -> None:
        """Drop the given entries. Unknown ids are ignored."""
        dropped = 0
        for marker_id in marker_ids:
            if self._content.pop(marker_id, None) is not None:
                dropped += 1
        if dropped:
            logger.debug('Pruned %d raw entries, %d left', dropped, len(self._content))

    def clear(self) -> None:
        """Drop every entry."""
        logger.debug('Clearing %d raw entries', len(self._content))
        self._content.clear()

    def substitute(self, html: str, retain: bool = True) -> str:
        """Replace every marker token in html with its stored content.

        The replacement is a single pass: substituted content is not
        scanned again. Tokens whose id is unknown are replaced by nothing.

        Args:
            html: Serialized HTML containing marker tokens.
            retain: If False, consumed entries are discarded.
        """
        consumed: list[int] = []

        def replace(match: re.Match[str]) -> str:
            marker_id = int(match.group(1))
            content = self._content.get(marker_id)
            if content is None:
                logger.warning('Raw marker %d has no stored content', marker_id)
                return ''
            consumed.append(marker_id)
            return content

        result = MARKER_PATTERN.sub(replace, html)
        if not retain:
            self.discard(consumed)
        return result
