# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Child wrappers that state how a string must be emitted.

Plain strings passed to Element.append() are always escaped. Text makes that
explicit (useful for text siblings between elements); RawHtml is the only
way to emit a string unescaped.

Example:
    >>> from genro_elem import div, span, raw_html, text
    >>> div()(text('Hello, '), span(text='Ada'), raw_html('&nbsp;<b>!</b>'))
"""

from __future__ import annotations

import html
from dataclasses import dataclass


@dataclass(frozen=True)
class RawHtml:
    """Literal HTML inserted without escaping.

    WARNING: only use it with trusted content. The HTML is neither validated
    nor repaired, it is emitted verbatim where the marker sits in the tree.
    """

    html: str

    def __str__(self) -> str:
        return self.html


@dataclass(frozen=True)
class Text:
    """Text content, escaped when serialized."""

    content: str

    def __str__(self) -> str:
        return html.escape(self.content)


def raw_html(content: str) -> RawHtml:
    """Wrap trusted content so it is emitted unescaped."""
    return RawHtml(content)


raw = raw_html


def text(content: str) -> Text:
    """Wrap content as an explicit text node."""
    return Text(content)
