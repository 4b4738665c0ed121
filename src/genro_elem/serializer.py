# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTML serialization of ElemNode trees.

Serialization runs in three steps:
    1. the tree is written flat, text escaped, raw markers as comment tokens
    2. marker tokens are replaced by the literal HTML of the document's RawStore
    3. with pretty=True the flat string is re-indented by indent_html()

Classes:
    ElemHtmlSerializer - serialize one node (or a run of sibling nodes)

Functions:
    indent_html - pretty-print a flat HTML string
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable
from pathlib import Path

from .elem_node import VOID_ELEMENTS, AnyNode, ElemNode, RawMarkerNode, TextNode
from .raw_store import marker_token

# Content of these tags is never re-indented or trimmed by indent_html.
PRESERVE_WHITESPACE_ELEMENTS: frozenset[str] = frozenset({'pre', 'code', 'textarea', 'script'})

# Source nodes (ElemDocument.create_source_node) inside these tags are written
# without escaping. Plain text is escaped everywhere.
RAW_TEXT_ELEMENTS: frozenset[str] = frozenset({'script', 'style'})

DEFAULT_INDENT = '  '

DOCTYPE_HTML = '<!DOCTYPE html>'

_TAG = re.compile(r'<[^>]+>', re.S)
_OPEN_TAG = re.compile(r'^<([\w:-]+)')
_CLOSE_TAG = re.compile(r'^</([\w:-]+)')


class ElemHtmlSerializer:
    """HTML serializer for ElemNode trees.

    Example:
        >>> from genro_elem import div
        >>> from genro_elem.serializer import ElemHtmlSerializer
        >>>
        >>> box = div(id='main')('1 < 2')
        >>> ElemHtmlSerializer.serialize(box.node)
        '<div id="main">1 &lt; 2</div>'
    """

    def __init__(
        self,
        nodes: AnyNode | Iterable[AnyNode],
        pretty: bool = False,
        indent: str = DEFAULT_INDENT,
        collapse_leaves: bool = False,
        retain_raw: bool = True,
        doctype: str | None = None,
    ):
        """Initialize the serializer.

        Args:
            nodes: The node to serialize, or sibling nodes written one after the other.
            pretty: If True, re-indent the output with indent_html().
            indent: Indent unit for one nesting level.
            collapse_leaves: In pretty mode, keep `<tag>text</tag>` on one line.
            retain_raw: If False, raw store entries are discarded once written.
            doctype: Declaration line written before the markup.
        """
        self.nodes: list[AnyNode] = [nodes] if isinstance(nodes, (ElemNode, TextNode, RawMarkerNode)) else list(nodes)
        self.pretty = pretty
        self.indent = indent
        self.collapse_leaves = collapse_leaves
        self.retain_raw = retain_raw
        self.doctype = doctype

    @classmethod
    def serialize(
        cls,
        nodes: AnyNode | Iterable[AnyNode],
        filename: str | Path | None = None,
        encoding: str = 'UTF-8',
        pretty: bool = False,
        indent: str = DEFAULT_INDENT,
        collapse_leaves: bool = False,
        retain_raw: bool = True,
        doctype: str | None = None,
    ) -> str | None:
        """Serialize nodes to an HTML string.

        Args:
            nodes: The node to serialize, or sibling nodes.
            filename: Optional file path to write to. If provided, returns None.
            encoding: File encoding (default UTF-8).
            pretty: If True, format with indentation.
            indent: Indent unit for one nesting level.
            collapse_leaves: In pretty mode, keep simple leaf elements on one line.
            retain_raw: If False, consumed raw store entries are discarded.
            doctype: Declaration line written before the markup.

        Returns:
            HTML string if filename is None, else None (written to file).
        """
        instance = cls(
            nodes,
            pretty=pretty,
            indent=indent,
            collapse_leaves=collapse_leaves,
            retain_raw=retain_raw,
            doctype=doctype,
        )
        result = instance._serialize()

        if filename:
            Path(filename).write_bytes(result.encode(encoding))
            return None
        return result

    def _serialize(self) -> str:
        """Main serialization logic."""
        parts: list[str] = []
        for node in self.nodes:
            self._node_to_html(node, parts, raw_text=False)
        content = ''.join(parts)

        # One store per document; sibling nodes always share the first one's.
        if self.nodes:
            content = self.nodes[0].document.raw_store.substitute(content, retain=self.retain_raw)

        if self.pretty:
            content = indent_html(content, indent=self.indent, collapse_leaves=self.collapse_leaves)

        if self.doctype:
            content = f'{self.doctype}\n{content}'
        return content

    def _node_to_html(self, node: AnyNode, parts: list[str], raw_text: bool) -> None:
        if isinstance(node, TextNode):
            if raw_text and node.verbatim:
                parts.append(node.content.replace('</', '<\\/'))
            else:
                parts.append(html.escape(node.content))
            return
        if isinstance(node, RawMarkerNode):
            parts.append(marker_token(node.marker_id))
            return

        tag = node.tag
        attrs_str = ''.join(f' {k}="{html.escape(v)}"' for k, v in node.attr.items())
        parts.append(f'<{tag}{attrs_str}>')
        if node.is_void:
            return
        child_raw_text = tag.lower() in RAW_TEXT_ELEMENTS
        for child in node.children:
            self._node_to_html(child, parts, raw_text=child_raw_text)
        parts.append(f'</{tag}>')


def indent_html(source: str, indent: str = DEFAULT_INDENT, collapse_leaves: bool = False) -> str:
    """Re-indent a flat HTML string, one indent unit per nesting level.

    Text is trimmed and put on its own line. A preserve-whitespace tag (pre,
    code, textarea, script) is written on one line together with its content
    and its matching close tag, all untouched. Void and self-closing tags
    never increase the depth.

    Args:
        source: Flat HTML.
        indent: Indent unit.
        collapse_leaves: Write `<tag>text</tag>` on one line instead of three.
    """
    source = source.strip()
    if not source:
        return ''

    tokens = _tokenize(source)
    lines: list[str] = []
    depth = 0
    i = 0

    while i < len(tokens):
        token = tokens[i].strip()
        i += 1
        if not token:
            continue
        padding = indent * depth

        close = _CLOSE_TAG.match(token)
        if close:
            depth = max(0, depth - 1)
            lines.append(f'{indent * depth}{token}\n')
            continue

        opening = _OPEN_TAG.match(token)
        if not opening:
            lines.append(f'{padding}{token}\n')
            continue

        name = opening.group(1).lower()
        if _is_self_closing(name, token) or name in PRESERVE_WHITESPACE_ELEMENTS:
            lines.append(f'{padding}{token}\n')
            continue

        if collapse_leaves and i + 1 < len(tokens):
            inner, closing = tokens[i].strip(), tokens[i + 1]
            match = _CLOSE_TAG.match(closing)
            if inner and not inner.startswith('<') and match and match.group(1).lower() == name:
                lines.append(f'{padding}{token}{inner}{closing}\n')
                i += 2
                continue

        depth += 1
        lines.append(f'{padding}{token}\n')

    return ''.join(lines).rstrip()


def _tokenize(source: str) -> list[str]:
    """Split source into tags and text.

    A preserve-whitespace element becomes a single token running from its
    open tag to the matching close tag, found by name, so `<` inside its
    content never starts a tag.
    """
    tokens: list[str] = []
    pos = 0
    while (match := _TAG.search(source, pos)) is not None:
        if match.start() > pos:
            tokens.append(source[pos:match.start()])
        end = match.end()
        opening = _OPEN_TAG.match(match.group(0))
        if opening:
            name = opening.group(1)
            if name.lower() in PRESERVE_WHITESPACE_ELEMENTS and not _is_self_closing(name, match.group(0)):
                end = _preserved_end(source, name, end)
        tokens.append(source[match.start():end])
        pos = end
    if pos < len(source):
        tokens.append(source[pos:])
    return tokens


def _preserved_end(source: str, name: str, pos: int) -> int:
    """Index just past the close tag matching a `name` element opened before pos."""
    pattern = re.compile(rf'<(/?){re.escape(name)}(?=[\s/>])[^>]*>', re.I)
    depth = 1
    for match in pattern.finditer(source, pos):
        depth += -1 if match.group(1) else 1
        if depth == 0:
            return match.end()
    return len(source)


def _is_self_closing(name: str, token: str) -> bool:
    return name.lower() in VOID_ELEMENTS or token.endswith('/>')
