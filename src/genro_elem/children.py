# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Child normalization - how append() turns its arguments into tree nodes.

Each argument is classified into exactly one ChildKind and dispatched to the
handler for that kind. Arguments are processed left to right; iterables and
deferred producers are expanded in place, depth first, so every argument
contributes zero or more children at its own position.

Kinds:
    NULL      None, contributes nothing (allows `x if cond else None`)
    ELEMENT   an Element builder, imported if it belongs to another document
    RAW_HTML  RawHtml wrapper, emitted unescaped (empty content is skipped)
    TEXT      Text wrapper, escaped (empty content is skipped)
    STRING    plain str, always an escaped text node even if it looks like markup
    NODE      a native node (ElemNode, TextNode, RawMarkerNode) or an
              xml.etree.ElementTree element, imported if needed
    DEFERRED  any other callable, called with the target builder
    ITERABLE  any other iterable except bytes and mappings

Anything else raises ElemChildError.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from genro_toolbox import safe_is_instance

from .elem_node import ElemNodeBase
from .exceptions import ElemChildError
from .wrappers import RawHtml, Text

if TYPE_CHECKING:
    from .element import Element


class ChildKind(Enum):
    """The closed set of shapes append() accepts."""

    NULL = 'null'
    ELEMENT = 'element'
    RAW_HTML = 'raw_html'
    TEXT = 'text'
    STRING = 'string'
    NODE = 'node'
    DEFERRED = 'deferred'
    ITERABLE = 'iterable'


def classify_child(child: Any) -> ChildKind:
    """Return the ChildKind of child.

    Order matters where shapes overlap: Element is callable, str and
    ElementTree elements are iterable.

    Raises:
        ElemChildError: If child has none of the accepted shapes.
    """
    if child is None:
        return ChildKind.NULL
    if safe_is_instance(child, 'genro_elem.element.Element'):
        return ChildKind.ELEMENT
    if isinstance(child, RawHtml):
        return ChildKind.RAW_HTML
    if isinstance(child, Text):
        return ChildKind.TEXT
    if isinstance(child, str):
        return ChildKind.STRING
    if isinstance(child, ElemNodeBase) or safe_is_instance(child, 'xml.etree.ElementTree.Element'):
        return ChildKind.NODE
    if callable(child):
        return ChildKind.DEFERRED
    if isinstance(child, Iterable) and not isinstance(child, (bytes, bytearray, Mapping)):
        return ChildKind.ITERABLE
    raise ElemChildError(
        f'Unsupported child {child!r} of type {type(child).__name__}: '
        'pass a str, Element, text(), raw_html(), a node, a callable or an iterable of them'
    )


def normalize_children(target: Element, children: Iterable[Any]) -> None:
    """Append every item of children to target, in order."""
    for child in children:
        _HANDLERS[classify_child(child)](target, child)


# =============================================================================
# Handlers
# =============================================================================


def _append_null(target: Element, child: None) -> None:
    return None


def _append_element(target: Element, child: Element) -> None:
    parent = target.node
    document = parent.document
    node = child.node
    if node.document is not document:
        # adoption: the builder follows its clone into the new document
        source = node
        node = document.import_node(source)
        source.detach()
        child._node = node
    parent.append_child(node)

    pending = child._pending_script
    if pending is not None:
        parent.insert_after(document.import_node(pending), node)
        child._pending_script = None


def _append_raw_html(target: Element, child: RawHtml) -> None:
    if child.html:
        parent = target.node
        parent.append_child(parent.document.create_raw_marker(child.html))


def _append_text(target: Element, child: Text) -> None:
    if child.content:
        parent = target.node
        parent.append_child(parent.document.create_text_node(child.content))


def _append_string(target: Element, child: str) -> None:
    parent = target.node
    parent.append_child(parent.document.create_text_node(child))


def _append_node(target: Element, child: Any) -> None:
    parent = target.node
    parent.append_child(parent.document.import_node(child))


def _append_deferred(target: Element, child: Callable[[Element], Any]) -> None:
    result = child(target)
    # a producer returning the target itself (tap style) adds nothing
    if result is not None and result is not target:
        normalize_children(target, (result,))


def _append_iterable(target: Element, child: Iterable[Any]) -> None:
    normalize_children(target, child)


_HANDLERS: dict[ChildKind, Callable[[Element, Any], None]] = {
    ChildKind.NULL: _append_null,
    ChildKind.ELEMENT: _append_element,
    ChildKind.RAW_HTML: _append_raw_html,
    ChildKind.TEXT: _append_text,
    ChildKind.STRING: _append_string,
    ChildKind.NODE: _append_node,
    ChildKind.DEFERRED: _append_deferred,
    ChildKind.ITERABLE: _append_iterable,
}

if set(_HANDLERS) != set(ChildKind):
    raise RuntimeError('Every ChildKind needs a handler in _HANDLERS')
