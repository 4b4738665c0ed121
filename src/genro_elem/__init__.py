# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""genro_elem - build HTML documents with composable Python calls.

Elements are created by tag factories (or create()/Element), filled by
calling them with children and serialized with to_html(). Plain strings are
always escaped; raw_html() is the only way to emit unescaped markup.

Example:
    >>> from genro_elem import html, head, title, body, div, h, p
    >>> page = html(lang='en')(
    ...     head()(title('Home')),
    ...     body()(
    ...         div(id='app', class_='container')(
    ...             h(1, text='Hello'),
    ...             p(text='World'),
    ...         )
    ...     ),
    ... )
    >>> print(page.to_html(pretty=True))

Main components:
    - Element: builder wrapping one node (attributes, children, serialization)
    - ElemDocument: scope owning the nodes of a build, see isolated_scope()
    - ElemHtmlSerializer / indent_html: flat and pretty HTML output
    - RawHtml / Text: explicit unescaped / escaped child wrappers
"""

from genro_elem.children import ChildKind, classify_child
from genro_elem.document import (
    ElemDocument,
    current_scope,
    isolated_scope,
    reset_default_scope,
    with_isolated_scope,
)
from genro_elem.elem_node import VOID_ELEMENTS, ElemNode, RawMarkerNode, TextNode
from genro_elem.element import Element, create
from genro_elem.exceptions import (
    ElemChildError,
    ElemException,
    ElemHierarchyError,
    ElemUsageError,
)
from genro_elem.node_container import NodeContainer
from genro_elem.raw_store import RawStore
from genro_elem.serializer import (
    PRESERVE_WHITESPACE_ELEMENTS,
    ElemHtmlSerializer,
    indent_html,
)
from genro_elem.tags import (
    a,
    blank,
    body,
    button,
    div,
    el,
    form,
    h,
    head,
    html,
    img,
    input_,
    label,
    li,
    link,
    meta,
    ol,
    option,
    p,
    script,
    select,
    span,
    style,
    stylesheet,
    table,
    td,
    textarea,
    th,
    title,
    tr,
    ul,
)
from genro_elem.wrappers import RawHtml, Text, raw, raw_html, text

__all__ = [
    "Element",
    "create",
    "ElemDocument",
    "current_scope",
    "isolated_scope",
    "with_isolated_scope",
    "reset_default_scope",
    "ElemNode",
    "TextNode",
    "RawMarkerNode",
    "NodeContainer",
    "RawStore",
    "ElemHtmlSerializer",
    "indent_html",
    "VOID_ELEMENTS",
    "PRESERVE_WHITESPACE_ELEMENTS",
    "ChildKind",
    "classify_child",
    "RawHtml",
    "Text",
    "raw_html",
    "raw",
    "text",
    "ElemException",
    "ElemUsageError",
    "ElemChildError",
    "ElemHierarchyError",
    "a",
    "blank",
    "body",
    "button",
    "div",
    "el",
    "form",
    "h",
    "head",
    "html",
    "img",
    "input_",
    "label",
    "li",
    "link",
    "meta",
    "ol",
    "option",
    "p",
    "script",
    "select",
    "span",
    "style",
    "stylesheet",
    "table",
    "td",
    "textarea",
    "th",
    "title",
    "tr",
    "ul",
]
