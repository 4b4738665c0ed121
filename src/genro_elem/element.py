# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Element - the builder wrapping one ElemNode.

An Element exposes attribute setters, the class-list merger, the child
append operation and serialization. Every mutating method returns the
element itself, so calls chain, and calling the element appends children:

Example:
    >>> from genro_elem import div, h, p
    >>> page = div(id='app', class_='container')(
    ...     h(1, text='Hello'),
    ...     p(text='World') if show_text else None,
    ...     [p(text=name) for name in names],
    ... )
    >>> page.class_('wide').data('role', 'main')
    >>> page.to_html(pretty=True)
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from genro_toolbox import smartsplit

from .children import normalize_children
from .document import ElemDocument, current_scope
from .elem_node import ElemNode
from .exceptions import ElemUsageError
from .node_container import NodeContainer
from .serializer import DEFAULT_INDENT, ElemHtmlSerializer

SCRIPT_TEMPLATE = "{{ const el = document.getElementById('{id}'); {code} }}"


def _js_string_body(value: str) -> str:
    """Escape value for use between single quotes in a JavaScript string."""
    return value.replace('\\', '\\\\').replace("'", "\\'").replace('\n', '\\n')


class Element:
    """Builder around one ElemNode.

    Attributes:
        doctype: Declaration written before the markup by to_html(), set
            by the html() factory.

    Internal Attributes (via __slots__):
        _node: The wrapped ElemNode.
        _pending_script: Script node waiting to become the next sibling of
            a void element that has no parent yet.
    """

    __slots__ = ('_node', '_pending_script', 'doctype')

    def __init__(self, tag: str, text: str | None = None, *, document: ElemDocument | None = None) -> None:
        """Create the element in document, or in the active scope.

        Args:
            tag: Tag name.
            text: If non-empty, added as the single text child.
            document: Owning document. Defaults to current_scope().
        """
        document = document if document is not None else current_scope()
        self._node: ElemNode = document.create_element(tag, text)
        self._pending_script: ElemNode | None = None
        self.doctype: str | None = None

    def __repr__(self) -> str:
        return f'Element : <{self._node.tag}> at {id(self)}'

    def __str__(self) -> str:
        return self.to_html()

    @property
    def node(self) -> ElemNode:
        """The wrapped ElemNode."""
        return self._node

    @property
    def document(self) -> ElemDocument:
        return self._node.document

    @property
    def tag(self) -> str:
        return self._node.tag

    @property
    def children(self) -> NodeContainer:
        """NodeContainer of the child nodes."""
        return self._node.children

    # -------------------------------------------------------------------------
    # Children
    # -------------------------------------------------------------------------

    def __call__(self, *children: Any) -> Element:
        """Shorthand for append()."""
        return self.append(*children)

    def append(self, *children: Any) -> Element:
        """Add children, in order.

        Each child may be None, a str (always escaped), an Element, text(),
        raw_html(), a native node, a callable receiving this element, or an
        iterable of any of these.

        Raises:
            ElemChildError: If a child has an unsupported shape.
            ElemHierarchyError: If a child is this element or one of its ancestors.
        """
        normalize_children(self, children)
        return self

    # -------------------------------------------------------------------------
    # Attributes
    # -------------------------------------------------------------------------

    def attr(self, name: str, value: Any) -> Element:
        """Set an attribute, replacing any previous value. None removes it."""
        self._node.set_attr(name, value)
        return self

    def attrs(self, **kwargs: Any) -> Element:
        """Set several attributes. class_ sets class, other '_' become '-'."""
        for name, value in kwargs.items():
            name = 'class' if name == 'class_' else name.rstrip('_').replace('_', '-')
            if name == 'class' and value is not None:
                self.class_(value)
            else:
                self.attr(name, value)
        return self

    def get_attr(self, name: str) -> str:
        """Return the attribute value, or '' if unset."""
        return self._node.get_attr(name)

    def id(self, value: str) -> Element:
        return self.attr('id', value)

    def class_(self, *names: str) -> Element:
        """Add CSS classes to the class attribute.

        Each name may hold several space-separated tokens. Tokens already
        present are skipped and empty ones dropped; the attribute is only
        written when at least one token exists.
        """
        tokens: list[str] = []
        for chunk in (self._node.get_attr('class'), *names):
            for token in smartsplit(chunk or '', ' '):
                token = token.strip()
                if token and token not in tokens:
                    tokens.append(token)
        if tokens:
            self._node.set_attr('class', ' '.join(tokens))
        return self

    def style(self, style: str) -> Element:
        return self.attr('style', style)

    def data(self, name: str, value: str) -> Element:
        """Set a data-* attribute."""
        return self.attr(f'data-{name}', value)

    def flag(self, name: str, on: bool = True) -> Element:
        """Set a boolean attribute as name="name", or remove it when on is False."""
        return self.attr(name, name if on else None)

    def required(self, on: bool = True) -> Element:
        return self.flag('required', on)

    def disabled(self, on: bool = True) -> Element:
        return self.flag('disabled', on)

    def defer(self, on: bool = True) -> Element:
        return self.flag('defer', on)

    def async_(self, on: bool = True) -> Element:
        return self.flag('async', on)

    def placeholder(self, text: str) -> Element:
        return self.attr('placeholder', text)

    def value(self, value: str) -> Element:
        return self.attr('value', value)

    # -------------------------------------------------------------------------
    # Child helpers
    # -------------------------------------------------------------------------

    def source(self, code: str | None) -> Element:
        """Append script or style source code.

        Inside script and style it is written unescaped (only `</` becomes
        `<\\/`, so it cannot close the tag); anywhere else it is escaped
        like any text. Plain strings appended to script or style are
        always escaped.
        """
        if code:
            self._node.append_child(self._node.document.create_source_node(code))
        return self

    def item(self, content: Any) -> Element:
        """Append an <li> holding content (for ul and ol)."""
        return self.append(Element('li', document=self._node.document).append(content))

    def option(self, value: str, text: str | None = None, selected: bool = False) -> Element:
        """Append an <option> (for select)."""
        option = Element('option', text, document=self._node.document).attr('value', value)
        return self.append(option.flag('selected', selected))

    # -------------------------------------------------------------------------
    # Script helper
    # -------------------------------------------------------------------------

    def script(self, code: str) -> Element:
        """Add an inline script that receives this element as `el`.

        The code is wrapped in a block looking the element up by id; the id
        is escaped as a JavaScript string, the code is written as is. Void
        elements (input, img, ...) cannot hold it, so the script becomes
        their next sibling, right away if they already have a parent or
        as soon as they are appended otherwise.

        Raises:
            ElemUsageError: If the element has no id.
        """
        element_id = self._node.get_attr('id')
        if not element_id:
            raise ElemUsageError(f'<{self._node.tag}> must have an id to use script()')

        document = self._node.document
        script = document.create_element('script')
        script.append_child(
            document.create_source_node(SCRIPT_TEMPLATE.format(id=_js_string_body(element_id), code=code))
        )

        if not self._node.is_void:
            self._node.append_child(script)
        elif self._node.parent is not None:
            self._node.parent.insert_after(script, self._node)
        else:
            self._pending_script = script
        return self

    # -------------------------------------------------------------------------
    # Fluent helpers
    # -------------------------------------------------------------------------

    def tap(self, callback: Callable[[Element], Any]) -> Element:
        """Call callback with this element and return the element."""
        callback(self)
        return self

    def when(self, condition: bool, callback: Callable[[Element], Any]) -> Element:
        """Call callback with this element only if condition is true."""
        if condition:
            callback(self)
        return self

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_html(
        self,
        pretty: bool = False,
        indent: str = DEFAULT_INDENT,
        collapse_leaves: bool = False,
        retain_raw: bool = True,
        destination: str | Path | None = None,
    ) -> str:
        """Serialize the element.

        Args:
            pretty: If True, indent the output.
            indent: Indent unit in pretty mode.
            collapse_leaves: In pretty mode, keep `<tag>text</tag>` on one line.
            retain_raw: If False, raw content is discarded once written, so a
                second serialization drops it.
            destination: If provided, also write the HTML to this file path.

        Returns:
            HTML string representation.
        """
        nodes = [self._node] if self._pending_script is None else [self._node, self._pending_script]
        result = ElemHtmlSerializer(
            nodes,
            pretty=pretty,
            indent=indent,
            collapse_leaves=collapse_leaves,
            retain_raw=retain_raw,
            doctype=self.doctype,
        )._serialize()
        if destination:
            Path(destination).write_text(result, encoding='utf-8')
        return result

    def to_pretty_html(self) -> str:
        """Serialize with indentation."""
        return self.to_html(pretty=True)

    # long names, matching the DOM vocabulary
    set_attribute = attr
    get_attribute = get_attr
    set_id = id
    add_classes = class_
    attach_script = script
    serialize = to_html


def create(tag: str, text: str | None = None, *, document: ElemDocument | None = None) -> Element:
    """Create an Element (see Element.__init__)."""
    return Element(tag, text, document=document)
