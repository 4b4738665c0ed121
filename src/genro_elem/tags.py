# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tag factories - thin constructors over Element.

Every factory creates a plain Element, pre-sets the attributes its tag
needs (href for a, type for input, ...) and then applies id, class_ and any
extra keyword attributes through _apply_common(). Keyword attributes follow
Element.attrs(): trailing '_' is dropped and other '_' become '-', so
`for_='name'` sets `for` and `aria_label='x'` sets `aria-label`.

Example:
    >>> from genro_elem.tags import html, head, title, body, div, h, p
    >>> page = html(lang='en')(
    ...     head()(title('T')),
    ...     body()(div(id='app', class_='container')(h(1, text='Hello'), p(text='World'))),
    ... )
"""

from __future__ import annotations

from typing import Any

from .element import Element
from .serializer import DOCTYPE_HTML


def _apply_common(element: Element, id: str | None, class_: str | None, **attrs: Any) -> Element:
    """Apply id, class tokens and extra attributes shared by all factories."""
    if id is not None:
        element.id(id)
    if class_ is not None:
        element.class_(class_)
    if attrs:
        element.attrs(**attrs)
    return element


def el(tag: str, id: str | None = None, class_: str | None = None, text: str | None = None, **attrs: Any) -> Element:
    """Any tag."""
    return _apply_common(Element(tag, text), id, class_, **attrs)


# =============================================================================
# Document structure
# =============================================================================


def html(lang: str | None = None, **attrs: Any) -> Element:
    """Root element; its serialization starts with <!DOCTYPE html>."""
    element = Element('html')
    element.doctype = DOCTYPE_HTML
    element.attr('lang', lang)
    return _apply_common(element, None, None, **attrs)


def head(**attrs: Any) -> Element:
    return _apply_common(Element('head'), None, None, **attrs)


def body(id: str | None = None, class_: str | None = None, **attrs: Any) -> Element:
    return _apply_common(Element('body'), id, class_, **attrs)


def title(text: str | None = None) -> Element:
    return Element('title', text)


def meta(charset: str | None = None, name: str | None = None, content: str | None = None, **attrs: Any) -> Element:
    element = Element('meta').attr('charset', charset).attr('name', name).attr('content', content)
    return _apply_common(element, None, None, **attrs)


def link(href: str | None = None, rel: str | None = None, **attrs: Any) -> Element:
    element = Element('link').attr('href', href).attr('rel', rel)
    return _apply_common(element, None, None, **attrs)


def stylesheet(href: str, **attrs: Any) -> Element:
    """<link rel="stylesheet" href=...>."""
    return link(href, rel='stylesheet', **attrs)


def style(css: str | None = None, **attrs: Any) -> Element:
    """<style> holding css, written unescaped."""
    return _apply_common(Element('style').source(css), None, None, **attrs)


def script(code: str | None = None, src: str | None = None, **attrs: Any) -> Element:
    """<script> holding code (written unescaped) or loading src."""
    element = Element('script').attr('src', src).source(code)
    return _apply_common(element, None, None, **attrs)


# =============================================================================
# Content
# =============================================================================


def div(id: str | None = None, class_: str | None = None, text: str | None = None, **attrs: Any) -> Element:
    return _apply_common(Element('div', text), id, class_, **attrs)


def span(id: str | None = None, class_: str | None = None, text: str | None = None, **attrs: Any) -> Element:
    return _apply_common(Element('span', text), id, class_, **attrs)


def p(id: str | None = None, class_: str | None = None, text: str | None = None, **attrs: Any) -> Element:
    return _apply_common(Element('p', text), id, class_, **attrs)


def h(level: int, text: str | None = None, id: str | None = None, class_: str | None = None, **attrs: Any) -> Element:
    """Heading h1..h6; level is clamped to that range."""
    level = max(1, min(6, level))
    return _apply_common(Element(f'h{level}', text), id, class_, **attrs)


def a(href: str, text: str | None = None, id: str | None = None, class_: str | None = None, **attrs: Any) -> Element:
    element = Element('a', text).attr('href', href)
    return _apply_common(element, id, class_, **attrs)


def blank(anchor: Element) -> Element:
    """Open the link in a new tab without giving it access to the opener."""
    return anchor.attr('target', '_blank').attr('rel', 'noopener noreferrer')


def img(src: str, alt: str = '', id: str | None = None, class_: str | None = None, **attrs: Any) -> Element:
    element = Element('img').attr('src', src).attr('alt', alt)
    return _apply_common(element, id, class_, **attrs)


# =============================================================================
# Lists and tables
# =============================================================================


def ul(id: str | None = None, class_: str | None = None, **attrs: Any) -> Element:
    return _apply_common(Element('ul'), id, class_, **attrs)


def ol(id: str | None = None, class_: str | None = None, **attrs: Any) -> Element:
    return _apply_common(Element('ol'), id, class_, **attrs)


def li(id: str | None = None, class_: str | None = None, text: str | None = None, **attrs: Any) -> Element:
    return _apply_common(Element('li', text), id, class_, **attrs)


def table(id: str | None = None, class_: str | None = None, **attrs: Any) -> Element:
    return _apply_common(Element('table'), id, class_, **attrs)


def tr(id: str | None = None, class_: str | None = None, **attrs: Any) -> Element:
    return _apply_common(Element('tr'), id, class_, **attrs)


def td(id: str | None = None, class_: str | None = None, text: str | None = None, **attrs: Any) -> Element:
    return _apply_common(Element('td', text), id, class_, **attrs)


def th(id: str | None = None, class_: str | None = None, text: str | None = None, **attrs: Any) -> Element:
    return _apply_common(Element('th', text), id, class_, **attrs)


# =============================================================================
# Forms
# =============================================================================


def form(
    id: str | None = None,
    class_: str | None = None,
    action: str | None = None,
    method: str = 'post',
    **attrs: Any,
) -> Element:
    element = Element('form').attr('action', action).attr('method', method)
    return _apply_common(element, id, class_, **attrs)


def label(
    id: str | None = None,
    class_: str | None = None,
    text: str | None = None,
    for_: str | None = None,
    **attrs: Any,
) -> Element:
    element = Element('label', text).attr('for', for_)
    return _apply_common(element, id, class_, **attrs)


def input_(
    type: str = 'text',
    id: str | None = None,
    class_: str | None = None,
    name: str | None = None,
    **attrs: Any,
) -> Element:
    element = Element('input').attr('type', type).attr('name', name)
    return _apply_common(element, id, class_, **attrs)


def button(
    id: str | None = None,
    class_: str | None = None,
    text: str | None = None,
    type: str = 'button',
    **attrs: Any,
) -> Element:
    element = Element('button', text).attr('type', type)
    return _apply_common(element, id, class_, **attrs)


def textarea(
    id: str | None = None,
    class_: str | None = None,
    name: str | None = None,
    content: str | None = None,
    **attrs: Any,
) -> Element:
    element = Element('textarea', content).attr('name', name)
    return _apply_common(element, id, class_, **attrs)


def select(id: str | None = None, class_: str | None = None, name: str | None = None, **attrs: Any) -> Element:
    element = Element('select').attr('name', name)
    return _apply_common(element, id, class_, **attrs)


def option(value: str, text: str | None = None, selected: bool = False, **attrs: Any) -> Element:
    element = Element('option', text).attr('value', value).flag('selected', selected)
    return _apply_common(element, None, None, **attrs)
