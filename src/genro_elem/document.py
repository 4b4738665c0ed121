# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""ElemDocument - the scope that owns every node of a coherent build.

All nodes are created through an ElemDocument, and a node from one document
is imported (deep-cloned) before it is attached to a tree of another. The
document also owns the RawStore holding the literal HTML behind raw markers,
so dropping a document drops its raw content too.

Scopes:
    A process-wide default document is created lazily on first use. The
    active document can be replaced for a block of code with isolated_scope()
    or with_isolated_scope(); the previous one is restored on every exit path.
    The active document lives in a ContextVar, so threads and asyncio tasks
    entering an isolated scope do not see each other's documents.

    The shared default document is not guarded: concurrent builds in the
    default scope need external locking.

Example:
    >>> from genro_elem import div, isolated_scope
    >>> with isolated_scope() as doc:
    ...     box = div(class_='box')('hello')
    >>> box.document is doc
    True
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, TypeVar

from genro_toolbox import safe_is_instance

from .elem_node import AnyNode, ElemNode, ElemNodeBase, RawMarkerNode, TextNode
from .exceptions import ElemChildError
from .raw_store import RawStore

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ElemDocument:
    """Tree backend: node factories, cross-document import and raw store.

    Attributes:
        name: Optional name, only used in repr and logs.
        raw_store: Literal HTML for the RawMarkerNodes of this document.
    """

    __slots__ = ('name', 'raw_store')

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self.raw_store = RawStore()

    def __repr__(self) -> str:
        return f'ElemDocument : {self.name or "anonymous"} at {id(self)}'

    # -------------------------------------------------------------------------
    # Node Factories
    # -------------------------------------------------------------------------

    def create_element(self, tag: str, text: str | None = None) -> ElemNode:
        """Create an element, with a text child if text is non-empty."""
        node = ElemNode(self, tag)
        if text:
            node.append_child(self.create_text_node(text))
        return node

    def create_text_node(self, content: str) -> TextNode:
        return TextNode(self, content)

    def create_source_node(self, content: str) -> TextNode:
        """Create a text node holding script or style source code."""
        return TextNode(self, content, verbatim=True)

    def create_raw_marker(self, content: str) -> RawMarkerNode:
        """Register content in the raw store and return its marker node."""
        return RawMarkerNode(self, self.raw_store.register(content))

    # -------------------------------------------------------------------------
    # Import
    # -------------------------------------------------------------------------

    def import_node(self, node: Any) -> AnyNode:
        """Return node as a node owned by this document.

        Nodes already owned by this document are returned unchanged. Nodes
        of another ElemDocument are deep-cloned (raw content included).
        xml.etree.ElementTree elements are converted, their text and tail
        becoming text nodes.

        Raises:
            ElemChildError: If node is not a supported node type.
        """
        if isinstance(node, ElemNodeBase):
            if node.document is self:
                return node  # type: ignore[return-value]
            logger.debug('Importing %r from %r into %r', node, node.document, self)
            return node.clone(self)
        if safe_is_instance(node, 'xml.etree.ElementTree.Element'):
            return self._import_etree(node)
        raise ElemChildError(f'Cannot import {type(node).__name__} into {self!r}')

    def _import_etree(self, source: ET.Element) -> ElemNode:
        if not isinstance(source.tag, str):
            raise ElemChildError(f'Cannot import ElementTree {source.tag!r} node')
        node = ElemNode(self, str(source.tag), {str(k): str(v) for k, v in source.attrib.items()})
        if source.text:
            node.append_child(self.create_text_node(source.text))
        for sub in source:
            # comments and processing instructions keep only their tail
            if isinstance(sub.tag, str):
                node.append_child(self._import_etree(sub))
            if sub.tail:
                node.append_child(self.create_text_node(sub.tail))
        return node


# =============================================================================
# Scope management
# =============================================================================

_default_document: ElemDocument | None = None

_active_document: ContextVar[ElemDocument | None] = ContextVar('elem_active_document', default=None)


def current_scope() -> ElemDocument:
    """Return the active document, creating the default one if needed."""
    global _default_document

    document = _active_document.get()
    if document is not None:
        return document
    if _default_document is None:
        _default_document = ElemDocument('default')
        logger.debug('Created default document %r', _default_document)
    return _default_document


def reset_default_scope() -> None:
    """Drop the process-wide default document (and its raw store).

    Elements built before the reset keep working on their old document.
    """
    global _default_document

    if _default_document is not None:
        logger.debug('Resetting default document %r', _default_document)
    _default_document = None


@contextmanager
def isolated_scope(document: ElemDocument | None = None) -> Iterator[ElemDocument]:
    """Make document (or a new one) the active scope for the block.

    The previous scope is restored even if the block raises.
    """
    document = document if document is not None else ElemDocument()
    token = _active_document.set(document)
    try:
        yield document
    finally:
        _active_document.reset(token)


def with_isolated_scope(fn: Callable[[], T], document: ElemDocument | None = None) -> T:
    """Call fn inside isolated_scope() and return its result."""
    with isolated_scope(document):
        return fn()
