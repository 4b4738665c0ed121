# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Node model - the tree that Element builders write into.

Three node kinds make up a tree:
    - ElemNode: tag, ordered attributes and ordered children
    - TextNode: text content, escaped when serialized
    - RawMarkerNode: placeholder for literal HTML kept in the document's RawStore

Every node is owned by one ElemDocument (node.document) and has at most one
parent. Nodes are created through the document factories, never attached
across documents: ElemDocument.import_node() clones them first.

Key Features:
    - Dual relationship: node.parent -> ElemNode, ElemNode.children -> nodes
    - Labels unique within the parent ('div_0', '_text_1', '_raw_0')
    - Moving semantics: attaching a node detaches it from its old parent
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Union

from .exceptions import ElemException, ElemHierarchyError
from .node_container import NodeContainer

if TYPE_CHECKING:
    from .document import ElemDocument

VOID_ELEMENTS: frozenset[str] = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr',
})


class ElemNodeBase:
    """Common part of all node kinds: owner document, parent and label."""

    __slots__ = ('label', '_parent', '_document')

    node_name = '_node'

    def __init__(self, document: ElemDocument) -> None:
        self.label: str = ''
        self._parent: ElemNode | None = None
        self._document = document

    @property
    def document(self) -> ElemDocument:
        """The ElemDocument that owns this node."""
        return self._document

    @property
    def parent(self) -> ElemNode | None:
        return self._parent

    def detach(self) -> None:
        """Remove this node from its parent, if any."""
        if self._parent is not None:
            self._parent.children.remove(self)
            self._parent = None
            self.label = ''

    def clone(self, document: ElemDocument) -> AnyNode:
        raise NotImplementedError


class ElemNode(ElemNodeBase):
    """An element: tag name, ordered attributes and ordered children.

    Attributes:
        tag: The tag name, free-form (lowercase by convention).

    Internal Attributes (via __slots__):
        _attr: Attribute dict, insertion ordered, values are strings.
        _children: NodeContainer of child nodes.
    """

    __slots__ = ('tag', '_attr', '_children')

    def __init__(self, document: ElemDocument, tag: str, attr: dict[str, str] | None = None) -> None:
        super().__init__(document)
        self.tag = tag
        self._attr: dict[str, str] = dict(attr) if attr else {}
        self._children = NodeContainer()

    def __repr__(self) -> str:
        return f'ElemNode : <{self.tag}> at {id(self)}'

    @property
    def node_name(self) -> str:  # type: ignore[override]
        return self.tag

    @property
    def is_void(self) -> bool:
        """True if the tag cannot have children (br, img, input, ...)."""
        return self.tag.lower() in VOID_ELEMENTS

    @property
    def children(self) -> NodeContainer:
        return self._children

    # -------------------------------------------------------------------------
    # Attribute Methods
    # -------------------------------------------------------------------------

    @property
    def attr(self) -> dict[str, str]:
        """Get all attributes as a dictionary."""
        return self._attr

    def get_attr(self, name: str, default: str = '') -> str:
        """Get an attribute value, or default if unset."""
        return self._attr.get(name, default)

    def set_attr(self, name: str, value: Any) -> None:
        """Set an attribute. None removes it, other values are stringified.

        Overwriting keeps the attribute in its original position.
        """
        if value is None:
            self._attr.pop(name, None)
        else:
            self._attr[name] = value if isinstance(value, str) else str(value)

    # -------------------------------------------------------------------------
    # Tree Methods
    # -------------------------------------------------------------------------

    def iter_ancestors(self) -> Iterator[ElemNode]:
        """Yield this node and then each ancestor up to the root."""
        curr: ElemNode | None = self
        while curr is not None:
            yield curr
            curr = curr._parent

    def append_child(self, node: AnyNode, _position: str | None = '>') -> AnyNode:
        """Attach node to this element.

        Args:
            node: A node owned by the same document.
            _position: Position syntax accepted by NodeContainer.set().

        Raises:
            ElemException: If node belongs to another document.
            ElemHierarchyError: If node is this element or one of its ancestors.
        """
        if node.document is not self._document:
            raise ElemException(
                f'{node!r} belongs to another document; import it with ElemDocument.import_node()'
            )
        if isinstance(node, ElemNode) and any(anc is node for anc in self.iter_ancestors()):
            raise ElemHierarchyError(f'Cannot append <{node.tag}> inside itself')

        node.detach()
        node.label = self._children.unique_label(node.node_name)
        node._parent = self
        self._children.set(node, _position=_position)
        return node

    def insert_after(self, node: AnyNode, reference: AnyNode) -> AnyNode:
        """Attach node immediately after reference, one of this element's children."""
        if reference.parent is not self:
            raise ElemException(f'{reference!r} is not a child of {self!r}')
        return self.append_child(node, _position=f'>{reference.label}')

    def clone(self, document: ElemDocument) -> ElemNode:
        """Deep copy into document (which may be this node's own)."""
        copy = ElemNode(document, self.tag, self._attr)
        for child in self._children:
            copy.append_child(child.clone(document))
        return copy


class TextNode(ElemNodeBase):
    """A text node, escaped when serialized.

    Attributes:
        content: The text.
        verbatim: Source code for a script/style element. Written unescaped
            when its parent is script or style, with `</` neutralized.
    """

    __slots__ = ('content', 'verbatim')

    node_name = '_text'

    def __init__(self, document: ElemDocument, content: str, verbatim: bool = False) -> None:
        super().__init__(document)
        self.content = content
        self.verbatim = verbatim

    def __repr__(self) -> str:
        return f'TextNode : {self.content[:20]!r} at {id(self)}'

    def clone(self, document: ElemDocument) -> TextNode:
        return TextNode(document, self.content, self.verbatim)


class RawMarkerNode(ElemNodeBase):
    """Placeholder for literal HTML stored in the owning document's RawStore."""

    __slots__ = ('marker_id',)

    node_name = '_raw'

    def __init__(self, document: ElemDocument, marker_id: int) -> None:
        super().__init__(document)
        self.marker_id = marker_id

    def __repr__(self) -> str:
        return f'RawMarkerNode : {self.marker_id} at {id(self)}'

    @property
    def content(self) -> str | None:
        """The literal HTML, or None if the store entry was pruned."""
        return self._document.raw_store.get(self.marker_id)

    def clone(self, document: ElemDocument) -> RawMarkerNode:
        """Copy into document, carrying the stored content under the same id."""
        if document is not self._document:
            content = self.content
            if content is not None:
                document.raw_store.register(content, marker_id=self.marker_id)
        return RawMarkerNode(document, self.marker_id)


AnyNode = Union[ElemNode, TextNode, RawMarkerNode]
