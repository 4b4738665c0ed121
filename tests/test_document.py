# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for ElemDocument, node import and scope helpers."""

import xml.etree.ElementTree as ET

import pytest

from genro_elem import (
    ElemChildError,
    ElemDocument,
    ElemException,
    ElemHierarchyError,
    TextNode,
    current_scope,
    div,
    isolated_scope,
    raw_html,
    reset_default_scope,
    with_isolated_scope,
)


class TestNodeFactories:
    """Tests for the document node factories."""

    def test_create_element_with_text(self):
        """Non-empty text becomes the single text child."""
        doc = ElemDocument()
        node = doc.create_element('p', 'hello')
        assert node.document is doc
        assert len(node.children) == 1
        assert isinstance(node.children[0], TextNode)
        assert node.children[0].content == 'hello'

    def test_create_element_empty_text(self):
        """Empty or missing text adds no child."""
        doc = ElemDocument()
        assert len(doc.create_element('p', '').children) == 0
        assert len(doc.create_element('p').children) == 0

    def test_raw_marker_registers_content(self):
        """create_raw_marker stores the content in the document's raw store."""
        doc = ElemDocument()
        marker = doc.create_raw_marker('<b>x</b>')
        assert marker.marker_id in doc.raw_store
        assert marker.content == '<b>x</b>'

    def test_append_child_from_other_document_fails(self):
        """The backend never attaches a node of another document."""
        doc_a, doc_b = ElemDocument(), ElemDocument()
        parent = doc_a.create_element('div')
        with pytest.raises(ElemException, match='another document'):
            parent.append_child(doc_b.create_element('p'))

    def test_append_ancestor_fails(self):
        """A node cannot become its own descendant."""
        doc = ElemDocument()
        outer = doc.create_element('div')
        inner = doc.create_element('div')
        outer.append_child(inner)
        with pytest.raises(ElemHierarchyError):
            inner.append_child(outer)
        with pytest.raises(ElemHierarchyError):
            outer.append_child(outer)

    def test_append_moves_node(self):
        """Appending a node that has a parent moves it."""
        doc = ElemDocument()
        first, second = doc.create_element('div'), doc.create_element('div')
        child = doc.create_element('span')
        first.append_child(child)
        second.append_child(child)
        assert len(first.children) == 0
        assert child.parent is second
        assert child.label == 'span_0'


class TestImportNode:
    """Tests for ElemDocument.import_node()."""

    def test_same_document_returns_node(self):
        doc = ElemDocument()
        node = doc.create_element('p')
        assert doc.import_node(node) is node

    def test_import_clones_deeply(self):
        """Importing leaves the original untouched and clones the subtree."""
        doc_a, doc_b = ElemDocument(), ElemDocument()
        source = doc_a.create_element('ul')
        source.set_attr('class', 'list')
        source.append_child(doc_a.create_element('li', 'one'))

        copy = doc_b.import_node(source)

        assert copy is not source
        assert copy.document is doc_b
        assert copy.attr == {'class': 'list'}
        assert copy.children[0].document is doc_b
        assert copy.children[0].children[0].content == 'one'
        assert source.children[0].document is doc_a

    def test_import_carries_raw_content(self):
        """Raw markers keep their id and bring their content along."""
        doc_a, doc_b = ElemDocument(), ElemDocument()
        marker = doc_a.create_raw_marker('<hr>')
        copy = doc_b.import_node(marker)
        assert copy.marker_id == marker.marker_id
        assert doc_b.raw_store.get(marker.marker_id) == '<hr>'

    def test_import_keeps_source_nodes(self):
        """Script source imported into another document stays unescaped."""
        doc_a = ElemDocument()
        code = doc_a.create_element('script')
        code.append_child(doc_a.create_source_node('a < b'))
        copy = ElemDocument().import_node(code)
        assert copy.children[0].verbatim is True
        assert copy.children[0].content == 'a < b'

    def test_import_element_tree(self):
        """ElementTree elements are converted, text and tail included."""
        doc = ElemDocument()
        source = ET.fromstring('<ul id="x"><li>a</li>tail<li class="b">c</li></ul>')
        node = doc.import_node(source)
        assert node.tag == 'ul'
        assert node.attr == {'id': 'x'}
        assert [child.node_name for child in node.children] == ['li', '_text', 'li']
        assert node.children[1].content == 'tail'

    def test_import_element_tree_skips_comments(self):
        """ElementTree comments are dropped, their tail is kept."""
        doc = ElemDocument()
        source = ET.Element('div')
        comment = ET.Comment('note')
        comment.tail = 'after'
        source.append(comment)
        node = doc.import_node(source)
        assert [child.node_name for child in node.children] == ['_text']

    def test_import_unsupported(self):
        doc = ElemDocument()
        with pytest.raises(ElemChildError):
            doc.import_node(42)


class TestScopes:
    """Tests for the default scope and isolated scopes."""

    def test_default_scope_is_lazy_singleton(self):
        assert current_scope() is current_scope()

    def test_elements_use_active_scope(self):
        assert div().document is current_scope()

    def test_isolated_scope(self):
        """Elements built inside isolated_scope belong to the new document."""
        default = current_scope()
        with isolated_scope() as doc:
            assert current_scope() is doc
            box = div()
        assert box.document is doc
        assert doc is not default
        assert current_scope() is default

    def test_isolated_scope_with_given_document(self):
        doc = ElemDocument('mine')
        with isolated_scope(doc) as active:
            assert active is doc
            assert div().document is doc

    def test_nested_scopes_restore(self):
        """Each exit restores the scope that was active before it."""
        with isolated_scope() as outer:
            with isolated_scope() as inner:
                assert current_scope() is inner
            assert current_scope() is outer

    def test_scope_restored_on_error(self):
        """The previous scope is restored when the block raises."""
        default = current_scope()
        with pytest.raises(RuntimeError):
            with isolated_scope():
                raise RuntimeError('boom')
        assert current_scope() is default

    def test_with_isolated_scope(self):
        """with_isolated_scope returns the callback result."""
        default = current_scope()
        box = with_isolated_scope(lambda: div(text='x'))
        assert box.document is not default
        assert box.to_html() == '<div>x</div>'

    def test_with_isolated_scope_error(self):
        default = current_scope()

        def failing():
            raise ValueError('nope')

        with pytest.raises(ValueError):
            with_isolated_scope(failing)
        assert current_scope() is default

    def test_reset_default_scope(self):
        """Resetting drops the default document and its raw store."""
        old = current_scope()
        box = div()(raw_html('<b>x</b>'))
        reset_default_scope()
        assert current_scope() is not old
        assert box.document is old
        assert box.to_html() == '<div><b>x</b></div>'
