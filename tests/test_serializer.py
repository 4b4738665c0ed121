# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for ElemHtmlSerializer and indent_html."""

import logging

import pytest

from genro_elem import (
    ElemHtmlSerializer,
    div,
    el,
    html,
    body,
    indent_html,
    p,
    raw_html,
    span,
    text,
)


class TestEscaping:
    """Tests for text and attribute escaping."""

    def test_text_escaped(self):
        box = div()('<b>"x" & \'y\'</b>')
        assert box.to_html() == '<div>&lt;b&gt;&quot;x&quot; &amp; &#x27;y&#x27;&lt;/b&gt;</div>'

    def test_text_wrapper_escaped(self):
        assert div()(text('a & b')).to_html() == '<div>a &amp; b</div>'

    def test_attribute_escaped(self):
        box = div().attr('title', 'a "b" <c>&')
        assert box.to_html() == '<div title="a &quot;b&quot; &lt;c&gt;&amp;"></div>'

    def test_plain_string_in_style_is_escaped(self):
        """A plain string cannot close the style tag and inject markup."""
        html_out = el('style')('</style><script>alert(1)</script>').to_html()
        assert html_out == '<style>&lt;/style&gt;&lt;script&gt;alert(1)&lt;/script&gt;</style>'

    def test_plain_string_in_script_is_escaped(self):
        assert el('script')('a < b').to_html() == '<script>a &lt; b</script>'

    def test_source_in_script_and_style_not_escaped(self):
        assert el('script').source('if (a < b && c) {}').to_html() == '<script>if (a < b && c) {}</script>'
        assert el('style').source('ul > li { color: red; }').to_html() == '<style>ul > li { color: red; }</style>'

    def test_source_cannot_close_its_tag(self):
        """'</' in source code is written as '<\\/'."""
        html_out = el('script').source('s = "</script><b>x</b>";').to_html()
        assert html_out == '<script>s = "<\\/script><b>x<\\/b>";</script>'
        assert html_out.count('</script>') == 1

    def test_source_outside_script_is_escaped(self):
        assert div().source('a < b').to_html() == '<div>a &lt; b</div>'

    def test_marker_like_text_is_escaped(self):
        """Text that looks like a raw marker is never substituted."""
        box = div()('<!--elem-raw:1-->')
        assert box.to_html() == '<div>&lt;!--elem-raw:1--&gt;</div>'


class TestStructure:
    """Tests for flat serialization."""

    def test_nested(self):
        box = div(id='a')(span(text='x'), p(text='y'))
        assert box.to_html() == '<div id="a"><span>x</span><p>y</p></div>'

    def test_void_elements(self):
        assert el('br').to_html() == '<br>'
        assert el('img').attr('src', 'a.png').to_html() == '<img src="a.png">'

    def test_void_element_children_are_not_written(self):
        assert el('br')('ignored').to_html() == '<br>'

    def test_attribute_order_is_insertion_order(self):
        box = div().attr('z', '1').attr('a', '2').attr('m', '3')
        assert box.to_html() == '<div z="1" a="2" m="3"></div>'

    def test_doctype(self):
        page = html()(body())
        assert page.to_html() == '<!DOCTYPE html>\n<html><body></body></html>'

    def test_doctype_pretty(self):
        page = html(lang='en')(body())
        assert page.to_html(pretty=True) == '<!DOCTYPE html>\n<html lang="en">\n  <body>\n  </body>\n</html>'

    def test_serialize_siblings(self):
        first = span(text='a')
        second = span(text='b')
        result = ElemHtmlSerializer.serialize([first.node, second.node])
        assert result == '<span>a</span><span>b</span>'

    def test_serialize_to_file(self, tmp_path):
        target = tmp_path / 'out.html'
        result = ElemHtmlSerializer.serialize(div()('è').node, filename=target)
        assert result is None
        assert target.read_text(encoding='utf-8') == '<div>è</div>'

    def test_to_html_destination(self, tmp_path):
        target = tmp_path / 'page.html'
        result = div()(p(text='x')).to_html(pretty=True, destination=target)
        assert target.read_text(encoding='utf-8') == result


class TestRawHtml:
    """Tests for raw content substitution."""

    def test_raw_bypasses_escaping(self):
        box = div()(raw_html('<b>&amp;</b>'))
        assert box.to_html() == '<div><b>&amp;</b></div>'

    def test_raw_with_siblings(self):
        box = div()('a < b', raw_html('<hr>'), span(text='c'))
        assert box.to_html() == '<div>a &lt; b<hr><span>c</span></div>'

    def test_raw_substitution_is_single_pass(self):
        """Raw content containing a marker token is emitted as is."""
        box = div()(raw_html('<i>x</i>'))
        marker_id = box.children[0].marker_id
        box(raw_html(f'<!--elem-raw:{marker_id}-->'))
        assert box.to_html() == f'<div><i>x</i><!--elem-raw:{marker_id}--></div>'

    def test_retain_raw_default(self):
        box = div()(raw_html('<i>x</i>'))
        assert box.to_html() == box.to_html() == '<div><i>x</i></div>'

    def test_retain_raw_false_discards(self, caplog):
        """After a non-retaining render the raw content is gone."""
        box = div()(raw_html('<i>x</i>'))
        assert box.to_html(retain_raw=False) == '<div><i>x</i></div>'
        assert len(box.document.raw_store) == 0
        with caplog.at_level(logging.WARNING, logger='genro_elem.raw_store'):
            assert box.to_html() == '<div></div>'
        assert 'has no stored content' in caplog.text


class TestPretty:
    """Tests for pretty output and indent_html."""

    def test_basic(self):
        box = div()(p(text='x'))
        assert box.to_html(pretty=True) == '<div>\n  <p>\n    x\n  </p>\n</div>'

    def test_custom_indent(self):
        box = div()(p(text='x'))
        assert box.to_html(pretty=True, indent='\t') == '<div>\n\t<p>\n\t\tx\n\t</p>\n</div>'

    def test_pre_keeps_whitespace(self):
        box = div()(el('pre')('  a\n    b  '), p(text='x'))
        assert box.to_html(pretty=True) == '<div>\n  <pre>  a\n    b  </pre>\n  <p>\n    x\n  </p>\n</div>'

    def test_nested_preserve_tags(self):
        box = div()(el('pre')(el('code')('x = 1')))
        assert box.to_html(pretty=True) == '<div>\n  <pre><code>x = 1</code></pre>\n</div>'

    def test_textarea_content_untouched(self):
        box = div()(el('textarea')('line 1\n  line 2'))
        assert box.to_html(pretty=True) == '<div>\n  <textarea>line 1\n  line 2</textarea>\n</div>'

    def test_script_helper_output(self):
        box = div(id='d').script('a();')
        assert box.to_html(pretty=True) == (
            '<div id="d">\n'
            "  <script>{ const el = document.getElementById('d'); a(); }</script>\n"
            '</div>'
        )

    def test_script_with_less_than_keeps_indenting(self):
        """A '<' inside script code does not hide the script close tag."""
        box = div()(div(id='d').script('if (i<n) { go(); }'), p(text='after'))
        assert box.to_html(pretty=True) == (
            '<div>\n'
            '  <div id="d">\n'
            "    <script>{ const el = document.getElementById('d'); if (i<n) { go(); } }</script>\n"
            '  </div>\n'
            '  <p>\n'
            '    after\n'
            '  </p>\n'
            '</div>'
        )

    def test_nested_same_preserve_tag(self):
        source = '<div><pre>a<pre>b</pre>c</pre><p>x</p></div>'
        assert indent_html(source) == '<div>\n  <pre>a<pre>b</pre>c</pre>\n  <p>\n    x\n  </p>\n</div>'

    def test_unclosed_preserve_tag_runs_to_end(self):
        assert indent_html('<div><pre> a < b') == '<div>\n  <pre> a < b'

    def test_collapse_leaves(self):
        box = div()(p(text='x'), el('br'))
        assert box.to_html(pretty=True, collapse_leaves=True) == '<div>\n  <p>x</p>\n  <br>\n</div>'

    def test_collapse_leaves_keeps_nested(self):
        box = div()(p()(span(text='x')))
        assert box.to_html(pretty=True, collapse_leaves=True) == '<div>\n  <p>\n    <span>x</span>\n  </p>\n</div>'

    def test_void_does_not_indent(self):
        box = div()(el('br'), el('hr'), p(text='x'))
        assert box.to_html(pretty=True) == '<div>\n  <br>\n  <hr>\n  <p>\n    x\n  </p>\n</div>'

    def test_raw_content_is_indented(self):
        box = div()(raw_html('<section><b>x</b></section>'))
        assert box.to_html(pretty=True) == (
            '<div>\n  <section>\n    <b>\n      x\n    </b>\n  </section>\n</div>'
        )

    def test_indent_html_matches_pretty(self):
        box = div(id='a')(p(text='x'), el('pre')(' y '), el('br'), span()(text('z')))
        assert indent_html(box.to_html()) == box.to_html(pretty=True)

    @pytest.mark.parametrize('source', ['', '   ', '\n'])
    def test_indent_html_empty(self, source):
        assert indent_html(source) == ''

    def test_indent_html_self_closing(self):
        assert indent_html('<div><x-icon/><p>a</p></div>') == '<div>\n  <x-icon/>\n  <p>\n    a\n  </p>\n</div>'
