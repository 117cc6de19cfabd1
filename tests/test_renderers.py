"""
Renderer registry tests

Tests HTML output of block and inline renderers against the default theme.
"""

from types import SimpleNamespace

import pytest

from ledgerdown.lib.renderers import RendererRegistry
from ledgerdown.lib.theme import Theme
from ledgerdown.models.blocks import Bold, Heading, Italic, ListBlock, Paragraph, PlainText
from ledgerdown.models.renderers import RendererCategory


@pytest.fixture
def registry():
    return RendererRegistry()


@pytest.fixture
def compiler():
    """Minimal stand-in exposing the theme, as handlers expect"""
    return SimpleNamespace(theme=Theme("default"))


class TestRegistry:
    """Lookup and categories"""

    def test_block_renderers(self, registry):
        names = {spec.name for spec in registry.renderers_listByCategory(RendererCategory.BLOCK)}
        assert names == {"heading", "list", "paragraph"}

    def test_inline_renderers(self, registry):
        names = {spec.name for spec in registry.renderers_listByCategory(RendererCategory.INLINE)}
        assert names == {"plain", "bold", "italic"}

    def test_aliases(self, registry):
        assert registry.get("strong") is registry.get("bold")
        assert registry.get("em") is registry.get("italic")

    def test_lookup_is_exact(self, registry):
        """Only registered names and aliases resolve"""
        assert registry.spec_get("strong") is registry.spec_get("bold")
        assert registry.get("Bold") is None
        assert registry.get("bol") is None
        assert not hasattr(registry.spec_get("bold"), "matches")

    def test_unknown_name(self, registry):
        assert registry.get("table") is None
        assert registry.spec_get("table") is None


class TestBlockRendering:
    """Blocks to HTML"""

    @pytest.mark.parametrize("level,tag", [(1, "h2"), (2, "h3"), (3, "h4")])
    def test_heading_levels_offset(self, registry, compiler, level, tag):
        html = registry.node_render(Heading(level, [PlainText("T")]), compiler)
        assert html == f'<{tag} class="analysis-heading analysis-heading-{level}">T</{tag}>'

    def test_empty_heading(self, registry, compiler):
        html = registry.node_render(Heading(1, []), compiler)
        assert html == '<h2 class="analysis-heading analysis-heading-1"></h2>'

    def test_unordered_list(self, registry, compiler):
        html = registry.node_render(ListBlock(False, [[PlainText("a")], [Bold("b")]]), compiler)
        assert html.startswith('<ul class="list-disc">')
        assert html.endswith('</ul>')
        assert '<li class="analysis-item">a</li>' in html
        assert '<li class="analysis-item"><strong class="font-semibold">b</strong></li>' in html

    def test_ordered_list(self, registry, compiler):
        html = registry.node_render(ListBlock(True, [[PlainText("one")]]), compiler)
        assert html.startswith('<ol class="list-decimal">')
        assert html.endswith('</ol>')

    def test_paragraph_with_emphasis(self, registry, compiler):
        node = Paragraph([PlainText("a "), Italic("b"), PlainText(" c")])
        html = registry.node_render(node, compiler)
        assert html == '<p class="analysis-paragraph">a <em class="italic">b</em> c</p>'


class TestEscaping:
    """All text is HTML-escaped"""

    def test_plain_text_escaped(self, registry, compiler):
        assert registry.node_render(PlainText("<b>&\"x\""), compiler) == "&lt;b&gt;&amp;&quot;x&quot;"

    def test_bold_text_escaped(self, registry, compiler):
        html = registry.node_render(Bold("<script>"), compiler)
        assert html == '<strong class="font-semibold">&lt;script&gt;</strong>'

    def test_unknown_node_rendered_as_text(self, registry, compiler):
        node = SimpleNamespace(text="<raw>")
        assert registry.node_render(node, compiler) == "&lt;raw&gt;"
