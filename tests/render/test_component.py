"""
Tests for the component renderer.
"""

from svgsvelte.ir.schema import PropSpec, SvgNode
from svgsvelte.render.component import (
    declaration,
    generate,
    js_string,
    render_children,
    root_attribute,
)

EXPECTED_CIRCLE = """\
<script lang="ts">
  import type { SVGAttributes } from "svelte/elements";

  let {
    width = "24",
    height = "24",
    ...rest
  }: SVGAttributes<SVGSVGElement> = $props();
</script>

<svg
  {width}
  {height}
  {...rest}
>
  <circle cx="12" cy="12" r="10" />
</svg>
"""


class TestGenerate:
    """Tests for whole-component output."""

    def test_circle(self, circle_tree):
        assert generate(circle_tree) == EXPECTED_CIRCLE

    def test_deterministic(self, circle_tree):
        assert generate(circle_tree) == generate(circle_tree)

    def test_class_binding(self):
        tree = SvgNode(
            attributes={"class": "icon", "width": "24"},
            children={"path": SvgNode(attributes={"d": "M0 0"})},
        )
        text = generate(tree, include_class=True)
        assert '    "class": className = "icon",\n    ...rest\n' in text
        assert "  class={className}\n  {...rest}\n>" in text

    def test_class_excluded(self):
        tree = SvgNode(
            attributes={"class": "icon", "width": "24"},
            children={"path": SvgNode(attributes={"d": "M0 0"})},
        )
        text = generate(tree)
        assert "class" not in text.replace("SVGSVGElement", "")

    def test_colliding_bindings_declared_once(self):
        tree = SvgNode(
            attributes={"stroke-width": "1", "strokeWidth": "2"},
            children={"path": SvgNode(attributes={"d": "M0 0"})},
        )
        text = generate(tree)
        assert '    "stroke-width": strokeWidth = "1",\n    "strokeWidth": strokeWidth2 = "2",\n' in text
        assert "  stroke-width={strokeWidth}\n  strokeWidth={strokeWidth2}\n" in text

    def test_non_editable_inlined(self):
        tree = SvgNode(
            attributes={"viewBox": "0 0 24 24", "width": "24"},
            children={"path": SvgNode(attributes={"d": "M0 0"})},
        )
        text = generate(tree)
        assert "viewBox =" not in text
        assert '"viewBox"' not in text
        assert '  viewBox="0 0 24 24"\n' in text

    def test_aria_label(self):
        tree = SvgNode(
            children={
                "title": SvgNode(text="Home"),
                "path": SvgNode(attributes={"d": "M0 0"}),
            },
        )
        text = generate(tree)
        assert '"aria-label": ariaLabel = "Home",' in text
        assert "  aria-label={ariaLabel}\n" in text
        assert "<title>" not in text

    def test_no_rendered_children(self):
        """A root whose only child is its title renders an empty body."""
        text = generate(SvgNode(children={"title": SvgNode(text="Home")}))
        assert text.endswith("  {...rest}\n>\n</svg>\n")


class TestPieces:
    """Tests for individual output pieces."""

    def test_declaration_shorthand(self):
        prop = PropSpec(source_key="width", binding_name="width", default_value="24")
        assert declaration(prop) == 'width = "24"'

    def test_declaration_quoted_key(self):
        prop = PropSpec(source_key="stroke-width", binding_name="strokeWidth", default_value="2")
        assert declaration(prop) == '"stroke-width": strokeWidth = "2"'

    def test_root_attribute_forms(self):
        assert root_attribute(PropSpec(source_key="width", binding_name="width", default_value="1")) == "{width}"
        assert (
            root_attribute(PropSpec(source_key="stroke-width", binding_name="strokeWidth", default_value="1"))
            == "stroke-width={strokeWidth}"
        )
        assert (
            root_attribute(PropSpec(source_key="viewBox", binding_name="viewBox", default_value="0 0 1 1", exposed=False))
            == 'viewBox="0 0 1 1"'
        )

    def test_js_string(self):
        assert js_string('say "hi"') == '"say \\"hi\\""'
        assert js_string("</script>") == '"<\\/script>"'
        assert js_string("café") == '"café"'


class TestChildren:
    """Tests for recursive child rendering."""

    def test_nested_elements(self):
        tree = SvgNode(children={
            "g": SvgNode(
                attributes={"fill": "red"},
                children={"path": [SvgNode(attributes={"d": "a"}), SvgNode(attributes={"d": "b"})]},
            ),
        })
        assert render_children(tree) == [
            '  <g fill="red">',
            '    <path d="a" />',
            '    <path d="b" />',
            "  </g>",
        ]

    def test_text_child(self):
        tree = SvgNode(children={"text": SvgNode(attributes={"x": "1"}, text="Hi & {you}")})
        assert render_children(tree) == ['  <text x="1">Hi &amp; &#123;you&#125;</text>']

    def test_nested_title_rendered(self):
        """Only root-level title/desc are lifted into ARIA props."""
        tree = SvgNode(children={
            "g": SvgNode(children={"title": SvgNode(text="Tip"), "path": SvgNode(attributes={"d": "a"})}),
        })
        assert render_children(tree) == [
            "  <g>",
            "    <title>Tip</title>",
            '    <path d="a" />',
            "  </g>",
        ]

    def test_attribute_escaping(self):
        tree = SvgNode(children={"path": SvgNode(attributes={"data-x": 'a"b{c}<d&'})})
        assert render_children(tree) == ['  <path data-x="a&quot;b&#123;c&#125;&lt;d&amp;" />']

    def test_self_closing_without_attributes(self):
        tree = SvgNode(children={"g": SvgNode()})
        assert render_children(tree) == ["  <g />"]
