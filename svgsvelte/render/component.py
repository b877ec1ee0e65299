"""
Component Renderer — Deterministic Svelte source from the IR.

Same tree and props always produce the same text. Layout:

    <script lang="ts">  prop declarations, `...rest` last
    <svg ...>           root attributes as bindings, `{...rest}` last
      children          literal markup, 2 spaces per level
    </svg>
"""

import json

from svgsvelte.core.logging import LogChannel, get_logger
from svgsvelte.ir.enums import ROOT_TAG
from svgsvelte.ir.schema import PropSpec, SvgNode
from svgsvelte.render.props import ARIA_SOURCES, REST_BINDING, derive_props

log = get_logger(LogChannel.GENERATE)

INDENT = "  "

SCRIPT_OPEN = [
    '<script lang="ts">',
    f'{INDENT}import type {{ SVGAttributes }} from "svelte/elements";',
    "",
    f"{INDENT}let {{",
]
SCRIPT_CLOSE = [
    f"{INDENT}}}: SVGAttributes<SVGSVGElement> = $props();",
    "</script>",
    "",
]


# =============================================================================
# Escaping
# =============================================================================

def js_string(value: str) -> str:
    """A TypeScript string literal that is also safe inside <script>."""
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/")


def escape_text(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace("{", "&#123;")
        .replace("}", "&#125;")
    )


def escape_attribute(value: str) -> str:
    return escape_text(value).replace('"', "&quot;")


# =============================================================================
# Pieces
# =============================================================================

def declaration(prop: PropSpec) -> str:
    """`width = "24"` or `"stroke-width": strokeWidth = "2"`."""
    default = js_string(prop.default_value)
    if prop.binding_name == prop.source_key:
        return f"{prop.binding_name} = {default}"
    return f"{js_string(prop.source_key)}: {prop.binding_name} = {default}"


def root_attribute(prop: PropSpec) -> str:
    """`viewBox="0 0 24 24"`, `{width}` or `stroke-width={strokeWidth}`."""
    if not prop.exposed:
        return f'{prop.source_key}="{escape_attribute(prop.default_value)}"'
    if prop.binding_name == prop.source_key:
        return f"{{{prop.binding_name}}}"
    return f"{prop.source_key}={{{prop.binding_name}}}"


def render_element(tag: str, node: SvgNode, depth: int, lines: list[str]) -> None:
    """Append the markup of one element (and its subtree) to `lines`."""
    pad = INDENT * depth
    attrs = "".join(f' {key}="{escape_attribute(value)}"' for key, value in node.attributes.items())

    if node.children:
        lines.append(f"{pad}<{tag}{attrs}>")
        if node.text is not None:
            lines.append(f"{pad}{INDENT}{escape_text(node.text)}")
        for child_tag, child in node.iter_children():
            render_element(child_tag, child, depth + 1, lines)
        lines.append(f"{pad}</{tag}>")
    elif node.text is not None:
        lines.append(f"{pad}<{tag}{attrs}>{escape_text(node.text)}</{tag}>")
    else:
        lines.append(f"{pad}<{tag}{attrs} />")


def render_children(tree: SvgNode) -> list[str]:
    """Markup lines for the root's children, minus the ARIA sources."""
    lines: list[str] = []
    for tag, child in tree.iter_children():
        if tag in ARIA_SOURCES:
            continue
        render_element(tag, child, 1, lines)
    return lines


# =============================================================================
# Assembly
# =============================================================================

def render_component(tree: SvgNode, props: list[PropSpec]) -> str:
    """
    Assemble the component source.

    Args:
        tree: Validated root node
        props: Props derived from the root (see derive_props)

    Returns:
        Svelte component text, newline-terminated
    """
    declarations = [declaration(p) for p in props if p.exposed]
    attributes = [root_attribute(p) for p in props]

    lines = list(SCRIPT_OPEN)
    lines.extend(f"{INDENT * 2}{d}," for d in declarations)
    lines.append(f"{INDENT * 2}...{REST_BINDING}")
    lines.extend(SCRIPT_CLOSE)

    lines.append(f"<{ROOT_TAG}")
    lines.extend(f"{INDENT}{a}" for a in attributes)
    lines.append(f"{INDENT}{{...{REST_BINDING}}}")
    lines.append(">")
    lines.extend(render_children(tree))
    lines.append(f"</{ROOT_TAG}>")

    return "\n".join(lines) + "\n"


def generate(tree: SvgNode, include_class: bool = False) -> str:
    """
    Generate a Svelte component from a validated tree.

    Never fails for a tree that passed validation.
    """
    props = derive_props(tree, include_class=include_class)
    text = render_component(tree, props)
    log.debug("component_generated", props=len(props), lines=text.count("\n"))
    return text
