"""
Pass 20 — Component Generation

Derives the props from the root element and renders the
Svelte component.
"""

from svgsvelte.core.context import ConversionContext
from svgsvelte.core.logging import get_pass_logger
from svgsvelte.render.component import render_component
from svgsvelte.render.props import derive_props

PASS_NAME = "p20_generate"
log = get_pass_logger(PASS_NAME)


def generate(ctx: ConversionContext) -> ConversionContext:
    """Render ctx.tree into ctx.component_text."""
    if ctx.tree is None:
        raise RuntimeError("p20_generate requires a parsed tree (run p10_parse first)")

    props = derive_props(ctx.tree, include_class=ctx.options.include_class)
    text = render_component(ctx.tree, props)

    exposed = [p for p in props if p.exposed]
    log.info(
        "generated",
        props=len(exposed),
        inlined=len(props) - len(exposed),
        output_chars=len(text),
    )
    for prop in exposed:
        log.debug("prop_declared", source_key=prop.source_key, binding=prop.binding_name)

    ctx.props = props
    ctx.component_text = text
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="rendered_component",
        after=", ".join(p.binding_name for p in exposed) or "no props",
    )

    return ctx
