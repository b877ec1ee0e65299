"""
Pass 10 — Tree Parsing

Builds the SvgNode tree from the normalized text and rejects
documents that break a structural rule.
"""

from svgsvelte.core.context import ConversionContext
from svgsvelte.core.logging import get_pass_logger
from svgsvelte.tree.parser import parse as parse_tree

PASS_NAME = "p10_parse"
log = get_pass_logger(PASS_NAME)


def parse(ctx: ConversionContext) -> ConversionContext:
    """
    Parse normalized text into ctx.tree.

    Raises:
        ParseError: If the document is not a single valid SVG tree
    """
    tree = parse_tree(ctx.normalized_text)
    children = tree.iter_children()

    log.info(
        "parsed",
        root_attributes=len(tree.attributes),
        root_children=len(children),
    )

    ctx.tree = tree
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="built_tree",
        after=f"{len(tree.attributes)} attributes, {len(children)} children",
    )

    return ctx
