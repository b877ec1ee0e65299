"""
Pass 00 — Markup Normalization

Cleans the raw document before it is parsed:
- Editor data, metadata and comments removed
- Styles moved into attributes
- Numbers and colors canonicalized
- Shapes simplified, empty groups collapsed
- Attributes sorted deterministically
"""

from svgsvelte.core.context import ConversionContext
from svgsvelte.core.logging import get_pass_logger
from svgsvelte.normalize.normalizer import get_normalizer

PASS_NAME = "p00_normalize"
log = get_pass_logger(PASS_NAME)


def normalize(ctx: ConversionContext) -> ConversionContext:
    """
    Normalize the raw SVG text.

    Raises:
        NormalizationError: If the document is empty or not well-formed
    """
    raw_len = len(ctx.raw_text)
    log.verbose("starting_normalization", input_chars=raw_len)

    text = get_normalizer().normalize(ctx.raw_text)
    output_len = len(text)

    log.info(
        "normalized",
        input_chars=raw_len,
        output_chars=output_len,
        chars_removed=raw_len - output_len,
    )

    ctx.normalized_text = text
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="normalized_markup",
        before=f"{raw_len} chars",
        after=f"{output_len} chars",
    )

    return ctx
