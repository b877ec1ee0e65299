"""
Normalizer — Deterministic markup cleanup before parsing.

Parses the raw document with lxml, applies the preset's transforms in
order, and serializes the result back to text. The XML declaration,
doctype, and anything else outside the root element(s) are dropped.
"""

import re
from typing import Optional

from lxml import etree

from svgsvelte.core.errors import NormalizationError
from svgsvelte.core.logging import LogChannel, get_logger
from svgsvelte.normalize.loader import NormalizerConfig, get_preset
from svgsvelte.normalize.transforms import TRANSFORMS

log = get_logger(LogChannel.NORMALIZE)


def _make_parser() -> etree.XMLParser:
    # No entity expansion and no network access for untrusted input
    return etree.XMLParser(
        remove_blank_text=True,
        resolve_entities=False,
        no_network=True,
        encoding="utf-8",
    )


# XML declaration and DOCTYPE, which may not appear inside a wrapper element
_PROLOG = re.compile(r"\A\s*(?:<\?xml[^>]*\?>)?\s*(?:<!DOCTYPE[^>\[]*(?:\[[^\]]*\])?\s*>)?", re.IGNORECASE)

_WRAPPER_TAG = "normalizer-roots"


def _parse_roots(raw_text: str) -> list[etree._Element]:
    """
    Parse the document into its top-level elements.

    A well-formed document has exactly one. When libxml2 stops at extra
    content after the root, the text is parsed again inside a wrapper
    element to recover every sibling root.
    """
    try:
        return [etree.fromstring(raw_text.encode("utf-8"), _make_parser())]
    except etree.XMLSyntaxError as e:
        if e.code != etree.ErrorTypes.ERR_DOCUMENT_END:
            raise

    # Keep the prolog's line breaks so error lines still match the input
    body = _PROLOG.sub(lambda m: "\n" * m.group(0).count("\n"), raw_text, count=1)
    wrapped = f"<{_WRAPPER_TAG}>{body}</{_WRAPPER_TAG}>"
    container = etree.fromstring(wrapped.encode("utf-8"), _make_parser())
    roots = list(container.iterchildren(etree.Element))
    for root in roots:
        container.remove(root)
    return roots


class Normalizer:
    """
    Applies a normalizer preset to SVG text.

    The same preset always produces the same output for the same input.
    """

    def __init__(
        self,
        config: Optional[NormalizerConfig] = None,
        preset_name: str = "default",
    ) -> None:
        """
        Args:
            config: Explicit configuration (takes precedence)
            preset_name: Packaged preset to load when no config is given
        """
        self._preset_name = config.name if config is not None else preset_name
        self._config = config

    @property
    def config(self) -> NormalizerConfig:
        """Lazy-load the preset."""
        if self._config is None:
            self._config = get_preset(self._preset_name)
        return self._config

    def normalize(self, raw_text: str) -> str:
        """
        Clean up an SVG document.

        Args:
            raw_text: Raw SVG document text

        Returns:
            The cleaned document. Sibling top-level elements are cleaned
            one by one and written back to back, so the parser can report
            them as multiple roots.

        Raises:
            NormalizationError: If the input is empty, not well-formed XML,
                or a transform fails
        """
        if not raw_text.strip():
            raise NormalizationError("document is empty")

        try:
            roots = _parse_roots(raw_text)
        except etree.XMLSyntaxError as e:
            raise NormalizationError(e.msg or str(e), cause=e) from e

        for name in self.config.transforms:
            for root in roots:
                try:
                    TRANSFORMS[name](root, self.config)
                except Exception as e:
                    raise NormalizationError(f"{name}: {e}", cause=e) from e
            log.debug("transform_applied", transform=name)

        output = "".join(etree.tostring(root, encoding="unicode", with_tail=False) for root in roots)
        log.verbose(
            "document_normalized",
            preset=self.config.name,
            transforms=len(self.config.transforms),
            roots=len(roots),
            input_chars=len(raw_text),
            output_chars=len(output),
        )
        return output


# Global normalizer instance
_normalizer: Optional[Normalizer] = None


def get_normalizer(preset_name: str = "default") -> Normalizer:
    """Get or create the normalizer for a preset."""
    global _normalizer
    if _normalizer is None or _normalizer._preset_name != preset_name:
        _normalizer = Normalizer(preset_name=preset_name)
    return _normalizer


def normalize(raw_text: str) -> str:
    """Clean up an SVG document with the default preset."""
    return get_normalizer().normalize(raw_text)
