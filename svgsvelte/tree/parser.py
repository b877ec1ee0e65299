"""
Tree Parser — Cleaned SVG text to an SvgNode tree.

Checks, in order:
1. The text starts with an <svg opening tag
2. The text is well-formed XML with a single root
3. The root is an <svg> element with some content
4. The structural invariants (see svgsvelte.validation.structure)

The first failing check raises ParseError; nothing is mutated.
"""

import re
from typing import Optional, Union

from lxml import etree

from svgsvelte.core.errors import ParseError
from svgsvelte.core.logging import LogChannel, get_logger
from svgsvelte.ir.enums import ROOT_TAG, ParseErrorCode
from svgsvelte.ir.schema import SvgNode
from svgsvelte.validation.structure import validate_tree

log = get_logger(LogChannel.PARSE)

SVG_NS = "http://www.w3.org/2000/svg"
XML_NS = "http://www.w3.org/XML/1998/namespace"

# lxml appends the position to the message; the line is reported separately
_POSITION_SUFFIX = re.compile(r",\s*line \d+,\s*column \d+\s*$")


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        encoding="utf-8",
    )


def _syntax_error(exc: etree.XMLSyntaxError) -> ParseError:
    line = exc.lineno or None
    if exc.code == etree.ErrorTypes.ERR_DOCUMENT_END:
        message = "Multiple possible root nodes found."
    else:
        message = _POSITION_SUFFIX.sub("", exc.msg or str(exc))
    if line:
        message = f"{message} at line {line}"
    return ParseError(message, ParseErrorCode.SYNTAX, line=line)


# =============================================================================
# lxml -> SvgNode
# =============================================================================

def _tag_name(el: etree._Element) -> str:
    qname = etree.QName(el)
    if qname.namespace in (None, SVG_NS) or not el.prefix:
        return qname.localname
    return f"{el.prefix}:{qname.localname}"


def _attribute_name(el: etree._Element, key: str) -> str:
    if not key.startswith("{"):
        return key
    qname = etree.QName(key)
    if qname.namespace == XML_NS:
        return f"xml:{qname.localname}"
    for prefix, uri in el.nsmap.items():
        if prefix and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _attributes(el: etree._Element) -> dict[str, str]:
    attributes: dict[str, str] = {}

    # Namespace declarations made on this element come first
    parent = el.getparent()
    inherited = parent.nsmap if parent is not None else {}
    for prefix, uri in el.nsmap.items():
        if inherited.get(prefix) != uri:
            attributes["xmlns" if prefix is None else f"xmlns:{prefix}"] = uri

    for key, value in el.attrib.items():
        attributes[_attribute_name(el, key)] = value
    return attributes


def _text(el: etree._Element) -> Optional[str]:
    parts = [el.text or ""]
    parts.extend(child.tail or "" for child in el)
    text = "".join(parts).strip()
    return text or None


def to_node(el: etree._Element) -> SvgNode:
    """Convert an lxml element (recursively) into an SvgNode."""
    children: dict[str, Union[SvgNode, list[SvgNode]]] = {}
    for child in el.iterchildren(etree.Element):
        tag = _tag_name(child)
        node = to_node(child)
        existing = children.get(tag)
        if existing is None:
            children[tag] = node
        elif isinstance(existing, list):
            existing.append(node)
        else:
            children[tag] = [existing, node]

    return SvgNode(attributes=_attributes(el), children=children, text=_text(el))


# =============================================================================
# Entry point
# =============================================================================

def parse(text: str) -> SvgNode:
    """
    Parse cleaned SVG text into a validated tree.

    Args:
        text: SVG markup (normally the normalizer's output)

    Returns:
        The root SvgNode

    Raises:
        ParseError: If any check fails (see module docstring)
    """
    stripped = text.strip()
    if not stripped.startswith(f"<{ROOT_TAG}"):
        raise ParseError("Content must start with <svg> tag", ParseErrorCode.MISSING_ROOT)

    try:
        root = etree.fromstring(stripped.encode("utf-8"), _make_parser())
    except etree.XMLSyntaxError as e:
        raise _syntax_error(e) from e

    if etree.QName(root).localname != ROOT_TAG:
        raise ParseError("No SVG element found", ParseErrorCode.NO_ROOT)

    tree = to_node(root)
    if not (tree.attributes or tree.children or tree.text):
        raise ParseError("No SVG element found", ParseErrorCode.NO_ROOT)

    validate_tree(tree)

    log.verbose(
        "tree_parsed",
        root_attributes=len(tree.attributes),
        root_children=len(tree.iter_children()),
    )
    return tree
