"""
Normalizer Transforms — lxml tree rewrites applied before parsing.

Each transform receives the document root and the active config and
mutates the tree in place. Transforms are registered by name; presets
refer to them by that name and decide the order.

Structural removals never take out <svg>, <image> or <style> elements
(or anything containing one): the parser must still see them.
"""

import math
import re
from functools import cmp_to_key
from typing import TYPE_CHECKING, Callable, Optional

from lxml import etree

from svgsvelte.ir.enums import UnsupportedElement

if TYPE_CHECKING:
    from svgsvelte.normalize.loader import NormalizerConfig


TransformFn = Callable[[etree._Element, "NormalizerConfig"], None]

# Registry: transform name -> function
TRANSFORMS: dict[str, TransformFn] = {}


def register(name: str) -> Callable[[TransformFn], TransformFn]:
    """Register a transform under a preset name."""
    def decorator(fn: TransformFn) -> TransformFn:
        TRANSFORMS[name] = fn
        return fn
    return decorator


# =============================================================================
# Vocabulary
# =============================================================================

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"

EDITOR_NAMESPACES = frozenset({
    "http://code.google.com/p/sketchy",
    "http://inkscape.sourceforge.net/DTD/sodipodi-0.dtd",
    "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
    "http://www.inkscape.org/namespaces/inkscape",
    "http://www.bohemiancoding.com/sketch/ns",
    "http://ns.adobe.com/AdobeIllustrator/10.0/",
    "http://ns.adobe.com/Graphs/1.0/",
    "http://ns.adobe.com/AdobeSVGViewerExtensions/3.0/",
    "http://ns.adobe.com/Variables/1.0/",
    "http://ns.adobe.com/SaveForWeb/1.0/",
    "http://ns.adobe.com/Extensibility/1.0/",
    "http://ns.adobe.com/Flows/1.0/",
    "http://ns.adobe.com/ImageReplacement/1.0/",
    "http://ns.adobe.com/GenericCustomNamespace/1.0/",
    "http://ns.adobe.com/XPath/1.0/",
    "http://schemas.microsoft.com/visio/2003/SVGExtensions/",
    "http://taptrix.com/vectorillustrator/svg_extensions",
    "http://www.figma.com/figma/ns",
    "http://purl.org/dc/elements/1.1/",
    "http://creativecommons.org/ns#",
    "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "http://www.serif.com/",
    "http://www.vector.evaxdesign.sk",
})

# Elements the validator rejects; removals must leave them in place
PROTECTED_TAGS = frozenset(kind.value for kind in UnsupportedElement)

INHERITABLE_ATTRS = frozenset({
    "clip-rule", "color", "color-interpolation", "color-interpolation-filters",
    "color-rendering", "cursor", "direction", "dominant-baseline", "fill",
    "fill-opacity", "fill-rule", "font", "font-family", "font-size",
    "font-size-adjust", "font-stretch", "font-style", "font-variant",
    "font-weight", "image-rendering", "letter-spacing", "marker", "marker-end",
    "marker-mid", "marker-start", "paint-order", "pointer-events",
    "shape-rendering", "stroke", "stroke-dasharray", "stroke-dashoffset",
    "stroke-linecap", "stroke-linejoin", "stroke-miterlimit", "stroke-opacity",
    "stroke-width", "text-anchor", "text-rendering", "visibility",
    "word-spacing", "writing-mode",
})

PRESENTATION_ATTRS = INHERITABLE_ATTRS | frozenset({
    "alignment-baseline", "baseline-shift", "clip", "clip-path", "display",
    "filter", "flood-color", "flood-opacity", "lighting-color", "mask",
    "opacity", "overflow", "stop-color", "stop-opacity", "text-decoration",
    "transform-origin", "unicode-bidi", "vector-effect",
})

PRESENTATION_DEFAULTS = {
    "clip-rule": "nonzero",
    "fill-opacity": "1",
    "fill-rule": "nonzero",
    "opacity": "1",
    "stroke-dasharray": "none",
    "stroke-dashoffset": "0",
    "stroke-linecap": "butt",
    "stroke-linejoin": "miter",
    "stroke-miterlimit": "4",
    "stroke-opacity": "1",
    "stroke-width": "1",
    "visibility": "visible",
}

CONDITIONAL_ATTRS = frozenset({"requiredExtensions", "requiredFeatures", "systemLanguage"})

COLOR_ATTRS = frozenset({"color", "fill", "flood-color", "lighting-color", "stop-color", "stroke"})

COLOR_SHORT_NAMES = {
    "#f0ffff": "azure", "#f5f5dc": "beige", "#ffe4c4": "bisque", "#a52a2a": "brown",
    "#ff7f50": "coral", "#ffd700": "gold", "#808080": "gray", "#008000": "green",
    "#4b0082": "indigo", "#fffff0": "ivory", "#f0e68c": "khaki", "#faf0e6": "linen",
    "#800000": "maroon", "#000080": "navy", "#808000": "olive", "#ffa500": "orange",
    "#da70d6": "orchid", "#cd853f": "peru", "#ffc0cb": "pink", "#dda0dd": "plum",
    "#800080": "purple", "#f00": "red", "#fa8072": "salmon", "#a0522d": "sienna",
    "#c0c0c0": "silver", "#fffafa": "snow", "#d2b48c": "tan", "#008080": "teal",
    "#ff6347": "tomato", "#ee82ee": "violet", "#f5deb3": "wheat",
}

CONTAINER_TAGS = frozenset({
    "a", "defs", "g", "marker", "mask", "missing-glyph", "pattern", "switch", "symbol",
})

ATTR_ORDER = (
    "id", "width", "height", "x", "x1", "x2", "y", "y1", "y2",
    "cx", "cy", "r", "fill", "stroke", "marker", "d", "points",
)

NUMBER_RE = re.compile(r"[-+]?\d*\.?\d+(?:[eE][-+]?\d+)?")
NUMERIC_VALUE_RE = re.compile(
    r"([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)(px|pt|pc|mm|cm|m|in|ft|em|ex|%)?"
)
NUMBER_TOKEN_RE = re.compile(r"[-+]?(?:\d*\.\d+|\d+\.?)(?:[eE][-+]?\d+)?")
HEX_COLOR_RE = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")
RGB_COLOR_RE = re.compile(
    r"rgb\(\s*(\d+(?:\.\d+)?%?)\s*,\s*(\d+(?:\.\d+)?%?)\s*,\s*(\d+(?:\.\d+)?%?)\s*\)",
    re.IGNORECASE,
)


# =============================================================================
# Tree helpers
# =============================================================================

def _local(el: etree._Element) -> str:
    return etree.QName(el).localname


def _elements(root: etree._Element) -> list[etree._Element]:
    """All elements in document order, snapshotted so callers may mutate."""
    return list(root.iter(etree.Element))


def _retag(el: etree._Element, name: str) -> None:
    el.tag = etree.QName(etree.QName(el).namespace, name).text


def _holds_reserved(el: etree._Element) -> bool:
    if _local(el) in PROTECTED_TAGS:
        return True
    return any(_local(d) in PROTECTED_TAGS for d in el.iterdescendants(etree.Element))


def _remove(node: etree._Element) -> None:
    """Detach a node, keeping its tail text attached to the tree."""
    parent = node.getparent()
    if parent is None:
        return
    if node.tail and node.tail.strip():
        previous = node.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + node.tail
        else:
            parent.text = (parent.text or "") + node.tail
    parent.remove(node)


def _unwrap(el: etree._Element) -> None:
    """Replace an element by its children."""
    parent = el.getparent()
    index = parent.index(el)
    for offset, child in enumerate(list(el)):
        parent.insert(index + offset, child)
    _remove(el)


def _inherited(el: etree._Element, name: str) -> Optional[str]:
    parent = el.getparent()
    while parent is not None:
        value = parent.get(name)
        if value is not None:
            return value
        parent = parent.getparent()
    return None


def _has_ancestor(el: etree._Element, tag: str) -> bool:
    return any(_local(a) == tag for a in el.iterancestors(etree.Element))


def _qualified_name(el: etree._Element, key: str) -> str:
    """Attribute key as written in markup (prefix:local for namespaced keys)."""
    if not key.startswith("{"):
        return key
    qname = etree.QName(key)
    if qname.namespace == XML_NS:
        return f"xml:{qname.localname}"
    for prefix, uri in el.nsmap.items():
        if prefix and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _is_zero(value: Optional[str]) -> bool:
    return value is not None and NUMBER_RE.fullmatch(value) is not None and float(value) == 0


def _plain_number(value: Optional[str], default: Optional[str] = "0") -> Optional[float]:
    value = default if value is None else value
    if value is None or NUMBER_RE.fullmatch(value.strip()) is None:
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def format_number(value: float, precision: int) -> str:
    """Round and print a finite number the way it should appear in markup."""
    rounded = round(value, precision)
    if rounded == int(rounded):
        return str(int(rounded))
    return repr(rounded)


def _round_text(text: str, precision: int) -> str:
    # Out-of-range numbers ("1e400") are left as written
    value = float(text)
    if not math.isfinite(value):
        return text
    return format_number(value, precision)


def strip_leading_zero(text: str) -> str:
    if text.startswith("0."):
        return text[1:]
    if text.startswith("-0."):
        return "-" + text[2:]
    return text


# =============================================================================
# Cleanup
# =============================================================================

@register("remove_editors_ns_data")
def remove_editors_ns_data(root: etree._Element, config: "NormalizerConfig") -> None:
    """Drop elements and attributes that belong to editor namespaces."""
    for el in _elements(root):
        if etree.QName(el).namespace in EDITOR_NAMESPACES:
            if not _holds_reserved(el):
                _remove(el)
            continue
        for key in list(el.attrib):
            if key.startswith("{") and etree.QName(key).namespace in EDITOR_NAMESPACES:
                del el.attrib[key]


@register("remove_metadata")
def remove_metadata(root: etree._Element, config: "NormalizerConfig") -> None:
    for el in _elements(root):
        if _local(el) == "metadata" and not _holds_reserved(el):
            _remove(el)


@register("remove_comments")
def remove_comments(root: etree._Element, config: "NormalizerConfig") -> None:
    for comment in list(root.iter(etree.Comment)):
        _remove(comment)


@register("remove_xml_proc_inst")
def remove_xml_proc_inst(root: etree._Element, config: "NormalizerConfig") -> None:
    for pi in list(root.iter(etree.ProcessingInstruction)):
        _remove(pi)


@register("strip_whitespace")
def strip_whitespace(root: etree._Element, config: "NormalizerConfig") -> None:
    """Drop whitespace-only text and tails."""
    for el in _elements(root):
        if el.text is not None and not el.text.strip():
            el.text = None
        if el.tail is not None and not el.tail.strip():
            el.tail = None


@register("remove_desc")
def remove_desc(root: etree._Element, config: "NormalizerConfig") -> None:
    """Drop <desc> elements that are empty or editor boilerplate."""
    for el in _elements(root):
        if _local(el) != "desc" or len(el):
            continue
        text = "".join(el.itertext()).strip()
        if not text or text.startswith(("Created with", "Created using")):
            _remove(el)


@register("cleanup_attrs")
def cleanup_attrs(root: etree._Element, config: "NormalizerConfig") -> None:
    """Collapse whitespace runs (newlines included) and trim attribute values."""
    for el in _elements(root):
        for key, value in list(el.attrib.items()):
            cleaned = " ".join(value.split())
            if cleaned != value:
                el.set(key, cleaned)


@register("convert_style_to_attrs")
def convert_style_to_attrs(root: etree._Element, config: "NormalizerConfig") -> None:
    """Move presentation properties from style="" into attributes."""
    for el in _elements(root):
        style = el.get("style")
        if style is None:
            continue
        kept = []
        for declaration in style.split(";"):
            name, sep, value = declaration.partition(":")
            name, value = name.strip().lower(), value.strip()
            if not sep or not name or not value:
                continue
            if name in PRESENTATION_ATTRS and "!important" not in value:
                el.set(name, value)
            else:
                kept.append(f"{name}:{value}")
        if kept:
            el.set("style", ";".join(kept))
        else:
            del el.attrib["style"]


@register("remove_xlink")
def remove_xlink(root: etree._Element, config: "NormalizerConfig") -> None:
    """Replace xlink:href by href; drop the other xlink attributes."""
    prefix = f"{{{XLINK_NS}}}"
    for el in _elements(root):
        for key in [k for k in el.attrib if k.startswith(prefix)]:
            value = el.get(key)
            del el.attrib[key]
            if etree.QName(key).localname == "href" and el.get("href") is None:
                el.set("href", value)


@register("remove_xmlns")
def remove_xmlns(root: etree._Element, config: "NormalizerConfig") -> None:
    """Take SVG elements out of the SVG namespace; inline markup needs no xmlns."""
    for el in _elements(root):
        if etree.QName(el).namespace == SVG_NS:
            el.tag = etree.QName(el).localname
    etree.cleanup_namespaces(root)


@register("remove_unused_ns")
def remove_unused_ns(root: etree._Element, config: "NormalizerConfig") -> None:
    etree.cleanup_namespaces(root)


# =============================================================================
# Values
# =============================================================================

@register("cleanup_numeric_values")
def cleanup_numeric_values(root: etree._Element, config: "NormalizerConfig") -> None:
    """Round numbers, drop px units and leading zeros."""
    precision = config.float_precision
    for el in _elements(root):
        for key, value in list(el.attrib.items()):
            name = _qualified_name(el, key)
            if name == "version":
                continue
            if name == "viewBox":
                parts = re.split(r"[\s,]+", value.strip())
                cleaned = " ".join(
                    _round_text(part, precision) if NUMBER_RE.fullmatch(part) else part
                    for part in parts
                )
            else:
                match = NUMERIC_VALUE_RE.fullmatch(value)
                if match is None:
                    continue
                units = match.group(2) or ""
                if units == "px":
                    units = ""
                number = _round_text(match.group(1), precision)
                cleaned = strip_leading_zero(number) + units
            if cleaned != value:
                el.set(key, cleaned)


def convert_color(value: str) -> str:
    """rgb() -> hex, lower-case hex, #aabbcc -> #abc, hex -> shorter name."""
    match = RGB_COLOR_RE.fullmatch(value)
    if match:
        channels = []
        for group in match.groups():
            channel = float(group[:-1]) * 2.55 if group.endswith("%") else float(group)
            channels.append(round(max(0.0, min(255.0, channel))))
        value = "#" + "".join(f"{c:02x}" for c in channels)

    if HEX_COLOR_RE.fullmatch(value):
        value = value.lower()
        if len(value) == 7 and value[1] == value[2] and value[3] == value[4] and value[5] == value[6]:
            value = "#" + value[1] + value[3] + value[5]
        value = COLOR_SHORT_NAMES.get(value, value)

    return value


@register("convert_colors")
def convert_colors(root: etree._Element, config: "NormalizerConfig") -> None:
    for el in _elements(root):
        for name in COLOR_ATTRS:
            value = el.get(name)
            if value is None:
                continue
            converted = convert_color(value)
            if converted != value:
                el.set(name, converted)


@register("remove_default_attrs")
def remove_default_attrs(root: etree._Element, config: "NormalizerConfig") -> None:
    """Drop presentation attributes equal to their default when nothing above overrides them."""
    for el in _elements(root):
        for name, default in PRESENTATION_DEFAULTS.items():
            if el.get(name) != default:
                continue
            if _inherited(el, name) in (None, default):
                del el.attrib[name]


@register("remove_empty_attrs")
def remove_empty_attrs(root: etree._Element, config: "NormalizerConfig") -> None:
    for el in _elements(root):
        for key, value in list(el.attrib.items()):
            if value == "" and _qualified_name(el, key) not in CONDITIONAL_ATTRS:
                del el.attrib[key]


# =============================================================================
# Elements
# =============================================================================

def _is_hidden(el: etree._Element) -> bool:
    tag = _local(el)
    if el.get("display") == "none":
        return True
    if _is_zero(el.get("opacity")) and not _has_ancestor(el, "clipPath"):
        return True
    if tag == "circle":
        return _is_zero(el.get("r"))
    if tag == "ellipse":
        return _is_zero(el.get("rx")) or _is_zero(el.get("ry"))
    if tag == "rect":
        return len(el) == 0 and (_is_zero(el.get("width")) or _is_zero(el.get("height")))
    if tag == "path":
        return not (el.get("d") or "").strip()
    if tag in ("polyline", "polygon"):
        return not (el.get("points") or "").strip()
    return False


@register("remove_hidden_elems")
def remove_hidden_elems(root: etree._Element, config: "NormalizerConfig") -> None:
    for el in _elements(root):
        if el is root or _holds_reserved(el):
            continue
        if _is_hidden(el):
            _remove(el)


@register("remove_empty_text")
def remove_empty_text(root: etree._Element, config: "NormalizerConfig") -> None:
    for el in _elements(root):
        tag = _local(el)
        if tag in ("text", "tspan") and len(el) == 0 and not (el.text or "").strip():
            _remove(el)
        elif tag == "tref" and el.get("href") is None and el.get(f"{{{XLINK_NS}}}href") is None:
            _remove(el)


@register("remove_useless_defs")
def remove_useless_defs(root: etree._Element, config: "NormalizerConfig") -> None:
    """Drop <defs> children that nothing can reference (no id anywhere inside)."""
    for defs in _elements(root):
        if _local(defs) != "defs":
            continue
        for child in list(defs.iterchildren(etree.Element)):
            if _holds_reserved(child):
                continue
            if child.get("id") is None and not any(
                d.get("id") is not None for d in child.iterdescendants(etree.Element)
            ):
                _remove(child)


@register("convert_ellipse_to_circle")
def convert_ellipse_to_circle(root: etree._Element, config: "NormalizerConfig") -> None:
    for el in _elements(root):
        if _local(el) != "ellipse":
            continue
        rx, ry = el.get("rx", "0"), el.get("ry", "0")
        if rx != ry and "auto" not in (rx, ry):
            continue
        radius = ry if rx == "auto" else rx
        _retag(el, "circle")
        el.attrib.pop("rx", None)
        el.attrib.pop("ry", None)
        el.set("r", radius)


def _shape_path_data(el: etree._Element, precision: int) -> Optional[str]:
    """Path data equivalent to a basic shape, or None if it can't be converted."""
    def fmt(value: float) -> str:
        return strip_leading_zero(format_number(value, precision))

    tag = _local(el)
    if tag == "rect":
        if el.get("rx") is not None or el.get("ry") is not None:
            return None
        x, y = _plain_number(el.get("x")), _plain_number(el.get("y"))
        width = _plain_number(el.get("width"), default=None)
        height = _plain_number(el.get("height"), default=None)
        if None in (x, y, width, height):
            return None
        if not (math.isfinite(x + width) and math.isfinite(y + height)):
            return None
        return f"M{fmt(x)} {fmt(y)}H{fmt(x + width)}V{fmt(y + height)}H{fmt(x)}z"

    if tag == "line":
        coords = [_plain_number(el.get(name)) for name in ("x1", "y1", "x2", "y2")]
        if None in coords:
            return None
        return "M" + " ".join(fmt(c) for c in coords)

    if tag in ("polyline", "polygon"):
        coords = [float(token) for token in NUMBER_TOKEN_RE.findall(el.get("points", ""))]
        if not all(math.isfinite(c) for c in coords):
            return None
        if len(coords) < 4:
            return ""
        if len(coords) % 2:
            coords = coords[:-1]
        data = "M" + " ".join(fmt(c) for c in coords)
        return data + "z" if tag == "polygon" else data

    return None


@register("convert_shape_to_path")
def convert_shape_to_path(root: etree._Element, config: "NormalizerConfig") -> None:
    """Rewrite rect, line, polyline and polygon as path."""
    geometry = {
        "rect": ("x", "y", "width", "height"),
        "line": ("x1", "y1", "x2", "y2"),
        "polyline": ("points",),
        "polygon": ("points",),
    }
    for el in _elements(root):
        tag = _local(el)
        if tag not in geometry:
            continue
        data = _shape_path_data(el, config.float_precision)
        if data is None:
            continue
        if data == "":
            # Fewer than two points draws nothing
            _remove(el)
            continue
        for name in geometry[tag]:
            el.attrib.pop(name, None)
        _retag(el, "path")
        el.set("d", data)


@register("collapse_groups")
def collapse_groups(root: etree._Element, config: "NormalizerConfig") -> None:
    """Unwrap attribute-less groups; push inheritable attributes onto a lone child."""
    groups = [el for el in _elements(root) if _local(el) == "g" and el is not root]
    for group in reversed(groups):
        if (group.text or "").strip():
            continue
        if not group.attrib:
            _unwrap(group)
            continue

        if len(group) != 1 or not isinstance(group[0].tag, str):
            continue
        child = group[0]
        names = set(group.attrib.keys())
        if not names <= INHERITABLE_ATTRS | {"transform"}:
            continue
        if "transform" in names and any(
            child.get(name) is not None for name in ("id", "clip-path", "mask")
        ):
            continue

        for name, value in group.attrib.items():
            if name == "transform":
                existing = child.get("transform")
                child.set("transform", f"{value} {existing}" if existing else value)
            elif child.get(name) is None:
                child.set(name, value)
        group.attrib.clear()
        _unwrap(group)


@register("remove_empty_containers")
def remove_empty_containers(root: etree._Element, config: "NormalizerConfig") -> None:
    for el in reversed(_elements(root)):
        tag = _local(el)
        if el is root or tag not in CONTAINER_TAGS or len(el):
            continue
        if (el.text or "").strip():
            continue
        if tag == "g" and el.get("filter") is not None:
            continue
        if tag == "pattern" and el.attrib:
            continue
        if tag == "mask" and el.get("id") is not None:
            continue
        _remove(el)


# =============================================================================
# Ordering
# =============================================================================

def _compare_attr_names(a_name: str, b_name: str) -> int:
    # Prefixed (namespaced) attributes first
    priority = (":" in b_name) - (":" in a_name)
    if priority:
        return priority

    # "fill" for both "fill" and "fill-opacity"
    a_part = a_name.split("-")[0]
    b_part = b_name.split("-")[0]
    if a_part != b_part:
        a_known, b_known = a_part in ATTR_ORDER, b_part in ATTR_ORDER
        if a_known and b_known:
            return ATTR_ORDER.index(a_part) - ATTR_ORDER.index(b_part)
        if a_known != b_known:
            return -1 if a_known else 1

    return (a_name > b_name) - (a_name < b_name)


@register("sort_attrs")
def sort_attrs(root: etree._Element, config: "NormalizerConfig") -> None:
    """Deterministic attribute order: known geometry/paint names first, then alphabetical."""
    for el in _elements(root):
        items = [(_qualified_name(el, key), key, value) for key, value in el.attrib.items()]
        ordered = sorted(items, key=cmp_to_key(lambda a, b: _compare_attr_names(a[0], b[0])))
        if ordered == items:
            continue
        el.attrib.clear()
        for _, key, value in ordered:
            el.set(key, value)
