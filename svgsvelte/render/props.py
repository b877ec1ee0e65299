"""
Props — Root attributes to component props.

Naming policy:
- `class` binds to `className`
- names that are already identifiers (`width`, `viewBox`) are kept
- anything else is camel-cased on its separators
  (`stroke-width` -> `strokeWidth`, `xml:space` -> `xmlSpace`)
- a name already declared (or `rest`) gets a numeric suffix: `strokeWidth2`

Exposure policy:
- `<title>` / `<desc>` text becomes `aria-label` / `aria-description`
- blank values are dropped
- `class` is dropped unless requested, and always declared last
- `viewBox` and `preserveAspectRatio` are kept but never exposed
"""

import re
from typing import Optional

from svgsvelte.ir.enums import (
    CLASS_ATTRIBUTE,
    CLASS_BINDING,
    DESCRIPTION_TAG,
    TITLE_TAG,
    AriaAttribute,
    NonEditableAttribute,
)
from svgsvelte.ir.schema import PropSpec, SvgNode

_IDENTIFIER = re.compile(r"[a-z][a-zA-Z0-9]*")
_SEPARATORS = re.compile(r"[^A-Za-z0-9_$]+")

# Binding of the rest-capture in the props declaration
REST_BINDING = "rest"

# Root children that become ARIA attributes instead of markup
ARIA_SOURCES = {
    TITLE_TAG: AriaAttribute.LABEL,
    DESCRIPTION_TAG: AriaAttribute.DESCRIPTION,
}


def binding_name(key: str) -> str:
    """Identifier used for an attribute in the generated script."""
    if key == CLASS_ATTRIBUTE:
        return CLASS_BINDING
    if _IDENTIFIER.fullmatch(key):
        return key

    words = [w for w in _SEPARATORS.split(key) if w]
    if not words:
        return key
    return words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])


def _text_payload(tree: SvgNode, tag: str) -> Optional[str]:
    node = tree.first_child(tag)
    if node is None or node.text is None:
        return None
    return node.text.strip() or None


def root_attributes(tree: SvgNode, include_class: bool = False) -> dict[str, str]:
    """
    Root attributes after the ARIA mapping and the exposure filters.

    Returns a new dict; the tree is not touched.
    """
    attributes = dict(tree.attributes)

    for tag, aria in ARIA_SOURCES.items():
        text = _text_payload(tree, tag)
        if text is not None:
            attributes[aria.value] = text

    attributes = {key: value for key, value in attributes.items() if value.strip()}
    if not include_class:
        attributes.pop(CLASS_ATTRIBUTE, None)
    return attributes


def _unique(name: str, taken: set[str]) -> str:
    if name not in taken:
        return name
    suffix = 2
    while f"{name}{suffix}" in taken:
        suffix += 1
    return f"{name}{suffix}"


def derive_props(tree: SvgNode, include_class: bool = False) -> list[PropSpec]:
    """
    Derive the component props from the root element.

    Args:
        tree: Validated root node
        include_class: Expose the root class attribute as `className`

    Returns:
        One PropSpec per surviving root attribute, in emission order.
        Declared binding names are unique: a later attribute whose name
        collides (`strokeWidth` after `stroke-width`) gets a numeric suffix.
    """
    attributes = root_attributes(tree, include_class)
    non_editable = NonEditableAttribute.names()

    # class is declared last
    keys = [key for key in attributes if key != CLASS_ATTRIBUTE]
    if CLASS_ATTRIBUTE in attributes:
        keys.append(CLASS_ATTRIBUTE)

    taken = {REST_BINDING}
    props = []
    for key in keys:
        exposed = key not in non_editable
        name = binding_name(key)
        if exposed:
            name = _unique(name, taken)
            taken.add(name)
        props.append(
            PropSpec(
                source_key=key,
                binding_name=name,
                default_value=attributes[key],
                exposed=exposed,
            )
        )
    return props
