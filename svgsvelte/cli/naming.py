"""
Naming — Component file names from SVG file names.
"""

import re
from pathlib import Path
from typing import Union

_SEPARATORS = re.compile(r"[-_]")
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def to_pascal_case(name: str) -> str:
    """
    Convert a file stem to PascalCase.

    "icon-name", "icon_name" and "iconName" all become "IconName".
    """
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", _SEPARATORS.sub(" ", name))
    return "".join(word[:1].upper() + word[1:].lower() for word in spaced.split())


def component_file_name(path: Union[str, Path], suffix: str = ".svelte") -> str:
    """`icons/arrow-left.svg` -> `ArrowLeft.svelte`."""
    name = Path(path).name
    if name.endswith(".svg"):
        name = name[: -len(".svg")]
    return f"{to_pascal_case(name)}{suffix}"
