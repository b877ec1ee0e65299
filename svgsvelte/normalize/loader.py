"""
Preset Loader — Load the normalizer configuration from YAML presets.

A preset is an ordered list of transform names plus a few numeric
settings. Presets ship with the package; they are not user input.
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from svgsvelte.normalize.transforms import TRANSFORMS

# Default preset directory
PRESETS_DIR = Path(__file__).parent / "presets"


@dataclass(frozen=True)
class NormalizerConfig:
    """Immutable normalizer configuration."""

    name: str
    transforms: tuple[str, ...]
    float_precision: int = 3
    description: str = ""


def load_preset(name: str = "default") -> NormalizerConfig:
    """
    Load a normalizer preset by name.

    Args:
        name: Preset name (without .yaml extension)

    Returns:
        Parsed NormalizerConfig

    Raises:
        FileNotFoundError: If the preset file doesn't exist
        ValueError: If the preset names an unknown transform
    """
    path = PRESETS_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Preset not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return parse_preset(data, default_name=name)


def parse_preset(data: dict, default_name: str = "unnamed") -> NormalizerConfig:
    """Parse a preset from a dictionary."""
    preset_info = data.get("preset", {})
    settings = data.get("settings", {})
    transforms = tuple(data.get("transforms", []))

    unknown = [t for t in transforms if t not in TRANSFORMS]
    if unknown:
        raise ValueError(f"Unknown normalizer transform(s): {', '.join(unknown)}")

    precision = settings.get("float_precision", 3)
    if not isinstance(precision, int) or precision < 0:
        raise ValueError(f"float_precision must be a non-negative integer, got {precision!r}")

    return NormalizerConfig(
        name=preset_info.get("name", default_name),
        description=preset_info.get("description", ""),
        transforms=transforms,
        float_precision=precision,
    )


def list_presets() -> list[str]:
    """List available preset names."""
    return sorted(p.stem for p in PRESETS_DIR.glob("*.yaml"))


# Cache for loaded presets
_cache: dict[str, NormalizerConfig] = {}


def get_preset(name: str = "default", use_cache: bool = True) -> NormalizerConfig:
    """Get a preset, using cache by default."""
    if use_cache and name in _cache:
        return _cache[name]

    config = load_preset(name)
    _cache[name] = config
    return config


def clear_cache() -> None:
    """Clear the preset cache."""
    _cache.clear()
