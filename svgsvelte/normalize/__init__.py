"""Normalize — Markup cleanup applied before parsing."""

from svgsvelte.normalize.loader import NormalizerConfig, get_preset, list_presets
from svgsvelte.normalize.normalizer import Normalizer, get_normalizer, normalize
from svgsvelte.normalize.transforms import TRANSFORMS

__all__ = [
    "TRANSFORMS",
    "Normalizer",
    "NormalizerConfig",
    "get_normalizer",
    "get_preset",
    "list_presets",
    "normalize",
]
