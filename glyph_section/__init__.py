"""Styled text sections and the decomposed hashes that key a glyph-layout cache."""

from .change import SectionChange, SectionHashDetail
from .config import DEFAULT_HASH_CONFIG, HashConfig
from .hashing import SectionHasher, SupportsHashInto, build_hasher
from .layout import (
    UNBOUNDED,
    FontId,
    HorizontalAlign,
    Layout,
    LayoutMode,
    LineBreaker,
    PxScale,
    SectionGeometry,
    SectionText,
    ToSectionText,
    VerticalAlign,
)
from .ordered_float import OrderedFloat, canonical_bits, ordered_floats
from .section import Borrowed, HashableSectionParts, Owned, OwnedSection, Section, SectionCow, as_cow
from .text import BLACK, TRANSPARENT, Color, Extra, OwnedText, Text, coerce_color

__all__ = [
    "BLACK",
    "Borrowed",
    "Color",
    "DEFAULT_HASH_CONFIG",
    "Extra",
    "FontId",
    "HashConfig",
    "HashableSectionParts",
    "HorizontalAlign",
    "Layout",
    "LayoutMode",
    "LineBreaker",
    "OrderedFloat",
    "Owned",
    "OwnedSection",
    "OwnedText",
    "PxScale",
    "Section",
    "SectionChange",
    "SectionCow",
    "SectionGeometry",
    "SectionHashDetail",
    "SectionHasher",
    "SectionText",
    "SupportsHashInto",
    "TRANSPARENT",
    "Text",
    "ToSectionText",
    "UNBOUNDED",
    "VerticalAlign",
    "as_cow",
    "build_hasher",
    "canonical_bits",
    "coerce_color",
    "ordered_floats",
]
