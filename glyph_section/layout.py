from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import TYPE_CHECKING, Literal, Protocol, SupportsFloat, Union

from .ordered_float import OrderedFloat, ordered_floats

if TYPE_CHECKING:
    from .hashing import SectionHasher


LayoutMode = Literal["wrap", "single_line"]
LineBreaker = Literal["unicode", "any_char"]
HorizontalAlign = Literal["left", "center", "right"]
VerticalAlign = Literal["top", "center", "bottom"]

DEFAULT_SCALE_PX = 16.0
UNBOUNDED: tuple[float, float] = (math.inf, math.inf)


@dataclass(frozen=True)
class Layout:
    """Built-in layout configuration, interpreted by the layout engine only.

    Values are passed through unchecked; an unknown alignment is the layout
    engine's problem, not a hashing one.
    """

    mode: LayoutMode = "wrap"
    line_breaker: LineBreaker = "unicode"
    h_align: HorizontalAlign = "left"
    v_align: VerticalAlign = "top"

    @classmethod
    def default_wrap(cls) -> "Layout":
        return cls(mode="wrap")

    @classmethod
    def default_single_line(cls) -> "Layout":
        return cls(mode="single_line")

    def with_h_align(self, h_align: HorizontalAlign) -> "Layout":
        return replace(self, h_align=h_align)

    def with_v_align(self, v_align: VerticalAlign) -> "Layout":
        return replace(self, v_align=v_align)

    def with_line_breaker(self, line_breaker: LineBreaker) -> "Layout":
        return replace(self, line_breaker=line_breaker)

    def hash_into(self, state: SectionHasher) -> None:
        state.write_str(self.mode)
        state.write_str(self.line_breaker)
        state.write_str(self.h_align)
        state.write_str(self.v_align)


@dataclass(frozen=True, eq=False)
class PxScale:
    """Pixel scale of a run; x and y are independent."""

    x: float = DEFAULT_SCALE_PX
    y: float = DEFAULT_SCALE_PX

    @classmethod
    def uniform(cls, scale: SupportsFloat) -> "PxScale":
        return cls(float(scale), float(scale))

    @classmethod
    def coerce(cls, scale: "ScaleLike") -> "PxScale":
        if isinstance(scale, PxScale):
            return scale
        if isinstance(scale, (tuple, list)):
            x, y = scale
            return cls(float(x), float(y))
        return cls.uniform(scale)

    def ordered(self) -> tuple[OrderedFloat, OrderedFloat]:
        x, y = ordered_floats(self.x, self.y)
        return (x, y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PxScale):
            return NotImplemented
        return self.ordered() == other.ordered()

    def __hash__(self) -> int:
        return hash(self.ordered())


ScaleLike = Union[PxScale, SupportsFloat, tuple[float, float]]


@dataclass(frozen=True)
class FontId:
    """Opaque index into a font collection owned by the layout engine."""

    index: int = 0

    @classmethod
    def coerce(cls, font_id: "FontId | int") -> "FontId":
        if isinstance(font_id, FontId):
            return font_id
        return cls(int(font_id))

    def __int__(self) -> int:
        return self.index


@dataclass(frozen=True, eq=False)
class SectionGeometry:
    """Screen position and max bounds of a section, in pixels from top-left."""

    screen_position: tuple[float, float] = (0.0, 0.0)
    bounds: tuple[float, float] = UNBOUNDED

    @classmethod
    def from_section(cls, section: "_HasGeometry") -> "SectionGeometry":
        return cls(screen_position=section.screen_position, bounds=section.bounds)

    def ordered(self) -> tuple[OrderedFloat, ...]:
        x, y = self.screen_position
        w, h = self.bounds
        return ordered_floats(x, y, w, h)

    def hash_into(self, state: SectionHasher) -> None:
        for value in self.ordered():
            state.write_float(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SectionGeometry):
            return NotImplemented
        return self.ordered() == other.ordered()

    def __hash__(self) -> int:
        return hash(self.ordered())


@dataclass(frozen=True)
class SectionText:
    """Layout-relevant view of one run: content, scale and font only."""

    text: str
    scale: PxScale
    font_id: FontId


class ToSectionText(Protocol):
    def to_section_text(self) -> SectionText:
        ...


class _HasGeometry(Protocol):
    screen_position: tuple[float, float]
    bounds: tuple[float, float]
