from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, SupportsFloat, TypeVar

from .layout import FontId, PxScale, ScaleLike, SectionText
from .ordered_float import OrderedFloat, ordered_floats

if TYPE_CHECKING:
    from .hashing import SectionHasher


Color = tuple[float, float, float, float]

BLACK: Color = (0.0, 0.0, 0.0, 1.0)
TRANSPARENT: Color = (0.0, 0.0, 0.0, 0.0)

X = TypeVar("X")
X2 = TypeVar("X2")
R = TypeVar("R", bound="_TextRun[Any]")


def coerce_color(color: Iterable[SupportsFloat]) -> Color:
    """Accept any RGBA iterable (tuple, list, numpy array) as a float tuple."""

    return tuple(float(c) for c in color)  # type: ignore[return-value]


@dataclass(frozen=True, eq=False)
class Extra:
    """Default per-run paint payload: fill color, outline color and depth."""

    color: Color = BLACK
    outline_color: Color = TRANSPARENT
    z: float = 0.0

    def with_color(self, color: Iterable[SupportsFloat]) -> "Extra":
        return replace(self, color=coerce_color(color))

    def with_outline_color(self, color: Iterable[SupportsFloat]) -> "Extra":
        return replace(self, outline_color=coerce_color(color))

    def with_z(self, z: SupportsFloat) -> "Extra":
        return replace(self, z=float(z))

    def ordered(self) -> tuple[tuple[OrderedFloat, ...], tuple[OrderedFloat, ...], OrderedFloat]:
        return (ordered_floats(*self.color), ordered_floats(*self.outline_color), OrderedFloat(self.z))

    def hash_into(self, state: SectionHasher) -> None:
        color, outline_color, z = self.ordered()
        state.write_sequence(color)
        state.write_sequence(outline_color)
        state.write_float(z)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extra):
            return NotImplemented
        return self.ordered() == other.ordered()

    def __hash__(self) -> int:
        return hash(self.ordered())


class _TextRun(Generic[X]):
    """Builders and hashing shared by `Text` and `OwnedText`."""

    text: str
    scale: PxScale
    font_id: FontId
    extra: X

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", PxScale.coerce(self.scale))
        object.__setattr__(self, "font_id", FontId.coerce(self.font_id))

    def with_text(self: R, text: str) -> R:
        return replace(self, text=text)

    def with_scale(self: R, scale: ScaleLike) -> R:
        return replace(self, scale=PxScale.coerce(scale))

    def with_font_id(self: R, font_id: FontId | int) -> R:
        return replace(self, font_id=FontId.coerce(font_id))

    def with_extra(self, extra: X2) -> Any:
        """Swap the payload, possibly for one of another type."""

        return replace(self, extra=extra)  # type: ignore[type-var]

    def with_color(self: R, color: Iterable[SupportsFloat]) -> R:
        return replace(self, extra=self.extra.with_color(color))

    def with_outline_color(self: R, color: Iterable[SupportsFloat]) -> R:
        return replace(self, extra=self.extra.with_outline_color(color))

    def with_z(self: R, z: SupportsFloat) -> R:
        return replace(self, extra=self.extra.with_z(z))

    def to_section_text(self) -> SectionText:
        return SectionText(text=self.text, scale=self.scale, font_id=self.font_id)

    def hash_no_extra_into(self, state: SectionHasher) -> None:
        sx, sy = self.scale.ordered()
        state.write_str(self.text)
        state.write_int(self.font_id.index)
        state.write_float(sx)
        state.write_float(sy)

    def hash_into(self, state: SectionHasher) -> None:
        self.hash_no_extra_into(state)
        state.write(self.extra)

    def _key(self) -> tuple[object, ...]:
        return (self.text, self.font_id, self.scale, self.extra)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self._key())


@dataclass(frozen=True, eq=False)
class Text(_TextRun[X]):
    """One styled run of a section.

    `text` is held by reference; `OwnedText` is the detached counterpart. The
    default payload is `Extra`; any payload supporting `==`, `hash()` and
    `copy.deepcopy` can take its place via `with_extra` or `Text.default`.
    """

    text: str = ""
    scale: PxScale = field(default_factory=PxScale)
    font_id: FontId = field(default_factory=FontId)
    extra: X = field(default_factory=Extra)  # type: ignore[assignment]

    @classmethod
    def default(cls, extra_factory: Callable[[], X2]) -> "Text[X2]":
        return cls(extra=extra_factory())  # type: ignore[arg-type,return-value]

    @classmethod
    def new(cls, text: str) -> "Text[Extra]":
        return cls(text=text, extra=Extra())  # type: ignore[return-value]

    def to_owned(self) -> "OwnedText[X]":
        return OwnedText.from_text(self)


@dataclass(frozen=True, eq=False)
class OwnedText(_TextRun[X]):
    """A run that owns its content and a private copy of its payload."""

    text: str = ""
    scale: PxScale = field(default_factory=PxScale)
    font_id: FontId = field(default_factory=FontId)
    extra: X = field(default_factory=Extra)  # type: ignore[assignment]

    @classmethod
    def new(cls, text: str) -> "OwnedText[Extra]":
        return cls(text=str(text), extra=Extra())  # type: ignore[return-value]

    @classmethod
    def from_text(cls, text: Text[X]) -> "OwnedText[X]":
        return cls(
            text=str(text.text),
            scale=text.scale,
            font_id=text.font_id,
            extra=copy.deepcopy(text.extra),
        )

    def to_borrowed(self) -> Text[X]:
        return Text(text=self.text, scale=self.scale, font_id=self.font_id, extra=self.extra)
