from __future__ import annotations

from abc import ABC, abstractmethod
import copy
from dataclasses import dataclass, field, replace
from typing import Any, Generic, Iterable, SupportsFloat, TypeVar, Union

from .config import HashConfig
from .hashing import SectionHasher
from .layout import UNBOUNDED, Layout, SectionGeometry
from .ordered_float import OrderedFloat, ordered_floats
from .text import OwnedText, Text, _TextRun


X = TypeVar("X")
S = TypeVar("S", bound="_SectionBase[Any]")

PointLike = Union[tuple[SupportsFloat, SupportsFloat], Iterable[SupportsFloat]]
RunLike = Union[Text[Any], OwnedText[Any], str]


def _pair(value: PointLike) -> tuple[float, float]:
    x, y = value
    return (float(x), float(y))


@dataclass(frozen=True)
class HashableSectionParts(Generic[X]):
    """A section split into independently hashable streams.

    Geometry and text-without-extra decide glyph positions; extra alone decides
    glyph appearance. Each stream can be fed into a shared hasher or hashed on
    its own.
    """

    geometry: tuple[OrderedFloat, ...]
    text: tuple[_TextRun[X], ...]

    def hash_geometry(self, state: SectionHasher) -> None:
        for value in self.geometry:
            state.write_float(value)

    def hash_text_no_extra(self, state: SectionHasher) -> None:
        for run in self.text:
            run.hash_no_extra_into(state)

    def hash_extra(self, state: SectionHasher) -> None:
        for run in self.text:
            state.write(run.extra)

    def hash_text(self, state: SectionHasher) -> None:
        """Text and extra interleaved per run, as used by the full section hash."""

        for run in self.text:
            run.hash_into(state)

    def geometry_hash(self, config: HashConfig | None = None) -> int:
        state = SectionHasher(config)
        self.hash_geometry(state)
        return state.finish()

    def text_hash(self, config: HashConfig | None = None) -> int:
        state = SectionHasher(config)
        self.hash_text_no_extra(state)
        return state.finish()

    def extra_hash(self, config: HashConfig | None = None) -> int:
        state = SectionHasher(config)
        self.hash_extra(state)
        return state.finish()


class _SectionBase(ABC, Generic[X]):
    """Fluent builders and hashing shared by `Section` and `OwnedSection`."""

    screen_position: tuple[float, float]
    bounds: tuple[float, float]
    layout: Any
    text: tuple[Any, ...]

    @abstractmethod
    def _coerce_run(self, run: RunLike) -> Any:
        ...

    def __post_init__(self) -> None:
        object.__setattr__(self, "screen_position", _pair(self.screen_position))
        object.__setattr__(self, "bounds", _pair(self.bounds))
        object.__setattr__(self, "text", tuple(self.text))

    def with_screen_position(self: S, position: PointLike) -> S:
        return replace(self, screen_position=_pair(position))

    def with_bounds(self: S, bounds: PointLike) -> S:
        return replace(self, bounds=_pair(bounds))

    def with_layout(self: S, layout: Any) -> S:
        return replace(self, layout=layout)

    def add_text(self: S, run: RunLike) -> S:
        return replace(self, text=self.text + (self._coerce_run(run),))

    def with_text(self, runs: Iterable[RunLike]) -> Any:
        """Replace every run at once; the only way to change the payload type."""

        return replace(self, text=tuple(self._coerce_run(run) for run in runs))

    def clone_extras(self) -> list[X]:
        return [copy.deepcopy(run.extra) for run in self.text]

    def geometry(self) -> SectionGeometry:
        return SectionGeometry.from_section(self)

    def to_hashable_parts(self) -> HashableSectionParts[X]:
        x, y = self.screen_position
        w, h = self.bounds
        return HashableSectionParts(geometry=ordered_floats(x, y, w, h), text=self.text)

    def hash_into(self, state: SectionHasher) -> None:
        parts = self.to_hashable_parts()
        state.write(self.layout)
        parts.hash_geometry(state)
        parts.hash_text(state)

    def full_hash(self, config: HashConfig | None = None) -> int:
        state = SectionHasher(config)
        self.hash_into(state)
        return state.finish()

    def _key(self) -> tuple[object, ...]:
        x, y = self.screen_position
        w, h = self.bounds
        return (self.layout, ordered_floats(x, y, w, h), self.text)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return self.full_hash()


@dataclass(frozen=True, eq=False)
class Section(_SectionBase[X]):
    """Runs of styled text laid out together under one geometry and layout.

    Example:

        Section().add_text(Text.new("The last word was ")).add_text(
            Text.new("RED").with_color((1.0, 0.0, 0.0, 1.0))
        ).with_layout(Layout().with_h_align("center"))
    """

    screen_position: tuple[float, float] = (0.0, 0.0)
    bounds: tuple[float, float] = UNBOUNDED
    layout: Layout = field(default_factory=Layout)
    text: tuple[Text[X], ...] = ()

    @classmethod
    def new(cls) -> "Section[Any]":
        return cls()

    def _coerce_run(self, run: RunLike) -> Text[Any]:
        if isinstance(run, OwnedText):
            return run.to_borrowed()
        if isinstance(run, str):
            return Text.new(run)
        return run

    def clone(self) -> "Section[X]":
        return replace(self, text=tuple(replace(run, extra=copy.deepcopy(run.extra)) for run in self.text))

    def to_owned(self) -> "OwnedSection[X]":
        return OwnedSection(
            screen_position=self.screen_position,
            bounds=self.bounds,
            layout=self.layout,
            text=tuple(OwnedText.from_text(run) for run in self.text),
        )


@dataclass(frozen=True, eq=False)
class OwnedSection(_SectionBase[X]):
    """A section whose runs own their text and a private copy of every payload."""

    screen_position: tuple[float, float] = (0.0, 0.0)
    bounds: tuple[float, float] = UNBOUNDED
    layout: Layout = field(default_factory=Layout)
    text: tuple[OwnedText[X], ...] = ()

    def _coerce_run(self, run: RunLike) -> OwnedText[Any]:
        if isinstance(run, Text):
            return OwnedText.from_text(run)
        if isinstance(run, str):
            return OwnedText.new(run)
        return run

    def to_borrowed(self) -> Section[X]:
        return Section(
            screen_position=self.screen_position,
            bounds=self.bounds,
            layout=self.layout,
            text=tuple(run.to_borrowed() for run in self.text),
        )


@dataclass(frozen=True)
class Borrowed(Generic[X]):
    """A section the caller keeps; cloned before anyone takes ownership."""

    section: Section[X]

    @property
    def is_owned(self) -> bool:
        return False

    def into_owned(self) -> Section[X]:
        return self.section.clone()


@dataclass(frozen=True)
class Owned(Generic[X]):
    """A section handed over outright; taking ownership never copies."""

    section: Section[X]

    @property
    def is_owned(self) -> bool:
        return True

    def into_owned(self) -> Section[X]:
        return self.section


SectionCow = Union[Borrowed[X], Owned[X]]


def as_cow(value: Section[X] | OwnedSection[X] | Borrowed[X] | Owned[X], *, owned: bool = False) -> SectionCow[X]:
    """Normalize the ways a caller can pass a section.

    A bare `Section` is borrowed unless `owned=True` says the caller is giving
    it away. An `OwnedSection` is always owned.
    """

    if isinstance(value, (Borrowed, Owned)):
        return value
    if isinstance(value, OwnedSection):
        return Owned(value.to_borrowed())
    if owned:
        return Owned(value)
    return Borrowed(value)
