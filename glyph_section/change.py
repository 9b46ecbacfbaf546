from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any

from .config import HashConfig
from .hashing import SectionHasher
from .section import OwnedSection, Section


LOGGER = logging.getLogger(__name__)


class SectionChange(str, Enum):
    """What a glyph cache must redo for a section since the previous frame."""

    UNCHANGED = "unchanged"
    RETINT = "retint"
    RELAYOUT = "relayout"


@dataclass(frozen=True)
class SectionHashDetail:
    """Per-stream hashes of one section, taken from a single decomposition.

    `full` is the same value as `section.full_hash(config)`.
    """

    layout: int
    geometry: int
    text: int
    extra: int
    full: int

    @classmethod
    def from_section(cls, section: Section[Any] | OwnedSection[Any], config: HashConfig | None = None) -> "SectionHashDetail":
        parts = section.to_hashable_parts()

        layout_state = SectionHasher(config)
        layout_state.write(section.layout)

        full_state = layout_state.copy()
        parts.hash_geometry(full_state)
        parts.hash_text(full_state)

        return cls(
            layout=layout_state.finish(),
            geometry=parts.geometry_hash(config),
            text=parts.text_hash(config),
            extra=parts.extra_hash(config),
            full=full_state.finish(),
        )

    def needs_relayout(self, previous: "SectionHashDetail | None") -> bool:
        if previous is None:
            return True
        return (
            self.layout != previous.layout
            or self.geometry != previous.geometry
            or self.text != previous.text
        )

    def diff(self, previous: "SectionHashDetail | None") -> SectionChange:
        if self.needs_relayout(previous):
            change = SectionChange.RELAYOUT
        elif previous is not None and self.extra != previous.extra:
            change = SectionChange.RETINT
        else:
            change = SectionChange.UNCHANGED
        LOGGER.debug("section %016x -> %s", self.full & 0xFFFFFFFFFFFFFFFF, change.value)
        return change
