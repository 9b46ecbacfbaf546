from __future__ import annotations

import unittest

from glyph_section.change import SectionChange, SectionHashDetail
from glyph_section.config import HashConfig
from glyph_section.layout import Layout
from glyph_section.section import Section
from glyph_section.text import Text


def _frame() -> Section:
    return (
        Section()
        .with_screen_position((10.0, 10.0))
        .add_text(Text.new("score: ").with_color((1.0, 1.0, 1.0, 1.0)))
        .add_text(Text.new("42").with_color((1.0, 0.8, 0.0, 1.0)))
    )


class SectionHashDetailTests(unittest.TestCase):
    def test_detail_matches_the_section_hashes(self) -> None:
        section = _frame()
        detail = SectionHashDetail.from_section(section)
        parts = section.to_hashable_parts()
        self.assertEqual(detail.geometry, parts.geometry_hash())
        self.assertEqual(detail.text, parts.text_hash())
        self.assertEqual(detail.extra, parts.extra_hash())
        self.assertEqual(detail.full, section.full_hash())

    def test_detail_respects_config(self) -> None:
        config = HashConfig(algorithm="sha256")
        section = _frame()
        detail = SectionHashDetail.from_section(section, config)
        self.assertEqual(detail.full, section.full_hash(config))
        self.assertNotEqual(detail, SectionHashDetail.from_section(section))

    def test_owned_section_detail_matches_borrowed(self) -> None:
        section = _frame()
        self.assertEqual(SectionHashDetail.from_section(section.to_owned()), SectionHashDetail.from_section(section))


class SectionChangeTests(unittest.TestCase):
    def _diff(self, current: Section, previous: Section | None) -> SectionChange:
        before = SectionHashDetail.from_section(previous) if previous is not None else None
        return SectionHashDetail.from_section(current).diff(before)

    def test_first_frame_needs_layout(self) -> None:
        self.assertEqual(self._diff(_frame(), None), SectionChange.RELAYOUT)

    def test_identical_frame_is_reused(self) -> None:
        self.assertEqual(self._diff(_frame(), _frame()), SectionChange.UNCHANGED)

    def test_color_change_only_retints(self) -> None:
        previous = _frame()
        current = previous.with_text([previous.text[0], previous.text[1].with_color((1.0, 0.0, 0.0, 1.0))])
        self.assertEqual(self._diff(current, previous), SectionChange.RETINT)

    def test_z_and_outline_changes_only_retint(self) -> None:
        previous = _frame()
        current = previous.with_text([previous.text[0].with_z(0.5).with_outline_color((0, 0, 0, 1)), previous.text[1]])
        self.assertEqual(self._diff(current, previous), SectionChange.RETINT)

    def test_geometry_text_and_layout_changes_relayout(self) -> None:
        previous = _frame()
        variants = [
            previous.with_screen_position((11.0, 10.0)),
            previous.with_bounds((80.0, 20.0)),
            previous.with_layout(Layout().with_h_align("right")),
            previous.with_text([previous.text[0], previous.text[1].with_text("43")]),
            previous.with_text([previous.text[0], previous.text[1].with_scale(18.0)]),
            previous.add_text("!"),
        ]
        for current in variants:
            self.assertEqual(self._diff(current, previous), SectionChange.RELAYOUT)

    def test_relayout_wins_over_retint(self) -> None:
        previous = _frame()
        current = previous.with_screen_position((0.0, 0.0)).with_text(
            [previous.text[0].with_color((0.0, 0.0, 0.0, 1.0)), previous.text[1]]
        )
        self.assertEqual(self._diff(current, previous), SectionChange.RELAYOUT)

    def test_diff_logs_decision(self) -> None:
        detail = SectionHashDetail.from_section(_frame())
        with self.assertLogs("glyph_section.change", level="DEBUG") as logs:
            detail.diff(detail)
        self.assertIn("unchanged", logs.output[0])

    def test_change_values_are_strings(self) -> None:
        self.assertEqual(SectionChange.RETINT, "retint")
        self.assertEqual(SectionChange("relayout"), SectionChange.RELAYOUT)


if __name__ == "__main__":
    unittest.main()
