"""Tests for the dev-only ASCII occurrence listing."""

from __future__ import annotations

from conftest import make_expansion


class TestShowOccurrences:

    def test_lists_rows_without_advancing(self, weekly_expansion, capsys):
        from recur_expansion.debug import show_occurrences

        result = show_occurrences(weekly_expansion, limit=2)

        assert "Wed 2025-01-08 09:00" in result
        assert "Mon 2025-01-13 09:00" in result
        assert "2025-01-27" not in result
        assert weekly_expansion.last == weekly_expansion.start
        assert capsys.readouterr().out.strip() == result.strip()

    def test_marks_end(self):
        from recur_expansion.debug import show_occurrences

        result = show_occurrences(make_expansion("single"))
        assert "Mon 2025-01-06 09:00" in result
        assert "(end)" in result

    def test_date_only_labels(self):
        from recur_expansion.debug import show_occurrences

        result = show_occurrences(make_expansion("date_only"))
        assert "Thu 2025-01-16\n" in result
        assert "rules: 1" in result
