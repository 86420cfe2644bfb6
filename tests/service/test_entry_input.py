"""
Unit tests for lenient input-form parsing.

Bad numeric input is silently stored as zero; only a completely blank form is refused.
"""

import pytest

from health_tracker.service.entry_input import (
    EmptyEntryError,
    EntryForm,
    coerce_float,
    coerce_int,
    entry_to_form,
    parse_entry_form,
)
from health_tracker.service.health_analysis.common.data_models import HealthEntry, MoodLevel
from tests import FIXED_NOW


class TestEntryInput:
    def test_blank_form_is_refused(self):
        with pytest.raises(EmptyEntryError, match="Please enter at least one health metric."):
            parse_entry_form(EntryForm(), now=FIXED_NOW)

    def test_whitespace_only_form_is_refused(self):
        with pytest.raises(EmptyEntryError):
            parse_entry_form(EntryForm(steps="  ", weight="\t"), now=FIXED_NOW)

    def test_non_numeric_text_becomes_zero(self):
        """Test that a form with only garbage still saves, as an all-zero entry."""
        form = EntryForm(steps="lots", water_intake="two", sleep_hours="8h", heart_rate="fast", weight="?")

        entry = parse_entry_form(form, now=FIXED_NOW)

        assert entry.steps == 0
        assert entry.water_intake == 0.0
        assert entry.sleep_hours == 0.0
        assert entry.heart_rate == 0
        assert entry.weight == 0.0
        assert entry.date == FIXED_NOW

    def test_valid_values_are_parsed(self):
        form = EntryForm(
            steps="12000",
            water_intake="1.5",
            sleep_hours="7.25",
            heart_rate="62",
            calories_burned="2100",
            weight="70.3",
            mood=MoodLevel.HAPPY,
        )

        entry = parse_entry_form(form, now=FIXED_NOW)

        assert entry.steps == 12000
        assert entry.water_intake == 1.5
        assert entry.sleep_hours == 7.25
        assert entry.heart_rate == 62
        assert entry.calories_burned == 2100
        assert entry.weight == 70.3
        assert entry.mood == MoodLevel.HAPPY

    def test_partial_form(self):
        entry = parse_entry_form(EntryForm(water_intake="2"), now=FIXED_NOW)

        assert entry.water_intake == 2.0
        assert entry.steps == 0
        assert entry.mood == MoodLevel.NEUTRAL

    @pytest.mark.parametrize("text,expected", [("42", 42), ("4.2", 0), ("", 0), ("-3", 0), ("abc", 0)])
    def test_coerce_int(self, text, expected):
        assert coerce_int(text) == expected

    @pytest.mark.parametrize("text,expected", [("2.5", 2.5), ("3", 3.0), ("nan", 0.0), ("inf", 0.0), ("-1.5", 0.0)])
    def test_coerce_float(self, text, expected):
        assert coerce_float(text) == expected

    def test_entry_to_form(self):
        entry = HealthEntry(date=FIXED_NOW, steps=5000, water_intake=1.5, heart_rate=0, mood=MoodLevel.SAD)

        form = entry_to_form(entry)

        assert form.steps == "5000"
        assert form.water_intake == "1.5"
        assert form.sleep_hours == ""
        assert form.heart_rate == ""
        assert form.weight == ""
        assert form.mood == MoodLevel.SAD
