"""
Lenient parsing of the daily input form.

Numeric fields that are not valid numbers (or are negative) are silently stored as 0.
A save is only refused when every numeric field is blank.
"""

import datetime as dt
import math
from dataclasses import dataclass
from typing import Dict, Optional

from loguru import logger

from health_tracker.service.health_analysis.common.constants import Messages
from health_tracker.service.health_analysis.common.data_models import HealthEntry, MoodLevel


class EmptyEntryError(ValueError):
    """Raised when the input form has no metric filled in."""

    def __init__(self, message: str = Messages.EMPTY_ENTRY):
        super().__init__(message)


@dataclass
class EntryForm:
    steps: str = ""
    water_intake: str = ""
    sleep_hours: str = ""
    heart_rate: str = ""
    calories_burned: str = ""
    weight: str = ""
    mood: MoodLevel = MoodLevel.NEUTRAL

    def numeric_fields(self) -> Dict[str, str]:
        return {
            "steps": self.steps,
            "water_intake": self.water_intake,
            "sleep_hours": self.sleep_hours,
            "heart_rate": self.heart_rate,
            "calories_burned": self.calories_burned,
            "weight": self.weight,
        }

    def is_empty(self) -> bool:
        return all(not value.strip() for value in self.numeric_fields().values())


def coerce_int(text: str) -> int:
    """Parse a whole number, falling back to 0 for anything else."""
    try:
        value = int(text.strip())
    except ValueError:
        return 0
    return max(value, 0)


def coerce_float(text: str) -> float:
    """Parse a real number, falling back to 0.0 for anything else (including nan and inf)."""
    try:
        value = float(text.strip())
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return max(value, 0.0)


def parse_entry_form(form: EntryForm, now: Optional[dt.datetime] = None) -> HealthEntry:
    """
    Build a health entry from raw form text.

    Args:
        form: Raw form values.
        now: Timestamp for the entry, defaults to the current local time.

    Returns:
        A new HealthEntry.

    Raises:
        EmptyEntryError: If every numeric field is blank.
    """
    if form.is_empty():
        logger.info("Refusing to save an empty health entry")
        raise EmptyEntryError()

    entry = HealthEntry(
        date=now or dt.datetime.now(),
        steps=coerce_int(form.steps),
        water_intake=coerce_float(form.water_intake),
        sleep_hours=coerce_float(form.sleep_hours),
        heart_rate=coerce_int(form.heart_rate),
        calories_burned=coerce_int(form.calories_burned),
        weight=coerce_float(form.weight),
        mood=form.mood,
    )
    logger.debug(f"Parsed entry form into {entry}")
    return entry


def entry_to_form(entry: HealthEntry) -> EntryForm:
    """Prefill the input form from an existing entry. Zero values become blank fields."""
    return EntryForm(
        steps=str(entry.steps) if entry.steps > 0 else "",
        water_intake=f"{entry.water_intake:.1f}" if entry.water_intake > 0 else "",
        sleep_hours=f"{entry.sleep_hours:.1f}" if entry.sleep_hours > 0 else "",
        heart_rate=str(entry.heart_rate) if entry.heart_rate > 0 else "",
        calories_burned=str(entry.calories_burned) if entry.calories_burned > 0 else "",
        weight=f"{entry.weight:.1f}" if entry.weight > 0 else "",
        mood=entry.mood,
    )
