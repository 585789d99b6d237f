"""Validator configuration and its loader."""

import csv
import json
from dataclasses import dataclass, field
from pathlib import Path

from .constants import CLOSING_TIME, DEFAULT_TIME_SLOTS, MAX_WEEK, MIN_WEEK, OPENING_TIME
from .exceptions import ConfigError, InvalidTimeFormatError
from .time_utils import parse_time_slot, to_minutes


@dataclass
class ValidatorConfig:
    """Institution-wide settings for lesson validation and generation.

    Attributes:
        opening_time: Earliest allowed lesson start
        closing_time: Latest allowed lesson end
        min_week: First week accepted by week-range generation
        max_week: Last week accepted by week-range generation
        time_slots: Standard "HH:mm-HH:mm" pairs offered for bulk generation
    """

    opening_time: str = OPENING_TIME
    closing_time: str = CLOSING_TIME
    min_week: int = MIN_WEEK
    max_week: int = MAX_WEEK
    time_slots: list[str] = field(default_factory=lambda: list(DEFAULT_TIME_SLOTS))

    def __post_init__(self) -> None:
        try:
            opening = to_minutes(self.opening_time)
            closing = to_minutes(self.closing_time)
        except InvalidTimeFormatError as e:
            raise ConfigError(str(e)) from None

        if opening >= closing:
            raise ConfigError(
                f"opening time {self.opening_time} must be before closing time {self.closing_time}"
            )
        for name in ("min_week", "max_week"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if not 1 <= self.min_week <= self.max_week:
            raise ConfigError(f"invalid week bounds {self.min_week}-{self.max_week}")

    @property
    def opening_minutes(self) -> int:
        return to_minutes(self.opening_time)

    @property
    def closing_minutes(self) -> int:
        return to_minutes(self.closing_time)


class ConfigLoader:
    """Loads ValidatorConfig from a configuration directory.

    Recognised files (all optional):
    - operating-hours.json: {"opening", "closing", "min_week", "max_week"}
    - time-slots.csv: columns "start" and "end"
    """

    def __init__(self, config_dir: Path | None = None):
        if config_dir is None:
            config_dir = Path("reference")

        self.config_dir = Path(config_dir)

    def load(self) -> ValidatorConfig:
        """Build the configuration, keeping defaults for missing files."""
        kwargs: dict = {}

        hours_path = self._get_path("operating-hours.json")
        if hours_path:
            kwargs.update(self._load_operating_hours(hours_path))

        slots_path = self._get_path("time-slots.csv")
        if slots_path:
            kwargs["time_slots"] = self._load_time_slots(slots_path)

        try:
            return ValidatorConfig(**kwargs)
        except ConfigError as e:
            raise ConfigError(e.reason, str(self.config_dir)) from None

    def _get_path(self, filename: str) -> Path | None:
        """Get path to config file if it exists."""
        path = self.config_dir / filename
        return path if path.exists() else None

    def _load_operating_hours(self, path: Path) -> dict:
        """Load operating window and week bounds from JSON."""
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"malformed JSON: {e}", str(path)) from None

        mapping = {
            "opening": "opening_time",
            "closing": "closing_time",
            "min_week": "min_week",
            "max_week": "max_week",
        }
        return {target: data[key] for key, target in mapping.items() if key in data}

    def _load_time_slots(self, path: Path) -> list[str]:
        """Load standard time slots from CSV."""
        slots = []
        with open(path, encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for row in reader:
                slot = f"{row['start'].strip()}-{row['end'].strip()}"
                try:
                    parse_time_slot(slot)
                except InvalidTimeFormatError as e:
                    raise ConfigError(str(e), str(path)) from None
                slots.append(slot)
        return slots
