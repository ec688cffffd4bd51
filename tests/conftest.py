"""Pytest configuration and fixtures."""
import logging
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from dutyplan.models.config import GeneratorConfig
from dutyplan.models.person import Absence, Person
from dutyplan.models.shift import ALL_DAYS, WEEKEND, ShiftType, Weekday

# June 2024 starts on a Saturday: 30 days, 20 weekdays, 10 weekend days
YEAR = 2024
MONTH = 6


@pytest.fixture
def sample_people():
    """Create a sample team covering every shift type."""
    return [
        Person(name="Anna", id=1, shift_types={ShiftType.DUTY_24H, ShiftType.ROUNDS, ShiftType.LATE}),
        Person(name="Bernd", id=2, shift_types={ShiftType.DUTY_24H, ShiftType.LATE}),
        Person(name="Carla", id=3, shift_types={ShiftType.DUTY_24H, ShiftType.LATE},
               weekdays={Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY}),
        Person(name="Dieter", id=4, shift_types={ShiftType.DUTY_24H, ShiftType.ROUNDS, ShiftType.LATE},
               absences=[Absence(date(2024, 6, 10), date(2024, 6, 14))]),
        Person(name="Eva", id=5, shift_types={ShiftType.DUTY_24H, ShiftType.ROUNDS}, weekdays=WEEKEND),
        Person(name="Frank", id=6, shift_types={ShiftType.DUTY_24H, ShiftType.ROUNDS, ShiftType.LATE}),
    ]


@pytest.fixture
def pair_of_equals():
    """Two interchangeable people qualified for 24h duty every day."""
    return [
        Person(name="Anna", id=1, shift_types={ShiftType.DUTY_24H}),
        Person(name="Bernd", id=2, shift_types={ShiftType.DUTY_24H}),
    ]


@pytest.fixture
def duty_only_config():
    """Only 24h duties, every day."""
    return GeneratorConfig(shift_weekdays={ShiftType.DUTY_24H: ALL_DAYS})


@pytest.fixture
def default_config():
    """Default generator configuration."""
    return GeneratorConfig()


@pytest.fixture
def team_example_path():
    """Path to the example team file."""
    return Path(__file__).parent.parent / "team_example.csv"


@pytest.fixture(autouse=True)
def reset_dutyplan_logger():
    """Drop handlers added by setup_logging (CLI runs, logging tests)."""
    yield
    logger = logging.getLogger("dutyplan")
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
