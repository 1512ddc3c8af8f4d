"""
FlappyGate - Difficulty table and level progression.

Levels go up by one every SCORE_PER_LEVEL points until the last level of
the table. Each level has an immutable DifficultyProfile.

A replacement table can be loaded from YAML:

    levels:
      - level: 1
        label: Easy
        gap: 250
        speed: 1.5
        spawn_interval: 2.0
        gravity: 0.35
      - level: 2
        ...
"""
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union

import yaml

from models import DifficultyProfile
from games.FlappyGate import config


class DifficultyTableError(Exception):
    """Raised when a difficulty table is malformed."""
    pass


DifficultyTable = Mapping[int, DifficultyProfile]


def _profile(level: int, label: str, gap: float, speed: float,
             spawn_interval: float, gravity: float) -> DifficultyProfile:
    return DifficultyProfile(level=level, label=label, gap=gap, speed=speed,
                             spawn_interval=spawn_interval, gravity=gravity)


DIFFICULTY_LEVELS: DifficultyTable = MappingProxyType({
    1: _profile(1, 'Iniciante', 250, 1.5, 2.0, 0.35),
    2: _profile(2, 'Fácil', 230, 2.0, 1.8, 0.40),
    3: _profile(3, 'Normal', 210, 2.5, 1.6, 0.45),
    4: _profile(4, 'Intermediário', 190, 3.0, 1.4, 0.50),
    5: _profile(5, 'Difícil', 170, 3.5, 1.2, 0.55),
    6: _profile(6, 'Expert', 150, 4.0, 1.0, 0.60),
    7: _profile(7, 'Mestre', 140, 4.5, 0.9, 0.65),
    8: _profile(8, 'Lenda', 130, 5.0, 0.8, 0.70),
    9: _profile(9, 'Impossível', 120, 5.5, 0.7, 0.75),
    10: _profile(10, 'INSANO!', 110, 6.0, 0.6, 0.80),
})

MAX_LEVEL = max(DIFFICULTY_LEVELS)


def max_level(table: DifficultyTable = DIFFICULTY_LEVELS) -> int:
    """Highest level in a table."""
    return max(table)


def level_for_score(
    score: int,
    table: DifficultyTable = DIFFICULTY_LEVELS,
    score_per_level: int = config.SCORE_PER_LEVEL,
) -> int:
    """Level reached with a given score.

    Examples:
        >>> level_for_score(4)
        1
        >>> level_for_score(5)
        2
        >>> level_for_score(500)
        10
    """
    return min(max_level(table), score // score_per_level + 1)


def get_profile(level: int, table: DifficultyTable = DIFFICULTY_LEVELS) -> DifficultyProfile:
    """Get the profile for a level.

    Raises:
        ValueError: If the table has no such level
    """
    if level not in table:
        raise ValueError(f"No difficulty profile for level {level} (1-{max_level(table)})")
    return table[level]


def validate_table(
    table: Mapping[int, DifficultyProfile],
    play_height: float = config.PLAY_HEIGHT,
    gate_margin: float = config.GATE_MARGIN,
) -> DifficultyTable:
    """Check a table is usable and return a read-only copy.

    Levels must run 1..N without gaps, each profile must be stored under its
    own level, and every gap must fit between the gate margins.

    Raises:
        DifficultyTableError: If the table is malformed
    """
    if not table:
        raise DifficultyTableError("Difficulty table is empty")

    expected = list(range(1, len(table) + 1))
    if sorted(table) != expected:
        raise DifficultyTableError(
            f"Levels must be contiguous from 1, got {sorted(table)}")

    for level, profile in table.items():
        if profile.level != level:
            raise DifficultyTableError(
                f"Profile {profile.label!r} declares level {profile.level} but is stored as {level}")
        if profile.gap > play_height - 2 * gate_margin:
            raise DifficultyTableError(
                f"Level {level} gap {profile.gap} does not fit a {play_height}px play area "
                f"with {gate_margin}px margins")

    return MappingProxyType(dict(sorted(table.items())))


def parse_table(data: Dict[str, Any], **limits) -> DifficultyTable:
    """Build a table from parsed YAML data.

    Raises:
        DifficultyTableError: If the document has no 'levels' list
        pydantic.ValidationError: If an entry has invalid values
    """
    entries = data.get('levels') if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise DifficultyTableError("Difficulty file must contain a 'levels' list")

    table: Dict[int, DifficultyProfile] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            raise DifficultyTableError(f"Level entries must be mappings, got {entry!r}")
        profile = DifficultyProfile(**entry)
        if profile.level in table:
            raise DifficultyTableError(f"Level {profile.level} defined twice")
        table[profile.level] = profile

    return validate_table(table, **limits)


def load_difficulty_table(path: Union[str, Path], **limits) -> DifficultyTable:
    """Load a difficulty table from a YAML file.

    Args:
        path: YAML file with a 'levels' list
        **limits: play_height / gate_margin overrides for validation

    Raises:
        FileNotFoundError: If the file does not exist
        DifficultyTableError: If the table is malformed
        pydantic.ValidationError: If an entry has invalid values
    """
    path = Path(path)
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}
    return parse_table(data, **limits)
