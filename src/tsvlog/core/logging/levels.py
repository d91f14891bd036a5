# src/tsvlog/core/logging/levels.py
"""
Severity levels and the filtering rule.

Levels are totally ordered by their integer rank:

    NONE(-1) < DEBUG(0) < INFO(1) < NOTICE(2) < WARNING(3)
             < ERROR(4) < CRITICAL(5) < ALERT(6) < EMERGENCY(7)

An entry is accepted iff its rank is >= the configured minimum's rank. NONE is a
sentinel that only makes sense as a configured minimum: it suppresses everything
and is never the level of an emitted entry.
"""

from enum import IntEnum

from tsvlog.exceptions import ConfigurationError


class Severity(IntEnum):
    NONE = -1
    DEBUG = 0
    INFO = 1
    NOTICE = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    ALERT = 6
    EMERGENCY = 7

    @property
    def label(self) -> str:
        """Upper-case name used in rendered lines, e.g. "INFO"."""
        return self.name


# Every level a caller may emit (NONE excluded).
EMITTABLE_LEVELS = tuple(level for level in Severity if level is not Severity.NONE)


def valid_level_names() -> list[str]:
    return [level.name.lower() for level in Severity]


def parse_level(value: "Severity | int | str") -> Severity:
    """
    Resolve a Severity from a Severity, an integer rank, or a level name.

    Names are matched case-insensitively ("info", "INFO"). Anything else raises
    ConfigurationError listing the valid names.
    """
    if isinstance(value, Severity):
        return value
    # bool is an int subclass; True/False are never levels
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Severity(value)
        except ValueError:
            pass
    elif isinstance(value, str):
        level = Severity.__members__.get(value.strip().upper())
        if level is not None:
            return level

    raise ConfigurationError(
        f"Log level {value} is not a valid log level. "
        f"Must be one of ({', '.join(valid_level_names())})"
    )


def should_log(candidate: Severity, minimum: Severity) -> bool:
    """
    Return True iff `candidate` passes the `minimum` gate.

    NONE as minimum rejects every level. NONE as candidate is a caller bug.
    """
    if candidate == Severity.NONE:
        raise ConfigurationError("NONE is not an emittable log level")
    if minimum == Severity.NONE:
        return False
    return candidate >= minimum
