"""Application constants.

Contains the experience bucket table, profile format rules and the
rating scale.  Everything here is immutable and shared process-wide.
"""

import re
from types import MappingProxyType

from telemed.models.enums import ExperienceBucket

# ---------------------------------------------------------------------------
# Experience buckets
# Half-open day intervals [min, max); ``None`` means unbounded.
# Contiguous and exhaustive over non-negative integers.
# ---------------------------------------------------------------------------
DAYS_IN_YEAR: int = 365

EXPERIENCE_BUCKETS: MappingProxyType[ExperienceBucket, tuple[int, int | None]] = MappingProxyType({
    ExperienceBucket.LessYear: (0, DAYS_IN_YEAR),
    ExperienceBucket.OneYear: (DAYS_IN_YEAR, 3 * DAYS_IN_YEAR),
    ExperienceBucket.ThreeYears: (3 * DAYS_IN_YEAR, 5 * DAYS_IN_YEAR),
    ExperienceBucket.FiveYears: (5 * DAYS_IN_YEAR, 6 * DAYS_IN_YEAR),
    ExperienceBucket.MoreFiveYears: (6 * DAYS_IN_YEAR, None),
})

# ---------------------------------------------------------------------------
# Rating scale
# A requested rating ``r`` covers [r, r + RATING_STEP).
# ---------------------------------------------------------------------------
RATING_MIN: float = 0
RATING_MAX: float = 5
RATING_STEP: float = 1

# ---------------------------------------------------------------------------
# Profile format rules
# ---------------------------------------------------------------------------
EMAIL_PATTERN: re.Pattern[str] = re.compile(
    r"^\w+([.\-]?\w+)*@\w+([.\-]?\w+)*(\.\w{2,3})+$"
)

# 79323327361 // 10**10 == 7
PHONE_DIVISOR: int = 10**10
PHONE_LEADING_DIGIT: int = 7
PHONE_NOT_SET: int = -1

PASSWORD_MIN_LENGTH: int = 6

# Never returned to callers from get / search
HIDDEN_FIELDS: frozenset[str] = frozenset({"password"})
