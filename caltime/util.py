"""Integer nanosecond sizes of the duration units and the int64 bounds.

Duration, Instant.add and the numeric layouts all count in nanoseconds, so a
Duration(90 * MINUTE) and Layout.NANO share one scale.
"""

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY

# Bounds of a signed 64-bit integer, the range accepted by numeric layouts
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
