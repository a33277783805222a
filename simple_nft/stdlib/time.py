from datetime import datetime as dt
from datetime import timezone

import iso8601


# Block time as reported by the host. Kept as integer nanoseconds since the unix epoch so that comparisons are exact
# and the value survives a round trip through storage as a decimal string.
NANOS_IN_SECOND = 1_000_000_000
NANOS_IN_MICROSECOND = 1_000

SECONDS_IN_DAY = 86400


class Timestamp:
    __slots__ = ('_nanos',)

    def __init__(self, nanos: int):
        if isinstance(nanos, bool) or not isinstance(nanos, int):
            raise TypeError(f'{type(nanos)} is not an int!')
        if nanos < 0:
            raise ValueError('Timestamp cannot be negative')
        self._nanos = nanos

    @classmethod
    def from_seconds(cls, seconds):
        return cls(seconds * NANOS_IN_SECOND)

    @classmethod
    def from_iso(cls, s: str):
        return cls._from_datetime(iso8601.parse_date(s))

    @classmethod
    def _from_datetime(cls, d: dt):
        if d.tzinfo is None:
            d = d.replace(tzinfo=timezone.utc)
        delta = d - dt(1970, 1, 1, tzinfo=timezone.utc)
        seconds = delta.days * SECONDS_IN_DAY + delta.seconds
        return cls(seconds * NANOS_IN_SECOND + delta.microseconds * NANOS_IN_MICROSECOND)

    @classmethod
    def parse(cls, value):
        """
        Accepts nanoseconds as an int or a decimal string, or an ISO-8601 string.
        """
        if isinstance(value, Timestamp):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            if value.isascii() and value.isdecimal():
                return cls(int(value))
            return cls.from_iso(value)
        raise TypeError(f'{type(value)} cannot be read as a Timestamp!')

    @property
    def nanos(self):
        return self._nanos

    @property
    def seconds(self):
        return self._nanos // NANOS_IN_SECOND

    def plus_seconds(self, seconds):
        return Timestamp(self._nanos + seconds * NANOS_IN_SECOND)

    def plus_nanos(self, nanos):
        return Timestamp(self._nanos + nanos)

    def __lt__(self, other):
        if type(other) != Timestamp:
            raise TypeError(f'{type(other)} is not a Timestamp!')
        return self._nanos < other._nanos

    def __le__(self, other):
        if type(other) != Timestamp:
            raise TypeError(f'{type(other)} is not a Timestamp!')
        return self._nanos <= other._nanos

    def __eq__(self, other):
        if type(other) != Timestamp:
            return NotImplemented
        return self._nanos == other._nanos

    def __ge__(self, other):
        if type(other) != Timestamp:
            raise TypeError(f'{type(other)} is not a Timestamp!')
        return self._nanos >= other._nanos

    def __gt__(self, other):
        if type(other) != Timestamp:
            raise TypeError(f'{type(other)} is not a Timestamp!')
        return self._nanos > other._nanos

    def __hash__(self):
        return hash(self._nanos)

    def __str__(self):
        return str(self._nanos)

    def __repr__(self):
        return 'Timestamp({})'.format(self._nanos)
