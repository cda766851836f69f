"""Half-open intervals over sequence coordinates."""


# Classes --------------------------------------------------------------------------------------------------------------
class Interval:
    """
    Immutable sequence interval. Safe for hashing and use in sets/dicts.

    Attributes:
        start: The start position (0-based, inclusive).
        end: The end position (0-based, exclusive).
    """
    __slots__ = ('_start', '_end')

    def __init__(self, start: int, end: int):
        """
        Initializes an Interval.

        Args:
            start: Start position.
            end: End position.

        Raises:
            ValueError: If start is negative or greater than end.
        """
        self._start: int = int(start)
        self._end: int = int(end)
        if self._start < 0 or self._start > self._end:
            raise ValueError(f'Invalid interval bounds: {self._start}:{self._end}')

    @property
    def start(self): return self._start
    @property
    def end(self): return self._end
    def __hash__(self): return hash((self._start, self._end))
    def __repr__(self): return f"{self._start}:{self._end}"
    def __len__(self): return self._end - self._start
    def __iter__(self): return iter((self._start, self._end))

    def __eq__(self, other):
        if isinstance(other, tuple) and len(other) == 2: return (self._start, self._end) == other
        if not isinstance(other, Interval): return False
        return self._start == other._start and self._end == other._end

    def slice(self) -> slice: return slice(self._start, self._end)
