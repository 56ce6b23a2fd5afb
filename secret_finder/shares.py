from dataclasses import dataclass
from .errors import DuplicateShareError, InsufficientShares, InvalidThreshold


@dataclass(frozen=True, order=True)
class Share:
    # x is the share index, y the decoded share value
    x: int
    y: int

    def __post_init__(self):
        if not isinstance(self.x, int) or not isinstance(self.y, int):
            raise TypeError(f"share coordinates must be integers (got x={self.x!r}, y={self.y!r})")

    def __str__(self):
        return f"t={self.x}, value={self.y}"


class ShareSet:
    """
    read-only collection of shares plus the threshold k.
    fewer than k shares is allowed here so the caller can report how many there are,
    but anything that reconstructs must call require_threshold() first
    """
    def __init__(self, shares, threshold: int):
        if threshold < 2:
            raise InvalidThreshold(threshold)

        shares = tuple(shares)
        seen = set()
        for share in shares:
            if share.x in seen:
                raise DuplicateShareError(f"x value {share.x} appears more than once")
            seen.add(share.x)

        self._shares = shares
        self.threshold = threshold


    @classmethod
    def from_points(cls, points, threshold: int) -> "ShareSet":
        return cls([Share(x, y) for x, y in points], threshold)


    @property
    def shares(self) -> tuple[Share, ...]:
        return self._shares

    def __len__(self):
        return len(self._shares)

    def __iter__(self):
        return iter(self._shares)

    def __contains__(self, share):
        return share in self._shares

    def __repr__(self):
        return f"ShareSet(k={self.threshold}, shares={list(self._shares)})"


    def require_threshold(self):
        if len(self._shares) < self.threshold:
            raise InsufficientShares(len(self._shares), self.threshold)
