import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from .combinations import generate_combinations, check_combination_budget
from .errors import NoValidSecret
from .lagrange import LagrangeReconstructor
from .shares import Share, ShareSet

logger = logging.getLogger(__name__)

TIE_BREAKS = ("first", "smallest")


@dataclass
class TallyEntry:
    count: int = 0
    combinations: list[tuple[Share, ...]] = field(default_factory=list)


class VoteTally:
    """
    secret -> TallyEntry, keyed by the exact integer.
    dicts keep insertion order, so iteration order is the order secrets were first seen
    """
    def __init__(self):
        self.entries: dict[int, TallyEntry] = {}

    def add(self, secret: int, combination):
        entry = self.entries.setdefault(secret, TallyEntry())
        entry.count += 1
        entry.combinations.append(tuple(combination))

    def __len__(self):
        return len(self.entries)

    def __contains__(self, secret):
        return secret in self.entries

    def __getitem__(self, secret) -> TallyEntry:
        return self.entries[secret]

    def counts(self) -> dict[int, int]:
        return {secret: entry.count for secret, entry in self.entries.items()}


    def majority(self, tie_break: str = "first") -> int:
        """
        the secret with the highest count.
        on a tie, "first" picks the one seen first in enumeration order, "smallest" the smallest value
        """
        if tie_break not in TIE_BREAKS:
            raise ValueError(f"unknown tie break policy {tie_break!r} - must be one of {'/'.join(TIE_BREAKS)}")
        if not self.entries:
            raise ValueError("cannot pick a majority from an empty tally")

        best_count = max(entry.count for entry in self.entries.values())
        leaders = [secret for secret, entry in self.entries.items() if entry.count == best_count]
        if len(leaders) > 1:
            logger.warning("%d secrets tied with %d votes each, picking by %r", len(leaders), best_count, tie_break)

        match tie_break:
            case "first":
                return leaders[0]
            case "smallest":
                return min(leaders)


    def supporting_shares(self, secret: int) -> set[Share]:
        # union of every combination that produced secret
        return {share for combination in self.entries[secret].combinations for share in combination}


@dataclass(frozen=True)
class RecoveryResult:
    secret: int
    faulty_shares: tuple[Share, ...]
    good_shares: tuple[Share, ...]
    tally: VoteTally
    combinations_tried: int
    inconsistent_combinations: int


class ConsistencyVoter:
    """
    Exhaustive fault locator: reconstructs every k-subset, votes on the results,
    and marks any share that never took part in a winning combination as faulty.

    Args:
        tie_break: "first" or "smallest", see VoteTally.majority
        max_combinations: refuse to start if C(n, k) is larger than this (None/0 = no limit)
        workers: number of processes to reconstruct with (1 = in-process)
    """
    def __init__(self, tie_break: str = "first", max_combinations=None, workers: int = 1):
        if tie_break not in TIE_BREAKS:
            raise ValueError(f"unknown tie break policy {tie_break!r} - must be one of {'/'.join(TIE_BREAKS)}")
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.tie_break = tie_break
        self.max_combinations = max_combinations
        self.workers = workers
        self.reconstructor = LagrangeReconstructor()


    def _reconstruct_all(self, combinations):
        if self.workers == 1:
            return map(self.reconstructor, combinations)
        # executor.map keeps input order, so the tally below sees the same order as the sequential path
        with ProcessPoolExecutor(max_workers=self.workers) as executor:
            return list(executor.map(self.reconstructor, combinations, chunksize=64))


    def tally(self, share_set: ShareSet) -> tuple[VoteTally, int, int]:
        """returns (tally, combinations tried, inconsistent combinations)"""
        share_set.require_threshold()
        expected = check_combination_budget(len(share_set), share_set.threshold, self.max_combinations)
        logger.info("trying %d combinations of %d shares (k = %d)", expected, len(share_set), share_set.threshold)

        combinations = list(generate_combinations(share_set.shares, share_set.threshold))
        results = self._reconstruct_all(combinations)

        # single threaded merge
        tally = VoteTally()
        inconsistent = 0
        for combination, secret in zip(combinations, results):
            if secret is None:
                inconsistent += 1
            else:
                tally.add(secret, combination)

        logger.info("%d candidate secrets, %d inconsistent combinations", len(tally), inconsistent)
        return tally, len(combinations), inconsistent


    def locate(self, share_set: ShareSet) -> RecoveryResult:
        tally, tried, inconsistent = self.tally(share_set)
        if not tally:
            raise NoValidSecret(tried)

        secret = tally.majority(self.tie_break)
        good = tally.supporting_shares(secret)

        good_shares = tuple(share for share in share_set if share in good)
        faulty_shares = tuple(sorted((share for share in share_set if share not in good), key=lambda s: s.x))

        return RecoveryResult(secret=secret,
                              faulty_shares=faulty_shares,
                              good_shares=good_shares,
                              tally=tally,
                              combinations_tried=tried,
                              inconsistent_combinations=inconsistent)


def recover_secret(share_set: ShareSet, locator=None) -> RecoveryResult:
    """
    Find the majority secret and the faulty shares of a share set.

    locator can be anything with a locate(share_set) method returning a RecoveryResult,
    defaults to the exhaustive ConsistencyVoter.
    """
    if locator is None:
        locator = ConsistencyVoter()
    return locator.locate(share_set)
