"""base class for rankings that keep competitors ordered by skill"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple, runtime_checkable
import numpy as np
from tqdm import tqdm
from tsrank.core.errors import UnsupportedMatchSizeError
from tsrank.models.rating import Rating


@runtime_checkable
class Rankable(Protocol):
    """
    Anything a ranking can manage: a hashable object exposing a replaceable rating.
    The ranking never owns the identity of a competitor, it only reads and replaces its rating.
    """

    rating: Optional[Rating]


MatchEntries = Sequence[Tuple[Rankable, float]]


def check_match_size(entries: MatchEntries):
    if len(entries) != 2:
        raise UnsupportedMatchSizeError(f'only 1v1 matches are supported, got {len(entries)} entries')


class RankingSystem(ABC):
    """
    Base class for rankings. This class provides a framework for rankings which hold a set of
    competitors, update their ratings from match results and keep them ordered best first.

    Attributes:
        rating_dim (int): Dimension of competitor ratings. 2 for gaussian systems like TrueSkill
                          which track a mean and a standard deviation.
    """

    rating_dim: int

    @abstractmethod
    def add_member(self, competitor: Rankable):
        """
        Adds a competitor to the ranking, assigning a default rating if it has none.
        Adding a competitor which is already a member does nothing.
        """

    @abstractmethod
    def __contains__(self, competitor) -> bool:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    @abstractmethod
    def get_ranking(self) -> List[Rankable]:
        """Returns a snapshot of the members, best first."""

    @abstractmethod
    def apply_match(self, entries: MatchEntries):
        """
        Updates ratings based on the result of one match.

        Parameters:
            entries: (competitor, score) pairs, a lower score is a better placement.
        """

    @abstractmethod
    def predict(self, competitor_1: Rankable, competitor_2: Rankable) -> float:
        """Probability that competitor_1 beats competitor_2."""

    def add_members(self, competitors: Iterable[Rankable]):
        for competitor in competitors:
            self.add_member(competitor)

    def contains(self, competitor: Rankable) -> bool:
        return competitor in self

    def __iter__(self):
        return iter(self.get_ranking())

    def fit_matches(
        self,
        matches: Iterable[MatchEntries],
        return_pre_match_probs: bool = False,
        progress: bool = False,
    ) -> Optional[np.ndarray]:
        """
        Applies a series of matches in order, adding competitors the ranking does not know yet.

        Parameters:
            matches: iterable of matches, each a sequence of two (competitor, score) pairs.
            return_pre_match_probs (bool): whether to return, for each match, the probability the
                                           first entry would win computed before the update.
            progress (bool): display a tqdm progress bar.

        Returns:
            np.ndarray of pre-match probabilities when return_pre_match_probs is set, otherwise None
        """
        matches = [list(entries) for entries in matches]
        if return_pre_match_probs:
            pre_match_probs = np.empty(shape=len(matches), dtype=np.float64)

        for idx, entries in enumerate(tqdm(matches, disable=not progress)):
            check_match_size(entries)
            self.add_members(competitor for competitor, _ in entries)
            if return_pre_match_probs:
                pre_match_probs[idx] = self.predict(entries[0][0], entries[1][0])
            self.apply_match(entries)

        if return_pre_match_probs:
            return pre_match_probs
        return None
