"""TrueSkill ranking of 1v1 matches"""
import itertools
import logging
import math
import numbers
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import numpy as np
import pandas as pd
from scipy.stats import norm
from sortedcontainers import SortedList
from tsrank.core.base import MatchEntries, Rankable, RankingSystem, check_match_size
from tsrank.core.errors import ConfigurationError, NumericalInstabilityError, UnknownCompetitorError
from tsrank.models.rating import Rating
from tsrank.utils.constants import (
    DEFAULT_BETA,
    DEFAULT_CONSERVATIVE_ESTIMATE_RATIO,
    DEFAULT_DRAW_PROBABILITY,
    DEFAULT_DYNAMICS_FACTOR,
    DEFAULT_MEAN,
    DEFAULT_STANDARD_DEVIATION,
)
from tsrank.utils.math_utils import draw_margin, norm_cdf, v_and_w

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrueSkillConfig:
    """Configuration of a TrueSkill ranking, fixed for the lifetime of the ranking.

    Defaults follow the TrueSkill paper:
    - mean = 25, standard deviation = 25/3
    - beta = sigma/2 (performance variability)
    - dynamics factor = sigma/100 (skill drift per match)
    """

    draw_probability: float = DEFAULT_DRAW_PROBABILITY
    beta: float = DEFAULT_BETA
    conservative_estimate_ratio: float = DEFAULT_CONSERVATIVE_ESTIMATE_RATIO
    dynamics_factor: float = DEFAULT_DYNAMICS_FACTOR
    initial_mean: float = DEFAULT_MEAN
    initial_standard_deviation: float = DEFAULT_STANDARD_DEVIATION

    @classmethod
    def create(cls, **kwargs) -> 'TrueSkillConfig':
        """build a config, raising ConfigurationError if the draw probability is not in [0, 1]"""
        config = cls(**kwargs)
        draw_probability = config.draw_probability
        if not isinstance(draw_probability, numbers.Real) or not 0.0 <= draw_probability <= 1.0:
            raise ConfigurationError(f'draw probability must lie in [0, 1], got {draw_probability!r}')
        return config

    @property
    def two_beta_squared(self) -> float:
        return 2.0 * (self.beta**2.0)

    @property
    def tau_squared(self) -> float:
        return self.dynamics_factor**2.0


class RatingPool(RankingSystem):
    """
    The og TrueSkill rating system shoutout to Microsoft, restricted to 1v1 matches.

    Members are kept in descending order of conservative estimate (mean - ratio * sd) so rank 1 is the best.
    Each member sits in the ordered set under the estimate it had when it was inserted, so a member is
    always removed before its rating is replaced and inserted again afterwards. A rating replaced from
    outside the pool only moves its owner once refresh() is called or the owner plays its next match.
    Competitors whose conservative estimates tie are kept in insertion order.

    The pool is not thread safe, callers sharing one across threads must serialize apply_match.
    """

    rating_dim = 2

    def __init__(
        self,
        draw_probability: float = DEFAULT_DRAW_PROBABILITY,
        beta: float = DEFAULT_BETA,
        conservative_estimate_ratio: float = DEFAULT_CONSERVATIVE_ESTIMATE_RATIO,
        dynamics_factor: float = DEFAULT_DYNAMICS_FACTOR,
        initial_mean: float = DEFAULT_MEAN,
        initial_standard_deviation: float = DEFAULT_STANDARD_DEVIATION,
        config: Optional[TrueSkillConfig] = None,
    ):
        if config is None:
            config = TrueSkillConfig.create(
                draw_probability=draw_probability,
                beta=beta,
                conservative_estimate_ratio=conservative_estimate_ratio,
                dynamics_factor=dynamics_factor,
                initial_mean=initial_mean,
                initial_standard_deviation=initial_standard_deviation,
            )
        self.config = config
        # (-conservative estimate, insertion number, competitor), the insertion number breaks ties
        self._members = SortedList()
        self._entries = {}
        self._counter = itertools.count()

    @classmethod
    def from_config(cls, config: TrueSkillConfig) -> 'RatingPool':
        return cls(config=config)

    def default_rating(self) -> Rating:
        return Rating(
            mean=self.config.initial_mean,
            standard_deviation=self.config.initial_standard_deviation,
            conservative_estimate_ratio=self.config.conservative_estimate_ratio,
        )

    def add_member(self, competitor: Rankable):
        if not isinstance(competitor, Rankable):
            raise TypeError(f'{competitor!r} does not expose a rating')
        if competitor in self._entries:
            return
        if competitor.rating is None:
            competitor.rating = self.default_rating()
        self._insert(competitor)
        logger.debug('added %r to the ranking', competitor)

    def _insert(self, competitor: Rankable):
        entry = (-competitor.rating.conservative_estimate, next(self._counter), competitor)
        self._entries[competitor] = entry
        self._members.add(entry)

    def _remove(self, competitor: Rankable):
        self._members.remove(self._entries.pop(competitor))

    def _restore(self, entry):
        self._entries[entry[2]] = entry
        self._members.add(entry)

    def refresh(self, competitor: Rankable):
        """move a member whose rating was replaced outside the pool to its current place"""
        if competitor not in self._entries:
            raise UnknownCompetitorError(competitor)
        self._remove(competitor)
        self._insert(competitor)

    def __contains__(self, competitor) -> bool:
        return competitor in self._entries

    def __len__(self) -> int:
        return len(self._members)

    def get_ranking(self) -> List[Rankable]:
        return [competitor for _, _, competitor in self._members]

    def rank_of(self, competitor: Rankable) -> int:
        """1-based position of a member, 1 is the best"""
        if competitor not in self._entries:
            raise UnknownCompetitorError(competitor)
        return self._members.index(self._entries[competitor]) + 1

    def _select_winner(self, entries: MatchEntries) -> Tuple[Rankable, Rankable, bool]:
        """
        Lower scores are better placements. Equal scores are rated as a draw, with the first
        entry taken as the winner side only to fix the sign of the mean difference.
        """
        (first, first_score), (second, second_score) = entries
        if first is second:
            raise UnknownCompetitorError(f'{first!r} cannot play against itself')
        for competitor in (first, second):
            if competitor not in self._entries:
                raise UnknownCompetitorError(competitor)
        if first_score == second_score:
            return first, second, True
        if first_score < second_score:
            return first, second, False
        return second, first, False

    def apply_match(self, entries: MatchEntries):
        """
        Updates both competitors of a 1v1 match.

        Both new ratings are computed from the pre-match ratings before either is written back.
        If anything fails the members are restored exactly as they were and the error is re-raised.

        Parameters:
            entries: two (competitor, score) pairs, the lower score won.
        """
        entries = list(entries)
        check_match_size(entries)
        winner, loser, is_draw = self._select_winner(entries)

        removed = []
        try:
            for competitor in (winner, loser):
                entry = self._entries[competitor]
                self._remove(competitor)
                removed.append(entry)
            new_winner_rating, new_loser_rating = self.rate_1v1(winner.rating, loser.rating, is_draw)
        except Exception as err:
            for entry in removed:
                self._restore(entry)
            logger.warning('rejected match between %r and %r: %s', winner, loser, err)
            raise

        winner.rating = new_winner_rating
        loser.rating = new_loser_rating
        self._insert(winner)
        self._insert(loser)
        logger.debug('applied match %r %s %r', winner, 'drew' if is_draw else 'beat', loser)

    def rate_1v1(self, winner_rating: Rating, loser_rating: Rating, is_draw: bool = False) -> Tuple[Rating, Rating]:
        """compute the post-match ratings of a winner and a loser without touching the pool"""
        epsilon = draw_margin(1, 1, self.config.beta, self.config.draw_probability)
        combined_sigma2 = self.config.two_beta_squared + winner_rating.variance + loser_rating.variance
        combined_dev = math.sqrt(combined_sigma2)
        rating_diff = winner_rating.mean - loser_rating.mean

        v, w = v_and_w(rating_diff / combined_dev, epsilon / combined_dev, is_draw)
        new_winner_rating = self._updated_rating(winner_rating, combined_sigma2, combined_dev, v, w, 1.0)
        new_loser_rating = self._updated_rating(loser_rating, combined_sigma2, combined_dev, v, w, -1.0)
        return new_winner_rating, new_loser_rating

    def _updated_rating(self, prior: Rating, combined_sigma2, combined_dev, v, w, sign_multiplier) -> Rating:
        sigma2 = prior.variance + self.config.tau_squared
        mean = prior.mean + sign_multiplier * (sigma2 / combined_dev) * v
        new_sigma2 = sigma2 * (1.0 - (sigma2 / combined_sigma2) * w)
        if not new_sigma2 > 0.0:
            raise NumericalInstabilityError(f'updated variance {new_sigma2} is not positive')
        return Rating(mean, math.sqrt(new_sigma2), self.config.conservative_estimate_ratio)

    def predict(self, competitor_1: Rankable, competitor_2: Rankable) -> float:
        """P(competitor_1 beats competitor_2) = Phi((mu1 - mu2) / sqrt(2 beta^2 + sigma1^2 + sigma2^2))"""
        rating_1, rating_2 = competitor_1.rating, competitor_2.rating
        combined_sigma2 = self.config.two_beta_squared + rating_1.variance + rating_2.variance
        return norm_cdf((rating_1.mean - rating_2.mean) / math.sqrt(combined_sigma2))

    def predict_matchups(self, matchups: Sequence[Tuple[Rankable, Rankable]]) -> np.ndarray:
        """generate win probabilities for the first competitor of each pair"""
        mus = np.array([[a.rating.mean, b.rating.mean] for a, b in matchups], dtype=np.float64).reshape(-1, 2)
        sigma2s = np.array([[a.rating.variance, b.rating.variance] for a, b in matchups], dtype=np.float64).reshape(-1, 2)
        combined_devs = np.sqrt(self.config.two_beta_squared + sigma2s.sum(axis=1))
        return norm.cdf((mus[:, 0] - mus[:, 1]) / combined_devs)

    def match_quality(self, competitor_1: Rankable, competitor_2: Rankable) -> float:
        """the chance of a draw relative to the most even possible match, higher means a fairer pairing"""
        rating_1, rating_2 = competitor_1.rating, competitor_2.rating
        combined_sigma2 = self.config.two_beta_squared + rating_1.variance + rating_2.variance
        sqrt_part = math.sqrt(self.config.two_beta_squared / combined_sigma2)
        exp_part = math.exp(-((rating_1.mean - rating_2.mean) ** 2.0) / (2.0 * combined_sigma2))
        return sqrt_part * exp_part

    def leaderboard(self, num_places: Optional[int] = None) -> pd.DataFrame:
        members = self.get_ranking()[:num_places]
        return pd.DataFrame(
            {
                'rank': np.arange(1, len(members) + 1),
                'competitor': [getattr(member, 'id', member) for member in members],
                'mean': [member.rating.mean for member in members],
                'standard_deviation': [member.rating.standard_deviation for member in members],
                'conservative_estimate': [member.rating.conservative_estimate for member in members],
            }
        )

    def print_leaderboard(self, num_places: Optional[int] = None):
        print(self.leaderboard(num_places).to_string(index=False, float_format='{:.6f}'.format))
