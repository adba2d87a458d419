"""
tsrank
======

TrueSkill ratings for 1v1 matches, with a pool that keeps competitors ordered by their
conservative skill estimate (mean - 3 * standard deviation by default).

    >>> from tsrank import Player, RatingPool
    >>> pool = RatingPool(draw_probability=0.1)
    >>> alice, bob = Player('alice'), Player('bob')
    >>> pool.add_members([alice, bob])
    >>> pool.apply_match([(alice, 1), (bob, 2)])
    >>> pool.get_ranking()[0] is alice
    True
"""
from tsrank.core.base import Rankable, RankingSystem
from tsrank.core.errors import (
    ConfigurationError,
    DomainError,
    NumericalInstabilityError,
    TrueSkillError,
    UnknownCompetitorError,
    UnsupportedMatchSizeError,
)
from tsrank.models.player import Player
from tsrank.models.rating import Rating
from tsrank.models.trueskill import RatingPool, TrueSkillConfig
from tsrank.utils.data_utils import MatchEntry
