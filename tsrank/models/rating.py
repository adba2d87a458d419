"""the gaussian skill belief held by each competitor"""
import math
from dataclasses import dataclass
from tsrank.core.errors import DomainError
from tsrank.utils.constants import DEFAULT_MEAN, DEFAULT_STANDARD_DEVIATION, DEFAULT_CONSERVATIVE_ESTIMATE_RATIO


@dataclass(frozen=True)
class Rating:
    """
    Immutable TrueSkill rating N(mean, standard_deviation^2).

    Attributes:
        mean (float): location of the skill belief (mu).
        standard_deviation (float): uncertainty of the skill belief (sigma), must be positive.
        conservative_estimate_ratio (float): how many standard deviations are subtracted from the mean
            for the conservative estimate. With the defaults (25, 25/3, 3) the true skill lies above the
            conservative estimate in roughly 99% of cases.
    """

    mean: float = DEFAULT_MEAN
    standard_deviation: float = DEFAULT_STANDARD_DEVIATION
    conservative_estimate_ratio: float = DEFAULT_CONSERVATIVE_ESTIMATE_RATIO

    def __post_init__(self):
        if not self.standard_deviation > 0.0 or math.isinf(self.standard_deviation):
            raise DomainError(f'standard deviation must be positive and finite, got {self.standard_deviation}')

    @property
    def variance(self) -> float:
        return self.standard_deviation**2.0

    @property
    def conservative_estimate(self) -> float:
        """mean - ratio * standard deviation, the pessimistic skill used for ranking"""
        return self.mean - (self.conservative_estimate_ratio * self.standard_deviation)
