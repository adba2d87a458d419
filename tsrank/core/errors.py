"""exceptions raised by tsrank"""


class TrueSkillError(Exception):
    """base class for every error raised by this library"""


class ConfigurationError(TrueSkillError, ValueError):
    """a ranking was configured with an invalid parameter, e.g. a draw probability outside [0, 1]"""


class UnsupportedMatchSizeError(TrueSkillError, ValueError):
    """only matches between exactly two competitors can be rated"""


class DomainError(TrueSkillError, ValueError):
    """an argument lies outside the domain of a gaussian function"""


class NumericalInstabilityError(TrueSkillError, ArithmeticError):
    """an update produced a non-positive variance"""


class UnknownCompetitorError(TrueSkillError, KeyError):
    """a match refers to a competitor the pool does not manage"""
