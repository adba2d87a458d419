"""default TrueSkill parameters computed once here to avoid recomputation"""
import math

# rating defaults
DEFAULT_MEAN = 25.0
DEFAULT_STANDARD_DEVIATION = DEFAULT_MEAN / 3.0
DEFAULT_CONSERVATIVE_ESTIMATE_RATIO = 3.0

# environment defaults
DEFAULT_BETA = DEFAULT_STANDARD_DEVIATION / 2.0
DEFAULT_DYNAMICS_FACTOR = DEFAULT_STANDARD_DEVIATION / 100.0
DEFAULT_DRAW_PROBABILITY = 0.0

# gaussian constants
INV_SQRT_2 = 1.0 / math.sqrt(2.0)

# below these the truncated gaussian corrections fall back to their asymptotic limits
MIN_WIN_DENOM = 2.222758749e-162
MIN_DRAW_DENOM = 1e-50
