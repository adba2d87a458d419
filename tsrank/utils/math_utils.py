"""gaussian math for TrueSkill: the standard normal, the draw model and the truncated gaussian corrections"""
import math
import statistics
from scipy.stats import norm
from tsrank.core.errors import DomainError
from tsrank.utils.constants import INV_SQRT_2, MIN_WIN_DENOM, MIN_DRAW_DENOM


STANDARD_NORMAL = statistics.NormalDist()


def norm_cdf(x):
    """cdf of standard normal, erfc keeps the relative error small deep in the lower tail"""
    if math.isnan(x):
        raise DomainError('norm_cdf is undefined for nan')
    return 0.5 * math.erfc(-x * INV_SQRT_2)


def norm_pdf(x):
    """pdf of standard normal"""
    if math.isnan(x):
        raise DomainError('norm_pdf is undefined for nan')
    return STANDARD_NORMAL.pdf(x)


def norm_ppf(p):
    """inverse cdf of standard normal, only defined on the open interval (0, 1)"""
    if not 0.0 < p < 1.0:
        raise DomainError(f'norm_ppf requires 0 < p < 1, got {p}')
    return float(norm.ppf(p))


def draw_probability(n1, n2, beta, draw_margin):
    """
    probability of a draw between two teams of n1 and n2 players (TrueSkill technical report MSR-TR-2006-80, page 6)

    draw probability = 2 * Phi(eps / (sqrt(n1 + n2) * beta)) - 1
    """
    return 2.0 * norm_cdf(draw_margin / (math.sqrt(n1 + n2) * beta)) - 1.0


def draw_margin(n1, n2, beta, draw_probability):
    """
    the draw margin eps in performance units matching a draw probability, the inverse of draw_probability

    eps = Phi^-1((draw probability + 1) / 2) * sqrt(n1 + n2) * beta
    """
    if not 0.0 <= draw_probability < 1.0:
        raise DomainError(f'draw probability must lie in [0, 1), got {draw_probability}')
    return norm_ppf((draw_probability + 1.0) / 2.0) * (math.sqrt(n1 + n2) * beta)


def v_win(t, eps):
    """mean correction for a win, t and eps are already divided by c"""
    diff = t - eps
    denom = norm_cdf(diff)
    if denom > MIN_WIN_DENOM:
        return norm_pdf(diff) / denom
    # the ratio tends to -diff far in the lower tail
    return -diff


def w_win(t, eps, v=None):
    """variance correction for a win"""
    if v is None:
        v = v_win(t, eps)
    return v * (v + t - eps)


def v_draw(t, eps):
    """mean correction for a draw, t and eps are already divided by c"""
    shared_denom = norm_cdf(eps - t) - norm_cdf(-eps - t)
    if shared_denom < MIN_DRAW_DENOM:
        return -t + math.copysign(eps, t)
    return (norm_pdf(-eps - t) - norm_pdf(eps - t)) / shared_denom


def w_draw(t, eps, v=None):
    """variance correction for a draw"""
    shared_denom = norm_cdf(eps - t) - norm_cdf(-eps - t)
    if shared_denom < MIN_DRAW_DENOM:
        return 1.0
    if v is None:
        v = v_draw(t, eps)
    w_num = ((eps - t) * norm_pdf(eps - t)) + ((eps + t) * norm_pdf(eps + t))
    return (v**2.0) + (w_num / shared_denom)


def v_function(delta_mean, draw_margin, c, is_draw=False):
    """V taking the unscaled mean difference (winner - loser) and draw margin"""
    t, eps = delta_mean / c, draw_margin / c
    return v_draw(t, eps) if is_draw else v_win(t, eps)


def w_function(delta_mean, draw_margin, c, is_draw=False):
    """W taking the unscaled mean difference (winner - loser) and draw margin"""
    t, eps = delta_mean / c, draw_margin / c
    return w_draw(t, eps) if is_draw else w_win(t, eps)


def v_and_w(t, eps, is_draw=False):
    """calculate v and w together in a scalar fashion, sharing the evaluation of v"""
    if is_draw:
        v = v_draw(t, eps)
        return v, w_draw(t, eps, v)
    v = v_win(t, eps)
    return v, w_win(t, eps, v)

