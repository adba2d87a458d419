"""
gaussian, draw model and truncated gaussian correction checks
"""
import math
import pytest
import numpy as np
from tsrank.core.errors import DomainError
from tsrank.utils.math_utils import (
    norm_cdf,
    norm_pdf,
    norm_ppf,
    draw_margin,
    draw_probability,
    v_win,
    w_win,
    v_draw,
    w_draw,
    v_function,
    w_function,
    v_and_w,
)


def test_standard_normal_values():
    assert norm_cdf(0.0) == 0.5
    assert norm_cdf(1.96) == pytest.approx(0.9750021048517795, rel=1e-10)
    assert norm_pdf(0.0) == pytest.approx(1.0 / math.sqrt(2.0 * math.pi), rel=1e-12)
    assert norm_ppf(0.975) == pytest.approx(1.959963984540054, rel=1e-9)


def test_cdf_lower_tail_keeps_relative_accuracy():
    assert norm_cdf(-10.0) == pytest.approx(7.619853024160527e-24, rel=1e-9)
    assert norm_cdf(-10.0) + norm_cdf(10.0) == pytest.approx(1.0)


def test_ppf_inverts_cdf():
    for x in [-5.0, -1.5, 0.0, 0.3, 2.5]:
        assert norm_ppf(norm_cdf(x)) == pytest.approx(x, abs=1e-9)


@pytest.mark.parametrize('p', [0.0, 1.0, -0.2, 1.5, float('nan')])
def test_ppf_outside_open_interval(p):
    with pytest.raises(DomainError):
        norm_ppf(p)


def test_nan_is_outside_the_domain():
    with pytest.raises(DomainError):
        norm_cdf(float('nan'))
    with pytest.raises(DomainError):
        norm_pdf(float('nan'))


@pytest.mark.parametrize('n1,n2,beta,p', [(1, 1, 25.0 / 6.0, 0.1), (1, 1, 1.0, 0.0), (2, 3, 4.0, 0.5), (1, 1, 25.0 / 6.0, 0.99)])
def test_draw_probability_recovers_draw_margin(n1, n2, beta, p):
    eps = draw_margin(n1, n2, beta, p)
    assert draw_probability(n1, n2, beta, eps) == pytest.approx(p, abs=1e-9)


def test_draw_margin_increases_with_draw_probability():
    margins = [draw_margin(1, 1, 25.0 / 6.0, p) for p in np.linspace(0.0, 0.95, 20)]
    assert margins[0] == pytest.approx(0.0, abs=1e-12)
    assert all(a < b for a, b in zip(margins, margins[1:]))


def test_draw_margin_scales_with_team_size_and_beta():
    base = draw_margin(1, 1, 1.0, 0.1)
    assert draw_margin(2, 2, 1.0, 0.1) == pytest.approx(base * math.sqrt(2.0))
    assert draw_margin(1, 1, 3.0, 0.1) == pytest.approx(base * 3.0)


@pytest.mark.parametrize('p', [1.0, -0.01, 2.0])
def test_draw_margin_rejects_invalid_probability(p):
    with pytest.raises(DomainError):
        draw_margin(1, 1, 1.0, p)


def test_v_win_positive_for_expected_outcome():
    # t > eps: the favourite won
    assert v_win(1.0, 0.1) > 0.0
    assert v_win(0.0, 0.0) == pytest.approx(2.0 * norm_pdf(0.0))


def test_w_win_between_zero_and_one():
    for t in [-4.0, -1.0, 0.0, 1.0, 4.0]:
        w = w_win(t, 0.05)
        assert 0.0 < w < 1.0


def test_v_win_lower_tail_limit():
    # an enormous upset, the cdf underflows and v tends to -(t - eps)
    assert v_win(-60.0, 0.0) == pytest.approx(60.0)
    assert w_win(-60.0, 0.0) == pytest.approx(0.0, abs=1e-9)


def test_draw_corrections_at_equal_means():
    eps = 0.05
    assert v_draw(0.0, eps) == 0.0
    expected_w = 2.0 * eps * norm_pdf(eps) / (norm_cdf(eps) - norm_cdf(-eps))
    assert w_draw(0.0, eps) == pytest.approx(expected_w)


def test_draw_pulls_the_stronger_side_down():
    assert v_draw(0.5, 0.05) < 0.0
    assert v_draw(-0.5, 0.05) > 0.0
    assert v_draw(0.5, 0.05) == pytest.approx(-v_draw(-0.5, 0.05))


def test_unscaled_forms_divide_by_c():
    c = 13.0
    assert v_function(6.5, 1.3, c) == pytest.approx(v_win(0.5, 0.1))
    assert w_function(6.5, 1.3, c) == pytest.approx(w_win(0.5, 0.1))
    assert v_function(6.5, 1.3, c, is_draw=True) == pytest.approx(v_draw(0.5, 0.1))
    assert w_function(6.5, 1.3, c, is_draw=True) == pytest.approx(w_draw(0.5, 0.1))


def test_v_and_w_matches_individual_functions():
    assert v_and_w(0.3, 0.1) == pytest.approx((v_win(0.3, 0.1), w_win(0.3, 0.1)))
    assert v_and_w(0.3, 0.1, is_draw=True) == pytest.approx((v_draw(0.3, 0.1), w_draw(0.3, 0.1)))



@pytest.mark.parametrize('t', [-0.7, 0.4, 2.0])
def test_draw_corrections_without_draw_margin(t):
    # with eps = 0 the draw interval is empty and the asymptotic limits are used
    assert v_draw(t, 0.0) == pytest.approx(-t)
    assert w_draw(t, 0.0) == 1.0
    assert v_and_w(t, 0.0, is_draw=True) == pytest.approx((-t, 1.0))
