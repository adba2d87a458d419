"""scoring the win probabilities a ranking gives before each match"""
import time
from typing import Iterable, List
import numpy as np
from tsrank.core.base import MatchEntries, RankingSystem


def match_outcomes(matches: Iterable[MatchEntries]) -> np.ndarray:
    """result for the first entry of each match: 1.0 when its score is lower, 0.0 when higher, 0.5 on equal scores"""
    scores = np.array([[entries[0][1], entries[1][1]] for entries in matches], dtype=np.float64).reshape(-1, 2)
    outcomes = np.where(scores[:, 0] < scores[:, 1], 1.0, 0.0)
    outcomes[scores[:, 0] == scores[:, 1]] = 0.5
    return outcomes


def log_loss(probs: np.ndarray, outcomes: np.ndarray, eps: float = 1e-6) -> float:
    """cross entropy of the first entry winning, a draw costs half of each side"""
    probs = np.clip(probs, eps, 1.0 - eps)
    return float(-np.mean(outcomes * np.log(probs) + (1.0 - outcomes) * np.log1p(-probs)))


def brier_score(probs: np.ndarray, outcomes: np.ndarray) -> float:
    return float(np.mean(np.square(probs - outcomes)))


def decided_accuracy(probs: np.ndarray, outcomes: np.ndarray) -> float:
    """
    share of decided matches whose winner was favoured, draws are left out
    and a coin flip prediction (exactly 0.5) earns half credit
    """
    decided = outcomes != 0.5
    if not decided.any():
        return float('nan')
    probs, first_won = probs[decided], outcomes[decided] == 1.0
    credit = np.where(probs == 0.5, 0.5, ((probs > 0.5) == first_won).astype(np.float64))
    return float(credit.mean())


def draw_rate(outcomes: np.ndarray) -> float:
    return float(np.mean(outcomes == 0.5)) if outcomes.size else float('nan')


def evaluate(ranking: RankingSystem, matches: Iterable[MatchEntries], progress: bool = False) -> dict:
    """fit a ranking on matches in the order they were played and score its pre-match predictions"""
    matches: List[MatchEntries] = [list(entries) for entries in matches]
    outcomes = match_outcomes(matches)
    start_time = time.time()
    probs = ranking.fit_matches(matches, return_pre_match_probs=True, progress=progress)
    return {
        'accuracy': decided_accuracy(probs, outcomes),
        'log_loss': log_loss(probs, outcomes),
        'brier_score': brier_score(probs, outcomes),
        'draw_rate': draw_rate(outcomes),
        'duration': time.time() - start_time,
    }
