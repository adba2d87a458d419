"""Classes and functions for working with match data"""
from typing import Dict, List, NamedTuple, Tuple
import pandas as pd
from tsrank.core.base import Rankable
from tsrank.models.player import Player


class MatchEntry(NamedTuple):
    """one competitor's result in a match, a lower score is a better placement"""

    competitor: Rankable
    score: float


def index_players(df: pd.DataFrame, competitor_cols: List[str]) -> Dict[str, Player]:
    """create one Player per unique id found in the competitor columns"""
    all_ids = pd.concat([df[col].astype(str) for col in competitor_cols])
    return {player_id: Player(player_id) for player_id in sorted(all_ids.unique())}


def matches_from_dataframe(
    df: pd.DataFrame,
    competitor_cols: List[str],
    score_cols: List[str],
) -> Tuple[Dict[str, Player], List[Tuple[MatchEntry, MatchEntry]]]:
    """
    Convert rows of a match log into MatchEntry pairs ready for RatingPool.fit_matches

    Parameters:
    -----------
    df : pd.DataFrame
        one row per match, in the order the matches were played
    competitor_cols : list of 2 str
        columns holding the ids of the two competitors
    score_cols : list of 2 str
        columns holding their scores or placements, lower is better

    Returns:
    --------
    players : dict mapping id to Player
    matches : list of (MatchEntry, MatchEntry)
    """
    if len(competitor_cols) != 2 or len(score_cols) != 2:
        raise ValueError('exactly two competitor columns and two score columns are required')
    players = index_players(df, competitor_cols)
    ids = df[competitor_cols].astype(str).to_numpy()
    scores = df[score_cols].to_numpy()
    matches = [
        (MatchEntry(players[id_1], score_1), MatchEntry(players[id_2], score_2))
        for (id_1, id_2), (score_1, score_2) in zip(ids, scores)
    ]
    return players, matches

