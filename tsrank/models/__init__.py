"""
Models Module
=============

The rating values and the rating systems built on them.

- Rating: an immutable gaussian skill belief with a conservative estimate used for ranking.
- Player: a minimal competitor holding an opaque id and its current rating.
- TrueSkill (RatingPool): a Bayesian rating system developed by Microsoft, restricted here to 1v1 matches.
"""
