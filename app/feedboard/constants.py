"""
Central constants for the feedback board.
"""
from __future__ import annotations

# Key prefix for the per-post "has voted" flag kept on the client.
VOTE_FLAG_PREFIX = "feedboard-votes-"

# Character used to mask filtered words.
MASK_CHAR = "*"

# Post field limits (the board form uses the same values as maxlength).
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
