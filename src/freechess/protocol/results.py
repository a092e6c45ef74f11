"""Game-result classification from end-of-game announcements."""

from __future__ import annotations

import re

from freechess.protocol.enums import GameResult, ReasonCode

GameOutcome = tuple[str, str, ReasonCode]

# Phrases naming the side that acted; the other player is the winner unless
# the reason says otherwise.
_LOSING_ACTIONS: dict[str, ReasonCode] = {
    "resigns": ReasonCode.RESIGN,
    "forfeits by disconnection": ReasonCode.DISCONNECT,
    "checkmated": ReasonCode.CHECKMATE,
    "forfeits on time": ReasonCode.TIME_FORFEIT,
}
_WINNING_ACTIONS: dict[str, ReasonCode] = {
    "partner won": ReasonCode.PARTNER_WON,
}

_SYMMETRIC_ACTIONS: dict[str, ReasonCode] = {
    "aborted on move 1": ReasonCode.ABORT,
    "aborted by mutual agreement": ReasonCode.ABORT,
    "aborted": ReasonCode.ABORT,
    "lost connection and too few moves; game aborted": ReasonCode.ABORT,
    "drawn by mutual agreement": ReasonCode.DRAW,
    "drawn because both players ran out of time": ReasonCode.DRAW,
    "drawn by repetition": ReasonCode.DRAW,
    "drawn by the 50 move rule": ReasonCode.DRAW,
    "drawn due to length": ReasonCode.DRAW,
    "was drawn": ReasonCode.DRAW,
    "player has mating material": ReasonCode.DRAW,
    "drawn by adjudication": ReasonCode.DRAW,
    "drawn by stalemate": ReasonCode.DRAW,
    "drawn": ReasonCode.DRAW,
    "adjourned": ReasonCode.ADJOURN,
    "adjourned by mutual agreement": ReasonCode.ADJOURN,
    "lost connection; game adjourned": ReasonCode.ADJOURN,
}

_NO_MATERIAL_RE = re.compile(r"ran out of time and ([a-zA-Z]+) has no material to mate")


def classify_game_result(
    player_a: str, player_b: str, who: str, action: str
) -> GameOutcome:
    """Return ``(winner, loser, reason)`` for an end-of-game announcement.

    *player_a*/*player_b* are White/Black as named in the ``{Game N (A vs. B)``
    header, *who* is the acting player (or ``"White"``/``"Black"``) and
    *action* the phrase that follows it. Symmetric outcomes (draws, aborts,
    adjournments) and anything unrecognised come back as
    ``(player_a, player_b, reason)``.
    """
    if who == "White":
        who = player_a
    elif who == "Black":
        who = player_b

    action = action.strip()

    reason = _LOSING_ACTIONS.get(action)
    if reason is not None:
        if who == player_a:
            return player_b, player_a, reason
        if who == player_b:
            return player_a, player_b, reason
        return player_a, player_b, ReasonCode.UNKNOWN

    reason = _WINNING_ACTIONS.get(action)
    if reason is not None:
        if who == player_a:
            return player_a, player_b, reason
        if who == player_b:
            return player_b, player_a, reason
        return player_a, player_b, ReasonCode.UNKNOWN

    reason = _SYMMETRIC_ACTIONS.get(action)
    if reason is not None:
        return player_a, player_b, reason

    if action in (f"courtesyadjourned by {player_a}", f"courtesyadjourned by {player_b}"):
        return player_a, player_b, ReasonCode.ADJOURN

    if _NO_MATERIAL_RE.search(action):
        return player_a, player_b, ReasonCode.DRAW

    return player_a, player_b, ReasonCode.UNKNOWN


def game_result_from_score(token: str) -> GameResult:
    """Convert a score token such as ``1-0`` to :class:`GameResult`."""
    if token == "1-0":
        return GameResult.WHITE_WINS
    if token == "0-1":
        return GameResult.BLACK_WINS
    if token == "1/2-1/2":
        return GameResult.DRAW
    return GameResult.IN_PROGRESS
