"""
Game errors.
Each error carries a short `code` so the API can report which kind of
problem happened without parsing the message.

They subclass ValueError so callers that only care about "bad input"
can keep catching ValueError.
"""


class GameError(ValueError):
    code = "GameError"


class InvalidWordFormat(GameError):
    """Word is the wrong length or has characters outside a -> z."""
    code = "InvalidWordFormat"


class InvalidGuess(GameError):
    """A player's guess failed shape validation. No round is used."""
    code = "InvalidGuess"


class WordNotAllowed(GameError):
    """Well-formed guess that is not in the allowed-guess dictionary."""
    code = "WordNotAllowed"


class SessionFinished(GameError):
    code = "SessionFinished"


class SessionNotFound(GameError, LookupError):
    code = "SessionNotFound"
