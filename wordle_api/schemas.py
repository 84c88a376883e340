"""
Explicit validation & Pydantic models
- Models are used to validate and serialize/deserialize data
  exchanged between the client and server.
- Defines the structure of API requests and responses.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

MarkOut = Literal["hit", "present", "miss"]
ModeIn = Literal["normal", "cheat", "daily"]
StateOut = Literal["playing", "won", "lost"]


# 1. Start a game
class NewGameRequest(BaseModel):
    mode: ModeIn = Field("normal", description="normal | cheat (host changes the answer) | daily")
    max_rounds: Optional[int] = Field(
        None, ge=1, le=10, description="How many guesses the player gets (server default if omitted)"
    )
    seed: Optional[str] = Field(
        None, max_length=64, description="Normal mode only: same seed -> same answer"
    )
    player_id: Optional[str] = Field(
        None, max_length=64, description="Daily mode only: who is playing (generated if omitted)"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"mode": "normal", "max_rounds": 6},
                {"mode": "cheat", "max_rounds": 8},
                {"mode": "daily", "player_id": "alice"},
            ]
        }
    }


# 2. Represents response when a new game is started
class NewGameResponse(BaseModel):
    game_id: Optional[str] = Field(None, description="Unique ID for the game; answer is never returned")
    mode: ModeIn = Field(..., description="Game mode")
    max_rounds: int = Field(..., description="How many guesses the player gets")
    date: Optional[str] = Field(None, description="Daily mode: puzzle date (YYYY-MM-DD, UTC)")
    player_id: Optional[str] = Field(None, description="Daily mode: player the game belongs to")
    played: bool = Field(False, description="Daily mode: player already finished today's puzzle")


# 3. Validates player's guess
class GuessRequest(BaseModel):
    guess: Any = Field(..., description="A 5-letter word (case does not matter)")

    @field_validator("guess")
    @classmethod
    def strip_guess(cls, guess: Any) -> Any:
        """
        Only trims whitespace here. Type, length, letters and dictionary checks
        belong to the game so every bad guess is reported as InvalidGuess
        and never uses up a round.
        """
        if isinstance(guess, str):
            return guess.strip()
        return guess

    model_config = {"json_schema_extra": {"examples": [{"guess": "crane"}]}}


# 4. Describes the feedback for a single guess
class GuessEntryOut(BaseModel):
    guess: str = Field(..., description="The player's guess (lower-case)")
    marks: List[MarkOut] = Field(..., description="One mark per letter")
    timestamp: float = Field(..., description="When the guess was made")


# 5. Result of a guess
class GuessResponse(BaseModel):
    marks: List[MarkOut] = Field(..., description="One mark per letter")
    round: int = Field(..., description="Rounds used so far")
    state: StateOut = Field(..., description="Current state of the game")
    keyboard: Dict[str, MarkOut] = Field(default_factory=dict, description="Best mark seen per letter")
    answer: Optional[str] = Field(None, description="The answer (only revealed once the game is over)")
    note: Optional[str] = Field(None, description="Extra note (ex. 'Game lost. No more guesses.')")


# 6. Represents the overall state of the game
class GameStateOut(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game")
    mode: ModeIn = Field(..., description="Game mode")
    max_rounds: int = Field(..., description="How many guesses the player gets")
    round: int = Field(..., description="Rounds used so far")
    state: StateOut = Field(..., description="Current state of the game")
    history: List[GuessEntryOut] = Field(..., description="All guesses made so far with feedback")
    keyboard: Dict[str, MarkOut] = Field(default_factory=dict, description="Best mark seen per letter")
    answer: Optional[str] = Field(None, description="The answer (only revealed once the game is over)")
    date: Optional[str] = Field(None, description="Daily mode: puzzle date")


# 7. Error payload
class ErrorOut(BaseModel):
    error: str = Field(..., description="InvalidGuess | WordNotAllowed | SessionFinished | SessionNotFound")
    message: str = Field(..., description="Human readable reason")


# 8. Daily leaderboard
class LeaderboardRow(BaseModel):
    player_id: str = Field(..., description="Player")
    guesses: int = Field(..., description="Guesses used to win")
    elapsed_ms: int = Field(..., description="Time from start to win, in ms")


class LeaderboardOut(BaseModel):
    date: str = Field(..., description="Puzzle date (YYYY-MM-DD)")
    top: List[LeaderboardRow] = Field(..., description="Fastest wins first")


# 9. Scoreboard
class StatsOut(BaseModel):
    games_started: int = Field(..., description="Total games started since the server started")
    games_won: int = Field(..., description="Total games won")
    games_lost: int = Field(..., description="Total games lost")

    current_streak: int = Field(..., description="Current consecutive wins")
    best_streak: int = Field(..., description="Best consecutive wins")

    average_guesses_to_win: Optional[float] = Field(
        None, description="Average number of guesses used in wins"
    )
    fastest_win_rounds: Optional[int] = Field(
        None, description="Fewest guesses taken to win a game"
    )

    normal_started: int = Field(..., description="Normal games started")
    cheat_started: int = Field(..., description="Cheating-host games started")
    daily_started: int = Field(..., description="Daily games started")

    normal_won: int = Field(..., description="Normal games won")
    cheat_won: int = Field(..., description="Cheating-host games won")
    daily_won: int = Field(..., description="Daily games won")
