"""Puzzle model and its attempt state machine."""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from dungeonquest.config import DEFAULT_PUZZLE_MAX_ATTEMPTS
from dungeonquest.errors import PuzzleError
from dungeonquest.models.items import Item


class PuzzleKind(str, Enum):
    """How an answer is compared against the solution."""

    RIDDLE = "riddle"
    CODE = "code"
    SEQUENCE = "sequence"


class PuzzleState(str, Enum):
    ACTIVE = "active"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


class PuzzleResult(BaseModel):
    """Outcome of a single attempt."""

    success: bool
    message: str
    attempts_left: int
    reward: Optional[Item] = None


def _normalize(text: str) -> str:
    return " ".join(str(text).split()).lower()


def _split_sequence(text: str) -> list[str]:
    return [_normalize(token) for token in str(text).split(",")]


class Puzzle(BaseModel):
    """A riddle, keypad code or ordered sequence with limited attempts.

    Transitions: ``active`` -> ``solved`` on a correct answer, or
    ``active`` -> ``exhausted`` once ``attempts_left`` reaches zero. Both end
    states are terminal.
    """

    name: str = Field(min_length=1, description="Puzzle name, also the lookup key")
    description: str = Field(min_length=1, description="What the player is asked")
    kind: PuzzleKind = Field(default=PuzzleKind.RIDDLE, description="Answer comparison rule")
    solution: Union[str, list[str]] = Field(description="Expected answer, or ordered tokens for sequences")
    max_attempts: int = Field(ge=1, default=DEFAULT_PUZZLE_MAX_ATTEMPTS, description="Attempts allowed")
    attempts_left: int = Field(ge=0, description="Attempts remaining")
    solved: bool = Field(default=False, description="Whether the puzzle has been solved")
    reward: Optional[Item] = Field(default=None, description="Item granted on success")

    @model_validator(mode="before")
    @classmethod
    def start_with_all_attempts(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("attempts_left") is None:
            return {**data, "attempts_left": data.get("max_attempts", DEFAULT_PUZZLE_MAX_ATTEMPTS)}
        return data

    @field_validator("solution")
    @classmethod
    def check_solution(cls, value: Union[str, list[str]]) -> Union[str, list[str]]:
        if isinstance(value, str):
            if not value.strip():
                raise ValueError("Solution cannot be empty")
            return value.strip()
        tokens = [str(token).strip() for token in value]
        if not tokens or not all(tokens):
            raise ValueError("Sequence solution needs at least one non-empty token")
        return tokens

    @model_validator(mode="after")
    def check_attempts(self) -> "Puzzle":
        if self.attempts_left > self.max_attempts:
            raise ValueError(f"attempts_left {self.attempts_left} exceeds max_attempts {self.max_attempts}")
        if self.kind != PuzzleKind.SEQUENCE and isinstance(self.solution, list):
            raise ValueError(f"A {self.kind.value} puzzle needs a single answer, not a list")
        if self.kind == PuzzleKind.SEQUENCE and isinstance(self.solution, str):
            self.solution = [token.strip() for token in self.solution.split(",")]
        return self

    @property
    def state(self) -> PuzzleState:
        if self.solved:
            return PuzzleState.SOLVED
        if self.attempts_left <= 0:
            return PuzzleState.EXHAUSTED
        return PuzzleState.ACTIVE

    @property
    def is_failed(self) -> bool:
        return self.state == PuzzleState.EXHAUSTED

    def can_attempt(self) -> bool:
        return self.state == PuzzleState.ACTIVE

    def set_reward(self, reward: Item) -> None:
        if reward is None:
            raise ValueError("Reward cannot be None")
        self.reward = reward

    def attempt(self, answer: str) -> PuzzleResult:
        """
        Try an answer, spending one attempt.

        Raises:
            PuzzleError: If the puzzle is already solved or has no attempts left
        """
        if self.solved:
            raise PuzzleError(f"{self.name} is already solved")
        if not self.can_attempt():
            raise PuzzleError(f"No attempts left for {self.name}")

        self.attempts_left -= 1

        if self._matches(answer):
            self.solved = True
            return PuzzleResult(
                success=True,
                message=f"Correct! You solved {self.name}.",
                attempts_left=self.attempts_left,
                reward=self.reward,
            )

        return PuzzleResult(
            success=False,
            message=f"Incorrect. Attempts remaining: {self.attempts_left}",
            attempts_left=self.attempts_left,
        )

    def reset(self) -> None:
        self.attempts_left = self.max_attempts
        self.solved = False

    def _matches(self, answer: str) -> bool:
        match self.kind:
            case PuzzleKind.RIDDLE | PuzzleKind.CODE:
                return _normalize(answer) == _normalize(self.solution)
            case PuzzleKind.SEQUENCE:
                return _split_sequence(answer) == [_normalize(token) for token in self.solution]
        return False
