"""Shared enums for models and API."""

from enum import Enum


class ExerciseType(str, Enum):
    """How an exercise is measured."""

    REPS = "reps"
    TIME = "time"  # Time-based (e.g. Planks)
    CARDIO = "cardio"  # Duration / distance


class WorkoutType(str, Enum):
    PUSH = "push"
    PULL = "pull"
    LEGS = "legs"
    FULL_BODY = "full_body"
    CARDIO = "cardio"
    CUSTOM = "custom"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class WorkoutLocation(str, Enum):
    HOME = "home"
    GYM = "gym"


class Mood(str, Enum):
    """How the user felt after a session."""

    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    TIRED = "tired"
    EXHAUSTED = "exhausted"


class CoachPersonality(str, Enum):
    """Tone of the AI coach."""

    MOTIVATOR = "motivator"
    ANALYTICAL = "analytical"
    BEAST = "beast"
    RELAXED = "relaxed"


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
