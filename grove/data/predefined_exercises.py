"""Predefined exercise catalogue, shared by every user (stored with no owner).

Bodyweight-first selection so a new user can train at home from day one.
"""

from typing import Any

PREDEFINED_EXERCISES: list[dict[str, Any]] = [
    # ── Chest ──
    {
        "name": "Push-ups",
        "type": "reps",
        "category": "chest",
        "muscle_groups": ["chest", "triceps", "shoulders"],
        "equipment": ["bodyweight"],
        "default_sets": 3,
        "default_reps": 12,
        "default_rest_seconds": 60,
        "difficulty": "beginner",
        "instructions": "Keep your body straight and lower until your chest almost touches the floor.",
    },
    {
        "name": "Diamond Push-ups",
        "type": "reps",
        "category": "chest",
        "muscle_groups": ["chest", "triceps"],
        "equipment": ["bodyweight"],
        "default_sets": 3,
        "default_reps": 10,
        "default_rest_seconds": 60,
        "difficulty": "intermediate",
        "instructions": "Hands together forming a diamond, focus on the triceps.",
    },
    # ── Back ──
    {
        "name": "Pull-ups",
        "type": "reps",
        "category": "back",
        "muscle_groups": ["lats", "biceps"],
        "equipment": ["pullup_bar"],
        "default_sets": 3,
        "default_reps": 8,
        "default_rest_seconds": 90,
        "difficulty": "intermediate",
        "instructions": "Overhand grip, pull until your chin clears the bar.",
    },
    {
        "name": "Inverted Rows",
        "type": "reps",
        "category": "back",
        "muscle_groups": ["lats", "traps", "biceps"],
        "equipment": ["bodyweight", "pullup_bar"],
        "default_sets": 3,
        "default_reps": 12,
        "default_rest_seconds": 60,
        "difficulty": "beginner",
        "instructions": "Body straight under a low bar, pull your chest to the bar.",
    },
    # ── Legs ──
    {
        "name": "Squats",
        "type": "reps",
        "category": "legs",
        "muscle_groups": ["quadriceps", "glutes"],
        "equipment": ["bodyweight"],
        "default_sets": 3,
        "default_reps": 15,
        "default_rest_seconds": 60,
        "difficulty": "beginner",
        "instructions": "Feet shoulder-width apart, sit back until thighs are parallel to the floor.",
    },
    {
        "name": "Lunges",
        "type": "reps",
        "category": "legs",
        "muscle_groups": ["quadriceps", "glutes"],
        "equipment": ["bodyweight"],
        "default_sets": 3,
        "default_reps": 10,
        "default_rest_seconds": 60,
        "difficulty": "beginner",
        "instructions": "Step forward and lower the back knee towards the floor, alternate legs.",
    },
    # ── Core ──
    {
        "name": "Plank",
        "type": "time",
        "category": "core",
        "muscle_groups": ["abs", "obliques"],
        "equipment": ["bodyweight"],
        "default_sets": 3,
        "default_duration_seconds": 30,
        "default_rest_seconds": 45,
        "difficulty": "beginner",
        "instructions": "Forearms on the floor, body in a straight line, brace the core.",
    },
    {
        "name": "Crunches",
        "type": "reps",
        "category": "core",
        "muscle_groups": ["abs"],
        "equipment": ["bodyweight"],
        "default_sets": 3,
        "default_reps": 20,
        "default_rest_seconds": 45,
        "difficulty": "beginner",
        "instructions": "Lift the shoulders off the floor by contracting the abs, no neck pulling.",
    },
    # ── Shoulders / arms ──
    {
        "name": "Pike Push-ups",
        "type": "reps",
        "category": "shoulders",
        "muscle_groups": ["shoulders", "triceps"],
        "equipment": ["bodyweight"],
        "default_sets": 3,
        "default_reps": 10,
        "default_rest_seconds": 60,
        "difficulty": "intermediate",
        "instructions": "Hips high in an inverted V, lower the head towards the floor.",
    },
    {
        "name": "Parallel Bar Dips",
        "type": "reps",
        "category": "arms",
        "muscle_groups": ["triceps", "chest"],
        "equipment": ["bodyweight"],
        "default_sets": 3,
        "default_reps": 12,
        "default_rest_seconds": 60,
        "difficulty": "intermediate",
        "instructions": "Lower until elbows reach 90 degrees, press back up without locking out.",
    },
    # ── Cardio ──
    {
        "name": "Burpees",
        "type": "reps",
        "category": "cardio",
        "muscle_groups": ["quadriceps", "chest", "shoulders"],
        "equipment": ["bodyweight"],
        "default_sets": 3,
        "default_reps": 10,
        "default_rest_seconds": 60,
        "difficulty": "intermediate",
        "instructions": "Squat, kick back to a plank, push-up, jump up with arms overhead.",
    },
    {
        "name": "Running",
        "type": "cardio",
        "category": "cardio",
        "muscle_groups": ["quadriceps", "hamstrings", "calves"],
        "equipment": [],
        "default_sets": 1,
        "default_duration_seconds": 1200,
        "default_distance_km": 3,
        "difficulty": "beginner",
        "instructions": "Steady conversational pace.",
    },
]
