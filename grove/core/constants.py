"""Application constants."""

# Bodyweight markers in a set's free-text weight_used (no volume contribution)
BODYWEIGHT_MARKERS = frozenset({"corporal", "bodyweight"})
DEFAULT_WEIGHT_USED = "corporal"

# Session seeding when neither the workout entry nor the exercise sets a count
DEFAULT_TOTAL_SETS = 1
DEFAULT_SESSION_LIST_LIMIT = 50
DEFAULT_ABANDON_REASON = "User abandoned"

# Personal best: compare against this many previous completed sessions
PERSONAL_BEST_LOOKBACK_SESSIONS = 10
# Upper bound on completed sessions scanned while looking for those
PERSONAL_BEST_SCAN_LIMIT = 100

# Dashboard
RECENT_SESSIONS_LIMIT = 5

# Body weight log
DEFAULT_WEIGHT_HISTORY_LIMIT = 30

# Weekly schedule keys, Monday first
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

# AI coach conversation memory (entries, one entry = one message)
MAX_CHAT_HISTORY = 20
CHAT_CONTEXT_MESSAGES = 10
COACH_CONTEXT_SESSIONS = 5
COACH_TOP_EXERCISES = 5
DEFAULT_PERCEIVED_DIFFICULTY = 5
