import os

# Token channel the syntax automaton sees; whitespace/comments live elsewhere
DEFAULT_CHANNEL: int = 0

# Case preference for freely generated characters
CASE_PREFERENCES = ("LOWER", "UPPER", "BOTH")
DEFAULT_CASE_PREFERENCE: str = "BOTH"

# /* ~~~ code points used when a negated set or wildcard must be expanded ~~~ */
# [start, stop), printable ASCII by default
CHAR_ALPHABET: tuple[int, int] = (0x20, 0x7F)

# Progress/trace logging (set AUTOSUGGEST_VERBOSE=1 to enable)
VERBOSE = os.environ.get("AUTOSUGGEST_VERBOSE") == "1"
