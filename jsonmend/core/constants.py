"""
Common constants and mappings used across the jsonmend library.
"""

QUOTE_CHARS = ('"', "'")

# A single quote followed by one of these (or end of input) closes a
# single-quoted string; anything else makes it an apostrophe.
SINGLE_QUOTE_TERMINATORS = frozenset(",]}:[")

# Escapes understood inside single-quoted (JavaScript/Python) strings
SOURCE_ESCAPE_MAP = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "0": "\0",
    '"': '"',
    "'": "'",
    "\\": "\\",
    "/": "/",
}

PYTHON_LITERAL_MAP = {
    "None": "null",
    "True": "true",
    "False": "false",
}

JSON_LITERALS = frozenset(("true", "false", "null"))

# Labels reported in RepairResult.fixes, one per stage that changed the text
FIX_STRIP_COMMENTS = "Removed JavaScript comments"
FIX_PYTHON_LITERALS = "Converted Python literals to JSON"
FIX_SINGLE_QUOTES = "Converted single quotes to double quotes"
FIX_UNQUOTED_KEYS = "Added quotes to unquoted keys"
FIX_TRAILING_COMMAS = "Removed trailing commas"
FIX_UNQUOTED_VALUES = "Added quotes to unquoted string values"
FIX_MISSING_COMMAS = "Added missing commas between elements"
FIX_EMBEDDED_STRINGS = "Parsed embedded JSON strings"
