"""
jsonmend - repairs almost-JSON text into valid JSON.

jsonmend accepts what people and scripts actually paste: JavaScript object
literals, Python dict reprs, comments, trailing or missing commas, unquoted
keys and values, and JSON documents whose string fields hold more serialized
JSON. It returns the parsed value together with the list of repairs applied.

Quick Start:
    import jsonmend

    result = jsonmend.repair("{'ok': True, items: [1, 2,],}")
    result.success     # True
    result.data        # {'ok': True, 'items': [1, 2]}
    result.fixes       # ('Converted Python literals to JSON', ...)

    jsonmend.minify("{a: 1}")             # '{"a":1}'
    jsonmend.format_json("{a: 1}", 4)     # pretty-printed with 4 spaces

    # Only the repairs that cannot change meaning
    from jsonmend import RepairConfig
    jsonmend.repair(text, RepairConfig.conservative())
"""

from .core.engine import RepairEngine, RepairResult, format_json, minify, repair
from .security.exceptions import JsonMendError, RepairError, SecurityError
from .utils.config import (
    PrefixPolicy,
    RepairConfig,
    RepairLimits,
    RevivalSettings,
    StageSettings,
)

__version__ = "0.1.0"
__author__ = "jsonmend contributors"

__all__ = [
    # Entry points
    "repair", "minify", "format_json",
    # Engine
    "RepairEngine", "RepairResult",
    # Configuration classes
    "RepairConfig", "StageSettings", "RevivalSettings", "RepairLimits", "PrefixPolicy",
    # Exception classes
    "JsonMendError", "RepairError", "SecurityError",
]
