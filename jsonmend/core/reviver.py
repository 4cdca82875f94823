"""
Revival of JSON values that were stored as strings.

Logged request bodies and similar payloads often carry a field whose value is
itself a stringified dict or list, sometimes behind a label::

    {"extractor_request": "{'key': 'value'}"}
    {"log": "Request body: {\\"id\\": 7}"}

``StringReviver`` walks a parsed value and replaces such strings with the
structure they encode, recursing into the result. Nesting is capped so that
strings which keep unwrapping into more strings cannot run away.
"""

import logging
from typing import Any, Optional

from ..security.exceptions import RepairError
from ..utils.config import PrefixPolicy
from .interfaces import TextParser
from .regex_engine import get_engine

logger = logging.getLogger(__name__)

# "<label>: {...}" or "<label>: [...]" where the label holds no brackets
PREFIXED_PATTERN = r"^(?P<prefix>[^{}\[\]]*):\s*+(?P<body>[\[{][\s\S]*[\]}])\s*$"

_CONTAINER_DELIMITERS = (("{", "}"), ("[", "]"))


def looks_like_container(text: str) -> bool:
    """Whether trimmed text is wrapped in matching braces or brackets."""
    return any(
        text.startswith(opening) and text.endswith(closing)
        for opening, closing in _CONTAINER_DELIMITERS
    )


class StringReviver:
    """
    Replaces string leaves that encode JSON (or JSON-like) structures.

    Args:
        parse: Parses a candidate string, raising ``RepairError`` on failure
        max_depth: How many levels of string-inside-string are unwrapped
        prefix_policy: Keep or drop the label of ``label: {...}`` strings
        prefix_key: Key holding the label when it is kept
        data_key: Key holding the parsed value when the label is kept
    """

    def __init__(
        self,
        parse: TextParser,
        max_depth: int = 10,
        prefix_policy: PrefixPolicy = PrefixPolicy.WRAP,
        prefix_key: str = "_prefix",
        data_key: str = "_data",
    ):
        self.parse = parse
        self.max_depth = max_depth
        self.prefix_policy = prefix_policy
        self.prefix_key = prefix_key
        self.data_key = data_key

    def revive(self, value: Any, depth: int = 0) -> Any:
        """Return a copy of ``value`` with embedded structures parsed."""
        return self.revive_counted(value, depth)[0]

    def revive_counted(self, value: Any, depth: int = 0) -> tuple[Any, int]:
        """
        Like ``revive``, also returning how many strings were replaced.

        The walk keeps its own stack, so any value ``json`` can build can be
        walked regardless of how deeply it nests.
        """
        root: list[Any] = [value]
        pending: list[tuple[Any, Any, Any, int]] = [(root, 0, value, depth)]
        replaced = 0

        while pending:
            parent, slot, item, level = pending.pop()
            if isinstance(item, dict):
                copy = dict(item)
                parent[slot] = copy
                pending.extend((copy, key, child, level) for key, child in item.items())
            elif isinstance(item, list):
                copy = list(item)
                parent[slot] = copy
                pending.extend((copy, index, child, level) for index, child in enumerate(item))
            elif isinstance(item, str):
                embedded = self._parse_embedded(item, level)
                if embedded is None:
                    continue
                parsed, prefix = embedded
                replaced += 1
                if prefix is not None and self.prefix_policy == PrefixPolicy.WRAP:
                    wrapper = {self.prefix_key: prefix, self.data_key: parsed}
                    parent[slot] = wrapper
                    parent, slot = wrapper, self.data_key
                pending.append((parent, slot, parsed, level + 1))

        return root[0], replaced

    def _parse_embedded(self, value: str, depth: int) -> Optional[tuple[Any, Optional[str]]]:
        """Parse a string leaf into ``(value, prefix)``, or ``None`` to keep it."""
        if depth >= self.max_depth:
            return None

        stripped = value.strip()
        if looks_like_container(stripped):
            return self._try_parse(stripped, None)

        if ":" not in stripped or not stripped.endswith(("}", "]")):
            return None

        match = get_engine().search(PREFIXED_PATTERN, stripped)
        if match is None:
            return None
        return self._try_parse(match.group("body"), match.group("prefix").strip())

    def _try_parse(
        self, text: str, prefix: Optional[str]
    ) -> Optional[tuple[Any, Optional[str]]]:
        try:
            return self.parse(text), prefix
        except RepairError as e:
            logger.debug("Leaving embedded string unparsed: %s", e.message)
        except RecursionError:
            logger.debug("Leaving embedded string unparsed: nested too deeply")
        return None
