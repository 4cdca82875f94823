"""
Repair engine for jsonmend - turns almost-JSON text into JSON values.

The engine first tries the text as-is. Only when that fails does it run the
repair pipeline once and parse again. A successful parse is followed by the
revival of embedded JSON strings and pretty-printing. Callers always get a
``RepairResult``; no exception escapes ``repair()``.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, NoReturn, Optional

from ..preprocessing.pipeline import RepairPipeline
from ..security.exceptions import ErrorLocation, RepairError, SecurityError
from ..security.limits import LimitValidator
from ..utils.config import RepairConfig
from .constants import FIX_EMBEDDED_STRINGS
from .reviver import StringReviver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepairResult:
    """Outcome of a repair: the value, its formatting, and the diagnostics."""

    success: bool
    data: Any = None
    formatted: str = ""
    errors: tuple[str, ...] = field(default_factory=tuple)
    fixes: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping with list-valued diagnostics, ready for ``json.dumps``."""
        return {
            "success": self.success,
            "data": self.data,
            "formatted": self.formatted,
            "errors": list(self.errors),
            "fixes": list(self.fixes),
        }


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"{name} is not valid JSON")


def loads_strict(text: str) -> Any:
    """``json.loads`` that also rejects ``NaN`` and ``Infinity``."""
    return json.loads(text, parse_constant=_reject_constant)


class RepairEngine:
    """Runs the repair pipeline and the string reviver for one configuration."""

    def __init__(
        self,
        config: Optional[RepairConfig] = None,
        pipeline: Optional[RepairPipeline] = None,
    ):
        self.config = config or RepairConfig()
        self.pipeline = pipeline or RepairPipeline.create_default_pipeline()
        assert self.config.limits is not None and self.config.revival is not None
        self.validator = LimitValidator(self.config.limits)
        self.reviver = StringReviver(
            self.parse_value,
            max_depth=self.config.revival.max_depth,
            prefix_policy=self.config.revival.prefix_policy,
            prefix_key=self.config.revival.prefix_key,
            data_key=self.config.revival.data_key,
        )

    def repair(self, text: str) -> RepairResult:
        """Repair ``text`` and report what was done."""
        try:
            self.validator.validate_input_size(text)
            data, fixes = self._parse_with_fixes(text.strip())

            if self.config.revive_embedded_strings:
                data, replaced = self.reviver.revive_counted(data)
                if replaced:
                    fixes.append(FIX_EMBEDDED_STRINGS)

            formatted = self.dumps(data)
        except SecurityError as e:
            return RepairResult(success=False, errors=(str(e),))
        except RepairError as e:
            logger.debug("Repair failed: %s", e)
            return RepairResult(success=False, errors=(str(e),), fixes=tuple(e.fixes))
        except RecursionError:
            return RepairResult(success=False, errors=("Maximum nesting depth exceeded",))

        return RepairResult(
            success=True,
            data=data,
            formatted=formatted,
            fixes=tuple(fixes),
        )

    def parse_value(self, text: str) -> Any:
        """Parse text as JSON, repairing it if needed, without revival."""
        data, _ = self._parse_with_fixes(text)
        return data

    def dumps(self, data: Any, indent: Optional[int] = None) -> str:
        """Serialize a repaired value; ``indent=0`` means minified."""
        indent = self.config.indent if indent is None else indent
        if indent == 0:
            return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
        return json.dumps(data, ensure_ascii=False, indent=indent)

    def _parse_with_fixes(self, text: str) -> tuple[Any, list[str]]:
        try:
            return loads_strict(text), []
        except ValueError:
            pass

        outcome = self.pipeline.run(text, self.config)
        try:
            return loads_strict(outcome.text), list(outcome.fixes)
        except json.JSONDecodeError as e:
            raise RepairError(
                e.msg,
                location=ErrorLocation.from_offset(outcome.text, e.pos),
                fixes=list(outcome.fixes),
            ) from e
        except ValueError as e:
            raise RepairError(str(e), fixes=list(outcome.fixes)) from e


def repair(text: str, config: Optional[RepairConfig] = None) -> RepairResult:
    """
    Repair almost-JSON text into a JSON value.

    Args:
        text: JSON, JavaScript object literal, Python dict literal, or a mix
        config: Optional repair configuration

    Returns:
        RepairResult with the parsed value, its pretty-printed form, and the
        ordered lists of errors and applied fixes

    Example:
        >>> repair("{'ok': True, name: bob,}").data
        {'ok': True, 'name': 'bob'}
    """
    return RepairEngine(config).repair(text)


def minify(text: str, config: Optional[RepairConfig] = None) -> str:
    """Repair text and serialize it without whitespace.

    The input is returned unchanged when it cannot be repaired.
    """
    engine = RepairEngine(config)
    result = engine.repair(text)
    if not result.success:
        return text
    return engine.dumps(result.data, indent=0)


def format_json(text: str, indent: int = 2, config: Optional[RepairConfig] = None) -> str:
    """Repair text and pretty-print it with ``indent`` spaces.

    The input is returned unchanged when it cannot be repaired. ``indent=0``
    gives compact output.

    Raises:
        ValueError: If ``indent`` is negative, whatever the input
    """
    if indent < 0:
        raise ValueError("indent must not be negative")
    engine = RepairEngine(config)
    result = engine.repair(text)
    if not result.success:
        return text
    return engine.dumps(result.data, indent=indent)
