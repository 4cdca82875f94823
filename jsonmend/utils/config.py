"""
Configuration and limits for jsonmend repairs.

Every repair stage can be switched off individually, the embedded-string
reviver has its own settings, and input size is bounded by ``RepairLimits``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PrefixPolicy(Enum):
    """What to do with the label in front of an embedded ``label: {...}`` string."""

    WRAP = "wrap"  # {"_prefix": label, "_data": value}
    DISCARD = "discard"  # value only


@dataclass
class StageSettings:
    """Switches for the text-rewriting stages, in pipeline order."""

    strip_comments: bool = True
    convert_python_literals: bool = True
    unify_quotes: bool = True
    quote_keys: bool = True
    remove_trailing_commas: bool = True
    quote_bare_values: bool = True
    insert_missing_commas: bool = True


@dataclass
class RevivalSettings:
    """Settings for re-parsing strings that contain serialized structures."""

    enabled: bool = True
    max_depth: int = 10
    prefix_policy: PrefixPolicy = PrefixPolicy.WRAP
    prefix_key: str = "_prefix"
    data_key: str = "_data"


@dataclass
class RepairLimits:
    """Resource limits applied before any work is done."""

    max_input_size: int = 10 * 1024 * 1024


@dataclass
class RepairConfig:
    """Granular control over the repair pipeline."""

    stages: Optional[StageSettings] = None
    revival: Optional[RevivalSettings] = None
    limits: Optional[RepairLimits] = None
    indent: int = 2

    def __post_init__(self) -> None:
        if self.stages is None:
            self.stages = StageSettings()
        if self.revival is None:
            self.revival = RevivalSettings()
        if self.limits is None:
            self.limits = RepairLimits()

        if self.limits.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")
        if self.revival.max_depth < 0:
            raise ValueError("max_depth must not be negative")
        if self.indent < 0:
            raise ValueError("indent must not be negative")

    # Flat accessors used by the preprocessing steps
    @property
    def strip_comments(self) -> bool:
        """Whether ``//`` and ``/* */`` comments are removed."""
        assert self.stages is not None
        return self.stages.strip_comments

    @property
    def convert_python_literals(self) -> bool:
        """Whether ``None``/``True``/``False`` become JSON literals."""
        assert self.stages is not None
        return self.stages.convert_python_literals

    @property
    def unify_quotes(self) -> bool:
        """Whether single-quoted strings are rewritten as double-quoted."""
        assert self.stages is not None
        return self.stages.unify_quotes

    @property
    def quote_keys(self) -> bool:
        """Whether bare identifiers used as keys get quoted."""
        assert self.stages is not None
        return self.stages.quote_keys

    @property
    def remove_trailing_commas(self) -> bool:
        """Whether commas before ``}`` or ``]`` are dropped."""
        assert self.stages is not None
        return self.stages.remove_trailing_commas

    @property
    def quote_bare_values(self) -> bool:
        """Whether bare-word values get quoted."""
        assert self.stages is not None
        return self.stages.quote_bare_values

    @property
    def insert_missing_commas(self) -> bool:
        """Whether commas are inserted between newline-separated elements."""
        assert self.stages is not None
        return self.stages.insert_missing_commas

    @property
    def revive_embedded_strings(self) -> bool:
        """Whether string leaves holding serialized structures are parsed."""
        assert self.revival is not None
        return self.revival.enabled

    @property
    def max_revival_depth(self) -> int:
        """Maximum nesting of embedded strings that will be revived."""
        assert self.revival is not None
        return self.revival.max_depth

    @property
    def max_input_size(self) -> int:
        """Maximum input size in characters."""
        assert self.limits is not None
        return self.limits.max_input_size

    @classmethod
    def conservative(cls) -> "RepairConfig":
        """Only the repairs that cannot change the meaning of a string.

        Bare-word quoting and missing-comma insertion guess at intent, and
        revival rewrites values that were already valid, so all three are off.
        """
        return cls(
            stages=StageSettings(
                quote_bare_values=False,
                insert_missing_commas=False,
            ),
            revival=RevivalSettings(enabled=False),
        )

    @classmethod
    def aggressive(cls) -> "RepairConfig":
        """Every stage enabled."""
        return cls()

    @classmethod
    def from_features(cls, enabled_features: set[str]) -> "RepairConfig":
        """Create a configuration with only the named features enabled.

        Feature names are the ``StageSettings`` field names plus
        ``"revive_embedded_strings"``. Unknown names raise ``ValueError``.
        """
        stage_names = set(StageSettings.__dataclass_fields__)
        enabled = set(enabled_features)
        unknown = enabled - stage_names - {"revive_embedded_strings"}
        if unknown:
            raise ValueError(f"Unknown features: {', '.join(sorted(unknown))}")

        stages = StageSettings(**{name: False for name in stage_names})
        for name in enabled & stage_names:
            setattr(stages, name, True)

        return cls(
            stages=stages,
            revival=RevivalSettings(
                enabled="revive_embedded_strings" in enabled
            ),
        )
