"""
Timeout-protected regex execution for the structural repair stages.

The repair patterns run through the ``regex`` module on a worker thread so
that a pathological input cannot stall a repair. Compiled patterns are
cached. A worker that times out cannot be interrupted and runs until its
match finishes; at most ``RegexConfig.max_workers`` such workers exist at any
time, and an operation that cannot get a worker in time counts as timed out.
"""

import logging
import queue
import threading
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

import regex  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)


class TimeoutBehavior(Enum):
    """What a timed-out operation does."""

    RAISE_EXCEPTION = "raise"  # Raise RegexTimeoutError
    LOG_AND_CONTINUE = "log"  # Log a warning and leave the input unchanged


@dataclass
class RegexConfig:
    """Configuration for regex engine behavior."""

    # Timeouts in seconds, 0 runs on the calling thread without a limit
    search_timeout: float = 0.5
    sub_timeout: float = 2.0
    timeout_behavior: TimeoutBehavior = TimeoutBehavior.LOG_AND_CONTINUE

    cache_size: int = 64
    max_workers: int = 4


class RegexTimeoutError(Exception):
    """Raised when a regex operation exceeds its timeout."""

    def __init__(self, pattern: str, input_length: int, timeout: float, operation: str):
        self.pattern = pattern
        self.input_length = input_length
        self.timeout = timeout
        self.operation = operation
        super().__init__(
            f"Regex {operation} timed out after {timeout}s "
            f"on {input_length} chars: {pattern[:100]}"
        )


class PatternCache:
    """Thread-safe LRU cache of compiled patterns, keyed by pattern text."""

    def __init__(self, maxsize: int = 64):
        self.maxsize = maxsize
        self._lock = threading.Lock()
        self._patterns: "OrderedDict[tuple[str, int], Any]" = OrderedDict()

    def compile(self, pattern: str, flags: int = 0) -> Any:
        """Return the compiled pattern, compiling it on first use."""
        key = (pattern, flags)
        with self._lock:
            compiled = self._patterns.get(key)
            if compiled is not None:
                self._patterns.move_to_end(key)
                return compiled

        compiled = regex.compile(pattern, flags)

        with self._lock:
            self._patterns[key] = compiled
            while len(self._patterns) > self.maxsize:
                self._patterns.popitem(last=False)
        return compiled

    def __len__(self) -> int:
        with self._lock:
            return len(self._patterns)


class RegexEngine:
    """
    Regex execution engine with timeout protection.

    Example:
        >>> engine = RegexEngine()
        >>> engine.sub(r",(\\s*+[}\\]])", r"\\1", '{"a": 1,}')
        '{"a": 1}'
    """

    def __init__(self, config: Optional[RegexConfig] = None):
        self.config = config or RegexConfig()
        self.cache = PatternCache(self.config.cache_size)
        self._workers = threading.BoundedSemaphore(self.config.max_workers)

    def search(
        self,
        pattern: str,
        string: str,
        flags: int = 0,
        timeout: Optional[float] = None,
    ) -> Optional[Any]:
        """Search for pattern in string; ``None`` on no match or on timeout."""
        compiled = self.cache.compile(pattern, flags)
        limit = self.config.search_timeout if timeout is None else timeout
        try:
            return self._run(lambda: compiled.search(string), limit, pattern, string, "search")
        except RegexTimeoutError:
            return self._handle_timeout(None)

    def sub(
        self,
        pattern: str,
        repl: Union[str, Callable[[Any], str]],
        string: str,
        flags: int = 0,
        timeout: Optional[float] = None,
    ) -> str:
        """Replace every match; the input comes back unchanged on timeout."""
        compiled = self.cache.compile(pattern, flags)
        limit = self.config.sub_timeout if timeout is None else timeout
        try:
            return self._run(lambda: compiled.sub(repl, string), limit, pattern, string, "sub")
        except RegexTimeoutError:
            return self._handle_timeout(string)  # type: ignore[no-any-return]

    def _run(
        self,
        func: Callable[[], Any],
        timeout: float,
        pattern: str,
        string: str,
        operation: str,
    ) -> Any:
        if timeout <= 0:
            return func()

        if not self._workers.acquire(timeout=timeout):
            raise RegexTimeoutError(pattern, len(string), timeout, operation)

        outcome: queue.Queue = queue.Queue(maxsize=1)

        def worker() -> None:
            try:
                outcome.put((True, func()))
            except Exception as e:  # pylint: disable=broad-except
                outcome.put((False, e))
            finally:
                self._workers.release()

        threading.Thread(target=worker, daemon=True, name="jsonmend-regex").start()

        try:
            succeeded, value = outcome.get(timeout=timeout)
        except queue.Empty:
            raise RegexTimeoutError(pattern, len(string), timeout, operation) from None

        if not succeeded:
            raise value
        return value

    def _handle_timeout(self, fallback: Any) -> Any:
        """Re-raise or log the timeout being handled, per configuration."""
        if self.config.timeout_behavior == TimeoutBehavior.RAISE_EXCEPTION:
            raise  # pylint: disable=misplaced-bare-raise

        logger.warning("Regex timed out, input left unchanged", exc_info=True)
        return fallback


_global_engine: Optional[RegexEngine] = None
_global_engine_lock = threading.Lock()


def get_engine(config: Optional[RegexConfig] = None) -> RegexEngine:
    """
    Get or create the process-wide RegexEngine.

    Args:
        config: Optional configuration. Only used on first call.
    """
    global _global_engine  # pylint: disable=global-statement

    if _global_engine is None:
        with _global_engine_lock:
            if _global_engine is None:
                _global_engine = RegexEngine(config)

    return _global_engine


def reset_engine() -> None:
    """Drop the process-wide engine (mainly for testing)."""
    global _global_engine  # pylint: disable=global-statement
    with _global_engine_lock:
        _global_engine = None
