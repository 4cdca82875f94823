"""
jsonmend core repair engine.

This module provides the repair engine, the quote-aware scanner and the
embedded-string reviver.
"""

from .engine import RepairEngine, RepairResult, format_json, minify, repair
from .reviver import StringReviver
from .scanner import ScanMode, ScanPosition, Segment, iter_segments, scan_string

__all__ = [
    'repair', 'minify', 'format_json', 'RepairEngine', 'RepairResult',
    'StringReviver',
    'ScanMode', 'ScanPosition', 'Segment', 'iter_segments', 'scan_string',
]
