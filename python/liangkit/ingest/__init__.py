"""Rule file ingestion.

Reads pattern/dictionary rule files and turns every token into a
(key, mask) pair ready for the compiler.

Usage:
    from liangkit.ingest import patterns

    result = patterns.ingest("rules/hyph_en_US.pat", internal_encoding="utf-8")
    for key, mask in result.entries:
        ...
"""

from .base import IngestResult, RuleIngestor
from . import patterns

__all__ = [
    "IngestResult",
    "RuleIngestor",
    "patterns",
]
