"""Dictionary compilation module.

Turns a language profile plus its rule files into a CompiledDictionary and
keeps the compiled artifact on disk up to date.
"""

from .compiler import CompileStats, RuleCompiler

__all__ = [
    "CompileStats",
    "RuleCompiler",
]
