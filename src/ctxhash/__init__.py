"""ctxhash: content hashes of container build contexts, respecting .dockerignore."""

from ctxhash.diagnostics import DebugLogger, LoggingDiagnostics, NullLogger
from ctxhash.errors import ConfigError, ContextIOError, CtxHashError, PatternError
from ctxhash.hashing import DEFAULT_TRUNCATE_LENGTH, Hasher, hash_files
from ctxhash.ignore import RuleMatcher, RuleSet, compile_rules
from ctxhash.walker import collect_files

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TRUNCATE_LENGTH",
    "ConfigError",
    "ContextIOError",
    "CtxHashError",
    "DebugLogger",
    "Hasher",
    "LoggingDiagnostics",
    "NullLogger",
    "PatternError",
    "RuleMatcher",
    "RuleSet",
    "__version__",
    "collect_files",
    "compile_rules",
    "hash_files",
]
