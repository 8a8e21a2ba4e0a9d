"""Content hashing of a build context (SHA-256 over sorted path + content)."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Iterable

from ctxhash.base import DiagnosticLogger, FileReader, IgnoreParser, PatternMatcher
from ctxhash.diagnostics import NullLogger
from ctxhash.errors import ContextIOError, PatternError
from ctxhash.fs import OsFileReader, join_path, path_bytes
from ctxhash.ignore.matcher import RuleMatcher
from ctxhash.ignore.rules import DOCKERIGNORE, DockerignoreParser, compile_patterns
from ctxhash.walker import collect_files

logger = logging.getLogger(__name__)

DEFAULT_TRUNCATE_LENGTH = 12
FULL_HASH_LENGTH = 64

MatcherFactory = Callable[[list[str]], PatternMatcher]


def rule_matcher(patterns: list[str]) -> RuleMatcher:
    """Default matcher factory: compile patterns into a RuleMatcher."""
    return RuleMatcher(compile_patterns(patterns))


def truncate_digest(full_hash: str, length: int) -> str:
    """First length characters of full_hash; 0 (or anything >= its length) keeps all of it."""
    if length > 0 and len(full_hash) > length:
        return full_hash[:length]
    return full_hash


def hash_files(
    root: str,
    files: Iterable[str],
    *,
    truncate_length: int = DEFAULT_TRUNCATE_LENGTH,
    reader: FileReader | None = None,
) -> str:
    """
    Hash files (relative to root) in the given order.

    Each file contributes its relative path, a NUL byte, then its content, so a
    file "ab" containing "c" differs from a file "a" containing "bc". An empty
    list hashes to the digest of the empty byte string.

    Raises ContextIOError if a file cannot be read.
    """
    reader = reader or OsFileReader()
    hasher = hashlib.sha256()
    for rel_path in files:
        try:
            content = reader.read_file(join_path(root, rel_path))
        except OSError as e:
            raise ContextIOError("failed to read", rel_path) from e
        hasher.update(path_bytes(rel_path))
        hasher.update(b"\x00")
        hasher.update(content)
    return truncate_digest(hasher.hexdigest(), truncate_length)


class Hasher:
    """
    Compute a content hash of a directory as a container build would see it.

    The ignore file (e.g. .dockerignore) is read from the directory root. All
    collaborators are optional; defaults read from disk and discard diagnostics.
    """

    def __init__(
        self,
        *,
        ignore_parser: IgnoreParser | None = None,
        file_reader: FileReader | None = None,
        logger: DiagnosticLogger | None = None,
        matcher_factory: MatcherFactory | None = None,
        always_include: Iterable[str] = (),
        truncate_length: int = DEFAULT_TRUNCATE_LENGTH,
    ) -> None:
        if truncate_length < 0:
            raise ValueError(f"truncate_length must be >= 0, got {truncate_length}")
        self.ignore_parser = ignore_parser or DockerignoreParser()
        self.file_reader = file_reader or OsFileReader()
        self.logger = logger or NullLogger()
        self.matcher_factory = matcher_factory or rule_matcher
        self.always_include = frozenset(always_include)
        self.truncate_length = truncate_length

    def hash(self, root: str, ignore_file_name: str = DOCKERIGNORE) -> str:
        """Return the (possibly truncated) hex digest of root's build context."""
        root = str(root)
        matcher = self.load_matcher(root, ignore_file_name)
        files = self._collect(root, matcher)
        digest = hash_files(
            root,
            files,
            truncate_length=self.truncate_length,
            reader=self.file_reader,
        )
        logger.debug("Hashed %d files under %s: %s", len(files), root, digest)
        return digest

    def collected_files(self, root: str, ignore_file_name: str = DOCKERIGNORE) -> list[str]:
        """Return the sorted relative paths that hash() would include."""
        root = str(root)
        return self._collect(root, self.load_matcher(root, ignore_file_name))

    def load_matcher(self, root: str, ignore_file_name: str) -> PatternMatcher:
        """
        Read and compile the ignore file at root/ignore_file_name.

        A missing file yields a matcher with no rules. Raises ContextIOError if
        the file exists but cannot be read, PatternError if it cannot be parsed.
        """
        path = join_path(str(root), ignore_file_name)
        try:
            data = self.file_reader.read_file(path)
        except FileNotFoundError:
            logger.debug("No %s in %s; including every file", ignore_file_name, root)
            return self.matcher_factory([])
        except OSError as e:
            raise ContextIOError("failed to open", ignore_file_name) from e

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PatternError(f"{ignore_file_name} is not valid UTF-8") from e

        patterns = self.ignore_parser.parse(text)
        logger.debug("Loaded %d patterns from %s", len(patterns), ignore_file_name)
        return self.matcher_factory(patterns)

    def _collect(self, root: str, matcher: PatternMatcher) -> list[str]:
        return collect_files(
            root,
            matcher,
            always_include=self.always_include,
            reader=self.file_reader,
            diagnostics=self.logger,
        )
