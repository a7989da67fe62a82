"""Scanner backends - turn a source tree into (name, path, line) occurrences.

Two interchangeable backends:
- NativeScanner walks the tree itself and scans every source file line by line.
- RipgrepScanner delegates the search to `rg --json` and parses its event stream.

The engine only consumes the Occurrence triples, so it does not care which
backend produced them.
"""

import base64
import json
import os
import subprocess
from collections.abc import Iterable, Iterator
from pathlib import Path

from featcheck.exceptions import ScanError
from featcheck.extraction import FEATURE_GUARD_RG_PATTERN, extract_feature_names
from featcheck.models import Occurrence
from featcheck.utils.constants import BACKEND_NATIVE, BACKEND_RIPGREP, SOURCE_EXTENSION
from featcheck.utils.logging import get_subprocess_env, logger


def _absolute(path: str | Path) -> Path:
    """Absolute, normalized path without resolving symlinks."""
    return Path(os.path.abspath(path))


class PathExclusions:
    """Excluded path prefixes; a path is excluded if it is one or lies under one.

    Relative entries are matched against the scan root, and also against the
    working directory unless that reading would cover a whole directory root.
    So `target` and `crate/target` both work, while `member` given from the
    parent of `member/` does not swallow a scan of `member/` itself.
    """

    def __init__(self, excluded_paths: Iterable[str | Path], root: str | Path | None = None):
        base = None
        root_is_dir = False
        if root is not None:
            base = Path(root)
            if base.is_file():
                base = base.parent
            else:
                root_is_dir = True
            base = _absolute(base)

        prefixes = set()
        for entry in excluded_paths:
            entry = Path(entry)
            if entry.is_absolute() or base is None:
                prefixes.add(_absolute(entry))
                continue
            prefixes.add(_absolute(base / entry))
            from_cwd = _absolute(entry)
            if root_is_dir and base.is_relative_to(from_cwd):
                logger.debug(f"Not excluding {from_cwd}: it contains the scan root {base}")
                continue
            prefixes.add(from_cwd)
        self.prefixes = frozenset(prefixes)

    def matches(self, path: str | Path) -> bool:
        if not self.prefixes:
            return False
        path = _absolute(path)
        if path in self.prefixes:
            return True
        return any(parent in self.prefixes for parent in path.parents)

    def __bool__(self) -> bool:
        return bool(self.prefixes)


def is_hidden(name: str) -> bool:
    """Entries whose name starts with '.' are never descended into."""
    return name.startswith(".")


class NativeScanner:
    """Walks the tree with os.walk and scans matching files line by line."""

    name = BACKEND_NATIVE

    def __init__(self, source_extension: str = SOURCE_EXTENSION):
        self.source_extension = source_extension

    def scan(self, root: Path, exclusions: PathExclusions) -> Iterator[Occurrence]:
        root = Path(root)
        if not root.exists():
            raise ScanError(f"Scan root does not exist: {root}", {"path": str(root)})

        # A file root is scanned on its own, even if its name is hidden.
        if root.is_file():
            if not exclusions.matches(root) and root.suffix == self.source_extension:
                yield from self.scan_file(root)
            return

        def _raise(error: OSError):
            raise ScanError(
                f"Failed to read directory {error.filename}: {error.strerror}",
                {"path": error.filename},
            ) from error

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            current = Path(dirpath)
            dirnames[:] = sorted(
                d for d in dirnames
                if not is_hidden(d) and not exclusions.matches(current / d)
            )
            for filename in sorted(filenames):
                if is_hidden(filename):
                    continue
                file_path = current / filename
                if file_path.suffix != self.source_extension:
                    continue
                if exclusions.matches(file_path):
                    logger.debug(f"Skipping excluded file {file_path}")
                    continue
                yield from self.scan_file(file_path)

    def scan_file(self, path: Path) -> Iterator[Occurrence]:
        """Yield every guard occurrence in one file (1-based line numbers)."""
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                lines = f.readlines()
        except OSError as e:
            raise ScanError(f"Failed to read {path}: {e}", {"path": str(path)}) from e

        for line_number, line in enumerate(lines, start=1):
            for name in extract_feature_names(line):
                yield Occurrence(name, path, line_number)


def _rg_text(field: dict) -> str:
    """Decode an rg JSON text field, which is either {"text"} or base64 {"bytes"}."""
    if "text" in field:
        return field["text"]
    return os.fsdecode(base64.b64decode(field.get("bytes", "")))


def parse_rg_events(lines: Iterable[str]) -> Iterator[Occurrence]:
    """Parse `rg --json` output into occurrences.

    Only `match` events carry data; begin/end/context/summary events are
    skipped, as are lines that are not valid JSON.
    """
    for raw in lines:
        raw = raw.strip()
        if not raw:
            continue
        try:
            event = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug(f"Skipping non-JSON rg output: {raw[:80]}")
            continue
        if event.get("type") != "match":
            continue

        data = event.get("data", {})
        path = Path(_rg_text(data.get("path", {})))
        line_number = data.get("line_number")
        if line_number is None:
            continue
        for name in extract_feature_names(_rg_text(data.get("lines", {}))):
            yield Occurrence(name, path, int(line_number))


class RipgrepScanner:
    """Runs ripgrep over the tree and parses its JSON event stream."""

    name = BACKEND_RIPGREP

    def __init__(
        self,
        source_extension: str = SOURCE_EXTENSION,
        rg_binary: str = "rg",
        timeout: int = 300,
    ):
        self.source_extension = source_extension
        self.rg_binary = rg_binary
        self.timeout = timeout

    def excluded_globs(self, root: Path, exclusions: PathExclusions) -> list[str]:
        """Root-anchored negated globs for every excluded prefix under root."""
        base = _absolute(root)
        return [
            "!/" + prefix.relative_to(base).as_posix()
            for prefix in sorted(exclusions.prefixes)
            if prefix != base and prefix.is_relative_to(base)
        ]

    def build_command(self, root: Path, exclusions: PathExclusions | None = None) -> list[str]:
        """rg invocation for root.

        A directory root is searched as "." from inside it, so excluded
        directories can be pruned with globs anchored at the root.
        """
        root = Path(root)
        cmd = [
            self.rg_binary,
            "--json",
            "--no-ignore",
            "--glob",
            f"*{self.source_extension}",
        ]
        if root.is_dir():
            for glob in self.excluded_globs(root, exclusions or PathExclusions([])):
                cmd.extend(["--glob", glob])
        cmd.extend(["--regexp", FEATURE_GUARD_RG_PATTERN])
        cmd.append("." if root.is_dir() else str(root))
        return cmd

    def scan(self, root: Path, exclusions: PathExclusions) -> Iterator[Occurrence]:
        root = Path(root)
        if not root.exists():
            raise ScanError(f"Scan root does not exist: {root}", {"path": str(root)})

        cmd = self.build_command(root, exclusions)
        cwd = root if root.is_dir() else None
        logger.debug(f"Running {' '.join(cmd)} in {cwd or '.'}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                cwd=cwd,
                env=get_subprocess_env(),
            )
        except FileNotFoundError:
            raise ScanError(
                f"ripgrep binary '{self.rg_binary}' not found. Install ripgrep or use --backend native.",
                {"binary": self.rg_binary},
            ) from None
        except subprocess.TimeoutExpired as e:
            raise ScanError(f"ripgrep timed out after {self.timeout}s", {"timeout": self.timeout}) from e

        # rg exits 1 when nothing matched, 2 on any error (even with partial matches)
        if result.returncode not in (0, 1):
            raise ScanError(
                f"ripgrep failed with exit code {result.returncode}: {result.stderr.strip()}",
                {"exit_code": result.returncode},
            )

        for occurrence in parse_rg_events(result.stdout.splitlines()):
            if cwd is not None:
                # rg reports paths relative to the directory it ran in
                occurrence = occurrence._replace(path=cwd / occurrence.path)
            if not exclusions.matches(occurrence.path):
                yield occurrence


def create_scanner(
    backend: str = BACKEND_NATIVE,
    source_extension: str = SOURCE_EXTENSION,
    rg_binary: str = "rg",
    timeout: int = 300,
):
    """Factory for scanner backends by name."""
    if backend == BACKEND_NATIVE:
        return NativeScanner(source_extension)
    if backend == BACKEND_RIPGREP:
        return RipgrepScanner(source_extension, rg_binary, timeout)
    raise ValueError(f"Unknown scanner backend: {backend}")
