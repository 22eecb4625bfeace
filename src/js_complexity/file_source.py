"""Input files and filesystem discovery."""

import fnmatch
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_PATTERNS = [
    "*.min.js",
    "*.bundle.js",
]

SKIP_DIRS = {"node_modules", "bower_components", ".git", ".idea", ".vscode", "coverage"}


@dataclass(frozen=True)
class InputFile:
    """A source file to measure, identified by its path relative to a base directory."""

    path: Path
    base_dir: Path

    @property
    def relative_path(self) -> str:
        try:
            return self.path.relative_to(self.base_dir).as_posix()
        except ValueError:
            return self.path.as_posix()

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.path.read_text(encoding=encoding)

    def __str__(self) -> str:
        return self.relative_path


class FileSystemSource:
    """Enumerates source files below a root directory.

    Files are yielded in sorted relative-path order so that reports are
    reproducible.
    """

    def __init__(
        self,
        root: Path,
        suffixes: Iterable[str] = (".js",),
        ignore_patterns: Optional[List[str]] = None,
        use_gitignore: bool = True,
    ):
        """
        Initialize the file source.

        Args:
            root: Directory to scan
            suffixes: File suffixes to include
            ignore_patterns: Patterns to ignore in addition to the defaults and .gitignore
            use_gitignore: Whether to honour the root's .gitignore file
        """
        self.root = Path(root).resolve()
        self.suffixes = tuple(s.lower() for s in suffixes)
        self.ignore_patterns = list(dict.fromkeys(DEFAULT_IGNORE_PATTERNS + list(ignore_patterns or [])))
        self.gitignore_spec = self._load_gitignore() if use_gitignore else None

    def _load_gitignore(self) -> Optional[PathSpec]:
        """Load patterns from .gitignore file if it exists."""
        gitignore_path = self.root / ".gitignore"

        if not gitignore_path.exists():
            logger.debug(f"No .gitignore file found at {gitignore_path}")
            return None

        try:
            patterns = gitignore_path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            logger.warning(f"Failed to load .gitignore: {e}")
            return None

        patterns = [line.strip() for line in patterns if line.strip() and not line.strip().startswith("#")]
        if not patterns:
            logger.debug(".gitignore file is empty or contains only comments")
            return None

        spec = PathSpec.from_lines(GitWildMatchPattern, patterns)
        logger.info(f"Loaded {len(patterns)} patterns from .gitignore")
        return spec

    def _should_include_file(self, file_path: Path) -> bool:
        """Check if a file should be included based on patterns."""
        if file_path.suffix.lower() not in self.suffixes:
            return False

        relative_path = file_path.relative_to(self.root).as_posix()
        if self.gitignore_spec and self.gitignore_spec.match_file(relative_path):
            return False

        return not any(fnmatch.fnmatch(file_path.name, pattern) for pattern in self.ignore_patterns)

    def _should_skip_directory(self, dir_path: Path) -> bool:
        """Check if a directory should be skipped entirely."""
        if dir_path.name in SKIP_DIRS or dir_path.name.startswith("."):
            return True

        if self.gitignore_spec:
            relative_path = dir_path.relative_to(self.root).as_posix()
            if self.gitignore_spec.match_file(relative_path + "/"):
                return True

        return False

    def scan(self) -> List[InputFile]:
        """Scan the root and return all matching files."""
        files = []

        # Iterative traversal so ignored directories are never entered
        dirs_to_scan = [self.root]
        while dirs_to_scan:
            current_dir = dirs_to_scan.pop()
            try:
                for item in current_dir.iterdir():
                    if item.is_symlink() and item.is_dir():
                        # Symlinked directories can loop back into the tree
                        logger.debug(f"Skipping symlinked directory {item}")
                    elif item.is_dir():
                        if not self._should_skip_directory(item):
                            dirs_to_scan.append(item)
                    elif item.is_file() and self._should_include_file(item):
                        files.append(InputFile(path=item, base_dir=self.root))
            except PermissionError as e:
                logger.debug(f"Permission denied accessing {current_dir}: {e}")
                continue

        files.sort(key=lambda f: f.relative_path)
        logger.info(f"Scanned {self.root}: found {len(files)} matching files")
        return files

    def __iter__(self) -> Iterator[InputFile]:
        return iter(self.scan())
