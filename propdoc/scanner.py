import logging
import os
from pathlib import Path
from typing import List

import chardet
import pathspec

from propdoc.config import ExtractConfig

logger = logging.getLogger(__name__)


def _pathspec(patterns) -> pathspec.PathSpec:
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def _gitignore_pathspec(root: Path):
    gitignore_pth = root / ".gitignore"
    if not gitignore_pth.exists():
        return None
    return _pathspec(gitignore_pth.read_text(encoding="utf-8", errors="replace").splitlines())


def scan_files(config: ExtractConfig) -> List[str]:
    """Absolute paths of the files under ``config.root`` selected by the include/exclude globs."""
    root = Path(os.path.abspath(config.root))
    include = _pathspec(config.include)
    exclude = _pathspec(config.exclude)
    ignored = _gitignore_pathspec(root) if config.respect_gitignore else None

    files = []
    for file_path in root.rglob("*"):
        if not file_path.is_file():
            continue
        rel = file_path.relative_to(root).as_posix()
        if not include.match_file(rel) or exclude.match_file(rel):
            continue
        if ignored is not None and ignored.match_file(rel):
            continue
        files.append(str(file_path))

    files.sort()
    logger.debug("Scanned %s: %d file(s) selected", root, len(files))
    return files


def read_source(file_path: str) -> str:
    with open(file_path, "rb") as f:
        raw = f.read()
    guess = chardet.detect(raw)
    encoding = guess["encoding"] or "utf-8"
    try:
        return raw.decode(encoding, errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def relative_path(file_path: str, root: str) -> str:
    return Path(os.path.relpath(file_path, root)).as_posix()
