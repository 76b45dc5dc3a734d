"""
Note file discovery.
"""

import glob
import os
from pathlib import Path
from typing import List

from notedex.utils import get_logger

logger = get_logger(__name__)


def glob_files(pattern: str) -> List[Path]:
    """
    Expand a glob pattern into a sorted list of files.

    ``~`` is expanded to the user's home directory and ``**`` matches any
    number of directories. Directories matching the pattern are skipped.

    Args:
        pattern: Glob pattern, e.g. ``~/notes/**/*.md``.

    Returns:
        Matching file paths, sorted.
    """
    expanded = os.path.expanduser(pattern)
    logger.info(f"Sourcing notes matching: {expanded}")

    paths = sorted(Path(p) for p in glob.glob(expanded, recursive=True))
    files = [path for path in paths if path.is_file()]
    logger.debug(f"Found {len(files)} files ({len(paths) - len(files)} non-files skipped)")
    return files
