"""Discovery of C# source files and generated-code exclusion."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

log = logging.getLogger(__name__)

GENERATED_SUFFIXES = (".g.cs", ".g.i.cs", ".designer.cs", ".generated.cs")
GENERATED_MARKER = "<auto-generated"
SKIPPED_DIRS = frozenset({"bin", "obj"})

# only the leading comment block is inspected for the marker
_HEADER_BYTES = 2048


def is_generated_file(path: Path) -> bool:
    """
    Check whether a file is generated code.

    Matches the usual generated-file suffixes, or a leading comment
    carrying an <auto-generated> tag.
    """
    if path.name.lower().endswith(GENERATED_SUFFIXES):
        return True

    with open(path, "rb") as f:
        head = f.read(_HEADER_BYTES).decode("utf-8", errors="replace")

    for line in head.splitlines():
        stripped = line.strip().lstrip("\ufeff")
        if not stripped:
            continue
        if not stripped.startswith(("//", "/*", "*")):
            break
        if GENERATED_MARKER in stripped.lower():
            return True
    return False


def find_csharp_files(directory: Path) -> List[Path]:
    """Find all .cs files under directory, skipping build output folders."""
    files = []
    for cs_file in sorted(directory.rglob("*.cs")):
        parts = cs_file.relative_to(directory).parts[:-1]
        if any(p in SKIPPED_DIRS or p.startswith(".") for p in parts):
            continue
        files.append(cs_file)
    return files


def select_sources(paths: List[Path], include_generated: bool = False) -> List[Path]:
    """Expand directories and drop generated files unless asked to keep them."""
    selected = []
    for path in paths:
        candidates = find_csharp_files(path) if path.is_dir() else [path]
        for candidate in candidates:
            if not include_generated and _is_generated(candidate):
                log.info(f"Skipping generated file: {candidate}")
                continue
            selected.append(candidate)
    return selected


def _is_generated(path: Path) -> bool:
    try:
        return is_generated_file(path)
    except OSError as e:
        # unreadable files are left in; the analysis pass reports them
        log.warning(f"Could not inspect {path}: {e}")
        return False
