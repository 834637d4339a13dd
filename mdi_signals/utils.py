"""
Common Utility Functions

Provides filesystem and formatting helpers for the generator pipeline:
- Directory creation, reset and recursive copy
- Human-readable size and duration formatting
"""

import shutil
from pathlib import Path
from typing import List, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary

    Args:
        path: Directory path

    Returns:
        Path object for the directory
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def reset_directory(path: Union[str, Path]) -> Path:
    """Delete a directory tree if present and create it empty"""
    path = Path(path)
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
    return path


def remove_directory(path: Union[str, Path]) -> bool:
    """Remove a directory tree, returning False if it did not exist"""
    path = Path(path)
    if not path.exists():
        return False
    shutil.rmtree(path)
    return True


def copy_tree(source: Union[str, Path], target: Union[str, Path]) -> List[Path]:
    """
    Copy every file below source into target, overwriting existing files

    Args:
        source: Directory to copy from
        target: Directory to copy into (created if missing)

    Returns:
        List of copied target file paths
    """
    source = Path(source)
    target = Path(target)

    if not source.is_dir():
        raise FileNotFoundError(f"Directory not found: {source}")

    copied = []
    for path in sorted(source.rglob('*')):
        destination = target / path.relative_to(source)
        if path.is_dir():
            destination.mkdir(parents=True, exist_ok=True)
        else:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(path, destination)
            copied.append(destination)

    return copied


def format_size(size_bytes: int) -> str:
    """
    Format byte size in human-readable format

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB")
    """
    if size_bytes == 0:
        return "0 B"

    size_names = ["B", "KB", "MB", "GB", "TB"]
    i = 0

    while size_bytes >= 1024 and i < len(size_names) - 1:
        size_bytes /= 1024.0
        i += 1

    if i == 0:
        return f"{size_bytes} {size_names[i]}"
    else:
        return f"{size_bytes:.1f} {size_names[i]}"


def format_duration(seconds: float) -> str:
    """
    Format duration in human-readable format

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string (e.g., "2m 15s")
    """
    if seconds < 0:
        return "0s"

    parts = []

    if seconds >= 3600:
        hours = int(seconds // 3600)
        parts.append(f"{hours}h")
        seconds %= 3600

    if seconds >= 60:
        minutes = int(seconds // 60)
        parts.append(f"{minutes}m")
        seconds %= 60

    if seconds >= 1 or not parts:
        parts.append(f"{int(seconds)}s")
    elif seconds > 0:
        parts.append(f"{seconds:.1f}s")

    return " ".join(parts)
