"""
Pure utility functions for path and string manipulation.

This module contains ONLY pure functions with no side effects:
- No filesystem I/O
- No external state mutation
- Deterministic output for given inputs
"""

from __future__ import annotations

import datetime
import os

from ..core.constants import OUTPUT_FILENAME_PREFIX, OUTPUT_IMAGE_FORMAT


def generate_output_filename(
    date: datetime.date | None = None,
    prefix: str = OUTPUT_FILENAME_PREFIX,
    extension: str = OUTPUT_IMAGE_FORMAT,
) -> str:
    """
    Generate the default stereogram filename.

    Args:
        date: Date stamp to embed (today if None)
        prefix: Filename prefix
        extension: File extension without the dot

    Returns:
        Output filename string

    Examples:
        >>> generate_output_filename(datetime.date(2025, 3, 9))
        'stereonix_2025-03-09.png'
    """
    if date is None:
        date = datetime.date.today()

    safe_prefix = sanitize_filename(prefix) or OUTPUT_FILENAME_PREFIX
    return f"{safe_prefix}_{date.isoformat()}.{extension}"


def generate_depth_filename(output_filename: str) -> str:
    """
    Derive a companion depth map filename from the stereogram filename.

    Examples:
        >>> generate_depth_filename("out/stereonix_2025-03-09.png")
        'out/stereonix_2025-03-09_depth.png'
    """
    base, ext = os.path.splitext(output_filename)
    return f"{base}_depth{ext or '.' + OUTPUT_IMAGE_FORMAT}"


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename for cross-platform compatibility.

    Pure function that removes invalid characters and normalizes filenames.

    Args:
        filename: Original filename

    Returns:
        Sanitized filename

    Examples:
        >>> sanitize_filename('my<image>.png')
        'my_image_.png'
        >>> sanitize_filename('__scene:1__')
        'scene_1'
    """
    # Replace invalid characters
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        filename = filename.replace(char, "_")

    # Remove multiple underscores
    while "__" in filename:
        filename = filename.replace("__", "_")

    filename = filename.strip("_")
    if len(filename) > 200:
        name, ext = os.path.splitext(filename)
        filename = name[: 200 - len(ext)] + ext

    return filename
