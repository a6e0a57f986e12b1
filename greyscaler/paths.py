"""Output filename derivation."""

import os

GREYSCALE_SUFFIX = "_greyscale"


def split_extension(path: str) -> tuple[str, str]:
    """
    Split ``path`` into ``(base, extension)``.

    The extension runs from the last dot of the final path element to the end,
    dot included. Dots in directory names are ignored, and a name such as
    ``.png`` is all extension.
    """
    separators = os.sep + (os.altsep or "")
    for index in range(len(path) - 1, -1, -1):
        char = path[index]
        if char in separators:
            break
        if char == ".":
            return path[:index], path[index:]
    return path, ""


def output_path_for(path: str, suffix: str = GREYSCALE_SUFFIX) -> str:
    """``photo.jpg`` -> ``photo_greyscale.jpg``."""
    base, extension = split_extension(path)
    return f"{base}{suffix}{extension}"
