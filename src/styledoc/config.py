"""Configuration constants for styledoc."""

from pathlib import Path

# Category used for components whose file never declares an @category.
DEFAULT_CATEGORY: str = "components"

# Navigation categories that are static pages and survive filtering without examples.
STATIC_CATEGORIES: tuple[str, ...] = ("overview", "develop", "styles")

# Token joining the lines of a prop declaration so the prop parser can split them again.
PROP_SEPARATOR: str = "split-here"

# UI library that @prop entries are grouped under unless the caller overrides it.
DEFAULT_PROP_LIBRARY: str = "react"

# Sources scanned when `styledoc build` gets no patterns.
DEFAULT_SOURCE_GLOBS: tuple[str, ...] = (
    "src/**/*.scss",
    "src/**/*.js",
    "src/**/*.jsx",
    "src/**/*.ts",
    "src/**/*.tsx",
)

DEFAULT_OUTPUT_FILENAME: str = "docs.json"

# Navigation template location. First file found is used.
NAVIGATION_FILES: list[Path] = [
    Path("docs/navigation.json"),
    Path("navigation.json"),
    Path("~/.config/styledoc/navigation.json").expanduser(),
]


def resolve_navigation_file() -> Path | None:
    """Return the first existing navigation template, or None when there is none."""
    for candidate in NAVIGATION_FILES:
        if candidate.is_file():
            return candidate
    return None
