"""Shared constants for lprojfill.

Grouped by domain:
- Filesystem layout: lproj naming and resource file extension
- Input limits: DoS prevention via size constraints
- Collaborator defaults: endpoints, API versions, timeouts

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Filesystem layout
    "LPROJ_SUFFIX",
    "STRINGS_EXTENSION",
    "DEFAULT_BASE_LOCALE",
    "IGNORED_DIR_NAMES",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Collaborator defaults
    "GITHUB_API_URL",
    "GITHUB_API_VERSION",
    "LIBRETRANSLATE_URL",
    "DEFAULT_TIMEOUT",
]

# ============================================================================
# FILESYSTEM LAYOUT
# ============================================================================

# Locale directories are named "<code>.lproj" (e.g. "de.lproj").
LPROJ_SUFFIX: str = ".lproj"

# Only files with this suffix are parsed as string tables.
STRINGS_EXTENSION: str = ".strings"

# Locale whose files establish the canonical id of a phrase.
DEFAULT_BASE_LOCALE: str = "en"

# Directory names never descended into when enumerating resource files.
IGNORED_DIR_NAMES: frozenset[str] = frozenset({".git"})

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum raw size of a single .strings payload (10 MiB). Real string tables
# are a few hundred KiB at most; anything larger is malformed or hostile,
# particularly when fetched from a remote corpus.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# COLLABORATOR DEFAULTS
# ============================================================================

GITHUB_API_URL: str = "https://api.github.com"

# Sent as X-GitHub-Api-Version on every request.
GITHUB_API_VERSION: str = "2022-11-28"

# Public LibreTranslate instance; self-hosted deployments override it.
LIBRETRANSLATE_URL: str = "https://libretranslate.com"

# Per-request network timeout in seconds.
DEFAULT_TIMEOUT: float = 10.0
