"""External collaborators consumed by the resolver.

Submodules:
    protocols      - CodeSearch, MachineTranslator, DirectoryCopier, ResourceReference
    github         - GitHubCodeSearch (GitHub REST code search)
    libretranslate - LibreTranslateTranslator (LibreTranslate REST API)
    filesystem     - FileSystemCopier (shutil-based tree copy)

Python 3.13+.
"""

from lprojfill.collaborators.filesystem import FileSystemCopier
from lprojfill.collaborators.github import GitHubCodeSearch
from lprojfill.collaborators.libretranslate import LibreTranslateTranslator
from lprojfill.collaborators.protocols import (
    CodeSearch,
    DirectoryCopier,
    MachineTranslator,
    ResourceReference,
)

__all__ = [
    "CodeSearch",
    "DirectoryCopier",
    "FileSystemCopier",
    "GitHubCodeSearch",
    "LibreTranslateTranslator",
    "MachineTranslator",
    "ResourceReference",
]
