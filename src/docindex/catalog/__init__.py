"""
Documentation Catalog

Load skill manifests (YAML records or a directory of skill packages)
into an immutable, validated Catalog.
"""

from docindex.catalog.errors import (
    DanglingEscalation,
    DuplicateSkill,
    MalformedManifest,
    ManifestError,
)
from docindex.catalog.loader import CatalogLoader, load
from docindex.catalog.models import (
    Catalog,
    Document,
    DocumentCategory,
    NeighborEdge,
    Skill,
)
from docindex.catalog.parser import (
    SkillDirectoryParser,
    extract_frontmatter,
    parse_skill_directory,
)

__all__ = [
    # Models
    "Catalog",
    "Document",
    "DocumentCategory",
    "NeighborEdge",
    "Skill",
    # Errors
    "DanglingEscalation",
    "DuplicateSkill",
    "MalformedManifest",
    "ManifestError",
    # Loading
    "CatalogLoader",
    "load",
    "SkillDirectoryParser",
    "extract_frontmatter",
    "parse_skill_directory",
]
