"""
docindex - Documentation Index Resolver

Index skill documentation packages, match free-text queries to the most
relevant documents, suggest neighboring skills, and track which documents
a session has already loaded.
"""

__version__ = "0.1.0"

from docindex.catalog import (
    Catalog,
    CatalogLoader,
    DanglingEscalation,
    Document,
    DocumentCategory,
    DuplicateSkill,
    MalformedManifest,
    ManifestError,
    NeighborEdge,
    Skill,
    SkillDirectoryParser,
    load,
)
from docindex.config import DocIndexConfig, get_config, reset_config
from docindex.logger import ResolverLogger, configure_logging
from docindex.matcher import TopicMatcher, match
from docindex.models import EscalationSuggestion, MatchResult, ScoredDocument
from docindex.resolver import DocumentIndexResolver
from docindex.router import EscalationRouter, route
from docindex.session import SessionCache

__all__ = [
    # Catalog
    "Catalog",
    "CatalogLoader",
    "Document",
    "DocumentCategory",
    "NeighborEdge",
    "Skill",
    "SkillDirectoryParser",
    "load",
    # Errors
    "DanglingEscalation",
    "DuplicateSkill",
    "MalformedManifest",
    "ManifestError",
    # Query
    "EscalationRouter",
    "EscalationSuggestion",
    "MatchResult",
    "ScoredDocument",
    "TopicMatcher",
    "match",
    "route",
    # Session
    "DocumentIndexResolver",
    "SessionCache",
    # Config / logging
    "DocIndexConfig",
    "ResolverLogger",
    "configure_logging",
    "get_config",
    "reset_config",
]
