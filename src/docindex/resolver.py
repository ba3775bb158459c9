"""
Documentation Index Resolver

The single entry point the agent host calls: resolve a query into ranked
documents with an advisory escalation, and load reference documents
lazily, at most once per session.

Data flow:
    CatalogLoader builds the Catalog at startup
    -> TopicMatcher ranks documents per query
    -> EscalationRouter may annotate the result
    -> SessionCache records which documents were loaded

Example:
    resolver = DocumentIndexResolver.from_config(get_config())

    result = resolver.resolve("how do I broadcast a turbo stream")
    for hit in result.hits:
        print(hit.score, hit.document.path)
    if result.escalation:
        print("consider", result.escalation.to_skill, "-", result.escalation.condition)

    text = resolver.load_document(result.top.document.path)  # None if already loaded
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from docindex.catalog.loader import CatalogLoader
from docindex.catalog.models import Catalog
from docindex.catalog.parser import SkillDirectoryParser
from docindex.config import DocIndexConfig
from docindex.logger import ResolverLogger, configure_logging
from docindex.matcher import TopicMatcher
from docindex.models import MatchResult
from docindex.router import EscalationRouter
from docindex.session import SessionCache

logger = logging.getLogger(__name__)


class DocumentIndexResolver:
    """
    Resolve queries against one immutable Catalog.

    The catalog is shared read-only; the session cache is the only mutable
    state and is owned by this resolver.
    """

    def __init__(
        self,
        catalog: Catalog,
        session: Optional[SessionCache] = None,
        root: Optional[Path] = None,
        config: Optional[DocIndexConfig] = None,
        event_logger: Optional[ResolverLogger] = None,
    ):
        """
        Initialize resolver.

        Args:
            catalog: Loaded catalog
            session: Session cache (a fresh one if not given)
            root: Directory document paths are relative to
            config: Scoring and logging settings (defaults if not given)
            event_logger: Structured event logger
        """
        config = config or DocIndexConfig()
        self.catalog = catalog
        self.session = session if session is not None else SessionCache()
        self.root = Path(root) if root is not None else None
        self.config = config
        self.event_logger = event_logger or ResolverLogger(
            service_name=config.service_name,
            log_format=config.log_format,
        )
        self.matcher = TopicMatcher(
            trigger_weight=config.trigger_weight,
            exact_trigger_bonus=config.exact_trigger_bonus,
            max_results=config.max_results,
        )
        self.router = EscalationRouter(
            trigger_weight=config.trigger_weight,
            exact_trigger_bonus=config.exact_trigger_bonus,
        )

    @classmethod
    def from_config(
        cls,
        config: DocIndexConfig,
        event_logger: Optional[ResolverLogger] = None,
    ) -> "DocumentIndexResolver":
        """
        Build the catalog from configured sources.

        ``manifest_path`` wins over ``skills_dir``. Document paths resolve
        against the manifest's directory or the skills root.

        Raises:
            ValueError: If neither source is configured
            ManifestError: If the manifest is rejected
        """
        configure_logging(config.log_level)
        event_logger = event_logger or ResolverLogger(
            service_name=config.service_name,
            log_format=config.log_format,
        )
        loader = CatalogLoader(event_logger=event_logger)

        manifest_path = config.get_manifest_path()
        skills_root = config.get_skills_root()
        if manifest_path is not None:
            catalog = loader.load_file(manifest_path)
            root = skills_root or manifest_path.parent
        elif skills_root is not None:
            records = SkillDirectoryParser().parse_directory(skills_root)
            catalog = loader.load(records, source=str(skills_root))
            root = skills_root
        else:
            raise ValueError("Set DOCINDEX_MANIFEST_PATH or DOCINDEX_SKILLS_DIR")

        return cls(catalog, root=root, config=config, event_logger=event_logger)

    def resolve(self, query: str) -> MatchResult:
        """
        Rank documents for ``query`` and attach an escalation suggestion.

        Never raises for an unmatched query; the result is simply empty.
        """
        result = self.matcher.match(self.catalog, query)
        if result.is_empty:
            self.event_logger.log_no_match(query)
            return result

        escalation = self.router.route(self.catalog, result.top_skill, query)
        result = result.with_escalation(escalation)

        self.event_logger.log_query_resolved(query, result)
        if escalation is not None:
            self.event_logger.log_escalation_suggested(query, escalation)
        return result

    def should_load(self, path: str) -> bool:
        """True if ``path`` has not been loaded this session."""
        return not self.session.was_loaded(path)

    def load_document(self, path: str) -> Optional[str]:
        """
        Read a document's text the first time it is requested this session.

        Args:
            path: Catalog document path

        Returns:
            Document text, or None if it was already loaded this session

        Raises:
            KeyError: If ``path`` is not in the catalog
            ValueError: If the resolver has no document root
            FileNotFoundError: If the file is missing on disk
        """
        document = self.catalog.get_document(path)
        if document is None:
            raise KeyError(f"Unknown document: {path}")

        if self.root is None:
            raise ValueError("Resolver has no document root to read from")

        # Claimed before reading so concurrent callers read the file once
        if not self.session.claim(path):
            logger.debug("Already loaded this session: %s", path)
            return None

        try:
            text = (self.root / path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            self.session.release(path)
            raise
        self.event_logger.log_document_loaded(document, size=len(text))
        return text

    def reset_session(self) -> None:
        """End the session: forget every loaded document."""
        count = len(self.session)
        self.session.reset()
        self.event_logger.log_session_reset(entry_count=count)
