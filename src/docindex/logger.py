"""
Structured logging for resolver events.

Outputs JSON-formatted logs for Loki ingestion. Only outcome events are
logged; per-document scoring stays at debug level on the module loggers.

Logged events:
- catalog.loaded
- catalog.rejected
- query.resolved
- query.no_match
- escalation.suggested
- document.loaded
- session.reset

Usage:
    from docindex.logger import ResolverLogger

    logger = ResolverLogger(session_id="session-123")
    logger.log_query_resolved(query="turbo frame", result=result)
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from docindex.catalog.models import Catalog, Document
    from docindex.models import EscalationSuggestion, MatchResult

EVENT_LOGGER_NAME = "docindex.events"

# Configure structured logger for Loki
_event_logger = logging.getLogger(EVENT_LOGGER_NAME)
_event_logger.setLevel(logging.INFO)

# Default handler outputs JSON to stdout (for container/Loki pickup)
if not _event_logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    _event_logger.addHandler(handler)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(level: str = "info") -> None:
    """
    Set the level for every docindex logger.

    Args:
        level: debug, info, warning, or error
    """
    numeric = _LEVELS.get(level.lower(), logging.INFO)
    logging.getLogger("docindex").setLevel(numeric)
    _event_logger.setLevel(numeric)


class ResolverLogger:
    """
    Structured logger for resolver events.

    Each entry carries timestamp, level, event, service and, when set,
    session_id, followed by event-specific fields.
    """

    def __init__(
        self,
        service_name: str = "docindex",
        session_id: Optional[str] = None,
        log_format: str = "json",
        extra_labels: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize resolver logger.

        Args:
            service_name: Service name for log attribution
            session_id: Agent session the events belong to
            log_format: "json" for Loki, "text" for console
            extra_labels: Additional labels for Loki filtering
        """
        self.service_name = service_name
        self.session_id = session_id
        self.log_format = log_format
        self.extra_labels = extra_labels or {}
        self._logger = _event_logger

    def _emit(self, event: str, level: str = "info", **extra_fields: Any) -> None:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "event": event,
            "service": self.service_name,
        }
        if self.session_id:
            entry["session_id"] = self.session_id

        entry.update({k: v for k, v in extra_fields.items() if v is not None})

        if self.extra_labels:
            entry["labels"] = self.extra_labels

        if self.log_format == "text":
            fields = " ".join(
                f"{k}={v}" for k, v in entry.items()
                if k not in ("timestamp", "level", "event", "service")
            )
            log_line = f"{event} {fields}".rstrip()
        else:
            log_line = json.dumps(entry, default=str)

        if level == "error":
            self._logger.error(log_line)
        elif level == "warn":
            self._logger.warning(log_line)
        else:
            self._logger.info(log_line)

    def log_catalog_loaded(self, source: str, catalog: "Catalog") -> None:
        """Log a successful catalog build."""
        self._emit(
            event="catalog.loaded",
            source=source,
            skill_count=len(catalog.skills),
            document_count=len(catalog.documents()),
        )

    def log_catalog_rejected(self, source: str, error: Exception) -> None:
        """Log a manifest rejected at load time."""
        self._emit(
            event="catalog.rejected",
            level="error",
            source=source,
            error_type=type(error).__name__,
            error=str(error),
            record_index=getattr(error, "index", None),
            record_path=getattr(error, "path", None),
        )

    def log_query_resolved(self, query: str, result: "MatchResult") -> None:
        top = result.top
        self._emit(
            event="query.resolved",
            query=query,
            hit_count=len(result.hits),
            top_document=top.document.path if top else None,
            top_skill=result.top_skill,
            top_score=top.score if top else None,
        )

    def log_no_match(self, query: str) -> None:
        self._emit(event="query.no_match", query=query)

    def log_escalation_suggested(self, query: str, escalation: "EscalationSuggestion") -> None:
        """Log an advisory escalation attached to a result."""
        self._emit(
            event="escalation.suggested",
            query=query,
            from_skill=escalation.from_skill,
            to_skill=escalation.to_skill,
            condition=escalation.condition or None,
            score=escalation.score,
        )

    def log_document_loaded(self, document: "Document", size: int) -> None:
        self._emit(
            event="document.loaded",
            path=document.path,
            skill=document.skill,
            category=document.category.value,
            size=size,
        )

    def log_session_reset(self, entry_count: int) -> None:
        self._emit(event="session.reset", entry_count=entry_count)
