"""
Pydantic models for query results.

A MatchResult lives for one query: the matcher ranks documents, the
router may attach an advisory escalation, and the caller discards it.
"""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from docindex.catalog.models import Document


class ScoredDocument(BaseModel):
    """A document paired with its match score."""
    model_config = ConfigDict(frozen=True)

    document: Document
    score: int = Field(..., ge=0)


class EscalationSuggestion(BaseModel):
    """
    Non-binding hint that a neighboring skill may fit the query better.

    The condition is the edge's free text, passed through for the agent
    host to judge. Nothing here forces the handoff.
    """
    model_config = ConfigDict(frozen=True)

    from_skill: str = Field(..., description="Skill that matched the query")
    to_skill: str = Field(..., description="Suggested neighbor skill")
    condition: str = Field(default="", description="When to escalate, as authored")
    score: int = Field(default=0, ge=0, description="Keyword evidence for the neighbor")


class MatchResult(BaseModel):
    """Ranked documents for one query, plus an optional escalation."""
    model_config = ConfigDict(frozen=True)

    query: str = ""
    hits: Tuple[ScoredDocument, ...] = ()
    escalation: Optional[EscalationSuggestion] = None

    @property
    def is_empty(self) -> bool:
        return not self.hits

    @property
    def top(self) -> Optional[ScoredDocument]:
        return self.hits[0] if self.hits else None

    @property
    def top_skill(self) -> Optional[str]:
        """Name of the skill owning the top hit."""
        return self.hits[0].document.skill if self.hits else None

    def documents(self) -> list[Document]:
        return [hit.document for hit in self.hits]

    def with_escalation(self, escalation: Optional[EscalationSuggestion]) -> "MatchResult":
        return self.model_copy(update={"escalation": escalation})
