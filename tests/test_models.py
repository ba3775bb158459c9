"""Tests for catalog and result models."""

from __future__ import annotations

from docindex.catalog import DocumentCategory
from docindex.models import EscalationSuggestion, MatchResult, ScoredDocument


class TestCatalogModel:
    def test_lookups(self, catalog):
        assert catalog.get_skill("turbo-streams").name == "turbo-streams"
        assert catalog.get_skill("missing") is None
        assert catalog.get_document("missing.md") is None
        assert catalog.owner_of("missing.md") is None

    def test_documents_in_declaration_order(self, catalog):
        assert [d.path for d in catalog.documents()] == [
            "turbo-navigation/SKILL.md",
            "turbo-navigation/references/frames.md",
            "turbo-streams/SKILL.md",
            "turbo-streams/references/broadcasting.md",
            "stimulus-controllers/SKILL.md",
            "stimulus-controllers/handbook/conventions.md",
        ]

    def test_neighbor_names(self, catalog):
        assert catalog.get_skill("turbo-streams").neighbor_names() == ["stimulus-controllers"]
        assert catalog.get_skill("stimulus-controllers").neighbor_names() == []

    def test_category_values(self):
        assert [c.value for c in DocumentCategory] == [
            "skill", "reference", "handbook", "command", "agent",
        ]


class TestMatchResult:
    def test_empty(self):
        result = MatchResult(query="xyz")
        assert result.is_empty
        assert result.top is None
        assert result.top_skill is None
        assert result.documents() == []

    def test_with_escalation_returns_copy(self, catalog):
        entry = catalog.get_skill("turbo-streams").entry_document
        result = MatchResult(query="broadcast", hits=(ScoredDocument(document=entry, score=111),))
        escalation = EscalationSuggestion(
            from_skill="turbo-streams",
            to_skill="stimulus-controllers",
            condition="client-side orchestration",
            score=2,
        )

        annotated = result.with_escalation(escalation)
        assert annotated.escalation == escalation
        assert result.escalation is None
        assert annotated.top_skill == "turbo-streams"
        assert annotated.documents() == [entry]
