"""Tests for the escalation router."""

from __future__ import annotations

from docindex.catalog import Catalog, Document, DocumentCategory, NeighborEdge, Skill, load
from docindex.router import EscalationRouter, route


class TestEscalationRouter:
    def test_suggests_neighbor_with_evidence(self, catalog):
        suggestion = route(catalog, "turbo-streams", "broadcast from a stimulus controller")
        assert suggestion is not None
        assert suggestion.from_skill == "turbo-streams"
        assert suggestion.to_skill == "stimulus-controllers"
        assert suggestion.condition == "client-side orchestration"
        assert suggestion.score == 21

    def test_accepts_skill_object(self, catalog):
        skill = catalog.get_skill("turbo-streams")
        suggestion = route(catalog, skill, "refresh stimulus targets")
        assert suggestion.to_skill == "stimulus-controllers"

    def test_no_evidence_no_suggestion(self, catalog):
        assert route(catalog, "turbo-streams", "broadcast") is None

    def test_keywords_covered_by_matched_skill_are_not_evidence(self, catalog):
        # "turbo" appears in the turbo-streams description, but the matched
        # skill already accounts for it.
        assert route(catalog, "turbo-navigation", "how do I use turbo frame") is None

    def test_uncovered_keywords_still_count(self, catalog):
        suggestion = route(catalog, "turbo-navigation", "turbo frame over action cable")
        assert suggestion.to_skill == "turbo-streams"
        assert suggestion.score == 3

    def test_no_neighbors(self, catalog):
        assert route(catalog, "stimulus-controllers", "turbo frame broadcast") is None

    def test_unknown_or_missing_skill(self, catalog):
        assert route(catalog, "hotwire-native", "anything") is None
        assert route(catalog, None, "anything") is None

    def test_condition_is_not_evaluated(self, catalog):
        # The query says nothing about client-side orchestration; keyword
        # evidence alone decides, and the condition is passed through.
        suggestion = route(catalog, "turbo-navigation", "turbo stream")
        assert suggestion.to_skill == "turbo-streams"
        assert suggestion.condition == "server pushes updates to many pages"

    def test_strongest_neighbor_wins(self):
        catalog = load([
            {"name": "hub", "description": "Hub", "neighbors": ["jobs", "mailers"]},
            {"name": "jobs", "description": "Active Job queues", "triggers": ["job"]},
            {"name": "mailers", "description": "Action Mailer", "triggers": ["deliver later"]},
        ])
        suggestion = route(catalog, "hub", "deliver later from a job")
        assert suggestion.to_skill == "mailers"

    def test_tie_goes_to_first_declared(self):
        catalog = load([
            {"name": "hub", "description": "Hub", "neighbors": ["jobs", "mailers"]},
            {"name": "jobs", "description": "Background work", "triggers": ["later"]},
            {"name": "mailers", "description": "Email delivery", "triggers": ["later"]},
        ])
        assert route(catalog, "hub", "do it later").to_skill == "jobs"

    def test_hand_built_catalog_with_dangling_edge(self):
        entry = Document(
            path="a/SKILL.md", title="a", description="A", skill="a",
            category=DocumentCategory.SKILL,
        )
        catalog = Catalog(skills=(
            Skill(name="a", description="A", documents=(entry,),
                  neighbors=(NeighborEdge(name="ghost"),)),
        ))
        assert route(catalog, "a", "ghost") is None

    def test_custom_weights(self, catalog):
        router = EscalationRouter(trigger_weight=1, exact_trigger_bonus=0)
        suggestion = router.route(catalog, "turbo-streams", "stimulus controller")
        assert suggestion.score == 3
