"""
Escalation Router

Suggest a neighboring skill when the query carries keyword evidence for
it. Edge conditions are free text written for a language model; they are
copied into the suggestion, never evaluated. The agent host makes the
actual routing decision.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from docindex.catalog.models import Catalog, Skill
from docindex.matcher import (
    DEFAULT_EXACT_TRIGGER_BONUS,
    DEFAULT_TRIGGER_WEIGHT,
    keyword_overlap,
    normalize,
    tokenize,
    trigger_score,
)
from docindex.models import EscalationSuggestion

logger = logging.getLogger(__name__)


def _covered_keywords(skill: Skill) -> set[str]:
    """Keywords the skill itself accounts for: its description and triggers."""
    covered = tokenize(skill.description)
    for phrase in skill.triggers:
        covered |= tokenize(phrase)
    return covered


class EscalationRouter:
    """
    Pick the neighbor with the strongest evidence in the query.

    Evidence for a neighbor is its trigger score plus keyword overlap with
    its description, the same measures the matcher uses. Query keywords
    already covered by the matched skill's own description and triggers do
    not count toward a neighbor. Ties go to the neighbor declared first.
    """

    def __init__(
        self,
        trigger_weight: int = DEFAULT_TRIGGER_WEIGHT,
        exact_trigger_bonus: int = DEFAULT_EXACT_TRIGGER_BONUS,
    ):
        self.trigger_weight = trigger_weight
        self.exact_trigger_bonus = exact_trigger_bonus

    def route(
        self,
        catalog: Catalog,
        matched_skill: Union[Skill, str, None],
        query: str,
    ) -> Optional[EscalationSuggestion]:
        """
        Return an advisory escalation for ``matched_skill``, or None.

        Args:
            catalog: Catalog the skill belongs to
            matched_skill: Skill (or skill name) that matched the query
            query: Free-text query
        """
        if isinstance(matched_skill, str):
            matched_skill = catalog.get_skill(matched_skill)
        if matched_skill is None or not matched_skill.neighbors:
            return None

        normalized = normalize(query)
        keywords = tokenize(normalized) - _covered_keywords(matched_skill)

        best: Optional[EscalationSuggestion] = None
        for edge in matched_skill.neighbors:
            neighbor = catalog.get_skill(edge.name)
            if neighbor is None:
                # Loader guarantees closure; a hand-built catalog may not.
                logger.debug("Neighbor %s of %s not in catalog", edge.name, matched_skill.name)
                continue

            score = trigger_score(
                neighbor, normalized, self.trigger_weight, self.exact_trigger_bonus
            ) + keyword_overlap(keywords, neighbor.description)

            if score > 0 and (best is None or score > best.score):
                best = EscalationSuggestion(
                    from_skill=matched_skill.name,
                    to_skill=neighbor.name,
                    condition=edge.condition,
                    score=score,
                )

        return best


def route(
    catalog: Catalog,
    matched_skill: Union[Skill, str, None],
    query: str,
) -> Optional[EscalationSuggestion]:
    """Convenience function: route with default scoring."""
    return EscalationRouter().route(catalog, matched_skill, query)
