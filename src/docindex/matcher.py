"""
Topic Matcher

Rank catalog documents against a free-text query by keyword overlap.

Scoring:
- Trigger phrases score against their skill's entry document only. Each
  phrase found in the query adds ``trigger_weight`` per word, and a query
  that is exactly a trigger phrase adds ``exact_trigger_bonus``.
- Every document scores one point per distinct query keyword that also
  appears in its description.

A skill entry document whose trigger phrase equals the query always ranks
first. Otherwise ties go to skill documents, then shorter descriptions,
then declaration order. A query nothing scores on yields an empty MatchResult.
"""

from __future__ import annotations

import re
from typing import Optional

from docindex.catalog.models import Catalog, DocumentCategory, Skill
from docindex.models import MatchResult, ScoredDocument

DEFAULT_TRIGGER_WEIGHT = 10
DEFAULT_EXACT_TRIGGER_BONUS = 100

# Stop words filtered from query and description keywords
STOP_WORDS = {
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "must", "shall", "can", "this",
    "that", "these", "those", "it", "its", "use", "using", "when", "how",
    "what", "why", "where", "which", "who", "my", "me", "we", "our", "you",
    "your", "into", "about", "not", "no", "if", "then", "so", "get",
}

_WORD = re.compile(r"\w+")


def normalize(text: str) -> str:
    """Lower-case and collapse whitespace."""
    return " ".join(text.lower().split())


def tokenize(text: str) -> set[str]:
    """Keywords of ``text``: word tokens minus stop words and single characters."""
    return {
        token for token in _WORD.findall(text.lower())
        if len(token) > 1 and token not in STOP_WORDS
    }


def trigger_score(
    skill: Skill,
    normalized_query: str,
    weight: int = DEFAULT_TRIGGER_WEIGHT,
    exact_bonus: int = DEFAULT_EXACT_TRIGGER_BONUS,
) -> int:
    """Score a skill's trigger phrases against an already normalized query."""
    if not normalized_query:
        return 0
    score = 0
    for phrase in skill.triggers:
        phrase = normalize(phrase)
        if phrase and phrase in normalized_query:
            score += weight * len(phrase.split())
            if phrase == normalized_query:
                score += exact_bonus
    return score


def is_exact_trigger(skill: Skill, normalized_query: str) -> bool:
    """True if the normalized query is one of the skill's trigger phrases."""
    if not normalized_query:
        return False
    return any(normalize(phrase) == normalized_query for phrase in skill.triggers)


def keyword_overlap(query_keywords: set[str], text: str) -> int:
    return len(query_keywords & tokenize(text))


class TopicMatcher:
    """
    Rank documents for a query.

    The matcher holds only scoring parameters; the catalog is passed in on
    every call, so one matcher can serve any number of catalogs.

    Example:
        matcher = TopicMatcher(max_results=3)
        result = matcher.match(catalog, "how do I use turbo frame")
        result.top.document.skill  # "turbo-navigation"
    """

    def __init__(
        self,
        trigger_weight: int = DEFAULT_TRIGGER_WEIGHT,
        exact_trigger_bonus: int = DEFAULT_EXACT_TRIGGER_BONUS,
        max_results: Optional[int] = 5,
    ):
        """
        Initialize matcher.

        Args:
            trigger_weight: Points per word of a matched trigger phrase
            exact_trigger_bonus: Extra points when the query is a trigger phrase
            max_results: Maximum hits returned (None for all)
        """
        self.trigger_weight = trigger_weight
        self.exact_trigger_bonus = exact_trigger_bonus
        self.max_results = max_results

    def match(self, catalog: Catalog, query: str) -> MatchResult:
        """
        Rank catalog documents against ``query``.

        Returns:
            MatchResult with hits scoring above zero, best first
        """
        normalized = normalize(query)
        keywords = tokenize(normalized)

        ranked = []
        order = 0
        for skill in catalog.skills:
            triggers = trigger_score(
                skill, normalized, self.trigger_weight, self.exact_trigger_bonus
            )
            exact = is_exact_trigger(skill, normalized)
            entry = skill.entry_document
            for document in skill.documents:
                score = keyword_overlap(keywords, document.description)
                if document is entry:
                    score += triggers
                if score > 0:
                    ranked.append((
                        0 if exact and document is entry else 1,
                        -score,
                        0 if document.category == DocumentCategory.SKILL else 1,
                        len(document.description),
                        order,
                        ScoredDocument(document=document, score=score),
                    ))
                order += 1

        ranked.sort(key=lambda row: row[:5])
        hits = [row[5] for row in ranked]
        if self.max_results is not None:
            hits = hits[:self.max_results]

        return MatchResult(query=query, hits=tuple(hits))


def match(catalog: Catalog, query: str) -> MatchResult:
    """Convenience function: rank with default scoring."""
    return TopicMatcher().match(catalog, query)
