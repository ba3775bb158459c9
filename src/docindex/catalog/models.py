"""
Pydantic models for the documentation catalog.

A Catalog is the immutable index built once from the manifest and passed
explicitly to every matcher, router and resolver call. Skills reference
their escalation neighbors by name only, so the catalog stays a flat
directed graph that can be rebuilt from text.

Example:
    catalog = Catalog(skills=(
        Skill(
            name="turbo-streams",
            description="Broadcast model changes over Action Cable",
            triggers=("broadcast",),
            documents=(
                Document(
                    path="turbo-streams/SKILL.md",
                    title="turbo-streams",
                    description="Broadcast model changes over Action Cable",
                    skill="turbo-streams",
                    category=DocumentCategory.SKILL,
                ),
            ),
            neighbors=(
                NeighborEdge(name="stimulus-controllers",
                             condition="client-side orchestration"),
            ),
        ),
        ...
    ))
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class DocumentCategory(str, Enum):
    """Kind of loadable unit inside a skill package."""
    SKILL = "skill"           # The skill's own entry document (SKILL.md)
    REFERENCE = "reference"   # Loaded on demand for a specific topic
    HANDBOOK = "handbook"     # Longer conventions guide
    COMMAND = "command"       # Slash-command definition
    AGENT = "agent"           # Sub-agent definition


class Document(BaseModel):
    """One loadable documentation file."""
    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1, description="Unique path, relative to the skills root")
    title: str = Field(..., description="Display title")
    description: str = Field(default="", description="One-line description")
    skill: str = Field(..., min_length=1, description="Owning skill name")
    category: DocumentCategory = Field(..., description="Document kind")


class NeighborEdge(BaseModel):
    """
    Escalation edge to another skill.

    The condition is free text for the agent host to judge. It is carried
    through unchanged and never evaluated here.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Target skill name")
    condition: str = Field(default="", description="When the host should escalate")


class Skill(BaseModel):
    """
    A named documentation bundle with trigger phrases and neighbors.

    The first document is always the skill's own ``skill``-category
    document; trigger phrases score against it.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Unique skill name")
    description: str = Field(..., description="One-line skill description")
    triggers: Tuple[str, ...] = Field(default=(), description="Trigger phrases")
    documents: Tuple[Document, ...] = Field(default=(), description="Owned documents")
    neighbors: Tuple[NeighborEdge, ...] = Field(default=(), description="Escalation edges")

    @property
    def entry_document(self) -> Optional[Document]:
        """The skill-category document, if present."""
        for document in self.documents:
            if document.category == DocumentCategory.SKILL:
                return document
        return None

    def neighbor_names(self) -> list[str]:
        return [edge.name for edge in self.neighbors]


class Catalog(BaseModel):
    """Immutable index of every skill and document, in declaration order."""
    model_config = ConfigDict(frozen=True)

    skills: Tuple[Skill, ...] = Field(default=(), description="Skills in declaration order")

    def skill_names(self) -> list[str]:
        return [skill.name for skill in self.skills]

    def get_skill(self, name: str) -> Optional[Skill]:
        """Look up a skill by name."""
        for skill in self.skills:
            if skill.name == name:
                return skill
        return None

    def documents(self) -> list[Document]:
        """All documents, skill by skill, in declaration order."""
        return [document for skill in self.skills for document in skill.documents]

    def get_document(self, path: str) -> Optional[Document]:
        for skill in self.skills:
            for document in skill.documents:
                if document.path == path:
                    return document
        return None

    def owner_of(self, path: str) -> Optional[Skill]:
        """Skill that owns the document at ``path``."""
        document = self.get_document(path)
        if document is None:
            return None
        return self.get_skill(document.skill)
