"""
Catalog loader with two-pass validation.

Turns an ordered sequence of skill records into an immutable ``Catalog``.
Each record is validated against the Pydantic record models first; once
every record is read, neighbor names are resolved against the full set of
skills, so records may appear in any order.

Usage::

    from docindex.catalog.loader import CatalogLoader

    loader = CatalogLoader()
    catalog = loader.load_file(Path("skills.manifest.yaml"))

Errors are fatal and no partial catalog is returned:

- ``MalformedManifest``: missing or mistyped field, identified by record index
- ``DuplicateSkill``: two records share a name
- ``DanglingEscalation``: a neighbor name does not resolve
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from docindex.catalog.errors import (
    DanglingEscalation,
    DuplicateSkill,
    MalformedManifest,
    ManifestError,
)
from docindex.catalog.models import (
    Catalog,
    Document,
    DocumentCategory,
    NeighborEdge,
    Skill,
)

if TYPE_CHECKING:
    from docindex.logger import ResolverLogger

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Record schema
# ---------------------------------------------------------------------------


class DocumentRecord(BaseModel):
    """A supporting document entry inside a skill record."""

    model_config = ConfigDict(extra="ignore")

    path: str = Field(..., min_length=1)
    title: Optional[str] = None
    description: str = ""
    category: DocumentCategory = DocumentCategory.REFERENCE


class NeighborRecord(BaseModel):
    """An escalation edge; may be written as a bare skill name."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    condition: str = ""


class SkillRecord(BaseModel):
    """One manifest record describing a skill."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    path: Optional[str] = None
    title: Optional[str] = None
    triggers: List[str] = Field(default_factory=list)
    documents: List[DocumentRecord] = Field(default_factory=list)
    neighbors: List[NeighborRecord] = Field(default_factory=list)

    @field_validator("name", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = " ".join(v.split())
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("triggers", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("documents", "neighbors", mode="before")
    @classmethod
    def coerce_entries(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v


def _format_loc(loc: Sequence[Union[str, int]]) -> str:
    """Render a Pydantic error location as ``documents[2].path``."""
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out or "<record>"


def _malformed_from(
    index: int, exc: ValidationError, path: Optional[str] = None
) -> MalformedManifest:
    first = exc.errors()[0]
    field = _format_loc(first.get("loc", ()))
    if first.get("type") == "missing":
        return MalformedManifest(index, field, path=path)
    return MalformedManifest(
        index, field, reason=first.get("msg", "invalid value"), path=path
    )


def _record_path(raw: Mapping[str, Any]) -> Optional[str]:
    """The file a record was read from, when it says."""
    path = raw.get("path")
    return path if isinstance(path, str) and path else None


def _clean_triggers(triggers: Sequence[str]) -> tuple[str, ...]:
    seen: list[str] = []
    for phrase in triggers:
        phrase = " ".join(phrase.split())
        if phrase and phrase not in seen:
            seen.append(phrase)
    return tuple(seen)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


class CatalogLoader:
    """
    Build a ``Catalog`` from skill records.

    Example:
        loader = CatalogLoader()
        catalog = loader.load([
            {"name": "turbo-navigation", "description": "Frames and Drive",
             "triggers": ["turbo frame"]},
            {"name": "turbo-streams", "description": "Broadcast updates",
             "triggers": ["broadcast"],
             "neighbors": [{"name": "turbo-navigation", "condition": "page-level"}]},
        ])
    """

    def __init__(self, event_logger: Optional["ResolverLogger"] = None):
        self.event_logger = event_logger

    def load(self, records: Sequence[Mapping[str, Any]], source: str = "<records>") -> Catalog:
        """
        Validate records and build the catalog.

        Args:
            records: Ordered skill records
            source: Label used in log events

        Returns:
            Immutable Catalog

        Raises:
            MalformedManifest: A record is missing or mistypes a field
            DuplicateSkill: Two records share a name
            DanglingEscalation: A neighbor does not resolve
        """
        try:
            catalog = self._build(records)
        except ManifestError as e:
            logger.debug("Rejected manifest %s: %s", source, e)
            if self.event_logger:
                self.event_logger.log_catalog_rejected(source=source, error=e)
            raise

        logger.debug(
            "Loaded catalog from %s: skills=%d, documents=%d",
            source,
            len(catalog.skills),
            len(catalog.documents()),
        )
        if self.event_logger:
            self.event_logger.log_catalog_loaded(source=source, catalog=catalog)
        return catalog

    def load_file(self, path: Path) -> Catalog:
        """
        Load a YAML manifest file.

        The root is either a list of records or a mapping with a
        ``skills`` list.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file contains invalid YAML.
            MalformedManifest: If the root has the wrong shape.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Manifest file not found: {path}")

        with open(path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)

        return self.load(self._records_from(raw), source=str(path))

    def load_from_string(self, yaml_str: str) -> Catalog:
        """Load a manifest from a YAML string (convenience for testing)."""
        raw = yaml.safe_load(yaml_str)
        return self.load(self._records_from(raw), source="<string>")

    @staticmethod
    def _records_from(raw: Any) -> list:
        # An empty document is an empty manifest
        if raw is None:
            return []
        if isinstance(raw, dict):
            if "skills" not in raw:
                raise MalformedManifest(None, "skills")
            raw = raw["skills"]
        if not isinstance(raw, list):
            raise MalformedManifest(None, "skills", reason="expected a list of skill records")
        return raw

    def _build(self, records: Sequence[Mapping[str, Any]]) -> Catalog:
        # Pass 1: shape, names and document paths
        parsed: list[SkillRecord] = []
        first_index: dict[str, int] = {}
        seen_paths: set[str] = set()

        for index, raw in enumerate(records):
            if not isinstance(raw, Mapping):
                raise MalformedManifest(index, "<record>", reason="record is not a mapping")
            try:
                record = SkillRecord.model_validate(dict(raw))
            except ValidationError as e:
                raise _malformed_from(index, e, _record_path(raw)) from e

            if record.name in first_index:
                raise DuplicateSkill(record.name, [first_index[record.name], index])
            first_index[record.name] = index

            for pos, edge in enumerate(record.neighbors):
                if edge.name == record.name:
                    raise MalformedManifest(
                        index,
                        f"neighbors[{pos}].name",
                        reason="skill cannot escalate to itself",
                        path=record.path,
                    )

            paths = [record.path or f"{record.name}/SKILL.md"]
            paths.extend(doc.path for doc in record.documents)
            for pos, doc_path in enumerate(paths):
                if doc_path in seen_paths:
                    field = "path" if pos == 0 else f"documents[{pos - 1}].path"
                    raise MalformedManifest(
                        index,
                        field,
                        reason=f"duplicate document path {doc_path!r}",
                        path=record.path,
                    )
                seen_paths.add(doc_path)

            parsed.append(record)

        # Pass 2: every escalation edge must land on a declared skill
        for index, record in enumerate(parsed):
            for edge in record.neighbors:
                if edge.name not in first_index:
                    raise DanglingEscalation(
                        record.name, edge.name, index=index, path=record.path
                    )

        return Catalog(skills=tuple(self._to_skill(record) for record in parsed))

    @staticmethod
    def _to_skill(record: SkillRecord) -> Skill:
        entry = Document(
            path=record.path or f"{record.name}/SKILL.md",
            title=record.title or record.name,
            description=record.description,
            skill=record.name,
            category=DocumentCategory.SKILL,
        )
        documents = [entry]
        for doc in record.documents:
            documents.append(Document(
                path=doc.path,
                title=doc.title or Path(doc.path).stem,
                description=" ".join(doc.description.split()),
                skill=record.name,
                category=doc.category,
            ))

        return Skill(
            name=record.name,
            description=record.description,
            triggers=_clean_triggers(record.triggers),
            documents=tuple(documents),
            neighbors=tuple(
                NeighborEdge(name=edge.name, condition=edge.condition.strip())
                for edge in record.neighbors
            ),
        )


def load(records: Sequence[Mapping[str, Any]]) -> Catalog:
    """Convenience function to load a catalog from records."""
    return CatalogLoader().load(records)
