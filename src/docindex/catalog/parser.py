"""
Skill Directory Parser

Scan a tree of skill packages and turn their Markdown front-matter into
manifest records for ``CatalogLoader``. Layout::

    <root>/<skill>/SKILL.md              name, description, triggers, neighbors
    <root>/<skill>/references/*.md       reference documents
    <root>/<skill>/handbook/*.md         handbook documents
    <root>/<skill>/commands/*.md         command documents
    <root>/<skill>/agents/*.md           agent documents

Only front-matter and the first heading/prose line are read. Full document
bodies are loaded later, on demand, through the resolver.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Optional

import yaml

from docindex.catalog.models import DocumentCategory

logger = logging.getLogger(__name__)

SKILL_FILE = "SKILL.md"

# Subdirectory name -> document category
SUBDIR_CATEGORIES = {
    "references": DocumentCategory.REFERENCE,
    "handbook": DocumentCategory.HANDBOOK,
    "commands": DocumentCategory.COMMAND,
    "agents": DocumentCategory.AGENT,
}

_HEADING = re.compile(r"^#{1,6}\s+(.+)$")


def extract_frontmatter(content: str) -> tuple[dict, str]:
    """
    Split YAML front-matter from a Markdown document.

    Args:
        content: Full document text

    Returns:
        Tuple of (front-matter dict, remaining body). Invalid YAML or a
        missing closing fence yields an empty dict.
    """
    if not content.startswith("---"):
        return {}, content

    lines = content.splitlines()
    end_idx = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    yaml_content = "\n".join(lines[1:end_idx])
    try:
        frontmatter = yaml.safe_load(yaml_content) or {}
    except yaml.YAMLError:
        logger.debug("Ignoring unparseable front-matter")
        frontmatter = {}

    if not isinstance(frontmatter, dict):
        frontmatter = {}

    return frontmatter, "\n".join(lines[end_idx + 1:])


def first_heading(body: str) -> Optional[str]:
    for line in body.splitlines():
        match = _HEADING.match(line.strip())
        if match:
            return match.group(1).strip()
    return None


def first_prose_line(body: str) -> str:
    """First line that is not a heading, table row, or inside a code block."""
    in_code_block = False
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("```"):
            in_code_block = not in_code_block
            continue
        if in_code_block or not stripped:
            continue
        if stripped.startswith(("#", "|", ">")):
            continue
        cleaned = re.sub(r"\*\*|__|`", "", stripped)
        cleaned = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", cleaned)
        return cleaned.lstrip("-* ").strip()
    return ""


class SkillDirectoryParser:
    """
    Parse a skills root into loader records.

    Example:
        parser = SkillDirectoryParser()
        records = parser.parse_directory("plugins/rails/skills")
        catalog = CatalogLoader().load(records)
    """

    def parse_directory(self, path: str | Path) -> list[dict[str, Any]]:
        """
        Parse every skill package under ``path``.

        Args:
            path: Skills root directory

        Returns:
            Records sorted by directory name
        """
        root = Path(path).expanduser()
        if not root.is_dir():
            raise FileNotFoundError(f"Skills directory not found: {root}")

        records = []
        for skill_dir in sorted(p for p in root.iterdir() if p.is_dir()):
            if not (skill_dir / SKILL_FILE).exists():
                logger.debug("Skipping %s: no %s", skill_dir, SKILL_FILE)
                continue
            records.append(self.parse_skill(skill_dir, root))

        logger.debug("Parsed %d skill packages under %s", len(records), root)
        return records

    def parse_skill(self, skill_dir: Path, root: Path) -> dict[str, Any]:
        """Build one record from a skill package directory."""
        skill_file = skill_dir / SKILL_FILE
        frontmatter, _ = extract_frontmatter(skill_file.read_text(encoding="utf-8"))

        # Front-matter keys are passed through so the loader reports
        # missing or mistyped fields against this record.
        record: dict[str, Any] = {
            key: frontmatter[key]
            for key in ("name", "description", "triggers", "neighbors", "title")
            if key in frontmatter
        }
        record["path"] = skill_file.relative_to(root).as_posix()

        documents = []
        for subdir, category in SUBDIR_CATEGORIES.items():
            doc_dir = skill_dir / subdir
            if not doc_dir.is_dir():
                continue
            for doc_file in sorted(doc_dir.rglob("*.md")):
                documents.append(self._parse_document(doc_file, root, category))
        record["documents"] = documents

        return record

    def _parse_document(
        self,
        path: Path,
        root: Path,
        category: DocumentCategory,
    ) -> dict[str, Any]:
        frontmatter, body = extract_frontmatter(path.read_text(encoding="utf-8"))

        title = frontmatter.get("title") or frontmatter.get("name") or first_heading(body) or path.stem
        description = frontmatter.get("description") or first_prose_line(body)

        return {
            "path": path.relative_to(root).as_posix(),
            "title": str(title),
            "description": str(description),
            "category": category.value,
        }


def parse_skill_directory(path: str | Path) -> list[dict[str, Any]]:
    """Convenience function to parse a skills root into records."""
    return SkillDirectoryParser().parse_directory(path)
