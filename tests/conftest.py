"""
Pytest configuration and fixtures for docindex tests.
"""

from __future__ import annotations

import os
import textwrap
from pathlib import Path
from typing import Any, Dict, List

import pytest

from docindex.catalog import Catalog, CatalogLoader
from docindex.config import reset_config


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Drop DOCINDEX_* variables and the config singleton around each test."""
    for key in list(os.environ):
        if key.startswith("DOCINDEX_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


# ============================================================================
# Catalog Fixtures
# ============================================================================


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """Three Hotwire skills wired into an escalation chain."""
    return [
        {
            "name": "turbo-navigation",
            "description": "Turbo Drive navigation and Turbo Frames for partial page updates",
            "triggers": ["turbo frame", "turbo drive"],
            "documents": [
                {
                    "path": "turbo-navigation/references/frames.md",
                    "title": "Frames",
                    "description": "Lazy-loaded frames and frame targeting",
                },
            ],
            "neighbors": [
                {"name": "turbo-streams", "condition": "server pushes updates to many pages"},
            ],
        },
        {
            "name": "turbo-streams",
            "description": "Broadcast model changes with Turbo Streams over Action Cable",
            "triggers": ["broadcast", "turbo stream"],
            "documents": [
                {
                    "path": "turbo-streams/references/broadcasting.md",
                    "title": "Broadcasting",
                    "description": "Broadcasting from models and jobs",
                },
            ],
            "neighbors": [
                {"name": "stimulus-controllers", "condition": "client-side orchestration"},
            ],
        },
        {
            "name": "stimulus-controllers",
            "description": "Stimulus controllers, targets, values and actions",
            "triggers": ["stimulus controller", "data-action"],
            "documents": [
                {
                    "path": "stimulus-controllers/handbook/conventions.md",
                    "title": "Conventions",
                    "description": "Naming conventions for controllers and targets",
                    "category": "handbook",
                },
            ],
        },
    ]


@pytest.fixture
def catalog(sample_records) -> Catalog:
    return CatalogLoader().load(sample_records)


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content))
    return path


@pytest.fixture
def skills_tree(tmp_path: Path) -> Path:
    """A skills root laid out the way plugin skill packages are."""
    root = tmp_path / "skills"

    write_file(root / "turbo-streams" / "SKILL.md", """\
        ---
        name: turbo-streams
        description: Broadcast model changes with Turbo Streams over Action Cable
        triggers:
          - broadcast
          - turbo stream
        neighbors:
          - name: stimulus-controllers
            condition: client-side orchestration
        ---
        # Turbo Streams

        Load references/broadcasting.md only when wiring model callbacks.
        """)
    write_file(root / "turbo-streams" / "references" / "broadcasting.md", """\
        ---
        description: Broadcasting from models and jobs
        ---
        # Broadcasting

        Use broadcasts_refreshes for most models.
        """)
    write_file(root / "stimulus-controllers" / "SKILL.md", """\
        ---
        name: stimulus-controllers
        description: Stimulus controllers, targets, values and actions
        triggers: [stimulus controller, data-action]
        ---
        # Stimulus
        """)
    write_file(root / "stimulus-controllers" / "handbook" / "conventions.md", """\
        # Controller Conventions

        Name controllers after **behavior**, not markup.
        """)
    write_file(root / "notes" / "README.md", "# Not a skill\n")

    return root
