"""Load-time errors raised while building a Catalog."""

from __future__ import annotations

from typing import Optional, Sequence


class ManifestError(ValueError):
    """Base class for manifest errors. All of them abort catalog loading."""


class MalformedManifest(ManifestError):
    """A record is missing a required field or has one of the wrong shape."""

    def __init__(
        self,
        index: Optional[int],
        field: str,
        reason: str = "missing required field",
        path: Optional[str] = None,
    ):
        self.index = index
        self.field = field
        self.reason = reason
        self.path = path
        where = f"record {index}" if index is not None else "manifest"
        if path:
            where += f" ({path})"
        super().__init__(f"Malformed manifest: {where}: {reason}: {field!r}")


class DuplicateSkill(ManifestError):
    """Two records declare the same skill name."""

    def __init__(self, name: str, indices: Sequence[int]):
        self.name = name
        self.indices = tuple(indices)
        listed = ", ".join(str(i) for i in self.indices)
        super().__init__(f"Duplicate skill {name!r} in records {listed}")


class DanglingEscalation(ManifestError):
    """A skill names a neighbor that no record declares."""

    def __init__(
        self,
        skill: str,
        neighbor: str,
        index: Optional[int] = None,
        path: Optional[str] = None,
    ):
        self.skill = skill
        self.neighbor = neighbor
        self.index = index
        self.path = path
        declared_in = f" ({path})" if path else ""
        super().__init__(
            f"Skill {skill!r}{declared_in} escalates to unknown skill {neighbor!r}"
        )
