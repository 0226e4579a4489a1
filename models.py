"""Value types shared by the catalog, the favorite set and the screen state."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from utils import normalize_description


@dataclass(frozen=True)
class Spell:
    """A catalog entry. Two spells are equal when their ``index`` matches."""

    index: str
    name: str = field(default="", compare=False)
    desc: str = field(default="", compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Spell":
        """Build a spell from an upstream or persisted mapping.

        Extra keys are ignored. Raises ``ValueError`` when ``index`` is
        missing or empty.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        index = data.get("index")
        if not isinstance(index, str) or not index:
            raise ValueError(f"spell entry has no index: {data!r}")
        return cls(
            index=index,
            name=str(data.get("name") or index),
            desc=normalize_description(data.get("desc")),
        )

    def to_dict(self) -> dict:
        return {"index": self.index, "name": self.name, "desc": self.desc}


@dataclass(frozen=True)
class SpellDetails:
    """Full record shown in the detail overlay."""

    spell: Spell
    level: Optional[int] = None
    school: Optional[str] = None
    casting_time: Optional[str] = None
    range: Optional[str] = None
    duration: Optional[str] = None
    higher_level: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpellDetails":
        school = data.get("school")
        if isinstance(school, Mapping):
            school = school.get("name")
        level = data.get("level")
        return cls(
            spell=Spell.from_dict(data),
            level=level if isinstance(level, int) else None,
            school=school,
            casting_time=data.get("casting_time"),
            range=data.get("range"),
            duration=data.get("duration"),
            higher_level=normalize_description(data.get("higher_level")),
        )
