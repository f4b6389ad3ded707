"""
Session-wide tag vocabulary with position-derived display colours
"""
from dataclasses import dataclass
from typing import List, Set

# r,g,b triples used as CSS rgb() arguments
PALETTE = [
    "230,25,75", "60,180,75", "255,225,25", "0,130,200", "245,130,48", "145,30,180",
    "70,240,240", "240,50,230", "210,245,60", "250,190,212", "0,128,128", "220,190,255",
    "170,110,40", "255,250,200", "128,0,0", "170,255,195", "128,128,0", "255,215,180",
    "0,0,128", "128,128,128", "255,255,255", "0,0,0",
]


def tag_color(index: int) -> str:
    """Colour of the tag at vocabulary position `index`"""
    return PALETTE[index % len(PALETTE)]


@dataclass(frozen=True)
class Tag:
    name: str
    index: int

    @property
    def color(self) -> str:
        return tag_color(self.index)


class TagVocabulary:
    """Ordered set of every tag name seen or created. Never shrinks."""

    def __init__(self):
        self._names: List[str] = []
        self._known: Set[str] = set()

    def add(self, name: str) -> bool:
        """Append `name` unless it is empty or already known. Returns True if added."""
        if not name or name in self._known:
            return False
        self._names.append(name)
        self._known.add(name)
        return True

    def contains(self, name: str) -> bool:
        return name in self._known

    def all(self) -> List[str]:
        return list(self._names)

    def tags(self) -> List[Tag]:
        return [Tag(name=name, index=i) for i, name in enumerate(self._names)]

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def __len__(self) -> int:
        return len(self._names)
