"""Reference character store.

Loads the JSON bundles produced by the offline reference-data pipeline and
exposes them as a read-only mapping from character to ReferenceCharacter.
Build the store once at startup and pass it to whatever grades drawings;
it is never mutated after construction, so it can be shared freely.

Bundle format (one file per JLPT level, or any grouping)::

    [
      {
        "character": "三",
        "meaning": "three",
        "jlpt": "N5",
        "grade": 1,
        "viewBox": "0 0 109 109",
        "strokes": [
          {"id": "kvg:04e09-s1", "path": "M22.25,24.5c...", "length": 62},
          ...
        ]
      }
    ]

Stroke metadata (direction, quadrants) is always re-derived from ``path``.

Example usage:
    Load bundles and look up a character::

        from stroke_grader.data import ReferenceStore

        store = ReferenceStore.from_paths(['bundles/'])
        three = store['三']
        n5 = store.filter(jlpt='N5')
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from ..config import DEFAULT_CONFIG, GradingConfig, VIEWBOX_SIZE
from ..domain.reference import ReferenceCharacter, ReferenceStroke

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_view_box(view_box: Optional[str], default: float = VIEWBOX_SIZE) -> float:
    """Logical canvas size from a ``"minX minY width height"`` viewBox.

    Returns the width, or ``default`` when the value is missing, malformed
    or not positive.

    Example:
        >>> parse_view_box('0 0 109 109')
        109.0
    """
    if not view_box:
        return float(default)
    parts = view_box.replace(',', ' ').split()
    if len(parts) != 4:
        return float(default)
    try:
        width = float(parts[2])
    except ValueError:
        return float(default)
    return width if width > 0 else float(default)


def parse_character(entry: Mapping[str, Any],
                    config: GradingConfig = DEFAULT_CONFIG) -> ReferenceCharacter:
    """Build a ReferenceCharacter from one bundle entry.

    Args:
        entry: Parsed JSON object for one character.
        config: Grading config supplying the curvature thresholds.

    Returns:
        ReferenceCharacter with derived stroke metadata.

    Raises:
        ValueError: If the entry has no character or no strokes list.
    """
    character = entry.get('character')
    if not isinstance(character, str) or not character:
        raise ValueError(f"Bundle entry has no character: {entry!r:.80}")
    raw_strokes = entry.get('strokes')
    if not isinstance(raw_strokes, list):
        raise ValueError(f"Bundle entry for {character!r} has no strokes list")

    viewbox_size = parse_view_box(entry.get('viewBox'), config.viewbox_size)

    strokes: List[ReferenceStroke] = []
    for n, raw in enumerate(raw_strokes, start=1):
        path = raw.get('path') if isinstance(raw, Mapping) else None
        if not isinstance(path, str):
            logger.warning("Skipping stroke %d of %r: missing path", n, character)
            continue
        length = raw.get('length')
        strokes.append(ReferenceStroke.from_path(
            str(raw.get('id') or f"{character}-{n}"),
            path,
            length=float(length) if isinstance(length, (int, float)) else None,
            viewbox_size=viewbox_size,
            config=config,
        ))

    grade = entry.get('grade')
    return ReferenceCharacter(
        character=character,
        strokes=tuple(strokes),
        viewbox_size=viewbox_size,
        meaning=str(entry.get('meaning') or ''),
        jlpt=entry.get('jlpt'),
        grade=int(grade) if isinstance(grade, (int, float)) else None,
    )


def load_bundle(path: PathLike, config: GradingConfig = DEFAULT_CONFIG) -> List[ReferenceCharacter]:
    """Load every character from one bundle file.

    Args:
        path: Path to a JSON bundle (a list of entries, or one entry).
        config: Grading config supplying the curvature thresholds.

    Returns:
        Characters in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the JSON is invalid or not a bundle.
    """
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in bundle {path}: {e}") from e

    if isinstance(payload, Mapping):
        payload = [payload]
    if not isinstance(payload, list):
        raise ValueError(f"Bundle {path} must contain a list of characters")

    characters = [parse_character(entry, config) for entry in payload]
    logger.debug("Loaded %d characters from %s", len(characters), path)
    return characters


def _bundle_files(paths: Iterable[PathLike]) -> Iterator[Path]:
    for p in paths:
        p = Path(p)
        if p.is_dir():
            yield from sorted(p.glob('*.json'))
        else:
            yield p


class ReferenceStore(Mapping):
    """Read-only mapping of character to ReferenceCharacter.

    Later duplicates of a character replace earlier ones, with a warning.

    Example:
        >>> store = ReferenceStore([three, four])
        >>> store['三'].strokes[0].direction
        <Direction.RIGHT: 'right'>
    """

    def __init__(self, characters: Iterable[ReferenceCharacter] = ()):
        data: Dict[str, ReferenceCharacter] = {}
        for char in characters:
            if char.character in data:
                logger.warning("Duplicate reference character %r, keeping the last one",
                               char.character)
            data[char.character] = char
        self._data = MappingProxyType(data)

    @classmethod
    def from_paths(cls, paths: Iterable[PathLike],
                   config: GradingConfig = DEFAULT_CONFIG) -> ReferenceStore:
        """Load bundle files, or directories of ``*.json`` bundles."""
        characters: List[ReferenceCharacter] = []
        for bundle in _bundle_files(paths):
            characters.extend(load_bundle(bundle, config))
        return cls(characters)

    def __getitem__(self, character: str) -> ReferenceCharacter:
        return self._data[character]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def levels(self) -> List[str]:
        """JLPT levels present, easiest (N5) first."""
        present = {c.jlpt for c in self._data.values() if c.jlpt}
        return sorted(present, key=lambda level: (-_level_rank(level), level))

    def filter(self, jlpt: Optional[str] = None, grade: Optional[int] = None,
               search: Optional[str] = None) -> List[ReferenceCharacter]:
        """Characters matching every given criterion.

        Args:
            jlpt: JLPT level, e.g. ``'N5'``.
            grade: School grade.
            search: Matches the character itself or a case-insensitive
                substring of its meaning.

        Returns:
            Matching characters in load order.
        """
        results = list(self._data.values())
        if jlpt:
            results = [c for c in results if c.jlpt == jlpt]
        if grade:
            results = [c for c in results if c.grade == grade]
        if search:
            term = search.lower()
            results = [c for c in results
                       if term in c.character or term in c.meaning.lower()]
        return results


def _level_rank(level: str) -> int:
    try:
        return int(level.lstrip('Nn'))
    except ValueError:
        return 0
