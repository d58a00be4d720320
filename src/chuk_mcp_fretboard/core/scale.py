"""
Scale primitives - ScaleType, Key.

Scales are semitone formulas from a root (0 first). Keys are scale types
applied to a root pitch. Only 7-note scales support stacked-third harmony;
the rest of the catalog exists so callers can name them and get no chords.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .pitch import PitchClass, mod12


@dataclass(frozen=True)
class ScaleType:
    """
    A scale defined by its semitone offsets from the root.

    A major scale is (0, 2, 4, 5, 7, 9, 11).

    Immutable and hashable.
    """

    formula: tuple[int, ...]
    name: str = ""

    # Common scale types (defined after class)
    MAJOR: ClassVar[ScaleType]
    NATURAL_MINOR: ClassVar[ScaleType]
    HARMONIC_MINOR: ClassVar[ScaleType]
    MELODIC_MINOR: ClassVar[ScaleType]

    def __post_init__(self) -> None:
        if not self.formula or self.formula[0] != 0:
            raise ValueError(f"Scale formula must start at 0, got {self.formula}")
        if any(b <= a for a, b in zip(self.formula, self.formula[1:])):
            raise ValueError(f"Scale formula must be strictly ascending, got {self.formula}")
        if self.formula[-1] > 11:
            raise ValueError(f"Scale formula must stay within an octave, got {self.formula}")

    @property
    def size(self) -> int:
        """Number of notes in the scale."""
        return len(self.formula)

    @property
    def is_heptatonic(self) -> bool:
        """True for 7-note scales, the only ones with stacked-third 7th chords."""
        return len(self.formula) == 7

    def get_pitches(self, root: PitchClass) -> list[PitchClass]:
        """Get all pitch classes in this scale starting from root."""
        return [root.transpose(step) for step in self.formula]

    def __str__(self) -> str:
        return self.name or f"ScaleType({self.formula})"

    def __repr__(self) -> str:
        if self.name:
            return f"ScaleType.{_normalize_name(self.name).upper()}"
        return f"ScaleType({self.formula!r})"

    @classmethod
    def parse(cls, name: str) -> ScaleType:
        """
        Look up a scale by name.

        Matching ignores case, spaces, dashes and underscores, so 'Natural Minor',
        'natural_minor' and 'natural-minor' are the same scale. 'minor' is an
        alias for natural minor.
        """
        key = _normalize_name(name)
        if key in _SCALE_ALIASES:
            key = _SCALE_ALIASES[key]
        for scale in SCALE_CATALOG.values():
            if _normalize_name(scale.name) == key:
                return scale
        raise ValueError(f"Unknown scale type: {name}")


def _normalize_name(name: str) -> str:
    return name.strip().lower().replace(" ", "_").replace("-", "_")


# All supported scale formulas, grouped by parent scale
SCALE_FORMULAS: dict[str, tuple[int, ...]] = {
    # Major modes
    "Major": (0, 2, 4, 5, 7, 9, 11),
    "Dorian": (0, 2, 3, 5, 7, 9, 10),
    "Phrygian": (0, 1, 3, 5, 7, 8, 10),
    "Lydian": (0, 2, 4, 6, 7, 9, 11),
    "Mixolydian": (0, 2, 4, 5, 7, 9, 10),
    "Natural Minor": (0, 2, 3, 5, 7, 8, 10),
    "Locrian": (0, 1, 3, 5, 6, 8, 10),
    # Harmonic minor modes
    "Harmonic Minor": (0, 2, 3, 5, 7, 8, 11),
    "Locrian #6": (0, 1, 3, 5, 6, 9, 10),
    "Ionian Augmented": (0, 2, 4, 5, 8, 9, 11),
    "Dorian #4": (0, 2, 3, 6, 7, 9, 10),
    "Phrygian Dominant": (0, 1, 4, 5, 7, 8, 10),
    "Lydian #2": (0, 3, 4, 6, 7, 9, 11),
    "Super Locrian bb7": (0, 1, 3, 4, 6, 8, 9),
    # Melodic minor modes
    "Melodic Minor": (0, 2, 3, 5, 7, 9, 11),
    "Dorian b2": (0, 1, 3, 5, 7, 9, 10),
    "Lydian Augmented": (0, 2, 4, 6, 8, 9, 11),
    "Lydian Dominant": (0, 2, 4, 6, 7, 9, 10),
    "Mixolydian b6": (0, 2, 4, 5, 7, 8, 10),
    "Locrian #2": (0, 2, 3, 5, 6, 8, 10),
    "Super Locrian": (0, 1, 3, 4, 6, 8, 10),
    "Altered": (0, 1, 3, 4, 6, 8, 10),
    # Other scales (no diatonic 7th chords)
    "Pentatonic Major": (0, 2, 4, 7, 9),
    "Pentatonic Minor": (0, 3, 5, 7, 10),
    "Blues": (0, 3, 5, 6, 7, 10),
    "Whole Tone": (0, 2, 4, 6, 8, 10),
    "Diminished": (0, 2, 3, 5, 6, 8, 9, 11),
    "Chromatic": (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11),
}

SCALE_CATALOG: dict[str, ScaleType] = {
    name: ScaleType(formula, name) for name, formula in SCALE_FORMULAS.items()
}

_SCALE_ALIASES: dict[str, str] = {
    "minor": "natural_minor",
    "ionian": "major",
    "aeolian": "natural_minor",
}

ScaleType.MAJOR = SCALE_CATALOG["Major"]
ScaleType.NATURAL_MINOR = SCALE_CATALOG["Natural Minor"]
ScaleType.HARMONIC_MINOR = SCALE_CATALOG["Harmonic Minor"]
ScaleType.MELODIC_MINOR = SCALE_CATALOG["Melodic Minor"]


@dataclass(frozen=True)
class Key:
    """
    A key is a root pitch class plus a scale type.

    This is the context that decides which chords and tensions are diatonic.

    Examples:
        Key(PitchClass.C, ScaleType.MAJOR) = C major
        Key(PitchClass.A, ScaleType.parse("Dorian")) = A dorian
    """

    root: PitchClass
    scale: ScaleType

    def get_pitches(self) -> list[PitchClass]:
        """Get all pitch classes in this key."""
        return self.scale.get_pitches(self.root)

    def contains(self, pitch: int) -> bool:
        """True when a pitch class belongs to the key."""
        return mod12(pitch) in {p.value for p in self.get_pitches()}

    def __str__(self) -> str:
        return f"{self.root.spell()} {self.scale}"

    def __repr__(self) -> str:
        return f"Key({self.root!r}, {self.scale!r})"

    @classmethod
    def parse(cls, name: str) -> Key:
        """
        Parse a key from a string like 'C_major', 'D_natural_minor', 'F#_dorian'.

        Args:
            name: Key name with underscore separator

        Returns:
            Parsed Key object
        """
        parts = name.split("_")
        if len(parts) < 2:
            raise ValueError(f"Invalid key format: {name}. Expected 'root_scale' like 'C_major'")

        root = PitchClass.parse(parts[0])
        scale = ScaleType.parse("_".join(parts[1:]))
        return cls(root, scale)
