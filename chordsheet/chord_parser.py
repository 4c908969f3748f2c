"""ChordSymbolParser: turns one written chord token into a ChordSymbol."""

from __future__ import annotations

import re
from typing import Final

from chordsheet.chord_models import Alteration, ChordSymbol
from chordsheet.pitch_table import (
    COMPOUND_QUALITIES,
    NOTE_TO_INDEX,
    SUFFIX_TO_QUALITY,
    SUPPORTED_ADDITIONS,
    SUPPORTED_ALTERATIONS,
)

ROOT_RE: Final = re.compile(r"^[A-G][#b]?")
BASS_RE: Final = re.compile(r"/([A-G][#b]?)$")
MODIFIER_RE: Final = re.compile(r"([#b])(\d+)|add(\d+)")

SUPERSCRIPT_TO_NUMBER: Final[dict[str, int]] = {
    "¹": 1, "²": 2, "³": 3, "⁴": 4, "⁵": 5, "⁶": 6, "⁷": 7, "⁸": 8, "⁹": 9,
}

# Longest suffix first; sorted() is stable so table order breaks ties.
_SUFFIXES_LONGEST_FIRST: Final[tuple[str, ...]] = tuple(
    sorted(SUFFIX_TO_QUALITY, key=len, reverse=True)
)


def parse_chord(token: str) -> ChordSymbol | None:
    """
    Parse a single chord token such as ``"Cmaj7"``, ``"G/B"`` or ``"E7(#9)"``.

    Grammar, in order:

    1. Trimmed token must be non-empty and not wrapped in parentheses.
    2. An optional ``/<root>`` tail is taken as the slash bass.
    3. A root ``[A-G](#|b)?`` must start the token.
    4. The suffix (parentheses and whitespace removed) must start with a
       known quality suffix; the longest one wins.
    5. The rest may only hold ``(#|b)<degree>`` alterations, ``add<degree>``
       additions and a trailing superscript inversion digit.
    6. A modifier that turns the quality into a compound one (Dom7 + b9,
       Min7 + b5...) is folded into the quality, whatever its position.

    Args:
        token: Raw chord text.

    Returns:
        A ChordSymbol whose ``raw`` is the untouched input, or None when the
        token is not a chord.
    """
    text = token.strip()
    if not text:
        return None
    if text.startswith("(") and text.endswith(")"):
        return None

    bass: str | None = None
    bass_match = BASS_RE.search(text)
    if bass_match:
        bass = bass_match.group(1)
        text = text[: bass_match.start()]

    root_match = ROOT_RE.match(text)
    if not root_match:
        return None
    root = root_match.group(0)
    if root not in NOTE_TO_INDEX or (bass is not None and bass not in NOTE_TO_INDEX):
        return None

    suffix = re.sub(r"[()\s]", "", text[root_match.end():])

    inversion = 0
    if suffix and suffix[-1] in SUPERSCRIPT_TO_NUMBER:
        inversion = SUPERSCRIPT_TO_NUMBER[suffix[-1]]
        suffix = suffix[:-1]

    quality_suffix = next((s for s in _SUFFIXES_LONGEST_FIRST if suffix.startswith(s)), None)
    if quality_suffix is None:
        return None

    alterations: list[Alteration] = []
    additions: list[int] = []

    def extract(match: re.Match[str]) -> str:
        sign, degree, added = match.groups()
        if added is not None:
            if int(added) in SUPPORTED_ADDITIONS:
                additions.append(int(added))
                return ""
            return match.group(0)
        delta = 1 if sign == "#" else -1
        if (int(degree), delta) in SUPPORTED_ALTERATIONS:
            alterations.append(Alteration(degree=int(degree), delta=delta))
            return ""
        return match.group(0)

    leftover = MODIFIER_RE.sub(extract, suffix[len(quality_suffix):])
    if leftover.strip():
        return None

    quality = _fold_compound(SUFFIX_TO_QUALITY[quality_suffix], alterations, additions)

    return ChordSymbol(
        root=root,
        quality=quality,
        bass=bass,
        alterations=tuple(alterations),
        additions=tuple(additions),
        inversion=inversion,
        raw=token,
    )


def _fold_compound(quality: str, alterations: list[Alteration], additions: list[int]) -> str:
    """
    Merge one modifier into ``quality`` when the pair has a quality of its own.

    ``C7add9b9`` and ``C7b9add9`` both end up as Dom7b9 + add9, so every
    spelling of a chord parses to the same ChordSymbol. The merged modifier
    is removed from ``alterations`` / ``additions`` in place.
    """
    for alteration in alterations:
        compound = COMPOUND_QUALITIES.get((quality, alteration.token))
        if compound is not None:
            alterations.remove(alteration)
            return compound
    for degree in additions:
        compound = COMPOUND_QUALITIES.get((quality, f"add{degree}"))
        if compound is not None:
            additions.remove(degree)
            return compound
    return quality


def is_chord(token: str) -> bool:
    """True when ``token`` parses as a chord."""
    return parse_chord(token) is not None
