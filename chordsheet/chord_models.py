"""Data models for parsed chords and processed songs."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable


@dataclass(frozen=True)
class Alteration:
    """A raised or lowered chord degree, e.g. ``b9`` or ``#11``."""

    degree: int
    delta: int

    @property
    def token(self) -> str:
        """Written form, e.g. 'b9'."""
        return f"{'#' if self.delta > 0 else 'b'}{self.degree}"


@dataclass(frozen=True)
class ChordSymbol:
    """
    One chord as written in a song sheet.

    Attributes:
        root:        Root pitch-class name as written ("C", "Bb"), or None for
                     annotation-only entries.
        quality:     Canonical quality id (a key of QUALITY_INTERVALS), or None.
        bass:        Slash-bass pitch-class name, if any.
        alterations: Altered degrees in the order they were written.
        additions:   Added degrees (9, 11, 13) in the order they were written.
        inversion:   Number of times the chord stack is rotated upwards.
        raw:         The untouched source text.
        id:          Stable identity assigned after parsing (see ProcessedSong).
        position:    Column of the chord inside its source line.
    """

    root: str | None
    quality: str | None
    bass: str | None = None
    alterations: tuple[Alteration, ...] = ()
    additions: tuple[int, ...] = ()
    inversion: int = 0
    raw: str = ""
    id: int | None = None
    position: int | None = None

    @classmethod
    def annotation(cls, raw: str) -> ChordSymbol:
        """Build a text-only entry (section label, "N.C.", playing hint)."""
        return cls(root=None, quality=None, raw=raw)

    @property
    def is_resolvable(self) -> bool:
        return bool(self.root) and bool(self.quality)


@dataclass(frozen=True)
class SongChordPlacement:
    """
    A chord (or annotation) anchored at a column above a lyric line.

    A repeat placement ("%") carries a copy of the chord it repeats, so it
    can be resolved and played, but it is not a chord of its own: it has no
    id and is left out of ``SongLine.chords`` and ``ProcessedSong.all_chords``.
    """

    chord: ChordSymbol
    column: int
    is_annotation: bool = False
    is_repeat: bool = False

    @property
    def is_own_chord(self) -> bool:
        return not self.is_annotation and not self.is_repeat


@dataclass(frozen=True)
class SongLine:
    """A lyric line with the chords placed above it."""

    lyrics: str
    placements: tuple[SongChordPlacement, ...] = ()
    is_instrumental: bool = False

    @property
    def chords(self) -> list[ChordSymbol]:
        """Resolvable chords of this line, left to right, repeats excluded."""
        return [p.chord for p in self.placements if p.is_own_chord]


@dataclass(frozen=True)
class ProcessedSong:
    """
    A parsed song.

    ``all_chords`` is derived from the line placements, so the flat chord list
    and the per-line view can never disagree. Edits go through the id-based
    helpers below, each of which returns a new song.
    """

    lines: tuple[SongLine, ...] = ()

    @property
    def all_chords(self) -> list[ChordSymbol]:
        """Every resolvable chord in document order."""
        return [chord for line in self.lines for chord in line.chords]

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def assign_ids(self, start: int = 1) -> ProcessedSong:
        """Return a copy whose resolvable chords carry consecutive ids."""
        next_id = start
        lines: list[SongLine] = []
        for line in self.lines:
            placements: list[SongChordPlacement] = []
            for placement in line.placements:
                if placement.is_own_chord:
                    placement = replace(placement, chord=replace(placement.chord, id=next_id))
                    next_id += 1
                placements.append(placement)
            lines.append(replace(line, placements=tuple(placements)))
        return ProcessedSong(lines=tuple(lines))

    def chord_by_id(self, chord_id: int) -> ChordSymbol | None:
        for chord in self.all_chords:
            if chord.id == chord_id:
                return chord
        return None

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def replace_chord(self, updated: ChordSymbol) -> ProcessedSong:
        """
        Swap the chord sharing ``updated.id`` for ``updated``.

        Raises:
            KeyError: If no chord in the song has that id.
        """
        self._require(updated.id)
        return self._rebuild(
            lambda p: [replace(p, chord=updated)] if self._holds(p, updated.id) else [p]
        )

    def delete_chord(self, chord_id: int) -> ProcessedSong:
        """
        Remove the chord with ``chord_id`` from its line.

        Raises:
            KeyError: If no chord in the song has that id.
        """
        self._require(chord_id)
        return self._rebuild(lambda p: [] if self._holds(p, chord_id) else [p])

    def insert_chord_after(
        self,
        chord_id: int,
        chord: ChordSymbol,
        column: int | None = None,
    ) -> ProcessedSong:
        """
        Insert ``chord`` right after the chord with ``chord_id``.

        The new chord receives the next free id. Without an explicit column it
        shares the column of its predecessor.

        Raises:
            KeyError: If no chord in the song has that id.
        """
        self._require(chord_id)
        new_id = max((c.id for c in self.all_chords if c.id is not None), default=0) + 1

        def insert(placement: SongChordPlacement) -> list[SongChordPlacement]:
            if not self._holds(placement, chord_id):
                return [placement]
            new_column = placement.column if column is None else column
            inserted = SongChordPlacement(
                chord=replace(chord, id=new_id, position=new_column),
                column=new_column,
            )
            return [placement, inserted]

        return self._rebuild(insert)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _holds(placement: SongChordPlacement, chord_id: int | None) -> bool:
        return placement.is_own_chord and placement.chord.id == chord_id

    def _require(self, chord_id: int | None) -> None:
        if chord_id is None or self.chord_by_id(chord_id) is None:
            raise KeyError(f"No chord with id {chord_id!r} in this song.")

    def _rebuild(
        self,
        edit: Callable[[SongChordPlacement], list[SongChordPlacement]],
    ) -> ProcessedSong:
        lines = tuple(
            replace(
                line,
                placements=tuple(new for p in line.placements for new in edit(p)),
            )
            for line in self.lines
        )
        return ProcessedSong(lines=lines)
