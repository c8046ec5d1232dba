"""Labelled binary bitmap samples."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from gplab.utils.validation import ValidationError, validate_pixels


@dataclass(frozen=True)
class Sample:
    """A label plus a flattened row-major vector of 0/1 pixels.

    ``width`` and ``height`` are informational; training only needs all
    samples of a run to share ``len(pixels)``.
    """

    label: str
    pixels: tuple[int, ...]
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.label, str) or not self.label:
            raise ValidationError("invalid_label", "Sample label must be a non-empty string", label=self.label)
        pixels = tuple(int(p) for p in self.pixels)
        validate_pixels(pixels)
        object.__setattr__(self, 'pixels', pixels)
        if self.width and self.height and self.width * self.height != len(pixels):
            raise ValidationError(
                "shape_mismatch",
                "width * height must equal the number of pixels",
                width=self.width,
                height=self.height,
                pixels=len(pixels),
            )

    @classmethod
    def from_rows(cls, label: str, rows: Sequence[str]) -> 'Sample':
        """Build a sample from text rows such as ``"00011000"``."""
        if not rows:
            raise ValidationError("empty_sample", "Samples must contain at least one pixel", label=label)
        widths = {len(r) for r in rows}
        if len(widths) != 1:
            raise ValidationError("ragged_rows", "All rows must have the same width", label=label)
        pixels = tuple(int(ch) for row in rows for ch in row)
        return cls(label, pixels, width=len(rows[0]), height=len(rows))

    @property
    def active_pixels(self) -> int:
        return sum(self.pixels)

    def __len__(self) -> int:
        return len(self.pixels)


def labels_in_order(samples: Iterable[Sample]) -> list[str]:
    """Distinct labels in first-seen order."""
    return list(dict.fromkeys(s.label for s in samples))


__all__ = ['Sample', 'labels_in_order']
