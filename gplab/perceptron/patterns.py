"""Built-in 8x8 demo patterns, one sample per class."""

from __future__ import annotations

from gplab.perceptron.sample import Sample

DEMO_PATTERNS: dict[str, tuple[str, ...]] = {
    'TARGET_LOCK': (
        "00011000",
        "00011000",
        "00011000",
        "11100111",
        "11100111",
        "00011000",
        "00011000",
        "00011000",
    ),
    'INVADER': (
        "00011000",
        "00111100",
        "01111110",
        "11011011",
        "11111111",
        "00100100",
        "01011010",
        "10100101",
    ),
    'DATA_BLOCK': (
        "11111111",
        "10101010",
        "10101010",
        "11111111",
        "10101010",
        "10101010",
        "11111111",
        "00000000",
    ),
    'SIGNAL': (
        "00000000",
        "00011000",
        "00100100",
        "01000010",
        "10000001",
        "00000000",
        "00011000",
        "00011000",
    ),
    'CPU_CORE': (
        "11111111",
        "10000001",
        "10111101",
        "10100101",
        "10100101",
        "10111101",
        "10000001",
        "11111111",
    ),
    'DIGIT_0': (
        "00111100",
        "01100110",
        "11000011",
        "11000011",
        "11000011",
        "11000011",
        "01100110",
        "00111100",
    ),
    'DIGIT_1': (
        "00011000",
        "00111000",
        "01011000",
        "00011000",
        "00011000",
        "00011000",
        "00011000",
        "01111110",
    ),
    'MARK_X': (
        "11000011",
        "11000011",
        "01100110",
        "00111100",
        "00111100",
        "01100110",
        "11000011",
        "11000011",
    ),
    'PLUS': (
        "00011000",
        "00011000",
        "00011000",
        "11111111",
        "11111111",
        "00011000",
        "00011000",
        "00011000",
    ),
    'CORNER_L': (
        "11000000",
        "11000000",
        "11000000",
        "11000000",
        "11000000",
        "11111111",
        "11111111",
        "00000000",
    ),
    'GLITCH': (
        "00000000",
        "01100110",
        "01100110",
        "00000000",
        "00011000",
        "11000011",
        "01111110",
        "00000000",
    ),
    'ARROW_UP': (
        "00011000",
        "00111100",
        "01111110",
        "11111111",
        "00011000",
        "00011000",
        "00011000",
        "00011000",
    ),
}


def build_demo_samples() -> list[Sample]:
    return [Sample.from_rows(label, rows) for label, rows in DEMO_PATTERNS.items()]


def render(sample: Sample, on: str = "#", off: str = ".") -> str:
    """Text rendering of a sample using its width (one row per line)."""
    width = sample.width or len(sample.pixels)
    rows = [sample.pixels[i:i + width] for i in range(0, len(sample.pixels), width)]
    return "\n".join("".join(on if p else off for p in row) for row in rows)


__all__ = ['DEMO_PATTERNS', 'build_demo_samples', 'render']
