"""
Message splitting utility for per-message character limits.

WhatsApp accepts very long texts in theory, but anything above ~4000 chars
displays badly, so long replies are cut into parts of at most `max_length`
characters. Each cut is placed at the most natural boundary found inside the
first `max_length` characters of the remaining text, following the ordered
SPLIT_RULES table below.

This module is pure: it never reads `smartsend.config`.
"""
import math
import re
import sys
from dataclasses import dataclass
from typing import Callable, List, Tuple

WA_MESSAGE_LIMIT = 3800

# Heavy box-drawing run used as a visual section separator
SEPARATOR = "━━━"

# Glyphs that open a section when they start a line; checked in this order
HEADER_GLYPHS = ("📍", "🌟", "##", "**")

WORDS_PER_MINUTE = 200


@dataclass(frozen=True)
class SplitRule:
    """One entry of the cut-point priority table.

    Attributes:
        name: Short identifier reported by `find_split`.
        min_ratio: Candidate must lie strictly past `max_length * min_ratio`.
        locate: (window, floor) -> position of the candidate, or -1.
        cut: (text, position, max_length) -> cut index in `text`.
    """
    name: str
    min_ratio: float
    locate: Callable[[str, float], int]
    cut: Callable[[str, int, int], int]


def _last_past(needle: str) -> Callable[[str, float], int]:
    def locate(window: str, floor: float) -> int:
        pos = window.rfind(needle)
        return pos if pos > floor else -1
    return locate


def _locate_header(window: str, floor: float) -> int:
    for glyph in HEADER_GLYPHS:
        pos = window.rfind("\n" + glyph)
        if pos > floor:
            return pos
    return -1


def _cut_after(width: int) -> Callable[[str, int, int], int]:
    def cut(text: str, pos: int, max_length: int) -> int:
        return pos + width
    return cut


def _cut_after_separator_line(text: str, pos: int, max_length: int) -> int:
    # Keep the whole separator line with the part it closes
    end_of_line = text.find("\n", pos)
    if 0 < end_of_line <= max_length:
        return end_of_line + 1
    return pos


SPLIT_RULES: Tuple[SplitRule, ...] = (
    SplitRule("separator", 0.5, _last_past(SEPARATOR), _cut_after_separator_line),
    SplitRule("paragraph", 0.3, _last_past("\n\n"), _cut_after(2)),
    SplitRule("header", 0.4, _locate_header, _cut_after(1)),
    SplitRule("newline", 0.5, _last_past("\n"), _cut_after(1)),
    SplitRule("sentence", 0.5, _last_past(". "), _cut_after(2)),
    SplitRule("comma", 0.6, _last_past(", "), _cut_after(2)),
    SplitRule("space", 0.7, _last_past(" "), _cut_after(1)),
)


def find_split(text: str, max_length: int) -> Tuple[int, str]:
    """Return the cut index for `text` and the name of the rule that chose it.

    Only the first `max_length` characters are searched. When no rule
    matches, the text is hard-cut at `max_length` ("hard").
    """
    window = text[:max_length]
    for rule in SPLIT_RULES:
        pos = rule.locate(window, max_length * rule.min_ratio)
        if pos >= 0:
            return rule.cut(text, pos, max_length), rule.name
    # Python indexes by code point, but a multi-code-point emoji can still be split here
    return max_length, "hard"


def find_best_split_point(text: str, max_length: int) -> int:
    """Find the best index at which to cut `text`."""
    return find_split(text, max_length)[0]


def split_message(message: str, max_length: int = WA_MESSAGE_LIMIT) -> List[str]:
    """
    Split a long message into chunks that fit the channel's character limit.

    Short (or empty) messages come back untouched as a one-element list.
    Longer ones are cut repeatedly at the best natural boundary; both sides of
    every cut are stripped of surrounding whitespace.

    Args:
        message: The message to split
        max_length: Maximum length per chunk (default: 3800 for WhatsApp)

    Returns:
        List of message chunks, each at most max_length characters
    """
    if not message or len(message) <= max_length:
        return [message]

    chunks = []
    remaining = message

    while len(remaining) > max_length:
        split_point = find_best_split_point(remaining, max_length)

        chunk = remaining[:split_point].strip()
        if chunk:
            chunks.append(chunk)
        remaining = remaining[split_point:].strip()

    # Add the last remaining piece
    if remaining:
        chunks.append(remaining)

    return chunks


def needs_splitting(message: str, max_length: int = WA_MESSAGE_LIMIT) -> bool:
    """Check if a message needs to be split"""
    return len(message) > max_length


def estimate_reading_time(text: str) -> int:
    """Estimated seconds needed to read `text`, rounded up."""
    words = len(re.split(r"\s+", text))
    return math.ceil(words * 60 / WORDS_PER_MINUTE)


if __name__ == "__main__":
    # Standalone check: show how a file would be split
    if len(sys.argv) < 2:
        print("usage: python -m smartsend.utils.message_splitter FILE [MAX_LENGTH]")
        sys.exit(1)
    with open(sys.argv[1], "r", encoding="utf-8") as f:
        source = f.read()
    limit = int(sys.argv[2]) if len(sys.argv) > 2 else WA_MESSAGE_LIMIT
    parts = split_message(source, limit)
    print(f"\nSource: {len(source):,} chars, ~{estimate_reading_time(source)}s to read")
    print(f"Parts: {len(parts)} (limit {limit:,})")
    for idx, part in enumerate(parts, 1):
        preview = part[:60].replace("\n", " ")
        print(f"  {idx}: {len(part):,} chars | {preview}...")
