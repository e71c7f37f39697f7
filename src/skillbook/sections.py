"""Splits a skill document body into its conventional Markdown sections."""

from __future__ import annotations

import re

from .models import Section, SectionKind

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
FENCE_PATTERN = re.compile(r"^\s{0,3}(`{3,}|~{3,})")
LIST_ITEM_PATTERN = re.compile(r"^ ?(?:[-*+]|\d+[.)])\s+(.*\S)\s*$")
NESTED_ITEM_PATTERN = re.compile(r"^\s+(?:[-*+]|\d+[.)])\s+")

_ALIASES: dict[SectionKind, tuple[str, ...]] = {
    SectionKind.WORKFLOW: ("workflow", "workflow steps", "process", "procedure", "steps", "how it works"),
    SectionKind.TECHNOLOGIES: (
        "supported technologies",
        "supported languages",
        "supported frameworks",
        "supported platforms",
        "supported tools",
        "technologies",
        "languages",
        "tools",
    ),
    SectionKind.USAGE: ("usage", "usage instructions", "how to use", "when to use", "instructions", "getting started"),
    SectionKind.EXAMPLES: ("example", "examples", "usage examples", "example usage", "samples"),
    SectionKind.BEST_PRACTICES: ("best practices", "best practice", "guidelines", "tips", "recommendations"),
    SectionKind.EDGE_CASES: ("edge cases", "edge case", "common pitfalls", "pitfalls", "limitations", "caveats"),
}


def _normalize_heading(title: str) -> str:
    text = re.sub(r"^\s*\d+[.)]?\s*", "", title.lower())
    text = re.sub(r"[^a-z0-9& ]+", " ", text)
    return " ".join(text.split())


def classify_heading(title: str) -> SectionKind:
    """Map a section heading to its conventional kind."""
    normalized = _normalize_heading(title)
    if not normalized:
        return SectionKind.OTHER

    for kind, aliases in _ALIASES.items():
        if normalized in aliases:
            return kind

    for kind, aliases in _ALIASES.items():
        for alias in aliases:
            if normalized.startswith(alias + " "):
                return kind

    return SectionKind.OTHER


# Line states yielded by _scan_fences
TEXT, FENCE_OPEN, CODE, FENCE_CLOSE = "text", "open", "code", "close"


def _scan_fences(lines: list[str]):
    """Yield (line, state) pairs, tracking fenced code blocks."""
    fence: str | None = None
    for line in lines:
        match = FENCE_PATTERN.match(line)
        if fence is None:
            if match:
                fence = match.group(1)
                yield line, FENCE_OPEN
            else:
                yield line, TEXT
        elif (
            match
            and match.group(1)[0] == fence[0]
            and len(match.group(1)) >= len(fence)
            and not line[match.end() :].strip()
        ):
            fence = None
            yield line, FENCE_CLOSE
        else:
            yield line, CODE


def extract_list_items(content: str) -> list[str]:
    """Return the top-level list items of a Markdown fragment.

    Indented continuation lines are folded into the item they follow.
    Nested list items and fenced code are skipped.
    """
    items: list[list[str]] = []
    open_item = False

    for line, state in _scan_fences(content.splitlines()):
        if state != TEXT or not line.strip() or HEADING_PATTERN.match(line):
            open_item = False
            continue

        match = LIST_ITEM_PATTERN.match(line)
        if match:
            items.append([match.group(1)])
            open_item = True
        elif not line[:1].isspace():
            open_item = False
        elif open_item and not NESTED_ITEM_PATTERN.match(line):
            items[-1].append(line.strip())

    return [" ".join(parts) for parts in items]


def extract_code_blocks(content: str) -> list[str]:
    """Return the contents of fenced code blocks, without the fences."""
    blocks: list[str] = []
    buffer: list[str] | None = None

    for line, state in _scan_fences(content.splitlines()):
        if state == FENCE_OPEN:
            buffer = []
        elif state == CODE and buffer is not None:
            buffer.append(line)
        elif state == FENCE_CLOSE and buffer is not None:
            blocks.append("\n".join(buffer))
            buffer = None

    # An unterminated fence runs to the end of the fragment
    if buffer:
        blocks.append("\n".join(buffer))
    return blocks


def split_examples(section: Section) -> list[str]:
    """Break an Examples section into individual examples.

    Subsections win over code blocks, which win over list items. Prose
    before the first subsection is an example of its own, and a subsection
    with nothing under its heading is not an example. A section with only
    prose counts as a single example.
    """
    lines = list(_scan_fences(section.content.splitlines()))
    headings = [HEADING_PATTERN.match(line) for line, state in lines if state == TEXT]
    split_level = min((len(heading.group(1)) for heading in headings if heading), default=0)

    preamble: list[str] = []
    chunks: list[list[str]] = []
    for line, state in lines:
        heading = HEADING_PATTERN.match(line) if state == TEXT else None
        if heading and len(heading.group(1)) == split_level:
            chunks.append([line])
        elif chunks:
            chunks[-1].append(line)
        else:
            preamble.append(line)

    if chunks:
        examples = ["\n".join(chunk).strip() for chunk in chunks if "".join(chunk[1:]).strip()]
        leading = "\n".join(preamble).strip()
        return [leading] + examples if leading else examples
    if section.code_blocks:
        return list(section.code_blocks)
    if section.items:
        return list(section.items)
    content = section.content.strip()
    return [content] if content else []


def _build_section(title: str, level: int, lines: list[str]) -> Section:
    content = "\n".join(lines).strip("\n")
    return Section(
        title=title,
        kind=classify_heading(title),
        level=level,
        content=content,
        items=extract_list_items(content),
        code_blocks=extract_code_blocks(content),
    )


def parse_sections(body: str) -> tuple[str | None, list[Section]]:
    """Split a document body into its title and level-2 sections.

    The first level-1 heading is the document title. Deeper headings stay
    inside the section that contains them, and anything before the first
    level-2 heading is treated as preamble.
    """
    title: str | None = None
    sections: list[Section] = []
    current_title: str | None = None
    current_lines: list[str] = []

    for line, state in _scan_fences(body.splitlines()):
        heading = HEADING_PATTERN.match(line) if state == TEXT else None
        level = len(heading.group(1)) if heading else 0

        if heading and level <= 2:
            if current_title is not None:
                sections.append(_build_section(current_title, 2, current_lines))
            current_title, current_lines = None, []
            if level == 1:
                if title is None:
                    title = heading.group(2)
                continue
            current_title = heading.group(2)
            continue

        if current_title is not None:
            current_lines.append(line)

    if current_title is not None:
        sections.append(_build_section(current_title, 2, current_lines))

    return title, sections
