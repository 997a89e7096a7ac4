"""Convert MDX-style documentation sources into plain text for language models.

The conversion is pattern based rather than a full parse. Rules run in a fixed
order, and each one only sees what the previous rules left behind:

1. leading front matter is removed;
2. ``import`` lines are blanked;
3. HTML and MDX comments are removed;
4. capitalized component blocks and self-closing component tags are removed;
5. headings become numbered lines (``1.``, ``1.2.``, ``1.2.3.``);
6. pipe tables become ``•``-separated rows, separator rows become empty;
7. ``-``/``*``/``+`` bullets become ``•`` bullets;
8. inline code, bold and italic markers are dropped;
9. runs of blank lines collapse and the text is stripped.

Markup that does not match a rule (an unterminated front matter block, an
unclosed component) is left in the output as-is.
"""

from __future__ import annotations

import re

from .models import Heading, NormalizedDocument
from .parsers import split_front_matter

IMPORT_LINE = re.compile(r"^import .*$", re.MULTILINE)
HTML_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
MDX_COMMENT = re.compile(r"\{/\*.*?\*/\}", re.DOTALL)
# The closing tag must repeat the opening name; the first one found wins.
COMPONENT_BLOCK = re.compile(r"<([A-Z][\w.]*)(?:\s[^>]*)?(?<!/)>.*?</\1\s*>", re.DOTALL)
COMPONENT_SELF_CLOSING = re.compile(r"<[A-Z][^>]*/>")
HEADING_LINE = re.compile(r"^(#{1,3})[ \t]+(\S.*?)[ \t]*$", re.MULTILINE)
TABLE_SEPARATOR_ROW = re.compile(r"^\s*\|[\s:|-]*-[\s:|-]*\|\s*$")
BULLET_MARKER = re.compile(r"^[ \t]*[-*+][ \t]+", re.MULTILINE)
INLINE_CODE = re.compile(r"`([^`]+)`")
BOLD = re.compile(r"\*\*([^*]+)\*\*")
ITALIC = re.compile(r"\*([^*]+)\*")
BLANK_RUN = re.compile(r"\n{3,}")

TABLE_CELL_SEPARATOR = " • "
BULLET_GLYPH = "• "


class _HeadingNumberer:
    """Substitution callback that numbers headings and records them."""

    def __init__(self) -> None:
        self.h1 = 0
        self.h2 = 0
        self.h3 = 0
        self.headings: list[Heading] = []

    def __call__(self, match: re.Match[str]) -> str:
        level = len(match.group(1))
        title = match.group(2)
        if level == 1:
            self.h1 += 1
            self.h2 = self.h3 = 0
        elif level == 2:
            self.h2 += 1
            self.h3 = 0
        else:
            self.h3 += 1

        heading = Heading(level=level, ordinal=(self.h1, self.h2, self.h3), title=title)
        self.headings.append(heading)
        if level == 1:
            return f"\n{heading.label}\n{'-' * len(title)}"
        return heading.label


def strip_front_matter(text: str) -> str:
    front_matter, body = split_front_matter(text)
    return text if front_matter is None else body


def remove_imports(text: str) -> str:
    return IMPORT_LINE.sub("", text)


def remove_comments(text: str) -> str:
    text = HTML_COMMENT.sub("", text)
    return MDX_COMMENT.sub("", text)


def remove_components(text: str) -> str:
    text = COMPONENT_BLOCK.sub("", text)
    return COMPONENT_SELF_CLOSING.sub("", text)


def number_headings(text: str) -> tuple[str, list[Heading]]:
    """Rewrite ``#``/``##``/``###`` headings into numbered lines."""
    numberer = _HeadingNumberer()
    rewritten = HEADING_LINE.sub(numberer, text)
    return rewritten, numberer.headings


def flatten_tables(text: str) -> str:
    lines = text.split("\n")
    for index, line in enumerate(lines):
        stripped = line.strip()
        if len(stripped) < 2 or not (stripped.startswith("|") and stripped.endswith("|")):
            continue
        if TABLE_SEPARATOR_ROW.match(line):
            lines[index] = ""
        else:
            lines[index] = line.replace("|", TABLE_CELL_SEPARATOR)
    return "\n".join(lines)


def normalize_bullets(text: str) -> str:
    return BULLET_MARKER.sub(BULLET_GLYPH, text)


def strip_inline_markup(text: str) -> str:
    text = INLINE_CODE.sub(r"\1", text)
    text = BOLD.sub(r"\1", text)
    return ITALIC.sub(r"\1", text)


def collapse_blank_lines(text: str) -> str:
    return BLANK_RUN.sub("\n\n", text).strip()


def normalize_document(raw: str) -> NormalizedDocument:
    """Normalize one raw source document and collect its heading outline."""
    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    text = strip_front_matter(text)
    text = remove_imports(text)
    text = remove_comments(text)
    text = remove_components(text)
    text, headings = number_headings(text)
    text = flatten_tables(text)
    text = normalize_bullets(text)
    text = strip_inline_markup(text)
    text = collapse_blank_lines(text)
    return NormalizedDocument(text=text, headings=headings)
