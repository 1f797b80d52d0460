"""
Split a markdown document into level-2 heading sections.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

# "## Heading" indented up to three spaces, but not "### Heading"
HEADING_RE = re.compile(r"^[ ]{0,3}##(?!#)[ \t]*(.*?)[ \t]*$", re.MULTILINE)


@dataclass(frozen=True)
class Section:
    """A level-2 heading and the text up to the next one"""
    heading: str
    body: str


def normalize_heading(heading: str) -> str:
    """Strip surrounding whitespace and bold markers"""
    return heading.strip().strip("*").strip()


def split_sections(text: str) -> List[Section]:
    """
    Split text at level-2 heading lines, keeping document order.

    Text before the first heading becomes a section with an empty heading.
    A heading on the last line yields a section with an empty body. A
    leading byte order mark is dropped.
    """
    text = text.lstrip("\ufeff")
    sections = []
    matches = list(HEADING_RE.finditer(text))

    preamble = text[:matches[0].start()] if matches else text
    if preamble.strip():
        sections.append(Section(heading="", body=preamble))

    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        sections.append(Section(
            heading=normalize_heading(match.group(1)),
            body=text[match.end():end]
        ))

    return sections


def find_section(sections: List[Section], heading: str) -> Optional[Section]:
    """First section whose heading equals `heading`, ignoring case"""
    wanted = normalize_heading(heading).lower()
    for section in sections:
        if section.heading.lower() == wanted:
            return section
    return None
