"""Turns a completed assistant reply into a structured view.

The model is instructed to answer in one of two shapes: a prescription block
delimited by sentinel markers, or a summary made of bold headings followed by
body lines. Model output is not guaranteed to follow either shape, so parsing
never fails: lines that do not fit are skipped, and text with no recognizable
shape comes back as ``RawText``.
"""

import re
import unicodedata
from typing import List, Optional

from .models import (
    ParsedReply,
    Prescription,
    PrescriptionItem,
    RawText,
    Section,
    SectionedSummary,
)

PRESCRIPTION_START = "[PRESCRIPTION_START]"
PRESCRIPTION_END = "[PRESCRIPTION_END]"

_ORDINAL = re.compile(r"^\d+(?:\s*[.):]\s+|\s*[.):]|\s+)")
_HEADINGS = (re.compile(r"^\*\*(.+?)\*\*"), re.compile(r"^__(.+?)__"))
_JOINERS = {"\ufe0f", "\ufe0e", "\u200d"}


def parse(text: str) -> ParsedReply:
    """Classify ``text`` as a prescription, a sectioned summary or raw text."""
    if is_prescription(text):
        return Prescription(items=parse_prescription(text))

    sections = parse_sections(text)
    if sections:
        return SectionedSummary(sections=sections)

    return RawText(text=text)


def is_prescription(text: str) -> bool:
    return PRESCRIPTION_START in text and PRESCRIPTION_END in text


def parse_prescription(text: str) -> List[PrescriptionItem]:
    """Extract the drug/dosage pairs listed between the prescription markers.

    Lines without a usable ``name - dosage`` split are dropped.
    """
    start = text.find(PRESCRIPTION_START)
    end = text.find(PRESCRIPTION_END)
    if start == -1 or end == -1:
        return []

    block = text[start + len(PRESCRIPTION_START) : end] if end > start else ""
    items = []
    for line in block.splitlines():
        item = parse_prescription_line(line)
        if item is not None:
            items.append(item)
    return items


def parse_prescription_line(line: str) -> Optional[PrescriptionItem]:
    line = line.strip()
    if not line:
        return None

    remainder = _ORDINAL.sub("", line, count=1)
    position = remainder.find("-")
    while position != -1:
        drug_name = remainder[:position].strip()
        dosage = remainder[position + 1 :].strip()
        if drug_name and dosage:
            return PrescriptionItem(drug_name=drug_name, dosage=dosage)
        position = remainder.find("-", position + 1)
    return None


def parse_sections(text: str) -> List[Section]:
    """Group lines under bold headings (``**title**`` or ``__title__``).

    Lines that come before the first heading are dropped.
    """
    sections: List[Section] = []
    title: Optional[str] = None
    body: List[str] = []

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        heading = _match_heading(line)
        if heading is not None:
            if title is not None:
                sections.append(Section(title=title, body="\n".join(body)))
            title, body = heading, []
        elif title is not None:
            body.append(line)

    if title is not None:
        sections.append(Section(title=title, body="\n".join(body)))
    return sections


def _match_heading(line: str) -> Optional[str]:
    for pattern in _HEADINGS:
        match = pattern.match(line)
        if match:
            return _strip_icons(match.group(1))
    return None


def _strip_icons(title: str) -> str:
    index = 0
    while index < len(title):
        char = title[index]
        if char.isspace() or char in _JOINERS or unicodedata.category(char) == "So":
            index += 1
        else:
            break
    return title[index:].strip()
