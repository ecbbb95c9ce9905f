from dataclasses import dataclass

from .records import CATEGORIES

PREVIEW_LIMIT = 3
OVERVIEW_TAB = "overview"
TABS = ((OVERVIEW_TAB, "Overview"),) + tuple((key, label) for key, label, _ in CATEGORIES)


def preview(entries, limit: int = PREVIEW_LIMIT):
    """Return (first `limit` entries, how many more there are)."""
    entries = tuple(entries)
    return entries[:limit], max(0, len(entries) - limit)


@dataclass(frozen=True)
class Section:
    key: str
    label: str
    noun: str
    entries: tuple
    shown: tuple
    remaining: int

    @property
    def empty_message(self) -> str:
        return f"No {self.noun} information available"

    @property
    def more_label(self) -> str:
        return f"View all {self.label.lower()} ({self.remaining} more)"


def build_sections(contribution, limit: int = PREVIEW_LIMIT) -> list:
    sections = []
    for key, label, noun in CATEGORIES:
        entries = contribution.entries(key)
        shown, remaining = preview(entries, limit)
        sections.append(Section(key, label, noun, entries, shown, remaining))
    return sections


def resolve_tab(value) -> str:
    keys = {key for key, _ in TABS}
    return value if value in keys else OVERVIEW_TAB
