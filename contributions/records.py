import re
from dataclasses import dataclass, field

# (key, tab label, singular noun)
CATEGORIES = (
    ("patents", "Patents", "patent"),
    ("publications", "Publications", "publication"),
    ("conferences", "Conferences", "conference"),
    ("events", "Events", "event"),
)
CATEGORY_KEYS = tuple(key for key, _, _ in CATEGORIES)

# Real line breaks, or the literal backslash-n typed into the Firestore console
_ENTRY_SPLIT = re.compile(r"\r?\n|\\n")


def split_entries(value) -> tuple:
    """
    Turn a stored free-text field into an ordered tuple of entries.

    Strings are split on line breaks (real or escaped), lists contribute one
    item per element. Entries are stripped and blanks dropped. None -> ().
    """
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        parts = []
        for item in value:
            parts.extend(split_entries(item))
        return tuple(parts)
    text = value if isinstance(value, str) else str(value)
    return tuple(
        part.strip() for part in _ENTRY_SPLIT.split(text) if part.strip()
    )


def raw_text(value) -> str:
    """The stored text of a field, unchanged. Arrays are newline-joined; None -> ""."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return "\n".join(raw_text(item) for item in value)
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class Contribution:
    email: str
    patents: tuple = field(default_factory=tuple)
    publications: tuple = field(default_factory=tuple)
    conferences: tuple = field(default_factory=tuple)
    events: tuple = field(default_factory=tuple)
    # category -> stored text, kept for export
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_fields(cls, email: str, fields: dict):
        fields = fields or {}
        return cls(
            email=email,
            **{key: split_entries(fields.get(key)) for key in CATEGORY_KEYS},
            raw={key: raw_text(fields.get(key)) for key in CATEGORY_KEYS},
        )

    def entries(self, category: str) -> tuple:
        if category not in CATEGORY_KEYS:
            raise KeyError(category)
        return getattr(self, category)

    def text(self, category: str) -> str:
        """Stored text for a category; falls back to the joined entries."""
        entries = self.entries(category)
        if category in self.raw:
            return self.raw[category]
        return "\n".join(entries)

    @property
    def is_empty(self) -> bool:
        return not any(self.entries(key) for key in CATEGORY_KEYS)
