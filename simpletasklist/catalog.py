"""Tag catalogs: the tags in use, prefixed with the "all" and "none" entries."""

from __future__ import annotations

import enum
from typing import Iterable, Iterator, Union


class TagMatch(enum.Enum):
    """Selections that are not a real tag."""

    ALL = "all"
    NONE = "none"


MATCH_ALL = TagMatch.ALL
MATCH_NONE = TagMatch.NONE

# A filter selection is either one of the sentinels or a tag string.
TagSelection = Union[TagMatch, str]

SENTINEL_COUNT = 2


def normalize_tags(tags: Iterable[str | None] | None) -> list[str]:
    """Return the distinct, stripped, non-empty tags of ``tags`` in sorted order."""
    cleaned: set[str] = set()
    if not tags:
        return []
    for tag in tags:
        if tag is None:
            continue
        text = str(tag).strip()
        if text:
            cleaned.add(text)
    return sorted(cleaned)


def tag_from_text(text: str | None) -> str:
    """Tag as a single word: outer whitespace dropped, inner runs joined with "-"."""
    if text is None:
        return ""
    return "-".join(text.split())


class TagCatalog:
    """Ordered sequence ``[all_label, none_label, *tags]``.

    The two labels are display strings supplied by the caller (usually
    translated); index 0 and 1 always hold them.
    """

    def __init__(self, all_label: str, none_label: str, tags: Iterable[str] | None = None):
        self.all_label = all_label
        self.none_label = none_label
        self._tags: list[str] = normalize_tags(tags)

    @property
    def tags(self) -> list[str]:
        return list(self._tags)

    def set_tags(self, tags: Iterable[str] | None) -> None:
        self._tags = normalize_tags(tags)

    def items(self) -> list[str]:
        return [self.all_label, self.none_label, *self._tags]

    def choices(self) -> list[str]:
        """The selectable tags: the catalog without its two leading entries."""
        return self.items()[SENTINEL_COUNT:]

    def selection_at(self, index: int) -> TagSelection:
        if index == 0:
            return MATCH_ALL
        if index == 1:
            return MATCH_NONE
        if not SENTINEL_COUNT <= index < len(self):
            raise IndexError(f"Catalog index out of range: {index}")
        return self._tags[index - SENTINEL_COUNT]

    def selection_for(self, label: str) -> TagSelection:
        """Map a displayed entry back to a selection; unknown labels select all."""
        if label == self.all_label:
            return MATCH_ALL
        if label == self.none_label:
            return MATCH_NONE
        if label in self._tags:
            return label
        return MATCH_ALL

    def label_for(self, selection: TagSelection) -> str:
        if selection is MATCH_ALL:
            return self.all_label
        if selection is MATCH_NONE:
            return self.none_label
        return selection

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __iter__(self) -> Iterator[str]:
        return iter(self.items())

    def __getitem__(self, index):
        return self.items()[index]

    def __len__(self) -> int:
        return len(self._tags) + SENTINEL_COUNT

    def __repr__(self) -> str:
        return f"TagCatalog({self.items()!r})"


def strip_sentinels(catalog: Iterable[str]) -> list[str]:
    """Working list for a dialog: everything after the two leading entries."""
    if isinstance(catalog, TagCatalog):
        return catalog.choices()
    return list(catalog)[SENTINEL_COUNT:]
