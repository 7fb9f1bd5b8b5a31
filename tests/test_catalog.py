# tests/test_catalog.py

from __future__ import annotations

import pytest

from simpletasklist.catalog import MATCH_ALL, MATCH_NONE, TagCatalog, normalize_tags, strip_sentinels, tag_from_text

from .fakes import ALL_CONTEXTS, NO_CONTEXT


def test_normalize_tags_sorts_and_dedupes() -> None:
    assert normalize_tags(["work", " home", "work", "", None, "  "]) == ["home", "work"]
    assert normalize_tags(None) == []


@pytest.mark.parametrize(
    "text,expected",
    [("home", "home"), ("  my  home ", "my-home"), ("a\tb\nc", "a-b-c"), ("   ", ""), (None, "")],
)
def test_tag_from_text(text, expected) -> None:
    assert tag_from_text(text) == expected


def test_items_start_with_sentinels(context_catalog: TagCatalog) -> None:
    assert context_catalog.items() == [ALL_CONTEXTS, NO_CONTEXT, "home", "work"]
    assert list(context_catalog) == context_catalog.items()
    assert len(context_catalog) == 4
    assert context_catalog[2] == "home"


def test_empty_catalog_keeps_sentinels() -> None:
    catalog = TagCatalog(ALL_CONTEXTS, NO_CONTEXT)
    assert catalog.items() == [ALL_CONTEXTS, NO_CONTEXT]
    assert catalog.choices() == []


def test_set_tags_replaces_tags(context_catalog: TagCatalog) -> None:
    context_catalog.set_tags(["phone"])
    assert context_catalog.tags == ["phone"]
    assert "home" not in context_catalog
    assert "phone" in context_catalog


def test_selection_at(context_catalog: TagCatalog) -> None:
    assert context_catalog.selection_at(0) is MATCH_ALL
    assert context_catalog.selection_at(1) is MATCH_NONE
    assert context_catalog.selection_at(3) == "work"
    with pytest.raises(IndexError):
        context_catalog.selection_at(4)


def test_selection_for_label(context_catalog: TagCatalog) -> None:
    assert context_catalog.selection_for(ALL_CONTEXTS) is MATCH_ALL
    assert context_catalog.selection_for(NO_CONTEXT) is MATCH_NONE
    assert context_catalog.selection_for("home") == "home"
    assert context_catalog.selection_for("gone") is MATCH_ALL


def test_label_for_selection(context_catalog: TagCatalog) -> None:
    assert context_catalog.label_for(MATCH_ALL) == ALL_CONTEXTS
    assert context_catalog.label_for(MATCH_NONE) == NO_CONTEXT
    assert context_catalog.label_for("work") == "work"


def test_tag_named_like_a_sentinel_stays_a_tag() -> None:
    catalog = TagCatalog("all", "none", ["all"])
    assert catalog.selection_at(2) == "all"
    assert catalog.selection_at(0) is MATCH_ALL


@pytest.mark.parametrize(
    "catalog,expected",
    [
        ([ALL_CONTEXTS, NO_CONTEXT, "home", "work"], ["home", "work"]),
        ([ALL_CONTEXTS, NO_CONTEXT], []),
        (TagCatalog(ALL_CONTEXTS, NO_CONTEXT, ["b", "a"]), ["a", "b"]),
    ],
)
def test_strip_sentinels(catalog, expected) -> None:
    assert strip_sentinels(catalog) == expected


def test_strip_sentinels_returns_new_list() -> None:
    source = [ALL_CONTEXTS, NO_CONTEXT, "home"]
    stripped = strip_sentinels(source)
    stripped.append("work")
    assert source == [ALL_CONTEXTS, NO_CONTEXT, "home"]
