"""Unit tests for sort-key resolution."""

import pytest

from casa_datatables.domain.entities import (
    SORT_KEYS,
    AggregateKey,
    AggregateKind,
    DirectKey,
    JoinedKey,
    RankKey,
    resolve_sort_key,
)
from casa_datatables.domain.exceptions import UnsupportedSortColumnError


@pytest.mark.parametrize("column", ["display_name", "email", "active"])
def test_direct_columns(column):
    assert resolve_sort_key(column) == DirectKey(column)


def test_supervisor_name_is_a_joined_key():
    assert resolve_sort_key("supervisor_name") == JoinedKey("supervisor", "display_name")


def test_transition_aged_youth_is_a_rank_key():
    assert resolve_sort_key("has_transition_aged_youth_cases") == RankKey("transition_aged_youth_case")


def test_contact_columns_are_aggregates():
    latest = resolve_sort_key("most_recent_contact_occurred_at")
    recent = resolve_sort_key("contacts_made_in_past_days")

    assert isinstance(latest, AggregateKey) and latest.kind is AggregateKind.MAX
    assert isinstance(recent, AggregateKey) and recent.kind is AggregateKind.WINDOWED_COUNT
    assert latest.relation == recent.relation == "case_contacts"


@pytest.mark.parametrize("column", ["", "id", "Display_Name", "volunteers.email; drop table"])
def test_unknown_column_is_rejected(column):
    with pytest.raises(UnsupportedSortColumnError) as exc_info:
        resolve_sort_key(column)
    assert exc_info.value.column == column


def test_mapping_is_read_only():
    with pytest.raises(TypeError):
        SORT_KEYS["password"] = DirectKey("password")
