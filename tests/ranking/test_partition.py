
import pytest
from rank_adapter.context import Action
from rank_adapter.errors import DuplicateActionIdError
from rank_adapter.ranking.partition import partition

@pytest.fixture
def actions():
    return [
        Action(id="A", features=[{"type": "news"}]),
        Action(id="B", features=[{"type": "sports"}]),
        Action(id="C", features=[{"type": "music"}]),
        Action(id="D"),
    ]

def test_partition_without_exclusions(actions):
    parts = partition(actions, set())

    assert [a.id for a in parts.rankable_actions] == ["A", "B", "C", "D"]
    assert parts.excluded_actions == []
    assert [a.original_index for a in parts.rankable_actions] == [0, 1, 2, 3]

def test_partition_keeps_original_index_after_filtering(actions):
    parts = partition(actions, {"B", "D"})

    assert [(a.id, a.original_index) for a in parts.rankable_actions] == [("A", 0), ("C", 2)]
    assert [(a.id, a.original_index) for a in parts.excluded_actions] == [("B", 1), ("D", 3)]

def test_partition_covers_every_action(actions):
    parts = partition(actions, {"C"})

    ids = {a.id for a in parts.rankable_actions} | {a.id for a in parts.excluded_actions}
    assert ids == {a.id for a in actions}
    assert [a.id for a in parts.original_actions] == ["A", "B", "C", "D"]

def test_partition_ignores_unknown_excluded_ids(actions):
    parts = partition(actions, {"Z", "A"})

    assert [a.id for a in parts.excluded_actions] == ["A"]
    assert len(parts.rankable_actions) == 3

def test_partition_does_not_mutate_input(actions):
    partition(actions, {"A"})

    # original_index は入力ではなくコピーに付与される
    assert all(a.original_index is None for a in actions)

def test_partition_empty_actions():
    parts = partition([], {"A"})

    assert parts.original_actions == []
    assert parts.rankable_actions == []
    assert parts.excluded_actions == []

def test_partition_rejects_duplicate_ids():
    with pytest.raises(DuplicateActionIdError) as exc_info:
        partition([Action(id="A"), Action(id="B"), Action(id="A")], set())

    assert exc_info.value.action_id == "A"
    assert isinstance(exc_info.value, ValueError)
