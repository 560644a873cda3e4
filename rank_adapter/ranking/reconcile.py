
from typing import List, Optional, Sequence, Tuple
from rank_adapter.context import Action, RankedAction
from rank_adapter.engine.base import EngineRanking
from rank_adapter.errors import EngineContractError

def _check_engine_ranking(rankable_actions: Sequence[Action], engine_ranking: EngineRanking) -> None:
    ranked_indices = engine_ranking.ranked_indices
    if len(ranked_indices) != len(engine_ranking.probabilities):
        raise EngineContractError(
            f"Engine returned {len(ranked_indices)} indices but "
            f"{len(engine_ranking.probabilities)} probabilities"
        )
    if len(ranked_indices) != len(rankable_actions):
        raise EngineContractError(
            f"Engine ranked {len(ranked_indices)} actions, "
            f"expected {len(rankable_actions)} rankable actions"
        )
    for index in ranked_indices:
        if not 1 <= index <= len(rankable_actions):
            raise EngineContractError(
                f"Engine index {index} is out of range 1..{len(rankable_actions)}"
            )
    if len(set(ranked_indices)) != len(ranked_indices):
        raise EngineContractError(f"Engine ranking is not a permutation: {ranked_indices}")

def reconcile(
    original_actions: Sequence[Action],
    rankable_actions: Sequence[Action],
    excluded_actions: Sequence[Action],
    engine_ranking: EngineRanking,
    multi_slot_chosen_index: Optional[int] = None,
) -> Tuple[List[RankedAction], Optional[str]]:
    """
    Map a ranking computed over the rankable subset back onto the original action list.

    engine_ranking.ranked_indices are 1-based positions into rankable_actions and
    ranked_indices[0] is the engine's pick. In multi-slot mode the pick is given
    separately by multi_slot_chosen_index, already 0-based in original coordinates.

    Excluded actions stay at their original position with no probability.

    Returns:
        (ranking over original_actions, chosen action id or None)
    """
    _check_engine_ranking(rankable_actions, engine_ranking)
    ranked_indices = engine_ranking.ranked_indices

    if multi_slot_chosen_index is not None:
        chosen_action_index: Optional[int] = multi_slot_chosen_index
    elif ranked_indices:
        # rankable coordinates -> original coordinates
        chosen_action_index = rankable_actions[ranked_indices[0] - 1].original_index
    else:
        # nothing was ranked (empty or fully excluded request)
        chosen_action_index = None

    if excluded_actions:
        new_ranking = [0] * len(original_actions)
        probabilities: List[Optional[float]] = [None] * len(original_actions)

        # at the original position, point to the original position of the ranked action
        for i, target in enumerate(rankable_actions):
            chosen = rankable_actions[ranked_indices[i] - 1]
            new_ranking[target.original_index] = chosen.original_index + 1
            probabilities[target.original_index] = engine_ranking.probabilities[i]

        for excluded in excluded_actions:
            new_ranking[excluded.original_index] = excluded.original_index + 1
    else:
        # rankable_actions == original_actions here
        new_ranking = [rankable_actions[index - 1].original_index + 1 for index in ranked_indices]
        probabilities = list(engine_ranking.probabilities)

    ranking = [
        RankedAction(id=original_actions[index - 1].id, probability=probabilities[i])
        for i, index in enumerate(new_ranking)
    ]

    if chosen_action_index is None:
        return ranking, None
    if not 0 <= chosen_action_index < len(original_actions):
        raise EngineContractError(
            f"Chosen action index {chosen_action_index} is out of range "
            f"for {len(original_actions)} actions"
        )
    return ranking, original_actions[chosen_action_index].id
