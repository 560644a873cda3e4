
from typing import List, Callable, Dict, Any, Optional
from rank_adapter.engine.base import ActionFlags, EngineRanking, EngineSlotRanking, RankingEngine
from rank_adapter.errors import EngineContractError, UnsupportedOperationError

RawRanking = List[Dict[str, Any]]
ChooseFunc = Callable[[str, str, ActionFlags], RawRanking]

def _required(raw: Dict[str, Any], key: str) -> Any:
    if key not in raw:
        raise EngineContractError(f"Engine response entry is missing '{key}': {raw!r}")
    return raw[key]

def to_engine_ranking(raw_ranking: RawRanking) -> EngineRanking:
    """
    エンジンの生レスポンス(0-basedのaction_index + probability)を
    EngineRanking(1-basedのranked_indices)に変換する。
    """
    ranked_indices = []
    probabilities = []
    for raw in raw_ranking:
        ranked_indices.append(int(_required(raw, 'action_index')) + 1)
        probabilities.append(float(_required(raw, 'probability')))
    return EngineRanking(ranked_indices=ranked_indices, probabilities=probabilities)

class CallableEngineAdapter(RankingEngine):
    """
    ローカル推論エンジンやリモートクライアントの関数をラップし、
    RankingEngineインターフェースに適合させるアダプター
    """
    def __init__(
        self,
        choose_rank_func: ChooseFunc,
        choose_slots_func: Optional[ChooseFunc] = None,
        activate_func: Optional[Callable[[str], None]] = None,
        reward_func: Optional[Callable[[str, float], None]] = None,
    ):
        self.choose_rank_func = choose_rank_func
        self.choose_slots_func = choose_slots_func
        self.activate_func = activate_func
        self.reward_func = reward_func

    def choose_rank(self, event_id: str, context_json: str, flags: ActionFlags) -> EngineRanking:
        raw_results = self.choose_rank_func(event_id, context_json, flags)
        return to_engine_ranking(raw_results)

    def choose_slots(self, event_id: str, context_json: str, flags: ActionFlags) -> List[EngineSlotRanking]:
        if self.choose_slots_func is None:
            raise UnsupportedOperationError("multi-slot ranking is not supported by this engine")

        raw_results = self.choose_slots_func(event_id, context_json, flags)

        slots = []
        for raw in raw_results:
            slots.append(EngineSlotRanking(
                slot_id=str(_required(raw, 'slot_id')),
                chosen_index=int(_required(raw, 'action_index')),
                ranking=to_engine_ranking(_required(raw, 'ranking')),
            ))
        return slots

    def activate(self, event_id: str) -> None:
        if self.activate_func is None:
            raise UnsupportedOperationError("activate is not supported by this engine")
        self.activate_func(event_id)

    def reward(self, event_id: str, value: float) -> None:
        if self.reward_func is None:
            raise UnsupportedOperationError("reward is not supported by this engine")
        self.reward_func(event_id, value)
