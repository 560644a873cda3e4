
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Protocol

class ActionFlags(Enum):
    DEFAULT = 0
    DEFERRED = 1

@dataclass
class EngineRanking:
    # 1-based positions into the rankable actions, first element = top choice
    ranked_indices: List[int] = field(default_factory=list)
    probabilities: List[float] = field(default_factory=list)

@dataclass
class EngineSlotRanking:
    slot_id: str
    chosen_index: int  # 0-based, original action coordinates
    ranking: EngineRanking = field(default_factory=EngineRanking)

class RankingEngine(Protocol):
    def choose_rank(self, event_id: str, context_json: str, flags: ActionFlags) -> EngineRanking:
        """
        シリアライズ済みのコンテキストを受け取り、rankableアクションに対するランキングを返す
        """
        ...

    def choose_slots(self, event_id: str, context_json: str, flags: ActionFlags) -> List[EngineSlotRanking]:
        ...

    def activate(self, event_id: str) -> None:
        ...

    def reward(self, event_id: str, value: float) -> None:
        ...
