
from dataclasses import dataclass, field
from typing import Optional, List, Any

# features (Action/Slot/context) are JSON-serializable objects, embedded as-is
# into the decision context. A str feature is encoded as a JSON string, not parsed.

@dataclass
class Action:
    id: str
    features: List[Any] = field(default_factory=list)
    original_index: Optional[int] = None  # set by partition()

@dataclass
class Slot:
    id: str
    baseline_action_id: str
    features: List[Any] = field(default_factory=list)
    excluded_action_ids: List[str] = field(default_factory=list)

@dataclass
class RankOptions:
    actions: List[Action]
    context_features: List[Any] = field(default_factory=list)
    excluded_action_ids: List[str] = field(default_factory=list)
    event_id: Optional[str] = None
    defer_activation: Optional[bool] = None  # None -> RankConfig default

@dataclass
class MultiSlotRankOptions:
    actions: List[Action]
    slots: List[Slot]
    context_features: List[Any] = field(default_factory=list)
    event_id: Optional[str] = None
    defer_activation: Optional[bool] = None

@dataclass
class RankedAction:
    id: str
    probability: Optional[float] = None

@dataclass
class RankResult:
    event_id: str
    ranking: List[RankedAction] = field(default_factory=list)
    reward_action_id: Optional[str] = None

@dataclass
class SlotResult:
    id: str
    ranking: List[RankedAction] = field(default_factory=list)
    reward_action_id: Optional[str] = None

@dataclass
class MultiSlotRankResult:
    event_id: str
    slots: List[SlotResult] = field(default_factory=list)
