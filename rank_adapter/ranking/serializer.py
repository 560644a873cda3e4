
import json
from typing import Any, Dict, Optional, Sequence
from rank_adapter.context import Action, Slot

def build_decision_context(
    context_features: Sequence[Any],
    actions: Sequence[Action],
    slots: Optional[Sequence[Slot]] = None,
) -> Dict[str, Any]:
    """
    エンジンに渡すDecision Contextを組み立てる。
    featuresは中身を解釈せず、そのまま転送する。
    """
    decision_context: Dict[str, Any] = {}
    if context_features:
        decision_context["FromUrl"] = list(context_features)

    decision_context["_multi"] = [
        {"id": action.id, "json": list(action.features)}
        for action in actions
    ]

    if slots is not None:
        decision_context["_slots"] = [
            {
                "slotId": slot.id,
                "slotJson": list(slot.features),
                "baselineActionId": slot.baseline_action_id,
                "excludedActionIds": list(slot.excluded_action_ids),
            }
            for slot in slots
        ]

    return decision_context

def serialize_decision_context(
    context_features: Sequence[Any],
    actions: Sequence[Action],
    slots: Optional[Sequence[Slot]] = None,
) -> str:
    return json.dumps(build_decision_context(context_features, actions, slots))
