
import json
import logging
from typing import Iterable
from rank_adapter.context import RankResult, MultiSlotRankResult

logger = logging.getLogger("rank_adapter")
logger.setLevel(logging.INFO)
# Handler設定は実行環境に依存するため、ここでは標準出力への出力のみを想定
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter('%(message)s'))
logger.addHandler(handler)

def log_rank_result(result: RankResult, excluded_ids: Iterable[str]):
    """
    ランキング結果を構造化ログ(JSON)として出力する。
    """

    log_data = {
        "event": "rank_generated",
        "event_id": result.event_id,
        "reward_action_id": result.reward_action_id,
        "excluded_action_ids": sorted(set(excluded_ids)),
        "ranking": [
            {
                "id": action.id,
                "probability": action.probability,
                "rank": i + 1,
            }
            for i, action in enumerate(result.ranking)
        ]
    }

    logger.info(json.dumps(log_data))

def log_multi_slot_result(result: MultiSlotRankResult):
    log_data = {
        "event": "multi_slot_rank_generated",
        "event_id": result.event_id,
        "slots": [
            {
                "id": slot.id,
                "reward_action_id": slot.reward_action_id,
                "ranking": [action.id for action in slot.ranking],
            }
            for slot in result.slots
        ]
    }

    logger.info(json.dumps(log_data))
