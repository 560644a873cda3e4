
import uuid
from typing import Callable, Dict, Optional
from rank_adapter.config import ConfigManager, RankConfig
from rank_adapter.context import (
    MultiSlotRankOptions,
    MultiSlotRankResult,
    RankOptions,
    RankResult,
    SlotResult,
)
from rank_adapter.engine.base import ActionFlags, EngineSlotRanking, RankingEngine
from rank_adapter.errors import EngineContractError, InvalidRankRequestError
from rank_adapter.observability.logging import log_multi_slot_result, log_rank_result
from rank_adapter.ranking.partition import partition
from rank_adapter.ranking.reconcile import reconcile
from rank_adapter.ranking.serializer import serialize_decision_context

def new_event_id() -> str:
    return uuid.uuid4().hex

class RankProcessor:
    """
    partition -> engine -> reconcile を順に実行する。
    呼び出しごとに独立したデータを生成するため、複数スレッドから共有してよい。
    エンジンの例外はそのまま呼び出し元に伝播する(リトライしない)。
    """
    def __init__(
        self,
        engine: RankingEngine,
        config_manager: Optional[ConfigManager] = None,
        event_id_factory: Callable[[], str] = new_event_id,
    ):
        self.engine = engine
        self.config_manager = config_manager
        self.event_id_factory = event_id_factory

    def _get_config(self) -> RankConfig:
        if self.config_manager is None:
            return RankConfig()
        return self.config_manager.get_config()

    def _flags(self, defer_activation: Optional[bool], config: RankConfig) -> ActionFlags:
        if defer_activation is None:
            defer_activation = config.defer_activation
        return ActionFlags.DEFERRED if defer_activation else ActionFlags.DEFAULT

    def rank(self, options: RankOptions) -> RankResult:
        config = self._get_config()
        event_id = options.event_id or self.event_id_factory()

        parts = partition(options.actions, options.excluded_action_ids)
        context_json = serialize_decision_context(options.context_features, parts.rankable_actions)
        flags = self._flags(options.defer_activation, config)

        engine_ranking = self.engine.choose_rank(event_id, context_json, flags)

        ranking, chosen_id = reconcile(
            parts.original_actions,
            parts.rankable_actions,
            parts.excluded_actions,
            engine_ranking,
        )
        result = RankResult(event_id=event_id, ranking=ranking, reward_action_id=chosen_id)

        if config.log_results:
            log_rank_result(result, options.excluded_action_ids)
        return result

    def rank_multi_slot(self, options: MultiSlotRankOptions) -> MultiSlotRankResult:
        """
        エンジンには全アクションを _multi として渡し、各スロットの除外IDは _slots に含める。

        エンジンが返す各スロットの ranked_indices は、そのスロットの除外を取り除いた
        アクション列(元の順序)に対する1-basedの位置でなければならない。
        chosen_index は全アクション列(_multi)に対する0-basedの位置。
        """
        config = self._get_config()
        event_id = options.event_id or self.event_id_factory()

        # duplicate action ids are rejected here, before the engine is called
        parts = partition(options.actions, [])
        action_ids = {action.id for action in parts.original_actions}

        slots_by_id = {}
        for slot in options.slots:
            if slot.id in slots_by_id:
                raise InvalidRankRequestError(f"Duplicate slot id in rank request: {slot.id!r}")
            if slot.baseline_action_id not in action_ids:
                raise InvalidRankRequestError(
                    f"Baseline action {slot.baseline_action_id!r} of slot {slot.id!r} is not in actions"
                )
            slots_by_id[slot.id] = slot

        context_json = serialize_decision_context(
            options.context_features, parts.original_actions, options.slots
        )
        flags = self._flags(options.defer_activation, config)

        slot_rankings: Dict[str, EngineSlotRanking] = {}
        for slot_ranking in self.engine.choose_slots(event_id, context_json, flags):
            if slot_ranking.slot_id not in slots_by_id:
                raise EngineContractError(f"Engine returned unknown slot {slot_ranking.slot_id!r}")
            slot_rankings[slot_ranking.slot_id] = slot_ranking

        result = MultiSlotRankResult(event_id=event_id)
        for slot in options.slots:
            slot_ranking = slot_rankings.get(slot.id)
            if slot_ranking is None:
                raise EngineContractError(f"Engine returned no ranking for slot {slot.id!r}")

            slot_parts = partition(options.actions, slot.excluded_action_ids)
            ranking, chosen_id = reconcile(
                slot_parts.original_actions,
                slot_parts.rankable_actions,
                slot_parts.excluded_actions,
                slot_ranking.ranking,
                multi_slot_chosen_index=slot_ranking.chosen_index,
            )
            result.slots.append(SlotResult(id=slot.id, ranking=ranking, reward_action_id=chosen_id))

        if config.log_results:
            log_multi_slot_result(result)
        return result

    def activate(self, event_id: str) -> None:
        self.engine.activate(event_id)

    def reward(self, event_id: str, value: float) -> None:
        self.engine.reward(event_id, value)
