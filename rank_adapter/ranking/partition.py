
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Sequence, Set
from rank_adapter.context import Action
from rank_adapter.errors import DuplicateActionIdError

@dataclass
class Partition:
    original_actions: List[Action] = field(default_factory=list)
    rankable_actions: List[Action] = field(default_factory=list)
    excluded_actions: List[Action] = field(default_factory=list)

def partition(actions: Sequence[Action], excluded_ids: Iterable[str]) -> Partition:
    """
    アクションを「エンジンに渡すもの(rankable)」と「除外するもの(excluded)」に分割する。

    original_index はフィルタ前の位置(0-based)で付与する。以降のリスト位置から
    再計算してはならない。入力のActionは変更せず、コピーに付与する。

    excluded_ids に存在しないIDが含まれていても無視する。
    """
    excluded_set: Set[str] = set(excluded_ids)
    seen: Set[str] = set()
    result = Partition()

    for idx, action in enumerate(actions):
        if action.id in seen:
            raise DuplicateActionIdError(action.id)
        seen.add(action.id)

        stamped = replace(action, original_index=idx)
        result.original_actions.append(stamped)
        if stamped.id in excluded_set:
            result.excluded_actions.append(stamped)
        else:
            result.rankable_actions.append(stamped)

    return result
