
class RankingError(RuntimeError):
    pass

class EngineContractError(RankingError):
    """
    The engine returned a response that cannot be mapped back onto the request
    (length mismatch, index out of range, missing fields).
    """

class UnsupportedOperationError(RankingError):
    pass

class InvalidRankRequestError(RankingError, ValueError):
    pass

class DuplicateActionIdError(InvalidRankRequestError):
    def __init__(self, action_id: str):
        super().__init__(f"Duplicate action id in rank request: {action_id!r}")
        self.action_id = action_id
