
import time
import logging
import boto3
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger("rank_adapter.config")

PARAM_DEFER_ACTIVATION = '/personalizer/rank/defer_activation'
PARAM_LOG_RESULTS = '/personalizer/rank/log_results'

@dataclass
class RankConfig:
    defer_activation: bool = False
    log_results: bool = True

def _parse_bool(value: str) -> bool:
    # "true" (case-insensitive) is True, anything else is False
    return value.strip().lower() == 'true'

class ConfigManager:
    def __init__(self, ttl_seconds: float = 60.0):
        self.ttl_seconds = ttl_seconds
        self._cached_config: Optional[RankConfig] = None
        self._last_fetched_at: float = 0.0
        self._ssm_client = boto3.client('ssm')

    def get_config(self) -> RankConfig:
        current_time = time.time()

        if self._cached_config and (current_time - self._last_fetched_at < self.ttl_seconds):
            return self._cached_config

        try:
            config = self._fetch_from_ssm()
            self._cached_config = config
            self._last_fetched_at = current_time
            return config
        except Exception as e:
            logger.warning("Error fetching rank config from SSM, using defaults: %s", e)
            return self._get_default_config()

    def _fetch_from_ssm(self) -> RankConfig:
        names = [PARAM_DEFER_ACTIVATION, PARAM_LOG_RESULTS]

        response = self._ssm_client.get_parameters(Names=names)
        params = {p['Name']: p['Value'] for p in response.get('Parameters', [])}

        return RankConfig(
            defer_activation=_parse_bool(params.get(PARAM_DEFER_ACTIVATION, 'false')),
            log_results=_parse_bool(params.get(PARAM_LOG_RESULTS, 'true')),
        )

    def _get_default_config(self) -> RankConfig:
        # 安全側に倒す(即時activate)
        return RankConfig()
