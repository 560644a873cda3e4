
import pytest
import time
from unittest.mock import patch
from rank_adapter.config import ConfigManager, PARAM_DEFER_ACTIVATION, PARAM_LOG_RESULTS

@pytest.fixture
def mock_ssm_client():
    with patch('rank_adapter.config.boto3.client') as mock:
        yield mock.return_value

def test_get_config_ssm_success(mock_ssm_client):
    """SSMから設定が正しく取得できること"""
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': PARAM_DEFER_ACTIVATION, 'Value': 'TRUE'},
            {'Name': PARAM_LOG_RESULTS, 'Value': 'false'},
        ]
    }

    manager = ConfigManager()
    config = manager.get_config()

    assert config.defer_activation is True
    assert config.log_results is False

    mock_ssm_client.get_parameters.assert_called_once_with(
        Names=[PARAM_DEFER_ACTIVATION, PARAM_LOG_RESULTS]
    )

def test_missing_parameters_use_defaults(mock_ssm_client):
    mock_ssm_client.get_parameters.return_value = {'Parameters': []}

    config = ConfigManager().get_config()

    assert config.defer_activation is False
    assert config.log_results is True

def test_get_config_ssm_failure_returns_default(mock_ssm_client, caplog):
    """SSM取得失敗時はデフォルト設定(即時activate)を返すこと"""
    mock_ssm_client.get_parameters.side_effect = Exception("SSM access failed")

    manager = ConfigManager()
    config = manager.get_config()

    assert config.defer_activation is False
    assert config.log_results is True
    assert "SSM access failed" in caplog.text

def test_config_caching(mock_ssm_client):
    """設定がTTL内でキャッシュされること"""
    mock_ssm_client.get_parameters.return_value = {
        'Parameters': [
            {'Name': PARAM_DEFER_ACTIVATION, 'Value': 'true'}
        ]
    }

    manager = ConfigManager(ttl_seconds=60)

    config1 = manager.get_config()
    config2 = manager.get_config()

    assert config1.defer_activation is True
    assert config2.defer_activation is True
    # SSMは1回しか呼ばれていないはず
    assert mock_ssm_client.get_parameters.call_count == 1

def test_config_cache_expiration(mock_ssm_client):
    """TTL経過後に再取得すること"""
    mock_ssm_client.get_parameters.return_value = {'Parameters': []}

    manager = ConfigManager(ttl_seconds=0.1)

    manager.get_config()
    time.sleep(0.2) # TTL切れ待ち
    manager.get_config()

    assert mock_ssm_client.get_parameters.call_count == 2
