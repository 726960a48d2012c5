import pytest
from pydantic import ValidationError

from hipchat_output.config import HipchatOutputConfig, load_config
from hipchat_output.errors import ConfigurationError
from hipchat_output.output import HipchatOutput


def test_defaults():
    config = load_config({"auth_token": "t", "room_id": "ops"})

    assert config.payload_only is True
    assert config.from_ == "Heka"
    assert config.notify is False
    assert config.auth_token.get_secret_value() == "t"


def test_token_is_not_leaked_in_repr():
    config = load_config({"auth_token": "very-secret", "room_id": "ops"})

    assert "very-secret" not in repr(config)


def test_empty_room_id_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        load_config({"auth_token": "t", "room_id": ""})

    assert exc_info.value.field == "room_id"


def test_missing_room_id_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        load_config({"auth_token": "t"})

    assert exc_info.value.field == "room_id"


def test_from_longer_than_fifteen_characters_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        load_config({"auth_token": "t", "room_id": "ops", "from": "x" * 16})

    assert exc_info.value.field == "from"
    assert "15" in exc_info.value.reason


def test_from_of_exactly_fifteen_characters_accepted():
    config = load_config({"auth_token": "t", "room_id": "ops", "from": "x" * 15})

    assert config.from_ == "x" * 15


def test_missing_auth_token_rejected():
    with pytest.raises(ConfigurationError) as exc_info:
        load_config({"room_id": "ops"})

    assert exc_info.value.field == "auth_token"


def test_environment_fills_missing_keys(monkeypatch):
    monkeypatch.setenv("HIPCHAT_AUTH_TOKEN", "from-env")
    monkeypatch.setenv("HIPCHAT_ROOM_ID", "env-room")
    monkeypatch.setenv("HIPCHAT_FROM", "EnvBot")
    monkeypatch.setenv("HIPCHAT_NOTIFY", "true")

    config = load_config({"room_id": "explicit"})

    assert config.room_id == "explicit"
    assert config.auth_token.get_secret_value() == "from-env"
    assert config.from_ == "EnvBot"
    assert config.notify is True


def test_legacy_color_key_is_ignored():
    config = load_config({"auth_token": "t", "room_id": "ops", "color": "purple"})

    assert not hasattr(config, "color")


def test_config_is_immutable():
    config = load_config({"auth_token": "t", "room_id": "ops"})

    with pytest.raises(ValidationError):
        config.room_id = "other"


def test_output_rejects_invalid_raw_config():
    with pytest.raises(ConfigurationError):
        HipchatOutput({"auth_token": "t", "room_id": ""})


def test_output_accepts_model_instance():
    config = HipchatOutputConfig(auth_token="t", room_id="ops", from_="Bot")

    with HipchatOutput(config) as output:
        assert output.config.from_ == "Bot"
        assert output.url == "https://api.hipchat.com/v1"
        assert output.format == "text"


def test_numeric_room_id_accepted():
    config = load_config({"auth_token": "t", "room_id": 42})

    assert config.room_id == "42"
