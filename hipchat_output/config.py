from typing import Any, Mapping, Optional

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hipchat_output.errors import ConfigurationError

MAX_FROM_LENGTH = 15

# Alternate spellings that all refer to the "from" key.
_FIELD_NAMES = {"from_": "from", "hipchat_from": "from"}


class HipchatOutputConfig(BaseSettings):
    # Send only the payload instead of the full message serialized as JSON
    payload_only: bool = True
    auth_token: SecretStr
    # ID or name of the room
    room_id: str
    # Name the message will appear to be sent from
    from_: str = Field(
        "Heka",
        validation_alias=AliasChoices("from", "from_", "hipchat_from"),
    )
    # Whether the message should trigger a notification for people in the room
    notify: bool = False

    model_config = SettingsConfigDict(
        env_prefix="HIPCHAT_",
        env_file=".env",
        extra="ignore",
        frozen=True,
        # Room ids are numeric in HipChat and often arrive as integers
        coerce_numbers_to_str=True,
    )

    @field_validator("room_id")
    @classmethod
    def _room_id_required(cls, value: str) -> str:
        if not value:
            raise ValueError("must contain a HipChat room ID or name")
        return value

    @field_validator("from_")
    @classmethod
    def _from_length(cls, value: str) -> str:
        if len(value) > MAX_FROM_LENGTH:
            raise ValueError(f"must be {MAX_FROM_LENGTH} characters or fewer")
        return value


def load_config(raw: Optional[Mapping[str, Any]] = None) -> HipchatOutputConfig:
    """
    Build a validated config from the host's raw key/value settings.

    Keys missing from *raw* fall back to HIPCHAT_* environment variables,
    then to the defaults. Raises ConfigurationError naming the first
    offending key.
    """
    try:
        return HipchatOutputConfig(**dict(raw or {}))
    except ValidationError as exc:
        error = exc.errors()[0]
        loc = error.get("loc") or ("config",)
        field = _FIELD_NAMES.get(str(loc[0]), str(loc[0]))
        reason = error.get("msg", "invalid value").removeprefix("Value error, ")
        raise ConfigurationError(field, reason) from exc
