"""HipChat room message formatting."""

import json
from urllib.parse import quote_plus

from hipchat_output import Message, OutboundRequest
from hipchat_output.color import severity_color
from hipchat_output.config import HipchatOutputConfig
from hipchat_output.errors import SerializationError

API_BASE = "https://api.hipchat.com/v1"
MESSAGE_FORMAT = "text"


def message_text(config: HipchatOutputConfig, message: Message) -> str:
    """Return the payload, or the whole message as JSON when payload_only is off."""
    if config.payload_only:
        return message.payload

    try:
        return json.dumps(message.to_dict(), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Could not serialize message {message.uuid}: {e}") from e


def format_hipchat(
    config: HipchatOutputConfig,
    text: str,
    severity: int,
    base_url: str = API_BASE,
    message_format: str = MESSAGE_FORMAT,
) -> OutboundRequest:
    """
    Format a room message for the HipChat v1 API.

    The auth token travels in the query string, everything else in the
    form-encoded body.
    """
    token = quote_plus(config.auth_token.get_secret_value())
    url = f"{base_url}/rooms/message?auth_token={token}"

    form = {
        "room_id": config.room_id,
        "from": config.from_,
        "message": text,
        "message_format": message_format,
        "color": severity_color(severity),
    }

    if config.notify:
        form["notify"] = "1"

    # The body is sent form-encoded as UTF-8
    for key, value in form.items():
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise SerializationError(f"Could not encode {key} as UTF-8: {e}") from e

    return OutboundRequest(url=url, form=form)
