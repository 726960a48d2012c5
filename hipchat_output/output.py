"""HipChat room notification output."""

import logging
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import BaseModel, ValidationError

from hipchat_output import Message, OutboundRequest
from hipchat_output.config import HipchatOutputConfig, load_config
from hipchat_output.errors import (
    HipchatOutputError,
    NotSentError,
    RemoteStatusError,
    ResponseDecodeError,
    TransportError,
)
from hipchat_output.format import API_BASE, MESSAGE_FORMAT, format_hipchat, message_text
from hipchat_output.runner import OutputRunner

logger = logging.getLogger(__name__)

# Statuses HipChat documents as failures, with a readable cause
STATUS_ERRORS: dict[int, str] = {
    400: "bad request",
    401: "authentication rejected",
    403: "rate limit exceeded",
    406: "invalid content type",
    500: "internal server error",
    503: "service unavailable",
}


class MessageResponse(BaseModel):
    status: str = ""


class HipchatOutput:
    """
    Forward pipeline messages to a HipChat room.

    Each message is sent with a blocking POST before the next one is read.
    Failures are reported to the runner and never stop the loop.
    """

    def __init__(
        self,
        config: Union[HipchatOutputConfig, Mapping[str, Any]],
        client: Optional[httpx.Client] = None,
    ):
        if not isinstance(config, HipchatOutputConfig):
            config = load_config(config)
        self.config = config
        self.url = API_BASE
        self.format = MESSAGE_FORMAT
        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "HipchatOutput":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def build_request(self, message: Message) -> OutboundRequest:
        text = message_text(self.config, message)
        return format_hipchat(
            self.config,
            text,
            message.severity,
            base_url=self.url,
            message_format=self.format,
        )

    def send_message(self, request: OutboundRequest) -> None:
        """POST one room message and raise if HipChat did not send it."""
        try:
            response = self.client.post(request.url, data=request.form)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to HipChat failed: {e}") from e

        cause = STATUS_ERRORS.get(response.status_code)
        if cause is not None:
            raise RemoteStatusError(response.status_code, cause)

        try:
            result = MessageResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise ResponseDecodeError(
                f"Could not decode HipChat response ({response.status_code}): {response.text[:200]}"
            ) from e

        if result.status != "sent":
            raise NotSentError(result.status)

    def process_message(self, message: Message) -> None:
        request = self.build_request(message)
        self.send_message(request)
        logger.debug(f"Sent message {message.uuid} to room {self.config.room_id}")

    def run(self, runner: OutputRunner) -> None:
        """Consume packs until the runner's channel closes."""
        for pack in runner.in_chan():
            try:
                self.process_message(pack.message)
            except HipchatOutputError as e:
                runner.log_error(e)
            finally:
                pack.recycle()
