"""Look up outputs by name without a global registry."""

from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

import httpx

from hipchat_output.errors import ConfigurationError
from hipchat_output.output import HipchatOutput

PLUGIN_NAME = "HipchatOutput"

# Common misspellings -> plugin name
_SUGGESTIONS: dict[str, str] = {
    "hipchat": PLUGIN_NAME,
    "hipchatoutput": PLUGIN_NAME,
    "hipchat_output": PLUGIN_NAME,
    "hip-chat": PLUGIN_NAME,
}


def create_hipchat_output(
    raw_config: Mapping[str, Any],
    client: Optional[httpx.Client] = None,
) -> HipchatOutput:
    return HipchatOutput(raw_config, client=client)


OUTPUTS: Mapping[str, Callable[..., HipchatOutput]] = MappingProxyType({
    PLUGIN_NAME: create_hipchat_output,
})


def suggest_output_name(name: str) -> Optional[str]:
    """Return a suggestion if the name looks like a typo of a known output."""
    if name in OUTPUTS:
        return None
    return _SUGGESTIONS.get(name.lower())


def build_output(
    name: str,
    raw_config: Mapping[str, Any],
    client: Optional[httpx.Client] = None,
) -> HipchatOutput:
    factory = OUTPUTS.get(name)
    if factory is None:
        reason = f"Unknown output type: {name}"
        suggestion = suggest_output_name(name)
        if suggestion:
            reason += f" (did you mean {suggestion}?)"
        raise ConfigurationError("type", reason)
    return factory(raw_config, client=client)
