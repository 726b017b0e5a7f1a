"""Locating a request channel to the metrics provider."""
import importlib
import logging

logger = logging.getLogger(__name__)

# Fallback attribute paths probed on the host object, in priority order.
HOST_BINDINGS = ("invoke", "api.invoke", "core.invoke")


class RequestFailed(Exception):
    """A provider request raised or returned something unusable."""


class ChannelUnavailable(Exception):
    """No provider binding could be found at startup."""


class NullChannel:
    """Offline stand-in for a provider channel. Falsy; every call fails."""

    name = "offline"

    def __bool__(self):
        return False

    def __call__(self, command):
        raise ChannelUnavailable(f"cannot run {command!r}: no provider channel")

    def __repr__(self):
        return "NullChannel()"


NULL_CHANNEL = NullChannel()


def _lookup(obj, path):
    for part in path.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            return None
    return obj


def _module_binding(module_name):
    if not module_name:
        return None
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        logger.debug("Provider module %s not importable: %s", module_name, e)
        return None
    return getattr(module, "invoke", None)


def resolve_channel(module_name="monitor_core", host=None):
    """
    Return the first callable request channel found, or NULL_CHANNEL.

    Probes the preferred module-level ``invoke`` first, then each of
    HOST_BINDINGS on ``host``. Meant to be called once at startup.
    """
    candidates = [(f"{module_name}.invoke", _module_binding(module_name))]
    if host is not None:
        candidates.extend((f"host.{path}", _lookup(host, path)) for path in HOST_BINDINGS)

    for label, binding in candidates:
        if callable(binding):
            logger.info("Using provider channel %s", label)
            return binding

    logger.warning("Could not find any provider channel; running in offline mode")
    return NULL_CHANNEL
