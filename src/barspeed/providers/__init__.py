"""History provider registry."""

from __future__ import annotations

from barspeed.config import HistoryProviderType
from barspeed.providers.base import BaseHistoryProvider

# Lazy registry: the pandas-backed provider is only imported when used.
PROVIDER_CLASSES: dict[HistoryProviderType, str] = {
    HistoryProviderType.MOCK: "barspeed.providers.mock.MockHistoryProvider",
    HistoryProviderType.FRAME: "barspeed.providers.frame.FrameHistoryProvider",
}


def create_provider(
    provider_type: HistoryProviderType,
    **kwargs,
) -> BaseHistoryProvider:
    """Instantiate a provider by type, forwarding kwargs to its constructor."""
    import importlib

    dotted = PROVIDER_CLASSES[provider_type]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseHistoryProvider", "PROVIDER_CLASSES", "create_provider"]
