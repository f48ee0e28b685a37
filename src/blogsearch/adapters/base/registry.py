"""Adapter registry — builds the configured search backend.

Backend classes are imported lazily so that optional client libraries
are only required for the backend actually in use.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

from blogsearch.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from blogsearch.adapters.base.adapter import SearchAdapter
    from blogsearch.config.settings import SearchSettings

logger = logging.getLogger(__name__)

# Maps backend names to (module_path, class_name)
_ADAPTER_MAP: dict[str, tuple[str, str]] = {
    "elasticsearch": ("blogsearch.adapters.elasticsearch.adapter", "ElasticsearchAdapter"),
    "opensearch": ("blogsearch.adapters.opensearch.adapter", "OpenSearchAdapter"),
}


def available_backends() -> list[str]:
    return list(_ADAPTER_MAP)


def create_adapter(settings: SearchSettings) -> SearchAdapter:
    """Instantiate the search adapter named by ``settings.backend``.

    The adapter is constructed but not connected; call ``initialize()``.

    Raises:
        ConfigurationError: If the backend is unknown or cannot be imported.
    """
    entry = _ADAPTER_MAP.get(settings.backend)
    if entry is None:
        raise ConfigurationError(
            f"Unknown search backend '{settings.backend}'. Available backends: {available_backends()}"
        )

    module_path, class_name = entry
    try:
        module = importlib.import_module(module_path)
        adapter_class = getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Failed to import search backend '{settings.backend}': {e}") from e

    kwargs: dict[str, Any] = {
        "hosts": settings.hosts,
        "index": settings.index,
        "verify_certs": settings.verify_certs,
    }
    if settings.username:
        kwargs["username"] = settings.username
    if settings.password:
        kwargs["password"] = settings.password
    if settings.api_key:
        kwargs["api_key"] = settings.api_key

    logger.info("Using '%s' search backend (index '%s')", settings.backend, settings.index)
    return adapter_class(**kwargs)
