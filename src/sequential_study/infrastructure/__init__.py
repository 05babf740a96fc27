"""Infrastructure layer for the sequential study flow.

Re-exports the public API surface for convenience::

    from sequential_study.infrastructure import (
        EventBus, EventStore, TransitionConfig, load_document,
    )

The dev server lives in :mod:`sequential_study.infrastructure.dev_server`
and is imported on demand.
"""

from sequential_study.infrastructure.auth import (
    MockTokenProvider,
    MockUser,
    TokenProvider,
    render_mock_auth_module,
)
from sequential_study.infrastructure.config import (
    DevServerConfig,
    TransitionConfig,
    load_config_file,
    load_config_from_json,
)
from sequential_study.infrastructure.event_bus import EventBus, EventStore
from sequential_study.infrastructure.serialization import (
    document_from_dict,
    document_from_json,
    document_from_yaml,
    document_to_dict,
    load_document,
    section_to_dict,
    sections_to_json,
)

__all__ = [
    # Event bus
    "EventBus",
    "EventStore",
    # Configuration
    "TransitionConfig",
    "DevServerConfig",
    "load_config_from_json",
    "load_config_file",
    # Serialization
    "document_from_dict",
    "document_from_json",
    "document_from_yaml",
    "document_to_dict",
    "load_document",
    "section_to_dict",
    "sections_to_json",
    # Auth
    "TokenProvider",
    "MockUser",
    "MockTokenProvider",
    "render_mock_auth_module",
]
