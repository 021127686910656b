"""
Services Package

Business logic for the configurator, free of Streamlit imports.

Each service module follows these principles:
1. Single Responsibility - one concern per module
2. Dependency Injection - repositories passed in, not created
3. Pure where possible - configuration transitions and scene composition
   have no side effects

Available Services:
- configuration_service: create_default, select_model/color/trim, is_savable
- scene_composer: compose(config, catalog_entry) -> SceneGraph
- PersistenceGateway: async owner-scoped save/list with timeouts
"""

from services.configuration_service import (
    create_default,
    select_model,
    select_color,
    select_trim,
    is_savable,
    snapshot,
)
from services.scene_composer import compose
from services.persistence_gateway import PersistenceGateway, get_persistence_gateway

__all__ = [
    # Configuration model
    'create_default',
    'select_model',
    'select_color',
    'select_trim',
    'is_savable',
    'snapshot',
    # Scene composer
    'compose',
    # Persistence
    'PersistenceGateway',
    'get_persistence_gateway',
]
