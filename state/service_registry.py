"""
Service Registry

Per-session singletons for repositories, services and state objects.
Instances live in Streamlit session state, so each browser session gets its
own identity slot and garage state while the factories stay free of
Streamlit imports.
"""

from typing import TypeVar, Callable

from state.session_state import ss_get, ss_set

T = TypeVar('T')


def get_service(service_name: str, factory: Callable[[], T]) -> T:
    """Get or create a service instance in session state.

    Args:
        service_name: Unique key for the service in session state
        factory: Zero-argument callable that creates the instance

    Returns:
        The cached or newly created instance

    Example:
        def get_persistence_gateway() -> PersistenceGateway:
            from state import get_service
            return get_service("persistence_gateway", _create)
    """
    service = ss_get(service_name)
    if service is None:
        service = factory()
        ss_set(service_name, service)
    return service
