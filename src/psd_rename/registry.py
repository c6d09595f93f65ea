"""
Registry pattern utility for creating handler registries.

This module provides the ``new_registry`` function which creates a registry
dictionary and a decorator for registering handlers. The reducer uses it to
map each action type to the function that handles it.

Usage example::

    from psd_rename.registry import new_registry

    HANDLERS, register = new_registry(attribute='action_type')

    @register(Undo)
    def undo(state, action):
        ...

    handler = HANDLERS[Undo]
"""

from typing import Any, Callable, Tuple, TypeVar, Union

T = TypeVar("T")


def new_registry(attribute: Union[str, None] = None) -> Tuple[dict, Callable]:
    """
    Returns an empty dict and a @register decorator.

    :param attribute: Optional attribute name to set on registered objects.
                     The key will be stored as this attribute on the object.
    :return: Tuple of (registry_dict, register_decorator)
    """
    registry = {}

    def register(key: Any) -> Callable[[Callable[..., T]], Callable[..., T]]:
        def decorator(func: Callable[..., T]) -> Callable[..., T]:
            if key in registry:
                raise ValueError("Handler already registered for %r" % (key,))
            registry[key] = func
            if attribute:
                setattr(func, attribute, key)
            return func

        return decorator

    return registry, register
