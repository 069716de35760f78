"""Component registration and lookup by name."""

from __future__ import annotations

from typing import Any

from .exceptions import ConfigurationError

EXPRESSION_FILTER = "expression_filter"
CANDIDATE_FILTER = "candidate_filter"
AGREEMENT = "agreement"
POST_SCORING_FILTER = "post_scoring_filter"

# Global registry: component kind -> name -> class
_COMPONENT_REGISTRY: dict[str, dict[str, type]] = {}


def component(name: str, kind: str) -> Any:
    """
    Decorator for component registration.

    Usage:
        @component(name="Number", kind=AGREEMENT)
        class NumberAgreement(Agreement):
            def agree(self, coref_type, exp_type, exp, referent, context): ...
    """

    def decorator(cls: type) -> type:
        cls._component_name = name
        cls._component_kind = kind

        if kind not in _COMPONENT_REGISTRY:
            _COMPONENT_REGISTRY[kind] = {}
        _COMPONENT_REGISTRY[kind][name] = cls

        return cls

    return decorator


def get_component(kind: str, name: str) -> type:
    """Get a registered component class, raising ConfigurationError if unknown."""
    try:
        return _COMPONENT_REGISTRY[kind][name]
    except KeyError:
        known = ", ".join(sorted(_COMPONENT_REGISTRY.get(kind, {})))
        raise ConfigurationError(f"Unknown {kind} '{name}'. Known: {known}") from None


def create_component(kind: str, name: str, *args: Any) -> Any:
    """Instantiate a registered component with positional arguments."""
    cls = get_component(kind, name)
    try:
        return cls(*args)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Bad arguments for {kind} '{name}': {args} ({e})") from e


def clear_registry() -> None:
    """Clear the component registry. Useful for testing."""
    _COMPONENT_REGISTRY.clear()


def list_components(kind: str) -> list[str]:
    """List the names registered for a component kind."""
    return list(_COMPONENT_REGISTRY.get(kind, {}).keys())
