"""
Global registry of color models.
"""

import logging

from huebridge import defaults
from huebridge.errors import RegistrationError, UnknownModelError
from .schema import ModelDescriptor

logger = logging.getLogger(__name__)


class ModelRegistry:
    """
    Global registry of available color models.

    Models are registered once at startup. Each registration resolves the
    model's hop list toward the canonical space, so conversions never walk
    bridge pointers at runtime.
    """
    _models: dict[str, ModelDescriptor] = {}
    _chains: dict[str, tuple[ModelDescriptor, ...]] = {}

    @classmethod
    def register(cls, model: ModelDescriptor) -> None:
        """Register a model descriptor.

        The bridge (and target gamut, when it is not the model itself) must
        already be registered.
        """
        if model.name in cls._models:
            raise RegistrationError(f"Model '{model.name}' is already registered")

        if model.bridge is None:
            if model.name != defaults.CANONICAL_MODEL:
                raise RegistrationError(
                    f"Model '{model.name}' has no bridge; only "
                    f"'{defaults.CANONICAL_MODEL}' may be terminal"
                )
        elif model.bridge not in cls._models:
            raise RegistrationError(
                f"Bridge '{model.bridge}' of model '{model.name}' is not registered"
            )

        gamut = model.target_gamut
        if gamut is not None and gamut != model.name and gamut not in cls._models:
            raise RegistrationError(
                f"Target gamut '{gamut}' of model '{model.name}' is not registered"
            )

        chain = cls._resolve_chain(model)
        cls._models[model.name] = model
        cls._chains[model.name] = chain
        logger.debug(
            "Registered model %s (%s)",
            model.name,
            " -> ".join([m.name for m in chain] + [defaults.CANONICAL_MODEL]),
        )

    @classmethod
    def _resolve_chain(cls, model: ModelDescriptor) -> tuple[ModelDescriptor, ...]:
        """Hops from model toward the canonical space, canonical excluded."""
        chain: list[ModelDescriptor] = []
        seen = {model.name}
        current = model
        while current.bridge is not None:
            chain.append(current)
            if current.bridge in seen:
                raise RegistrationError(
                    f"Bridge chain of '{model.name}' is cyclic at '{current.bridge}'"
                )
            seen.add(current.bridge)
            current = cls._models[current.bridge]
        return tuple(chain)

    @classmethod
    def get(cls, name: str) -> ModelDescriptor:
        """Get a specific model descriptor by name."""
        if name not in cls._models:
            raise UnknownModelError(
                f"Unknown model: {name}. Available: {list(cls._models.keys())}"
            )
        return cls._models[name]

    @classmethod
    def chain(cls, name: str) -> tuple[ModelDescriptor, ...]:
        """Get the precomputed hop list of a model (canonical space excluded)."""
        if name not in cls._chains:
            raise UnknownModelError(
                f"Unknown model: {name}. Available: {list(cls._models.keys())}"
            )
        return cls._chains[name]

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._models

    @classmethod
    def list_available(cls) -> list[str]:
        """List all registered model names."""
        return list(cls._models.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registered models (mainly for testing)."""
        cls._models.clear()
        cls._chains.clear()


def get_model(name: str) -> ModelDescriptor:
    return ModelRegistry.get(name)


def list_models() -> list[str]:
    return ModelRegistry.list_available()


def register_model(model: ModelDescriptor) -> None:
    ModelRegistry.register(model)
