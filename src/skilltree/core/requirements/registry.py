"""Requirement Registry: extensible registration system for requirement types."""

from __future__ import annotations

from typing import Any, Callable, Dict, Type

from pydantic import BaseModel, PrivateAttr

from .base import Requirement


class RequirementRegistry(BaseModel):
    """Registry for requirement spec parsers and builders."""

    _spec_map: Dict[str, Type[Any]] = PrivateAttr(default_factory=dict)
    _builder_map: Dict[str, Callable[[Any], Requirement]] = PrivateAttr(default_factory=dict)

    def register(
        self,
        type_name: str,
        spec_class: Type[Any],
        builder_func: Callable[[Any], Requirement],
    ) -> None:
        """
        Register a new requirement type.

        Args:
            type_name: The "type" value in YAML (e.g., "skill_points")
            spec_class: Pydantic model for parsing YAML
            builder_func: Function to build the runtime Requirement from spec
        """
        self._spec_map[type_name] = spec_class
        self._builder_map[spec_class.__name__] = builder_func

    def parse_spec(self, data: Dict[str, Any]) -> Any:
        """
        Parse YAML data into a requirement spec.

        Raises:
            ValueError: If the requirement type is missing or unknown
        """
        rtype = data.get("type")
        if not rtype:
            raise ValueError("Requirement spec must have a 'type' field")

        spec_class = self._spec_map.get(rtype)
        if not spec_class:
            known = sorted(self._spec_map.keys())
            raise ValueError(f"Unknown requirement type: {rtype} (known: {known})")

        return spec_class.model_validate(data)

    def build_requirement(self, spec: Any) -> Requirement:
        spec_type_name = type(spec).__name__
        builder = self._builder_map.get(spec_type_name)
        if not builder:
            raise TypeError(f"No builder registered for spec type: {spec_type_name}")
        return builder(spec)

    def list_registered_types(self) -> list[str]:
        return sorted(self._spec_map.keys())


# Global singleton instance
_global_requirement_registry = RequirementRegistry()


def get_requirement_registry() -> RequirementRegistry:
    """Get the global requirement registry instance."""
    return _global_requirement_registry


def register_requirement(
    type_name: str,
    spec_class: Type[Any],
    builder_func: Callable[[Any], Requirement],
) -> None:
    """Register a requirement type on the global registry."""
    _global_requirement_registry.register(type_name, spec_class, builder_func)


__all__ = [
    "RequirementRegistry",
    "get_requirement_registry",
    "register_requirement",
]
