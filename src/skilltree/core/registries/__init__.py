from .registry_base import NameRegistry
from .tree_registry import TreeRegistry

__all__ = ["NameRegistry", "TreeRegistry"]
