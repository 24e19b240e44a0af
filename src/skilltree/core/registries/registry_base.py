from __future__ import annotations

from typing import Dict, Generic, Iterable, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class NameRegistry(BaseModel, Generic[T]):
    items: Dict[str, T] = Field(default_factory=dict)

    def register(self, name: str, item: T) -> None:
        if name in self.items:
            raise ValueError(f"Duplicate registration: {name}")
        self.items[name] = item

    def get(self, name: str) -> T:
        if name not in self.items:
            available = ", ".join(sorted(self.items.keys()))
            raise KeyError(f"Unknown: {name}. Available: {available}")
        return self.items[name]

    def all(self) -> Iterable[T]:
        return self.items.values()

    def names(self) -> Iterable[str]:
        return sorted(self.items.keys())

    def __contains__(self, name: object) -> bool:
        return name in self.items

    def __len__(self) -> int:
        return len(self.items)
