from __future__ import annotations

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Task:
    key: str
    description: Optional[str] = None
    steps: Optional[Tuple[str, ...]] = None
    # Task fields exactly as loaded, in document order; drives exports.
    source: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def step_list(self) -> Tuple[str, ...]:
        return self.steps or ()

    @property
    def has_steps(self) -> bool:
        return bool(self.steps)

    def search_text(self) -> str:
        return " ".join([self.key, self.description or "", *self.step_list]).lower()

    def to_dict(self) -> Dict[str, Any]:
        if self.source:
            return copy.deepcopy(dict(self.source))
        payload: Dict[str, Any] = {}
        if self.description is not None:
            payload["description"] = self.description
        if self.steps is not None:
            payload["steps"] = list(self.steps)
        return payload


@dataclass(frozen=True)
class Category:
    name: str
    tasks: Mapping[str, Task] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tasks", MappingProxyType(dict(self.tasks)))

    @property
    def task_keys(self) -> Tuple[str, ...]:
        return tuple(self.tasks)

    def first_task(self) -> Optional[Task]:
        for task in self.tasks.values():
            return task
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {key: task.to_dict() for key, task in self.tasks.items()}


@dataclass(frozen=True)
class Catalogue:
    """Validated, read-only category -> task -> steps tree.

    Iteration order follows the order of the source document.
    """

    categories: Mapping[str, Category] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", MappingProxyType(dict(self.categories)))

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories.values())

    def __len__(self) -> int:
        return len(self.categories)

    def __contains__(self, name: object) -> bool:
        return name in self.categories

    @property
    def category_names(self) -> Tuple[str, ...]:
        return tuple(self.categories)

    @property
    def task_count(self) -> int:
        return sum(len(category.tasks) for category in self)

    def first_category(self) -> Optional[Category]:
        for category in self:
            return category
        return None

    def get_task(self, category: str, task_key: str) -> Optional[Task]:
        found = self.categories.get(category)
        if found is None:
            return None
        return found.tasks.get(task_key)

    def has_task(self, category: str, task_key: str) -> bool:
        return self.get_task(category, task_key) is not None

    def to_dict(self) -> Dict[str, Any]:
        return {category.name: category.to_dict() for category in self}
