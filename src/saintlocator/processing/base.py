from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from saintlocator.core.models import DistanceAnnotated


class Stage(ABC):
    """Pure list -> list step over annotated records; must not mutate inputs."""

    @abstractmethod
    def run(self, items: List[DistanceAnnotated[Any]]) -> List[DistanceAnnotated[Any]]:
        raise NotImplementedError


class Pipeline:
    """Compose stages sequentially."""

    def __init__(self, stages: Sequence[Stage]):
        self.stages = list(stages)

    def run(self, items: Sequence[DistanceAnnotated[Any]]) -> List[DistanceAnnotated[Any]]:
        out = list(items)
        for stage in self.stages:
            out = stage.run(out)
        return out
