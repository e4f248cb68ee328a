"""
Data models for circular dependency analysis
Value objects produced fresh for every analysis run
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import AbstractSet, Iterator, List, Mapping, Optional, Tuple

# node name -> names it directly depends on
DependencyGraph = Mapping[str, AbstractSet[str]]

# e.g. ('a', 'b', 'c', 'a')
CycleChain = Tuple[str, ...]


@dataclass(frozen=True)
class NodeDependencyInfo:
    """Dependency and cycle information for a single node"""
    injected_count: int
    injected_names: Tuple[str, ...]
    circular_dependency_count: int
    circular_dependency_descriptions: Tuple[str, ...]
    cycles: Tuple[CycleChain, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'injected_names', tuple(self.injected_names))
        object.__setattr__(self, 'circular_dependency_descriptions', tuple(self.circular_dependency_descriptions))
        object.__setattr__(self, 'cycles', tuple(tuple(chain) for chain in self.cycles))

    @property
    def cycle_count(self) -> int:
        """Number of distinct chains found, as opposed to the flattened count"""
        return len(self.cycles)

    @property
    def has_cycles(self) -> bool:
        return self.circular_dependency_count > 0

    def describe_circle(self, separator: str = "->") -> str:
        return separator.join(self.circular_dependency_descriptions)


@dataclass(frozen=True)
class AnalysisReport:
    """Ranked result of one analysis run, most entangled node first

    ``dependency_map`` is a read-only view in ranking order.
    """
    total_circular_dependency_count: int
    dependency_map: Mapping[str, NodeDependencyInfo] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'dependency_map', MappingProxyType(dict(self.dependency_map)))

    def __len__(self) -> int:
        return len(self.dependency_map)

    def __iter__(self) -> Iterator[str]:
        return iter(self.dependency_map)

    def get(self, name: str) -> Optional[NodeDependencyInfo]:
        return self.dependency_map.get(name)

    def top(self, n: int) -> List[Tuple[str, NodeDependencyInfo]]:
        """The first n entries in ranking order"""
        return list(self.dependency_map.items())[:max(n, 0)]

    def entangled_nodes(self) -> List[str]:
        """Names of nodes taking part in at least one cycle, in ranking order"""
        return [name for name, info in self.dependency_map.items() if info.has_cycles]
