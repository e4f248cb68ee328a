"""
Dependency Graph Builder
Turns mappings, networkx graphs and JSON documents into dependency graphs
"""

import json
import networkx as nx
from typing import Dict, FrozenSet, Iterable, Mapping, Optional
import logging

from .models import DependencyGraph

logger = logging.getLogger(__name__)


def _dependency_names(value) -> list:
    """Names from a lockfile dependency section, anything other than an object or list counts as empty"""
    if isinstance(value, (dict, list)):
        return [str(name) for name in value]
    return []


def to_networkx(graph: DependencyGraph) -> nx.DiGraph:
    """Build a directed graph, dangling dependency names become nodes too"""
    digraph = nx.DiGraph()
    for name in sorted(graph):
        digraph.add_node(name)
        for dep in sorted(graph[name] or ()):
            digraph.add_edge(name, dep)
    return digraph


def graph_stats(graph: DependencyGraph) -> Dict:
    """Get statistics about the dependency graph"""
    digraph = to_networkx(graph)
    node_count = digraph.number_of_nodes()
    return {
        'total_nodes': node_count,
        'total_dependencies': digraph.number_of_edges(),
        'dangling_references': node_count - len(graph),
        'density': nx.density(digraph) if node_count > 1 else 0.0,
        'average_degree': sum(dict(digraph.degree()).values()) / node_count if node_count > 0 else 0
    }


class DependencyGraphBuilder:
    """Builds dependency graphs from the sources a host application has at hand

    Every builder returns a plain dict keyed by node name in sorted order,
    with frozensets of dependency names as values.
    """

    def _normalize(self, entries: Iterable) -> Dict[str, FrozenSet[str]]:
        graph = {}
        for name, dependencies in entries:
            deps = graph.get(str(name), frozenset())
            if dependencies:
                deps = deps | frozenset(str(dep) for dep in dependencies)
            graph[str(name)] = deps
        return dict(sorted(graph.items()))

    def from_mapping(self, mapping: Mapping[str, Optional[Iterable[str]]]) -> Dict[str, FrozenSet[str]]:
        """Normalize a mapping of node name to the names it depends on"""
        if not isinstance(mapping, Mapping):
            raise TypeError(f"Expected a mapping of node names, got {type(mapping).__name__}")
        if any(isinstance(deps, str) for deps in mapping.values()):
            raise TypeError("Dependencies must be a collection of names, not a single string")
        return self._normalize(mapping.items())

    def from_networkx(self, digraph: nx.DiGraph) -> Dict[str, FrozenSet[str]]:
        """Read edges of a networkx graph, skipping nodes marked ``abstract``"""
        entries = []
        for node, data in digraph.nodes(data=True):
            if data.get('abstract'):
                logger.debug(f"Skipping abstract node {node}")
                continue
            entries.append((node, list(digraph.successors(node))))
        return self._normalize(entries)

    def _parse_json(self, content: str, label: str) -> Dict:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse {label}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Failed to parse {label}: expected a JSON object, got {type(data).__name__}")
            return {}
        return data

    def from_json(self, content: str) -> Dict[str, FrozenSet[str]]:
        """Parse a JSON object of the form ``{"name": ["dep", ...]}``"""
        data = self._parse_json(content, 'dependency map')
        entries = []
        for name, dependencies in data.items():
            if isinstance(dependencies, str):
                dependencies = [dependencies]
            elif isinstance(dependencies, dict):
                dependencies = list(dependencies)
            elif dependencies is not None and not isinstance(dependencies, list):
                logger.error(f"Skipping {name}: expected a list of dependency names, got {type(dependencies).__name__}")
                continue
            entries.append((name, dependencies))
        return self._normalize(entries)

    def from_package_lock(self, content: str) -> Dict[str, FrozenSet[str]]:
        """Build a graph from package-lock.json, lockfile v2 (packages) or v1 (dependencies)"""
        lock_data = self._parse_json(content, 'package-lock.json')
        if not lock_data:
            return {}

        root_package = lock_data.get('name') or 'root-project'
        packages = lock_data.get('packages') or {}
        dependencies = lock_data.get('dependencies') or {}
        if not isinstance(packages, dict):
            packages = {}
        if not isinstance(dependencies, dict):
            dependencies = {}

        entries = []
        if packages:
            self._process_packages_v2(packages, root_package, entries)
        elif dependencies:
            entries.append((root_package, list(dependencies)))
            self._process_dependencies_v1(dependencies, entries)
        else:
            entries.append((root_package, []))

        graph = self._normalize(entries)
        logger.info(f"Built dependency graph with {len(graph)} packages from package-lock.json")
        return graph

    def _process_packages_v2(self, packages: Dict, root_package: str, entries: list):
        for package_path, package_info in packages.items():
            if not isinstance(package_info, dict):
                logger.error(f"Skipping package-lock entry {package_path!r}: expected an object")
                continue
            deps = _dependency_names(package_info.get('dependencies'))
            if package_path == "":
                entries.append((root_package, deps))
                continue
            # node_modules/a/node_modules/b -> b
            package_name = package_path.split('node_modules/')[-1]
            entries.append((package_name, deps))

    def _process_dependencies_v1(self, dependencies: Dict, entries: list):
        for dep_name, dep_info in dependencies.items():
            if not isinstance(dep_info, dict):
                logger.error(f"Skipping package-lock entry {dep_name!r}: expected an object")
                continue
            # v1 lists what a package requires under "requires", nested installs under "dependencies"
            requires = _dependency_names(dep_info.get('requires'))
            nested_deps = dep_info.get('dependencies') or {}
            if not isinstance(nested_deps, dict):
                nested_deps = {}
            entries.append((dep_name, requires + list(nested_deps)))
            if nested_deps:
                self._process_dependencies_v1(nested_deps, entries)
