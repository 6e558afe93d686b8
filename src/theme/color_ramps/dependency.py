"""Dependency ordering of ramp roles.

Every role depends on its contrast reference and, when set, on its
``same_as_if_possible`` role. Roles are ordered so each one comes after
everything it depends on: a depth-first walk from the ``seed`` pseudo-node
along dependent edges, emitting nodes in reverse postorder.

The walk is iterative over integer node ids; a node met again while still
on the stack is a cycle and raises ``CircularDependencyError``. Roles not
reachable from the seed can only hang off a cycle, so the walk is resumed
from them to surface that cycle instead of dropping them.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Tuple

from .ramp_types import SEED, RampError, RampStepConfig

__all__ = ["CircularDependencyError", "build_dependents", "sort_by_dependency"]

_UNVISITED, _VISITING, _DONE = 0, 1, 2


class CircularDependencyError(RampError):
    """Raised when a ramp configuration references itself transitively."""

    def __init__(self, role: str) -> None:
        super().__init__(f"Circular dependency detected involving step: {role}")
        self.role = role


def build_dependents(config: Mapping[str, RampStepConfig]) -> Tuple[List[str], List[List[int]]]:
    """Return node names (``seed`` first) and the dependents adjacency list."""
    names: List[str] = [SEED, *config.keys()]
    index: Dict[str, int] = {name: i for i, name in enumerate(names)}
    dependents: List[List[int]] = [[] for _ in names]
    for role, step in config.items():
        sources = [step.contrast.reference]
        if step.same_as_if_possible:
            sources.append(step.same_as_if_possible)
        for source in sources:
            if source not in index:
                raise RampError(f"Step {role} depends on unknown step: {source}")
            dependents[index[source]].append(index[role])
    return names, dependents


def sort_by_dependency(config: Mapping[str, RampStepConfig]) -> List[str]:
    names, dependents = build_dependents(config)
    state = [_UNVISITED] * len(names)
    postorder: List[int] = []

    for root in range(len(names)):
        if state[root] != _UNVISITED:
            continue
        state[root] = _VISITING
        stack: List[Tuple[int, Iterator[int]]] = [(root, iter(dependents[root]))]
        while stack:
            node, children = stack[-1]
            for child in children:
                if state[child] == _VISITING:
                    raise CircularDependencyError(names[child])
                if state[child] == _UNVISITED:
                    state[child] = _VISITING
                    stack.append((child, iter(dependents[child])))
                    break
            else:
                stack.pop()
                state[node] = _DONE
                postorder.append(node)

    return [names[i] for i in reversed(postorder) if i != 0]
