from typing import Dict, Iterable, List, Optional, Set
import logging


class StackDependencyGraph:
    """Output/Import dependencies between the stacks of one deletion run.

    An edge dependent -> dependency means the dependent stack imports an export
    of the dependency stack, so the dependent has to be deleted first.
    """

    def __init__(self, stack_names: Iterable[str] = ()):
        self.nodes: Set[str] = set(stack_names)
        self.dependencies: Dict[str, Set[str]] = {}

    def add_dependency(self, dependent: str, dependency: str):
        self.nodes.add(dependent)
        self.nodes.add(dependency)
        self.dependencies.setdefault(dependent, set()).add(dependency)

    def detect_circular_dependency(self) -> Optional[List[str]]:
        """Return a closed cycle such as [A, B, C, A], or None when acyclic."""
        visited: Set[str] = set()
        on_stack: Set[str] = set()
        path: List[str] = []

        def dfs(node: str) -> Optional[List[str]]:
            visited.add(node)
            on_stack.add(node)
            path.append(node)

            for dep in sorted(self.dependencies.get(node, ())):
                if dep not in visited:
                    cycle = dfs(dep)
                    if cycle:
                        return cycle
                elif dep in on_stack:
                    start = path.index(dep)
                    return path[start:] + [dep]

            on_stack.discard(node)
            path.pop()
            return None

        for stack in sorted(self.nodes):
            if stack in visited:
                continue
            path.clear()
            cycle = dfs(stack)
            if cycle:
                return cycle
        return None

    def get_deletion_groups(self) -> List[List[str]]:
        """Group stacks into waves that can be deleted concurrently.

        A stack is ready once no remaining stack depends on it. Each wave is
        sorted so the schedule is reproducible.
        """
        reverse_in_degree: Dict[str, int] = {node: 0 for node in self.nodes}
        for deps in self.dependencies.values():
            for dep in deps:
                reverse_in_degree[dep] += 1

        processed: Set[str] = set()
        groups: List[List[str]] = []

        while len(processed) < len(self.nodes):
            group = sorted(
                node for node in self.nodes
                if node not in processed and reverse_in_degree[node] == 0
            )
            if not group:
                remaining = sorted(self.nodes - processed)
                logging.error(f"Unschedulable stacks left in dependency graph: {remaining}")
                raise RuntimeError(
                    f"dependency graph has a cycle among {', '.join(remaining)}; "
                    "detect_circular_dependency must be checked first"
                )

            groups.append(group)
            for node in group:
                processed.add(node)
                for dep in self.dependencies.get(node, ()):
                    reverse_in_degree[dep] -= 1

        return groups
