import logging
import threading
from typing import List, Optional, Sequence

from stackwipe.clients.cloudformation import CloudFormationClient
from stackwipe.collection import OperatorFactory
from stackwipe.core.concurrency import CancelToken, run_fail_fast
from stackwipe.core.dependency_graph import StackDependencyGraph
from stackwipe.core.errors import (
    CircularDependencyError,
    ExternalReferenceError,
    NotExistsError,
    OperationInProgressError,
    TerminationProtectionError,
)
from stackwipe.core.logging import timed
from stackwipe.resources.stack import IN_PROGRESS_STATUSES


class StackDeleter:
    """Deletes a set of stacks in dependency order.

    Stacks that import another target stack's exports are deleted first;
    stacks in the same deletion group run concurrently, at most concurrency
    at a time (the whole group when unset).
    """

    def __init__(self, factory: OperatorFactory, client: CloudFormationClient,
                 concurrency: Optional[int] = None):
        self.factory = factory
        self.client = client
        self.concurrency = concurrency

    def resolve_target_stacks(self, stack_names: Sequence[str] = (),
                              keyword: Optional[str] = None) -> List[str]:
        if keyword:
            return self._stacks_by_keyword(keyword)

        not_found, protected, in_progress = [], [], []
        targets = []
        for name in dict.fromkeys(stack_names):
            stack = self.client.describe_stack(name)
            if stack is None:
                not_found.append(name)
            elif stack.termination_protection:
                protected.append(name)
            elif stack.status in IN_PROGRESS_STATUSES:
                in_progress.append(f"{name} is {stack.status}")
            else:
                targets.append(name)

        if not_found:
            raise NotExistsError(', '.join(not_found))
        if protected:
            raise TerminationProtectionError(protected)
        if in_progress:
            raise OperationInProgressError(', '.join(in_progress))
        return targets

    def _stacks_by_keyword(self, keyword: str) -> List[str]:
        lowered = keyword.lower()
        targets = []
        for stack in self.client.describe_stacks():
            # nested stacks go with their root
            if stack.root_id or lowered not in stack.name.lower():
                continue
            if stack.termination_protection:
                logging.info(f"Skipping {stack.name}: termination protection is enabled")
                continue
            if stack.status in IN_PROGRESS_STATUSES:
                logging.info(f"Skipping {stack.name}: {stack.status}")
                continue
            targets.append(stack.name)

        if not targets:
            raise NotExistsError(f"No stacks matching the keyword ({keyword})")
        return sorted(targets)

    def build_dependency_graph(self, stack_names: Sequence[str]) -> StackDependencyGraph:
        graph = StackDependencyGraph(stack_names)
        targets = set(stack_names)
        external = []

        for name in stack_names:
            stack = self.client.describe_stack(name)
            if stack is None:
                continue
            for export_name in stack.export_names:
                for importer in self.client.list_imports(export_name):
                    if importer in targets:
                        graph.add_dependency(importer, name)
                    else:
                        external.append(f"  {name} exports {export_name}, imported by {importer}")

        if external:
            raise ExternalReferenceError(external)
        return graph

    @timed
    def delete_stacks(self, stack_names: Sequence[str], token: Optional[CancelToken] = None):
        token = token or CancelToken()
        logging.info("Analyzing stack dependencies...")
        graph = self.build_dependency_graph(stack_names)

        cycle = graph.detect_circular_dependency()
        if cycle:
            raise CircularDependencyError(cycle)

        groups = graph.get_deletion_groups()
        total = len(graph.nodes)
        deleted: List[str] = []
        lock = threading.Lock()

        def delete_one(stack_name: str, group_token: CancelToken):
            self.delete_stack(stack_name, group_token)
            with lock:
                deleted.append(stack_name)
                logging.info(f"Progress: {len(deleted)}/{total} stacks deleted [{', '.join(deleted)}]")

        logging.info(f"Starting deletion of {total} stack(s) in {len(groups)} group(s)")
        for group in groups:
            max_workers = min(self.concurrency or len(group), len(group))
            run_fail_fast(delete_one, group, max_workers, token, name=', '.join(group))

    def delete_stack(self, stack_name: str, token: CancelToken):
        logging.info("Start deletion. Please wait a few minutes...",
                     extra={'stack_name': stack_name})
        operator = self.factory.create_stack_operator()
        manager = self.factory.create_operator_manager()
        try:
            operator.delete_stack(stack_name, True, manager, token)
        except Exception as e:
            logging.error(f"Failed to delete: {e}", extra={'stack_name': stack_name})
            raise
        logging.info("Successfully deleted!!", extra={'stack_name': stack_name})
