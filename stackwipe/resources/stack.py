"""Stack deletion state machine and the nested stack operator.

A stack is first deleted normally. If CloudFormation leaves it in
DELETE_FAILED, the failed resources are force-deleted by their operators and
the stack is deleted once more, retaining the logical ids that were handled
out of band.
"""
import logging
import re

from stackwipe.clients.cloudformation import CloudFormationClient
from stackwipe.core.concurrency import CancelToken
from stackwipe.core.errors import (
    NotExistsError,
    OperationInProgressError,
    StackStatusError,
    TerminationProtectionError,
)
from stackwipe.models import DELETE_FAILED, FailedResource
from stackwipe.resources.base import ResourceOperator

STACK_NAME_RULE = re.compile(r'^arn:aws:cloudformation:[^:]*:[0-9]*:stack/([^/]*)/.*$')

IN_PROGRESS_STATUSES = frozenset([
    'CREATE_IN_PROGRESS',
    'ROLLBACK_IN_PROGRESS',
    'DELETE_IN_PROGRESS',
    'UPDATE_IN_PROGRESS',
    'UPDATE_COMPLETE_CLEANUP_IN_PROGRESS',
    'UPDATE_ROLLBACK_IN_PROGRESS',
    'UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS',
    'REVIEW_IN_PROGRESS',
    'IMPORT_IN_PROGRESS',
    'IMPORT_ROLLBACK_IN_PROGRESS',
])


def stack_name_from_arn(stack_id: str) -> str:
    match = STACK_NAME_RULE.match(stack_id)
    return match.group(1) if match else stack_id


class StackOperator(ResourceOperator):
    """Deletes stacks; owns nested child stacks that failed to delete.

    factory builds a fresh OperatorManager for every stack this operator
    descends into.
    """

    def __init__(self, client: CloudFormationClient, factory, concurrency: int):
        super().__init__(client, concurrency)
        self.factory = factory

    def delete_resource(self, resource: FailedResource, token: CancelToken):
        stack_name = stack_name_from_arn(self.physical_id(resource))
        manager = self.factory.create_operator_manager()
        self.delete_stack(stack_name, False, manager, token)

    def delete_stack(self, stack_name: str, is_root_stack: bool, manager, token: CancelToken):
        log_extra = {'stack_name': stack_name}
        stack = self.client.describe_stack(stack_name)
        if stack is None:
            if is_root_stack:
                raise NotExistsError(stack_name)
            logging.info("Nested stack is already deleted", extra=log_extra)
            return

        if stack.termination_protection:
            raise TerminationProtectionError([stack_name])
        if stack.status in IN_PROGRESS_STATUSES:
            raise OperationInProgressError(f"{stack_name} is {stack.status}")

        token.raise_if_cancelled(stack_name)
        logging.info("Deleting stack", extra={**log_extra, 'action': 'delete'})
        self.client.delete_stack(stack_name)

        stack = self.client.describe_stack(stack_name)
        if stack is None:
            logging.info("Stack deleted", extra=log_extra)
            return
        if stack.status != DELETE_FAILED:
            raise StackStatusError(stack_name, stack.status)

        logging.info(f"Stack is {DELETE_FAILED}, force deleting failed resources",
                     extra={**log_extra, 'action': 'force-delete'})
        resources = self.client.list_stack_resources(stack_name)
        manager.set_operator_collection(stack_name, resources)
        manager.check_resource_counts()
        manager.delete_resource_collection(token)

        token.raise_if_cancelled(stack_name)
        retain = manager.logical_resource_ids
        logging.info(f"Deleting stack retaining {', '.join(retain)}", extra=log_extra)
        self.client.delete_stack(stack_name, retain)
        logging.info("Stack deleted", extra=log_extra)
