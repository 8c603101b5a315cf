import logging
from typing import List, Optional, Sequence

from botocore.exceptions import ClientError, WaiterError

from stackwipe.clients.base import AwsClient
from stackwipe.core.errors import ResourceClientError
from stackwipe.core.retry import error_code
from stackwipe.models import FailedResource, StackDescription

WAIT_DELAY_SECONDS = 5
WAIT_MAX_ATTEMPTS = 720


class CloudFormationClient(AwsClient):
    service_name = 'cloudformation'

    def describe_stack(self, stack_name: str) -> Optional[StackDescription]:
        """Describe one stack; None when it does not exist."""
        try:
            stacks = self._call(
                stack_name, f"Describe stack {stack_name}",
                lambda: self.client.describe_stacks(StackName=stack_name),
            ).get('Stacks', [])
        except ResourceClientError as e:
            if 'does not exist' in str(e.error):
                return None
            raise
        if not stacks:
            return None
        return StackDescription.from_stack(stacks[0])

    def describe_stacks(self) -> List[StackDescription]:
        stacks = []
        paginator = self.client.get_paginator('describe_stacks')
        try:
            for page in paginator.paginate():
                stacks.extend(StackDescription.from_stack(s) for s in page.get('Stacks', []))
        except ClientError as e:
            raise ResourceClientError(None, e) from e
        return stacks

    def delete_stack(self, stack_name: str, retain_logical_ids: Sequence[str] = ()):
        """Issue DeleteStack and block until the stack is gone or DELETE_FAILED."""
        kwargs = {'StackName': stack_name}
        if retain_logical_ids:
            kwargs['RetainResources'] = list(retain_logical_ids)
        self._call(stack_name, f"Delete stack {stack_name}",
                   lambda: self.client.delete_stack(**kwargs))

        waiter = self.client.get_waiter('stack_delete_complete')
        try:
            waiter.wait(
                StackName=stack_name,
                WaiterConfig={'Delay': WAIT_DELAY_SECONDS, 'MaxAttempts': WAIT_MAX_ATTEMPTS},
            )
        except WaiterError as e:
            # DELETE_FAILED ends the waiter; the caller re-describes the stack
            if 'terminal failure state' not in str(e):
                raise ResourceClientError(stack_name, e) from e
            logging.debug(f"{stack_name}: delete waiter stopped: {e}")

    def list_stack_resources(self, stack_name: str) -> List[FailedResource]:
        resources = []
        paginator = self.client.get_paginator('list_stack_resources')
        try:
            for page in paginator.paginate(StackName=stack_name):
                resources.extend(
                    FailedResource.from_summary(s) for s in page.get('StackResourceSummaries', [])
                )
        except ClientError as e:
            raise ResourceClientError(stack_name, e) from e
        return resources

    def list_imports(self, export_name: str) -> List[str]:
        """Stacks importing export_name; empty when nothing imports it."""
        imports = []
        paginator = self.client.get_paginator('list_imports')
        try:
            for page in paginator.paginate(ExportName=export_name):
                imports.extend(page.get('Imports', []))
        except ClientError as e:
            if error_code(e) == 'ValidationError' and 'is not imported by any stack' in str(e):
                return []
            raise ResourceClientError(export_name, e) from e
        return imports
