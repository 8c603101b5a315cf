import logging

from stackwipe.core.concurrency import CancelToken
from stackwipe.models import FailedResource
from stackwipe.resources.base import ResourceOperator


class CustomResourceOperator(ResourceOperator):
    """Custom resources go away with the retained stack; nothing to call."""

    def delete_resource(self, resource: FailedResource, token: CancelToken):
        logging.debug(f"Custom resource {resource.logical_id} is retained on stack deletion")
