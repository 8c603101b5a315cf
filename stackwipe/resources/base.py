from abc import ABC, abstractmethod
import logging
from typing import List, Optional

from stackwipe.core.concurrency import CancelToken, run_fail_fast
from stackwipe.core.errors import InvalidPhysicalIdError
from stackwipe.models import FailedResource


class ResourceOperator(ABC):
    """Force-deletes the DELETE_FAILED resources of one resource family."""
    # lower ceiling for services that throttle aggressively
    max_workers_cap: Optional[int] = None

    def __init__(self, client, concurrency: int):
        self.client = client
        self.concurrency = concurrency
        self.resources: List[FailedResource] = []

    def add_resource(self, resource: FailedResource):
        self.resources.append(resource)

    @property
    def resource_count(self) -> int:
        return len(self.resources)

    @property
    def max_workers(self) -> int:
        if self.max_workers_cap is not None:
            return min(self.concurrency, self.max_workers_cap)
        return self.concurrency

    def delete_resources(self, token: CancelToken):
        if not self.resources:
            return
        run_fail_fast(self._delete_logged, self.resources, self.max_workers, token,
                      name=self.__class__.__name__)

    def _delete_logged(self, resource: FailedResource, token: CancelToken):
        token.raise_if_cancelled(resource.logical_id)
        try:
            self.delete_resource(resource, token)
        except Exception as e:
            logging.error(f"Failed to delete {resource.resource_type} {resource.logical_id}: {e}",
                          extra={'resource_type': resource.resource_type,
                                 'resource_id': resource.physical_id, 'action': 'delete'})
            raise

    @staticmethod
    def physical_id(resource: FailedResource) -> str:
        if not resource.physical_id:
            raise InvalidPhysicalIdError(resource.resource_type, resource.physical_id)
        return resource.physical_id

    @abstractmethod
    def delete_resource(self, resource: FailedResource, token: CancelToken):
        pass
