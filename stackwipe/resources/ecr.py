import logging

from stackwipe.core.concurrency import CancelToken
from stackwipe.models import FailedResource
from stackwipe.resources.base import ResourceOperator


class EcrRepositoryOperator(ResourceOperator):
    def delete_resource(self, resource: FailedResource, token: CancelToken):
        repository_name = self.physical_id(resource)
        if not self.client.check_repository_exists(repository_name):
            logging.info(f"ECR repository {repository_name} no longer exists, skipping")
            return
        logging.info(f"Deleting ECR repository {repository_name}")
        self.client.delete_repository(repository_name)
