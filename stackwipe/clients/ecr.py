from botocore.exceptions import ClientError

from stackwipe.clients.base import AwsClient
from stackwipe.core.errors import ResourceClientError


class EcrClient(AwsClient):
    service_name = 'ecr'

    def check_repository_exists(self, repository_name: str) -> bool:
        try:
            self.client.describe_repositories(repositoryNames=[repository_name])
        except ClientError as e:
            if self._is_not_found(e, 'RepositoryNotFoundException'):
                return False
            raise ResourceClientError(repository_name, e) from e
        return True

    def delete_repository(self, repository_name: str):
        # force removes the images along with the repository
        self._call(repository_name, f"Delete ECR repository {repository_name}",
                   lambda: self.client.delete_repository(repositoryName=repository_name, force=True))
