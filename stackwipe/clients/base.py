import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError

from stackwipe.core.errors import ResourceClientError
from stackwipe.core.retry import retry_call, error_code

# botocore retries are kept short; throttling is retried in retry_call
BOTO_CONFIG = BotoConfig(retries={'max_attempts': 3, 'mode': 'standard'})


class AwsClient:
    """Thin wrapper around one boto3 service client."""
    service_name = ''

    def __init__(self, client):
        self.client = client

    @classmethod
    def from_session(cls, session: boto3.Session):
        return cls(session.client(cls.service_name, config=BOTO_CONFIG))

    def _call(self, resource_name, description, operation):
        try:
            return retry_call(operation, description)
        except ClientError as e:
            raise ResourceClientError(resource_name, e) from e

    @staticmethod
    def _is_not_found(e: ClientError, *codes) -> bool:
        return error_code(e) in codes
