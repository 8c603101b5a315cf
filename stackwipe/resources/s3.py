import logging
import threading
from typing import Dict, List

from stackwipe.clients.s3 import S3Client
from stackwipe.core.concurrency import CancelToken, TaskGroup
from stackwipe.core.errors import DeleteObjectsError
from stackwipe.models import FailedResource
from stackwipe.resources.base import ResourceOperator


class S3BucketOperator(ResourceOperator):
    """Empties and deletes S3 buckets; directory_buckets selects S3 Express buckets."""

    def __init__(self, client: S3Client, concurrency: int, directory_buckets: bool = False):
        super().__init__(client, concurrency)
        self.directory_buckets = directory_buckets

    def delete_resource(self, resource: FailedResource, token: CancelToken):
        bucket_name = self.physical_id(resource)
        if not self.client.check_bucket_exists(bucket_name, self.directory_buckets):
            logging.info(f"Bucket {bucket_name} no longer exists, skipping")
            return

        self.empty_bucket(bucket_name, token)
        logging.info(f"Deleting bucket {bucket_name}")
        self.client.delete_bucket(bucket_name)

    def empty_bucket(self, bucket_name: str, token: CancelToken):
        errors: List[Dict[str, str]] = []
        lock = threading.Lock()
        key_marker = version_id_marker = None

        def delete_page(objects):
            failed = self.client.delete_objects(bucket_name, objects)
            if failed:
                with lock:
                    errors.extend(failed)

        with TaskGroup(self.max_workers, token, name=bucket_name) as group:
            while not group.token.cancelled:
                objects, key_marker, version_id_marker = self.client.list_objects_by_page(
                    bucket_name, key_marker, version_id_marker, self.directory_buckets)
                if not objects:
                    break
                logging.debug(f"Deleting {len(objects)} objects from {bucket_name}")
                group.submit(delete_page, objects)
                if key_marker is None:
                    break
        token.raise_if_cancelled(bucket_name)

        if errors:
            raise DeleteObjectsError(bucket_name, errors)
