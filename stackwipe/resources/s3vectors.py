import logging

from stackwipe.core.concurrency import CancelToken, run_fail_fast
from stackwipe.models import FailedResource
from stackwipe.resources.base import ResourceOperator

INDEX_CONCURRENCY = 8


class S3VectorBucketOperator(ResourceOperator):
    max_workers_cap = INDEX_CONCURRENCY

    def delete_resource(self, resource: FailedResource, token: CancelToken):
        bucket_name = self.physical_id(resource)
        if not self.client.check_vector_bucket_exists(bucket_name):
            logging.info(f"Vector bucket {bucket_name} no longer exists, skipping")
            return

        next_token = None
        while True:
            token.raise_if_cancelled(bucket_name)
            indexes, next_token = self.client.list_indexes_by_page(bucket_name, next_token)
            if not indexes:
                break
            run_fail_fast(
                lambda index, t: self.client.delete_index(bucket_name, index),
                indexes, INDEX_CONCURRENCY, token, name=bucket_name,
            )
            if next_token is None:
                break

        logging.info(f"Deleting vector bucket {bucket_name}")
        self.client.delete_vector_bucket(bucket_name)
