import logging
from typing import Tuple

from stackwipe.clients.s3tables import S3TablesClient
from stackwipe.core.concurrency import CancelToken, run_fail_fast
from stackwipe.core.errors import InvalidPhysicalIdError
from stackwipe.models import FailedResource
from stackwipe.resourcetype import S3_TABLE_NAMESPACE
from stackwipe.resources.base import ResourceOperator

# S3 Tables throttles table deletion hard
TABLE_CONCURRENCY = 4


def delete_namespace(client: S3TablesClient, table_bucket_arn: str, namespace: str,
                     token: CancelToken):
    """Delete every table in a namespace, then the namespace itself."""
    resource_name = f"{table_bucket_arn}|{namespace}"
    continuation_token = None
    while True:
        token.raise_if_cancelled(resource_name)
        tables, continuation_token = client.list_tables_by_page(
            table_bucket_arn, namespace, continuation_token)
        if not tables:
            break
        run_fail_fast(
            lambda table, t: client.delete_table(table_bucket_arn, namespace, table),
            tables, TABLE_CONCURRENCY, token, name=resource_name,
        )
        if continuation_token is None:
            break

    logging.info(f"Deleting namespace {namespace} in {table_bucket_arn}")
    client.delete_namespace(table_bucket_arn, namespace)


def parse_namespace_id(physical_id: str) -> Tuple[str, str]:
    """Split "<table bucket arn>|<namespace>" into its two parts."""
    parts = (physical_id or '').split('|')
    if len(parts) != 2 or not all(parts):
        raise InvalidPhysicalIdError(S3_TABLE_NAMESPACE, physical_id)
    return parts[0], parts[1]


class S3TableBucketOperator(ResourceOperator):
    max_workers_cap = TABLE_CONCURRENCY

    def delete_resource(self, resource: FailedResource, token: CancelToken):
        table_bucket_arn = self.physical_id(resource)
        if not self.client.check_table_bucket_exists(table_bucket_arn):
            logging.info(f"Table bucket {table_bucket_arn} no longer exists, skipping")
            return

        continuation_token = None
        while True:
            token.raise_if_cancelled(table_bucket_arn)
            namespaces, continuation_token = self.client.list_namespaces_by_page(
                table_bucket_arn, continuation_token)
            if not namespaces:
                break
            for namespace in namespaces:
                delete_namespace(self.client, table_bucket_arn, namespace, token)
            if continuation_token is None:
                break

        logging.info(f"Deleting table bucket {table_bucket_arn}")
        self.client.delete_table_bucket(table_bucket_arn)


class S3TableNamespaceOperator(ResourceOperator):
    max_workers_cap = TABLE_CONCURRENCY

    def delete_resource(self, resource: FailedResource, token: CancelToken):
        table_bucket_arn, namespace = parse_namespace_id(resource.physical_id)
        if not self.client.check_namespace_exists(table_bucket_arn, namespace):
            logging.info(f"Namespace {namespace} no longer exists, skipping")
            return
        delete_namespace(self.client, table_bucket_arn, namespace, token)
