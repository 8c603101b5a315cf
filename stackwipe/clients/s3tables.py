from typing import List, Optional, Tuple

from botocore.exceptions import ClientError

from stackwipe.clients.base import AwsClient
from stackwipe.core.errors import ResourceClientError


class S3TablesClient(AwsClient):
    service_name = 's3tables'

    def check_table_bucket_exists(self, table_bucket_arn: str) -> bool:
        paginator = self.client.get_paginator('list_table_buckets')
        try:
            for page in paginator.paginate():
                if any(b['arn'] == table_bucket_arn for b in page.get('tableBuckets', [])):
                    return True
        except ClientError as e:
            raise ResourceClientError(table_bucket_arn, e) from e
        return False

    def check_namespace_exists(self, table_bucket_arn: str, namespace: str) -> bool:
        token = None
        while True:
            namespaces, token = self.list_namespaces_by_page(table_bucket_arn, token)
            if namespace in namespaces:
                return True
            if token is None:
                return False

    def list_namespaces_by_page(self, table_bucket_arn: str,
                                token: Optional[str] = None) -> Tuple[List[str], Optional[str]]:
        kwargs = {'tableBucketARN': table_bucket_arn}
        if token:
            kwargs['continuationToken'] = token
        output = self._call(table_bucket_arn, f"List namespaces in {table_bucket_arn}",
                            lambda: self.client.list_namespaces(**kwargs))
        namespaces = ['/'.join(n['namespace']) for n in output.get('namespaces', [])]
        return namespaces, output.get('continuationToken')

    def list_tables_by_page(self, table_bucket_arn: str, namespace: str,
                            token: Optional[str] = None) -> Tuple[List[str], Optional[str]]:
        kwargs = {'tableBucketARN': table_bucket_arn, 'namespace': namespace}
        if token:
            kwargs['continuationToken'] = token
        output = self._call(f"{table_bucket_arn}|{namespace}", f"List tables in {namespace}",
                            lambda: self.client.list_tables(**kwargs))
        return [t['name'] for t in output.get('tables', [])], output.get('continuationToken')

    def delete_table(self, table_bucket_arn: str, namespace: str, table_name: str):
        self._call(f"{table_bucket_arn}|{namespace}/{table_name}", f"Delete table {table_name}",
                   lambda: self.client.delete_table(
                       tableBucketARN=table_bucket_arn, namespace=namespace, name=table_name))

    def delete_namespace(self, table_bucket_arn: str, namespace: str):
        self._call(f"{table_bucket_arn}|{namespace}", f"Delete namespace {namespace}",
                   lambda: self.client.delete_namespace(
                       tableBucketARN=table_bucket_arn, namespace=namespace))

    def delete_table_bucket(self, table_bucket_arn: str):
        self._call(table_bucket_arn, f"Delete table bucket {table_bucket_arn}",
                   lambda: self.client.delete_table_bucket(tableBucketARN=table_bucket_arn))
