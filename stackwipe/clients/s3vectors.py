from typing import List, Optional, Tuple

from botocore.exceptions import ClientError

from stackwipe.clients.base import AwsClient
from stackwipe.core.errors import ResourceClientError


class S3VectorsClient(AwsClient):
    service_name = 's3vectors'

    def check_vector_bucket_exists(self, bucket_name: str) -> bool:
        paginator = self.client.get_paginator('list_vector_buckets')
        try:
            for page in paginator.paginate():
                if any(b['vectorBucketName'] == bucket_name for b in page.get('vectorBuckets', [])):
                    return True
        except ClientError as e:
            raise ResourceClientError(bucket_name, e) from e
        return False

    def list_indexes_by_page(self, bucket_name: str,
                             token: Optional[str] = None) -> Tuple[List[str], Optional[str]]:
        kwargs = {'vectorBucketName': bucket_name}
        if token:
            kwargs['nextToken'] = token
        output = self._call(bucket_name, f"List indexes in {bucket_name}",
                            lambda: self.client.list_indexes(**kwargs))
        return [i['indexName'] for i in output.get('indexes', [])], output.get('nextToken')

    def delete_index(self, bucket_name: str, index_name: str):
        self._call(f"{bucket_name}/{index_name}", f"Delete index {index_name}",
                   lambda: self.client.delete_index(vectorBucketName=bucket_name, indexName=index_name))

    def delete_vector_bucket(self, bucket_name: str):
        self._call(bucket_name, f"Delete vector bucket {bucket_name}",
                   lambda: self.client.delete_vector_bucket(vectorBucketName=bucket_name))
