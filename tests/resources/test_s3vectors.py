import pytest
from unittest.mock import MagicMock
from stackwipe.clients.s3vectors import S3VectorsClient
from stackwipe.core.concurrency import CancelToken
from stackwipe.core.errors import ResourceClientError
from stackwipe.models import FailedResource
from stackwipe.resources.s3vectors import S3VectorBucketOperator
from stackwipe.resourcetype import S3_VECTOR_BUCKET
from botocore.exceptions import ClientError

@pytest.fixture
def vectors_client():
    client = MagicMock()
    client.get_paginator.return_value.paginate.return_value = [
        {'vectorBuckets': [{'vectorBucketName': 'embeddings'}]}
    ]
    return client

def vector_bucket(name='embeddings'):
    return FailedResource('Vectors', name, S3_VECTOR_BUCKET, 'DELETE_FAILED')

def test_vector_bucket_deletes_indexes_then_bucket(vectors_client):
    vectors_client.list_indexes.side_effect = [
        {'indexes': [{'indexName': 'idx-1'}, {'indexName': 'idx-2'}], 'nextToken': 'more'},
        {'indexes': [{'indexName': 'idx-3'}]},
    ]

    operator = S3VectorBucketOperator(S3VectorsClient(vectors_client), 16)
    operator.add_resource(vector_bucket())
    operator.delete_resources(CancelToken())

    deleted = sorted(c.kwargs['indexName'] for c in vectors_client.delete_index.call_args_list)
    assert deleted == ['idx-1', 'idx-2', 'idx-3']
    vectors_client.list_indexes.assert_called_with(vectorBucketName='embeddings', nextToken='more')
    vectors_client.delete_vector_bucket.assert_called_once_with(vectorBucketName='embeddings')

def test_missing_vector_bucket_is_skipped(vectors_client):
    operator = S3VectorBucketOperator(S3VectorsClient(vectors_client), 16)
    operator.add_resource(vector_bucket('other'))
    operator.delete_resources(CancelToken())

    vectors_client.list_indexes.assert_not_called()
    vectors_client.delete_vector_bucket.assert_not_called()

def test_index_failure_stops_bucket_deletion(vectors_client):
    vectors_client.list_indexes.return_value = {'indexes': [{'indexName': 'idx-1'}]}
    vectors_client.delete_index.side_effect = ClientError(
        {'Error': {'Code': 'AccessDeniedException', 'Message': 'denied'}}, 'DeleteIndex')

    operator = S3VectorBucketOperator(S3VectorsClient(vectors_client), 16)
    operator.add_resource(vector_bucket())

    with pytest.raises(ResourceClientError) as exc_info:
        operator.delete_resources(CancelToken())
    assert exc_info.value.resource_name == 'embeddings/idx-1'
    vectors_client.delete_vector_bucket.assert_not_called()

def test_index_concurrency_is_capped():
    assert S3VectorBucketOperator(MagicMock(), 32).max_workers == 8
    assert S3VectorBucketOperator(MagicMock(), 2).max_workers == 2
