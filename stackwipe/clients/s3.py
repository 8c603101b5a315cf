import logging
import random
import time
from typing import Dict, List, Optional, Tuple

from botocore.exceptions import ClientError

from stackwipe.clients.base import AwsClient
from stackwipe.core.errors import ResourceClientError
from stackwipe.core.retry import SLEEP_SHORT, MAX_ATTEMPTS


class S3Client(AwsClient):
    service_name = 's3'

    def check_bucket_exists(self, bucket_name: str, directory_buckets: bool = False) -> bool:
        operation = 'list_directory_buckets' if directory_buckets else 'list_buckets'
        paginator = self.client.get_paginator(operation)
        try:
            for page in paginator.paginate():
                if any(b['Name'] == bucket_name for b in page.get('Buckets', [])):
                    return True
        except ClientError as e:
            raise ResourceClientError(bucket_name, e) from e
        return False

    def list_objects_by_page(
        self,
        bucket_name: str,
        key_marker: Optional[str] = None,
        version_id_marker: Optional[str] = None,
        directory_buckets: bool = False,
    ) -> Tuple[List[Dict[str, str]], Optional[str], Optional[str]]:
        """One page (up to 1000) of object identifiers plus the next markers.

        Regular buckets list every version and delete marker. Directory buckets
        do not support versioning, so ListObjectsV2 is used and key_marker carries
        the continuation token.
        """
        if directory_buckets:
            return self._list_objects_v2_by_page(bucket_name, key_marker)

        kwargs = {'Bucket': bucket_name}
        if key_marker:
            kwargs['KeyMarker'] = key_marker
        if version_id_marker:
            kwargs['VersionIdMarker'] = version_id_marker
        page = self._call(bucket_name, f"List object versions in {bucket_name}",
                          lambda: self.client.list_object_versions(**kwargs))

        objects = [{'Key': v['Key'], 'VersionId': v['VersionId']} for v in page.get('Versions', [])]
        objects += [{'Key': d['Key'], 'VersionId': d['VersionId']} for d in page.get('DeleteMarkers', [])]
        if not page.get('IsTruncated'):
            return objects, None, None
        return objects, page.get('NextKeyMarker'), page.get('NextVersionIdMarker')

    def _list_objects_v2_by_page(self, bucket_name, continuation_token):
        kwargs = {'Bucket': bucket_name}
        if continuation_token:
            kwargs['ContinuationToken'] = continuation_token
        page = self._call(bucket_name, f"List objects in {bucket_name}",
                          lambda: self.client.list_objects_v2(**kwargs))
        objects = [{'Key': o['Key']} for o in page.get('Contents', [])]
        if not page.get('IsTruncated'):
            return objects, None, None
        return objects, page.get('NextContinuationToken'), None

    def delete_objects(self, bucket_name: str, objects: List[Dict[str, str]]) -> List[Dict[str, str]]:
        """Delete one batch; returns the per-object errors that did not clear on retry."""
        errors = []
        retry_count = 0
        while objects:
            batch = {'Objects': objects, 'Quiet': True}
            output = self._call(bucket_name, f"Deleting objects in {bucket_name}",
                                lambda: self.client.delete_objects(Bucket=bucket_name, Delete=batch))
            failed = output.get('Errors', [])
            if not failed:
                break

            retry_count += 1
            if retry_count > MAX_ATTEMPTS:
                errors.extend(failed)
                break

            objects = []
            for err in failed:
                # e.g. InternalError: We encountered an internal error. Please try again.
                if 'Please try again' in err.get('Message', ''):
                    obj = {'Key': err['Key']}
                    if err.get('VersionId'):
                        obj['VersionId'] = err['VersionId']
                    objects.append(obj)
                else:
                    errors.append(err)
            if objects:
                logging.warning(f"Retrying {len(objects)} objects in {bucket_name}")
                time.sleep(random.uniform(0, SLEEP_SHORT))
        return errors

    def delete_bucket(self, bucket_name: str):
        self._call(bucket_name, f"Delete S3 Bucket {bucket_name}",
                   lambda: self.client.delete_bucket(Bucket=bucket_name))
