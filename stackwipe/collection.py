import logging
import threading
from typing import Dict, List, Optional, Sequence

import boto3

from stackwipe.clients.backup import BackupClient
from stackwipe.clients.cloudformation import CloudFormationClient
from stackwipe.clients.ecr import EcrClient
from stackwipe.clients.iam import IamClient
from stackwipe.clients.s3 import S3Client
from stackwipe.clients.s3tables import S3TablesClient
from stackwipe.clients.s3vectors import S3VectorsClient
from stackwipe.core.concurrency import default_concurrency
from stackwipe.core.errors import UnsupportedResourceError
from stackwipe.core.table import to_table_string
from stackwipe.models import DELETE_FAILED, FailedResource
from stackwipe.resources.backup import BackupVaultOperator
from stackwipe.resources.base import ResourceOperator
from stackwipe.resources.custom import CustomResourceOperator
from stackwipe.resources.ecr import EcrRepositoryOperator
from stackwipe.resources.iam import IamGroupOperator, IamRoleOperator
from stackwipe.resources.s3 import S3BucketOperator
from stackwipe.resources.s3tables import S3TableBucketOperator, S3TableNamespaceOperator
from stackwipe.resources.s3vectors import S3VectorBucketOperator
from stackwipe.resources.stack import StackOperator
from stackwipe.resourcetype import DESCRIPTIONS, ResourceKind, get_resource_types, is_target_type


class OperatorFactory:
    """Builds service clients once and hands out fresh operators per stack."""

    def __init__(self, session: boto3.Session, target_resource_types: Optional[Sequence[str]] = None,
                 concurrency: Optional[int] = None):
        self.session = session
        self.target_resource_types = list(target_resource_types or get_resource_types())
        self.concurrency = concurrency or default_concurrency()
        self._clients = {}
        # nested stack operators build managers from worker threads
        self._lock = threading.Lock()

    def _client(self, client_class):
        with self._lock:
            if client_class not in self._clients:
                self._clients[client_class] = client_class.from_session(self.session)
            return self._clients[client_class]

    def create_stack_operator(self) -> StackOperator:
        return StackOperator(self._client(CloudFormationClient), self, self.concurrency)

    def create_operators(self) -> Dict[ResourceKind, ResourceOperator]:
        s3 = self._client(S3Client)
        s3tables = self._client(S3TablesClient)
        iam = self._client(IamClient)
        return {
            ResourceKind.S3_BUCKET: S3BucketOperator(s3, self.concurrency),
            ResourceKind.S3_DIRECTORY_BUCKET: S3BucketOperator(s3, self.concurrency, directory_buckets=True),
            ResourceKind.S3_TABLE_BUCKET: S3TableBucketOperator(s3tables, self.concurrency),
            ResourceKind.S3_TABLE_NAMESPACE: S3TableNamespaceOperator(s3tables, self.concurrency),
            ResourceKind.S3_VECTOR_BUCKET: S3VectorBucketOperator(self._client(S3VectorsClient), self.concurrency),
            ResourceKind.IAM_ROLE: IamRoleOperator(iam, self.concurrency),
            ResourceKind.IAM_GROUP: IamGroupOperator(iam, self.concurrency),
            ResourceKind.ECR_REPOSITORY: EcrRepositoryOperator(self._client(EcrClient), self.concurrency),
            ResourceKind.BACKUP_VAULT: BackupVaultOperator(self._client(BackupClient), self.concurrency),
            ResourceKind.CLOUDFORMATION_STACK: self.create_stack_operator(),
            ResourceKind.CUSTOM: CustomResourceOperator(None, self.concurrency),
        }

    def create_operator_collection(self) -> 'OperatorCollection':
        return OperatorCollection(self, self.target_resource_types)

    def create_operator_manager(self):
        from stackwipe.manager import OperatorManager
        return OperatorManager(self.create_operator_collection())


class OperatorCollection:
    """Sorts the DELETE_FAILED resources of one stack onto their operators."""

    def __init__(self, factory: OperatorFactory, target_resource_types: Sequence[str]):
        self.factory = factory
        self.target_resource_types = list(target_resource_types)
        self.stack_name = ''
        self.logical_resource_ids: List[str] = []
        self.unsupported_resources: List[FailedResource] = []
        self._operators: Dict[ResourceKind, ResourceOperator] = {}

    @property
    def operators(self) -> List[ResourceOperator]:
        return list(self._operators.values())

    def operator_for(self, kind: ResourceKind) -> ResourceOperator:
        return self._operators[kind]

    def set_operator_collection(self, stack_name: str, resources: Sequence[FailedResource]):
        self.stack_name = stack_name
        self._operators = self.factory.create_operators()

        for resource in resources:
            if resource.resource_status != DELETE_FAILED:
                continue
            self.logical_resource_ids.append(resource.logical_id)

            kind = ResourceKind.of(resource.resource_type)
            if kind is ResourceKind.UNSUPPORTED or not is_target_type(resource.resource_type,
                                                                      self.target_resource_types):
                self.unsupported_resources.append(resource)
                continue
            self._operators[kind].add_resource(resource)

        logging.debug(f"{len(self.logical_resource_ids)} failed resources, "
                      f"{len(self.unsupported_resources)} unsupported", extra={'stack_name': stack_name})

    def raise_unsupported_resource_error(self):
        title = f"{self.stack_name} deletion is FAILED !!!\n"

        unsupported = to_table_string(
            ["ResourceType", "Resource"],
            [[r.resource_type, r.logical_id] for r in self.unsupported_resources],
        )
        supported = to_table_string(
            ["ResourceType", "Description"],
            [[resource_type, description] for resource_type, description in DESCRIPTIONS.items()],
        )
        report = (
            title
            + "\nThese are the resources unsupported (or not selected with --resource-types), so failed delete:\n"
            + unsupported
            + "\nSupported resources for force deletion of DELETE_FAILED resources are followings.\n"
            + supported
        )
        raise UnsupportedResourceError(self.stack_name, report)
