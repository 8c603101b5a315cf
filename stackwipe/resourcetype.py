"""CloudFormation resource types that stackwipe can force-delete."""
from enum import Enum
from typing import List

S3_BUCKET = "AWS::S3::Bucket"
S3_DIRECTORY_BUCKET = "AWS::S3Express::DirectoryBucket"
S3_TABLE_BUCKET = "AWS::S3Tables::TableBucket"
S3_TABLE_NAMESPACE = "AWS::S3Tables::Namespace"
S3_VECTOR_BUCKET = "AWS::S3Vectors::VectorBucket"
IAM_ROLE = "AWS::IAM::Role"
IAM_GROUP = "AWS::IAM::Group"
ECR_REPOSITORY = "AWS::ECR::Repository"
BACKUP_VAULT = "AWS::Backup::BackupVault"
CLOUDFORMATION_STACK = "AWS::CloudFormation::Stack"
CUSTOM_RESOURCE = "Custom::"

DESCRIPTIONS = {
    S3_BUCKET: "S3 Buckets, including buckets with Non-empty or Versioning enabled and DeletionPolicy not Retain.",
    S3_DIRECTORY_BUCKET: "S3 Directory Buckets for S3 Express One Zone, including buckets with Non-empty and DeletionPolicy not Retain.",
    S3_TABLE_BUCKET: "S3 Table Buckets, including buckets with any namespaces or tables and DeletionPolicy not Retain.",
    S3_TABLE_NAMESPACE: "S3 Tables Namespaces, including namespaces with any tables and DeletionPolicy not Retain.",
    S3_VECTOR_BUCKET: "S3 Vector Buckets, including buckets with any indexes and DeletionPolicy not Retain.",
    IAM_ROLE: "IAM Roles, including roles with policies from outside the stack.",
    IAM_GROUP: "IAM Groups, including groups with IAM users from outside the stack.",
    ECR_REPOSITORY: "ECR Repositories, including repositories that contain images and where the `EmptyOnDelete` is not true.",
    BACKUP_VAULT: "Backup Vaults, including vaults containing recovery points.",
    CLOUDFORMATION_STACK: "Nested Child Stacks that failed to delete.",
    "Custom::Xxx": "Custom Resources, including resources that do not return a SUCCESS status.",
}


class ResourceKind(Enum):
    S3_BUCKET = S3_BUCKET
    S3_DIRECTORY_BUCKET = S3_DIRECTORY_BUCKET
    S3_TABLE_BUCKET = S3_TABLE_BUCKET
    S3_TABLE_NAMESPACE = S3_TABLE_NAMESPACE
    S3_VECTOR_BUCKET = S3_VECTOR_BUCKET
    IAM_ROLE = IAM_ROLE
    IAM_GROUP = IAM_GROUP
    ECR_REPOSITORY = ECR_REPOSITORY
    BACKUP_VAULT = BACKUP_VAULT
    CLOUDFORMATION_STACK = CLOUDFORMATION_STACK
    CUSTOM = CUSTOM_RESOURCE
    UNSUPPORTED = "unsupported"

    @classmethod
    def of(cls, resource_type: str) -> 'ResourceKind':
        """Classify a CloudFormation type name; every name maps to exactly one kind."""
        if CUSTOM_RESOURCE in resource_type:
            return cls.CUSTOM
        for kind in cls:
            if kind is not cls.UNSUPPORTED and kind.value == resource_type:
                return kind
        return cls.UNSUPPORTED


def get_resource_types() -> List[str]:
    return [kind.value for kind in ResourceKind if kind is not ResourceKind.UNSUPPORTED]


def is_target_type(resource_type: str, target_types: List[str]) -> bool:
    for target in target_types:
        if target == resource_type:
            return True
        if target == CUSTOM_RESOURCE and CUSTOM_RESOURCE in resource_type:
            return True
    return False
