"""Exception types raised by stackwipe.

Every error the CLI reports derives from StackwipeError. Errors coming back from
AWS are wrapped in ResourceClientError with the original botocore exception kept
as __cause__.
"""
from typing import List, Optional


class StackwipeError(Exception):
    """Base class for all stackwipe errors."""


class NotExistsError(StackwipeError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"NotExistsError: {detail}")


class TerminationProtectionError(StackwipeError):
    def __init__(self, stack_names: List[str]):
        self.stack_names = stack_names
        super().__init__(f"TerminationProtectionError: {', '.join(stack_names)}")


class OperationInProgressError(StackwipeError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(
            f"OperationInProgressError: Stacks with XxxInProgress cannot be deleted, but {detail}"
        )


class StackStatusError(StackwipeError):
    def __init__(self, stack_name: str, status: str):
        self.stack_name = stack_name
        self.status = status
        super().__init__(
            f"StackStatusError: StackStatus is expected to be DELETE_FAILED, but {status}: {stack_name}"
        )


class UnsupportedResourceError(StackwipeError):
    def __init__(self, stack_name: str, report: str):
        self.stack_name = stack_name
        self.report = report
        super().__init__(f"UnsupportedResourceError: {report}")


class DeleteObjectsError(StackwipeError):
    """One or more objects of a DeleteObjects batch could not be removed."""

    def __init__(self, bucket_name: str, errors: List[dict]):
        self.bucket_name = bucket_name
        self.errors = errors
        lines = []
        for err in errors:
            lines.append(f"\nBucketName: {bucket_name}")
            lines.append(f"Code: {err.get('Code')}")
            lines.append(f"Key: {err.get('Key')}")
            lines.append(f"VersionId: {err.get('VersionId')}")
            lines.append(f"Message: {err.get('Message')}")
        super().__init__(
            f"DeleteObjectsError: {len(errors)} objects with errors were found. " + "\n".join(lines)
        )


class CircularDependencyError(StackwipeError):
    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(
            f"DependencyAnalysisError: circular dependency detected: {' -> '.join(cycle)}"
        )


class ExternalReferenceError(StackwipeError):
    """Target stacks export values that non-target stacks still import."""

    def __init__(self, messages: List[str]):
        self.messages = messages
        super().__init__(
            "deletion would break dependencies for non-target stacks:\n" + "\n".join(messages)
        )


class InvalidPhysicalIdError(StackwipeError):
    def __init__(self, resource_type: str, physical_id: Optional[str]):
        self.resource_type = resource_type
        self.physical_id = physical_id
        super().__init__(f"InvalidPhysicalIdError: invalid {resource_type} id format: {physical_id}")


class OperationCancelledError(StackwipeError):
    def __init__(self, resource_name: str):
        self.resource_name = resource_name
        super().__init__(f"OperationCancelledError: {resource_name}")


class ResourceClientError(StackwipeError):
    """An AWS API call failed for the named resource."""

    def __init__(self, resource_name: Optional[str], error: Exception):
        self.resource_name = resource_name
        self.error = error
        super().__init__(f"ResourceName: {resource_name}, {error}")
