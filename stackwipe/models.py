from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

DELETE_FAILED = "DELETE_FAILED"


@dataclass(frozen=True)
class FailedResource:
    """One member of a stack as reported by ListStackResources."""
    logical_id: str
    physical_id: Optional[str]
    resource_type: str
    resource_status: str

    @classmethod
    def from_summary(cls, summary: Dict[str, Any]) -> 'FailedResource':
        return cls(
            logical_id=summary['LogicalResourceId'],
            physical_id=summary.get('PhysicalResourceId'),
            resource_type=summary['ResourceType'],
            resource_status=summary['ResourceStatus'],
        )


@dataclass(frozen=True)
class StackDescription:
    name: str
    status: str
    termination_protection: bool = False
    stack_id: Optional[str] = None
    root_id: Optional[str] = None
    creation_time: Optional[datetime] = None
    # (OutputKey, ExportName) for outputs that are exported
    exports: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def from_stack(cls, stack: Dict[str, Any]) -> 'StackDescription':
        exports = tuple(
            (o['OutputKey'], o['ExportName'])
            for o in stack.get('Outputs', [])
            if o.get('ExportName')
        )
        return cls(
            name=stack['StackName'],
            status=stack['StackStatus'],
            termination_protection=bool(stack.get('EnableTerminationProtection', False)),
            stack_id=stack.get('StackId'),
            root_id=stack.get('RootId'),
            creation_time=stack.get('CreationTime'),
            exports=exports,
        )

    @property
    def export_names(self) -> List[str]:
        return [name for _, name in self.exports]
