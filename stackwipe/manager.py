from typing import List, Sequence

from stackwipe.collection import OperatorCollection
from stackwipe.core.concurrency import CancelToken, run_fail_fast
from stackwipe.models import FailedResource


class OperatorManager:
    def __init__(self, collection: OperatorCollection):
        self.collection = collection

    def set_operator_collection(self, stack_name: str, resources: Sequence[FailedResource]):
        self.collection.set_operator_collection(stack_name, resources)

    @property
    def logical_resource_ids(self) -> List[str]:
        return self.collection.logical_resource_ids

    def check_resource_counts(self):
        """Fail unless every failed resource has an operator that owns it."""
        handled = sum(operator.resource_count for operator in self.collection.operators)
        if handled != len(self.collection.logical_resource_ids):
            self.collection.raise_unsupported_resource_error()

    def delete_resource_collection(self, token: CancelToken):
        operators = self.collection.operators
        run_fail_fast(lambda operator, t: operator.delete_resources(t), operators, len(operators),
                      token, name=self.collection.stack_name)
