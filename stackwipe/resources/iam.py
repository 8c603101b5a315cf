import logging
import time

from stackwipe.core.concurrency import CancelToken, run_fail_fast
from stackwipe.core.retry import SLEEP_IAM_SETTLE
from stackwipe.models import FailedResource
from stackwipe.resources.base import ResourceOperator


class IamRoleOperator(ResourceOperator):
    # IAM is eventually consistent: detached policies can still block DeleteRole
    settle_seconds = SLEEP_IAM_SETTLE

    def delete_resource(self, resource: FailedResource, token: CancelToken):
        role_name = self.physical_id(resource)
        if not self.client.check_role_exists(role_name):
            logging.info(f"IAM role {role_name} no longer exists, skipping")
            return

        policies = self.client.list_attached_role_policies(role_name)
        if policies:
            logging.info(f"Detaching {len(policies)} policies from {role_name}")
            run_fail_fast(
                lambda arn, t: self.client.detach_role_policy(role_name, arn),
                policies, self.max_workers, token, name=role_name,
            )
            time.sleep(self.settle_seconds)

        logging.info(f"Deleting IAM role {role_name}")
        self.client.delete_role(role_name)


class IamGroupOperator(ResourceOperator):
    settle_seconds = SLEEP_IAM_SETTLE

    def delete_resource(self, resource: FailedResource, token: CancelToken):
        group_name = self.physical_id(resource)
        if not self.client.check_group_exists(group_name):
            logging.info(f"IAM group {group_name} no longer exists, skipping")
            return

        users = self.client.get_group_users(group_name)
        if users:
            logging.info(f"Removing {len(users)} users from {group_name}")
            run_fail_fast(
                lambda user, t: self.client.remove_user_from_group(group_name, user),
                users, self.max_workers, token, name=group_name,
            )
            time.sleep(self.settle_seconds)

        logging.info(f"Deleting IAM group {group_name}")
        self.client.delete_group(group_name)
