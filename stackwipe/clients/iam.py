from typing import List

from botocore.exceptions import ClientError

from stackwipe.clients.base import AwsClient
from stackwipe.core.errors import ResourceClientError


class IamClient(AwsClient):
    service_name = 'iam'

    def check_role_exists(self, role_name: str) -> bool:
        try:
            self.client.get_role(RoleName=role_name)
        except ClientError as e:
            if self._is_not_found(e, 'NoSuchEntity'):
                return False
            raise ResourceClientError(role_name, e) from e
        return True

    def list_attached_role_policies(self, role_name: str) -> List[str]:
        policies = []
        paginator = self.client.get_paginator('list_attached_role_policies')
        try:
            for page in paginator.paginate(RoleName=role_name):
                policies.extend(p['PolicyArn'] for p in page.get('AttachedPolicies', []))
        except ClientError as e:
            raise ResourceClientError(role_name, e) from e
        return policies

    def detach_role_policy(self, role_name: str, policy_arn: str):
        self._call(role_name, f"Detach policy {policy_arn} from {role_name}",
                   lambda: self.client.detach_role_policy(RoleName=role_name, PolicyArn=policy_arn))

    def delete_role(self, role_name: str):
        self._call(role_name, f"Delete IAM role {role_name}",
                   lambda: self.client.delete_role(RoleName=role_name))

    def check_group_exists(self, group_name: str) -> bool:
        try:
            self.client.get_group(GroupName=group_name)
        except ClientError as e:
            if self._is_not_found(e, 'NoSuchEntity'):
                return False
            raise ResourceClientError(group_name, e) from e
        return True

    def get_group_users(self, group_name: str) -> List[str]:
        users = []
        paginator = self.client.get_paginator('get_group')
        try:
            for page in paginator.paginate(GroupName=group_name):
                users.extend(u['UserName'] for u in page.get('Users', []))
        except ClientError as e:
            raise ResourceClientError(group_name, e) from e
        return users

    def remove_user_from_group(self, group_name: str, user_name: str):
        self._call(group_name, f"Remove {user_name} from {group_name}",
                   lambda: self.client.remove_user_from_group(GroupName=group_name, UserName=user_name))

    def delete_group(self, group_name: str):
        self._call(group_name, f"Delete IAM group {group_name}",
                   lambda: self.client.delete_group(GroupName=group_name))
