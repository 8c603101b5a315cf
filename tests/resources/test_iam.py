import pytest
from unittest.mock import MagicMock, patch
from botocore.exceptions import ClientError
from stackwipe.clients.iam import IamClient
from stackwipe.core.concurrency import CancelToken
from stackwipe.core.errors import ResourceClientError
from stackwipe.models import FailedResource
from stackwipe.resources.iam import IamGroupOperator, IamRoleOperator
from stackwipe.resourcetype import IAM_GROUP, IAM_ROLE

@pytest.fixture
def iam_client():
    return MagicMock()

def no_such_entity(operation):
    return ClientError({'Error': {'Code': 'NoSuchEntity', 'Message': 'not found'}}, operation)

def role_operator(iam_client):
    operator = IamRoleOperator(IamClient(iam_client), 4)
    operator.settle_seconds = 0
    operator.add_resource(FailedResource('Role', 'app-role', IAM_ROLE, 'DELETE_FAILED'))
    return operator

def test_role_policies_detached_before_delete(iam_client):
    iam_client.get_paginator.return_value.paginate.return_value = [
        {'AttachedPolicies': [{'PolicyArn': 'arn:aws:iam::aws:policy/ReadOnlyAccess'}]},
    ]

    role_operator(iam_client).delete_resources(CancelToken())

    iam_client.detach_role_policy.assert_called_once_with(
        RoleName='app-role', PolicyArn='arn:aws:iam::aws:policy/ReadOnlyAccess')
    iam_client.delete_role.assert_called_once_with(RoleName='app-role')

def test_role_settle_delay_after_detach(iam_client):
    iam_client.get_paginator.return_value.paginate.return_value = [
        {'AttachedPolicies': [{'PolicyArn': 'arn:aws:iam::aws:policy/ReadOnlyAccess'}]},
    ]
    operator = role_operator(iam_client)
    operator.settle_seconds = 5

    with patch('stackwipe.resources.iam.time.sleep') as mock_sleep:
        operator.delete_resources(CancelToken())

    mock_sleep.assert_called_once_with(5)

def test_missing_role_is_skipped(iam_client):
    iam_client.get_role.side_effect = no_such_entity('GetRole')

    role_operator(iam_client).delete_resources(CancelToken())

    iam_client.get_paginator.assert_not_called()
    iam_client.delete_role.assert_not_called()

def test_detach_failure_is_terminal(iam_client):
    iam_client.get_paginator.return_value.paginate.return_value = [
        {'AttachedPolicies': [{'PolicyArn': 'arn:p1'}]},
    ]
    iam_client.detach_role_policy.side_effect = ClientError(
        {'Error': {'Code': 'AccessDenied', 'Message': 'denied'}}, 'DetachRolePolicy')

    with pytest.raises(ResourceClientError):
        role_operator(iam_client).delete_resources(CancelToken())
    iam_client.delete_role.assert_not_called()

def test_get_role_other_error_propagates(iam_client):
    iam_client.get_role.side_effect = ClientError(
        {'Error': {'Code': 'AccessDenied', 'Message': 'denied'}}, 'GetRole')

    with pytest.raises(ResourceClientError) as exc_info:
        role_operator(iam_client).delete_resources(CancelToken())
    assert isinstance(exc_info.value.__cause__, ClientError)

def test_group_users_removed_before_delete(iam_client):
    iam_client.get_paginator.return_value.paginate.return_value = [
        {'Users': [{'UserName': 'alice'}, {'UserName': 'bob'}]},
    ]
    operator = IamGroupOperator(IamClient(iam_client), 4)
    operator.settle_seconds = 0
    operator.add_resource(FailedResource('Group', 'devs', IAM_GROUP, 'DELETE_FAILED'))
    operator.delete_resources(CancelToken())

    removed = sorted(c.kwargs['UserName'] for c in iam_client.remove_user_from_group.call_args_list)
    assert removed == ['alice', 'bob']
    iam_client.get_paginator.assert_called_with('get_group')
    iam_client.delete_group.assert_called_once_with(GroupName='devs')

def test_missing_group_is_skipped(iam_client):
    iam_client.get_group.side_effect = no_such_entity('GetGroup')
    operator = IamGroupOperator(IamClient(iam_client), 4)
    operator.add_resource(FailedResource('Group', 'devs', IAM_GROUP, 'DELETE_FAILED'))
    operator.delete_resources(CancelToken())

    iam_client.delete_group.assert_not_called()
