from unittest.mock import patch
from stackwipe.cli import main, parse_args
from stackwipe.core.errors import NotExistsError
from stackwipe.resourcetype import S3_BUCKET, IAM_ROLE

def test_parse_args():
    args = parse_args(['-s', 'app', '-s', 'db', '-t', S3_BUCKET, IAM_ROLE, '-n', '2', '-y', '-vv'])
    assert args.stack_names == ['app', 'db']
    assert args.resource_types == [S3_BUCKET, IAM_ROLE]
    assert args.concurrency == 2
    assert args.yes
    assert args.verbose == 2

def test_main_requires_a_target():
    assert main([]) == 1

def test_main_rejects_unknown_resource_type():
    assert main(['-s', 'app', '-t', 'AWS::EC2::VPC']) == 1

@patch('stackwipe.cli.StackDeleter')
@patch('stackwipe.cli.boto3')
def test_main_deletes_resolved_stacks(mock_boto3, mock_deleter_cls):
    deleter = mock_deleter_cls.return_value
    deleter.resolve_target_stacks.return_value = ['dev-app']

    assert main(['-k', 'dev', '-r', 'eu-west-1', '-n', '3', '-y']) == 0

    mock_boto3.Session.assert_called_once_with(region_name='eu-west-1', profile_name=None)
    assert mock_deleter_cls.call_args.args[2] == 3
    deleter.resolve_target_stacks.assert_called_once_with([], 'dev')
    deleter.delete_stacks.assert_called_once_with(['dev-app'])

@patch('stackwipe.cli.StackDeleter')
@patch('stackwipe.cli.boto3')
def test_main_reports_stackwipe_errors(mock_boto3, mock_deleter_cls):
    mock_deleter_cls.return_value.resolve_target_stacks.side_effect = NotExistsError('app')

    assert main(['-s', 'app', '-y']) == 1
    mock_deleter_cls.return_value.delete_stacks.assert_not_called()
