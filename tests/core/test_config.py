import pytest
from stackwipe.core.config import Config, load_config, _parse_config
from stackwipe.resourcetype import S3_BUCKET, get_resource_types


def test_defaults():
    config = Config()
    assert config.stack_names == []
    assert config.resource_types == get_resource_types()
    assert config.concurrency is None


def test_load_config_none_returns_defaults():
    assert load_config(None) == Config()


def test_load_config_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config('/nonexistent/stackwipe.yaml')


def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "stackwipe.yaml"
    path.write_text(
        "region: eu-west-1\n"
        "stack_names:\n"
        "  - app\n"
        "  - network\n"
        "resource_types:\n"
        "  - AWS::S3::Bucket\n"
        "concurrency: 2\n"
    )
    config = load_config(str(path))

    assert config.region == 'eu-west-1'
    assert config.stack_names == ['app', 'network']
    assert config.resource_types == [S3_BUCKET]
    assert config.concurrency == 2


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == Config()


def test_parse_config_keyword():
    config = _parse_config({'keyword': 'dev', 'verbosity': 2})
    assert config.keyword == 'dev'
    assert config.verbosity == 2


def test_validate_requires_target():
    with pytest.raises(ValueError, match="Either stack names or a keyword"):
        Config().validate()


def test_validate_rejects_names_and_keyword():
    with pytest.raises(ValueError, match="cannot be combined"):
        Config(stack_names=['a'], keyword='b').validate()


def test_validate_rejects_bad_concurrency():
    with pytest.raises(ValueError, match="Concurrency"):
        Config(stack_names=['a'], concurrency=0).validate()


def test_validate_rejects_unknown_resource_type():
    with pytest.raises(ValueError, match="AWS::EC2::Instance"):
        Config(stack_names=['a'], resource_types=['AWS::EC2::Instance']).validate()


def test_validate_accepts_custom_prefix():
    Config(stack_names=['a'], resource_types=['Custom::']).validate()
