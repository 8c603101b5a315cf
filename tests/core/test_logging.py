import json
import logging

from stackwipe.core.logging import JSONFormatter, TextFormatter, get_run_id, setup_logging


def make_record(**extra):
    record = logging.LogRecord('stackwipe', logging.INFO, __file__, 1, 'deleting %s', ('app',), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_fields():
    entry = json.loads(JSONFormatter().format(make_record(stack_name='app', action='delete')))

    assert entry['level'] == 'INFO'
    assert entry['message'] == 'deleting app'
    assert entry['run_id'] == get_run_id()
    assert entry['stack_name'] == 'app'
    assert entry['action'] == 'delete'
    assert 'resource_type' not in entry


def test_text_formatter_tags_stack_and_resource():
    formatter = TextFormatter("[%(run_id)s]%(context)s %(message)s")

    line = formatter.format(make_record(stack_name='app', resource_id='logs-bucket'))
    assert line == f"[{get_run_id()}] [app] [logs-bucket] deleting app"
    assert formatter.format(make_record()) == f"[{get_run_id()}] deleting app"


def test_run_id_is_stable():
    assert get_run_id() == get_run_id()
    assert len(get_run_id()) == 8


def test_setup_logging_levels():
    setup_logging(0)
    assert isinstance(logging.getLogger().handlers[0].formatter, TextFormatter)
    assert logging.getLogger().level == logging.WARNING
    setup_logging(1, json_format=True)
    assert logging.getLogger().level == logging.INFO
    assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)
    setup_logging(3)
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger('botocore').level == logging.INFO
