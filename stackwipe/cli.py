"""stackwipe CLI entry point."""
import argparse
import logging
import sys
import time

import boto3

from stackwipe.clients.cloudformation import CloudFormationClient
from stackwipe.collection import OperatorFactory
from stackwipe.core.config import load_config
from stackwipe.core.errors import StackwipeError
from stackwipe.core.logging import setup_logging, get_run_id
from stackwipe.deleter import StackDeleter


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='stackwipe - force-delete CloudFormation stacks stuck in DELETE_FAILED')
    parser.add_argument('-s', '--stack-name', action='append', dest='stack_names',
                        help='Stack to delete (repeatable)')
    parser.add_argument('-k', '--keyword',
                        help='Delete every root stack whose name contains this keyword')
    parser.add_argument('-t', '--resource-types', nargs='+',
                        help='Resource types to force-delete (default: all supported)')
    parser.add_argument('-n', '--concurrency', type=int,
                        help='Maximum number of stacks deleted at the same time')
    parser.add_argument('-r', '--region', help='AWS region (overrides config)')
    parser.add_argument('-p', '--profile', help='AWS profile (overrides config)')
    parser.add_argument('-c', '--config', help='Path to YAML config file')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Verbosity: -v=INFO, -vv=DEBUG')
    parser.add_argument('--json-logs', action='store_true',
                        help='Output logs in JSON format')
    parser.add_argument('-y', '--yes', action='store_true',
                        help='Skip the countdown before deleting')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Load config from file or defaults
    config = load_config(args.config)

    # CLI args override config
    if args.stack_names:
        config.stack_names = args.stack_names
    if args.keyword:
        config.keyword = args.keyword
    if args.resource_types:
        config.resource_types = args.resource_types
    if args.concurrency is not None:
        config.concurrency = args.concurrency
    if args.region:
        config.region = args.region
    if args.profile:
        config.profile = args.profile
    if args.verbose:
        config.verbosity = args.verbose
    if args.json_logs:
        config.json_logs = True
    if args.yes:
        config.assume_yes = True

    setup_logging(config.verbosity, config.json_logs)
    try:
        config.validate()
    except ValueError as e:
        logging.error(str(e))
        return 1
    logging.info(f"stackwipe run_id={get_run_id()}")

    session = boto3.Session(region_name=config.region, profile_name=config.profile)
    factory = OperatorFactory(session, config.resource_types)
    deleter = StackDeleter(factory, CloudFormationClient.from_session(session), config.concurrency)

    try:
        stack_names = deleter.resolve_target_stacks(config.stack_names, config.keyword)
        logging.warning(f"Stacks to delete: {', '.join(stack_names)}")

        if not config.assume_yes:
            try:
                for i in range(5, 0, -1):
                    print(f"Starting in {i}s... (Ctrl+C to cancel)", end='\r')
                    time.sleep(1)
                print(" " * 40, end='\r')
            except KeyboardInterrupt:
                logging.info("Cancelled by user")
                return 1

        deleter.delete_stacks(stack_names)
    except StackwipeError as e:
        logging.error(str(e))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
