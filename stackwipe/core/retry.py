import time
import random
import logging
from botocore.exceptions import ClientError

SLEEP_SHORT = 2
SLEEP_IAM_SETTLE = 5
SLEEP_BACKUP_SETTLE = 5

MAX_ATTEMPTS = 8

THROTTLING_CODES = [
    'Throttling',
    'ThrottlingException',
    'RequestLimitExceeded',
    'TooManyRequestsException',
    'SlowDown',
    'InternalError',
]


def error_code(e: ClientError) -> str:
    return e.response.get('Error', {}).get('Code', '')


def retry_call(operation, description, max_attempts=MAX_ATTEMPTS, codes=None):
    """Run operation, retrying with jittered backoff while AWS throttles it."""
    retryable = codes or THROTTLING_CODES
    base_delay = 1.2
    for attempt in range(max_attempts):
        try:
            return operation()
        except ClientError as e:
            code = error_code(e)
            if code not in retryable or attempt == max_attempts - 1:
                raise
            jitter = random.uniform(0.5, 1.5)
            delay = min(base_delay * (2 ** attempt) * jitter, 60)
            logging.warning(f'{description} failed with {code}; retrying in {delay:.2f} seconds...')
            time.sleep(delay)
