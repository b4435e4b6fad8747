"""expbackoff - exponential retry delay policies.

Bounded exponential backoff for clients retrying failed operations.
"""

__version__ = "0.1.0"

from expbackoff.exceptions import BackoffError, ConfigurationError, InvalidArgumentError
from expbackoff.retry_backoff import ExponentialBackoff, ExponentialBackoffBuilder, exponential

__all__ = [
    "__version__",
    "BackoffError",
    "ConfigurationError",
    "InvalidArgumentError",
    "ExponentialBackoff",
    "ExponentialBackoffBuilder",
    "exponential",
]
