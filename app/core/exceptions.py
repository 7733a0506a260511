# Application errors


class QueryExecutionError(Exception):
    """Raised when the store cannot execute a report query.

    The driver exception, if any, is chained as ``__cause__``.
    """
