import functools
import logging

logger = logging.getLogger(__name__.split(".")[-1])


def log_call(fn):
    """Log every call of a method with its arguments, leaving out ``self``."""
    @functools.wraps(fn)
    def __wrapped(self, *args, **kwargs):
        logger.info(f"Calling {fn.__qualname__} {args} {kwargs}")
        return fn(self, *args, **kwargs)
    return __wrapped
