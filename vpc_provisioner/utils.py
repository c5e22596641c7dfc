from __future__ import annotations

import logging


def log_message(
    logger: logging.Logger,
    component: str,
    method: str,
    msg: str = "",
    exception: BaseException | None = None,
) -> None:
    """
    Emit a diagnostic line in the shared ``<component>.<method> <msg>`` format.

    With an exception the line is logged at error level and suffixed with
    ``exception: <exception>``; otherwise it is logged at info level.
    """
    standard_message = f"{component}.{method} {msg}".rstrip()
    if exception is not None:
        logger.error("%s exception: %s", standard_message, exception)
        return
    logger.info("%s", standard_message)


__all__ = ["log_message"]
