from contextlib import contextmanager

from pharma.logger import get_logger

logger = get_logger("pharma.business.ordering.transaction")


@contextmanager
def transaction_scope(session):
    """
    Commit the session when the block finishes, roll back on any exit by
    exception (including KeyboardInterrupt and friends).

    Yields the session so every persistence call inside the block goes
    through the same handle.
    """
    try:
        yield session
        session.commit()
    except BaseException:
        logger.debug("Rolling back order transaction")
        session.rollback()
        raise
