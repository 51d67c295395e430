"""Unique document number allocation

Numbers are random within a day, so an insert may collide with an existing
number. A collision rolls back the attempt and the whole write is retried
with a fresh number, up to a fixed number of attempts.
"""

import logging
from datetime import datetime
from typing import Awaitable, Callable, TypeVar
from src.app.errors import ConstraintViolationError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.identifiers import generate_document_number

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NumberAllocationExhausted(Exception):
    def __init__(self, prefix: str, attempts: int):
        self.prefix = prefix
        self.attempts = attempts
        super().__init__(f"No free {prefix} number after {attempts} attempts")


async def write_with_unique_number(
    uow: UnitOfWork,
    prefix: str,
    when: datetime,
    write: Callable[[str], Awaitable[T]],
    number_exists: Callable[[str], Awaitable[bool]],
    max_attempts: int,
) -> T:
    """
    Run ``write(number)`` until it succeeds with an unused number

    Args:
        uow: Unit of work rolled back after each collision
        prefix: Document number prefix
        when: Timestamp whose date is embedded in the number
        write: Performs every insert of the document (no commit)
        number_exists: Tells whether a number is already stored
        max_attempts: Upper bound on attempts

    Returns:
        Whatever ``write`` returned

    Raises:
        NumberAllocationExhausted: If every attempt collided
        ConstraintViolationError: If a write failed on a constraint other
            than the document number
    """
    for attempt in range(1, max_attempts + 1):
        number = generate_document_number(prefix, when)
        try:
            return await write(number)
        except ConstraintViolationError:
            await uow.rollback()
            if not await number_exists(number):
                raise
            logger.warning(
                f"Document number {number} already taken (attempt {attempt}/{max_attempts})"
            )

    raise NumberAllocationExhausted(prefix, max_attempts)
