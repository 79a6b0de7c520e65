"""
Order number generators.

Format: <PREFIX>-<yymmdd>-<NNNN>, e.g. TC-241229-0001. The sequence restarts
at 1 every day and is tracked per date key in order_sequences.
"""
import asyncio
from datetime import datetime
import logging
from typing import Callable, Dict

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.application.interfaces import IOrderNumberGenerator
from core.data.models import OrderSequenceModel
from core.domain.exceptions import OrderPersistenceError
from core.domain.value_objects import OrderNumber


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def date_key_for(moment: datetime) -> str:
    return moment.strftime("%y%m%d")


class _SequenceConflict(Exception):
    """Another request advanced the sequence between read and write."""


class SqlAlchemyOrderNumberGenerator(IOrderNumberGenerator):
    """
    Daily sequence with optimistic locking.

    Each attempt reads the current value and writes value + 1 only if the
    row still holds the value that was read. A lost race (no row updated,
    or a concurrent first insert for the day) is retried with a short
    linear backoff.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        prefix: str = "TC",
        max_attempts: int = 5,
        clock: Clock = datetime.now,
        backoff_seconds: float = 0.01,
    ) -> None:
        self._session_factory = session_factory
        self._prefix = prefix
        self._max_attempts = max_attempts
        self._clock = clock
        self._backoff_seconds = backoff_seconds

    async def generate(self) -> str:
        """
        Reserve the next order number for today.

        Returns:
            Order number string

        Raises:
            OrderPersistenceError: If the sequence could not be advanced
        """
        date_key = date_key_for(self._clock())

        for attempt in range(1, self._max_attempts + 1):
            try:
                sequence = await self._advance(date_key)
            except (IntegrityError, _SequenceConflict) as e:
                logger.warning(
                    f"Order sequence conflict for {date_key} "
                    f"(attempt {attempt}/{self._max_attempts}): {e}"
                )
                await asyncio.sleep(self._backoff_seconds * attempt)
                continue
            except SQLAlchemyError as e:
                logger.error(f"Error advancing order sequence for {date_key}: {e}", exc_info=True)
                raise OrderPersistenceError(f"Failed to generate order number: {e}") from e

            order_number = OrderNumber.build(self._prefix, date_key, sequence).value
            logger.info(f"Generated order number: {order_number} (sequence: {sequence})")
            return order_number

        raise OrderPersistenceError(
            f"Failed to generate order number after {self._max_attempts} attempts"
        )

    async def _advance(self, date_key: str) -> int:
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    select(OrderSequenceModel.sequence_number).where(
                        OrderSequenceModel.date_key == date_key
                    )
                )
                current = result.scalar_one_or_none()

                if current is None:
                    session.add(OrderSequenceModel(date_key=date_key, sequence_number=1))
                    return 1

                result = await session.execute(
                    update(OrderSequenceModel)
                    .where(
                        OrderSequenceModel.date_key == date_key,
                        OrderSequenceModel.sequence_number == current,
                    )
                    .values(sequence_number=current + 1, last_updated=self._clock())
                )
                if result.rowcount != 1:
                    raise _SequenceConflict(f"sequence moved past {current}")
                return current + 1


class InMemoryOrderNumberGenerator(IOrderNumberGenerator):
    """Per-process daily counter for tests and demos."""

    def __init__(self, prefix: str = "TC", clock: Clock = datetime.now) -> None:
        self._prefix = prefix
        self._clock = clock
        self._sequences: Dict[str, int] = {}

    async def generate(self) -> str:
        date_key = date_key_for(self._clock())
        sequence = self._sequences.get(date_key, 0) + 1
        self._sequences[date_key] = sequence
        return OrderNumber.build(self._prefix, date_key, sequence).value
