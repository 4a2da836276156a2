import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chalet.core.errors import (
    DatesUnavailable,
    HistoricalReservationLocked,
    InvalidInterval,
    ReservationNotFound,
    StorageError,
)
from chalet.database import AsyncSessionLocal
from chalet.domain.availability import coerce_date, overlap_clause
from chalet.models import Reservation, ReservationStatus
from chalet.utils.sanitizer import clean_text

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "check_in",
    "check_out",
    "guests",
    "pets",
    "total_price",
    "payment_method",
    "status",
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ReservationService:
    """
    Persistence for reservations.

    Availability is checked before every write that moves or revives a stay, but the
    check and the write are separate statements. Strict double-booking
    prevention needs an exclusion constraint on overlapping non-cancelled
    stays in the database itself.
    """

    def __init__(self, session_factory=None):
        self.session_factory = session_factory or AsyncSessionLocal

    async def _find_conflict(
        self,
        session: AsyncSession,
        check_in: date,
        check_out: date,
        exclude_reservation_id: Optional[int] = None,
    ) -> Optional[Reservation]:
        query = select(Reservation).where(
            Reservation.status != ReservationStatus.CANCELLED,
            overlap_clause(Reservation.check_in, Reservation.check_out, check_in, check_out),
        )
        if exclude_reservation_id is not None:
            query = query.where(Reservation.id != exclude_reservation_id)

        # Only the first conflict matters
        result = await session.execute(query.limit(1))
        return result.scalars().first()

    async def check_availability(
        self,
        check_in,
        check_out,
        exclude_reservation_id: Optional[int] = None,
    ) -> bool:
        """
        True if no active reservation overlaps [check_in, check_out).
        Malformed dates raise InvalidDateInput before any query runs.
        """
        check_in = coerce_date(check_in)
        check_out = coerce_date(check_out)

        try:
            async with self.session_factory() as session:
                conflict = await self._find_conflict(
                    session, check_in, check_out, exclude_reservation_id
                )
                return conflict is None
        except SQLAlchemyError as e:
            logger.error(f"Error checking availability: {e}", exc_info=True)
            raise StorageError() from e

    async def create_reservation(self, data: dict) -> Reservation:
        check_in = coerce_date(data["check_in"])
        check_out = coerce_date(data["check_out"])

        logger.info(
            "Creating reservation",
            extra={"user_id": data["user_id"], "check_in": str(check_in), "check_out": str(check_out)},
        )

        status_raw = data.get("status") or ReservationStatus.PENDING
        try:
            status = ReservationStatus(status_raw)
        except ValueError:
            status = ReservationStatus.PENDING

        try:
            async with self.session_factory() as session:
                conflict = await self._find_conflict(session, check_in, check_out)
                if conflict is not None:
                    logger.warning(
                        f"Cannot create reservation: dates {check_in} - {check_out} "
                        f"overlap reservation #{conflict.id}"
                    )
                    raise DatesUnavailable()

                reservation = Reservation(
                    user_id=data["user_id"],
                    user_name=clean_text(data.get("user_name")) or "Guest",
                    check_in=check_in,
                    check_out=check_out,
                    guests=data["guests"],
                    pets=data.get("pets", 0),
                    total_price=data.get("total_price", 0),
                    payment_method=data.get("payment_method"),
                    status=status,
                    created_at=_now(),
                    updated_at=_now(),
                )
                session.add(reservation)
                await session.commit()
                await session.refresh(reservation)

        except SQLAlchemyError as e:
            logger.error(f"Error creating reservation: {e}", exc_info=True)
            raise StorageError() from e

        logger.info(f"✅ Reservation #{reservation.id} created for user {reservation.user_id}")
        return reservation

    async def get_reservation(self, reservation_id: int) -> Reservation:
        try:
            async with self.session_factory() as session:
                reservation = await session.get(Reservation, reservation_id)
        except SQLAlchemyError as e:
            logger.error(f"Error loading reservation {reservation_id}: {e}", exc_info=True)
            raise StorageError() from e

        if reservation is None:
            raise ReservationNotFound(reservation_id)
        return reservation

    async def list_reservations(self) -> List[Reservation]:
        return await self._list(select(Reservation))

    async def list_user_reservations(self, user_id: str) -> List[Reservation]:
        return await self._list(select(Reservation).where(Reservation.user_id == user_id))

    async def _list(self, query) -> List[Reservation]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    query.order_by(Reservation.check_in, Reservation.id)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing reservations: {e}", exc_info=True)
            raise StorageError() from e

    async def update_reservation(self, reservation_id: int, **kwargs) -> Reservation:
        """
        Partial update. Moving either date, or bringing a cancelled stay back,
        re-runs the availability check for the resulting stay, ignoring this
        reservation itself.
        """
        updates = {key: value for key, value in kwargs.items() if key in UPDATABLE_FIELDS}
        for key in ("check_in", "check_out"):
            if updates.get(key) is not None:
                updates[key] = coerce_date(updates[key])
        if updates.get("status") is not None:
            updates["status"] = ReservationStatus(updates["status"])

        logger.info(
            f"Updating reservation #{reservation_id}",
            extra={"reservation_id": reservation_id, "updates": {k: str(v) for k, v in updates.items()}},
        )

        try:
            async with self.session_factory() as session:
                reservation = await session.get(Reservation, reservation_id)
                if reservation is None:
                    raise ReservationNotFound(reservation_id)

                new_check_in = updates.get("check_in") or reservation.check_in
                new_check_out = updates.get("check_out") or reservation.check_out
                dates_changed = (
                    new_check_in != reservation.check_in
                    or new_check_out != reservation.check_out
                )
                new_status = updates.get("status") or reservation.status
                reactivated = (
                    reservation.status == ReservationStatus.CANCELLED
                    and new_status != ReservationStatus.CANCELLED
                )

                if dates_changed and new_check_out <= new_check_in:
                    raise InvalidInterval()

                # A cancelled stay may have lost its dates to another guest
                if (dates_changed or reactivated) and new_status != ReservationStatus.CANCELLED:
                    conflict = await self._find_conflict(
                        session, new_check_in, new_check_out, reservation_id
                    )
                    if conflict is not None:
                        logger.warning(
                            f"Cannot update reservation #{reservation_id}: "
                            f"overlaps reservation #{conflict.id}"
                        )
                        raise DatesUnavailable()

                for key, value in updates.items():
                    if value is not None:
                        setattr(reservation, key, value)

                reservation.updated_at = _now()
                await session.commit()
                await session.refresh(reservation)
                return reservation

        except SQLAlchemyError as e:
            logger.error(f"Error updating reservation {reservation_id}: {e}", exc_info=True)
            raise StorageError() from e

    async def update_status(self, reservation_id: int, status) -> Reservation:
        return await self.update_reservation(reservation_id, status=status)

    async def cancel_reservation(self, reservation_id: int) -> Reservation:
        """Cancelled stays no longer block their dates"""
        return await self.update_reservation(
            reservation_id, status=ReservationStatus.CANCELLED
        )

    async def delete_reservation(self, reservation_id: int, today: Optional[date] = None) -> None:
        """
        Permanent removal.
        Past stays that were not cancelled are kept for the financial history.
        """
        today = today or date.today()

        try:
            async with self.session_factory() as session:
                reservation = await session.get(Reservation, reservation_id)
                if reservation is None:
                    logger.warning(f"Reservation {reservation_id} not found for deletion")
                    raise ReservationNotFound(reservation_id)

                if (
                    reservation.check_out < today
                    and reservation.status != ReservationStatus.CANCELLED
                ):
                    logger.warning(
                        f"Blocked hard delete of historical reservation #{reservation_id}"
                    )
                    raise HistoricalReservationLocked()

                logger.info(
                    f"Deleting reservation #{reservation_id}: {reservation.user_name} "
                    f"({reservation.check_in} - {reservation.check_out})"
                )
                await session.delete(reservation)
                await session.commit()

        except SQLAlchemyError as e:
            logger.error(f"❌ Error deleting reservation {reservation_id}: {e}", exc_info=True)
            raise StorageError() from e


reservation_service = ReservationService()
