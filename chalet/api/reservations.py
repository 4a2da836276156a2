"""
Booking endpoints: pricing quotes, availability and reservations.

Prices are always recomputed here from the pricing rules; a client-sent
total is never trusted on create.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status

from chalet.api.deps import get_pricing_config, get_reservation_service
from chalet.core.errors import InvalidInterval, ValidationFailed
from chalet.core.rate_limiter import RESERVATION_LIMIT, limiter
from chalet.domain.calendar import DateInterval
from chalet.domain.pricing import (
    PricingConfig,
    calculate_quote,
    validate_guests,
    validate_pets,
)
from chalet.schemas.reservation import (
    AvailabilityOut,
    PricingOut,
    QuoteOut,
    QuoteRequest,
    QuoteResponse,
    ReservationCreate,
    ReservationOut,
    ReservationUpdate,
)
from chalet.services.reservation_service import ReservationService
from chalet.utils.validators import validate_dates

router = APIRouter(tags=["reservations"])


@router.get("/pricing", response_model=PricingOut)
async def get_pricing(config: PricingConfig = Depends(get_pricing_config)):
    return PricingOut(
        base_price=config.base_price,
        base_guests=config.base_guests,
        extra_person_fee=config.extra_person_fee,
        max_guests=config.max_guests,
        max_pets=config.max_pets,
    )


@router.post("/quote", response_model=QuoteResponse)
async def quote(
    payload: QuoteRequest,
    config: PricingConfig = Depends(get_pricing_config),
):
    validate_guests(payload.guests, config)
    validate_pets(payload.pets, config)

    result = calculate_quote(
        DateInterval(payload.check_in, payload.check_out), payload.guests, config
    )
    if result is None:
        return QuoteResponse(quote=None)
    return QuoteResponse(
        quote=QuoteOut(
            nights=result.nights,
            base_total=result.base_total,
            extra_total=result.extra_total,
            total=result.total,
        )
    )


@router.get("/availability", response_model=AvailabilityOut)
async def availability(
    check_in: date,
    check_out: date,
    exclude_id: Optional[int] = None,
    service: ReservationService = Depends(get_reservation_service),
):
    if check_out <= check_in:
        raise InvalidInterval()

    available = await service.check_availability(check_in, check_out, exclude_id)
    return AvailabilityOut(check_in=check_in, check_out=check_out, available=available)


@router.post(
    "/reservations",
    response_model=ReservationOut,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(RESERVATION_LIMIT)
async def create_reservation(
    request: Request,
    payload: ReservationCreate,
    config: PricingConfig = Depends(get_pricing_config),
    service: ReservationService = Depends(get_reservation_service),
):
    validate_guests(payload.guests, config)
    validate_pets(payload.pets, config)

    is_valid, error = validate_dates(payload.check_in, payload.check_out)
    if not is_valid:
        raise ValidationFailed(error)

    result = calculate_quote(
        DateInterval(payload.check_in, payload.check_out), payload.guests, config
    )

    data = payload.model_dump()
    data["total_price"] = result.total
    return await service.create_reservation(data)


@router.get("/reservations", response_model=List[ReservationOut])
async def list_reservations(
    service: ReservationService = Depends(get_reservation_service),
):
    return await service.list_reservations()


@router.get("/users/{user_id}/reservations", response_model=List[ReservationOut])
async def list_user_reservations(
    user_id: str,
    service: ReservationService = Depends(get_reservation_service),
):
    return await service.list_user_reservations(user_id)


@router.get("/reservations/{reservation_id}", response_model=ReservationOut)
async def get_reservation(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service),
):
    return await service.get_reservation(reservation_id)


@router.patch("/reservations/{reservation_id}", response_model=ReservationOut)
async def update_reservation(
    reservation_id: int,
    payload: ReservationUpdate,
    config: PricingConfig = Depends(get_pricing_config),
    service: ReservationService = Depends(get_reservation_service),
):
    updates = payload.model_dump(exclude_unset=True)

    if updates.get("guests") is not None:
        validate_guests(updates["guests"], config)
    if updates.get("pets") is not None:
        validate_pets(updates["pets"], config)

    # Re-price when the stay or the party changes and no explicit total was set
    if updates.keys() & {"check_in", "check_out", "guests"} and "total_price" not in updates:
        current = await service.get_reservation(reservation_id)
        interval = DateInterval(
            updates.get("check_in") or current.check_in,
            updates.get("check_out") or current.check_out,
        )
        result = calculate_quote(interval, updates.get("guests") or current.guests, config)
        updates["total_price"] = result.total

    return await service.update_reservation(reservation_id, **updates)


@router.post("/reservations/{reservation_id}/cancel", response_model=ReservationOut)
async def cancel_reservation(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service),
):
    return await service.cancel_reservation(reservation_id)


@router.delete(
    "/reservations/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_reservation(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service),
):
    await service.delete_reservation(reservation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
