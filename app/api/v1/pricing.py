from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from zoneinfo import ZoneInfo

from app.api.v1.schemas import (
    CheckoutResponseSchema,
    ErrorSchema,
    PriceResponseSchema,
    RescheduleResponseSchema,
    ServiceListSchema,
    ServiceSchema,
)
from app.application.dto.price_request import CheckoutRequest, PriceRequest, RescheduleRequest
from app.application.exceptions import PricingError, UpstreamUnavailableError
from app.application.use_cases.calculate_price import CalculatePriceUseCase
from app.application.use_cases.checkout_summary import CheckoutSummaryUseCase
from app.application.use_cases.list_services import ListServicesUseCase
from app.application.use_cases.reschedule_price import ReschedulePriceUseCase
from app.core.config import settings
from app.wiring.dependencies import (
    get_calculate_price_use_case,
    get_checkout_summary_use_case,
    get_list_services_use_case,
    get_reschedule_price_use_case,
    get_timezone,
)

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {400: {"model": ErrorSchema}, 404: {"model": ErrorSchema}, 500: {"model": ErrorSchema}}


def _error_response(e: PricingError, generic_message: str) -> JSONResponse:
    if isinstance(e, UpstreamUnavailableError):
        logger.error(generic_message, extra={"error": str(e)})
        return JSONResponse(status_code=e.status_code, content={"error": generic_message})
    return JSONResponse(status_code=e.status_code, content={"error": str(e)})


@router.get(
    "/calculate-price",
    response_model=PriceResponseSchema | RescheduleResponseSchema,
    responses=ERROR_RESPONSES,
)
def calculate_price(
    service_id: str | None = Query(None),
    booking_time: str | None = Query(None),
    duration: str | None = Query(None),
    original_price: str | None = Query(None),
    original_booking_time: str | None = Query(None),
    timezone: ZoneInfo = Depends(get_timezone),
    price_uc: CalculatePriceUseCase = Depends(get_calculate_price_use_case),
    reschedule_uc: ReschedulePriceUseCase = Depends(get_reschedule_price_use_case),
):
    try:
        if original_price and original_booking_time:
            reschedule = RescheduleRequest.from_query(
                booking_time=booking_time,
                original_price=original_price,
                original_booking_time=original_booking_time,
                timezone=timezone,
            )
            return RescheduleResponseSchema.from_quote(reschedule_uc.execute(reschedule))

        request = PriceRequest.from_query(
            service_id=service_id,
            booking_time=booking_time,
            duration=duration,
            timezone=timezone,
            default_duration=settings.DEFAULT_DURATION_MINUTES,
        )
        return PriceResponseSchema.from_quote(price_uc.execute(request))
    except PricingError as e:
        return _error_response(e, "Failed to calculate price")
    except Exception as e:
        logger.exception("Calculate price error", extra={"error": str(e)})
        return JSONResponse(status_code=500, content={"error": "Failed to calculate price"})


@router.get("/services", response_model=ServiceListSchema, responses={500: {"model": ErrorSchema}})
def list_services(uc: ListServicesUseCase = Depends(get_list_services_use_case)):
    try:
        services = uc.execute()
    except Exception as e:
        logger.exception("Error fetching services", extra={"error": str(e)})
        return JSONResponse(status_code=500, content={"success": False, "error": "Failed to fetch services"})
    return ServiceListSchema(services=[ServiceSchema.from_entry(s) for s in services])


@router.post("/checkout-summary", response_model=CheckoutResponseSchema, responses=ERROR_RESPONSES)
def checkout_summary(
    req: CheckoutRequest,
    uc: CheckoutSummaryUseCase = Depends(get_checkout_summary_use_case),
):
    try:
        return CheckoutResponseSchema.from_result(uc.execute(req))
    except PricingError as e:
        return _error_response(e, "Failed to calculate checkout")
    except Exception as e:
        logger.exception("Checkout summary error", extra={"error": str(e)})
        return JSONResponse(status_code=500, content={"error": "Failed to calculate checkout"})
