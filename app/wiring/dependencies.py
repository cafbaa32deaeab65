from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.application.ports.pricing_repository import PricingRepositoryPort
from app.application.use_cases.calculate_price import CalculatePriceUseCase
from app.application.use_cases.checkout_summary import CheckoutSummaryUseCase
from app.application.use_cases.list_services import ListServicesUseCase
from app.application.use_cases.reschedule_price import ReschedulePriceUseCase
from app.application.utils.local_time import safe_timezone
from app.infrastructure.database.client import get_supabase_client, supabase_configured
from app.infrastructure.database.pricing_repository import SupabasePricingRepository
from app.infrastructure.store.json_repository import JsonPricingRepository


def get_timezone() -> ZoneInfo:
    return safe_timezone(settings.BUSINESS_TIMEZONE)


@lru_cache
def get_pricing_repository() -> PricingRepositoryPort:
    logger = logging.getLogger(__name__)
    if supabase_configured():
        logger.info("Using SupabasePricingRepository")
        return SupabasePricingRepository(client=get_supabase_client())

    if settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using JsonPricingRepository (Supabase not configured, ENV=dev/local)")
        return JsonPricingRepository(settings.PRICING_FIXTURE_PATH)

    raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are required outside dev/local.")


def get_calculate_price_use_case() -> CalculatePriceUseCase:
    return CalculatePriceUseCase(repository=get_pricing_repository())


def get_reschedule_price_use_case() -> ReschedulePriceUseCase:
    return ReschedulePriceUseCase(repository=get_pricing_repository())


def get_list_services_use_case() -> ListServicesUseCase:
    return ListServicesUseCase(repository=get_pricing_repository())


def get_checkout_summary_use_case() -> CheckoutSummaryUseCase:
    return CheckoutSummaryUseCase(
        repository=get_pricing_repository(),
        timezone=get_timezone(),
        default_tax_rate=settings.DEFAULT_TAX_RATE,
    )
