from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from app.application.use_cases.checkout_summary import CheckoutResult
from app.domain.entities.checkout import ValidationResult
from app.domain.entities.price_quote import PriceQuote, RescheduleQuote
from app.domain.entities.service_catalog import ServiceCatalogEntry


# Decimals go out as JSON numbers rather than strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ApiSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ErrorSchema(BaseModel):
    error: str


class PriceBreakdownSchema(ApiSchema):
    base_price: Money = Field(alias="basePrice")
    service: str
    duration: int
    duration_uplift: Money = Field(alias="durationUplift")
    time_uplift: Money = Field(alias="timeUplift")
    time_uplift_label: str | None = Field(default=None, alias="timeUpliftLabel")


class PriceResponseSchema(ApiSchema):
    price: Money
    breakdown: PriceBreakdownSchema

    @classmethod
    def from_quote(cls, quote: PriceQuote) -> "PriceResponseSchema":
        b = quote.breakdown
        return cls(
            price=quote.price,
            breakdown=PriceBreakdownSchema(
                base_price=b.base_price,
                service=b.service,
                duration=b.duration,
                duration_uplift=b.duration_uplift,
                time_uplift=b.time_uplift,
                time_uplift_label=b.time_uplift_label,
            ),
        )


class RescheduleBreakdownSchema(ApiSchema):
    original_price: Money = Field(alias="originalPrice")
    original_uplift: Money = Field(alias="originalUplift")
    new_uplift: Money = Field(alias="newUplift")
    time_uplift_label: str | None = Field(default=None, alias="timeUpliftLabel")
    is_reschedule: bool = Field(default=True, alias="isReschedule")


class RescheduleResponseSchema(ApiSchema):
    price: Money
    price_difference: Money = Field(alias="priceDifference")
    breakdown: RescheduleBreakdownSchema

    @classmethod
    def from_quote(cls, quote: RescheduleQuote) -> "RescheduleResponseSchema":
        return cls(
            price=quote.price,
            price_difference=quote.price_difference,
            breakdown=RescheduleBreakdownSchema(
                original_price=quote.original_price,
                original_uplift=quote.original_uplift,
                new_uplift=quote.new_uplift,
                time_uplift_label=quote.time_uplift_label,
            ),
        )


class ServiceSchema(ApiSchema):
    id: str
    name: str
    short_description: str | None = None
    service_base_price: Money

    @classmethod
    def from_entry(cls, entry: ServiceCatalogEntry) -> "ServiceSchema":
        return cls(
            id=entry.id,
            name=entry.name,
            short_description=entry.short_description,
            service_base_price=entry.base_price,
        )


class ServiceListSchema(ApiSchema):
    success: bool = True
    services: list[ServiceSchema] = Field(default_factory=list)


class ValidationSchema(ApiSchema):
    is_valid: bool = Field(alias="isValid")
    message: str
    amount: Money | None = None

    @classmethod
    def from_result(cls, result: ValidationResult | None) -> "ValidationSchema | None":
        if result is None:
            return None
        return cls(is_valid=result.is_valid, message=result.message, amount=result.amount)


class CheckoutResponseSchema(ApiSchema):
    gross_price: Money = Field(alias="grossPrice")
    discount_amount: Money = Field(alias="discountAmount")
    discount_type: str | None = Field(default=None, alias="discountType")
    discount_code: str | None = Field(default=None, alias="discountCode")
    gift_card_amount: Money = Field(alias="giftCardAmount")
    gift_card_code: str | None = Field(default=None, alias="giftCardCode")
    tax_rate: Money = Field(alias="taxRate")
    tax_amount: Money = Field(alias="taxAmount")
    net_price: Money = Field(alias="netPrice")
    final_amount: Money = Field(alias="finalAmount")
    summary: list[str] = Field(default_factory=list)
    discount_validation: ValidationSchema | None = Field(default=None, alias="discountValidation")
    gift_card_validation: ValidationSchema | None = Field(default=None, alias="giftCardValidation")

    @classmethod
    def from_result(cls, result: CheckoutResult) -> "CheckoutResponseSchema":
        b = result.breakdown
        return cls(
            gross_price=b.gross_price,
            discount_amount=b.discount_amount,
            discount_type=b.discount_type,
            discount_code=b.discount_code,
            gift_card_amount=b.gift_card_amount,
            gift_card_code=b.gift_card_code,
            tax_rate=b.tax_rate,
            tax_amount=b.tax_amount,
            net_price=b.net_price,
            final_amount=b.final_amount,
            summary=result.summary,
            discount_validation=ValidationSchema.from_result(result.discount_validation),
            gift_card_validation=ValidationSchema.from_result(result.gift_card_validation),
        )
