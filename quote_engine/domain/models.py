"""Domain models - pure Python dataclasses representing pricing entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from quote_engine.domain.exceptions import ConversionDegraded, InvalidComponentSelection


@dataclass(frozen=True)
class Money:
    """Amount in a given ISO currency; arithmetic stays in Decimal"""

    amount: Decimal
    currency: str

    @classmethod
    def zero(cls, currency: str) -> "Money":
        return cls(Decimal("0.00"), currency)


class TransferDirection(str, Enum):
    OUTBOUND = "outbound"
    RETURN = "return"
    BOTH = "both"


class InstallmentType(str, Enum):
    DEPOSIT = "deposit"
    SECOND = "second"
    FINAL = "final"


class RateSource(str, Enum):
    """Where the rate applied to a conversion came from"""

    IDENTITY = "identity"
    CACHE = "cache"
    LIVE = "live"
    FALLBACK = "fallback"
    UNCONVERTED = "unconverted"


# Component selections


@dataclass(frozen=True, kw_only=True)
class ComponentSelection:
    """One selected line item from inventory"""

    unit_price: Money
    quantity: int = 1
    label: str = ""

    kind = "component"

    @property
    def currency(self) -> str:
        return self.unit_price.currency


@dataclass(frozen=True, kw_only=True)
class Ticket(ComponentSelection):
    kind = "ticket"


@dataclass(frozen=True, kw_only=True)
class CircuitTransfer(ComponentSelection):
    kind = "circuit_transfer"


@dataclass(frozen=True, kw_only=True)
class LoungePass(ComponentSelection):
    kind = "lounge_pass"


@dataclass(frozen=True, kw_only=True)
class AirportTransfer(ComponentSelection):
    direction: TransferDirection = TransferDirection.OUTBOUND

    kind = "airport_transfer"


@dataclass(frozen=True, kw_only=True)
class Flight(ComponentSelection):
    """unit_price is the per-passenger fare"""

    passengers: int = 1

    kind = "flight"


@dataclass(frozen=True, kw_only=True)
class HotelStay(ComponentSelection):
    """
    Hotel room selection.

    unit_price is the contracted price for the base stay (per room). The base
    stay dates default to the selected dates, i.e. no extra nights.
    """

    check_in: date
    check_out: date
    extra_night_price: Money
    base_check_in: Optional[date] = None
    base_check_out: Optional[date] = None

    kind = "hotel_stay"

    @property
    def base_price_per_stay(self) -> Money:
        return self.unit_price


# Pricing outputs


@dataclass(frozen=True)
class PriceLine:
    """Single line of a component price breakdown"""

    description: str
    amount: Decimal


@dataclass
class PricedComponent:
    """Price contribution of one component, in its native currency"""

    component: ComponentSelection
    amount: Money
    lines: List[PriceLine] = field(default_factory=list)
    issue: Optional[InvalidComponentSelection] = None

    @property
    def valid(self) -> bool:
        return self.issue is None


@dataclass
class ConversionResult:
    """Outcome of a currency conversion"""

    money: Money
    rate: Decimal  # Market rate (1 when unconverted)
    applied_rate: Decimal  # Market rate with spread applied
    source: RateSource
    warning: Optional[ConversionDegraded] = None

    @property
    def degraded(self) -> bool:
        return self.warning is not None


@dataclass(frozen=True)
class TenantPricingPolicy:
    """Tenant-scoped pricing rules, injected per pricing pass"""

    tenant_id: Optional[str]
    markup_rate: Decimal
    currency: str
    exempt_tenant_id: Optional[str] = None
    commission_rate: Decimal = Decimal("0")

    @property
    def is_exempt(self) -> bool:
        return self.exempt_tenant_id is not None and self.tenant_id == self.exempt_tenant_id

    @property
    def effective_markup_rate(self) -> Decimal:
        return Decimal("0") if self.is_exempt else self.markup_rate


@dataclass
class QuoteTotal:
    """Aggregated quote price"""

    subtotal: Money
    markup_amount: Money
    raw_total: Money  # subtotal + markup, before canonical rounding
    total: Money
    commission_amount: Money
    display_currency: str
    display_total: Money
    exchange_rate: Decimal
    line_items: List[PricedComponent] = field(default_factory=list)
    excluded: List[PricedComponent] = field(default_factory=list)
    warnings: List[ConversionDegraded] = field(default_factory=list)
    is_empty: bool = False


@dataclass
class Installment:
    """Single payment in a quote's payment schedule"""

    type: InstallmentType
    amount: Money
    due_date: date


@dataclass
class PaymentSchedule:
    """Ordered installments that sum exactly to total"""

    total: Money
    installments: List[Installment] = field(default_factory=list)

    @property
    def amount_scheduled(self) -> Decimal:
        return sum((inst.amount.amount for inst in self.installments), Decimal("0"))


# Back-office costing


@dataclass(frozen=True)
class SupplierRoomCost:
    """Supplier-side room cost converted into the selling currency"""

    total_supplier_price_per_night: Decimal
    effective_rate: Decimal
    total_price_per_night_target_currency: Decimal
    total_price_per_stay: Decimal
    currency: str


@dataclass(frozen=True)
class CircuitTransferCosting:
    """Per-seat cost and sell price for a coach circuit transfer"""

    coaches_required: int
    coach_cost_local: Decimal
    guide_cost_local: Decimal
    utilisation_cost_per_seat_local: Decimal
    coach_cost_target: Decimal
    guide_cost_target: Decimal
    utilisation_cost_per_seat_target: Decimal
    sell_price_per_seat_target: Decimal
