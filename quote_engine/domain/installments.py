"""Installment schedule generation for quote payments"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, List, Optional

from quote_engine.domain.exceptions import ScheduleReconciliationFailure
from quote_engine.domain.models import Installment, InstallmentType, Money, PaymentSchedule
from quote_engine.domain.money import round2
from quote_engine.utils.date_utils import first_of_month, first_of_month_after

INSTALLMENT_COUNT = 3


def split_total(total: Decimal) -> List[Decimal]:
    """
    Split total into deposit, second and final payments.

    Requirements:
    - Deposit and second are each total/3 rounded to cents
    - Final is the exact remainder, so the three always sum to total

    Example:
        1000.00 -> [333.33, 333.33, 333.34]
    """
    third = round2(total / INSTALLMENT_COUNT)
    final = total - third - third
    return reconcile([third, third, final], total)


def reconcile(amounts: List[Decimal], total: Decimal) -> List[Decimal]:
    """
    Move any residual between sum(amounts) and total onto the last amount.

    Raises:
        ScheduleReconciliationFailure: Residual survives, or the last amount
            would go negative
    """
    residual = total - sum(amounts, Decimal("0"))
    if residual:
        amounts = amounts[:-1] + [round2(amounts[-1] + residual)]

    if sum(amounts, Decimal("0")) != total:
        raise ScheduleReconciliationFailure(
            f"Installments sum to {sum(amounts, Decimal('0'))}, expected {total}"
        )
    if amounts and amounts[-1] < 0:
        raise ScheduleReconciliationFailure(f"Final installment would be negative: {amounts[-1]}")
    return amounts


class PaymentScheduler:
    """Builds deposit / second / final payment schedules"""

    def __init__(
        self,
        month_gap: int = 2,
        event_buffer_days: int = 7,
        today: Callable[[], date] = date.today,
    ):
        self.month_gap = month_gap
        self.event_buffer_days = event_buffer_days
        self.today = today

    def schedule(self, total: Money, event_start_date: Optional[date] = None) -> PaymentSchedule:
        """
        Default three-part schedule.

        Due dates:
        - Deposit: today (on acceptance)
        - Second: 1st of the month month_gap months from today
        - Final: 1st of the month month_gap months after second, pulled back to
          event_buffer_days before the event when it would land later
        """
        amount = round2(total.amount)
        if amount <= 0:
            return PaymentSchedule(total=Money(amount, total.currency))

        deposit_due, second_due, final_due = self.due_dates(event_start_date)
        amounts = split_total(amount)

        installments = [
            Installment(type=kind, amount=Money(value, total.currency), due_date=due)
            for kind, value, due in zip(
                (InstallmentType.DEPOSIT, InstallmentType.SECOND, InstallmentType.FINAL),
                amounts,
                (deposit_due, second_due, final_due),
            )
        ]
        return PaymentSchedule(total=Money(amount, total.currency), installments=installments)

    def due_dates(self, event_start_date: Optional[date] = None) -> tuple[date, date, date]:
        today = self.today()
        second_due = first_of_month_after(today, self.month_gap)
        final_due = first_of_month_after(second_due, self.month_gap)

        if event_start_date is not None:
            latest = event_start_date - timedelta(days=self.event_buffer_days)
            if final_due > latest:
                # Prefer the 1st of a month if it still follows the second payment
                candidate = first_of_month(latest)
                final_due = candidate if candidate > second_due else latest
                final_due = max(final_due, today)
                second_due = min(second_due, final_due)

        return today, second_due, final_due

    def apply_override(self, total: Money, installments: List[Installment]) -> PaymentSchedule:
        """
        Accept a caller-supplied schedule, keeping its due dates.

        Amounts are reconciled so they sum exactly to total; the residual goes
        onto the last installment.
        """
        amount = round2(total.amount)
        if not installments:
            raise ScheduleReconciliationFailure("Override schedule has no installments")

        reconciled = reconcile([round2(inst.amount.amount) for inst in installments], amount)
        return PaymentSchedule(
            total=Money(amount, total.currency),
            installments=[
                Installment(type=inst.type, amount=Money(value, total.currency), due_date=inst.due_date)
                for inst, value in zip(installments, reconciled)
            ],
        )
