"""Amortization schedule generation for annuity loans"""

from typing import List
from kreditomat.domain.models import ScheduleEntry
from kreditomat.domain.calculator import compute_monthly_payment


def build_payment_schedule(amount: float, term_months: int, annual_rate: float) -> List[ScheduleEntry]:
    """
    Break an annuity loan into monthly principal/interest installments.

    Requirements:
    - One entry per month, equal payments
    - Interest accrues on the outstanding balance at annual_rate / 12
    - Last installment absorbs floating-point drift (closing balance is exactly 0)

    Args:
        amount: Principal borrowed
        term_months: Number of monthly payments
        annual_rate: Yearly rate as a fraction (0.28 == 28%)

    Returns:
        List of ScheduleEntry objects, month numbers starting at 1

    Example:
        1,200,000 at 0% over 12 months -> 12 x 100,000 principal, no interest
    """
    payment = compute_monthly_payment(amount, term_months, annual_rate)
    monthly_rate = annual_rate / 12

    schedule = []
    balance = float(amount)
    for month in range(1, term_months + 1):
        interest = balance * monthly_rate

        if month == term_months:
            # Pay off whatever is left so principal parts sum to the amount
            principal = balance
            installment = principal + interest
        else:
            principal = payment - interest
            installment = payment

        balance -= principal
        schedule.append(
            ScheduleEntry(
                month=month,
                payment=installment,
                principal=principal,
                interest=interest,
                balance=0.0 if month == term_months else balance,
            )
        )

    return schedule
