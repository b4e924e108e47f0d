"""Presentation helpers - rounding and display strings for calculator output"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Tuple

from kreditomat.domain.models import RiskLevel

# Title and advice shown next to the PDN indicator
RISK_DESCRIPTIONS: Dict[RiskLevel, Tuple[str, str]] = {
    RiskLevel.LOW: (
        "Низкая долговая нагрузка",
        "Ваш показатель долговой нагрузки находится в безопасной зоне",
    ),
    RiskLevel.MEDIUM: (
        "Средняя долговая нагрузка",
        "Рекомендуем не увеличивать долговую нагрузку",
    ),
    RiskLevel.HIGH: (
        "Высокая долговая нагрузка",
        "Рекомендуем уменьшить сумму займа или увеличить срок",
    ),
    RiskLevel.CRITICAL: (
        "Критическая долговая нагрузка",
        "Превышен безопасный уровень. Займ может быть отклонен",
    ),
}


def round_currency(value: float, minor_units: int = 0) -> float:
    """Round half-up to the currency's minor unit. Apply once, at output."""
    quantum = Decimal(1).scaleb(-minor_units)
    # + 0.0 turns a rounded -0.0 into 0.0
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)) + 0.0


def format_amount(value: float, minor_units: int = 0) -> str:
    """Group thousands with spaces: 5000000 -> '5 000 000'"""
    rounded = round_currency(value, minor_units)
    return f"{rounded:,.{minor_units}f}".replace(",", " ")


def format_percent(ratio: float, digits: int = 1) -> str:
    """Render a ratio as a percentage: 0.0678 -> '6.8%'"""
    return f"{ratio * 100:.{digits}f}%"


def loan_summary(amount: float, term_months: int, currency: str = "сум") -> str:
    """Short loan description, e.g. '5 000 000 сум на 12 мес.'"""
    return f"{format_amount(amount)} {currency} на {term_months} мес."


def describe_risk(risk_level: RiskLevel) -> Tuple[str, str]:
    """(title, advice) for a PDN risk tier"""
    return RISK_DESCRIPTIONS[RiskLevel(risk_level)]
