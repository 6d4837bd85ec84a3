"""
Fee Results — Immutable модели результатов расчёта комиссий

Все модели frozen: каждый результат создаётся заново на каждый вызов,
никогда не мутируется и не кэшируется, принадлежит вызывающему коду.
model_dump() даёт wire-форму, которая проверяется JSON Schema контрактами.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from platefees.core.math.numerical_safeguards import is_close


# =============================================================================
# ORDER SPLIT
# =============================================================================


class OrderSplit(BaseModel):
    """
    Разделение "Double 10" для одной суммы продажи.

    Без округления: значения — прямой результат float арифметики.
    Инвариант: seller_payout + app_revenue == total_captured (в пределах epsilon).
    """

    total_captured: float = Field(..., ge=0, description="Сколько списывается с покупателя")
    app_revenue: float = Field(..., ge=0, description="Доход платформы (buyer fee + seller fee)")
    seller_payout: float = Field(..., ge=0, description="Выплата продавцу (base - seller fee)")

    model_config = {"frozen": True}  # Immutable

    def is_balanced(self) -> bool:
        """Проверка split completeness: payout + revenue == captured."""
        return is_close(self.seller_payout + self.app_revenue, self.total_captured)


# =============================================================================
# ORDER BREAKDOWN
# =============================================================================


class OrderBreakdown(BaseModel):
    """
    Разбивка строки корзины (unit_price × quantity) для покупателя.

    Все значения округлены до центов; total == subtotal + platform_fee
    точно на уровне 2 знаков.
    """

    subtotal: float = Field(..., ge=0, description="unit_price * quantity")
    platform_fee: float = Field(..., ge=0, description="Надбавка покупателя")
    total: float = Field(..., ge=0, description="Итог к оплате покупателем")

    model_config = {"frozen": True}


# =============================================================================
# FEE BREAKDOWN (server-side, перед созданием платежа)
# =============================================================================


class FeeBreakdown(BaseModel):
    """Полная разбивка комиссий для платёжной оркестрации."""

    base_amount: float = Field(..., ge=0)
    buyer_fee: float = Field(..., ge=0)
    seller_fee: float = Field(..., ge=0)
    total_charge: float = Field(..., ge=0, description="base + buyer_fee")
    app_total_revenue: float = Field(..., ge=0, description="buyer_fee + seller_fee")
    seller_payout: float = Field(..., ge=0, description="base - seller_fee")

    model_config = {"frozen": True}


class PaymentAmounts(BaseModel):
    """
    Суммы в минорных единицах (центах) для платёжного процессора.

    seller_transfer_cents — то, что процессор фактически переводит продавцу
    (amount - application fee), а не отдельно округлённый seller_payout.
    """

    amount_cents: int = Field(..., ge=0, description="Списание с покупателя")
    application_fee_cents: int = Field(..., ge=0, description="Комиссия платформы")
    seller_transfer_cents: int = Field(..., ge=0, description="Перевод продавцу")

    model_config = {"frozen": True}


# =============================================================================
# REFUND
# =============================================================================


class RefundQuote(BaseModel):
    """Расчёт возврата по инициативе продавца (комиссии платформы не возвращаются)."""

    order_total_price: float = Field(..., gt=0, description="Оплаченная сумма (включая buyer fee)")
    base_amount: float = Field(..., ge=0, description="Base, восстановленный из total_price")
    refund_amount: float = Field(..., ge=0, description="Возврат покупателю (доля продавца)")
    refund_amount_cents: int = Field(..., ge=0)
    platform_fee_kept: float = Field(..., ge=0, description="Остаётся у платформы")

    model_config = {"frozen": True}


# =============================================================================
# EARNINGS
# =============================================================================


class OrderRecord(BaseModel):
    """Завершённый заказ продавца (вход для агрегации выручки)."""

    order_id: str = Field(..., min_length=1)
    # NaN/Inf допускаются на входе: агрегатор пропускает такие заказы
    total_price: float = Field(..., description="Оплаченная сумма (включая buyer fee)")
    created_at: datetime

    model_config = {"frozen": True}


class EarningsSummary(BaseModel):
    """Сводка выручки продавца за всё время, сегодня и текущую неделю."""

    total_revenue: float = Field(0.0, ge=0)
    take_home: float = Field(0.0, ge=0)
    today_revenue: float = Field(0.0, ge=0)
    today_take_home: float = Field(0.0, ge=0)
    week_revenue: float = Field(0.0, ge=0)
    week_take_home: float = Field(0.0, ge=0)
    order_count: int = Field(0, ge=0)
    today_order_count: int = Field(0, ge=0)
    week_order_count: int = Field(0, ge=0)
    skipped_order_count: int = Field(0, ge=0, description="Заказы с невалидной суммой")

    model_config = {"frozen": True}
