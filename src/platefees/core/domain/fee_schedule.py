"""
FeeSchedule — Единый источник ставок комиссии "Double 10"

Модель комиссий маркетплейса:
- Покупатель (platetaker) платит: base + 10% (buyer fee, сверху)
- Продавец (platemaker) получает: base - 10% (seller fee, удержание)
- Платформа оставляет: 20% от base (buyer fee + seller fee)

Все ставки и бизнес-границы определены ТОЛЬКО здесь. Любой вызывающий код
(UI, платёжная оркестрация, реализации в других рантаймах через
fee_vectors.json) обязан ссылаться на эти константы, а не на литералы.

Ставки покупателя и продавца намеренно названы раздельно: сейчас они равны,
но могут разойтись (например, промо-скидка для продавца).
"""

from dataclasses import dataclass
from typing import Final

from platefees.core.math.numerical_safeguards import validate_in_range

# =============================================================================
# СТАВКИ И ГРАНИЦЫ
# =============================================================================

# Надбавка покупателя (доля от base, добавляется сверху)
BUYER_FEE_RATE: Final[float] = 0.10

# Удержание продавца (доля от base, вычитается из выплаты)
SELLER_FEE_RATE: Final[float] = 0.10

# Границы количества в строке корзины (бизнес-правило против runaway quantities)
MIN_ORDER_QUANTITY: Final[int] = 1
MAX_ORDER_QUANTITY: Final[int] = 999


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class FeeSchedule:
    """Конфигурация ставок комиссии.

    Immutable: один экземпляр безопасно разделяется между потоками.
    """

    buyer_fee_rate: float = BUYER_FEE_RATE
    seller_fee_rate: float = SELLER_FEE_RATE
    max_order_quantity: int = MAX_ORDER_QUANTITY

    def __post_init__(self) -> None:
        validate_in_range(self.buyer_fee_rate, "buyer_fee_rate", 0.0, 1.0)
        validate_in_range(self.seller_fee_rate, "seller_fee_rate", 0.0, 1.0)

        # Арифметика split идёт во float: Decimal/int ставки приводятся здесь
        object.__setattr__(self, "buyer_fee_rate", float(self.buyer_fee_rate) + 0.0)
        object.__setattr__(self, "seller_fee_rate", float(self.seller_fee_rate) + 0.0)

        if isinstance(self.max_order_quantity, bool) or not isinstance(
            self.max_order_quantity, int
        ):
            raise ValueError(
                f"max_order_quantity must be an int, got {self.max_order_quantity!r}"
            )
        if self.max_order_quantity < MIN_ORDER_QUANTITY:
            raise ValueError(
                f"max_order_quantity must be >= {MIN_ORDER_QUANTITY}, "
                f"got {self.max_order_quantity}"
            )

    @classmethod
    def from_percent(
        cls,
        buyer_fee_percent: float,
        seller_fee_percent: float,
        max_order_quantity: int = MAX_ORDER_QUANTITY,
    ) -> "FeeSchedule":
        """Построение расписания из процентов (10 → 0.10).

        Args:
            buyer_fee_percent: Надбавка покупателя в процентах [0, 100]
            seller_fee_percent: Удержание продавца в процентах [0, 100]
            max_order_quantity: Верхняя граница количества

        Raises:
            ValueError: Если проценты вне [0, 100] или NaN/Inf
        """
        validate_in_range(buyer_fee_percent, "buyer_fee_percent", 0.0, 100.0)
        validate_in_range(seller_fee_percent, "seller_fee_percent", 0.0, 100.0)
        return cls(
            buyer_fee_rate=float(buyer_fee_percent) / 100,
            seller_fee_rate=float(seller_fee_percent) / 100,
            max_order_quantity=max_order_quantity,
        )

    @property
    def buyer_fee_percent(self) -> float:
        return self.buyer_fee_rate * 100

    @property
    def seller_fee_percent(self) -> float:
        return self.seller_fee_rate * 100

    @property
    def take_rate(self) -> float:
        """Суммарная доля платформы от base (0.20 для Double 10)."""
        return self.buyer_fee_rate + self.seller_fee_rate


DEFAULT_FEE_SCHEDULE: Final[FeeSchedule] = FeeSchedule()
