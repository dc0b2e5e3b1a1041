"""Consumption and calorie calculators.

Two ways of recording a feeding exist. Refill accounting records what was put
out, what was left and what was topped up. Bowl weighing records the bowl
weight at each visit and derives consumption from the previous weighing. Both
are exposed through ``consumption_strategy`` so callers never pick a formula
themselves.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from pet_tracker.domain.foods import Food


class ConsumptionPolicy(StrEnum):
    """Named ways of deriving the amount a pet actually ate."""

    REFILL_ACCOUNTING = "refill"
    BOWL_WEIGHT = "bowl_weight"


def compute_consumed(
    put_out: float, not_eaten: float = 0.0, refilled: float = 0.0
) -> float:
    """Return put_out + refilled - not_eaten, floored at zero."""
    return max(0.0, put_out + refilled - not_eaten)


def compute_bowl_consumed(current_weight: float, previous_put_out: float = 0.0) -> float:
    """Return how much the bowl lost since the previous weighing."""
    return max(0.0, previous_put_out - current_weight)


def compute_calories(consumed: float, food: Food) -> float | None:
    """Return calories for a consumed amount, or None without calorie density."""
    if food.calories_per_gram is None:
        return None
    return consumed * food.calories_per_gram


class ConsumptionStrategy(Protocol):
    """Derives the consumed amount for a feeding."""

    policy: ConsumptionPolicy
    needs_previous: bool

    def consumed(
        self,
        amount_put_out: float,
        amount_not_eaten: float | None = None,
        amount_refilled: float | None = None,
        previous_put_out: float | None = None,
    ) -> float:
        """Return the consumed amount in grams."""


@dataclass(frozen=True)
class RefillAccountingStrategy:
    """Consumption from explicit leftovers and refills."""

    policy: ConsumptionPolicy = ConsumptionPolicy.REFILL_ACCOUNTING
    needs_previous: bool = False

    def consumed(
        self,
        amount_put_out: float,
        amount_not_eaten: float | None = None,
        amount_refilled: float | None = None,
        previous_put_out: float | None = None,
    ) -> float:
        """Return put out plus refilled minus leftovers."""
        return compute_consumed(
            amount_put_out,
            not_eaten=amount_not_eaten or 0.0,
            refilled=amount_refilled or 0.0,
        )


@dataclass(frozen=True)
class BowlWeightStrategy:
    """Consumption from the drop between successive bowl weighings."""

    policy: ConsumptionPolicy = ConsumptionPolicy.BOWL_WEIGHT
    needs_previous: bool = True

    def consumed(
        self,
        amount_put_out: float,
        amount_not_eaten: float | None = None,
        amount_refilled: float | None = None,
        previous_put_out: float | None = None,
    ) -> float:
        """Return the previous bowl weight minus the current one."""
        return compute_bowl_consumed(
            amount_put_out, previous_put_out=previous_put_out or 0.0
        )


def consumption_strategy(policy: ConsumptionPolicy | str) -> ConsumptionStrategy:
    """Return the strategy for a policy name."""
    resolved = ConsumptionPolicy(policy)
    if resolved is ConsumptionPolicy.BOWL_WEIGHT:
        return BowlWeightStrategy()
    return RefillAccountingStrategy()
