"""Marital versus separate property classification.

Partitions estate items into the marital pool, which is divided, and each
spouse's separate property, which stays with its owner. Items the upstream
forms did not tag fall back to the marital-property presumption: property
held at separation is marital unless it was acquired before the marriage
by one spouse alone.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from .exceptions import InconsistentOwnershipError, InvalidItemValueError
from .models import MaritalEstateItem, Ownership, Spouse


@dataclass(frozen=True)
class ClassifiedEstate:
    """Estate items partitioned by who they belong to."""
    marital: tuple[MaritalEstateItem, ...] = ()
    separate_spouse1: tuple[MaritalEstateItem, ...] = ()
    separate_spouse2: tuple[MaritalEstateItem, ...] = ()
    inferred_ids: tuple[str, ...] = ()

    @property
    def item_count(self) -> int:
        """Number of items across all three buckets."""
        return len(self.marital) + len(self.separate_spouse1) + len(self.separate_spouse2)

    def separate_for(self, spouse: Spouse) -> tuple[MaritalEstateItem, ...]:
        """Separate items owned by one spouse."""
        return self.separate_spouse1 if spouse is Spouse.SPOUSE1 else self.separate_spouse2


def validate_item_value(item: MaritalEstateItem) -> None:
    """Reject negative or non-finite item values.

    Raises:
        InvalidItemValueError: If the value is NaN, infinite or below zero
    """
    value = item.current_value
    if not value.is_finite():
        raise InvalidItemValueError(
            f"{item.kind.value.capitalize()} '{item.id}' has a non-finite value",
            item_id=item.id,
            value=value,
        )
    if value < 0:
        raise InvalidItemValueError(
            f"{item.kind.value.capitalize()} '{item.id}' has a negative value",
            item_id=item.id,
            value=value,
        )


def _presumed_separate(item: MaritalEstateItem, marriage_date: Optional[date]) -> bool:
    """Marital presumption for an untagged item."""
    if item.owned_by is Ownership.JOINT:
        return False
    if marriage_date is None or item.acquisition_date is None:
        return False
    return item.acquisition_date < marriage_date


def classify(
    items: Iterable[MaritalEstateItem],
    marriage_date: Optional[date] = None,
) -> ClassifiedEstate:
    """Partition items into marital and per-spouse separate property.

    Args:
        items: Assets and debts of the marriage
        marriage_date: Used only to classify untagged items

    Returns:
        ClassifiedEstate holding every input item exactly once

    Raises:
        InvalidItemValueError: Negative or non-finite value
        InconsistentOwnershipError: Separate item owned jointly, or a
            separate item awarded to the spouse who does not own it
    """
    marital: list[MaritalEstateItem] = []
    separate: dict[Spouse, list[MaritalEstateItem]] = {Spouse.SPOUSE1: [], Spouse.SPOUSE2: []}
    inferred: list[str] = []

    for item in items:
        validate_item_value(item)

        if item.is_separate_property is None:
            inferred.append(item.id)
            is_separate = _presumed_separate(item, marriage_date)
        else:
            is_separate = item.is_separate_property

        if not is_separate:
            marital.append(item)
            continue

        owner = item.owned_by.spouse
        if owner is None:
            raise InconsistentOwnershipError(
                f"Separate property '{item.id}' cannot be owned jointly",
                item_id=item.id,
                owned_by=item.owned_by.value,
            )
        if item.awarded_to is not None and item.awarded_to is not owner:
            raise InconsistentOwnershipError(
                f"Separate property '{item.id}' of {owner.value} cannot be awarded to {item.awarded_to.value}",
                item_id=item.id,
                owned_by=item.owned_by.value,
            )
        separate[owner].append(item)

    return ClassifiedEstate(
        marital=tuple(marital),
        separate_spouse1=tuple(separate[Spouse.SPOUSE1]),
        separate_spouse2=tuple(separate[Spouse.SPOUSE2]),
        inferred_ids=tuple(inferred),
    )
