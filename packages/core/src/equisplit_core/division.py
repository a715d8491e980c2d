"""Division of the marital estate between the spouses.

Physical assets cannot be cut in half, so division happens in two stages:

1. allocate_items() hands out whole marital items, largest first, to
   whichever spouse is furthest below their target share.
2. compute_equalization() measures how far each spouse's physical
   allocation is from their exact target share and turns the difference
   into a single cash payment.

After the payment each spouse holds exactly their target share to the
cent, whatever the mix of item values. Separate property never enters
either stage; it is added to its owner's total afterwards.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from .classification import ClassifiedEstate
from .equity import EVEN_SPLIT
from .money import ZERO, format_currency, format_percentage, sum_money, to_money
from .models import (
    Classification,
    EqualizationPayment,
    ItemAllocation,
    ItemKind,
    MaritalEstateItem,
    Regime,
    Spouse,
)


@dataclass(frozen=True)
class DivisionOutcome:
    """Numbers produced by divide(), before confidence scoring."""
    regime: Regime
    equity_factor: Decimal
    total_marital_assets_value: Decimal
    total_marital_debts_value: Decimal
    net_marital_estate_value: Decimal
    spouse1_share: Decimal
    spouse2_share: Decimal
    equalization_payment: Optional[EqualizationPayment]
    spouse1_separate_value: Decimal
    spouse2_separate_value: Decimal
    allocations: tuple[ItemAllocation, ...]


def split_net_estate(net_estate: Decimal, equity_factor: Decimal) -> tuple[Decimal, Decimal]:
    """Split the net marital estate into target shares.

    Spouse1's share is rounded half-up to the cent and spouse2 receives the
    remainder, so any odd cent lands on spouse1 and the shares always sum
    to the net estate exactly.

    Args:
        net_estate: Marital assets minus marital debts (may be negative)
        equity_factor: Spouse1's share of the estate, 0 to 1

    Returns:
        Tuple of (spouse1_share, spouse2_share)
    """
    net_estate = to_money(net_estate)
    spouse1_share = to_money(net_estate * equity_factor)
    spouse2_share = net_estate - spouse1_share
    return spouse1_share, spouse2_share


def _reasoning(item: MaritalEstateItem, spouse: Spouse, equity_factor: Decimal, pre_assigned: bool) -> str:
    if pre_assigned:
        return f"Awarded to {spouse.value} by agreement of the parties"
    if equity_factor == EVEN_SPLIT:
        split = "equal division"
    else:
        split = (
            f"equitable division ({format_percentage(equity_factor)}/"
            f"{format_percentage(1 - equity_factor)})"
        )
    if item.kind is ItemKind.DEBT:
        return f"Marital debt assigned to {spouse.value} toward {split}"
    return f"Marital asset allocated to {spouse.value} toward {split}"


def _allocate_kind(
    items: Sequence[tuple[int, MaritalEstateItem]],
    equity_factor: Decimal,
) -> dict[int, ItemAllocation]:
    """Greedy allocation of one kind of item (assets or debts), keyed by input position."""
    total = sum((item.current_value for _, item in items), ZERO)
    targets = {
        Spouse.SPOUSE1: total * equity_factor,
        Spouse.SPOUSE2: total * (1 - equity_factor),
    }
    held = {Spouse.SPOUSE1: ZERO, Spouse.SPOUSE2: ZERO}
    allocations: dict[int, ItemAllocation] = {}

    def assign(position: int, item: MaritalEstateItem, spouse: Spouse, pre_assigned: bool) -> None:
        value = to_money(item.current_value)
        held[spouse] += value
        allocations[position] = ItemAllocation(
            item_id=item.id,
            description=item.description,
            kind=item.kind,
            category=item.category,
            value=value,
            classification=Classification.MARITAL,
            awarded_to=spouse,
            pre_assigned=pre_assigned,
            reasoning=_reasoning(item, spouse, equity_factor, pre_assigned),
        )

    # Agreed awards are fixed before the greedy pass fills around them
    for position, item in items:
        if item.awarded_to is not None:
            assign(position, item, item.awarded_to, pre_assigned=True)

    remaining = sorted(
        ((position, item) for position, item in items if item.awarded_to is None),
        key=lambda entry: (-entry[1].current_value, entry[1].id, entry[0]),
    )
    for position, item in remaining:
        gap1 = targets[Spouse.SPOUSE1] - held[Spouse.SPOUSE1]
        gap2 = targets[Spouse.SPOUSE2] - held[Spouse.SPOUSE2]
        spouse = Spouse.SPOUSE1 if gap1 >= gap2 else Spouse.SPOUSE2
        assign(position, item, spouse, pre_assigned=False)

    return allocations


def allocate_items(
    items: Sequence[MaritalEstateItem],
    equity_factor: Decimal,
) -> list[ItemAllocation]:
    """Allocate whole marital items to approximate the target split.

    Assets and debts are allocated separately, each against its own target
    (``total * equity_factor`` for spouse1). Items with ``awarded_to`` set
    keep that spouse. The rest are taken in descending value order (ties
    broken by id, then input position) and each goes to the spouse
    furthest below target, with ties going to spouse1. Ids need not be
    unique.

    Args:
        items: Marital assets and debts
        equity_factor: Spouse1's target share

    Returns:
        One allocation per item, in input order
    """
    # Allocations are tracked by position so items sharing an id stay distinct
    indexed = list(enumerate(items))
    assets = [entry for entry in indexed if entry[1].kind is ItemKind.ASSET]
    debts = [entry for entry in indexed if entry[1].kind is ItemKind.DEBT]

    by_position = _allocate_kind(assets, equity_factor)
    by_position.update(_allocate_kind(debts, equity_factor))
    return [by_position[position] for position, _ in indexed]


def physical_net(allocations: Iterable[ItemAllocation], spouse: Spouse) -> Decimal:
    """Net value of the marital items a spouse physically receives."""
    return sum_money(
        a.net_effect
        for a in allocations
        if a.awarded_to is spouse and a.classification is Classification.MARITAL
    )


def compute_equalization(
    allocations: Iterable[ItemAllocation],
    spouse1_share: Decimal,
) -> Optional[EqualizationPayment]:
    """Cash payment that brings the physical allocation to the target shares.

    The spouse whose items are worth more than their share pays the excess
    to the other spouse. Because both spouses' physical nets sum to the net
    estate, one payment corrects both sides.

    Args:
        allocations: Marital item allocations from allocate_items()
        spouse1_share: Spouse1's exact target share

    Returns:
        EqualizationPayment, or None when the allocation is already exact
    """
    difference = physical_net(allocations, Spouse.SPOUSE1) - spouse1_share
    if difference == 0:
        return None
    if difference > 0:
        return EqualizationPayment(amount=difference, from_spouse=Spouse.SPOUSE1, to_spouse=Spouse.SPOUSE2)
    return EqualizationPayment(amount=-difference, from_spouse=Spouse.SPOUSE2, to_spouse=Spouse.SPOUSE1)


def _separate_allocations(classified: ClassifiedEstate) -> list[ItemAllocation]:
    allocations: list[ItemAllocation] = []
    for spouse in Spouse:
        for item in classified.separate_for(spouse):
            label = "debt" if item.kind is ItemKind.DEBT else "property"
            allocations.append(ItemAllocation(
                item_id=item.id,
                description=item.description,
                kind=item.kind,
                category=item.category,
                value=to_money(item.current_value),
                classification=Classification.SEPARATE,
                awarded_to=spouse,
                reasoning=f"Separate {label} of {spouse.value}, not subject to division",
            ))
    return allocations


def divide(
    classified: ClassifiedEstate,
    regime: Regime,
    equity_factor: Optional[Decimal] = None,
) -> DivisionOutcome:
    """Divide a classified estate under a regime.

    Community property always splits evenly. Equitable distribution uses
    the supplied equity factor, or an even split when none is given.

    A negative net estate (debts exceed assets) is divided the same way;
    the shares are then negative and represent debt each spouse carries.

    Args:
        classified: Output of classify()
        regime: Division regime of the jurisdiction
        equity_factor: Spouse1's target share for equitable distribution

    Returns:
        DivisionOutcome whose shares sum exactly to the net marital estate
    """
    if regime is Regime.COMMUNITY or equity_factor is None:
        factor = EVEN_SPLIT
    else:
        factor = equity_factor

    marital_assets = sum_money(
        to_money(item.current_value) for item in classified.marital if item.kind is ItemKind.ASSET
    )
    marital_debts = sum_money(
        to_money(item.current_value) for item in classified.marital if item.kind is ItemKind.DEBT
    )
    net_estate = marital_assets - marital_debts

    spouse1_share, spouse2_share = split_net_estate(net_estate, factor)
    marital_allocations = allocate_items(classified.marital, factor)
    payment = compute_equalization(marital_allocations, spouse1_share)

    separate_allocations = _separate_allocations(classified)
    separate_values = {
        spouse: sum_money(a.net_effect for a in separate_allocations if a.awarded_to is spouse)
        for spouse in Spouse
    }

    return DivisionOutcome(
        regime=regime,
        equity_factor=factor,
        total_marital_assets_value=marital_assets,
        total_marital_debts_value=marital_debts,
        net_marital_estate_value=net_estate,
        spouse1_share=spouse1_share,
        spouse2_share=spouse2_share,
        equalization_payment=payment,
        spouse1_separate_value=separate_values[Spouse.SPOUSE1],
        spouse2_separate_value=separate_values[Spouse.SPOUSE2],
        allocations=tuple(marital_allocations + separate_allocations),
    )


def describe_payment(payment: Optional[EqualizationPayment]) -> str:
    """One-line summary of an equalization payment for the audit log."""
    if payment is None:
        return "none"
    return f"{format_currency(payment.amount)} from {payment.from_spouse.value} to {payment.to_spouse.value}"
