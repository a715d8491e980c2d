"""Marital property regimes for the 50 US states and DC.

This module contains the static jurisdiction table that decides whether a
marital estate is split under community property (strict 50/50) or
equitable distribution (factor-weighted). Equitable states may also adjust
the weight of individual equity factors where their statutes exclude one.

Sources:
- Community property states: Arizona, California, Idaho, Louisiana, Nevada,
  New Mexico, Texas, Washington, Wisconsin
- Statutory exclusions of marital misconduct: 23 Pa.C.S. § 3502(a),
  750 ILCS 5/503(d), Minn. Stat. § 518.58, C.R.S. § 14-10-113

Updated: 2025-Q1
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Union

from .exceptions import UnknownJurisdictionError
from .models import Regime


# =============================================================================
# VERSION TRACKING
# =============================================================================

JURISDICTION_TABLE_VERSION = "2025.1"


def get_jurisdiction_table_version() -> str:
    """Return current jurisdiction table version."""
    return JURISDICTION_TABLE_VERSION


# =============================================================================
# TYPES
# =============================================================================

class USState(str, Enum):
    """Two-letter codes of the supported jurisdictions."""
    AL = "AL"
    AK = "AK"
    AZ = "AZ"
    AR = "AR"
    CA = "CA"
    CO = "CO"
    CT = "CT"
    DE = "DE"
    FL = "FL"
    GA = "GA"
    HI = "HI"
    ID = "ID"
    IL = "IL"
    IN = "IN"
    IA = "IA"
    KS = "KS"
    KY = "KY"
    LA = "LA"
    ME = "ME"
    MD = "MD"
    MA = "MA"
    MI = "MI"
    MN = "MN"
    MS = "MS"
    MO = "MO"
    MT = "MT"
    NE = "NE"
    NV = "NV"
    NH = "NH"
    NJ = "NJ"
    NM = "NM"
    NY = "NY"
    NC = "NC"
    ND = "ND"
    OH = "OH"
    OK = "OK"
    OR = "OR"
    PA = "PA"
    RI = "RI"
    SC = "SC"
    SD = "SD"
    TN = "TN"
    TX = "TX"
    UT = "UT"
    VT = "VT"
    VA = "VA"
    WA = "WA"
    WV = "WV"
    WI = "WI"
    WY = "WY"
    DC = "DC"


# Factor key -> weight. Keys missing from a jurisdiction's mapping use the
# default weight of the equity factor rule.
FactorWeights = Mapping[str, Decimal]

JurisdictionCode = Union[USState, str]

_NO_OVERRIDES: FactorWeights = MappingProxyType({})


@dataclass(frozen=True)
class JurisdictionRule:
    """How one jurisdiction divides a marital estate."""
    code: str
    name: str
    regime: Regime
    factor_weights: FactorWeights = field(default_factory=lambda: _NO_OVERRIDES)
    special_rules: tuple[str, ...] = ()
    quasi_community_property: bool = False

    @property
    def is_community(self) -> bool:
        return self.regime is Regime.COMMUNITY


def normalize_code(code: JurisdictionCode) -> str:
    """Upper-case, whitespace-stripped form of a jurisdiction code."""
    if isinstance(code, USState):
        return code.value
    return str(code).strip().upper()


class JurisdictionTable:
    """Read-only lookup from jurisdiction code to division rule.

    A table is built once and never mutated, so one instance can be shared
    across threads. Tests may build their own tables and pass them to the
    calculator instead of touching the default.
    """

    def __init__(self, rules: Iterable[JurisdictionRule], version: str = JURISDICTION_TABLE_VERSION):
        by_code: dict[str, JurisdictionRule] = {}
        for rule in rules:
            code = normalize_code(rule.code)
            if code in by_code:
                raise ValueError(f"Duplicate jurisdiction in table: {code}")
            by_code[code] = rule
        self._rules: Mapping[str, JurisdictionRule] = MappingProxyType(by_code)
        self.version = version

    def __contains__(self, code: object) -> bool:
        if not isinstance(code, str):
            return False
        return normalize_code(code) in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def get_rule(self, code: JurisdictionCode) -> JurisdictionRule:
        """Look up the rule for a jurisdiction.

        Args:
            code: Two-letter jurisdiction code (case-insensitive)

        Returns:
            The jurisdiction's division rule

        Raises:
            UnknownJurisdictionError: If the code is not in the table
        """
        normalized = normalize_code(code)
        rule = self._rules.get(normalized)
        if rule is None:
            raise UnknownJurisdictionError(
                f"Unknown jurisdiction: {normalized or code!r}",
                jurisdiction=normalized,
                table_version=self.version,
            )
        return rule

    def select_regime(self, code: JurisdictionCode) -> Regime:
        """Return the division regime of a jurisdiction."""
        return self.get_rule(code).regime

    def codes_by_regime(self, regime: Regime) -> list[str]:
        """All jurisdiction codes using a regime, in table order."""
        return [code for code, rule in self._rules.items() if rule.regime is regime]


# =============================================================================
# DEFAULT TABLE
# =============================================================================

_MISCONDUCT_EXCLUDED: FactorWeights = MappingProxyType({"marital_misconduct": Decimal("0")})


def _community(code: str, name: str, *special_rules: str, quasi_community: bool = False) -> JurisdictionRule:
    return JurisdictionRule(
        code=code,
        name=name,
        regime=Regime.COMMUNITY,
        special_rules=special_rules,
        quasi_community_property=quasi_community,
    )


def _equitable(code: str, name: str, *special_rules: str, factor_weights: FactorWeights = _NO_OVERRIDES) -> JurisdictionRule:
    return JurisdictionRule(
        code=code,
        name=name,
        regime=Regime.EQUITABLE,
        factor_weights=factor_weights,
        special_rules=special_rules,
    )


_DEFAULT_RULES = (
    _equitable("AL", "Alabama"),
    _equitable("AK", "Alaska"),
    _community(
        "AZ", "Arizona",
        "Quasi-community property rules apply to out-of-state assets",
        quasi_community=True,
    ),
    _equitable("AR", "Arkansas"),
    _community(
        "CA", "California",
        "Income from separate property remains separate",
        "Putative spouse doctrine applies",
        "Strict 50/50 division unless agreement",
        quasi_community=True,
    ),
    _equitable(
        "CO", "Colorado",
        "Marital property is divided without regard to marital misconduct",
        factor_weights=_MISCONDUCT_EXCLUDED,
    ),
    _equitable("CT", "Connecticut"),
    _equitable("DE", "Delaware"),
    _equitable("FL", "Florida"),
    _equitable("GA", "Georgia"),
    _equitable("HI", "Hawaii"),
    _community(
        "ID", "Idaho",
        "Community property with right of survivorship available",
        quasi_community=True,
    ),
    _equitable(
        "IL", "Illinois",
        "Marital property is divided without regard to marital misconduct",
        factor_weights=_MISCONDUCT_EXCLUDED,
    ),
    _equitable("IN", "Indiana"),
    _equitable("IA", "Iowa"),
    _equitable("KS", "Kansas"),
    _equitable("KY", "Kentucky"),
    _community(
        "LA", "Louisiana",
        "Civil law system with unique property concepts",
        "Separate property includes gifts and inheritances",
    ),
    _equitable("ME", "Maine"),
    _equitable("MD", "Maryland"),
    _equitable("MA", "Massachusetts"),
    _equitable("MI", "Michigan"),
    _equitable(
        "MN", "Minnesota",
        "Marital property is divided without regard to marital misconduct",
        factor_weights=_MISCONDUCT_EXCLUDED,
    ),
    _equitable("MS", "Mississippi"),
    _equitable("MO", "Missouri"),
    _equitable("MT", "Montana"),
    _equitable("NE", "Nebraska"),
    _community(
        "NV", "Nevada",
        "Allows for unequal division in cases of economic fault",
    ),
    _equitable("NH", "New Hampshire"),
    _equitable("NJ", "New Jersey"),
    _community(
        "NM", "New Mexico",
        "Judicial discretion allowed for unequal division",
    ),
    _equitable("NY", "New York"),
    _equitable("NC", "North Carolina"),
    _equitable("ND", "North Dakota"),
    _equitable("OH", "Ohio"),
    _equitable("OK", "Oklahoma"),
    _equitable("OR", "Oregon"),
    _equitable(
        "PA", "Pennsylvania",
        "Marital property is divided without regard to marital misconduct",
        "Court weighs the length of the marriage, prior marriages, age, health, "
        "income, contributions to education and dissipation of assets",
        factor_weights=_MISCONDUCT_EXCLUDED,
    ),
    _equitable("RI", "Rhode Island"),
    _equitable("SC", "South Carolina"),
    _equitable("SD", "South Dakota"),
    _equitable("TN", "Tennessee"),
    _community(
        "TX", "Texas",
        "Income from separate property is community property",
        "Inception of title rule for reimbursement claims",
    ),
    _equitable("UT", "Utah"),
    _equitable("VT", "Vermont"),
    _equitable("VA", "Virginia"),
    _community(
        "WA", "Washington",
        "Allows for unequal division based on economic misconduct",
        quasi_community=True,
    ),
    _equitable("WV", "West Virginia"),
    _community(
        "WI", "Wisconsin",
        "Marital Property Act with deferred community property system",
    ),
    _equitable("WY", "Wyoming"),
    _equitable("DC", "District of Columbia"),
)

DEFAULT_JURISDICTION_TABLE = JurisdictionTable(_DEFAULT_RULES)

COMMUNITY_PROPERTY_STATES = tuple(DEFAULT_JURISDICTION_TABLE.codes_by_regime(Regime.COMMUNITY))


def select_regime(jurisdiction: JurisdictionCode, table: Optional[JurisdictionTable] = None) -> Regime:
    """Map a jurisdiction code to its division regime.

    Args:
        jurisdiction: Two-letter jurisdiction code
        table: Jurisdiction table to consult (default: built-in table)

    Returns:
        Regime.COMMUNITY or Regime.EQUITABLE

    Raises:
        UnknownJurisdictionError: If the code is not in the table
    """
    if table is None:
        table = DEFAULT_JURISDICTION_TABLE
    return table.select_regime(jurisdiction)


def is_community_property_state(jurisdiction: JurisdictionCode) -> bool:
    """Check whether a jurisdiction uses community property."""
    return select_regime(jurisdiction) is Regime.COMMUNITY
