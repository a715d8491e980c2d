"""Custom exceptions for the EquiSplit calculation engine.

This module provides a hierarchy of exception classes for consistent error
handling across the property division pipeline. All exceptions inherit from
EquiSplitError, making it easy to catch all engine-specific errors.

Every error is a deterministic function of the calculation input: calling
the engine again with the same input raises the same error. None of them
are retried internally.

Example:
    try:
        result = calculator.calculate(calculation_input)
    except UnknownJurisdictionError as e:
        # Ask the user to pick a supported state
        prompt_for_jurisdiction(e.jurisdiction)
    except EquiSplitError as e:
        # Handle any engine-related error
        logger.error("calculation_failed", error=str(e), details=e.details)
"""

from typing import Any, Optional


class EquiSplitError(Exception):
    """Base exception for all EquiSplit engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise EquiSplitError("Something went wrong", details={"code": 500})
        EquiSplitError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize EquiSplitError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the error can be fixed by correcting the
                input and calling again. Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class CalculationInputError(EquiSplitError):
    """Error raised when an estate item fails domain validation.

    Schema validation happens upstream; this family covers the checks the
    engine itself owns (value sign, ownership consistency).

    Attributes:
        item_id: Identifier of the offending asset or debt (if known).
    """

    def __init__(
        self,
        message: str,
        *,
        item_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.item_id = item_id

        if item_id:
            self.details["item_id"] = item_id


class InvalidItemValueError(CalculationInputError):
    """Error raised when an item has a negative or non-finite value.

    Debts are carried as positive balances, so a negative amount is always
    a data error rather than a liability.

    Example:
        >>> raise InvalidItemValueError(
        ...     "Asset value cannot be negative",
        ...     item_id="house-1",
        ...     value="-10.00",
        ... )
        InvalidItemValueError: Asset value cannot be negative
    """

    def __init__(
        self,
        message: str,
        *,
        item_id: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize InvalidItemValueError.

        Args:
            message: Human-readable error description.
            item_id: Identifier of the offending item.
            value: The rejected value, stringified for the details dict.
            details: Optional dictionary with additional context.
            recoverable: Defaults to True since the user can correct the value.
        """
        super().__init__(message, item_id=item_id, details=details, recoverable=recoverable)
        self.value = value

        if value is not None:
            self.details["value"] = str(value)


class InconsistentOwnershipError(CalculationInputError):
    """Error raised when an item's ownership contradicts its classification.

    A separate-property item belongs to exactly one spouse, so it can never
    be owned jointly.
    """

    def __init__(
        self,
        message: str,
        *,
        item_id: Optional[str] = None,
        owned_by: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message, item_id=item_id, details=details, recoverable=recoverable)
        self.owned_by = owned_by

        if owned_by:
            self.details["owned_by"] = owned_by


class UnknownJurisdictionError(EquiSplitError):
    """Error raised when a jurisdiction code is not in the rule table.

    The regime decides whether the estate is split evenly or by weighted
    factors, so an unknown code is never mapped to a default regime.

    Attributes:
        jurisdiction: The code that failed the lookup.
        table_version: Version of the jurisdiction table that was consulted.

    Example:
        >>> raise UnknownJurisdictionError(
        ...     "Unknown jurisdiction: ZZ",
        ...     jurisdiction="ZZ",
        ...     table_version="2025.1",
        ... )
        UnknownJurisdictionError: Unknown jurisdiction: ZZ
    """

    def __init__(
        self,
        message: str,
        *,
        jurisdiction: Optional[str] = None,
        table_version: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.jurisdiction = jurisdiction
        self.table_version = table_version

        if jurisdiction is not None:
            self.details["jurisdiction"] = jurisdiction
        if table_version:
            self.details["table_version"] = table_version


class ConfigurationError(EquiSplitError):
    """Error raised when engine configuration is invalid.

    Raised for policy settings that cannot produce a sensible division,
    such as equity bounds that exclude an even split.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "EquiSplitError",
    "CalculationInputError",
    "InvalidItemValueError",
    "InconsistentOwnershipError",
    "UnknownJurisdictionError",
    "ConfigurationError",
]
