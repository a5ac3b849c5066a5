"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Invalid argument (caller can correct and resend)
  2xxx: Wager lookup
  3xxx: Purchase business rules
  9xxx: System / persistence
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Invalid argument ---

class InvalidArgumentError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 400)


class InvalidWagerIdError(InvalidArgumentError):
    def __init__(self) -> None:
        super().__init__(1001, "wager_id is required and must be greater than 0")


class InvalidBuyingPriceError(InvalidArgumentError):
    def __init__(self, detail: str = "must be greater than 0") -> None:
        super().__init__(1002, f"buying_price is invalid: {detail}")


class InvalidTotalWagerValueError(InvalidArgumentError):
    def __init__(self, detail: str = "is required and must be greater than 0") -> None:
        super().__init__(1003, f"total_wager_value {detail}")


class InvalidOddsError(InvalidArgumentError):
    def __init__(self, detail: str = "is required and must be greater than 0") -> None:
        super().__init__(1004, f"odds {detail}")


class InvalidSellingPercentageError(InvalidArgumentError):
    def __init__(self) -> None:
        super().__init__(1005, "selling_percentage must be between 1 and 100")


class InvalidSellingPriceError(InvalidArgumentError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        if reason == "scale":
            message = "selling_price must have at most 2 decimal places"
        elif reason == "too high":
            message = "selling_price must be at most 9999999999.99"
        else:
            message = (
                "selling_price must be at least "
                "total_wager_value * selling_percentage / 100"
            )
        super().__init__(1006, message)


class InvalidPaginationError(InvalidArgumentError):
    def __init__(self, detail: str) -> None:
        super().__init__(1007, f"Invalid pagination: {detail}")


# --- 2xxx: Wager ---

class WagerNotFoundError(AppError):
    def __init__(self, wager_id: int) -> None:
        super().__init__(2001, f"Wager not found: {wager_id}", 404)


# --- 3xxx: Purchase ---

class PriceExceededError(AppError):
    def __init__(self, buying_price: object, current_selling_price: object) -> None:
        super().__init__(
            3001,
            f"buying_price {buying_price} exceeds current_selling_price {current_selling_price}",
            422,
        )


class SoldOutError(AppError):
    def __init__(self, wager_id: int, selling_percentage: int) -> None:
        super().__init__(
            3002,
            f"Wager {wager_id} has no resale inventory left "
            f"(selling_percentage {selling_percentage}%)",
            422,
        )


# --- 9xxx: System ---

class PersistenceError(AppError):
    def __init__(self, detail: str = "Storage unavailable", code: int = 9001) -> None:
        super().__init__(code, detail, 503)


class LockTimeoutError(PersistenceError):
    def __init__(self, wager_id: int) -> None:
        super().__init__(f"Timed out waiting for lock on wager {wager_id}", code=9002)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9999, detail, 500)
