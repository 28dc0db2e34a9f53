"""核心业务逻辑：勺子账本与能量等级。"""

from .ledger import (
    Activity,
    ActivityValidationError,
    EnergyLevel,
    LedgerSnapshot,
    ResourceLedger,
    parse_cost,
)

__all__ = [
    "Activity",
    "ActivityValidationError",
    "EnergyLevel",
    "LedgerSnapshot",
    "ResourceLedger",
    "parse_cost",
]
