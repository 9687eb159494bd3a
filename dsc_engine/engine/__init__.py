"""Collateral accounting, health factor and liquidation engine."""
from .collateral_ledger import CollateralLedger
from .debt_ledger import DebtLedger
from .engine import DSCEngine
from .health import HealthFactorEvaluator, calculate_health_factor
from .transaction import ReentrancyGuard, Transaction

__all__ = [
    "CollateralLedger",
    "DSCEngine",
    "DebtLedger",
    "HealthFactorEvaluator",
    "ReentrancyGuard",
    "Transaction",
    "calculate_health_factor",
]
