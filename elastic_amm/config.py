"""
Configuration settings for Elastic AMM pools

Loads environment variables and provides pool configuration defaults.
Per-pool parameters are resolved once into an immutable PoolConfig.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .constants import FEE_TIERS, FEE_UNITS, MIN_LIQUIDITY, TICK_DISTANCES
from .errors import PoolValidationError

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Pool defaults"""

    # Anti-snipe vesting period in seconds (0 disables fee locking)
    VESTING_PERIOD: int = int(os.getenv("ELASTIC_VESTING_PERIOD", 0))

    # Reinvestment liquidity locked forever when a pool is unlocked
    MIN_LIQUIDITY: int = int(os.getenv("ELASTIC_MIN_LIQUIDITY", MIN_LIQUIDITY))

    # Fee tier used when none is given (fee units, 300 = 0.3%)
    DEFAULT_FEE_UNITS: int = int(os.getenv("ELASTIC_DEFAULT_FEE_UNITS", 300))

    def get_tick_distance(self, fee_units: int) -> int:
        """Get tick distance for a fee tier"""
        if fee_units not in TICK_DISTANCES:
            raise PoolValidationError(
                f"Unsupported fee tier: {fee_units} (supported: {sorted(FEE_TIERS)})"
            )
        return TICK_DISTANCES[fee_units]


# Create global settings instance
settings = Settings()


@dataclass(frozen=True)
class PoolConfig:
    """Immutable per-pool parameters"""
    swap_fee_units: int
    tick_distance: int
    vesting_period: int = 0
    min_liquidity: int = MIN_LIQUIDITY

    def __post_init__(self):
        if not 0 <= self.swap_fee_units < FEE_UNITS:
            raise PoolValidationError(f"Invalid swap fee: {self.swap_fee_units}")
        if self.tick_distance <= 0:
            raise PoolValidationError(f"Invalid tick distance: {self.tick_distance}")
        if self.vesting_period < 0:
            raise PoolValidationError(f"Invalid vesting period: {self.vesting_period}")
        if self.min_liquidity < 0:
            raise PoolValidationError(f"Invalid min liquidity: {self.min_liquidity}")

    @classmethod
    def for_fee_tier(
        cls,
        fee_units: Optional[int] = None,
        vesting_period: Optional[int] = None,
        min_liquidity: Optional[int] = None
    ) -> "PoolConfig":
        """Resolve a config from the fee-tier table and settings defaults"""
        if fee_units is None:
            fee_units = settings.DEFAULT_FEE_UNITS
        return cls(
            swap_fee_units=fee_units,
            tick_distance=settings.get_tick_distance(fee_units),
            vesting_period=settings.VESTING_PERIOD if vesting_period is None else vesting_period,
            min_liquidity=settings.MIN_LIQUIDITY if min_liquidity is None else min_liquidity,
        )
