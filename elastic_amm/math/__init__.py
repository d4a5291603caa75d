"""
Math layer for Elastic AMM

온체인 수준 정밀도의 수학 함수들:
- full_math: 256비트 mul_div, 정수 제곱근
- tick_math: Tick ↔ sqrtP 변환
- sqrt_price_math: sqrtP 인코딩
- liquidity_math: 유동성 ↔ 토큰 수량
- swap_math: 스왑 스텝 계산
- reinvestment_math: rToken 발행량
- fee_math: 범위 내 fee growth 및 청구 가능 rToken
"""

from .full_math import (
    mul_div,
    mul_div_floor,
    mul_div_ceiling,
    div_rounding_up,
    sqrt,
)
from .tick_math import (
    get_tick_at_sqrt_ratio,
    get_sqrt_ratio_at_tick,
    get_min_tick,
    get_max_tick,
    get_nearest_spaced_tick,
)
from .sqrt_price_math import (
    encode_price_sqrt,
    sqrt_price_x96_to_price,
)
from .liquidity_math import (
    get_amount0_delta,
    get_amount1_delta,
    calc_required_qty0,
    calc_required_qty1,
)
from .swap_math import (
    SwapStep,
    compute_swap_step,
)
from .reinvestment_math import calc_r_mint_qty
from .fee_math import (
    fee_growth_inside,
    calculate_fees_claimable,
    calculate_fee_growth_delta,
)
