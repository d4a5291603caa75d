"""
Elastic AMM 상수 정의

온체인 수준 정밀도를 위한 상수들:
- Q96: sqrt price 및 fee growth 인코딩에 사용 (2^96)
- FEE_UNITS: 수수료 단위 (100000 = 100%)
- TICK_DISTANCES: 각 수수료 티어별 틱 간격 (tick distance)
- MIN_LIQUIDITY: 풀 unlock 시 영구 잠금되는 reinvestment 유동성
"""

from typing import Dict

# Fixed-point 인코딩 상수
RES_96: int = 96
Q96: int = 2 ** RES_96

# 수수료 단위 (fee units)
# 300 = 0.3%, 2000 = 2%
FEE_UNITS: int = 100000
TWO_FEE_UNITS: int = 2 * FEE_UNITS

# 수수료 티어 (fee units)
FEE_TIERS: Dict[int, str] = {
    20: "0.02%",
    100: "0.1%",
    250: "0.25%",
    300: "0.3%",
    2000: "2%",
    5000: "5%",
}

# 각 수수료 티어별 틱 간격
TICK_DISTANCES: Dict[int, int] = {
    20: 2,
    100: 10,
    250: 25,
    300: 60,
    2000: 100,
    5000: 100,
}

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# TickMath 경계 sqrtP
MIN_SQRT_RATIO: int = 4295128739
MAX_SQRT_RATIO: int = 1461446703485210103287273052203988822378723970342

# 풀 unlock 시 잠기는 최소 reinvestment 유동성
MIN_LIQUIDITY: int = 100000

# 스왑 1스텝당 최대 틱 이동 거리 (reach 근사식 정확도 유지)
MAX_TICK_DISTANCE: int = 480

# 틱 힌트에서 앞으로 탐색할 수 있는 최대 초기화 틱 수
MAX_TICK_TRAVEL: int = 10

# 정수 폭
UINT256_MAX: int = 2 ** 256 - 1
UINT128_MAX: int = 2 ** 128 - 1
