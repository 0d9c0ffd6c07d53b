"""
Centralized default values for indicator, fusion and risk parameters.

This is the SINGLE SOURCE OF TRUTH for parameter defaults.
All modules should import from here to ensure consistency.
"""

# RSI (Relative Strength Index, Wilder smoothing)
RSI_PERIOD = 14

# EMA (Exponential Moving Average)
EMA_PERIOD = 20

# MACD (Moving Average Convergence Divergence)
MACD_SHORT = 12
MACD_LONG = 26
MACD_SIGNAL = 9

# Bollinger Bands
BOLLINGER_PERIOD = 20
BOLLINGER_MULTIPLIER = 2.0

# ADX (Average Directional Index)
ADX_PERIOD = 14

# Ichimoku Kinko Hyo
ICHIMOKU_TENKAN = 9
ICHIMOKU_KIJUN = 26
ICHIMOKU_SENKOU_B = 52
ICHIMOKU_CHIKOU_LAG = 26

# Volume / momentum oscillators
MFI_PERIOD = 14
MOMENTUM_PERIOD = 10
STOCH_RSI_PERIOD = 14

# Fusion thresholds (ThresholdConfig seed values)
RSI_THRESHOLD_BUY = 30.0
RSI_THRESHOLD_SELL = 70.0
MACD_THRESHOLD_BUY = 0.0
MACD_THRESHOLD_SELL = 0.0

# Predictive score cut-offs: score > BUY -> Buy, score < SELL -> Sell
SCORE_BUY_THRESHOLD = 0.7
SCORE_SELL_THRESHOLD = 0.3

# Parameter tuner: success rate above which a threshold is nudged
TUNER_SUCCESS_THRESHOLD = 0.6
TUNER_NEUTRAL_RATE = 0.5  # Missing statistics count as neutral
TUNER_RSI_STEP = 1.0
TUNER_BOLLINGER_STEP = 0.1
TUNER_RSI_BUY_FLOOR = 20.0
TUNER_RSI_SELL_CEILING = 80.0
TUNER_BOLLINGER_FLOOR = 1.0

# Risk management (fixed-fractional sizing)
ACCOUNT_BALANCE = 10000.0
RISK_PER_TRADE = 0.01  # 1% of equity risked per trade
RISK_REWARD_RATIO = 2.0
STOP_LOSS_PCT = 0.02  # Default stop distance as fraction of entry price
