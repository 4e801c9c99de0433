"""Indicator names as they appear in the indicator records."""

RSI = "RSI_14"
MACD = "MACD_12_26"
MACD_SIGNAL = "MACD_SIGNAL_9"
BB_UPPER = "BB_UPPER_20"
BB_MIDDLE = "BB_MIDDLE_20"
BB_LOWER = "BB_LOWER_20"
SMA_FAST = "SMA_20"
SMA_SLOW = "SMA_50"
ADX = "ADX_14"
STOCH_K = "STOCH_K_14"
STOCH_D = "STOCH_D_3"
WILLR = "WILLR_14"
CCI = "CCI_20"
MFI = "MFI_14"
