# -*- coding: utf-8 -*-
from typing import Dict, List

# Indicator Categories
Category: Dict[str, List[str]] = {
    "momentum": ["momentum", "roc"],
    "overlap": [
        "ema", "lsma", "ma_ribbon", "mcginley_dynamic", "rma", "sma", "vwma", "wma",
    ],
    "trend": ["parabolic_sar", "supertrend", "zigzag"],
    "volatility": ["atr", "bb"],
}

# Bar fields a Series leaf can read directly
BAR_FIELDS = ("time", "open", "high", "low", "close", "volume")

# Column aliases accepted when ingesting a DataFrame or a bar mapping
COLUMN_ALIASES: Dict[str, str] = {
    "timestamp": "time",
    "date": "time",
    "datetime": "time",
    "o": "open",
    "h": "high",
    "l": "low",
    "c": "close",
    "v": "volume",
}
