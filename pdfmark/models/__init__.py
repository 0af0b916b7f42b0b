
from .watermark import DEFAULT_STYLE, InstructionSet, TextWatermark, WatermarkStyle

__all__ = [
    "DEFAULT_STYLE",
    "InstructionSet",
    "TextWatermark",
    "WatermarkStyle",
]
