from typing import Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field

InstructionSet = Mapping[int, str]


class WatermarkStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    diagonal: bool = Field(True, description="Rotate the stamp from lower-left to upper-right.")
    opacity: float = Field(0.3, gt=0, le=1, description="Opacity between 0 and 1.")
    color: Tuple[float, float, float] = Field(
        (0.5, 0.5, 0.5), description="RGB gray used for fill and stroke."
    )
    font_name: str = Field("Helvetica", description="Standard PDF font name.")
    font_size: int = Field(48, gt=0, description="Font size in points.")
    on_top: bool = Field(False, description="Draw above the page content instead of beneath it.")


DEFAULT_STYLE = WatermarkStyle()


class TextWatermark(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1, description="Stamp text.")
    style: WatermarkStyle = Field(default=DEFAULT_STYLE)
