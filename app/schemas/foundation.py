"""
Foundation Matching Schemas.

Wire and domain models for the shade matcher. Responses are serialised in
camelCase (bestMatch, alternativeMatches, userUndertone) to stay compatible
with the web client.
"""
import math
from enum import Enum
from typing import Annotated, Any, List, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


Channel = Annotated[int, Field(ge=0, le=255)]
RGBTuple = Tuple[Channel, Channel, Channel]


class Undertone(str, Enum):
    """Coarse warm/cool/neutral label shared by shades and users."""
    NEUTRAL_COOL = "neutral-cool"
    NEUTRAL_WARM = "neutral-warm"
    COOL = "cool"
    WARM = "warm"


class ShadeEntry(BaseModel):
    """Immutable catalog record."""
    model_config = ConfigDict(frozen=True)

    name: str
    rgb: RGBTuple
    undertone: Undertone


class ShadeOut(ShadeEntry):
    """Catalog entry as listed to clients, with a hex swatch."""
    hex: str


class ScoredShade(BaseModel):
    """A catalog entry paired with its distance to one query."""
    model_config = ConfigDict(frozen=True)

    shade: ShadeEntry
    distance: float = Field(ge=0)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BestMatch(CamelModel):
    name: str
    rgb: RGBTuple
    undertone: Undertone
    confidence: int = Field(ge=0, le=100)


class AlternativeMatch(CamelModel):
    name: str
    rgb: RGBTuple
    undertone: Undertone
    distance: int = Field(ge=0)


class MatchResult(CamelModel):
    best_match: BestMatch
    alternative_matches: List[AlternativeMatch]
    user_undertone: Undertone
    recommendations: List[str]


class FoundationMatchRequest(BaseModel):
    """
    Inbound body for POST /foundation-match.
    Channels may be any finite number; clamping and rounding happen in the matcher.
    """
    rgb: Tuple[float, float, float]

    @field_validator("rgb", mode="before")
    @classmethod
    def validate_channels(cls, value: Any) -> Tuple[float, float, float]:
        if not isinstance(value, (list, tuple)) or len(value) != 3:
            raise ValueError("rgb must be a list of exactly three numbers")

        channels = []
        for channel in value:
            # bool is an int subclass, but True/False are not colour values
            if isinstance(channel, bool) or not isinstance(channel, (int, float)):
                raise ValueError(f"rgb channel {channel!r} is not a number")
            try:
                as_float = float(channel)
            except OverflowError as e:
                raise ValueError(f"rgb channel {channel!r} is out of range") from e
            if not math.isfinite(as_float):
                raise ValueError(f"rgb channel {channel!r} is not finite")
            channels.append(as_float)
        return tuple(channels)


class PixelSample(BaseModel):
    """Colour read from an uploaded image at (x, y)."""
    x: int
    y: int
    rgb: RGBTuple
    hex: str


class ErrorPayload(BaseModel):
    error: str
