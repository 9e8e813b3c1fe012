import logging
from functools import lru_cache
from types import MappingProxyType
from typing import List, Optional, Sequence, Tuple

import numpy as np

from app.core.exceptions import ShadeNotFoundError
from app.schemas.foundation import ShadeEntry, ShadeOut, Undertone
from app.utils.color_math import rgb_to_hex

logger = logging.getLogger(__name__)

# MAC Studio Fix Fluid / Pro Longwear reference shades.
# Order matters: distance ties are resolved in favour of the earlier entry.
_CATALOG_ROWS = (
    ("NC15", (235, 200, 170), Undertone.NEUTRAL_COOL),
    ("NC20", (220, 185, 155), Undertone.NEUTRAL_COOL),
    ("NC25", (205, 170, 140), Undertone.NEUTRAL_COOL),
    ("NC30", (190, 155, 125), Undertone.NEUTRAL_COOL),
    ("NC35", (175, 140, 110), Undertone.NEUTRAL_COOL),
    ("NC40", (160, 125, 95), Undertone.NEUTRAL_COOL),
    ("NC42", (150, 115, 85), Undertone.NEUTRAL_COOL),
    ("NC45", (140, 105, 75), Undertone.NEUTRAL_COOL),
    ("NC50", (125, 90, 60), Undertone.NEUTRAL_COOL),

    ("NW15", (240, 205, 175), Undertone.NEUTRAL_WARM),
    ("NW20", (225, 190, 160), Undertone.NEUTRAL_WARM),
    ("NW25", (210, 175, 145), Undertone.NEUTRAL_WARM),
    ("NW30", (195, 160, 130), Undertone.NEUTRAL_WARM),
    ("NW35", (180, 145, 115), Undertone.NEUTRAL_WARM),
    ("NW40", (165, 130, 100), Undertone.NEUTRAL_WARM),
    ("NW43", (155, 120, 90), Undertone.NEUTRAL_WARM),
    ("NW45", (145, 110, 80), Undertone.NEUTRAL_WARM),
    ("NW50", (130, 95, 65), Undertone.NEUTRAL_WARM),

    ("C1", (245, 210, 180), Undertone.COOL),
    ("C2", (230, 195, 165), Undertone.COOL),
    ("C3", (215, 180, 150), Undertone.COOL),
    ("C4", (200, 165, 135), Undertone.COOL),
    ("C5", (185, 150, 120), Undertone.COOL),
    ("C6", (170, 135, 105), Undertone.COOL),
    ("C7", (155, 120, 90), Undertone.COOL),
    ("C8", (140, 105, 75), Undertone.COOL),

    ("W1", (250, 215, 185), Undertone.WARM),
    ("W2", (235, 200, 170), Undertone.WARM),
    ("W3", (220, 185, 155), Undertone.WARM),
    ("W4", (205, 170, 140), Undertone.WARM),
    ("W5", (190, 155, 125), Undertone.WARM),
    ("W6", (175, 140, 110), Undertone.WARM),
    ("W7", (160, 125, 95), Undertone.WARM),
    ("W8", (145, 110, 80), Undertone.WARM),
)

SHADE_CATALOG: Tuple[ShadeEntry, ...] = tuple(
    ShadeEntry(name=name, rgb=rgb, undertone=undertone)
    for name, rgb, undertone in _CATALOG_ROWS
)

_SHADES_BY_NAME = MappingProxyType({shade.name.upper(): shade for shade in SHADE_CATALOG})

if len(_SHADES_BY_NAME) != len(SHADE_CATALOG):
    raise RuntimeError("Shade catalog contains duplicate names.")


def get_catalog() -> Tuple[ShadeEntry, ...]:
    """Returns the full, immutable shade catalog in ranking order."""
    return SHADE_CATALOG


def get_shade(name: str) -> ShadeEntry:
    """Case-insensitive lookup by shade name (e.g. 'nc20')."""
    shade = _SHADES_BY_NAME.get(name.strip().upper())
    if shade is None:
        raise ShadeNotFoundError(name)
    return shade


def list_shades(undertone: Optional[Undertone] = None) -> List[ShadeEntry]:
    """Catalog entries, optionally restricted to one undertone family. Catalog order is kept."""
    if undertone is None:
        return list(SHADE_CATALOG)
    return [shade for shade in SHADE_CATALOG if shade.undertone == undertone]


def to_shade_out(shade: ShadeEntry) -> ShadeOut:
    return ShadeOut(
        name=shade.name,
        rgb=shade.rgb,
        undertone=shade.undertone,
        hex=rgb_to_hex(shade.rgb)
    )


def build_rgb_matrix(shades: Sequence[ShadeEntry]) -> np.ndarray:
    """
    Stacks shade colours into a read-only (N, 3) array for vectorised ranking.
    Row i corresponds to shades[i].
    """
    matrix = np.array([shade.rgb for shade in shades], dtype=np.int64).reshape(-1, 3)
    matrix.setflags(write=False)
    return matrix


@lru_cache(maxsize=1)
def catalog_rgb_matrix() -> np.ndarray:
    """The RGB matrix of SHADE_CATALOG, built once per process."""
    logger.debug(f"Building RGB matrix for {len(SHADE_CATALOG)} catalog shades")
    return build_rgb_matrix(SHADE_CATALOG)
