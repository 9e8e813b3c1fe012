import logging
from typing import Any, List, Optional, Sequence

import numpy as np
from pydantic import ValidationError

from app.core.exceptions import InvalidRGBError
from app.schemas.foundation import (
    AlternativeMatch,
    BestMatch,
    FoundationMatchRequest,
    MatchResult,
    ScoredShade,
    ShadeEntry,
    Undertone,
)
from app.services.catalog_service import SHADE_CATALOG, build_rgb_matrix, catalog_rgb_matrix
from app.utils.color_math import (
    RGB,
    classify_undertone,
    normalize_rgb,
    round_half_up,
    weighted_distances,
)

logger = logging.getLogger("ShadeMatcher")

# Empirical ceiling for skin-tone distances; not derived from the catalog.
CONFIDENCE_CEILING = 200
ALTERNATIVE_COUNT = 3
LOW_CONFIDENCE_THRESHOLD = 70

NATURAL_LIGHT_TIP = "Consider trying the shade in natural lighting before purchasing"
JAWLINE_TIP = "For best results, test the foundation on your jawline in natural daylight"
ATTRIBUTION = (
    "This project is based on MAC Studio Fix Fluid or Pro Longwear formulations shades. "
    "https://www.maccosmetics.in/products/face/foundations"
)


def undertone_mismatch_tip(user_undertone: Undertone, shade_undertone: Undertone) -> str:
    return (
        f"Your skin appears to have {user_undertone.value} undertones, but we matched you with a "
        f"{shade_undertone.value} shade. You might also want to try shades from the "
        f"{user_undertone.value} range."
    )


class ShadeMatcher:
    """
    Foundation Shade Matcher.

    Ranks a fixed shade catalog against one sampled skin colour using a
    weighted RGB distance, labels the user's undertone, and derives a
    confidence score plus short advice for the result page.

    Stateless: the catalog and its RGB matrix are read-only, so a single
    instance can serve concurrent requests.
    """

    def __init__(self, catalog: Optional[Sequence[ShadeEntry]] = None):
        if catalog is None:
            self.catalog = SHADE_CATALOG
            self._rgb_matrix = catalog_rgb_matrix()
        else:
            self.catalog = tuple(catalog)
            self._rgb_matrix = build_rgb_matrix(self.catalog)

        if not self.catalog:
            raise ValueError("ShadeMatcher requires at least one catalog shade.")

    @staticmethod
    def parse_rgb(rgb: Any) -> RGB:
        """
        Validates a raw RGB value and returns the clamped, rounded query.
        Raises InvalidRGBError for anything that is not three finite numbers.
        """
        return ShadeMatcher.parse_request({"rgb": rgb})

    @staticmethod
    def parse_request(payload: Any) -> RGB:
        """Validates a request body of the form {"rgb": [r, g, b]}."""
        try:
            request = FoundationMatchRequest.model_validate(payload)
        except ValidationError as e:
            logger.debug(f"Rejected RGB payload {payload!r}: {e.error_count()} error(s)")
            raise InvalidRGBError(str(e)) from e
        return normalize_rgb(request.rgb)

    def rank(self, query: RGB) -> List[ScoredShade]:
        """
        Scores every catalog shade against the query, closest first.
        The sort is stable, so equal distances keep catalog order.
        """
        distances = weighted_distances(query, self._rgb_matrix)
        order = np.argsort(distances, kind="stable")
        return [
            ScoredShade(shade=self.catalog[i], distance=float(distances[i]))
            for i in order
        ]

    @staticmethod
    def confidence_for(distance: float) -> int:
        """Maps a best-match distance onto a 0-100 confidence percentage."""
        raw = round_half_up((1 - distance / CONFIDENCE_CEILING) * 100)
        return max(0, min(100, raw))

    @staticmethod
    def build_recommendations(
        confidence: int,
        user_undertone: Undertone,
        shade_undertone: Undertone,
    ) -> List[str]:
        recommendations = []

        if confidence < LOW_CONFIDENCE_THRESHOLD:
            recommendations.append(NATURAL_LIGHT_TIP)

        if user_undertone != shade_undertone:
            recommendations.append(undertone_mismatch_tip(user_undertone, shade_undertone))

        recommendations.append(JAWLINE_TIP)
        recommendations.append(ATTRIBUTION)
        return recommendations

    def match(self, rgb: Any) -> MatchResult:
        """
        Main entry point for shade matching.
        Accepts a raw RGB triple; out-of-range channels are clamped.
        """
        query = self.parse_rgb(rgb)
        return self._match_query(query)

    def match_request(self, payload: Any) -> MatchResult:
        """Same as match(), for a JSON body {"rgb": [r, g, b]}."""
        query = self.parse_request(payload)
        return self._match_query(query)

    def _match_query(self, query: RGB) -> MatchResult:
        ranked = self.rank(query)
        best = ranked[0]
        alternatives = ranked[1 : 1 + ALTERNATIVE_COUNT]

        user_undertone = classify_undertone(query)
        confidence = self.confidence_for(best.distance)

        logger.debug(
            f"Shade Match: query={query} best={best.shade.name} "
            f"d={best.distance:.2f} confidence={confidence} undertone={user_undertone.value}"
        )

        return MatchResult(
            best_match=BestMatch(
                name=best.shade.name,
                rgb=best.shade.rgb,
                undertone=best.shade.undertone,
                confidence=confidence
            ),
            alternative_matches=[
                AlternativeMatch(
                    name=scored.shade.name,
                    rgb=scored.shade.rgb,
                    undertone=scored.shade.undertone,
                    distance=round_half_up(scored.distance)
                )
                for scored in alternatives
            ],
            user_undertone=user_undertone,
            recommendations=self.build_recommendations(
                confidence, user_undertone, best.shade.undertone
            )
        )


# Singleton
shade_matcher = ShadeMatcher()
