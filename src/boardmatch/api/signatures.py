"""Signature inspection: shows how a listing title is read by the matcher."""

from __future__ import annotations

from fastapi import APIRouter

from ..dimensions import parse_dimension_string, parse_volume_string
from ..matcher import create_comparison_key, extract_product_signature
from ..schemas import DimensionsResponse, SignatureRequest, SignatureResponse

router = APIRouter(prefix="/api", tags=["signatures"])


@router.post("/signature", response_model=SignatureResponse)
def inspect_signature(body: SignatureRequest):
    sig = extract_product_signature(body.title, body.source)

    dims = None
    parsed = parse_dimension_string(body.dimensions or body.title)
    if parsed is not None:
        dims = DimensionsResponse(
            length_feet=parsed.length_feet,
            length_inches=parsed.length_inches,
            width_inches=parsed.width_inches,
            thickness_inches=parsed.thickness_inches,
            total_length_inches=parsed.total_length_inches,
        )

    return SignatureResponse(
        brand=sig.brand,
        model=sig.model,
        length_inches=sig.length_inches,
        source=sig.source,
        comparison_key=create_comparison_key(body.shaper, body.title),
        dimensions=dims,
        volume_liters=parse_volume_string(body.volume),
    )
