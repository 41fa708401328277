from pydantic import BaseModel, Field


# --- Signatures ---

class SignatureRequest(BaseModel):
    title: str
    source: str = ""
    shaper: str | None = None
    dimensions: str | None = None
    volume: str | None = None


class DimensionsResponse(BaseModel):
    length_feet: int
    length_inches: float
    width_inches: float | None = None
    thickness_inches: float | None = None
    total_length_inches: float


class SignatureResponse(BaseModel):
    brand: str | None
    model: str
    length_inches: float | None
    source: str
    comparison_key: str
    dimensions: DimensionsResponse | None = None
    volume_liters: float | None = None

    model_config = {"from_attributes": True}


# --- Duplicates ---

class DuplicateMatchResponse(BaseModel):
    product_id: str
    matched_product_id: str
    similarity: float
    brand_match: bool
    model_similarity: float
    length_difference_inches: float | None
    brand1: str | None
    brand2: str | None
    model1: str
    model2: str
    length1: float | None
    length2: float | None
    auto_link: bool = False

    model_config = {"from_attributes": True, "protected_namespaces": ()}


class DetectionSummaryResponse(BaseModel):
    total_products: int
    matches_found: int
    links_created: int
    links_failed: int
    matches_below_auto_link_threshold: int
    by_source: dict[str, int] = Field(default_factory=dict)
    dry_run: bool = False
    matches: list[DuplicateMatchResponse] = Field(default_factory=list)


class LinkRequest(BaseModel):
    product_id_1: str = ""
    product_id_2: str = ""


class LinkedProduct(BaseModel):
    id: str
    name: str


class LinkResponse(BaseModel):
    success: bool
    message: str
    linked_products: list[LinkedProduct] = Field(default_factory=list)


class RelatedListingsResponse(BaseModel):
    product_id: str
    related: list[LinkedProduct] = Field(default_factory=list)


# --- System ---

class ServiceStatus(BaseModel):
    name: str
    status: str  # "ok" / "degraded" / "unavailable"
    detail: str = ""


class HealthResponse(BaseModel):
    status: str
    product_count: int
    link_count: int
    services: list[ServiceStatus] = Field(default_factory=list)
