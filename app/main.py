from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException

from app.config import ReportSettings
from app.engine import build_product_quantity_report, build_seller_revenue_report, generate_reports
from app.errors import ReportError
from app.files import load_reference_index


def get_settings() -> ReportSettings:
    return ReportSettings.from_env()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Seed fixture files on first start so the service is immediately usable
    settings = get_settings()
    if not settings.sellers_path.exists():
        from scripts.seed_data import seed
        seed(settings)
    yield


app = FastAPI(
    title="Seller Sales Reports",
    version="1.0.0",
    description="Revenue-per-seller and quantity-per-product reports over delimited sales files",
    lifespan=lifespan,
)


def _index(settings: ReportSettings):
    try:
        return load_reference_index(settings)
    except ReportError as exc:
        raise HTTPException(404, str(exc))


# ── Reference data ───────────────────────────────────────────────────────────

@app.get("/api/v1/sellers", summary="List all sellers")
def list_sellers(settings: ReportSettings = Depends(get_settings)):
    index = _index(settings)
    return {"sellers": [
        {**s.model_dump(), "full_name": s.full_name} for s in index.list_sellers()
    ]}


@app.get("/api/v1/products", summary="List all products")
def list_products(settings: ReportSettings = Depends(get_settings)):
    return {"products": [p.model_dump() for p in _index(settings).list_products()]}


@app.get("/api/v1/products/{product_id}", summary="Get product details")
def get_product(product_id: str, settings: ReportSettings = Depends(get_settings)):
    product = _index(settings).get_product(product_id)
    if not product:
        raise HTTPException(404, f"Product '{product_id}' not found")
    return product.model_dump()


# ── Reports ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/reports/sellers", summary="Revenue per seller, highest first")
def seller_report(settings: ReportSettings = Depends(get_settings)):
    try:
        rows = build_seller_revenue_report(settings)
    except ReportError as exc:
        raise HTTPException(404, str(exc))
    return {"rows": [r.model_dump() for r in rows]}


@app.get("/api/v1/reports/products", summary="Units sold per product, highest first")
def product_report(settings: ReportSettings = Depends(get_settings)):
    try:
        rows = build_product_quantity_report(settings)
    except ReportError as exc:
        raise HTTPException(404, str(exc))
    return {"rows": [r.model_dump() for r in rows]}


@app.post("/api/v1/reports", summary="Write both report files")
def write_reports(settings: ReportSettings = Depends(get_settings)):
    status = generate_reports(settings)
    return {
        "status": "ok" if all(status.values()) else "error",
        "reports": status,
    }


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Regenerate fixture files")
def reseed(settings: ReportSettings = Depends(get_settings)):
    from scripts.seed_data import seed
    counts = seed(settings)
    return {"status": "seeded", **counts}
