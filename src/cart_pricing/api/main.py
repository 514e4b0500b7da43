import json

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Any, List, Optional

from cart_pricing import __version__
from cart_pricing.engine.errors import MetadataParseError, NumericParseError
from cart_pricing.engine.parsing import parse_amount
from cart_pricing.engine.schedule import price_schedule
from cart_pricing.api.state import engine

app = FastAPI(
    title="Cart Pricing API",
    description="Quantity-break price overrides for cart lines",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Upper bound on rows a single /preview call may build
MAX_PREVIEW_QUANTITIES = 10000


class RunInput(BaseModel):
    # Host payloads are loosely shaped; the engine validates line by line
    cart: Any = None


class PreviewRequest(BaseModel):
    metafield: str
    surcharge: Optional[str] = None
    quantities: Optional[List[int]] = Field(default=None, max_length=MAX_PREVIEW_QUANTITIES)
    max_quantity: int = Field(default=100, ge=1, le=MAX_PREVIEW_QUANTITIES)


@app.get("/")
async def root():
    return {"status": "online", "message": "Cart Pricing API Active"}


@app.post("/run")
async def run_cart(req: RunInput):
    return engine.run(req.model_dump())


@app.post("/explain")
async def explain_cart(req: RunInput):
    result = engine.explain(req.model_dump())
    return {
        **result.to_function_result(),
        "lines": [
            {
                "cartLineId": outcome.line_id,
                "applied": outcome.applied,
                "skipReason": outcome.skip_reason,
                "trace": outcome.get_trace_text(),
            }
            for outcome in result.outcomes
        ],
        "trace": result.get_trace_text(),
    }


@app.post("/preview")
async def preview_schedule(req: PreviewRequest):
    surcharge = 0.0
    if req.surcharge:
        try:
            surcharge = parse_amount(req.surcharge)
        except NumericParseError:
            raise HTTPException(status_code=422, detail=f"Invalid surcharge: {req.surcharge}")

    try:
        df = price_schedule(
            req.metafield,
            quantities=req.quantities,
            surcharge=surcharge,
            max_quantity=req.max_quantity,
        )
    except MetadataParseError as e:
        raise HTTPException(status_code=422, detail=str(e))

    # NaN -> null, numpy scalars -> plain JSON types
    return {"rows": json.loads(df.to_json(orient="records"))}
