import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from wkt import ParseOptions, WktError, dumps, loads

logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class NormalizeRequest(BaseModel):
    wkt: str
    # Per-request override of the process defaults (see wkt.config).
    options: ParseOptions | None = None


class NormalizeResponse(BaseModel):
    wkt: str
    type: str
    dimension: str
    empty: bool


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/wkt/normalize", response_model=NormalizeResponse)
def normalize(body: NormalizeRequest):
    try:
        geom = loads(body.wkt, options=body.options)
    except WktError as e:
        logger.info("rejected WKT (%s at %s): %s", e.kind, e.position, e.message)
        raise HTTPException(
            status_code=422,
            detail={"kind": e.kind, "message": e.message, "position": e.position},
        )
    return NormalizeResponse(
        wkt=dumps(geom),
        type=geom.geom_type,
        dimension=geom.dim.value,
        empty=geom.is_empty,
    )
