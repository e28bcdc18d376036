# storemap/api.py
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .config import Settings, configure_logging
from .index import index_to_dict
from .service import LocatorService

settings = Settings.from_env()
configure_logging(settings.log_level)

app = FastAPI(title="StoreMap API")
svc = LocatorService()

if settings.csv_path is not None:
    svc.load_file(settings.csv_path)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/upload")
async def upload(file: Optional[UploadFile] = File(None)):
    if file is None or not file.filename:
        return JSONResponse(svc.load_bytes(None).to_dict(), status_code=400)

    limit = settings.max_upload_bytes
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise HTTPException(status_code=413, detail=f"Upload larger than {limit} bytes")

    # parsing is CPU-bound; keep it off the event loop
    outcome = await run_in_threadpool(svc.load_bytes, data)
    if outcome.read_failed:
        status = 400
    elif not outcome.ok:
        status = 422  # empty or whitespace-only file
    else:
        status = 200
    return JSONResponse(outcome.to_dict(), status_code=status)


@app.get("/postal-codes")
def postal_codes():
    return index_to_dict(svc.index)


@app.get("/postal-codes/{code}")
def postal_code(code: str):
    out = svc.plot_postal_code(code)
    if not out.ok:
        raise HTTPException(status_code=404, detail=out.message)
    return {"postal_code": code.strip(), "message": out.message, **out.result.to_dict()}


@app.get("/stores/search")
def search(q: str = Query("")):
    out = svc.search(q)
    if out.result is None:
        raise HTTPException(status_code=400, detail=out.message)
    return {"level": out.level, "message": out.message, **out.result.to_dict()}


@app.delete("/index")
def reset_index():
    svc.reset()
    return {"status": "ok", "postal_codes": 0}


@app.get("/metrics")
def metrics():
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
