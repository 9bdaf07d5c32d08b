#!/usr/bin/env python3
from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.responses import JSONResponse, StreamingResponse
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
import logging, tempfile
from pathlib import Path
from json_lookahead import config
from json_lookahead.errors import LookaheadError
from json_lookahead.streaming_parser import StreamingJSONParser, measure_depth

app = FastAPI(title="JSON Lookahead Inspector")
logger = logging.getLogger(__name__)

request_counter = Counter("json_requests_total", "Total JSON uploads")
error_counter = Counter("json_errors_total", "Rejected JSON uploads", ["kind"])
process_duration = Histogram("json_process_seconds", "Time spent processing")

CHUNK_SIZE = 8*1024*1024  # 8 MB

@app.get("/health", tags=["ops"])
def health():
    return {"status": "healthy"}

@app.get("/metrics", tags=["ops"])
def metrics():
    return StreamingResponse(iter([generate_latest()]), media_type=CONTENT_TYPE_LATEST)

def summarize(path: str) -> dict:
    parser = StreamingJSONParser()
    structure = parser.auto_detect_json_structure(path)
    pointer = 'item' if structure == 'array' else ''
    recs = max_depth = 0
    for depth in parser.walk_records(path, pointer, measure_depth):
        recs += 1
        max_depth = max(max_depth, depth)
    return {"structure": structure, "records": recs, "max_depth": max_depth}

@app.post("/process/file", tags=["process"])
async def process_file(file: UploadFile = File(...)):
    request_counter.inc()
    with tempfile.NamedTemporaryFile(delete=False, suffix=".json") as tmp:
        total = 0
        while True:
            chunk = await file.read(CHUNK_SIZE)
            if not chunk:
                break
            tmp.write(chunk)
            total += len(chunk)
        tmp_path = tmp.name
    try:
        with process_duration.time():
            summary = summarize(tmp_path)
    except LookaheadError as e:
        kind = type(e).__name__
        error_counter.labels(kind=kind).inc()
        logger.warning("rejected %s: %s", file.filename, e)
        raise HTTPException(status_code=422, detail={"kind": kind, "message": str(e)})
    finally:
        Path(tmp_path).unlink()
    return JSONResponse({"filename": file.filename, "bytes": total, **summary})

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.port())
