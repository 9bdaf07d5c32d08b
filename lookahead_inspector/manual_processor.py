#!/usr/bin/env python3
"""Inspect gigantic JSON files with constant RAM."""

import argparse, json, pathlib, statistics, logging, time, sys
from typing import Dict, Any
from json_lookahead import config
from json_lookahead.errors import LookaheadError
from json_lookahead.streaming_parser import StreamingJSONParser, measure_depth

logger = logging.getLogger(__name__)
parser = StreamingJSONParser()

def complexity_score(stats: Dict[str, float]) -> float:
    return 0.3*stats['depth'] + 0.4*stats['arr_density'] + 0.2*stats['strlen_var'] + 0.1*stats['obj_per_kb']

def get_json_depth(obj, current_depth=0):
    """Recursively calculate the maximum depth of already decoded JSON data."""
    if isinstance(obj, dict):
        if not obj:
            return current_depth
        return max(get_json_depth(v, current_depth + 1) for v in obj.values())
    elif isinstance(obj, list):
        if not obj:
            return current_depth
        return max(get_json_depth(item, current_depth + 1) for item in obj)
    else:
        return current_depth

def recommend_chunk(path: pathlib.Path) -> int:
    """Return tokenizer read size in KB (1000-10000) from a sample of records."""
    depth = arr_density = strlen_var = obj_per_kb = 1
    sample = []
    for i, rec in enumerate(parser.iter_records(str(path))):
        if i >= 1000:
            break
        sample.append(rec)
    if sample:
        depth = max(get_json_depth(r) for r in sample) or 1
        arr_density = sum(isinstance(r, list) for r in sample)/len(sample) or 1
        strlen_var = statistics.pstdev([len(str(r)) for r in sample]) or 1
        obj_per_kb = len(sample)/max(path.stat().st_size/1024, 1e-3) or 1
    score = complexity_score({'depth': depth, 'arr_density': arr_density,
                              'strlen_var': strlen_var, 'obj_per_kb': obj_per_kb})
    return int(max(1000, min(10000, 20000/score)))

def process(path: pathlib.Path, chunk_kb: int, pointer: str = None) -> Dict[str, Any]:
    """Count records and their maximum depth in one pass over the file."""
    start = time.time()
    structure = parser.auto_detect_json_structure(str(path))
    if pointer is None:
        pointer = 'item' if structure == 'array' else ''
    recs = max_depth = 0
    for depth in parser.walk_records(str(path), pointer, measure_depth, buf_size=chunk_kb*1024):
        recs += 1
        max_depth = max(max_depth, depth)
        if recs % 100000 == 0:
            logger.info("%s records | max depth %s", recs, max_depth)
    elapsed = time.time()-start
    logger.info("Done %s records in %.2fs", recs, elapsed)
    return {"structure": structure, "records": recs, "max_depth": max_depth, "seconds": round(elapsed, 3)}

def cli(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Summarize a JSON file without loading it.")
    ap.add_argument("file", type=pathlib.Path)
    ap.add_argument("--chunk-size", type=int, help="override tokenizer read size KB")
    ap.add_argument("--pointer", help="dotted path of the records, e.g. 'item' or 'users.item'")
    ap.add_argument("--log-level", default=config.log_level())
    args = ap.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.chunk_size:
        chunk = args.chunk_size
    else:
        try:
            chunk = recommend_chunk(args.file)
        except LookaheadError:
            chunk = config.buf_size() // 1024
    try:
        summary = process(args.file, chunk, args.pointer)
    except LookaheadError as e:
        logger.error("cannot inspect %s: %s", args.file, e)
        return 1
    print(json.dumps(summary))
    return 0

if __name__ == "__main__":
    sys.exit(cli())
