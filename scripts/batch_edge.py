"""
Batch-run edge detection across multiple images.

Saves per-image outputs and a CSV log with:
- input_path, depth, out_edges_path, compare_path, elapsed_ms, mean_response

Usage (from project root):
python -m scripts.batch_edge [image ...]

Without arguments the IMAGES list below is used.
"""

import os
import sys
import csv
import time
import logging
from datetime import datetime
from typing import Optional

import numpy as np

from grafi import edge
from io_utils.image_handler import read_image, save_image
from io_utils.file_utils import make_result_filename, save_parameters_txt, zip_results
from visuals.plots import compare_and_save, plot_kernel

logger = logging.getLogger("scripts.batch_edge")

# CONFIG: image paths to process when none are given on the command line
IMAGES = [
    "data/Checkerboard_1.tif",
    "data/Checkerboard_2.jpg",
]

# edge parameters
EDGE_TYPE = "laplacian"
LEVEL = 1.0
MONOCHROME = False

RESULTS_ROOT = "results"

csv_fields = [
    "input_path", "depth", "out_edges_path", "compare_path",
    "elapsed_ms", "mean_response", "type", "level", "monochrome",
]


def process_one_image(img_path: str, run_dir: str, level: float = LEVEL, monochrome: bool = MONOCHROME) -> dict:
    buffer, meta = read_image(img_path)
    base = os.path.splitext(os.path.basename(img_path))[0]
    img_dir = os.path.join(run_dir, base)
    os.makedirs(img_dir, exist_ok=True)

    t0 = time.perf_counter()
    edges = edge(buffer, type=EDGE_TYPE, level=level, monochrome=monochrome)
    elapsed_ms = (time.perf_counter() - t0) * 1000.0

    out_path = make_result_filename("grafi", img_path, EDGE_TYPE, level, "edges", outdir=img_dir)
    save_image(out_path, edges)
    compare_path = compare_and_save(buffer, edges, out_path=os.path.join(img_dir, "compare.png"))

    # alpha is passed through unchanged; only colour channels carry the response
    planes = edges.planes()
    colour = planes[..., :3] if edges.depth == 4 else planes
    mean_response = float(np.mean(colour))

    return {
        "input_path": img_path,
        "depth": buffer.depth,
        "out_edges_path": out_path,
        "compare_path": compare_path,
        "elapsed_ms": round(elapsed_ms, 3),
        "mean_response": round(mean_response, 4),
        "type": EDGE_TYPE,
        "level": level,
        "monochrome": monochrome,
    }


def main(argv: Optional[list] = None, results_root: str = RESULTS_ROOT) -> str:
    images = list(argv) if argv else IMAGES
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    outdir = os.path.join(results_root, f"batch_edge_{timestamp}")
    os.makedirs(outdir, exist_ok=True)

    save_parameters_txt(outdir, {"type": EDGE_TYPE, "level": LEVEL, "monochrome": MONOCHROME})
    plot_kernel(EDGE_TYPE, out_path=os.path.join(outdir, "kernel.png"))

    csv_path = os.path.join(outdir, "results.csv")
    with open(csv_path, "w", newline="", encoding="utf-8") as csvf:
        writer = csv.DictWriter(csvf, fieldnames=csv_fields)
        writer.writeheader()

        for img in images:
            if not os.path.exists(img):
                logger.warning("Skipping missing: %s", img)
                continue
            logger.info("Processing: %s", img)
            rec = process_one_image(img, outdir)
            writer.writerow(rec)
            csvf.flush()
            logger.info(" -> done in %.1f ms, mean response %.3f", rec["elapsed_ms"], rec["mean_response"])

    zip_path = zip_results(outdir, os.path.join(outdir, "results.zip"))
    logger.info("Batch done. Results in: %s CSV: %s archive: %s", outdir, csv_path, zip_path)
    return outdir


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    main(sys.argv[1:])
