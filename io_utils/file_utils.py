# io_utils/file_utils.py
"""
File naming, parameter recording, and zipping helpers.
"""

import os
import datetime
import zipfile
from typing import Dict

RESULT_EXTS = (".png", ".jpg", ".csv", ".txt")


def make_result_filename(
    projname: str,
    input_path: str,
    filter_name: str,
    level: float,
    desc: str,
    ext: str = "png",
    outdir: str = ".",
) -> str:
    base = os.path.splitext(os.path.basename(input_path))[0]
    timestamp = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
    safe_desc = str(desc).replace(" ", "_")
    fname = f"{projname}_{base}_{filter_name}_level-{level:g}_{safe_desc}_{timestamp}.{ext}"
    os.makedirs(outdir, exist_ok=True)
    return os.path.join(outdir, fname)


def save_parameters_txt(outdir: str, params: Dict, filename: str = "parameters.txt") -> str:
    """Write one `key: value` line per parameter, in insertion order."""
    os.makedirs(outdir, exist_ok=True)
    path = os.path.join(outdir, filename)
    lines = [f"{k}: {v}\n" for k, v in params.items()]
    with open(path, "w", encoding="utf-8") as f:
        f.writelines(lines)
    return path


def zip_results(dir_to_zip: str, zip_path: str, exts=RESULT_EXTS) -> str:
    """
    Archive the run artifacts under dir_to_zip (files with one of `exts`),
    in sorted order so two runs over the same outputs give the same listing.
    """
    members = []
    for root, dirs, files in os.walk(dir_to_zip):
        dirs.sort()
        for file in sorted(files):
            if file.lower().endswith(exts):
                members.append(os.path.join(root, file))
    with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
        for full in members:
            zf.write(full, os.path.relpath(full, start=dir_to_zip))
    return zip_path
