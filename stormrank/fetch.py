"""
Source acquisition
==================

Finds the Storm Data file in a data directory, downloading the compressed
copy if neither the extracted nor the compressed file is present.

The download is streamed to a `.part` file and renamed when complete, so an
interrupted download never leaves a truncated file that looks finished.
"""

from __future__ import annotations
import logging
import os
import time

import requests

logger = logging.getLogger(__name__)

STORM_DATA_URL = "https://d396qusza40orc.cloudfront.net/repdata%2Fdata%2FStormData.csv.bz2"
CSV_NAME = "repdata_data_StormData.csv"
BZ2_NAME = CSV_NAME + ".bz2"

TIMEOUT = 120  # seconds per request
MAX_RETRY = 3
CHUNK_SIZE = 1 << 16


def download_file(url: str, out_path: str, timeout: int = TIMEOUT, max_retry: int = MAX_RETRY) -> str:
    """Download `url` to `out_path`, retrying with exponential backoff."""
    tmp_path = out_path + ".part"
    attempt = 0
    while True:
        try:
            logger.info("Downloading %s (attempt %d/%d)", url, attempt + 1, max_retry + 1)
            with requests.get(url, timeout=timeout, stream=True) as response:
                response.raise_for_status()
                with open(tmp_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
            os.replace(tmp_path, out_path)
            logger.info("Saved %s (%.1f MB)", out_path, os.path.getsize(out_path) / (1024 * 1024))
            return out_path
        except requests.RequestException as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            if attempt >= max_retry:
                logger.error("Failed to download %s after %d attempts: %s", url, max_retry + 1, e)
                raise
            wait_time = 2 ** attempt
            logger.warning("Download failed (%s); retrying in %d seconds", e, wait_time)
            time.sleep(wait_time)
            attempt += 1


def ensure_storm_data(data_dir: str, url: str = STORM_DATA_URL,
                      timeout: int = TIMEOUT, max_retry: int = MAX_RETRY) -> str:
    """Return the path of the Storm Data file in `data_dir`, downloading if needed.

    An extracted CSV is preferred over the .bz2 file when both exist.
    """
    csv_path = os.path.join(data_dir, CSV_NAME)
    if os.path.exists(csv_path):
        return csv_path
    bz2_path = os.path.join(data_dir, BZ2_NAME)
    if os.path.exists(bz2_path):
        return bz2_path
    os.makedirs(data_dir, exist_ok=True)
    return download_file(url, bz2_path, timeout=timeout, max_retry=max_retry)
