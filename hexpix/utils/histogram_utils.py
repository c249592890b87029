"""Helpers for turning per-pixel hit counts into hist histograms."""

from typing import Dict, Optional, Tuple

import hist
import numpy as np


def _unpack_counts(cells_hit: Dict[Tuple[int, int], int]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    if not cells_hit:
        empty = np.empty(0, dtype=np.int64)
        return empty, empty, empty
    keys = np.asarray(list(cells_hit.keys()), dtype=np.int64)
    counts = np.asarray(list(cells_hit.values()), dtype=np.int64)
    return keys[:, 0], keys[:, 1], counts


def make_pixel_count_histogram(cells_hit: Dict[Tuple[int, int], int], config) -> hist.Hist:
    """Build a 2D (col, row) histogram whose bin contents are hit counts.

    Pixels outside the configured grid end up in the flow bins.
    """

    cols, rows, counts = _unpack_counts(cells_hit)
    h = (
        hist.Hist.new.Integer(0, max(config.n_columns, 1), name="col", label="Column")
        .Integer(0, max(config.n_rows, 1), name="row", label="Row")
        .Double()
    )
    if counts.size:
        h.fill(col=cols, row=rows, weight=counts)
    return h


def make_hits_per_pixel_histogram(cells_hit: Dict[Tuple[int, int], int],
                                  max_hits: Optional[int] = None) -> hist.Hist:
    """Distribution of the number of hits per fired pixel."""

    _, _, counts = _unpack_counts(cells_hit)
    if max_hits is None:
        max_hits = int(counts.max()) if counts.size else 1
    h = hist.Hist.new.Integer(1, max_hits + 1, name="hits", label="Hits per pixel").Int64()
    if counts.size:
        h.fill(hits=counts)
    return h
