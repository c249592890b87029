import os

import awkward as ak
import numpy as np
import uproot


def open_hit_files(paths, tree_name='events'):
    """
    Open ROOT files and return their hit trees.

    Returns:
    --------
    tuple: (trees, missing)
        trees: list of opened trees in the order of paths
        missing: list of (path, reason) for files that could not be opened
    """
    trees = []
    missing = []
    for path in paths:
        if not os.path.exists(path):
            print(f"Warning: File does not exist: {path}")
            missing.append((path, "file does not exist"))
            continue
        try:
            trees.append(uproot.open(f"{path}:{tree_name}"))
        except Exception as e:
            print(f"Warning: Failed to open {path}: {e}")
            missing.append((path, str(e)))
    return trees, missing


def read_local_hits(events_trees, collection, x_branch='x', y_branch='y'):
    """
    Read local hit positions of a sensor collection from one or more trees.

    Branches are looked up as '{collection}/{collection}.{x_branch}' first,
    then as '{collection}.{x_branch}' and finally as plain '{x_branch}'.
    Jagged per-event arrays are flattened.

    Returns:
    --------
    tuple (x, y) of float numpy arrays
    """
    x = []
    y = []

    for events_tree in events_trees:
        keys = set(events_tree.keys())
        candidates = [
            (f'{collection}/{collection}.{x_branch}', f'{collection}/{collection}.{y_branch}'),
            (f'{collection}.{x_branch}', f'{collection}.{y_branch}'),
            (x_branch, y_branch),
        ]
        for x_name, y_name in candidates:
            if x_name in keys and y_name in keys:
                break
        else:
            raise KeyError(f"No position branches for collection '{collection}' in tree {events_tree.name}")

        arrays = events_tree.arrays([x_name, y_name])
        x.append(ak.ravel(arrays[x_name]))
        y.append(ak.ravel(arrays[y_name]))

    if not x:
        return np.empty(0, dtype=float), np.empty(0, dtype=float)

    x_combined = ak.to_numpy(ak.concatenate(x)).astype(float)
    y_combined = ak.to_numpy(ak.concatenate(y)).astype(float)

    return x_combined, y_combined
