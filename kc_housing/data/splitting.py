"""Reproducible train/test partition of the enriched sales table."""

import logging
import math
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..config import constants

logger = logging.getLogger(__name__)


@dataclass
class SplitResult:
    """Training and test partitions of one table."""

    train: pd.DataFrame
    test: pd.DataFrame


def split_train_test(
    df: pd.DataFrame,
    train_fraction: float = constants.DEFAULT_TRAIN_FRACTION,
    seed: int = constants.DEFAULT_SEED
) -> SplitResult:
    """
    Partition rows into training and test sets by seeded random sampling.

    ``floor(train_fraction * n_rows)`` row positions are drawn uniformly
    without replacement with ``numpy.random.default_rng(seed).choice`` (PCG64
    bit generator). The drawn rows, in draw order, form the training set and
    the remaining rows, in their original order, form the test set. The same
    seed, table and numpy version always give the same split; the draw is not
    reproducible across other random number generators.

    Parameters
    ----------
    df : pd.DataFrame
        Enriched sales table
    train_fraction : float, default 0.8
        Share of rows used for training, strictly between 0 and 1
    seed : int, default 1
        Seed for the random generator

    Returns
    -------
    SplitResult
        Disjoint train and test tables covering every input row
    """
    if not 0 < train_fraction < 1:
        raise ValueError(f"train_fraction must be between 0 and 1, got {train_fraction}")

    n_rows = len(df)
    n_train = math.floor(train_fraction * n_rows)

    rng = np.random.default_rng(seed)
    train_positions = rng.choice(n_rows, size=n_train, replace=False)

    test_mask = np.ones(n_rows, dtype=bool)
    test_mask[train_positions] = False

    result = SplitResult(
        train=df.iloc[train_positions].copy(),
        test=df.iloc[np.flatnonzero(test_mask)].copy()
    )

    logger.info(
        f"Data split completed: {len(result.train):,} training, "
        f"{len(result.test):,} test observations"
    )
    return result
