"""Pick the weakest words of a dataset for a drill round."""

import logging

from .models import Dataset, WordPair

logger = logging.getLogger(__name__)


def select_weakest(dataset: Dataset, k: int) -> list[WordPair]:
    """Get the k pairs with the lowest accuracy, weakest first.

    sorted() is stable, so words with equal accuracy keep their dataset order.
    Returns an empty list for an empty dataset or k <= 0.
    """
    if not len(dataset) or k <= 0:
        logger.info(f"Nothing to select (dataset size {len(dataset)}, k={k})")
        return []
    ranked = sorted(dataset.pairs, key=lambda pair: dataset.accuracy.accuracy_of(pair.term))
    return ranked[:k]
