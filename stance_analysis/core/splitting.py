# splitting.py
from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split


def split_by_id(
    ids: Sequence,
    test_size: float = 0.2,
    random_state: int = 42,
    stratify: Optional[Sequence] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Partition comment ids into train and test ids.

    The split is keyed by id, so a comment never lands in both partitions.
    ``stratify`` is optional: minority stances can have a single member, which
    a stratified split cannot place.
    """
    ids = np.asarray(ids)
    if pd.Index(ids).has_duplicates:
        raise ValueError("Comment ids must be unique before splitting")

    train_ids, test_ids = train_test_split(
        ids,
        test_size=test_size,
        random_state=random_state,
        stratify=stratify,
    )
    print(f"Data split: {len(train_ids)} train, {len(test_ids)} test")
    return train_ids, test_ids
