# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: EmbeddingProvider
# -----------------------------------------------------------------------------

import threading
from typing import Optional, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class EmbeddingProvider(Protocol):
    model: str

    def embed_query(
            self,
            text: str,
            *,
            timeout: Optional[float] = None,
            cancel_event: Optional[threading.Event] = None,
    ) -> np.ndarray:
        ...
