# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: GenerationProvider
# -----------------------------------------------------------------------------

import threading
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from core.types import SamplingParams

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}


@runtime_checkable
class GenerationProvider(Protocol):
    model: str

    def generate(
            self,
            messages: List[Message],
            *,
            sampling: SamplingParams,
            timeout: Optional[float] = None,
            cancel_event: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """Return {"answer": str, "model": str|None, "usage": dict|None}."""
        ...
