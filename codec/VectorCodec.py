# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: VectorCodec
# -----------------------------------------------------------------------------
from typing import Iterable

import numpy as np

from core.errors import MalformedVectorError


class VectorCodec:
    """
    Converts an embedding serialized as text ("[0.1,-0.2,...]") to a float
    vector and back.

    decode() is the validation boundary for corpus rows: anything that is not
    a bracket-wrapped list of finite numbers raises MalformedVectorError.
    """

    OPEN = "["
    CLOSE = "]"
    SEPARATOR = ","

    def decode(self, raw: str) -> np.ndarray:
        if not isinstance(raw, str):
            raise MalformedVectorError(f"Expected serialized vector string, got {type(raw).__name__}", raw=None)

        s = raw.strip()
        if len(s) < 2 or not (s.startswith(self.OPEN) and s.endswith(self.CLOSE)):
            raise MalformedVectorError(f"Vector is not wrapped in '{self.OPEN}{self.CLOSE}': {s[:40]!r}", raw=raw)

        body = s[1:-1].strip()
        if not body:
            raise MalformedVectorError("Vector is empty", raw=raw)

        values = []
        for i, token in enumerate(body.split(self.SEPARATOR)):
            try:
                values.append(float(token))
            except ValueError:
                raise MalformedVectorError(
                    f"Token {i} is not a number: {token.strip()[:40]!r}", raw=raw
                ) from None

        vec = np.asarray(values, dtype=np.float64)
        if not np.all(np.isfinite(vec)):
            raise MalformedVectorError("Vector contains NaN or infinite values", raw=raw)

        return vec

    def encode(self, vec: Iterable[float]) -> str:
        # repr() gives the shortest string that parses back to the same float
        return self.OPEN + self.SEPARATOR.join(repr(float(x)) for x in vec) + self.CLOSE
