from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .errors import InvalidParameter

DEFAULT_QUANTUM = 2
DEFAULT_QUANTA = [2, 4, 8]
DEFAULT_AGING_INTERVAL = 1


@dataclass
class PolicyConfig:
    """
    Parameters consumed by the parameterised policies.

    RR and FB share ``quantum``; FBV cycles through ``quanta``; Aging lowers
    waiting processes' priority value by ``aging_interval`` after every pick.
    """

    quantum: int = DEFAULT_QUANTUM
    quanta: List[int] = field(default_factory=lambda: list(DEFAULT_QUANTA))
    aging_interval: int = DEFAULT_AGING_INTERVAL

    def validate(self, algorithms: Optional[Iterable[str]] = None) -> None:
        """
        Raise InvalidParameter for the first bad value.

        With ``algorithms`` given, only the parameters those policies use are
        checked.
        """
        keys = None if algorithms is None else {a.lower() for a in algorithms}

        def wanted(*names: str) -> bool:
            return keys is None or any(n in keys for n in names)

        if wanted("rr", "fb") and self.quantum <= 0:
            raise InvalidParameter("quantum", self.quantum, "must be a positive integer")
        if wanted("fbv"):
            if not self.quanta:
                raise InvalidParameter("quanta", self.quanta, "must not be empty")
            for q in self.quanta:
                if q <= 0:
                    raise InvalidParameter("quanta", self.quanta, "every quantum must be positive")
        if wanted("aging") and self.aging_interval < 0:
            raise InvalidParameter("aging interval", self.aging_interval, "must not be negative")

    def params_for(self, algorithm: str) -> Dict[str, object]:
        key = algorithm.lower()
        if key in {"rr", "fb"}:
            return {"quantum": self.quantum}
        if key == "fbv":
            return {"quanta": list(self.quanta)}
        if key == "aging":
            return {"aging_interval": self.aging_interval}
        return {}
