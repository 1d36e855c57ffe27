"""HTTP verb checker — flags dangerous methods, Cross-Site Tracing and verb tampering."""

from typing import AbstractSet, Optional

from methodscanner.core.config import DANGEROUS_METHODS, SAFE_METHODS
from methodscanner.core.models import ProbeOutcome, Verdict


class VerbChecker:
    """
    Map a probe outcome to a Verdict.

    Rules run in a fixed order and each one that fires overwrites the
    description of the previous one:

        1. dangerous method allowed (2xx/3xx)
        2. TRACE echoing the sent User-Agent (Cross-Site Tracing)
        3. verb tampering (non GET/HEAD/OPTIONS answered 200/204)

    so verb tampering, when it fires, always owns the description.
    """

    name = "HTTP Verb Checker"

    def __init__(self,
                 dangerous_methods: AbstractSet[str] = DANGEROUS_METHODS,
                 safe_methods: AbstractSet[str] = SAFE_METHODS):
        self.dangerous_methods = frozenset(dangerous_methods)
        self.safe_methods = frozenset(safe_methods)

    def is_dangerous(self, method: str) -> bool:
        return method in self.dangerous_methods

    def classify(self, method: str, outcome: ProbeOutcome) -> Verdict:
        dangerous = self.is_dangerous(method)
        code = outcome.status_code
        vulnerable = False
        description: Optional[str] = None

        if dangerous and 200 <= code < 400:
            vulnerable = True
            description = f"Potentially dangerous method {method} is allowed"

        if method == "TRACE" and code == 200 and outcome.user_agent in outcome.body:
            vulnerable = True
            description = ("TRACE method enabled and echoing request headers "
                           "(potential Cross-Site Tracing vulnerability)")

        if method not in self.safe_methods and code in (200, 204):
            vulnerable = True
            description = f"Potential HTTP verb tampering vulnerability with method {method}"

        return Verdict(is_dangerous=dangerous, is_vulnerable=vulnerable,
                       description=description)
