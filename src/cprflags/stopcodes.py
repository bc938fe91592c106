"""Detection of Fortran ``STOP <n>`` failures in tests.

Most compilers turn ``STOP 1`` into a non-zero exit status, which the test
harness already treats as failure.  NAG instead prints the stop code
(``STOP: 1``) and exits with status 0, so tests built with NAG need a
failure regular expression.

:func:`define_stop_failure` returns the rule for a vendor; the caller then
installs it once per test::

    rule = define_stop_failure(identity.fortran_vendor)
    rule.install(registry, "test_kinds")

Known limitation: the NAG pattern is searched anywhere in the output, so
it only looks at the first digit.  ``STOP: 10`` fails because it contains
``STOP: 1``, while a code with a leading zero such as ``STOP: 05`` does not
match and falls back to the exit status.
"""

import re
from dataclasses import dataclass, field

from cprflags.toolchain import Vendor

FAIL_REGULAR_EXPRESSION = "FAIL_REGULAR_EXPRESSION"

NAG_STOP_PATTERN = "STOP: [1-9]"


@dataclass(frozen=True)
class TestOutcome:
    """Classification of one test run."""

    __test__ = False  # not a pytest class

    name: str
    failed: bool
    reason: str

    def to_dict(self) -> dict[str, object]:
        return {"test": self.name, "failed": self.failed, "reason": self.reason}


@dataclass
class TestRegistry:
    """Per-test properties, as held by the external test harness."""

    __test__ = False

    properties: dict[str, dict[str, str]] = field(default_factory=dict)

    def set_property(self, test_name: str, key: str, value: str) -> None:
        self.properties.setdefault(test_name, {})[key] = value

    def get_property(self, test_name: str, key: str) -> str | None:
        return self.properties.get(test_name, {}).get(key)

    def classify(self, test_name: str, output: str, returncode: int) -> TestOutcome:
        """Classify a run: a matching fail pattern wins over the exit status."""
        pattern = self.get_property(test_name, FAIL_REGULAR_EXPRESSION)
        if pattern is not None:
            match = re.search(pattern, output)
            if match is not None:
                return TestOutcome(test_name, True, f"output matched {pattern!r}: {match.group(0)!r}")
        if returncode != 0:
            return TestOutcome(test_name, True, f"exit status {returncode}")
        return TestOutcome(test_name, False, "exit status 0")


@dataclass(frozen=True)
class StopFailureRule:
    """Test-registration rule for one vendor.

    ``fail_pattern`` is ``None`` when the exit status already carries the
    stop code, in which case :meth:`install` does nothing.
    """

    fail_pattern: str | None = None

    def install(self, registry: TestRegistry, test_name: str) -> None:
        if self.fail_pattern is None:
            return
        registry.set_property(test_name, FAIL_REGULAR_EXPRESSION, self.fail_pattern)

    def __call__(self, registry: TestRegistry, test_name: str) -> None:
        self.install(registry, test_name)


EXIT_STATUS_RULE = StopFailureRule()

STOP_FAILURE_RULES: dict[Vendor, StopFailureRule] = {
    Vendor.NAG: StopFailureRule(fail_pattern=NAG_STOP_PATTERN),
}


def define_stop_failure(vendor: Vendor | None) -> StopFailureRule:
    """Return the stop-failure rule for the Fortran *vendor*."""
    if vendor is None:
        return EXIT_STATUS_RULE
    return STOP_FAILURE_RULES.get(vendor, EXIT_STATUS_RULE)
