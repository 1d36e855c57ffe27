import pytest

from methodscanner.checkers.verbs import VerbChecker
from methodscanner.core.config import DANGEROUS_METHODS, DEFAULT_METHODS
from methodscanner.core.models import ProbeOutcome

UA = "MethodScanner-Test/1.0"
CST = ("TRACE method enabled and echoing request headers "
       "(potential Cross-Site Tracing vulnerability)")


def outcome(method, code, body="", ua=UA):
    return ProbeOutcome(method=method, status_code=code, status_text=str(code),
                        body=body, body_length=len(body), user_agent=ua)


@pytest.fixture
def checker():
    return VerbChecker()


@pytest.mark.parametrize("method", sorted(DANGEROUS_METHODS))
@pytest.mark.parametrize("code", [200, 201, 207, 301, 302, 399])
def test_dangerous_method_allowed(checker, method, code):
    v = checker.classify(method, outcome(method, code))
    assert v.is_dangerous
    assert v.is_vulnerable


@pytest.mark.parametrize("method", sorted(DANGEROUS_METHODS - {"TRACE"}))
def test_dangerous_description_when_no_tampering(checker, method):
    v = checker.classify(method, outcome(method, 201))
    assert v.description == f"Potentially dangerous method {method} is allowed"


@pytest.mark.parametrize("code", [400, 401, 403, 404, 405, 500, 501])
def test_dangerous_method_rejected(checker, code):
    v = checker.classify("PUT", outcome("PUT", code))
    assert v.is_dangerous
    assert not v.is_vulnerable
    assert v.description is None


@pytest.mark.parametrize("method", [m for m in DEFAULT_METHODS
                                    if m not in ("GET", "HEAD", "OPTIONS")])
@pytest.mark.parametrize("code", [200, 204])
def test_verb_tampering_always_wins(checker, method, code):
    v = checker.classify(method, outcome(method, code, body=UA))
    assert v.is_vulnerable
    assert v.description == f"Potential HTTP verb tampering vulnerability with method {method}"


@pytest.mark.parametrize("method", ["GET", "HEAD", "OPTIONS"])
def test_safe_methods_never_flagged(checker, method):
    v = checker.classify(method, outcome(method, 200))
    assert not v.is_dangerous
    assert not v.is_vulnerable
    assert v.description is None


def test_trace_echo_is_overwritten_by_verb_tampering(checker):
    v = checker.classify("TRACE", outcome("TRACE", 200, body=f"User-Agent: {UA}\r\n"))
    assert v.is_vulnerable
    assert v.description == "Potential HTTP verb tampering vulnerability with method TRACE"


def test_trace_echo_description_without_tampering():
    # with TRACE treated as safe, only the CST rule can own the description
    checker = VerbChecker(safe_methods={"GET", "HEAD", "OPTIONS", "TRACE"})
    v = checker.classify("TRACE", outcome("TRACE", 200, body=f"User-Agent: {UA}\r\n"))
    assert v.is_vulnerable
    assert v.description == CST


def test_trace_without_echo_keeps_dangerous_description():
    checker = VerbChecker(safe_methods={"GET", "HEAD", "OPTIONS", "TRACE"})
    v = checker.classify("TRACE", outcome("TRACE", 200, body="nothing here"))
    assert v.description == "Potentially dangerous method TRACE is allowed"


def test_transport_failure_never_vulnerable(checker):
    failed = ProbeOutcome(method="PUT", status_code=0, status_text="Error: boom",
                          transport_error="boom", user_agent=UA)
    v = checker.classify("PUT", failed)
    assert v.is_dangerous
    assert not v.is_vulnerable
    assert v.description is None


def test_non_dangerous_method_with_redirect(checker):
    v = checker.classify("POST", outcome("POST", 302))
    assert not v.is_dangerous
    assert not v.is_vulnerable


def test_classify_is_idempotent(checker):
    o = outcome("TRACE", 200, body=UA)
    assert checker.classify("TRACE", o) == checker.classify("TRACE", o)


def test_injected_tables():
    checker = VerbChecker(dangerous_methods={"PURGE"})
    assert checker.is_dangerous("PURGE")
    assert not checker.is_dangerous("PUT")
