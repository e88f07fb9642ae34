"""Unit tests for assertion primitives and result aggregation."""

import pytest

from crud_e2e.client import CrudClientError
from crud_e2e.results import RunReport, ScenarioResult, ScenarioStatus, Severity


@pytest.fixture
def result():
    return ScenarioResult(number=1, title="Example")


async def _succeed():
    return "ok"


async def _fail_with(status_code):
    raise CrudClientError("boom", status_code=status_code)


class TestAssertTrue:
    """Tests for ScenarioResult.assert_true."""

    def test_pass(self, result):
        """Test a true condition counts one pass."""
        assert result.assert_true(True, "truthy") is True
        assert result.passed == 1
        assert result.failed == 0
        assert result.entries[0].message == "✓ Test passed: truthy"
        assert result.entries[0].severity is Severity.INFO

    def test_fail(self, result):
        """Test a false condition counts one failure."""
        assert result.assert_true(False, "falsy") is False
        assert result.failed == 1
        assert result.entries[0].message == "✗ Test failed: falsy"
        assert result.entries[0].severity is Severity.ERROR


class TestAssertEquals:
    """Tests for ScenarioResult.assert_equals."""

    def test_equal_values_pass(self, result):
        """Test equal values count one pass."""
        result.assert_equals(200, 200, "status")
        assert result.passed == 1

    def test_failure_logs_both_values(self, result):
        """Test a mismatch logs expected and actual values."""
        result.assert_equals(200, 500, "status")
        assert result.failed == 1
        assert result.entries[0].message == "✗ Test failed: status (expected: 200, got: 500)"

    def test_none_is_not_equal_to_value(self, result):
        """Test None never equals a real value."""
        result.assert_equals(7, None, "id")
        assert result.failed == 1


class TestExpectStatus:
    """Tests for ScenarioResult.expect_status."""

    @pytest.mark.asyncio
    async def test_expected_status_passes(self, result):
        """Test the expected error status counts one pass."""
        assert await result.expect_status(_fail_with(401), 401, "needs auth") is True
        assert result.passed == 1

    @pytest.mark.asyncio
    async def test_success_is_failure(self, result):
        """Test a successful call is a failure."""
        assert await result.expect_status(_succeed(), 401, "needs auth") is False
        assert result.failed == 1
        assert "request succeeded" in result.entries[0].message

    @pytest.mark.asyncio
    async def test_other_status_is_failure(self, result):
        """Test a different error status is a failure."""
        await result.expect_status(_fail_with(403), 401, "needs auth")
        assert result.failed == 1
        assert "HTTP 403: boom" in result.entries[0].message

    @pytest.mark.asyncio
    async def test_transport_error_is_failure(self, result):
        """Test a transport error without status is a failure."""
        await result.expect_status(_fail_with(None), 404, "missing")
        assert result.failed == 1

    @pytest.mark.asyncio
    async def test_other_exceptions_propagate(self, result):
        """Test non-client exceptions are left to the runner."""
        async def explode():
            raise RuntimeError("unexpected")

        with pytest.raises(RuntimeError):
            await result.expect_status(explode(), 404, "missing")
        assert result.assertions == 0


class TestScenarioResult:
    """Tests for ScenarioResult bookkeeping."""

    def test_notes_and_warnings_do_not_count(self, result):
        """Test notes and warnings are logged but not tallied."""
        result.note("info")
        result.warn("cleanup failed")
        assert result.assertions == 0
        assert result.status is ScenarioStatus.PASSED
        assert [e.outcome for e in result.entries] == [None, None]

    def test_record_error_counts_one_failure(self, result):
        """Test record_error adds exactly one failure."""
        result.record_error("kaboom")
        assert result.failed == 1
        assert result.status is ScenarioStatus.FAILED

    def test_skipped_status(self, result):
        """Test a skipped result reports SKIPPED."""
        result.skipped = True
        assert result.status is ScenarioStatus.SKIPPED


class TestRunReport:
    """Tests for RunReport aggregation."""

    def test_aggregates_counts(self):
        """Test counts are summed across results."""
        report = RunReport(base_url="http://test")
        first = ScenarioResult(1, "one")
        first.assert_true(True, "a")
        first.assert_true(False, "b")
        second = ScenarioResult(2, "two", skipped=True)
        third = ScenarioResult(3, "three")
        third.assert_equals(1, 1, "c")

        for r in (first, second, third):
            report.add(r)

        assert report.passed == 2
        assert report.failed == 1
        assert report.total == 3
        assert report.skipped == 1
        assert report.success is False
        assert report.exit_code == 1

    def test_empty_report_succeeds(self):
        """Test a report with no assertions succeeds."""
        report = RunReport(base_url="http://test")
        assert report.total == 0
        assert report.exit_code == 0
