from a11y_auditor.app.checks.detectors.base import DetectorOptions
from a11y_auditor.app.checks.detectors.focus import (
    ConservativeFocusIndicatorStrategy,
    is_outline_suppressed,
    run_focus_checks,
)
from a11y_auditor.app.schemas.issues import IssueCategory, Severity
from a11y_auditor.tests.fixtures.tree_factory import FlakyTreeReader, body, el, reader_for


class AlwaysIndicated:
    def has_custom_focus_indicator(self, element, reader):
        return True


def test_suppressed_outline_is_error_under_default_strategy():
    reader = reader_for(el("button", text="Go", style={"outline": "none"}))

    result = run_focus_checks(reader.document_root(), reader)

    assert len(result.issues) == 1
    issue = result.issues[0]
    assert issue.issue_id == "focus-0"
    assert issue.severity == Severity.ERROR
    assert issue.category == IssueCategory.FOCUS
    assert issue.wcag_criteria == ["2.4.7 Focus Visible"]


def test_strategy_can_clear_the_issue():
    reader = reader_for(el("button", text="Go", style={"outline": "0"}))

    result = run_focus_checks(
        reader.document_root(),
        reader,
        DetectorOptions(focus_strategy=AlwaysIndicated()),
    )

    assert result.issues == []


def test_default_outline_and_non_interactive_elements_pass():
    reader = reader_for(
        el("button", text="Go"),
        el("div", text="text", style={"outline": "none"}),
    )

    result = run_focus_checks(reader.document_root(), reader)

    assert result.issues == []
    assert result.elements_visited == 2


def test_outline_suppression_tokens():
    assert is_outline_suppressed("none")
    assert is_outline_suppressed("0px solid red")
    assert is_outline_suppressed("0")
    assert not is_outline_suppressed("2px solid blue")
    assert not is_outline_suppressed(None)


def test_conservative_strategy_never_finds_indicator():
    reader = reader_for(el("button"))
    strategy = ConservativeFocusIndicatorStrategy()
    assert strategy.has_custom_focus_indicator(reader.document_root(), reader) is False


def test_read_failure_is_skipped():
    root = body(el("button", id="gone"), el("a", href="#", style={"outline": "none"}))
    reader = FlakyTreeReader(root, broken_ids=["gone"])

    result = run_focus_checks(root, reader)

    assert [i.issue_id for i in result.issues] == ["focus-1"]
    assert result.elements_skipped == 1
