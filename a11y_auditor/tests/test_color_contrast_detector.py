from a11y_auditor.app.checks.detectors.color_contrast import run_color_contrast_checks
from a11y_auditor.app.schemas.issues import IssueCategory, Severity
from a11y_auditor.app.tree.html import load_html_snapshot
from a11y_auditor.app.tree.snapshot import SnapshotTreeReader
from a11y_auditor.tests.fixtures.tree_factory import (
    FlakyTreeReader,
    body,
    el,
    reader_for,
    text_on,
)


def _run(reader):
    return run_color_contrast_checks(reader.document_root(), reader)


def test_aa_failure_is_an_error():
    result = _run(reader_for(text_on("#777777", "#ffffff")))

    assert len(result.issues) == 1
    issue = result.issues[0]
    assert issue.issue_id == "contrast-0"
    assert issue.severity == Severity.ERROR
    assert issue.category == IssueCategory.COLOR_CONTRAST
    assert issue.wcag_criteria == ["1.4.6 Contrast (Enhanced)"]
    assert issue.message.startswith("Insufficient color contrast ratio: 4.48")


def test_aaa_failure_with_aa_pass_is_a_warning():
    result = _run(reader_for(text_on("#767676", "#ffffff")))

    assert [i.severity for i in result.issues] == [Severity.WARNING]


def test_large_bold_text_uses_large_thresholds():
    result = _run(
        reader_for(text_on("#777777", "#ffffff", font_size="14px", font_weight="700"))
    )

    assert [i.severity for i in result.issues] == [Severity.WARNING]


def test_passing_contrast_emits_nothing_but_counts_element():
    result = _run(reader_for(text_on("#000000", "#ffffff")))

    assert result.issues == []
    assert result.elements_visited == 1


def test_transparent_background_is_skipped_without_verdict():
    result = _run(
        reader_for(
            text_on("#eeeeee", "transparent"),
            text_on("#eeeeee", "rgba(255, 255, 255, 0)"),
            el("p", text="no background", style={"color": "#eeeeee"}),
        )
    )

    assert result.issues == []
    assert result.elements_visited == 3
    assert result.elements_skipped == 0


def test_elements_without_text_are_not_judged():
    result = _run(reader_for(text_on("#eeeeee", "#ffffff", text="   ")))
    assert result.issues == []


def test_unparsable_colour_is_skipped_and_counted():
    result = _run(
        reader_for(
            text_on("not-a-colour", "#ffffff"),
            text_on("#777777", "#ffffff"),
        )
    )

    assert [i.issue_id for i in result.issues] == ["contrast-1"]
    assert result.elements_skipped == 1
    assert result.elements_visited == 2


def test_named_colours_from_html_are_judged():
    snapshot = load_html_snapshot(
        '<body><p style="color: silver; background-color: white">faint</p></body>'
    )

    result = _run(SnapshotTreeReader(snapshot))

    assert [i.issue_id for i in result.issues] == ["contrast-0"]
    assert result.issues[0].severity == Severity.ERROR
    assert result.issues[0].message.startswith("Insufficient color contrast ratio: 1.8")
    assert result.elements_skipped == 0


def test_reader_failure_is_recovered_per_element():
    root = body(
        el("p", text="x", id="gone", style={"color": "#777", "background_color": "#fff"}),
        text_on("#777777", "#ffffff"),
    )
    reader = FlakyTreeReader(root, broken_ids=["gone"])

    result = _run(reader)

    assert [i.issue_id for i in result.issues] == ["contrast-1"]
    assert result.elements_skipped == 1


def test_issue_carries_element_summary():
    result = _run(reader_for(text_on("#777777", "#ffffff", text="Low contrast")))

    summary = result.issues[0].element_summary
    assert summary.tag == "p"
    assert summary.text_preview == "Low contrast"
