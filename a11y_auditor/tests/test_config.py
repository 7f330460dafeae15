import pytest
from pydantic import ValidationError

from a11y_auditor.app.config import AuditorConfig


def test_defaults():
    config = AuditorConfig()

    assert config.RUN_DETECTORS_CONCURRENTLY is True
    assert config.DETECTOR_TIMEOUT_SECONDS is None
    assert config.MIN_TOUCH_TARGET_PX == 44.0
    assert config.TEXT_PREVIEW_CHARS == 100
    assert config.REPORT_FILE_EXTENSION == "json"


def test_from_env(monkeypatch):
    monkeypatch.setenv("A11Y_AUDITOR_RUN_DETECTORS_CONCURRENTLY", "no")
    monkeypatch.setenv("A11Y_AUDITOR_DETECTOR_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("A11Y_AUDITOR_MIN_TOUCH_TARGET_PX", "24")
    monkeypatch.setenv("A11Y_AUDITOR_TEXT_PREVIEW_CHARS", "40")
    monkeypatch.setenv("A11Y_AUDITOR_REPORT_FILE_EXTENSION", ".txt")

    config = AuditorConfig.from_env()

    assert config.RUN_DETECTORS_CONCURRENTLY is False
    assert config.DETECTOR_TIMEOUT_SECONDS == pytest.approx(2.5)
    assert config.MIN_TOUCH_TARGET_PX == 24.0
    assert config.TEXT_PREVIEW_CHARS == 40
    assert config.REPORT_FILE_EXTENSION == "txt"


def test_from_env_defaults(monkeypatch):
    for name in (
        "A11Y_AUDITOR_RUN_DETECTORS_CONCURRENTLY",
        "A11Y_AUDITOR_DETECTOR_TIMEOUT_SECONDS",
        "A11Y_AUDITOR_MIN_TOUCH_TARGET_PX",
        "A11Y_AUDITOR_TEXT_PREVIEW_CHARS",
        "A11Y_AUDITOR_REPORT_FILE_EXTENSION",
    ):
        monkeypatch.delenv(name, raising=False)

    assert AuditorConfig.from_env() == AuditorConfig()


@pytest.mark.parametrize(
    "field,value",
    [
        ("DETECTOR_TIMEOUT_SECONDS", 0),
        ("MIN_TOUCH_TARGET_PX", -1),
        ("TEXT_PREVIEW_CHARS", 0),
        ("REPORT_FILE_EXTENSION", "tar.gz"),
    ],
)
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        AuditorConfig(**{field: value})


def test_config_is_frozen():
    config = AuditorConfig()
    with pytest.raises(ValidationError):
        config.TEXT_PREVIEW_CHARS = 5
