"""
Accessibility audit coordinator.

Resolves the scope, schedules the selected detectors under the optional
deadline, and folds their results into one report. It never inspects
elements or rewrites detector output.
"""

from __future__ import annotations

import functools
import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional

import anyio
from anyio import to_thread

from a11y_auditor.app.checks.detectors.base import Detector, DetectorOptions
from a11y_auditor.app.checks.detectors.registry import DETECTORS
from a11y_auditor.app.config import AuditorConfig
from a11y_auditor.app.coordinator.aggregator import build_report
from a11y_auditor.app.errors import AuditCancelledError, ScopeResolutionError
from a11y_auditor.app.schemas.audit_config import AuditConfig
from a11y_auditor.app.schemas.detector_result import DetectorResult
from a11y_auditor.app.schemas.issues import IssueCategory
from a11y_auditor.app.schemas.report import AccessibilityReport
from a11y_auditor.app.scoring import ScoringStrategy, WeightedPenaltyScoring
from a11y_auditor.app.tree.reader import TreeReader

# Events (observational only)
from a11y_auditor.app.events import (
    AuditEvent,
    AuditEventEmitter,
    AuditEventType,
    NullEventEmitter,
)

logger = logging.getLogger(__name__)


class AccessibilityAuditCoordinator:
    """
    Runs one audit per call against a read-only element tree.

    Execution order:
        1. Scope resolution (hard gate, no report on failure)
        2. Selected detectors, concurrently or in sequence
        3. Single-threaded fold into the report
    """

    def __init__(
        self,
        config: AuditorConfig,
        reader: TreeReader,
        *,
        detectors: Optional[Mapping[IssueCategory, Detector]] = None,
        scoring: Optional[ScoringStrategy] = None,
        focus_strategy: Optional[Any] = None,
    ) -> None:
        # `detectors` overrides registry entries per category.
        self._config = config
        self._reader = reader

        self._detectors: Dict[IssueCategory, Detector] = dict(DETECTORS)
        if detectors:
            self._detectors.update(detectors)

        self._scoring = scoring if scoring is not None else WeightedPenaltyScoring()
        self._focus_strategy = focus_strategy

    # ------------------------------------------------------------------
    # Integration constructor (composition root)
    # ------------------------------------------------------------------

    @classmethod
    def from_config(
        cls,
        config: AuditorConfig,
        reader: TreeReader,
    ) -> "AccessibilityAuditCoordinator":
        return cls(config=config, reader=reader)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run_audit(
        self,
        audit_config: Optional[AuditConfig] = None,
        *,
        audit_id: Optional[str] = None,
        emitter: Optional[AuditEventEmitter] = None,
    ) -> AccessibilityReport:
        """
        Audit the configured scope and return a frozen report.

        Raises:
            ScopeResolutionError: the scope selector matched nothing.
            AuditCancelledError: the detector deadline expired.

        The emitter is strictly observational:
        - failures must not affect execution
        - events must not influence control flow
        """
        audit_config = audit_config or AuditConfig()
        audit_id = audit_id or uuid.uuid4().hex
        emitter = emitter or NullEventEmitter()

        await emitter.emit(
            AuditEvent(
                audit_id=audit_id,
                event_type=AuditEventType.AUDIT_STARTED,
                details={"scope": audit_config.scope},
            )
        )

        try:
            # ----------------------------------------------------------
            # 1. Scope resolution (HARD GATE)
            # ----------------------------------------------------------
            root = self._resolve_scope(audit_config)
            whole_document = root is self._reader.document_root()

            await emitter.emit(
                AuditEvent(
                    audit_id=audit_id,
                    event_type=AuditEventType.SCOPE_RESOLVED,
                    details={
                        "scope": audit_config.scope,
                        "whole_document": whole_document,
                        "tag": self._reader.tag(root),
                    },
                )
            )

            # ----------------------------------------------------------
            # 2. Detectors
            # ----------------------------------------------------------
            categories = audit_config.selected_categories()
            options = DetectorOptions(
                whole_document=whole_document,
                min_touch_target_px=self._config.MIN_TOUCH_TARGET_PX,
                preview_chars=self._config.TEXT_PREVIEW_CHARS,
                focus_strategy=self._focus_strategy,
            )

            results = await self._run_detectors(
                root=root,
                categories=categories,
                options=options,
                audit_id=audit_id,
                emitter=emitter,
            )

            # ----------------------------------------------------------
            # 3. Fold (SINGLE-THREADED)
            # ----------------------------------------------------------
            report = build_report(
                results,
                scoring=self._scoring,
                audit_id=audit_id,
            )

            for issue in report.issues:
                await emitter.emit(
                    AuditEvent(
                        audit_id=audit_id,
                        event_type=AuditEventType.ISSUE_DISCOVERED,
                        details={
                            "issue_id": issue.issue_id,
                            "category": issue.category.value,
                            "severity": issue.severity.value,
                        },
                    )
                )

            logger.info(
                "Audit %s finished: %d issues, score %d, level %s",
                audit_id,
                report.total_issues,
                report.score,
                report.compliance_level.value,
            )

            await emitter.emit(
                AuditEvent(
                    audit_id=audit_id,
                    event_type=AuditEventType.AUDIT_COMPLETED,
                    details={
                        "score": report.score,
                        "compliance_level": report.compliance_level.value,
                        "total_issues": report.total_issues,
                    },
                )
            )

            return report

        except Exception as exc:
            await emitter.emit(
                AuditEvent(
                    audit_id=audit_id,
                    event_type=AuditEventType.AUDIT_FAILED,
                    details={
                        "error": str(exc),
                        "exception_type": type(exc).__name__,
                    },
                )
            )
            raise

    # ------------------------------------------------------------------
    # Structural helpers
    # ------------------------------------------------------------------

    def _resolve_scope(self, audit_config: AuditConfig) -> Any:
        if audit_config.scope is None:
            return self._reader.document_root()

        root = self._reader.resolve_scope(audit_config.scope)
        if root is None:
            raise ScopeResolutionError(audit_config.scope)
        return root

    async def _run_detectors(
        self,
        *,
        root: Any,
        categories: List[IssueCategory],
        options: DetectorOptions,
        audit_id: str,
        emitter: AuditEventEmitter,
    ) -> List[DetectorResult]:
        """
        Run every selected detector and return results in canonical order.

        Each detector writes only its own slot. With a deadline configured,
        expiry raises AuditCancelledError and every partial result is
        discarded.
        """
        slots: Dict[IssueCategory, DetectorResult] = {}
        timeout = self._config.DETECTOR_TIMEOUT_SECONDS

        async def run_one(category: IssueCategory) -> None:
            detector = self._detectors[category]

            await emitter.emit(
                AuditEvent(
                    audit_id=audit_id,
                    event_type=AuditEventType.DETECTOR_STARTED,
                    details={"category": category.value},
                )
            )

            call = functools.partial(detector, root, self._reader, options)
            if self._config.RUN_DETECTORS_CONCURRENTLY:
                result = await to_thread.run_sync(call, abandon_on_cancel=True)
            else:
                result = call()

            slots[category] = result

            await emitter.emit(
                AuditEvent(
                    audit_id=audit_id,
                    event_type=AuditEventType.DETECTOR_COMPLETED,
                    details={
                        "category": category.value,
                        "issues_count": len(result.issues),
                        "elements_visited": result.elements_visited,
                        "elements_skipped": result.elements_skipped,
                    },
                )
            )

        try:
            with anyio.fail_after(timeout) as deadline_scope:
                if self._config.RUN_DETECTORS_CONCURRENTLY:
                    try:
                        async with anyio.create_task_group() as tg:
                            for category in categories:
                                tg.start_soon(run_one, category)
                    except ExceptionGroup as group:
                        # Surface a single detector failure unwrapped.
                        if len(group.exceptions) == 1:
                            raise group.exceptions[0] from group
                        raise
                else:
                    for category in categories:
                        await run_one(category)
                        # Inline detectors cannot be interrupted; check between them.
                        if anyio.current_time() >= deadline_scope.deadline:
                            raise TimeoutError
        except TimeoutError as exc:
            logger.warning(
                "Audit %s cancelled: detectors did not finish within %ss",
                audit_id,
                timeout,
            )
            raise AuditCancelledError(
                f"Detectors did not finish within {timeout} seconds",
                timeout_seconds=timeout,
            ) from exc

        return [slots[category] for category in categories]


# ----------------------------------------------------------------------
# Module-level entry points
# ----------------------------------------------------------------------

async def run_audit(
    reader: TreeReader,
    audit_config: Optional[AuditConfig] = None,
    *,
    config: Optional[AuditorConfig] = None,
    audit_id: Optional[str] = None,
    emitter: Optional[AuditEventEmitter] = None,
) -> AccessibilityReport:
    """
    Audit `reader`'s tree with a coordinator built from `config`
    (or from the environment when omitted).
    """
    coordinator = AccessibilityAuditCoordinator.from_config(
        config or AuditorConfig.from_env(),
        reader,
    )
    return await coordinator.run_audit(
        audit_config,
        audit_id=audit_id,
        emitter=emitter,
    )


def run_audit_sync(
    reader: TreeReader,
    audit_config: Optional[AuditConfig] = None,
    *,
    config: Optional[AuditorConfig] = None,
    audit_id: Optional[str] = None,
) -> AccessibilityReport:
    """Blocking wrapper around run_audit for callers without an event loop."""
    return anyio.run(
        functools.partial(
            run_audit,
            reader,
            audit_config,
            config=config,
            audit_id=audit_id,
        )
    )
