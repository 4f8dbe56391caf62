"""Document Model Assembler: runs the section builders in display order."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date

from fce_synthesis.assembler import builders, constants
from fce_synthesis.assembler.models import DocumentModel, Section
from fce_synthesis.core.config import AssemblyConfig
from fce_synthesis.crosschecks import CrosscheckReport
from fce_synthesis.exceptions import AssemblyError
from fce_synthesis.models import EvaluationSnapshot

log = logging.getLogger(__name__)

SectionBuilder = Callable[[builders.AssemblyContext], Section]

# (key, title, builder) in document order
DEFAULT_BUILDERS: tuple[tuple[str, str, SectionBuilder], ...] = (
    ("cover", constants.REPORT_TITLE, builders.build_cover),
    ("client_information", "Client Information", builders.build_client_information),
    ("pain_illustration", "Pain Illustration", builders.build_pain_illustration),
    ("activity_ratings", "Activity Ratings", builders.build_activity_ratings),
    ("referral_questions", "Referral Questions", builders.build_referral_questions),
    ("conclusions", "Conclusions", builders.build_conclusions),
    ("test_summary", "Summary of Test Results", builders.build_test_summary),
    ("sit_stand", "Sit / Stand Tolerance", builders.build_sit_stand),
    ("effort_overview", "Effort Overview", builders.build_effort_overview),
    ("crosschecks", "Consistency of Effort", builders.build_crosschecks),
    ("test_results", "Test Results", builders.build_test_results),
    ("references", "References", builders.build_references),
    ("appendix", "Appendix", builders.build_appendix),
)


class DocumentAssembler:
    """Merges a categorized snapshot and its crosschecks into a :class:`DocumentModel`.

    Section order is fixed by *section_builders*.  A builder that raises
    yields an empty section with ``error`` set; the other sections are
    still assembled.
    """

    def __init__(
        self,
        config: AssemblyConfig | None = None,
        section_builders: Sequence[tuple[str, str, SectionBuilder]] = DEFAULT_BUILDERS,
    ) -> None:
        self._config = config or AssemblyConfig()
        self._builders = tuple(section_builders)

    def assemble(
        self,
        snapshot: EvaluationSnapshot,
        crosschecks: CrosscheckReport,
        today: date | None = None,
    ) -> DocumentModel:
        """Build the document tree.

        Raises AssemblyError if any test has not been categorized.
        """
        uncategorized = [t.test_id for t in snapshot.tests if t.category is None]
        if uncategorized:
            raise AssemblyError(f"Tests must be categorized before assembly: {', '.join(uncategorized)}")

        ctx = builders.AssemblyContext(
            snapshot=snapshot,
            crosschecks=crosschecks,
            config=self._config,
            today=today or date.today(),
        )
        document = DocumentModel(
            title=constants.REPORT_TITLE,
            metadata={
                "claimant": snapshot.claimant.display_name,
                "claim_number": snapshot.claimant.claim_number,
                "evaluation_date": snapshot.claimant.evaluation_date or ctx.today.isoformat(),
                "evaluator": snapshot.evaluator.name,
                "test_count": len(snapshot.tests),
            },
        )

        for key, title, build in self._builders:
            try:
                section = build(ctx)
            except Exception as exc:
                log.exception("Section %s failed to assemble", key)
                section = Section(key=key, title=title, error=str(exc) or type(exc).__name__)
            document.sections.append(section)

        failed = [s.key for s in document.sections if s.error]
        log.info(
            "Assembled %d sections for %d tests (%d failed)",
            len(document.sections),
            len(snapshot.tests),
            len(failed),
        )
        return document
