"""Synthesis engine: wires the record store, analysis modules, and assembler.

One call runs the full pipeline from scratch over the current stored
records:

    adapter -> snapshot -> categorize -> crosschecks -> assemble

Nothing is cached between calls.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from fce_synthesis.assembler import DocumentAssembler, DocumentModel
from fce_synthesis.categorization import categorize_all
from fce_synthesis.crosschecks import CrosscheckEngine, CrosscheckReport
from fce_synthesis.models import EvaluationSnapshot
from fce_synthesis.persistence import (
    FileBlobStore,
    IBlobStore,
    MemoryBlobStore,
    build_profile_store,
    build_record_store,
)
from fce_synthesis.records import RecordStoreAdapter

if TYPE_CHECKING:
    from fce_synthesis.core.config import AppSettings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SynthesisResult:
    """Everything one synthesis run produced."""

    snapshot: EvaluationSnapshot
    crosschecks: CrosscheckReport
    document: DocumentModel


class SynthesisEngine:
    """Runs the evaluation synthesis pipeline for one evaluation."""

    def __init__(
        self,
        adapter: RecordStoreAdapter,
        crosscheck_engine: CrosscheckEngine | None = None,
        assembler: DocumentAssembler | None = None,
    ) -> None:
        self._adapter = adapter
        self._crosschecks = crosscheck_engine or CrosscheckEngine()
        self._assembler = assembler or DocumentAssembler()

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        evaluation_id: str = "",
        profile_id: str = "",
    ) -> SynthesisEngine:
        """Build an engine with stores and thresholds taken from *settings*.

        Args:
            settings: Application settings; loaded from the environment if omitted.
            evaluation_id: Namespaces the record store for one evaluation.
            profile_id: Evaluator profile to look up in the remote store.

        Returns:
            A ready-to-run engine.
        """
        if settings is None:
            from fce_synthesis.core.config import AppSettings

            settings = AppSettings()

        blob_store: IBlobStore
        if settings.store.backend == "memory":
            blob_store = MemoryBlobStore()
        else:
            blob_path = settings.store.blob_path
            blob_store = FileBlobStore(blob_path / evaluation_id if evaluation_id else blob_path)
        adapter = RecordStoreAdapter(
            store=build_record_store(settings.store, evaluation_id),
            blob_store=blob_store,
            profile_store=build_profile_store(settings.profile),
            profile_id=profile_id,
        )
        log.info(
            "Synthesis engine using %s store for evaluation %s",
            settings.store.backend,
            evaluation_id or "<default>",
        )
        return cls(
            adapter,
            crosscheck_engine=CrosscheckEngine(settings.crosscheck),
            assembler=DocumentAssembler(settings.assembly),
        )

    def load(self) -> EvaluationSnapshot:
        """Read the stored records and assign every test its category."""
        snapshot = self._adapter.load_snapshot()
        tests = categorize_all(snapshot.tests)
        log.debug("Loaded snapshot with %d tests", len(tests))
        return dataclasses.replace(snapshot, tests=tuple(tests))

    def run(self, today: date | None = None) -> SynthesisResult:
        """Run the full pipeline and return the assembled document."""
        snapshot = self.load()
        report = self._crosschecks.run(snapshot.tests, snapshot.referral_answers)
        document = self._assembler.assemble(snapshot, report, today=today)
        return SynthesisResult(snapshot=snapshot, crosschecks=report, document=document)

    def synthesize(self, today: date | None = None) -> DocumentModel:
        """Shortcut for ``run(today).document``."""
        return self.run(today).document
