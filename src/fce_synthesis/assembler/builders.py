"""Section builders for the document model.

Each builder takes the shared :class:`AssemblyContext` and returns one
:class:`Section`.  Builders never touch each other's output, so the
assembler can isolate a failing builder without losing the rest.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import date

from fce_synthesis.assembler import constants
from fce_synthesis.assembler.models import (
    Bar,
    Block,
    BlockKind,
    Field,
    ImageRef,
    Section,
    Table,
)
from fce_synthesis.assembler.test_blocks import build_test_block
from fce_synthesis.core.config import AssemblyConfig
from fce_synthesis.crosschecks import CrosscheckReport
from fce_synthesis.job_match import (
    describe_job_requirements,
    describe_test_results,
    evaluate_job_match,
)
from fce_synthesis.models import (
    CATEGORY_ORDER,
    EffortLevel,
    EvaluationSnapshot,
    ReferralAnswer,
    TestCategory,
    TestRecord,
)
from fce_synthesis.records.normalize import PAIN_VIEWS
from fce_synthesis.references import (
    REFERENCE_CATALOG,
    format_reference,
    reference_categories,
)
from fce_synthesis.statistics import TrialStats, bar_height, calculate_age, trial_stats

_QUESTION_NUMBERING = re.compile(r"^\d+[a-zA-Z]?\)?\s*")
_CONCLUSION = "conclusion"
_PDC_QUESTION = "physical demand classification"

_GOOD = {"good", "excellent", "maximal", "max"}
_POOR = {"poor", "submaximal", "sub-maximal", "low"}

_ACTIVITY_RATING_MAX = 10


@dataclass
class AssemblyContext:
    """Inputs shared by every section builder."""

    snapshot: EvaluationSnapshot
    crosschecks: CrosscheckReport
    config: AssemblyConfig = field(default_factory=AssemblyConfig)
    today: date = field(default_factory=date.today)
    _stats: dict[int, TrialStats] = field(default_factory=dict, repr=False)

    @property
    def tests(self) -> tuple[TestRecord, ...]:
        return self.snapshot.tests

    def stats(self, record: TestRecord) -> TrialStats:
        key = id(record)
        if key not in self._stats:
            self._stats[key] = trial_stats(record)
        return self._stats[key]

    def grouped_tests(self) -> list[tuple[TestCategory, list[TestRecord]]]:
        """Tests grouped by category in display order; empty groups omitted."""
        groups: list[tuple[TestCategory, list[TestRecord]]] = []
        for category in CATEGORY_ORDER:
            members = [t for t in self.tests if t.category == category]
            if members:
                groups.append((category, members))
        return groups

    def ordered_tests(self) -> list[TestRecord]:
        return [t for _, members in self.grouped_tests() for t in members]


def _or_na(value: str) -> str:
    return value or constants.NOT_AVAILABLE


def clean_question(question: str) -> str:
    """Strip a leading ``6a)``-style number from a referral question."""
    return _QUESTION_NUMBERING.sub("", question).strip()


def normalize_effort(text: str) -> EffortLevel | None:
    """Map free-text effort to a level; unrecognized text counts as fair."""
    value = text.strip().lower()
    if not value:
        return None
    if value in _GOOD:
        return EffortLevel.GOOD
    if value in _POOR:
        return EffortLevel.POOR
    return EffortLevel.FAIR


def is_standing_test(test_name: str) -> bool:
    name = test_name.lower()
    return any(keyword in name for keyword in constants.STANDING_KEYWORDS)


# ── Identity ────────────────────────────────────────────────────────


def build_cover(ctx: AssemblyContext) -> Section:
    claimant = ctx.snapshot.claimant
    evaluator = ctx.snapshot.evaluator
    fields = [
        Field("Claimant Name", _or_na(claimant.display_name)),
        Field("Claimant #", _or_na(claimant.claim_number or claimant.claimant_id)),
        Field("Evaluation Date", claimant.evaluation_date or ctx.today.isoformat()),
    ]
    clinic = [
        Field("Clinic", _or_na(evaluator.clinic_name)),
        Field("Address", _or_na(evaluator.full_address)),
        Field("Phone", _or_na(evaluator.phone)),
    ]
    if evaluator.fax:
        clinic.append(Field("Fax", evaluator.fax))

    blocks = [
        Block(kind=BlockKind.HEADING, text=constants.REPORT_TITLE),
        Block(kind=BlockKind.FIELDS, fields=fields),
        Block(kind=BlockKind.FIELDS, title="Clinic", fields=clinic),
    ]
    if evaluator.clinic_logo:
        blocks.append(Block(kind=BlockKind.IMAGES, images=[ImageRef(evaluator.clinic_logo, "Clinic logo")]))
    blocks.append(Block(kind=BlockKind.PARAGRAPH, text=constants.CONFIDENTIAL_FOOTER))
    return Section(key="cover", title=constants.REPORT_TITLE, blocks=blocks)


def build_client_information(ctx: AssemblyContext) -> Section:
    claimant = ctx.snapshot.claimant
    age = calculate_age(claimant.date_of_birth, ctx.today)
    dob = _or_na(claimant.date_of_birth)
    if age is not None:
        dob = f"{dob} ({age})"

    fields = [
        Field("Name", _or_na(claimant.full_name)),
        Field("ID", _or_na(claimant.claimant_id or claimant.claim_number)),
        Field("Address", _or_na(claimant.address)),
        Field("DOB (Age)", dob),
        Field("Gender", _or_na(claimant.gender)),
        Field("Height", _or_na(claimant.height)),
        Field("Home Phone", _or_na(claimant.phone)),
        Field("Weight", _or_na(claimant.weight)),
        Field("Work Phone", _or_na(claimant.work_phone)),
        Field("Dominant Hand", _or_na(claimant.dominant_hand)),
        Field("Occupation", _or_na(claimant.occupation)),
        Field("Referred By", _or_na(claimant.referred_by)),
        Field("Employer(SIC)", _or_na(claimant.employer)),
        Field("Resting Pulse", _or_na(claimant.resting_pulse)),
        Field("Insurance", _or_na(claimant.insurance)),
        Field("BP Sitting", _or_na(claimant.bp_sitting)),
        Field("Physician", _or_na(claimant.physician)),
        Field("Tested By", _or_na(ctx.snapshot.evaluator.name)),
    ]
    blocks = [Block(kind=BlockKind.FIELDS, fields=fields)]
    if claimant.photo_ref:
        blocks.append(Block(kind=BlockKind.IMAGES, images=[ImageRef(claimant.photo_ref, "Claimant")]))
    if claimant.mechanism_of_injury:
        blocks.append(
            Block(
                kind=BlockKind.PARAGRAPH,
                title="Mechanism of Injury",
                text=claimant.mechanism_of_injury,
            )
        )
    return Section(key="client_information", title="Client Information", blocks=blocks)


def build_pain_illustration(ctx: AssemblyContext) -> Section:
    """Four fixed anatomical views, each with its image and markers."""
    pain = ctx.snapshot.pain
    children = []
    for index, view in enumerate(PAIN_VIEWS):
        markers = [m for m in pain.markers if m.view == view]
        blocks = []
        if index < len(pain.view_images):
            blocks.append(
                Block(kind=BlockKind.IMAGES, images=[ImageRef(pain.view_images[index], view.title())])
            )
        if markers:
            blocks.append(
                Block(
                    kind=BlockKind.TABLE,
                    table=Table(
                        columns=["Symbol", "Label", "X", "Y"],
                        rows=[[m.symbol, m.label, f"{m.x:g}", f"{m.y:g}"] for m in markers],
                    ),
                )
            )
        children.append(Section(key=f"pain_{view}", title=view.title(), blocks=blocks))

    legend = Block(
        kind=BlockKind.TABLE,
        title="Legend",
        table=Table(columns=["Symbol", "Meaning"], rows=[list(pair) for pair in constants.PAIN_LEGEND]),
    )
    blocks = [legend]
    if pain.image_refs:
        blocks.append(Block(kind=BlockKind.IMAGES, images=[ImageRef(ref) for ref in pain.image_refs]))
    return Section(key="pain_illustration", title="Pain Illustration", blocks=blocks, children=children)


def build_activity_ratings(ctx: AssemblyContext) -> Section:
    ratings = ctx.snapshot.activity_ratings
    if not ratings:
        return Section(key="activity_ratings", title="Activity Ratings")
    bars = [
        Bar(
            label=r.name,
            value=r.rating,
            height=bar_height(r.rating, _ACTIVITY_RATING_MAX, ctx.config.bar_max_px),
        )
        for r in ratings
    ]
    return Section(
        key="activity_ratings",
        title="Activity Ratings",
        blocks=[Block(kind=BlockKind.BAR_CHART, title="Perceived ability (0-10)", bars=bars)],
    )


# ── Referral questions and conclusions ──────────────────────────────


def _pdc_blocks(answer: ReferralAnswer) -> list[Block]:
    status = answer.structured.status if answer.structured else ""
    level = next((name for name in constants.PDC_LEVELS if name.lower() == status.lower()), "")
    rows = [
        [title, description, "X" if name == level else ""]
        for name, (title, description) in constants.PDC_LEVELS.items()
    ]
    blocks = [
        Block(
            kind=BlockKind.TABLE,
            table=Table(columns=["Classification", "Description", "Selected"], rows=rows, caption=constants.PDC_SOURCE),
        )
    ]
    if level:
        blocks.append(Block(kind=BlockKind.PARAGRAPH, text=f"*{level} which is in line with full return to duties."))
    if answer.structured and answer.structured.comments:
        blocks.append(Block(kind=BlockKind.PARAGRAPH, text=answer.structured.comments))
    return blocks


def build_referral_questions(ctx: AssemblyContext) -> Section:
    children = []
    for index, answer in enumerate(ctx.snapshot.referral_answers):
        question = clean_question(answer.question)
        if _CONCLUSION in question.lower():
            continue

        if _PDC_QUESTION in question.lower():
            blocks = _pdc_blocks(answer)
        elif answer.structured is not None:
            blocks = [
                Block(
                    kind=BlockKind.FIELDS,
                    fields=[
                        Field("Status", answer.structured.status),
                        Field("Comments", answer.structured.comments),
                    ],
                )
            ]
        else:
            blocks = [Block(kind=BlockKind.PARAGRAPH, text=answer.answer or "No answer provided.")]

        if answer.image_refs:
            blocks.append(Block(kind=BlockKind.IMAGES, images=[ImageRef(ref) for ref in answer.image_refs]))
        children.append(Section(key=f"referral_{index + 1}", title=question, blocks=blocks))
    return Section(key="referral_questions", title="Referral Questions", children=children)


def _checklist(known: tuple[str, ...], selected: dict[str, bool]) -> list[str]:
    """Checked behaviors: known ones in fixed order, then any others in input order."""
    items = [name for name in known if selected.get(name)]
    items += [name for name, on in selected.items() if on and name not in known]
    return items


def build_conclusions(ctx: AssemblyContext) -> Section:
    conclusion = ctx.snapshot.conclusion
    evaluator = ctx.snapshot.evaluator
    blocks = []

    question = next(
        (a for a in ctx.snapshot.referral_answers if _CONCLUSION in a.question.lower()),
        None,
    )
    if question is not None and question.answer:
        blocks.append(Block(kind=BlockKind.PARAGRAPH, text=question.answer))
        if question.image_refs:
            blocks.append(Block(kind=BlockKind.IMAGES, images=[ImageRef(ref) for ref in question.image_refs]))

    status = conclusion.return_to_work_status
    if status:
        blocks.append(
            Block(
                kind=BlockKind.FIELDS,
                title="Return to Work Status",
                fields=[
                    Field(status, constants.RETURN_TO_WORK_OPTIONS.get(status, "")),
                    Field("Comments", conclusion.return_to_work_comments),
                ],
            )
        )

    for heading, known, selected in (
        (constants.RPDR_HEADING, constants.RPDR_BEHAVIORS, conclusion.rpdr_behaviors),
        (constants.CTP_HEADING, constants.CTP_BEHAVIORS, conclusion.ctp_behaviors),
    ):
        items = _checklist(known, selected)
        if items:
            blocks.append(Block(kind=BlockKind.LIST, title=heading, items=items))

    blocks.append(
        Block(
            kind=BlockKind.FIELDS,
            title="Signature",
            fields=[
                Field("Evaluator", _or_na(evaluator.name)),
                Field("License No.", _or_na(evaluator.license_no)),
                Field("Clinic", _or_na(evaluator.clinic_name)),
            ],
        )
    )
    return Section(key="conclusions", title="Conclusions", blocks=blocks)


# ── Test summaries ──────────────────────────────────────────────────


def build_test_summary(ctx: AssemblyContext) -> Section:
    """Job requirements, results, and job match grouped by category."""
    tables = []
    for category, members in ctx.grouped_tests():
        rows = [
            [
                t.test_name,
                describe_job_requirements(t),
                describe_test_results(t),
                evaluate_job_match(t).label,
            ]
            for t in members
        ]
        tables.append(
            Table(
                columns=["Test", "Job Requirements", "Test Results", "Job Match"],
                rows=rows,
                caption=category.value,
            )
        )
    blocks = [Block(kind=BlockKind.TABLE, tables=tables)] if tables else []
    blocks.append(Block(kind=BlockKind.PARAGRAPH, text=constants.SUMMARY_LEGEND))
    return Section(key="test_summary", title="Summary of Test Results", blocks=blocks)


@dataclass(frozen=True)
class TimelineRow:
    """One row of the sit/stand timeline with running totals."""

    activity: str
    sit: int
    stand: int
    total_sit: int
    total_stand: int
    record: TestRecord | None = None


def sit_stand_timeline(tests: list[TestRecord], config: AssemblyConfig) -> list[TimelineRow]:
    """Interview and overview baselines, then one row per test."""
    rows = [
        TimelineRow(constants.CLIENT_INTERVIEW_LABEL, config.interview_minutes, 0, config.interview_minutes, 0),
    ]
    total_sit, total_stand = config.interview_minutes, config.overview_minutes
    rows.append(TimelineRow(constants.ACTIVITY_OVERVIEW_LABEL, 0, config.overview_minutes, total_sit, total_stand))
    for record in tests:
        if is_standing_test(record.test_name):
            sit, stand = 0, config.minutes_per_test
        else:
            sit, stand = config.minutes_per_test, 0
        total_sit += sit
        total_stand += stand
        rows.append(TimelineRow(record.test_name, sit, stand, total_sit, total_stand, record))
    return rows


def _minutes(value: int) -> str:
    return f"{value} min" if value else ""


def build_sit_stand(ctx: AssemblyContext) -> Section:
    timeline = sit_stand_timeline(ctx.ordered_tests(), ctx.config)
    rows = []
    for row in timeline:
        if row.record is None:
            results, requirements, match = "N/A", "N/A", "Yes"
        else:
            results = describe_test_results(row.record)
            requirements = describe_job_requirements(row.record)
            match = evaluate_job_match(row.record).label
        rows.append(
            [
                row.activity,
                _minutes(row.sit),
                _minutes(row.stand),
                f"{row.total_sit} min",
                f"{row.total_stand} min",
                results,
                requirements,
                match,
            ]
        )
    last = timeline[-1]
    rows.append(["Total Sit / Stand Time", f"{last.total_sit} min", f"{last.total_stand} min", "", "", "", "", ""])
    return Section(
        key="sit_stand",
        title="Sit / Stand Tolerance",
        blocks=[
            Block(
                kind=BlockKind.TABLE,
                table=Table(columns=list(constants.SIT_STAND_COLUMNS), rows=rows),
                attributes={"total_sit": str(last.total_sit), "total_stand": str(last.total_stand)},
            ),
            Block(kind=BlockKind.PARAGRAPH, text=constants.SUMMARY_LEGEND),
        ],
    )


def build_effort_overview(ctx: AssemblyContext) -> Section:
    levels = Counter(normalize_effort(t.effort) for t in ctx.tests)
    demonstrated = sum(1 for t in ctx.tests if t.demonstrated is True)
    not_demonstrated = sum(1 for t in ctx.tests if t.demonstrated is False)
    fields = [
        Field("Good", str(levels[EffortLevel.GOOD])),
        Field("Fair", str(levels[EffortLevel.FAIR])),
        Field("Poor", str(levels[EffortLevel.POOR])),
        Field("Demonstrated", str(demonstrated)),
        Field("Not Demonstrated", str(not_demonstrated)),
    ]
    return Section(
        key="effort_overview",
        title="Effort Overview",
        blocks=[Block(kind=BlockKind.FIELDS, fields=fields)],
    )


def build_crosschecks(ctx: AssemblyContext) -> Section:
    rows = [[r.name, r.description, r.pass_mark, r.fail_mark] for r in ctx.crosschecks.results]
    report = ctx.crosschecks
    return Section(
        key="crosschecks",
        title="Consistency of Effort",
        blocks=[
            Block(
                kind=BlockKind.TABLE,
                table=Table(columns=list(constants.CROSSCHECK_COLUMNS), rows=rows),
                attributes={
                    "pass_count": str(report.pass_count),
                    "fail_count": str(report.fail_count),
                    "not_applicable_count": str(report.not_applicable_count),
                },
            )
        ],
    )


def build_test_results(ctx: AssemblyContext) -> Section:
    """One child section per category, one result block per test."""
    children = [
        Section(
            key=f"results_{category.name.lower()}",
            title=category.value,
            blocks=[
                build_test_block(t, ctx.stats(t), ctx.snapshot.protocol_selection)
                for t in members
            ],
        )
        for category, members in ctx.grouped_tests()
    ]
    return Section(key="test_results", title="Test Results", children=children)


def build_references(ctx: AssemblyContext) -> Section:
    categories = reference_categories((t.test_id, t.test_name) for t in ctx.ordered_tests())
    blocks = [
        Block(
            kind=BlockKind.LIST,
            title=category,
            items=[format_reference(ref) for ref in REFERENCE_CATALOG[category]],
            attributes={"reference_category": category},
        )
        for category in categories
    ]
    return Section(key="references", title="References", blocks=blocks)


def build_appendix(ctx: AssemblyContext) -> Section:
    """Library asset listing; bytes stay with the asset, not the document."""
    assets = ctx.snapshot.blob_assets
    if not assets:
        return Section(key="appendix", title="Appendix")
    rows = [[a.id, a.name, a.mime_type, str(len(a.data)), a.category] for a in assets]
    return Section(
        key="appendix",
        title="Appendix",
        blocks=[
            Block(
                kind=BlockKind.TABLE,
                table=Table(columns=["ID", "Name", "Type", "Size (bytes)", "Category"], rows=rows),
                images=[ImageRef(a.id, a.name) for a in assets if a.mime_type.startswith("image/")],
            )
        ],
    )
