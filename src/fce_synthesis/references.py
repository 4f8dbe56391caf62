"""Literature references cited under each test, keyed by reference category."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Reference:
    """One literature citation."""

    author: str
    title: str
    year: int | None = None
    journal: str = ""
    volume: str = ""
    pages: str = ""
    publisher: str = ""
    full_text: str = ""


def format_reference(ref: Reference) -> str:
    """Render a citation as a single line ending in a period."""
    if ref.full_text:
        return ref.full_text

    text = f"{ref.title}, {ref.author}"
    if ref.journal:
        text += f", {ref.journal}"
    if ref.volume:
        text += f", {ref.volume}"
    if ref.pages:
        text += f", {ref.pages}"
    elif ref.year:
        text += f" ({ref.year})"
    if ref.publisher and not ref.journal:
        text += f", {ref.publisher}"
    return text if text.endswith(".") else text + "."


_MATHIOWETZ = Reference(
    author="V. Mathiowetz et al.",
    title="Grip and Pinch Strength: Normative Data for Adults",
    journal="Arch Pys Med Rehab",
    year=1985,
    volume="Vol. 66",
    pages="pp. 69 (Feb 1985)",
)
_STOKES = Reference(
    author="H. Stokes",
    title="The Seriously Uninjured Hand-Weakness of Grip",
    journal="Journal of Occupational Medicine",
    year=1983,
    pages="pp. 683-684 (Sep 1983)",
)
_MATHESON = Reference(
    author="L. Matheson, et al.",
    title="Grip Strength in a Disabled Sample: Reliability and Normative Standards",
    journal="Industrial Rehabilitation Quarterly",
    year=1988,
    volume="Vol. 1, no. 3",
    pages="Fall 1988",
)
_HILDRETH = Reference(
    author="Hildreth et al.",
    title="Detection of Submaximal effort by use of the rapid exchange grip",
    journal="Journal of Hand Surgery",
    year=1989,
    pages="pp. 742 (Jul 1989)",
)
_AMA = "Guides to the Evaluation of Permanent Impairment"
_JMTM = "Journal of Methods-Time Measurement"

REFERENCE_CATALOG: dict[str, tuple[Reference, ...]] = {
    "static-lift": (
        Reference(
            author="William M. Keyserling",
            title="Isometric Strength Testing in Selecting Workers for Strenuous Jobs",
            journal="University of Michigan",
            year=1979,
        ),
        Reference(
            author="Don B. Chaffin, PhD.",
            title="Pre-employment Strength Testing: An Updated Position",
            journal="Journal of Occupational Medicine",
            year=1978,
            volume="Vol. 20 No. 6",
            pages="June 1978",
        ),
        Reference(
            author="Donald Badges PhD.",
            title="Work Practices Guide to Manual Lifting",
            publisher="NIOSH",
            year=1981,
        ),
        Reference(
            author="Don Chaffin, PhD.",
            title="Ergonomics Guide for the Assessment of Human Static Strength",
            journal="American Industrial Hygiene Association Journal",
            year=1975,
            pages="July 1975",
        ),
        Reference(
            author="Harber & SooHoo",
            title="Static Ergonomic Strength Testing in Evaluating Occupational Back Pain",
            journal="Journal of Occupational Medicine",
            year=1984,
            volume="Vol. 26 No. 12",
            pages="Dec 1984",
        ),
    ),
    "dynamic-lift": (
        Reference(
            author="Mayer et al.",
            title=(
                "Progressive Iso-inertial Lifting Evaluation: A Standardized Protocol "
                "and Normative Database"
            ),
            journal="Spine",
            year=1988,
            volume="Volume 13 Num. 9",
            pages="pp. 993",
        ),
    ),
    "hand-strength": (_MATHIOWETZ, _STOKES, _MATHESON, _HILDRETH),
    "pinch-strength": (_MATHIOWETZ, _STOKES, _MATHESON, _HILDRETH),
    "range-of-motion": (
        Reference(
            author="American Medical Association",
            title=_AMA,
            year=1993,
            publisher="4th ed.",
            pages="pp. 112-135",
        ),
        Reference(
            author="American Medical Association",
            title=_AMA,
            year=1990,
            publisher="3rd ed.",
            pages="pp. 81-102",
        ),
    ),
    "goniometers": (
        Reference(
            author="American Medical Association",
            title=_AMA,
            year=1993,
            publisher="4th ed.",
            pages="pp. 90-92",
        ),
        Reference(
            author="American Medical Association",
            title=_AMA,
            year=1990,
            publisher="3rd ed.",
            pages="pp. 20-38, 101",
        ),
    ),
    "muscle-test": (
        Reference(
            author="A.W. Andrews",
            title="Hand-held Dynamometry for Measuring Muscle Strength",
            journal="Journal of Human Muscle Performance",
            year=1991,
            pages="pp. 35 (Jun 1991)",
        ),
    ),
    "horizontal-validity": (
        Reference(
            author="Berryhill et al",
            title=(
                "Horizontal Strength Changes: An Ergometric Measure for Determining "
                "Validity of Effort in Impairment Evaluations-A Preliminary Report"
            ),
            journal="Journal of Disability",
            year=1993,
            volume="Vol. 3, Num. 14",
            pages="pp. 143, (Jul 1993)",
        ),
        Reference(
            author="L. A. Owens",
            title="Assessing Reliability of Performance in the Functional Capacity Assessment",
            journal="Journal of Disability",
            year=1993,
            volume="Vol. 3, Num. 14",
            pages="pp. 149, (Jul 1993)",
        ),
    ),
    "mtm": (
        Reference(
            author="Anderson, D.S. and Edstrom D.P.",
            title=(
                "MTM Personnel Selection Tests; Validation at a Northwestern National "
                "Life Insurance Company"
            ),
            journal=_JMTM,
            year=1975,
            volume="15, (3)",
        ),
        Reference(
            author="Birdsong, J.H. and Chyatte, S.B.",
            title="Further medical applications of methods-time measurement",
            journal=_JMTM,
            year=1970,
            volume="15",
            pages="19-27",
        ),
        Reference(
            author="Brickey",
            title="MTM in a Sheltered Workshop",
            journal=_JMTM,
            year=1975,
            volume="8, (3)",
            pages="2-7",
        ),
        Reference(
            author="Chyatte, S.B. and Birdsong, J.H.",
            title="Methods time measurement in assessment of motor performance",
            journal="Archives of Physical Medicine and Rehabilitation",
            year=1972,
            volume="53",
            pages="38-44",
        ),
        Reference(
            author="Foulke, J.A.",
            title="Estimating Individual Operator Performance",
            journal=_JMTM,
            year=1975,
            volume="15, (1)",
            pages="18-23",
        ),
        Reference(
            author="Grant, G.W.B., Moores, B. and Whelan, E.",
            title=(
                "Applications of Methods-time measurement in training centers for the "
                "mentally handicapped"
            ),
            journal=_JMTM,
            year=1975,
            volume="11",
            pages="23-30",
        ),
    ),
    "bruce-treadmill": (
        Reference(
            author="Bruce, R. A., et al.",
            title=(
                "Maximal oxygen intake and nomographic assessment of functional aerobic "
                "impairment in cardiovascular disease"
            ),
            journal="Am Heart J",
            year=1973,
            full_text=(
                'Bruce, R. A., et al. "Maximal oxygen intake and nomographic assessment of '
                'functional aerobic impairment in cardiovascular disease." Am Heart J (1973).'
            ),
        ),
        Reference(
            author="Acampa, W., Assante, R., Zampella, E.",
            title="The role of treadmill exercise testing",
            journal="J Nucl Cardiol",
            year=2016,
            volume="23(5)",
            pages="991-996",
            full_text=(
                "Acampa W, Assante R, Zampella E. The role of treadmill exercise testing. "
                "J Nucl Cardiol. 2016 Oct;23(5):991-996. [PubMed]"
            ),
        ),
        Reference(
            author="Gorman, M.W., Feigl, E.O.",
            title="Control of coronary blood flow during exercise",
            journal="Exerc Sport Sci Rev",
            year=2012,
            volume="40(1)",
            pages="37-42",
            full_text=(
                "Gorman MW, Feigl EO. Control of coronary blood flow during exercise. "
                "Exerc Sport Sci Rev. 2012 Jan;40(1):37-42. [PubMed]"
            ),
        ),
    ),
    "mcaft": (
        Reference(
            author=(
                "Emily Wolfe Phillips, Deepa P. Rao, Leonard A. Kaminsky, Grant R. Tomkinson, "
                "Robert Ross, and Justin J. Lang"
            ),
            title=(
                "Criterion-referenced mCAFT cut-points to identify metabolically healthy "
                "cardiorespiratory fitness among adults aged 18–69 years: an analysis of "
                "the Canadian Health Measures Survey"
            ),
            journal="Applied Physiology, Nutrition, and Metabolism",
            year=2020,
        ),
        Reference(
            author="Statistics Canada",
            title="Normative-referenced percentile values for physical fitness",
            journal="Health Reports",
            year=2019,
            volume="Vol. 30, no. 10",
            pages="pp. 14-22, October 2019",
        ),
    ),
    "kasch": (
        Reference(
            author="Kasch, F. W., Phillips, W. H., Ross, W. D., Carter, J. E., & Boyer, J. L.",
            title="A comparison of maximal oxygen uptake by treadmill and step-test procedures",
            journal="Journal of Applied Physiology",
            year=1966,
            volume="21(4)",
            pages="1387–1389",
        ),
        Reference(
            author="Kasch, F. W., & Boyer, J. L.",
            title="Adult fitness: Principles and practices",
            publisher="KASCH",
            year=1968,
        ),
    ),
}

DEFAULT_REFERENCE_CATEGORY = "hand-strength"

# Ordered keyword rules over test ids and names; first hit wins.
_CATEGORY_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("bruce-treadmill", ("bruce", "treadmill")),
    ("mcaft", ("mcaft", "step-test", "step test")),
    ("kasch", ("kasch",)),
    ("horizontal-validity", ("horizontal",)),
    ("dynamic-lift", ("dynamic", "frequent")),
    ("static-lift", ("static", "lift")),
    ("pinch-strength", ("pinch",)),
    ("hand-strength", ("hand-strength", "grip", "rapid exchange", "rapid-exchange")),
    ("muscle-test", ("muscle",)),
    ("goniometers", ("thumb", "index", "middle", "ring-", "little", "toe", "digit", "finger ")),
    ("mtm", ("fingering", "handling", "reach", "mtm")),
    (
        "range-of-motion",
        ("rom", "range", "motion", "flexion", "extension", "rotation", "spine", "cervical"),
    ),
)


def reference_category(test_id: str, test_name: str = "") -> str:
    """Reference category for a test, by id first and then by name."""
    for text in (test_id.lower(), test_name.lower()):
        if not text:
            continue
        for category, keywords in _CATEGORY_RULES:
            if any(k in text for k in keywords):
                return category
    return DEFAULT_REFERENCE_CATEGORY


def references_for_test(test_id: str, test_name: str = "") -> tuple[Reference, ...]:
    return REFERENCE_CATALOG[reference_category(test_id, test_name)]


def reference_categories(tests: Iterable[tuple[str, str]]) -> list[str]:
    """Unique reference categories for ``(test_id, test_name)`` pairs, in order."""
    seen: list[str] = []
    for test_id, test_name in tests:
        category = reference_category(test_id, test_name)
        if category not in seen:
            seen.append(category)
    return seen
