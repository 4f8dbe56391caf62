"""Fixed report text: classification tables, checklists, and legends."""

from __future__ import annotations

REPORT_TITLE = "FCE Executive Summary"
CONFIDENTIAL_FOOTER = "CONFIDENTIAL INFORMATION ENCLOSED"
NOT_AVAILABLE = "N/A"

SUMMARY_LEGEND = "L=Left, R=Right, F=Flexion, E=Extension, %IS=% Industrial Standard, HR=Heart Rate"

# Tests naming one of these accrue standing time; everything else is seated.
STANDING_KEYWORDS: tuple[str, ...] = (
    "lumbar",
    "cervical",
    "thoracic",
    "shoulder",
    "elbow",
    "wrist",
    "reach",
    "crouch",
    "stoop",
    "bend",
    "balance",
    "climb",
    "walk",
    "push",
    "pull",
    "carry",
    "lift",
    "overhead",
)

PDC_SOURCE = "(Dictionary of Occupational Titles - Volume II, Fourth Edition, Revised 1991)"

# level -> (title, description)
PDC_LEVELS: dict[str, tuple[str, str]] = {
    "Sedentary": (
        "(S) Sedentary Work",
        "Exerting up to 10 lbs of force occasionally and/or a negligible amount of force "
        "frequently to lift, carry, push, pull, or otherwise move objects, including the human "
        "body. Sedentary work involves sitting most of the time but may involve walking or "
        "standing for brief periods of time.",
    ),
    "Light": (
        "(L) Light Work",
        "Exerting 11 to 25 lb of force occasionally, and/or up to 10 lb of force frequently, "
        "and/or a negligible amount of force constantly to move objects. Physical demand "
        "requirements are in excess of those for sedentary work.",
    ),
    "Medium": (
        "(M) Medium Work",
        "Exerting 26 to 50 lbs of force occasionally, and/or 11 to 25 lbs of force frequently, "
        "and/or greater than negligible up to 10 lbs of force constantly to move objects. "
        "Physical demand requirements are in excess of those for light work.",
    ),
    "Heavy": (
        "(H) Heavy Work",
        "Exerting 51 to 100 lbs of force occasionally, and/or 26 to 50 lbs of force frequently, "
        "and/or 11 to 25 lbs of force constantly to move objects. Physical demand requirements "
        "are in excess of those for medium work.",
    ),
    "Very Heavy": (
        "(VH) Very Heavy Work",
        "Exerting over 100 lbs of force occasionally, and over 50 lbs of force frequently, and "
        "over 25 lbs of force constantly to move objects.",
    ),
}

RETURN_TO_WORK_OPTIONS: dict[str, str] = {
    "Return to Regular Duties": (
        "Client demonstrated the ability to Return to Work at prior level of function. "
        "The capabilities displayed meet or exceed the demands of the pre-injury job, a full "
        "return to work without restrictions is recommended."
    ),
    "Return with Restrictions/Modified Duties": (
        "The demonstrated abilities tested are lower than the job demands as per the "
        "restrictions noted. At the employer's discretion they may desire to modify the job "
        "or reassign the client to a different role that fits within these new capabilities."
    ),
    "Need for Further Rehabilitation": (
        "Significant deficits were identified and based on the FCE results; it is recommended "
        "that the client undergoes additional physical / occupational therapy and retest in "
        "4-6 weeks."
    ),
    "Need for Work Conditioning": (
        "Based on the FCE results, it is recommended that the client undergoes 3 to 6 weeks of "
        "work conditioning to build up their strength and endurance gradually before "
        "attempting to return to work."
    ),
    "Vocational Retraining": (
        "Based on the results of the FCE and the essential and critical demands of the job, "
        "the client has demonstrated that their previous occupation is not physically feasible "
        "long-term and their may be a need for vocational retraining for a different career."
    ),
}

RPDR_HEADING = (
    "Observed Symptom Behavior / Reliability of Pain and Disability Reports (RPDR)"
)
RPDR_BEHAVIORS: tuple[str, ...] = (
    "Grimacing",
    "Stretching",
    "Rubbing area",
    "Unloading extremity(s)",
    "Shaking the involved area",
    "Guarding",
    "Decreased speed of movement/mobility",
    "Alternating positions/postures",
    "Sitting for unoffered breaks",
    "Taking short breaks",
    "Terminating tasks due to pain and apprehension",
    "Demonstrated need to lay down",
    "Open/Close hand(s) repeatedly",
)

CTP_HEADING = "Observable Signs of Effort / Competitive Testing Performance (CTP)"
CTP_BEHAVIORS: tuple[str, ...] = (
    "Wiping hands",
    "Repositioning body closer to a task",
    "Starting a task early",
    "ending a task late",
    "Asking for more weight",
    "Extra muscular recruitment",
    "Asking to repeat a task",
    "Asking if met norms/comparing scores on tasks",
    "Verbal expressions of frustration",
)

PAIN_LEGEND: tuple[tuple[str, str], ...] = (
    ("P1", "Primary"),
    ("P2", "Secondary"),
    ("~", "Aching"),
    ("/", "Shooting"),
    ("x", "Burning"),
    ("•", "Pins and Needles"),
    ("o", "Numbness"),
    ("T", "Temperature"),
    ("SW", "Swelling"),
    ("S", "Scar"),
    ("C", "Crepitus"),
)

CROSSCHECK_COLUMNS = ["Consistent Crosschecks", "Description", "Pass", "Fail"]

SIT_STAND_COLUMNS = [
    "Activity Tested",
    "Sit Time",
    "Stand Time",
    "Total Sit",
    "Total Stand",
    "Test Results",
    "Job Requirements",
    "Job Match (Yes/No)",
]
CLIENT_INTERVIEW_LABEL = "Client Interview"
ACTIVITY_OVERVIEW_LABEL = "Activity Overview"

DEFAULT_TEST_DESCRIPTION = (
    "The client was tested in our facility using standardized assessment protocols. "
    "The test results were compared to normative data when available."
)
# template -> description shown above the per-test table
TEST_DESCRIPTIONS: dict[str, str] = {
    "range_of_motion": (
        "The client was tested using range of motion inclinometers. "
        "Results were compared to normative data."
    ),
    "grip_strength": (
        "The client was tested using a hand grip evaluation device. It is expected that the "
        "dominant hand will display 10% greater values than the non-dominant hand."
    ),
    "lift": (
        "The client was tested using a dynamic lift evaluation apparatus. "
        "Results were compared to normative data."
    ),
    "occupational": (
        "Occupational tasks were scored with Methods-Time Measurement and reported as a "
        "percentage of the industrial standard."
    ),
}
CARDIO_DESCRIPTIONS: dict[str, str] = {
    "Bruce Treadmill": "The Bruce Treadmill Test measures aerobic endurance by estimating VO₂ max.",
    "mCAFT": "mCAFT evaluates aerobic fitness using step cadence protocols.",
    "Kasch Step": "Kasch Step Test assesses post-exercise heart-rate recovery over 3 minutes.",
    "YMCA Step": "The YMCA Step Test estimates aerobic fitness from one-minute recovery heart rate.",
}
