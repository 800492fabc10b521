"""
NeuroWiki: Bedside Scores
=========================
ABCD2, GCS, ICH Score, HAS-BLED, RoPE, ASPECTS, NIHSS (with the RACE LVO screen),
Boston CAA criteria and the Heidelberg bleeding classification.
Point sums are plain arithmetic; every band lookup goes through a RuleTable.
"""

from typing import Iterable

from constants import ABCD2, GCS, ICH, HAS_BLED, ROPE, ASPECTS, NIHSS, RACE, BOSTON_CAA, HEIDELBERG
from models import (
    ABCD2Input, ABCD2Result,
    GCSInput, GCSResult,
    ICHInput, ICHResult,
    HASBLEDInput, HASBLEDResult,
    RoPEInput, RoPEResult,
    ASPECTSInput, ASPECTSResult,
    NIHSSInput, NIHSSResult, RACEResult,
    BostonCAAInput, BostonCAAResult,
    HeidelbergInput, HeidelbergResult,
    ScoreInputError,
)
from rule_table import RuleTable
from safety import require_int_in_range, require_non_negative

ABCD2_RISK = RuleTable(ABCD2.RISK_BANDS, ABCD2.RISK_DEFAULT, name="abcd2_risk")
GCS_SEVERITY = RuleTable(GCS.SEVERITY_BANDS, GCS.SEVERITY_DEFAULT, name="gcs_severity")
ICH_GCS_POINTS = RuleTable(ICH.GCS_POINT_BANDS, ICH.GCS_POINT_DEFAULT, name="ich_gcs_points")
HAS_BLED_RISK = RuleTable(HAS_BLED.RISK_BANDS, HAS_BLED.RISK_DEFAULT, name="has_bled_risk")
HAS_BLED_BLEEDS = RuleTable(HAS_BLED.BLEEDS_PER_100_BANDS, HAS_BLED.BLEEDS_PER_100_DEFAULT,
                            name="has_bled_bleeds")
ROPE_AGE_POINTS = RuleTable(ROPE.AGE_POINT_BANDS, ROPE.AGE_POINT_DEFAULT, name="rope_age_points")
ROPE_PFO_ATTRIBUTABLE = RuleTable(ROPE.PFO_ATTRIBUTABLE_BANDS, ROPE.PFO_ATTRIBUTABLE_DEFAULT,
                                  name="rope_pfo_attributable")
ASPECTS_INTERPRETATION = RuleTable(ASPECTS.INTERPRETATION_BANDS, ASPECTS.INTERPRETATION_DEFAULT,
                                   name="aspects_interpretation")
RACE_FACIAL = RuleTable(RACE.FACIAL_BANDS, RACE.FACIAL_DEFAULT, name="race_facial")
RACE_LIMB = RuleTable(RACE.LIMB_BANDS, RACE.LIMB_DEFAULT, name="race_limb")
RACE_GAZE = RuleTable(RACE.GAZE_BANDS, RACE.GAZE_DEFAULT, name="race_gaze")
RACE_APHASIA = RuleTable(RACE.APHASIA_BANDS, RACE.APHASIA_DEFAULT, name="race_aphasia")
RACE_AGNOSIA = RuleTable(RACE.AGNOSIA_BANDS, RACE.AGNOSIA_DEFAULT, name="race_agnosia")
RACE_PROBABILITY = RuleTable(RACE.PROBABILITY_BANDS, RACE.PROBABILITY_DEFAULT, name="race_probability")

# --- ABCD2 (Johnston et al. Lancet 2007) ---

def calculate_abcd2(inputs: ABCD2Input) -> ABCD2Result:
    """2-day stroke risk after TIA."""
    duration = require_non_negative("duration_min", inputs.duration_min)

    score = 0
    if inputs.age_60_or_older: score += 1
    if inputs.bp_140_90_or_higher: score += 1

    # Clinical features: weakness outranks speech
    if inputs.unilateral_weakness:
        score += 2
    elif inputs.speech_disturbance:
        score += 1

    if duration >= 60:
        score += 2
    elif duration >= 10:
        score += 1

    if inputs.diabetes: score += 1

    risk = ABCD2_RISK.evaluate(score)
    return ABCD2Result(
        score=score,
        risk=risk,
        two_day_risk_percent=ABCD2.TWO_DAY_RISK_PERCENT[risk],
        label=ABCD2.RISK_LABELS[risk],
    )

# --- Glasgow Coma Scale (Teasdale & Jennett, Lancet 1974) ---

def calculate_gcs(inputs: GCSInput) -> GCSResult:
    eye = require_int_in_range("eye", inputs.eye, GCS.EYE_RANGE)
    verbal = require_int_in_range("verbal", inputs.verbal, GCS.VERBAL_RANGE)
    motor = require_int_in_range("motor", inputs.motor, GCS.MOTOR_RANGE)

    # A component that cannot be tested scores 0 towards severity
    scored = (0 if inputs.eye_not_testable else eye) + (0 if inputs.verbal_not_testable else verbal) + motor

    if inputs.verbal_not_testable:
        # Intubated: report E + M with a 'T' suffix, even when the eyes are closed too
        total = eye + motor
        display = f"{total}T"
    elif inputs.eye_not_testable:
        total = scored
        display = f"E=C V{verbal} M{motor}"
    else:
        total = scored
        display = str(total)

    severity = GCS_SEVERITY.evaluate(scored)
    return GCSResult(
        total=total,
        display=display,
        severity=severity,
        label=GCS.SEVERITY_LABELS[severity],
        eye=eye,
        verbal=None if inputs.verbal_not_testable else verbal,
        motor=motor,
    )

# --- ICH Score (Hemphill et al. Stroke 2001) ---

def calculate_ich_score(inputs: ICHInput) -> ICHResult:
    """30-day mortality in spontaneous intracerebral hemorrhage."""
    gcs_total = require_int_in_range("gcs_total", inputs.gcs_total, (3, 15))
    volume = require_non_negative("volume_ml", inputs.volume_ml)
    age = require_non_negative("age_years", inputs.age_years)

    gcs_points = ICH_GCS_POINTS.evaluate(gcs_total)
    score = gcs_points
    score += 1 if volume >= ICH.VOLUME_THRESHOLD_ML else 0
    score += 1 if inputs.intraventricular_extension else 0
    score += 1 if inputs.infratentorial_origin else 0
    score += 1 if age >= ICH.AGE_THRESHOLD_YEARS else 0
    score = min(ICH.MAX_SCORE, max(0, score))

    return ICHResult(
        score=score,
        gcs_points=gcs_points,
        thirty_day_mortality_percent=ICH.MORTALITY_PERCENT[score],
        label=ICH.SEVERITY_LABELS[score],
    )

# --- HAS-BLED (Pisters et al. Chest 2010) ---

def calculate_has_bled(inputs: HASBLEDInput) -> HASBLEDResult:
    """
    1-year major bleeding risk on anticoagulation.
    A high score means address modifiable risks, not withhold anticoagulation.
    """
    score = sum([
        inputs.hypertension,
        inputs.abnormal_renal_function,
        inputs.abnormal_liver_function,
        inputs.stroke_history,
        inputs.prior_major_bleeding,
        inputs.on_warfarin and inputs.labile_inr,
        inputs.elderly,
        inputs.antiplatelet_or_nsaid,
        inputs.alcohol_use,
    ])
    score = int(score)

    risk = HAS_BLED_RISK.evaluate(score)
    return HASBLEDResult(
        score=score,
        risk=risk,
        bleeds_per_100_patient_years=HAS_BLED_BLEEDS.evaluate(score),
        label=HAS_BLED.RISK_LABELS[risk],
    )

# --- RoPE (Kent et al. Stroke 2013) ---

def calculate_rope(inputs: RoPEInput) -> RoPEResult:
    """Probability that a PFO found after cryptogenic stroke is causal."""
    age = require_non_negative("age_years", inputs.age_years)

    age_points = ROPE_AGE_POINTS.evaluate(age)
    score = age_points
    if not inputs.hypertension: score += 1
    if not inputs.diabetes: score += 1
    if not inputs.prior_stroke_or_tia: score += 1
    if not inputs.smoker: score += 1
    if inputs.cortical_infarct: score += 1

    return RoPEResult(
        score=score,
        age_points=age_points,
        pfo_attributable_percent=ROPE_PFO_ATTRIBUTABLE.evaluate(score),
    )

# --- ASPECTS (Barber et al. Lancet 2000) ---

def _normalize_regions(regions: Iterable[str]) -> tuple:
    known = ASPECTS.CORTICAL_REGIONS + ASPECTS.SUBCORTICAL_REGIONS
    involved = set()
    for region in regions:
        code = str(region).strip().upper()
        if code not in known:
            raise ScoreInputError(f"Unknown ASPECTS region: {region!r}")
        involved.add(code)
    # Report in the order the regions are read on CT
    return tuple(code for code in known if code in involved)

def calculate_aspects(inputs: ASPECTSInput) -> ASPECTSResult:
    involved = _normalize_regions(inputs.involved_regions)
    score = ASPECTS.MAX_SCORE - len(involved)

    interpretation = ASPECTS_INTERPRETATION.evaluate(score)
    return ASPECTSResult(
        score=score,
        involved_regions=involved,
        interpretation=interpretation,
        label=ASPECTS.INTERPRETATION_LABELS[interpretation],
        evt_implication=ASPECTS.EVT_IMPLICATIONS[interpretation],
    )

# --- NIHSS (Brott et al. Stroke 1989) ---

def _nihss_warnings(items: dict) -> tuple:
    """Item combinations that are usually a scoring slip."""
    warnings = []
    if items["best_language"] >= 2 and items["loc_commands"] == 0:
        warnings.append(NIHSS.WARNINGS["aphasia_without_command_deficit"])
    if items["limb_ataxia"] > 0 and any(items[m] == NIHSS.PARALYZED for m in NIHSS.MOTOR_ITEMS):
        warnings.append(NIHSS.WARNINGS["ataxia_in_paralyzed_limb"])
    if items["dysarthria"] == 2 and items["best_language"] == 0 and items["facial_palsy"] == 0:
        warnings.append(NIHSS.WARNINGS["anarthria_without_face_or_language"])
    return tuple(warnings)

def calculate_race(items: dict) -> RACEResult:
    """
    RACE LVO screen (0-9) mapped from already validated NIHSS items.
    Aphasia is the cortical sign for a right-sided deficit, agnosia for a
    left-sided one; with no side predominance the stronger sign counts.
    """
    facial = RACE_FACIAL.evaluate(items["facial_palsy"])
    arm = RACE_LIMB.evaluate(max(items["motor_left_arm"], items["motor_right_arm"]))
    leg = RACE_LIMB.evaluate(max(items["motor_left_leg"], items["motor_right_leg"]))
    gaze = RACE_GAZE.evaluate(items["best_gaze"])

    aphasia = RACE_APHASIA.evaluate(items["best_language"])
    agnosia = RACE_AGNOSIA.evaluate(items["extinction_inattention"])
    right = max(items["motor_right_arm"], items["motor_right_leg"])
    left = max(items["motor_left_arm"], items["motor_left_leg"])
    if right > left:
        agnosia = 0
    elif left > right:
        aphasia = 0
    elif aphasia >= agnosia:
        agnosia = 0
    else:
        aphasia = 0

    score = facial + arm + leg + gaze + aphasia + agnosia
    probability = RACE_PROBABILITY.evaluate(score)
    return RACEResult(
        score=score,
        facial=facial,
        arm=arm,
        leg=leg,
        gaze=gaze,
        aphasia=aphasia,
        agnosia=agnosia,
        lvo_probability=probability,
        lvo_probability_percent=RACE.LVO_PROBABILITY_PERCENT[probability],
        label=RACE.PROBABILITY_LABELS[probability],
    )

def calculate_nihss(inputs: NIHSSInput) -> NIHSSResult:
    items = {}
    untestable = []
    for field, item_id, _, max_points in NIHSS.ITEMS:
        value = getattr(inputs, field)
        if value is None and field in NIHSS.UNTESTABLE_ITEMS:
            untestable.append(item_id)
        else:
            value = require_int_in_range(field, value, (0, max_points))
        items[field] = value

    total = sum(v for v in items.values() if v is not None)
    # RACE reads UN dysarthria as no deficit
    scored = {k: (0 if v is None else v) for k, v in items.items()}

    return NIHSSResult(
        total=total,
        items={item_id: items[field] for field, item_id, _, _ in NIHSS.ITEMS},
        untestable=tuple(untestable),
        warnings=_nihss_warnings(scored),
        race=calculate_race(scored),
    )

# --- Boston Criteria v2.0 for CAA (Charidimou et al. Lancet Neurol 2022) ---

def _boston_pathway(inputs: BostonCAAInput, age, lobar: int) -> str:
    if inputs.other_cause_of_hemorrhage:
        return "other_cause"
    if inputs.pathology_definite_caa:
        return "definite_pathology"
    if inputs.pathology_supporting_caa:
        return "supporting_pathology"
    if age < BOSTON_CAA.MIN_AGE_YEARS:
        return "under_age"
    if not inputs.qualifying_presentation:
        return "no_presentation"

    deep = inputs.deep_hemorrhagic_lesions
    white_matter = inputs.white_matter_feature
    if deep:
        # Probable and possible CAA both require no deep hemorrhagic lesions
        if white_matter or lobar >= 2:
            return "no_imaging_criteria"
        return "deep_only" if lobar == 0 else "deep_lesions"

    if lobar >= 2:
        return "multiple_lobar"
    if lobar == 1:
        return "lobar_and_white_matter" if white_matter else "single_lobar"
    if white_matter:
        return "white_matter_only"
    return "no_imaging_criteria"

def assess_boston_criteria(inputs: BostonCAAInput) -> BostonCAAResult:
    """MRI-based CAA diagnosis. Pathology outranks imaging; another cause excludes both."""
    age = require_non_negative("age_years", inputs.age_years)
    lobar = require_int_in_range("lobar_hemorrhagic_lesions", inputs.lobar_hemorrhagic_lesions,
                                 BOSTON_CAA.LOBAR_LESION_RANGE)

    pathway = BOSTON_CAA.PATHWAYS[_boston_pathway(inputs, age, lobar)]
    diagnosis = pathway["diagnosis"]
    return BostonCAAResult(
        diagnosis=diagnosis,
        label=BOSTON_CAA.DIAGNOSIS_LABELS[diagnosis],
        criteria_met=tuple(c.format(age=age) for c in pathway["criteria_met"]),
        clinical_implications=pathway["clinical_implications"],
        anticoagulation_risk=pathway["anticoagulation_risk"],
        recommendations=tuple(pathway["recommendations"]),
    )

# --- Heidelberg Bleeding Classification (von Kummer et al. Stroke 2015) ---

def classify_heidelberg_bleeding(inputs: HeidelbergInput) -> HeidelbergResult:
    code = str(inputs.bleeding_class).strip().lower()
    if code not in HEIDELBERG.CLASSES:
        raise ScoreInputError(f"Unknown Heidelberg class: {inputs.bleeding_class!r}")

    entry = HEIDELBERG.CLASSES[code]
    note = entry["management_note"]
    if inputs.symptomatic:
        note = f"{note} {HEIDELBERG.SYMPTOMATIC_NOTE}"

    return HeidelbergResult(
        bleeding_class=code,
        classification=entry["classification"],
        description=entry["description"],
        symptomatic=bool(inputs.symptomatic),
        clinical_significance=entry["clinical_significance"],
        management_note=note,
    )
