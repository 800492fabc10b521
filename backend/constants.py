from enum import Enum
from decimal import Decimal
VERSION = "1.0.0"

class WeightUnit(Enum):
    KG = "kg"
    LBS = "lbs"

class ThrombolyticAgent(Enum):
    TENECTEPLASE = "tenecteplase"   # TNK: single weight-tiered bolus
    ALTEPLASE = "alteplase"         # tPA: 10% bolus + 90% infusion

class DOSING_CONSTANTS:
    # Clinical approximation used on the bedside card. Do not replace with 2.20462.
    LBS_PER_KG = Decimal("2.205")
    TENTH = Decimal("0.1")
    ZERO = Decimal("0")

class TENECTEPLASE:
    """
    AHA/ASA 2026: 0.25 mg/kg delivered as pre-filled weight-tiered steps, max 25 mg.
    (upper bound exclusive kg, dose mg), ascending.
    """
    TIERS = [
        (Decimal("60"), Decimal("15")),
        (Decimal("70"), Decimal("17.5")),
        (Decimal("80"), Decimal("20")),
        (Decimal("90"), Decimal("22.5")),
    ]
    MAX_DOSE_MG = Decimal("25")

class ALTEPLASE:
    """AHA/ASA 2026: 0.9 mg/kg, max 90 mg; 10% bolus over 1 min, rest over 60 min."""
    MG_PER_KG = Decimal("0.9")
    MAX_DOSE_MG = Decimal("90")
    BOLUS_FRACTION = Decimal("0.10")
    INFUSION_DURATION_MIN = 60

# --- Clinical scores ---

class ABCD2:
    # score 0-3 low, 4-5 moderate, 6-7 high
    RISK_BANDS = [(4, "low"), (6, "moderate")]
    RISK_DEFAULT = "high"
    TWO_DAY_RISK_PERCENT = {"low": 1.0, "moderate": 4.1, "high": 8.1}
    RISK_LABELS = {"low": "Low risk", "moderate": "Moderate risk", "high": "High risk"}

class GCS:
    EYE_RANGE = (1, 4)
    VERBAL_RANGE = (1, 5)
    MOTOR_RANGE = (1, 6)
    SEVERITY_BANDS = [(4, "deep_coma"), (9, "severe"), (14, "moderate")]
    SEVERITY_DEFAULT = "mild"
    SEVERITY_LABELS = {
        "mild": "Mild impairment (14-15)",
        "moderate": "Moderate impairment (9-13)",
        "severe": "Severe impairment / coma (3-8)",
        "deep_coma": "Deep coma (3)",
    }

class ICH:
    # Hemphill et al. Stroke 2001
    GCS_POINT_BANDS = [(5, 2), (13, 1)]   # 3-4 -> 2, 5-12 -> 1, 13-15 -> 0
    GCS_POINT_DEFAULT = 0
    VOLUME_THRESHOLD_ML = 30.0
    AGE_THRESHOLD_YEARS = 80
    MAX_SCORE = 6
    MORTALITY_PERCENT = {0: 0, 1: 13, 2: 26, 3: 72, 4: 97, 5: 99, 6: 100}
    SEVERITY_LABELS = {
        0: "Very low risk", 1: "Low risk", 2: "Moderate risk", 3: "High risk",
        4: "Very high risk", 5: "Very high risk", 6: "Very high risk",
    }

class HAS_BLED:
    # Pisters et al. Chest 2010
    RISK_BANDS = [(1, "low"), (3, "moderate"), (4, "high")]
    RISK_DEFAULT = "very_high"
    BLEEDS_PER_100_BANDS = [(1, 1.13), (2, 1.02), (3, 1.88), (4, 3.74)]
    BLEEDS_PER_100_DEFAULT = 8.70
    RISK_LABELS = {
        "low": "Low risk", "moderate": "Moderate risk",
        "high": "High risk", "very_high": "Very high risk",
    }

class ROPE:
    # Kent et al. Stroke 2013
    AGE_POINT_BANDS = [(30, 5), (40, 4), (50, 3), (60, 2), (70, 1)]
    AGE_POINT_DEFAULT = 0
    PFO_ATTRIBUTABLE_BANDS = [(4, 0), (5, 38), (6, 34), (7, 62), (8, 72), (9, 84)]
    PFO_ATTRIBUTABLE_DEFAULT = 88

class ASPECTS:
    CORTICAL_REGIONS = ("M1", "M2", "M3", "M4", "M5", "M6")
    SUBCORTICAL_REGIONS = ("C", "L", "IC", "I")
    REGION_NAMES = {
        "M1": "Anterior MCA cortex",
        "M2": "MCA cortex lateral to insular ribbon",
        "M3": "Posterior MCA cortex",
        "M4": "Anterior MCA cortex (superior)",
        "M5": "Lateral MCA cortex (superior)",
        "M6": "Posterior MCA cortex (superior)",
        "C": "Caudate",
        "L": "Lentiform nucleus",
        "IC": "Internal capsule",
        "I": "Insular ribbon",
    }
    MAX_SCORE = 10
    INTERPRETATION_BANDS = [(3, "extensive"), (6, "large_core"), (8, "moderate_core")]
    INTERPRETATION_DEFAULT = "small"
    INTERPRETATION_LABELS = {
        "small": "Small or No Infarct",
        "moderate_core": "Moderate Core",
        "large_core": "Large Core",
        "extensive": "Extensive Infarct",
    }
    EVT_IMPLICATIONS = {
        "small": "EVT strongly indicated. Small or no established infarct core.",
        "moderate_core": "EVT generally indicated. ASPECTS >=6 is the primary threshold for EVT eligibility.",
        "large_core": "EVT may benefit (SELECT-2 / ANGEL-ASPECT). Age <80, no significant mass effect, mRS 0-1 required.",
        "extensive": "EVT typically not indicated. Extensive established infarction with high futile reperfusion risk.",
    }

class NIHSS:
    # (field, item id, short name, max points), in bedside exam order
    ITEMS = (
        ("loc", "1a", "LOC", 3),
        ("loc_questions", "1b", "Questions", 2),
        ("loc_commands", "1c", "Commands", 2),
        ("best_gaze", "2", "Gaze", 2),
        ("visual_fields", "3", "Visual", 3),
        ("facial_palsy", "4", "Face", 3),
        ("motor_left_arm", "5a", "L Arm", 4),
        ("motor_right_arm", "5b", "R Arm", 4),
        ("motor_left_leg", "6a", "L Leg", 4),
        ("motor_right_leg", "6b", "R Leg", 4),
        ("limb_ataxia", "7", "Ataxia", 2),
        ("sensory", "8", "Sensory", 2),
        ("best_language", "9", "Language", 3),
        ("dysarthria", "10", "Dysarthria", 2),
        ("extinction_inattention", "11", "Neglect", 2),
    )
    # Only dysarthria may be marked UN (intubated); it is left out of the total
    UNTESTABLE_ITEMS = ("dysarthria",)
    MAX_TOTAL = 42
    MOTOR_ITEMS = ("motor_left_arm", "motor_right_arm", "motor_left_leg", "motor_right_leg")
    PARALYZED = 4

    WARNINGS = {
        "aphasia_without_command_deficit": (
            "Severe aphasia (9) is scored but commands (1c) are normal. "
            "Severe aphasia usually impairs command following."
        ),
        "ataxia_in_paralyzed_limb": (
            "Ataxia (7) cannot be scored in a fully paralyzed limb (motor = 4). Score ataxia 0."
        ),
        "anarthria_without_face_or_language": (
            "Severe dysarthria (10) is uncommon without facial palsy (4) or aphasia (9). "
            "Verify the patient is not aphasic."
        ),
    }

class RACE:
    # Perez de la Ossa et al. Stroke 2014, derived from the NIHSS items
    FACIAL_BANDS = [(1, 0), (2, 1)]        # NIHSS 4: 0 -> 0, 1 -> 1, 2-3 -> 2
    FACIAL_DEFAULT = 2
    LIMB_BANDS = [(1, 0), (3, 1)]          # NIHSS 5/6: 0 -> 0, 1-2 -> 1, 3-4 -> 2
    LIMB_DEFAULT = 2
    GAZE_BANDS = [(1, 0)]                  # NIHSS 2: any deviation -> 1
    GAZE_DEFAULT = 1
    APHASIA_BANDS = [(1, 0), (2, 1)]       # NIHSS 9: 0 -> 0, 1 -> 1, 2-3 -> 2
    APHASIA_DEFAULT = 2
    AGNOSIA_BANDS = [(1, 0)]               # NIHSS 11: any extinction -> 1
    AGNOSIA_DEFAULT = 1
    MAX_SCORE = 9

    PROBABILITY_BANDS = [(5, "low"), (7, "moderate")]
    PROBABILITY_DEFAULT = "high"
    LVO_PROBABILITY_PERCENT = {"low": 20, "moderate": 55, "high": 85}
    PROBABILITY_LABELS = {"low": "Low", "moderate": "Moderate", "high": "High"}

class BOSTON_CAA:
    # Charidimou et al. Lancet Neurol 2022 (Boston criteria v2.0)
    MIN_AGE_YEARS = 50
    LOBAR_LESION_RANGE = (0, 2)            # 2 means two or more
    DIAGNOSIS_LABELS = {
        "definite_caa": "Definite CAA",
        "probable_caa_supporting_pathology": "Probable CAA (supporting pathology)",
        "probable_caa": "Probable CAA",
        "possible_caa": "Possible CAA",
        "unlikely_caa": "CAA unlikely",
        "excluded": "Excluded (other cause or criteria not met)",
    }

    _UNLIKELY_IMPLICATIONS = (
        "Imaging and clinical picture do not meet possible CAA. "
        "CAA is still a differential in elderly patients with lobar hemorrhage."
    )
    _UNLIKELY_RECOMMENDATIONS = (
        "Consider CAA in the differential if a future lobar hemorrhage or TFNE occurs.",
        "Anticoagulation decision per stroke vs bleeding risk (e.g. CHA2DS2-VASc vs HAS-BLED).",
    )
    _IMAGING_CRITERIA = ("Age >= 50", "Qualifying presentation")
    _NO_DEEP_NO_OTHER = ("No deep hemorrhagic lesions", "No other cause")

    # Each finding pattern maps to the diagnosis it supports and the wording shown with it
    PATHWAYS = {
        "other_cause": {
            "diagnosis": "excluded",
            "criteria_met": ("Other cause of hemorrhagic lesions present (trauma, hemorrhagic transformation, "
                             "AVM, tumor, warfarin INR > 3, vasculitis).",),
            "clinical_implications": "Another cause of hemorrhage or exclusion criterion present. "
                                     "Do not apply the Boston CAA criteria for diagnosis.",
            "anticoagulation_risk": "n/a",
            "recommendations": ("Address the identified cause of hemorrhage.",
                                "Reassess the anticoagulation indication separately if applicable."),
        },
        "definite_pathology": {
            "diagnosis": "definite_caa",
            "criteria_met": ("Full post-mortem brain examination: severe CAA with vasculopathy, "
                             "no other diagnostic lesion.",),
            "clinical_implications": "Pathology-proven CAA. High recurrence risk for lobar hemorrhage; "
                                     "anticoagulation carries very high ICH risk.",
            "anticoagulation_risk": "very_high",
            "recommendations": ("Avoid anticoagulation if possible; consider left atrial appendage closure "
                                "or antiplatelet per shared decision-making.",
                                "BP control; avoid antiplatelets when not clearly indicated.",
                                "Counsel on recurrence risk."),
        },
        "supporting_pathology": {
            "diagnosis": "probable_caa_supporting_pathology",
            "criteria_met": ("Pathological tissue (evacuated hematoma or cortical biopsy) showing CAA, "
                             "no other diagnostic lesion.",),
            "clinical_implications": "Probable CAA with pathological support. High recurrence risk; "
                                     "anticoagulation carries high ICH risk.",
            "anticoagulation_risk": "high",
            "recommendations": ("Avoid anticoagulation if feasible; discuss alternatives.",
                                "BP control; minimize antiplatelet use unless indicated.",
                                "Counsel on recurrence risk."),
        },
        "under_age": {
            "diagnosis": "unlikely_caa",
            "criteria_met": ("Age {age} < 50 years; probable or possible CAA requires age >= 50.",),
            "clinical_implications": _UNLIKELY_IMPLICATIONS,
            "anticoagulation_risk": "moderate",
            "recommendations": _UNLIKELY_RECOMMENDATIONS,
        },
        "no_presentation": {
            "diagnosis": "unlikely_caa",
            "criteria_met": ("No qualifying presentation (spontaneous ICH, TFNE, or cognitive impairment / dementia).",),
            "clinical_implications": _UNLIKELY_IMPLICATIONS,
            "anticoagulation_risk": "moderate",
            "recommendations": _UNLIKELY_RECOMMENDATIONS,
        },
        "deep_only": {
            "diagnosis": "unlikely_caa",
            "criteria_met": ("Deep hemorrhagic lesions present; no lobar or white matter features. "
                             "Deep microbleeds occur in about 15% of proven CAA.",),
            "clinical_implications": _UNLIKELY_IMPLICATIONS,
            "anticoagulation_risk": "moderate",
            "recommendations": _UNLIKELY_RECOMMENDATIONS,
        },
        "deep_lesions": {
            "diagnosis": "unlikely_caa",
            "criteria_met": ("Deep hemorrhagic lesions present; probable or possible CAA requires "
                             "their absence.",),
            "clinical_implications": _UNLIKELY_IMPLICATIONS,
            "anticoagulation_risk": "moderate",
            "recommendations": _UNLIKELY_RECOMMENDATIONS,
        },
        "multiple_lobar": {
            "diagnosis": "probable_caa",
            "criteria_met": _IMAGING_CRITERIA + (
                ">= 2 strictly lobar hemorrhagic lesions (ICH, microbleeds, cortical superficial siderosis, "
                "or convexity SAH)",) + _NO_DEEP_NO_OTHER,
            "clinical_implications": "Probable CAA by imaging. High recurrence risk; "
                                     "anticoagulation significantly increases ICH risk.",
            "anticoagulation_risk": "high",
            "recommendations": ("Avoid anticoagulation if possible; consider LAA closure or antiplatelet.",
                                "BP control; limit antiplatelets to clear indications.",
                                "Counsel on recurrence risk (about 5-10% per year)."),
        },
        "lobar_and_white_matter": {
            "diagnosis": "probable_caa",
            "criteria_met": _IMAGING_CRITERIA + (
                "One lobar hemorrhagic lesion + one white matter feature "
                "(severe centrum semiovale PVS or multispot WMH)",) + _NO_DEEP_NO_OTHER,
            "clinical_implications": "Probable CAA by imaging (lobar + white matter). High recurrence risk; "
                                     "anticoagulation carries high ICH risk.",
            "anticoagulation_risk": "high",
            "recommendations": ("Avoid anticoagulation if feasible.",
                                "BP control; minimize antiplatelet use.",
                                "Counsel on recurrence risk."),
        },
        "single_lobar": {
            "diagnosis": "possible_caa",
            "criteria_met": _IMAGING_CRITERIA + ("One strictly lobar hemorrhagic lesion",) + _NO_DEEP_NO_OTHER,
            "clinical_implications": "Possible CAA. Moderate recurrence risk; anticoagulation increases ICH risk.",
            "anticoagulation_risk": "moderate",
            "recommendations": ("Shared decision-making for anticoagulation; weigh HAS-BLED and stroke risk.",
                                "BP control.",
                                "Repeat MRI if TFNE or recurrent symptoms."),
        },
        "white_matter_only": {
            "diagnosis": "possible_caa",
            "criteria_met": _IMAGING_CRITERIA + (
                "One white matter feature (severe centrum semiovale PVS or multispot WMH)",) + _NO_DEEP_NO_OTHER,
            "clinical_implications": "Possible CAA (white matter feature only). Lower sensitivity; "
                                     "consider CAA in the differential.",
            "anticoagulation_risk": "moderate",
            "recommendations": ("Consider CAA in the differential; follow up for new hemorrhagic lesions.",
                                "Anticoagulation decision per stroke vs bleeding risk."),
        },
        "no_imaging_criteria": {
            "diagnosis": "unlikely_caa",
            "criteria_met": ("Does not meet probable or possible CAA imaging criteria.",),
            "clinical_implications": _UNLIKELY_IMPLICATIONS,
            "anticoagulation_risk": "moderate",
            "recommendations": _UNLIKELY_RECOMMENDATIONS,
        },
    }

class HEIDELBERG:
    # von Kummer et al. Stroke 2015. Hemorrhage after reperfusion therapy, not spontaneous ICH.
    CLASSES = {
        "1a": {
            "classification": "Class 1a (HI1)",
            "description": "Scattered small petechiae, no mass effect",
            "clinical_significance": "Hemorrhagic infarction type 1 within infarcted tissue. "
                                     "Unlikely related to reperfusion therapy.",
            "management_note": "Asymptomatic HT; typically no change in management. "
                               "Image within 48h of reperfusion and for new symptoms.",
        },
        "1b": {
            "classification": "Class 1b (HI2)",
            "description": "Confluent petechiae, no mass effect",
            "clinical_significance": "Hemorrhagic infarction type 2. "
                                     "Possibly related to reperfusion if symptomatic.",
            "management_note": "Monitor; if symptomatic, consider relatedness to the intervention. "
                               "No routine reversal for HI alone.",
        },
        "1c": {
            "classification": "Class 1c (PH1)",
            "description": "Hematoma within infarct <30%, no substantive mass effect",
            "clinical_significance": "Parenchymal hematoma within infarcted tissue. "
                                     "Probably related if within 24h of treatment.",
            "management_note": "If symptomatic or treated within 24h, classify relatedness. "
                               "BP control per protocol.",
        },
        "2": {
            "classification": "Class 2 (PH2)",
            "description": "Hematoma >=30% of infarct, obvious mass effect",
            "clinical_significance": "Parenchymal hematoma with obvious mass effect. "
                                     "Definitely or probably related to reperfusion when symptomatic.",
            "management_note": "Symptomatic PH2 often drives deterioration. BP control, ICP monitoring as "
                               "indicated; neurosurgery consult if mass effect.",
        },
        "3a": {
            "classification": "Class 3a",
            "description": "Parenchymal hematoma remote from infarct",
            "clinical_significance": "Hematoma remote from infarcted brain. Possibly related to reperfusion.",
            "management_note": "Exclude procedural complication (e.g. vessel perforation). "
                               "Imaging and neurologic monitoring.",
        },
        "3b": {
            "classification": "Class 3b (IVH)",
            "description": "Intraventricular hemorrhage",
            "clinical_significance": "Intraventricular hemorrhage. Possibly related; "
                                     "consider extension from a parenchymal hemorrhage.",
            "management_note": "Assess for hydrocephalus; EVD if indicated. Monitor for worsening.",
        },
        "3c": {
            "classification": "Class 3c (SAH)",
            "description": "Subarachnoid hemorrhage",
            "clinical_significance": "Subarachnoid hemorrhage. Possibly related; "
                                     "distinguish from aneurysm rupture.",
            "management_note": "Convexity SAH may be CAA-related. Vascular imaging if not already done.",
        },
        "3d": {
            "classification": "Class 3d (SDH)",
            "description": "Subdural hemorrhage",
            "clinical_significance": "Subdural hemorrhage. Possibly related; consider trauma or coagulopathy.",
            "management_note": "Assess mass effect and surgical indication. "
                               "Review anticoagulant and antiplatelet use.",
        },
    }
    SYMPTOMATIC_NOTE = (
        "Symptomatic ICH: NIHSS increase >= 4, or >= 2 in one item, or intervention "
        "(intubation, hemicraniectomy, EVD); document relatedness to reperfusion."
    )
