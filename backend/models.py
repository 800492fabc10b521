"""
NeuroWiki: Data Dictionary & Error Taxonomy
===========================================
Value types for the dosing card and the bedside scores.
Every object is immutable and built fresh per calculation.

NO LOGIC beyond construction-time validation is implemented here.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional, Tuple
from constants import VERSION, WeightUnit, ThrombolyticAgent

class InvalidWeightError(ValueError):
    """Raised when a weight is negative, NaN, infinite or a boolean."""
    pass

class InvalidUnitError(ValueError):
    """Raised when a unit tag is neither 'kg' nor 'lbs'."""
    pass

class DataTypeError(TypeError):
    """Raised when inputs are wrong python types (str instead of float)."""
    pass

class ScoreInputError(ValueError):
    """Raised when a score component is out of its defined range."""
    pass

class RuleTableError(ValueError):
    """Raised when a rule table is empty or its bounds are not strictly ascending."""
    pass

# --- 1. DOSING ---

@dataclass(frozen=True)
class WeightMeasurement:
    """A raw bedside weight. magnitude == 0 means 'not yet entered'."""
    magnitude: float
    unit: WeightUnit = WeightUnit.KG

    def __post_init__(self):
        # safety imports this module, so its checks are pulled in at call time
        from safety import require_weight, coerce_unit

        require_weight(self.magnitude, field="magnitude")
        object.__setattr__(self, "unit", coerce_unit(self.unit))

@dataclass(frozen=True)
class ThrombolyticDoseResult:
    """
    Alteplase split. bolus_mg + infusion_mg == total_mg holds exactly.
    """
    total_mg: Decimal
    bolus_mg: Decimal
    infusion_mg: Decimal
    capped: bool = False
    infusion_duration_min: int = 60

@dataclass(frozen=True)
class ThrombolyticDoses:
    """The combined dosing card shown at the bedside."""
    weight_kg: Decimal
    tenecteplase_mg: Decimal
    alteplase: ThrombolyticDoseResult
    model_version: str = VERSION

    def dose_for(self, agent: ThrombolyticAgent):
        if agent == ThrombolyticAgent.TENECTEPLASE:
            return self.tenecteplase_mg
        return self.alteplase

# --- 2. SCORE INPUTS ---

@dataclass(frozen=True)
class ABCD2Input:
    age_60_or_older: bool = False
    bp_140_90_or_higher: bool = False
    unilateral_weakness: bool = False
    speech_disturbance: bool = False     # Only counts without weakness
    duration_min: int = 0
    diabetes: bool = False

@dataclass(frozen=True)
class GCSInput:
    eye: int
    verbal: int
    motor: int
    verbal_not_testable: bool = False    # Intubated
    eye_not_testable: bool = False       # Eyes closed by swelling

@dataclass(frozen=True)
class ICHInput:
    gcs_total: int
    volume_ml: float
    intraventricular_extension: bool = False
    infratentorial_origin: bool = False
    age_years: int = 0

@dataclass(frozen=True)
class HASBLEDInput:
    hypertension: bool = False           # Uncontrolled, SBP > 160
    abnormal_renal_function: bool = False
    abnormal_liver_function: bool = False
    stroke_history: bool = False
    prior_major_bleeding: bool = False
    on_warfarin: bool = False
    labile_inr: bool = False             # Only scored when on_warfarin
    elderly: bool = False                # > 65 years
    antiplatelet_or_nsaid: bool = False
    alcohol_use: bool = False

@dataclass(frozen=True)
class RoPEInput:
    age_years: int
    hypertension: bool = False
    diabetes: bool = False
    prior_stroke_or_tia: bool = False
    smoker: bool = False
    cortical_infarct: bool = False

@dataclass(frozen=True)
class ASPECTSInput:
    involved_regions: Tuple[str, ...] = field(default_factory=tuple)

@dataclass(frozen=True)
class NIHSSInput:
    loc: int = 0
    loc_questions: int = 0
    loc_commands: int = 0
    best_gaze: int = 0
    visual_fields: int = 0
    facial_palsy: int = 0
    motor_left_arm: int = 0
    motor_right_arm: int = 0
    motor_left_leg: int = 0
    motor_right_leg: int = 0
    limb_ataxia: int = 0
    sensory: int = 0
    best_language: int = 0
    dysarthria: Optional[int] = 0        # None = UN (intubated)
    extinction_inattention: int = 0

@dataclass(frozen=True)
class BostonCAAInput:
    age_years: int
    pathology_definite_caa: bool = False        # Full autopsy
    pathology_supporting_caa: bool = False      # Evacuated hematoma or cortical biopsy
    qualifying_presentation: bool = False       # Spontaneous ICH, TFNE, or cognitive impairment
    lobar_hemorrhagic_lesions: int = 0          # 0, 1, or 2 (two or more)
    white_matter_feature: bool = False          # Severe CSO-PVS or multispot WMH
    deep_hemorrhagic_lesions: bool = False
    other_cause_of_hemorrhage: bool = False

@dataclass(frozen=True)
class HeidelbergInput:
    bleeding_class: str
    symptomatic: bool = False

# --- 3. SCORE OUTPUTS ---

@dataclass(frozen=True)
class ABCD2Result:
    score: int
    risk: str
    two_day_risk_percent: float
    label: str

@dataclass(frozen=True)
class GCSResult:
    total: int
    display: str
    severity: str
    label: str
    eye: int
    verbal: Optional[int]                # None when not testable ("T")
    motor: int

@dataclass(frozen=True)
class ICHResult:
    score: int
    gcs_points: int
    thirty_day_mortality_percent: int
    label: str

@dataclass(frozen=True)
class HASBLEDResult:
    score: int
    risk: str
    bleeds_per_100_patient_years: float
    label: str

@dataclass(frozen=True)
class RoPEResult:
    score: int
    age_points: int
    pfo_attributable_percent: int

@dataclass(frozen=True)
class ASPECTSResult:
    score: int
    involved_regions: Tuple[str, ...]
    interpretation: str
    label: str
    evt_implication: str

@dataclass(frozen=True)
class RACEResult:
    """RACE LVO screen derived from the NIHSS items."""
    score: int
    facial: int
    arm: int
    leg: int
    gaze: int
    aphasia: int
    agnosia: int
    lvo_probability: str
    lvo_probability_percent: int
    label: str

@dataclass(frozen=True)
class NIHSSResult:
    total: int
    items: Dict[str, Optional[int]]      # keyed by item id ("1a" ... "11"), None = UN
    untestable: Tuple[str, ...]
    warnings: Tuple[str, ...]
    race: RACEResult

@dataclass(frozen=True)
class BostonCAAResult:
    diagnosis: str
    label: str
    criteria_met: Tuple[str, ...]
    clinical_implications: str
    anticoagulation_risk: str
    recommendations: Tuple[str, ...]

@dataclass(frozen=True)
class HeidelbergResult:
    bleeding_class: str
    classification: str
    description: str
    symptomatic: bool
    clinical_significance: str
    management_note: str
