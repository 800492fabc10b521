# main.py

import logging
from dataclasses import asdict, is_dataclass
from typing import Dict, Optional, List
from datetime import datetime
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Import Data Models & Logic
from constants import VERSION, WeightUnit
from models import (
    ABCD2Input,
    GCSInput,
    ICHInput,
    HASBLEDInput,
    RoPEInput,
    ASPECTSInput,
    NIHSSInput,
    BostonCAAInput,
    HeidelbergInput,
)
from dosing import normalize_weight, calculate_thrombolytic_doses
from scores import (
    calculate_abcd2,
    calculate_gcs,
    calculate_ich_score,
    calculate_has_bled,
    calculate_rope,
    calculate_aspects,
    calculate_nihss,
    assess_boston_criteria,
    classify_heidelberg_bleeding,
)

# --- 1. CONFIGURATION & LOGGING ---
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("neurowiki-api")

app = FastAPI(
    title="NeuroWiki Calculator API",
    version=VERSION,
    description="Thrombolytic dosing and bedside neurology scores. \n\n"
                "**WARNING**: Decision Support Tool Only. Verify every dose against local protocol.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

@app.get("/")
def read_root():
    return {"status": "active", "message": "NeuroWiki calculator API is running"}

@app.get("/health")
def health_check():
    """K8s/AWS Health Probe"""
    return {"status": "active", "version": VERSION, "module": "neurowiki-calculators"}

# --- 2. STRICT INPUT SCHEMAS (The Guardrails) ---
class WeightRequest(BaseModel):
    # 0 is accepted: it is the "not yet entered" sentinel
    magnitude: float = Field(..., ge=0.0, le=1500.0, description="Weight in the given unit")
    unit: WeightUnit = Field(default=WeightUnit.KG, description="'kg' or 'lbs'")

    class Config:
        json_schema_extra = {"example": {"magnitude": 154, "unit": "lbs"}}

class ABCD2Request(BaseModel):
    age_60_or_older: bool = False
    bp_140_90_or_higher: bool = False
    unilateral_weakness: bool = False
    speech_disturbance: bool = False
    duration_min: int = Field(0, ge=0, le=10080, description="Symptom duration in minutes")
    diabetes: bool = False

class GCSRequest(BaseModel):
    eye: int = Field(..., ge=1, le=4)
    verbal: int = Field(..., ge=1, le=5)
    motor: int = Field(..., ge=1, le=6)
    verbal_not_testable: bool = False
    eye_not_testable: bool = False

class ICHRequest(BaseModel):
    gcs_total: int = Field(..., ge=3, le=15)
    volume_ml: float = Field(..., ge=0.0, le=500.0, description="ABC/2 hematoma volume")
    intraventricular_extension: bool = False
    infratentorial_origin: bool = False
    age_years: int = Field(..., ge=0, le=120)

class HASBLEDRequest(BaseModel):
    hypertension: bool = False
    abnormal_renal_function: bool = False
    abnormal_liver_function: bool = False
    stroke_history: bool = False
    prior_major_bleeding: bool = False
    on_warfarin: bool = False
    labile_inr: bool = False
    elderly: bool = False
    antiplatelet_or_nsaid: bool = False
    alcohol_use: bool = False

class RoPERequest(BaseModel):
    age_years: int = Field(..., ge=0, le=120)
    hypertension: bool = False
    diabetes: bool = False
    prior_stroke_or_tia: bool = False
    smoker: bool = False
    cortical_infarct: bool = False

class ASPECTSRequest(BaseModel):
    involved_regions: List[str] = Field(default_factory=list, description="e.g. ['M1', 'I']")

class NIHSSRequest(BaseModel):
    loc: int = Field(0, ge=0, le=3)
    loc_questions: int = Field(0, ge=0, le=2)
    loc_commands: int = Field(0, ge=0, le=2)
    best_gaze: int = Field(0, ge=0, le=2)
    visual_fields: int = Field(0, ge=0, le=3)
    facial_palsy: int = Field(0, ge=0, le=3)
    motor_left_arm: int = Field(0, ge=0, le=4)
    motor_right_arm: int = Field(0, ge=0, le=4)
    motor_left_leg: int = Field(0, ge=0, le=4)
    motor_right_leg: int = Field(0, ge=0, le=4)
    limb_ataxia: int = Field(0, ge=0, le=2)
    sensory: int = Field(0, ge=0, le=2)
    best_language: int = Field(0, ge=0, le=3)
    dysarthria: Optional[int] = Field(0, ge=0, le=2, description="null = UN (intubated)")
    extinction_inattention: int = Field(0, ge=0, le=2)

    class Config:
        json_schema_extra = {"example": {"facial_palsy": 2, "motor_right_arm": 3, "best_language": 2}}

class BostonCAARequest(BaseModel):
    age_years: int = Field(..., ge=0, le=120)
    pathology_definite_caa: bool = False
    pathology_supporting_caa: bool = False
    qualifying_presentation: bool = False
    lobar_hemorrhagic_lesions: int = Field(0, ge=0, le=2, description="2 means two or more")
    white_matter_feature: bool = False
    deep_hemorrhagic_lesions: bool = False
    other_cause_of_hemorrhage: bool = False

class HeidelbergRequest(BaseModel):
    bleeding_class: str = Field(..., description="1a, 1b, 1c, 2, 3a, 3b, 3c or 3d")
    symptomatic: bool = False

# --- 3. EXPLICIT RESPONSE SCHEMAS (The Contract) ---
class NormalizedWeightResponse(BaseModel):
    weight_kg: float

class AlteplaseResponse(BaseModel):
    total_mg: float
    bolus_mg: float
    infusion_mg: float
    capped: bool
    infusion_duration_min: int

class ThrombolyticDosesResponse(BaseModel):
    weight_kg: float
    tenecteplase_mg: float
    alteplase: AlteplaseResponse
    model_version: str
    generated_at: datetime = Field(default_factory=datetime.now)

class ABCD2Response(BaseModel):
    score: int
    risk: str
    two_day_risk_percent: float
    label: str

class GCSResponse(BaseModel):
    total: int
    display: str
    severity: str
    label: str
    eye: int
    verbal: Optional[int]
    motor: int

class ICHResponse(BaseModel):
    score: int
    gcs_points: int
    thirty_day_mortality_percent: int
    label: str

class HASBLEDResponse(BaseModel):
    score: int
    risk: str
    bleeds_per_100_patient_years: float
    label: str

class RoPEResponse(BaseModel):
    score: int
    age_points: int
    pfo_attributable_percent: int

class ASPECTSResponse(BaseModel):
    score: int
    involved_regions: List[str]
    interpretation: str
    label: str
    evt_implication: str

class RACEResponse(BaseModel):
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

class NIHSSResponse(BaseModel):
    total: int
    items: Dict[str, Optional[int]]
    untestable: List[str]
    warnings: List[str]
    race: RACEResponse

class BostonCAAResponse(BaseModel):
    diagnosis: str
    label: str
    criteria_met: List[str]
    clinical_implications: str
    anticoagulation_risk: str
    recommendations: List[str]

class HeidelbergResponse(BaseModel):
    bleeding_class: str
    classification: str
    description: str
    symptomatic: bool
    clinical_significance: str
    management_note: str

def _run_engine(name: str, calculation, *args):
    """Runs a calculation and maps engine errors onto HTTP status codes."""
    try:
        result = calculation(*args)
        return asdict(result) if is_dataclass(result) else result

    except ValueError as e:
        # Logic/Validation errors from the Engine (e.g. unknown ASPECTS region)
        logger.warning(f"Clinical Validation Error in {name}: {str(e)}")
        raise HTTPException(status_code=422, detail=f"Clinical Validation Error: {str(e)}")

    except Exception as e:
        # These are unexpected crashes
        logger.error(f"Internal Engine Failure in {name}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Calculation Engine Error")

# --- 4. ENDPOINTS ---

@app.post("/dosing/normalize", response_model=NormalizedWeightResponse)
def normalize(request: WeightRequest):
    return {"weight_kg": _run_engine("normalize", normalize_weight, request.magnitude, request.unit)}

@app.post("/dosing/thrombolytics", response_model=ThrombolyticDosesResponse)
def get_thrombolytic_doses(request: WeightRequest):
    """
    TNK and tPA doses for one bedside weight.
    """
    logger.info(f"Dosing thrombolytics for Wt: {request.magnitude}{request.unit.value}")
    return _run_engine("thrombolytics", calculate_thrombolytic_doses, request.magnitude, request.unit)

@app.post("/scores/abcd2", response_model=ABCD2Response)
def abcd2_score(request: ABCD2Request):
    return _run_engine("abcd2", calculate_abcd2, ABCD2Input(**request.model_dump()))

@app.post("/scores/gcs", response_model=GCSResponse)
def gcs_score(request: GCSRequest):
    return _run_engine("gcs", calculate_gcs, GCSInput(**request.model_dump()))

@app.post("/scores/ich", response_model=ICHResponse)
def ich_score(request: ICHRequest):
    return _run_engine("ich", calculate_ich_score, ICHInput(**request.model_dump()))

@app.post("/scores/has-bled", response_model=HASBLEDResponse)
def has_bled_score(request: HASBLEDRequest):
    return _run_engine("has_bled", calculate_has_bled, HASBLEDInput(**request.model_dump()))

@app.post("/scores/rope", response_model=RoPEResponse)
def rope_score(request: RoPERequest):
    return _run_engine("rope", calculate_rope, RoPEInput(**request.model_dump()))

@app.post("/scores/aspects", response_model=ASPECTSResponse)
def aspects_score(request: ASPECTSRequest):
    inputs = ASPECTSInput(involved_regions=tuple(request.involved_regions))
    return _run_engine("aspects", calculate_aspects, inputs)

@app.post("/scores/nihss", response_model=NIHSSResponse)
def nihss_score(request: NIHSSRequest):
    return _run_engine("nihss", calculate_nihss, NIHSSInput(**request.model_dump()))

@app.post("/scores/boston-caa", response_model=BostonCAAResponse)
def boston_caa(request: BostonCAARequest):
    return _run_engine("boston_caa", assess_boston_criteria, BostonCAAInput(**request.model_dump()))

@app.post("/scores/heidelberg", response_model=HeidelbergResponse)
def heidelberg_bleeding(request: HeidelbergRequest):
    return _run_engine("heidelberg", classify_heidelberg_bleeding, HeidelbergInput(**request.model_dump()))
