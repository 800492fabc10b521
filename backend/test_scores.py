import unittest

from models import (
    ABCD2Input, GCSInput, ICHInput, HASBLEDInput, RoPEInput, ASPECTSInput,
    NIHSSInput, BostonCAAInput, HeidelbergInput,
    ScoreInputError, DataTypeError,
)
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

class TestABCD2(unittest.TestCase):

    def test_01_minimum_and_maximum(self):
        res = calculate_abcd2(ABCD2Input())
        self.assertEqual((res.score, res.risk, res.two_day_risk_percent), (0, "low", 1.0))

        res = calculate_abcd2(ABCD2Input(
            age_60_or_older=True, bp_140_90_or_higher=True, unilateral_weakness=True,
            duration_min=90, diabetes=True,
        ))
        self.assertEqual((res.score, res.risk, res.two_day_risk_percent), (7, "high", 8.1))
        self.assertEqual(res.label, "High risk")

    def test_02_weakness_outranks_speech(self):
        res = calculate_abcd2(ABCD2Input(unilateral_weakness=True, speech_disturbance=True))
        self.assertEqual(res.score, 2)
        res = calculate_abcd2(ABCD2Input(speech_disturbance=True))
        self.assertEqual(res.score, 1)

    def test_03_duration_bands(self):
        self.assertEqual(calculate_abcd2(ABCD2Input(duration_min=9)).score, 0)
        self.assertEqual(calculate_abcd2(ABCD2Input(duration_min=10)).score, 1)
        self.assertEqual(calculate_abcd2(ABCD2Input(duration_min=59)).score, 1)
        self.assertEqual(calculate_abcd2(ABCD2Input(duration_min=60)).score, 2)

    def test_04_risk_band_edges(self):
        # 3 -> low, 4 -> moderate
        three = ABCD2Input(age_60_or_older=True, bp_140_90_or_higher=True, speech_disturbance=True)
        four = ABCD2Input(age_60_or_older=True, bp_140_90_or_higher=True, speech_disturbance=True,
                          duration_min=10)
        self.assertEqual(calculate_abcd2(three).risk, "low")
        self.assertEqual(calculate_abcd2(four).risk, "moderate")
        # 5 -> moderate, 6 -> high
        five = ABCD2Input(unilateral_weakness=True, duration_min=60, diabetes=True)
        six = ABCD2Input(age_60_or_older=True, bp_140_90_or_higher=True, unilateral_weakness=True,
                         duration_min=60)
        self.assertEqual(calculate_abcd2(five).risk, "moderate")
        self.assertEqual(calculate_abcd2(six).risk, "high")

    def test_05_negative_duration(self):
        with self.assertRaises(ScoreInputError):
            calculate_abcd2(ABCD2Input(duration_min=-1))

class TestGCS(unittest.TestCase):

    def test_01_totals_and_severity(self):
        cases = [
            ((4, 5, 6), 15, "mild"),
            ((3, 5, 6), 14, "mild"),
            ((3, 4, 6), 13, "moderate"),
            ((2, 2, 5), 9, "moderate"),
            ((2, 2, 4), 8, "severe"),
            ((1, 1, 2), 4, "severe"),
            ((1, 1, 1), 3, "deep_coma"),
        ]
        for (e, v, m), total, severity in cases:
            res = calculate_gcs(GCSInput(eye=e, verbal=v, motor=m))
            self.assertEqual(res.total, total)
            self.assertEqual(res.display, str(total))
            self.assertEqual(res.severity, severity, f"E{e}V{v}M{m}")

    def test_02_intubated(self):
        res = calculate_gcs(GCSInput(eye=4, verbal=1, motor=6, verbal_not_testable=True))
        self.assertEqual(res.total, 10)
        self.assertEqual(res.display, "10T")
        self.assertIsNone(res.verbal)
        self.assertEqual(res.severity, "moderate")

    def test_03_eyes_closed_by_swelling(self):
        res = calculate_gcs(GCSInput(eye=1, verbal=5, motor=6, eye_not_testable=True))
        self.assertEqual(res.total, 11)
        self.assertEqual(res.display, "E=C V5 M6")
        self.assertEqual(res.severity, "moderate")

    def test_04_out_of_range_components(self):
        with self.assertRaises(ScoreInputError):
            calculate_gcs(GCSInput(eye=5, verbal=5, motor=6))
        with self.assertRaises(ScoreInputError):
            calculate_gcs(GCSInput(eye=4, verbal=0, motor=6))
        with self.assertRaises(DataTypeError):
            calculate_gcs(GCSInput(eye="4", verbal=5, motor=6))

    def test_05_intubated_with_eyes_closed(self):
        # Severity comes from motor alone; the reported total keeps E + M
        res = calculate_gcs(GCSInput(eye=4, verbal=1, motor=6, verbal_not_testable=True, eye_not_testable=True))
        self.assertEqual((res.total, res.display), (10, "10T"))
        self.assertEqual(res.severity, "severe")
        self.assertIsNone(res.verbal)

        res = calculate_gcs(GCSInput(eye=1, verbal=1, motor=3, verbal_not_testable=True, eye_not_testable=True))
        self.assertEqual(res.severity, "deep_coma")

class TestICHScore(unittest.TestCase):

    def test_01_extremes(self):
        res = calculate_ich_score(ICHInput(gcs_total=15, volume_ml=10, age_years=50))
        self.assertEqual((res.score, res.thirty_day_mortality_percent), (0, 0))

        res = calculate_ich_score(ICHInput(
            gcs_total=4, volume_ml=30, intraventricular_extension=True,
            infratentorial_origin=True, age_years=80,
        ))
        self.assertEqual((res.score, res.thirty_day_mortality_percent), (6, 100))

    def test_02_gcs_points(self):
        for gcs, points in [(3, 2), (4, 2), (5, 1), (12, 1), (13, 0), (15, 0)]:
            res = calculate_ich_score(ICHInput(gcs_total=gcs, volume_ml=0, age_years=40))
            self.assertEqual(res.gcs_points, points, f"GCS {gcs}")

    def test_03_thresholds(self):
        self.assertEqual(calculate_ich_score(ICHInput(gcs_total=15, volume_ml=29.9, age_years=79)).score, 0)
        self.assertEqual(calculate_ich_score(ICHInput(gcs_total=15, volume_ml=30.0, age_years=79)).score, 1)
        self.assertEqual(calculate_ich_score(ICHInput(gcs_total=15, volume_ml=0, age_years=80)).score, 1)

    def test_04_mortality_table(self):
        res = calculate_ich_score(ICHInput(gcs_total=8, volume_ml=45, intraventricular_extension=True,
                                           age_years=60))
        self.assertEqual(res.score, 3)
        self.assertEqual(res.thirty_day_mortality_percent, 72)
        self.assertEqual(res.label, "High risk")

    def test_05_invalid(self):
        with self.assertRaises(ScoreInputError):
            calculate_ich_score(ICHInput(gcs_total=2, volume_ml=10, age_years=50))
        with self.assertRaises(ScoreInputError):
            calculate_ich_score(ICHInput(gcs_total=10, volume_ml=-1, age_years=50))

class TestHASBLED(unittest.TestCase):

    def test_01_no_risk_factors(self):
        res = calculate_has_bled(HASBLEDInput())
        self.assertEqual((res.score, res.risk, res.bleeds_per_100_patient_years), (0, "low", 1.13))

    def test_02_labile_inr_needs_warfarin(self):
        self.assertEqual(calculate_has_bled(HASBLEDInput(labile_inr=True)).score, 0)
        res = calculate_has_bled(HASBLEDInput(on_warfarin=True, labile_inr=True))
        self.assertEqual((res.score, res.risk, res.bleeds_per_100_patient_years), (1, "moderate", 1.02))

    def test_03_bands(self):
        two = calculate_has_bled(HASBLEDInput(hypertension=True, elderly=True))
        self.assertEqual((two.risk, two.bleeds_per_100_patient_years), ("moderate", 1.88))
        three = calculate_has_bled(HASBLEDInput(hypertension=True, elderly=True, alcohol_use=True))
        self.assertEqual((three.risk, three.bleeds_per_100_patient_years), ("high", 3.74))
        four = calculate_has_bled(HASBLEDInput(hypertension=True, elderly=True, alcohol_use=True,
                                               stroke_history=True))
        self.assertEqual((four.risk, four.bleeds_per_100_patient_years), ("very_high", 8.70))

    def test_04_everything(self):
        res = calculate_has_bled(HASBLEDInput(
            hypertension=True, abnormal_renal_function=True, abnormal_liver_function=True,
            stroke_history=True, prior_major_bleeding=True, on_warfarin=True, labile_inr=True,
            elderly=True, antiplatelet_or_nsaid=True, alcohol_use=True,
        ))
        self.assertEqual(res.score, 9)
        self.assertEqual(res.label, "Very high risk")
        self.assertIsInstance(res.score, int)

class TestRoPE(unittest.TestCase):

    def test_01_extremes(self):
        res = calculate_rope(RoPEInput(age_years=25, cortical_infarct=True))
        self.assertEqual((res.score, res.pfo_attributable_percent), (10, 88))

        res = calculate_rope(RoPEInput(age_years=70, hypertension=True, diabetes=True,
                                       prior_stroke_or_tia=True, smoker=True))
        self.assertEqual((res.score, res.pfo_attributable_percent), (0, 0))

    def test_02_age_points(self):
        for age, points in [(18, 5), (29, 5), (30, 4), (39, 4), (40, 3), (50, 2), (60, 1), (69, 1), (70, 0), (90, 0)]:
            res = calculate_rope(RoPEInput(age_years=age))
            self.assertEqual(res.age_points, points, f"Age {age}")

    def test_03_attributable_fraction(self):
        # 3 (age 45) + no HTN + no DM = 5
        res = calculate_rope(RoPEInput(age_years=45, prior_stroke_or_tia=True, smoker=True))
        self.assertEqual((res.score, res.pfo_attributable_percent), (5, 34))
        # 1 (age 65) + no HTN + no DM + no prior = 4
        res = calculate_rope(RoPEInput(age_years=65, smoker=True))
        self.assertEqual((res.score, res.pfo_attributable_percent), (4, 38))
        res = calculate_rope(RoPEInput(age_years=35, smoker=True))
        self.assertEqual((res.score, res.pfo_attributable_percent), (7, 72))

class TestASPECTS(unittest.TestCase):

    def test_01_normal_scan(self):
        res = calculate_aspects(ASPECTSInput())
        self.assertEqual((res.score, res.interpretation), (10, "small"))
        self.assertEqual(res.involved_regions, ())

    def test_02_bands(self):
        cases = [
            (["M1", "I"], 8, "small"),
            (["M1", "M2", "M3"], 7, "moderate_core"),
            (["M1", "M2", "M3", "M4"], 6, "moderate_core"),
            (["M1", "M2", "M3", "M4", "M5"], 5, "large_core"),
            (["M1", "M2", "M3", "M4", "M5", "M6", "C"], 3, "large_core"),
            (["M1", "M2", "M3", "M4", "M5", "M6", "C", "L"], 2, "extensive"),
            (["M1", "M2", "M3", "M4", "M5", "M6", "C", "L", "IC", "I"], 0, "extensive"),
        ]
        for regions, score, interpretation in cases:
            res = calculate_aspects(ASPECTSInput(tuple(regions)))
            self.assertEqual(res.score, score)
            self.assertEqual(res.interpretation, interpretation, f"{regions}")

    def test_03_codes_are_normalized(self):
        res = calculate_aspects(ASPECTSInput(("i", " c", "M1", "m1")))
        self.assertEqual(res.score, 7)
        self.assertEqual(res.involved_regions, ("M1", "C", "I"))
        self.assertEqual(res.label, "Moderate Core")

    def test_04_unknown_region(self):
        with self.assertRaises(ScoreInputError):
            calculate_aspects(ASPECTSInput(("M7",)))

class TestNIHSS(unittest.TestCase):

    def test_01_normal_exam(self):
        res = calculate_nihss(NIHSSInput())
        self.assertEqual(res.total, 0)
        self.assertEqual(list(res.items), ["1a", "1b", "1c", "2", "3", "4", "5a", "5b",
                                           "6a", "6b", "7", "8", "9", "10", "11"])
        self.assertEqual((res.warnings, res.untestable), ((), ()))
        self.assertEqual((res.race.score, res.race.lvo_probability), (0, "low"))

    def test_02_maximum_is_42(self):
        res = calculate_nihss(NIHSSInput(
            loc=3, loc_questions=2, loc_commands=2, best_gaze=2, visual_fields=3, facial_palsy=3,
            motor_left_arm=4, motor_right_arm=4, motor_left_leg=4, motor_right_leg=4,
            limb_ataxia=2, sensory=2, best_language=3, dysarthria=2, extinction_inattention=2,
        ))
        self.assertEqual(res.total, 42)
        self.assertEqual(res.race.score, 9)

    def test_03_left_hemisphere_syndrome(self):
        res = calculate_nihss(NIHSSInput(loc_commands=1, best_gaze=1, facial_palsy=2,
                                         motor_right_arm=3, motor_right_leg=2, best_language=2))
        print(f"\nLeft MCA syndrome: NIHSS {res.total}, RACE {res.race}")
        self.assertEqual(res.total, 11)
        race = res.race
        self.assertEqual((race.facial, race.arm, race.leg, race.gaze, race.aphasia, race.agnosia),
                         (2, 2, 1, 1, 2, 0))
        self.assertEqual((race.score, race.lvo_probability, race.lvo_probability_percent), (8, "high", 85))
        self.assertEqual(res.warnings, ())

    def test_04_right_hemisphere_counts_neglect_not_language(self):
        res = calculate_nihss(NIHSSInput(loc_commands=1, motor_left_arm=4, extinction_inattention=2,
                                         best_language=1))
        self.assertEqual((res.race.aphasia, res.race.agnosia), (0, 1))
        self.assertEqual(res.race.score, 3)

    def test_05_race_probability_bands(self):
        four = calculate_nihss(NIHSSInput(best_gaze=1, facial_palsy=1, motor_right_arm=1, motor_right_leg=1))
        self.assertEqual((four.race.score, four.race.lvo_probability), (4, "low"))
        five = calculate_nihss(NIHSSInput(best_gaze=1, facial_palsy=1, motor_right_arm=1, motor_right_leg=1,
                                          best_language=1))
        self.assertEqual((five.race.score, five.race.lvo_probability_percent), (5, 55))
        self.assertEqual(five.race.label, "Moderate")

    def test_06_intubated_dysarthria_is_left_out(self):
        res = calculate_nihss(NIHSSInput(loc=1, dysarthria=None))
        self.assertEqual(res.total, 1)
        self.assertEqual(res.untestable, ("10",))
        self.assertIsNone(res.items["10"])

    def test_07_consistency_warnings(self):
        res = calculate_nihss(NIHSSInput(best_language=2))
        self.assertEqual(len(res.warnings), 1)
        self.assertIn("commands", res.warnings[0])

        res = calculate_nihss(NIHSSInput(limb_ataxia=1, motor_left_leg=4))
        self.assertIn("paralyzed", res.warnings[0])

        res = calculate_nihss(NIHSSInput(dysarthria=2))
        self.assertIn("facial palsy", res.warnings[0])
        self.assertEqual(calculate_nihss(NIHSSInput(dysarthria=2, facial_palsy=1)).warnings, ())

    def test_08_invalid_items(self):
        with self.assertRaises(ScoreInputError):
            calculate_nihss(NIHSSInput(motor_left_arm=5))
        with self.assertRaises(ScoreInputError):
            calculate_nihss(NIHSSInput(dysarthria=9))
        with self.assertRaises(DataTypeError):
            calculate_nihss(NIHSSInput(loc=None))

class TestBostonCAA(unittest.TestCase):

    def imaging(self, **findings):
        return assess_boston_criteria(BostonCAAInput(age_years=72, qualifying_presentation=True, **findings))

    def test_01_other_cause_excludes_everything(self):
        res = assess_boston_criteria(BostonCAAInput(age_years=70, pathology_definite_caa=True,
                                                    other_cause_of_hemorrhage=True))
        self.assertEqual((res.diagnosis, res.anticoagulation_risk), ("excluded", "n/a"))

    def test_02_pathology_outranks_imaging(self):
        res = assess_boston_criteria(BostonCAAInput(age_years=40, pathology_definite_caa=True))
        self.assertEqual((res.diagnosis, res.anticoagulation_risk), ("definite_caa", "very_high"))
        res = assess_boston_criteria(BostonCAAInput(age_years=40, pathology_supporting_caa=True))
        self.assertEqual(res.diagnosis, "probable_caa_supporting_pathology")
        self.assertEqual(res.label, "Probable CAA (supporting pathology)")

    def test_03_age_and_presentation_gates(self):
        res = assess_boston_criteria(BostonCAAInput(age_years=45, qualifying_presentation=True,
                                                    lobar_hemorrhagic_lesions=2))
        self.assertEqual(res.diagnosis, "unlikely_caa")
        self.assertTrue(res.criteria_met[0].startswith("Age 45 < 50"))

        res = assess_boston_criteria(BostonCAAInput(age_years=72, lobar_hemorrhagic_lesions=2))
        self.assertEqual(res.diagnosis, "unlikely_caa")
        self.assertIn("presentation", res.criteria_met[0])

    def test_04_imaging_pathways(self):
        cases = [
            ({"lobar_hemorrhagic_lesions": 2}, "probable_caa"),
            ({"lobar_hemorrhagic_lesions": 2, "white_matter_feature": True}, "probable_caa"),
            ({"lobar_hemorrhagic_lesions": 1, "white_matter_feature": True}, "probable_caa"),
            ({"lobar_hemorrhagic_lesions": 1}, "possible_caa"),
            ({"white_matter_feature": True}, "possible_caa"),
            ({}, "unlikely_caa"),
        ]
        for findings, diagnosis in cases:
            self.assertEqual(self.imaging(**findings).diagnosis, diagnosis, f"{findings}")

        res = self.imaging(lobar_hemorrhagic_lesions=1, white_matter_feature=True)
        self.assertIn("white matter", res.criteria_met[2])
        self.assertEqual(res.anticoagulation_risk, "high")

    def test_05_deep_lesions_rule_out_imaging_diagnosis(self):
        for lobar in (0, 1, 2):
            for white_matter in (False, True):
                res = self.imaging(lobar_hemorrhagic_lesions=lobar, white_matter_feature=white_matter,
                                   deep_hemorrhagic_lesions=True)
                self.assertEqual(res.diagnosis, "unlikely_caa", f"lobar={lobar} wm={white_matter}")
        self.assertIn("no lobar or white matter", self.imaging(deep_hemorrhagic_lesions=True).criteria_met[0])

    def test_06_invalid_lesion_count(self):
        with self.assertRaises(ScoreInputError):
            self.imaging(lobar_hemorrhagic_lesions=3)
        with self.assertRaises(ScoreInputError):
            assess_boston_criteria(BostonCAAInput(age_years=-1))

class TestHeidelberg(unittest.TestCase):

    def test_01_every_class_resolves(self):
        for code in ["1a", "1b", "1c", "2", "3a", "3b", "3c", "3d"]:
            res = classify_heidelberg_bleeding(HeidelbergInput(code))
            self.assertEqual(res.bleeding_class, code)
            self.assertIn(code.upper(), res.classification.upper())

    def test_02_symptomatic_adds_sich_note(self):
        plain = classify_heidelberg_bleeding(HeidelbergInput("2"))
        sich = classify_heidelberg_bleeding(HeidelbergInput("2", symptomatic=True))
        self.assertEqual(plain.classification, "Class 2 (PH2)")
        self.assertTrue(sich.management_note.startswith(plain.management_note))
        self.assertIn("Symptomatic ICH", sich.management_note)
        self.assertNotIn("Symptomatic ICH", plain.management_note)

    def test_03_codes_are_normalized(self):
        self.assertEqual(classify_heidelberg_bleeding(HeidelbergInput(" 1C ")).classification, "Class 1c (PH1)")
        self.assertEqual(classify_heidelberg_bleeding(HeidelbergInput(2)).bleeding_class, "2")

    def test_04_unknown_class(self):
        with self.assertRaises(ScoreInputError):
            classify_heidelberg_bleeding(HeidelbergInput("4"))

if __name__ == '__main__':
    unittest.main()
