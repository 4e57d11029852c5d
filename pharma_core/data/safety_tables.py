"""Static drug interaction and FDA pregnancy category tables."""

from __future__ import annotations

from typing import Dict

MILD = "mild"
MODERATE = "moderate"
SEVERE = "severe"


def _i(severity: str, description: str) -> Dict[str, str]:
    return {"severity": severity, "description": description}


_HYPOGLYCEMIA_MONITOR = "Increased risk of hypoglycemia. Monitor blood glucose levels."
_HYPERKALEMIA = "Increased risk of hyperkalemia. Monitor potassium levels."
_INR = "May increase anticoagulant effect. Monitor INR."
_SEROTONIN = "Increased risk of serotonin syndrome. Monitor for symptoms."
_LEVOTHYROXINE_ABSORPTION = "May decrease levothyroxine absorption. Take at least 4 hours apart."
_DIGOXIN_TOXICITY = "May increase digoxin toxicity due to hypokalemia. Monitor potassium and digoxin levels."
_LITHIUM = "May increase lithium levels. Monitor lithium concentration."
_CNS_ALCOHOL = "Increased CNS depression. Avoid alcohol."

DRUG_INTERACTIONS: Dict[str, Dict[str, Dict[str, str]]] = {
    "metformin": {
        "lisinopril": _i(MILD, "May cause hypoglycemia. Monitor blood glucose levels."),
        "insulin": _i(MODERATE, "Increased risk of hypoglycemia. Dose adjustments may be needed."),
        "alcohol": _i(SEVERE, "May cause lactic acidosis. Avoid alcohol while taking metformin."),
    },
    "aspirin": {
        "warfarin": _i(SEVERE, "Increased risk of bleeding. Avoid combination if possible."),
        "ibuprofen": _i(MODERATE, "May decrease cardioprotective effects of aspirin."),
        "clopidogrel": _i(MILD, "Increased antiplatelet effect. Monitor for bleeding."),
    },
    "lisinopril": {
        "potassium": _i(MODERATE, "May cause hyperkalemia. Monitor potassium levels."),
        "spironolactone": _i(MODERATE, _HYPERKALEMIA),
        "nsaids": _i(MODERATE, "May reduce antihypertensive effect. Monitor blood pressure."),
    },
    "atorvastatin": {
        "grapefruit": _i(MODERATE, "May increase atorvastatin levels. Avoid grapefruit juice."),
        "clarithromycin": _i(SEVERE, "May increase risk of myopathy. Consider alternative antibiotic."),
        "cyclosporine": _i(SEVERE, "Increased risk of myopathy and rhabdomyolysis. Avoid combination."),
    },
    "warfarin": {
        "vitamin_k": _i(MODERATE, "May decrease warfarin effectiveness. Maintain consistent vitamin K intake."),
        "amiodarone": _i(SEVERE, "Increases warfarin effect. Monitor INR closely and adjust warfarin dose."),
        "nsaids": _i(SEVERE, "Increased risk of bleeding. Avoid combination if possible."),
    },
    "levothyroxine": {
        "calcium": _i(MODERATE, _LEVOTHYROXINE_ABSORPTION),
        "iron": _i(MODERATE, _LEVOTHYROXINE_ABSORPTION),
        "antacids": _i(MODERATE, _LEVOTHYROXINE_ABSORPTION),
    },
    "ozempic": {
        "insulin": _i(MODERATE, _HYPOGLYCEMIA_MONITOR),
        "oral_diabetes_medications": _i(MODERATE, "May enhance hypoglycemic effect. Dose adjustments may be needed."),
    },
    "simvastatin": {
        "grapefruit": _i(SEVERE, "Significantly increases simvastatin levels. Avoid grapefruit juice."),
        "warfarin": _i(MODERATE, _INR),
    },
    "prednisone": {
        "nsaids": _i(MODERATE, "Increased risk of GI bleeding. Use with caution."),
        "warfarin": _i(MODERATE, _INR),
    },
    "furosemide": {
        "digoxin": _i(MODERATE, _DIGOXIN_TOXICITY),
        "lithium": _i(MODERATE, _LITHIUM),
    },
    "tramadol": {
        "sertraline": _i(MODERATE, _SEROTONIN),
        "warfarin": _i(MODERATE, _INR),
    },
    "sertraline": {
        "tramadol": _i(MODERATE, _SEROTONIN),
        "warfarin": _i(MODERATE, _INR),
    },
    "pantoprazole": {
        "clopidogrel": _i(MODERATE, "May reduce clopidogrel effectiveness. Consider alternative PPI."),
        "warfarin": _i(MILD, "May slightly increase anticoagulant effect. Monitor INR."),
    },
    "montelukast": {
        "phenobarbital": _i(MILD, "May decrease montelukast effectiveness. Monitor asthma control."),
    },
    "fluticasone": {
        "ritonavir": _i(SEVERE, "Significantly increases fluticasone levels. Avoid combination."),
    },
    "carvedilol": {
        "insulin": _i(MODERATE, "May mask hypoglycemia symptoms. Monitor blood glucose closely."),
        "verapamil": _i(MODERATE, "Increased risk of heart block. Monitor cardiac function."),
    },
    "spironolactone": {
        "lisinopril": _i(MODERATE, _HYPERKALEMIA),
        "trimethoprim": _i(MODERATE, _HYPERKALEMIA),
    },
    "digoxin": {
        "furosemide": _i(MODERATE, _DIGOXIN_TOXICITY),
        "amiodarone": _i(SEVERE, "Significantly increases digoxin levels. Reduce digoxin dose."),
    },
    "diltiazem": {
        "simvastatin": _i(MODERATE, "May increase simvastatin levels. Consider dose reduction."),
        "digoxin": _i(MODERATE, "May increase digoxin levels. Monitor digoxin concentration."),
    },
    "valsartan": {
        "potassium": _i(MODERATE, "May cause hyperkalemia. Monitor potassium levels."),
        "lithium": _i(MODERATE, _LITHIUM),
    },
    "rosuvastatin": {
        "cyclosporine": _i(SEVERE, "Significantly increases rosuvastatin levels. Avoid combination."),
        "warfarin": _i(MODERATE, _INR),
    },
    "escitalopram": {
        "tramadol": _i(MODERATE, _SEROTONIN),
        "warfarin": _i(MODERATE, _INR),
    },
    "duloxetine": {
        "tramadol": _i(MODERATE, _SEROTONIN),
        "warfarin": _i(MODERATE, "May increase bleeding risk. Monitor INR."),
    },
    "pregabalin": {
        "alcohol": _i(MODERATE, _CNS_ALCOHOL),
        "opioids": _i(MODERATE, "Increased risk of respiratory depression. Use with caution."),
    },
    "gabapentin": {
        "alcohol": _i(MODERATE, _CNS_ALCOHOL),
        "morphine": _i(MODERATE, "Increased gabapentin levels. Monitor for side effects."),
    },
}


_NO_RISK_ANIMAL = "Animal studies have not shown risk to the fetus, but there are no adequate studies in pregnant women."
_RISK_ANIMAL = "Animal studies have shown adverse effects on the fetus, but there are no adequate studies in humans."
_BENEFIT_JUSTIFIES = "Use only if potential benefit justifies the potential risk to the fetus."

PREGNANCY_CATEGORIES: Dict[str, Dict[str, str]] = {
    "metformin": {
        "category": "B",
        "description": _NO_RISK_ANIMAL,
        "recommendation": "Generally considered safe during pregnancy, especially for gestational diabetes.",
    },
    "lisinopril": {
        "category": "D",
        "description": (
            "There is positive evidence of human fetal risk, but the benefits may outweigh the risks in certain situations."
        ),
        "recommendation": "Should be avoided during pregnancy, especially in the second and third trimesters.",
    },
    "aspirin": {
        "category": "C/D",
        "description": "Category C in first and second trimesters, Category D in third trimester.",
        "recommendation": (
            "Low-dose aspirin may be used in certain high-risk pregnancies under medical supervision. "
            "Avoid in third trimester."
        ),
    },
    "atorvastatin": {
        "category": "X",
        "description": (
            "Studies in animals or humans have demonstrated fetal abnormalities or there is evidence of fetal risk."
        ),
        "recommendation": "Contraindicated during pregnancy.",
    },
    "levothyroxine": {
        "category": "A",
        "description": "Adequate studies in pregnant women have not shown risk to the fetus.",
        "recommendation": "Safe to use during pregnancy. Dosage may need adjustment.",
    },
    "amlodipine": {
        "category": "C",
        "description": _RISK_ANIMAL,
        "recommendation": _BENEFIT_JUSTIFIES,
    },
    "omeprazole": {
        "category": "C",
        "description": _RISK_ANIMAL,
        "recommendation": _BENEFIT_JUSTIFIES,
    },
    "albuterol": {
        "category": "C",
        "description": _RISK_ANIMAL,
        "recommendation": "Generally considered acceptable for use during pregnancy when needed for asthma control.",
    },
    "insulin": {
        "category": "B",
        "description": _NO_RISK_ANIMAL,
        "recommendation": "Safe to use during pregnancy. Often the preferred treatment for diabetes in pregnancy.",
    },
    "ozempic": {
        "category": "C",
        "description": _RISK_ANIMAL,
        "recommendation": "Not recommended during pregnancy. Alternative treatments should be considered.",
    },
}

# FDA pregnancy category definitions, keyed by letter.
CATEGORY_DESCRIPTIONS: Dict[str, str] = {
    "A": (
        "Adequate and well-controlled studies have failed to demonstrate a risk to the fetus in the first "
        "trimester of pregnancy (and there is no evidence of risk in later trimesters)."
    ),
    "B": (
        "Animal reproduction studies have failed to demonstrate a risk to the fetus and there are no adequate "
        "and well-controlled studies in pregnant women."
    ),
    "C": (
        "Animal reproduction studies have shown an adverse effect on the fetus and there are no adequate and "
        "well-controlled studies in humans, but potential benefits may warrant use of the drug in pregnant "
        "women despite potential risks."
    ),
    "D": (
        "There is positive evidence of human fetal risk based on adverse reaction data from investigational or "
        "marketing experience or studies in humans, but potential benefits may warrant use of the drug in "
        "pregnant women despite potential risks."
    ),
    "X": (
        "Studies in animals or humans have demonstrated fetal abnormalities and/or there is positive evidence "
        "of human fetal risk based on adverse reaction data from investigational or marketing experience, and "
        "the risks involved in use of the drug in pregnant women clearly outweigh potential benefits."
    ),
}
