# Static drug -> ICD-10 tables used by the local lookup layer.
# Keys are lowercase generic names; values are (code, description) pairs.

# Compact table used by the live ICD-10 endpoint.
DRUG_ICD_FALLBACK = {
    "metformin": [("E11.9", "Type 2 diabetes mellitus without complications")],
    "insulin": [("E10.9", "Type 1 diabetes mellitus without complications")],
    "lisinopril": [("I10", "Essential (primary) hypertension")],
    "atorvastatin": [("E78.5", "Hyperlipidemia, unspecified")],
    "amlodipine": [("I10", "Essential (primary) hypertension")],
    "omeprazole": [("K21.9", "Gastro-esophageal reflux disease without esophagitis")],
    "aspirin": [("I25.10", "Atherosclerotic heart disease of native coronary artery")],
    "albuterol": [("J45.909", "Unspecified asthma, uncomplicated")],
    "levothyroxine": [("E03.9", "Hypothyroidism, unspecified")],
    "warfarin": [("I48.91", "Unspecified atrial fibrillation")],
}

# Extended table for UAE medications, used by the drug -> code endpoint.
DRUG_ICD_MAPPING = {
    # Diabetes
    "metformin": [
        ("E11.9", "Type 2 diabetes mellitus without complications"),
        ("E11.65", "Type 2 diabetes mellitus with hyperglycemia"),
    ],
    "insulin": [
        ("E10.9", "Type 1 diabetes mellitus without complications"),
        ("E11.9", "Type 2 diabetes mellitus without complications"),
    ],
    "glimepiride": [("E11.9", "Type 2 diabetes mellitus without complications")],
    "gliclazide": [("E11.9", "Type 2 diabetes mellitus without complications")],
    "sitagliptin": [("E11.9", "Type 2 diabetes mellitus without complications")],
    "empagliflozin": [
        ("E11.9", "Type 2 diabetes mellitus without complications"),
        ("I50.9", "Heart failure, unspecified"),
    ],
    "liraglutide": [
        ("E11.9", "Type 2 diabetes mellitus without complications"),
        ("E66.9", "Obesity, unspecified"),
    ],
    "ozempic": [
        ("E11.9", "Type 2 diabetes mellitus without complications"),
        ("E66.9", "Obesity, unspecified"),
    ],
    # Cardiovascular
    "lisinopril": [
        ("I10", "Essential (primary) hypertension"),
        ("I50.9", "Heart failure, unspecified"),
    ],
    "amlodipine": [("I10", "Essential (primary) hypertension")],
    "atorvastatin": [
        ("E78.5", "Hyperlipidemia, unspecified"),
        ("E78.2", "Mixed hyperlipidemia"),
    ],
    "simvastatin": [("E78.5", "Hyperlipidemia, unspecified")],
    "rosuvastatin": [("E78.5", "Hyperlipidemia, unspecified")],
    "carvedilol": [
        ("I50.9", "Heart failure, unspecified"),
        ("I10", "Essential (primary) hypertension"),
    ],
    "bisoprolol": [
        ("I10", "Essential (primary) hypertension"),
        ("I50.9", "Heart failure, unspecified"),
    ],
    "warfarin": [
        ("I48.91", "Unspecified atrial fibrillation"),
        ("Z79.01", "Long term (current) use of anticoagulants"),
    ],
    "clopidogrel": [("I25.10", "Atherosclerotic heart disease of native coronary artery")],
    # Respiratory
    "albuterol": [
        ("J45.909", "Unspecified asthma, uncomplicated"),
        ("J44.9", "Chronic obstructive pulmonary disease, unspecified"),
    ],
    "montelukast": [("J45.909", "Unspecified asthma, uncomplicated")],
    "fluticasone": [
        ("J45.909", "Unspecified asthma, uncomplicated"),
        ("J30.9", "Allergic rhinitis, unspecified"),
    ],
    # Gastrointestinal
    "omeprazole": [
        ("K21.9", "Gastro-esophageal reflux disease without esophagitis"),
        ("K29.60", "Other gastritis without bleeding"),
    ],
    "pantoprazole": [("K21.9", "Gastro-esophageal reflux disease without esophagitis")],
    "esomeprazole": [("K21.9", "Gastro-esophageal reflux disease without esophagitis")],
    # Endocrine
    "levothyroxine": [
        ("E03.9", "Hypothyroidism, unspecified"),
        ("E89.0", "Postprocedural hypothyroidism"),
    ],
    # Pain
    "tramadol": [
        ("G89.29", "Other chronic pain"),
        ("M79.3", "Panniculitis, unspecified"),
    ],
    "gabapentin": [
        ("G89.29", "Other chronic pain"),
        ("G40.909", "Epilepsy, unspecified, not intractable, without status epilepticus"),
    ],
    "pregabalin": [
        ("G89.29", "Other chronic pain"),
        ("G40.909", "Epilepsy, unspecified, not intractable, without status epilepticus"),
    ],
    # Psychiatric
    "sertraline": [
        ("F32.9", "Major depressive disorder, single episode, unspecified"),
        ("F41.9", "Anxiety disorder, unspecified"),
    ],
    "escitalopram": [
        ("F32.9", "Major depressive disorder, single episode, unspecified"),
        ("F41.9", "Anxiety disorder, unspecified"),
    ],
    "duloxetine": [
        ("F32.9", "Major depressive disorder, single episode, unspecified"),
        ("G89.29", "Other chronic pain"),
    ],
    # Common
    "aspirin": [
        ("I25.10", "Atherosclerotic heart disease of native coronary artery"),
        ("Z79.82", "Long term (current) use of aspirin"),
    ],
    "paracetamol": [
        ("R50.9", "Fever, unspecified"),
        ("G89.29", "Other chronic pain"),
    ],
    "ibuprofen": [
        ("G89.29", "Other chronic pain"),
        ("R50.9", "Fever, unspecified"),
    ],
}

# Indications shown on the drug detail screen (icd10_code / indication shape).
DRUG_INDICATIONS = {
    "metformin": [
        ("E11.9", "Type 2 diabetes mellitus without complications"),
        ("E11.65", "Type 2 diabetes mellitus with hyperglycemia"),
    ],
    "insulin": [
        ("E10.9", "Type 1 diabetes mellitus without complications"),
        ("E11.9", "Type 2 diabetes mellitus without complications"),
    ],
    "amlodipine": [("I10", "Essential (primary) hypertension")],
    "atorvastatin": [
        ("E78.5", "Hyperlipidemia, unspecified"),
        ("E78.2", "Mixed hyperlipidemia"),
    ],
    "omeprazole": [("K21.9", "Gastro-esophageal reflux disease without esophagitis")],
    "pantoprazole": [("K21.9", "Gastro-esophageal reflux disease without esophagitis")],
    "aspirin": [("I25.10", "Atherosclerotic heart disease of native coronary artery")],
    "albuterol": [("J45.909", "Unspecified asthma, uncomplicated")],
    "levothyroxine": [("E03.9", "Hypothyroidism, unspecified")],
    "warfarin": [("I48.91", "Unspecified atrial fibrillation")],
}

# ICD-10 category (first 3 characters) -> drug name keywords.
ICD10_DRUG_KEYWORDS = {
    "E11": [
        "metformin", "insulin", "glimepiride", "gliclazide", "sitagliptin",
        "empagliflozin", "liraglutide", "semaglutide", "dulaglutide",
    ],
    "I10": ["amlodipine", "lisinopril", "losartan", "bisoprolol", "carvedilol"],
    "K21": ["omeprazole", "pantoprazole", "esomeprazole"],
    "J45": ["albuterol", "salbutamol", "montelukast", "fluticasone"],
    "E78": ["atorvastatin", "simvastatin", "rosuvastatin"],
}
