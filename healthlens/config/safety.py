# /healthlens/config/safety.py

# Keyword lists used by the safety checks that short-circuit or override
# model output. Matching is case-insensitive substring matching.
# IMPORTANT: these lists are a product/safety decision and need review by a
# clinician before they are changed or extended.

EATING_DISORDER_KEYWORDS = [
    "eating disorder",
    "anorexia",
    "bulimia",
    "binge eating",
]

PHYSICAL_EMERGENCY_PHRASES = [
    "can't breathe",
    "cannot breathe",
    "chest pain",
    "heart attack",
    "stroke",
    "bleeding uncontrollably",
    "severe allergic reaction",
    "emergency help",
    "emergency room",
    "urgent care",
    "severe dizziness",
    "loss of consciousness",
    "difficulty breathing",
]

MENTAL_HEALTH_CRISIS_PHRASES = [
    "kill myself",
    "want to die",
    "self harm",
    "self-harm",
    "suicidal thoughts",
    "suicide",
    "ending my life",
    "don't want to live",
    "no reason to live",
]

# Markers that show a text already carries a consult-a-professional notice.
DISCLAIMER_MARKERS = [
    "medical advice",
    "healthcare professional",
    "registered dietitian",
]
