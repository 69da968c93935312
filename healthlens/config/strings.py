# /healthlens/config/strings.py

# This file contains the fixed, user-facing texts that post-processing and the
# safety checks put into flow outputs, keyed by language where a translation
# exists. English is the fallback for any other language.

DEFAULT_LANGUAGE = "en"

# --- Disclaimers --- #

DIET_PLAN_DISCLAIMER = (
    "This diet plan is AI-generated for informational purposes only and does not constitute "
    "medical or nutritional advice. It's essential to consult with a qualified healthcare "
    "professional or registered dietitian before making any significant changes to your diet, "
    "especially if you have pre-existing health conditions or specific dietary needs. "
    "Nutritional information is estimated and may vary."
)

MYTH_BUSTER_DISCLAIMER = (
    "\n\nRemember, this information is for educational purposes and not medical advice. "
    "Always consult a healthcare professional for personal health concerns."
)

HABIT_CONFLICT_DISCLAIMER = (
    " This analysis is for informational purposes only and not medical or nutritional advice. "
    "Consult with a doctor, registered dietitian, or other qualified healthcare professional "
    "before making significant changes to your diet or exercise routine, especially if you "
    "have any health conditions."
)

BODY_PART_DISCLAIMER = (
    " This information is for general knowledge only and not medical advice. Consult a "
    "healthcare professional for any pain, injury, or health concerns."
)

SELF_CARE_DISCLAIMER = (
    "This self-care plan is for informational purposes only and does not constitute medical "
    "advice. Consult with a healthcare professional for any health concerns."
)

NURSE_DISCLAIMER = (
    "\n\nRemember, I'm an AI assistant and this isn't medical advice. Please consult with your "
    "doctor or a healthcare professional for any health concerns."
)

CHECK_IN_REMINDER = (
    "\n\nIf these feelings persist, talking to a healthcare professional or counselor can help. "
    "This check-in is not medical advice."
)

# --- Safety fallbacks --- #

MEDICAL_EMERGENCY_RESPONSE = (
    "If you are experiencing a medical emergency, please call your local emergency services "
    "(e.g., 911, 112, 999) or go to the nearest emergency room immediately. I am an AI "
    "assistant and cannot provide emergency medical help."
)

MENTAL_HEALTH_CRISIS_RESPONSE = (
    "It sounds like you're going through a very difficult time. If you're in crisis or need "
    "immediate support, please reach out to a crisis hotline or mental health professional. "
    "There are people who want to help. In the US, you can call or text 988. For other "
    "regions, please search for your local crisis support line."
)

CRISIS_SUPPORT_STEPS = [
    "If you are in immediate danger, call your local emergency number now.",
    "In the US, call or text 988 to reach the Suicide and Crisis Lifeline.",
    "Tell someone you trust how you are feeling and ask them to stay with you.",
]

EATING_DISORDER_SUPPORT = {
    "en": {
        "title": "General Wellness Guidance",
        "introduction": (
            "For support with complex health concerns like eating disorders, it's crucial to work "
            "directly with healthcare professionals. This assistant can provide general wellness "
            "tips, but not specialized therapeutic plans."
        ),
        "hydration_meal": "Focus on Hydration",
        "hydration_step": "Drink a glass of water.",
        "hydration_benefit": "Essential for overall health.",
        "balanced_meal": "Consider Balanced Nutrition",
        "balanced_step": (
            "Aim for a colorful plate with fruits, vegetables, lean protein, and whole grains, "
            "as advised by your healthcare provider."
        ),
        "balanced_benefit": "Supports overall well-being.",
        "tip": (
            "Please speak to a doctor or a registered dietitian who can provide you with "
            "personalized and safe advice."
        ),
    },
    "es": {
        "title": "Orientación general de bienestar",
        "introduction": (
            "Para recibir apoyo con problemas de salud complejos como los trastornos de la "
            "conducta alimentaria, es fundamental trabajar directamente con profesionales de la "
            "salud. Este asistente puede ofrecer consejos generales de bienestar, pero no planes "
            "terapéuticos especializados."
        ),
        "hydration_meal": "Prioriza la hidratación",
        "hydration_step": "Bebe un vaso de agua.",
        "hydration_benefit": "Esencial para la salud en general.",
        "balanced_meal": "Considera una nutrición equilibrada",
        "balanced_step": (
            "Busca un plato variado con frutas, verduras, proteína magra y cereales integrales, "
            "según lo indique tu profesional de la salud."
        ),
        "balanced_benefit": "Favorece el bienestar general.",
        "tip": (
            "Por favor, habla con un médico o un dietista titulado que pueda darte consejos "
            "personalizados y seguros."
        ),
    },
}

WELLNESS_TIP_FALLBACK = (
    "Remember to take a few moments for yourself today, perhaps by stretching or enjoying a "
    "quiet cup of tea. Small acts of self-care can make a big difference."
)
