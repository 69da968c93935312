# /healthlens/flows/definitions/diet_planner.py

"""
Personalized diet plans.

The plan always carries the standard diet disclaimer, and any mention of an
eating disorder in the goals or conditions returns general wellness guidance
without calling the model.
"""

from typing import Any, Dict, Mapping

from healthlens.config.safety import EATING_DISORDER_KEYWORDS
from healthlens.config.strings import DIET_PLAN_DISCLAIMER, EATING_DISORDER_SUPPORT
from healthlens.flows.rules import ensure_disclaimer
from healthlens.flows.safety import SafetyCheck, SafetyMode
from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, array, enum, integer, number, obj, string
from healthlens.models.flow import FlowDefinition

DIET_TYPES = ["none", "vegetarian", "vegan", "keto", "paleo", "gluten_free", "dairy_free",
              "pescatarian", "mediterranean", "low_carb"]
ACTIVITY_LEVELS = ["sedentary", "lightly_active", "moderately_active", "very_active", "extra_active"]

DietPlannerInput = Contract(name="DietPlannerInput", fields={
    "userName": string("User's name for personalization.", required=False),
    "age": integer("User's age in years.", gt=0, le=120),
    "gender": enum(["male", "female", "other"], "User's gender."),
    "weightKg": number("Current weight in kilograms.", gt=0, le=500),
    "heightCm": integer("Height in centimeters.", gt=0, le=300),
    "activityLevel": enum(ACTIVITY_LEVELS, "Typical daily activity level."),
    "healthGoals": array(string(min_length=1), "Primary health goals, e.g. 'weight loss'.", min_items=1),
    "medicalConditions": array(string(), "Relevant medical conditions, for general consideration only.", required=False),
    "dietaryPreferences": obj("DietaryPreferences", {
        "dietType": enum(DIET_TYPES, "Overall diet followed.", required=False),
        "allergies": array(string(), "Food allergies.", required=False),
        "foodDislikes": array(string(), "Foods to avoid.", required=False),
        "preferredCuisines": array(string(), "Preferred cuisines.", required=False),
    }, "Dietary preferences and restrictions."),
    "planDurationDays": integer("Plan length in days.", required=False, ge=1, le=7, default=1),
    "calorieTarget": integer("Specific daily calorie target.", required=False, gt=0, le=10000),
    "language": string("Response language code, e.g. 'en', 'es'.", required=False, default="en", min_length=2, max_length=10),
})


def _nutrition(description: str, required: bool = True):
    return obj("NutritionalInfo", {
        "calories": integer("Estimated calories."),
        "proteinGrams": number("Estimated protein in grams."),
        "carbsGrams": number("Estimated carbohydrates in grams."),
        "fatGrams": number("Estimated fat in grams."),
    }, description, required=required)


def _meal(description: str = ""):
    return obj("Meal", {
        "mealName": string("Name of the meal."),
        "description": string("Brief description.", required=False),
        "ingredients": array(obj("Ingredient", {
            "name": string("Ingredient name."),
            "quantity": string("Quantity as text, e.g. '100', '1/2'."),
            "unit": string("Unit, e.g. 'g', 'cup'.", required=False),
        }), "Ingredients with quantities.", min_items=1),
        "preparationSteps": array(string(), "Step-by-step preparation.", min_items=1),
        "nutritionalInfo": _nutrition("Estimated nutrition for the meal.", required=False),
        "recipeImageHint": string("2-4 word image hint.", required=False, max_length=30),
        "healthBenefits": string("1-2 key benefits.", required=False),
    }, description, required=False)


DietPlannerOutput = Contract(name="DietPlannerOutput", fields={
    "planTitle": string("Descriptive title for the plan."),
    "introduction": string("Brief, encouraging introduction."),
    "dailyPlans": array(obj("DailyPlan", {
        "dayNumber": integer("Day number, starting at 1.", ge=1),
        "meals": obj("Meals", {
            "breakfast": _meal(),
            "midMorningSnack": _meal("Light mid-morning snack."),
            "lunch": _meal(),
            "afternoonSnack": _meal("Light afternoon snack."),
            "dinner": _meal(),
            "eveningSnack": _meal("Optional evening snack."),
        }, "Meals for the day."),
        "dailyNutritionalSummary": _nutrition("Estimated totals for the day.", required=False),
    }), "One entry per plan day.", min_items=1),
    "generalTips": array(string(), "General healthy eating tips.", required=False),
    "overallDisclaimer": string("Consult-a-professional disclaimer."),
})

TEMPLATE = PromptTemplate("""You are an AI Health and Nutrition Expert. Create a personalized, practical meal plan for the user below.

User Profile & Goals:
{{#if userName}}Name: {{userName}}
{{/if}}Age: {{age}}
Gender: {{gender}}
Weight: {{weightKg}} kg
Height: {{heightCm}} cm
Activity Level: {{activityLevel}}
Health Goals: {{#each healthGoals}}"{{this}}" {{/each}}
{{#if medicalConditions}}Medical Conditions (for general consideration, not treatment): {{#each medicalConditions}}"{{this}}" {{/each}}
{{/if}}{{#with dietaryPreferences}}Diet Type: {{#if dietType}}{{dietType}}{{else}}None specified{{/if}}
Allergies: {{#each allergies}}"{{this}}" {{else}}None specified{{/each}}
Dislikes: {{#each foodDislikes}}"{{this}}" {{else}}None specified{{/each}}
Preferred Cuisines: {{#each preferredCuisines}}"{{this}}" {{else}}None specified{{/each}}
{{/with}}Plan Duration: {{planDurationDays}} day(s)
{{#if calorieTarget}}Daily Calorie Target: {{calorieTarget}} kcal{{else}}Calorie Target: estimate one from the profile and goals and say it is an estimate.{{/if}}
Response Language: {{language}}

Instructions:
1. Write a 'planTitle' and a short 'introduction'{{#if userName}} addressed to {{userName}}{{/if}}.
2. Produce exactly {{planDurationDays}} entries in 'dailyPlans', numbered from 1. Each day has breakfast, a mid-morning snack, lunch, an afternoon snack and dinner; add an evening snack only when the goals call for it.
3. Every meal lists ingredients with quantity and unit, numbered preparation steps, estimated nutrition and a 2-4 word 'recipeImageHint'.
4. Strictly respect allergies and dislikes. Use the diet type and preferred cuisines where possible.
5. For medical conditions, favour generally recommended foods but never prescribe medical dietary therapy.
6. Add 2-3 'generalTips' and an 'overallDisclaimer' telling the user to consult a healthcare professional or registered dietitian.
7. Prioritise whole foods and balanced macronutrients. Refuse extreme calorie targets by choosing a moderate range.
8. Write all text in the response language.
""")


def _eating_disorder_fallback(language: str) -> Dict[str, Any]:
    text = EATING_DISORDER_SUPPORT[language]
    return {
        "planTitle": text["title"],
        "introduction": text["introduction"],
        "dailyPlans": [{
            "dayNumber": 1,
            "meals": {
                "breakfast": {
                    "mealName": text["hydration_meal"],
                    "ingredients": [{"name": "Water", "quantity": "1", "unit": "glass"}],
                    "preparationSteps": [text["hydration_step"]],
                    "recipeImageHint": "glass water",
                    "healthBenefits": text["hydration_benefit"],
                },
                "lunch": {
                    "mealName": text["balanced_meal"],
                    "ingredients": [{"name": "Varied Foods", "quantity": "1", "unit": "plate"}],
                    "preparationSteps": [text["balanced_step"]],
                    "recipeImageHint": "balanced meal plate",
                    "healthBenefits": text["balanced_benefit"],
                },
            },
        }],
        "generalTips": [text["tip"]],
        "overallDisclaimer": DIET_PLAN_DISCLAIMER,
    }


EATING_DISORDER_CHECK = SafetyCheck(
    name="eating_disorder_support",
    keywords=EATING_DISORDER_KEYWORDS,
    fields=["healthGoals", "medicalConditions"],
    fallback={language: _eating_disorder_fallback(language) for language in EATING_DISORDER_SUPPORT},
    mode=SafetyMode.PREEMPT,
    language_field="language",
)

DIET_PLANNER_FLOW = FlowDefinition(
    name="diet_planner",
    description="Generates a personalized multi-day meal plan.",
    input_contract=DietPlannerInput,
    output_contract=DietPlannerOutput,
    template=TEMPLATE,
    safety_checks=(EATING_DISORDER_CHECK,),
    post_processing=(
        ensure_disclaimer(["overallDisclaimer"], " " + DIET_PLAN_DISCLAIMER, name="diet_disclaimer"),
    ),
)


async def generate_diet_plan(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    """Entry point: returns the diet plan or raises a FlowError."""
    return await runner.run_or_raise(DIET_PLANNER_FLOW, request)
