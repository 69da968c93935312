# tests/unit/test_template.py
import pytest

from healthlens.flows.errors import TemplateResolutionError
from healthlens.flows.template import PromptTemplate, format_value, is_present
from healthlens.models.contract import Contract, array, integer, number, obj, string

CONTRACT = Contract(name="Request", fields={
    "name": string(required=False),
    "age": integer(),
    "weight": number(required=False),
    "goals": array(string(), required=False),
    "meals": array(obj("Meal", {"title": string(), "kcal": integer()}), required=False),
    "prefs": obj("Prefs", {
        "diet": string(required=False),
        "allergies": array(string(), required=False),
    }, required=False),
})


def render(source, values):
    template = PromptTemplate(source)
    template.check_against(CONTRACT)
    return template.render(values, CONTRACT)


@pytest.mark.parametrize("value, expected", [
    ("text", "text"),
    (30, "30"),
    (70.0, "70"),
    (70.25, "70.25"),
    (True, "true"),
    (False, "false"),
    (None, ""),
    (["a", "b"], "a, b"),
    ({"a": 1}, '{"a":1}'),
])
def test_format_value(value, expected):
    assert format_value(value) == expected


@pytest.mark.parametrize("value, present", [
    (None, False), (False, False), ("", False), ([], False), ({}, False),
    ("x", True), (0, True), (["x"], True), (True, True),
])
def test_is_present(value, present):
    assert is_present(value) is present


def test_placeholders_and_triple_braces():
    assert render("Age {{age}}, weight {{{weight}}}", {"age": 30, "weight": 70.0}) == "Age 30, weight 70"


def test_if_else_and_unless():
    source = "{{#if name}}Hi {{name}}{{else}}Hi there{{/if}}{{#unless goals}}, no goals{{/unless}}"
    assert render(source, {"age": 1, "name": "Ana"}) == "Hi Ana, no goals"
    assert render(source, {"age": 1, "name": "", "goals": ["x"]}) == "Hi there"


def test_each_with_index_this_and_else():
    source = "{{#each goals}}{{@index}}:{{this}} {{else}}none{{/each}}"
    assert render(source, {"age": 1, "goals": ["sleep", "walk"]}) == "0:sleep 1:walk "
    assert render(source, {"age": 1, "goals": []}) == "none"
    assert render(source, {"age": 1}) == "none"


def test_each_over_objects_exposes_element_fields():
    source = "{{#each meals}}{{title}}={{this.kcal}};{{/each}}"
    values = {"age": 1, "meals": [{"title": "Oats", "kcal": 300}, {"title": "Soup", "kcal": 200}]}
    assert render(source, values) == "Oats=300;Soup=200;"


def test_outer_fields_stay_in_scope_inside_blocks():
    source = "{{#each goals}}{{this}}@{{age}} {{/each}}"
    assert render(source, {"age": 30, "goals": ["a"]}) == "a@30 "


def test_with_block_scopes_nested_fields():
    source = "{{#with prefs}}Diet: {{#if diet}}{{diet}}{{else}}None specified{{/if}}{{/with}}"
    assert render(source, {"age": 1, "prefs": {"diet": "vegan"}}) == "Diet: vegan"
    assert render(source, {"age": 1, "prefs": {}}) == "Diet: None specified"
    assert render(source, {"age": 1}) == ""


def test_dot_paths():
    assert render("{{prefs.diet}}", {"age": 1, "prefs": {"diet": "keto"}}) == "keto"
    assert render("{{prefs.diet}}", {"age": 1}) == ""


def test_comments_are_dropped():
    assert render("a{{! internal note }}b", {"age": 1}) == "ab"


def test_values_are_never_interpreted_as_template_syntax():
    source = "Name: {{name}}{{#if goals}} goals{{/if}}"
    injected = "{{#if age}}INJECTED{{/if}} {{age}} {{/if}}"
    assert render(source, {"age": 99, "name": injected}) == f"Name: {injected}"


def test_rendering_twice_gives_the_same_result():
    template = PromptTemplate("{{#each goals}}{{this}},{{/each}}")
    values = {"goals": ["a", "b"]}
    assert template.render(values) == template.render(values) == "a,b,"


@pytest.mark.parametrize("source", [
    "{{#if age}}unclosed",
    "{{/if}}",
    "{{#if age}}x{{/each}}",
    "{{#loop age}}x{{/loop}}",
    "{{else}}",
    "{{#with prefs}}a{{else}}b{{/with}}",
    "{{ }}",
    "{{bad-name}}",
])
def test_parse_errors(source):
    with pytest.raises(TemplateResolutionError):
        PromptTemplate(source)


@pytest.mark.parametrize("source", [
    "{{unknown}}",
    "{{prefs.unknown}}",
    "{{#each age}}x{{/each}}",
    "{{#with goals}}x{{/with}}",
    "{{this}}",
    "{{@index}}",
    "{{#each goals}}{{title}}{{/each}}",
])
def test_static_check_rejects_unresolvable_references(source):
    with pytest.raises(TemplateResolutionError):
        PromptTemplate(source).check_against(CONTRACT)


ORDER = Contract(name="Order", fields={
    "name": string(),
    "items": array(obj("Item", {"name": string(required=False), "qty": string()})),
})


def test_loop_field_missing_on_an_element_does_not_fall_back_to_an_outer_field():
    template = PromptTemplate("{{name}}: {{#each items}}[{{name}}:{{qty}}]{{/each}}")
    template.check_against(ORDER)

    rendered = template.render({"name": "OUTER", "items": [{"qty": "1"}, {"name": "tea", "qty": "2"}]}, ORDER)

    assert rendered == "OUTER: [:1][tea:2]"


def test_outer_fields_stay_visible_inside_loops():
    template = PromptTemplate("{{#each meals}}{{title}} for {{name}}; {{/each}}")
    template.check_against(CONTRACT)

    rendered = template.render({"age": 1, "name": "Ana", "meals": [{"title": "Soup", "kcal": 200}]}, CONTRACT)

    assert rendered == "Soup for Ana; "


def test_with_block_binds_names_to_the_nested_object():
    contract = Contract(name="Wrapper", fields={
        "diet": string(),
        "prefs": obj("Prefs", {"diet": string(required=False)}),
    })
    template = PromptTemplate("{{#with prefs}}Diet: {{diet}}{{/with}}")
    template.check_against(contract)

    assert template.render({"diet": "outer", "prefs": {}}, contract) == "Diet: "
