# tests/conftest.py

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from dotenv import load_dotenv

# Load the test environment FIRST, before any app imports, so the settings
# module picks up ENVIRONMENT=test.
load_dotenv(dotenv_path=Path(__file__).resolve().parent.parent / ".env.test")

from healthlens.flows.runner import FlowRunner  # noqa: E402
from healthlens.main import app  # noqa: E402
from healthlens.models.endpoint import ModelResponse  # noqa: E402


class StubModelClient:
    """
    Stands in for the Gemini client. Records every request and answers with
    the queued responses in order; a queued exception is raised instead.
    The last queued item is reused once the queue runs out.
    """

    def __init__(self, *responses):
        self.requests = []
        self._responses = list(responses)

    def queue(self, *responses):
        self._responses.extend(responses)
        return self

    def queue_json(self, payload):
        return self.queue(ModelResponse(text=json.dumps(payload), model="stub-model"))

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def generate(self, request):
        self.requests.append(request)
        if not self._responses:
            raise AssertionError("StubModelClient has no queued response")
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def stub_client():
    return StubModelClient()


@pytest.fixture
def runner(stub_client):
    return FlowRunner(stub_client)


@pytest.fixture
def minimal_diet_plan():
    """The smallest diet plan the output contract accepts."""
    return {
        "planTitle": "Balanced Day",
        "introduction": "A simple day of balanced meals.",
        "dailyPlans": [{
            "dayNumber": 1,
            "meals": {
                "breakfast": {
                    "mealName": "Oatmeal",
                    "ingredients": [{"name": "Oats", "quantity": "50", "unit": "g"}],
                    "preparationSteps": ["Cook the oats in water."],
                },
            },
        }],
        "overallDisclaimer": "Enjoy!",
    }


@pytest.fixture
def diet_request():
    return {
        "age": 30,
        "gender": "female",
        "weightKg": 70,
        "heightCm": 170,
        "activityLevel": "moderately_active",
        "healthGoals": ["general healthy eating"],
        "dietaryPreferences": {},
        "planDurationDays": 1,
        "language": "en",
    }


@pytest.fixture(scope="function")
def test_client(stub_client):
    """
    Provides a TestClient for API integration tests. A runner backed by the
    stub client is installed before startup, so no real model is ever called.
    """
    app.state.flow_runner = FlowRunner(stub_client)
    with TestClient(app) as client:
        yield client
    app.state.flow_runner = None
