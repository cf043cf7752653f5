"""Meal suggestion and meal idea tests."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from src.api.dependencies import get_meal_service
from src.exceptions import UpstreamServiceError
from src.main import app
from src.schemas.meal import MealSuggestion
from src.services.llm import LLMService, MealSuggestionGenerator, strip_code_fences
from src.services.meal_service import MealService

LLM_SUGGESTION = {
    "title": "Garlic Butter Pasta",
    "ingredients": [{"name": "pasta", "amount": "200", "unit": "g"}, "garlic"],
    "instructions": "Boil pasta, toss with garlic butter.",
    "cookTime": "20 minutes",
    "difficulty": "Easy",
}


def suggest(client, user_id, **extra):
    response = client.post("/api/meals/suggest", json={"userId": user_id, **extra})
    assert response.status_code == 200, response.text
    return response.json()["data"]


@pytest.fixture
def use_generator(db):
    """Route suggestion requests through a service backed by the given generator."""

    def _use(generator):
        service = MealService(db, generator=generator, llm_enabled=True)
        app.dependency_overrides[get_meal_service] = lambda: service

    return _use


class TestSuggestEndpoint:
    def test_empty_pantry_placeholder(self, client, user_id):
        data = suggest(client, user_id)
        assert data["usingAI"] is False
        [placeholder] = data["suggestions"]
        assert placeholder["title"] == "📦 Empty Pantry"
        assert placeholder["ingredients"] == []
        assert placeholder["cookTime"] == "N/A"

    def test_out_of_stock_items_are_ignored(self, client, user_id, create_pantry_item):
        create_pantry_item(name="Chicken", quantity=0)
        data = suggest(client, user_id)
        assert data["suggestions"][0]["title"] == "📦 Empty Pantry"

    def test_heuristic_when_llm_disabled(self, client, user_id, create_pantry_item):
        for name in ("chicken breast", "rice", "tomatoes", "onions"):
            create_pantry_item(name=name)

        data = suggest(client, user_id)
        assert data["usingAI"] is False
        assert [s["title"] for s in data["suggestions"]] == [
            "🍳 Savory Stir-Fry Bowl",
            "🥗 Fresh Garden Salad",
            "🍝 Comfort Bowl",
        ]

    def test_heuristic_respects_dietary_tags(self, client, user_id, create_pantry_item):
        client.put(f"/api/users/{user_id}", json={"dietaryTags": "vegetarian"})
        for name in ("chicken", "eggs", "spinach"):
            create_pantry_item(name=name)

        titles = [s["title"] for s in suggest(client, user_id)["suggestions"]]
        assert "🍳 Savory Stir-Fry Bowl" not in titles
        assert titles[0] == "🥚 Fluffy Veggie Omelette"

    def test_llm_success(self, client, user_id, create_pantry_item, use_generator):
        create_pantry_item(name="pasta")
        create_pantry_item(name="garlic")
        create_pantry_item(name="old beans", quantity=0)
        client.put(f"/api/users/{user_id}", json={"allergies": "peanuts"})
        generator = MagicMock()
        generator.generate = AsyncMock(return_value=[MealSuggestion.model_validate(LLM_SUGGESTION)])
        use_generator(generator)

        data = suggest(client, user_id, additionalPreferences="quick")
        assert data["usingAI"] is True
        assert data["suggestions"][0]["title"] == "Garlic Butter Pasta"
        assert data["suggestions"][0]["ingredients"][1] == {
            "name": "garlic",
            "amount": None,
            "unit": None,
        }
        generator.generate.assert_awaited_once_with(
            ["pasta", "garlic"], dietary_tags=None, allergies="peanuts", preferences="quick"
        )

    def test_llm_failure_falls_back(self, client, user_id, create_pantry_item, use_generator):
        create_pantry_item(name="pasta")
        create_pantry_item(name="garlic")
        generator = MagicMock()
        generator.generate = AsyncMock(side_effect=UpstreamServiceError("timed out"))
        use_generator(generator)

        data = suggest(client, user_id)
        assert data["usingAI"] is False
        assert data["suggestions"][0]["title"] == "🍝 Comfort Bowl"

    def test_empty_pantry_skips_llm(self, client, user_id, use_generator):
        generator = MagicMock()
        generator.generate = AsyncMock()
        use_generator(generator)

        assert suggest(client, user_id)["usingAI"] is False
        generator.generate.assert_not_awaited()

    def test_unknown_user(self, client):
        response = client.post("/api/meals/suggest", json={"userId": 9999})
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "User not found"

    def test_missing_user_id(self, client):
        response = client.post("/api/meals/suggest", json={})
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestMealSuggestionGenerator:
    @staticmethod
    def generator_returning(**kwargs):
        llm = MagicMock(spec=LLMService)
        llm.generate_json = AsyncMock(**kwargs)
        return MealSuggestionGenerator(llm=llm), llm

    @pytest.mark.asyncio
    async def test_valid_payload(self):
        generator, llm = self.generator_returning(return_value=[LLM_SUGGESTION])

        suggestions = await generator.generate(["pasta", "garlic"], allergies="nuts")

        assert suggestions[0].title == "Garlic Butter Pasta"
        assert suggestions[0].cook_time == "20 minutes"
        prompt = llm.generate_json.await_args.kwargs["prompt"]
        assert "pasta, garlic" in prompt
        assert "nuts" in prompt

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "side_effect",
        [
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
            json.JSONDecodeError("Expecting value", "not json", 0),
            KeyError("message"),
            TypeError("string indices must be integers"),
        ],
    )
    async def test_transport_and_parse_errors(self, side_effect):
        generator, _ = self.generator_returning(side_effect=side_effect)
        with pytest.raises(UpstreamServiceError):
            await generator.generate(["pasta"])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [[], {"title": "Pasta"}, "pasta", None])
    async def test_non_list_or_empty_payload(self, payload):
        generator, _ = self.generator_returning(return_value=payload)
        with pytest.raises(UpstreamServiceError):
            await generator.generate(["pasta"])

    @pytest.mark.asyncio
    async def test_malformed_entry(self):
        generator, _ = self.generator_returning(return_value=[{"ingredients": ["pasta"]}])
        with pytest.raises(UpstreamServiceError):
            await generator.generate(["pasta"])


def ollama_replying(payload, requests=None):
    """Patch the LLM module's HTTP client to answer every request with ``payload``."""

    def handler(request):
        if requests is not None:
            requests.append(json.loads(request.content))
        return httpx.Response(200, json=payload)

    real_client = httpx.AsyncClient
    transport = httpx.MockTransport(handler)
    return patch(
        "src.services.llm.httpx.AsyncClient",
        lambda **kwargs: real_client(transport=transport, **kwargs),
    )


class TestLLMService:
    def test_chat_request_puts_system_prompt_first(self):
        body = LLMService().chat_request("What's for dinner?", "Be brief", 0.5, 256)
        assert [m["role"] for m in body["messages"]] == ["system", "user"]
        assert body["stream"] is False
        assert body["options"] == {"temperature": 0.5, "num_predict": 256}

    @pytest.mark.asyncio
    async def test_generate_reads_message_content(self):
        requests = []
        reply = {"message": {"role": "assistant", "content": json.dumps([LLM_SUGGESTION])}}
        with ollama_replying(reply, requests):
            suggestions = await MealSuggestionGenerator(LLMService()).generate(["pasta"])

        assert suggestions[0].title == "Garlic Butter Pasta"
        assert requests[0]["messages"][0]["role"] == "system"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [{"message": "overloaded"}, {"error": "model not found"}])
    async def test_misshapen_reply_is_upstream_error(self, reply):
        with ollama_replying(reply):
            with pytest.raises(UpstreamServiceError):
                await MealSuggestionGenerator(LLMService()).generate(["pasta"])

    def test_strip_code_fences(self):
        assert strip_code_fences('```json\n[{"a": 1}]\n```') == '[{"a": 1}]'
        assert strip_code_fences("```\n[]\n```") == "[]"
        assert strip_code_fences("  []  ") == "[]"

    @pytest.mark.asyncio
    async def test_generate_json_strips_fences(self):
        service = LLMService()
        with patch.object(service, "generate", AsyncMock(return_value='```json\n[{"a": 1}]\n```')):
            assert await service.generate_json("prompt") == [{"a": 1}]

    @pytest.mark.asyncio
    async def test_generate_json_reraises_bad_json(self):
        service = LLMService()
        with patch.object(service, "generate", AsyncMock(return_value="Sure! Here you go")):
            with pytest.raises(json.JSONDecodeError):
                await service.generate_json("prompt")


class TestMealIdeas:
    def test_crud(self, client, user_id):
        response = client.post(
            "/api/meals", json={"userId": user_id, "title": "Taco night", "notes": "Tuesday"}
        )
        assert response.status_code == 201
        meal = response.json()["data"]
        meal_id = meal["mealIdeaId"]
        assert meal["title"] == "Taco night"

        response = client.put(f"/api/meals/{meal_id}", json={"notes": "Friday"})
        assert response.json()["data"]["notes"] == "Friday"
        assert response.json()["data"]["title"] == "Taco night"

        response = client.get("/api/meals", params={"userId": user_id})
        assert [m["mealIdeaId"] for m in response.json()["data"]] == [meal_id]

        response = client.delete(f"/api/meals/{meal_id}")
        assert response.json() == {"success": True, "message": "Meal idea deleted successfully"}
        assert client.get(f"/api/meals/{meal_id}").status_code == 404

    def test_list_newest_first(self, client, user_id):
        for title in ("First", "Second"):
            client.post("/api/meals", json={"userId": user_id, "title": title})

        response = client.get("/api/meals", params={"userId": user_id})
        assert [m["title"] for m in response.json()["data"]] == ["Second", "First"]

    def test_unknown_user(self, client):
        response = client.post("/api/meals", json={"userId": 9999, "title": "Soup"})
        assert response.status_code == 404

    def test_blank_title_rejected(self, client, user_id):
        response = client.post("/api/meals", json={"userId": user_id, "title": ""})
        assert response.status_code == 400

    def test_null_title_rejected(self, client, user_id):
        meal = client.post("/api/meals", json={"userId": user_id, "title": "Soup"}).json()["data"]

        response = client.put(f"/api/meals/{meal['mealIdeaId']}", json={"title": None})
        assert response.status_code == 400
        assert client.get(f"/api/meals/{meal['mealIdeaId']}").json()["data"]["title"] == "Soup"

    def test_missing_meal_idea(self, client):
        response = client.get("/api/meals/9999")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Meal idea not found"
