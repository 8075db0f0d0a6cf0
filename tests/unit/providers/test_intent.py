"""Tests for intent classifiers and the keyword recognizer."""

from unittest.mock import AsyncMock, MagicMock

import json

import httpx
import pytest

from picturebot.config.models import DialogsConfig
from picturebot.errors import ClassifierError
from picturebot.providers.intent import (
    Intent,
    IntentResult,
    LuisIntentClassifier,
    MockIntentClassifier,
    QuickIntent,
    RegexRecognizer,
    ScoredIntent,
)


class TestIntentMapping:
    """Tests for mapping classifier names onto Intent."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("None", Intent.NONE),
            ("Greeting", Intent.GREETING),
            ("OrderPic", Intent.ORDER_PIC),
            ("SharePic", Intent.SHARE_PIC),
            ("SearchPics", Intent.SEARCH_PICS),
            ("Cancel", Intent.UNRECOGNIZED),
        ],
    )
    def test_from_name(self, name, expected):
        assert Intent.from_name(name) is expected

    def test_scored_intent_keeps_raw_name(self):
        scored = ScoredIntent.from_prediction("Cancel", 0.4)
        assert scored.intent is Intent.UNRECOGNIZED
        assert scored.name == "Cancel"

    def test_entity_lookup(self):
        result = IntentResult(entities={"facet": ["cats"]})
        assert result.entity("facet") == ["cats"]
        assert result.entity("color") is None


class TestRegexRecognizer:
    """Tests for the keyword pre-classifier with the default patterns."""

    @pytest.fixture
    def recognizer(self) -> RegexRecognizer:
        return RegexRecognizer(DialogsConfig().quick_intents)

    @pytest.mark.parametrize(
        "utterance,expected",
        [
            ("search pictures", QuickIntent.SEARCH),
            ("Search Pics of dogs", QuickIntent.SEARCH),
            ("share pictures", QuickIntent.SHARE),
            ("please share pic", QuickIntent.SHARE),
            ("order prints", QuickIntent.ORDER),
            ("order pictures", QuickIntent.ORDER),
            ("help", QuickIntent.HELP),
            ("HELP me", QuickIntent.HELP),
            ("search for cats", None),
            ("hello", None),
            ("", None),
        ],
    )
    def test_recognize(self, recognizer, utterance, expected):
        assert recognizer.recognize(utterance) is expected

    def test_first_pattern_wins(self):
        recognizer = RegexRecognizer({"share": "pic", "order": "pic"})
        assert recognizer.recognize("pic") is QuickIntent.SHARE

    def test_unknown_intent_name_rejected(self):
        with pytest.raises(ValueError):
            RegexRecognizer({"dance": "dance"})


class TestMockIntentClassifier:
    """Tests for the scripted classifier."""

    @pytest.mark.asyncio
    async def test_default_has_no_top_intent(self):
        result = await MockIntentClassifier().classify("anything")
        assert result.top_intent is None

    @pytest.mark.asyncio
    async def test_scripted_response(self):
        classifier = MockIntentClassifier()
        classifier.set_response("hi", "Greeting", 0.7)

        result = await classifier.classify("hi", "conv-1")

        assert result.top_intent.intent is Intent.GREETING
        assert classifier.call_history == [{"utterance": "hi", "conversation_id": "conv-1"}]

    @pytest.mark.asyncio
    async def test_error(self):
        classifier = MockIntentClassifier(error=ClassifierError("down"))
        with pytest.raises(ClassifierError):
            await classifier.classify("hi")


class TestLuisIntentClassifier:
    """Tests for LuisIntentClassifier over a mocked HTTP client."""

    @pytest.fixture
    def classifier(self) -> LuisIntentClassifier:
        return LuisIntentClassifier(
            endpoint="https://westus.api.cognitive.microsoft.com/",
            app_id="app-123",
            api_key="test-key",
        )

    @pytest.fixture
    def prediction(self):
        return {
            "query": "find pictures of cats",
            "prediction": {
                "topIntent": "SearchPics",
                "intents": {"SearchPics": {"score": 0.93}},
                "entities": {
                    "facet": [["cats"]],
                    "$instance": {"facet": [{"text": "cats"}]},
                },
            },
        }

    def mock_response(self, status_code=200, body=None, text=""):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = body
        response.text = text
        return response

    def test_requires_credentials(self):
        with pytest.raises(ValueError):
            LuisIntentClassifier(endpoint="https://x", app_id="", api_key="k")

    @pytest.mark.asyncio
    async def test_classify(self, classifier, prediction):
        classifier._client.get = AsyncMock(return_value=self.mock_response(body=prediction))

        result = await classifier.classify("find pictures of cats")

        assert result.top_intent.intent is Intent.SEARCH_PICS
        assert result.top_intent.score == 0.93
        assert result.entities == {"facet": ["cats"]}

        call_args = classifier._client.get.call_args
        assert call_args.args[0] == (
            "https://westus.api.cognitive.microsoft.com"
            "/luis/prediction/v3.0/apps/app-123/slots/production/predict"
        )
        assert call_args.kwargs["headers"] == {"Ocp-Apim-Subscription-Key": "test-key"}
        assert call_args.kwargs["params"]["query"] == "find pictures of cats"

    @pytest.mark.asyncio
    async def test_missing_top_intent(self, classifier):
        classifier._client.get = AsyncMock(
            return_value=self.mock_response(body={"prediction": {"intents": {}}})
        )

        result = await classifier.classify("???")

        assert result.top_intent is None
        assert result.entities == {}

    @pytest.mark.asyncio
    async def test_http_error_status(self, classifier):
        classifier._client.get = AsyncMock(
            return_value=self.mock_response(status_code=401, text="Access denied")
        )

        with pytest.raises(ClassifierError, match="401"):
            await classifier.classify("hi")

    @pytest.mark.asyncio
    async def test_transport_error(self, classifier):
        classifier._client.get = AsyncMock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(ClassifierError):
            await classifier.classify("hi")

    @pytest.mark.asyncio
    async def test_invalid_json_body(self, classifier):
        response = self.mock_response(text="<html>gateway</html>")
        response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
        classifier._client.get = AsyncMock(return_value=response)

        with pytest.raises(ClassifierError) as exc_info:
            await classifier.classify("hi")
        assert isinstance(exc_info.value.cause, json.JSONDecodeError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("score", ["high", 1.7, -0.2])
    async def test_invalid_score(self, classifier, score):
        body = {"prediction": {"topIntent": "Greeting", "intents": {"Greeting": {"score": score}}}}
        classifier._client.get = AsyncMock(return_value=self.mock_response(body=body))

        with pytest.raises(ClassifierError):
            await classifier.classify("hi")

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, classifier):
        classifier._client.get = AsyncMock(
            return_value=self.mock_response(body={"prediction": ["not", "an", "object"]})
        )

        with pytest.raises(ClassifierError):
            await classifier.classify("hi")
