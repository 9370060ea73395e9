from types import SimpleNamespace

import pytest

from sucoi.src.core.companion import CompanionChat, GeminiCompletionClient, extract_reply_text


def response_with(text):
    part = SimpleNamespace(text=text)
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


@pytest.mark.parametrize(
    "response",
    [
        None,
        SimpleNamespace(candidates=None),
        SimpleNamespace(candidates=[]),
        SimpleNamespace(candidates=[SimpleNamespace(content=None)]),
        SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[]))]),
        response_with(None),
        response_with("   \n"),
    ],
)
def test_extract_reply_text_returns_none_for_unusable_responses(response):
    assert extract_reply_text(response) is None


def test_extract_reply_text_trims_first_candidate():
    response = response_with("  You are not alone. \n")
    response.candidates.append(SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(text="second")])))

    assert extract_reply_text(response) == "You are not alone."


def test_build_prompt_keeps_raw_message():
    prompt = CompanionChat.build_prompt('say "hi"')
    assert prompt.endswith('The user says: "say "hi""')
    assert prompt.startswith("You are Sucoi,")


class _FakeModels:
    def __init__(self, response):
        self.response = response
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        return self.response


async def test_gemini_client_sends_fixed_generation_config():
    client = GeminiCompletionClient(api_key="test-key", model="gemini-2.0-flash", temperature=0.8, max_output_tokens=500)
    models = _FakeModels(response_with("Take a deep breath."))
    client._client = SimpleNamespace(aio=SimpleNamespace(models=models))

    reply = await client.complete("prompt text")

    assert reply == "Take a deep breath."
    call = models.calls[0]
    assert call["model"] == "gemini-2.0-flash"
    assert call["contents"] == "prompt text"
    assert call["config"].temperature == 0.8
    assert call["config"].max_output_tokens == 500


async def test_gemini_client_propagates_transport_errors():
    client = GeminiCompletionClient(api_key="test-key", model="gemini-2.0-flash")

    async def boom(**kwargs):
        raise ConnectionError("unreachable")

    client._client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=boom)))

    with pytest.raises(ConnectionError):
        await client.complete("prompt text")
