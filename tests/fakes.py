"""Shared test doubles and sample data."""

import json
from typing import Optional

from moodlog.infrastructure.llm.provider import LLMProvider, LLMResponse

VALID_ANALYSIS = {
    "overallMood": "positive",
    "moodScore": 7,
    "stressTriggers": ["deadlines"],
    "suggestions": ["Take short breaks", "Keep a journal"],
    "keyTopics": ["work", "sleep"],
    "aiGeneratedSummary": "The user felt better after talking through work stress.",
}

SAMPLE_CONVERSATION = (
    "User: I had a stressful week at work.\n"
    "Assistant: That sounds hard. What helped you cope?\n"
    "User: Going for walks in the evening.\n"
)


class FakeLLMProvider(LLMProvider):
    """
    In-process provider returning canned completions.

    Set ``error`` to make every call fail with that exception.
    """

    def __init__(
        self,
        content: str = json.dumps(VALID_ANALYSIS),
        model: str = "fake-model-1",
        error: Optional[Exception] = None,
        healthy: bool = True,
    ) -> None:
        self.content = content
        self.model = model
        self.error = error
        self.healthy = healthy
        self.prompts: list[str] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def default_model(self) -> str:
        return self.model

    async def generate(
        self,
        prompt: str,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return LLMResponse(
            content=self.content,
            model=model or self.model,
            provider=self.provider_name,
            usage={"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30},
        )

    async def health_check(self) -> bool:
        return self.healthy

    def is_configured(self) -> bool:
        return True
