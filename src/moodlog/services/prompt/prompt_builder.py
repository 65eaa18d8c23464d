"""
Prompt Builder

Renders a conversation transcript into the analysis instruction sent to
the LLM.

ARCHITECTURE: Prompts are pure text composition. No validation, no
truncation, no retries. The 50,000 character transcript bound is enforced
upstream by SessionService.

CLINICAL_REVIEW_REQUIRED: Prompt wording frames how the model judges
mood. Changes should be reviewed with the wellness team.
"""

from moodlog.config.logging_config import get_logger

logger = get_logger(__name__)


class PromptBuilder:
    """
    Builds LLM prompts for conversation analysis.

    Both templates embed the transcript verbatim and ask for a single
    JSON object. The model is still untrusted: ResponseValidator checks
    whatever comes back.
    """

    # CLINICAL_REVIEW_REQUIRED
    ANALYSIS_TEMPLATE: str = """You are a compassionate AI wellness analyst. Analyze the following conversation between a user and a wellness chatbot. Provide insights that would help track the user's mental health journey.

CONVERSATION:
{transcript}

Please analyze this conversation and respond with a JSON object containing the following structure:

{{
  "overallMood": "positive|neutral|negative|mixed",
  "moodScore": <number between 1-10, where 1 is very negative, 10 is very positive>,
  "stressTriggers": ["trigger1", "trigger2", ...],
  "suggestions": ["suggestion1", "suggestion2", ...],
  "keyTopics": ["topic1", "topic2", ...],
  "aiGeneratedSummary": "A compassionate 2-3 sentence summary of the user's emotional state and main concerns"
}}

Guidelines:
- overallMood: Assess the dominant emotional tone
- moodScore: Rate overall positivity/negativity (consider context of mental health)
- stressTriggers: Identify specific things causing stress/anxiety (max 5)
- suggestions: Provide 3-5 actionable, gentle wellness suggestions
- keyTopics: Main themes discussed (emotions, situations, etc.)
- aiGeneratedSummary: Write as if speaking to a mental health professional

Focus on empathy, actionable insights, and respect for the user's emotional state. Avoid clinical diagnoses."""

    QUICK_MOOD_TEMPLATE: str = """Briefly analyze this wellness conversation and rate the user's mood on a scale of 1-10 and categorize it:

CONVERSATION:
{transcript}

Respond with just: {{"mood": "positive|neutral|negative|mixed", "score": <1-10>}}"""

    def build_prompt(self, transcript: str) -> str:
        """
        Build the full analysis prompt.

        Args:
            transcript: Speaker-tagged conversation text

        Returns:
            Instruction text containing the transcript unchanged
        """
        prompt = self.ANALYSIS_TEMPLATE.format(transcript=transcript)

        logger.debug(
            "Analysis prompt built",
            conversation_length=len(transcript),
            prompt_length=len(prompt),
        )

        return prompt

    def build_quick_mood_prompt(self, transcript: str) -> str:
        """Build the short mood-only prompt."""
        return self.QUICK_MOOD_TEMPLATE.format(transcript=transcript)
