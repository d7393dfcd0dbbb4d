"""Secondary provider: OpenAI chat completions in JSON mode."""

try:
    from .llm_client import PromptSpec, TextGenerationClient
except ImportError:
    from llm_client import PromptSpec, TextGenerationClient  # type: ignore

from Itinerary import SourceTag

_SYSTEM = "You are a helpful travel planner assistant that responds only with valid JSON."


def build_chat_prompt(spec: PromptSpec) -> str:
    return f"""Create a detailed travel itinerary for a trip to {spec.destination} starting on {spec.start_date} for {spec.duration} days.
The traveler is interested in: {spec.interests}.

Include a day-by-day breakdown with the following details for each activity:
- Activity name
- Suggested time of day (Morning, Afternoon, Evening)
- Short description of the activity

Ensure the itinerary includes a balance of exploration, relaxation, and cultural experiences.

Format your response as a JSON object with the following structure:
{{
  "days": [
    {{
      "dayNumber": 1,
      "activities": [
        {{
          "name": "Activity name",
          "timeOfDay": "Morning/Afternoon/Evening",
          "description": "Brief description"
        }}
      ]
    }}
  ]
}}"""


class OpenAIClient(TextGenerationClient):
    source_tag = SourceTag.PROVIDER_B
    provider_name = "openai"

    def build_messages(self, spec: PromptSpec) -> list[dict]:
        return [
            {"role": "system", "content": _SYSTEM},
            {"role": "user", "content": build_chat_prompt(spec)},
        ]

    def completion_kwargs(self) -> dict:
        return {"response_format": {"type": "json_object"}}
