"""Primary provider: free-tier instruct models served through OpenRouter."""

try:
    from .llm_client import PromptSpec, TextGenerationClient
except ImportError:
    from llm_client import PromptSpec, TextGenerationClient  # type: ignore

from Itinerary import SourceTag

_REFERER = "https://wanderplan.example.com"


def build_instruct_prompt(spec: PromptSpec) -> str:
    grounding = ""
    if spec.attractions:
        grounding = (
            f"\nPopular attractions in {spec.destination} you may draw on: "
            f"{', '.join(spec.attractions)}\n"
        )

    return f"""<s>[INST] You are a local travel expert in {spec.destination} who specializes in highly personalized itineraries.

Create a detailed {spec.duration}-day trip for someone starting on {spec.start_date} who specifically requested these interests: {spec.interests}.
{grounding}
IMPORTANT: You must respond with a valid JSON object that follows this exact structure:
{{
  "days": [
    {{
      "day": 1,
      "date": "{spec.start_date}",
      "activities": [
        {{
          "name": "Activity Name",
          "timeOfDay": "Morning/Afternoon/Evening",
          "description": "2-3 sentence description",
          "location": "Venue address",
          "categories": "Type of venue (e.g., museum, park, restaurant)"
        }}
      ]
    }}
  ]
}}

For each activity, include the following fields:
- name: The real venue name
- timeOfDay: Morning, Afternoon, or Evening
- description: A brief 2-3 sentence description of the activity
- location: The venue address
- categories: The type of venue (e.g., museum, park, restaurant)

Ensure all venues are real and relevant to {spec.destination}.

IMPORTANT INSTRUCTIONS:
1. DIRECTLY MATCH activities to the user's stated interests
2. Include ONLY real, specific venues and attractions in {spec.destination}
3. Activities should be diverse across the trip
4. Provide exactly {spec.duration} days, each with at least one activity
5. RESPOND ONLY WITH THE JSON OBJECT, NO OTHER TEXT

[/INST]</s>"""


class OpenRouterClient(TextGenerationClient):
    source_tag = SourceTag.PROVIDER_A
    provider_name = "openrouter"

    def litellm_model(self) -> str:
        return f"openrouter/{self.model}"

    def build_messages(self, spec: PromptSpec) -> list[dict]:
        return [{"role": "user", "content": build_instruct_prompt(spec)}]

    def completion_kwargs(self) -> dict:
        return {
            "top_p": 0.9,
            "extra_headers": {"HTTP-Referer": _REFERER, "X-Title": "Wanderplan"},
        }
