import json
import logging
from typing import Any, Dict, List, Optional

import google.generativeai as genai

logger = logging.getLogger(__name__)

RESPONSE_KEYS = ("potentialCauses", "suggestedSteps", "missingInformation")

RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "potentialCauses": {"type": "array", "items": {"type": "string"}},
        "suggestedSteps": {"type": "array", "items": {"type": "string"}},
        "missingInformation": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Questions or checks to narrow down the root cause.",
        },
    },
    "required": list(RESPONSE_KEYS),
}


def format_notes(notes: List[Dict[str, Any]]) -> str:
    if not notes:
        return "No service notes logged yet."
    return "\n".join(f"- {n.get('timestamp', '')}: {n.get('content', '')}" for n in notes)


def build_prompt(concern: str, unit_details: str, notes: List[Dict[str, Any]]) -> str:
    return f"""As an expert Powersports mechanic, analyze this customer concern and unit details.

Unit: {unit_details}
Concern: {concern}

Existing Service History/Notes:
{format_notes(notes)}

CRITICAL: Do not suggest diagnostic steps that have already been performed according to the notes.

Provide:
1. 3 potential causes.
2. 3 suggested diagnostic steps (new actions).
3. 3-4 specific pieces of missing information or follow-up questions for the customer to refine the diagnosis (e.g., specific conditions when the issue occurs, dashboard codes to check, or specific sounds).

Keep all responses brief, technical, and professional."""


def parse_suggestions(text: Optional[str]) -> Optional[Dict[str, List[str]]]:
    if not text:
        return None
    cleaned = text.strip().removeprefix("```json").removesuffix("```").strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Could not parse AI response as JSON: {e}")
        logger.debug(f"Raw response text: {text!r}")
        return None
    if not isinstance(data, dict):
        logger.error("AI response is not a JSON object")
        return None
    return {key: [str(item) for item in data.get(key) or []] for key in RESPONSE_KEYS}


def get_diagnostic_suggestions(
    concern: str,
    unit_details: str,
    notes: List[Dict[str, Any]],
    *,
    api_key: Optional[str],
    model_name: str = "gemini-1.5-flash",
) -> Optional[Dict[str, List[str]]]:
    """
    Ask Gemini for causes, next diagnostic steps and follow-up questions.

    Returns:
        {"potentialCauses": [...], "suggestedSteps": [...], "missingInformation": [...]}
        or None when the key is missing or the call/parse fails.
    """
    if not api_key:
        logger.warning("Google API key not configured, skipping diagnostic assist")
        return None

    try:
        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(model_name)
        response = model.generate_content(
            build_prompt(concern, unit_details, notes),
            generation_config={
                "response_mime_type": "application/json",
                "response_schema": RESPONSE_SCHEMA,
            },
        )
        if response and response.candidates and response.candidates[0].content.parts:
            return parse_suggestions(response.candidates[0].content.parts[0].text)
        logger.error("Failed to get a valid response from the AI model.")
        return None
    except Exception as e:
        logger.error(f"AI Diagnostic Error: {e}")
        return None
